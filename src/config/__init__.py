"""
설정 관리 패키지

시스템 전체의 설정을 관리합니다.
"""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"] 