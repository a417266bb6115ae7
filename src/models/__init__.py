"""
데이터 모델 패키지

모듈 레지스트리의 핵심 데이터 모델들을 정의합니다.
"""

from .base import ModuleMetadata, ModuleRecord, ModuleSummary, RefreshReport, RefreshResult
from .enums import RefreshStatus

__all__ = [
    "ModuleMetadata",
    "ModuleRecord",
    "ModuleSummary",
    "RefreshResult",
    "RefreshReport",
    "RefreshStatus",
]
