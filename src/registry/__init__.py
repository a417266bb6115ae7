"""
모듈 레지스트리 패키지

원격 메타데이터로 스크래핑 모듈을 등록하고, 스크립트를 로컬에 캐싱하며,
버전 변경 시 갱신하는 기능을 제공합니다.
"""

from .fetcher import MetadataFetcher
from .manager import ModuleRegistry
from .metadata import MetadataParser
from .storage import MODULES_FILE_NAME, ScriptStorage

__all__ = [
    "ModuleRegistry",
    "MetadataFetcher",
    "MetadataParser",
    "ScriptStorage",
    "MODULES_FILE_NAME",
]
