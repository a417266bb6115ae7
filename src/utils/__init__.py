"""
유틸리티 패키지

공통으로 사용되는 유틸리티 함수들을 포함합니다.
"""

from .logging import get_logger, setup_logging
from .helpers import generate_module_id, generate_script_filename, parse_module_id, write_text_atomic

__all__ = [
    "setup_logging",
    "get_logger",
    "generate_module_id",
    "generate_script_filename",
    "parse_module_id",
    "write_text_atomic",
]
