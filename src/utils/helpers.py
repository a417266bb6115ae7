"""
공통 유틸리티 함수 모듈

모듈 레지스트리에서 공통으로 사용되는 헬퍼 함수들을 제공합니다.
"""

import os
import tempfile
import uuid
from pathlib import Path
from typing import Union

SCRIPT_FILE_SUFFIX = ".js"


def generate_module_id() -> uuid.UUID:
    """
    고유한 모듈 ID 생성

    Returns:
        uuid.UUID: 랜덤 UUID4
    """
    return uuid.uuid4()


def generate_script_filename(suffix: str = SCRIPT_FILE_SUFFIX) -> str:
    """
    스크립트 캐시 파일 이름 생성

    128비트 랜덤 ID를 기본 이름으로 사용합니다.

    Args:
        suffix: 파일 확장자

    Returns:
        str: 파일 이름 (예: 3f2a...c1.js)
    """
    return f"{uuid.uuid4()}{suffix}"


def parse_module_id(value: Union[str, uuid.UUID]) -> Union[uuid.UUID, None]:
    """
    문자열 또는 UUID를 모듈 ID로 변환

    Args:
        value: 변환할 값

    Returns:
        uuid.UUID 또는 형식이 잘못된 경우 None
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def write_text_atomic(path: Union[str, Path], content: str, encoding: str = "utf-8") -> None:
    """
    임시 파일에 쓴 뒤 교체하는 방식으로 텍스트 파일 저장

    Args:
        path: 대상 파일 경로
        content: 저장할 내용
        encoding: 인코딩

    Raises:
        OSError: 쓰기 또는 교체 실패 시
    """
    path = Path(path)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, 'w', encoding=encoding) as f:
            f.write(content)
        os.replace(temp_name, path)
    except OSError:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise
