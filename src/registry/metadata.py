"""
모듈 메타데이터 파싱 모듈

원격 메타데이터 문서를 ModuleMetadata 모델로 변환합니다.
"""

import json
from typing import Any, Union

from pydantic import ValidationError

from ..exceptions import ModuleParseException
from ..models.base import ModuleMetadata
from ..utils.logging import get_logger

logger = get_logger(__name__)


class MetadataParser:
    """모듈 메타데이터 파서

    구조적 디코딩만 수행합니다. 누락된 필드는 빈 문자열로 남고
    알 수 없는 필드는 그대로 보존됩니다.
    """

    def __init__(self, settings=None):
        """
        메타데이터 파서 초기화

        Args:
            settings: 시스템 설정 객체 (선택사항)
        """
        self.settings = settings
        self.logger = logger

    def parse(self, content: Union[bytes, str], source_url: str = "") -> ModuleMetadata:
        """
        메타데이터 문서 파싱

        Args:
            content: 응답 본문
            source_url: 메타데이터 URL (오류 메시지용)

        Returns:
            파싱된 메타데이터 객체

        Raises:
            ModuleParseException: JSON 형식이나 구조가 잘못되었을 때
        """
        try:
            document = json.loads(content)
        except (ValueError, RecursionError) as e:
            raise ModuleParseException(source_url, f"JSON 파싱 오류: {e}") from e

        return self.parse_document(document, source_url)

    def parse_document(self, document: Any, source_url: str = "") -> ModuleMetadata:
        """
        이미 디코딩된 JSON 값을 메타데이터로 변환

        Args:
            document: JSON 디코딩 결과
            source_url: 메타데이터 URL (오류 메시지용)

        Returns:
            메타데이터 객체

        Raises:
            ModuleParseException: 객체가 아니거나 필드 타입이 맞지 않을 때
        """
        if not isinstance(document, dict):
            raise ModuleParseException(
                source_url, f"JSON 객체가 아닙니다: {type(document).__name__}"
            )

        try:
            metadata = ModuleMetadata.model_validate(document)
        except ValidationError as e:
            raise ModuleParseException(source_url, f"메타데이터 구조 오류: {e}") from e

        self.logger.debug(f"메타데이터 파싱 완료: {metadata.source_name} v{metadata.version}")
        return metadata
