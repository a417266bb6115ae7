"""
원격 메타데이터/스크립트 요청 모듈

HTTP GET 으로 메타데이터 문서와 스크립트 본문을 가져옵니다.
"""

import asyncio
import time
from typing import Optional

import aiohttp

from ..exceptions import ModuleFetchException
from ..models.base import ModuleMetadata
from ..monitoring.metrics import record_fetch_duration
from ..utils.logging import get_logger
from .metadata import MetadataParser

logger = get_logger(__name__)


class MetadataFetcher:
    """원격 메타데이터 요청 클래스"""

    def __init__(self, settings, parser: Optional[MetadataParser] = None):
        """
        요청 클래스 초기화

        Args:
            settings: 시스템 설정
            parser: 메타데이터 파서 (None이면 기본 파서)
        """
        self.settings = settings
        self.parser = parser or MetadataParser(settings)
        self.logger = logger
        self.session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """HTTP 세션 생성"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.http_timeout),
                headers={
                    'User-Agent': self.settings.http_user_agent
                }
            )
        return self.session

    async def _get(self, url: str, kind: str) -> bytes:
        """
        URL 본문 다운로드

        Args:
            url: 요청 URL
            kind: 요청 종류 (metadata, script)

        Returns:
            응답 본문

        Raises:
            ModuleFetchException: 전송 실패 또는 2xx 이외의 응답
        """
        if not url:
            raise ModuleFetchException(url, "URL이 비어 있습니다")

        session = await self._get_session()
        start_time = time.time()

        try:
            async with session.get(url) as response:
                if response.status < 200 or response.status >= 300:
                    raise ModuleFetchException(url, f"HTTP {response.status}")
                return await response.read()

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ModuleFetchException(url, f"{type(e).__name__}: {e}") from e

        finally:
            record_fetch_duration(kind, time.time() - start_time)

    async def fetch_metadata(self, url: str) -> ModuleMetadata:
        """
        메타데이터 문서 가져오기

        Args:
            url: 메타데이터 URL

        Returns:
            파싱된 메타데이터

        Raises:
            ModuleFetchException: 요청 실패 시
            ModuleParseException: 문서 형식이 잘못되었을 때
        """
        body = await self._get(url, "metadata")
        metadata = self.parser.parse(body, url)
        self.logger.debug(f"메타데이터 수신: {url} -> {metadata.source_name} v{metadata.version}")
        return metadata

    async def fetch_script(self, url: str) -> bytes:
        """
        스크립트 본문 가져오기

        Args:
            url: 스크립트 URL

        Returns:
            스크립트 원본 바이트
        """
        content = await self._get(url, "script")
        self.logger.debug(f"스크립트 다운로드 완료: {url} ({len(content)} bytes)")
        return content

    async def close(self) -> None:
        """세션 정리"""
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        await self.close()
