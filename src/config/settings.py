"""
설정 관리 모듈

환경 변수를 통한 시스템 설정을 관리합니다.
"""

import logging
import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from ..exceptions import ConfigurationException


class Settings(BaseSettings):
    """시스템 설정 관리 클래스"""

    # 모듈 저장소 설정
    module_storage_dir: str = Field(
        default="./data/modules",
        description="모듈 스크립트와 modules.json 을 보관하는 디렉토리"
    )
    registry_atomic_save: bool = Field(
        default=True,
        description="modules.json 저장 시 임시 파일 후 교체 방식 사용 여부"
    )

    # HTTP 설정
    http_timeout: float = Field(
        default=30.0,
        description="원격 메타데이터/스크립트 요청 타임아웃 (초)"
    )
    http_user_agent: str = Field(
        default="Module-Registry/1.0",
        description="원격 요청 User-Agent 헤더"
    )

    # 로깅 설정
    log_level: str = Field(
        default="INFO",
        description="로그 레벨"
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="로그 포맷"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="로그 파일 경로"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        # 환경 변수 이름을 대문자로 변환
        case_sensitive = False

    def validate_configuration(self) -> None:
        """설정 유효성 검증"""
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationException(
                "LOG_LEVEL", f"알 수 없는 로그 레벨입니다: {self.log_level}"
            )

        if self.http_timeout <= 0:
            raise ConfigurationException(
                "HTTP_TIMEOUT", "0보다 커야 합니다"
            )

        # 저장소 디렉토리 생성
        os.makedirs(self.module_storage_dir, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """
    설정 인스턴스를 반환합니다 (싱글톤 패턴)

    Returns:
        Settings: 설정 인스턴스
    """
    settings = Settings()
    settings.validate_configuration()
    return settings
