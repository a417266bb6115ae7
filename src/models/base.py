"""
기본 데이터 모델 모듈

모듈 레지스트리의 핵심 데이터 구조들을 정의합니다.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import RefreshStatus


class ModuleMetadata(BaseModel):
    """원격 메타데이터 문서 모델

    sourceName/scriptURL/version 외의 필드는 그대로 보존되어
    modules.json 에 다시 기록됩니다.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    source_name: str = Field(
        default="",
        alias="sourceName",
        description="모듈 소스 이름"
    )
    script_url: str = Field(
        default="",
        alias="scriptURL",
        description="스크립트 다운로드 URL"
    )
    version: str = Field(
        default="",
        description="모듈 버전 문자열"
    )

    @field_validator('source_name', 'script_url', 'version', mode='before')
    @classmethod
    def null_to_empty(cls, v):
        """null 값은 빈 문자열로 취급"""
        return "" if v is None else v


class ModuleSummary(BaseModel):
    """모듈 목록 표시용 요약 모델"""

    id: str = Field(
        ...,
        description="모듈 ID (UUID 문자열)"
    )
    name: str = Field(
        ...,
        description="모듈 소스 이름"
    )


class ModuleRecord(BaseModel):
    """관리 대상 모듈 레코드 모델"""

    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID = Field(
        ...,
        description="모듈 고유 식별자"
    )
    metadata: ModuleMetadata = Field(
        ...,
        description="원격 메타데이터"
    )
    local_path: str = Field(
        ...,
        alias="localPath",
        description="저장소 디렉토리 기준 스크립트 파일 이름"
    )
    metadata_url: str = Field(
        ...,
        alias="metadataURL",
        description="메타데이터를 가져온 원격 URL"
    )
    is_active: bool = Field(
        default=False,
        alias="isActive",
        description="외부 소비자용 활성 플래그"
    )

    def to_summary(self) -> ModuleSummary:
        """목록 표시용 요약 반환"""
        return ModuleSummary(id=str(self.id), name=self.metadata.source_name)

    def to_json_dict(self) -> dict:
        """modules.json 직렬화용 딕셔너리 반환"""
        return self.model_dump(mode="json", by_alias=True)


class RefreshResult(BaseModel):
    """모듈 하나의 갱신 결과 모델"""

    module_id: uuid.UUID = Field(
        ...,
        description="모듈 ID"
    )
    source_name: str = Field(
        default="",
        description="모듈 소스 이름"
    )
    status: RefreshStatus = Field(
        ...,
        description="갱신 결과"
    )
    previous_version: str = Field(
        default="",
        description="갱신 전 버전"
    )
    current_version: str = Field(
        default="",
        description="갱신 후 버전"
    )
    error: Optional[str] = Field(
        default=None,
        description="실패 시 오류 메시지"
    )


class RefreshReport(BaseModel):
    """갱신 주기 전체 결과 모델"""

    results: List[RefreshResult] = Field(
        default_factory=list,
        description="모듈별 갱신 결과"
    )
    started_at: datetime = Field(
        default_factory=datetime.now,
        description="갱신 시작 시간"
    )
    finished_at: Optional[datetime] = Field(
        default=None,
        description="갱신 완료 시간"
    )

    def count(self, status: RefreshStatus) -> int:
        """특정 결과의 모듈 수"""
        return sum(1 for result in self.results if result.status == status)

    @property
    def updated(self) -> List[RefreshResult]:
        """갱신된 모듈 결과 목록"""
        return [r for r in self.results if r.status == RefreshStatus.UPDATED]

    @property
    def failed(self) -> List[RefreshResult]:
        """갱신 실패한 모듈 결과 목록"""
        return [r for r in self.results if r.status.is_failure]
