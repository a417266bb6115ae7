"""
모듈 레지스트리 모듈

원격 메타데이터로 등록된 스크래핑 모듈의 목록, 영속화, 갱신을 담당합니다.
"""

import asyncio
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..config.settings import Settings
from ..exceptions import (
    ModuleAlreadyExistsException,
    ModuleNotFoundException,
    ModuleRegistryException,
    ModuleStorageException,
)
from ..models.base import ModuleRecord, ModuleSummary, RefreshReport, RefreshResult
from ..models.enums import RefreshStatus
from ..monitoring.metrics import (
    record_persistence_error,
    record_refresh_result,
    track_operation,
    update_module_count,
)
from ..utils.helpers import generate_module_id, parse_module_id
from ..utils.logging import get_logger
from .fetcher import MetadataFetcher
from .storage import ScriptStorage

logger = get_logger(__name__)

ModuleId = Union[str, uuid.UUID]
PathLike = Union[str, Path]


class ModuleRegistry:
    """스크래핑 모듈 레지스트리

    모든 공개 작업은 하나의 asyncio.Lock 으로 직렬화됩니다.
    Add/Refresh 의 원격 요청도 잠금 안에서 수행되므로 느린 요청은
    다른 모든 작업을 대기시킵니다.
    """

    def __init__(
        self,
        storage_dir: Optional[PathLike] = None,
        settings: Optional[Settings] = None,
        fetcher: Optional[MetadataFetcher] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        레지스트리 초기화 후 modules.json 을 즉시 로드

        Args:
            storage_dir: 저장소 디렉토리 (None이면 설정값 사용)
            settings: 시스템 설정 (None이면 기본 설정 사용)
            fetcher: 원격 요청 객체 (None이면 기본 요청 객체)
            logger: 이벤트를 기록할 로거 (None이면 모듈 로거)
        """
        if settings is None:
            # 저장소를 직접 지정한 경우 기본 저장소 디렉토리를 만들지 않음
            if storage_dir is None:
                from ..config.settings import get_settings
                settings = get_settings()
            else:
                settings = Settings()

        self.settings = settings
        self.logger = logger if logger is not None else get_logger(__name__)
        self.storage = ScriptStorage(
            storage_dir if storage_dir is not None else settings.module_storage_dir,
            atomic_save=settings.registry_atomic_save,
        )
        self.fetcher = fetcher or MetadataFetcher(settings)

        # 삽입 순서를 유지하는 ID -> 레코드 매핑
        self._modules: Dict[uuid.UUID, ModuleRecord] = {}
        self._lock: Optional[asyncio.Lock] = None

        self._load_modules()

    @property
    def storage_dir(self) -> Path:
        """기본 저장소 디렉토리"""
        return self.storage.storage_dir

    @property
    def file_path(self) -> Path:
        """modules.json 경로"""
        return self.storage.registry_file

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module_id) -> bool:
        return self._find(module_id) is not None

    def _get_lock(self) -> asyncio.Lock:
        """작업 잠금 반환 (실행 중인 이벤트 루프에서 처음 사용할 때 생성)"""
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    def _find(self, module_id: ModuleId) -> Optional[ModuleRecord]:
        """ID로 레코드 조회 (형식이 잘못된 ID는 없는 것으로 취급)"""
        parsed = parse_module_id(module_id)
        if parsed is None:
            return None
        return self._modules.get(parsed)

    def _load_modules(self) -> None:
        """modules.json 로드 (생성 시 또는 잠금을 보유한 상태에서 호출)"""
        try:
            records = self.storage.load_records()
        except ModuleStorageException as e:
            self.logger.warning(f"모듈 목록 로드 실패: {e}")
            record_persistence_error("load")
            return

        if records is None:
            return

        self._modules = {record.id: record for record in records}
        update_module_count(len(self._modules))
        self.logger.info(f"모듈 목록 로드 완료: {len(self._modules)}개")

    def _save_modules(self) -> None:
        """modules.json 저장 (실패해도 메모리 상태는 유지)"""
        try:
            self.storage.save_records(list(self._modules.values()))
        except ModuleStorageException as e:
            self.logger.error(f"모듈 목록 저장 실패: {e}")
            record_persistence_error("save")
        finally:
            update_module_count(len(self._modules))

    async def load(self) -> None:
        """modules.json 다시 로드 (읽기 실패 시 현재 목록 유지)"""
        async with self._get_lock():
            self._load_modules()

    async def save(self) -> None:
        """현재 목록을 modules.json 에 저장"""
        async with self._get_lock():
            self._save_modules()

    @track_operation("add")
    async def add_module(self, metadata_url: str, storage_dir: Optional[PathLike] = None) -> ModuleRecord:
        """
        메타데이터 URL로 모듈 등록

        Args:
            metadata_url: 메타데이터 문서 URL (문자열 그대로 비교)
            storage_dir: 스크립트 저장 디렉토리 (None이면 기본 디렉토리)

        Returns:
            새로 등록된 모듈 레코드

        Raises:
            ModuleAlreadyExistsException: 같은 URL의 모듈이 이미 있을 때
            ModuleFetchException: 메타데이터/스크립트 요청 실패 시
            ModuleParseException: 메타데이터 형식이 잘못되었을 때
            ModuleStorageException: 스크립트 파일 쓰기 실패 시
        """
        async with self._get_lock():
            for record in self._modules.values():
                if record.metadata_url == metadata_url:
                    raise ModuleAlreadyExistsException(metadata_url)

            metadata = await self.fetcher.fetch_metadata(metadata_url)
            content = await self.fetcher.fetch_script(metadata.script_url)

            filename = self.storage.new_script_filename()
            self.storage.write_script(filename, content, storage_dir)

            record = ModuleRecord(
                id=generate_module_id(),
                metadata=metadata,
                local_path=filename,
                metadata_url=metadata_url,
                is_active=False,
            )
            self._modules[record.id] = record
            self._save_modules()

            self.logger.info(f"모듈 추가 완료: {metadata.source_name}")
            return record.model_copy(deep=True)

    @track_operation("delete")
    async def delete_module(self, module_id: ModuleId, storage_dir: Optional[PathLike] = None) -> None:
        """
        모듈과 캐시된 스크립트 삭제

        스크립트 파일 삭제 실패는 경고만 남기고 레코드는 제거합니다.

        Args:
            module_id: 모듈 ID
            storage_dir: 스크립트 저장 디렉토리

        Raises:
            ModuleNotFoundException: 모듈이 없을 때
        """
        async with self._get_lock():
            record = self._find(module_id)
            if record is None:
                raise ModuleNotFoundException(module_id)

            try:
                self.storage.remove_script(record.local_path, storage_dir)
            except ModuleStorageException as e:
                self.logger.warning(f"모듈 스크립트 삭제 실패: {record.metadata.source_name} - {e}")

            del self._modules[record.id]
            self._save_modules()

            self.logger.info(f"모듈 삭제 완료: {record.metadata.source_name}")

    async def list_modules(self) -> List[ModuleSummary]:
        """
        모듈 요약 목록 조회

        Returns:
            등록 순서대로 정렬된 {id, name} 목록
        """
        async with self._get_lock():
            return [record.to_summary() for record in self._modules.values()]

    async def get_module(self, module_id: ModuleId) -> ModuleRecord:
        """
        모듈 레코드 조회

        Args:
            module_id: 모듈 ID

        Returns:
            레코드 사본

        Raises:
            ModuleNotFoundException: 모듈이 없을 때
        """
        async with self._get_lock():
            record = self._find(module_id)
            if record is None:
                raise ModuleNotFoundException(module_id)
            return record.model_copy(deep=True)

    @track_operation("get_content")
    async def get_module_content(self, module_id: ModuleId, storage_dir: Optional[PathLike] = None) -> str:
        """
        캐시된 스크립트 내용 조회

        Args:
            module_id: 모듈 ID
            storage_dir: 스크립트 저장 디렉토리

        Returns:
            스크립트 텍스트

        Raises:
            ModuleNotFoundException: 모듈이 없을 때
            ModuleStorageException: 스크립트 파일을 읽을 수 없을 때
        """
        async with self._get_lock():
            record = self._find(module_id)
            if record is None:
                raise ModuleNotFoundException(module_id)
            return self.storage.read_script(record.local_path, storage_dir)

    @track_operation("refresh")
    async def refresh_modules(self, storage_dir: Optional[PathLike] = None) -> RefreshReport:
        """
        모든 모듈의 메타데이터를 다시 받아 버전이 바뀐 모듈만 갱신

        모듈별 실패는 경고로 기록하고 다음 모듈로 넘어갑니다.
        모든 모듈 처리 후 modules.json 을 한 번 저장합니다.

        Args:
            storage_dir: 스크립트 저장 디렉토리

        Returns:
            모듈별 갱신 결과
        """
        async with self._get_lock():
            report = RefreshReport()

            for record in list(self._modules.values()):
                result = await self._refresh_module(record, storage_dir)
                record_refresh_result(result.status)
                report.results.append(result)

            self._save_modules()
            report.finished_at = datetime.now()

            self.logger.info(
                f"모듈 갱신 주기 완료: 갱신 {report.count(RefreshStatus.UPDATED)}개, "
                f"유지 {report.count(RefreshStatus.UNCHANGED)}개, 실패 {len(report.failed)}개"
            )
            return report

    async def _refresh_module(self, record: ModuleRecord, storage_dir: Optional[PathLike]) -> RefreshResult:
        """모듈 하나 갱신 (잠금을 보유한 상태에서 호출)"""
        name = record.metadata.source_name
        result = RefreshResult(
            module_id=record.id,
            source_name=name,
            status=RefreshStatus.UNCHANGED,
            previous_version=record.metadata.version,
            current_version=record.metadata.version,
        )

        try:
            new_metadata = await self.fetcher.fetch_metadata(record.metadata_url)
        except ModuleRegistryException as e:
            self.logger.warning(f"모듈 메타데이터 갱신 실패: {name} - {e}")
            result.status = RefreshStatus.METADATA_FAILED
            result.error = str(e)
            return result

        if new_metadata.version == record.metadata.version:
            self.logger.debug(f"모듈 버전 변경 없음: {name} v{record.metadata.version}")
            return result

        try:
            content = await self.fetcher.fetch_script(new_metadata.script_url)
        except ModuleRegistryException as e:
            self.logger.warning(f"모듈 스크립트 다운로드 실패: {name} - {e}")
            result.status = RefreshStatus.SCRIPT_FAILED
            result.error = str(e)
            return result

        try:
            self.storage.write_script(record.local_path, content, storage_dir)
        except ModuleStorageException as e:
            self.logger.warning(f"모듈 스크립트 저장 실패: {name} - {e}")
            result.status = RefreshStatus.WRITE_FAILED
            result.error = str(e)
            return result

        self._modules[record.id] = record.model_copy(update={"metadata": new_metadata})

        self.logger.info(f"모듈 갱신 완료: {name} v{record.metadata.version} -> v{new_metadata.version}")
        result.status = RefreshStatus.UPDATED
        result.current_version = new_metadata.version
        return result

    async def close(self) -> None:
        """리소스 정리"""
        await self.fetcher.close()

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        await self.close()
