"""
모듈 스크립트 저장소 모듈

스크립트 캐시 파일과 modules.json 영속 파일을 관리합니다.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from ..exceptions import ModuleStorageException
from ..models.base import ModuleRecord
from ..utils.helpers import generate_script_filename, write_text_atomic
from ..utils.logging import get_logger

logger = get_logger(__name__)

MODULES_FILE_NAME = "modules.json"

PathLike = Union[str, Path]


class ScriptStorage:
    """스크립트 파일 저장소"""

    def __init__(self, storage_dir: PathLike, atomic_save: bool = True):
        """
        저장소 초기화

        디렉토리는 이미 존재한다고 가정합니다.

        Args:
            storage_dir: 저장소 디렉토리
            atomic_save: modules.json 저장 시 임시 파일 교체 방식 사용 여부
        """
        self.storage_dir = Path(storage_dir)
        self.atomic_save = atomic_save
        self.logger = logger

    @property
    def registry_file(self) -> Path:
        """modules.json 경로"""
        return self.storage_dir / MODULES_FILE_NAME

    def _resolve(self, filename: str, directory: Optional[PathLike] = None) -> Path:
        """스크립트 파일 경로 생성"""
        base = Path(directory) if directory is not None else self.storage_dir
        return base / filename

    def new_script_filename(self) -> str:
        """새 스크립트 파일 이름 생성"""
        return generate_script_filename()

    def write_script(self, filename: str, content: bytes, directory: Optional[PathLike] = None) -> Path:
        """
        스크립트 파일 쓰기 (기존 파일 덮어쓰기)

        Args:
            filename: 파일 이름
            content: 스크립트 본문
            directory: 저장 디렉토리 (None이면 기본 디렉토리)

        Returns:
            기록된 파일 경로

        Raises:
            ModuleStorageException: 쓰기 실패 시
        """
        script_path = self._resolve(filename, directory)
        try:
            with open(script_path, 'wb') as f:
                f.write(content)
        except OSError as e:
            raise ModuleStorageException(str(script_path), str(e)) from e

        self.logger.debug(f"스크립트 파일 저장: {script_path} ({len(content)} bytes)")
        return script_path

    def read_script(self, filename: str, directory: Optional[PathLike] = None) -> str:
        """
        스크립트 파일 읽기

        Args:
            filename: 파일 이름
            directory: 저장 디렉토리

        Returns:
            스크립트 텍스트 (UTF-8 로 해석할 수 없는 바이트는 대체 문자)

        Raises:
            ModuleStorageException: 파일이 없거나 읽을 수 없을 때
        """
        script_path = self._resolve(filename, directory)
        try:
            with open(script_path, 'rb') as f:
                content = f.read()
        except OSError as e:
            raise ModuleStorageException(str(script_path), str(e)) from e

        return content.decode('utf-8', errors='replace')

    def remove_script(self, filename: str, directory: Optional[PathLike] = None) -> bool:
        """
        스크립트 파일 삭제

        Args:
            filename: 파일 이름
            directory: 저장 디렉토리

        Returns:
            삭제 여부 (파일이 없었으면 False)

        Raises:
            ModuleStorageException: 파일이 있으나 삭제할 수 없을 때
        """
        script_path = self._resolve(filename, directory)
        try:
            script_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise ModuleStorageException(str(script_path), str(e)) from e

        self.logger.debug(f"스크립트 파일 삭제: {script_path}")
        return True

    def load_records(self) -> Optional[List[ModuleRecord]]:
        """
        modules.json 읽기

        Returns:
            레코드 목록 (파일이 없으면 None)

        Raises:
            ModuleStorageException: 읽기/파싱 실패 시
        """
        path = self.registry_file
        try:
            with open(path, encoding='utf-8') as f:
                document = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError, RecursionError) as e:
            raise ModuleStorageException(str(path), f"모듈 파일 읽기 오류: {e}") from e

        if document is None:
            return []
        if not isinstance(document, list):
            raise ModuleStorageException(str(path), "모듈 파일은 JSON 배열이어야 합니다")

        try:
            records = [ModuleRecord.model_validate(item) for item in document]
        except ValidationError as e:
            raise ModuleStorageException(str(path), f"모듈 레코드 형식 오류: {e}") from e

        # ID 와 메타데이터 URL 은 레코드마다 고유해야 함
        seen_ids = set()
        seen_urls = set()
        for record in records:
            if record.id in seen_ids:
                raise ModuleStorageException(str(path), f"중복된 모듈 ID: {record.id}")
            if record.metadata_url in seen_urls:
                raise ModuleStorageException(str(path), f"중복된 메타데이터 URL: {record.metadata_url}")
            seen_ids.add(record.id)
            seen_urls.add(record.metadata_url)

        return records

    def save_records(self, records: List[ModuleRecord]) -> None:
        """
        modules.json 저장 (전체 덮어쓰기)

        Args:
            records: 저장할 레코드 목록

        Raises:
            ModuleStorageException: 직렬화 또는 쓰기 실패 시
        """
        path = self.registry_file
        try:
            payload = json.dumps(
                [record.to_json_dict() for record in records],
                indent=2,
                ensure_ascii=False
            )
        except (TypeError, ValueError) as e:
            raise ModuleStorageException(str(path), f"모듈 직렬화 오류: {e}") from e

        try:
            if self.atomic_save:
                write_text_atomic(path, payload)
            else:
                with open(path, 'w', encoding='utf-8') as f:
                    f.write(payload)
        except OSError as e:
            raise ModuleStorageException(str(path), f"모듈 파일 저장 오류: {e}") from e
