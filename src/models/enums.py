"""
열거형 정의 모듈

모듈 레지스트리에서 사용되는 상수 값들을 열거형으로 정의합니다.
"""

from enum import Enum


class RefreshStatus(Enum):
    """모듈 갱신 결과 열거형"""
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    METADATA_FAILED = "metadata_failed"
    SCRIPT_FAILED = "script_failed"
    WRITE_FAILED = "write_failed"

    @property
    def is_failure(self) -> bool:
        """갱신 실패 여부"""
        return self in (
            RefreshStatus.METADATA_FAILED,
            RefreshStatus.SCRIPT_FAILED,
            RefreshStatus.WRITE_FAILED,
        )
