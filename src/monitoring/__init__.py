"""
모니터링 시스템

모듈 레지스트리용 Prometheus 메트릭을 제공합니다.
"""

from .metrics import (
    FETCH_DURATION,
    OPERATION_COUNT,
    PERSISTENCE_ERRORS,
    REFRESH_RESULTS,
    REGISTERED_MODULES,
    REGISTRY,
    get_metrics_text,
    record_fetch_duration,
    record_persistence_error,
    record_refresh_result,
    track_operation,
    update_module_count,
)

__all__ = [
    "REGISTRY",
    "OPERATION_COUNT",
    "REGISTERED_MODULES",
    "REFRESH_RESULTS",
    "FETCH_DURATION",
    "PERSISTENCE_ERRORS",
    "track_operation",
    "update_module_count",
    "record_refresh_result",
    "record_fetch_duration",
    "record_persistence_error",
    "get_metrics_text",
]
