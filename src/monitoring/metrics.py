"""
Prometheus 메트릭 모듈

모듈 레지스트리의 작업/갱신/저장 메트릭을 수집하고 노출합니다.
"""

import platform
import sys
import time
from functools import wraps

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, Info, generate_latest

from ..models.enums import RefreshStatus
from ..utils.logging import get_logger

# 메트릭 레지스트리
REGISTRY = CollectorRegistry()

# 로거
logger = get_logger(__name__)

# 레지스트리 작업 메트릭
OPERATION_COUNT = Counter(
    'module_registry_operations_total',
    '레지스트리 작업 총 수',
    ['operation', 'status'],
    registry=REGISTRY
)

OPERATION_DURATION = Histogram(
    'module_registry_operation_duration_seconds',
    '레지스트리 작업 처리 시간 (초)',
    ['operation'],
    registry=REGISTRY
)

REGISTERED_MODULES = Gauge(
    'module_registry_modules',
    '현재 등록된 모듈 수',
    registry=REGISTRY
)

# 갱신 관련 메트릭
REFRESH_RESULTS = Counter(
    'module_registry_refresh_results_total',
    '모듈별 갱신 결과 총 수',
    ['status'],
    registry=REGISTRY
)

# 원격 요청 메트릭
FETCH_DURATION = Histogram(
    'module_registry_fetch_duration_seconds',
    '원격 메타데이터/스크립트 요청 시간 (초)',
    ['kind'],
    registry=REGISTRY
)

# 저장 관련 메트릭
PERSISTENCE_ERRORS = Counter(
    'module_registry_persistence_errors_total',
    'modules.json 읽기/쓰기 실패 총 수',
    ['operation'],
    registry=REGISTRY
)

# 시스템 정보
SYSTEM_INFO = Info(
    'module_registry_info',
    '모듈 레지스트리 정보',
    registry=REGISTRY
)

SYSTEM_INFO.info({
    'version': '1.0.0',
    'python_version': f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    'platform': platform.system()
})


def track_operation(operation: str):
    """
    레지스트리 작업 메트릭 추적 데코레이터

    Args:
        operation: 작업 이름 (add, delete, refresh 등)
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()

            try:
                result = await func(*args, **kwargs)
                OPERATION_COUNT.labels(operation=operation, status='success').inc()
                return result

            except Exception as e:
                OPERATION_COUNT.labels(operation=operation, status='error').inc()
                logger.debug(f"실패 메트릭 기록: {operation} - {type(e).__name__}")
                raise

            finally:
                OPERATION_DURATION.labels(operation=operation).observe(time.time() - start_time)

        return wrapper
    return decorator


def update_module_count(module_count: int):
    """
    등록 모듈 수 업데이트

    Args:
        module_count: 현재 모듈 수
    """
    REGISTERED_MODULES.set(module_count)


def record_refresh_result(status: RefreshStatus):
    """
    모듈 갱신 결과 기록

    Args:
        status: 갱신 결과
    """
    REFRESH_RESULTS.labels(status=status.value).inc()


def record_fetch_duration(kind: str, duration: float):
    """
    원격 요청 시간 기록

    Args:
        kind: 요청 종류 (metadata, script)
        duration: 소요 시간 (초)
    """
    FETCH_DURATION.labels(kind=kind).observe(duration)


def record_persistence_error(operation: str):
    """
    modules.json 읽기/쓰기 실패 기록

    Args:
        operation: load 또는 save
    """
    PERSISTENCE_ERRORS.labels(operation=operation).inc()
    logger.debug(f"저장소 오류 기록: {operation}")


def get_metrics_text() -> bytes:
    """Prometheus 텍스트 형식의 메트릭 반환"""
    return generate_latest(REGISTRY)
