"""
예외 클래스 정의 모듈

모듈 레지스트리에서 사용되는 커스텀 예외들을 정의합니다.
"""

from typing import Optional


class ModuleRegistryException(Exception):
    """모듈 레지스트리 기본 예외 클래스"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        """
        예외 초기화

        Args:
            message: 오류 메시지
            error_code: 오류 코드 (선택사항)
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ModuleAlreadyExistsException(ModuleRegistryException):
    """같은 메타데이터 URL의 모듈이 이미 등록되어 있을 때 발생하는 예외"""

    def __init__(self, metadata_url: str):
        """
        모듈 중복 예외 초기화

        Args:
            metadata_url: 중복된 메타데이터 URL
        """
        message = f"이미 등록된 모듈입니다: {metadata_url}"
        super().__init__(message, "MODULE_ALREADY_EXISTS")
        self.metadata_url = metadata_url


class ModuleNotFoundException(ModuleRegistryException):
    """모듈을 찾을 수 없을 때 발생하는 예외"""

    def __init__(self, module_id):
        """
        모듈 찾기 실패 예외 초기화

        Args:
            module_id: 모듈 ID (UUID 또는 문자열)
        """
        message = f"모듈을 찾을 수 없습니다: {module_id}"
        super().__init__(message, "MODULE_NOT_FOUND")
        self.module_id = str(module_id)


class ModuleFetchException(ModuleRegistryException):
    """원격 메타데이터/스크립트 요청 실패 시 발생하는 예외"""

    def __init__(self, url: str, error_detail: str):
        """
        원격 요청 예외 초기화

        Args:
            url: 요청한 URL
            error_detail: 오류 상세 정보
        """
        message = f"원격 요청 실패: {url} - {error_detail}"
        super().__init__(message, "MODULE_FETCH_ERROR")
        self.url = url
        self.error_detail = error_detail


class ModuleParseException(ModuleRegistryException):
    """메타데이터 문서 형식이 잘못되었을 때 발생하는 예외"""

    def __init__(self, url: str, error_detail: str):
        """
        메타데이터 파싱 예외 초기화

        Args:
            url: 메타데이터 URL
            error_detail: 오류 상세 정보
        """
        message = f"메타데이터 파싱 실패: {url} - {error_detail}"
        super().__init__(message, "MODULE_PARSE_ERROR")
        self.url = url
        self.error_detail = error_detail


class ModuleStorageException(ModuleRegistryException):
    """로컬 스크립트 파일 읽기/쓰기 실패 시 발생하는 예외"""

    def __init__(self, path: str, error_detail: str):
        """
        로컬 저장소 예외 초기화

        Args:
            path: 대상 파일 경로
            error_detail: 오류 상세 정보
        """
        message = f"스크립트 파일 처리 실패: {path} - {error_detail}"
        super().__init__(message, "MODULE_STORAGE_ERROR")
        self.path = str(path)
        self.error_detail = error_detail


class ConfigurationException(ModuleRegistryException):
    """설정 오류 시 발생하는 예외"""

    def __init__(self, config_key: str, error_detail: str):
        """
        설정 예외 초기화

        Args:
            config_key: 설정 키
            error_detail: 오류 상세 정보
        """
        message = f"설정 오류: {config_key} - {error_detail}"
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key
        self.error_detail = error_detail
