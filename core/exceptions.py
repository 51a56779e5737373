"""
core/exceptions.py - 통합 예외 계층 구조

리소스 수집 엔진과 CLI에서 사용되는 예외 클래스들을 정의합니다.
하위 계층은 예외를 던지기만 하고, CLI 경계에서만 잡아서 포맷팅합니다.

예외 계층 구조:
    AwareError (베이스)
    ├── CollectionError (리소스 수집)
    │   └── APICallError (AWS API 호출 실패)
    ├── ConfigError (설정 관련)
    └── ValidationError (입력 검증)

Usage:
    from core.exceptions import APICallError

    try:
        page = ec2.describe_subnets(Filters=filters)
    except ClientError as e:
        raise APICallError.from_client_error("ec2", "describe_subnets", e) from e
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class AwareError(Exception):
    """aware 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 리소스 수집 관련 예외
# =============================================================================


class CollectionError(AwareError):
    """리소스 수집 관련 예외"""

    def __init__(
        self,
        resource: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"수집 오류 [{resource}]: {message}"
        super().__init__(full_message, cause)
        self.resource = resource
        self.details["resource"] = resource


class APICallError(CollectionError):
    """AWS API 호출 관련 예외

    boto3/botocore의 ClientError를 래핑하여 일관된 예외 처리를 제공합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"{service}.{operation}"
        if error_code:
            message = f"{message} 실패 ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(resource=service, message=message, cause=cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
            }
        )

    def __str__(self) -> str:
        # 원인 메시지는 error_message에 이미 포함됨
        return self.message

    @classmethod
    def from_client_error(
        cls,
        service: str,
        operation: str,
        client_error: Exception,
    ) -> "APICallError":
        """botocore 예외로부터 생성

        ClientError는 response에서 코드/메시지를 꺼내고,
        그 외 BotoCoreError(연결 실패 등)는 클래스명을 코드로 사용합니다.

        Args:
            service: AWS 서비스 이름
            operation: API 작업 이름
            client_error: botocore 예외

        Returns:
            APICallError 인스턴스
        """
        error_code = None
        error_message = None

        # ClientError 형식 파싱
        if hasattr(client_error, "response"):
            error_info = client_error.response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")
        else:
            error_code = client_error.__class__.__name__
            error_message = str(client_error)

        return cls(
            service=service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            cause=client_error,
        )


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(AwareError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


class ValidationError(AwareError):
    """입력 검증 오류"""

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Optional[Exception] = None,
    ):
        message = f"검증 오류 [{field}]: 예상값 '{expected}', 실제값 '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

ACCESS_DENIED_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedAccess",
    "UnauthorizedOperation",
}

THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "RateExceeded",
}

NOT_FOUND_CODES = {
    "InvalidVpcID.NotFound",
    "InvalidVpcId.NotFound",
    "InvalidInstanceID.NotFound",
    "ValidationError",
}


def _error_code(error: Exception) -> Optional[str]:
    if isinstance(error, APICallError):
        return error.error_code
    if hasattr(error, "response"):
        return error.response.get("Error", {}).get("Code", "")
    return None


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        액세스 거부 오류이면 True
    """
    return _error_code(error) in ACCESS_DENIED_CODES


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인"""
    return _error_code(error) in THROTTLING_CODES


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인

    존재하지 않는 VPC ID를 지정한 경우 등이 해당됩니다.
    """
    return _error_code(error) in NOT_FOUND_CODES


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    # 사용자 친화적 메시지 매핑
    friendly_messages = {
        "AccessDenied": "권한이 없습니다. IAM 정책을 확인하세요.",
        "UnauthorizedOperation": "권한이 없습니다. IAM 정책을 확인하세요.",
        "AuthFailure": "인증에 실패했습니다. 자격 증명을 확인하세요.",
        "ExpiredToken": "인증 토큰이 만료되었습니다. 다시 로그인하세요.",
        "InvalidClientTokenId": "잘못된 자격 증명입니다.",
        "Throttling": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        "RequestLimitExceeded": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        "InvalidVpcID.NotFound": "지정한 VPC를 찾을 수 없습니다.",
    }

    code = _error_code(error)
    if code in friendly_messages:
        if isinstance(error, APICallError):
            return f"{error.service}.{error.operation}: {friendly_messages[code]}"
        return friendly_messages[code]

    if isinstance(error, AwareError):
        # 커스텀 예외는 이미 포맷팅됨
        return str(error)

    # boto3 ClientError
    if hasattr(error, "response"):
        error_info = error.response.get("Error", {})
        return f"{error_info.get('Code', 'UnknownError')}: {error_info.get('Message', str(error))}"

    return str(error)
