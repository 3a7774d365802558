"""
azlist/exceptions.py - 통합 예외 계층 구조

라이브러리 전체에서 사용되는 예외 클래스들을 정의합니다.
치명적인 오류만 예외로 표현하며, 개별 엔드포인트 목록 조회 실패는
예외가 아닌 ListError 값(azlist.models)으로 수집됩니다.

예외 계층 구조:
    AzListError (베이스)
    ├── ConfigurationError (구독/자격 증명 누락, 알 수 없는 확장 리소스 타입)
    ├── SchemaError (잘못된 ARM 스키마 스냅샷)
    ├── APICallError (Azure API 호출 실패)
    │   └── SeedQueryError (ARG seed 쿼리 실패)
    ├── TaskPoolError (작업 풀 수집기 실패)
    └── OperationCancelledError (취소됨)

Usage:
    from azlist.exceptions import APICallError, is_not_found

    try:
        page = client.list_children(parent_id, "subnets", "2023-09-01")
    except APICallError as e:
        if is_not_found(e):
            ...
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# 베이스 예외
# =============================================================================


class AzListError(Exception):
    """azlist 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 설정 / 스키마
# =============================================================================


class ConfigurationError(AzListError):
    """설정 오류 (작업 시작 전 중단)"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Exception | None = None,
    ):
        super().__init__(f"설정 오류 [{key}]: {message}", cause)
        self.config_key = key
        self.details["config_key"] = key


class SchemaError(AzListError):
    """ARM 스키마 스냅샷 오류"""

    def __init__(
        self,
        message: str,
        resource_type: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.resource_type = resource_type
        if resource_type is not None:
            self.details["resource_type"] = resource_type


# =============================================================================
# API 호출
# =============================================================================


class APICallError(AzListError):
    """Azure API 호출 관련 예외

    azure-core의 HttpResponseError를 래핑하여 상태 코드 기반의
    일관된 예외 처리를 제공합니다.
    """

    def __init__(
        self,
        operation: str,
        status_code: int | None = None,
        error_code: str | None = None,
        error_message: str | None = None,
        cause: Exception | None = None,
    ):
        message = operation
        if status_code is not None:
            message = f"{message} 실패 (HTTP {status_code})"
        if error_code:
            message = f"{message} [{error_code}]"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.operation = operation
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "operation": operation,
                "status_code": status_code,
                "error_code": error_code,
            }
        )

    def __str__(self) -> str:
        # cause 메시지는 error_message에 이미 포함됨
        return self.message

    @classmethod
    def from_http_error(cls, operation: str, error: Exception) -> APICallError:
        """azure.core.exceptions.HttpResponseError로부터 생성

        Args:
            operation: 호출한 작업 이름
            error: HttpResponseError 예외

        Returns:
            APICallError 인스턴스
        """
        status_code = getattr(error, "status_code", None)
        odata = getattr(error, "error", None)
        error_code = getattr(odata, "code", None)
        error_message = getattr(odata, "message", None) or getattr(error, "message", None) or str(error)

        return cls(
            operation=operation,
            status_code=status_code,
            error_code=error_code,
            error_message=error_message,
            cause=error,
        )


class SeedQueryError(APICallError):
    """ARG seed 쿼리 실패 (seed 집합을 신뢰할 수 없으므로 치명적)"""

    def __init__(
        self,
        query: str,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(
            operation="ResourceGraph.resources",
            status_code=status_code,
            error_message=f"{message} (query={query!r})",
            cause=cause,
        )
        self.query = query
        self.details["query"] = query


# =============================================================================
# 실행
# =============================================================================


class TaskPoolError(AzListError):
    """작업 풀 결과 수집기 실패"""

    pass


class OperationCancelledError(AzListError):
    """취소 신호가 감지된 경우

    이미 완료된 작업의 부분 결과는 철회되지 않으므로
    호출자는 취소된 조회의 출력을 버려야 합니다.
    """

    def __init__(self, message: str = "작업이 취소되었습니다"):
        super().__init__(message)


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

_NOT_FOUND_CODES = {
    "NotFound",
    "ResourceNotFound",
    "ResourceGroupNotFound",
    "ParentResourceNotFound",
    "SubscriptionNotFound",
}


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류(404)인지 확인

    Args:
        error: 확인할 예외

    Returns:
        리소스 없음 오류이면 True
    """
    status_code = getattr(error, "status_code", None)
    if status_code == 404:
        return True

    if isinstance(error, APICallError):
        return error.error_code in _NOT_FOUND_CODES

    # azure-core HttpResponseError 직접 확인
    odata = getattr(error, "error", None)
    return getattr(odata, "code", None) in _NOT_FOUND_CODES


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, AzListError):
        return str(error)

    status_code = getattr(error, "status_code", None)
    friendly_messages = {
        401: "인증에 실패했습니다. 자격 증명을 확인하세요.",
        403: "권한이 없습니다. 역할 할당을 확인하세요.",
        429: "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
    }
    if status_code in friendly_messages:
        return friendly_messages[status_code]

    return str(error)
