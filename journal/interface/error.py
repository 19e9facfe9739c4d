"""Interface layer errors.

Maps use-case failures to HTTP responses.
"""

from fastapi import HTTPException, status

from journal.application.usecase.result import Failure
from journal.domain.error import ErrorCode

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.NO_PASSWORD_SET: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PROVIDER_NOT_LINKED: status.HTTP_404_NOT_FOUND,
    ErrorCode.ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    ErrorCode.PASSWORD_ALREADY_SET: status.HTTP_409_CONFLICT,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


class InterfaceError(HTTPException):
    """HTTP error carrying a machine-readable code.

    The response body is ``{"detail": {"code", "message", "available_providers"}}``.
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        message: str,
        available_providers: list[str] | None = None,
    ):
        super().__init__(
            status_code=status_code,
            detail={
                "code": code.value,
                "message": message,
                "available_providers": available_providers or [],
            },
        )


def http_error(failure: Failure) -> InterfaceError:
    """Build the HTTP error for a failed use case.

    Codes without an explicit mapping are client errors (400).
    """
    return InterfaceError(
        status_code=STATUS_BY_CODE.get(failure.code, status.HTTP_400_BAD_REQUEST),
        code=failure.code,
        message=failure.message,
        available_providers=failure.available_providers,
    )


def authentication_required() -> InterfaceError:
    return InterfaceError(
        status_code=status.HTTP_401_UNAUTHORIZED,
        code=ErrorCode.TOKEN_INVALID,
        message="Authentication required",
    )


def rate_limited() -> InterfaceError:
    return InterfaceError(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        code=ErrorCode.RATE_LIMITED,
        message="Too many requests, please try again later",
    )
