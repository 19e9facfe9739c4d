"""Tagged success/failure results returned by use cases."""

from typing import Generic, Literal, TypeVar, Union

import logfire
from pydantic import BaseModel
from typing_extensions import TypeAliasType

from journal.domain.error import DomainError, ErrorCode
from journal.util.error import StoreUnavailableError
from journal.util.jwt import JWTError, TokenExpiredError

T = TypeVar("T")


class Success(BaseModel, Generic[T]):
    """Operation completed."""

    ok: Literal[True] = True
    value: T


class Failure(BaseModel):
    """Expected failure the caller can render.

    ``available_providers`` is only filled for ``no_password_set``.
    """

    ok: Literal[False] = False
    code: ErrorCode
    message: str
    available_providers: list[str] = []


# Generic alias; a bare Union drops T since Success[T] resolves to Success
Result = TypeAliasType("Result", Union[Success[T], Failure], type_params=(T,))

STORE_UNAVAILABLE_MESSAGE = "The service is temporarily unavailable, please try again"


def failure_from(error: Exception) -> Failure:
    """Convert an expected error into a failure result.

    Args:
        error: Domain, token or store error

    Returns:
        Failure carrying the error's code and message
    """
    if isinstance(error, StoreUnavailableError):
        # Driver details stay in the logs
        logfire.error("Store unavailable", error=str(error))
        return Failure(
            code=ErrorCode.STORE_UNAVAILABLE, message=STORE_UNAVAILABLE_MESSAGE
        )

    if isinstance(error, JWTError):
        code = (
            ErrorCode.TOKEN_EXPIRED
            if isinstance(error, TokenExpiredError)
            else ErrorCode.TOKEN_INVALID
        )
        return Failure(code=code, message=str(error))

    if isinstance(error, DomainError):
        return Failure(
            code=error.code,
            message=str(error),
            available_providers=list(getattr(error, "available_providers", [])),
        )

    raise TypeError(f"Not an expected failure: {type(error).__name__}")
