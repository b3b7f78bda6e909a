from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ApiError(BaseModel):
    code: str
    message: str
    details: Any | None = None


class ApiResponse[T](BaseModel):
    """Envelope for every scene API response.

    Clients only ever need ``result``: on failure it carries the error message, with the
    structured error alongside in ``error``.
    """

    result: T | None = None
    error: ApiError | None = None


def ok[T](result: T) -> ApiResponse[T]:
    return ApiResponse(result=result)


def fail(*, code: str, message: str, details: Any | None = None) -> ApiResponse[str]:
    return ApiResponse(
        result=message, error=ApiError(code=code, message=message, details=details)
    )
