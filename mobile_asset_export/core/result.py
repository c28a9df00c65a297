from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Dict, Any


T = TypeVar("T")


@dataclass(frozen=True)
class AppError:
    """Structured error information safe for UI and logs.

    `meta` can hold non-sensitive context (platform, preset, artboard, path).
    """

    code: str
    message: str
    details: str = ""
    meta: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class Result(Generic[T]):
    ok: bool
    value: Optional[T] = None
    error: Optional[AppError] = None

    @staticmethod
    def success(value: T) -> "Result[T]":
        return Result(ok=True, value=value, error=None)

    @staticmethod
    def failure(
        code: str,
        message: str,
        details: str = "",
        meta: Optional[Dict[str, Any]] = None,
    ) -> "Result[T]":
        return Result(
            ok=False,
            value=None,
            error=AppError(code=code, message=message, details=details, meta=meta),
        )

    @staticmethod
    def from_exception(exc: BaseException) -> "Result[T]":
        """Wrap a structured exporter error (or any exception) as a failure.

        Exceptions carrying `code`, `message`, `details` and a `context()`
        method keep those; anything else becomes an UNEXPECTED failure.
        """
        code = getattr(exc, "code", None) or "UNEXPECTED"
        message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
        details = getattr(exc, "details", "") or ""
        context = getattr(exc, "context", None)
        meta = context() if callable(context) else None
        return Result.failure(code, str(exc) if meta else message, details, meta or None)
