"""Kernel errors – root of the SDK error hierarchy."""

from __future__ import annotations

import json
from typing import Any


def _rebuild(cls: type[BaseError], state: dict[str, Any]) -> BaseError:
    err = cls.__new__(cls)
    Exception.__init__(err, state.get("message", ""))
    err.__dict__.update(state)
    return err


class BaseError(Exception):
    """Every exception the SDK raises on purpose derives from this.

    ``code`` is a stable slug callers can branch on; ``detail`` carries extra
    context that is safe to log. ``str()`` is a single JSON line so log
    aggregators can index the fields.

    Subclasses may take any constructor signature: pickling restores the
    instance state directly instead of replaying ``__init__``, so errors
    survive a trip through ``multiprocessing`` or a task queue.
    """

    default_code: str = "renderscreenshot_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        state = dict(self.__dict__)
        # the cause may not be picklable; its repr is kept in to_dict()
        state["cause"] = None
        return (_rebuild, (type(self), state))

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for structured logs."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
