"""Application webhooks – reading signature headers from any header collection.

Frameworks disagree on header shape: WSGI/Express-style dicts (sometimes
lower-cased, sometimes with list values), case-insensitive multi-dicts
(httpx, Starlette, Werkzeug) and ``email.message.Message``. Each shape gets
one :class:`HeaderSource` adapter; extraction logic only sees the protocol.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

__all__ = [
    "HeaderSource",
    "MappingHeaderSource",
    "MultiDictHeaderSource",
    "SIGNATURE_HEADER",
    "TIMESTAMP_HEADER",
    "WebhookHeaders",
    "as_header_source",
    "extract_webhook_headers",
]

SIGNATURE_HEADER = "X-Webhook-Signature"
TIMESTAMP_HEADER = "X-Webhook-Timestamp"

_LIST_ACCESSORS = ("get_list", "getlist", "get_all")


@runtime_checkable
class HeaderSource(Protocol):
    """Port: read a header by name, case-insensitively."""

    def lookup(self, name: str) -> str | None: ...
    def first_of(self, name: str) -> str | None: ...


def _text(value: str | bytes) -> str:
    return value.decode("latin-1") if isinstance(value, bytes) else value


class MappingHeaderSource:
    """Plain mapping whose values are a string or a list of strings."""

    def __init__(self, headers: Mapping[str, Any]) -> None:
        self._headers = headers

    def _raw(self, name: str) -> Any:
        for candidate in (name, name.lower()):
            if candidate in self._headers and self._headers[candidate] is not None:
                return self._headers[candidate]
        folded = name.casefold()
        for key, value in self._headers.items():
            if isinstance(key, str) and key.casefold() == folded and value is not None:
                return value
        return None

    def lookup(self, name: str) -> str | None:
        value = self._raw(name)
        if isinstance(value, (list, tuple)):
            return ", ".join(_text(v) for v in value) if value else None
        return None if value is None else _text(value)

    def first_of(self, name: str) -> str | None:
        value = self._raw(name)
        if isinstance(value, (list, tuple)):
            return _text(value[0]) if value else None
        return None if value is None else _text(value)


class MultiDictHeaderSource:
    """Collection exposing every value of a header through a list accessor."""

    def __init__(self, headers: Any, accessor: str) -> None:
        self._headers = headers
        self._values = getattr(headers, accessor)

    def _all(self, name: str) -> Sequence[str | bytes]:
        return self._values(name) or ()

    def lookup(self, name: str) -> str | None:
        values = self._all(name)
        return ", ".join(_text(v) for v in values) if values else None

    def first_of(self, name: str) -> str | None:
        values = self._all(name)
        return _text(values[0]) if values else None


def as_header_source(headers: Any) -> HeaderSource:
    """Wrap *headers* in the adapter matching its shape."""
    if isinstance(headers, HeaderSource):
        return headers
    for accessor in _LIST_ACCESSORS:
        if callable(getattr(headers, accessor, None)):
            return MultiDictHeaderSource(headers, accessor)
    if isinstance(headers, Mapping):
        return MappingHeaderSource(headers)
    raise TypeError(f"Unsupported header collection: {type(headers).__name__}")


@dataclass(frozen=True)
class WebhookHeaders:
    signature: str
    timestamp: str


def extract_webhook_headers(headers: Any) -> WebhookHeaders:
    """Pull the signature and timestamp headers; absent headers become ``""``.

    When a header repeats, the first value wins.
    """
    source = as_header_source(headers)
    return WebhookHeaders(
        signature=source.first_of(SIGNATURE_HEADER) or "",
        timestamp=source.first_of(TIMESTAMP_HEADER) or "",
    )
