"""HTTP adapter – HttpxHttpClient."""
from __future__ import annotations

from typing import Any, Literal

import httpx

from renderscreenshot._version import __version__
from renderscreenshot.config.settings import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from renderscreenshot.kernel.errors import RenderScreenshotError
from renderscreenshot.observability.logging import get_logger

API_VERSION = "v1"
USER_AGENT = f"renderscreenshot-python/{__version__}"

ResponseType = Literal["json", "bytes"]

logger = get_logger(__name__)


def _retry_after(response: httpx.Response) -> int | None:
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def error_from_response(response: httpx.Response) -> RenderScreenshotError:
    """Translate a non-2xx response into a :class:`RenderScreenshotError`."""
    body: Any = {}
    if "application/json" in response.headers.get("content-type", ""):
        try:
            body = response.json()
        except ValueError:
            body = {}
    return RenderScreenshotError.from_response(
        response.status_code,
        body if isinstance(body, dict) else {},
        _retry_after(response),
    )


class HttpxHttpClient:
    """Authenticated async httpx wrapper rooted at ``<base_url>/v1``.

    Every failure comes out as :class:`RenderScreenshotError`: HTTP errors
    via the response body, timeouts as ``timeout``, anything else from httpx
    as ``internal_error``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        **kwargs: Any,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=f"{self._base_url}/{API_VERSION}",
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {api_key}",
                "User-Agent": USER_AGENT,
            },
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "HttpxHttpClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        response_type: ResponseType = "json",
    ) -> Any:
        """Send one API request; returns decoded JSON or raw bytes."""
        return await self._request(method, path, body=body, response_type=response_type)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        response_type: ResponseType = "json",
    ) -> Any:
        kwargs: dict[str, Any] = {}
        if body is not None:
            kwargs["json"] = body
        logger.debug("api_request", method=method, path=path)
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            logger.debug("api_timeout", method=method, path=path)
            raise RenderScreenshotError.timeout() from exc
        except httpx.HTTPError as exc:
            logger.debug("api_transport_error", method=method, path=path, error=str(exc))
            raise RenderScreenshotError.internal(str(exc) or type(exc).__name__) from exc

        logger.debug("api_response", method=method, path=path, status=response.status_code)
        if response.is_error:
            raise error_from_response(response)
        if response_type == "bytes":
            return response.content
        try:
            return response.json()
        except ValueError as exc:
            raise RenderScreenshotError.internal(
                f"Invalid JSON in response to {method} {path}"
            ) from exc


__all__ = ["API_VERSION", "HttpxHttpClient", "USER_AGENT", "error_from_response"]
