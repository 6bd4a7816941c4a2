"""Screenshots – the RenderScreenshot API client."""
from __future__ import annotations

from typing import Any, Mapping, Sequence, Union
from urllib.parse import quote

import httpx

from renderscreenshot.adapters.http import API_VERSION, HttpxHttpClient, RetryingHttpClient
from renderscreenshot.application.options import TakeOptions, TakeOptionsConfig
from renderscreenshot.application.screenshots.cache import ApiTransport, CacheManager
from renderscreenshot.application.screenshots.models import (
    BatchRequestItem,
    BatchResponse,
    DeviceInfo,
    PresetInfo,
    ScreenshotResponse,
)
from renderscreenshot.application.signing import UrlSigner
from renderscreenshot.application.signing.canonical import Expiry
from renderscreenshot.config.settings import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ClientSettings,
    EnvSettingsLoader,
    SettingsLoader,
)

__all__ = ["Client", "OptionsLike"]

OptionsLike = Union[TakeOptions, TakeOptionsConfig, Mapping[str, Any]]


class Client:
    """Async client for the RenderScreenshot API.

    Example::

        async with Client("rs_live_xxxxx") as client:
            image = await client.take(TakeOptions.url("https://example.com").preset("og_card"))

            url = client.generate_url(
                TakeOptions.url("https://example.com").preset("og_card"),
                datetime.now(UTC) + timedelta(days=1),
            )
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: ApiTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("API key is required")
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http: Any = http_client or self._build_http(
            api_key, self._base_url, timeout, max_retries, transport
        )
        self._signer = UrlSigner(api_key, f"{self._base_url}/{API_VERSION}/screenshot")
        self.cache = CacheManager(self._http)

    @staticmethod
    def _build_http(
        api_key: str,
        base_url: str,
        timeout: float,
        max_retries: int,
        transport: httpx.AsyncBaseTransport | None,
    ) -> HttpxHttpClient:
        kwargs: dict[str, Any] = {}
        if transport is not None:
            kwargs["transport"] = transport
        if max_retries > 0:
            return RetryingHttpClient(api_key, base_url, timeout, max_retries, **kwargs)
        return HttpxHttpClient(api_key, base_url, timeout, **kwargs)

    @classmethod
    def from_settings(cls, settings: ClientSettings, **kwargs: Any) -> "Client":
        return cls(
            settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            **kwargs,
        )

    @classmethod
    def from_env(cls, loader: SettingsLoader | None = None, **kwargs: Any) -> "Client":
        """Build from ``RENDERSCREENSHOT_*`` environment variables."""
        settings = (loader or EnvSettingsLoader()).load(ClientSettings)
        return cls.from_settings(settings, **kwargs)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        close = getattr(self._http, "aclose", None)
        if close is not None:
            await close()

    def generate_url(self, options: OptionsLike, expires_at: Expiry) -> str:
        """Signed URL that renders *options* until *expires_at*, no API call needed."""
        params = TakeOptions.from_config(options).to_signing_params()
        return self._signer.sign(params, expires_at)

    async def take(self, options: OptionsLike) -> bytes:
        """Render a screenshot and return the image bytes."""
        return await self._http.post(
            "/screenshot",
            body=TakeOptions.from_config(options).to_params(),
            response_type="bytes",
        )

    async def take_json(self, options: OptionsLike) -> ScreenshotResponse:
        """Render a screenshot and return its metadata and CDN URLs."""
        body = {**TakeOptions.from_config(options).to_params(), "response_type": "json"}
        return ScreenshotResponse.from_dict(await self._http.post("/screenshot", body=body))

    async def batch(
        self,
        urls_or_requests: Sequence[str] | Sequence[BatchRequestItem | Mapping[str, Any]],
        options: OptionsLike | None = None,
    ) -> BatchResponse:
        """Submit many screenshots at once.

        Either a list of URLs sharing *options*, or a list of
        :class:`BatchRequestItem` (or ``{"url": ..., "options": ...}``
        mappings) each carrying its own options.
        """
        items = list(urls_or_requests)
        body: dict[str, Any]
        if all(isinstance(item, str) for item in items):
            body = {
                "urls": items,
                "options": TakeOptions.from_config(options).to_params() if options is not None else {},
            }
        else:
            body = {"requests": [self._batch_request(item) for item in items]}
        return BatchResponse.from_dict(await self._http.post("/batch", body=body))

    @staticmethod
    def _batch_request(item: BatchRequestItem | Mapping[str, Any]) -> dict[str, Any]:
        if isinstance(item, Mapping):
            item = BatchRequestItem(url=item["url"], options=item.get("options"))
        return {"url": item.url, **TakeOptions.from_config(item.options).to_params()}

    async def get_batch(self, batch_id: str) -> BatchResponse:
        return BatchResponse.from_dict(await self._http.get(f"/batch/{quote(batch_id, safe='')}"))

    async def presets(self) -> list[PresetInfo]:
        return [PresetInfo.from_dict(p) for p in await self._http.get("/presets")]

    async def preset(self, preset_id: str) -> PresetInfo:
        return PresetInfo.from_dict(await self._http.get(f"/presets/{quote(preset_id, safe='')}"))

    async def devices(self) -> list[DeviceInfo]:
        return [DeviceInfo.from_dict(d) for d in await self._http.get("/devices")]

    def __repr__(self) -> str:
        return f"Client(base_url={self._base_url!r}, timeout={self._timeout!r})"
