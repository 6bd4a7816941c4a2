"""Options – immutable fluent builder for screenshot requests.

Every setter returns a new :class:`TakeOptions`; a builder can be shared and
extended without the copies affecting each other::

    base = TakeOptions.url("https://example.com").preset("og_card")
    dark = base.dark_mode()
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping, Sequence
from urllib.parse import urlencode

from renderscreenshot.application.options.literals import (
    BlockableResource,
    Device,
    ImageFormat,
    MediaType,
    PdfPaperSize,
    Preset,
    StorageAcl,
    WaitCondition,
)
from renderscreenshot.application.signing.canonical import canonical_value

__all__ = ["Geolocation", "SIGNED_URL_FIELDS", "TakeOptions", "TakeOptionsConfig"]


@dataclass(frozen=True)
class Geolocation:
    latitude: float
    longitude: float
    accuracy: float | None = None

    def to_dict(self) -> dict[str, float]:
        return {k: v for k, v in dataclasses.asdict(self).items() if v is not None}


@dataclass(frozen=True)
class TakeOptionsConfig:
    """Raw option values; ``None`` means "not set" and is never sent."""

    # Target
    url: str | None = None
    html: str | None = None

    # Viewport
    width: int | None = None
    height: int | None = None
    scale: float | None = None
    mobile: bool | None = None

    # Capture
    full_page: bool | None = None
    element: str | None = None
    format: ImageFormat | None = None
    quality: int | None = None

    # Wait
    wait_for: WaitCondition | None = None
    delay: int | None = None
    wait_for_selector: str | None = None
    wait_for_timeout: int | None = None

    # Presets
    preset: Preset | None = None
    device: Device | None = None

    # Blocking
    block_ads: bool | None = None
    block_trackers: bool | None = None
    block_cookie_banners: bool | None = None
    block_chat_widgets: bool | None = None
    block_urls: tuple[str, ...] | None = None
    block_resources: tuple[BlockableResource, ...] | None = None

    # Page manipulation
    inject_script: str | None = None
    inject_style: str | None = None
    click: str | None = None
    hide: tuple[str, ...] | None = None
    remove: tuple[str, ...] | None = None

    # Browser emulation
    dark_mode: bool | None = None
    reduced_motion: bool | None = None
    media_type: MediaType | None = None
    user_agent: str | None = None
    timezone: str | None = None
    locale: str | None = None
    geolocation: Geolocation | None = None

    # Network
    headers: Mapping[str, str] | None = None
    cookies: tuple[Mapping[str, Any], ...] | None = None
    auth_basic: tuple[str, str] | None = None
    auth_bearer: str | None = None
    bypass_csp: bool | None = None

    # Cache
    cache_ttl: int | None = None
    cache_refresh: bool | None = None

    # PDF
    pdf_paper_size: PdfPaperSize | None = None
    pdf_width: str | None = None
    pdf_height: str | None = None
    pdf_landscape: bool | None = None
    pdf_margin: str | None = None
    pdf_margin_top: str | None = None
    pdf_margin_right: str | None = None
    pdf_margin_bottom: str | None = None
    pdf_margin_left: str | None = None
    pdf_scale: float | None = None
    pdf_print_background: bool | None = None
    pdf_page_ranges: str | None = None
    pdf_header: str | None = None
    pdf_footer: str | None = None
    pdf_fit_one_page: bool | None = None
    pdf_prefer_css_page_size: bool | None = None

    # Storage (BYOS)
    storage_enabled: bool | None = None
    storage_path: str | None = None
    storage_acl: StorageAcl | None = None

    def __post_init__(self) -> None:
        if isinstance(self.auth_basic, Mapping):
            object.__setattr__(
                self, "auth_basic", (self.auth_basic["username"], self.auth_basic["password"])
            )
        for name in ("block_urls", "block_resources", "hide", "remove", "cookies", "auth_basic"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))
        if isinstance(self.geolocation, Mapping):
            object.__setattr__(self, "geolocation", Geolocation(**self.geolocation))


_VIEWPORT_FIELDS = ("width", "height", "scale", "mobile")

_PDF_FIELDS = {
    "pdf_paper_size": "paper_size",
    "pdf_width": "width",
    "pdf_height": "height",
    "pdf_landscape": "landscape",
    "pdf_margin": "margin",
    "pdf_margin_top": "margin_top",
    "pdf_margin_right": "margin_right",
    "pdf_margin_bottom": "margin_bottom",
    "pdf_margin_left": "margin_left",
    "pdf_scale": "scale",
    "pdf_print_background": "print_background",
    "pdf_page_ranges": "page_ranges",
    "pdf_header": "header",
    "pdf_footer": "footer",
    "pdf_fit_one_page": "fit_one_page",
    "pdf_prefer_css_page_size": "prefer_css_page_size",
}

_STORAGE_FIELDS = {
    "storage_enabled": "enabled",
    "storage_path": "path",
    "storage_acl": "acl",
}

# flat GET parameters; the nested and structured options only travel in POST bodies
_QUERY_FIELDS = (
    "url",
    "width",
    "height",
    "scale",
    "mobile",
    "full_page",
    "element",
    "format",
    "quality",
    "wait_for",
    "delay",
    "wait_for_selector",
    "wait_for_timeout",
    "preset",
    "device",
    "block_ads",
    "block_trackers",
    "block_cookie_banners",
    "block_chat_widgets",
    "block_urls",
    "block_resources",
    "dark_mode",
    "reduced_motion",
    "media_type",
    "user_agent",
    "timezone",
    "locale",
    "cache_ttl",
    "cache_refresh",
)

# the vocabulary the server canonicalizes when checking a signed URL
SIGNED_URL_FIELDS = (
    "url",
    "width",
    "height",
    "scale",
    "mobile",
    "full_page",
    "element",
    "format",
    "quality",
    "preset",
    "device",
    "wait_for",
    "delay",
    "block_ads",
    "block_trackers",
    "block_cookie_banners",
    "block_chat_widgets",
    "dark_mode",
    "cache_ttl",
)


class TakeOptions:
    """Fluent builder for screenshot options."""

    __slots__ = ("_config",)

    def __init__(self, config: TakeOptionsConfig | None = None) -> None:
        self._config = config or TakeOptionsConfig()

    # --- Construction ---

    @classmethod
    def url(cls, url: str) -> "TakeOptions":
        """Options targeting a URL."""
        return cls(TakeOptionsConfig(url=url))

    @classmethod
    def html(cls, html: str) -> "TakeOptions":
        """Options rendering inline HTML."""
        return cls(TakeOptionsConfig(html=html))

    @classmethod
    def from_config(cls, config: "TakeOptions | TakeOptionsConfig | Mapping[str, Any] | None") -> "TakeOptions":
        """Accept a builder, a config, or a mapping of snake_case option names."""
        if isinstance(config, TakeOptions):
            return config
        if isinstance(config, TakeOptionsConfig):
            return cls(config)
        return cls(TakeOptionsConfig(**dict(config or {})))

    def _with(self, **changes: Any) -> "TakeOptions":
        return TakeOptions(dataclasses.replace(self._config, **changes))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TakeOptions) and other._config == self._config

    def __repr__(self) -> str:
        return f"TakeOptions({self._present()!r})"

    # --- Viewport ---

    def width(self, value: int) -> "TakeOptions":
        return self._with(width=value)

    def height(self, value: int) -> "TakeOptions":
        return self._with(height=value)

    def scale(self, value: float) -> "TakeOptions":
        """Device scale factor (1-3)."""
        return self._with(scale=value)

    def mobile(self, value: bool = True) -> "TakeOptions":
        return self._with(mobile=value)

    # --- Capture ---

    def full_page(self, value: bool = True) -> "TakeOptions":
        return self._with(full_page=value)

    def element(self, selector: str) -> "TakeOptions":
        return self._with(element=selector)

    def format(self, value: ImageFormat) -> "TakeOptions":
        return self._with(format=value)

    def quality(self, value: int) -> "TakeOptions":
        """JPEG/WebP quality (1-100)."""
        return self._with(quality=value)

    # --- Wait ---

    def wait_for(self, value: WaitCondition) -> "TakeOptions":
        return self._with(wait_for=value)

    def delay(self, value: int) -> "TakeOptions":
        """Milliseconds to wait after the page loads."""
        return self._with(delay=value)

    def wait_for_selector(self, selector: str) -> "TakeOptions":
        return self._with(wait_for_selector=selector)

    def wait_for_timeout(self, value: int) -> "TakeOptions":
        return self._with(wait_for_timeout=value)

    # --- Presets ---

    def preset(self, value: Preset) -> "TakeOptions":
        return self._with(preset=value)

    def device(self, value: Device) -> "TakeOptions":
        return self._with(device=value)

    # --- Blocking ---

    def block_ads(self, value: bool = True) -> "TakeOptions":
        return self._with(block_ads=value)

    def block_trackers(self, value: bool = True) -> "TakeOptions":
        return self._with(block_trackers=value)

    def block_cookie_banners(self, value: bool = True) -> "TakeOptions":
        return self._with(block_cookie_banners=value)

    def block_chat_widgets(self, value: bool = True) -> "TakeOptions":
        return self._with(block_chat_widgets=value)

    def block_urls(self, patterns: Sequence[str]) -> "TakeOptions":
        """Glob patterns of request URLs to block."""
        return self._with(block_urls=tuple(patterns))

    def block_resources(self, types: Sequence[BlockableResource]) -> "TakeOptions":
        return self._with(block_resources=tuple(types))

    # --- Page manipulation ---

    def inject_script(self, script: str) -> "TakeOptions":
        """Inline JavaScript or a script URL."""
        return self._with(inject_script=script)

    def inject_style(self, style: str) -> "TakeOptions":
        return self._with(inject_style=style)

    def click(self, selector: str) -> "TakeOptions":
        return self._with(click=selector)

    def hide(self, selectors: Sequence[str]) -> "TakeOptions":
        return self._with(hide=tuple(selectors))

    def remove(self, selectors: Sequence[str]) -> "TakeOptions":
        return self._with(remove=tuple(selectors))

    # --- Browser emulation ---

    def dark_mode(self, value: bool = True) -> "TakeOptions":
        return self._with(dark_mode=value)

    def reduced_motion(self, value: bool = True) -> "TakeOptions":
        return self._with(reduced_motion=value)

    def media_type(self, value: MediaType) -> "TakeOptions":
        return self._with(media_type=value)

    def user_agent(self, value: str) -> "TakeOptions":
        return self._with(user_agent=value)

    def timezone(self, value: str) -> "TakeOptions":
        """IANA timezone name."""
        return self._with(timezone=value)

    def locale(self, value: str) -> "TakeOptions":
        """BCP 47 locale tag."""
        return self._with(locale=value)

    def geolocation(self, latitude: float, longitude: float, accuracy: float | None = None) -> "TakeOptions":
        return self._with(geolocation=Geolocation(latitude, longitude, accuracy))

    # --- Network ---

    def headers(self, value: Mapping[str, str]) -> "TakeOptions":
        return self._with(headers=dict(value))

    def cookies(self, value: Sequence[Mapping[str, Any]]) -> "TakeOptions":
        return self._with(cookies=tuple(dict(c) for c in value))

    def auth_basic(self, username: str, password: str) -> "TakeOptions":
        return self._with(auth_basic=(username, password))

    def auth_bearer(self, token: str) -> "TakeOptions":
        return self._with(auth_bearer=token)

    def bypass_csp(self, value: bool = True) -> "TakeOptions":
        return self._with(bypass_csp=value)

    # --- Cache ---

    def cache_ttl(self, value: int) -> "TakeOptions":
        """Cache lifetime in seconds (3600-2592000)."""
        return self._with(cache_ttl=value)

    def cache_refresh(self, value: bool = True) -> "TakeOptions":
        return self._with(cache_refresh=value)

    # --- PDF ---

    def pdf_paper_size(self, value: PdfPaperSize) -> "TakeOptions":
        return self._with(pdf_paper_size=value)

    def pdf_width(self, value: str) -> "TakeOptions":
        return self._with(pdf_width=value)

    def pdf_height(self, value: str) -> "TakeOptions":
        return self._with(pdf_height=value)

    def pdf_landscape(self, value: bool = True) -> "TakeOptions":
        return self._with(pdf_landscape=value)

    def pdf_margin(self, value: str) -> "TakeOptions":
        return self._with(pdf_margin=value)

    def pdf_margin_top(self, value: str) -> "TakeOptions":
        return self._with(pdf_margin_top=value)

    def pdf_margin_right(self, value: str) -> "TakeOptions":
        return self._with(pdf_margin_right=value)

    def pdf_margin_bottom(self, value: str) -> "TakeOptions":
        return self._with(pdf_margin_bottom=value)

    def pdf_margin_left(self, value: str) -> "TakeOptions":
        return self._with(pdf_margin_left=value)

    def pdf_scale(self, value: float) -> "TakeOptions":
        return self._with(pdf_scale=value)

    def pdf_print_background(self, value: bool = True) -> "TakeOptions":
        return self._with(pdf_print_background=value)

    def pdf_page_ranges(self, value: str) -> "TakeOptions":
        """Page ranges such as ``"1-5, 8"``."""
        return self._with(pdf_page_ranges=value)

    def pdf_header(self, value: str) -> "TakeOptions":
        return self._with(pdf_header=value)

    def pdf_footer(self, value: str) -> "TakeOptions":
        return self._with(pdf_footer=value)

    def pdf_fit_one_page(self, value: bool = True) -> "TakeOptions":
        return self._with(pdf_fit_one_page=value)

    def pdf_prefer_css_page_size(self, value: bool = True) -> "TakeOptions":
        return self._with(pdf_prefer_css_page_size=value)

    # --- Storage (BYOS) ---

    def storage_enabled(self, value: bool = True) -> "TakeOptions":
        return self._with(storage_enabled=value)

    def storage_path(self, value: str) -> "TakeOptions":
        return self._with(storage_path=value)

    def storage_acl(self, value: StorageAcl) -> "TakeOptions":
        return self._with(storage_acl=value)

    # --- Output ---

    def _present(self) -> dict[str, Any]:
        return {
            f.name: getattr(self._config, f.name)
            for f in dataclasses.fields(self._config)
            if getattr(self._config, f.name) is not None
        }

    def to_config(self) -> TakeOptionsConfig:
        return self._config

    def to_params(self) -> dict[str, Any]:
        """JSON body for ``POST /screenshot`` (viewport, pdf and storage nested)."""
        params: dict[str, Any] = {}
        viewport: dict[str, Any] = {}
        pdf: dict[str, Any] = {}
        storage: dict[str, Any] = {}

        for name, value in self._present().items():
            if name in _VIEWPORT_FIELDS:
                viewport[name] = value
            elif name in _PDF_FIELDS:
                pdf[_PDF_FIELDS[name]] = value
            elif name in _STORAGE_FIELDS:
                storage[_STORAGE_FIELDS[name]] = value
            elif name == "geolocation":
                params[name] = value.to_dict()
            elif name == "auth_basic":
                params[name] = {"username": value[0], "password": value[1]}
            elif isinstance(value, tuple):
                params[name] = [dict(v) if isinstance(v, Mapping) else v for v in value]
            elif isinstance(value, Mapping):
                params[name] = dict(value)
            else:
                params[name] = value

        if viewport:
            params["viewport"] = viewport
        if pdf:
            params["pdf"] = pdf
        if storage:
            params["storage"] = storage
        return params

    def to_query_string(self) -> str:
        """Flat, URL-encoded query string for ``GET /screenshot``."""
        present = self._present()
        pairs: list[tuple[str, str]] = []
        for name in _QUERY_FIELDS:
            if name not in present:
                continue
            value = present[name]
            if isinstance(value, tuple):
                pairs.extend((name, str(v)) for v in value)
            else:
                pairs.append((name, canonical_value(value)))
        return urlencode(pairs)

    def to_signing_params(self) -> dict[str, Any]:
        """The subset of options a signed URL carries, unserialized."""
        present = self._present()
        return {name: present[name] for name in SIGNED_URL_FIELDS if name in present}
