"""HTTP adapter – RetryingHttpClient (tenacity-backed)."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from renderscreenshot.adapters.http.client import HttpxHttpClient, ResponseType
from renderscreenshot.config.settings import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from renderscreenshot.kernel.errors import RenderScreenshotError
from renderscreenshot.observability.logging import get_logger

logger = get_logger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, RenderScreenshotError) and exc.retryable


class RetryingHttpClient(HttpxHttpClient):
    """HTTP client that retries rate limits, timeouts and server-side failures.

    A ``Retry-After`` sent by the server wins over the exponential backoff,
    capped at *max_delay*. Non-retryable errors (4xx other than 429) raise
    on the first attempt.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 2,
        *,
        base_delay: float = 0.5,
        max_delay: float = 30.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        **kwargs: Any,
    ) -> None:
        super().__init__(api_key, base_url, timeout, **kwargs)
        self._max_retries = max_retries
        self._max_delay = max_delay
        self._backoff = wait_exponential(multiplier=base_delay, max=max_delay)
        self._sleep = sleep

    def _wait(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, RenderScreenshotError) and exc.retry_after is not None:
            return float(min(exc.retry_after, self._max_delay))
        return self._backoff(retry_state)

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.info(
            "api_retry",
            attempt=retry_state.attempt_number,
            code=getattr(exc, "code", None),
            delay=retry_state.next_action.sleep if retry_state.next_action else None,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        response_type: ResponseType = "json",
    ) -> Any:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_retries + 1),
            wait=self._wait,
            retry=retry_if_exception(_is_retryable),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        result: Any = None
        async for attempt in retrying:
            with attempt:
                result = await super()._request(
                    method, path, body=body, response_type=response_type
                )
        return result


__all__ = ["RetryingHttpClient"]
