"""Application webhooks – optional replay protection.

Verification alone is stateless: a delivery captured inside the freshness
window verifies again if replayed. Callers that need at-most-once handling
hand a :class:`ReplayStore` to :class:`WebhookVerifier`.
"""
from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from renderscreenshot.kernel.time import Clock, SystemClock

__all__ = ["InMemoryReplayStore", "ReplayStore", "replay_key"]


def replay_key(timestamp: str, signature: str) -> str:
    """Identity of one delivery; the signature already covers the body."""
    return f"{timestamp}:{signature}"


@runtime_checkable
class ReplayStore(Protocol):
    """Port: remember deliveries that already verified."""

    def remember(self, key: str, expires_at: float) -> bool:
        """Record *key* until *expires_at*; return ``False`` if it was already present."""
        ...


class InMemoryReplayStore:
    """Process-local ReplayStore; entries are pruned once their window has passed."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._seen: dict[str, float] = {}
        self._lock = threading.Lock()

    def remember(self, key: str, expires_at: float) -> bool:
        now = self._clock.timestamp()
        with self._lock:
            self._prune(now)
            if key in self._seen:
                return False
            self._seen[key] = expires_at
            return True

    def _prune(self, now: float) -> None:
        expired = [k for k, exp in self._seen.items() if exp < now]
        for k in expired:
            del self._seen[k]

    def __len__(self) -> int:
        return len(self._seen)
