# src/xpayout/shared/rate_limiter.py
"""
Rate Limiter - Per-user Command Throttling

Sliding-window limiter used by the Telegram handlers so a single chat
cannot hammer the bot (and, through it, the exchange rate API).
A caller that exceeds its window is blocked for a cool-down period.

Files that USE this module:
- xpayout.adapters.telegram.handlers (rate_limiter and RATE_LIMITS for all commands)
- tests.test_rate_limiter (unit tests)

Files that this module USES:
- None (pure utility implementation)
"""
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Optional


@dataclass(frozen=True)
class RateLimitConfig:
    """Configuration for rate limiting."""
    max_requests: int
    time_window: int  # in seconds
    block_duration: int = 120


class RateLimiter:
    """In-memory sliding-window rate limiter keyed by an arbitrary identifier."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._blocked_until: Dict[str, float] = {}

    def _prune(self, identifier: str, config: RateLimitConfig, now: float) -> Deque[float]:
        hits = self._hits[identifier]
        cutoff = now - config.time_window
        while hits and hits[0] <= cutoff:
            hits.popleft()
        return hits

    def is_allowed(self, identifier: str, config: RateLimitConfig) -> bool:
        """
        Record a request and tell whether it may proceed.

        Args:
            identifier: Unique caller key (e.g. "calc:user:42")
            config: Limits to apply

        Returns:
            True if allowed, False if rate limited or blocked
        """
        now = self._clock()

        until = self._blocked_until.get(identifier)
        if until is not None:
            if now < until:
                return False
            del self._blocked_until[identifier]

        hits = self._prune(identifier, config, now)
        if len(hits) >= config.max_requests:
            self._blocked_until[identifier] = now + config.block_duration
            return False

        hits.append(now)
        return True

    def remaining(self, identifier: str, config: RateLimitConfig) -> int:
        """Number of requests still available in the current window."""
        hits = self._prune(identifier, config, self._clock())
        return max(0, config.max_requests - len(hits))

    def blocked_until(self, identifier: str) -> Optional[float]:
        """Clock value when the block on identifier ends, or None if not blocked."""
        return self._blocked_until.get(identifier)

    def reset(self, identifier: Optional[str] = None) -> None:
        """Forget history for one identifier, or for everyone."""
        if identifier is None:
            self._hits.clear()
            self._blocked_until.clear()
        else:
            self._hits.pop(identifier, None)
            self._blocked_until.pop(identifier, None)


# Global rate limiter instance
rate_limiter = RateLimiter()

# Predefined rate limit configurations
RATE_LIMITS = {
    "calc_command": RateLimitConfig(max_requests=20, time_window=60),  # 20 calculations per minute
    "info_command": RateLimitConfig(max_requests=30, time_window=60),  # 30 lookups per minute
}
