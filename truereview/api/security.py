"""
Request guards for the review API: API key check and per-client rate limit.
"""

import logging
import secrets
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional, Tuple

from fastapi import Header, HTTPException, Request, status

from truereview.config import settings

logger = logging.getLogger(__name__)

# Full sweep of idle clients once this many are tracked
SWEEP_THRESHOLD = 1024


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def verify_api_token(
    request: Request,
    api_key: Optional[str] = Header(None, alias=settings.api_token_header),
):
    """
    Require the configured API key when one is set.
    Without a configured key (local development) every request passes.
    """
    if not settings.api_token:
        if settings.is_production:
            logger.warning("API token not configured in production mode!")
        return None

    if not api_key or not secrets.compare_digest(api_key, settings.api_token):
        logger.warning(f"Rejected API key from {_client_host(request)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing or invalid API key. Provide {settings.api_token_header} header.",
            headers={"WWW-Authenticate": "ApiKey"},
        )
    return api_key


class RateLimiter:
    """
    Sliding-window request counter keyed by client address.
    Clients whose window has emptied are dropped, so memory tracks active clients only.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._hits

    def __len__(self) -> int:
        return len(self._hits)

    def _prune(self, key: str, window: float, now: float) -> Deque[float]:
        hits = self._hits.get(key)
        if hits is None:
            return deque()
        while hits and now - hits[0] >= window:
            hits.popleft()
        if not hits:
            del self._hits[key]
        return hits

    def sweep(self, window: float):
        """Drop every client with no requests inside the window."""
        now = self._clock()
        for key in list(self._hits):
            self._prune(key, window, now)

    def hit(self, key: str, limit: int, window: float) -> Tuple[bool, int, int]:
        """
        Record a request if the client is under its limit.

        Returns:
            (allowed, remaining, retry_after_seconds)
        """
        if len(self._hits) >= SWEEP_THRESHOLD:
            self.sweep(window)

        now = self._clock()
        hits = self._prune(key, window, now)
        if len(hits) >= limit:
            retry_after = int(window - (now - hits[0])) if hits else 0
            return False, 0, max(0, retry_after)

        self._hits.setdefault(key, hits).append(now)
        return True, limit - len(hits), 0

    def reset(self):
        self._hits.clear()


# Global rate limiter instance
rate_limiter = RateLimiter()


async def check_rate_limit(request: Request):
    """Per-IP rate limit; disabled when rate_limit_requests is 0."""
    limit = settings.rate_limit_requests
    if not limit:
        return

    client_ip = _client_host(request)
    allowed, remaining, retry_after = rate_limiter.hit(client_ip, limit, settings.rate_limit_window)

    request.state.rate_limit_remaining = remaining
    request.state.rate_limit_limit = limit

    if not allowed:
        logger.warning(f"Rate limit exceeded for {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Try again in {retry_after} seconds.",
            headers={
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(limit),
                "X-RateLimit-Remaining": "0",
            },
        )
