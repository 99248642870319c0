"""
Rate limiting for the public storefront endpoints
Uses in-memory storage, so counters reset on restart and are per instance
"""
import time
import logging
from typing import Callable, Dict, List, Tuple
from collections import defaultdict

from fastapi import Request, HTTPException, status

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """
    In-memory rate limiter using sliding window algorithm.

    Keeps the timestamps of accepted requests per identifier and counts
    the ones that fall inside the trailing window. Rejected requests are
    not recorded.
    """

    def __init__(self, max_requests: int, window_seconds: int, clock: Callable[[], float] = time.time):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: Dict[str, List[float]] = defaultdict(list)
        # Clean up old entries periodically
        self._last_cleanup = clock()
        self._cleanup_interval = 60  # seconds

    def _cleanup_old_entries(self, now: float):
        """Remove identifiers with no timestamps left in the window"""
        # Only cleanup periodically to avoid overhead
        if now - self._last_cleanup < self._cleanup_interval:
            return

        cutoff = now - self.window_seconds

        for identifier in list(self._requests.keys()):
            self._requests[identifier] = [ts for ts in self._requests[identifier] if ts > cutoff]
            if not self._requests[identifier]:
                del self._requests[identifier]

        self._last_cleanup = now

    def is_allowed(self, identifier: str) -> Tuple[bool, int, int]:
        """
        Check if a request is allowed under the rate limit.

        Returns:
            Tuple of (is_allowed, remaining_requests, retry_after_seconds)
        """
        now = self._clock()
        self._cleanup_old_entries(now)

        window_start = now - self.window_seconds
        requests_in_window = [ts for ts in self._requests.get(identifier, []) if ts > window_start]

        if len(requests_in_window) >= self.max_requests:
            # Calculate when the oldest request in window will expire
            oldest_timestamp = min(requests_in_window)
            retry_after = int(oldest_timestamp + self.window_seconds - now) + 1
            self._requests[identifier] = requests_in_window
            return False, 0, retry_after

        requests_in_window.append(now)
        self._requests[identifier] = requests_in_window

        remaining = self.max_requests - len(requests_in_window)
        return True, remaining, 0

    def reset(self):
        self._requests.clear()


class FixedWindowRateLimiter:
    """
    Counter-with-reset-time limiter.

    The first request for an identifier (or the first after its reset
    time has passed) opens a window of window_seconds with count 1.
    """

    def __init__(self, max_requests: int, window_seconds: int, clock: Callable[[], float] = time.time):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        # {identifier: (count, reset_time)}
        self._entries: Dict[str, Tuple[int, float]] = {}
        self._last_cleanup = clock()
        self._cleanup_interval = 60  # seconds

    def _cleanup_expired_entries(self, now: float):
        """Drop identifiers whose window has already closed"""
        if now - self._last_cleanup < self._cleanup_interval:
            return

        for identifier, (_, reset_time) in list(self._entries.items()):
            if now > reset_time:
                del self._entries[identifier]

        self._last_cleanup = now

    def is_allowed(self, identifier: str) -> Tuple[bool, int, int]:
        """
        Returns:
            Tuple of (is_allowed, remaining_requests, retry_after_seconds)
        """
        now = self._clock()
        self._cleanup_expired_entries(now)
        entry = self._entries.get(identifier)

        if entry is None or now > entry[1]:
            self._entries[identifier] = (1, now + self.window_seconds)
            return True, self.max_requests - 1, 0

        count, reset_time = entry
        if count >= self.max_requests:
            return False, 0, int(reset_time - now) + 1

        self._entries[identifier] = (count + 1, reset_time)
        return True, self.max_requests - count - 1, 0

    def reset(self):
        self._entries.clear()


# Rate limit configurations, one limiter per endpoint family
contact_limiter = FixedWindowRateLimiter(max_requests=2, window_seconds=2 * 60)
newsletter_limiter = FixedWindowRateLimiter(max_requests=3, window_seconds=5 * 60)
preorder_limiter = FixedWindowRateLimiter(max_requests=5, window_seconds=10 * 60)
employee_login_limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=15 * 60)

ALL_LIMITERS = (contact_limiter, newsletter_limiter, preorder_limiter, employee_login_limiter)


def get_client_ip(request: Request) -> str:
    """Get the client IP, considering proxies"""
    # Take the first IP in the chain (original client)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    cf_ip = request.headers.get("CF-Connecting-IP")
    if cf_ip:
        return cf_ip.strip()

    if request.client:
        return request.client.host

    return "unknown"


def rate_limit(limiter, scope: str, message: str = "Too many requests. Please try again later."):
    """
    Dependency factory for applying a limiter to an endpoint.

    Usage:
        @router.post("/contact")
        async def submit(_: None = Depends(rate_limit(contact_limiter, "contact"))):
            pass
    """

    async def check(request: Request) -> None:
        client_ip = get_client_ip(request)
        is_allowed, remaining, retry_after = limiter.is_allowed(f"{scope}:{client_ip}")

        if not is_allowed:
            logger.warning(f"Rate limit hit for {scope} from {client_ip}")
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=message,
                headers={
                    "X-RateLimit-Limit": str(limiter.max_requests),
                    "X-RateLimit-Remaining": "0",
                    "Retry-After": str(retry_after),
                }
            )

    return check
