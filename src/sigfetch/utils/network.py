"""Network utilities with rate limiting and retries"""

import time
from typing import Any

import httpx

from sigfetch.utils.logging import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """Sliding-window rate limiter"""

    def __init__(self, max_requests: int, time_window: float):
        self.max_requests = max_requests
        self.time_window = time_window
        self.requests: list[float] = []

    def wait_if_needed(self) -> None:
        """Block until another request fits in the window"""
        now = time.time()
        self.requests = [t for t in self.requests if now - t < self.time_window]

        if len(self.requests) >= self.max_requests:
            sleep_time = self.time_window - (now - self.requests[0])
            if sleep_time > 0:
                logger.debug("Rate limit reached, sleeping %.2fs", sleep_time)
                time.sleep(sleep_time)
            now = time.time()
            self.requests = [t for t in self.requests if now - t < self.time_window]

        self.requests.append(now)


class HTTPClient:
    """HTTP client with rate limiting and retry on server errors"""

    def __init__(
        self,
        base_url: str | None = None,
        rate_limit: int = 60,
        time_window: float = 60.0,
        timeout: float = 30.0,
        max_retries: int = 3,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.rate_limiter = RateLimiter(rate_limit, time_window)
        client_kwargs: dict[str, Any] = {"timeout": timeout, "follow_redirects": True}
        if base_url:
            client_kwargs["base_url"] = base_url
        self.client = httpx.Client(**client_kwargs)

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        attempts = max(1, self.max_retries)
        last_error: Exception | None = None

        for attempt in range(attempts):
            self.rate_limiter.wait_if_needed()
            try:
                response = getattr(self.client, method)(url, **kwargs)
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                # Client errors are not worth retrying
                if e.response.status_code < 500:
                    raise
                last_error = e
            except httpx.RequestError as e:
                last_error = e

            if attempt < attempts - 1:
                backoff = 2**attempt
                logger.debug(
                    "%s %s failed (attempt %d/%d), retrying in %ds",
                    method.upper(),
                    url,
                    attempt + 1,
                    attempts,
                    backoff,
                )
                time.sleep(backoff)

        if last_error is None:
            raise RuntimeError(f"{method.upper()} {url} was never attempted")
        raise last_error

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """GET request with retries"""
        return self._request("get", url, **kwargs)

    def close(self) -> None:
        """Close the underlying connection pool"""
        self.client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
