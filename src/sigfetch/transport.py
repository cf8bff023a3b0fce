"""HTTP transport backed by httpx"""

import httpx

from sigfetch.data.models import FetchResult
from sigfetch.interfaces import Transport
from sigfetch.utils.logging import get_logger
from sigfetch.utils.network import HTTPClient

logger = get_logger(__name__)


class HttpTransport(Transport):
    """Transport that reports HTTP and connection errors as failed fetches"""

    def __init__(self, client: HTTPClient | None = None):
        self.client = client or HTTPClient()

    def fetch(self, url: str) -> FetchResult:
        try:
            response = self.client.get(url)
        except httpx.HTTPStatusError as e:
            logger.warning("GET %s returned %d", url, e.response.status_code)
            return FetchResult(succeeded=False, status_code=e.response.status_code)
        except httpx.HTTPError as e:
            logger.warning("GET %s failed: %s", url, e)
            return FetchResult(succeeded=False)

        return FetchResult(succeeded=True, body=response.content, status_code=response.status_code)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *args) -> None:
        self.close()
