"""
HTTP transport for RIPEstat data calls

A thin wrapper around requests: one GET with a timeout, retried on timeouts
with the timeout doubled on every retry.
"""

from dataclasses import dataclass
from typing import Optional

import requests

DEFAULT_TIMEOUT_MS = 2000
USER_AGENT = "rircheck/0.1.0"


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: bytes


class HttpTransport:
    """GET with timeout (milliseconds) and a number of retries on timeout"""

    def __init__(self, timeout_ms: int = DEFAULT_TIMEOUT_MS, retries: int = 0,
                 session: Optional[requests.Session] = None, logger=None):
        self.timeout_ms = int(timeout_ms)
        self.retries = max(int(retries), 0)
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.logger = logger

    def close(self):
        """Close the session, unless it was handed in by the caller"""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def get(self, url: str) -> HttpResponse:
        """
        Fetch `url`.

        Raises:
            requests.RequestException: no response could be obtained, after
                all retries were used up
        """
        timeout_ms = self.timeout_ms
        attempt = 0
        while True:
            try:
                response = self.session.get(
                    url,
                    timeout=timeout_ms / 1000.0,
                    headers={"Accept": "application/json", "User-Agent": USER_AGENT},
                )
                return HttpResponse(response.status_code, response.content)
            except requests.exceptions.Timeout:
                if attempt >= self.retries:
                    raise
                attempt += 1
                timeout_ms *= 2
                if self.logger:
                    self.logger.warning(
                        f"Timeout on {url}, retry {attempt}/{self.retries} with {timeout_ms}ms"
                    )
