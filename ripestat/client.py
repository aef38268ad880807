"""
RIPEstat Data API client

Issues one data call at a time and returns either the classified outcome
(`fetch`) or the decoded record (`query`).

API: https://stat.ripe.net/docs/02.data-api/
No authentication required. RIPEstat limits a single IP address to 8
concurrent requests; rircheck only ever has one in flight.
"""

from typing import Any, Dict

import requests

from ripestat.decoders import decode
from ripestat.endpoints import DEFAULT_BASE_URL, Params, build_url
from ripestat.response import CallOutcome, TransportError, parse_response
from ripestat.transport import DEFAULT_TIMEOUT_MS, HttpTransport
from utils.logger import get_logger


class RipeStatClient:
    """Query RIPEstat data calls and decode their payload"""

    def __init__(self, config: Dict[str, Any], transport=None, logger=None):
        self.config = config
        self.logger = logger or get_logger(config)

        ripestat_config = config.get("ripestat", {}) or {}
        self.base_url = ripestat_config.get("base_url") or DEFAULT_BASE_URL
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(
            timeout_ms=int(ripestat_config.get("timeout_ms", DEFAULT_TIMEOUT_MS)),
            retries=int(ripestat_config.get("retries", 0)),
            logger=self.logger,
        )

    def close(self):
        if self._owns_transport:
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def log_debug(self, message: str):
        if self.logger:
            self.logger.debug(f"[{self.__class__.__name__}] {message}")

    def log_warning(self, message: str):
        if self.logger:
            self.logger.warning(f"[{self.__class__.__name__}] {message}")

    def fetch(self, endpoint: str, params: Params = ()) -> CallOutcome:
        """GET a data call and classify the response"""
        url = build_url(endpoint, params, self.base_url)
        self.log_debug(f"GET {url}")

        try:
            response = self.transport.get(url)
        except requests.exceptions.RequestException as e:
            self.log_warning(f"{endpoint}: no response ({e})")
            return TransportError(f"GET: {e}", url)

        outcome = parse_response(response.status_code, response.body, url)
        if self.logger:
            self.logger.log_api_call(endpoint, url, outcome)
        return outcome

    def query(self, endpoint: str, params: Params = ()) -> Dict[str, Any]:
        """GET a data call and decode it into a record"""
        return decode(endpoint, self.fetch(endpoint, params))
