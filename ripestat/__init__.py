"""
RIPEstat Data API access for rircheck.

- endpoints: URL construction for data calls
- response: classification of raw responses into call outcomes
- decoders: per-endpoint normalization of the `data` payload
- transport: HTTP GET with timeout and retries
- client: fetch + parse + decode in one call
"""

from ripestat.endpoints import ENDPOINTS, build_url, methodology_url
from ripestat.response import (
    Tag,
    CallMeta,
    Success,
    ApplicationError,
    TransportError,
    parse_response,
    to_tag,
)
from ripestat.decoders import decode
from ripestat.transport import HttpTransport, HttpResponse
from ripestat.client import RipeStatClient

__all__ = [
    "ENDPOINTS",
    "build_url",
    "methodology_url",
    "Tag",
    "CallMeta",
    "Success",
    "ApplicationError",
    "TransportError",
    "parse_response",
    "to_tag",
    "decode",
    "HttpTransport",
    "HttpResponse",
    "RipeStatClient",
]
