"""
Classification of RIPEstat responses

Every data call answers with the same envelope:

- `status`: ok, error or maintenance
- `data_call_status`: supported, deprecated or development
- `data_call_name`, `version`
- `messages`: [[severity, text], ...]
- `data`: the payload itself

`parse_response` turns that envelope into one of three outcomes:
`Success`, `ApplicationError` or `TransportError`.
"""

import json
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Union


class Tag(str, Enum):
    """Known status words. Members compare equal to their plain string value."""
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"
    OK = "ok"
    SUPPORTED = "supported"
    DEPRECATED = "deprecated"
    MAINTENANCE = "maintenance"
    DEVELOPMENT = "development"
    VALID = "valid"
    INVALID = "invalid"
    INVALID_ASN = "invalid_asn"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


# Add new status words here, not in code.
STATUS_TAGS: Dict[str, Tag] = {
    "error": Tag.ERROR,
    "info": Tag.INFO,
    "warning": Tag.WARNING,
    "ok": Tag.OK,
    "supported": Tag.SUPPORTED,
    "deprecated": Tag.DEPRECATED,
    "maintenance": Tag.MAINTENANCE,
    "development": Tag.DEVELOPMENT,
    "valid": Tag.VALID,
    "invalid": Tag.INVALID,
    "invalid_asn": Tag.INVALID_ASN,
    "unknown": Tag.UNKNOWN,
}

UNKNOWN_ENDPOINT = "unknown API endpoint"

_MISSING_CALL = re.compile(r"data\s+call\s+does\s+not\s+exist", re.IGNORECASE)


def to_tag(text: Any) -> Union[Tag, str, None]:
    """
    Normalize a status string by its first word, case-insensitively.

    Words not in STATUS_TAGS come back as the lower-cased word itself.
    """
    if text is None:
        return None
    words = str(text).lower().split()
    if not words:
        return ""
    return STATUS_TAGS.get(words[0], words[0])


@dataclass(frozen=True)
class CallMeta:
    url: str
    http_status: Optional[int] = None
    status: Union[Tag, str, None] = None
    maturity: Union[Tag, str, None] = None
    version: Optional[str] = None
    info: Optional[str] = None
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "http_status": self.http_status,
            "status": self.status,
            "maturity": self.maturity,
            "version": self.version,
            "info": self.info,
            "name": self.name,
        }


@dataclass(frozen=True)
class Success:
    data: Dict[str, Any]
    call: CallMeta


@dataclass(frozen=True)
class ApplicationError:
    reason: str
    call: CallMeta


@dataclass(frozen=True)
class TransportError:
    """No response was obtained, so there is no call metadata."""
    reason: str
    url: str


CallOutcome = Union[Success, ApplicationError, TransportError]


def decode_messages(body: Dict[str, Any]) -> Dict[Any, str]:
    """Map severity -> text; anything malformed is skipped"""
    messages = body.get("messages")
    if not isinstance(messages, list):
        return {}

    decoded = {}
    for entry in messages:
        if isinstance(entry, (list, tuple)) and len(entry) == 2:
            severity, text = entry
            decoded[to_tag(severity)] = text
    return decoded


def _mentions_missing_call(body: Dict[str, Any]) -> bool:
    messages = body.get("messages")
    if not isinstance(messages, list):
        return False
    for entry in messages:
        if isinstance(entry, (list, tuple)) and len(entry) == 2:
            severity, text = entry
            if to_tag(severity) == Tag.INFO and _MISSING_CALL.search(str(text)):
                return True
    return False


def parse_response(http_status: Optional[int], body: Union[bytes, str], url: str) -> CallOutcome:
    """
    Classify a raw HTTP response from a data call.

    Transport failures never get here; the client turns them into a
    TransportError before any body exists.
    """
    minimal = CallMeta(url=url, http_status=http_status)

    try:
        decoded = json.loads(body)
    except (TypeError, ValueError):
        return ApplicationError("json_decode", minimal)

    if not isinstance(decoded, dict):
        return ApplicationError("nodata", minimal)

    data = decoded.get("data")
    if not isinstance(data, dict):
        return ApplicationError("nodata", minimal)

    if decoded.get("status") is None:
        return ApplicationError("nostatus", minimal)
    status = to_tag(decoded["status"])

    messages = decode_messages(decoded)
    maturity = decoded.get("data_call_status")
    meta = CallMeta(
        url=url,
        http_status=http_status,
        status=status,
        maturity=to_tag(maturity) if isinstance(maturity, str) else maturity,
        version=decoded.get("version"),
        info=messages.get(Tag.INFO),
        name=decoded.get("data_call_name"),
    )

    if status == Tag.ERROR:
        return ApplicationError(messages.get(Tag.ERROR) or "error", meta)

    # RIPEstat answers "ok" with empty data for a data call it does not know.
    if status == Tag.OK and data == {} and _mentions_missing_call(decoded):
        meta = replace(meta, status=Tag.ERROR, maturity=Tag.UNKNOWN)
        return ApplicationError(UNKNOWN_ENDPOINT, meta)

    return Success(data, meta)
