"""Core package for rircheck"""

from .context import (
    ResourceContext,
    new_context,
    store,
    is_announced,
    roa_valid,
    first_valid_roa,
)
from .api import RirApi
from .resolver import resolve, parse_asn
from .checker import check, summarize

__all__ = [
    "ResourceContext",
    "new_context",
    "store",
    "is_announced",
    "roa_valid",
    "first_valid_roa",
    "RirApi",
    "resolve",
    "parse_asn",
    "check",
    "summarize",
]
