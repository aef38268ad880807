"""
Resource context

The context collects the decoded results of every data call made during
one check. Results live under a call type, then under the resource the
call was made for:

    ctx.calls["announced"]["3333"]            -> {"prefixes": [...]}
    ctx.calls["roa"][("3333", "193.0.0.0/21")] -> {"status": Tag.VALID, "roas": [...]}

A failed call is stored like any other result, as a record with an
`error` key, so readers check for that key before trusting a slot.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Hashable, Optional, Tuple

from ripestat.response import CallMeta, Tag

ANNOUNCED = "announced"
AS_OVERVIEW = "as_overview"
CONSISTENCY = "consistency"
NETWORK = "network"
ROA = "roa"
WHOIS = "whois"
BGP_STATE = "bgp_state"
RIS_PREFIXES = "ris_prefixes"

CALL_TYPES = (ANNOUNCED, AS_OVERVIEW, CONSISTENCY, NETWORK, ROA, WHOIS, BGP_STATE, RIS_PREFIXES)


@dataclass(frozen=True)
class ResourceContext:
    """Results of one check run; AS numbers are strings without the AS prefix"""
    asn: str = ""
    opts: Dict[str, Any] = field(default_factory=dict)
    calls: Dict[str, Dict[Hashable, Dict[str, Any]]] = field(default_factory=dict)

    def get(self, call_type: str) -> Dict[Hashable, Dict[str, Any]]:
        """All results for a call type (empty if never called)"""
        return self.calls.get(call_type, {})

    def record(self, call_type: str, key: Hashable) -> Optional[Dict[str, Any]]:
        return self.get(call_type).get(key)

    def to_dict(self) -> Dict[str, Any]:
        """JSON friendly rendering; roa keys become "asn prefix" strings"""
        calls = {}
        for call_type, results in self.calls.items():
            calls[call_type] = {
                " ".join(key) if isinstance(key, tuple) else str(key): to_plain(record)
                for key, record in results.items()
            }
        return {"asn": self.asn, "opts": to_plain(self.opts), **calls}


def to_plain(value: Any) -> Any:
    """Tags, call metadata and named tuples as plain JSON values"""
    if isinstance(value, CallMeta):
        return to_plain(value.to_dict())
    if isinstance(value, Tag):
        return value.value
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return {k: to_plain(v) for k, v in value._asdict().items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


def new_context(asn: str = "", **opts) -> ResourceContext:
    return ResourceContext(asn=asn, opts=dict(opts))


def store(ctx: ResourceContext, call_type: str, key: Hashable, record: Dict[str, Any]) -> ResourceContext:
    """
    Return a new context with `record` stored under call_type/key.

    An existing record in that slot is replaced, not merged. The given
    context is left untouched.
    """
    updated = dict(ctx.get(call_type))
    updated[key] = record
    return replace(ctx, calls={**ctx.calls, call_type: updated})


# Readers. These never raise: a missing or malformed slot reads as "no".

def is_announced(ctx: ResourceContext, asn: str, prefix: str) -> bool:
    """Check if `asn` announces `prefix`"""
    try:
        return prefix in ctx.calls[ANNOUNCED][asn]["prefixes"]
    except (AttributeError, KeyError, TypeError):
        return False


def roa_valid(ctx: ResourceContext, asn: str, prefix: str) -> bool:
    """Check whether RPKI validation of `prefix` originated by `asn` came out valid"""
    try:
        return ctx.calls[ROA][(asn, prefix)]["status"] == Tag.VALID
    except (AttributeError, KeyError, TypeError):
        return False


def first_valid_roa(ctx: ResourceContext, asn: str, prefix: str) -> Optional[Tuple]:
    """First (origin, prefix, max_length, validity) ROA that validates, if any"""
    try:
        for roa in ctx.calls[ROA][(asn, prefix)]["roas"]:
            if roa[3] == "valid":
                return roa
    except (AttributeError, IndexError, KeyError, TypeError):
        return None
    return None
