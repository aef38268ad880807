"""
Per-endpoint decoders for the RIPEstat `data` payload

Each decoder takes the `data` object of a successful call and returns a
dict. Errors are never decoded: they become `{"error": ..., "call": ...}`
for every endpoint alike.
"""

from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from ripestat import endpoints
from ripestat.response import ApplicationError, CallOutcome, TransportError, to_tag


class DecodeError(ValueError):
    """Payload is well-formed JSON but cannot produce a record"""


class PeerConsistency(NamedTuple):
    """Import/export registration of one peer. A side the peer is absent from is None."""
    imports_bgp: Optional[bool] = None
    imports_whois: Optional[bool] = None
    exports_bgp: Optional[bool] = None
    exports_whois: Optional[bool] = None


def list_tuples(items: Optional[Iterable[Dict[str, Any]]], keys: Sequence[str]) -> List[Tuple]:
    """Turn a list of dicts into a list of tuples of the selected keys, in order"""
    return [tuple(item.get(k) for k in keys) for item in (items or [])]


def map_tuples(items: Optional[Iterable[Dict[str, Any]]], keys: Sequence[str]) -> Dict[Any, Tuple]:
    """
    Turn a list of dicts into a dict of tuples.

    The first key is the primary key; the remaining keys make up the tuple.
    A repeated primary key overwrites the earlier entry.
    """
    primary, rest = keys[0], keys[1:]
    return {item.get(primary): tuple(item.get(k) for k in rest) for item in (items or [])}


def decode_announced(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"prefixes": [p.get("prefix") for p in data.get("prefixes") or []]}


def decode_as_overview(data: Dict[str, Any]) -> Dict[str, Any]:
    return data


def decode_consistency(data: Dict[str, Any]) -> Dict[str, Any]:
    # irr_sources is "-" instead of a list when the prefix is not in whois
    prefixes = map_tuples(data.get("prefixes"), ["prefix", "in_bgp", "in_whois", "irr_sources"])
    imports = map_tuples(data.get("imports"), ["peer", "in_bgp", "in_whois"])
    exports = map_tuples(data.get("exports"), ["peer", "in_bgp", "in_whois"])

    peers = {}
    for peer in list(imports) + [p for p in exports if p not in imports]:
        imp = imports.get(peer, (None, None))
        exp = exports.get(peer, (None, None))
        peers[peer] = PeerConsistency(imp[0], imp[1], exp[0], exp[1])

    return {"prefixes": prefixes, "peers": peers}


def decode_network(data: Dict[str, Any]) -> Dict[str, Any]:
    asns = data.get("asns") or []
    if not isinstance(asns, list):
        raise DecodeError(f"unexpected asns in network-info payload: {asns!r}")
    if not asns:
        raise DecodeError(f"no origin ASN found for {data.get('prefix')!r}")
    return {"asn": asns[0], "asns": asns, "prefix": data.get("prefix")}


def decode_rpki(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "status": to_tag(data.get("status")),
        "roas": list_tuples(data.get("validating_roas"), ["origin", "prefix", "max_length", "validity"]),
    }


def decode_whois(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "authorities": data.get("authorities"),
        "records": [list_tuples(r, ["key", "value"]) for r in data.get("records") or []],
        "irr": [list_tuples(r, ["key", "value"]) for r in data.get("irr_records") or []],
    }


def decode_bgp_state(data: Dict[str, Any]) -> Dict[str, Any]:
    """prefix -> upstream ASNs, the upstream being the next-to-last hop of each path"""
    upstreams: Dict[str, List] = {}
    for route in data.get("bgp_state") or []:
        seen = upstreams.setdefault(route.get("target_prefix"), [])
        path = route.get("path") or []
        if isinstance(path, list) and len(path) >= 2 and path[-2] not in seen:
            seen.append(path[-2])
    return upstreams


def decode_ris_prefixes(data: Dict[str, Any]) -> Dict[str, Any]:
    prefixes = data.get("prefixes") or {}
    v4 = prefixes.get("v4") or {}
    v6 = prefixes.get("v6") or {}
    return {
        "originating": list(v4.get("originating") or []) + list(v6.get("originating") or []),
        "transiting": list(v4.get("transiting") or []) + list(v6.get("transiting") or []),
    }


DECODERS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    endpoints.ANNOUNCED_PREFIXES: decode_announced,
    endpoints.AS_OVERVIEW: decode_as_overview,
    endpoints.AS_ROUTING_CONSISTENCY: decode_consistency,
    endpoints.NETWORK_INFO: decode_network,
    endpoints.RPKI_VALIDATION: decode_rpki,
    endpoints.WHOIS: decode_whois,
    endpoints.BGP_STATE: decode_bgp_state,
    endpoints.RIS_PREFIXES: decode_ris_prefixes,
}


def decode(endpoint: str, outcome: CallOutcome) -> Dict[str, Any]:
    """
    Decode the outcome of a call to `endpoint` into a record.

    Args:
        endpoint: data call name the request was issued for
        outcome: result of parse_response, or a TransportError

    Returns:
        The endpoint specific record, or an error record:
            - {"error": reason, "call": CallMeta} for application errors
            - {"error": reason, "call": url} for transport errors
    """
    if isinstance(outcome, TransportError):
        return {"error": outcome.reason, "call": outcome.url}
    if isinstance(outcome, ApplicationError):
        return {"error": outcome.reason, "call": outcome.call}

    decoder = DECODERS.get(endpoint)
    if decoder is None:
        return {"call": outcome.call, "error": f"missing decoder for endpoint {endpoint}"}

    try:
        return decoder(outcome.data)
    except DecodeError as e:
        return {"error": str(e), "call": outcome.call}
    except (AttributeError, TypeError, IndexError, KeyError) as e:
        return {"error": f"unexpected {endpoint} payload: {e}", "call": outcome.call}
