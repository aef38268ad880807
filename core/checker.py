"""
RIR registration check
Runs the data calls for one resource in sequence and summarizes them
"""

from typing import Any, Dict, List, Optional

from core import context as ctxmod
from core.api import RirApi
from core.context import ResourceContext, first_valid_roa, new_context, roa_valid
from core.resolver import resolve


def _records(ctx: ResourceContext, call_type: str, key) -> Dict[str, Any]:
    record = ctx.record(call_type, key)
    if not isinstance(record, dict) or "error" in record:
        return {}
    return record


def check(resource: str, api: RirApi, upstreams: bool = False) -> ResourceContext:
    """
    Check the registration of the AS behind `resource`.

    Steps, in order, each using what the previous ones found:
        1. resolve the resource to an ASN
        2. announced prefixes
        3. rpki-validation of every announced prefix
        4. BGP/WHOIS routing consistency
        5. whois
        6. bgp-state, when `upstreams` is set

    A failing step leaves an error record in its slot; later steps still run.

    Raises:
        InvalidArgument: the resource does not resolve to an ASN
    """
    logger = api.client.logger
    asn = resolve(resource, api)
    ctx = new_context(asn, resource=resource, upstreams=upstreams)

    logger.log_check_step("announced", asn)
    ctx = api.announced(ctx, asn)

    prefixes = _records(ctx, ctxmod.ANNOUNCED, asn).get("prefixes") or []
    logger.log_check_step("roa", f"{len(prefixes)} prefixes")
    for prefix in prefixes:
        ctx = api.roa(ctx, asn, prefix)

    logger.log_check_step("consistency", asn)
    ctx = api.consistency(ctx, asn)

    logger.log_check_step("whois", asn)
    ctx = api.whois(ctx, asn)

    if upstreams:
        logger.log_check_step("bgp_state", asn)
        ctx = api.bgp_state(ctx, asn)

    return ctx


def errors(ctx: ResourceContext) -> List[Dict[str, Any]]:
    """All error records in the context, with their call type and key"""
    found = []
    for call_type, results in ctx.calls.items():
        for key, record in results.items():
            if isinstance(record, dict) and "error" in record:
                found.append({"call_type": call_type, "resource": key, "error": record["error"]})
    return found


def summarize(ctx: ResourceContext) -> List[Dict[str, Any]]:
    """
    One row per prefix: announced ones first, then the ones only known to WHOIS.

    Columns: asn, prefix, bgp, whois, roa, roas, matching_roa, max_length, upstreams.
    `bgp` and `whois` are None when routing consistency is unavailable.
    """
    asn = ctx.asn
    announced = _records(ctx, ctxmod.ANNOUNCED, asn).get("prefixes") or []
    consistency = _records(ctx, ctxmod.CONSISTENCY, asn).get("prefixes") or {}
    bgp_state = _records(ctx, ctxmod.BGP_STATE, asn)

    # entries without a prefix are stored under None
    whois_only = [p for p in consistency if p is not None and p not in announced]
    prefixes = list(announced) + sorted(whois_only, key=str)

    rows = []
    for prefix in prefixes:
        in_bgp, in_whois = (consistency.get(prefix) or (None, None, None))[:2]
        roa_record = _records(ctx, ctxmod.ROA, (asn, prefix))
        match: Optional[tuple] = first_valid_roa(ctx, asn, prefix)
        rows.append({
            "asn": asn,
            "prefix": prefix,
            "bgp": in_bgp,
            "whois": in_whois,
            "roa": roa_valid(ctx, asn, prefix),
            "roas": len(roa_record.get("roas") or []),
            "matching_roa": f"AS{match[0]} {match[1]}" if match else None,
            "max_length": match[2] if match else None,
            "upstreams": bgp_state.get(prefix) or [],
        })
    return rows
