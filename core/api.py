"""
Context updating data calls

Each method queries one RIPEstat data call and returns a new context with
the decoded result stored under its own call type:

    announced     ctx.calls["announced"][asn]          {"prefixes": [...]}
    as_overview   ctx.calls["as_overview"][asn]        as returned by RIPEstat
    consistency   ctx.calls["consistency"][asn]        {"prefixes": {...}, "peers": {...}}
    network       ctx.calls["network"][resource]       {"asn", "asns", "prefix"}
    roa           ctx.calls["roa"][(asn, prefix)]      {"status", "roas"}
    whois         ctx.calls["whois"][resource]         {"authorities", "records", "irr"}
    bgp_state     ctx.calls["bgp_state"][resource]     {prefix: [upstream, ...]}
    ris_prefixes  ctx.calls["ris_prefixes"][asn]       {"originating", "transiting"}
"""

from typing import Any, Dict

from core import context as ctxmod
from core.context import ResourceContext, store
from ripestat import endpoints
from ripestat.client import RipeStatClient


class RirApi:
    """Data calls bound to a RipeStatClient"""

    def __init__(self, client: RipeStatClient):
        self.client = client

    @classmethod
    def from_config(cls, config: Dict[str, Any], transport=None) -> "RirApi":
        return cls(RipeStatClient(config, transport=transport))

    def announced(self, ctx: ResourceContext, asn: str) -> ResourceContext:
        """Prefixes announced by `asn`, as seen by RIS"""
        record = self.client.query(endpoints.ANNOUNCED_PREFIXES, [("resource", asn)])
        return store(ctx, ctxmod.ANNOUNCED, asn, record)

    def as_overview(self, ctx: ResourceContext, asn: str) -> ResourceContext:
        """Holder, block and announcement status of `asn`"""
        record = self.client.query(endpoints.AS_OVERVIEW, [("resource", asn)])
        return store(ctx, ctxmod.AS_OVERVIEW, asn, record)

    def consistency(self, ctx: ResourceContext, asn: str) -> ResourceContext:
        """
        Compare BGP against WHOIS for `asn`.

        prefixes: {prefix: (in_bgp, in_whois, irr_sources)}
        peers: {peer: PeerConsistency(imports_bgp, imports_whois, exports_bgp, exports_whois)}
        """
        record = self.client.query(endpoints.AS_ROUTING_CONSISTENCY, [("resource", asn)])
        return store(ctx, ctxmod.CONSISTENCY, asn, record)

    def network(self, ctx: ResourceContext, resource: str) -> ResourceContext:
        """
        Most specific prefix covering `resource` and the ASNs originating it.

        `asn` in the stored record is the first of `asns`.
        """
        record = self.client.query(endpoints.NETWORK_INFO, [("resource", resource)])
        return store(ctx, ctxmod.NETWORK, resource, record)

    def roa(self, ctx: ResourceContext, asn: str, prefix: str) -> ResourceContext:
        """
        RPKI validation of `prefix` originated by `asn`.

        roas: [(origin, prefix, max_length, validity)] where validity is one of
        "valid", "invalid_asn", "invalid_length" or "unknown".
        """
        record = self.client.query(endpoints.RPKI_VALIDATION, [("resource", asn), ("prefix", prefix)])
        return store(ctx, ctxmod.ROA, (asn, prefix), record)

    def whois(self, ctx: ResourceContext, resource: str) -> ResourceContext:
        """WHOIS and IRR objects for an ASN, address or prefix, as (key, value) lists"""
        record = self.client.query(endpoints.WHOIS, [("resource", resource)])
        return store(ctx, ctxmod.WHOIS, resource, record)

    def bgp_state(self, ctx: ResourceContext, resource: str) -> ResourceContext:
        """Upstream neighbours per prefix, from the RIS BGP state"""
        record = self.client.query(endpoints.BGP_STATE, [("resource", resource)])
        return store(ctx, ctxmod.BGP_STATE, resource, record)

    def ris_prefixes(self, ctx: ResourceContext, asn: str) -> ResourceContext:
        """Prefixes originated and transited by `asn`, v4 and v6 combined"""
        record = self.client.query(
            endpoints.RIS_PREFIXES, [("resource", asn), ("list_prefixes", "true")]
        )
        return store(ctx, ctxmod.RIS_PREFIXES, asn, record)
