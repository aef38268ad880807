"""
End-to-end tests of the check workflow against canned RIPEstat responses
"""
import pytest
import requests

from core.checker import check, errors, summarize
from core.context import roa_valid
from ripestat.response import Tag
from utils.error_handler import InvalidArgument
from tests.fixtures.ripestat_fixtures import (
    ANNOUNCED_3333,
    RPKI_INVALID_LENGTH,
    RPKI_VALID,
    ripestat_body,
    url_for,
)


@pytest.mark.unit
class TestCheck:

    def test_calls_are_issued_in_order(self, api, as3333_transport):
        check("AS3333", api)

        assert as3333_transport.requested == [
            url_for("announced-prefixes", "resource=3333"),
            url_for("rpki-validation", "resource=3333&prefix=193.0.0.0/21"),
            url_for("rpki-validation", "resource=3333&prefix=2001:67c:2e8::/48"),
            url_for("as-routing-consistency", "resource=3333"),
            url_for("whois", "resource=3333"),
        ]

    def test_roa_results(self, api, as3333_transport):
        ctx = check("3333", api)

        assert set(ctx.get("roa")) == {("3333", "193.0.0.0/21"), ("3333", "2001:67c:2e8::/48")}
        assert ctx.record("roa", ("3333", "193.0.0.0/21"))["status"] is Tag.VALID
        assert ctx.record("roa", ("3333", "2001:67c:2e8::/48"))["status"] == "invalid_length"
        assert roa_valid(ctx, "3333", "193.0.0.0/21") is True
        assert roa_valid(ctx, "3333", "2001:67c:2e8::/48") is False

    def test_only_announced_and_roa(self, api, fake_transport):
        fake_transport.add(url_for("announced-prefixes", "resource=3333"),
                           ripestat_body("announced-prefixes", ANNOUNCED_3333))
        fake_transport.add(url_for("rpki-validation", "resource=3333&prefix=193.0.0.0/21"),
                           ripestat_body("rpki-validation", RPKI_VALID))
        fake_transport.add(url_for("rpki-validation", "resource=3333&prefix=2001:67c:2e8::/48"),
                           ripestat_body("rpki-validation", RPKI_INVALID_LENGTH))

        ctx = check("AS3333", api)

        assert len(ctx.get("roa")) == 2
        assert roa_valid(ctx, "3333", "193.0.0.0/21") is True
        assert roa_valid(ctx, "3333", "2001:67c:2e8::/48") is False
        # consistency and whois had no canned response, but were still tried and stored
        assert ctx.record("consistency", "3333")["error"].startswith("GET: ")
        assert ctx.record("whois", "3333")["error"].startswith("GET: ")

    def test_failed_consistency_does_not_stop_whois(self, api, as3333_transport):
        as3333_transport.fail(url_for("as-routing-consistency", "resource=3333"),
                              requests.exceptions.ReadTimeout("timed out"))

        ctx = check("3333", api)

        assert "error" in ctx.record("consistency", "3333")
        assert ctx.record("whois", "3333")["authorities"] == ["ripe"]
        assert [e["call_type"] for e in errors(ctx)] == ["consistency"]

    def test_failed_announced_skips_roa(self, api, as3333_transport):
        as3333_transport.add(url_for("announced-prefixes", "resource=3333"), b"{}")

        ctx = check("3333", api)

        assert ctx.record("announced", "3333")["error"] == "nodata"
        assert ctx.get("roa") == {}
        assert "prefixes" in ctx.record("consistency", "3333")

    def test_upstreams(self, api, as3333_transport):
        ctx = check("3333", api, upstreams=True)

        assert as3333_transport.requested[-1] == url_for("bgp-state", "resource=3333")
        assert ctx.record("bgp_state", "3333")["193.0.0.0/21"] == [1299, 12859]
        assert ctx.opts["upstreams"] is True

    def test_unresolvable_resource(self, api, fake_transport):
        with pytest.raises(InvalidArgument):
            check("not-a-resource", api)


@pytest.mark.unit
class TestSummarize:

    def test_rows(self, api, as3333_transport):
        rows = summarize(check("AS3333", api, upstreams=True))

        assert [r["prefix"] for r in rows] == ["193.0.0.0/21", "2001:67c:2e8::/48", "193.0.10.0/23"]
        first, second, whois_only = rows

        assert first == {
            "asn": "3333",
            "prefix": "193.0.0.0/21",
            "bgp": True,
            "whois": True,
            "roa": True,
            "roas": 1,
            "matching_roa": "AS3333 193.0.0.0/21",
            "max_length": 21,
            "upstreams": [1299, 12859],
        }
        assert second["whois"] is False
        assert second["roa"] is False
        assert second["matching_roa"] is None
        assert whois_only["bgp"] is False
        assert whois_only["roas"] == 0

    def test_rows_without_consistency(self, api, as3333_transport):
        as3333_transport.fail(url_for("as-routing-consistency", "resource=3333"),
                              requests.exceptions.ConnectionError("refused"))

        rows = summarize(check("3333", api))

        assert len(rows) == 2
        assert rows[0]["bgp"] is None and rows[0]["whois"] is None

    def test_consistency_entry_without_prefix_is_skipped(self, api, as3333_transport):
        data = {
            "prefixes": [
                {"prefix": "193.0.10.0/23", "in_bgp": False, "in_whois": True, "irr_sources": ["RIPE"]},
                {"in_bgp": False, "in_whois": True, "irr_sources": ["RIPE"]},
            ],
            "imports": [],
            "exports": [],
        }
        as3333_transport.add(url_for("as-routing-consistency", "resource=3333"),
                             ripestat_body("as-routing-consistency", data))

        rows = summarize(check("3333", api))

        assert [r["prefix"] for r in rows] == ["193.0.0.0/21", "2001:67c:2e8::/48", "193.0.10.0/23"]
