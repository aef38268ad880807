"""
Unit tests for the per-endpoint payload decoders
"""
import pytest

from ripestat.decoders import DECODERS, PeerConsistency, decode, list_tuples, map_tuples
from ripestat.response import ApplicationError, CallMeta, Success, Tag, TransportError
from tests.fixtures.ripestat_fixtures import (
    ANNOUNCED_3333,
    BGP_STATE_3333,
    CONSISTENCY_3333,
    NETWORK_1_1_1_1,
    RIS_PREFIXES_3333,
    RPKI_INVALID_LENGTH,
    RPKI_VALID,
    WHOIS_3333,
)

META = CallMeta(url="https://stat.ripe.net/data/x/data.json?resource=3333", http_status=200, status=Tag.OK)


def ok(data):
    return Success(data, META)


@pytest.mark.unit
class TestTupleHelpers:

    def test_list_tuples_keeps_key_order(self):
        items = [{"a": 1, "b": 2, "c": 3}, {"c": 6, "a": 4}]
        assert list_tuples(items, ["c", "a"]) == [(3, 1), (6, 4)]

    def test_list_tuples_missing_key_is_none(self):
        assert list_tuples([{"a": 1}], ["a", "b"]) == [(1, None)]

    def test_map_tuples_uses_first_key_as_primary(self):
        items = [{"peer": 1, "x": True, "y": False}]
        assert map_tuples(items, ["peer", "x", "y"]) == {1: (True, False)}

    def test_map_tuples_last_duplicate_wins(self):
        items = [{"peer": 1, "x": "first"}, {"peer": 1, "x": "second"}]
        assert map_tuples(items, ["peer", "x"]) == {1: ("second",)}

    def test_none_input(self):
        assert list_tuples(None, ["a"]) == []
        assert map_tuples(None, ["a"]) == {}


@pytest.mark.unit
class TestErrorPath:
    """Every endpoint treats failures alike"""

    @pytest.mark.parametrize("endpoint", ["announced-prefixes", "whois", "rpki-validation", "no-such-call"])
    def test_application_error(self, endpoint):
        record = decode(endpoint, ApplicationError("nodata", META))
        assert record == {"error": "nodata", "call": META}

    @pytest.mark.parametrize("endpoint", ["announced-prefixes", "bgp-state"])
    def test_transport_error(self, endpoint):
        record = decode(endpoint, TransportError("GET: timeout", "https://stat.ripe.net/x"))
        assert record == {"error": "GET: timeout", "call": "https://stat.ripe.net/x"}

    def test_missing_decoder(self):
        record = decode("abuse-contact-finder", ok({"abuse_contacts": []}))
        assert record["error"] == "missing decoder for endpoint abuse-contact-finder"
        assert record["call"] is META

    def test_malformed_payload_becomes_error_record(self):
        record = decode("announced-prefixes", ok({"prefixes": ["193.0.0.0/21"]}))
        assert "error" in record
        assert record["call"] is META

    def test_missing_key_becomes_error_record(self, monkeypatch):
        monkeypatch.setitem(DECODERS, "whois", lambda data: data["records"])
        record = decode("whois", ok({"authorities": ["ripe"]}))
        assert record["error"].startswith("unexpected whois payload")
        assert record["call"] is META


@pytest.mark.unit
class TestDecoders:

    def test_announced_prefixes(self):
        assert decode("announced-prefixes", ok(ANNOUNCED_3333)) == {
            "prefixes": ["193.0.0.0/21", "2001:67c:2e8::/48"]
        }

    def test_announced_prefixes_none(self):
        assert decode("announced-prefixes", ok({"prefixes": []})) == {"prefixes": []}

    def test_as_overview_passthrough(self):
        data = {"holder": "RIPE-NCC-AS - Reseaux IP Europeens", "announced": True, "type": "as"}
        assert decode("as-overview", ok(data)) == data

    def test_consistency_prefixes(self):
        record = decode("as-routing-consistency", ok(CONSISTENCY_3333))
        assert record["prefixes"] == {
            "193.0.0.0/21": (True, True, ["RIPE"]),
            "2001:67c:2e8::/48": (True, False, "-"),
            "193.0.10.0/23": (False, True, ["RIPE"]),
        }

    def test_consistency_peers_merge_both_sides(self):
        peers = decode("as-routing-consistency", ok(CONSISTENCY_3333))["peers"]

        assert set(peers) == {1299, 3356, 12859}
        assert peers[1299] == PeerConsistency(True, True, True, False)

    def test_consistency_one_sided_peers_are_kept(self):
        data = {
            "prefixes": [],
            "imports": [{"peer": "P1", "in_bgp": True, "in_whois": False}],
            "exports": [{"peer": "P2", "in_bgp": False, "in_whois": True}],
        }
        peers = decode("as-routing-consistency", ok(data))["peers"]

        assert peers["P1"] == PeerConsistency(imports_bgp=True, imports_whois=False)
        assert peers["P1"].exports_bgp is None and peers["P1"].exports_whois is None
        assert peers["P2"] == PeerConsistency(exports_bgp=False, exports_whois=True)
        assert peers["P2"].imports_bgp is None and peers["P2"].imports_whois is None

    def test_network_info(self):
        assert decode("network-info", ok(NETWORK_1_1_1_1)) == {
            "asn": "13335", "asns": ["13335"], "prefix": "1.1.1.0/24"
        }

    def test_network_info_without_asns_is_an_error(self):
        record = decode("network-info", ok({"asns": [], "prefix": None}))
        assert "no origin ASN" in record["error"]
        assert record["call"] is META

    @pytest.mark.parametrize("asns", [{"0": "13335"}, "13335"])
    def test_network_info_asns_not_a_list_is_an_error(self, asns):
        record = decode("network-info", ok({"asns": asns, "prefix": "1.1.1.0/24"}))
        assert "unexpected asns" in record["error"]
        assert record["call"] is META

    def test_rpki_validation(self):
        record = decode("rpki-validation", ok(RPKI_VALID))
        assert record == {"status": Tag.VALID, "roas": [("3333", "193.0.0.0/21", 21, "valid")]}

    def test_rpki_validation_unlisted_status(self):
        record = decode("rpki-validation", ok(RPKI_INVALID_LENGTH))
        assert record["status"] == "invalid_length"
        assert record["roas"] == [("3333", "2001:67c:2e8::/47", 47, "invalid_length")]

    def test_whois(self):
        record = decode("whois", ok(WHOIS_3333))
        assert record["authorities"] == ["ripe"]
        assert record["records"] == [[("aut-num", "AS3333"), ("as-name", "RIPE-NCC-AS"), ("source", "RIPE")]]
        assert record["irr"] == [[("route", "193.0.0.0/21"), ("origin", "3333")]]

    def test_bgp_state_unique_upstreams(self):
        record = decode("bgp-state", ok(BGP_STATE_3333))
        assert record == {"193.0.0.0/21": [1299, 12859], "2001:67c:2e8::/48": []}

    def test_bgp_state_path_not_a_list_is_skipped(self):
        data = {"bgp_state": [
            {"target_prefix": "193.0.0.0/21", "path": {"a": 1299, "b": 3333}},
            {"target_prefix": "193.0.0.0/21", "path": [1299, 3333]},
        ]}
        assert decode("bgp-state", ok(data)) == {"193.0.0.0/21": [1299]}

    def test_ris_prefixes_concatenates_families(self):
        assert decode("ris-prefixes", ok(RIS_PREFIXES_3333)) == {
            "originating": ["193.0.0.0/21", "2001:67c:2e8::/48"],
            "transiting": ["192.0.2.0/24"],
        }

    def test_ris_prefixes_missing_family(self):
        data = {"prefixes": {"v4": {"originating": ["193.0.0.0/21"]}}}
        assert decode("ris-prefixes", ok(data)) == {"originating": ["193.0.0.0/21"], "transiting": []}
