"""
Unit tests for the RIPEstat client
"""
import pytest
import requests

from ripestat.client import RipeStatClient
from ripestat.response import ApplicationError, Success, TransportError
from ripestat.transport import HttpTransport
from tests.fixtures.ripestat_fixtures import ANNOUNCED_3333, ripestat_body, url_for


@pytest.mark.unit
class TestRipeStatClient:

    def test_transport_built_from_config(self, test_config):
        client = RipeStatClient(test_config)

        assert isinstance(client.transport, HttpTransport)
        assert client.transport.timeout_ms == 500
        assert client.transport.retries == 0

    def test_config_values_may_be_strings(self):
        client = RipeStatClient({"ripestat": {"timeout_ms": "3000", "retries": "2"}})
        assert client.transport.timeout_ms == 3000
        assert client.transport.retries == 2
        assert client.base_url == "https://stat.ripe.net/data"

    def test_fetch_success(self, client, fake_transport):
        url = url_for("announced-prefixes", "resource=3333")
        fake_transport.add(url, ripestat_body("announced-prefixes", ANNOUNCED_3333))

        outcome = client.fetch("announced-prefixes", [("resource", "3333")])

        assert isinstance(outcome, Success)
        assert fake_transport.requested == [url]

    def test_fetch_without_response_is_transport_error(self, client, fake_transport):
        url = url_for("whois", "resource=3333")
        fake_transport.fail(url, requests.exceptions.Timeout("timed out"))

        outcome = client.fetch("whois", [("resource", "3333")])

        assert isinstance(outcome, TransportError)
        assert outcome.url == url
        assert outcome.reason.startswith("GET: ")
        assert not hasattr(outcome, "call")

    def test_fetch_bad_body_is_application_error(self, client, fake_transport):
        fake_transport.add(url_for("whois", "resource=3333"), b"not json", status_code=502)

        outcome = client.fetch("whois", [("resource", "3333")])

        assert isinstance(outcome, ApplicationError)
        assert outcome.reason == "json_decode"
        assert outcome.call.http_status == 502

    def test_query_decodes(self, client, fake_transport):
        fake_transport.add(url_for("announced-prefixes", "resource=3333"),
                           ripestat_body("announced-prefixes", ANNOUNCED_3333))

        assert client.query("announced-prefixes", [("resource", "3333")]) == {
            "prefixes": ["193.0.0.0/21", "2001:67c:2e8::/48"]
        }

    def test_query_unknown_endpoint(self, client, fake_transport):
        fake_transport.add(
            url_for("announced-prefix", "resource=3333"),
            ripestat_body("announced-prefix", {}, messages=[["info", "The data call does not exist."]]),
        )

        record = client.query("announced-prefix", [("resource", "3333")])

        assert record["error"] == "unknown API endpoint"
        assert record["call"].maturity == "unknown"

    def test_close_leaves_an_injected_transport_alone(self, client, fake_transport):
        with client:
            client.fetch("whois", [("resource", "3333")])
        assert fake_transport.requested == [url_for("whois", "resource=3333")]

    def test_close_closes_its_own_transport(self, test_config, monkeypatch):
        client = RipeStatClient(test_config)
        closed = []
        monkeypatch.setattr(client.transport, "close", lambda: closed.append(True))

        with client:
            pass
        assert closed == [True]
