"""
RIPEstat data call catalog

Data calls live under https://stat.ripe.net/data/<name>/data.json and take
their parameters as a plain query string.
"""

from typing import Iterable, Mapping, Tuple, Union

DEFAULT_BASE_URL = "https://stat.ripe.net/data"

ANNOUNCED_PREFIXES = "announced-prefixes"
AS_OVERVIEW = "as-overview"
AS_ROUTING_CONSISTENCY = "as-routing-consistency"
NETWORK_INFO = "network-info"
RPKI_VALIDATION = "rpki-validation"
WHOIS = "whois"
BGP_STATE = "bgp-state"
RIS_PREFIXES = "ris-prefixes"

ENDPOINTS = (
    ANNOUNCED_PREFIXES,
    AS_OVERVIEW,
    AS_ROUTING_CONSISTENCY,
    NETWORK_INFO,
    RPKI_VALIDATION,
    WHOIS,
    BGP_STATE,
    RIS_PREFIXES,
)

Params = Union[Mapping[str, object], Iterable[Tuple[str, object]]]


def _pairs(params: Params):
    if isinstance(params, Mapping):
        return list(params.items())
    return list(params)


def build_url(name: str, params: Params = (), base_url: str = DEFAULT_BASE_URL) -> str:
    """
    Build the data.json URL for a data call.

    Parameters are joined in the order given, exactly as supplied. Values
    are not validated or encoded; a bad value only shows up as an error
    reported by RIPEstat.

    >>> build_url("rpki-validation", [("resource", "3333"), ("prefix", "193.0.0.0/21")])
    'https://stat.ripe.net/data/rpki-validation/data.json?resource=3333&prefix=193.0.0.0/21'
    """
    query = "&".join(f"{k}={v}" for k, v in _pairs(params))
    return f"{base_url.rstrip('/')}/{name}/data.json?{query}"


def methodology_url(name: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """URL of the human readable methodology page for a data call"""
    return f"{base_url.rstrip('/')}/{name}/meta/methodology"
