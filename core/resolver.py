"""
Resource resolution

Turns what the user typed (AS3333, 3333, 193.0.0.1, 193.0.0.0/21) into
the AS number every further data call is made for.
"""

import re
from typing import Optional

from core import context as ctxmod
from core.api import RirApi
from core.context import new_context
from utils.error_handler import InvalidArgument

_AS_PREFIX = re.compile(r"^AS", re.IGNORECASE)
_DIGITS = re.compile(r"\d+", re.ASCII)


def invalid_arg(token: str) -> str:
    return f"expected an IP address, prefix or AS number, got: {token!r}"


def parse_asn(token: str) -> Optional[str]:
    """AS number in `token` as a digit string, or None if it is not one"""
    number = _AS_PREFIX.sub("", token.strip())
    if _DIGITS.fullmatch(number):
        return number
    return None


def resolve(token: str, api: RirApi) -> str:
    """
    Resolve `token` to an AS number.

    AS numbers are taken as is. Anything else is looked up with
    network-info and resolves to the first origin ASN found.

    Raises:
        InvalidArgument: the lookup failed or returned nothing usable
    """
    logger = api.client.logger

    asn = parse_asn(token)
    if asn is not None:
        logger.log_resolution(token, asn)
        return asn

    ctx = api.network(new_context(), token)
    net = ctx.record(ctxmod.NETWORK, token)

    if isinstance(net, dict) and net.get("error"):
        raise InvalidArgument(token, str(net["error"]))
    if not isinstance(net, dict) or not net.get("asn"):
        raise InvalidArgument(token, invalid_arg(token))

    asn = parse_asn(str(net["asn"]))
    if asn is None:
        raise InvalidArgument(token, invalid_arg(token))

    logger.log_resolution(token, asn)
    return asn
