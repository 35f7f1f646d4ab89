"""
Protocol identification for Uniswap-family calls.

Maps a call's target (or caller) to the venue it belongs to. Pairs are not
listed individually: a pair is attributed through the router that calls it,
and anything unrecognized is an unknown Uniswap fork.
"""

from typing import Dict, Optional

from ...config.protocol_config import (
    UNISWAP_V2_ROUTER,
    UNISWAP_V2_ROUTER_01,
    UNISWAP_V2_FACTORY,
    UNISWAP_V3_ROUTER,
    UNISWAP_V3_ROUTER_02,
    UNISWAP_V3_FACTORY,
    SUSHISWAP_ROUTER,
    SUSHISWAP_FACTORY,
)
from .base import CallKind, CallTrace, Protocol

PROTOCOL_ADDRESSES: Dict[str, Protocol] = {
    UNISWAP_V2_ROUTER: Protocol.UNISWAP,
    UNISWAP_V2_ROUTER_01: Protocol.UNISWAP,
    UNISWAP_V2_FACTORY: Protocol.UNISWAP,
    UNISWAP_V3_ROUTER: Protocol.UNISWAP_V3,
    UNISWAP_V3_ROUTER_02: Protocol.UNISWAP_V3,
    UNISWAP_V3_FACTORY: Protocol.UNISWAP_V3,
    SUSHISWAP_ROUTER: Protocol.SUSHISWAP,
    SUSHISWAP_FACTORY: Protocol.SUSHISWAP,
}

# Pair-level calls: the target is a pool, so the caller is the better hint
PAIR_CALL_KINDS = {CallKind.SWAP}


def identify_protocol(call: CallTrace, kind: Optional[CallKind] = None) -> Protocol:
    """
    Args:
        call: The classified call
        kind: Decoded call shape, decides whether target or caller is tried first

    Returns:
        Protocol of the call, UNISWAPPY if neither address is known
    """
    if kind in PAIR_CALL_KINDS:
        candidates = (call.from_address, call.to)
    else:
        candidates = (call.to, call.from_address)

    for address in candidates:
        protocol = PROTOCOL_ADDRESSES.get(address.lower())
        if protocol is not None:
            return protocol
    return Protocol.UNISWAPPY
