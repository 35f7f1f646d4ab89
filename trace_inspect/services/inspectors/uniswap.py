"""
Uniswap Inspector

Classifies Uniswap-family calls in a transaction trace:
- addLiquidity on a router -> AddLiquidity (trace address kept for sandwich detection)
- swap on a pair, with the transfer in before it and the transfer out right
  after it -> Trade, both transfers pruned
- getReserves pre-checks and router quotes -> Prune

Flashswaps (swap with a callback payload) are skipped.

After the pass, a transaction that touched a new protocol without trading is
marked CHECKED (see heuristics.py).
"""

from typing import Callable, List, Optional, Tuple
import logging

from .base import (
    BaseInspector,
    Inspection,
    Classification,
    CallTrace,
    CallType,
    CallKind,
    Protocol,
    Transfer,
    AddLiquidity,
    Trade,
)
from .decoder import ProtocolCallDecoder, add_liquidity_args, pair_swap_args
from .heuristics import mark_early_revert
from .matching import Direction, find_transfer
from .protocols import identify_protocol

logger = logging.getLogger(__name__)

CallPredicate = Callable[[CallTrace], bool]


class UniswapInspector(BaseInspector):
    """
    Classification pass for Uniswap routers and pairs.

    Args:
        router_abi: Router ABI override
        pair_abi: Pair ABI override
        is_preflight: Pre-check predicate for static calls (pair getReserves by default)
        check: Guard-check predicate (router getAmountsOut/getAmountsIn by default)
        protocol_of: Maps a call and its decoded kind to a Protocol

    Raises:
        ValueError: If an ABI cannot be loaded or parsed
    """

    NAME = "uniswap"

    def __init__(self, router_abi: Optional[list] = None, pair_abi: Optional[list] = None,
                 is_preflight: Optional[CallPredicate] = None,
                 check: Optional[CallPredicate] = None,
                 protocol_of: Callable[[CallTrace, Optional[CallKind]], Protocol] = identify_protocol):
        self.decoder = ProtocolCallDecoder(router_abi=router_abi, pair_abi=pair_abi)
        self._is_preflight = is_preflight
        self._check = check
        self.protocol_of = protocol_of

    def is_preflight(self, call: CallTrace) -> bool:
        if self._is_preflight is not None:
            return self._is_preflight(call)
        return self.decoder.is_reserves_read(call.input)

    def check(self, call: CallTrace) -> bool:
        if self._check is not None:
            return self._check(call)
        return self.decoder.is_quote(call.input)

    def inspect(self, inspection: Inspection) -> None:
        num_protocols = len(inspection.protocols)
        # Lookups go through the snapshot, writes go to inspection.actions
        actions = list(inspection.actions)

        prune: List[int] = []
        has_trade = False

        for i, action in enumerate(actions):
            call = action.as_call()
            if call is None:
                continue

            decoded = self.decoder.decode_call(call.input)
            kind = decoded.kind if decoded is not None else None

            if kind == CallKind.ADD_LIQUIDITY:
                tokens, amounts = add_liquidity_args(decoded.params)
                inspection.actions[i] = Classification.known(
                    AddLiquidity(tokens=tokens, amounts=amounts),
                    call.trace_address,
                )
                logger.debug(f"[{i}] addLiquidity {tokens}")

            elif kind == CallKind.SWAP:
                swap = pair_swap_args(decoded.params)
                if swap.is_flashswap:
                    logger.warning(f"Flashswaps are not supported. {inspection.hash}")
                    continue

                inspection.protocols.add(self.protocol_of(call, kind))

                matched = self._match_transfers(actions, i)
                if matched is None:
                    logger.debug(f"[{i}] swap on {call.to} without surrounding transfers")
                    continue

                (idx_in, transfer_in), (idx_out, transfer_out) = matched
                # Merged from three nodes, so no single trace address applies
                inspection.actions[i] = Classification.known(Trade(t1=transfer_in, t2=transfer_out))
                has_trade = True
                prune.extend([idx_in, idx_out])
                logger.debug(f"[{i}] trade: transfers {idx_in} -> {idx_out}")

            elif (call.call_type == CallType.STATIC_CALL and self.is_preflight(call)) or self.check(call):
                inspection.protocols.add(self.protocol_of(call, kind))
                inspection.actions[i] = Classification.prune(call.trace_address)
                logger.debug(f"[{i}] guard check on {call.to} pruned")

        for idx in prune:
            inspection.actions[idx] = Classification.prune(inspection.actions[idx].trace_address)

        mark_early_revert(inspection, num_protocols, has_trade)

    @staticmethod
    def _match_transfers(actions: List[Classification], i: int
                         ) -> Optional[Tuple[Tuple[int, Transfer], Tuple[int, Transfer]]]:
        """
        Transfer into the pair: nearest Transfer before the swap, other known
        calls may sit in between (router architecture).
        Transfer out of the pair: must be the very next action.
        """
        transfer_in = find_transfer(actions, i - 1, Direction.BACKWARD, tolerant=True)
        if transfer_in is None:
            return None
        transfer_out = find_transfer(actions, i + 1, Direction.FORWARD, tolerant=False)
        if transfer_out is None:
            return None
        return transfer_in, transfer_out
