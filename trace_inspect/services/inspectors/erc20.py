"""
ERC20 Inspector

Turns token transfer calls into Transfer actions so protocol inspectors can
pair them with swaps:
- transfer(to, amount): sender is the caller
- transferFrom(from, to, amount)

The token is the call's target. Proxied tokens (USDC and friends) show up
twice: the CALL to the proxy and a DELEGATECALL into the implementation with
the same input. Only the first becomes a Transfer; the delegated copy is pruned.
"""

from typing import Optional
import logging

from ...config.protocol_config import ERC20_SELECTORS
from .abis import ERC20
from .base import (
    BaseInspector,
    Inspection,
    Classification,
    CallTrace,
    CallType,
    Transfer,
)
from .decoder import ContractCallDecoder

logger = logging.getLogger(__name__)


class ERC20Inspector(BaseInspector):
    """Classifies ERC20 transfer/transferFrom calls."""

    NAME = "erc20"

    def __init__(self, abi: Optional[list] = None):
        self.decoder = ContractCallDecoder(ERC20, abi, list(ERC20_SELECTORS.values()))

    def decode_transfer(self, call: CallTrace) -> Optional[Transfer]:
        """Decode a transfer call, None for anything else"""
        fn_name = ERC20_SELECTORS.get(call.selector)
        if fn_name is None:
            return None

        params = self.decoder.decode(fn_name, call.input)
        if params is None:
            return None

        if fn_name == "transfer":
            sender = call.from_address
        else:
            sender = str(params['from']).lower()

        return Transfer(
            from_address=sender,
            to_address=str(params['to']).lower(),
            token=call.to,
            amount=int(params['amount']),
        )

    def inspect(self, inspection: Inspection) -> None:
        classified = 0
        for i, action in enumerate(inspection.actions):
            call = action.as_call()
            if call is None:
                continue

            transfer = self.decode_transfer(call)
            if transfer is None:
                continue

            if call.call_type == CallType.DELEGATE_CALL:
                inspection.actions[i] = Classification.prune(call.trace_address)
                continue

            inspection.actions[i] = Classification.known(transfer, call.trace_address)
            classified += 1

        if classified:
            logger.debug(f"{inspection.hash}: {classified} ERC20 transfers")
