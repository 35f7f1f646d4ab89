"""
Protocol call decoder.

Attempts to decode raw call input against a fixed set of known function
signatures. A miss is the normal outcome for most calls in a trace and is
returned as None, never raised.
"""

from web3 import Web3
from web3.exceptions import Web3Exception
from eth_abi.exceptions import DecodingError
from typing import Dict, List, Optional, Any, Tuple
from dataclasses import dataclass
import logging

from .abis import load_abi, validate_abi, UNISWAP_ROUTER, UNISWAP_PAIR
from .base import CallKind

logger = logging.getLogger(__name__)


# Signatures tried by decode_call, most specific first
DECODE_ORDER: List[Tuple[CallKind, str, str]] = [
    (CallKind.ADD_LIQUIDITY, UNISWAP_ROUTER, "addLiquidity"),
    (CallKind.SWAP, UNISWAP_PAIR, "swap"),
    (CallKind.GUARD_CHECK, UNISWAP_ROUTER, "getAmountsOut"),
    (CallKind.GUARD_CHECK, UNISWAP_ROUTER, "getAmountsIn"),
    (CallKind.GUARD_CHECK, UNISWAP_PAIR, "getReserves"),
]

# Router quote functions, used as the generic guard check
QUOTE_FUNCTIONS = ("getAmountsOut", "getAmountsIn")

# Pair read used as a pre-check before trading
PRECHECK_FUNCTION = "getReserves"


@dataclass
class DecodedCall:
    """Outcome of a successful decode attempt"""
    kind: CallKind
    function_name: str
    params: Dict[str, Any]


@dataclass
class PairSwap:
    """Decoded pair swap(amount0Out, amount1Out, to, data)"""
    amount0_out: int
    amount1_out: int
    to: str
    data: bytes

    @property
    def is_flashswap(self) -> bool:
        """A non-empty callback payload means the swap is paid for later"""
        return len(self.data) > 0


class ContractCallDecoder:
    """
    Decodes call input against a single ABI.

    Construction fails with ValueError when the ABI cannot be loaded or
    parsed, or when it lacks one of the required functions.
    """

    def __init__(self, name: str, abi: Optional[list] = None,
                 required_functions: Optional[List[str]] = None):
        self.name = name
        if abi is None:
            abi = load_abi(name, required_functions)
        else:
            validate_abi(name, abi, required_functions)

        try:
            self.contract = Web3().eth.contract(abi=abi)
        except (ValueError, TypeError, KeyError, Web3Exception) as e:
            raise ValueError(f"could not parse {name} abi: {e}") from e

    def decode(self, fn_name: str, input_data: bytes) -> Optional[Dict[str, Any]]:
        """
        Decode input_data as a call to fn_name.

        Returns:
            Decoded arguments keyed by parameter name, or None on any mismatch
        """
        if len(input_data) < 4:
            return None
        try:
            func, params = self.contract.decode_function_input(input_data)
        except (ValueError, DecodingError, Web3Exception) as e:
            logger.debug(f"{self.name}: no match for {input_data[:4].hex()}: {e}")
            return None

        if func.fn_name != fn_name:
            return None
        return dict(params)


class ProtocolCallDecoder:
    """
    Stateless decoder for the Uniswap router and pair call shapes.

    Args:
        router_abi: Router ABI override (bundled uniswap_router.json otherwise)
        pair_abi: Pair ABI override (bundled uniswap_pair.json otherwise)
    """

    def __init__(self, router_abi: Optional[list] = None, pair_abi: Optional[list] = None):
        overrides = {UNISWAP_ROUTER: router_abi, UNISWAP_PAIR: pair_abi}
        required: Dict[str, List[str]] = {UNISWAP_ROUTER: [], UNISWAP_PAIR: []}
        for _, abi_name, fn_name in DECODE_ORDER:
            required[abi_name].append(fn_name)

        self.decoders = {
            name: ContractCallDecoder(name, overrides[name], fns)
            for name, fns in required.items()
        }

    def decode(self, abi_name: str, fn_name: str, input_data: bytes) -> Optional[Dict[str, Any]]:
        return self.decoders[abi_name].decode(fn_name, input_data)

    def decode_call(self, input_data: bytes) -> Optional[DecodedCall]:
        """Try every known signature in priority order; first success wins."""
        for kind, abi_name, fn_name in DECODE_ORDER:
            params = self.decode(abi_name, fn_name, input_data)
            if params is not None:
                return DecodedCall(kind=kind, function_name=fn_name, params=params)
        return None

    def decode_add_liquidity(self, input_data: bytes) -> Optional[Tuple[List[str], List[int]]]:
        """Returns ([tokenA, tokenB], [amountADesired, amountBDesired])"""
        params = self.decode(UNISWAP_ROUTER, "addLiquidity", input_data)
        if params is None:
            return None
        return add_liquidity_args(params)

    def decode_swap(self, input_data: bytes) -> Optional[PairSwap]:
        params = self.decode(UNISWAP_PAIR, "swap", input_data)
        if params is None:
            return None
        return pair_swap_args(params)

    def is_quote(self, input_data: bytes) -> bool:
        return any(self.decode(UNISWAP_ROUTER, fn, input_data) is not None for fn in QUOTE_FUNCTIONS)

    def is_reserves_read(self, input_data: bytes) -> bool:
        return self.decode(UNISWAP_PAIR, PRECHECK_FUNCTION, input_data) is not None


def add_liquidity_args(params: Dict[str, Any]) -> Tuple[List[str], List[int]]:
    tokens = [str(params['tokenA']).lower(), str(params['tokenB']).lower()]
    amounts = [int(params['amountADesired']), int(params['amountBDesired'])]
    return tokens, amounts


def pair_swap_args(params: Dict[str, Any]) -> PairSwap:
    return PairSwap(
        amount0_out=int(params['amount0Out']),
        amount1_out=int(params['amount1Out']),
        to=str(params['to']).lower(),
        data=bytes(params['data']),
    )
