"""
Call-trace inspectors for Uniswap-family DEX activity.

Each inspector module exports a {Protocol}Inspector with an inspect()
method that classifies an Inspection's actions in place:
- ERC20Inspector: token transfer calls -> Transfer
- UniswapInspector: addLiquidity, pair swaps and guard checks

BatchInspector runs them in order over one transaction.
"""

from .base import (
    # Enums
    Protocol,
    Status,
    CallType,
    CallKind,
    ClassificationKind,
    # Dataclasses
    CallTrace,
    Transfer,
    AddLiquidity,
    Trade,
    Classification,
    Inspection,
    # Base class
    BaseInspector,
    # Helpers
    normalize_tx_hash,
)
from .decoder import ProtocolCallDecoder, ContractCallDecoder, DecodedCall, PairSwap
from .matching import Direction, find_matching, find_transfer
from .heuristics import is_early_revert, mark_early_revert
from .protocols import identify_protocol, PROTOCOL_ADDRESSES
from .erc20 import ERC20Inspector
from .uniswap import UniswapInspector
from .registry import BatchInspector, default_inspectors

__all__ = [
    # Enums
    'Protocol',
    'Status',
    'CallType',
    'CallKind',
    'ClassificationKind',
    # Dataclasses
    'CallTrace',
    'Transfer',
    'AddLiquidity',
    'Trade',
    'Classification',
    'Inspection',
    # Base classes
    'BaseInspector',
    'BatchInspector',
    # Decoding
    'ProtocolCallDecoder',
    'ContractCallDecoder',
    'DecodedCall',
    'PairSwap',
    # Matching / heuristics
    'Direction',
    'find_matching',
    'find_transfer',
    'is_early_revert',
    'mark_early_revert',
    # Protocols
    'identify_protocol',
    'PROTOCOL_ADDRESSES',
    # Inspectors
    'ERC20Inspector',
    'UniswapInspector',
    'default_inspectors',
    # Helpers
    'normalize_tx_hash',
]
