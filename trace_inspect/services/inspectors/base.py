"""
Base classes and data structures for call-trace inspectors.
Provides the Inspection aggregate, the Classification tagged variant and the
BaseInspector interface shared by the ERC20 and Uniswap inspectors.
"""

from web3 import Web3
from typing import Dict, List, Optional, Any, Set, Union
from dataclasses import dataclass, field
from enum import Enum
from abc import ABC, abstractmethod
import logging

from ...config.protocol_config import CALL_TRACE_TYPES

logger = logging.getLogger(__name__)


# ============================================================================
# ENUMS
# ============================================================================

class Protocol(Enum):
    """DeFi venues/contract families recognized by the inspectors"""
    UNISWAP = "uniswap"
    UNISWAP_V3 = "uniswap_v3"
    SUSHISWAP = "sushiswap"
    UNISWAPPY = "uniswappy"  # Unknown Uniswap fork


class Status(Enum):
    """Transaction outcome"""
    SUCCESS = "success"
    REVERTED = "reverted"
    CHECKED = "checked"  # Probed a protocol and reverted before trading


class CallType(Enum):
    """EVM call types as reported by trace_transaction"""
    CALL = "call"
    STATIC_CALL = "staticcall"
    DELEGATE_CALL = "delegatecall"
    CALL_CODE = "callcode"


class CallKind(Enum):
    """Call shapes the protocol decoder knows about"""
    ADD_LIQUIDITY = "add_liquidity"
    SWAP = "swap"
    GUARD_CHECK = "guard_check"


class ClassificationKind(Enum):
    UNKNOWN = "unknown"
    KNOWN = "known"
    PRUNE = "prune"


# ============================================================================
# HELPERS
# ============================================================================

def normalize_tx_hash(raw_hash: Union[str, bytes, None]) -> str:
    """Normalize a transaction hash to a 0x-prefixed hex string."""
    if raw_hash is None:
        return ""
    if isinstance(raw_hash, bytes):
        hex_str = raw_hash.hex()
    else:
        hex_str = str(raw_hash)
    if hex_str.startswith('0x'):
        return hex_str
    return f"0x{hex_str}"


def _to_bytes(data: Union[str, bytes, None]) -> bytes:
    if data is None:
        return b''
    if isinstance(data, bytes):
        return data
    return Web3.to_bytes(hexstr=data)


def _to_int(value: Union[str, int, None]) -> int:
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    return Web3.to_int(hexstr=value)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class CallTrace:
    """One raw call recorded in a transaction trace"""
    from_address: str
    to: str
    input: bytes = b''
    call_type: CallType = CallType.CALL
    value: int = 0
    trace_address: List[int] = field(default_factory=list)

    @property
    def selector(self) -> str:
        """4-byte function selector as 0x-prefixed hex, empty for plain transfers"""
        if len(self.input) < 4:
            return ""
        return "0x" + self.input[:4].hex()

    @classmethod
    def from_dict(cls, trace: Dict) -> 'CallTrace':
        """Create from a Parity-style trace_transaction entry"""
        action = trace.get('action')
        if not isinstance(action, dict):
            raise ValueError(f"Trace entry has no call action: {trace}")
        try:
            return cls(
                from_address=str(action['from']).lower(),
                to=str(action.get('to') or '').lower(),
                input=_to_bytes(action.get('input')),
                call_type=CallType(str(action.get('callType', 'call')).lower()),
                value=_to_int(action.get('value')),
                trace_address=list(trace.get('traceAddress', [])),
            )
        except (KeyError, ValueError) as e:
            raise ValueError(f"Malformed call trace {trace.get('traceAddress')}: {e}") from e


@dataclass
class Transfer:
    """Asset movement between two accounts"""
    from_address: str
    to_address: str
    token: str
    amount: int

    def to_dict(self) -> dict:
        return {
            'from': self.from_address,
            'to': self.to_address,
            'token': self.token,
            'amount': str(self.amount),
        }


@dataclass
class AddLiquidity:
    """Liquidity added to a pair, tokens and amounts in call-argument order"""
    tokens: List[str]
    amounts: List[int]

    def to_dict(self) -> dict:
        return {
            'tokens': list(self.tokens),
            'amounts': [str(a) for a in self.amounts],
        }


@dataclass
class Trade:
    """A swap leg: the transfer into the pair and the transfer out of it"""
    t1: Transfer
    t2: Transfer

    def to_dict(self) -> dict:
        return {'t1': self.t1.to_dict(), 't2': self.t2.to_dict()}


SpecificAction = Union[Transfer, AddLiquidity, Trade]


@dataclass
class Classification:
    """
    One node of the call trace.

    UNKNOWN holds the raw call, KNOWN holds a semantic action and PRUNE marks
    the node as removed from the final output while keeping its position.
    """
    kind: ClassificationKind
    call: Optional[CallTrace] = None
    action: Optional[SpecificAction] = None
    trace_address: List[int] = field(default_factory=list)

    @classmethod
    def unknown(cls, call: CallTrace) -> 'Classification':
        return cls(kind=ClassificationKind.UNKNOWN, call=call, trace_address=list(call.trace_address))

    @classmethod
    def known(cls, action: SpecificAction, trace_address: Optional[List[int]] = None) -> 'Classification':
        return cls(kind=ClassificationKind.KNOWN, action=action, trace_address=list(trace_address or []))

    @classmethod
    def prune(cls, trace_address: Optional[List[int]] = None) -> 'Classification':
        return cls(kind=ClassificationKind.PRUNE, trace_address=list(trace_address or []))

    def as_call(self) -> Optional[CallTrace]:
        return self.call if self.kind == ClassificationKind.UNKNOWN else None

    def as_action(self) -> Optional[SpecificAction]:
        return self.action if self.kind == ClassificationKind.KNOWN else None

    def transfer(self) -> Optional[Transfer]:
        action = self.as_action()
        return action if isinstance(action, Transfer) else None

    @property
    def is_pruned(self) -> bool:
        return self.kind == ClassificationKind.PRUNE

    @property
    def action_type(self) -> str:
        """Short label used in reports"""
        if self.kind != ClassificationKind.KNOWN:
            return self.kind.value
        return type(self.action).__name__

    def to_record(self, index: int) -> Dict[str, Any]:
        """Flatten into a single report row"""
        record = {
            'index': index,
            'trace_address': '-'.join(str(i) for i in self.trace_address),
            'kind': self.kind.value,
            'action': self.action_type,
            'from': None,
            'to': None,
            'selector': None,
            'details': None,
        }
        call = self.as_call()
        if call is not None:
            record['from'] = call.from_address
            record['to'] = call.to
            record['selector'] = call.selector
        elif self.action is not None:
            record['details'] = self.action.to_dict()
        return record


@dataclass
class Inspection:
    """
    Aggregate for one transaction.

    The action list follows call-trace execution order. Inspectors rewrite
    entries in place but never reorder or resize it during a pass.
    """
    hash: str
    actions: List[Classification] = field(default_factory=list)
    protocols: Set[Protocol] = field(default_factory=set)
    status: Status = Status.SUCCESS
    from_address: str = ""
    contract: str = ""
    block_number: int = 0

    @classmethod
    def from_traces(cls, traces: List[Dict], status: Optional[Status] = None) -> 'Inspection':
        """
        Build an Inspection from Parity-style trace_transaction output.

        Args:
            traces: Trace entries in execution order
            status: Explicit status; derived from the root trace's error otherwise

        Returns:
            Inspection with every call trace as an UNKNOWN classification
        """
        if not traces:
            raise ValueError("Cannot build an inspection from an empty trace")

        root = traces[0]
        root_call = CallTrace.from_dict(root)
        if status is None:
            status = Status.REVERTED if root.get('error') else Status.SUCCESS

        actions = []
        for trace in traces:
            if trace.get('type', 'call') not in CALL_TRACE_TYPES:
                logger.debug(f"Skipping {trace.get('type')} trace at {trace.get('traceAddress')}")
                continue
            actions.append(Classification.unknown(CallTrace.from_dict(trace)))

        return cls(
            hash=normalize_tx_hash(root.get('transactionHash')),
            actions=actions,
            status=status,
            from_address=root_call.from_address,
            contract=root_call.to,
            block_number=int(root.get('blockNumber') or 0),
        )

    def known_actions(self) -> List[SpecificAction]:
        return [a.action for a in self.actions if a.as_action() is not None]

    def prune(self):
        """Drop pruned entries. Only call once every inspector has run."""
        self.actions = [a for a in self.actions if not a.is_pruned]

    def to_records(self) -> List[Dict[str, Any]]:
        return [action.to_record(i) for i, action in enumerate(self.actions)]

    def to_dict(self) -> dict:
        return {
            'hash': self.hash,
            'status': self.status.value,
            'protocols': sorted(p.value for p in self.protocols),
            'from_address': self.from_address,
            'contract': self.contract,
            'block_number': self.block_number,
            'actions': self.to_records(),
        }


# ============================================================================
# BASE INSPECTOR CLASS
# ============================================================================

class BaseInspector(ABC):
    """
    Abstract base class for protocol inspectors.
    Each inspector classifies the calls of its protocol in one pass.
    """

    NAME: str = "base"

    @abstractmethod
    def inspect(self, inspection: Inspection) -> None:
        """
        Classify the inspection's actions in place.

        Args:
            inspection: Inspection whose action list is rewritten
        """
        pass
