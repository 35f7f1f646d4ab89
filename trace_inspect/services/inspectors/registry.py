"""
Inspector Registry - runs protocol inspectors over a transaction trace.

Inspectors run one after another over the same Inspection, in registration
order. Order matters: ERC20 transfers must be classified before the Uniswap
inspector looks for transfers around a swap.
"""

from typing import Dict, List, Optional, Any
import logging

from .base import BaseInspector, Inspection, Status

logger = logging.getLogger(__name__)


def default_inspectors() -> List[BaseInspector]:
    """ERC20 first, then Uniswap"""
    from .erc20 import ERC20Inspector
    from .uniswap import UniswapInspector
    return [ERC20Inspector(), UniswapInspector()]


class BatchInspector:
    """
    Runs a list of inspectors over Inspections.

    Args:
        inspectors: Inspectors in the order they should run (default_inspectors() if None)
    """

    def __init__(self, inspectors: Optional[List[BaseInspector]] = None):
        self.inspectors = inspectors if inspectors is not None else default_inspectors()
        self.inspected: Dict[str, Inspection] = {}
        logger.debug(f"Initialized batch inspector with {[i.NAME for i in self.inspectors]}")

    def inspect(self, inspection: Inspection, prune: bool = True) -> Inspection:
        """
        Run every inspector, then drop pruned actions.

        Args:
            inspection: Inspection to classify in place
            prune: Remove Prune entries once all inspectors have run

        Returns:
            The same Inspection
        """
        logger.debug(f"INSPECTING TX: {inspection.hash} ({len(inspection.actions)} actions)")
        for inspector in self.inspectors:
            # Each inspector owns the action list for the duration of its pass
            inspector.inspect(inspection)
            logger.debug(f"  {inspector.NAME}: protocols={sorted(p.value for p in inspection.protocols)} "
                         f"status={inspection.status.value}")

        if prune:
            inspection.prune()

        if inspection.hash:
            self.inspected[inspection.hash] = inspection
        return inspection

    def inspect_traces(self, traces: List[Dict], prune: bool = True) -> Inspection:
        """Build an Inspection from trace_transaction output and inspect it"""
        return self.inspect(Inspection.from_traces(traces), prune=prune)

    def get_checked(self) -> List[Inspection]:
        """Inspections flagged as reverted protocol probes"""
        return [i for i in self.inspected.values() if i.status == Status.CHECKED]

    def clear_cache(self):
        self.inspected.clear()

    @property
    def stats(self) -> Dict[str, Any]:
        protocols: Dict[str, int] = {}
        for inspection in self.inspected.values():
            for protocol in inspection.protocols:
                protocols[protocol.value] = protocols.get(protocol.value, 0) + 1
        return {
            'total_inspected': len(self.inspected),
            'checked_count': len(self.get_checked()),
            'protocols': protocols,
            'inspectors_loaded': [i.NAME for i in self.inspectors],
        }
