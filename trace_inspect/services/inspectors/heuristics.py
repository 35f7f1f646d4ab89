"""
Early-revert heuristic.

A transaction that registered a new protocol, produced at most one
classified action and formed no trade most likely checked for an
arbitrage/sandwich opportunity and reverted before trading.
"""

import logging

from .base import Inspection, Status

logger = logging.getLogger(__name__)

# Fewer classified actions than this means no real trade attempt happened
MIN_CLASSIFIED_ACTIONS = 2


def is_early_revert(inspection: Inspection, protocols_before: int, has_trade: bool) -> bool:
    """
    Args:
        inspection: Inspection after the pass and its deferred prunes
        protocols_before: Size of inspection.protocols when the pass started
        has_trade: Whether the pass formed a Trade

    Returns:
        True if the transaction looks like a reverted probe
    """
    if has_trade:
        return False
    if len(inspection.protocols) <= protocols_before:
        return False
    classified = sum(1 for a in inspection.actions if a.as_action() is not None)
    return classified < MIN_CLASSIFIED_ACTIONS


def mark_early_revert(inspection: Inspection, protocols_before: int, has_trade: bool) -> bool:
    """Set status to CHECKED when is_early_revert holds. Returns whether it did."""
    if not is_early_revert(inspection, protocols_before, has_trade):
        return False
    logger.info(f"Early revert detected in {inspection.hash}: protocol checked without a trade")
    inspection.status = Status.CHECKED
    return True
