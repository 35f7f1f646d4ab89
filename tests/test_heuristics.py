"""
Unit tests for the early-revert heuristic, independent of the classification pass.
"""
from trace_inspect.services.inspectors import (
    AddLiquidity,
    Classification,
    Protocol,
    Status,
    is_early_revert,
    mark_early_revert,
)

from builders import ALICE, POOL, TOKEN_A, TOKEN_B, guard, make_inspection, swap, transfer


def with_protocols(inspection, *protocols):
    inspection.protocols.update(protocols)
    return inspection


class TestIsEarlyRevert:

    def test_new_protocol_no_actions_no_trade(self):
        inspection = with_protocols(make_inspection(Classification.prune()), Protocol.UNISWAPPY)

        assert is_early_revert(inspection, protocols_before=0, has_trade=False) is True

    def test_single_classified_action_still_counts_as_probe(self):
        inspection = with_protocols(make_inspection(transfer(ALICE, POOL), swap()), Protocol.UNISWAP)

        assert is_early_revert(inspection, 0, False) is True

    def test_two_classified_actions_is_not_a_probe(self):
        inspection = with_protocols(
            make_inspection(transfer(ALICE, POOL), swap(), transfer(POOL, ALICE)),
            Protocol.UNISWAP,
        )

        assert is_early_revert(inspection, 0, False) is False

    def test_trade_formed_never_checked(self):
        inspection = with_protocols(make_inspection(swap()), Protocol.UNISWAP)

        assert is_early_revert(inspection, 0, has_trade=True) is False

    def test_protocol_set_did_not_grow(self):
        inspection = with_protocols(make_inspection(guard()), Protocol.UNISWAP)

        assert is_early_revert(inspection, protocols_before=1, has_trade=False) is False

    def test_unknown_and_pruned_are_not_classified(self):
        inspection = with_protocols(
            make_inspection(swap(), Classification.prune(), guard(), Classification.prune()),
            Protocol.SUSHISWAP,
        )

        assert is_early_revert(inspection, 0, False) is True

    def test_add_liquidity_counts_as_classified(self):
        add = Classification.known(AddLiquidity([TOKEN_A, TOKEN_B], [1, 2]), [0])
        inspection = with_protocols(make_inspection(add, transfer(ALICE, POOL)), Protocol.UNISWAP)

        assert is_early_revert(inspection, 0, False) is False


class TestMarkEarlyRevert:

    def test_sets_checked(self):
        inspection = with_protocols(make_inspection(Classification.prune()), Protocol.UNISWAPPY)

        assert mark_early_revert(inspection, 0, False) is True
        assert inspection.status == Status.CHECKED

    def test_leaves_status_alone_otherwise(self):
        inspection = make_inspection(swap())
        inspection.status = Status.REVERTED

        assert mark_early_revert(inspection, 0, False) is False
        assert inspection.status == Status.REVERTED
