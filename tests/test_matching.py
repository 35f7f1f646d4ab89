"""
Unit tests for the directional match scanner.
"""
from trace_inspect.services.inspectors import Direction, find_matching, find_transfer

from builders import ALICE, BOB, POOL, TOKEN_B, balance_of_input, call, guard, swap, transfer


def extract_transfer(action):
    return action.transfer()


class TestBackwardTolerant:
    """Backward scans skip intervening calls."""

    def test_skips_guard_to_reach_transfer(self):
        actions = [transfer(ALICE, POOL), guard(), transfer(POOL, BOB)]

        result = find_matching(actions, 1, Direction.BACKWARD, extract_transfer, tolerant=True)

        assert result is not None
        idx, found = result
        assert idx == 0
        assert found is actions[0].action

    def test_nearest_transfer_wins(self):
        actions = [transfer(ALICE, POOL, amount=1), transfer(ALICE, POOL, amount=2), guard()]

        idx, found = find_matching(actions, 2, Direction.BACKWARD, extract_transfer, tolerant=True)

        assert idx == 1
        assert found.amount == 2

    def test_exhausted_without_transfer(self):
        actions = [guard(), call(POOL, balance_of_input())]

        assert find_matching(actions, 1, Direction.BACKWARD, extract_transfer, tolerant=True) is None

    def test_start_before_first_index(self):
        actions = [swap()]

        assert find_matching(actions, -1, Direction.BACKWARD, extract_transfer, tolerant=True) is None

    def test_rejected_transfer_is_skipped(self):
        actions = [transfer(ALICE, POOL), transfer(POOL, BOB, token=TOKEN_B)]

        idx, found = find_matching(
            actions, 1, Direction.BACKWARD, extract_transfer,
            accept=lambda t: t.to_address == POOL, tolerant=True,
        )

        assert idx == 0
        assert found.from_address == ALICE


class TestForwardStrict:
    """Forward scans require the very next element to match."""

    def test_guard_right_after_swap_aborts(self):
        actions = [swap(), guard(), transfer(POOL, BOB)]

        assert find_matching(actions, 1, Direction.FORWARD, extract_transfer, tolerant=False) is None

    def test_immediate_transfer_found(self):
        actions = [swap(), transfer(POOL, BOB), guard()]

        idx, found = find_matching(actions, 1, Direction.FORWARD, extract_transfer)

        assert idx == 1
        assert found.to_address == BOB

    def test_rejected_transfer_aborts(self):
        actions = [swap(), transfer(POOL, ALICE), transfer(POOL, BOB)]

        result = find_matching(
            actions, 1, Direction.FORWARD, extract_transfer,
            accept=lambda t: t.to_address == BOB,
        )

        assert result is None

    def test_past_the_end(self):
        actions = [swap()]

        assert find_matching(actions, 1, Direction.FORWARD, extract_transfer) is None

    def test_backward_strict_aborts_on_guard(self):
        actions = [transfer(ALICE, POOL), guard(), swap()]

        assert find_transfer(actions, 1, Direction.BACKWARD, tolerant=False) is None


class TestFindTransfer:

    def test_forward_tolerant_skips_calls(self):
        actions = [swap(), guard(), call(POOL, balance_of_input()), transfer(POOL, BOB)]

        idx, found = find_transfer(actions, 1, Direction.FORWARD, tolerant=True)

        assert idx == 3
        assert found.to_address == BOB

    def test_pruned_entries_are_not_transfers(self):
        from trace_inspect.services.inspectors import Classification

        actions = [Classification.prune([0]), swap()]

        assert find_transfer(actions, 0, Direction.BACKWARD, tolerant=False) is None
