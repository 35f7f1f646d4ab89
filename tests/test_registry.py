"""
End-to-end tests: raw trace_transaction output through the inspector pipeline.
"""
import pytest

from trace_inspect.services.inspectors import (
    BatchInspector,
    CallType,
    Inspection,
    Protocol,
    Status,
    Trade,
    Transfer,
)

from builders import (
    ALICE,
    POOL,
    ROUTER,
    TOKEN_A,
    TOKEN_B,
    TX_HASH,
    balance_of_input,
    raw_trace,
    reverted_probe_traces,
    router_swap_traces,
)


class TestInspectionFromTraces:

    def test_builds_unknown_actions_in_order(self):
        inspection = Inspection.from_traces(router_swap_traces())

        assert inspection.hash == TX_HASH
        assert inspection.block_number == 17000000
        assert inspection.from_address == ALICE
        assert inspection.contract == ROUTER
        assert inspection.status == Status.SUCCESS
        assert len(inspection.actions) == 7
        assert all(a.as_call() is not None for a in inspection.actions)
        assert inspection.actions[1].as_call().call_type == CallType.STATIC_CALL
        assert inspection.actions[4].trace_address == [2, 0]

    def test_root_error_means_reverted(self):
        inspection = Inspection.from_traces(reverted_probe_traces())

        assert inspection.status == Status.REVERTED

    def test_explicit_status_wins(self):
        inspection = Inspection.from_traces(reverted_probe_traces(), status=Status.SUCCESS)

        assert inspection.status == Status.SUCCESS

    def test_non_call_traces_skipped(self):
        traces = router_swap_traces()
        create = raw_trace(ROUTER, "", b'', [3], trace_type="create")
        traces.append(create)

        inspection = Inspection.from_traces(traces)

        assert len(inspection.actions) == 7

    def test_hex_value_parsed(self):
        traces = router_swap_traces()
        traces[0]["action"]["value"] = "0xde0b6b3a7640000"

        inspection = Inspection.from_traces(traces)

        assert inspection.actions[0].as_call().value == 10**18

    def test_empty_trace_rejected(self):
        with pytest.raises(ValueError):
            Inspection.from_traces([])

    def test_malformed_trace_rejected(self):
        traces = router_swap_traces()
        del traces[2]["action"]["from"]

        with pytest.raises(ValueError, match="Malformed"):
            Inspection.from_traces(traces)


class TestBatchInspector:

    def test_router_swap_becomes_single_trade(self):
        batch = BatchInspector()

        inspection = batch.inspect_traces(router_swap_traces())

        # root call, trade, two balanceOf reads
        assert len(inspection.actions) == 4
        trade = inspection.actions[1].as_action()
        assert isinstance(trade, Trade)
        assert trade.t1 == Transfer(ALICE, POOL, TOKEN_A, 100)
        assert trade.t2 == Transfer(POOL, ALICE, TOKEN_B, 90)
        assert inspection.protocols == {Protocol.UNISWAP}
        assert inspection.status == Status.SUCCESS

    def test_keep_pruned(self):
        inspection = BatchInspector().inspect_traces(router_swap_traces(), prune=False)

        assert len(inspection.actions) == 7
        assert [i for i, a in enumerate(inspection.actions) if a.is_pruned] == [1, 2, 4]

    def test_reverted_probe_is_checked(self):
        batch = BatchInspector()

        inspection = batch.inspect_traces(reverted_probe_traces())

        assert inspection.status == Status.CHECKED
        assert batch.get_checked() == [inspection]

    def test_inspectors_run_in_order(self):
        """Without the ERC20 inspector there are no transfers to pair with the swap."""
        from trace_inspect.services.inspectors import UniswapInspector

        inspection = BatchInspector([UniswapInspector()]).inspect_traces(router_swap_traces(), prune=False)

        assert not any(isinstance(a.as_action(), Trade) for a in inspection.actions)
        assert inspection.status == Status.CHECKED

    def test_stats(self):
        batch = BatchInspector()
        batch.inspect_traces(router_swap_traces())

        stats = batch.stats

        assert stats['total_inspected'] == 1
        assert stats['checked_count'] == 0
        assert stats['protocols'] == {'uniswap': 1}
        assert stats['inspectors_loaded'] == ['erc20', 'uniswap']

        batch.clear_cache()
        assert batch.stats['total_inspected'] == 0

    def test_records(self):
        inspection = BatchInspector().inspect_traces(router_swap_traces())

        records = inspection.to_records()

        assert records[0]['kind'] == 'unknown'
        assert records[0]['trace_address'] == ''
        assert records[1]['action'] == 'Trade'
        assert records[1]['details']['t1']['amount'] == '100'
        assert records[2]['selector'] == '0x' + balance_of_input()[:4].hex()
