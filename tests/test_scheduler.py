"""Tests for the chronological merge scheduler and process_pnl."""

import random

import pytest
from structlog.testing import capture_logs

from nft_pnl.ledger import PnLLedger
from nft_pnl.models import FloorPriceEvent, PnLSnapshot, TradeEvent
from nft_pnl.scheduler import EventSource, merge_events, next_event, process_pnl


def trade(time, buyer="A", seller="X", nft="N1", price=1.0, collection="C"):
    return TradeEvent(
        time=time, buyer=buyer, seller=seller, nft=nft,
        collection=collection, price=price,
    )


def floor(time, price=1.0, collection="C"):
    return FloorPriceEvent(time=time, collection=collection, new_floor_price=price)


class TestNextEvent:
    def test_exhausted(self):
        assert next_event([], [], 0, 0) is None
        assert next_event([trade(1)], [floor(1)], 1, 1) is None

    def test_only_floors_left(self):
        f = floor(5)
        assert next_event([trade(1)], [f], 1, 0) == (EventSource.FLOOR_PRICE, f)

    def test_only_trades_left(self):
        t = trade(5)
        assert next_event([t], [floor(1)], 0, 1) == (EventSource.TRADE, t)

    def test_earlier_floor_first(self):
        f = floor(1)
        assert next_event([trade(2)], [f], 0, 0) == (EventSource.FLOOR_PRICE, f)

    def test_earlier_trade_first(self):
        t = trade(1)
        assert next_event([t], [floor(2)], 0, 0) == (EventSource.TRADE, t)

    def test_tie_goes_to_trade(self):
        t = trade(3)
        assert next_event([t], [floor(3)], 0, 0) == (EventSource.TRADE, t)


class TestMergeEvents:
    def test_interleaves_with_trade_first_on_ties(self):
        trades = [trade(1), trade(3), trade(3)]
        floors = [floor(0), floor(3), floor(4)]
        order = [(src, ev.time) for src, ev in merge_events(trades, floors)]
        assert order == [
            (EventSource.FLOOR_PRICE, 0),
            (EventSource.TRADE, 1),
            (EventSource.TRADE, 3),
            (EventSource.TRADE, 3),
            (EventSource.FLOOR_PRICE, 3),
            (EventSource.FLOOR_PRICE, 4),
        ]

    @pytest.mark.parametrize("seed", range(20))
    def test_random_sorted_inputs_merge_in_time_order(self, seed):
        """Every event once, nondecreasing time, trades before floors at equal time."""
        rng = random.Random(seed)
        trades = [trade(t) for t in sorted(rng.randint(0, 10) for _ in range(rng.randint(0, 15)))]
        floors = [floor(t) for t in sorted(rng.randint(0, 10) for _ in range(rng.randint(0, 15)))]

        merged = list(merge_events(trades, floors))

        assert len(merged) == len(trades) + len(floors)
        assert [ev for src, ev in merged if src is EventSource.TRADE] == trades
        assert [ev for src, ev in merged if src is EventSource.FLOOR_PRICE] == floors
        for (src_a, a), (src_b, b) in zip(merged, merged[1:]):
            assert a.time <= b.time
            if a.time == b.time:
                assert not (src_a is EventSource.FLOOR_PRICE and src_b is EventSource.TRADE)

    def test_unsorted_input_is_not_reordered(self):
        trades = [trade(5), trade(1)]
        merged = [ev.time for _, ev in merge_events(trades, [])]
        assert merged == [5, 1]


class TestProcessPnl:
    def test_concrete_scenario(self):
        trades = [
            trade(1, buyer="A", seller="X", nft="N1", price=100.0),
            trade(3, buyer="B", seller="A", nft="N1", price=150.0),
        ]
        floors = [floor(2, price=120.0)]
        assert process_pnl(trades, floors) == [
            PnLSnapshot(1, "A", 0.0, -100.0),
            PnLSnapshot(2, "A", 0.0, 20.0),
            PnLSnapshot(3, "B", 0.0, -30.0),
            PnLSnapshot(3, "A", 50.0, 0.0),
        ]

    def test_trade_sees_floor_before_same_time_update(self):
        """At equal time the trade is marked against the old floor."""
        out = process_pnl(
            [trade(5, buyer="A", price=10.0)],
            [floor(5, price=30.0)],
        )
        assert out == [
            PnLSnapshot(5, "A", 0.0, -10.0),
            PnLSnapshot(5, "A", 0.0, 20.0),
        ]

    def test_final_state_available_through_ledger(self):
        ledger = PnLLedger()
        process_pnl([trade(1, buyer="A", price=10.0)], [floor(2, price=4.0)], ledger=ledger)
        assert ledger.wallet_totals() == {"A": (0.0, -6.0)}
        assert ledger.floor_or_zero("C") == 4.0

    def test_empty_inputs(self):
        assert process_pnl([], []) == []

    def test_floor_updates_without_holdings_emit_nothing(self):
        assert process_pnl([], [floor(1), floor(2, price=3.0)]) == []

    def test_unsorted_input_logs_warning(self):
        with capture_logs() as logs:
            process_pnl([trade(5), trade(1)], [floor(1), floor(2)])
        unsorted = [e for e in logs if e["event"] == "pnl_input_unsorted"]
        assert len(unsorted) == 1
        assert unsorted[0]["input"] == "trades"
        assert unsorted[0]["log_level"] == "warning"

    def test_sorted_input_logs_no_warning(self):
        with capture_logs() as logs:
            process_pnl([trade(1), trade(5)], [floor(1), floor(2)])
        assert not [e for e in logs if e["event"] == "pnl_input_unsorted"]
