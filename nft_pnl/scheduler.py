# nft_pnl/scheduler.py
"""Chronological merge of trade and floor-price events.

Both inputs must already be sorted ascending by ``time``. The merge does not
re-sort them: with unsorted input the processing order is undefined (a
warning is logged, nothing is corrected).

Tie-break: at equal timestamps the trade is processed before the floor update.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional, Sequence, Union

import structlog

from .handlers import apply_floor_price, apply_trade
from .ledger import PnLLedger
from .models import FloorPriceEvent, PnLSnapshot, TradeEvent

logger = structlog.get_logger()

Event = Union[TradeEvent, FloorPriceEvent]


class EventSource(Enum):
    """Input sequence an event was taken from."""

    TRADE = "trade"
    FLOOR_PRICE = "floor_price"


def next_event(
    trades: Sequence[TradeEvent],
    floors: Sequence[FloorPriceEvent],
    trade_idx: int,
    floor_idx: int,
) -> Optional[tuple[EventSource, Event]]:
    """Pick the next event to process given the two cursors.

    Returns None once both sequences are exhausted.
    """
    trades_left = trade_idx < len(trades)
    floors_left = floor_idx < len(floors)
    if not trades_left and not floors_left:
        return None
    if not trades_left or (
        floors_left and floors[floor_idx].time < trades[trade_idx].time
    ):
        return EventSource.FLOOR_PRICE, floors[floor_idx]
    return EventSource.TRADE, trades[trade_idx]


def merge_events(
    trades: Sequence[TradeEvent],
    floors: Sequence[FloorPriceEvent],
) -> Iterator[tuple[EventSource, Event]]:
    """Yield every event exactly once in processing order."""
    trade_idx = floor_idx = 0
    while True:
        picked = next_event(trades, floors, trade_idx, floor_idx)
        if picked is None:
            return
        if picked[0] is EventSource.TRADE:
            trade_idx += 1
        else:
            floor_idx += 1
        yield picked


def _is_sorted(events: Sequence[Event]) -> bool:
    return all(a.time <= b.time for a, b in zip(events, events[1:]))


def process_pnl(
    trades: Sequence[TradeEvent],
    floors: Sequence[FloorPriceEvent],
    ledger: Optional[PnLLedger] = None,
) -> list[PnLSnapshot]:
    """Run both event sequences through a ledger and collect all snapshots.

    Args:
        trades: Trade events sorted by time
        floors: Floor-price events sorted by time
        ledger: Ledger to apply events to. A fresh one is used when omitted;
            pass one in to inspect final state afterwards.

    Returns:
        Snapshots in emission order.
    """
    if ledger is None:
        ledger = PnLLedger()

    for name, events in (("trades", trades), ("floor_prices", floors)):
        if not _is_sorted(events):
            logger.warning("pnl_input_unsorted", input=name)

    snapshots: list[PnLSnapshot] = []
    for source, event in merge_events(trades, floors):
        if source is EventSource.TRADE:
            snapshots.extend(apply_trade(ledger, event))
        else:
            snapshots.extend(apply_floor_price(ledger, event))

    logger.info(
        "pnl_processed",
        trades=len(trades),
        floor_prices=len(floors),
        snapshots=len(snapshots),
        wallets=len(ledger.wallets),
        nfts=len(ledger.owners),
    )
    return snapshots
