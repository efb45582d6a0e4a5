"""Per-wallet realized/unrealized PnL for NFT trading activity."""

from .ledger import EmissionOrder, PnLLedger
from .models import (
    FloorPriceEvent,
    OwnershipRecord,
    PnLSnapshot,
    TradeEvent,
    WalletPnL,
)
from .scheduler import EventSource, merge_events, next_event, process_pnl

__all__ = [
    "EmissionOrder",
    "EventSource",
    "FloorPriceEvent",
    "OwnershipRecord",
    "PnLLedger",
    "PnLSnapshot",
    "TradeEvent",
    "WalletPnL",
    "merge_events",
    "next_event",
    "process_pnl",
]
