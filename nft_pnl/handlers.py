# nft_pnl/handlers.py
"""Event handlers that apply trades and floor updates to a PnLLedger.

Each handler mutates the ledger and returns the snapshots it emits, in
emission order.
"""

from __future__ import annotations

import structlog

from .ledger import PnLLedger
from .models import FloorPriceEvent, OwnershipRecord, PnLSnapshot, TradeEvent

logger = structlog.get_logger()


def apply_trade(ledger: PnLLedger, event: TradeEvent) -> list[PnLSnapshot]:
    """Apply a trade.

    The buyer is marked to market against the current floor immediately:
    unrealized += floor - price.

    If the NFT has a prior owner the seller closes that position:
      - realized   += price - buy_price
      - unrealized -= floor - buy_price
    With no prior owner (primary sale) the seller is not touched.

    Emits the buyer, then the seller if the seller has any PnL entry.
    """
    floor = ledger.floor_or_zero(event.collection)

    ledger.wallet(event.buyer).unrealized += floor - event.price

    prior = ledger.owner_of(event.nft)
    if prior is not None:
        buy_price = prior.purchase_price
        seller = ledger.wallet(event.seller)
        seller.realized += event.price - buy_price
        seller.unrealized -= floor - buy_price

    ledger.record_ownership(
        event.nft,
        OwnershipRecord(
            owner=event.buyer,
            purchase_price=event.price,
            collection=event.collection,
        ),
    )

    snapshots = [ledger.snapshot(event.time, event.buyer)]
    if ledger.find_wallet(event.seller) is not None:
        snapshots.append(ledger.snapshot(event.time, event.seller))

    logger.debug(
        "trade_applied",
        time=event.time,
        nft=event.nft,
        collection=event.collection,
        price=event.price,
        floor=floor,
        primary_sale=prior is None,
        emitted=len(snapshots),
    )
    return snapshots


def apply_floor_price(ledger: PnLLedger, event: FloorPriceEvent) -> list[PnLSnapshot]:
    """Apply a floor update to every NFT currently held in the collection.

    Each holding moves its owner's unrealized PnL by new - previous floor.
    A wallet holding several NFTs in the collection is emitted once per NFT.
    """
    previous = ledger.floor_or_zero(event.collection)
    ledger.set_floor(event.collection, event.new_floor_price)
    delta = event.new_floor_price - previous

    snapshots = []
    for _nft, record in ledger.holdings(event.collection):
        ledger.wallet(record.owner).unrealized += delta
        snapshots.append(ledger.snapshot(event.time, record.owner))

    logger.debug(
        "floor_price_applied",
        time=event.time,
        collection=event.collection,
        previous=previous,
        new=event.new_floor_price,
        emitted=len(snapshots),
    )
    return snapshots
