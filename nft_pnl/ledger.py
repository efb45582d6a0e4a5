# nft_pnl/ledger.py
"""PnL ledger: floor prices, wallet totals and current NFT ownership.

The ledger is plain storage. All PnL arithmetic lives in ``handlers``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .models import OwnershipRecord, PnLSnapshot, WalletPnL


class EmissionOrder(Enum):
    """Order in which a floor-price event visits a collection's holdings."""

    INSERTION = "insertion"  # NFT's first entry into the collection
    NFT_ID = "nft_id"        # Lexical NFT identifier


class PnLLedger:
    """In-memory state for a single PnL run.

    Holds three tables:
      - floor price by collection (missing -> 0.0)
      - wallet PnL by wallet (created lazily, never removed)
      - ownership record by NFT (current holder only, no history)

    A secondary index maps each collection to the NFTs currently recorded
    in it, so floor updates only touch affected holdings.
    """

    def __init__(self, emission_order: EmissionOrder = EmissionOrder.INSERTION) -> None:
        self.emission_order = emission_order
        self.floor_prices: dict[str, float] = {}
        self.wallets: dict[str, WalletPnL] = {}
        self.owners: dict[str, OwnershipRecord] = {}
        # collection -> {nft: None}; dict keeps insertion order
        self._holdings: dict[str, dict[str, None]] = {}

    # ── Floor prices ────────────────────────────────────────────────

    def floor_or_zero(self, collection: str) -> float:
        return self.floor_prices.get(collection, 0.0)

    def set_floor(self, collection: str, price: float) -> None:
        self.floor_prices[collection] = price

    # ── Wallets ─────────────────────────────────────────────────────

    def wallet(self, wallet: str) -> WalletPnL:
        """Return the wallet's PnL entry, creating a zeroed one on first access."""
        pnl = self.wallets.get(wallet)
        if pnl is None:
            pnl = WalletPnL()
            self.wallets[wallet] = pnl
        return pnl

    def find_wallet(self, wallet: str) -> Optional[WalletPnL]:
        """Return the wallet's PnL entry without creating it."""
        return self.wallets.get(wallet)

    def snapshot(self, time: int, wallet: str) -> PnLSnapshot:
        pnl = self.wallet(wallet)
        return PnLSnapshot(
            time=time,
            wallet=wallet,
            realized=pnl.realized,
            unrealized=pnl.unrealized,
        )

    def wallet_totals(self) -> dict[str, tuple[float, float]]:
        """Current ``{wallet: (realized, unrealized)}`` view."""
        return {w: (p.realized, p.unrealized) for w, p in self.wallets.items()}

    # ── Ownership ───────────────────────────────────────────────────

    def owner_of(self, nft: str) -> Optional[OwnershipRecord]:
        return self.owners.get(nft)

    def record_ownership(self, nft: str, record: OwnershipRecord) -> None:
        """Replace the NFT's ownership record and keep the collection index in sync."""
        previous = self.owners.get(nft)
        if previous is not None and previous.collection != record.collection:
            held = self._holdings.get(previous.collection)
            if held is not None:
                held.pop(nft, None)
                if not held:
                    del self._holdings[previous.collection]
        self.owners[nft] = record
        self._holdings.setdefault(record.collection, {}).setdefault(nft, None)

    def holdings(self, collection: str) -> list[tuple[str, OwnershipRecord]]:
        """NFTs currently recorded in ``collection``, in ``emission_order``."""
        nfts = list(self._holdings.get(collection, ()))
        if self.emission_order is EmissionOrder.NFT_ID:
            nfts.sort()
        return [(nft, self.owners[nft]) for nft in nfts]
