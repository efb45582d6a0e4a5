# nft_pnl/models.py
"""Event, ledger and snapshot types.

Wire names follow the input/output JSON: floor events carry ``floorPrice``,
which maps to ``FloorPriceEvent.new_floor_price``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .exceptions import InputFormatError

MAX_TIME = 2**32 - 1


def _require(record: Mapping[str, Any], key: str) -> Any:
    if key not in record:
        raise InputFormatError(f"missing field '{key}'")
    return record[key]


def _as_time(record: Mapping[str, Any]) -> int:
    value = _require(record, "time")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InputFormatError(f"field 'time' must be an integer, got {value!r}")
    if not 0 <= value <= MAX_TIME:
        raise InputFormatError(f"field 'time' out of range: {value}")
    return value


def _as_str(record: Mapping[str, Any], key: str) -> str:
    value = _require(record, key)
    if not isinstance(value, str):
        raise InputFormatError(f"field '{key}' must be a string, got {value!r}")
    return value


def _as_price(record: Mapping[str, Any], key: str) -> float:
    value = _require(record, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InputFormatError(f"field '{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except OverflowError:
        raise InputFormatError(f"field '{key}' out of range for a float") from None


@dataclass(slots=True, frozen=True)
class TradeEvent:
    """A single NFT sale from ``seller`` to ``buyer``."""

    time: int
    buyer: str
    seller: str
    nft: str
    collection: str
    price: float

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "TradeEvent":
        if not isinstance(record, Mapping):
            raise InputFormatError(f"trade event must be an object, got {record!r}")
        return cls(
            time=_as_time(record),
            buyer=_as_str(record, "buyer"),
            seller=_as_str(record, "seller"),
            nft=_as_str(record, "nft"),
            collection=_as_str(record, "collection"),
            price=_as_price(record, "price"),
        )


@dataclass(slots=True, frozen=True)
class FloorPriceEvent:
    """A new floor price for a collection."""

    time: int
    collection: str
    new_floor_price: float

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "FloorPriceEvent":
        if not isinstance(record, Mapping):
            raise InputFormatError(f"floor price event must be an object, got {record!r}")
        return cls(
            time=_as_time(record),
            collection=_as_str(record, "collection"),
            new_floor_price=_as_price(record, "floorPrice"),
        )


@dataclass(slots=True)
class WalletPnL:
    """Running PnL totals for one wallet. Values are never clamped."""

    realized: float = 0.0
    unrealized: float = 0.0


@dataclass(slots=True, frozen=True)
class OwnershipRecord:
    """Current holder of an NFT and the price they paid for it."""

    owner: str
    purchase_price: float
    collection: str


@dataclass(slots=True, frozen=True)
class PnLSnapshot:
    """A wallet's PnL totals as of one processed event."""

    time: int
    wallet: str
    realized: float
    unrealized: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to the output wire record."""
        return {
            "time": self.time,
            "wallet": self.wallet,
            "realized": self.realized,
            "unrealized": self.unrealized,
        }
