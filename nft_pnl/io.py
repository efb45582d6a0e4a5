# nft_pnl/io.py
"""JSON file adapters for event input and snapshot output."""

from __future__ import annotations

import json
import math
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar, Union

import structlog

from .exceptions import InputError, InputFormatError, OutputError
from .models import FloorPriceEvent, PnLSnapshot, TradeEvent

logger = structlog.get_logger()

T = TypeVar("T")
PathLike = Union[str, Path]


def _reject_constant(token: str) -> float:
    raise InputFormatError(f"non-standard JSON number {token}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise InputFormatError(f"number out of range: {text}")
    return value


def _load_json_array(path: PathLike) -> list[Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(
                f,
                parse_constant=_reject_constant,
                parse_float=_finite_float,
            )
    except (json.JSONDecodeError, InputFormatError) as exc:
        raise InputFormatError(f"{path}: invalid JSON: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"{path}: cannot read: {exc}") from exc
    if not isinstance(data, list):
        raise InputFormatError(
            f"{path}: expected a JSON array, got {type(data).__name__}"
        )
    return data


def _decode(
    path: PathLike,
    records: list[Any],
    decoder: Callable[[Any], T],
) -> list[T]:
    events = []
    for idx, record in enumerate(records):
        try:
            events.append(decoder(record))
        except InputFormatError as exc:
            raise InputFormatError(f"{path}: record {idx}: {exc}") from exc
    return events


def read_trade_events(path: PathLike) -> list[TradeEvent]:
    """Read a JSON array of trade events."""
    events = _decode(path, _load_json_array(path), TradeEvent.from_record)
    logger.debug("trade_events_loaded", path=str(path), count=len(events))
    return events


def read_floor_price_events(path: PathLike) -> list[FloorPriceEvent]:
    """Read a JSON array of floor-price events (``floorPrice`` on the wire)."""
    events = _decode(path, _load_json_array(path), FloorPriceEvent.from_record)
    logger.debug("floor_price_events_loaded", path=str(path), count=len(events))
    return events


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def snapshots_to_records(snapshots: Iterable[PnLSnapshot]) -> list[dict[str, Any]]:
    """Output records. Sums that overflowed to inf/NaN are written as null."""
    records = []
    for s in snapshots:
        record = s.to_dict()
        record["realized"] = _finite_or_none(s.realized)
        record["unrealized"] = _finite_or_none(s.unrealized)
        records.append(record)
    return records


def write_snapshots(
    path: PathLike,
    snapshots: Iterable[PnLSnapshot],
    indent: int = 2,
) -> None:
    """Write snapshots as a pretty-printed JSON array.

    The file is written next to its destination and moved into place, so a
    failure never leaves partial output behind.
    """
    path = Path(path)
    records = snapshots_to_records(snapshots)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            json.dump(records, tmp, indent=indent, allow_nan=False)
            tmp.write("\n")
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputError(f"{path}: cannot write: {exc}") from exc
    logger.debug("snapshots_written", path=str(path), count=len(records))
