"""
Harvest ledger helpers.

Normalizes stored harvest rows and computes season totals.
"""

from datetime import date
from typing import Any, Dict, Iterable, Optional

from .. import catalogue
from ..models import HarvestEntry, HarvestTotals
from ..processing import to_number


QUALITY_GRADES = ("A", "B", "C")


def normalize_entry(raw: Optional[Dict[str, Any]], today: Optional[date] = None) -> HarvestEntry:
    """
    Build a harvest entry from a stored row, filling defaults.

    Missing dates become today, unknown crops strawberry, unknown grades A.
    """
    raw = raw if isinstance(raw, dict) else {}
    today = today or date.today()
    quality = raw.get("quality") if raw.get("quality") in QUALITY_GRADES else "A"
    return HarvestEntry(
        date=raw.get("date") or today.isoformat(),
        crop=catalogue.normalize_crop_key(raw.get("crop")),
        quality=quality,
        qty_kg=to_number(raw.get("qtyKg", raw.get("qty_kg")), 0.0),
        price=to_number(raw.get("price"), 0.0),
        total=to_number(raw.get("total"), 0.0),
    )


def make_entry(
    crop: str,
    qty_kg: Any,
    price: Any,
    quality: str = "A",
    on: Optional[date] = None
) -> HarvestEntry:
    """Create a new entry; negative quantity or price count as zero."""
    qty = max(0.0, to_number(qty_kg))
    unit_price = max(0.0, to_number(price))
    return normalize_entry({
        "date": (on or date.today()).isoformat(),
        "crop": crop,
        "quality": quality,
        "qtyKg": qty,
        "price": unit_price,
        "total": qty * unit_price,
    })


def summarize(rows: Iterable[Any]) -> HarvestTotals:
    """Season totals over stored rows (entries or raw dicts)."""
    entries = [
        row if isinstance(row, HarvestEntry) else normalize_entry(row)
        for row in (rows or [])
    ]
    return HarvestTotals(
        sum_kg=sum(entry.qty_kg for entry in entries),
        sum_mad=sum(entry.total for entry in entries),
        entries=entries,
    )
