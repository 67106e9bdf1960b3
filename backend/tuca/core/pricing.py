"""
Booking price and party-size rules per catalog kind
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from tuca.db.models import CatalogKind


class BookingRuleError(ValueError):
    """A booking request that the item cannot accommodate"""


def _utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def billable_days(start: datetime, end: datetime) -> int:
    """Whole days between the UTC calendar dates, never less than one"""
    return max((_utc_date(end) - _utc_date(start)).days, 1)


def calculate_total_price(kind: CatalogKind, item: Any, start: datetime, end: datetime, guests: int) -> float:
    if kind in (CatalogKind.EXPERIENCE, CatalogKind.PACKAGE):
        total = item.price * guests
    elif kind == CatalogKind.ACCOMMODATION:
        total = item.price * billable_days(start, end)
    elif kind == CatalogKind.VEHICLE:
        total = item.price_per_day * billable_days(start, end)
    else:
        # Restaurant reservations are paid on site
        total = 0.0
    return round(float(total), 2)


def check_guests(kind: CatalogKind, item: Any, guests: int) -> None:
    if kind == CatalogKind.PACKAGE:
        if guests < item.min_people or guests > item.max_people:
            raise BookingRuleError(
                f"This package is available for {item.min_people} to {item.max_people} people"
            )
        return

    capacity: Optional[int] = getattr(item, "capacity", None)
    if kind in (CatalogKind.ACCOMMODATION, CatalogKind.VEHICLE) and capacity and guests > capacity:
        raise BookingRuleError(f"Maximum capacity is {capacity} guests")
