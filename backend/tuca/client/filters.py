"""
Search, filter and sort rules behind the catalog browse pages.

Items are the camelCase dicts returned by the API. Filtering never mutates the
input list.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from tuca.db.models import CatalogKind

Item = Dict[str, Any]

ALL = "all"
SORT_OPTIONS = ("featured", "priceAsc", "priceDesc", "ratingDesc", "newest")
EXPERIENCE_DURATIONS = ("2", "4", "6", "8", "24")
PACKAGE_DURATIONS = ("short", "medium", "long", "extended")
BEDROOM_OPTIONS = ("1", "2", "3", "4+")

# Substrings of the free-text duration that place an item in a bucket
_EXPERIENCE_BUCKETS: Dict[str, Tuple[str, ...]] = {
    "2": ("1 hour", "2 hour"),
    "4": ("3 hour", "4 hour"),
    "6": ("5 hour", "6 hour"),
    "8": ("7 hour", "8 hour", "full day"),
}
_PACKAGE_BUCKETS: Dict[str, Tuple[str, ...]] = {
    "short": ("1 day", "2 day", "3 day", "weekend"),
    "medium": ("4 day", "5 day", "6 day"),
    "long": ("week", "7 day", "8 day", "9 day", "10 day"),
    "extended": ("2 week", "14 day", "longer"),
}

_SEARCH_FIELDS: Dict[CatalogKind, Tuple[str, ...]] = {
    CatalogKind.EXPERIENCE: ("title", "description", "location"),
    CatalogKind.ACCOMMODATION: ("title", "description", "location"),
    CatalogKind.PACKAGE: ("title", "description"),
    CatalogKind.VEHICLE: ("title", "description", "vehicleType"),
    CatalogKind.RESTAURANT: ("name", "description", "location", "cuisine"),
}


def parse_price_range(value: str) -> Optional[Tuple[float, Optional[float]]]:
    """'100-200' -> (100, 200); '500-' or '500-0' -> (500, None); 'all' -> None"""
    if not value or value == ALL:
        return None
    low, _, high = value.partition("-")
    try:
        minimum = float(low) if low else 0.0
        maximum = float(high) if high else 0.0
    except ValueError:
        raise ValueError(f"Invalid price range: {value!r}")
    return minimum, (maximum or None)


def item_price(item: Item) -> float:
    price = item.get("price")
    if price is None:
        price = item.get("pricePerDay", 0)
    return float(price or 0)


def _created_at(item: Item) -> datetime:
    raw = item.get("createdAt")
    if not raw:
        return datetime.min.replace(tzinfo=timezone.utc)
    parsed = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def matches_experience_duration(duration_text: str, bucket: str) -> bool:
    text = duration_text.lower()
    if bucket in _EXPERIENCE_BUCKETS:
        return any(token in text for token in _EXPERIENCE_BUCKETS[bucket])
    # Multi-day experiences
    return "day" in text and "full day" not in text


def matches_package_duration(duration_text: str, bucket: str) -> bool:
    text = duration_text.lower()
    tokens = _PACKAGE_BUCKETS.get(bucket)
    if tokens is None:
        return True
    return any(token in text for token in tokens)


def matches_bedrooms(bedrooms: Optional[int], option: str) -> bool:
    if bedrooms is None:
        return False
    if option == "4+":
        return bedrooms >= 4
    return bedrooms == int(option)


@dataclass
class ListFilters:
    search: str = ""
    price_range: str = ALL
    duration: str = ALL
    bedrooms: str = ALL
    only_featured: bool = False
    sort_by: str = "featured"

    def __post_init__(self):
        parse_price_range(self.price_range)
        if self.sort_by not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {self.sort_by!r}")
        if self.bedrooms != ALL and self.bedrooms not in BEDROOM_OPTIONS:
            raise ValueError(f"Unknown bedrooms option: {self.bedrooms!r}")

    def reset(self) -> None:
        """Back to the 'clear all filters' state"""
        self.search = ""
        self.price_range = ALL
        self.duration = ALL
        self.bedrooms = ALL
        self.only_featured = False
        self.sort_by = "featured"


def _sort(items: List[Item], sort_by: str) -> List[Item]:
    keys: Dict[str, Tuple[Callable[[Item], Any], bool]] = {
        "priceAsc": (item_price, False),
        "priceDesc": (item_price, True),
        "ratingDesc": (lambda i: float(i.get("rating") or 0), True),
        "newest": (_created_at, True),
    }
    if sort_by in keys:
        key, reverse = keys[sort_by]
        return sorted(items, key=key, reverse=reverse)
    # Featured first, otherwise keep the incoming order
    return sorted(items, key=lambda i: not i.get("featured"))


def apply_filters(items: List[Item], filters: ListFilters, kind: CatalogKind) -> List[Item]:
    result = list(items)

    term = filters.search.strip().lower()
    if term:
        fields = _SEARCH_FIELDS[kind]
        result = [
            i for i in result
            if any(term in str(i.get(f) or "").lower() for f in fields)
        ]

    bounds = parse_price_range(filters.price_range)
    if bounds:
        minimum, maximum = bounds
        result = [
            i for i in result
            if item_price(i) >= minimum and (maximum is None or item_price(i) <= maximum)
        ]

    if filters.duration != ALL:
        if kind == CatalogKind.EXPERIENCE:
            result = [i for i in result if matches_experience_duration(i.get("duration", ""), filters.duration)]
        elif kind == CatalogKind.PACKAGE:
            result = [i for i in result if matches_package_duration(i.get("duration", ""), filters.duration)]

    if filters.bedrooms != ALL and kind == CatalogKind.ACCOMMODATION:
        result = [i for i in result if matches_bedrooms(i.get("bedrooms"), filters.bedrooms)]

    if filters.only_featured:
        result = [i for i in result if i.get("featured")]

    return _sort(result, filters.sort_by)
