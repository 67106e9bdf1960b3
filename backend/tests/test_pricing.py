"""
Tests for booking price and party-size rules
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from tuca.core.pricing import BookingRuleError, billable_days, calculate_total_price, check_guests
from tuca.db.models import CatalogKind

START = datetime(2026, 12, 1, 14, 0)


@pytest.mark.parametrize("end,expected", [
    (datetime(2026, 12, 1, 18, 0), 1),
    (datetime(2026, 12, 2, 13, 59), 1),
    (datetime(2026, 12, 2, 14, 0), 1),
    (datetime(2026, 12, 4, 14, 0), 3),
    # Calendar dates count, not elapsed hours
    (datetime(2026, 12, 2, 9, 0), 1),
    (datetime(2026, 12, 5, 11, 0), 4),
])
def test_billable_days(end, expected):
    assert billable_days(START, end) == expected


def test_billable_days_compares_utc_dates():
    brt = timezone(timedelta(hours=-3))
    # 22:00 on 1 December in UTC-3 is already 2 December in UTC
    start = datetime(2026, 12, 1, 22, 0, tzinfo=brt)
    assert billable_days(start, datetime(2026, 12, 2, 20, 0, tzinfo=brt)) == 1
    assert billable_days(start, datetime(2026, 12, 2, 21, 0, tzinfo=brt)) == 1
    assert billable_days(start, datetime(2026, 12, 4, 1, 0, tzinfo=timezone.utc)) == 2


def test_per_guest_pricing():
    experience = SimpleNamespace(price=99.99)
    assert calculate_total_price(CatalogKind.EXPERIENCE, experience, START, START, 3) == 299.97


def test_per_day_pricing_ignores_guests():
    stay = SimpleNamespace(price=390)
    end = datetime(2026, 12, 3, 11, 0)
    assert calculate_total_price(CatalogKind.ACCOMMODATION, stay, START, end, 1) == 780.0
    assert calculate_total_price(CatalogKind.ACCOMMODATION, stay, START, end, 2) == 780.0

    buggy = SimpleNamespace(price_per_day=85)
    assert calculate_total_price(CatalogKind.VEHICLE, buggy, START, datetime(2026, 12, 5, 14, 0), 4) == 340.0


def test_restaurants_are_free_to_reserve():
    restaurant = SimpleNamespace()
    assert calculate_total_price(CatalogKind.RESTAURANT, restaurant, START, START, 8) == 0.0


def test_package_group_limits():
    package = SimpleNamespace(min_people=2, max_people=4)
    check_guests(CatalogKind.PACKAGE, package, 2)
    check_guests(CatalogKind.PACKAGE, package, 4)
    for guests in (1, 5):
        with pytest.raises(BookingRuleError, match="2 to 4 people"):
            check_guests(CatalogKind.PACKAGE, package, guests)


def test_capacity_limits():
    check_guests(CatalogKind.VEHICLE, SimpleNamespace(capacity=2), 2)
    with pytest.raises(BookingRuleError, match="Maximum capacity is 2"):
        check_guests(CatalogKind.VEHICLE, SimpleNamespace(capacity=2), 3)

    # Unknown capacity and kinds without capacity accept any party
    check_guests(CatalogKind.ACCOMMODATION, SimpleNamespace(capacity=None), 12)
    check_guests(CatalogKind.EXPERIENCE, SimpleNamespace(), 40)
