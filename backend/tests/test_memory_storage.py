"""
Tests for the in-memory storage backend
"""

import pytest

from tuca.db.models import CatalogKind
from tuca.storage.base import DuplicateError, NotFoundError
from tuca.storage.memory import MemStorage
from tuca.storage.seed import seed_storage


@pytest.mark.asyncio
async def test_seeded_counts():
    store = MemStorage()
    assert len(await store.list_users()) == 1
    assert await store.count_items(CatalogKind.EXPERIENCE) == 3
    assert await store.count_items(CatalogKind.PACKAGE) == 3
    assert await store.count_items(CatalogKind.VEHICLE, featured_only=True) == 0
    assert len(await store.list_testimonials(approved_only=True)) == 3


@pytest.mark.asyncio
async def test_unseeded_storage_is_empty():
    store = MemStorage(seed=False)
    assert await store.list_users() == []
    assert await store.list_items(CatalogKind.RESTAURANT) == []


@pytest.mark.asyncio
async def test_seed_links_testimonials_to_created_rows():
    store = MemStorage(seed=False)
    early_user = await store.create_user({"email": "early@example.com", "password_hash": "x"})
    stale = await store.create_item(CatalogKind.EXPERIENCE, {
        "title": "Retired Tour", "description": "Gone", "price": 10, "duration": "1 hour", "image": "old.jpg",
    })
    await store.delete_item(CatalogKind.EXPERIENCE, stale.id)

    stats = await seed_storage(store)
    assert stats == {"users": 1, "catalog_items": 12, "testimonials": 3}

    admin = await store.get_user_by_email("admin@tucanoronha.com")
    assert admin.id != early_user.id
    testimonials = await store.list_testimonials()
    assert {t.user_id for t in testimonials} == {admin.id}
    # Experiences now start at id 2, so positions 1 and 3 map to ids 2 and 4
    assert [t.experience_id for t in testimonials] == [2, None, 4]
    assert (await store.get_item(CatalogKind.EXPERIENCE, 2)).title == "Dolphin Bay Tour"


@pytest.mark.asyncio
async def test_ids_keep_increasing_after_delete():
    store = MemStorage(seed=False)
    first = await store.create_item(CatalogKind.VEHICLE, {
        "vehicle_type": "bike", "title": "Bike", "description": "Two wheels",
        "price_per_day": 20, "image": "bike.jpg",
    })
    await store.delete_item(CatalogKind.VEHICLE, first.id)
    second = await store.create_item(CatalogKind.VEHICLE, {
        "vehicle_type": "bike", "title": "Bike 2", "description": "Two wheels",
        "price_per_day": 25, "image": "bike.jpg",
    })
    assert second.id == first.id + 1


@pytest.mark.asyncio
async def test_user_email_is_unique_and_normalized():
    store = MemStorage()
    user = await store.create_user({"email": " Someone@Example.COM ", "password_hash": "x"})
    assert user.email == "someone@example.com"
    assert (await store.get_user_by_email("SOMEONE@example.com")).id == user.id

    with pytest.raises(DuplicateError):
        await store.create_user({"email": "someone@example.com", "password_hash": "y"})
    with pytest.raises(DuplicateError):
        await store.update_user(1, {"email": "someone@example.com"})


@pytest.mark.asyncio
async def test_update_missing_rows():
    store = MemStorage()
    with pytest.raises(NotFoundError):
        await store.update_user(99, {"first_name": "Nobody"})
    with pytest.raises(NotFoundError):
        await store.update_item(CatalogKind.EXPERIENCE, 99, {"price": 1})
    with pytest.raises(NotFoundError):
        await store.update_booking_status(99, "confirmed")
    with pytest.raises(NotFoundError):
        await store.approve_testimonial(99)


@pytest.mark.asyncio
async def test_update_ignores_id_and_created_at():
    store = MemStorage()
    item = await store.get_item(CatalogKind.EXPERIENCE, 1)
    created_at = item.created_at
    updated = await store.update_item(CatalogKind.EXPERIENCE, 1, {"id": 50, "created_at": None, "price": 99})
    assert updated.id == 1
    assert updated.created_at == created_at
    assert updated.price == 99


@pytest.mark.asyncio
async def test_duplicate_favorite():
    store = MemStorage()
    data = {"user_id": 1, "item_type": "experience", "item_id": 2}
    await store.add_favorite(data)
    with pytest.raises(DuplicateError):
        await store.add_favorite(data)


@pytest.mark.asyncio
async def test_delete_item_cascades():
    store = MemStorage()
    await store.add_favorite({"user_id": 1, "item_type": "accommodation", "item_id": 1})
    await store.add_favorite({"user_id": 1, "item_type": "experience", "item_id": 1})

    assert await store.delete_item(CatalogKind.ACCOMMODATION, 1) is True
    assert await store.delete_item(CatalogKind.ACCOMMODATION, 1) is False

    remaining = await store.list_favorites(1)
    assert [(f.item_type, f.item_id) for f in remaining] == [("experience", 1)]
    testimonial = await store.get_testimonial(2)
    assert testimonial.accommodation_id is None


@pytest.mark.asyncio
async def test_bookings_filtered_by_user():
    store = MemStorage()
    for user_id in (1, 2, 1):
        await store.create_booking({
            "user_id": user_id, "booking_type": "experience", "item_id": 1,
            "start_date": "2026-12-01T10:00:00", "end_date": "2026-12-01T12:00:00",
            "guests": 1, "total_price": 120.0, "status": "pending",
        })
    assert [b.id for b in await store.list_bookings(user_id=1)] == [1, 3]
    assert len(await store.list_bookings()) == 3


@pytest.mark.asyncio
async def test_health_check():
    health = await MemStorage().health_check()
    assert health == {"status": "healthy", "backend": "memory", "users": 1, "bookings": 0}
