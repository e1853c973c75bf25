"""Tests for the in-memory storage backend."""

from concurrent.futures import ThreadPoolExecutor

from foodshare.adapters.in_memory_store import InMemoryMarketplaceStore
from foodshare.domain.models import FoodAttribute


def test_attribute_ids_skip_preloaded_entries() -> None:
    store = InMemoryMarketplaceStore(
        food_attributes={1: FoodAttribute(id=1, name="Vegan", category="dietary")}
    )

    created = store.create_food_attribute("Halal", "dietary", None)

    assert created.id == 2
    assert store.get_food_attribute(2) == created


def test_concurrent_upserts_leave_one_row_per_pair() -> None:
    store = InMemoryMarketplaceStore()
    attribute = store.create_food_attribute("Vegan", "dietary", None)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(
            pool.map(
                lambda importance: store.upsert_recipient_preference(
                    1, attribute.id, importance % 6
                ),
                range(200),
            )
        )

    details = store.get_recipient_preferences(1)
    assert len(details) == 1
    assert 0 <= details[0].importance <= 5


def test_concurrent_attribute_creation_assigns_unique_ids() -> None:
    store = InMemoryMarketplaceStore()

    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(
            pool.map(
                lambda index: store.create_food_attribute(
                    f"Attribute {index}", "misc", None
                ),
                range(100),
            )
        )

    assert len({attribute.id for attribute in created}) == 100


def test_update_missing_preference_returns_none() -> None:
    store = InMemoryMarketplaceStore()

    assert store.update_recipient_preference(1, 1, 3) is None
