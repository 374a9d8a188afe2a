"""Tests for the inventory query engine."""

from uuid import uuid4

import pytest

from fresh_keeper.domain.inventory import StorageLocation
from fresh_keeper.services.query import (
    FilterCriteria,
    StatusFilter,
    filter_items,
    move,
    summarize,
)
from tests.conftest import NOW, days, make_item


def _inventory():  # type: ignore[no-untyped-def]
    fridge, freezer = uuid4(), uuid4()
    dairy = uuid4()
    items = {
        "milk": make_item(
            "Whole Milk",
            added=NOW - days(3),
            expiry=NOW + days(1),
            location_id=fridge,
            category_id=dairy,
        ),
        "yogurt": make_item(
            "Greek Yogurt",
            added=NOW - days(1),
            expiry=NOW - days(2),
            location_id=fridge,
            category_id=dairy,
        ),
        "peas": make_item("Frozen Peas", added=NOW - days(5), location_id=freezer),
        "steak": make_item(
            "Ribeye Steak",
            added=NOW - days(2),
            expiry=NOW + days(10),
            location_id=freezer,
        ),
    }
    return items, fridge, freezer, dairy


def test_filter_all_orders_newest_first() -> None:
    items, *_ = _inventory()

    result = filter_items(list(items.values()), FilterCriteria(), NOW)

    assert [item.name for item in result] == [
        "Greek Yogurt",
        "Ribeye Steak",
        "Whole Milk",
        "Frozen Peas",
    ]


def test_filter_by_status() -> None:
    items, *_ = _inventory()
    all_items = list(items.values())

    expiring = filter_items(
        all_items, FilterCriteria(status=StatusFilter.EXPIRING_SOON), NOW
    )
    expired = filter_items(all_items, FilterCriteria(status=StatusFilter.EXPIRED), NOW)

    assert expiring == [items["milk"]]
    assert expired == [items["yogurt"]]


@pytest.mark.parametrize(
    ("status", "name"), [("expiringSoon", "milk"), ("expired", "yogurt")]
)
def test_filter_by_status_value(status: str, name: str) -> None:
    items, *_ = _inventory()

    result = filter_items(
        list(items.values()),
        FilterCriteria(status=status),  # type: ignore[arg-type]
        NOW,
    )

    assert result == [items[name]]


def test_filters_compose_with_and() -> None:
    items, fridge, freezer, dairy = _inventory()
    all_items = list(items.values())

    in_fridge_dairy = filter_items(
        all_items, FilterCriteria(location_id=fridge, category_id=dairy), NOW
    )
    expired_in_freezer = filter_items(
        all_items,
        FilterCriteria(status=StatusFilter.EXPIRED, location_id=freezer),
        NOW,
    )

    assert in_fridge_dairy == [items["yogurt"], items["milk"]]
    assert expired_in_freezer == []


def test_search_is_case_insensitive_substring() -> None:
    items, *_ = _inventory()

    result = filter_items(
        list(items.values()), FilterCriteria(search_text="  MILK "), NOW
    )

    assert result == [items["milk"]]


def test_blank_search_matches_everything() -> None:
    items, *_ = _inventory()

    result = filter_items(list(items.values()), FilterCriteria(search_text=""), NOW)

    assert len(result) == len(items)


def test_filter_is_idempotent() -> None:
    items, fridge, *_ = _inventory()
    criteria = FilterCriteria(location_id=fridge, search_text="e")

    once = filter_items(list(items.values()), criteria, NOW)
    twice = filter_items(once, criteria, NOW)

    assert once == twice


def test_summarize_counts_statuses() -> None:
    items, *_ = _inventory()

    summary = summarize(list(items.values()), NOW)

    assert summary.total == 4
    assert summary.expiring_soon == 1
    assert summary.expired == 1


def _locations(count: int) -> list[StorageLocation]:
    return [
        StorageLocation(id=uuid4(), name=f"Shelf {index}", sort_order=index * 10)
        for index in range(count)
    ]


@pytest.mark.parametrize(("source", "destination"), [(0, 3), (3, 0), (1, 2), (2, 2)])
def test_move_yields_dense_permutation(source: int, destination: int) -> None:
    locations = _locations(4)

    moved = move(locations, source, destination)

    assert [entry.sort_order for entry in moved] == [0, 1, 2, 3]
    assert moved[destination].id == locations[source].id
    assert {entry.id for entry in moved} == {entry.id for entry in locations}


def test_move_rejects_out_of_range_index() -> None:
    with pytest.raises(ValueError, match="Cannot move"):
        move(_locations(2), 0, 2)
