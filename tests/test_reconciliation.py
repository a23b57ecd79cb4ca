"""Tests for the two-pass SKU -> quantity reconciliation."""

from __future__ import annotations

import pytest

from stocksync.exceptions import TransportError
from stocksync.queries import INVENTORY_ITEMS_QUERY, PRODUCT_VARIANTS_QUERY
from stocksync.reconciliation import InventoryReconciler
from stocksync.schemas import InventoryLevel, InventoryRecord

from conftest import inventory_items_payload, quantities, variants_payload

LOC = "gid://shopify/Location/1"


def test_pass_one_hits_are_returned_without_fallback(make_client) -> None:
    client = make_client(
        inventory_items=lambda v: inventory_items_payload({"AS-1": quantities(5, 3, 2, 1)}),
        variants=lambda v: pytest.fail("fallback should not run"),
    )

    result = InventoryReconciler(client).reconcile({"AS-1"}, LOC)

    assert result == {"AS-1": InventoryRecord(on_hand=5, available=3, committed=2, incoming=1)}
    assert client.calls_for(INVENTORY_ITEMS_QUERY) == [{"q": 'sku:("AS-1")', "loc": LOC}]


def test_fallback_fills_only_pass_one_misses(make_client) -> None:
    client = make_client(
        inventory_items=lambda v: inventory_items_payload({"AS-1": quantities(5, 5)}),
        variants=lambda v: variants_payload({"AS-2": quantities(7, 6, 1), "AS-1": quantities(99, 99)}),
    )

    result = InventoryReconciler(client).reconcile(["AS-1", "AS-2"], LOC)

    assert result["AS-1"].on_hand == 5
    assert result["AS-2"] == InventoryRecord(on_hand=7, available=6, committed=1, incoming=0)
    assert client.calls_for(PRODUCT_VARIANTS_QUERY) == [{"q": "sku:'AS-2'", "loc": LOC}]


def test_result_keys_are_a_subset_of_queried_skus(make_client) -> None:
    client = make_client(
        inventory_items=lambda v: inventory_items_payload({"AS-1": quantities(1), "AS-10": quantities(4)}),
        variants=lambda v: variants_payload({"OTHER": quantities(2)}),
    )

    result = InventoryReconciler(client).reconcile(["AS-1", "GHOST"], LOC)

    assert set(result) == {"AS-1"}


def test_keys_come_from_trimmed_api_sku(make_client) -> None:
    client = make_client(
        inventory_items=lambda v: inventory_items_payload({" AS-1 ": quantities(3)}),
        variants=lambda v: variants_payload({}),
    )
    assert InventoryReconciler(client).reconcile(["AS-1"], LOC)["AS-1"].on_hand == 3


def test_batches_are_fifty_then_twenty_five(make_client) -> None:
    skus = [f"SKU-{i:03d}" for i in range(120)]
    client = make_client(
        inventory_items=lambda v: inventory_items_payload({}),
        variants=lambda v: variants_payload({}),
    )

    result = InventoryReconciler(client).reconcile(skus, LOC)

    assert result == {}
    assert len(client.calls_for(INVENTORY_ITEMS_QUERY)) == 3
    assert len(client.calls_for(PRODUCT_VARIANTS_QUERY)) == 5
    first_batch = client.calls_for(INVENTORY_ITEMS_QUERY)[0]["q"]
    assert first_batch.count(" OR ") == 49


def test_variant_search_escapes_single_quotes(make_client) -> None:
    client = make_client(
        inventory_items=lambda v: inventory_items_payload({}),
        variants=lambda v: variants_payload({}),
    )
    InventoryReconciler(client).reconcile(["O'NEIL-1"], LOC)
    assert client.calls_for(PRODUCT_VARIANTS_QUERY)[0]["q"] == "sku:'O\\'NEIL-1'"


def test_reconcile_is_idempotent_for_unchanged_remote_state(make_client) -> None:
    client = make_client(
        inventory_items=lambda v: inventory_items_payload({"AS-1": quantities(2, 1, 1)}),
        variants=lambda v: variants_payload({"AS-2": quantities(None, 4, 0, 3)}),
    )
    reconciler = InventoryReconciler(client)
    assert reconciler.reconcile(["AS-1", "AS-2"], LOC) == reconciler.reconcile(["AS-1", "AS-2"], LOC)


def test_failed_batch_aborts_reconciliation(make_client) -> None:
    client = make_client(
        inventory_items=lambda v: TransportError("HTTP 500", status_code=500),
    )
    with pytest.raises(TransportError):
        InventoryReconciler(client).reconcile(["AS-1"], LOC)


def test_empty_input_makes_no_calls(make_client) -> None:
    client = make_client()
    assert InventoryReconciler(client).reconcile(set(), LOC) == {}
    assert client.calls == []


def test_record_sums_repeated_quantity_kinds() -> None:
    level = InventoryLevel.model_validate(
        {
            "quantities": [
                {"name": "available", "quantity": 2},
                {"name": "available", "quantity": 3},
                {"name": "on_hand", "quantity": 4},
                {"name": "on_hand", "quantity": None},
                {"name": "incoming", "quantity": 1},
            ]
        }
    )
    assert InventoryRecord.from_level(level) == InventoryRecord(on_hand=4, available=5, committed=0, incoming=1)


def test_record_on_hand_falls_back_to_available_plus_committed() -> None:
    level = InventoryLevel.model_validate({"quantities": quantities(None, 4, 2, 9)})
    assert InventoryRecord.from_level(level).on_hand == 6

    zero = InventoryLevel.model_validate({"quantities": quantities(0, 1, 1)})
    assert InventoryRecord.from_level(zero).on_hand == 2


def test_record_from_missing_level_is_zero() -> None:
    assert InventoryRecord.from_level(None) == InventoryRecord()
    assert InventoryRecord.from_level(InventoryLevel(quantities=None)).as_row() == [0, 0, 0, 0]
