"""Pytest configuration: local package import resolution and shared fakes."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    # Ensure tests can import `stocksync` without package installation.
    sys.path.insert(0, project_root_str)

from stocksync.queries import (  # noqa: E402
    INVENTORY_ITEMS_QUERY,
    LOCATIONS_QUERY,
    PRODUCT_VARIANTS_QUERY,
    PRODUCTS_QUERY,
)
from stocksync.shopify_client import ShopifyClient  # noqa: E402


class FakeShopifyClient(ShopifyClient):
    """
    Stands in for the HTTP layer: each GraphQL document is routed to a handler
    that receives the variables and returns the raw response payload.
    """

    def __init__(self, handlers: dict[str, Callable[[dict | None], Any]]):
        self.handlers = handlers
        self.calls: list[tuple[str, dict | None]] = []

    def execute(self, query: str, variables: dict | None = None) -> dict:
        self.calls.append((query, variables))
        result = self.handlers[query](variables)
        if isinstance(result, Exception):
            raise result
        return result

    def calls_for(self, query: str) -> list[dict | None]:
        return [variables for q, variables in self.calls if q == query]


def quantities(on_hand=None, available=0, committed=0, incoming=0) -> list[dict]:
    entries = [
        {"name": "available", "quantity": available},
        {"name": "committed", "quantity": committed},
        {"name": "incoming", "quantity": incoming},
    ]
    if on_hand is not None:
        entries.insert(0, {"name": "on_hand", "quantity": on_hand})
    return entries


def inventory_items_payload(items: dict[str, list[dict]]) -> dict:
    return {
        "data": {
            "inventoryItems": {
                "edges": [
                    {"node": {"sku": sku, "inventoryLevel": {"quantities": qs}}}
                    for sku, qs in items.items()
                ]
            }
        }
    }


def variants_payload(items: dict[str, list[dict]]) -> dict:
    return {
        "data": {
            "productVariants": {
                "edges": [
                    {
                        "node": {
                            "sku": sku,
                            "inventoryItem": {"inventoryLevel": {"quantities": qs}},
                        }
                    }
                    for sku, qs in items.items()
                ]
            }
        }
    }


def locations_payload(*names: str) -> dict:
    return {
        "data": {
            "locations": {
                "edges": [
                    {"node": {"id": f"gid://shopify/Location/{i}", "name": name}}
                    for i, name in enumerate(names, start=1)
                ]
            }
        }
    }


def products_page(products: list[dict], end_cursor: str | None = None) -> dict:
    return {
        "data": {
            "products": {
                "pageInfo": {"hasNextPage": end_cursor is not None, "endCursor": end_cursor},
                "edges": [{"node": p} for p in products],
            }
        }
    }


def product(
    pid: str,
    title: str,
    skus: list[str],
    *,
    vendor: str = "Autospec 4x4",
    status: str = "ACTIVE",
    product_type: str = "Canopy",
    tags: list[str] | None = None,
    min_price: str | None = "199.00",
) -> dict:
    return {
        "id": f"gid://shopify/Product/{pid}",
        "title": title,
        "vendor": vendor,
        "productType": product_type,
        "status": status,
        "publishedOnCurrentPublication": True,
        "updatedAt": "2024-10-01T00:00:00Z",
        "handle": title.lower().replace(" ", "-"),
        "tags": tags or [],
        "priceRangeV2": {"minVariantPrice": {"amount": min_price, "currencyCode": "AUD"}}
        if min_price
        else None,
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": f"gid://shopify/ProductVariant/{pid}{i}",
                        "title": "Default Title",
                        "sku": sku,
                        "price": "249.00",
                        "inventoryItem": {"unitCost": {"amount": "80.00", "currencyCode": "AUD"}},
                        "selectedOptions": [{"name": "Title", "value": "Default Title"}],
                    }
                }
                for i, sku in enumerate(skus)
            ]
        },
    }


@pytest.fixture
def make_client() -> Callable[..., FakeShopifyClient]:
    def _make(**handlers: Callable[[dict | None], Any]) -> FakeShopifyClient:
        routes = {
            "locations": LOCATIONS_QUERY,
            "inventory_items": INVENTORY_ITEMS_QUERY,
            "variants": PRODUCT_VARIANTS_QUERY,
            "products": PRODUCTS_QUERY,
        }
        return FakeShopifyClient({routes[k]: v for k, v in handlers.items()})

    return _make
