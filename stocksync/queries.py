"""GraphQL documents and search-expression builders for the Shopify Admin API."""

import json
from typing import Iterable

QUANTITY_NAMES = ["on_hand", "available", "committed", "incoming"]

# Shopify caps every connection page at 250 nodes.
MAX_PAGE_SIZE = 250

LOCATIONS_QUERY = """
query { locations(first: 250) { edges { node { id name } } } }
"""

INVENTORY_ITEMS_QUERY = """
query InventoryBySku($q: String!, $loc: ID!) {
  inventoryItems(first: 250, query: $q) {
    edges { node {
      sku
      inventoryLevel(locationId: $loc) {
        quantities(names: ["on_hand", "available", "committed", "incoming"]) { name quantity }
      }
    } }
  }
}
"""

PRODUCT_VARIANTS_QUERY = """
query VariantsBySku($q: String!, $loc: ID!) {
  productVariants(first: 250, query: $q) {
    edges { node {
      sku
      inventoryItem {
        inventoryLevel(locationId: $loc) {
          quantities(names: ["on_hand", "available", "committed", "incoming"]) { name quantity }
        }
      }
    } }
  }
}
"""

PRODUCTS_QUERY = """
query ProductsExport($first: Int!, $after: String, $query: String!) {
  products(first: $first, after: $after, query: $query) {
    pageInfo { hasNextPage endCursor }
    edges {
      node {
        id
        title
        vendor
        productType
        status
        publishedOnCurrentPublication
        updatedAt
        handle
        tags
        priceRangeV2 { minVariantPrice { amount currencyCode } }
        variants(first: 250) {
          edges {
            node {
              id
              title
              sku
              price
              inventoryItem { unitCost { amount currencyCode } }
              selectedOptions { name value }
            }
          }
        }
      }
    }
  }
}
"""


def _quote_single(value: str) -> str:
    return "'" + value.replace("'", "\\'") + "'"


def inventory_item_search(skus: Iterable[str]) -> str:
    """`sku:("A" OR "B")` for the inventoryItems search backend."""
    return "sku:(" + " OR ".join(json.dumps(s, ensure_ascii=False) for s in skus) + ")"


def variant_search(skus: Iterable[str]) -> str:
    """`sku:'A' OR sku:'B'` for the productVariants search backend."""
    return " OR ".join("sku:" + _quote_single(str(s)) for s in skus)


def products_search(statuses: Iterable[str], vendor: str) -> str:
    """Server-side narrowing for the catalog export; filters are re-applied locally."""
    status_terms = " OR ".join(f"status:{s.lower()}" for s in sorted(statuses))
    return f"({status_terms}) vendor:{_quote_single(vendor)}"
