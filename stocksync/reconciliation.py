"""
Two-tier SKU -> quantity lookup.

Shopify indexes SKUs differently for inventory items and product variants, and
the two searches do not always agree on hits. Pass 1 queries inventory items;
pass 2 retries whatever pass 1 missed through the product-variant search.
"""

import logging
from typing import Callable, Iterable

from .queries import (
    INVENTORY_ITEMS_QUERY,
    MAX_PAGE_SIZE,
    PRODUCT_VARIANTS_QUERY,
    inventory_item_search,
    variant_search,
)
from .schemas import (
    InventoryItemsResponse,
    InventoryLevel,
    InventoryRecord,
    ProductVariantsResponse,
)
from .shopify_client import ShopifyClient
from .utils import chunked

logger = logging.getLogger(__name__)

PRIMARY_BATCH_SIZE = 50
FALLBACK_BATCH_SIZE = 25

Hits = list[tuple[str | None, InventoryLevel | None]]


class InventoryReconciler:
    def __init__(
        self,
        client: ShopifyClient,
        primary_batch_size: int = PRIMARY_BATCH_SIZE,
        fallback_batch_size: int = FALLBACK_BATCH_SIZE,
    ):
        self.client = client
        self.primary_batch_size = primary_batch_size
        self.fallback_batch_size = fallback_batch_size

    def reconcile(
        self, skus: Iterable[str], location_id: str
    ) -> dict[str, InventoryRecord]:
        """
        Returns a record for every queried SKU either pass found. SKUs neither
        pass found are absent; callers supply the zero default. Any failed
        batch aborts the whole reconciliation.
        """
        queried = list(dict.fromkeys(skus))
        if not queried:
            return {}

        logger.info(f"🔎 Pass 1: inventoryItems lookup for {len(queried)} SKUs...")
        found = self._run_pass(
            queried,
            self.primary_batch_size,
            lambda chunk: self._inventory_item_hits(chunk, location_id),
        )
        result = {sku: found[sku] for sku in queried if sku in found}
        logger.info(f"  > Pass 1 matched {len(result)}/{len(queried)}")

        missing = [sku for sku in queried if sku not in result]
        if missing:
            logger.info(f"🔁 Pass 2: productVariants fallback for {len(missing)} SKUs...")
            fallback = self._run_pass(
                missing,
                self.fallback_batch_size,
                lambda chunk: self._variant_hits(chunk, location_id),
            )
            # Pass-1 hits are authoritative; pass 2 only fills the gaps.
            filled = {sku: fallback[sku] for sku in missing if sku in fallback}
            result.update(filled)
            logger.info(f"  > Pass 2 matched {len(filled)}/{len(missing)}")

        return result

    def _run_pass(
        self,
        skus: list[str],
        batch_size: int,
        fetch: Callable[[list[str]], Hits],
    ) -> dict[str, InventoryRecord]:
        records: dict[str, InventoryRecord] = {}
        for chunk in chunked(skus, batch_size):
            hits = fetch(chunk)
            if len(hits) >= MAX_PAGE_SIZE:
                logger.warning(
                    f"⚠️ Batch of {len(chunk)} SKUs returned {len(hits)} matches; "
                    f"results past {MAX_PAGE_SIZE} are truncated by Shopify."
                )
            for sku, level in hits:
                # Keyed by the SKU text Shopify stores, not the text we sent.
                key = (sku or "").strip()
                if key:
                    records[key] = InventoryRecord.from_level(level)
        return records

    def _inventory_item_hits(self, chunk: list[str], location_id: str) -> Hits:
        response = self.client.execute_model(
            INVENTORY_ITEMS_QUERY,
            {"q": inventory_item_search(chunk), "loc": location_id},
            InventoryItemsResponse,
        )
        return response.hits()

    def _variant_hits(self, chunk: list[str], location_id: str) -> Hits:
        response = self.client.execute_model(
            PRODUCT_VARIANTS_QUERY,
            {"q": variant_search(chunk), "loc": location_id},
            ProductVariantsResponse,
        )
        return response.hits()
