import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from stocksync import data_handler, settings
from stocksync.data_handler import WorkbookStore
from stocksync.exceptions import LocationNotFoundError
from stocksync.locations import LocationResolver
from stocksync.pipeline import DataPipeline
from stocksync.reconciliation import InventoryReconciler
from stocksync.schemas import InventoryRecord
from stocksync.shopify_client import ShopifyClient
from stocksync.utils import normalize_sku, unique_skus

logger = logging.getLogger(__name__)

ZERO_RECORD = InventoryRecord()


@dataclass
class InventoryExtract:
    sheet_values: list[Any]
    records: dict[str, InventoryRecord]


@dataclass
class InventoryOutput:
    skus: list[str]
    rows: list[list[Any]]
    misses: list[str]


class InventoryPipeline(DataPipeline):
    """
    InventoryLive is the source of truth for SKUs: the operator types them in
    column A and this writes OnHand, Available, Committed, Inbound, LastSync
    into columns B:F on the same rows.
    """

    def __init__(
        self,
        client: ShopifyClient,
        store: WorkbookStore,
        location_name: str = settings.LOCATION_NAME,
        reconciler: InventoryReconciler | None = None,
        test_mode: bool = False,
    ):
        super().__init__("inventory", store, test_mode=test_mode)
        self.client = client
        self.location_name = location_name
        self.reconciler = reconciler or InventoryReconciler(client)
        self.locations = LocationResolver(client)

    def extract(self) -> InventoryExtract | None:
        sheet = self.store.require_sheet(settings.INVENTORY_SHEET)

        # Headers are (re)written on every run; column A data is never cleared.
        self.store.write_block(sheet, 1, 1, [settings.INVENTORY_HEADERS])

        values = self.store.read_column(sheet, column=1, start_row=2)
        if not values:
            logger.warning(f"No SKUs in {settings.INVENTORY_SHEET}!A")
            return None

        skus = unique_skus(values)
        if not skus:
            logger.warning(f"No valid SKUs in {settings.INVENTORY_SHEET}!A")
            return None
        logger.info(f"  > Read {len(values)} rows, {len(skus)} unique SKUs")

        location_id = self.locations.resolve_id(self.location_name)
        if not location_id:
            raise LocationNotFoundError(self.location_name, self.locations.list_names())

        records = self.reconciler.reconcile(skus, location_id)
        return InventoryExtract(sheet_values=values, records=records)

    def transform(self, raw_data: InventoryExtract) -> InventoryOutput:
        now = datetime.now().replace(microsecond=0)
        skus = []
        rows = []
        misses = []
        for value in raw_data.sheet_values:
            sku = normalize_sku(value)
            skus.append(sku)
            record = raw_data.records.get(sku, ZERO_RECORD) if sku else ZERO_RECORD
            rows.append(record.as_row() + [now])
            # Zero across the board: either not found or genuinely empty at this location.
            if sku and not any(record.as_row()):
                misses.append(sku)

        self.status_summary["Rows written"] = len(rows)
        self.status_summary["SKUs resolved"] = len(raw_data.records)
        self.status_summary["Zero-quantity SKUs"] = len(set(misses))
        return InventoryOutput(skus=skus, rows=rows, misses=list(dict.fromkeys(misses)))

    def load(self, transformed: InventoryOutput) -> None:
        sheet = self.store.require_sheet(settings.INVENTORY_SHEET)
        row_count = len(transformed.rows)

        # Clear only B:F for existing rows, then write results back
        self.store.clear_block(sheet, 2, 2, row_count + 1, 6)
        self.store.write_block(sheet, 2, 2, transformed.rows)

        self.store.delete_sheet(settings.DEBUG_SHEET)
        if transformed.misses:
            logger.warning(
                f"⚠️ {len(transformed.misses)} SKUs returned nothing at "
                f"'{self.location_name}'. See {settings.DEBUG_SHEET}."
            )
            debug = self.store.get_or_create_sheet(settings.DEBUG_SHEET)
            debug.cell(row=1, column=1, value=f"SKU not returned at location: {self.location_name}")
            self.store.write_block(debug, 2, 1, [[sku] for sku in transformed.misses])

        self.store.save()

        if not self.test_mode:
            snapshot = [[sku] + row for sku, row in zip(transformed.skus, transformed.rows)]
            data_handler.save_outputs(settings.INVENTORY_HEADERS, snapshot, "inventory_report")
        else:
            logger.info("🧪 Test Mode: Skipping CSV snapshot.")
