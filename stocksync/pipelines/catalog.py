import logging

from stocksync import data_handler, settings
from stocksync.catalog import CatalogExporter
from stocksync.data_handler import WorkbookStore
from stocksync.pipeline import DataPipeline
from stocksync.schemas import ExportRow
from stocksync.settings import ExportFilters
from stocksync.shopify_client import ShopifyClient

logger = logging.getLogger(__name__)


class CatalogPipeline(DataPipeline):
    """Rebuilds the ProductsExport sheet from the live catalog."""

    def __init__(
        self,
        client: ShopifyClient,
        store: WorkbookStore,
        filters: ExportFilters = ExportFilters(),
        exporter: CatalogExporter | None = None,
        test_mode: bool = False,
    ):
        super().__init__("products export", store, test_mode=test_mode)
        self.filters = filters
        self.exporter = exporter or CatalogExporter(client)

    def extract(self) -> list[ExportRow]:
        logger.info(
            f"--- Fetching catalog for vendor '{self.filters.vendor}' "
            f"({', '.join(sorted(self.filters.allowed_statuses))}) ---"
        )
        # Nothing is written until every page is in; a failure here leaves the sheet as it was.
        return self.exporter.export(self.filters)

    def transform(self, raw_data: list[ExportRow]) -> list[list[str]]:
        self.status_summary["Rows written"] = len(raw_data)
        return [row.as_row() for row in raw_data]

    def load(self, transformed: list[list[str]]) -> None:
        self.store.replace_sheet(settings.EXPORT_SHEET, settings.EXPORT_HEADERS, transformed)
        self.store.save()

        if not self.test_mode:
            data_handler.save_outputs(settings.EXPORT_HEADERS, transformed, "products_export")
        else:
            logger.info("🧪 Test Mode: Skipping CSV snapshot.")
