import locale
import logging

from stocksync import settings
from stocksync.data_handler import WorkbookStore
from stocksync.logger import setup_logger
from stocksync.pipelines.catalog import CatalogPipeline
from stocksync.pipelines.inventory import InventoryPipeline
from stocksync.shopify_client import ShopifyClient

logger = logging.getLogger(__name__)


def _build_client() -> ShopifyClient:
    # Validates SHOP_DOMAIN / ADMIN_TOKEN before anything touches the network.
    config = settings.load_shop_config()
    logger.info(f"Connecting to {config.host} (API {config.api_version})")
    return ShopifyClient(config)


def _use_system_collation() -> None:
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"⚠️ Could not apply system collation, sorting by code point: {e}")


def refresh_inventory() -> None:
    """Refreshes OnHand/Available/Committed/Inbound for every SKU in InventoryLive."""
    setup_logger()
    try:
        client = _build_client()
        store = WorkbookStore(settings.WORKBOOK_PATH)
        InventoryPipeline(client, store).run()
    except Exception:
        logger.exception("❌ Inventory refresh failed.")
        raise


def refresh_products_export() -> None:
    """Rebuilds the ProductsExport sheet from the live catalog."""
    setup_logger()
    _use_system_collation()
    try:
        client = _build_client()
        store = WorkbookStore(settings.WORKBOOK_PATH, create=True)
        CatalogPipeline(client, store).run()
    except Exception:
        logger.exception("❌ Products export failed.")
        raise


if __name__ == "__main__":
    refresh_inventory()
    refresh_products_export()
