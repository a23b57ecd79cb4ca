import locale
import logging

from . import settings
from .queries import MAX_PAGE_SIZE, PRODUCTS_QUERY, products_search
from .schemas import CatalogProduct, CatalogVariant, ExportRow, ProductsResponse
from .settings import ExportFilters
from .shopify_client import ShopifyClient
from .utils import bool_to_yn

logger = logging.getLogger(__name__)


def derive_supplier(tags: list[str] | None, vendor: str | None = None) -> str:
    """
    Looks the product's tags up in SUPPLIER_TAG_MAP (case-insensitive).
    Vendor is accepted but unused: falling back to it is currently disabled.
    """
    tag_set = {str(t).strip().lower() for t in (tags or []) if str(t).strip()}
    for tag, supplier in settings.SUPPLIER_TAG_MAP.items():
        if tag.lower() in tag_set:
            return supplier
    return settings.SUPPLIER_DEFAULT


def passes_filters(product: CatalogProduct, filters: ExportFilters) -> bool:
    allowed = {s.upper() for s in filters.allowed_statuses}
    if (product.status or "").upper() not in allowed:
        return False
    if (product.vendor or "") != filters.vendor:
        return False
    title = product.title or ""
    if any(title.startswith(prefix) for prefix in filters.excluded_title_prefixes):
        return False
    if (product.product_type or "") in filters.excluded_product_types:
        return False
    return True


def flatten_variant(
    product: CatalogProduct, variant: CatalogVariant, sku: str, supplier: str
) -> ExportRow:
    options = list(variant.selected_options or [])[:3]
    options += [None] * (3 - len(options))
    option_cells = {}
    for i, opt in enumerate(options, start=1):
        option_cells[f"option{i}_name"] = (opt.name or "") if opt else ""
        option_cells[f"option{i}_value"] = (opt.value or "") if opt else ""

    # RRP: product-level minimum price first, then the variant's own price.
    min_price = product.price_range_v2.min_variant_price if product.price_range_v2 else None
    rrp = (min_price.amount if min_price else None) or variant.price or ""

    unit_cost = variant.inventory_item.unit_cost if variant.inventory_item else None
    cost = (unit_cost.amount if unit_cost else None) or ""

    return ExportRow(
        product_id=product.id,
        product_title=product.title or "",
        vendor=product.vendor or "",
        product_type=product.product_type or "",
        status=product.status or "",
        published_online=bool_to_yn(product.published_on_current_publication),
        updated_at=product.updated_at or "",
        handle=product.handle or "",
        variant_id=variant.id,
        variant_title=variant.title or "",
        variant_sku=sku,
        supplier=supplier,
        rrp=rrp,
        cost=cost,
        **option_cells,
    )


def sort_rows(rows: list[ExportRow]) -> list[ExportRow]:
    """Stable sort by product title, then SKU, using the active locale's collation."""
    return sorted(
        rows,
        key=lambda r: (locale.strxfrm(r.product_title), locale.strxfrm(r.variant_sku)),
    )


class CatalogExporter:
    """Paginates the full catalog and flattens it into one row per SKU."""

    def __init__(self, client: ShopifyClient, page_size: int = MAX_PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    def fetch_pages(self, filters: ExportFilters):
        """Yields each page of products until Shopify reports no next page."""
        search = products_search(filters.allowed_statuses, filters.vendor)
        after = None
        page = 0
        while True:
            response = self.client.execute_model(
                PRODUCTS_QUERY,
                {"first": self.page_size, "after": after, "query": search},
                ProductsResponse,
            )
            page += 1
            products = response.products()
            logger.info(f"  page {page}: +{len(products)} products")
            yield products

            after = response.next_cursor()
            if after is None:
                break

    def export(self, filters: ExportFilters = ExportFilters()) -> list[ExportRow]:
        """
        Returns the filtered, flattened and sorted export. A SKU appears at most
        once across the whole export; the first occurrence wins.
        """
        rows: list[ExportRow] = []
        seen_skus: set[str] = set()
        skipped = 0

        for products in self.fetch_pages(filters):
            for product in products:
                if not passes_filters(product, filters):
                    skipped += 1
                    continue

                supplier = derive_supplier(product.tags, product.vendor)
                for variant in product.variant_nodes():
                    sku = (variant.sku or "").strip()
                    if not sku or sku in seen_skus:
                        continue
                    seen_skus.add(sku)
                    rows.append(flatten_variant(product, variant, sku, supplier))

        logger.info(f"✅ Export built: {len(rows)} rows ({skipped} products filtered out)")
        return sort_rows(rows)
