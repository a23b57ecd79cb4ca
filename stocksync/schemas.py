from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ShopifyModel(BaseModel):
    """
    Base for Shopify GraphQL response shapes. Fields are snake_case in Python
    and camelCase on the wire; anything we did not ask for is ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


# --- Shared ---


class Quantity(ShopifyModel):
    name: str
    quantity: int | None = None


class InventoryLevel(ShopifyModel):
    quantities: list[Quantity] | None = None


class Money(ShopifyModel):
    amount: str | None = None
    currency_code: str | None = None


class PageInfo(ShopifyModel):
    has_next_page: bool = False
    end_cursor: str | None = None


# --- locations(first: 250) ---


class LocationNode(ShopifyModel):
    id: str
    name: str | None = None


class LocationEdge(ShopifyModel):
    node: LocationNode


class LocationConnection(ShopifyModel):
    edges: list[LocationEdge] = Field(default_factory=list)


class LocationsData(ShopifyModel):
    locations: LocationConnection | None = None


class LocationsResponse(ShopifyModel):
    data: LocationsData | None = None

    def nodes(self) -> list[LocationNode]:
        if self.data is None or self.data.locations is None:
            return []
        return [edge.node for edge in self.data.locations.edges]


# --- inventoryItems(query: "sku:(...)") ---


class InventoryItemNode(ShopifyModel):
    sku: str | None = None
    inventory_level: InventoryLevel | None = None


class InventoryItemEdge(ShopifyModel):
    node: InventoryItemNode


class InventoryItemConnection(ShopifyModel):
    edges: list[InventoryItemEdge] = Field(default_factory=list)


class InventoryItemsData(ShopifyModel):
    inventory_items: InventoryItemConnection | None = None


class InventoryItemsResponse(ShopifyModel):
    data: InventoryItemsData | None = None

    def hits(self) -> list[tuple[str | None, InventoryLevel | None]]:
        if self.data is None or self.data.inventory_items is None:
            return []
        return [
            (edge.node.sku, edge.node.inventory_level)
            for edge in self.data.inventory_items.edges
        ]


# --- productVariants(query: "sku:'...'") ---


class VariantInventoryItem(ShopifyModel):
    inventory_level: InventoryLevel | None = None


class VariantLevelNode(ShopifyModel):
    sku: str | None = None
    inventory_item: VariantInventoryItem | None = None


class VariantLevelEdge(ShopifyModel):
    node: VariantLevelNode


class VariantLevelConnection(ShopifyModel):
    edges: list[VariantLevelEdge] = Field(default_factory=list)


class ProductVariantsData(ShopifyModel):
    product_variants: VariantLevelConnection | None = None


class ProductVariantsResponse(ShopifyModel):
    data: ProductVariantsData | None = None

    def hits(self) -> list[tuple[str | None, InventoryLevel | None]]:
        if self.data is None or self.data.product_variants is None:
            return []
        return [
            (
                edge.node.sku,
                edge.node.inventory_item.inventory_level
                if edge.node.inventory_item
                else None,
            )
            for edge in self.data.product_variants.edges
        ]


# --- products(first, after, query) ---


class SelectedOption(ShopifyModel):
    name: str | None = None
    value: str | None = None


class UnitCostItem(ShopifyModel):
    unit_cost: Money | None = None


class CatalogVariant(ShopifyModel):
    id: str
    title: str | None = None
    sku: str | None = None
    price: str | None = None
    inventory_item: UnitCostItem | None = None
    selected_options: list[SelectedOption] | None = None


class CatalogVariantEdge(ShopifyModel):
    node: CatalogVariant


class CatalogVariantConnection(ShopifyModel):
    edges: list[CatalogVariantEdge] = Field(default_factory=list)


class PriceRange(ShopifyModel):
    min_variant_price: Money | None = None


class CatalogProduct(ShopifyModel):
    id: str
    title: str | None = None
    vendor: str | None = None
    product_type: str | None = None
    status: str | None = None
    published_on_current_publication: bool | None = None
    updated_at: str | None = None
    handle: str | None = None
    tags: list[str] | None = None
    price_range_v2: PriceRange | None = Field(default=None, alias="priceRangeV2")
    variants: CatalogVariantConnection | None = None

    def variant_nodes(self) -> list[CatalogVariant]:
        return [edge.node for edge in self.variants.edges] if self.variants else []


class CatalogProductEdge(ShopifyModel):
    node: CatalogProduct


class ProductConnection(ShopifyModel):
    page_info: PageInfo | None = None
    edges: list[CatalogProductEdge] = Field(default_factory=list)


class ProductsData(ShopifyModel):
    products: ProductConnection | None = None


class ProductsResponse(ShopifyModel):
    data: ProductsData | None = None

    def products(self) -> list[CatalogProduct]:
        if self.data is None or self.data.products is None:
            return []
        return [edge.node for edge in self.data.products.edges]

    def next_cursor(self) -> str | None:
        """The cursor for the following page, or None when this was the last."""
        if self.data is None or self.data.products is None:
            return None
        page_info = self.data.products.page_info
        if page_info is None or not page_info.has_next_page:
            return None
        return page_info.end_cursor


# --- Domain records ---


class InventoryRecord(BaseModel):
    """Location-scoped quantities for one SKU."""

    on_hand: int = 0
    available: int = 0
    committed: int = 0
    incoming: int = 0

    @classmethod
    def from_level(cls, level: InventoryLevel | None) -> "InventoryRecord":
        """
        Sums every entry of each named kind; Shopify can return the same kind
        more than once. When on_hand sums to zero it is replaced by
        available + committed, which also covers responses that omit on_hand.
        """
        totals = {"on_hand": 0, "available": 0, "committed": 0, "incoming": 0}
        for q in (level.quantities if level and level.quantities else []):
            if q.name in totals:
                totals[q.name] += q.quantity or 0
        if not totals["on_hand"]:
            totals["on_hand"] = totals["available"] + totals["committed"]
        return cls(**totals)

    def as_row(self) -> list[int]:
        return [self.on_hand, self.available, self.committed, self.incoming]


class ExportRow(BaseModel):
    """
    One flattened (product, variant) pair of the products export.
    Field order follows the sheet columns; the blank spacer column after
    Handle is inserted by as_row().
    """

    product_id: str = Field(..., alias="ProductID")
    product_title: str = Field(default="", alias="ProductTitle")
    vendor: str = Field(default="", alias="Vendor")
    product_type: str = Field(default="", alias="ProductType")
    status: str = Field(default="", alias="Status")
    published_online: str = Field(default="N", alias="PublishedOnline")
    updated_at: str = Field(default="", alias="UpdatedAt")
    handle: str = Field(default="", alias="Handle")
    option1_name: str = Field(default="", alias="Option1Name")
    option1_value: str = Field(default="", alias="Option1Value")
    option2_name: str = Field(default="", alias="Option2Name")
    option2_value: str = Field(default="", alias="Option2Value")
    option3_name: str = Field(default="", alias="Option3Name")
    option3_value: str = Field(default="", alias="Option3Value")
    variant_id: str = Field(..., alias="VariantID")
    variant_title: str = Field(default="", alias="VariantTitle")
    variant_sku: str = Field(..., alias="VariantSKU")
    supplier: str = Field(default="", alias="Supplier")
    rrp: str = Field(default="", alias="RRP")
    cost: str = Field(default="", alias="Cost")

    model_config = ConfigDict(populate_by_name=True)

    def as_row(self) -> list[str]:
        values = list(self.model_dump().values())
        return values[:8] + [""] + values[8:]
