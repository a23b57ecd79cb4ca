import os
from pathlib import Path
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ConfigurationError

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
WORKBOOK_PATH = BASE_DIR / os.getenv("WORKBOOK_PATH", "data/replenishment.xlsx")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
SAVE_CSV_OUTPUT = os.getenv("SAVE_CSV_OUTPUT", "1") == "1"

# --- Shopify ---
DEFAULT_API_VERSION = "2024-10"
SHOP_DOMAIN_SUFFIX = ".myshopify.com"

# Must match Shopify Admin -> Settings -> Locations -> Name
LOCATION_NAME = os.getenv("LOCATION_NAME", "Autospec 4x4 Penrith")

# --- Sheet Names ---
INVENTORY_SHEET = "InventoryLive"
EXPORT_SHEET = "ProductsExport"
DEBUG_SHEET = "Debug_NotFound"

# --- Header Schemas ---
INVENTORY_HEADERS = ["SKU", "OnHand", "Available", "Committed", "Inbound", "LastSync"]

EXPORT_HEADERS = [
    "ProductID",
    "ProductTitle",
    "Vendor",
    "ProductType",
    "Status",
    "PublishedOnline",
    "UpdatedAt",
    "Handle",
    "",
    "Option1Name",
    "Option1Value",
    "Option2Name",
    "Option2Value",
    "Option3Name",
    "Option3Value",
    "VariantID",
    "VariantTitle",
    "VariantSKU",
    "Supplier",
    "RRP",
    "Cost",
]

# --- Products Export Business Logic ---
TARGET_VENDOR = "Autospec 4x4"
ALLOWED_STATUSES = {"ACTIVE", "UNLISTED"}
EXCLUDED_TITLE_PREFIXES = ["Scratch & Dent -"]  # startswith, case-sensitive
EXCLUDED_PRODUCT_TYPES = [
    "GWM Bundle",
    "Bolt Fitting Kit",
    "Bolt",
    "Washer",
    "Nut",
    "Screw",
    "Suspension",
    "Nuts & Bolts",
    "Colour Coding",
    "Freight",
    "Nutsert",
]

# Tag (case-insensitive) -> Supplier. First matching entry wins.
SUPPLIER_TAG_MAP = {"hct": "Hangzhou Case Tools"}
SUPPLIER_DEFAULT = ""


class ShopConfig(BaseModel):
    """
    Connection settings for one Shopify store. Built once at start-up and
    passed into the client; nothing downstream reads the environment.
    """

    model_config = ConfigDict(frozen=True)

    shop_domain: str
    admin_token: str
    api_version: str = DEFAULT_API_VERSION

    @property
    def host(self) -> str:
        return self.shop_domain.split("://", 1)[-1].strip("/")

    @property
    def graphql_url(self) -> str:
        return f"https://{self.host}/admin/api/{self.api_version}/graphql.json"


def load_shop_config(
    shop_domain: str | None = None,
    admin_token: str | None = None,
    api_version: str | None = None,
) -> ShopConfig:
    """
    Reads SHOP_DOMAIN / ADMIN_TOKEN / API_VERSION (explicit arguments win) and
    validates them before any network call is made.
    """
    domain = (shop_domain if shop_domain is not None else os.getenv("SHOP_DOMAIN", "")).strip()
    token = (admin_token if admin_token is not None else os.getenv("ADMIN_TOKEN", "")).strip()
    version = (api_version if api_version is not None else os.getenv("API_VERSION", "")).strip()

    host = domain.split("://", 1)[-1].strip("/")
    if not host or not host.endswith(SHOP_DOMAIN_SUFFIX):
        raise ConfigurationError(
            "SHOP_DOMAIN must look like 'autospec-group.myshopify.com' "
            f"(no https://). Got: {domain!r}"
        )
    if not token:
        raise ConfigurationError("ADMIN_TOKEN (Admin API access token) is missing.")

    return ShopConfig(
        shop_domain=host,
        admin_token=token,
        api_version=version or DEFAULT_API_VERSION,
    )


class ExportFilters(BaseModel):
    """Product-level filters applied to every page of the catalog export."""

    model_config = ConfigDict(frozen=True)

    allowed_statuses: frozenset[str] = Field(default=frozenset(ALLOWED_STATUSES))
    vendor: str = TARGET_VENDOR
    excluded_title_prefixes: tuple[str, ...] = tuple(EXCLUDED_TITLE_PREFIXES)
    excluded_product_types: frozenset[str] = Field(
        default=frozenset(EXCLUDED_PRODUCT_TYPES)
    )
