"""Menu/automation entry point: rebuild ProductsExport from Shopify."""

from main import refresh_products_export


if __name__ == "__main__":
    refresh_products_export()
