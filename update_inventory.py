"""Menu/automation entry point: refresh InventoryLive from Shopify."""

from main import refresh_inventory


if __name__ == "__main__":
    refresh_inventory()
