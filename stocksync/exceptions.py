"""Error taxonomy for the sync pipelines."""


class SyncError(Exception):
    """Base class for every fatal sync failure."""


class ConfigurationError(SyncError):
    """Missing or malformed settings. Raised before any network call."""


class LocationNotFoundError(ConfigurationError):
    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Location '{name}' not found. Available: {', '.join(available)}"
        )


class ShopifyError(SyncError):
    """Base class for failures talking to the Shopify Admin API."""


class TransportError(ShopifyError):
    """Non-200 status, non-JSON body, or a network failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        content_type: str = "",
        body: str = "",
    ):
        self.status_code = status_code
        self.content_type = content_type
        self.body = body
        super().__init__(message)


class RemoteError(ShopifyError):
    """HTTP 200 whose payload carries a GraphQL `errors` list."""

    def __init__(self, errors: list):
        self.errors = errors
        super().__init__(f"Shopify GraphQL errors: {errors}")
