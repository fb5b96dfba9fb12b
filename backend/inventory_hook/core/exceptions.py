class InventoryHookError(Exception):
    """Base exception for all inventory-hook errors."""

    pass


class InvalidPayloadError(InventoryHookError):
    """Raised when a verified webhook body cannot be decoded into an event."""

    pass


class CatalogError(InventoryHookError):
    """Base exception for catalog (Strapi) failures.

    Carries the HTTP status and response body when the failure came from a
    catalog response, so the handler log has enough to diagnose it.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class CatalogNotFoundError(CatalogError):
    """Raised when no product matches the requested name."""

    pass


class CatalogInvalidStateError(CatalogError):
    """Raised when a product record carries a non-numeric inventory."""

    pass


class CatalogPermissionError(CatalogError):
    """Raised on 403; the API token's role lacks find/update on products."""

    pass


class CatalogWriteNotFoundError(CatalogError):
    """Raised when the update target documentId no longer exists."""

    pass


class CatalogRequestFailed(CatalogError):
    """Raised for any other non-success catalog response."""

    pass
