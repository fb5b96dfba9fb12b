import logging

from inventory_hook.core.exceptions import CatalogInvalidStateError, CatalogNotFoundError
from inventory_hook.services.strapi import StrapiClient

logger = logging.getLogger(__name__)


class InventoryUpdater:
    """Applies floored stock decrements to catalog products."""

    def __init__(self, catalog: StrapiClient):
        self.catalog = catalog

    def close(self) -> None:
        self.catalog.close()

    def apply_decrement(self, product_name: str, quantity: int | float) -> int | float | None:
        """
        Decrement a product's inventory by ``quantity``, never below zero.

        Returns the inventory written, or None when the product was already
        at zero and no write was issued. Raises CatalogNotFoundError when no
        product has this exact name and CatalogInvalidStateError when its
        inventory is not a number.
        """
        name = (product_name or "").strip()
        if not name:
            raise ValueError("product_name must be non-empty")
        if quantity <= 0:
            raise ValueError(f"quantity must be positive, got {quantity}")

        product = self.catalog.fetch_product_by_name(name)
        if product is None:
            raise CatalogNotFoundError(f'Product "{name}" not found in Strapi.')

        if not product.has_numeric_inventory:
            raise CatalogInvalidStateError(
                f'Product "{name}" has invalid inventory: {product.inventory}'
            )

        inventory = product.inventory
        if inventory <= 0:
            logger.warning(f'Inventory for "{name}" already 0. Skipping update.')
            return None

        new_inventory = max(0, inventory - quantity)
        logger.info(
            f'Updating "{name}" (documentId={product.document_id}) inventory: '
            f"{inventory} -> {new_inventory}"
        )
        self.catalog.update_inventory(product.document_id, new_inventory)
        return new_inventory
