import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A catalog product, normalized from either Strapi response shape."""

    model_config = ConfigDict(populate_by_name=True)

    document_id: str | None = Field(default=None, alias="documentId")
    name: str | None = None
    inventory: Any = None

    @classmethod
    def from_entry(cls, entry: dict[str, Any]) -> "Product":
        # Strapi v5 returns fields flattened; v4 nests them under "attributes".
        attributes = entry.get("attributes") or {}

        def pick(key: str) -> Any:
            value = entry.get(key)
            return value if value is not None else attributes.get(key)

        return cls(
            document_id=pick("documentId"),
            name=pick("name"),
            inventory=pick("inventory"),
        )

    @property
    def has_numeric_inventory(self) -> bool:
        return (
            isinstance(self.inventory, (int, float))
            and not isinstance(self.inventory, bool)
            and math.isfinite(self.inventory)
        )
