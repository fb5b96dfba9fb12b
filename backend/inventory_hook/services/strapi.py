import logging

import httpx

from inventory_hook.core.exceptions import (
    CatalogPermissionError,
    CatalogRequestFailed,
    CatalogWriteNotFoundError,
)
from inventory_hook.schemas.catalog import Product

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/api/products"


def _safe_text(response: httpx.Response) -> str:
    return response.text or "<no body>"


class StrapiClient:
    """Minimal Strapi REST client for the products collection.

    Products are looked up by exact name but always written by documentId,
    so two records sharing a display name can never be updated by mistake.
    """

    def __init__(self, base_url: str, token: str, http: httpx.Client | None = None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._http = http or httpx.Client()

    def _headers(self, **extra: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}", **extra}

    def fetch_product_by_name(self, name: str) -> Product | None:
        params = [
            ("filters[name][$eq]", name),
            ("fields[0]", "name"),
            ("fields[1]", "inventory"),
            ("fields[2]", "documentId"),
            ("pagination[pageSize]", "1"),
        ]
        r = self._http.get(
            f"{self.base_url}{PRODUCTS_PATH}", params=params, headers=self._headers()
        )

        if r.status_code == 403:
            raise CatalogPermissionError(
                "Strapi 403: enable 'find' on products for the role.",
                status_code=403,
                body=_safe_text(r),
            )
        if not r.is_success:
            body = _safe_text(r)
            raise CatalogRequestFailed(
                f"Strapi fetch-by-name failed: {r.status_code} {body}",
                status_code=r.status_code,
                body=body,
            )

        entries = (r.json() or {}).get("data") or []
        if not entries:
            return None
        return Product.from_entry(entries[0])

    def update_inventory(self, document_id: str, inventory: int | float) -> dict:
        r = self._http.put(
            f"{self.base_url}{PRODUCTS_PATH}/{document_id}",
            json={"data": {"inventory": inventory}},
            headers=self._headers(**{"Content-Type": "application/json"}),
        )

        if r.status_code == 403:
            raise CatalogPermissionError(
                "Strapi 403: enable 'update' on products for the role.",
                status_code=403,
                body=_safe_text(r),
            )
        if r.status_code == 404:
            raise CatalogWriteNotFoundError(
                f"Strapi 404: product documentId {document_id} not found.",
                status_code=404,
                body=_safe_text(r),
            )
        if not r.is_success:
            body = _safe_text(r)
            raise CatalogRequestFailed(
                f"Strapi update failed: {r.status_code} {body}",
                status_code=r.status_code,
                body=body,
            )
        return r.json() if r.content else {}

    def close(self) -> None:
        self._http.close()
