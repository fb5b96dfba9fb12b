import logging

import stripe

from inventory_hook.schemas.webhook import LineItem

logger = logging.getLogger(__name__)


def _to_line_item(item) -> LineItem:
    price = getattr(item, "price", None)
    return LineItem(
        id=getattr(item, "id", None),
        description=getattr(item, "description", None),
        quantity=getattr(item, "quantity", None),
        price_id=getattr(price, "id", None) if price is not None else None,
    )


class StripeLineItemSource:
    """Lists the line items of a Checkout Session.

    Only the first page is read; sessions with more than ``limit`` items are
    truncated.
    """

    def __init__(self, api_key: str, limit: int = 100):
        self.api_key = api_key
        self.limit = limit

    def list_line_items(self, session_id: str) -> list[LineItem]:
        page = stripe.checkout.Session.list_line_items(
            session_id, limit=self.limit, api_key=self.api_key
        )
        items = [_to_line_item(item) for item in page.data]
        if getattr(page, "has_more", False):
            logger.warning(
                f"Session {session_id} has more than {self.limit} line items; "
                "only the first page is processed"
            )
        return items
