import enum
import logging

from inventory_hook.schemas.webhook import (
    CheckoutSession,
    LineItem,
    WebhookEvent,
    coerce_quantity,
)
from inventory_hook.services.idempotency import ProcessedRegistry
from inventory_hook.services.inventory import InventoryUpdater
from inventory_hook.services.line_items import StripeLineItemSource

logger = logging.getLogger(__name__)


class Outcome(str, enum.Enum):
    PROCESSED = "processed"
    DUPLICATE_EVENT = "duplicate_event"
    DUPLICATE_SESSION = "duplicate_session"
    NOT_PAID = "not_paid"
    IGNORED = "ignored"


class WebhookProcessor:
    """
    Applies verified Stripe events to catalog inventory at most once.

    Two guards sit in front of any mutation: the event id, and for checkout
    events the session id, so a session replayed under a fresh event id is
    still applied only once. Ids are marked only after their work finished.
    Any exception escapes ``process`` with the event left unmarked, and
    Stripe's redelivery becomes the retry path.
    """

    HANDLERS = {
        "checkout.session.completed": "_handle_checkout_completed",
    }

    def __init__(
        self,
        updater: InventoryUpdater,
        line_items: StripeLineItemSource,
        events: ProcessedRegistry | None = None,
        sessions: ProcessedRegistry | None = None,
    ):
        self.updater = updater
        self.line_items = line_items
        self.events = events if events is not None else ProcessedRegistry("event")
        self.sessions = sessions if sessions is not None else ProcessedRegistry("session")

    def process(self, event: WebhookEvent) -> Outcome:
        if self.events.seen(event.id):
            logger.info(f"Duplicate delivery for event {event.id}; skipping.")
            return Outcome.DUPLICATE_EVENT

        handler_name = self.HANDLERS.get(event.type)
        if handler_name is None:
            logger.info(f"Unhandled event type: {event.type}")
            outcome = Outcome.IGNORED
        else:
            outcome = getattr(self, handler_name)(event)

        self.events.mark(event.id)
        return outcome

    def close(self) -> None:
        self.updater.close()

    def _handle_checkout_completed(self, event: WebhookEvent) -> Outcome:
        session = CheckoutSession.model_validate(event.object)

        if self.sessions.seen(session.id):
            logger.info(f"Session {session.id} already processed; skipping.")
            return Outcome.DUPLICATE_SESSION

        if session.is_unpaid:
            logger.info(
                f"Payment status = {session.payment_status}; skipping inventory update."
            )
            return Outcome.NOT_PAID

        items = self.line_items.list_line_items(session.id)
        logger.info(f"Line items: {[item.summary() for item in items]}")

        for item in items:
            self._apply_line_item(item)

        self.sessions.mark(session.id)
        return Outcome.PROCESSED

    def _apply_line_item(self, item: LineItem) -> None:
        name = item.product_name
        qty = coerce_quantity(item.quantity)
        if not name or qty is None or qty <= 0:
            logger.warning(
                f"Skipping item: missing name or non-positive qty "
                f"(productName={name!r}, qty={item.quantity!r})"
            )
            return
        self.updater.apply_decrement(name, qty)
