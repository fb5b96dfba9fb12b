import logging
from functools import lru_cache

import uvicorn
from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from inventory_hook.core.config import Settings, get_settings
from inventory_hook.core.exceptions import InvalidPayloadError
from inventory_hook.core.logging_config import configure_logging
from inventory_hook.middleware.body_size import BodySizeLimitMiddleware
from inventory_hook.schemas.webhook import WebhookEvent
from inventory_hook.services import stripe_verify
from inventory_hook.services.inventory import InventoryUpdater
from inventory_hook.services.line_items import StripeLineItemSource
from inventory_hook.services.strapi import StrapiClient
from inventory_hook.services.webhook_processor import WebhookProcessor

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Inventory Hook",
    description="Applies Stripe checkout purchases to Strapi product inventory",
    version="1.0.0",
)

app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)


# ---------- dependency ----------
@lru_cache
def get_processor() -> WebhookProcessor:
    # Cached so the dedup registries live for the whole process.
    settings = get_settings()
    catalog = StrapiClient(settings.strapi_api_url, settings.strapi_token)
    return WebhookProcessor(
        updater=InventoryUpdater(catalog),
        line_items=StripeLineItemSource(
            settings.stripe_api_key, limit=settings.line_items_limit
        ),
    )


@app.on_event("shutdown")
def shutdown():
    """Release the catalog HTTP connection pool held by the cached processor."""
    if get_processor.cache_info().currsize:
        get_processor().close()
        get_processor.cache_clear()


@app.get("/healthz", include_in_schema=False)
async def healthz():
    return PlainTextResponse("ok")


# ---------- webhook ----------
@app.post("/webhook")
async def stripe_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    processor: WebhookProcessor = Depends(get_processor),
):
    raw = await request.body()

    try:
        stripe_verify.verify(
            raw_body=raw,
            header=request.headers.get("Stripe-Signature"),
            secret=settings.stripe_webhook_secret,
            tolerance=settings.webhook_tolerance,
        )
    except stripe_verify.StripeSignatureError as e:
        logger.error(f"Signature verification failed: {e}")
        return PlainTextResponse(f"Webhook Error: {e}", status_code=400)

    try:
        event = WebhookEvent.parse_body(raw)
    except InvalidPayloadError as e:
        logger.error(f"Webhook payload rejected: {e}")
        return PlainTextResponse(f"Webhook Error: {e}", status_code=400)

    try:
        outcome = await run_in_threadpool(processor.process, event)
    except Exception:
        # Event stays unmarked so Stripe's redelivery retries it.
        logger.exception(f"Webhook handler error for event {event.id}")
        return PlainTextResponse("Webhook handler error", status_code=500)

    logger.info(f"Event {event.id} ({event.type}) acknowledged: {outcome.value}")
    return Response(status_code=200)


def run() -> None:
    settings = get_settings()
    logger.info(f"Listening on {settings.stripe_port}")
    uvicorn.run(
        "inventory_hook.main:app",
        host="0.0.0.0",
        port=settings.stripe_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
