import logging

import stripe

logger = logging.getLogger(__name__)


class StripeSignatureError(Exception):
    pass


def verify(raw_body: bytes, header: str | None, secret: str, tolerance: int = 300) -> None:
    """
    Raise StripeSignatureError if signature invalid.

    The timestamp in the header must fall within ``tolerance`` seconds of now,
    which bounds how long a captured delivery can be replayed.
    """
    if not header:
        raise StripeSignatureError("Missing Stripe signature")

    try:
        payload = raw_body.decode("utf-8")
    except UnicodeDecodeError:
        raise StripeSignatureError("Payload is not valid UTF-8")

    try:
        stripe.WebhookSignature.verify_header(payload, header, secret, tolerance)
    except stripe.SignatureVerificationError as exc:
        logger.debug(f"Stripe rejected signature header: {header}")
        raise StripeSignatureError(str(exc)) from exc
