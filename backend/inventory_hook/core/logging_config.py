"""
Logging setup for the webhook service.

App loggers follow LOG_LEVEL; the HTTP and Stripe client loggers are held at
WARNING so request chatter does not drown out inventory updates.
"""

import logging


def configure_logging(level: str = "INFO") -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    for noisy in ("httpx", "httpcore", "stripe"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger("inventory_hook").setLevel(log_level)
    logging.getLogger(__name__).info(f"Logging configured at level: {level.upper()}")
