#!/usr/bin/env python3
"""Produce Stripe-Signature headers for local testing of the webhook."""

import hashlib
import hmac
import json
import sys
import time


def sign_payload(payload: str, secret: str, timestamp: int | None = None) -> str:
    if timestamp is None:
        timestamp = int(time.time())
    signed_payload = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(
        secret.encode("utf-8"), signed_payload, hashlib.sha256
    ).hexdigest()
    return f"t={timestamp},v1={signature}"


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 2:
        print("Usage: signing.py <secret> <payload_json>", file=sys.stderr)
        return 1

    secret, payload = argv
    try:
        json.loads(payload)
    except json.JSONDecodeError:
        print("Error: Payload must be valid JSON", file=sys.stderr)
        return 1

    print(sign_payload(payload, secret))
    return 0


if __name__ == "__main__":
    sys.exit(main())
