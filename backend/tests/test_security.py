import json
import time

import pytest
import stripe
from freezegun import freeze_time

from inventory_hook.services import stripe_verify
from inventory_hook.signing import main as signing_main
from inventory_hook.signing import sign_payload

SECRET = "whsec_test"
BODY = json.dumps({"id": "evt_1", "type": "checkout.session.completed", "data": {}})


def test_missing_signature_rejected(client, processor, line_items):
    r = client.post("/webhook", content=BODY, headers={"Content-Type": "application/json"})

    assert r.status_code == 400
    assert r.text == "Webhook Error: Missing Stripe signature"
    line_items.list_line_items.assert_not_called()
    assert len(processor.events) == 0


def test_invalid_signature_rejected(client, processor, caplog):
    timestamp = int(time.time())
    r = client.post(
        "/webhook",
        content=BODY,
        headers={"Stripe-Signature": f"t={timestamp},v1=invalid_signature"},
    )

    assert r.status_code == 400
    assert r.text.startswith("Webhook Error:")
    assert len(processor.events) == 0
    assert "Signature verification failed" in caplog.text


def test_wrong_secret_rejected(deliver, checkout_event, processor, line_items):
    r = deliver(checkout_event("evt_1", "cs_1"), secret="whsec_other")

    assert r.status_code == 400
    line_items.list_line_items.assert_not_called()
    assert "evt_1" not in processor.events


def test_stale_timestamp_rejected(deliver, checkout_event, processor):
    r = deliver(checkout_event("evt_1", "cs_1"), timestamp=int(time.time()) - 3600)

    assert r.status_code == 400
    assert "evt_1" not in processor.events


def test_signing_helper_matches_stripe():
    header = sign_payload(BODY, SECRET, timestamp=1700000000)
    expected = stripe.WebhookSignature._compute_signature(f"1700000000.{BODY}", SECRET)

    assert header == f"t=1700000000,v1={expected}"


def test_verify_accepts_fresh_signature():
    with freeze_time("2026-01-01 12:00:00"):
        header = sign_payload(BODY, SECRET)
        stripe_verify.verify(BODY.encode(), header, SECRET, tolerance=300)


def test_verify_rejects_outside_tolerance():
    with freeze_time("2026-01-01 12:00:00"):
        header = sign_payload(BODY, SECRET)

    with freeze_time("2026-01-01 12:05:01"):
        with pytest.raises(stripe_verify.StripeSignatureError):
            stripe_verify.verify(BODY.encode(), header, SECRET, tolerance=300)


def test_verify_rejects_malformed_header():
    with pytest.raises(stripe_verify.StripeSignatureError):
        stripe_verify.verify(BODY.encode(), "not-a-header", SECRET)


def test_verify_rejects_non_utf8_body():
    with pytest.raises(stripe_verify.StripeSignatureError, match="UTF-8"):
        stripe_verify.verify(b"\xff\xfe", "t=1,v1=abc", SECRET)


def test_signing_cli(capsys):
    assert signing_main([SECRET, BODY]) == 0
    assert capsys.readouterr().out.startswith("t=")


def test_signing_cli_rejects_bad_json(capsys):
    assert signing_main([SECRET, "{nope"]) == 1
    assert "valid JSON" in capsys.readouterr().err
