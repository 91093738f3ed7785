"""Testes da verificação do header Stripe-Signature."""

from __future__ import annotations

import json

import pytest

from api.connectors.stripe import (
    InvalidEventError,
    StripeSignatureError,
    compute_signature,
    parse_stripe_event,
    verify_stripe_signature,
)

SECRET = "whsec_test"
NOW = 1_700_000_000
PAYLOAD = json.dumps({"id": "evt_1", "type": "checkout.session.completed"}).encode()


def _header(payload: bytes = PAYLOAD, timestamp: int = NOW, secret: str = SECRET) -> str:
    return f"t={timestamp},v1={compute_signature(payload, timestamp, secret)}"


def test_valid_signature_returns_event() -> None:
    event = parse_stripe_event(PAYLOAD, _header(), SECRET, now=NOW + 10)
    assert event["type"] == "checkout.session.completed"


def test_any_matching_v1_is_accepted() -> None:
    header = f"t={NOW},v1=deadbeef,v1={compute_signature(PAYLOAD, NOW, SECRET)}"
    verify_stripe_signature(PAYLOAD, header, SECRET, now=NOW)


@pytest.mark.parametrize(
    "header",
    [
        None,
        "",
        "v1=abc",
        "t=abc,v1=abc",
        f"t={NOW}",
    ],
)
def test_missing_or_malformed_header(header) -> None:
    with pytest.raises(StripeSignatureError) as exc_info:
        verify_stripe_signature(PAYLOAD, header, SECRET, now=NOW)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Webhook Error"


def test_wrong_secret_rejected() -> None:
    with pytest.raises(StripeSignatureError):
        verify_stripe_signature(PAYLOAD, _header(secret="other"), SECRET, now=NOW)


def test_tampered_payload_rejected() -> None:
    with pytest.raises(StripeSignatureError):
        verify_stripe_signature(PAYLOAD + b" ", _header(), SECRET, now=NOW)


def test_timestamp_outside_tolerance() -> None:
    with pytest.raises(StripeSignatureError) as exc_info:
        verify_stripe_signature(PAYLOAD, _header(), SECRET, tolerance_seconds=300, now=NOW + 301)
    assert exc_info.value.details == "Timestamp fora da tolerância"


def test_without_secret_only_parses() -> None:
    event = parse_stripe_event(PAYLOAD, None, "")
    assert event["id"] == "evt_1"


@pytest.mark.parametrize("payload", [b"{invalid", b"[1, 2]"])
def test_invalid_event_body(payload) -> None:
    with pytest.raises(InvalidEventError):
        parse_stripe_event(payload, None, "")
