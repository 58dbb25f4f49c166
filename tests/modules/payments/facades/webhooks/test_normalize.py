# -*- coding: utf-8 -*-
"""
Tests de normalización de payloads Razorpay (esquema estricto + paise -> rupias).

Autor: WalletSync
Fecha: 19/10/2026
"""
import pytest

from app.modules.payments.facades.webhooks import (
    WebhookValidationError,
    build_normalized_payment,
    normalize_razorpay_event,
    to_ledger_units,
)
from tests.factories import CUSTOMER_ID, encode, make_event


class TestToLedgerUnits:
    @pytest.mark.parametrize(
        "minor, expected",
        [(50000, 500), (0, 0), (99, 0), (150, 1), (100, 1)],
    )
    def test_integer_division(self, minor, expected):
        assert to_ledger_units(minor) == expected

    def test_invalid_divisor(self):
        with pytest.raises(ValueError):
            to_ledger_units(100, 0)


class TestNormalizeRazorpayEvent:
    def test_valid_captured_event(self):
        event = normalize_razorpay_event(encode(make_event()))

        assert event.event == "payment.captured"
        assert event.payment.id == "pay_1"
        assert event.payment.amount == 50000
        assert event.payment.customer_id == CUSTOMER_ID

    def test_extra_fields_are_tolerated(self):
        payload = make_event()
        payload["account_id"] = "acc_1"
        payload["payload"]["payment"]["entity"]["fee"] = 1180
        assert normalize_razorpay_event(encode(payload)).payment.id == "pay_1"

    @pytest.mark.parametrize(
        "raw",
        [b"not json", b"\xff\xfe", b"[1, 2, 3]", b"\"string\"", b"{}"],
    )
    def test_invalid_bodies(self, raw):
        with pytest.raises(WebhookValidationError):
            normalize_razorpay_event(raw)

    def test_missing_payment_entity_for_payment_event(self):
        payload = make_event()
        payload["payload"] = {}
        with pytest.raises(WebhookValidationError):
            normalize_razorpay_event(encode(payload))

    @pytest.mark.parametrize("amount", ["50000", 500.5, -1, None, True])
    def test_amount_must_be_non_negative_int(self, amount):
        with pytest.raises(WebhookValidationError):
            normalize_razorpay_event(encode(make_event(amount=amount)))

    def test_missing_payment_id(self):
        payload = make_event()
        del payload["payload"]["payment"]["entity"]["id"]
        with pytest.raises(WebhookValidationError) as exc:
            normalize_razorpay_event(encode(payload))
        assert "id" in exc.value.message

    def test_unknown_event_without_payment_is_valid(self):
        event = normalize_razorpay_event(encode({"event": "order.paid", "payload": {}}))
        assert event.payment is None

    def test_empty_notes_list(self):
        event = normalize_razorpay_event(encode(make_event(notes=[])))
        assert event.payment.notes == {}
        assert event.payment.customer_id is None

    def test_customer_id_snake_case_alias(self):
        event = normalize_razorpay_event(encode(make_event(notes={"customer_id": "cust_9"})))
        assert event.payment.customer_id == "cust_9"

    def test_blank_customer_id_is_missing(self):
        event = normalize_razorpay_event(encode(make_event(notes={"customerId": "  "})))
        assert event.payment.customer_id is None


class TestBuildNormalizedPayment:
    def test_converts_amount_once(self):
        event = normalize_razorpay_event(encode(make_event(amount=50000)))
        payment = build_normalized_payment(event)

        assert payment.amount == 500
        assert payment.amount_minor_units == 50000
        assert payment.payment_id == "pay_1"
        assert payment.order_id == "order_1"
        assert payment.customer_id == CUSTOMER_ID
        assert payment.status == "captured"
        assert payment.method == "upi"

    def test_event_without_payment(self):
        event = normalize_razorpay_event(encode({"event": "order.paid", "payload": {}}))
        with pytest.raises(WebhookValidationError):
            build_normalized_payment(event)
