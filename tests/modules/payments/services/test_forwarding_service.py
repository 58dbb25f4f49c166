# -*- coding: utf-8 -*-
"""
Tests del DownstreamForwarder con httpx.MockTransport.

Autor: WalletSync
Fecha: 19/10/2026
"""
import json

import httpx
import pytest

from app.modules.payments.schemas import ForwardedPayment, NormalizedPayment
from app.modules.payments.services.forwarding_service import (
    FORWARD_SIGNATURE_HEADER,
    DownstreamForwarder,
    canonical_body,
)
from tests.factories import INTERNAL_SECRET, sign

ENDPOINT = "http://backend.internal/api/webhooks/payment"


def _payment() -> ForwardedPayment:
    normalized = NormalizedPayment(
        event_type="payment.captured",
        payment_id="pay_1",
        order_id="order_1",
        customer_id="cust_1",
        amount=500,
        amount_minor_units=50000,
        status="captured",
        method="upi",
    )
    return ForwardedPayment.from_normalized(normalized)


def _forwarder(handler) -> DownstreamForwarder:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DownstreamForwarder(client, secret=INTERNAL_SECRET, endpoint=ENDPOINT, timeout_seconds=1.0)


class TestCanonicalBody:
    def test_sorted_compact_camel_case(self):
        body = canonical_body(_payment())
        data = json.loads(body)

        assert b" " not in body
        assert list(data.keys()) == sorted(data.keys())
        assert data["paymentId"] == "pay_1"
        assert data["customerId"] == "cust_1"
        assert data["amount"] == 500
        assert data["status"] == "successful"
        assert data["metadata"]["amountMinorUnits"] == 50000
        assert data["metadata"]["razorpayStatus"] == "captured"


@pytest.mark.asyncio
class TestForward:
    async def test_signs_exact_body_with_internal_secret(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = request.content
            seen["signature"] = request.headers.get(FORWARD_SIGNATURE_HEADER)
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"ok": True})

        forwarder = _forwarder(handler)
        ok = await forwarder.forward(_payment())

        assert ok is True
        assert seen["url"] == ENDPOINT
        assert seen["signature"] == sign(seen["body"], INTERNAL_SECRET)
        assert json.loads(seen["body"])["paymentId"] == "pay_1"

    @pytest.mark.parametrize("status_code", [400, 404, 500, 503])
    async def test_non_2xx_is_false(self, status_code):
        forwarder = _forwarder(lambda request: httpx.Response(status_code))
        assert await forwarder.forward(_payment()) is False

    async def test_network_error_is_false(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        assert await _forwarder(handler).forward(_payment()) is False

    async def test_timeout_is_false(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        assert await _forwarder(handler).forward(_payment()) is False

    async def test_missing_endpoint_is_false(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        forwarder = DownstreamForwarder(client, secret=INTERNAL_SECRET)
        assert await forwarder.forward(_payment()) is False

    async def test_endpoint_override(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(204)

        forwarder = _forwarder(handler)
        assert await forwarder.forward(_payment(), endpoint="http://other/hook") is True
        assert seen["url"] == "http://other/hook"


def test_empty_secret_rejected():
    with pytest.raises(ValueError):
        DownstreamForwarder(httpx.AsyncClient(), secret="")
