# -*- coding: utf-8 -*-
"""
Tests del WebhookPipeline (verificar -> deduplicar -> liquidar -> reenviar -> acusar).

Autor: WalletSync
Fecha: 19/10/2026
"""
import json
from unittest.mock import MagicMock

import httpx
import pytest
from sqlalchemy import func, select

from app.modules.payments.enums import SettlementOutcome, WebhookState
from app.modules.payments.facades.webhooks import (
    ErrorKind,
    WebhookConfigurationError,
    WebhookPipeline,
    WebhookSignatureError,
    WebhookValidationError,
    build_webhook_pipeline,
)
from app.modules.payments.facades.webhooks.constants import (
    MSG_ALREADY_APPLIED,
    MSG_AWAITING_CAPTURE,
    MSG_DUPLICATE,
    MSG_IGNORED,
    MSG_MISSING_CUSTOMER,
    MSG_PAYMENT_FAILED,
    MSG_PROCESSED,
)
from app.modules.payments.metrics.exporters.prometheus_exporter import registry
from app.modules.payments.models import Customer, PaymentTransaction
from app.modules.payments.services.forwarding_service import (
    FORWARD_SIGNATURE_HEADER,
    DownstreamForwarder,
)
from app.shared.config.settings_payments import RazorpaySettings
from tests.factories import CUSTOMER_ID, INTERNAL_SECRET, WEBHOOK_SECRET, encode, make_event, sign


async def _balance(session_factory) -> int:
    async with session_factory() as session:
        return (await session.get(Customer, CUSTOMER_ID)).wallet_balance


async def _tx_count(session_factory) -> int:
    async with session_factory() as session:
        return (
            await session.execute(select(func.count()).select_from(PaymentTransaction))
        ).scalar_one()


@pytest.fixture
def pipeline(ledger, dedup):
    return WebhookPipeline(webhook_secret=WEBHOOK_SECRET, ledger=ledger, dedup=dedup)


@pytest.mark.asyncio
class TestAuthentication:
    async def test_missing_secret_is_configuration_error(self, ledger, dedup):
        pipeline = WebhookPipeline(webhook_secret=None, ledger=ledger, dedup=dedup)
        body = encode(make_event())
        with pytest.raises(WebhookConfigurationError) as exc:
            await pipeline.process(body, sign(body))
        assert exc.value.policy.status_code == 500
        assert exc.value.policy.retried_by_sender is True

    @pytest.mark.parametrize("signature", [None, "", "abc", "z" * 64])
    async def test_missing_or_malformed_signature(self, pipeline, signature):
        with pytest.raises(WebhookSignatureError) as exc:
            await pipeline.process(encode(make_event()), signature)
        assert exc.value.kind == ErrorKind.AUTHENTICATION
        assert exc.value.policy.status_code == 400
        assert exc.value.state == WebhookState.REJECTED

    async def test_signature_over_other_bytes(self, pipeline, session_factory, customer):
        body = encode(make_event())
        with pytest.raises(WebhookSignatureError):
            await pipeline.process(body, sign(body + b" "))
        assert await _balance(session_factory) == 0
        assert await _tx_count(session_factory) == 0

    async def test_invalid_payload_after_valid_signature(self, pipeline):
        body = b'{"event": "payment.captured", "payload": {}}'
        with pytest.raises(WebhookValidationError):
            await pipeline.process(body, sign(body))


@pytest.mark.asyncio
class TestSettlementFlow:
    async def test_captured_applies_credit(self, pipeline, session_factory, customer):
        body = encode(make_event())
        result = await pipeline.process(body, sign(body))

        assert result.state == WebhookState.ACKNOWLEDGED
        assert result.success is True
        assert result.status_code == 200
        assert result.message == MSG_PROCESSED
        assert result.settlement.outcome == SettlementOutcome.APPLIED
        assert result.forwarded is None
        assert result.transitions == [
            WebhookState.RECEIVED,
            WebhookState.VERIFIED,
            WebhookState.SETTLING,
            WebhookState.SETTLED,
            WebhookState.ACKNOWLEDGED,
        ]
        assert await _balance(session_factory) == 500
        assert await _tx_count(session_factory) == 1

    async def test_replay_hits_cache(self, pipeline, session_factory, customer):
        body = encode(make_event())
        await pipeline.process(body, sign(body))
        replay = await pipeline.process(body, sign(body))

        assert replay.success is True
        assert replay.message == MSG_DUPLICATE
        assert replay.error_kind == ErrorKind.DUPLICATE_EVENT
        assert replay.settlement is None
        assert replay.transitions == [
            WebhookState.RECEIVED, WebhookState.VERIFIED, WebhookState.ACKNOWLEDGED,
        ]
        assert await _balance(session_factory) == 500
        assert await _tx_count(session_factory) == 1

    async def test_replay_after_cache_loss_is_stopped_by_ledger(
        self, pipeline, session_factory, customer
    ):
        body = encode(make_event())
        await pipeline.process(body, sign(body))
        pipeline.dedup.clear()

        replay = await pipeline.process(body, sign(body))

        assert replay.success is True
        assert replay.message == MSG_ALREADY_APPLIED
        assert replay.settlement.outcome == SettlementOutcome.ALREADY_APPLIED
        assert pipeline.dedup.is_processed(pipeline.dedup.make_key("pay_1", "payment.captured"))
        assert await _balance(session_factory) == 500

    async def test_missing_customer_reference(self, pipeline, session_factory, customer):
        body = encode(make_event(notes={}))
        result = await pipeline.process(body, sign(body))

        assert result.state == WebhookState.ACKNOWLEDGED_WITH_ERROR
        assert result.status_code == 200
        assert result.success is False
        assert result.message == MSG_MISSING_CUSTOMER
        assert result.error_kind == ErrorKind.MISSING_CUSTOMER_REFERENCE
        assert await _balance(session_factory) == 0
        assert await _tx_count(session_factory) == 0

    async def test_unknown_customer(self, pipeline, session_factory, customer):
        body = encode(make_event(notes={"customerId": "ghost"}))
        result = await pipeline.process(body, sign(body))

        assert result.state == WebhookState.ACKNOWLEDGED_WITH_ERROR
        assert result.error_kind == ErrorKind.CUSTOMER_NOT_FOUND
        assert result.transitions[-2:] == [
            WebhookState.SETTLING, WebhookState.ACKNOWLEDGED_WITH_ERROR,
        ]
        assert result.status_code == 200
        assert not pipeline.dedup.is_processed(pipeline.dedup.make_key("pay_1", "payment.captured"))
        assert await _tx_count(session_factory) == 0

    async def test_storage_failure_is_acknowledged_and_not_cached(
        self, pipeline, session_factory, customer
    ):
        async def _boom(*args, **kwargs):
            raise OSError("db unreachable")

        pipeline.ledger._customer_repo.get_by_id = _boom
        body = encode(make_event())
        result = await pipeline.process(body, sign(body))

        assert result.state == WebhookState.ACKNOWLEDGED_WITH_ERROR
        assert result.error_kind == ErrorKind.STORAGE
        assert result.status_code == 200
        assert result.success is False
        assert not pipeline.dedup.is_processed(pipeline.dedup.make_key("pay_1", "payment.captured"))
        assert await _balance(session_factory) == 0


@pytest.mark.asyncio
class TestNonCreditableEvents:
    @pytest.mark.parametrize(
        "event, status, message",
        [
            ("payment.authorized", "authorized", MSG_AWAITING_CAPTURE),
            ("payment.failed", "failed", MSG_PAYMENT_FAILED),
            ("payment.dispute.created", "captured", MSG_IGNORED),
        ],
    )
    async def test_acknowledged_without_credit(
        self, pipeline, session_factory, customer, event, status, message
    ):
        body = encode(make_event(event=event, status=status))
        result = await pipeline.process(body, sign(body))

        assert result.state == WebhookState.ACKNOWLEDGED
        assert result.success is True
        assert result.message == message
        assert await _balance(session_factory) == 0
        assert await _tx_count(session_factory) == 0

    async def test_captured_event_with_non_captured_status(self, pipeline, session_factory, customer):
        body = encode(make_event(status="refunded"))
        result = await pipeline.process(body, sign(body))

        assert result.success is True
        assert result.settlement is None
        assert await _tx_count(session_factory) == 0

    async def test_event_without_payment_entity(self, pipeline):
        body = encode({"event": "order.paid", "payload": {"order": {"entity": {"id": "order_1"}}}})
        result = await pipeline.process(body, sign(body))
        assert result.success is True
        assert result.message == MSG_IGNORED


@pytest.mark.asyncio
class TestForwarding:
    def _pipeline(self, ledger, dedup, handler):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        forwarder = DownstreamForwarder(
            client, secret=INTERNAL_SECRET, endpoint="http://backend/api/webhooks/payment"
        )
        return WebhookPipeline(
            webhook_secret=WEBHOOK_SECRET, ledger=ledger, dedup=dedup, forwarder=forwarder
        )

    async def test_forwards_after_commit(self, ledger, dedup, session_factory, customer):
        seen = {}

        def handler(request):
            seen["body"] = request.content
            seen["signature"] = request.headers[FORWARD_SIGNATURE_HEADER]
            return httpx.Response(200)

        pipeline = self._pipeline(ledger, dedup, handler)
        body = encode(make_event())
        result = await pipeline.process(body, sign(body))

        assert result.forwarded is True
        assert result.error_kind is None
        assert seen["signature"] == sign(seen["body"], INTERNAL_SECRET)
        forwarded = json.loads(seen["body"])
        assert forwarded["amount"] == 500
        assert forwarded["customerId"] == CUSTOMER_ID

    async def test_forward_failure_keeps_credit(self, ledger, dedup, session_factory, customer):
        pipeline = self._pipeline(ledger, dedup, lambda request: httpx.Response(503))
        body = encode(make_event())
        result = await pipeline.process(body, sign(body))

        assert result.forwarded is False
        assert result.error_kind == ErrorKind.DOWNSTREAM_UNAVAILABLE
        assert result.success is True
        assert result.status_code == 200
        assert await _balance(session_factory) == 500

    async def test_no_forward_on_replay(self, ledger, dedup, session_factory, customer):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200)

        pipeline = self._pipeline(ledger, dedup, handler)
        body = encode(make_event())
        await pipeline.process(body, sign(body))
        await pipeline.process(body, sign(body))

        assert len(calls) == 1


class TestBuildWebhookPipeline:
    @pytest.fixture
    def session_factory(self):
        # El builder solo entrega la fábrica al ledger
        return MagicMock(name="session_factory")

    def _settings(self, **overrides) -> RazorpaySettings:
        values = {
            "razorpay_webhook_secret": WEBHOOK_SECRET,
            "backend_url": "http://backend/",
            "internal_webhook_secret": INTERNAL_SECRET,
        }
        values.update(overrides)
        return RazorpaySettings(_env_file=None, **values)

    def test_builds_forwarder(self, session_factory):
        pipeline = build_webhook_pipeline(
            self._settings(), session_factory=session_factory, http_client=httpx.AsyncClient()
        )
        assert pipeline.is_configured
        assert pipeline.forwarder is not None
        assert pipeline.forwarder.endpoint == "http://backend/api/webhooks/payment"
        assert pipeline.creditable_events == frozenset({"payment.captured"})

    def test_reused_razorpay_secret_disables_forwarding(self, session_factory):
        pipeline = build_webhook_pipeline(
            self._settings(internal_webhook_secret=WEBHOOK_SECRET),
            session_factory=session_factory,
            http_client=httpx.AsyncClient(),
        )
        assert pipeline.forwarder is None

    def test_missing_internal_secret_disables_forwarding(self, session_factory):
        pipeline = build_webhook_pipeline(
            self._settings(internal_webhook_secret=None),
            session_factory=session_factory,
            http_client=httpx.AsyncClient(),
        )
        assert pipeline.forwarder is None

    def test_credit_on_authorized(self, session_factory):
        pipeline = build_webhook_pipeline(
            self._settings(razorpay_credit_on_authorized=True), session_factory=session_factory
        )
        assert "payment.authorized" in pipeline.creditable_events
        assert "authorized" in pipeline.ledger.accepted_statuses

    def test_missing_webhook_secret(self, session_factory):
        pipeline = build_webhook_pipeline(
            self._settings(razorpay_webhook_secret=None), session_factory=session_factory
        )
        assert pipeline.is_configured is False


@pytest.mark.asyncio
class TestVerificationMetric:
    def _verified(self, result: str) -> float:
        return registry.get_sample_value(
            "payments_webhook_verified_total", {"provider": "razorpay", "result": result}
        ) or 0.0

    async def test_valid_signature_counted_even_if_payload_is_rejected(self, pipeline):
        before = self._verified("success")
        body = b'{"event": "payment.captured", "payload": {}}'
        with pytest.raises(WebhookValidationError):
            await pipeline.process(body, sign(body))
        assert self._verified("success") == before + 1

    async def test_invalid_signature_counted_once_as_failure(self, pipeline):
        before_failure = self._verified("failure")
        before_success = self._verified("success")
        body = encode(make_event())
        with pytest.raises(WebhookSignatureError):
            await pipeline.process(body, "0" * 64)
        assert self._verified("failure") == before_failure + 1
        assert self._verified("success") == before_success
