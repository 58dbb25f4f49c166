# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/handler.py

Pipeline de webhooks Razorpay: verificar -> deduplicar -> liquidar -> reenviar -> acusar.

    RECEIVED --firma inválida / payload inválido--> REJECTED (WebhookError, 400)
    RECEIVED --firma válida--> VERIFIED
    VERIFIED --duplicado (caché)--> ACKNOWLEDGED
    VERIFIED --evento no acreditable--> ACKNOWLEDGED (no-op)
    VERIFIED --acreditable--> SETTLING
    SETTLING --APPLIED--> SETTLED --reenvío best-effort--> ACKNOWLEDGED
    SETTLING --ALREADY_APPLIED--> ACKNOWLEDGED
    SETTLING --CUSTOMER_NOT_FOUND | FAILED--> ACKNOWLEDGED_WITH_ERROR

Todos los estados terminales salvo REJECTED se acusan con HTTP 200; el
status concreto sale de ERROR_POLICY.

Autor: WalletSync
Fecha: 19/10/2026
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import FrozenSet, Iterable, List, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.modules.payments.enums import RazorpayEvent, SettlementOutcome, WebhookState
from app.modules.payments.metrics import (
    observe_credit_applied,
    observe_forward,
    observe_webhook_verified,
)
from app.modules.payments.schemas import (
    ForwardedPayment,
    NormalizedPayment,
    RazorpayWebhookEvent,
    WebhookAck,
)
from app.modules.payments.services.event_dedup_service import (
    ProcessedEventCache,
    ProcessedEventRecord,
)
from app.modules.payments.services.forwarding_service import DownstreamForwarder
from app.modules.payments.services.settlement_service import SettlementLedger, SettlementResult
from app.modules.payments.services.webhooks.signature_verification import (
    REASON_SECRET_NOT_CONFIGURED,
    razorpay_signature_error,
)
from app.shared.config.settings_payments import RazorpaySettings

from .constants import (
    MSG_ALREADY_APPLIED,
    MSG_AWAITING_CAPTURE,
    MSG_CUSTOMER_NOT_FOUND,
    MSG_DUPLICATE,
    MSG_IGNORED,
    MSG_MISSING_CUSTOMER,
    MSG_PAYMENT_FAILED,
    MSG_PROCESSED,
    MSG_SETTLEMENT_FAILED,
    MSG_STATUS_NOT_CREDITABLE,
    PROVIDER_RAZORPAY,
)
from .errors import (
    ErrorKind,
    WebhookConfigurationError,
    WebhookSignatureError,
    policy_for,
)
from .normalize import build_normalized_payment, normalize_razorpay_event

logger = logging.getLogger(__name__)


@dataclass
class WebhookResult:
    """Resultado terminal (acusado) de un webhook verificado."""

    state: WebhookState
    message: str
    outcome: str
    error_kind: Optional[ErrorKind] = None
    payment_id: Optional[str] = None
    settlement: Optional[SettlementResult] = None
    forwarded: Optional[bool] = None
    # Camino recorrido por la máquina de estados; termina siempre en `state`
    transitions: List[WebhookState] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.transitions = list(self.transitions)
        if not self.transitions or self.transitions[-1] != self.state:
            self.transitions.append(self.state)

    @property
    def success(self) -> bool:
        if self.error_kind is None:
            return True
        return policy_for(self.error_kind).success

    @property
    def status_code(self) -> int:
        if self.error_kind is None:
            return HTTPStatus.OK
        return policy_for(self.error_kind).status_code

    def to_ack(self) -> WebhookAck:
        return WebhookAck(success=self.success, message=self.message)


class WebhookPipeline:
    """
    Orquesta un webhook de Razorpay con dependencias inyectadas.

    Args:
        webhook_secret: Secreto compartido con Razorpay
        ledger: SettlementLedger (dueño de la fábrica de sesiones)
        dedup: Caché de eventos procesados (propiedad de la app)
        forwarder: Reenvío al backend interno; None lo desactiva
        creditable_events: Eventos que acreditan (default: payment.captured)
        minor_unit_divisor: paise -> unidades del ledger
    """

    def __init__(
        self,
        *,
        webhook_secret: Optional[str],
        ledger: SettlementLedger,
        dedup: ProcessedEventCache,
        forwarder: Optional[DownstreamForwarder] = None,
        creditable_events: Iterable[str] = (RazorpayEvent.PAYMENT_CAPTURED.value,),
        minor_unit_divisor: int = 100,
    ) -> None:
        self._webhook_secret = webhook_secret
        self.ledger = ledger
        self.dedup = dedup
        self.forwarder = forwarder
        self.creditable_events: FrozenSet[str] = frozenset(creditable_events)
        self.minor_unit_divisor = minor_unit_divisor

    @property
    def is_configured(self) -> bool:
        return bool(self._webhook_secret)

    # ---------------------------------------------------------
    # Entrada: bytes crudos + header de firma
    # ---------------------------------------------------------
    async def process(self, raw_body: bytes, signature: Optional[str]) -> WebhookResult:
        """
        Procesa un webhook completo.

        Raises:
            WebhookConfigurationError: secreto no configurado (500)
            WebhookSignatureError: firma ausente/malformada/inválida (400)
            WebhookValidationError: payload fuera de esquema (400)
        """
        if not self._webhook_secret:
            raise WebhookConfigurationError(REASON_SECRET_NOT_CONFIGURED)

        reason = razorpay_signature_error(raw_body, signature, self._webhook_secret)
        if reason is not None:
            observe_webhook_verified(PROVIDER_RAZORPAY, "failure")
            raise WebhookSignatureError(reason)
        observe_webhook_verified(PROVIDER_RAZORPAY, "success")

        event = normalize_razorpay_event(raw_body)
        return await self.handle_verified(event)

    # ---------------------------------------------------------
    # Evento ya autenticado y validado
    # ---------------------------------------------------------
    async def handle_verified(self, event: RazorpayWebhookEvent) -> WebhookResult:
        path = [WebhookState.RECEIVED, WebhookState.VERIFIED]
        entity = event.payment
        if entity is None:
            logger.info("Razorpay event %s sin entidad payment: ignorado", event.event)
            return WebhookResult(WebhookState.ACKNOWLEDGED, MSG_IGNORED, "ignored", transitions=path)

        key = self.dedup.make_key(entity.id, event.event)
        if self.dedup.is_processed(key):
            logger.info("Razorpay event %s ya procesado (caché)", key)
            return WebhookResult(
                WebhookState.ACKNOWLEDGED, MSG_DUPLICATE, "duplicate",
                error_kind=ErrorKind.DUPLICATE_EVENT, payment_id=entity.id, transitions=path,
            )

        if event.event not in self.creditable_events:
            return self._acknowledge_non_creditable(event.event, entity.id, path)

        payment = build_normalized_payment(event, self.minor_unit_divisor)

        if payment.status not in self.ledger.accepted_statuses:
            logger.info(
                "Payment %s con status '%s' no acreditable: acuse sin abono",
                payment.payment_id, payment.status,
            )
            return WebhookResult(
                WebhookState.ACKNOWLEDGED, MSG_STATUS_NOT_CREDITABLE, "ignored",
                payment_id=payment.payment_id, transitions=path,
            )

        if not payment.customer_id:
            logger.error(
                "Payment %s (order=%s) sin customerId en notes; no se aplica",
                payment.payment_id, payment.order_id,
            )
            return WebhookResult(
                WebhookState.ACKNOWLEDGED_WITH_ERROR, MSG_MISSING_CUSTOMER, "missing_customer",
                error_kind=ErrorKind.MISSING_CUSTOMER_REFERENCE, payment_id=payment.payment_id,
                transitions=path,
            )

        return await self._settle(key, payment, path + [WebhookState.SETTLING])

    def _acknowledge_non_creditable(
        self, event_type: str, payment_id: str, path: List[WebhookState]
    ) -> WebhookResult:
        if event_type == RazorpayEvent.PAYMENT_AUTHORIZED:
            logger.info("Payment %s autorizado; esperando captura", payment_id)
            message = MSG_AWAITING_CAPTURE
        elif event_type == RazorpayEvent.PAYMENT_FAILED:
            logger.info("Payment %s fallido en Razorpay", payment_id)
            message = MSG_PAYMENT_FAILED
        else:
            logger.info("Razorpay event %s ignorado (payment %s)", event_type, payment_id)
            message = MSG_IGNORED
        return WebhookResult(
            WebhookState.ACKNOWLEDGED, message, "ignored", payment_id=payment_id, transitions=path,
        )

    # ---------------------------------------------------------
    # SETTLING -> SETTLED / ACKNOWLEDGED_WITH_ERROR
    # ---------------------------------------------------------
    async def _settle(
        self, key: str, payment: NormalizedPayment, path: List[WebhookState]
    ) -> WebhookResult:
        settlement = await self.ledger.apply_payment(
            payment_id=payment.payment_id,
            customer_id=payment.customer_id,
            amount=payment.amount,
            status=payment.status,
        )

        if settlement.is_settled:
            self.dedup.mark_processed(
                key, ProcessedEventRecord(payment_id=payment.payment_id, event_type=payment.event_type)
            )

        if settlement.outcome == SettlementOutcome.APPLIED:
            observe_credit_applied(PROVIDER_RAZORPAY)
            forwarded = await self._forward(payment)
            return WebhookResult(
                WebhookState.ACKNOWLEDGED, MSG_PROCESSED, "applied",
                error_kind=ErrorKind.DOWNSTREAM_UNAVAILABLE if forwarded is False else None,
                payment_id=payment.payment_id, settlement=settlement, forwarded=forwarded,
                transitions=path + [WebhookState.SETTLED],
            )

        if settlement.outcome == SettlementOutcome.ALREADY_APPLIED:
            return WebhookResult(
                WebhookState.ACKNOWLEDGED, MSG_ALREADY_APPLIED, "already_applied",
                error_kind=ErrorKind.DUPLICATE_EVENT,
                payment_id=payment.payment_id, settlement=settlement, transitions=path,
            )

        if settlement.outcome == SettlementOutcome.CUSTOMER_NOT_FOUND:
            return WebhookResult(
                WebhookState.ACKNOWLEDGED_WITH_ERROR, MSG_CUSTOMER_NOT_FOUND, "customer_not_found",
                error_kind=ErrorKind.CUSTOMER_NOT_FOUND,
                payment_id=payment.payment_id, settlement=settlement, transitions=path,
            )

        logger.error(
            "Payment %s no aplicado (reason=%s); acuse sin abono",
            payment.payment_id, settlement.reason,
        )
        return WebhookResult(
            WebhookState.ACKNOWLEDGED_WITH_ERROR, MSG_SETTLEMENT_FAILED, "failed",
            error_kind=ErrorKind.STORAGE,
            payment_id=payment.payment_id, settlement=settlement, transitions=path,
        )

    async def _forward(self, payment: NormalizedPayment) -> Optional[bool]:
        """None = reenvío desactivado; True/False = resultado del POST."""
        if self.forwarder is None:
            return None
        ok = await self.forwarder.forward(ForwardedPayment.from_normalized(payment))
        observe_forward(ok)
        if not ok:
            logger.warning(
                "Payment %s aplicado pero no reenviado al backend interno", payment.payment_id
            )
        return ok


# ---------------------------------------------------------
# Construcción desde settings (lifespan)
# ---------------------------------------------------------
def build_webhook_pipeline(
    settings: RazorpaySettings,
    *,
    session_factory: async_sessionmaker[AsyncSession],
    http_client: Optional[httpx.AsyncClient] = None,
    dedup: Optional[ProcessedEventCache] = None,
) -> WebhookPipeline:
    """Ensambla el pipeline a partir de RazorpaySettings."""
    if not settings.webhook_secret:
        logger.error("RAZORPAY_WEBHOOK_SECRET no configurado: los webhooks responderán 500")

    ledger = SettlementLedger(
        session_factory,
        accepted_statuses=settings.creditable_statuses,
        timeout_seconds=settings.webhook_settlement_timeout_seconds,
    )

    forwarder: Optional[DownstreamForwarder] = None
    endpoint = settings.forward_endpoint
    if endpoint and http_client is not None:
        secret = settings.forward_secret
        if not secret:
            logger.warning("BACKEND_URL configurado sin INTERNAL_WEBHOOK_SECRET: reenvío desactivado")
        elif secret == settings.webhook_secret:
            logger.warning(
                "INTERNAL_WEBHOOK_SECRET no puede ser igual a RAZORPAY_WEBHOOK_SECRET: reenvío desactivado"
            )
        else:
            forwarder = DownstreamForwarder(
                http_client,
                secret=secret,
                endpoint=endpoint,
                timeout_seconds=settings.webhook_forward_timeout_seconds,
            )
    else:
        logger.info("Reenvío al backend interno desactivado (BACKEND_URL no configurado)")

    if settings.razorpay_credit_on_authorized:
        logger.warning("RAZORPAY_CREDIT_ON_AUTHORIZED=true: se acreditan pagos solo autorizados")

    return WebhookPipeline(
        webhook_secret=settings.webhook_secret,
        ledger=ledger,
        dedup=dedup if dedup is not None else ProcessedEventCache(settings.webhook_dedup_capacity),
        forwarder=forwarder,
        creditable_events=settings.creditable_events,
        minor_unit_divisor=settings.razorpay_minor_unit_divisor,
    )


__all__ = [
    "WebhookResult",
    "WebhookPipeline",
    "build_webhook_pipeline",
]

# Fin del archivo backend/app/modules/payments/facades/webhooks/handler.py
