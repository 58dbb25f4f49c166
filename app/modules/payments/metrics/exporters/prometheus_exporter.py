# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/exporters/prometheus_exporter.py

Exporter Prometheus para el módulo de pagos.
Como la respuesta al proveedor es deliberadamente optimista (200 incluso ante
errores de negocio), estas métricas son la señal operativa de
customer_not_found / failed / reenvíos fallidos.

Autor: WalletSync
Fecha: 19/10/2026
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Registro global de Prometheus
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------

WEBHOOKS_RECEIVED_TOTAL = Counter(
    "payments_webhook_received_total",
    "Total webhooks recibidos por proveedor",
    ["provider"],
    registry=registry,
)

# Verificación de firma separada del outcome de negocio
WEBHOOKS_VERIFIED_TOTAL = Counter(
    "payments_webhook_verified_total",
    "Total webhooks por resultado de verificación (success/failure)",
    ["provider", "result"],
    registry=registry,
)
WEBHOOKS_OUTCOME_TOTAL = Counter(
    "payments_webhook_outcome_total",
    "Total webhooks por outcome de negocio",
    ["provider", "outcome"],  # applied/already_applied/duplicate/ignored/customer_not_found/failed/...
    registry=registry,
)
WEBHOOKS_REJECTED_TOTAL = Counter(
    "payments_webhook_rejected_total",
    "Total webhooks rechazados por proveedor y razón",
    ["provider", "reason"],
    registry=registry,
)
WEBHOOKS_PROCESSING_SECONDS = Histogram(
    "payments_webhook_processing_seconds",
    "Tiempo de procesamiento de webhooks (segundos)",
    ["provider"],
    registry=registry,
)
CREDIT_APPLIED_TOTAL = Counter(
    "payments_credit_applied_total",
    "Total de abonos aplicados desde webhooks",
    ["provider"],
    registry=registry,
)
FORWARD_TOTAL = Counter(
    "payments_forward_total",
    "Reenvíos al backend interno por resultado (success/failure)",
    ["result"],
    registry=registry,
)


# --------------------------------------------------------------------------
# Funciones auxiliares
# --------------------------------------------------------------------------
def render_prometheus_metrics() -> bytes:
    """
    Genera la salida actual de las métricas en formato Prometheus.
    """
    return generate_latest(registry)


def observe_webhook_received(provider: str):
    """Registra recepción de un webhook."""
    WEBHOOKS_RECEIVED_TOTAL.labels(provider=provider).inc()


def observe_webhook_verified(provider: str, verification_result: str):
    """Registra resultado de la verificación de firma (success/failure)."""
    WEBHOOKS_VERIFIED_TOTAL.labels(provider=provider, result=verification_result).inc()


def observe_webhook_outcome(provider: str, outcome: str, duration: float):
    """Registra outcome de negocio y duración total del procesamiento."""
    WEBHOOKS_OUTCOME_TOTAL.labels(provider=provider, outcome=outcome).inc()
    WEBHOOKS_PROCESSING_SECONDS.labels(provider=provider).observe(duration)
    logger.debug("[Prometheus] Webhook %s outcome=%s duration=%.4fs", provider, outcome, duration)


def observe_webhook_rejected(provider: str, reason: str):
    """
    Registra webhook rechazado.

    Args:
        provider: razorpay
        reason: authentication/validation/configuration
    """
    WEBHOOKS_REJECTED_TOTAL.labels(provider=provider, reason=reason).inc()
    logger.debug("[Prometheus] Webhook %s rejected reason=%s", provider, reason)


def observe_credit_applied(provider: str):
    """Registra abono aplicado."""
    CREDIT_APPLIED_TOTAL.labels(provider=provider).inc()


def observe_forward(success: bool):
    FORWARD_TOTAL.labels(result="success" if success else "failure").inc()


# --------------------------------------------------------------------------
# Health-check de Prometheus
# --------------------------------------------------------------------------
def prometheus_ping() -> dict:
    """Devuelve un simple dict para verificar salud del exporter."""
    return {
        "status": "ok",
        "service": "payments-metrics",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

# Fin del archivo backend/app/modules/payments/metrics/exporters/prometheus_exporter.py
