# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/forwarding_service.py

DownstreamForwarder: reenvía un pago ya liquidado al backend interno.

- Cuerpo canónico: JSON compacto con claves ordenadas (ForwardedPayment).
- Firma: HMAC-SHA256 del cuerpo EXACTO enviado, con INTERNAL_WEBHOOK_SECRET,
  en el header x-webhook-signature. Nunca se reutiliza el secreto de Razorpay.
- Un solo POST con timeout acotado; sin reintentos internos.
- Cualquier respuesta no-2xx o error de red devuelve False. El abono ya
  confirmado en el ledger nunca se revierte por un fallo de reenvío.

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import httpx

from app.modules.payments.schemas import ForwardedPayment
from app.modules.payments.services.webhooks.signature_verification import compute_hmac_sha256

logger = logging.getLogger(__name__)


FORWARD_SIGNATURE_HEADER = "x-webhook-signature"
DEFAULT_FORWARD_TIMEOUT_SECONDS = 10.0

# Límites del cliente HTTP compartido (se crea en el lifespan)
FORWARD_HTTP_LIMITS = httpx.Limits(
    max_keepalive_connections=10,
    max_connections=20,
    keepalive_expiry=30.0,
)


def canonical_body(payment: ForwardedPayment) -> bytes:
    """Serialización estable del pago: claves ordenadas, sin espacios."""
    data = payment.model_dump(by_alias=True, mode="json")
    return json.dumps(data, separators=(",", ":"), sort_keys=True).encode("utf-8")


def build_forward_http_client(timeout_seconds: float = DEFAULT_FORWARD_TIMEOUT_SECONDS) -> httpx.AsyncClient:
    """Cliente httpx para el reenvío; el llamador es dueño de cerrarlo."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        limits=FORWARD_HTTP_LIMITS,
    )


class DownstreamForwarder:
    """Relay firmado hacia el backend interno."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        secret: str,
        endpoint: Optional[str] = None,
        timeout_seconds: float = DEFAULT_FORWARD_TIMEOUT_SECONDS,
    ) -> None:
        if not secret:
            raise ValueError("DownstreamForwarder requiere un secreto interno no vacío")
        self._client = client
        self._secret = secret
        self.endpoint = endpoint
        self.timeout = httpx.Timeout(timeout_seconds)

    def sign(self, body: bytes) -> str:
        return compute_hmac_sha256(body, self._secret)

    async def forward(self, payment: ForwardedPayment, endpoint: Optional[str] = None) -> bool:
        """
        Envía el pago al backend interno.

        Returns:
            True si el destino respondió 2xx; False en cualquier otro caso
        """
        target = endpoint or self.endpoint
        if not target:
            logger.warning("Reenvío omitido para %s: endpoint no configurado", payment.payment_id)
            return False

        body = canonical_body(payment)
        headers = {
            "Content-Type": "application/json",
            FORWARD_SIGNATURE_HEADER: self.sign(body),
        }

        try:
            response = await self._client.post(
                target,
                content=body,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException:
            logger.warning("Reenvío de %s a %s: timeout", payment.payment_id, target)
            return False
        except httpx.HTTPError as e:
            logger.warning("Reenvío de %s a %s falló: %s", payment.payment_id, target, e)
            return False

        if response.is_success:
            logger.info("Pago %s reenviado (HTTP %d)", payment.payment_id, response.status_code)
            return True

        logger.warning(
            "Reenvío de %s rechazado por el backend interno: HTTP %d",
            payment.payment_id, response.status_code,
        )
        return False


__all__ = [
    "FORWARD_SIGNATURE_HEADER",
    "DEFAULT_FORWARD_TIMEOUT_SECONDS",
    "DownstreamForwarder",
    "build_forward_http_client",
    "canonical_body",
]

# Fin del archivo backend/app/modules/payments/services/forwarding_service.py
