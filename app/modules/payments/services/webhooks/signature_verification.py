# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/signature_verification.py

Verificación de firmas HMAC-SHA256 para Razorpay y firma del reenvío interno.

IMPORTANTE:
- La firma se calcula SIEMPRE sobre el body crudo recibido, nunca sobre una
  re-serialización del JSON.
- No existe bypass: sin secreto o sin firma válida, la verificación falla.
- Entradas malformadas (no-hex, longitud incorrecta, None) devuelven False;
  nunca lanzan excepción.

Autor: WalletSync
Fecha: 19/10/2026
"""
from __future__ import annotations

import hashlib
import hmac
import logging
import re
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


RAZORPAY_SIGNATURE_HEADER = "x-razorpay-signature"

# hexdigest de SHA-256: 32 bytes -> 64 caracteres hex
_HEX_SHA256_RE = re.compile(r"[0-9a-fA-F]{64}")


# =============================================================================
# PRIMITIVAS
# =============================================================================

def compute_hmac_sha256(message: bytes, secret: str) -> str:
    """Devuelve HMAC-SHA256(secret, message) en hex (minúsculas)."""
    return hmac.new(
        secret.encode("utf-8"),
        msg=message,
        digestmod=hashlib.sha256,
    ).hexdigest()


def is_hex_signature(value: object) -> bool:
    return isinstance(value, str) and _HEX_SHA256_RE.fullmatch(value) is not None


def verify_hmac_sha256(
    raw_body: bytes,
    provided_signature: Optional[str],
    secret: Optional[str],
) -> bool:
    """
    Verifica que `provided_signature` sea exactamente HMAC-SHA256(secret, raw_body).

    Args:
        raw_body: Bytes exactos firmados por el emisor
        provided_signature: Firma hex recibida
        secret: Secreto compartido

    Returns:
        True solo si la firma coincide; False en cualquier otro caso
    """
    if not secret:
        return False
    if not is_hex_signature(provided_signature):
        return False
    if not isinstance(raw_body, (bytes, bytearray)):
        return False

    expected = compute_hmac_sha256(bytes(raw_body), secret)
    # compare_digest: tiempo constante respecto al punto de diferencia
    return hmac.compare_digest(expected, provided_signature)


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Busca un header sin distinguir mayúsculas/minúsculas."""
    target = name.lower()
    for key, value in headers.items():
        if key.lower() == target:
            return value
    return None


# =============================================================================
# RAZORPAY
# =============================================================================

# Motivos de rechazo; son también el mensaje que recibe el emisor
REASON_SECRET_NOT_CONFIGURED = "Webhook secret not configured"
REASON_MISSING_SIGNATURE = "Missing signature header"
REASON_MALFORMED_SIGNATURE = "Malformed signature header"
REASON_INVALID_SIGNATURE = "Invalid signature"


def razorpay_signature_error(
    raw_body: bytes,
    signature: Optional[str],
    webhook_secret: Optional[str],
) -> Optional[str]:
    """
    Verifica la firma de un webhook de Razorpay (header X-Razorpay-Signature).

    Returns:
        None si la firma es válida; si no, el motivo del rechazo
    """
    if not webhook_secret:
        logger.error("Razorpay webhook rechazado: RAZORPAY_WEBHOOK_SECRET no configurado")
        return REASON_SECRET_NOT_CONFIGURED

    if not signature:
        logger.warning("Razorpay webhook rechazado: falta header X-Razorpay-Signature")
        return REASON_MISSING_SIGNATURE

    if not is_hex_signature(signature):
        logger.warning("Razorpay webhook rechazado: firma con formato inválido")
        return REASON_MALFORMED_SIGNATURE

    if verify_hmac_sha256(raw_body, signature, webhook_secret):
        logger.debug("Razorpay webhook: firma verificada correctamente")
        return None

    logger.warning("Razorpay webhook rechazado: la firma no coincide")
    return REASON_INVALID_SIGNATURE


def verify_razorpay_signature(
    raw_body: bytes,
    signature: Optional[str],
    webhook_secret: Optional[str],
) -> bool:
    """True si la firma del webhook de Razorpay es válida."""
    return razorpay_signature_error(raw_body, signature, webhook_secret) is None


def verify_checkout_signature(
    order_id: str,
    payment_id: str,
    signature: Optional[str],
    key_secret: Optional[str],
) -> bool:
    """
    Verifica la firma devuelta por Razorpay Checkout al frontend.

    Razorpay firma "{order_id}|{payment_id}" con el key secret de la cuenta.
    """
    if not order_id or not payment_id:
        return False
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return verify_hmac_sha256(message, signature, key_secret)


__all__ = [
    "RAZORPAY_SIGNATURE_HEADER",
    "compute_hmac_sha256",
    "is_hex_signature",
    "verify_hmac_sha256",
    "get_header",
    "razorpay_signature_error",
    "verify_razorpay_signature",
    "verify_checkout_signature",
]

# Fin del archivo backend/app/modules/payments/services/webhooks/signature_verification.py
