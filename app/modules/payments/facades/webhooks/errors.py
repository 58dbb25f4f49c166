# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/errors.py

Taxonomía de errores del webhook y tabla de política.

La tabla ERROR_POLICY es el único lugar que decide, por tipo de error:
- si la semántica de reintentos del emisor (Razorpay) lo reintentaría, y
- qué status HTTP y qué `success` recibe el emisor.

Solo los errores que indican que el REQUEST es inválido (firma, payload) o que
el servicio no puede ni empezar (configuración) salen como no-200. Los fallos
de negocio posteriores a la autenticación se acusan con 200 + success=false:
un reintento del emisor no los resolvería.

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from http import HTTPStatus
from types import MappingProxyType
from typing import Mapping

from app.modules.payments.enums import WebhookState


class ErrorKind(StrEnum):
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    DUPLICATE_EVENT = "duplicate_event"
    MISSING_CUSTOMER_REFERENCE = "missing_customer_reference"
    CUSTOMER_NOT_FOUND = "customer_not_found"
    STORAGE = "storage"
    DOWNSTREAM_UNAVAILABLE = "downstream_unavailable"


@dataclass(frozen=True)
class ErrorPolicy:
    status_code: int
    retried_by_sender: bool
    success: bool


ERROR_POLICY: Mapping[ErrorKind, ErrorPolicy] = MappingProxyType({
    ErrorKind.AUTHENTICATION: ErrorPolicy(HTTPStatus.BAD_REQUEST, retried_by_sender=False, success=False),
    ErrorKind.VALIDATION: ErrorPolicy(HTTPStatus.BAD_REQUEST, retried_by_sender=False, success=False),
    ErrorKind.CONFIGURATION: ErrorPolicy(HTTPStatus.INTERNAL_SERVER_ERROR, retried_by_sender=True, success=False),
    ErrorKind.DUPLICATE_EVENT: ErrorPolicy(HTTPStatus.OK, retried_by_sender=False, success=True),
    ErrorKind.MISSING_CUSTOMER_REFERENCE: ErrorPolicy(HTTPStatus.OK, retried_by_sender=False, success=False),
    ErrorKind.CUSTOMER_NOT_FOUND: ErrorPolicy(HTTPStatus.OK, retried_by_sender=False, success=False),
    ErrorKind.STORAGE: ErrorPolicy(HTTPStatus.OK, retried_by_sender=False, success=False),
    # El abono ya está confirmado; el reenvío es un canal de notificación
    ErrorKind.DOWNSTREAM_UNAVAILABLE: ErrorPolicy(HTTPStatus.OK, retried_by_sender=False, success=True),
})


def policy_for(kind: ErrorKind) -> ErrorPolicy:
    return ERROR_POLICY[kind]


class WebhookError(Exception):
    """Error de webhook que corta el pipeline antes de acusar con 200."""

    kind: ErrorKind = ErrorKind.VALIDATION
    state: WebhookState = WebhookState.REJECTED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def policy(self) -> ErrorPolicy:
        return policy_for(self.kind)


class WebhookSignatureError(WebhookError):
    """Firma ausente, malformada o que no coincide."""

    kind = ErrorKind.AUTHENTICATION


class WebhookValidationError(WebhookError):
    """Payload no es JSON válido o no cumple el esquema."""

    kind = ErrorKind.VALIDATION


class WebhookConfigurationError(WebhookError):
    """El pipeline no puede ejecutarse (secreto ausente, body ilegible)."""

    kind = ErrorKind.CONFIGURATION


__all__ = [
    "ErrorKind",
    "ErrorPolicy",
    "ERROR_POLICY",
    "policy_for",
    "WebhookError",
    "WebhookSignatureError",
    "WebhookValidationError",
    "WebhookConfigurationError",
]
