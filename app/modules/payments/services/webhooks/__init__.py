# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/__init__.py

Servicios relacionados con webhooks de pagos.

Autor: WalletSync
Fecha: 19/10/2026
"""

from .signature_verification import (
    RAZORPAY_SIGNATURE_HEADER,
    compute_hmac_sha256,
    get_header,
    verify_checkout_signature,
    verify_hmac_sha256,
    razorpay_signature_error,
    verify_razorpay_signature,
)

__all__ = [
    "RAZORPAY_SIGNATURE_HEADER",
    "compute_hmac_sha256",
    "get_header",
    "verify_checkout_signature",
    "verify_hmac_sha256",
    "razorpay_signature_error",
    "verify_razorpay_signature",
]
