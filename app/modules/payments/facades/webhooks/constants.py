# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/constants.py

Constantes para webhooks Razorpay: proveedor, eventos y mensajes de respuesta.
"""

from app.modules.payments.enums import RazorpayEvent

PROVIDER_RAZORPAY = "razorpay"

# Eventos payment.* que no acreditan pero se reconocen
RAZORPAY_EVENT_FAILED = [RazorpayEvent.PAYMENT_FAILED.value]
RAZORPAY_EVENT_AUTHORIZED = [RazorpayEvent.PAYMENT_AUTHORIZED.value]

# Mensajes del acuse ({success, message})
MSG_PROCESSED = "Payment processed successfully"
MSG_DUPLICATE = "Event already processed"
MSG_ALREADY_APPLIED = "Payment already applied"
MSG_IGNORED = "Event type ignored"
MSG_AWAITING_CAPTURE = "Payment authorized, waiting for capture"
MSG_PAYMENT_FAILED = "Payment failure acknowledged"
MSG_STATUS_NOT_CREDITABLE = "Payment status is not creditable"
MSG_MISSING_CUSTOMER = "Customer ID missing from payment notes"
MSG_CUSTOMER_NOT_FOUND = "Customer not found"
MSG_SETTLEMENT_FAILED = "Payment could not be applied"

__all__ = [
    "PROVIDER_RAZORPAY",
    "RAZORPAY_EVENT_FAILED", "RAZORPAY_EVENT_AUTHORIZED",
    "MSG_PROCESSED", "MSG_DUPLICATE", "MSG_ALREADY_APPLIED", "MSG_IGNORED",
    "MSG_AWAITING_CAPTURE", "MSG_PAYMENT_FAILED", "MSG_STATUS_NOT_CREDITABLE",
    "MSG_MISSING_CUSTOMER", "MSG_CUSTOMER_NOT_FOUND", "MSG_SETTLEMENT_FAILED",
]
