# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/webhooks_razorpay.py

Webhook endpoint para Razorpay.

Endpoint:
- POST /payments/webhooks/razorpay

Contrato de respuesta (cuerpo siempre {"success": bool, "message": str}):
- 400: firma ausente/inválida o payload fuera de esquema (Razorpay no reintenta
  con el mismo cuerpo; un 400 es definitivo).
- 500: servidor mal configurado (sin secreto); Razorpay reintentará.
- 200: todo lo demás, incluidos duplicados y fallos ya registrados.

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from starlette.requests import ClientDisconnect

from app.modules.payments.facades.webhooks import (
    WebhookConfigurationError,
    WebhookError,
    WebhookPipeline,
)
from app.modules.payments.facades.webhooks.constants import PROVIDER_RAZORPAY
from app.modules.payments.metrics import (
    observe_webhook_outcome,
    observe_webhook_received,
    observe_webhook_rejected,
)
from app.modules.payments.schemas import WebhookAck
from app.modules.payments.services.webhooks.signature_verification import (
    RAZORPAY_SIGNATURE_HEADER,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/webhooks",
    tags=["payments:webhooks"],
)


def get_webhook_pipeline(request: Request) -> Optional[WebhookPipeline]:
    """Pipeline construido en el lifespan (app.state.webhook_pipeline)."""
    return getattr(request.app.state, "webhook_pipeline", None)


def _error_response(error: WebhookError) -> JSONResponse:
    ack = WebhookAck(success=False, message=error.message)
    return JSONResponse(status_code=error.policy.status_code, content=ack.model_dump())


@router.post(
    "/razorpay",
    response_model=WebhookAck,
)
async def razorpay_webhook(
    request: Request,
    x_razorpay_signature: Optional[str] = Header(default=None, alias=RAZORPAY_SIGNATURE_HEADER),
    pipeline: Optional[WebhookPipeline] = Depends(get_webhook_pipeline),
) -> JSONResponse:
    """
    Webhook de Razorpay. La firma se verifica sobre los bytes crudos del body,
    antes de cualquier parseo.
    """
    observe_webhook_received(PROVIDER_RAZORPAY)
    start_time = time.perf_counter()

    try:
        if pipeline is None:
            raise WebhookConfigurationError("Webhook pipeline not initialized")
        try:
            raw_body = await request.body()
        except ClientDisconnect as e:
            raise WebhookConfigurationError("Client disconnected before body was read") from e

        result = await pipeline.process(raw_body, x_razorpay_signature)

    except WebhookError as e:
        observe_webhook_rejected(PROVIDER_RAZORPAY, e.kind.value)
        logger.warning(
            "Razorpay webhook %s: kind=%s status=%d msg=%s",
            e.state.value, e.kind.value, e.policy.status_code, e.message,
        )
        return _error_response(e)

    observe_webhook_outcome(PROVIDER_RAZORPAY, result.outcome, time.perf_counter() - start_time)
    logger.info(
        "Razorpay webhook %s: payment=%s state=%s outcome=%s",
        "ok" if result.success else "acknowledged_with_error",
        result.payment_id, result.state.value, result.outcome,
    )
    return JSONResponse(status_code=result.status_code, content=result.to_ack().model_dump())


__all__ = ["router", "get_webhook_pipeline"]

# Fin del archivo backend/app/modules/payments/routes/webhooks_razorpay.py
