# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/__init__.py

Paquete de fachadas del módulo Payments.

Este __init__ no importa submódulos; cada facade se importa desde su paquete:

    from app.modules.payments.facades.webhooks import WebhookPipeline, build_webhook_pipeline

Autor: WalletSync
Fecha: 19/10/2026
"""

__all__: list[str] = []

# Fin del archivo backend/app/modules/payments/facades/__init__.py
