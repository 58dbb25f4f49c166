# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/webhook_state_enum.py

Estados del ciclo de vida de un webhook entrante:

    RECEIVED -> REJECTED                      (firma o payload inválidos)
    RECEIVED -> VERIFIED -> ACKNOWLEDGED      (duplicado / evento no acreditable)
    VERIFIED -> SETTLING -> SETTLED -> ACKNOWLEDGED
    SETTLING -> ACKNOWLEDGED                  (ya aplicado)
    SETTLING -> ACKNOWLEDGED_WITH_ERROR       (cliente inexistente / fallo de storage)

WebhookResult.transitions guarda el camino recorrido; los WebhookError llevan
state = REJECTED.

Autor: WalletSync
Fecha: 19/10/2026
"""

from enum import StrEnum


class WebhookState(StrEnum):
    RECEIVED = "received"
    REJECTED = "rejected"
    VERIFIED = "verified"
    SETTLING = "settling"
    SETTLED = "settled"
    ACKNOWLEDGED = "acknowledged"
    ACKNOWLEDGED_WITH_ERROR = "acknowledged_with_error"

    @property
    def is_terminal(self) -> bool:
        return self in (
            WebhookState.REJECTED,
            WebhookState.ACKNOWLEDGED,
            WebhookState.ACKNOWLEDGED_WITH_ERROR,
        )


__all__ = ["WebhookState"]

# Fin del archivo backend/app/modules/payments/enums/webhook_state_enum.py
