# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_payments.py

Configuración de Razorpay y del reenvío interno de pagos para WalletSync.

Descripción:
    Centraliza secretos del proveedor, destino del reenvío interno,
    tiempos de espera, capacidad del caché de deduplicación y la
    política de eventos acreditables.

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

from typing import FrozenSet, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RazorpaySettings(BaseSettings):
    """Configuración de webhooks Razorpay y reenvío interno."""

    # =========================================================================
    # RAZORPAY
    # =========================================================================

    razorpay_webhook_secret: Optional[SecretStr] = Field(
        default=None,
        description="Secreto compartido con Razorpay para firmar webhooks",
    )

    razorpay_key_id: Optional[str] = Field(
        default=None,
        description="Key ID de la cuenta Razorpay (rzp_live_... / rzp_test_...)",
    )

    razorpay_key_secret: Optional[SecretStr] = Field(
        default=None,
        description="Key secret de Razorpay; firma order_id|payment_id en checkout",
    )

    razorpay_minor_unit_divisor: int = Field(
        default=100,
        gt=0,
        description="Divisor de unidades menores (paise -> rupias)",
    )

    razorpay_credit_on_authorized: bool = Field(
        default=False,
        description=(
            "Acredita también payment.authorized. Riesgoso: un pago autorizado "
            "puede no capturarse nunca"
        ),
    )

    # =========================================================================
    # REENVÍO INTERNO (backend downstream)
    # =========================================================================

    backend_url: Optional[str] = Field(
        default=None,
        description="URL base del backend interno que recibe pagos liquidados",
    )

    backend_webhook_path: str = Field(
        default="/api/webhooks/payment",
        description="Ruta del endpoint interno de pagos",
    )

    internal_webhook_secret: Optional[SecretStr] = Field(
        default=None,
        description="Secreto propio del backend interno (distinto del de Razorpay)",
    )

    webhook_forward_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout total del POST de reenvío",
    )

    # =========================================================================
    # PROCESAMIENTO
    # =========================================================================

    webhook_settlement_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Tiempo máximo de la transacción de liquidación",
    )

    webhook_dedup_capacity: int = Field(
        default=1000,
        ge=10,
        description="Entradas máximas del caché de eventos procesados",
    )

    @field_validator("backend_url", mode="before")
    @classmethod
    def _strip_backend_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip().rstrip("/")
        return v or None

    # =========================================================================
    # HELPERS
    # =========================================================================

    @property
    def webhook_secret(self) -> Optional[str]:
        if self.razorpay_webhook_secret is None:
            return None
        return self.razorpay_webhook_secret.get_secret_value() or None

    @property
    def forward_secret(self) -> Optional[str]:
        if self.internal_webhook_secret is None:
            return None
        return self.internal_webhook_secret.get_secret_value() or None

    @property
    def forward_endpoint(self) -> Optional[str]:
        """URL completa del reenvío, o None si no hay backend configurado."""
        if not self.backend_url:
            return None
        path = self.backend_webhook_path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.backend_url}{path}"

    @property
    def creditable_events(self) -> FrozenSet[str]:
        if self.razorpay_credit_on_authorized:
            return frozenset({"payment.captured", "payment.authorized"})
        return frozenset({"payment.captured"})

    @property
    def creditable_statuses(self) -> FrozenSet[str]:
        if self.razorpay_credit_on_authorized:
            return frozenset({"captured", "authorized"})
        return frozenset({"captured"})

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_razorpay_settings: Optional[RazorpaySettings] = None


def get_razorpay_settings() -> RazorpaySettings:
    """
    Obtiene la instancia global de configuración de Razorpay.

    Returns:
        RazorpaySettings: Configuración de webhooks y reenvío
    """
    global _razorpay_settings
    if _razorpay_settings is None:
        _razorpay_settings = RazorpaySettings()
    return _razorpay_settings


def reset_razorpay_settings() -> None:
    """Descarta el singleton (tests / recarga de entorno)."""
    global _razorpay_settings
    _razorpay_settings = None


__all__ = [
    "RazorpaySettings",
    "get_razorpay_settings",
    "reset_razorpay_settings",
]
# Fin del archivo backend/app/shared/config/settings_payments.py
