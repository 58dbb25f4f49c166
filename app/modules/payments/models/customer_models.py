# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/customer_models.py

Modelo ORM para la tabla customers.

Reglas de negocio:
- Los clientes los crea un sistema externo; este servicio solo lee la fila
  e incrementa wallet_balance.
- wallet_balance es una copia denormalizada de wallets.balance: ambos se
  mueven juntos dentro de la misma transacción de liquidación.

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, utcnow


class Customer(Base):
    """Cliente dueño de una billetera."""

    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        doc="ID externo del cliente (viaja en notes.customerId de Razorpay).",
    )

    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    wallet_balance: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        server_default="0",
        doc="Saldo denormalizado de la billetera (unidades del ledger).",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<Customer id={self.id} wallet_balance={self.wallet_balance}>"


__all__ = ["Customer"]

# Fin del archivo backend/app/modules/payments/models/customer_models.py
