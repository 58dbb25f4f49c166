# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/wallet_models.py

Modelo ORM para la tabla wallets.

Reglas de negocio:
- Una wallet por cliente (UNIQUE customer_id).
- Se crea de forma perezosa en el primer abono, con balance = monto.
- balance y customers.wallet_balance solo se modifican dentro del
  SettlementLedger.

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, utcnow


class Wallet(Base):
    """Billetera de un cliente."""

    __tablename__ = "wallets"

    # ------------------------------------------------------------------ #
    # Columnas principales
    # ------------------------------------------------------------------ #
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    customer_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="ID del cliente dueño de esta billetera.",
    )

    balance: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        server_default="0",
        doc="Saldo de la billetera (unidades del ledger).",
    )

    credit_limit: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        server_default="0",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    # ------------------------------------------------------------------ #
    # Constraints
    # ------------------------------------------------------------------ #
    __table_args__ = (
        UniqueConstraint("customer_id", name="uq_wallets_customer_id"),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<Wallet id={self.id} customer_id={self.customer_id} balance={self.balance}>"


__all__ = ["Wallet"]

# Fin del archivo backend/app/modules/payments/models/wallet_models.py
