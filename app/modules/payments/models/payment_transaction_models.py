# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/payment_transaction_models.py

Ledger inmutable de pagos aplicados.

Cada fila representa un pago de Razorpay abonado a una billetera. El UNIQUE
sobre payment_id es el ancla durable de idempotencia: un segundo INSERT con
el mismo payment_id falla en la base y se interpreta como "ya aplicado".

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, utcnow


PAYMENT_ID_UNIQUE_CONSTRAINT = "uq_payment_transactions_payment_id"


class PaymentTransaction(Base):
    """Pago aplicado al saldo de un cliente."""

    __tablename__ = "payment_transactions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    payment_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        doc="ID del pago en Razorpay (pay_...).",
    )

    customer_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("customers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    amount: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        doc="Monto abonado, ya convertido a unidades del ledger.",
    )

    status: Mapped[str] = mapped_column(String(32), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    # Restricciones
    __table_args__ = (
        UniqueConstraint("payment_id", name=PAYMENT_ID_UNIQUE_CONSTRAINT),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return (
            f"<PaymentTransaction id={self.id} payment_id={self.payment_id} "
            f"customer_id={self.customer_id} amount={self.amount}>"
        )


__all__ = ["PaymentTransaction", "PAYMENT_ID_UNIQUE_CONSTRAINT"]

# Fin del archivo backend/app/modules/payments/models/payment_transaction_models.py
