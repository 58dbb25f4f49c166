# -*- coding: utf-8 -*-
"""
Repositorio para la tabla payment_transactions (ledger de pagos aplicados).

Autor: WalletSync
Fecha: 19/10/2026
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.models.payment_transaction_models import PaymentTransaction


class PaymentTransactionRepository(BaseRepository[PaymentTransaction]):
    def __init__(self):
        super().__init__(PaymentTransaction)

    # -----------------------------------------------------------
    # Idempotencia: búsqueda por payment_id del proveedor
    # -----------------------------------------------------------
    async def get_by_payment_id(
        self, session: AsyncSession, payment_id: str
    ) -> Optional[PaymentTransaction]:
        stmt = select(PaymentTransaction).where(PaymentTransaction.payment_id == payment_id)
        result = await session.execute(stmt)
        return result.scalars().first()

# Fin del archivo backend/app/modules/payments/repositories/payment_transaction_repository.py
