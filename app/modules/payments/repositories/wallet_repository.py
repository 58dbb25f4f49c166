# -*- coding: utf-8 -*-
"""
Repositorio para la tabla wallets.

Autor: WalletSync
Fecha: 19/10/2026
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.base import utcnow
from app.shared.database.repository import BaseRepository
from app.modules.payments.models.wallet_models import Wallet


class WalletRepository(BaseRepository[Wallet]):
    def __init__(self):
        super().__init__(Wallet)

    # -----------------------------------------------------------
    # Abono: UPDATE atómico; si no hay fila, se crea con balance = monto
    # -----------------------------------------------------------
    async def increment_balance(
        self, session: AsyncSession, customer_id: str, amount: int
    ) -> int:
        stmt = (
            update(Wallet)
            .where(Wallet.customer_id == customer_id)
            .values(balance=Wallet.balance + amount, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def credit_or_create(
        self, session: AsyncSession, customer_id: str, amount: int
    ) -> bool:
        """
        Abona `amount` a la wallet del cliente.

        Returns:
            True si la wallet se creó en esta llamada.
        """
        if await self.increment_balance(session, customer_id, amount):
            return False
        await self.create(session, customer_id=customer_id, balance=amount, credit_limit=0)
        return True

# Fin del archivo backend/app/modules/payments/repositories/wallet_repository.py
