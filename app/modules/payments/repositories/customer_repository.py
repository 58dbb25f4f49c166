# -*- coding: utf-8 -*-
"""
Repositorio para la tabla customers.

Autor: WalletSync
Fecha: 19/10/2026
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.models.customer_models import Customer


class CustomerRepository(BaseRepository[Customer]):
    def __init__(self):
        super().__init__(Customer)

    # -----------------------------------------------------------
    # Obtener cliente (opcionalmente bloqueando la fila)
    # -----------------------------------------------------------
    async def get_by_id(
        self, session: AsyncSession, customer_id: str, for_update: bool = False
    ) -> Optional[Customer]:
        stmt = select(Customer).where(Customer.id == customer_id)
        if for_update:
            stmt = stmt.with_for_update()

        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    # -----------------------------------------------------------
    # Incremento atómico del saldo (lado SQL)
    # -----------------------------------------------------------
    async def increment_balance(
        self, session: AsyncSession, customer_id: str, amount: int
    ) -> int:
        """Devuelve el número de filas afectadas (0 si el cliente no existe)."""
        stmt = (
            update(Customer)
            .where(Customer.id == customer_id)
            .values(wallet_balance=Customer.wallet_balance + amount)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

# Fin del archivo backend/app/modules/payments/repositories/customer_repository.py
