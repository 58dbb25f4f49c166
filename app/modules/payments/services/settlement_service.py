# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/settlement_service.py

SettlementLedger: aplica el abono de un pago de Razorpay exactamente una vez.

Algoritmo (una sola transacción por llamada, en sesión propia):
  1. Fast-path: si ya existe PaymentTransaction(payment_id) -> ALREADY_APPLIED.
  2. Carga el cliente con FOR UPDATE; si no existe -> CUSTOMER_NOT_FOUND.
  3. customers.wallet_balance += amount (incremento en SQL).
  4. wallets.balance += amount, o INSERT de la wallet si no existe.
  5. INSERT de PaymentTransaction (UNIQUE payment_id) + flush.
  6. COMMIT.

El paso 1 no es un lock: dos requests concurrentes pueden pasarlo. La
garantía la da el UNIQUE de payment_id; su violación hace rollback y se
reporta como ALREADY_APPLIED. Cualquier otro error hace rollback completo y
devuelve FAILED: los saldos quedan exactamente como estaban.

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.modules.payments.enums import SettlementOutcome
from app.modules.payments.models.payment_transaction_models import PAYMENT_ID_UNIQUE_CONSTRAINT
from app.modules.payments.repositories import (
    CustomerRepository,
    PaymentTransactionRepository,
    WalletRepository,
)

logger = logging.getLogger(__name__)


DEFAULT_ACCEPTED_STATUSES: FrozenSet[str] = frozenset({"captured"})


@dataclass(frozen=True)
class SettlementResult:
    outcome: SettlementOutcome
    payment_id: str
    customer_id: Optional[str] = None
    amount: int = 0
    reason: Optional[str] = None
    wallet_created: bool = False

    @property
    def is_settled(self) -> bool:
        """True si el pago quedó reflejado en el ledger (ahora o antes)."""
        return self.outcome in (SettlementOutcome.APPLIED, SettlementOutcome.ALREADY_APPLIED)


def is_payment_id_conflict(exc: IntegrityError) -> bool:
    """
    Distingue la violación del UNIQUE de payment_id de cualquier otra
    violación de integridad (FK, NOT NULL, UNIQUE de wallets...).

    - PostgreSQL/asyncpg: SQLSTATE 23505 + nombre del constraint.
    - SQLite: "UNIQUE constraint failed: payment_transactions.payment_id".
    """
    orig = exc.orig
    message = str(orig) if orig is not None else str(exc)

    cause = getattr(orig, "__cause__", None)
    constraint_name = getattr(cause, "constraint_name", None)
    if constraint_name is not None:
        return constraint_name == PAYMENT_ID_UNIQUE_CONSTRAINT

    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == "23505" or "duplicate key" in message:
        return PAYMENT_ID_UNIQUE_CONSTRAINT in message

    return "UNIQUE constraint failed" in message and "payment_transactions.payment_id" in message


class SettlementLedger:
    """
    Aplica abonos de pagos sobre customers/wallets/payment_transactions.

    Recibe la fábrica de sesiones: cada apply_payment abre su propia sesión y
    su propia transacción.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        accepted_statuses: Iterable[str] = DEFAULT_ACCEPTED_STATUSES,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._session_factory = session_factory
        self.accepted_statuses: FrozenSet[str] = frozenset(accepted_statuses)
        self.timeout_seconds = timeout_seconds

        self._customer_repo = CustomerRepository()
        self._wallet_repo = WalletRepository()
        self._tx_repo = PaymentTransactionRepository()

    # ---------------------------------------------------------
    # Precondiciones (errores del llamador)
    # ---------------------------------------------------------
    def _check_preconditions(self, payment_id: str, customer_id: str, amount: int, status: str) -> None:
        if not payment_id:
            raise ValueError("payment_id es requerido")
        if not customer_id:
            raise ValueError("customer_id es requerido")
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise ValueError(f"amount debe ser un entero no negativo (recibido: {amount!r})")
        if status not in self.accepted_statuses:
            raise ValueError(
                f"status '{status}' no acreditable; aceptados: {sorted(self.accepted_statuses)}"
            )

    # ---------------------------------------------------------
    # API pública
    # ---------------------------------------------------------
    async def apply_payment(
        self,
        *,
        payment_id: str,
        customer_id: str,
        amount: int,
        status: str,
    ) -> SettlementResult:
        """
        Abona `amount` (ya en unidades del ledger) al cliente, una sola vez
        por payment_id.

        Raises:
            ValueError: si no se cumplen las precondiciones
        """
        self._check_preconditions(payment_id, customer_id, amount, status)

        try:
            async with asyncio.timeout(self.timeout_seconds):
                return await self._apply(payment_id, customer_id, amount, status)

        except IntegrityError as e:
            if is_payment_id_conflict(e):
                logger.info(
                    "Payment %s already applied (unique constraint, idempotent)", payment_id
                )
                return SettlementResult(
                    SettlementOutcome.ALREADY_APPLIED, payment_id, customer_id, amount
                )
            logger.error("Settlement de %s falló por integridad: %s", payment_id, e.orig)
            return SettlementResult(
                SettlementOutcome.FAILED, payment_id, customer_id, amount,
                reason="integrity_error",
            )
        except TimeoutError:
            logger.error(
                "Settlement de %s excedió %.1fs; transacción revertida",
                payment_id, self.timeout_seconds or 0.0,
            )
            return SettlementResult(
                SettlementOutcome.FAILED, payment_id, customer_id, amount, reason="timeout"
            )
        except (SQLAlchemyError, OSError) as e:
            logger.error("Settlement de %s falló (storage): %s", payment_id, e)
            return SettlementResult(
                SettlementOutcome.FAILED, payment_id, customer_id, amount,
                reason=f"storage_error: {type(e).__name__}",
            )

    async def _apply(
        self, payment_id: str, customer_id: str, amount: int, status: str
    ) -> SettlementResult:
        async with self._session_factory() as session:
            async with session.begin():
                # 1) Fast-path de idempotencia
                existing = await self._tx_repo.get_by_payment_id(session, payment_id)
                if existing is not None:
                    logger.info("Payment %s already applied (fast-path)", payment_id)
                    return SettlementResult(
                        SettlementOutcome.ALREADY_APPLIED, payment_id, customer_id, amount
                    )

                # 2) Cliente (lock de fila en PostgreSQL)
                customer = await self._customer_repo.get_by_id(session, customer_id, for_update=True)
                if customer is None:
                    logger.error(
                        "Customer %s no existe; payment %s no aplicado", customer_id, payment_id
                    )
                    return SettlementResult(
                        SettlementOutcome.CUSTOMER_NOT_FOUND, payment_id, customer_id, amount,
                        reason="customer_not_found",
                    )

                # 3) Saldo denormalizado del cliente
                await self._customer_repo.increment_balance(session, customer_id, amount)

                # 4) Wallet (creación perezosa)
                wallet_created = await self._wallet_repo.credit_or_create(session, customer_id, amount)

                # 5) Ancla de idempotencia
                await self._tx_repo.create(
                    session,
                    payment_id=payment_id,
                    customer_id=customer_id,
                    amount=amount,
                    status=status,
                )

            # 6) COMMIT al salir de session.begin()
            logger.info(
                "Payment %s applied: customer=%s amount=%d wallet_created=%s",
                payment_id, customer_id, amount, wallet_created,
            )
            return SettlementResult(
                SettlementOutcome.APPLIED, payment_id, customer_id, amount,
                wallet_created=wallet_created,
            )


__all__ = [
    "DEFAULT_ACCEPTED_STATUSES",
    "SettlementLedger",
    "SettlementResult",
    "is_payment_id_conflict",
]

# Fin del archivo backend/app/modules/payments/services/settlement_service.py
