# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/event_dedup_service.py

Índice en memoria de eventos de webhook ya procesados.

Es una optimización, no un mecanismo de corrección: evita abrir transacciones
para reenvíos obvios dentro de una ventana corta. La garantía real es el
UNIQUE de payment_transactions.payment_id. Un `False` de is_processed() no
garantiza nada (arranque en frío, evicción, varias instancias).

Política de capacidad:
- capacity entradas como máximo en estado estable.
- Al superar capacity en un insert se desalojan, en lote, las
  max(1, capacity // 10) entradas más antiguas (orden de inserción, no LRU).

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


DEFAULT_DEDUP_CAPACITY = 1000


@dataclass(frozen=True)
class ProcessedEventRecord:
    payment_id: str
    event_type: str
    processed: bool = True
    processed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ProcessedEventCache:
    """
    Caché acotado y thread-safe de claves "payment_id:event_type".

    Se construye en el lifespan de la app y se inyecta en el pipeline; no hay
    estado global de módulo.
    """

    def __init__(self, capacity: int = DEFAULT_DEDUP_CAPACITY, name: str = "razorpay-events"):
        if capacity < 1:
            raise ValueError("capacity debe ser >= 1")
        self._capacity = capacity
        self._evict_batch = max(1, capacity // 10)
        self.name = name

        self._entries: OrderedDict[str, ProcessedEventRecord] = OrderedDict()
        self._lock = threading.Lock()

        # Estadísticas
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def evict_batch(self) -> int:
        return self._evict_batch

    @staticmethod
    def make_key(payment_id: str, event_type: str) -> str:
        return f"{payment_id}:{event_type}"

    def is_processed(self, key: str) -> bool:
        with self._lock:
            record = self._entries.get(key)
            if record is not None and record.processed:
                self._hits += 1
                return True
            self._misses += 1
            return False

    def get(self, key: str) -> Optional[ProcessedEventRecord]:
        with self._lock:
            return self._entries.get(key)

    def mark_processed(self, key: str, record: ProcessedEventRecord) -> None:
        """Registra la clave; si ya existe actualiza el registro sin reordenar."""
        with self._lock:
            if key in self._entries:
                self._entries[key] = record
                return

            self._entries[key] = record

            if len(self._entries) > self._capacity:
                # OrderedDict conserva orden de inserción: los primeros son los más antiguos
                for _ in range(min(self._evict_batch, len(self._entries))):
                    self._entries.popitem(last=False)
                self._evictions += self._evict_batch
                logger.debug(
                    "[%s] evicción en lote: %d entradas (quedan %d)",
                    self.name, self._evict_batch, len(self._entries),
                )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_stats(self) -> dict:
        with self._lock:
            return {
                "name": self.name,
                "size": len(self._entries),
                "capacity": self._capacity,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries


__all__ = [
    "DEFAULT_DEDUP_CAPACITY",
    "ProcessedEventRecord",
    "ProcessedEventCache",
]

# Fin del archivo backend/app/modules/payments/services/event_dedup_service.py
