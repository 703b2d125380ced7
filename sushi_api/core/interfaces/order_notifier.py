# sushi_api/core/interfaces/order_notifier.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class OrderCreatedEvent:
    order_id: int
    table_id: int | None
    state: str
    table_number: int | None = None
    waiter_name: str | None = None


@dataclass(frozen=True)
class OrderStateChangedEvent:
    order_id: int
    table_id: int | None
    previous_state: str
    new_state: str
    updated_at_iso: str | None = None


@dataclass(frozen=True)
class OrderCancelledEvent:
    order_id: int
    table_id: int | None
    table_number: int | None = None
    reason: str = "Cancelado por el sistema"


@dataclass(frozen=True)
class TableUpdatedEvent:
    table_id: int
    table_number: int
    state: str


class OrderNotifier(Protocol):
    def notify_order_created(self, event: OrderCreatedEvent) -> None: ...
    def notify_order_state_changed(self, event: OrderStateChangedEvent) -> None: ...
    def notify_order_cancelled(self, event: OrderCancelledEvent) -> None: ...
    def notify_table_updated(self, event: TableUpdatedEvent) -> None: ...


class RealtimeEmitter(Protocol):
    """O que o notifier precisa do servidor Socket.IO (o próprio `SocketIO` atende)."""

    def emit(self, event: str, *args: Any, **kwargs: Any) -> None: ...
