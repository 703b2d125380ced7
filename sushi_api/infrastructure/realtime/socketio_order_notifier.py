# sushi_api/infrastructure/realtime/socketio_order_notifier.py
from __future__ import annotations

import logging
from typing import Any

from sushi_api.core.interfaces.order_notifier import (
    OrderCancelledEvent,
    OrderCreatedEvent,
    OrderNotifier,
    OrderStateChangedEvent,
    RealtimeEmitter,
    TableUpdatedEvent,
)
from sushi_api.core.realtime.events import OutboundEvent
from sushi_api.core.realtime.rooms import ADMINS_ROOM, COOKS_ROOM, GLOBAL_ROOM, WAITERS_ROOM, Room
from sushi_api.entities.notification import Notification
from sushi_api.services import notification_factory
from sushi_api.services.notification_history import NotificationHistory

logger = logging.getLogger(__name__)


def _role_payload(notification: Notification, message: str) -> dict[str, Any]:
    # cozinha/salão recebem mensagem própria; o dashboard recebe a notificação completa
    return {
        "type": notification.type.value,
        "message": message,
        "data": dict(notification.data),
        "timestamp": notification.timestamp,
    }


class SocketIOOrderNotifier(OrderNotifier):
    """Barramento de notificações: monta, guarda no histórico e distribui por sala.

    Entrega best-effort: quem estiver offline perde o evento ao vivo.
    """

    def __init__(self, *, emitter: RealtimeEmitter, history: NotificationHistory) -> None:
        self._emitter = emitter
        self._history = history

    def _emit(self, event: OutboundEvent, payload: dict[str, Any], room: Room) -> None:
        self._emitter.emit(event.value, payload, to=room.name)

    def notify_order_created(self, event: OrderCreatedEvent) -> None:
        notification = self._history.append(notification_factory.order_created(event))
        mesa = event.table_number if event.table_number is not None else "N/A"

        self._emit(
            OutboundEvent.NEW_ORDER,
            _role_payload(notification, f"Nuevo pedido recibido - Mesa {mesa}"),
            COOKS_ROOM,
        )
        self._emit(
            OutboundEvent.NEW_ORDER,
            _role_payload(notification, f"Pedido creado - Mesa {mesa}"),
            WAITERS_ROOM,
        )
        self._emit(OutboundEvent.DASHBOARD_UPDATE, notification.to_dict(), ADMINS_ROOM)

        logger.info("Evento '%s' emitido para pedido #%s", OutboundEvent.NEW_ORDER.value, event.order_id)

    def notify_order_state_changed(self, event: OrderStateChangedEvent) -> None:
        notification = self._history.append(notification_factory.order_state_changed(event))

        self._emit(
            OutboundEvent.ORDER_STATE_CHANGED,
            _role_payload(notification, f'Pedido #{event.order_id} ahora está "{event.new_state}"'),
            COOKS_ROOM,
        )
        self._emit(
            OutboundEvent.ORDER_STATE_CHANGED,
            _role_payload(notification, f'Pedido #{event.order_id} actualizado a "{event.new_state}"'),
            WAITERS_ROOM,
        )
        self._emit(
            OutboundEvent.ORDER_STATE_CHANGED,
            _role_payload(notification, f'Tu pedido cambió a "{event.new_state}"'),
            Room.for_order(event.order_id),
        )
        self._emit(OutboundEvent.DASHBOARD_UPDATE, notification.to_dict(), ADMINS_ROOM)

        logger.info(
            "Evento '%s' emitido para pedido #%s (%s -> %s)",
            OutboundEvent.ORDER_STATE_CHANGED.value,
            event.order_id,
            event.previous_state,
            event.new_state,
        )

    def notify_order_cancelled(self, event: OrderCancelledEvent) -> None:
        notification = self._history.append(notification_factory.order_cancelled(event))

        self._emit(
            OutboundEvent.ORDER_CANCELLED,
            _role_payload(notification, f"Pedido #{event.order_id} ha sido cancelado"),
            GLOBAL_ROOM,
        )
        self._emit(OutboundEvent.DASHBOARD_UPDATE, notification.to_dict(), ADMINS_ROOM)

        logger.info("Evento '%s' emitido para pedido #%s", OutboundEvent.ORDER_CANCELLED.value, event.order_id)

    def notify_table_updated(self, event: TableUpdatedEvent) -> None:
        # prioridade baixa: não entra no histórico
        payload = notification_factory.table_updated(event).to_dict()

        self._emit(OutboundEvent.TABLE_UPDATED, payload, WAITERS_ROOM)
        self._emit(OutboundEvent.TABLE_UPDATED, payload, ADMINS_ROOM)

        logger.info("Evento '%s' emitido para mesa %s", OutboundEvent.TABLE_UPDATED.value, event.table_number)
