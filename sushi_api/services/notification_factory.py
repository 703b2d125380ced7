# sushi_api/services/notification_factory.py

from sushi_api.core.interfaces.order_notifier import (
    OrderCancelledEvent,
    OrderCreatedEvent,
    OrderStateChangedEvent,
    TableUpdatedEvent,
)
from sushi_api.entities.notification import (
    Notification,
    NotificationPriority,
    NotificationType,
    utc_now_iso,
)


def _table_label(table_number: int | None) -> str:
    return str(table_number) if table_number is not None else "N/A"


def order_created(event: OrderCreatedEvent) -> Notification:
    return Notification(
        type=NotificationType.NEW_ORDER,
        message=f"Nuevo pedido #{event.order_id} creado en mesa {_table_label(event.table_number)}",
        data={
            "pedido_id": event.order_id,
            "mesa_id": event.table_id,
            "mesa_numero": event.table_number,
            "mesero": event.waiter_name,
            "estado": event.state,
        },
        timestamp=utc_now_iso(),
        priority=NotificationPriority.HIGH,
    )


def order_state_changed(event: OrderStateChangedEvent) -> Notification:
    now = utc_now_iso()
    return Notification(
        type=NotificationType.ORDER_STATE_CHANGED,
        message=f'Pedido #{event.order_id} cambió de "{event.previous_state}" a "{event.new_state}"',
        data={
            "pedido_id": event.order_id,
            "mesa_id": event.table_id,
            "estado_anterior": event.previous_state,
            "estado_nuevo": event.new_state,
            "timestamp": event.updated_at_iso or now,
        },
        timestamp=now,
        priority=NotificationPriority.MEDIUM,
    )


def order_cancelled(event: OrderCancelledEvent) -> Notification:
    return Notification(
        type=NotificationType.ORDER_CANCELLED,
        message=f"Pedido #{event.order_id} fue cancelado",
        data={
            "pedido_id": event.order_id,
            "mesa_id": event.table_id,
            "mesa_numero": event.table_number,
            "motivo": event.reason,
        },
        timestamp=utc_now_iso(),
        priority=NotificationPriority.HIGH,
    )


def table_updated(event: TableUpdatedEvent) -> Notification:
    return Notification(
        type=NotificationType.TABLE_UPDATED,
        message=f'Mesa {event.table_number} ahora está "{event.state}"',
        data={
            "mesa_id": event.table_id,
            "numero_mesa": event.table_number,
            "estado": event.state,
        },
        timestamp=utc_now_iso(),
        priority=NotificationPriority.LOW,
    )
