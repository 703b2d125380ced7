import pytest

from sushi_api.core.interfaces.order_notifier import (
    OrderCancelledEvent,
    OrderCreatedEvent,
    OrderStateChangedEvent,
    TableUpdatedEvent,
)
from sushi_api.infrastructure.realtime.socketio_order_notifier import SocketIOOrderNotifier
from sushi_api.services.notification_history import NotificationHistory

from conftest import RecordingEmitter


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def history() -> NotificationHistory:
    return NotificationHistory()


@pytest.fixture
def notifier(emitter, history) -> SocketIOOrderNotifier:
    return SocketIOOrderNotifier(emitter=emitter, history=history)


def test_new_order_goes_to_kitchen_floor_and_dashboard(notifier, emitter, history):
    notifier.notify_order_created(OrderCreatedEvent(order_id=42, table_id=3, state="pendiente", table_number=7))

    assert emitter.events_to("cocineros") == ["new-order"]
    assert emitter.events_to("meseros") == ["new-order"]
    assert emitter.events_to("administradores") == ["dashboard-update"]
    assert emitter.events_to("notificaciones_globales") == []

    cook_payload = next(data for _, to, data in emitter.calls if to == "cocineros")
    assert cook_payload["message"] == "Nuevo pedido recibido - Mesa 7"
    assert cook_payload["data"]["pedido_id"] == 42
    assert "priority" not in cook_payload

    dashboard = next(data for _, to, data in emitter.calls if to == "administradores")
    assert dashboard["type"] == "new-order"
    assert dashboard["priority"] == "high"
    assert dashboard["message"] == "Nuevo pedido #42 creado en mesa 7"

    assert history.recent()[0].data["pedido_id"] == 42


def test_missing_table_number_renders_placeholder(notifier, emitter):
    notifier.notify_order_created(OrderCreatedEvent(order_id=1, table_id=3, state="pendiente"))

    dashboard = next(data for _, to, data in emitter.calls if to == "administradores")
    assert dashboard["message"] == "Nuevo pedido #1 creado en mesa N/A"
    assert dashboard["data"]["mesa_numero"] is None


def test_state_change_also_reaches_the_order_room(notifier, emitter, history):
    notifier.notify_order_state_changed(
        OrderStateChangedEvent(order_id=42, table_id=3, previous_state="pendiente", new_state="en_preparacion")
    )

    assert emitter.events_to("pedido_42") == ["order-state-changed"]
    assert emitter.events_to("cocineros") == ["order-state-changed"]
    assert emitter.events_to("meseros") == ["order-state-changed"]
    assert emitter.events_to("administradores") == ["dashboard-update"]

    entry = history.recent()[0]
    assert entry.priority.value == "medium"
    assert entry.data["estado_anterior"] == "pendiente"
    assert entry.data["estado_nuevo"] == "en_preparacion"


def test_cancellation_is_broadcast_globally(notifier, emitter, history):
    notifier.notify_order_cancelled(OrderCancelledEvent(order_id=8, table_id=2, table_number=4))

    assert emitter.events_to("notificaciones_globales") == ["order-cancelled"]
    assert emitter.events_to("administradores") == ["dashboard-update"]
    assert history.recent()[0].data["motivo"] == "Cancelado por el sistema"


def test_table_update_skips_history(notifier, emitter, history):
    notifier.notify_table_updated(TableUpdatedEvent(table_id=2, table_number=4, state="ocupada"))

    assert emitter.events_to("meseros") == ["table-updated"]
    assert emitter.events_to("administradores") == ["table-updated"]
    assert emitter.events_to("cocineros") == []
    assert len(history) == 0


def test_history_holds_the_latest_six_orders(notifier, history):
    for order_id in range(1, 10):
        notifier.notify_order_created(OrderCreatedEvent(order_id=order_id, table_id=1, state="pendiente"))

    assert [n.data["pedido_id"] for n in history.recent(10)] == [9, 8, 7, 6, 5, 4]
