import pytest

from sushi_api.core.interfaces.order_notifier import OrderCreatedEvent, OrderStateChangedEvent
from sushi_api.services.realtime_gateway import parse_order_id

from conftest import login


def _token(services, user_id: int) -> str:
    return services.jwt_provider.issue_access_token(user_id)


def _connect(app, services, token: str | None = None, **kwargs):
    auth = {"token": token} if token else None
    return services.socketio.test_client(app, auth=auth, **kwargs)


def _received(client) -> dict[str, list]:
    by_name: dict[str, list] = {}
    for message in client.get_received():
        by_name.setdefault(message["name"], []).append(message["args"][0])
    return by_name


def test_connect_without_token_is_refused(app, services):
    client = _connect(app, services)

    assert not client.is_connected()
    assert services.gateway.connection_count == 0


def test_connect_with_expired_token_is_refused(app, services, cook_id):
    expired = services.jwt_provider.issue_access_token(cook_id, minutes=-5)

    client = _connect(app, services, expired)

    assert not client.is_connected()
    assert services.gateway.connection_count == 0


def test_connect_with_refresh_token_is_refused(app, services, cook_id):
    refresh = services.jwt_provider.issue_refresh_token(cook_id, "sid")

    assert not _connect(app, services, refresh).is_connected()


def test_connect_for_deleted_user_is_refused(app, services, make_user):
    ghost_id = make_user(full_name="Fantasma", email="ghost@sushiburrito.com", role="cocinero", deleted=True)

    client = _connect(app, services, _token(services, ghost_id))

    assert not client.is_connected()
    assert services.gateway.connection_count == 0


def test_connect_joins_role_rooms_and_reports_state(app, services, cook_id):
    client = _connect(app, services, _token(services, cook_id))

    assert client.is_connected()
    assert services.gateway.connection_count == 1

    state = _received(client)["connection-state"][0]
    assert state["connected"] is True
    assert state["rooms"] == ["notificaciones_globales", "cocineros", f"usuario_{cook_id}"]


def test_token_may_come_from_header_or_query_string(app, services, waiter_id):
    token = _token(services, waiter_id)

    assert _connect(app, services, headers={"Authorization": f"Bearer {token}"}).is_connected()
    assert _connect(app, services, query_string=f"token={token}").is_connected()


def test_disconnect_drops_the_connection_context(app, services, cook_id):
    client = _connect(app, services, _token(services, cook_id))

    client.disconnect()

    assert services.gateway.connection_count == 0


def test_cook_gets_new_orders_but_never_dashboard_updates(app, services, cook_id):
    client = _connect(app, services, _token(services, cook_id))
    client.get_received()

    services.order_notifier.notify_order_created(OrderCreatedEvent(order_id=42, table_id=3, state="pendiente", table_number=7))

    received = _received(client)
    assert len(received["new-order"]) == 1
    assert received["new-order"][0]["message"] == "Nuevo pedido recibido - Mesa 7"
    assert "dashboard-update" not in received


def test_admin_dashboard_scenario(app, services, admin_id):
    access = login(app.test_client(), "admin@sushiburrito.com").get_json()["accessToken"]
    client = _connect(app, services, access)
    client.get_received()

    client.emit("announce-ready")
    received = _received(client)
    confirmation = received["connection-confirmed"][0]
    assert confirmation["userId"] == admin_id
    assert confirmation["userRole"] == "administrador"
    assert confirmation["displayName"] == "Ana Admin"
    assert received["history-snapshot"] == [[]]

    services.order_notifier.notify_order_created(OrderCreatedEvent(order_id=42, table_id=3, state="pendiente"))

    received = _received(client)
    assert len(received["dashboard-update"]) == 1
    assert received["dashboard-update"][0]["data"]["pedido_id"] == 42
    # admin está em cocineros e meseros também
    assert len(received["new-order"]) >= 1

    client.emit("request-history")
    snapshot = _received(client)["history-snapshot"][0]
    assert [item["data"]["pedido_id"] for item in snapshot] == [42]


def test_non_admin_cannot_request_history(app, services, cook_id):
    client = _connect(app, services, _token(services, cook_id))
    client.get_received()

    client.emit("request-history")

    received = _received(client)
    assert "history-snapshot" not in received
    assert received["authorization-error"][0]["event"] == "request-history"


def test_announce_ready_for_non_admin_skips_history(app, services, waiter_id):
    client = _connect(app, services, _token(services, waiter_id))
    client.get_received()

    client.emit("announce-ready")

    received = _received(client)
    assert "connection-confirmed" in received
    assert "history-snapshot" not in received
    assert "authorization-error" not in received


def test_order_room_follow_and_unfollow(app, services, waiter_id):
    client = _connect(app, services, _token(services, waiter_id))
    client.get_received()

    client.emit("join-order-room", {"orderId": 42})
    assert _received(client)["order-room-joined"][0]["room"] == "pedido_42"

    services.order_notifier.notify_order_state_changed(
        OrderStateChangedEvent(order_id=42, table_id=3, previous_state="en_preparacion", new_state="listo")
    )
    messages = [p["message"] for p in _received(client)["order-state-changed"]]
    assert sorted(messages) == sorted(['Pedido #42 actualizado a "listo"', 'Tu pedido cambió a "listo"'])

    client.emit("leave-order-room", {"orderId": "42"})
    assert _received(client)["order-room-left"][0]["room"] == "pedido_42"

    services.order_notifier.notify_order_state_changed(
        OrderStateChangedEvent(order_id=42, table_id=3, previous_state="listo", new_state="entregado")
    )
    assert len(_received(client)["order-state-changed"]) == 1


def test_joining_an_order_room_twice_delivers_once(app, services, waiter_id):
    client = _connect(app, services, _token(services, waiter_id))
    client.emit("join-order-room", {"orderId": 7})
    client.emit("join-order-room", {"orderId": 7})
    assert len(_received(client)["order-room-joined"]) == 2

    services.order_notifier.notify_order_state_changed(
        OrderStateChangedEvent(order_id=7, table_id=1, previous_state="pendiente", new_state="listo")
    )

    # meseros + pedido_7
    assert len(_received(client)["order-state-changed"]) == 2


def test_leaving_a_room_never_joined_is_harmless(app, services, waiter_id):
    client = _connect(app, services, _token(services, waiter_id))
    client.get_received()

    client.emit("leave-order-room", {"orderId": 9})

    received = _received(client)
    assert received["order-room-left"][0]["room"] == "pedido_9"
    assert "validation-error" not in received
    assert client.is_connected()

    services.order_notifier.notify_order_state_changed(
        OrderStateChangedEvent(order_id=9, table_id=1, previous_state="pendiente", new_state="listo")
    )
    assert len(_received(client)["order-state-changed"]) == 1


def test_invalid_order_id_is_rejected(app, services, waiter_id):
    client = _connect(app, services, _token(services, waiter_id))
    client.get_received()

    client.emit("join-order-room", {"orderId": "abc"})

    received = _received(client)
    assert received["validation-error"][0]["event"] == "join-order-room"
    assert "order-room-joined" not in received


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"orderId": 5}, 5),
        ({"orderId": "12"}, 12),
        ({"orderId": 0}, None),
        ({"orderId": -3}, None),
        ({"orderId": True}, None),
        ({"orderId": None}, None),
        ({}, None),
        ("5", None),
        (None, None),
    ],
)
def test_parse_order_id(data, expected):
    assert parse_order_id(data) == expected
