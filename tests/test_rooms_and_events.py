import pytest

from sushi_api.core.realtime.events import INBOUND_PERMISSIONS, InboundEvent, is_allowed
from sushi_api.core.realtime.rooms import Room, RoomKind, rooms_for
from sushi_api.entities.user import Role


def _names(role, user_id=5):
    return [room.name for room in rooms_for(role, user_id)]


def test_cook_rooms():
    assert _names(Role.COOK) == ["notificaciones_globales", "cocineros", "usuario_5"]


def test_waiter_rooms():
    assert _names(Role.WAITER) == ["notificaciones_globales", "meseros", "usuario_5"]


def test_admin_sees_every_role_room():
    assert _names(Role.ADMIN) == [
        "notificaciones_globales",
        "administradores",
        "cocineros",
        "meseros",
        "usuario_5",
    ]


def test_unknown_role_gets_only_global_and_personal_rooms():
    assert _names(Role.parse("cajero")) == ["notificaciones_globales", "usuario_5"]


def test_role_parse_is_case_insensitive():
    assert Role.parse(" Administrador ") is Role.ADMIN
    assert Role.parse(None) is None


def test_scoped_room_names():
    assert Room.for_user(9).name == "usuario_9"
    assert Room.for_order(12).name == "pedido_12"


def test_scoped_rooms_require_a_key():
    with pytest.raises(ValueError):
        Room(RoomKind.ORDER)

    with pytest.raises(ValueError):
        Room(RoomKind.COOKS, 3)


def test_every_inbound_event_has_a_permission_entry():
    assert set(INBOUND_PERMISSIONS) == set(InboundEvent)


def test_history_request_is_admin_only():
    assert is_allowed(InboundEvent.REQUEST_HISTORY, Role.ADMIN)
    assert not is_allowed(InboundEvent.REQUEST_HISTORY, Role.COOK)
    assert not is_allowed(InboundEvent.REQUEST_HISTORY, Role.WAITER)
    assert not is_allowed(InboundEvent.REQUEST_HISTORY, None)


def test_order_rooms_are_open_to_any_authenticated_user():
    for role in (Role.COOK, Role.WAITER, Role.ADMIN, None):
        assert is_allowed(InboundEvent.JOIN_ORDER_ROOM, role)
        assert is_allowed(InboundEvent.ANNOUNCE_READY, role)
