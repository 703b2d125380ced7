from __future__ import annotations

from enum import Enum

from sushi_api.entities.user import Role


class InboundEvent(str, Enum):
    ANNOUNCE_READY = "announce-ready"
    REQUEST_HISTORY = "request-history"
    JOIN_ORDER_ROOM = "join-order-room"
    LEAVE_ORDER_ROOM = "leave-order-room"


class OutboundEvent(str, Enum):
    CONNECTION_STATE = "connection-state"
    CONNECTION_CONFIRMED = "connection-confirmed"
    HISTORY_SNAPSHOT = "history-snapshot"
    ORDER_ROOM_JOINED = "order-room-joined"
    ORDER_ROOM_LEFT = "order-room-left"
    NEW_ORDER = "new-order"
    ORDER_STATE_CHANGED = "order-state-changed"
    ORDER_CANCELLED = "order-cancelled"
    TABLE_UPDATED = "table-updated"
    DASHBOARD_UPDATE = "dashboard-update"
    AUTHORIZATION_ERROR = "authorization-error"
    VALIDATION_ERROR = "validation-error"


# None => qualquer usuário autenticado
INBOUND_PERMISSIONS: dict[InboundEvent, frozenset[Role] | None] = {
    InboundEvent.ANNOUNCE_READY: None,
    InboundEvent.REQUEST_HISTORY: frozenset({Role.ADMIN}),
    InboundEvent.JOIN_ORDER_ROOM: None,
    InboundEvent.LEAVE_ORDER_ROOM: None,
}


def is_allowed(event: InboundEvent, role: Role | None) -> bool:
    allowed = INBOUND_PERMISSIONS[event]
    return allowed is None or role in allowed
