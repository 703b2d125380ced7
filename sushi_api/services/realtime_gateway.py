# sushi_api/services/realtime_gateway.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sushi_api.core.realtime.events import InboundEvent, is_allowed
from sushi_api.core.realtime.rooms import Room, rooms_for
from sushi_api.entities.notification import utc_now_iso
from sushi_api.entities.user import Role
from sushi_api.services.auth_service import AuthService
from sushi_api.services.notification_history import NotificationHistory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionContext:
    sid: str
    user_id: int
    role_name: str
    display_name: str
    rooms: tuple[Room, ...]

    @property
    def role(self) -> Role | None:
        return Role.parse(self.role_name)

    @property
    def room_names(self) -> list[str]:
        return [room.name for room in self.rooms]


def parse_order_id(data: Any) -> int | None:
    if not isinstance(data, dict):
        return None
    raw = data.get("orderId")
    if isinstance(raw, bool):
        return None
    try:
        order_id = int(raw)
    except (TypeError, ValueError):
        return None
    return order_id if order_id > 0 else None


class RealtimeGateway:
    """Autentica conexões Socket.IO e guarda o contexto de cada uma (por sid)."""

    def __init__(self, *, auth_service: AuthService, history: NotificationHistory) -> None:
        self._auth = auth_service
        self._history = history
        self._connections: dict[str, ConnectionContext] = {}

    def authenticate(self, sid: str, token: str | None) -> ConnectionContext:
        """Levanta AuthenticationRequiredError, InvalidTokenError ou UserNotFoundError."""
        user = self._auth.resolve_access_token(token)

        ctx = ConnectionContext(
            sid=sid,
            user_id=user.id,
            role_name=user.role_name,
            display_name=user.full_name,
            rooms=rooms_for(user.role, user.id),
        )
        if ctx.role is None:
            logger.warning("Usuário %s com rol '%s' sem salas específicas", user.id, user.role_name)

        self._connections[sid] = ctx
        return ctx

    def context(self, sid: str) -> ConnectionContext | None:
        return self._connections.get(sid)

    def detach(self, sid: str) -> ConnectionContext | None:
        return self._connections.pop(sid, None)

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def authorize(self, ctx: ConnectionContext, event: InboundEvent) -> bool:
        return is_allowed(event, ctx.role)

    def connection_state(self, ctx: ConnectionContext) -> dict[str, Any]:
        return {
            "connected": True,
            "rooms": ctx.room_names,
            "timestamp": utc_now_iso(),
        }

    def confirmation(self, ctx: ConnectionContext) -> dict[str, Any]:
        return {
            "message": "Conectado exitosamente al servidor de notificaciones",
            "userId": ctx.user_id,
            "userRole": ctx.role_name,
            "displayName": ctx.display_name,
            "timestamp": utc_now_iso(),
        }

    def history_snapshot(self) -> list[dict]:
        return self._history.snapshot()
