"""Salas do Socket.IO.

Os nomes das salas nunca são montados à mão: tudo passa por `Room.name`.
A associação papel -> salas é uma função pura (`rooms_for`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sushi_api.entities.user import Role


class RoomKind(str, Enum):
    GLOBAL = "notificaciones_globales"
    COOKS = "cocineros"
    WAITERS = "meseros"
    ADMINS = "administradores"
    USER = "usuario"
    ORDER = "pedido"


_SCOPED = (RoomKind.USER, RoomKind.ORDER)


@dataclass(frozen=True)
class Room:
    kind: RoomKind
    key: int | None = None

    def __post_init__(self) -> None:
        if (self.kind in _SCOPED) != (self.key is not None):
            raise ValueError(f"Sala {self.kind.name} com chave inválida: {self.key!r}")

    @property
    def name(self) -> str:
        if self.kind in _SCOPED:
            return f"{self.kind.value}_{self.key}"
        return self.kind.value

    @classmethod
    def for_user(cls, user_id: int) -> Room:
        return cls(RoomKind.USER, int(user_id))

    @classmethod
    def for_order(cls, order_id: int) -> Room:
        return cls(RoomKind.ORDER, int(order_id))


GLOBAL_ROOM = Room(RoomKind.GLOBAL)
COOKS_ROOM = Room(RoomKind.COOKS)
WAITERS_ROOM = Room(RoomKind.WAITERS)
ADMINS_ROOM = Room(RoomKind.ADMINS)

_ROLE_ROOMS: dict[Role, tuple[Room, ...]] = {
    Role.COOK: (COOKS_ROOM,),
    Role.WAITER: (WAITERS_ROOM,),
    # admin vê tudo
    Role.ADMIN: (ADMINS_ROOM, COOKS_ROOM, WAITERS_ROOM),
}


def rooms_for(role: Role | None, user_id: int) -> tuple[Room, ...]:
    return (GLOBAL_ROOM, *_ROLE_ROOMS.get(role, ()), Room.for_user(user_id))
