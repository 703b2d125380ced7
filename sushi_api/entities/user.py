# sushi_api/entities/user.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    COOK = "cocinero"
    WAITER = "mesero"
    ADMIN = "administrador"

    @classmethod
    def parse(cls, name: str | None) -> Role | None:
        # rol desconhecido => None (sem salas de rol)
        if not name:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class User:
    id: int
    full_name: str
    email: str
    role_name: str

    @property
    def role(self) -> Role | None:
        return Role.parse(self.role_name)
