# sushi_api/entities/notification.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    NEW_ORDER = "new-order"
    ORDER_STATE_CHANGED = "order-state-changed"
    ORDER_CANCELLED = "order-cancelled"
    TABLE_UPDATED = "table-updated"


class NotificationPriority(str, Enum):
    """Metadado informativo; não controla a entrega."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def utc_now_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


@dataclass(frozen=True)
class Notification:
    type: NotificationType
    message: str
    priority: NotificationPriority
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.message,
            "data": dict(self.data),
            "timestamp": self.timestamp,
            "priority": self.priority.value,
        }
