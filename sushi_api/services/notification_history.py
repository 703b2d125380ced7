# sushi_api/services/notification_history.py

import logging
from collections import deque
from dataclasses import replace
from itertools import islice
from typing import Callable

from sushi_api.entities.notification import Notification, utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 6


class NotificationHistory:
    """Últimas notificações para o dashboard do administrador (mais recente primeiro).

    Somente memória, escopo do processo. Um único caminho de escrita (o notifier),
    por isso não há lock.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, *, clock: Callable[[], str] = utc_now_iso) -> None:
        if capacity < 1:
            raise ValueError("capacity deve ser >= 1")
        self._capacity = capacity
        self._clock = clock
        self._items: deque[Notification] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def append(self, notification: Notification) -> Notification:
        if not notification.timestamp:
            notification = replace(notification, timestamp=self._clock())

        # maxlen descarta a mais antiga (lado direito)
        self._items.appendleft(notification)
        logger.debug("Notificação adicionada ao histórico: %s", notification.type.value)
        return notification

    def recent(self, limit: int | None = None) -> list[Notification]:
        if limit is None:
            limit = self._capacity
        if limit <= 0:
            return []
        return list(islice(self._items, limit))

    def snapshot(self, limit: int | None = None) -> list[dict]:
        return [n.to_dict() for n in self.recent(limit)]

    def clear(self) -> None:
        self._items.clear()
        logger.info("Histórico de notificações limpo.")
