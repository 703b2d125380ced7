# sushi_api/infrastructure/realtime/socketio_server.py
from __future__ import annotations

from flask_socketio import SocketIO

from sushi_api.config.settings import Settings


def create_socketio(settings: Settings) -> SocketIO:
    return SocketIO(
        cors_allowed_origins=settings.cors_origins,
        async_mode=settings.socketio_async_mode,
        logger=False,
        engineio_logger=False,
    )
