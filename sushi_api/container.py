# sushi_api/container.py
from __future__ import annotations

from dataclasses import dataclass

from flask_socketio import SocketIO

from sushi_api.config.settings import Settings
from sushi_api.core.interfaces.order_notifier import OrderNotifier
from sushi_api.infrastructure.database.session import Database
from sushi_api.infrastructure.realtime.socketio_order_notifier import SocketIOOrderNotifier
from sushi_api.infrastructure.realtime.socketio_server import create_socketio
from sushi_api.infrastructure.security.jwt_provider import JwtProvider
from sushi_api.services.auth_service import AuthService
from sushi_api.services.notification_history import NotificationHistory
from sushi_api.services.realtime_gateway import RealtimeGateway
from sushi_api.services.refresh_token_service import RefreshTokenService

SERVICES_KEY = "sushi_api"


@dataclass
class AppServices:
    """Componentes de processo; criados uma vez por aplicação e injetados."""

    settings: Settings
    database: Database
    jwt_provider: JwtProvider
    refresh_tokens: RefreshTokenService
    auth: AuthService
    history: NotificationHistory
    socketio: SocketIO
    gateway: RealtimeGateway
    order_notifier: OrderNotifier

    def close(self) -> None:
        self.database.dispose()


def build_services(settings: Settings) -> AppServices:
    database = Database(settings.database_url, echo=False)
    if settings.db_create_tables:
        database.create_all()

    jwt_provider = JwtProvider(settings)
    refresh_tokens = RefreshTokenService(database=database, jwt_provider=jwt_provider)
    auth = AuthService(database=database, jwt_provider=jwt_provider, refresh_tokens=refresh_tokens)

    history = NotificationHistory(settings.notification_history_size)
    socketio = create_socketio(settings)

    return AppServices(
        settings=settings,
        database=database,
        jwt_provider=jwt_provider,
        refresh_tokens=refresh_tokens,
        auth=auth,
        history=history,
        socketio=socketio,
        gateway=RealtimeGateway(auth_service=auth, history=history),
        order_notifier=SocketIOOrderNotifier(emitter=socketio, history=history),
    )
