# sushi_api/main.py
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from sushi_api.api.middlewares.error_handler import register_error_handlers
from sushi_api.api.realtime.socket_handlers import register_socket_handlers
from sushi_api.api.routes import register_routes
from sushi_api.config.flask_config import configure_app
from sushi_api.config.settings import Settings, get_settings
from sushi_api.container import SERVICES_KEY, build_services


def create_app(settings: Settings | None = None) -> Flask:
    settings = settings or get_settings()
    app = Flask(__name__)

    # credentials: o cookie de refresh precisa atravessar o CORS do front (vite)
    CORS(
        app,
        resources={rf"{settings.api_prefix}/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )

    configure_app(app, settings)

    services = build_services(settings)
    app.extensions[SERVICES_KEY] = services

    register_routes(app, api_prefix=settings.api_prefix)
    register_error_handlers(app, debug=settings.debug)

    services.socketio.init_app(app, path=settings.socketio_path)
    register_socket_handlers(services.socketio, services.gateway)

    return app
