# sushi_api/api/routes/__init__.py

from flask import Flask

from sushi_api.api.routes.auth_routes import bp_auth
from sushi_api.api.routes.health_routes import bp_health
from sushi_api.api.routes.notification_routes import bp_notifications


def register_routes(app: Flask, *, api_prefix: str) -> None:
    # health fora de /api
    app.register_blueprint(bp_health, url_prefix="/health")

    app.register_blueprint(bp_auth, url_prefix=f"{api_prefix}/auth")
    app.register_blueprint(bp_notifications, url_prefix=f"{api_prefix}/notificaciones")
