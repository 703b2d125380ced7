# sushi_api/api/routes/notification_routes.py

from flask import Blueprint, jsonify, request

from sushi_api.api.deps import get_services
from sushi_api.api.middlewares.auth_middleware import require_auth, require_roles
from sushi_api.entities.user import Role

bp_notifications = Blueprint("notifications", __name__, url_prefix="/notificaciones")


@bp_notifications.get("/historial")
@require_auth
@require_roles(Role.ADMIN)
def get_history():
    limit = request.args.get("limit", type=int)
    return jsonify(get_services().history.snapshot(limit)), 200


@bp_notifications.delete("/historial")
@require_auth
@require_roles(Role.ADMIN)
def clear_history():
    get_services().history.clear()
    return ("", 204)
