from flask import Blueprint, jsonify
from sqlalchemy import text

from sushi_api.api.deps import get_services

bp_health = Blueprint("health", __name__, url_prefix="/health")


@bp_health.get("")
def health():
    return jsonify({"status": "ok"}), 200


@bp_health.get("/db")
def health_db():
    with get_services().database.session() as session:
        session.execute(text("select 1"))
    return jsonify({"db": "ok"}), 200
