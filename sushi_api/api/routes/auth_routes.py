# sushi_api/api/routes/auth_routes.py
import logging

from flask import Blueprint, g, jsonify, request
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from sushi_api.api.cookies import clear_refresh_cookie, set_refresh_cookie
from sushi_api.api.deps import get_services
from sushi_api.api.middlewares.auth_middleware import require_auth
from sushi_api.api.schemas.auth_schema import (
    AccessTokenResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshRequest,
    RevokeAllResponse,
)
from sushi_api.core.exceptions import AuthenticationRequiredError, InvalidTokenError, ReuseDetectedError

logger = logging.getLogger(__name__)

bp_auth = Blueprint("auth", __name__, url_prefix="/auth")


def _client_info() -> tuple[str | None, str | None]:
    user_agent = request.headers.get("User-Agent") or None
    ip_address = request.access_route[0] if request.access_route else request.remote_addr
    return user_agent, ip_address


def _presented_refresh_token() -> str | None:
    settings = get_services().settings
    token = request.cookies.get(settings.refresh_cookie_name)
    if token:
        return token

    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return None

    # refreshToken que não é string => ValidationError
    payload = RefreshRequest.model_validate(body)
    return payload.refresh_token or None


def _refresh_rejected(reason: str):
    # resposta uniforme: não revela qual verificação falhou
    logger.warning("Refresh recusado (%s).", reason)
    response = jsonify({"error": "Refresh Token inválido o expirado. Por favor, inicie sesión de nuevo."})
    clear_refresh_cookie(response, get_services().settings)
    return response, 403


@bp_auth.post("/login")
def login():
    payload = LoginRequest.model_validate(request.get_json(silent=True) or {})
    services = get_services()
    user_agent, ip_address = _client_info()

    result = services.auth.login(
        email=payload.email,
        password=payload.password,
        user_agent=user_agent,
        ip_address=ip_address,
    )

    body = LoginResponse(
        id=result.user.id,
        nombre=result.user.full_name,
        rol=result.user.role_name,
        access_token=result.tokens.access_token,
    )
    response = jsonify(body.model_dump(by_alias=True))
    set_refresh_cookie(response, result.tokens.refresh_token, services.settings)
    return response, 200


@bp_auth.post("/refresh-token")
def refresh_token():
    services = get_services()
    try:
        token = _presented_refresh_token()
    except ValidationError:
        return _refresh_rejected("malformed_body")

    if not token:
        # nada foi tocado no store
        raise AuthenticationRequiredError("Refresh Token es requerido.")

    user_agent, ip_address = _client_info()
    try:
        issued = services.refresh_tokens.rotate(token, user_agent=user_agent, ip_address=ip_address)
    except (InvalidTokenError, ReuseDetectedError) as e:
        return _refresh_rejected(e.code)

    response = jsonify(AccessTokenResponse(access_token=issued.access_token).model_dump(by_alias=True))
    set_refresh_cookie(response, issued.refresh_token, services.settings)
    return response, 200


@bp_auth.post("/logout")
def logout():
    services = get_services()

    try:
        services.auth.logout(_presented_refresh_token())
    except ValidationError:
        logger.info("Logout com corpo inválido; apenas limpando cookie.")
    except SQLAlchemyError:
        # logout é idempotente para o cliente mesmo com falha no banco
        logger.exception("Falha ao revogar sessão no logout")

    response = jsonify(MessageResponse(message="Sesión cerrada exitosamente.").model_dump())
    clear_refresh_cookie(response, services.settings)
    return response, 200


@bp_auth.post("/sessions/revoke-all")
@require_auth
def revoke_all_sessions():
    services = get_services()
    revoked = services.refresh_tokens.revoke_all_for_user(g.current_user.id, reason="user_request")

    response = jsonify(RevokeAllResponse(revoked=revoked).model_dump())
    clear_refresh_cookie(response, services.settings)
    return response, 200
