# sushi_api/services/audit_service.py

from enum import Enum

from sushi_api.infrastructure.database.models.audit_log_model import AuditLogModel
from sushi_api.repositories.audit_log_repository import AuditLogRepository

AUTH_ENTITY = "auth"


class AuthAction(str, Enum):
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILED = "LOGIN_FAILED"
    REFRESH_SUCCESS = "REFRESH_SUCCESS"
    REFRESH_REUSE = "REFRESH_REUSE"
    LOGOUT = "LOGOUT"
    REVOKE_ALL = "REVOKE_ALL"


def format_details(details: dict) -> str | None:
    # "chave=valor; chave=valor", na ordem recebida; None é omitido
    parts = [f"{key}={value}" for key, value in details.items() if value is not None]
    return "; ".join(parts) or None


class AuditService:
    """Grava eventos de autenticação na unidade de trabalho do chamador (sem commit próprio)."""

    def __init__(self, repo: AuditLogRepository) -> None:
        self._repo = repo

    def log_auth(
        self,
        action: AuthAction,
        *,
        user_id: int | None,
        session_row_id: int | None = None,
        ip_address: str | None = None,
        **details,
    ) -> AuditLogModel:
        model = AuditLogModel(
            entity_name=AUTH_ENTITY,
            entity_id=session_row_id,
            action_name=action.value,
            details=format_details(details),
            ip_address=ip_address[:64] if ip_address else None,
            user_id=user_id,
        )
        return self._repo.add(model)
