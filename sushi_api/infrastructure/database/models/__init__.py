from sushi_api.infrastructure.database.models.role_model import RoleModel
from sushi_api.infrastructure.database.models.user_model import UserModel
from sushi_api.infrastructure.database.models.refresh_token_session_model import RefreshTokenSessionModel
from sushi_api.infrastructure.database.models.audit_log_model import AuditLogModel

__all__ = ["RoleModel", "UserModel", "RefreshTokenSessionModel", "AuditLogModel"]
