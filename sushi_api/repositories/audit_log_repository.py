# sushi_api/repositories/audit_log_repository.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from sushi_api.core.base_repository import BaseRepository
from sushi_api.infrastructure.database.models.audit_log_model import AuditLogModel


class AuditLogRepository(BaseRepository[AuditLogModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def list_by_action(self, action_name: str, *, limit: int = 50) -> list[AuditLogModel]:
        stmt = (
            select(AuditLogModel)
            .where(AuditLogModel.action_name == action_name)
            .order_by(AuditLogModel.id.desc())
            .limit(limit)
        )
        return list(self._session.execute(stmt).scalars().all())
