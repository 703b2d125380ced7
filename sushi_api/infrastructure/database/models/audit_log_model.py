# sushi_api/infrastructure/database/models/audit_log_model.py

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from sushi_api.infrastructure.database.base_model import BaseModel, BigIntPK


class AuditLogModel(BaseModel):
    """Trilha de eventos de autenticação (login, refresh, reuso, logout, revogação)."""

    __tablename__ = "audit_log"
    __table_args__ = (Index("ix_audit_log_action_occurred", "action_name", "occurred_at"),)

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    entity_name: Mapped[str] = mapped_column(String(50), nullable=False)
    # em eventos de sessão: id da linha de tbRefreshTokenSessions
    entity_id: Mapped[int] = mapped_column(BigInteger, nullable=True)

    action_name: Mapped[str] = mapped_column(String(30), nullable=False)
    details: Mapped[str] = mapped_column(Text, nullable=True)
    ip_address: Mapped[str] = mapped_column(String(64), nullable=True)

    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    # null quando o usuário do token não existe mais
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbUsers.id"), nullable=True)
