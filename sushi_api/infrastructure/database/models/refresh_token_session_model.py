# sushi_api/infrastructure/database/models/refresh_token_session_model.py

from datetime import datetime

from sqlalchemy import BigInteger, CHAR, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from sushi_api.infrastructure.database.base_model import BaseModel, BigIntPK


class RefreshTokenSessionModel(BaseModel):
    """Uma linha por refresh token emitido. Nunca é apagada (auditoria / detecção de reuso)."""

    __tablename__ = "tbRefreshTokenSessions"
    __table_args__ = (
        Index("ix_refresh_sessions_user_revoked", "user_id", "revoked_at"),
        Index("ix_refresh_sessions_expires_at", "expires_at"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    session_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("tbUsers.id"), nullable=False)

    # sha256 hex; o token em texto puro nunca é persistido
    token_hash: Mapped[str] = mapped_column(CHAR(64), nullable=False, unique=True)
    replaced_by_token_hash: Mapped[str] = mapped_column(CHAR(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    revoked_at: Mapped[datetime] = mapped_column(DateTime, nullable=True)

    user_agent: Mapped[str] = mapped_column(String(255), nullable=True)
    ip_address: Mapped[str] = mapped_column(String(64), nullable=True)

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    @property
    def is_rotated(self) -> bool:
        return self.revoked_at is not None and self.replaced_by_token_hash is not None
