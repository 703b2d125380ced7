# sushi_api/infrastructure/database/models/user_model.py

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sushi_api.infrastructure.database.base_model import BaseModel, BigIntPK
from sushi_api.infrastructure.database.models.role_model import RoleModel


class UserModel(BaseModel):
    __tablename__ = "tbUsers"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)

    password_algo: Mapped[str] = mapped_column(String(50), nullable=False)
    password_iterations: Mapped[int] = mapped_column(nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    password_salt: Mapped[str] = mapped_column(Text, nullable=False)

    role_id: Mapped[int] = mapped_column(Integer, ForeignKey("tbRoles.id"), nullable=False)
    role: Mapped[RoleModel] = relationship(lazy="joined")

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    last_login: Mapped[datetime] = mapped_column(DateTime, nullable=True)

    # soft delete: usuário com deleted_at não faz login, refresh nem conecta no socket
    deleted_at: Mapped[datetime] = mapped_column(DateTime, nullable=True)
