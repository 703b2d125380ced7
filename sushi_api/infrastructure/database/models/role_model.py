from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sushi_api.infrastructure.database.base_model import BaseModel


class RoleModel(BaseModel):
    __tablename__ = "tbRoles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
