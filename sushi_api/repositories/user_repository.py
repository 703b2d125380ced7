# sushi_api/repositories/user_repository.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from sushi_api.core.base_repository import BaseRepository
from sushi_api.entities.user import User
from sushi_api.infrastructure.database.models.user_model import UserModel
from sushi_api.infrastructure.security.password_hasher import StoredPassword


def to_entity(model: UserModel) -> User:
    return User(
        id=int(model.id),
        full_name=model.full_name,
        email=model.email,
        role_name=model.role.name if model.role is not None else "",
    )


def stored_password(model: UserModel) -> StoredPassword:
    return StoredPassword(
        password_hash=model.password_hash,
        password_salt=model.password_salt,
        algo=model.password_algo,
        iterations=model.password_iterations,
    )


class UserRepository(BaseRepository[UserModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_email(self, email: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.email == email, UserModel.deleted_at.is_(None))
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_id(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id, UserModel.deleted_at.is_(None))
        return self._session.execute(stmt).scalar_one_or_none()

    # inclui usuários removidos (auditoria)
    def get_by_id_any(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        return self._session.execute(stmt).scalar_one_or_none()
