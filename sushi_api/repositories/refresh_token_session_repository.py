# sushi_api/repositories/refresh_token_session_repository.py

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from sushi_api.core.base_repository import BaseRepository
from sushi_api.infrastructure.database.models.refresh_token_session_model import RefreshTokenSessionModel


class RefreshTokenSessionRepository(BaseRepository[RefreshTokenSessionModel]):
    """Store das sessões de refresh. Não existe operação de delete (retenção permanente)."""

    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def find_active(
        self, *, token_hash: str, session_id: str, user_id: int, now: datetime
    ) -> RefreshTokenSessionModel | None:
        stmt = select(RefreshTokenSessionModel).where(
            RefreshTokenSessionModel.token_hash == token_hash,
            RefreshTokenSessionModel.session_id == session_id,
            RefreshTokenSessionModel.user_id == user_id,
            RefreshTokenSessionModel.revoked_at.is_(None),
            # expires_at == now já conta como expirado
            RefreshTokenSessionModel.expires_at > now,
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def mark_rotated(self, model: RefreshTokenSessionModel, *, new_token_hash: str, now: datetime) -> bool:
        # compare-and-set: só vira ROTATED se ainda estiver ativa.
        # 0 linhas => outra requisição já rotacionou este token.
        stmt = (
            update(RefreshTokenSessionModel)
            .where(
                RefreshTokenSessionModel.id == model.id,
                RefreshTokenSessionModel.revoked_at.is_(None),
            )
            .values(revoked_at=now, replaced_by_token_hash=new_token_hash)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        if (result.rowcount or 0) != 1:
            return False

        model.revoked_at = now
        model.replaced_by_token_hash = new_token_hash
        return True

    def revoke_all_active_for_user(self, *, user_id: int, now: datetime) -> int:
        stmt = (
            update(RefreshTokenSessionModel)
            .where(
                RefreshTokenSessionModel.user_id == user_id,
                RefreshTokenSessionModel.revoked_at.is_(None),
            )
            .values(revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)

    def revoke_by_session(self, *, session_id: str, user_id: int, now: datetime) -> int:
        stmt = (
            update(RefreshTokenSessionModel)
            .where(
                RefreshTokenSessionModel.session_id == session_id,
                RefreshTokenSessionModel.user_id == user_id,
                RefreshTokenSessionModel.revoked_at.is_(None),
            )
            .values(revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)

    def get_by_token_hash(self, token_hash: str) -> RefreshTokenSessionModel | None:
        stmt = select(RefreshTokenSessionModel).where(RefreshTokenSessionModel.token_hash == token_hash)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_for_user(self, user_id: int) -> list[RefreshTokenSessionModel]:
        stmt = (
            select(RefreshTokenSessionModel)
            .where(RefreshTokenSessionModel.user_id == user_id)
            .order_by(RefreshTokenSessionModel.id.asc())
        )
        return list(self._session.execute(stmt).scalars().all())

    def count_active_for_user(self, *, user_id: int, now: datetime) -> int:
        stmt = select(func.count(RefreshTokenSessionModel.id)).where(
            RefreshTokenSessionModel.user_id == user_id,
            RefreshTokenSessionModel.revoked_at.is_(None),
            RefreshTokenSessionModel.expires_at > now,
        )
        return int(self._session.execute(stmt).scalar_one())
