# sushi_api/services/refresh_token_service.py

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable
from uuid import uuid4

from sqlalchemy.orm import Session

from sushi_api.core.clock import utcnow
from sushi_api.core.exceptions import ReuseDetectedError
from sushi_api.infrastructure.database.models.refresh_token_session_model import RefreshTokenSessionModel
from sushi_api.infrastructure.database.session import Database
from sushi_api.infrastructure.security.jwt_provider import JwtProvider, hash_token
from sushi_api.repositories.audit_log_repository import AuditLogRepository
from sushi_api.repositories.refresh_token_session_repository import RefreshTokenSessionRepository
from sushi_api.repositories.user_repository import UserRepository
from sushi_api.services.audit_service import AuditService, AuthAction

logger = logging.getLogger(__name__)


def _rejection_reason(presented: RefreshTokenSessionModel | None, now: datetime) -> str:
    """Por que um refresh token assinado não casou com uma sessão ativa (só para auditoria)."""
    if presented is None:
        return "unknown_token"
    if presented.is_rotated:
        return "rotated"
    if presented.is_revoked:
        return "revoked"
    if presented.expires_at <= now:
        return "expired"
    # hash conhecido, mas sid/sub do JWT não batem com a linha
    return "claims_mismatch"


@dataclass(frozen=True)
class IssuedTokens:
    user_id: int
    session_id: str
    access_token: str
    refresh_token: str


class RefreshTokenService:
    """Ciclo de vida das sessões de refresh: emissão, rotação, detecção de reuso e revogação.

    Estados de uma sessão: ACTIVE -> ROTATED | REVOKED (ambos terminais).
    Apresentar um refresh token que não corresponde a uma sessão ativa
    (já rotacionado, revogado, expirado no banco) revoga TODAS as sessões
    ativas do usuário.
    """

    def __init__(
        self,
        *,
        database: Database,
        jwt_provider: JwtProvider,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._db = database
        self._jwt = jwt_provider
        self._clock = clock

    def _mint(self, user_id: int) -> tuple[str, str]:
        # sessionId sempre novo, inclusive na rotação
        session_id = uuid4().hex
        return session_id, self._jwt.issue_refresh_token(user_id, session_id)

    def _store(
        self,
        repo: RefreshTokenSessionRepository,
        *,
        user_id: int,
        session_id: str,
        refresh_token: str,
        now: datetime,
        user_agent: str | None,
        ip_address: str | None,
    ) -> RefreshTokenSessionModel:
        model = RefreshTokenSessionModel(
            session_id=session_id,
            user_id=user_id,
            token_hash=hash_token(refresh_token),
            replaced_by_token_hash=None,
            created_at=now,
            expires_at=now + self._jwt.refresh_ttl,
            revoked_at=None,
            user_agent=user_agent[:255] if user_agent else None,
            ip_address=ip_address[:64] if ip_address else None,
        )
        return repo.add(model)

    def issue(
        self,
        db: Session,
        *,
        user_id: int,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> IssuedTokens:
        """Cria uma sessão ACTIVE dentro da unidade de trabalho do chamador (login)."""
        session_id, refresh_token = self._mint(user_id)
        self._store(
            RefreshTokenSessionRepository(db),
            user_id=user_id,
            session_id=session_id,
            refresh_token=refresh_token,
            now=self._clock(),
            user_agent=user_agent,
            ip_address=ip_address,
        )
        return IssuedTokens(
            user_id=user_id,
            session_id=session_id,
            access_token=self._jwt.issue_access_token(user_id),
            refresh_token=refresh_token,
        )

    def rotate(
        self,
        refresh_token: str,
        *,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> IssuedTokens:
        # InvalidTokenError / TokenExpiredError sobem direto: sem claims não há usuário para revogar
        claims = self._jwt.decode_refresh(refresh_token)
        user_id = int(claims["sub"])
        session_id = str(claims["sid"])
        token_hash = hash_token(refresh_token)
        now = self._clock()

        issued: IssuedTokens | None = None

        with self._db.session() as db:
            repo = RefreshTokenSessionRepository(db)
            users = UserRepository(db)
            audit = AuditService(AuditLogRepository(db))

            stored = repo.find_active(token_hash=token_hash, session_id=session_id, user_id=user_id, now=now)
            owner = users.get_by_id(user_id) if stored is not None else None

            if stored is not None and owner is not None:
                new_session_id, new_refresh = self._mint(user_id)

                # 0 linhas afetadas => outra requisição rotacionou primeiro; cai na detecção de reuso
                if repo.mark_rotated(stored, new_token_hash=hash_token(new_refresh), now=now):
                    self._store(
                        repo,
                        user_id=user_id,
                        session_id=new_session_id,
                        refresh_token=new_refresh,
                        now=now,
                        user_agent=user_agent,
                        ip_address=ip_address,
                    )
                    audit.log_auth(
                        AuthAction.REFRESH_SUCCESS,
                        user_id=user_id,
                        session_row_id=int(stored.id),
                        ip_address=ip_address,
                        session_id=new_session_id,
                    )
                    issued = IssuedTokens(
                        user_id=user_id,
                        session_id=new_session_id,
                        access_token=self._jwt.issue_access_token(user_id),
                        refresh_token=new_refresh,
                    )

            if issued is None:
                if stored is None:
                    presented = repo.get_by_token_hash(token_hash)
                    reason = _rejection_reason(presented, now)
                    row_id = int(presented.id) if presented is not None else None
                else:
                    reason = "user_inactive" if owner is None else "concurrent_rotation"
                    row_id = int(stored.id)

                revoked = repo.revoke_all_active_for_user(user_id=user_id, now=now)
                audit.log_auth(
                    AuthAction.REFRESH_REUSE,
                    user_id=user_id if users.get_by_id_any(user_id) is not None else None,
                    session_row_id=row_id,
                    ip_address=ip_address,
                    token_user_id=user_id,
                    session_id=session_id,
                    reason=reason,
                    revoked=revoked,
                )

        if issued is None:
            logger.warning(
                "Reuso de refresh token detectado (user_id=%s, session_id=%s, motivo=%s); sessões ativas revogadas.",
                user_id,
                session_id,
                reason,
            )
            raise ReuseDetectedError()

        logger.info("Refresh token rotacionado (user_id=%s, nova sessão=%s).", user_id, issued.session_id)
        return issued

    def revoke_session(self, *, user_id: int, session_id: str) -> int:
        with self._db.session() as db:
            repo = RefreshTokenSessionRepository(db)
            revoked = repo.revoke_by_session(session_id=session_id, user_id=user_id, now=self._clock())
            if revoked:
                AuditService(AuditLogRepository(db)).log_auth(AuthAction.LOGOUT, user_id=user_id, session_id=session_id)

        logger.info("Logout (user_id=%s, sessões revogadas=%s).", user_id, revoked)
        return revoked

    def revoke_all_for_user(self, user_id: int, *, reason: str = "forced") -> int:
        with self._db.session() as db:
            repo = RefreshTokenSessionRepository(db)
            revoked = repo.revoke_all_active_for_user(user_id=user_id, now=self._clock())
            AuditService(AuditLogRepository(db)).log_auth(
                AuthAction.REVOKE_ALL,
                user_id=user_id,
                reason=reason,
                revoked=revoked,
            )

        logger.info("Sessões revogadas (user_id=%s, total=%s, motivo=%s).", user_id, revoked, reason)
        return revoked
