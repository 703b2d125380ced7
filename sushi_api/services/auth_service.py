# sushi_api/services/auth_service.py

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from sushi_api.core.clock import utcnow
from sushi_api.core.exceptions import (
    AppError,
    AuthenticationRequiredError,
    InvalidCredentialError,
    InvalidTokenError,
    UserNotFoundError,
)
from sushi_api.entities.user import User
from sushi_api.infrastructure.database.session import Database
from sushi_api.infrastructure.security.jwt_provider import JwtProvider
from sushi_api.infrastructure.security.password_hasher import PasswordHasher
from sushi_api.repositories.audit_log_repository import AuditLogRepository
from sushi_api.repositories.user_repository import UserRepository, stored_password, to_entity
from sushi_api.services.audit_service import AuditService, AuthAction
from sushi_api.services.refresh_token_service import IssuedTokens, RefreshTokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    user: User
    tokens: IssuedTokens


class AuthService:
    def __init__(
        self,
        *,
        database: Database,
        jwt_provider: JwtProvider,
        refresh_tokens: RefreshTokenService,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._db = database
        self._jwt = jwt_provider
        self._refresh_tokens = refresh_tokens
        self._clock = clock

    def login(
        self,
        *,
        email: str,
        password: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> LoginResult:
        # 404 (usuário) x 401 (senha) é o contrato atual da API; permite enumeração de e-mails
        normalized = email.strip().lower()
        failure: AppError | None = None
        result: LoginResult | None = None

        with self._db.session() as db:
            users = UserRepository(db)
            audit = AuditService(AuditLogRepository(db))

            user = users.get_by_email(normalized)
            if user is None:
                failure = UserNotFoundError()
            elif not PasswordHasher.verify_password(password, stored_password(user)):
                failure = InvalidCredentialError()

            if failure is not None:
                # gravado mesmo com a falha: a exceção só sobe depois do commit
                audit.log_auth(
                    AuthAction.LOGIN_FAILED,
                    user_id=int(user.id) if user is not None else None,
                    ip_address=ip_address,
                    email=normalized,
                    reason=failure.code,
                )
            else:
                user.last_login = self._clock()
                tokens = self._refresh_tokens.issue(
                    db,
                    user_id=int(user.id),
                    user_agent=user_agent,
                    ip_address=ip_address,
                )
                audit.log_auth(
                    AuthAction.LOGIN_SUCCESS,
                    user_id=int(user.id),
                    ip_address=ip_address,
                    session_id=tokens.session_id,
                )
                result = LoginResult(user=to_entity(user), tokens=tokens)

        if failure is not None:
            logger.info("Login recusado para %s (%s).", normalized, failure.code)
            raise failure

        logger.info("Login ok (user_id=%s, sessão=%s).", result.user.id, result.tokens.session_id)
        return result

    def logout(self, refresh_token: str | None) -> int:
        """Revoga a sessão do refresh token apresentado. Nunca falha para o chamador."""
        if not refresh_token:
            return 0

        try:
            claims = self._jwt.decode_refresh(refresh_token)
        except InvalidTokenError as e:
            logger.info("Logout com refresh token inválido (%s); apenas limpando cookie.", e.code)
            return 0

        return self._refresh_tokens.revoke_session(user_id=int(claims["sub"]), session_id=str(claims["sid"]))

    def resolve_access_token(self, token: str | None) -> User:
        """Valida o access token e carrega o usuário dono (sem consulta a sessões)."""
        if not token:
            raise AuthenticationRequiredError()

        claims = self._jwt.decode_access(token)

        with self._db.session() as db:
            model = UserRepository(db).get_by_id(int(claims["sub"]))
            if model is None:
                raise UserNotFoundError()
            return to_entity(model)
