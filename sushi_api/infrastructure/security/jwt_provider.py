# sushi_api/infrastructure/security/jwt_provider.py

import hashlib
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from sushi_api.config.settings import Settings
from sushi_api.core.exceptions import InvalidTokenError, TokenExpiredError

ACCESS = "access"
REFRESH = "refresh"


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class JwtProvider:
    """Assina e valida os tokens de acesso e de refresh.

    Cada tipo de token tem seu próprio segredo; um refresh token nunca passa
    na validação de acesso (e vice-versa), mesmo com `typ` adulterado.
    """

    def __init__(self, settings: Settings) -> None:
        self._access_secret = settings.access_token_secret
        self._refresh_secret = settings.refresh_token_secret
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._access_minutes = settings.access_token_minutes
        self._refresh_minutes = settings.refresh_token_minutes
        self._algorithm = "HS256"

    @property
    def refresh_ttl(self) -> timedelta:
        return timedelta(minutes=self._refresh_minutes)

    def _secret_for(self, token_type: str) -> str:
        return self._access_secret if token_type == ACCESS else self._refresh_secret

    def issue_token(self, *, subject: str, payload: dict, minutes: int, token_type: str) -> str:
        now = datetime.now(tz=timezone.utc)
        exp = now + timedelta(minutes=minutes)

        claims = {
            "iss": self._issuer,
            "aud": self._audience,
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
            "jti": uuid4().hex,
            "typ": token_type,
        }
        claims.update(payload)
        return jwt.encode(claims, self._secret_for(token_type), algorithm=self._algorithm)

    def issue_access_token(self, user_id: int, *, minutes: int = 0) -> str:
        ttl = minutes if minutes else self._access_minutes
        return self.issue_token(subject=str(user_id), payload={}, minutes=ttl, token_type=ACCESS)

    def issue_refresh_token(self, user_id: int, session_id: str, *, minutes: int = 0) -> str:
        ttl = minutes if minutes else self._refresh_minutes
        return self.issue_token(
            subject=str(user_id),
            payload={"sid": session_id},
            minutes=ttl,
            token_type=REFRESH,
        )

    def verify(self, token: str, *, secret: str, token_type: str) -> dict:
        required = ["exp", "iat", "sub", "jti", "typ"]
        if token_type == REFRESH:
            required.append("sid")

        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": required},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError() from e

        if claims.get("typ") != token_type:
            raise InvalidTokenError()

        try:
            int(claims["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError() from e

        return claims

    def decode_access(self, token: str) -> dict:
        return self.verify(token, secret=self._access_secret, token_type=ACCESS)

    def decode_refresh(self, token: str) -> dict:
        return self.verify(token, secret=self._refresh_secret, token_type=REFRESH)
