# sushi_api/config/settings.py
from functools import lru_cache
from urllib.parse import quote_plus

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # 🔵 Banco principal (PostgreSQL)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "sushi_burrito"
    db_user: str = "postgres"
    db_password: str = "postgres"
    # URL completa (sqlite em testes, por exemplo); tem prioridade sobre os campos acima
    database_url_override: str | None = None
    db_create_tables: bool = False

    # Segredos distintos: nunca derivar um do outro
    access_token_secret: str = "dev-access-secret-change-me"
    refresh_token_secret: str = "dev-refresh-secret-change-me"
    jwt_issuer: str = "sushi-burrito-api"
    jwt_audience: str = "sushi-burrito-front"
    access_token_minutes: int = 15
    refresh_token_minutes: int = 60 * 24 * 7

    refresh_cookie_name: str = "refreshToken"
    refresh_cookie_path: str = "/api/auth"
    cookie_secure: bool | None = None

    api_prefix: str = "/api"
    socketio_path: str = "socket.io"
    socketio_async_mode: str = "eventlet"
    cors_origins_raw: str = "http://localhost:5173,http://127.0.0.1:5173"

    notification_history_size: int = 6

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("db_host", "db_name", "db_user", "db_password", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @model_validator(mode="after")
    def check_distinct_secrets(self) -> "Settings":
        if self.access_token_secret == self.refresh_token_secret:
            raise ValueError("ACCESS_TOKEN_SECRET e REFRESH_TOKEN_SECRET devem ser diferentes.")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def refresh_cookie_secure(self) -> bool:
        if self.cookie_secure is None:
            return self.is_production
        return self.cookie_secure

    @property
    def refresh_token_seconds(self) -> int:
        return self.refresh_token_minutes * 60

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_raw.split(",") if o.strip()]

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override

        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        host = self.db_host
        port = self.db_port
        db = self.db_name

        return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
