import pytest
from sqlalchemy import select

from sushi_api.config.settings import Settings
from sushi_api.container import SERVICES_KEY
from sushi_api.core.clock import utcnow
from sushi_api.entities.user import Role
from sushi_api.infrastructure.database.models.role_model import RoleModel
from sushi_api.infrastructure.database.models.user_model import UserModel
from sushi_api.infrastructure.security.password_hasher import PasswordHasher
from sushi_api.main import create_app
from sushi_api.repositories.refresh_token_session_repository import RefreshTokenSessionRepository

PASSWORD = "Sushi!2024"
REFRESH_COOKIE = "refreshToken"
AUTH_PATH = "/api/auth"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        debug=False,
        log_level="WARNING",
        database_url_override="sqlite+pysqlite:///:memory:",
        db_create_tables=True,
        socketio_async_mode="threading",
        access_token_secret="test-access-secret",
        refresh_token_secret="test-refresh-secret",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    yield app
    app.extensions[SERVICES_KEY].close()


@pytest.fixture
def services(app):
    return app.extensions[SERVICES_KEY]


@pytest.fixture
def client(app):
    return app.test_client()


def create_user(database, *, full_name: str, email: str, role: str, password: str = PASSWORD, deleted: bool = False) -> int:
    stored = PasswordHasher.hash_password(password, iterations=1_000)

    with database.session() as session:
        role_model = session.execute(select(RoleModel).where(RoleModel.name == role)).scalar_one_or_none()
        if role_model is None:
            role_model = RoleModel(name=role)
            session.add(role_model)
            session.flush()

        user = UserModel(
            full_name=full_name,
            email=email,
            password_algo=stored.algo,
            password_iterations=stored.iterations,
            password_hash=stored.password_hash,
            password_salt=stored.password_salt,
            role_id=role_model.id,
            created_at=utcnow(),
            last_login=None,
            deleted_at=utcnow() if deleted else None,
        )
        session.add(user)
        session.flush()
        return int(user.id)


@pytest.fixture
def make_user(services):
    def factory(**kwargs) -> int:
        return create_user(services.database, **kwargs)

    return factory


@pytest.fixture
def admin_id(make_user) -> int:
    return make_user(full_name="Ana Admin", email="admin@sushiburrito.com", role=Role.ADMIN.value)


@pytest.fixture
def cook_id(make_user) -> int:
    return make_user(full_name="Carlos Cocinero", email="cocina@sushiburrito.com", role=Role.COOK.value)


@pytest.fixture
def waiter_id(make_user) -> int:
    return make_user(full_name="Marta Mesera", email="salon@sushiburrito.com", role=Role.WAITER.value)


def login(client, email: str, password: str = PASSWORD):
    return client.post(f"{AUTH_PATH}/login", json={"correo": email, "contraseña": password})


def refresh_cookie(client) -> str | None:
    cookie = client.get_cookie(REFRESH_COOKIE, path=AUTH_PATH)
    return cookie.value if cookie is not None else None


def sessions_for(services, user_id: int) -> list:
    with services.database.session() as session:
        return RefreshTokenSessionRepository(session).list_for_user(user_id)


def active_sessions(services, user_id: int) -> list:
    now = utcnow()
    return [s for s in sessions_for(services, user_id) if s.revoked_at is None and s.expires_at > now]


class RecordingEmitter:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict]] = []

    def emit(self, event, data=None, *, to=None, **kwargs):
        self.calls.append((event, to, data))

    def events_to(self, room: str) -> list[str]:
        return [event for event, to, _ in self.calls if to == room]
