# sushi_api/infrastructure/database/session.py

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sushi_api.infrastructure.database.base_model import BaseModel


def _build_engine(url: str, *, echo: bool) -> Engine:
    if url.startswith("sqlite") and ":memory:" in url:
        # uma única conexão compartilhada, senão cada sessão vê um banco vazio
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo, pool_pre_ping=True)


class Database:
    def __init__(self, url: str, *, echo: bool = False) -> None:
        self._engine = _build_engine(url, echo=echo)
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_all(self) -> None:
        import sushi_api.infrastructure.database.models  # noqa: F401

        BaseModel.metadata.create_all(self._engine)

    def dispose(self) -> None:
        self._engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Unidade de trabalho: commit no sucesso, rollback em qualquer exceção."""
        session: Session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
