# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from confighub.core.security import create_access_token  # noqa: E402
from confighub.db.session import Base  # noqa: E402
from confighub.db.session import get_db as app_get_session  # noqa: E402
from confighub.db.time import utcnow  # noqa: E402
from confighub.main import app as fastapi_app  # noqa: E402
from confighub.models import (  # noqa: E402
    AudioDriverType,
    Comment,
    Config,
    ConfigDetails,
    ConfigVersion,
    DirectXHubType,
    Game,
    Role,
    User,
)
from confighub.services.config_service import snapshot_details  # noqa: E402

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)
_GAME_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite needs manual BEGIN for SAVEPOINT-based test isolation to work.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:  # type: ignore[no-untyped-def]
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits escaped the savepoint.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def auth_headers(user: User) -> dict[str, str]:
    """Return bearer authorization headers for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory persisting users with a unique username."""

    def _make_user(role: Role = Role.USER, username: str | None = None, **extra: Any) -> User:
        number = next(_USER_COUNTER)
        user = User(
            username=username or f"user{number}",
            email=f"user{number}@example.com",
            role=role,
            **extra,
        )
        db_session.add(user)
        db_session.flush()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """The primary test user; owns ``test_config``."""
    return make_user(username="owner")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user(username="voter")


@pytest.fixture()
def moderator(make_user: Callable[..., User]) -> User:
    return make_user(role=Role.MODERATOR, username="moderator")


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user(role=Role.ADMIN, username="admin")


@pytest.fixture()
def suspended_user(make_user: Callable[..., User]) -> User:
    return make_user(username="suspended", suspended_until=utcnow() + timedelta(hours=12))


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers(other_user)


@pytest.fixture()
def moderator_token(moderator: User) -> dict[str, str]:
    return auth_headers(moderator)


@pytest.fixture()
def admin_token(admin: User) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture()
def make_game(db_session: Session) -> Callable[..., Game]:
    def _make_game(name: str | None = None) -> Game:
        number = next(_GAME_COUNTER)
        game = Game(steam_id=str(100000 + number), name=name or f"Test Game {number}")
        db_session.add(game)
        db_session.flush()
        db_session.refresh(game)
        return game

    return _make_game


@pytest.fixture()
def test_game(make_game: Callable[..., Game]) -> Game:
    return make_game("Elden Ring")


def details_payload(**overrides: Any) -> dict[str, Any]:
    """Return a complete, valid details body for config creation."""
    payload: dict[str, Any] = {
        "language": "en",
        "game_resolution": "1280x720",
        "directx_hub": DirectXHubType.SIMPLE.value,
        "env_vars": "DXVK_HUD=fps",
        "command_line": None,
        "compat_layer": "proton-9",
        "gpu_driver": "turnip-24",
        "audio_driver": AudioDriverType.PULSE.value,
        "dxvk_version": "2.3",
        "vkd3d_version": "2.12",
        "cpu_translator": "box64",
        "cpu_core_limit": "4",
        "vram_limit": "2GB",
        "components": ["vcrun2019"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_config(db_session: Session) -> Callable[..., Config]:
    """Factory persisting a config with details and its initial version."""

    def _make_config(owner: User, game: Game, **fields: Any) -> Config:
        config = Config(
            game_id=game.id,
            user_id=owner.id,
            gamehub_version=fields.pop("gamehub_version", "5.1.0"),
            slug=fields.pop("slug", f"{game.steam_id}-by-{owner.username}"),
            tags=fields.pop("tags", []),
            **fields,
        )
        details_data = details_payload()
        details_data["directx_hub"] = DirectXHubType(details_data["directx_hub"])
        details_data["audio_driver"] = AudioDriverType(details_data["audio_driver"])
        config.details = ConfigDetails(**details_data)
        db_session.add(config)
        db_session.flush()
        db_session.add(
            ConfigVersion(
                config_id=config.id,
                user_id=owner.id,
                version_number=1,
                config_snapshot=snapshot_details(config.details),
                change_summary="Initial configuration",
            )
        )
        db_session.flush()
        db_session.refresh(config)
        return config

    return _make_config


@pytest.fixture()
def test_config(
    make_config: Callable[..., Config],
    test_user: User,
    test_game: Game,
) -> Config:
    """A visible config owned by ``test_user``."""
    return make_config(test_user, test_game)


@pytest.fixture()
def test_comment(db_session: Session, test_config: Config, other_user: User) -> Comment:
    """A comment on ``test_config`` written by ``other_user``."""
    comment = Comment(content="Runs great at 30fps", user_id=other_user.id, config_id=test_config.id)
    db_session.add(comment)
    db_session.flush()
    db_session.refresh(comment)
    return comment
