# tests/test_settings.py
import pytest

from confighub.core.settings import Settings


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("sqlite:///./confighub.db", "sqlite:///./confighub.db"),
        ("sqlite+aiosqlite:///./confighub.db", "sqlite:///./confighub.db"),
        ("postgresql+asyncpg://u:p@db/confighub", "postgresql+psycopg://u:p@db/confighub"),
        ("postgresql+psycopg://u:p@db/confighub", "postgresql+psycopg://u:p@db/confighub"),
    ],
)
def test_database_url_sync(url: str, expected: str) -> None:
    settings = Settings(SECRET_KEY="k", DATABASE_URL=url)
    assert settings.database_url_sync == expected


def test_test_database_override() -> None:
    settings = Settings(
        SECRET_KEY="k",
        DATABASE_URL="sqlite:///./prod.db",
        TEST_DATABASE_URL="sqlite://",
        USE_TEST_DATABASE=True,
    )
    assert settings.effective_database_url == "sqlite://"
