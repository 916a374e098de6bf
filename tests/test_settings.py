import pytest

from core import settings


def test_database_url_is_required(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(RuntimeError):
        settings.database_url()


def test_database_url_drops_sslmode(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/papers?sslmode=disable&application_name=api")
    assert settings.database_url() == "postgresql://u:p@db:5432/papers?application_name=api"


def test_pool_sizes_fall_back_on_garbage(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "lots")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "0")
    assert settings.pool_min_size() == 1
    assert settings.pool_max_size() == 1


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, "/api"),
        ("", ""),
        ("v1/", "/v1"),
        ("/service/api", "/service/api"),
    ],
)
def test_api_prefix(monkeypatch: pytest.MonkeyPatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("API_PREFIX", raising=False)
    else:
        monkeypatch.setenv("API_PREFIX", raw)
    assert settings.api_prefix() == expected


def test_cors_origins_split(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    assert settings.cors_origins() == ["http://a.test", "http://b.test"]
