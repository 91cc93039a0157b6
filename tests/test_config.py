"""Tests for the environment helpers in config."""

from design_gallery.config import _env, _env_bool, _env_int, _resolve_db_uri


def test_env_bool(monkeypatch):
    monkeypatch.setenv("GALLERY_FLAG", "Yes")
    assert _env_bool("GALLERY_FLAG") is True

    monkeypatch.setenv("GALLERY_FLAG", "off")
    assert _env_bool("GALLERY_FLAG", default=True) is False

    monkeypatch.setenv("GALLERY_FLAG", "None")
    assert _env_bool("GALLERY_FLAG", default=True) is True

    monkeypatch.delenv("GALLERY_FLAG")
    assert _env_bool("GALLERY_FLAG") is False


def test_env_and_env_int(monkeypatch):
    monkeypatch.setenv("GALLERY_VALUE", "")
    assert _env("GALLERY_VALUE", "fallback") == "fallback"

    monkeypatch.setenv("GALLERY_VALUE", "12")
    assert _env_int("GALLERY_VALUE", 5) == 12

    monkeypatch.setenv("GALLERY_VALUE", "twelve")
    assert _env_int("GALLERY_VALUE", 5) == 5


def test_resolve_db_uri():
    assert _resolve_db_uri("postgres://u:p@db/gallery") == "postgresql://u:p@db/gallery"
    assert _resolve_db_uri("sqlite:///:memory:") == "sqlite:///:memory:"
    assert _resolve_db_uri("mysql://u@db/gallery") == "mysql://u@db/gallery"
