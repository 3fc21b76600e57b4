from __future__ import annotations

import json
from pathlib import Path

import pytest

from localcache.config import DEFAULT_CACHE_DIR, CacheSettings, load_settings


def test_from_env_uses_defaults_when_unset() -> None:
    settings = CacheSettings.from_env({})

    assert settings.cache_dir == DEFAULT_CACHE_DIR
    assert settings.scope == ""
    assert settings.directory == Path("/media/cache")


def test_from_env_reads_cache_dir_and_repository_scope(tmp_path) -> None:
    settings = CacheSettings.from_env(
        {"CACHE_DIR": str(tmp_path), "GITHUB_REPOSITORY": "acme/widgets"}
    )

    assert settings.directory == tmp_path / "acme" / "widgets"


def test_from_env_falls_back_when_cache_dir_blank() -> None:
    settings = CacheSettings.from_env({"CACHE_DIR": "  "})

    assert settings.cache_dir == DEFAULT_CACHE_DIR


def test_from_env_defaults_to_process_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("CACHE_DIR", str(tmp_path))
    monkeypatch.delenv("GITHUB_REPOSITORY", raising=False)

    assert CacheSettings.from_env().directory == tmp_path


def test_scope_is_kept_below_cache_dir() -> None:
    settings = CacheSettings(cache_dir="/srv/cache", scope="/acme/widgets")

    assert settings.directory == Path("/srv/cache/acme/widgets")

    with pytest.raises(ValueError):
        CacheSettings(cache_dir="/srv/cache", scope="acme/../../etc")


def test_settings_reject_unknown_fields() -> None:
    with pytest.raises(ValueError):
        CacheSettings.model_validate({"cache_dir": "/srv/cache", "ttl": 5})


def test_load_settings_from_json(tmp_path) -> None:
    config_path = tmp_path / "cache.json"
    config_path.write_text(
        json.dumps({"cache_dir": str(tmp_path / "shared"), "scope": "team/project"}),
        encoding="utf-8",
    )

    settings = load_settings(config_path)

    assert settings.directory == tmp_path / "shared" / "team" / "project"


def test_load_settings_from_yaml(tmp_path) -> None:
    pytest.importorskip("yaml")
    config_path = tmp_path / "cache.yaml"
    config_path.write_text("cache_dir: /srv/cache\nscope: acme\n", encoding="utf-8")

    settings = load_settings(config_path)

    assert settings.directory == Path("/srv/cache/acme")


def test_load_settings_wraps_schema_errors(tmp_path) -> None:
    config_path = tmp_path / "cache.json"
    config_path.write_text(json.dumps({"cache_dir": ""}), encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid configuration"):
        load_settings(config_path)


def test_load_settings_requires_object_root(tmp_path) -> None:
    config_path = tmp_path / "cache.json"
    config_path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="root must be an object"):
        load_settings(config_path)
