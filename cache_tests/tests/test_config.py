import importlib

import pytest

import aged_cache.config as config_mod


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config_mod)
    # restore module constants from the real environment
    monkeypatch.undo()
    importlib.reload(config_mod)


@pytest.mark.parametrize("raw", ["1", "true", "YES", " on ", "y"])
def test_env_bool_truthy(monkeypatch, raw):
    monkeypatch.setenv("AGED_CACHE_TEST_FLAG", raw)
    assert config_mod._env_bool("AGED_CACHE_TEST_FLAG", False) is True


@pytest.mark.parametrize("raw", ["0", "false", "off", "nope", ""])
def test_env_bool_falsy(monkeypatch, raw):
    monkeypatch.setenv("AGED_CACHE_TEST_FLAG", raw)
    assert config_mod._env_bool("AGED_CACHE_TEST_FLAG", True) is False


def test_env_bool_missing_uses_default(monkeypatch):
    monkeypatch.delenv("AGED_CACHE_TEST_FLAG", raising=False)
    assert config_mod._env_bool("AGED_CACHE_TEST_FLAG", True) is True


def test_env_str_blank_uses_default(monkeypatch):
    monkeypatch.setenv("AGED_CACHE_TEST_STR", "   ")
    assert config_mod._env_str("AGED_CACHE_TEST_STR", "fallback") == "fallback"

    monkeypatch.setenv("AGED_CACHE_TEST_STR", " debug ")
    assert config_mod._env_str("AGED_CACHE_TEST_STR", "fallback") == "debug"


def test_constants_read_from_environment(monkeypatch, reload_config):
    monkeypatch.setenv("AGED_CACHE_THREAD_SAFE", "true")
    monkeypatch.setenv("AGED_CACHE_LOG_LEVEL", "debug")

    cfg = reload_config()

    assert cfg.THREAD_SAFE is True
    assert cfg.LOG_LEVEL == "DEBUG"


def test_constants_defaults(monkeypatch, reload_config):
    monkeypatch.delenv("AGED_CACHE_THREAD_SAFE", raising=False)
    monkeypatch.delenv("AGED_CACHE_LOG_LEVEL", raising=False)

    cfg = reload_config()

    assert cfg.THREAD_SAFE is False
    assert cfg.LOG_LEVEL == "WARNING"
