"""
Unit tests for ConfigStore (esm/config/store.py)
Covers: missing vs corrupt documents, default creation, save/load round trip.
"""
import os
import pytest
from esm.config.store import DEFAULT_REGISTRY, Config, ConfigStore
from esm.errors import ConfigError, ConfigNotFoundError


@pytest.fixture
def config_store(tmp_path):
    return ConfigStore(str(tmp_path / "config.toml"))


def test_load_missing_raises_not_found(config_store):
    with pytest.raises(ConfigNotFoundError):
        config_store.load()


def test_load_corrupt_is_a_different_error(config_store):
    with open(config_store.path, "w") as f:
        f.write("registry = [unterminated\n")
    with pytest.raises(ConfigError) as excinfo:
        config_store.load()
    assert not isinstance(excinfo.value, ConfigNotFoundError)


def test_load_rejects_non_string_value(config_store):
    with open(config_store.path, "w") as f:
        f.write("registry = 42\n")
    with pytest.raises(ConfigError):
        config_store.load()


def test_create_default(config_store):
    config = config_store.create_default()
    assert config == Config(empty_epsilon_path=None, registry=DEFAULT_REGISTRY)
    assert config_store.load() == config
    with open(config_store.path) as f:
        content = f.read()
    assert "empty_epsilon_path" not in content
    assert DEFAULT_REGISTRY in content


def test_create_default_overwrites_existing(config_store):
    config_store.save(Config(empty_epsilon_path="/opt/ee", registry="https://other.test"))
    config = config_store.create_default()
    assert config_store.load() == config
    assert config.empty_epsilon_path is None


def test_save_load_round_trip(config_store):
    config = Config(empty_epsilon_path="/games/EmptyEpsilon", registry="https://example.test/v1")
    config_store.save(config)
    loaded = config_store.load()
    assert loaded == config
    config_store.save(loaded)
    assert config_store.load() == config


def test_unknown_keys_are_ignored(config_store):
    with open(config_store.path, "w") as f:
        f.write('registry = "https://example.test/v1"\ntheme = "dark"\n')
    assert config_store.load() == Config(registry="https://example.test/v1")


def test_save_creates_parent_directory(tmp_path):
    store = ConfigStore(str(tmp_path / "nested" / "config.toml"))
    store.save(Config(registry="https://example.test/v1"))
    assert store.load().registry == "https://example.test/v1"


def test_failed_save_leaves_no_temp_file(config_store, monkeypatch):
    config_store.create_default()

    def failing_replace(src, dst):
        raise PermissionError("read-only filesystem")
    monkeypatch.setattr('esm.config.store.os.replace', failing_replace)
    with pytest.raises(ConfigError):
        config_store.save(Config(registry="https://example.test/v1"))
    assert not os.path.exists(config_store.path + ".tmp")
    monkeypatch.undo()
    assert config_store.load().registry == DEFAULT_REGISTRY
