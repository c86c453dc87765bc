"""
Runtime Configuration Unit Tests
Tests for hashtree/config/runtime.py
"""
import pytest

from hashtree.config import RuntimeConfig, get_default_config, set_default_config
from hashtree.merkle import build
from hashtree.schemas.errors import ConfigException


class TestRuntimeConfig:
    """Tests for RuntimeConfig loaders."""

    def test_defaults(self):
        config = RuntimeConfig()
        assert config.hash_algorithm == "sha256"
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HASHTREE_HASH_ALGORITHM", "sha512")
        monkeypatch.setenv("HASHTREE_LOG_LEVEL", "debug")
        monkeypatch.setenv("HASHTREE_LOG_FILE", "/tmp/hashtree.log")

        config = RuntimeConfig.from_env()

        assert config.hash_algorithm == "sha512"
        assert config.log_level == "DEBUG"
        assert config.log_file == "/tmp/hashtree.log"

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"log_level": "warning"})
        assert config.hash_algorithm == "sha256"
        assert config.log_level == "WARNING"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "hashtree.yaml"
        path.write_text("hash_algorithm: sha3_256\nlog_level: ERROR\nlog_file: hashtree.log\n")

        config = RuntimeConfig.from_yaml(path)

        assert config.hash_algorithm == "sha3_256"
        assert config.log_level == "ERROR"
        assert config.log_file == "hashtree.log"

    def test_from_yaml_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert RuntimeConfig.from_yaml(path) == RuntimeConfig()

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_invalid(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("hash_algorithm: [unclosed\n")
        with pytest.raises(ConfigException):
            RuntimeConfig.from_yaml(path)

    def test_from_yaml_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- sha256\n- sha512\n")
        with pytest.raises(ConfigException) as exc_info:
            RuntimeConfig.from_yaml(path)
        assert exc_info.value.details["type"] == "list"

    def test_with_env_overrides(self, monkeypatch):
        base = RuntimeConfig(hash_algorithm="sha256", log_level="INFO")
        monkeypatch.setenv("HASHTREE_HASH_ALGORITHM", "blake2s")

        overridden = base.with_env_overrides()

        assert overridden.hash_algorithm == "blake2s"
        assert base.hash_algorithm == "sha256"

    def test_with_env_overrides_noop(self):
        base = RuntimeConfig()
        assert base.with_env_overrides() is base

    def test_to_dict(self):
        config = RuntimeConfig(hash_algorithm="sha512")
        assert config.to_dict() == {
            "hash_algorithm": "sha512",
            "log_level": "INFO",
            "log_file": None,
        }


class TestDefaultConfig:
    """Tests for the process-wide default configuration."""

    def test_default_is_cached(self):
        assert get_default_config() is get_default_config()

    def test_set_default_config(self):
        config = RuntimeConfig(hash_algorithm="sha512")
        set_default_config(config)
        assert get_default_config() is config

    def test_build_uses_default_algorithm(self):
        set_default_config(RuntimeConfig(hash_algorithm="sha512"))
        tree = build(["a", "b"])
        assert tree.algorithm == "sha512"
        assert len(tree.root_hash()) == 64

    def test_explicit_hasher_wins_over_default(self):
        set_default_config(RuntimeConfig(hash_algorithm="sha512"))
        assert build(["a", "b"], "sha256").digest_size == 32
