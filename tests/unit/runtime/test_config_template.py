"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.absence_api.runtime.config.config_template import (
    apply_environment_overrides,
    load_templated_yaml,
    substitute_env_vars,
)

CONFIG_YAML = """
config:
  app:
    environment: "${APP_ENVIRONMENT:-development}"
  database:
    url: "${DATABASE_URL:-sqlite:///./data/test.db}"
  absences:
    allow_delete: ${ABSENCES_ALLOW_DELETE:-false}
    rules:
      max_duration_days: 14
    pagination:
      max_limit: 50
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)
    return path


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_env_var_in_text(self):
        """Test substitution of environment variable within text."""
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            result = substitute_env_vars("http://${HOST}:${PORT}/api")
            assert result == "http://localhost:8080/api"

    def test_substitute_env_var_with_default(self):
        """Test substitution with default value when env var is not set."""
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-fallback}") == "fallback"
            assert substitute_env_vars("${MISSING_VAR:-}") == ""

    def test_substitute_required_env_var_missing(self):
        """Test substitution fails when required env var is missing."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_substitute_env_var_with_custom_error(self):
        """Test substitution with custom error message."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError,
                match="Required environment variable DATABASE_URL: needed in production",
            ):
                substitute_env_vars("${DATABASE_URL:?needed in production}")


class TestEnvironmentOverrides:
    """Test ``<ENV>_`` prefixed variables."""

    def test_prefixed_variable_overrides_plain_one(self):
        with patch.dict(
            os.environ,
            {"TEST_DATABASE_URL": "sqlite:///./override.db", "DATABASE_URL": "sqlite://"},
            clear=True,
        ):
            applied = apply_environment_overrides("test")

            assert applied == ["DATABASE_URL"]
            assert os.environ["DATABASE_URL"] == "sqlite:///./override.db"


class TestLoadTemplatedYaml:
    """Test loading config files into ConfigData."""

    def test_load_with_defaults(self, config_file: Path):
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(config_file)

        assert config.app.environment == "development"
        assert config.database.url == "sqlite:///./data/test.db"
        assert config.absences.allow_delete is False
        assert config.absences.rules.max_duration_days == 14
        # Unlisted keys keep their defaults
        assert config.absences.rules.min_advance_hours == 48
        assert config.absences.pagination.max_limit == 50
        assert config.absences.pagination.default_limit == 10

    def test_load_with_environment(self, config_file: Path):
        env = {
            "DATABASE_URL": "postgresql://user:secret@db:5432/absences",
            "ABSENCES_ALLOW_DELETE": "true",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(config_file)

        assert config.absences.allow_delete is True
        assert config.database.is_sqlite is False
        assert "secret" not in config.database.safe_url

    def test_invalid_value_is_reported(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  absences:\n    allow_delete: maybe\n")

        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="Invalid configuration"):
                load_templated_yaml(path)

    def test_empty_file_is_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(path)

    def test_repository_config_file_loads(self):
        root = Path(__file__).resolve().parents[3]

        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(root / "config.yaml")

        assert config.absences.pagination.max_limit == 100
        assert config.absences.rules.max_duration_days == 30
