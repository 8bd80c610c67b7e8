"""
Tests for runner configuration.
"""

import pytest

from variant_triage.config import WORKERS_ENV_VAR, RunnerConfig, default_workers
from variant_triage.errors import ConfigurationError


class TestRunnerConfig:
    """Tests for RunnerConfig."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv(WORKERS_ENV_VAR, raising=False)
        config = RunnerConfig()
        assert config.max_workers == 1
        assert config.data_provider_errors == "fail"
        assert not config.contain_data_provider_errors

    def test_default_workers_from_environment(self, monkeypatch):
        monkeypatch.setenv(WORKERS_ENV_VAR, "3")
        assert RunnerConfig().max_workers == 3
        assert RunnerConfig(max_workers=1).max_workers == 1

    def test_contain_policy(self):
        assert RunnerConfig(data_provider_errors="contain").contain_data_provider_errors

    @pytest.mark.parametrize("workers", [0, -2, "4", 1.5])
    def test_invalid_workers(self, workers):
        with pytest.raises(ConfigurationError) as excinfo:
            RunnerConfig(max_workers=workers)
        assert excinfo.value.option == "max_workers"

    def test_invalid_policy(self):
        with pytest.raises(ConfigurationError, match="data_provider_errors"):
            RunnerConfig(data_provider_errors="ignore")

    def test_round_trip_dict(self):
        config = RunnerConfig(max_workers=3, data_provider_errors="contain")
        assert RunnerConfig.from_dict(config.to_dict()) == config


class TestFromDict:
    """Tests for RunnerConfig.from_dict."""

    def test_unknown_keys_ignored(self, monkeypatch):
        monkeypatch.delenv(WORKERS_ENV_VAR, raising=False)
        config = RunnerConfig.from_dict({"max_workers": 2, "colour": "blue"})
        assert config.max_workers == 2

    def test_workers_from_environment(self, monkeypatch):
        monkeypatch.setenv(WORKERS_ENV_VAR, "6")
        assert RunnerConfig.from_dict({}).max_workers == 6
        assert RunnerConfig.from_dict({"max_workers": 2}).max_workers == 2

    @pytest.mark.parametrize("value", ["many", "0", "-3"])
    def test_bad_environment_value_is_sequential(self, monkeypatch, value):
        monkeypatch.setenv(WORKERS_ENV_VAR, value)
        assert default_workers() == 1


class TestFromYaml:
    """Tests for RunnerConfig.from_yaml."""

    def test_top_level_settings(self, tmp_path, monkeypatch):
        monkeypatch.delenv(WORKERS_ENV_VAR, raising=False)
        path = tmp_path / "runner.yaml"
        path.write_text("max_workers: 4\ndata_provider_errors: contain\n")

        config = RunnerConfig.from_yaml(path)

        assert config.max_workers == 4
        assert config.contain_data_provider_errors

    def test_runner_section(self, tmp_path, monkeypatch):
        monkeypatch.delenv(WORKERS_ENV_VAR, raising=False)
        path = tmp_path / "settings.yaml"
        path.write_text("runner:\n  max_workers: 2\nanalysis:\n  analysisMode: FULL\n")

        assert RunnerConfig.from_yaml(str(path)).max_workers == 2

    def test_empty_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv(WORKERS_ENV_VAR, raising=False)
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert RunnerConfig.from_yaml(path) == RunnerConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            RunnerConfig.from_yaml(tmp_path / "absent.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- max_workers\n- 4\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            RunnerConfig.from_yaml(path)
