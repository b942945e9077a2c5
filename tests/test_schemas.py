"""Tests for SoftNAS monitor schemas and configuration loading."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from softnas_monitor.core.config import load_config, merge_overrides
from softnas_monitor.core.schemas import (
    GraphMetric,
    LoginResponse,
    PluginConfig,
    PoolRecord,
)


class TestPluginConfig:
    """Tests for PluginConfig schema."""

    def test_defaults(self) -> None:
        """Test defaults match a stock SoftNAS install."""
        config = PluginConfig()
        assert config.command == "/usr/local/bin/softnas-cmd"
        assert config.base_url == "https://localhost/softnas"
        assert config.user == "softnas"
        assert config.password == "Pass4W0rd"
        assert config.timeout_seconds == 30
        assert config.metric_prefix == "softnas"

    def test_trailing_slash_stripped(self) -> None:
        config = PluginConfig(base_url="https://nas01/softnas/")
        assert config.base_url == "https://nas01/softnas"

    def test_timeout_lower_bound(self) -> None:
        with pytest.raises(ValidationError):
            PluginConfig(timeout_seconds=0)

    def test_prefix_rejects_dots(self) -> None:
        """A dotted prefix would change the graph key depth."""
        with pytest.raises(ValidationError):
            PluginConfig(metric_prefix="softnas.prod")


class TestLoadConfig:
    """Tests for load_config and merge_overrides."""

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "softnas.yaml"
        path.write_text("base_url: https://nas02/softnas\nuser: monitor\ntimeout_seconds: 10\n")

        config = load_config(path)

        assert config.base_url == "https://nas02/softnas"
        assert config.user == "monitor"
        assert config.timeout_seconds == 10
        assert config.command == "/usr/local/bin/softnas-cmd"

    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "softnas.json"
        path.write_text(json.dumps({"password": "secret"}))
        assert load_config(path).password == "secret"

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_config(path) == PluginConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_unsupported_format(self, tmp_path: Path) -> None:
        path = tmp_path / "softnas.toml"
        path.write_text("user = 'x'")
        with pytest.raises(ValueError):
            load_config(path)

    def test_overrides_skip_none(self) -> None:
        config = PluginConfig(user="monitor", password="secret")
        merged = merge_overrides(config, {"user": None, "password": "other", "timeout_seconds": 5})
        assert merged.user == "monitor"
        assert merged.password == "other"
        assert merged.timeout_seconds == 5

    def test_overrides_are_validated(self) -> None:
        with pytest.raises(ValidationError):
            merge_overrides(PluginConfig(), {"timeout_seconds": -1})


class TestEnvelopes:
    """Tests for softnas-cmd response models."""

    def test_login_response(self) -> None:
        login = LoginResponse.model_validate_json(
            '{"success" : true, "session_id" : 12345, "result" : {}}'
        )
        assert login.session_id == 12345

    def test_pool_record_aliases(self) -> None:
        record = PoolRecord.model_validate({"name": "pool1", "read_IOPS": "1.5", "write_IOPS": "2"})
        assert record.read_iops == "1.5"
        assert record.write_iops == "2"

    def test_graph_metric_frozen(self) -> None:
        metric = GraphMetric(name="arc_hits", label="Hits")
        with pytest.raises(ValidationError):
            metric.label = "Other"  # type: ignore[misc]
