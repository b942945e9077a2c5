"""Tests for SoftnasPlugin and the mackerel-agent output."""

import json

import pytest

from softnas_monitor.core.errors import InvocationError
from softnas_monitor.core.schemas import PluginConfig
from softnas_monitor.plugin import SoftnasPlugin
from softnas_monitor.reporting.graphdef import GRAPH_DEFINITIONS, build_graph_definition
from softnas_monitor.reporting.mackerel import format_metric_lines, meta_requested

NOW = 1700000000


def make_plugin() -> SoftnasPlugin:
    return SoftnasPlugin(PluginConfig(command="./softnas-cmd_test", base_url="https://nas01/softnas"))


class TestFetchMetrics:
    """Tests for a full poll cycle."""

    def test_fetch_metrics(self, fake_cmd) -> None:
        """Test every collector contributes to the merged map."""
        stat = make_plugin().fetch_metrics()

        assert stat["storagename_used"] == 491520
        assert stat["storagename_free"] == pytest.approx(4.81e10, rel=1e-3)
        assert stat["memoryname_used"] == pytest.approx(682700.8)
        assert stat["memorydata_free"] == 99.935123908887
        assert stat["arc_hits"] == 15.0
        assert stat["arc_read"] == 5.0
        assert stat["pool1_read_iops"] == 12.5
        assert stat["pool1_write_iops"] == 3.0
        assert len(stat) == 13

    def test_call_sequence(self, fake_cmd) -> None:
        """Login once, discover pools once, then one call per collector."""
        make_plugin().fetch_metrics()

        assert fake_cmd.actions() == ["login", "pooldetails", "overview", "perfmon", "pooldetails"]
        assert fake_cmd.calls[-1][2] == "pool1"

    def test_failure_aborts_cycle(self, fake_cmd, called_process_error) -> None:
        fake_cmd.failures["perfmon"] = called_process_error("perfmon")

        with pytest.raises(InvocationError):
            make_plugin().fetch_metrics()

        assert "overview" in fake_cmd.actions()
        assert fake_cmd.actions().count("pooldetails") == 1

    def test_login_failure_stops_before_collectors(self, fake_cmd, called_process_error) -> None:
        fake_cmd.failures["login"] = called_process_error("login")

        with pytest.raises(InvocationError):
            make_plugin().fetch_metrics()

        assert fake_cmd.actions() == ["login"]


class TestReport:
    """Tests for the text handed to mackerel-agent."""

    def test_metric_lines(self, fake_cmd) -> None:
        output = make_plugin().report(environ={}, timestamp=NOW)
        lines = output.splitlines()

        assert len(lines) == 13
        assert lines[0] == f"softnas.storagename.storagename_used\t491520.000000\t{NOW}"
        assert f"softnas.numberofarccache.arc_hits\t15.000000\t{NOW}" in lines
        assert f"softnas.pooliops.pool1_read_iops\t12.500000\t{NOW}" in lines

    def test_meta_block(self, fake_cmd) -> None:
        output = make_plugin().report(environ={"MACKEREL_AGENT_PLUGIN_META": "1"})
        header, body = output.split("\n", 1)

        assert header == "# mackerel-agent-plugin"
        graphs = json.loads(body)["graphs"]
        assert graphs["softnas.memoryname"]["unit"] == "bytes"
        assert graphs["softnas.memoryname"]["metrics"][0] == {
            "name": "memoryname_used",
            "label": "Used",
            "diff": False,
            "stacked": True,
        }
        assert [m["name"] for m in graphs["softnas.pooliops"]["metrics"]] == [
            "pool1_read_iops",
            "pool1_write_iops",
        ]
        assert "overview" not in fake_cmd.actions()

    def test_meta_block_without_appliance(self, fake_cmd, called_process_error) -> None:
        """A failed login still yields the static graphs, minus the pool series."""
        fake_cmd.failures["login"] = called_process_error("login")

        output = make_plugin().report(environ={"MACKEREL_AGENT_PLUGIN_META": "1"})
        header, body = output.split("\n", 1)

        assert header == "# mackerel-agent-plugin"
        graphs = json.loads(body)["graphs"]
        assert set(graphs) == {
            "softnas.storagename",
            "softnas.storagedata",
            "softnas.memoryname",
            "softnas.memorydata",
            "softnas.numberofarccache",
        }
        assert fake_cmd.actions() == ["login"]

    def test_custom_prefix(self, fake_cmd) -> None:
        plugin = SoftnasPlugin(PluginConfig(command="./softnas-cmd_test", metric_prefix="nas01"))
        lines = plugin.report(environ={}, timestamp=NOW).splitlines()
        assert all(line.startswith("nas01.") for line in lines)

    def test_unknown_metrics_not_reported(self) -> None:
        lines = format_metric_lines({"arc_hits": 1.0, "bogus": 2.0}, GRAPH_DEFINITIONS, "softnas", NOW)
        assert lines == [f"softnas.numberofarccache.arc_hits\t1.000000\t{NOW}"]

    def test_meta_requested(self) -> None:
        assert meta_requested({"MACKEREL_AGENT_PLUGIN_META": "1"})
        assert not meta_requested({"MACKEREL_AGENT_PLUGIN_META": "0"})
        assert not meta_requested({})


class TestGraphDefinition:
    """Tests for graph metadata."""

    def test_graph_definition(self) -> None:
        assert set(GRAPH_DEFINITIONS) == {
            "storagename",
            "storagedata",
            "memoryname",
            "memorydata",
            "numberofarccache",
            "pooliops",
        }
        assert GRAPH_DEFINITIONS["storagename"].label == "SoftNas Storage Size"
        assert GRAPH_DEFINITIONS["memorydata"].unit == "percentage"

    def test_constant_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            GRAPH_DEFINITIONS["extra"] = GRAPH_DEFINITIONS["storagename"]  # type: ignore[index]

    def test_pool_series_follow_discovery_order(self) -> None:
        graphs = build_graph_definition(["tank", "backup"])

        names = [m.name for m in graphs["pooliops"].metrics]
        assert names == ["tank_read_iops", "tank_write_iops", "backup_read_iops", "backup_write_iops"]
        assert GRAPH_DEFINITIONS["pooliops"].metrics == ()

    def test_pool_series_names_sanitized(self) -> None:
        metrics = build_graph_definition(["tank.backup 01"])["pooliops"].metrics
        assert [m.name for m in metrics] == ["tank_backup_01_read_iops", "tank_backup_01_write_iops"]
        assert metrics[0].label == "tank.backup 01 Read_IOPS"
