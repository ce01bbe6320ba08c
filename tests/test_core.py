"""Tests for the public query surface."""

from __future__ import annotations

from dataclasses import replace

import pytest

import hostsampler
from hostsampler import core
from hostsampler.core import HostMonitor
from hostsampler.models import CpuTicks, InterfaceCounters
from hostsampler.probe import DEFAULT_TIMEOUT_SECONDS
from hostsampler.sampler import DeltaSampler


@pytest.fixture
def monitor(fake_source) -> HostMonitor:
    return HostMonitor(DeltaSampler(fake_source), probe_timeout=1.0, process_order="memory")


def test_cpu_usage_baseline_then_delta(monitor, fake_source) -> None:
    fake_source.cpu_readings = [
        CpuTicks(user=10, nice=0, system=10, idle=80),
        CpuTicks(user=20, nice=0, system=20, idle=140),
    ]
    assert monitor.get_cpu_usage() == 0.0
    assert monitor.get_cpu_usage() == pytest.approx(25.0)


def test_memory_totals(monitor) -> None:
    assert monitor.get_total_memory() == 8 * 1024**3
    assert monitor.get_available_memory() == 3 * 1024**3


def test_disk_usage_missing_path(monitor) -> None:
    assert monitor.get_disk_usage("/nonexistent/path") == (0, 0, False)


def test_disk_usage_existing_path(monitor, tmp_path) -> None:
    total, free, ok = monitor.get_disk_usage(str(tmp_path))
    assert ok is True
    assert 0 <= free <= total


def test_list_directory(monitor, tmp_path) -> None:
    (tmp_path / "one").write_text("1")
    assert monitor.list_directory(str(tmp_path), 5) == (["one"], True)
    assert monitor.list_directory(str(tmp_path / "missing"), 5) == ([], False)


def test_network_stats_only_count_non_loopback(monitor, fake_source) -> None:
    fake_source.net_readings = [
        {"eth0": InterfaceCounters(100, 50), "lo": InterfaceCounters(999, 999)},
        {"eth0": InterfaceCounters(160, 75), "lo": InterfaceCounters(2000, 2000)},
    ]
    assert monitor.get_network_stats() == (0, 0, True)
    assert monitor.get_network_stats() == (60, 25, True)


def test_network_stats_unavailable(monitor, fake_source) -> None:
    fake_source.fail_net = True
    assert monitor.get_network_stats() == (0, 0, False)


def test_top_processes_and_count(monitor, fake_source) -> None:
    fake_source.processes = {1: ("init", 10), 2: ("big", 1000)}
    assert monitor.get_process_count() == 2
    assert [r.name for r in monitor.list_top_processes(1)] == ["big"]
    assert monitor.list_top_processes(0) == []


def test_closed_port(monitor, closed_port) -> None:
    assert monitor.check_port_status("127.0.0.1", closed_port) is False


def test_snapshot_sections(monitor, fake_source) -> None:
    fake_source.auto_cpu = True
    fake_source.net_readings = [{"eth0": InterfaceCounters(5, 5)}, {"eth0": InterfaceCounters(5, 5)}]
    fake_source.processes = {1: ("init", 10)}

    snap = monitor.collect_snapshot(include_disk=False, top_n=5)

    assert set(snap) == {"timestamp", "system", "cpu", "memory", "network", "processes"}
    assert snap["cpu"] == {"percent": 0.0}
    assert snap["memory"]["total"] == 8 * 1024**3
    assert snap["network"]["bytes_recv_total"] == 5
    assert snap["processes"]["top"] == [{"pid": 1, "name": "init", "working_set_bytes": 10}]


def test_snapshot_isolates_failing_section(monitor, fake_source) -> None:
    fake_source.auto_cpu = True
    fake_source.fail_net = True

    snap = monitor.collect_snapshot(include_disk=False, include_processes=False)

    assert "error" in snap["network"]
    assert "percent" in snap["cpu"]


def test_module_functions_share_one_monitor(monkeypatch, monitor, fake_source) -> None:
    monkeypatch.setattr(core, "_monitor", monitor)
    fake_source.processes = {10: ("a", 1), 11: ("b", 2)}

    assert hostsampler.get_monitor() is monitor
    assert hostsampler.get_process_count() == 2
    assert hostsampler.get_disk_usage("/nonexistent/path") == (0, 0, False)
    assert len(hostsampler.list_top_processes(1)) == 1


def test_snapshot_network_totals_and_delta_share_one_read(monitor, fake_source) -> None:
    fake_source.auto_cpu = True
    fake_source.net_readings = [
        {"eth0": InterfaceCounters(100, 50)},
        {"eth0": InterfaceCounters(160, 75)},
    ]

    first = monitor.collect_snapshot(include_disk=False, include_processes=False)
    second = monitor.collect_snapshot(include_disk=False, include_processes=False)

    assert first["network"] == {
        "bytes_recv_total": 100,
        "bytes_sent_total": 50,
        "bytes_recv_delta": 0,
        "bytes_sent_delta": 0,
    }
    assert second["network"] == {
        "bytes_recv_total": 160,
        "bytes_sent_total": 75,
        "bytes_recv_delta": 60,
        "bytes_sent_delta": 25,
    }
    assert fake_source.net_readings == []


@pytest.mark.parametrize("timeout", [0.0, -2.0])
def test_non_positive_configured_timeout_falls_back(monkeypatch, fake_source, timeout) -> None:
    monkeypatch.setattr(core, "settings", replace(core.settings, port_probe_timeout_seconds=timeout))
    fake_source.auto_cpu = True

    m = HostMonitor(DeltaSampler(fake_source))

    assert m.probe.default_timeout == DEFAULT_TIMEOUT_SECONDS
    assert m.get_cpu_usage() == 0.0


def test_non_positive_timeout_argument_falls_back(fake_source) -> None:
    m = HostMonitor(DeltaSampler(fake_source), probe_timeout=0)
    assert m.probe.default_timeout == DEFAULT_TIMEOUT_SECONDS


def test_unknown_configured_order_falls_back_to_memory(monkeypatch, fake_source) -> None:
    monkeypatch.setattr(core, "settings", replace(core.settings, process_order="cpu"))
    fake_source.auto_cpu = True
    fake_source.net_readings = [{"eth0": InterfaceCounters(1, 1)}]
    fake_source.processes = {1: ("init", 10), 2: ("big", 1000)}

    m = HostMonitor(DeltaSampler(fake_source))

    assert m.process_order == "memory"
    assert [r.name for r in m.list_top_processes(5)] == ["big", "init"]
    snap = m.collect_snapshot(include_disk=False, top_n=1)
    assert snap["processes"]["order"] == "memory"
    assert snap["processes"]["top"] == [{"pid": 2, "name": "big", "working_set_bytes": 1000}]


def test_unknown_order_argument_falls_back_to_memory(fake_source) -> None:
    assert HostMonitor(DeltaSampler(fake_source), process_order="cpu").process_order == "memory"
