"""Tests for the stateless metrics query engine."""

from __future__ import annotations

import pytest

from hostsampler.errors import CounterUnavailable, DirectoryUnavailable, DiskUnavailable
from hostsampler.models import InterfaceCounters, MemoryStatus
from hostsampler.queries import MetricsQueryEngine


def test_memory_status_passes_through(fake_source) -> None:
    status = MetricsQueryEngine(fake_source).get_memory_status()
    assert status.total_bytes == 8 * 1024**3
    assert status.available_bytes <= status.total_bytes


def test_disk_status_for_existing_path(fake_source, tmp_path) -> None:
    status = MetricsQueryEngine(fake_source).get_disk_status(str(tmp_path))
    assert status.total_bytes > 0
    assert 0 <= status.free_bytes <= status.total_bytes


def test_disk_status_for_missing_path(fake_source) -> None:
    with pytest.raises(DiskUnavailable) as excinfo:
        MetricsQueryEngine(fake_source).get_disk_status("/nonexistent/path")
    assert excinfo.value.path == "/nonexistent/path"
    assert isinstance(excinfo.value, OSError)


def test_process_count(fake_source) -> None:
    fake_source.processes = {1: ("init", 0), 2: ("kthreadd", 0), 99: ("sh", 10)}
    assert MetricsQueryEngine(fake_source).get_process_count() == 3


class TestListDirectory:
    @pytest.fixture
    def populated(self, tmp_path):
        for name in ("a.txt", "b.log", "c"):
            (tmp_path / name).write_text("x")
        (tmp_path / "sub").mkdir()
        return tmp_path

    def test_lists_all_entries(self, fake_source, populated) -> None:
        names = MetricsQueryEngine(fake_source).list_directory(str(populated), 100)
        assert sorted(names) == ["a.txt", "b.log", "c", "sub"]
        assert "." not in names and ".." not in names

    def test_truncates_to_max_files(self, fake_source, populated) -> None:
        names = MetricsQueryEngine(fake_source).list_directory(str(populated), 2)
        assert len(names) == 2

    def test_zero_max_files(self, fake_source, populated) -> None:
        assert MetricsQueryEngine(fake_source).list_directory(str(populated), 0) == []

    def test_negative_max_files(self, fake_source, populated) -> None:
        with pytest.raises(ValueError):
            MetricsQueryEngine(fake_source).list_directory(str(populated), -1)

    def test_missing_directory(self, fake_source, tmp_path) -> None:
        with pytest.raises(DirectoryUnavailable):
            MetricsQueryEngine(fake_source).list_directory(str(tmp_path / "missing"), 10)

    def test_file_is_not_a_directory(self, fake_source, populated) -> None:
        with pytest.raises(DirectoryUnavailable):
            MetricsQueryEngine(fake_source).list_directory(str(populated / "a.txt"), 10)


def test_network_totals_exclude_loopback(fake_source) -> None:
    fake_source.net_readings = [
        {"eth0": InterfaceCounters(100, 50), "lo": InterfaceCounters(999, 999)},
    ]
    totals = MetricsQueryEngine(fake_source).get_network_totals()
    assert totals == InterfaceCounters(rx_bytes=100, tx_bytes=50)


def test_network_totals_unavailable(fake_source) -> None:
    fake_source.fail_net = True
    with pytest.raises(CounterUnavailable):
        MetricsQueryEngine(fake_source).get_network_totals()


def test_system_info_names_the_source(fake_source) -> None:
    info = MetricsQueryEngine(fake_source).get_system_info()
    assert info["counter_source"] == "fake"
    assert {"os", "release", "architecture"} <= set(info)


def test_memory_status_clamps_available() -> None:
    status = MemoryStatus(total_bytes=100, available_bytes=250)
    assert status.available_bytes == 100
    assert status.percent_used == 0.0
