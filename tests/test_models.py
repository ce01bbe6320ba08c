"""Tests for data model invariants."""

from __future__ import annotations

import pytest

from hostsampler.models import DiskStatus, MemoryStatus, PartitionStatus, ProcessRecord


@pytest.mark.parametrize(
    ("total", "available"), [(100, 40), (100, 100), (100, 500), (0, 10), (100, -5)]
)
def test_memory_available_never_exceeds_total(total, available) -> None:
    status = MemoryStatus(total_bytes=total, available_bytes=available)
    assert 0 <= status.available_bytes <= status.total_bytes


def test_disk_free_never_exceeds_total() -> None:
    status = DiskStatus(path="/", total_bytes=1000, free_bytes=4000)
    assert status.free_bytes == 1000
    assert status.percent_used == 0.0


def test_disk_percent_used() -> None:
    assert DiskStatus(path="/", total_bytes=200, free_bytes=50).percent_used == 75.0
    assert DiskStatus(path="/", total_bytes=0, free_bytes=0).percent_used == 0.0


def test_records_are_immutable() -> None:
    record = ProcessRecord(pid=1, name="init", working_set_bytes=0)
    with pytest.raises(AttributeError):
        record.name = "other"  # type: ignore[misc]


def test_partition_to_dict() -> None:
    usage = DiskStatus(path="/boot", total_bytes=400, free_bytes=100)
    part = PartitionStatus(device="/dev/sda1", mountpoint="/boot", fstype="ext4", usage=usage)
    assert part.to_dict() == {
        "device": "/dev/sda1",
        "mountpoint": "/boot",
        "fstype": "ext4",
        "total": 400,
        "free": 100,
        "percent": 75.0,
    }
