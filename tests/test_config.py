from __future__ import annotations

from hostsampler.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in ("COUNTER_SOURCE", "PORT_PROBE_TIMEOUT_SECONDS", "PROCESS_ORDER"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.counter_source == "auto"
    assert s.port_probe_timeout_seconds == 3.0
    assert s.process_order == "memory"


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("COUNTER_SOURCE", "psutil")
    monkeypatch.setenv("PORT_PROBE_TIMEOUT_SECONDS", "0.75")
    monkeypatch.setenv("TOP_PROCESSES_DEFAULT", "25")
    monkeypatch.setenv("INCLUDE_HOSTNAME", "false")
    s = Settings()
    assert s.counter_source == "psutil"
    assert s.port_probe_timeout_seconds == 0.75
    assert s.top_processes_default == 25
    assert s.include_hostname is False


def test_invalid_numbers_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("LIST_DIRECTORY_MAX_FILES", "lots")
    monkeypatch.setenv("PORT_PROBE_TIMEOUT_SECONDS", "")
    s = Settings()
    assert s.list_directory_max_files == 100
    assert s.port_probe_timeout_seconds == 3.0


def test_non_positive_probe_timeout_falls_back(monkeypatch) -> None:
    for raw in ("0", "-1.5"):
        monkeypatch.setenv("PORT_PROBE_TIMEOUT_SECONDS", raw)
        assert Settings().port_probe_timeout_seconds == 3.0
