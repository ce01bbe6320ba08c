"""Single-attempt TCP reachability probe."""

from __future__ import annotations

import logging
import socket
import time

from .models import PortProbeResult

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 3.0


class PortProbe:
    """Connect once to ``host:port`` over IPv4 and report whether it succeeded.

    Refused, unreachable, unresolvable and timed-out targets all come back as
    ``False``; so does a failure to create the socket. Nothing is retried.

    The timeout is one budget shared by name resolution and the connect:
    whatever the resolver spends is taken off the connect wait, and a lookup
    that uses up the whole budget reports ``False`` without connecting. The
    system resolver itself cannot be interrupted, so a stalled lookup still
    holds the call until it returns. Pass a numeric address to avoid it.
    """

    def __init__(self, default_timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        if default_timeout <= 0:
            raise ValueError("default_timeout must be > 0")
        self.default_timeout = default_timeout

    def check_port(self, host: str, port: int, timeout: float | None = None) -> bool:
        wait = self.default_timeout if timeout is None else timeout
        if wait <= 0:
            raise ValueError("timeout must be > 0")
        if not 0 < port <= 65535:
            log.debug("port out of range", extra={"host": host, "port": port})
            return False

        started = time.monotonic()
        try:
            infos = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_STREAM)
        except (OSError, UnicodeError) as e:
            log.debug("resolution failed: %s", e, extra={"host": host, "port": port})
            return False
        if not infos:
            return False
        address = infos[0][4]

        remaining = wait - (time.monotonic() - started)
        if remaining <= 0:
            log.debug("resolution used the whole timeout", extra={"host": host, "port": port})
            return False

        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                sock.settimeout(remaining)
                sock.connect(address)
        except OSError as e:
            # ECONNREFUSED, EHOSTUNREACH, timeout, EMFILE on socket()
            log.debug("connect failed: %s", e, extra={"host": host, "port": port})
            return False
        return True

    def probe(self, host: str, port: int, timeout: float | None = None) -> PortProbeResult:
        return PortProbeResult(host=host, port=port, reachable=self.check_port(host, port, timeout))
