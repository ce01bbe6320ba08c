from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import settings
from .core import HostMonitor, get_monitor
from .errors import AppError
from .http import (
    ApiResponse,
    float_param,
    int_param,
    json_error,
    json_ok,
    query_params,
    require_param,
)
from .inventory import ORDERS
from .logging import configure_logging

log = logging.getLogger(__name__)


def _get_case_insensitive(headers: Mapping[str, str] | None, key: str) -> str | None:
    if not headers:
        return None
    if key in headers:
        return headers[key]
    lower = key.lower()
    for k, v in headers.items():
        if k.lower() == lower:
            return v
    return None


def _extract_request_id(event: Mapping[str, Any], context: Any) -> str:
    """Extract a correlation id for logs + responses."""
    rc = event.get("requestContext") or {}
    if isinstance(rc, dict):
        rid = rc.get("requestId")
        if isinstance(rid, str) and rid:
            return rid

    headers = event.get("headers")
    if isinstance(headers, dict):
        hdr = _get_case_insensitive(headers, "x-request-id")
        if hdr:
            return str(hdr)

    aws_rid = getattr(context, "aws_request_id", None)
    if isinstance(aws_rid, str) and aws_rid:
        return aws_rid

    return "unknown"


def _extract_method_path(event: Mapping[str, Any]) -> tuple[str, str]:
    """Support API Gateway v2/v1 shapes (best-effort)."""
    rc = event.get("requestContext")
    if isinstance(rc, dict):
        http = rc.get("http")
        if isinstance(http, dict):
            method = http.get("method")
            path = http.get("path")
            if isinstance(method, str) and isinstance(path, str):
                return method.upper(), path

    method = event.get("httpMethod")
    path = event.get("path")
    if isinstance(method, str) and isinstance(path, str):
        return method.upper(), path

    raw_path = event.get("rawPath")
    if isinstance(raw_path, str):
        return "GET", raw_path

    raise AppError(
        status_code=400,
        code="bad_request",
        message="Could not determine HTTP method/path from event.",
    )


def _query(monitor: HostMonitor, path: str, params: Mapping[str, str]) -> dict[str, Any]:
    if path == "/v1/snapshot":
        return {"snapshot": monitor.collect_snapshot()}

    if path == "/v1/cpu":
        return {"percent": round(monitor.get_cpu_usage(), 2)}

    if path == "/v1/memory":
        return {"total": monitor.get_total_memory(), "available": monitor.get_available_memory()}

    if path == "/v1/disk":
        disk_path = require_param(params, "path")
        total, free, ok = monitor.get_disk_usage(disk_path)
        return {"path": disk_path, "ok": ok, "total": total, "free": free}

    if path == "/v1/processes":
        limit = int_param(params, "limit", settings.top_processes_default)
        order = params.get("order") or monitor.process_order
        if order not in ORDERS:
            raise AppError(
                status_code=400,
                code="bad_request",
                message=f"Query parameter order must be one of: {', '.join(ORDERS)}.",
            )
        records = monitor.list_top_processes(limit, order=order)
        return {"order": order, "processes": [r.to_dict() for r in records]}

    if path == "/v1/directory":
        dir_path = require_param(params, "path")
        limit = int_param(params, "limit", settings.list_directory_max_files)
        names, ok = monitor.list_directory(dir_path, limit)
        return {"path": dir_path, "ok": ok, "entries": names}

    if path == "/v1/port":
        host = require_param(params, "host")
        require_param(params, "port")
        port = int_param(params, "port", 0, minimum=1)
        if port > 65535:
            raise AppError(status_code=400, code="bad_request", message="Port out of range.")
        timeout = float_param(params, "timeout")
        return monitor.probe.probe(host, port, timeout).to_dict()

    if path == "/v1/network":
        received, sent, ok = monitor.get_network_stats()
        return {"ok": ok, "bytes_received": received, "bytes_sent": sent}

    raise AppError(status_code=404, code="not_found", message="No route matches the request.")


def _route(method: str, path: str, params: Mapping[str, str], *, request_id: str) -> ApiResponse:
    if method != "GET":
        raise AppError(status_code=405, code="method_not_allowed", message="Only GET is supported.")

    if path == "/healthz":
        return json_ok({"ok": True}, request_id=request_id)

    return json_ok(_query(get_monitor(), path, params), request_id=request_id)


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda entrypoint (Lambda proxy response)."""
    configure_logging()
    request_id = _extract_request_id(event, context)

    try:
        method, path = _extract_method_path(event)
        log.info("request", extra={"request_id": request_id, "method": method, "path": path})

        resp = _route(method, path, query_params(event), request_id=request_id)
        return resp.to_lambda_proxy()

    except AppError as e:
        log.warning("handled_error", extra={"request_id": request_id, "code": e.code})
        return json_error(e.status_code, e.code, e.message, request_id=request_id).to_lambda_proxy()

    except Exception:
        log.exception("unhandled_error", extra={"request_id": request_id})
        return json_error(
            500, "internal_error", "Unexpected server error.", request_id=request_id
        ).to_lambda_proxy()
