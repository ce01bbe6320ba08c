from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import AppError

JsonDict = dict[str, Any]


@dataclass(slots=True)
class ApiResponse:
    status_code: int
    body: JsonDict | str
    headers: dict[str, str] = field(default_factory=dict)
    is_base64_encoded: bool = False

    def to_lambda_proxy(self) -> dict[str, Any]:
        """Return an AWS Lambda Proxy Integration compatible dict."""
        headers = {"content-type": "application/json; charset=utf-8", **self.headers}
        if isinstance(self.body, str):
            body_str = self.body
        else:
            body_str = json.dumps(self.body, ensure_ascii=False, separators=(",", ":"))
        return {
            "statusCode": int(self.status_code),
            "headers": headers,
            "body": body_str,
            "isBase64Encoded": bool(self.is_base64_encoded),
        }


def _request_headers(request_id: str | None) -> dict[str, str]:
    return {"x-request-id": request_id} if request_id else {}


def json_error(
    status_code: int, code: str, message: str, *, request_id: str | None = None
) -> ApiResponse:
    payload: JsonDict = {"error": {"code": code, "message": message}}
    return ApiResponse(status_code=status_code, body=payload, headers=_request_headers(request_id))


def json_ok(payload: Mapping[str, Any], *, request_id: str | None = None) -> ApiResponse:
    return ApiResponse(status_code=200, body=dict(payload), headers=_request_headers(request_id))


# ── query string parameters ─────────────────────────────────────────


def query_params(event: Mapping[str, Any]) -> dict[str, str]:
    params = event.get("queryStringParameters")
    if not isinstance(params, dict):
        return {}
    return {str(k): str(v) for k, v in params.items() if v is not None}


def _bad_request(message: str) -> AppError:
    return AppError(status_code=400, code="bad_request", message=message)


def require_param(params: Mapping[str, str], name: str) -> str:
    value = params.get(name)
    if not value:
        raise _bad_request(f"Missing query parameter: {name}.")
    return value


def int_param(params: Mapping[str, str], name: str, default: int, *, minimum: int = 0) -> int:
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise _bad_request(f"Query parameter {name} must be an integer.") from None
    if value < minimum:
        raise _bad_request(f"Query parameter {name} must be >= {minimum}.")
    return value


def float_param(params: Mapping[str, str], name: str) -> float | None:
    raw = params.get(name)
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise _bad_request(f"Query parameter {name} must be a number.") from None
    if value <= 0:
        raise _bad_request(f"Query parameter {name} must be > 0.")
    return value
