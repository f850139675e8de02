from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional, TypeVar

import requests

from mcap.errors import (
    DEFAULT_ERROR_MESSAGE,
    ApiErrorResponse,
    DecodeError,
    ErrorResponse,
    ServerErrorResponse,
    TransportError,
)
from mcap.query import encode_query

T = TypeVar("T")

log = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def build_url(base_url: str, endpoint: str, query: str = "") -> str:
    """Join base URL, endpoint path and query into a new string.

    The base URL is never modified, so one client can serve concurrent callers.
    """
    url = f"{base_url.rstrip('/')}/{endpoint.strip('/')}"
    if query:
        url = f"{url}?{query}"
    return url


def request_headers(query: str) -> dict:
    return {
        "Content-Type": FORM_CONTENT_TYPE,
        "Content-Length": str(len(query)),
    }


def prepare_get(session: requests.Session, url: str, query: str) -> requests.PreparedRequest:
    """Prepare the GET with form headers.

    The query length is kept as ``content_length`` on the prepared request. A GET
    carries no body, so no Content-Length header goes on the wire.
    """
    headers = request_headers(query)
    content_length = int(headers.pop("Content-Length"))
    prepared = session.prepare_request(requests.Request("GET", url, headers=headers))
    prepared.content_length = content_length
    return prepared


def _status_line(resp: requests.Response) -> str:
    return f"{resp.status_code} {resp.reason or ''}".strip()


def _error_from_payload(payload: dict, **common: Any) -> ErrorResponse:
    if "code" in payload:
        try:
            code = int(payload.get("code") or 0)
        except (TypeError, ValueError):
            code = 0
        return ApiErrorResponse(
            code=code,
            msg=str(payload.get("msg") or ""),
            server_message=str(payload.get("message") or ""),
            raw=payload,
            **common,
        )
    timestamp = payload.get("timestamp")
    return ServerErrorResponse(
        message=str(payload.get("message") or ""),
        error=str(payload.get("error") or DEFAULT_ERROR_MESSAGE),
        path=str(payload.get("path") or ""),
        timestamp=timestamp if isinstance(timestamp, int) else None,
        raw=payload,
        **common,
    )


def check_response(resp: requests.Response) -> None:
    """Raise an ErrorResponse for any status outside 200-299."""
    if 200 <= resp.status_code <= 299:
        return

    req = resp.request
    common = {
        "status": resp.status_code,
        "method": (req.method if req is not None else None) or "GET",
        "url": (req.url if req is not None else None) or resp.url,
        "status_line": _status_line(resp),
    }

    body = resp.text or ""
    if not body:
        raise ServerErrorResponse(message=DEFAULT_ERROR_MESSAGE, **common)

    try:
        payload = json.loads(body)
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        raise _error_from_payload(payload, **common)
    raise ServerErrorResponse(message=body, **common)


def do_request(
    session: requests.Session,
    base_url: str,
    endpoint: str,
    values: Any,
    decode: Callable[[Any], T],
) -> T:
    query = encode_query(values)
    url = build_url(base_url, endpoint, query)
    log.debug("GET %s (query length %d)", url, len(query))

    try:
        prepared = prepare_get(session, url, query)
        env = session.merge_environment_settings(prepared.url, {}, None, None, None)
        resp = session.send(prepared, **env)
    except requests.RequestException as exc:
        raise TransportError(f"GET {url}: {exc}") from exc
    log.debug("GET %s -> %s", url, _status_line(resp))

    try:
        check_response(resp)
    except ErrorResponse as exc:
        log.warning("Request failed: %s", exc)
        raise

    try:
        payload = resp.json()
    except ValueError as exc:
        raise DecodeError(f"GET {url}: response is not valid JSON: {exc}") from exc

    try:
        return decode(payload)
    except (KeyError, TypeError, ValueError, OverflowError) as exc:
        raise DecodeError(f"GET {url}: unexpected {endpoint} payload: {exc!r}") from exc


def default_session(user_agent: Optional[str] = None) -> requests.Session:
    session = requests.Session()
    if user_agent:
        session.headers["User-Agent"] = user_agent
    return session
