"""Pytest configuration.

The project does not require installation as an editable package for
development. In CI/automation environments, however, `pytest` may be executed
without the repository root on `sys.path`, which breaks `import mcap`.

This file ensures the repository root is importable and provides a fake
`requests.Session` that answers from canned responses instead of the network.
"""

from __future__ import annotations

import json
import sys
from http import HTTPStatus
from pathlib import Path
from typing import Any, List

import pytest
import requests


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeSession(requests.Session):
    """Session whose transport returns queued (status, body) pairs.

    Bodies that are not str/bytes are JSON-encoded. Requests are still prepared
    by requests itself, so URLs and headers are exactly what would hit the wire.
    """

    def __init__(self) -> None:
        super().__init__()
        self.trust_env = False
        self._queue: List[tuple] = []
        self.sent: List[requests.PreparedRequest] = []

    def reply(self, status: int, body: Any = b"") -> "FakeSession":
        self._queue.append((status, body))
        return self

    def send(self, request, **kwargs):
        self.sent.append(request)
        if not self._queue:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        status, body = self._queue.pop(0)
        if isinstance(body, bytes):
            content = body
        elif isinstance(body, str):
            content = body.encode("utf-8")
        else:
            content = json.dumps(body).encode("utf-8")

        resp = requests.Response()
        resp.status_code = status
        resp.reason = HTTPStatus(status).phrase
        resp._content = content
        resp.encoding = "utf-8"
        resp.request = request
        resp.url = request.url
        return resp


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
