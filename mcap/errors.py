"""Error types raised by the market-cap client.

Every error derives from :class:`McapError`. Non-2xx responses surface as one of
two :class:`ErrorResponse` variants, depending on which error format the server
used:

  - ``ServerErrorResponse``: ``{timestamp, status, error, message, path}``
  - ``ApiErrorResponse``:    ``{code, msg}``
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

DEFAULT_ERROR_MESSAGE = "something went wrong"


class McapError(Exception):
    """Base class for all client errors."""


class TransportError(McapError):
    """Network or connection failure before a response was received."""


class DecodeError(McapError):
    """Response body is not valid JSON or does not match the expected shape."""


class ParseError(McapError):
    """A candle row field could not be converted to its numeric type."""


class ErrorResponse(McapError):
    """HTTP status error (non-2xx response)."""

    def __init__(
        self,
        *,
        status: int,
        method: str,
        url: str,
        status_line: str,
        message: str = DEFAULT_ERROR_MESSAGE,
        raw: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._message = message
        self.status = status
        self.method = method
        self.url = url
        self.status_line = status_line
        self.raw = raw
        super().__init__(self.__str__())

    @property
    def message(self) -> str:
        return self._message

    def __str__(self) -> str:
        return f"{self.method} {self.url}: [{self.status_line}] {self.message}"


class ServerErrorResponse(ErrorResponse):
    def __init__(
        self,
        *,
        status: int,
        method: str,
        url: str,
        status_line: str,
        message: str = "",
        error: str = DEFAULT_ERROR_MESSAGE,
        path: str = "",
        timestamp: Optional[int] = None,
        raw: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.error = error
        self.path = path
        self.timestamp = timestamp
        super().__init__(
            status=status, method=method, url=url, status_line=status_line, message=message, raw=raw
        )


class ApiErrorResponse(ErrorResponse):
    def __init__(
        self,
        *,
        status: int,
        method: str,
        url: str,
        status_line: str,
        code: int,
        msg: str = "",
        server_message: str = "",
        raw: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.code = code
        self.msg = msg
        self.server_message = server_message
        super().__init__(status=status, method=method, url=url, status_line=status_line, raw=raw)

    @property
    def message(self) -> str:
        # Negative codes carry their text in `msg`.
        if self.code < 0:
            return self.msg
        return self.server_message
