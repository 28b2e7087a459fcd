"""Request/Response - HTTP request and response objects.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import parse_qsl


@dataclass
class Request:
    """HTTP Request object.

    Represents an incoming HTTP request with all its components.
    ``context`` is free-form per-request storage for auth gates and
    handlers.
    """

    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    remote_addr: str = ""
    protocol: str = "HTTP/1.1"
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        """Get Content-Type header, empty when absent."""
        return self.get_header("Content-Type")

    def json(self) -> Any:
        """Parse body as JSON."""
        return json.loads(self.body.decode())

    def text(self) -> str:
        """Get body as text."""
        return self.body.decode()

    def get_header(self, name: str, default: str = "") -> str:
        """Get header value (case-insensitive)."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return default

    @classmethod
    def from_environ(cls, environ: Dict[str, Any]) -> "Request":
        """Build a request from a WSGI environ."""
        headers = {}
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                headers[key[5:].replace("_", "-").title()] = value
        # CGI keeps these two outside the HTTP_ namespace
        if environ.get("CONTENT_TYPE"):
            headers["Content-Type"] = environ["CONTENT_TYPE"]
        if environ.get("CONTENT_LENGTH"):
            headers["Content-Length"] = environ["CONTENT_LENGTH"]

        body = b""
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        if length > 0 and environ.get("wsgi.input") is not None:
            body = environ["wsgi.input"].read(length)

        # PEP 3333 hands over the raw path bytes decoded as latin-1
        path = environ.get("PATH_INFO", "/").encode("latin-1").decode("utf-8", "replace")

        return cls(
            method=environ.get("REQUEST_METHOD", "GET"),
            path=path or "/",
            headers=headers,
            query=dict(parse_qsl(environ.get("QUERY_STRING", ""))),
            body=body,
            remote_addr=environ.get("REMOTE_ADDR", ""),
            protocol=environ.get("SERVER_PROTOCOL", "HTTP/1.1"),
        )


@dataclass
class Response:
    """HTTP Response sink.

    Handlers and error handlers write into it; the host transport
    sends it once dispatch returns.
    """

    status: int = 200
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    STATUS_MESSAGES = {
        200: "OK",
        201: "Created",
        204: "No Content",
        301: "Moved Permanently",
        302: "Found",
        304: "Not Modified",
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        422: "Unprocessable Entity",
        429: "Too Many Requests",
        500: "Internal Server Error",
        503: "Service Unavailable",
    }

    @property
    def status_message(self) -> str:
        """Get status message."""
        return self.STATUS_MESSAGES.get(self.status, "Unknown")

    @property
    def status_line(self) -> str:
        """Status in WSGI form, e.g. ``"404 Not Found"``."""
        return f"{self.status} {self.status_message}"

    def write(self, data: Union[str, bytes]) -> int:
        """Append to the body; returns the number of bytes written."""
        if isinstance(data, str):
            data = data.encode()
        self.body += data
        return len(data)

    def set_header(self, name: str, value: str) -> "Response":
        """Set header value."""
        self.headers[name] = value
        return self

    def header_items(self) -> List[Tuple[str, str]]:
        """Headers as a list of pairs, with Content-Length filled in."""
        headers = dict(self.headers)
        headers.setdefault("Content-Type", "text/plain")
        headers["Content-Length"] = str(len(self.body))
        return list(headers.items())

    def send_json(self, data: Any, status: Optional[int] = None) -> None:
        """Write a JSON body."""
        if status is not None:
            self.status = status
        self.set_header("Content-Type", "application/json")
        self.write(json.dumps(data))

    def send_text(self, text: str, status: Optional[int] = None) -> None:
        """Write a plain-text body."""
        if status is not None:
            self.status = status
        self.set_header("Content-Type", "text/plain")
        self.write(text)


__all__ = [
    "Request",
    "Response",
]
