"""Errors - Routing error kinds and the default error handler.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from dirtyroute_core.gateway.request import Request, Response

logger = logging.getLogger(__name__)


class RouteError(Exception):
    """Base class for routing failures.

    Every routing failure is reported to the error handler as a
    ``[status, message]`` pair; nothing here is fatal to the process.
    """

    status: int = 500
    message: str = "routing error"

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None):
        self.message = message or self.message
        if status is not None:
            self.status = status
        super().__init__(self.message)

    def as_args(self) -> List[str]:
        """Arguments passed to an error handler."""
        return [str(self.status), self.message]


class UnsupportedContentType(RouteError):
    """Request content type is not in the allow-list."""

    status = 422
    message = "unsupported content type"


class ControllerNotFound(RouteError):
    """No controller registered under the requested name."""

    status = 404
    message = "controller not found"


class NoPatternMatch(RouteError):
    """An action's pattern or method did not match the request."""

    status = 404
    message = "pattern did not match"


class NoActionsMatched(RouteError):
    """The controller has no actions to try."""

    status = 404
    message = "no actions matched"


class AuthDenied(RouteError):
    """The auth gate refused a matched action."""

    status = 403
    message = "access denied"


class DuplicateController(ValueError):
    """A controller name was registered twice with uniqueness enforced."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"controller already registered: {name!r}")


def default_error_handler(response: "Response", request: "Request", args: List[Any]) -> None:
    """Write ``status`` and ``message`` as a plain-text body."""
    status, message = str(args[0]), str(args[1])
    try:
        response.status = int(status)
    except ValueError:
        response.status = 500
    response.set_header("Content-Type", "text/plain")
    response.write(f"Error: STATUS {status} : ERROR {message}")


__all__ = [
    "RouteError",
    "UnsupportedContentType",
    "ControllerNotFound",
    "NoPatternMatch",
    "NoActionsMatched",
    "AuthDenied",
    "DuplicateController",
    "default_error_handler",
]
