"""Router - Controller/action request dispatch.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from dirtyroute_core.errors import (
    AuthDenied,
    ControllerNotFound,
    NoActionsMatched,
    NoPatternMatch,
    RouteError,
    UnsupportedContentType,
    default_error_handler,
)
from dirtyroute_core.gateway.request import Request, Response
from dirtyroute_core.routing.action import Controller
from dirtyroute_core.routing.params import Params, parse_path
from dirtyroute_core.routing.registry import Registry
from dirtyroute_core.security.auth import AuthHandler, default_auth_handler
from dirtyroute_core.utils.config import Options

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Response, Request, List[str]], Any]


class Router:
    """Request Router.

    Dispatch:
    ┌────────────────────────────────────────────────────────────┐
    │  content type ─▶ parse path ─▶ controller ─▶ action scan   │
    │       │                            │            │          │
    │      422                          404      auth gate       │
    │                                                 │          │
    │                          handler ◀── allowed ───┤          │
    │                    error handler ◀── denied ────┤          │
    │                      next action ◀── denied, ───┘          │
    │                                      silent                │
    └────────────────────────────────────────────────────────────┘

    Every failure reaches ``error_handler`` exactly once; every success
    calls exactly one action handler.

    Usage:
        router = Router(Options(content_types=["text/plain"]))
        users = router.controller("users")

        @users.get("{i}")
        def show(response, request, segments):
            response.write(f"user {segments[0]}")

        router.route(Response(), Request("GET", "/users/42"))
    """

    def __init__(
        self,
        options: Optional[Options] = None,
        error_handler: Optional[ErrorHandler] = None,
        auth_handler: Optional[AuthHandler] = None,
    ):
        self.options = options or Options()
        self.error_handler: ErrorHandler = error_handler or default_error_handler
        self.auth_handler: AuthHandler = auth_handler or default_auth_handler
        self.registry = Registry(unique=self.options.unique_controllers)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_controller(self, controller: Controller) -> "Router":
        """Register a controller."""
        self.registry.register(controller)
        return self

    def controller(self, name: str) -> Controller:
        """Create and register a controller."""
        return self.registry.register(Controller(name))

    def get_controller(self, name: str) -> Controller:
        """Look up a controller; raises ControllerNotFound."""
        return self.registry.get(name)

    def get_controllers(self) -> List[Controller]:
        """Get all controllers in registration order."""
        return self.registry.controllers

    @staticmethod
    def get_params(path: str) -> Params:
        """Parse a request path."""
        return parse_path(path)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def route(self, response: Response, request: Request) -> bool:
        """Dispatch a request.

        Returns:
            True if an action handler ran, False if the error handler did
        """
        content_type = request.content_type or self.options.default_content_type
        if not self.options.accepts(content_type):
            self._fail(response, request, UnsupportedContentType())
            return False

        params = parse_path(request.path)

        try:
            controller = self.registry.get(params.controller)
        except ControllerNotFound as e:
            self._fail(response, request, e)
            return False

        last_error: RouteError = NoActionsMatched()
        for action in controller.actions:
            if not action.matches(params.segments, request.method):
                last_error = NoPatternMatch()
                continue

            token = self.auth_handler(action, request)
            if token.allowed:
                logger.debug(f"{request.method} {request.path} -> {controller.name}.{action.name}")
                action.handler(response, request, list(params.segments))
                return True

            denial = AuthDenied(token.error, status=token.status_code or None)
            if token.handle_error:
                self._fail(response, request, denial)
                return False

            # Silent denial: another action may share the pattern
            last_error = denial

        self._fail(response, request, last_error, status=404)
        return False

    def _fail(
        self,
        response: Response,
        request: Request,
        error: RouteError,
        status: Optional[int] = None,
    ) -> None:
        """Hand a routing failure to the error handler."""
        args = error.as_args()
        if status is not None:
            args[0] = str(status)
        logger.info(f"{request.method} {request.path} failed: {args[0]} {args[1]}")
        self.error_handler(response, request, args)

    def __call__(self, response: Response, request: Request) -> bool:
        return self.route(response, request)

    def get_stats(self) -> Dict[str, Any]:
        """Get router statistics."""
        controllers = self.registry.controllers
        return {
            "controllers": len(controllers),
            "actions": sum(len(c) for c in controllers),
            "content_types": list(self.options.content_types),
        }


__all__ = [
    "Router",
    "ErrorHandler",
]
