"""DirtyRoute - Controller/action request routing.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

DirtyRoute maps an HTTP request (method + path + content type) to one
handler among many, using a small pattern language:

    /users/42/edit
      │     │   └── segment "edit"  ─ matches Literal "edit"
      │     └────── segment "42"    ─ matches {i} (int) or {i||s} (any)
      └──────────── controller "users"

Token source text:
    {i}       integer segment
    {s}       any non-integer segment
    {i||s}    any segment
    {/}       controller root (no segments)
    other     literal, case-sensitive

Request Flow:
1. Content type checked against the allow-list (422 on reject)
2. Path split into controller name and segments
3. Controller looked up by name (404 if missing)
4. Actions scanned in registration order for a pattern + method match
5. Auth gate consulted for the first match; denial either reports an
   error or falls through to the next matching action
6. Handler called with (response, request, segments)

Usage:
    from dirtyroute_core import Router, Options, Request, Response

    router = Router(Options(content_types=["text/plain"]))
    users = router.controller("users")

    @users.get("{/}")
    def index(response, request, segments):
        response.write("all users")

    @users.get("{i}/edit")
    def edit(response, request, segments):
        response.write(f"editing {segments[0]}")

    response = Response()
    router.route(response, Request("GET", "/users/42/edit"))
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Routing
from dirtyroute_core.routing.tokens import (
    INDEX,
    PatternToken,
    Literal,
    IntArg,
    StringArg,
    AnyArg,
    IndexMarker,
)
from dirtyroute_core.routing.action import Action, Controller
from dirtyroute_core.routing.params import Params, parse_path
from dirtyroute_core.routing.registry import Registry
from dirtyroute_core.routing.router import Router

# Gateway
from dirtyroute_core.gateway.request import Request, Response
from dirtyroute_core.gateway.server import WSGIApp, make_app, serve

# Security
from dirtyroute_core.security.auth import (
    AuthToken,
    default_auth_handler,
    APIKeyAuth,
    BearerTokenAuth,
    PrivateActionGate,
)

# Errors
from dirtyroute_core.errors import (
    RouteError,
    UnsupportedContentType,
    ControllerNotFound,
    NoPatternMatch,
    NoActionsMatched,
    AuthDenied,
    DuplicateController,
    default_error_handler,
)

# Utils
from dirtyroute_core.utils.config import Options, load_options

__all__ = [
    # Version
    "__version__",
    # Routing
    "INDEX",
    "PatternToken",
    "Literal",
    "IntArg",
    "StringArg",
    "AnyArg",
    "IndexMarker",
    "Action",
    "Controller",
    "Params",
    "parse_path",
    "Registry",
    "Router",
    # Gateway
    "Request",
    "Response",
    "WSGIApp",
    "make_app",
    "serve",
    # Security
    "AuthToken",
    "default_auth_handler",
    "APIKeyAuth",
    "BearerTokenAuth",
    "PrivateActionGate",
    # Errors
    "RouteError",
    "UnsupportedContentType",
    "ControllerNotFound",
    "NoPatternMatch",
    "NoActionsMatched",
    "AuthDenied",
    "DuplicateController",
    "default_error_handler",
    # Utils
    "Options",
    "load_options",
]
