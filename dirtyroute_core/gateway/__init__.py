"""Gateway module - Request/response objects and WSGI hosting."""

from dirtyroute_core.gateway.request import Request, Response
from dirtyroute_core.gateway.server import WSGIApp, make_app, serve

__all__ = [
    "Request",
    "Response",
    "WSGIApp",
    "make_app",
    "serve",
]
