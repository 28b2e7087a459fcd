"""Gateway Server - WSGI adapter for a Router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Optional
from wsgiref.simple_server import WSGIServer, make_server

from dirtyroute_core.gateway.request import Request, Response
from dirtyroute_core.utils.config import Options

if TYPE_CHECKING:
    from dirtyroute_core.routing.router import Router

logger = logging.getLogger(__name__)


class WSGIApp:
    """WSGI application dispatching every request through a Router.

    A fresh Response is created per request, so concurrent requests
    share nothing but the read-only registry.
    """

    def __init__(self, router: "Router"):
        self.router = router

    def __call__(
        self,
        environ: Dict[str, Any],
        start_response: Callable[..., Any],
    ) -> Iterable[bytes]:
        request = Request.from_environ(environ)
        response = Response()

        try:
            self.router.route(response, request)
        except Exception:
            logger.exception(f"Handler failed for {request.method} {request.path}")
            response = Response()
            response.send_text("Internal Server Error", status=500)

        start_response(response.status_line, response.header_items())
        if request.method == "HEAD":
            return [b""]
        return [response.body]


def make_app(router: "Router") -> WSGIApp:
    """Wrap a router as a WSGI application."""
    return WSGIApp(router)


def configure_logging(options: Options) -> None:
    """Apply ``options.log_level`` to the package loggers."""
    level = options.log_level.upper()
    logging.basicConfig(level=level)
    logging.getLogger("dirtyroute_core").setLevel(level)


def serve(
    router: "Router",
    host: Optional[str] = None,
    port: Optional[int] = None,
    options: Optional[Options] = None,
) -> WSGIServer:
    """Serve a router with the stdlib WSGI server until interrupted.

    Args:
        router: Router to dispatch into
        host: Override host
        port: Override port
        options: Source of default host/port and log level
            (router.options if omitted)
    """
    options = options or router.options
    configure_logging(options)
    host = host or options.host
    port = port if port is not None else options.port

    server = make_server(host, port, WSGIApp(router))
    logger.info(f"Serving on {host}:{server.server_port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
    return server


__all__ = [
    "WSGIApp",
    "make_app",
    "configure_logging",
    "serve",
]
