"""Gateway tests."""

import io
import logging

import pytest
from dirtyroute_core.gateway.request import Request, Response
from dirtyroute_core.gateway import server as server_module
from dirtyroute_core.gateway.server import WSGIApp, configure_logging, make_app, serve
from dirtyroute_core.routing.router import Router
from dirtyroute_core.utils.config import Options


def call(app, method, path, content_type="", body=b"", query=""):
    environ = {
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "QUERY_STRING": query,
        "CONTENT_TYPE": content_type,
        "CONTENT_LENGTH": str(len(body)) if body else "",
        "wsgi.input": io.BytesIO(body),
        "HTTP_X_API_KEY": "k",
    }
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    result = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], result


@pytest.fixture
def app():
    router = Router(Options(content_types=["text/plain", "application/json"]))
    users = router.controller("users")

    @users.get("{i}")
    def show(response, request, segments):
        response.send_json({"id": int(segments[0])})

    @users.post("{/}")
    def create(response, request, segments):
        response.send_json(request.json(), status=201)

    @users.get("boom")
    def boom(response, request, segments):
        raise RuntimeError("handler bug")

    return make_app(router)


class TestRequest:
    """Test Request class."""

    def test_create_request(self):
        """Test request creation."""
        request = Request(
            method="GET",
            path="/api/users",
            headers={"Content-Type": "application/json"},
        )
        assert request.method == "GET"
        assert request.path == "/api/users"

    def test_header_lookup_case_insensitive(self):
        """Header names are case-insensitive."""
        request = Request(method="GET", path="/", headers={"content-TYPE": "text/plain"})
        assert request.content_type == "text/plain"
        assert request.get_header("X-Missing", "dflt") == "dflt"

    def test_from_environ(self):
        """Test building a request from a WSGI environ."""
        request = Request.from_environ(
            {
                "REQUEST_METHOD": "POST",
                "PATH_INFO": "/users",
                "QUERY_STRING": "page=2",
                "CONTENT_TYPE": "application/json",
                "CONTENT_LENGTH": "2",
                "HTTP_X_API_KEY": "k",
                "wsgi.input": io.BytesIO(b"{}"),
            }
        )
        assert request.content_type == "application/json"
        assert request.get_header("X-Api-Key") == "k"
        assert request.query == {"page": "2"}
        assert request.json() == {}


class TestResponse:
    """Test Response class."""

    def test_write(self):
        """Writes append to the body."""
        response = Response()
        assert response.write("ab") == 2
        response.write(b"c")
        assert response.body == b"abc"

    def test_status_line(self):
        """Test WSGI status line."""
        assert Response(status=422).status_line == "422 Unprocessable Entity"

    def test_header_items(self):
        """Content-Length is computed from the body."""
        response = Response(body=b"hello")
        headers = dict(response.header_items())
        assert headers["Content-Length"] == "5"
        assert headers["Content-Type"] == "text/plain"


class TestWSGIApp:
    """Test WSGI hosting."""

    def test_success(self, app):
        """A matched action writes the response."""
        status, headers, body = call(app, "GET", "/users/42")
        assert status == "200 OK"
        assert headers["Content-Type"] == "application/json"
        assert body == b'{"id": 42}'

    def test_post_body(self, app):
        """Handlers can read the request body."""
        status, _, body = call(app, "POST", "/users/", "application/json", b'{"name": "a"}')
        assert status == "201 Created"
        assert body == b'{"name": "a"}'

    def test_routing_error(self, app):
        """Routing failures come back through the error handler."""
        status, _, body = call(app, "GET", "/posts/1")
        assert status == "404 Not Found"
        assert body == b"Error: STATUS 404 : ERROR controller not found"

    def test_unsupported_content_type(self, app):
        """Test content-type rejection."""
        status, _, _ = call(app, "GET", "/users/1", "text/html")
        assert status == "422 Unprocessable Entity"

    def test_handler_exception(self, app):
        """Handler crashes become 500 responses."""
        status, _, body = call(app, "GET", "/users/boom")
        assert status == "500 Internal Server Error"
        assert body == b"Internal Server Error"

    def test_head_has_no_body(self):
        """HEAD responses keep headers but drop the body."""
        router = Router(Options(content_types=["text/plain"]))
        router.controller("users").action("{/}", method="HEAD")(lambda w, r, s: w.write("x"))
        status, headers, body = call(WSGIApp(router), "HEAD", "/users")
        assert status == "200 OK"
        assert headers["Content-Length"] == "1"
        assert body == b""

    def test_non_ascii_literal(self):
        """UTF-8 paths arriving latin-1 decoded still match literals."""
        router = Router(Options(content_types=["text/plain"]))
        seen = []
        router.controller("users").get("café")(lambda w, r, s: seen.append(s))
        wsgi_path = "/users/café".encode("utf-8").decode("latin-1")

        status, _, _ = call(WSGIApp(router), "GET", wsgi_path)

        assert status == "200 OK"
        assert seen == [["café"]]

    def test_from_environ_decodes_path(self):
        """Request.path holds the UTF-8 decoded path."""
        request = Request.from_environ({"PATH_INFO": "/ü/ß".encode("utf-8").decode("latin-1")})
        assert request.path == "/ü/ß"


class FakeServer:
    """Stand-in for the WSGI server that returns immediately."""

    server_port = 8123

    def __init__(self):
        self.closed = False

    def serve_forever(self):
        raise KeyboardInterrupt

    def server_close(self):
        self.closed = True


class TestServe:
    """Test serve() and logging setup."""

    @pytest.fixture(autouse=True)
    def restore_level(self):
        package_logger = logging.getLogger("dirtyroute_core")
        level = package_logger.level
        yield
        package_logger.setLevel(level)

    def test_serve_applies_log_level(self, monkeypatch):
        """serve() applies options.log_level and binds host/port."""
        bound = {}
        fake = FakeServer()

        def fake_make_server(host, port, app):
            bound.update(host=host, port=port, app=app)
            return fake

        monkeypatch.setattr(server_module, "make_server", fake_make_server)
        router = Router(Options(log_level="debug", host="0.0.0.0", port=9001))

        assert serve(router) is fake
        assert fake.closed
        assert bound["host"] == "0.0.0.0"
        assert bound["port"] == 9001
        assert isinstance(bound["app"], WSGIApp)
        assert logging.getLogger("dirtyroute_core").level == logging.DEBUG

    def test_configure_logging(self):
        """Log level names are case-insensitive."""
        configure_logging(Options(log_level="warning"))
        assert logging.getLogger("dirtyroute_core").level == logging.WARNING
