"""HTTP liveness and readiness endpoints."""

from __future__ import annotations

import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

HEALTH_PATH = "/health"
READY_PATH = "/ready"


def route_status(path: str, ready: bool) -> HTTPStatus:
    """Status for a GET of ``path``.

    ``/health`` is always OK; ``/ready`` is OK only once the sidecar has
    caught up, and service-unavailable before; anything else is not found.
    """
    if path == HEALTH_PATH:
        return HTTPStatus.OK
    if path == READY_PATH:
        return HTTPStatus.OK if ready else HTTPStatus.SERVICE_UNAVAILABLE
    return HTTPStatus.NOT_FOUND


class HealthServer:
    """Background HTTP server answering health and readiness probes.

    ``ready`` is a ``threading.Event`` that is set once the sidecar is live.
    A ``port`` of 0 binds an ephemeral port, available as ``port`` after start.
    """

    def __init__(self, port: int, ready: threading.Event) -> None:
        self.port = port
        self.ready = ready
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def _handler(self) -> type[BaseHTTPRequestHandler]:
        ready = self.ready

        class Handler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:  # noqa: N802
                path = self.path.split("?", 1)[0]
                status = route_status(path, ready.is_set())
                self.send_response(status)
                self.send_header("Content-Length", "0")
                self.end_headers()

            def log_message(self, format: str, *args: object) -> None:  # noqa: A002
                return

        return Handler

    def start(self) -> HealthServer:
        """Bind and start serving in a daemon thread."""
        if self._server is not None:
            raise RuntimeError("health server already started")
        server = ThreadingHTTPServer(("0.0.0.0", self.port), self._handler())
        server.daemon_threads = True
        self._server = server
        self.port = server.server_address[1]
        self._thread = threading.Thread(
            target=server.serve_forever, name="glint-health", daemon=True
        )
        self._thread.start()
        return self

    def stop(self) -> None:
        """Shut the server down and wait for its thread to finish."""
        server, thread = self._server, self._thread
        self._server = None
        self._thread = None
        if server is None:
            return
        server.shutdown()
        server.server_close()
        if thread is not None:
            thread.join()

    def __enter__(self) -> HealthServer:
        return self.start()

    def __exit__(self, *args: object) -> None:
        self.stop()