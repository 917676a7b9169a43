"""HTTP front end that serves the game's services."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

from .commands import CommandService
from .services import HttpStatus, ServiceException, ServicesManager, VersionService
from .users import TEAM_SIZE, User, UserDB, UserService

log = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
SERVER_USER_NAME = "serveur"


def build_manager():
    """Create a manager with the version, user and command services registered.

    The user table is seeded with the server itself, so players get ids 2 and 3.
    """
    manager = ServicesManager()
    manager.register_service(VersionService())
    db = UserDB()
    db.add_user(User(SERVER_USER_NAME, (-1,) * TEAM_SIZE))
    manager.register_service(UserService(db))
    manager.register_service(CommandService())
    return manager


def make_handler(manager):
    """Return a request handler class that answers through ``manager``."""

    class ServiceRequestHandler(BaseHTTPRequestHandler):
        server_version = "PokefightServer/1.0"

        def _read_body(self) -> str:
            length = int(self.headers.get("Content-Length") or 0)
            if length <= 0:
                return ""
            return self.rfile.read(length).decode("utf-8", errors="replace")

        def _answer(self, method: str) -> None:
            body = self._read_body() if method in ("POST", "PUT") else ""
            try:
                status, text = manager.query_service(self.path, method, body)
            except ServiceException as exc:
                status, text = exc.status, f"{exc.message}\n"
            except Exception as exc:  # every failure becomes a 500 reply
                log.exception("request %s %s failed", method, self.path)
                status, text = HttpStatus.SERVER_ERROR, f"{exc}\n"
            payload = text.encode("utf-8")
            self.send_response(int(status))
            if method == "GET":
                self.send_header("Content-Type", "application/json; charset=utf-8")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def do_GET(self):
            self._answer("GET")

        def do_POST(self):
            self._answer("POST")

        def do_PUT(self):
            self._answer("PUT")

        def do_DELETE(self):
            self._answer("DELETE")

        def log_message(self, format, *args):
            log.info("%s - %s", self.address_string(), format % args)

    return ServiceRequestHandler


def serve(manager, host=DEFAULT_HOST, port=DEFAULT_PORT):
    """Start serving ``manager`` in a background thread and return the server.

    Requests are handled one at a time. Stop with ``shutdown()`` and
    ``server_close()``.
    """
    server = HTTPServer((host, port), make_handler(manager))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server


def main(argv=None):
    """Run the server when the first argument is ``listen``."""
    parser = argparse.ArgumentParser(prog="pokefight-server")
    parser.add_argument("mode", nargs="?", help="'listen' starts the HTTP server")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    if args.mode != "listen":
        return 0

    print("starting")
    try:
        server = serve(build_manager(), args.host, args.port)
    except OSError as exc:
        print(f"Exception: {exc}", file=sys.stderr)
        return 1
    try:
        print("Pressez <entrée> pour arrêter le serveur")
        sys.stdin.readline()
    finally:
        server.shutdown()
        server.server_close()
    return 0