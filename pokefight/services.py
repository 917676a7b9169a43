"""Request routing for the game server: status codes, errors and services."""

from __future__ import annotations

import json
import logging
import re
from enum import IntEnum
from typing import Any

log = logging.getLogger(__name__)

_MALFORMED_URL = "Url malformée (forme attendue: <service>/<nombre>)"
_NOT_IMPLEMENTED = "Non implanté"
_ID_PATTERN = re.compile(r"\s*[+-]?\d+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class HttpStatus(IntEnum):
    """HTTP status codes used by the services."""

    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204
    BAD_REQUEST = 400
    NOT_FOUND = 404
    SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501


class ServiceException(Exception):
    """An error that maps onto an HTTP status."""

    def __init__(self, status, message):
        super().__init__(message)
        self.status = HttpStatus(status)
        self.message = message

    def __str__(self) -> str:
        return self.message


def _member(data: Any, key: str) -> Any:
    """Return ``data[key]`` for a JSON object, ``None`` when absent or null."""
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ServiceException(
            HttpStatus.BAD_REQUEST, "Données invalides: objet JSON attendu"
        )
    return data.get(key)


def _json_int(data: Any, key: str) -> int:
    """Read an integer member, treating a missing one as 0."""
    value = _member(data, key)
    if value is None:
        return 0
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        try:
            return int(value)
        except (OverflowError, ValueError):
            pass
    raise ServiceException(
        HttpStatus.BAD_REQUEST, f"Données invalides: '{key}' n'est pas un entier"
    )


def _json_str(data: Any, key: str) -> str:
    """Read a string member, treating a missing one as the empty string."""
    value = _member(data, key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise ServiceException(
        HttpStatus.BAD_REQUEST, f"Données invalides: '{key}' n'est pas une chaîne"
    )


def _styled(payload: Any) -> str:
    """Render a JSON payload in the indented style the clients expect."""
    if payload is None:
        return "null\n"
    text = json.dumps(
        payload, indent=3, separators=(",", " : "), sort_keys=True, ensure_ascii=False
    )
    return text + "\n"


def _parse_body(body: str) -> Any:
    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise ServiceException(
            HttpStatus.BAD_REQUEST, f"Données invalides: {exc}"
        ) from exc


def _parse_id(text: str) -> int:
    bad = ServiceException(
        HttpStatus.BAD_REQUEST, f"Url malformée: '{text}' n'est pas un nombre"
    )
    if not _ID_PATTERN.fullmatch(text):
        raise bad
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise bad
    return value


class AbstractService:
    """A service bound to a URL prefix; every method is unsupported by default."""

    def __init__(self, pattern):
        self.pattern = pattern

    def get(self, id):
        """Return ``(status, payload)`` for the resource ``id``."""
        raise ServiceException(HttpStatus.NOT_IMPLEMENTED, _NOT_IMPLEMENTED)

    def post(self, data, id):
        """Update the resource ``id`` from ``data`` and return a status."""
        raise ServiceException(HttpStatus.NOT_IMPLEMENTED, _NOT_IMPLEMENTED)

    def put(self, data):
        """Create a resource from ``data`` and return ``(status, payload)``."""
        raise ServiceException(HttpStatus.NOT_IMPLEMENTED, _NOT_IMPLEMENTED)

    def remove(self, id):
        """Delete the resource ``id`` and return a status."""
        raise ServiceException(HttpStatus.NOT_IMPLEMENTED, _NOT_IMPLEMENTED)


class VersionService(AbstractService):
    """Reports the protocol version."""

    def __init__(self):
        super().__init__("/version")

    def get(self, id):
        return HttpStatus.OK, {"major": 1, "minor": 0}


class ServicesManager:
    """Dispatches requests to the first service whose pattern matches the URL."""

    def __init__(self):
        self.services: list[AbstractService] = []

    def register_service(self, service):
        self.services.append(service)

    def find_service(self, url):
        """Return the service for ``url``, or ``None`` if none matches."""
        for service in self.services:
            pattern = service.pattern
            if not url.startswith(pattern):
                continue
            if len(url) > len(pattern) and url[len(pattern)] != "/":
                continue
            return service
        return None

    def query_service(self, url, method, body=""):
        """Handle one request and return ``(status, response_text)``."""
        service = self.find_service(url)
        if service is None:
            raise ServiceException(HttpStatus.NOT_FOUND, f"Service {url} non trouvé")

        pattern = service.pattern
        resource_id = 0
        if len(url) > len(pattern):
            end = url[len(pattern):]
            if not end.startswith("/"):
                raise ServiceException(HttpStatus.BAD_REQUEST, _MALFORMED_URL)
            end = end[1:]
            if not end:
                raise ServiceException(HttpStatus.BAD_REQUEST, _MALFORMED_URL)
            resource_id = _parse_id(end)

        if method == "GET":
            status, payload = service.get(resource_id)
            return status, _styled(payload)
        if method == "POST":
            log.debug("POST %s with body: %s", pattern, body)
            return service.post(_parse_body(body), resource_id), ""
        if method == "PUT":
            log.debug("PUT %s with body: %s", pattern, body)
            status, payload = service.put(_parse_body(body))
            return status, _styled(payload)
        if method == "DELETE":
            log.debug("DELETE %s", url)
            return service.remove(resource_id), ""
        raise ServiceException(HttpStatus.BAD_REQUEST, f"Méthode {method} invalide")