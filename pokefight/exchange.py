"""Client side of the turn exchange: sending and receiving a turn's commands."""

from __future__ import annotations

import json
import logging
import time
import urllib.error
import urllib.request
from typing import Any

from .commands import FIRST_PLAYER_ID, SECOND_PLAYER_ID, decode_commands, encode_commands
from .services import HttpStatus, ServiceException

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_POLL_INTERVAL = 2.0
_HTTP_TIMEOUT = 10.0

_SLOT_CLICKS = {
    2: (400, 450),
    3: (480, 450),
    4: (400, 470),
    5: (480, 470),
    8: (400, 450),
    9: (480, 450),
    10: (400, 470),
    11: (480, 470),
}


class ExchangeError(Exception):
    """The server could not be reached or answered unexpectedly."""


def slot_click_position(slot):
    """Return a screen point inside the bench button of team slot ``slot``.

    Slots 2 to 5 belong to the first player, 8 to 11 to the second; both
    teams use the same buttons.
    """
    try:
        return _SLOT_CLICKS[slot]
    except (KeyError, TypeError):
        raise ValueError(f"slot {slot!r} has no bench button") from None


class CommandExchange:
    """Posts this player's commands and waits for the whole turn."""

    def __init__(self, base_url=DEFAULT_BASE_URL, player_id=FIRST_PLAYER_ID,
                 poll_interval=DEFAULT_POLL_INTERVAL):
        self.base_url = base_url.rstrip("/")
        self.player_id = player_id
        self.poll_interval = poll_interval

    def opponent_id(self):
        """Return the id of the other seat."""
        return SECOND_PLAYER_ID if self.player_id == FIRST_PLAYER_ID else FIRST_PLAYER_ID

    @property
    def _path(self) -> str:
        return f"/command/{self.opponent_id()}"

    def _request(self, method: str, payload: Any = None) -> tuple[int, str]:
        data = None
        headers = {}
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        request = urllib.request.Request(
            self.base_url + self._path, data=data, headers=headers, method=method
        )
        try:
            with urllib.request.urlopen(request, timeout=_HTTP_TIMEOUT) as response:
                return response.status, response.read().decode("utf-8")
        except urllib.error.HTTPError as exc:
            body = exc.read().decode("utf-8", errors="replace")
            exc.close()
            return exc.code, body
        except urllib.error.URLError as exc:
            raise ExchangeError(f"cannot reach {self.base_url}: {exc.reason}") from exc

    def send(self, commands):
        """Post the commands, retrying while the previous turn is still being read."""
        payload = encode_commands(commands)
        log.debug("Sending /command: %s", payload)
        status, body = self._request("POST", payload)
        while status == HttpStatus.ACCEPTED:
            log.info("Waiting for the other player to play")
            time.sleep(self.poll_interval)
            status, body = self._request("POST", payload)
        if status != HttpStatus.CREATED:
            raise ExchangeError(f"commands refused ({status}): {body.strip()}")
        return HttpStatus(status)

    def fetch(self):
        """Wait until both players have posted and return the turn's commands."""
        status, body = self._request("GET")
        while status == HttpStatus.ACCEPTED:
            time.sleep(self.poll_interval)
            status, body = self._request("GET")
        if status != HttpStatus.OK:
            raise ExchangeError(f"cannot read the turn ({status}): {body.strip()}")
        try:
            return decode_commands(json.loads(body))
        except (json.JSONDecodeError, ServiceException) as exc:
            raise ExchangeError(f"invalid turn data: {exc}") from exc