"""Client side of the lobby: registering players and reading teams."""

from __future__ import annotations

import json
import logging
import random
import urllib.error
import urllib.request
from typing import Any

from .services import HttpStatus
from .users import TEAM_SIZE, User

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"
REQUEST_TIMEOUT = 10.0
POKEMON_COUNT = 19
PLAYER_IDS = (2, 3)
_TEAM_KEYS = tuple(f"Pokemon{i}" for i in range(1, TEAM_SIZE + 1))


class LobbyError(Exception):
    """The server answered in a way the lobby cannot use."""


def random_team(rng):
    """Draw six pokémon ids between 1 and 19 from ``rng``."""
    return tuple(rng.randint(1, POKEMON_COUNT) for _ in range(TEAM_SIZE))


def _user_from_json(data: Any) -> User:
    if not isinstance(data, dict):
        raise LobbyError("expected a JSON object describing a user")
    team = tuple(int(data.get(key) or 0) for key in _TEAM_KEYS)
    return User(str(data.get("Name") or ""), team)


class LobbyClient:
    """Talks to the ``/user`` service of a game server."""

    timeout = REQUEST_TIMEOUT

    def __init__(self, base_url=DEFAULT_BASE_URL):
        self.base_url = base_url.rstrip("/")

    def _request(self, method: str, path: str, payload: Any = None) -> tuple[int, str]:
        data = None
        headers = {}
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        request = urllib.request.Request(
            self.base_url + path, data=data, headers=headers, method=method
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                return response.status, response.read().decode("utf-8")
        except urllib.error.HTTPError as exc:
            body = exc.read().decode("utf-8", errors="replace")
            exc.close()
            return exc.code, body
        except urllib.error.URLError as exc:
            raise LobbyError(f"cannot reach {self.base_url}: {exc.reason}") from exc

    def add_player(self, name, team=None):
        """Register a player and return its id, or ``None`` when the lobby is full.

        Without ``team`` a random one is drawn.
        """
        if team is None:
            team = random_team(random.Random())
        team = tuple(team)
        if len(team) != TEAM_SIZE:
            raise ValueError(f"a team holds exactly {TEAM_SIZE} pokémon")
        payload = dict(zip(_TEAM_KEYS, team))
        payload["Name"] = name
        status, body = self._request("PUT", "/user", payload)
        if status != HttpStatus.CREATED:
            raise LobbyError(f"Erreur: {status}")
        try:
            player_id = int(json.loads(body)["id"])
        except (ValueError, KeyError, TypeError) as exc:
            raise LobbyError(f"unexpected answer to registration: {body!r}") from exc
        if player_id == -1:
            log.info("Plus de place")
            return None
        return player_id

    def get_player(self, id):
        """Return the player registered under ``id``, or ``None``."""
        status, body = self._request("GET", f"/user/{id}")
        if status != HttpStatus.OK:
            log.debug("echec get %s: %s", id, status)
            return None
        try:
            return _user_from_json(json.loads(body))
        except json.JSONDecodeError as exc:
            raise LobbyError(f"invalid user data: {exc}") from exc

    def count_players(self):
        """Count the registered ids found one after another from 1."""
        found = 0
        while self.get_player(found + 1) is not None:
            found += 1
        return found

    def get_teams(self):
        """Return the teams of the two playing seats that are taken, in order."""
        teams = []
        for player_id in PLAYER_IDS:
            user = self.get_player(player_id)
            if user is not None:
                teams.append(user.team)
        return teams

    def delete_player(self, id):
        """Remove the player ``id``; return whether the server removed one."""
        status, _ = self._request("DELETE", f"/user/{id}")
        return status == HttpStatus.NO_CONTENT