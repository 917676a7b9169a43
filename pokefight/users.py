"""Player registry and the ``/user`` service."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from .services import AbstractService, HttpStatus, ServiceException, _json_int, _json_str

log = logging.getLogger(__name__)

TEAM_SIZE = 6
_TEAM_KEYS = tuple(f"Pokemon{i}" for i in range(1, TEAM_SIZE + 1))


@dataclass(frozen=True)
class User:
    """A registered player and the six pokémon ids of the team."""

    name: str
    team: tuple[int, ...] = (0,) * TEAM_SIZE

    def __post_init__(self):
        team = tuple(self.team)
        if len(team) != TEAM_SIZE:
            raise ValueError(f"a team holds exactly {TEAM_SIZE} pokémon")
        object.__setattr__(self, "team", team)


class UserDB:
    """Users keyed by sequential ids, with a cap on the number of players."""

    def __init__(self, max_players=3):
        self.max_players = max_players
        self._next_id = 1
        self._users: dict[int, User] = {}

    def get_user(self, id):
        return self._users.get(id)

    def add_user(self, user):
        """Store ``user`` and return its id, or ``None`` when the table is full."""
        user_id = self._next_id
        self._next_id += 1
        if user_id > self.max_players:
            return None
        self._users[user_id] = user
        return user_id

    def set_user(self, id, user):
        self._users[id] = user
        if id > self._next_id:
            self._next_id = id

    def remove_user(self, id):
        self._users.pop(id, None)


def _user_to_json(user: User) -> dict:
    out = dict(zip(_TEAM_KEYS, user.team))
    out["Name"] = user.name
    return out


class UserService(AbstractService):
    """Registers, reads, updates and deletes players."""

    def __init__(self, db):
        super().__init__("/user")
        self.db = db

    def _require(self, user_id: int) -> User:
        user = self.db.get_user(user_id)
        if user is None:
            raise ServiceException(HttpStatus.NOT_FOUND, "Invalid user id")
        return user

    def get(self, id):
        return HttpStatus.OK, _user_to_json(self._require(id))

    def post(self, data, id):
        user = self._require(id)
        log.debug("updating user %d", id)
        team = [
            _json_int(data, key) if key in data else current
            for key, current in zip(_TEAM_KEYS, user.team)
        ] if isinstance(data, dict) else list(user.team)
        name = _json_str(data, "Name") if isinstance(data, dict) and "Name" in data else user.name
        self.db.set_user(id, dataclasses.replace(user, name=name, team=tuple(team)))
        return HttpStatus.NO_CONTENT

    def put(self, data):
        team = tuple(_json_int(data, key) for key in _TEAM_KEYS)
        user = User(_json_str(data, "Name"), team)
        user_id = self.db.add_user(user)
        return HttpStatus.CREATED, {"id": -1 if user_id is None else user_id}

    def remove(self, id):
        self._require(id)
        self.db.remove_user(id)
        return HttpStatus.NO_CONTENT