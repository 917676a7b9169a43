"""Turn commands and the ``/command`` exchange between the two players."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import count

from .services import AbstractService, HttpStatus, ServiceException, _json_int

log = logging.getLogger(__name__)

FIRST_PLAYER_ID = 2
SECOND_PLAYER_ID = 3


@dataclass
class Command:
    """One action of a turn; ``command_id`` 0 marks an empty slot."""

    command_id: int = 0
    pokemon: int = 0
    pokemon_target: int = 0
    attack: int = 0
    priority: int = 0


def encode_commands(commands):
    """Encode commands as ``{"Command<i>": {...}}``, skipping empty ones."""
    return {
        f"Command{index}": {
            "Pokemon": command.pokemon,
            "Pokemon_target": command.pokemon_target,
            "Attack": command.attack,
            "Priority": command.priority,
            "CommandID": command.command_id,
        }
        for index, command in enumerate(commands)
        if command.command_id != 0
    }


def decode_commands(data):
    """Decode ``Command0``, ``Command1``, ... up to the first missing key."""
    if data is None:
        return []
    if not isinstance(data, dict):
        raise ServiceException(
            HttpStatus.BAD_REQUEST, "Données invalides: objet JSON attendu"
        )
    commands = []
    for index in count():
        entry = data.get(f"Command{index}")
        if f"Command{index}" not in data:
            break
        commands.append(
            Command(
                command_id=_json_int(entry, "CommandID"),
                pokemon=_json_int(entry, "Pokemon"),
                pokemon_target=_json_int(entry, "Pokemon_target"),
                attack=_json_int(entry, "Attack"),
                priority=_json_int(entry, "Priority"),
            )
        )
    return commands


class CommandService(AbstractService):
    """Collects both players' commands for a turn, then hands them to each."""

    def __init__(self):
        super().__init__("/command")
        self.commands: list[Command] = []
        self._posted = {FIRST_PLAYER_ID: False, SECOND_PLAYER_ID: False}
        self._fetched = {FIRST_PLAYER_ID: True, SECOND_PLAYER_ID: True}

    def get(self, id):
        """Return the turn's commands once both players have posted."""
        if not all(self._posted.values()):
            return HttpStatus.ACCEPTED, None
        out = encode_commands(self.commands)
        if id in self._fetched:
            self._fetched[id] = True
        if all(self._fetched.values()):
            self._posted = dict.fromkeys(self._posted, False)
            self.commands.clear()
            log.info("Command erased!")
        return HttpStatus.OK, out or None

    def post(self, data, id):
        """Record a player's commands unless the last turn is still being read."""
        if not all(self._fetched.values()):
            return HttpStatus.ACCEPTED
        self.commands.extend(decode_commands(data))
        if id in self._posted:
            self._posted[id] = True
        if all(self._posted.values()):
            self._fetched = dict.fromkeys(self._fetched, False)
        return HttpStatus.CREATED