# pokefight

A two-player, turn-based double battle game. Each player brings a team of six
creatures, two of which fight at a time. On every turn both players choose an
attack or a switch for each of their active fighters. The turn goes ahead once
both sides have sent their orders.

This package holds the networked side of the game and the screen geometry of
the battle view:

- `pokefight.httpserver`: a small JSON-over-HTTP server that runs the lobby
  and passes each turn's commands between the two players;
- `pokefight.services`, `pokefight.users` and `pokefight.commands`: the
  services behind that server, which can also be used without a socket;
- `pokefight.lobby` and `pokefight.exchange`: clients for the lobby and for
  the command exchange on each turn;
- `pokefight.layout` and `pokefight.hud`: the click zones of the battle
  screen and where the HUD elements go.

The package depends only on the standard library.

## Installing

```
pip install .
```

The tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Running the server

```
pokefight-server listen
```

With no arguments, or any first argument other than `listen`, the command
does nothing and exits.

`--host` and `--port` choose where the server listens. By default it listens
on `0.0.0.0` and port 8080. It prints `starting`, serves requests one at a
time in a background thread, and stops when Enter is pressed. If the address
cannot be bound, it prints the error and exits with status 1.

It answers these services:

| URL             | Method | Meaning |
|-----------------|--------|---------|
| `/version`      | GET    | `{"major": 1, "minor": 0}` |
| `/user`         | PUT    | join the lobby. The body holds `Name` and `Pokemon1`..`Pokemon6`. The reply holds the new `id`, or `-1` when the lobby is full. |
| `/user/<id>`    | GET    | a player's `Name` and `Pokemon1`..`Pokemon6` |
| `/user/<id>`    | POST   | change the fields present in the body; answers `204` |
| `/user/<id>`    | DELETE | remove the player; answers `204` |
| `/command/<id>` | POST   | add commands (`Command0`, `Command1`, ...) for the seat `<id>`; answers `201` |
| `/command/<id>` | GET    | the turn's commands, once both seats have posted |

The user table holds at most three entries. Id 1 is taken by the server
itself, so the two players get ids 2 and 3.

On `/command`, a GET answers `202 Accepted` until both seats (2 and 3) have
posted. A POST answers `202 Accepted` while the previous turn has not yet been
fetched by both seats. In both cases the client is expected to ask again. The
stored commands are cleared once both seats have fetched them.

Errors are answered as follows:

- malformed URLs, non-numeric ids and bad JSON: `400`;
- unknown users and services: `404`;
- methods a service does not support: `501`;
- any other failure: `500`.

The error message is sent as the body.

## Using it from Python

The services can be driven without a socket:

```python
from pokefight.httpserver import build_manager

manager = build_manager()
status, text = manager.query_service("/version", "GET", "")
```

`ServicesManager.query_service` returns a `(HttpStatus, text)` pair. GET and
PUT answers are indented JSON. It raises `ServiceException`, whose `status`
is an `HttpStatus`, for every error the HTTP server would report.

To run the server from code, use `serve(manager, host, port)`. It returns a
started `HTTPServer`; stop it with `shutdown()` and `server_close()`.

### Commands

`pokefight.commands.Command` is one action of a turn. Its fields are:

- `command_id`, where 0 marks an empty slot;
- `pokemon`;
- `pokemon_target`;
- `attack`;
- `priority`.

`encode_commands` and `decode_commands` convert between a list of commands
and the `{"Command<i>": {...}}` JSON form. Encoding skips empty commands.
Decoding stops at the first missing index.

### Clients

`pokefight.lobby.LobbyClient(base_url)` talks to `/user`:

- `add_player(name, team=None)` returns the new id, or `None` when the lobby
  is full. It draws a team with `random_team` when none is given; that
  function picks six ids from 1 to 19.
- `get_player(id)` returns a `User` or `None`.
- `count_players()` counts the ids found one after another from 1.
- `get_teams()` returns the teams of seats 2 and 3 that are taken.
- `delete_player(id)` returns whether a player was removed.

Errors it cannot recover from raise `LobbyError`.

`pokefight.exchange.CommandExchange(base_url, player_id, poll_interval)`
handles the command exchange:

- `send(commands)` posts a list of `Command` objects and retries while the
  server answers `202`.
- `fetch()` polls until the turn is ready and returns the decoded commands.

Both use the path `/command/<opponent_id()>`, the id of the other seat.
Failures raise `ExchangeError`. `slot_click_position(slot)` gives a screen
point inside the bench button for team slots 2–5 and 8–11.

### Screen layout

`pokefight.layout` maps clicks on the battle screen to slots:

- `pokemon_slot_at(x, y)` returns a bench slot 2–5;
- `attack_slot_at(x, y)` returns an attack 0–3;
- `active_button_at(x, y)` returns an active fighter 0–1.

Each returns `None` outside its zones.

`pokefight.hud` gives HUD geometry:

- `info_layout(position)` returns an `InfoLayout` for the info box of screen
  position 0–3;
- `lifebar_width(hp, hp_max)` returns the width out of 48 pixels;
- `lifebar_band` and `lifebar_rect` give the colour of the life bar;
- `pp_label(pp, max_pp)` gives the `pp/max` label;
- `team_icon_position`, `attack_name_position`, `attack_pp_position`,
  `attack_type_position` and `ok_marker_position` give where those elements
  are drawn.

Out-of-range arguments raise `ValueError`.

## What this package does not do

There is no battle engine here. Nothing computes damage, applies an attack or
a switch, or decides who wins. The server only stores and passes on the
commands.

There is also:

- no graphical battle window;
- no computer opponent;
- no recording or replay of a match.

The layout and HUD modules compute positions only; they draw nothing.