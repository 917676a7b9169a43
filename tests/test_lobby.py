import random

import pytest

from pokefight.httpserver import build_manager, serve
from pokefight.lobby import LobbyClient, LobbyError, random_team


class _ScriptedRng:
    def __init__(self, values):
        self._values = iter(values)
        self.calls = []

    def randint(self, low, high):
        self.calls.append((low, high))
        return next(self._values)


@pytest.fixture
def base_url():
    server = serve(build_manager(), "127.0.0.1", 0)
    host, port = server.server_address[:2]
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def client(base_url):
    return LobbyClient(base_url)


def test_random_team_values_in_range():
    team = random_team(random.Random(5))
    assert len(team) == 6
    assert all(1 <= member <= 19 for member in team)


def test_random_team_draws_six_ids_from_rng():
    rng = _ScriptedRng([3, 19, 1, 7, 7, 12])
    assert random_team(rng) == (3, 19, 1, 7, 7, 12)
    assert rng.calls == [(1, 19)] * 6


def test_players_get_seats_two_and_three_then_full(client):
    assert client.add_player("ash", (1, 2, 3, 4, 5, 6)) == 2
    assert client.add_player("misty", (7, 8, 9, 10, 11, 12)) == 3
    assert client.add_player("brock", (1, 1, 1, 1, 1, 1)) is None


def test_get_player_round_trip(client):
    player_id = client.add_player("ash", (4, 8, 15, 16, 2, 19))
    user = client.get_player(player_id)
    assert user.name == "ash"
    assert user.team == (4, 8, 15, 16, 2, 19)


def test_server_user_is_seeded(client):
    user = client.get_player(1)
    assert user.name == "serveur"
    assert user.team == (-1,) * 6


def test_get_missing_player_returns_none(client):
    assert client.get_player(9) is None


def test_count_players(client):
    assert client.count_players() == 1
    client.add_player("ash", (1, 2, 3, 4, 5, 6))
    client.add_player("misty", (1, 2, 3, 4, 5, 6))
    assert client.count_players() == 3


def test_get_teams_in_seat_order(client):
    assert client.get_teams() == []
    client.add_player("ash", (1, 2, 3, 4, 5, 6))
    assert client.get_teams() == [(1, 2, 3, 4, 5, 6)]
    client.add_player("misty", (6, 5, 4, 3, 2, 1))
    assert client.get_teams() == [(1, 2, 3, 4, 5, 6), (6, 5, 4, 3, 2, 1)]


def test_add_player_with_random_team(client):
    player_id = client.add_player("ash")
    team = client.get_player(player_id).team
    assert len(team) == 6
    assert all(1 <= member <= 19 for member in team)


def test_delete_player(client):
    player_id = client.add_player("ash", (1, 2, 3, 4, 5, 6))
    assert client.delete_player(player_id) is True
    assert client.get_player(player_id) is None
    assert client.delete_player(player_id) is False


def test_wrong_team_size_rejected(client):
    with pytest.raises(ValueError):
        client.add_player("ash", (1, 2, 3))


def test_registration_error_raises(base_url):
    broken = LobbyClient(base_url + "/missing")
    with pytest.raises(LobbyError):
        broken.add_player("ash", (1, 2, 3, 4, 5, 6))