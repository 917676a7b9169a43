"""Placement of the battle HUD: info boxes, life bars and the command panel."""

from __future__ import annotations

from dataclasses import dataclass

WINDOW_LENGTH = 512
LIFEBAR_WIDTH = 48
TEAM_SIZE = 6
ATTACK_COUNT = 4

HUD_SHEET = "hud.png"
_OWN_FRAME_RECT = (0, 43, 121, 30)
_OPPONENT_FRAME_RECT = (0, 22, 124, 16)
_HIGH_LIFE_RECT = (59, 7, 48, 1)
_LOW_LIFE_RECT = (59, 14, 48, 1)

Point = tuple[int, int]


@dataclass(frozen=True)
class InfoLayout:
    """Where the parts of one pokémon's info box are drawn.

    ``hp`` and ``hp_max`` are ``None`` for the opponent's boxes, which do not
    show hit points as numbers.
    """

    frame: Point
    name: Point
    level: Point
    lifebar: Point
    hp: Point | None
    hp_max: Point | None
    frame_rect: tuple[int, int, int, int]
    scale: int = 2

    @property
    def shows_numbers(self) -> bool:
        """Whether the box shows hit points as numbers."""
        return self.hp is not None


def _own_box(x: int, y: int) -> InfoLayout:
    return InfoLayout(
        frame=(x, y),
        name=(x + 20, y),
        level=(x + 180, y),
        lifebar=(x + 112, y + 20),
        hp=(x + 110, y + 30),
        hp_max=(x + 180, y + 30),
        frame_rect=_OWN_FRAME_RECT,
    )


def _opponent_box(x: int, y: int) -> InfoLayout:
    return InfoLayout(
        frame=(x, y),
        name=(x + 20, y),
        level=(x + 190, y),
        lifebar=(x + 85, y + 20),
        hp=None,
        hp_max=None,
        frame_rect=_OPPONENT_FRAME_RECT,
    )


_INFO_LAYOUTS = {
    0: _own_box(270, 200),
    1: _own_box(280, 260),
    2: _opponent_box(0, 50),
    3: _opponent_box(-10, 10),
}


def info_layout(position):
    """Return the info box layout for screen position 0 to 3.

    Positions 0 and 1 are the player's active pokémon, 2 and 3 the opponent's.
    """
    try:
        return _INFO_LAYOUTS[position]
    except (KeyError, TypeError):
        raise ValueError(f"no info box at position {position!r}") from None


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def lifebar_width(hp, hp_max):
    """Return the drawn width of the life bar, out of 48 pixels."""
    if hp_max == 0:
        raise ValueError("hp_max must not be zero")
    return _trunc_div(LIFEBAR_WIDTH * hp, hp_max)


def lifebar_band(hp, hp_max):
    """Return ``"high"`` at half life or more, ``"low"`` below."""
    half = _trunc_div(hp_max, 2)
    if hp >= half:
        return "high"
    return "low"


def lifebar_rect(hp, hp_max):
    """Return the rectangle of the HUD sheet that colours the life bar."""
    return _HIGH_LIFE_RECT if lifebar_band(hp, hp_max) == "high" else _LOW_LIFE_RECT


def pp_label(pp, max_pp):
    """Return the ``pp/max`` label shown under an attack."""
    return f"{pp}/{max_pp}"


def _check_index(index: int, limit: int, what: str) -> None:
    if not isinstance(index, int) or not 0 <= index < limit:
        raise ValueError(f"{what} index must be between 0 and {limit - 1}, got {index!r}")


def team_icon_position(index):
    """Return where the team icon of team member 0 to 5 is drawn."""
    _check_index(index, TEAM_SIZE, "team")
    return WINDOW_LENGTH - 110 + (index % 2) * 50, 370 + (index // 2) * 40


def attack_name_position(index):
    """Return where the name of attack 0 to 3 is written."""
    _check_index(index, ATTACK_COUNT, "attack")
    return 20 + (index % 2) * 180, 395 + (index // 2) * 50


def attack_pp_position(index):
    """Return where the pp label of attack 0 to 3 is written."""
    _check_index(index, ATTACK_COUNT, "attack")
    return 90 + (index % 2) * 170, 420 + (index // 2) * 50


def attack_type_position(index):
    """Return where the type badge of attack 0 to 3 is drawn."""
    _check_index(index, ATTACK_COUNT, "attack")
    return 20 + (index % 2) * 170, 415 + (index // 2) * 50


def ok_marker_position(active):
    """Return where "OK" is shown once the other active pokémon has chosen.

    ``active`` is the pokémon (0 or 1) still to choose; the marker goes on the
    selector of the one that has already chosen.
    """
    if active not in (0, 1):
        raise ValueError(f"active pokémon must be 0 or 1, got {active!r}")
    return 405 + (1 - active) * 50, 385