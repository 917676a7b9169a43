"""Screen regions of the battle window and what a click on them selects."""

from __future__ import annotations


def pokemon_slot_at(x, y):
    """Return the bench slot (2 to 5) under the point, or ``None``."""
    if 390 < x < 450 and 420 < y < 460:
        return 2
    if 450 < x < 510 and 420 < y < 460:
        return 3
    if 390 < x < 450 and y > 460:
        return 4
    if 450 < x < 510 and y > 460:
        return 5
    return None


def attack_slot_at(x, y):
    """Return the attack index (0 to 3) under the point, or ``None``."""
    if x < 200 and 370 < y < 440:
        return 0
    if 200 < x < 390 and 370 < y < 440:
        return 1
    if x < 200 and y > 440:
        return 2
    if 200 < x < 390 and y > 440:
        return 3
    return None


def active_button_at(x, y):
    """Return which active pokémon (0 or 1) the selector under the point picks."""
    if 380 < y < 420:
        if 390 < x < 450:
            return 0
        if 450 < x < 510:
            return 1
    return None