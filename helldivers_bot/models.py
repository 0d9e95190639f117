"""Domain models for war payloads and loadouts."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Tuple


class Faction(IntEnum):
    HUMANS = 1
    ILLUMINATE = 2
    TERMINIDS = 3
    AUTOMATONS = 4

    @property
    def display_name(self) -> str:
        return FACTION_DISPLAY_NAMES[self]


FACTION_DISPLAY_NAMES = {
    Faction.HUMANS: "Helldivers",
    Faction.ILLUMINATE: "Illuminate",
    Faction.TERMINIDS: "Bugs",
    Faction.AUTOMATONS: "Automaton",
}


def owner_display_name(owner: Any) -> str:
    """Resolve an owner faction id, passing unknown values through verbatim."""

    try:
        return Faction(owner).display_name
    except (ValueError, TypeError):
        return str(owner)


def as_int(value: Any, default: int = 0) -> int:
    """Coerce a JSON number to int; non-finite or non-numeric values give ``default``."""

    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return default
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return int(number)


@dataclass(frozen=True, slots=True)
class LoadoutEntry:
    armour: str
    primary: str
    secondary: str
    grenade: str
    stratagems: Tuple[str, str, str, str]
