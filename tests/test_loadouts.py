"""Tests for the static loadout catalogs."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from helldivers_bot.loadouts import (
    AUTOMATON_LOADOUTS,
    LOADOUT_CATALOGS,
    TERMINID_LOADOUTS,
    catalog_for,
    pick_loadout,
)
from helldivers_bot.models import Faction


@pytest.mark.parametrize("catalog", [TERMINID_LOADOUTS, AUTOMATON_LOADOUTS])
def test_catalog_entries_are_complete(catalog):
    assert catalog
    for entry in catalog:
        assert entry.armour and entry.primary and entry.secondary and entry.grenade
        assert len(entry.stratagems) == 4
        assert all(entry.stratagems)


def test_catalogs_are_immutable():
    assert isinstance(TERMINID_LOADOUTS, tuple)
    with pytest.raises(AttributeError):
        TERMINID_LOADOUTS[0].armour = "Cape only"  # type: ignore[misc]


@pytest.mark.parametrize("faction", [Faction.TERMINIDS, Faction.AUTOMATONS])
def test_pick_loadout_is_roughly_uniform(faction):
    rng = random.Random(1234)
    catalog = LOADOUT_CATALOGS[faction]
    draws = 8000

    counts = Counter(pick_loadout(faction, rng=rng) for _ in range(draws))

    assert set(counts) == set(catalog)
    expected = draws / len(catalog)
    for entry in catalog:
        assert abs(counts[entry] - expected) < expected * 0.15


def test_pick_loadout_uses_module_random_by_default(monkeypatch):
    monkeypatch.setattr(
        "helldivers_bot.loadouts.random.choice", lambda seq: seq[-1]
    )

    assert pick_loadout(Faction.AUTOMATONS) == AUTOMATON_LOADOUTS[-1]


def test_catalog_for_unknown_faction():
    with pytest.raises(ValueError):
        catalog_for(Faction.ILLUMINATE)
