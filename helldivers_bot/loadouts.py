"""Static loadout catalogs, one per enemy faction."""

from __future__ import annotations

import random
from typing import Mapping, Optional, Sequence, Tuple

from .models import Faction, LoadoutEntry

TERMINID_LOADOUTS: Tuple[LoadoutEntry, ...] = (
    LoadoutEntry(
        armour="B-24 Enforcer",
        primary="SG-225 Breaker",
        secondary="P-19 Redeemer",
        grenade="G-12 High Explosive",
        stratagems=(
            "Orbital Gas Strike",
            "Eagle 500kg Bomb",
            "MG-43 Machine Gun",
            "AX/AR-23 Guard Dog",
        ),
    ),
    LoadoutEntry(
        armour="CE-35 Trench Engineer",
        primary="SG-225IE Breaker Incendiary",
        secondary="P-4 Senator",
        grenade="G-10 Incendiary",
        stratagems=(
            "Eagle Napalm Airstrike",
            "Orbital Laser",
            "GR-8 Recoilless Rifle",
            "A/MG-43 Machine Gun Sentry",
        ),
    ),
    LoadoutEntry(
        armour="SC-30 Trailblazer Scout",
        primary="SMG-72 Pummeler",
        secondary="GP-31 Grenade Pistol",
        grenade="G-23 Stun",
        stratagems=(
            "Eagle Cluster Bomb",
            "Orbital Airburst Strike",
            "FLAM-40 Flamethrower",
            "SH-32 Shield Generator Pack",
        ),
    ),
    LoadoutEntry(
        armour="FS-23 Battle Master",
        primary="AR-23 Liberator",
        secondary="P-2 Peacemaker",
        grenade="G-6 Frag",
        stratagems=(
            "Orbital Precision Strike",
            "Eagle Airstrike",
            "EAT-17 Expendable Anti-Tank",
            "A/G-16 Gatling Sentry",
        ),
    ),
)

AUTOMATON_LOADOUTS: Tuple[LoadoutEntry, ...] = (
    LoadoutEntry(
        armour="FS-05 Marksman",
        primary="R-63CS Diligence Counter Sniper",
        secondary="P-2 Peacemaker",
        grenade="G-16 Impact",
        stratagems=(
            "Orbital Precision Strike",
            "Eagle Airstrike",
            "EAT-17 Expendable Anti-Tank",
            "SH-32 Shield Generator Pack",
        ),
    ),
    LoadoutEntry(
        armour="B-27 Fortified Commando",
        primary="JAR-5 Dominator",
        secondary="GP-31 Grenade Pistol",
        grenade="G-12 High Explosive",
        stratagems=(
            "Orbital Railcannon Strike",
            "Eagle 500kg Bomb",
            "RS-422 Railgun",
            "B-1 Supply Pack",
        ),
    ),
    LoadoutEntry(
        armour="FS-55 Devastator",
        primary="AR-23P Liberator Penetrator",
        secondary="P-19 Redeemer",
        grenade="G-3 Smoke",
        stratagems=(
            "Orbital 380mm HE Barrage",
            "Eagle 110mm Rocket Pods",
            "FAF-14 Spear",
            "LIFT-850 Jump Pack",
        ),
    ),
    LoadoutEntry(
        armour="DP-53 Savior of the Free",
        primary="PLAS-1 Scorcher",
        secondary="P-4 Senator",
        grenade="G-16 Impact",
        stratagems=(
            "Orbital Laser",
            "Eagle Strafing Run",
            "GR-8 Recoilless Rifle",
            "A/M-12 Mortar Sentry",
        ),
    ),
)

LOADOUT_CATALOGS: Mapping[Faction, Tuple[LoadoutEntry, ...]] = {
    Faction.TERMINIDS: TERMINID_LOADOUTS,
    Faction.AUTOMATONS: AUTOMATON_LOADOUTS,
}


def catalog_for(faction: Faction) -> Sequence[LoadoutEntry]:
    try:
        return LOADOUT_CATALOGS[faction]
    except KeyError:
        raise ValueError(f"No loadout catalog for {faction.name}") from None


def pick_loadout(
    faction: Faction, *, rng: Optional[random.Random] = None
) -> LoadoutEntry:
    """Draw one entry uniformly at random from the faction's catalog."""

    chooser = rng or random
    return chooser.choice(catalog_for(faction))
