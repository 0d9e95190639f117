"""Pure formatting of API payloads and loadouts into Discord replies."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

import discord

from .constants import DISCORD_MESSAGE_LIMIT
from .models import Faction, LoadoutEntry, as_int, owner_display_name

NO_WAR_STATUS = "No war status data available."
NO_MAJOR_ORDERS = "No major orders available."
NO_DISPATCHES = "No dispatch messages available."
NO_DISPATCH_MESSAGE = "No message available."
NO_CAMPAIGNS = "No active campaigns available."

DEFAULT_ORDER_TITLE = "Major Order"
DEFAULT_ORDER_BRIEF = "No brief available."

CAMPAIGN_FILTER_LIMIT = 10

_PLANET_ID_KEYS = ("planet", "name", "index", "planetId")

LOADOUT_COLOURS = {
    Faction.TERMINIDS: discord.Colour(0xF5B700),
    Faction.AUTOMATONS: discord.Colour(0xD32F2F),
}

LOADOUT_TITLES = {
    Faction.TERMINIDS: "Loadout vs Terminids",
    Faction.AUTOMATONS: "Loadout vs Automatons",
}


def clamp_message(text: str, limit: int = DISCORD_MESSAGE_LIMIT) -> str:
    """Ensure Discord-compatible message length."""

    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def _non_empty_list(value: Any) -> Optional[List[Any]]:
    if isinstance(value, list) and value:
        return value
    return None


def _normalise(value: Any) -> str:
    return str(value).strip().casefold()


def _campaign_label(entry: Any) -> str:
    if isinstance(entry, Mapping) and entry.get("name"):
        return str(entry["name"])
    return str(entry)


def _campaign_keys(campaigns: Sequence[Any]) -> set[str]:
    keys: set[str] = set()
    for entry in campaigns[:CAMPAIGN_FILTER_LIMIT]:
        keys.add(_normalise(_campaign_label(entry)))
        if isinstance(entry, Mapping) and entry.get("planetIndex") is not None:
            keys.add(_normalise(entry["planetIndex"]))
    return keys


def _planet_identifier(planet: Mapping[str, Any]) -> Any:
    for key in _PLANET_ID_KEYS:
        value = planet.get(key)
        if value is not None:
            return value
    return "?"


def _planet_keys(planet: Mapping[str, Any]) -> set[str]:
    return {
        _normalise(planet[key])
        for key in _PLANET_ID_KEYS
        if planet.get(key) is not None
    }


def filter_campaign_planets(
    planets: Iterable[Any], campaigns: Sequence[Any]
) -> List[Mapping[str, Any]]:
    """Keep planets named by the first campaign entries, in planet order."""

    keys = _campaign_keys(campaigns)
    return [
        planet
        for planet in planets
        if isinstance(planet, Mapping) and _planet_keys(planet) & keys
    ]


def format_planet_line(planet: Mapping[str, Any]) -> str:
    return (
        f"Planet {_planet_identifier(planet)}"
        f" | Owner {owner_display_name(planet.get('owner'))}"
        f" | Health {as_int(planet.get('health')):,}"
        f" | Players {as_int(planet.get('players')):,}"
    )


def format_war_status(status: Any, campaigns: Any) -> str:
    if not isinstance(status, Mapping):
        return NO_WAR_STATUS
    planets = _non_empty_list(status.get("planetStatus"))
    campaign_list = _non_empty_list(campaigns)
    if planets is None or campaign_list is None:
        return NO_WAR_STATUS

    active = filter_campaign_planets(planets, campaign_list)
    if not active:
        return NO_WAR_STATUS

    lines = "\n".join(format_planet_line(planet) for planet in active)
    return clamp_message(f"🌌 Galactic War Status:\n{lines}")


def _order_setting(order: Mapping[str, Any]) -> Mapping[str, Any]:
    setting = order.get("setting")
    if isinstance(setting, Mapping):
        return setting
    return order


def _task_target(task: Any) -> int:
    if not isinstance(task, Mapping):
        return 0
    if task.get("targetValue") is not None:
        return as_int(task["targetValue"])
    values = task.get("values")
    if isinstance(values, list) and len(values) > 2:
        return as_int(values[2])
    return 0


def _reward_amount(order: Mapping[str, Any], setting: Mapping[str, Any]) -> Any:
    if order.get("rewardAmount") is not None:
        return order["rewardAmount"]
    reward = setting.get("reward")
    if isinstance(reward, Mapping):
        return reward.get("amount")
    return None


def format_major_order(orders: Any) -> str:
    order_list = _non_empty_list(orders)
    if order_list is None or not isinstance(order_list[0], Mapping):
        return NO_MAJOR_ORDERS

    order = order_list[0]
    setting = _order_setting(order)
    title = setting.get("overrideTitle") or setting.get("title") or DEFAULT_ORDER_TITLE
    brief = setting.get("overrideBrief") or setting.get("brief") or DEFAULT_ORDER_BRIEF

    tasks = setting.get("tasks")
    if not isinstance(tasks, list):
        tasks = []
    progress = order.get("progress")
    if not isinstance(progress, list):
        progress = []

    lines = [f"📜 {title}:", str(brief), "", "Progress:"]
    for index, task in enumerate(tasks):
        current = as_int(progress[index]) if index < len(progress) else 0
        lines.append(f"• Task {index + 1}: {current:,}/{_task_target(task):,}")

    amount = _reward_amount(order, setting)
    if amount is not None:
        lines.extend(["", f"Rewards: Warbond Medals: {amount}"])

    return clamp_message("\n".join(lines))


def format_dispatch(news: Any) -> str:
    entries = _non_empty_list(news)
    if entries is None:
        return NO_DISPATCHES

    latest = entries[-1]
    message = latest.get("message") if isinstance(latest, Mapping) else None
    return clamp_message(f"📢 Latest Dispatch:\n{message or NO_DISPATCH_MESSAGE}")


def format_campaigns(campaigns: Any) -> str:
    entries = _non_empty_list(campaigns)
    if entries is None:
        return NO_CAMPAIGNS

    bullets = "\n".join(f"• {_campaign_label(entry)}" for entry in entries)
    return clamp_message(f"🎖️ Active Campaigns:\n{bullets}")


def build_loadout_embed(faction: Faction, entry: LoadoutEntry) -> discord.Embed:
    embed = discord.Embed(
        title=LOADOUT_TITLES.get(faction, f"Loadout vs {faction.name.title()}"),
        colour=LOADOUT_COLOURS.get(faction, discord.Colour.default()),
    )
    embed.add_field(name="Armour", value=entry.armour, inline=False)
    embed.add_field(name="Primary", value=entry.primary, inline=False)
    embed.add_field(name="Secondary", value=entry.secondary, inline=False)
    embed.add_field(name="Grenades", value=entry.grenade, inline=False)
    embed.add_field(name="Stratagems", value=", ".join(entry.stratagems), inline=False)
    return embed
