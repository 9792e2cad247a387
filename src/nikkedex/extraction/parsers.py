# ABOUTME: Closed-set parsers from raw wiki strings to domain enums
# ABOUTME: Unknown input is always an Err naming the raw string, never a default value

import re

from nikkedex.core.models import Burst, Code, Manufacturer, Position, Rarity, Weapon
from nikkedex.core.result import Err, Ok, Result

RARITIES: dict[str, Rarity] = {
    "R": Rarity.R,
    "Sr": Rarity.SR,
    "Ssr": Rarity.SSR,
}

BURSTS: dict[str, Burst] = {
    "Step1": Burst.I,
    "Step2": Burst.II,
    "Step3": Burst.III,
    "StepAll": Burst.ALL,
}

CODES: dict[str, Code] = {
    "(Fire)": Code.FIRE,
    "(Water)": Code.WATER,
    "(Electric)": Code.ELECTRIC,
    "(Iron)": Code.IRON,
    "(Wind)": Code.WIND,
}

WEAPONS: dict[str, Weapon] = {
    "Shotgun": Weapon.SHOTGUN,
    "Submachine Gun": Weapon.SUBMACHINE_GUN,
    "Machine Gun": Weapon.MACHINE_GUN,
    "Assault Rifle": Weapon.ASSAULT_RIFLE,
    "Sniper Rifle": Weapon.SNIPER_RIFLE,
    "Rocket Launcher": Weapon.ROCKET_LAUNCHER,
}

POSITIONS: dict[str, Position] = {
    "Category:Attackers": Position.ATTACKER,
    "Category:Supporters": Position.SUPPORTER,
    "Category:Defenders": Position.DEFENDER,
}

MANUFACTURERS: dict[str, Manufacturer] = {
    "Elysion": Manufacturer.ELYSION,
    "Missilis Industry": Manufacturer.MISSILIS,
    "Tetra Line": Manufacturer.TETRA,
    "Pilgrim": Manufacturer.PILGRIM,
    "Abnormal": Manufacturer.ABNORMAL,
}

_CODE_TOKEN = re.compile(r"\(\w+\)")


def _lookup[V](table: dict[str, V], raw: str, kind: str) -> Result[V, str]:
    if raw not in table:
        return Err(f"unknown {kind} '{raw}'")
    return Ok(table[raw])


def parse_rarity(raw: str) -> Result[Rarity, str]:
    """Parse a rarity badge alt text such as ``Ssr``."""
    return _lookup(RARITIES, raw, "rarity")


def parse_burst(raw: str) -> Result[Burst, str]:
    """Parse a burst icon alt text such as ``Step2``."""
    return _lookup(BURSTS, raw, "burst")


def parse_code(raw: str) -> Result[Code, str]:
    """Parse an element code from the first parenthesised token, e.g. ``Code (Fire)``."""
    token = _CODE_TOKEN.search(raw)
    if token is None or token.group(0) not in CODES:
        return Err(f"unknown element code '{raw}'")
    return Ok(CODES[token.group(0)])


def parse_weapon(raw: str) -> Result[Weapon, str]:
    return _lookup(WEAPONS, raw, "weapon")


def parse_position(raw: str) -> Result[Position, str]:
    """Parse a role from its category link title such as ``Category:Attackers``."""
    return _lookup(POSITIONS, raw, "position")


def parse_manufacturer(raw: str) -> Result[Manufacturer, str]:
    return _lookup(MANUFACTURERS, raw, "manufacturer")
