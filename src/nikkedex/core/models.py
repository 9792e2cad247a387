# ABOUTME: Domain enums and Pydantic record models for wiki-sourced character data
# ABOUTME: Integer enums keep the persisted JSON compatible with the game's categorical comparisons

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class Rarity(IntEnum):
    R = 0
    SR = 1
    SSR = 2


class Burst(IntEnum):
    I = 0  # noqa: E741
    II = 1
    III = 2
    ALL = 3


class Code(IntEnum):
    """Elemental code of a character."""

    FIRE = 0
    WATER = 1
    ELECTRIC = 2
    IRON = 3
    WIND = 4


class Weapon(IntEnum):
    SHOTGUN = 0
    SUBMACHINE_GUN = 1
    MACHINE_GUN = 2
    ASSAULT_RIFLE = 3
    SNIPER_RIFLE = 4
    ROCKET_LAUNCHER = 5


class Position(IntEnum):
    """Combat role, keyed on the wiki by category link."""

    ATTACKER = 0
    SUPPORTER = 1
    DEFENDER = 2


class Manufacturer(IntEnum):
    ELYSION = 0
    MISSILIS = 1
    TETRA = 2
    PILGRIM = 3
    ABNORMAL = 4


class NikkeListEntry(BaseModel):
    """One card from the wiki's character listing."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Character name taken from the card image alt text")
    url: str = Field(..., description="Absolute URL of the character's wiki page")
    image_url: str = Field(..., description="Portrait URL with the revision suffix stripped")

    @property
    def image_filename(self) -> str:
        """File name used when storing the portrait locally."""
        return self.image_url.rsplit("/", 1)[-1]


class ExtractedNikke(BaseModel):
    """Typed record extracted from a character page.

    Only ever built from a field mapping in which every field succeeded. ``weapon_name``
    is the one field that may legitimately be absent.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    rarity: Rarity
    burst: Burst
    weapon_name: str | None = Field(default=None, description="Absent when the page has no weapon name row")
    squad: str
    code: Code
    weapon_type: Weapon
    position: Position
    manufacturer: Manufacturer


class Nikke(ExtractedNikke):
    """Final persisted record: an extracted record plus its local image file name."""

    image_url: str = Field(..., description="Local portrait file name")

    @classmethod
    def from_extracted(cls, extracted: ExtractedNikke, image_url: str) -> "Nikke":
        return cls(**extracted.model_dump(), image_url=image_url)
