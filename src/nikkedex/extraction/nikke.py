# ABOUTME: Field extractors for character pages and the character listing page
# ABOUTME: Record extraction is all-or-nothing per record; list extraction is best effort per card

from urllib.parse import urljoin

from bs4 import Tag

from nikkedex.core.models import (
    Burst,
    Code,
    ExtractedNikke,
    Manufacturer,
    NikkeListEntry,
    Position,
    Rarity,
    Weapon,
)
from nikkedex.core.result import Err, Ok, Result
from nikkedex.extraction.assembler import ErrorReport, build_record
from nikkedex.extraction.parsers import (
    parse_burst,
    parse_code,
    parse_manufacturer,
    parse_position,
    parse_rarity,
    parse_weapon,
)
from nikkedex.html.dom import attribute, element_children, first_child, last_child, select_one, text
from nikkedex.html.navigator import navigate, walk
from nikkedex.utils.logging import get_logger

logger = get_logger(__name__)

TITLE_ANCHOR = "[data-source=title]"
WEAPON_NAME_ANCHOR = "[data-source=weaponname]"
SQUAD_ANCHOR = "[data-source=squad]"
HORIZONTAL_GROUP = ".pi-horizontal-group"
LIST_CONTAINER = "div.lcs-container"
REVISION_MARKER = "/revision/latest/"

# Paths from the infobox horizontal groups to the icon carrying each value
RARITY_PATH = "$vvvvv"
BURST_PATH = "$v$vvv"
CODE_PATH = "$vvvv"
WEAPON_TYPE_PATH = "$vv>vv"
POSITION_PATH = "$v$<vv"
MANUFACTURER_PATH = "$v$vv"


def horizontal_groups(document: Tag) -> tuple[Result[Tag, str], Result[Tag, str]]:
    """Locate the two infobox horizontal groups once per record."""
    groups = document.select(HORIZONTAL_GROUP)

    def _nth(index: int) -> Result[Tag, str]:
        if index < len(groups):
            return Ok(groups[index])
        return Err(f"could not find {HORIZONTAL_GROUP} #{index + 1} in document")

    return _nth(0), _nth(1)


def _read_attribute(anchor: Result[Tag, str], path: str, name: str) -> Result[str, str]:
    return anchor.flat_map(walk(path)).flat_map(lambda node: attribute(node, name))


def extract_name(document: Tag) -> Result[str, str]:
    return select_one(document, TITLE_ANCHOR).flat_map(text)


def extract_rarity(group: Result[Tag, str]) -> Result[Rarity, str]:
    return _read_attribute(group, RARITY_PATH, "alt").flat_map(parse_rarity)


def extract_burst(group: Result[Tag, str]) -> Result[Burst, str]:
    return _read_attribute(group, BURST_PATH, "alt").flat_map(parse_burst)


def extract_weapon_name(document: Tag) -> Result[str | None, str]:
    """Weapon name is optional: a missing row means the field does not apply."""
    found = select_one(document, WEAPON_NAME_ANCHOR).flat_map(last_child).flat_map(text)
    return Ok(found.unwrap_or(None))


def extract_squad(document: Tag) -> Result[str, str]:
    return select_one(document, SQUAD_ANCHOR).flat_map(last_child).flat_map(text)


def extract_code(group: Result[Tag, str]) -> Result[Code, str]:
    return _read_attribute(group, CODE_PATH, "title").flat_map(parse_code)


def extract_weapon_type(group: Result[Tag, str]) -> Result[Weapon, str]:
    return _read_attribute(group, WEAPON_TYPE_PATH, "title").flat_map(parse_weapon)


def extract_position(group: Result[Tag, str]) -> Result[Position, str]:
    return _read_attribute(group, POSITION_PATH, "title").flat_map(parse_position)


def extract_manufacturer(group: Result[Tag, str]) -> Result[Manufacturer, str]:
    return _read_attribute(group, MANUFACTURER_PATH, "title").flat_map(parse_manufacturer)


def extract_nikke(document: Tag) -> Result[ExtractedNikke, ErrorReport]:
    """Extract a full character record from a character page.

    Returns the record only when every field could be read; otherwise an error report
    keyed by each failing field.
    """
    first_group, second_group = horizontal_groups(document)

    return build_record(
        ExtractedNikke,
        {
            "name": extract_name(document),
            "rarity": extract_rarity(first_group),
            "burst": extract_burst(first_group),
            "weapon_name": extract_weapon_name(document),
            "squad": extract_squad(document),
            "code": extract_code(second_group),
            "weapon_type": extract_weapon_type(second_group),
            "position": extract_position(second_group),
            "manufacturer": extract_manufacturer(second_group),
        },
    )


def strip_revision(url: str) -> str:
    """Drop the ``/revision/latest/...`` suffix the wiki CDN appends to image URLs."""
    index = url.find(REVISION_MARKER)
    return url[:index] if index >= 0 else url


def _image_source(image: Tag) -> Result[str, str]:
    return (
        attribute(image, "data-src")
        .or_else(lambda _: attribute(image, "src"))
        .map_err(lambda _: "could not find image url")
    )


def _resolve_url(base_url: str, href: str) -> Result[str, str]:
    try:
        return Ok(urljoin(base_url, href))
    except ValueError:
        return Err(f"invalid href '{href}'")


def extract_list_entry(card: Tag, base_url: str) -> Result[NikkeListEntry, ErrorReport]:
    """Extract one listing card: ``<a href><img alt data-src/></a>`` two levels down."""
    link = navigate(card, "vv").map_err(lambda error: f"could not find <a>: {error}")
    image = link.flat_map(first_child).map_err(lambda error: f"missing <img>: {error}")

    return build_record(
        NikkeListEntry,
        {
            "name": image.flat_map(lambda node: attribute(node, "alt")),
            "url": link.flat_map(lambda node: attribute(node, "href")).flat_map(
                lambda href: _resolve_url(base_url, href)
            ),
            "image_url": image.flat_map(_image_source).map(strip_revision),
        },
    )


def extract_nikke_list(document: Tag, base_url: str) -> list[NikkeListEntry]:
    """Extract every readable card from the listing page.

    A card that cannot be read is logged and skipped; it never aborts the list.
    """
    container = select_one(document, LIST_CONTAINER).flat_map(walk("$$")).map(element_children)

    if container.is_err():
        logger.error("Could not locate character list", selector=LIST_CONTAINER, error=str(container.unwrap_err()))
        return []

    cards = container.unwrap()
    entries: list[NikkeListEntry] = []
    for index, card in enumerate(cards):
        match extract_list_entry(card, base_url):
            case Ok(entry):
                entries.append(entry)
            case Err(errors):
                logger.warning("Skipping unreadable character card", card_index=index, errors=errors)

    logger.debug("Extracted character list", cards=len(cards), entries=len(entries))
    return entries
