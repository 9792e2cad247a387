# ABOUTME: Element-only accessors over BeautifulSoup trees, returning Results instead of None
# ABOUTME: Anchor queries, structural steps and attribute/text reads used by the field extractors

from bs4 import BeautifulSoup, Tag

from nikkedex.core.result import Err, Ok, Result, from_optional


def parse_html(markup: str | bytes) -> BeautifulSoup:
    """Parse markup into a document tree."""
    return BeautifulSoup(markup, "html.parser")


def element_children(element: Tag) -> list[Tag]:
    """Child elements of a node, skipping text and comment nodes."""
    return [child for child in element.children if isinstance(child, Tag)]


def first_element_child(element: Tag) -> Tag | None:
    for child in element.children:
        if isinstance(child, Tag):
            return child
    return None


def last_element_child(element: Tag) -> Tag | None:
    for child in reversed(element.contents):
        if isinstance(child, Tag):
            return child
    return None


def next_element_sibling(element: Tag) -> Tag | None:
    for sibling in element.next_siblings:
        if isinstance(sibling, Tag):
            return sibling
    return None


def previous_element_sibling(element: Tag) -> Tag | None:
    for sibling in element.previous_siblings:
        if isinstance(sibling, Tag):
            return sibling
    return None


def parent_element(element: Tag) -> Tag | None:
    # The document object is a valid parent; the document itself has none.
    return element.parent


def first_child(element: Tag) -> Result[Tag, str]:
    return from_optional(first_element_child(element), "element has no element child")


def last_child(element: Tag) -> Result[Tag, str]:
    return from_optional(last_element_child(element), "element has no element child")


def select_one(document: Tag, selector: str) -> Result[Tag, str]:
    """Locate an anchor node by CSS selector."""
    return from_optional(document.select_one(selector), lambda: f"could not find {selector} in document")


def attribute(element: Tag, name: str) -> Result[str, str]:
    """Read an attribute; a missing attribute is an error, never an empty string."""
    value = element.get(name)
    if value is None:
        return Err(f'missing "{name}" attribute')
    if isinstance(value, list):
        value = " ".join(value)
    return Ok(value)


def text(element: Tag) -> Result[str, str]:
    """Read the stripped text content of a node; blank text is reported as missing."""
    content = element.get_text().strip()
    if not content:
        return Err(f"missing text in <{element.name}>")
    return Ok(content)
