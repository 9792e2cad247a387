# ABOUTME: Read-only document tree access for the extraction layer
# ABOUTME: BeautifulSoup element helpers and the path navigation language

from .dom import attribute, element_children, first_child, last_child, parse_html, select_one, text
from .navigator import NavigationError, navigate, walk

__all__ = [
    "NavigationError",
    "attribute",
    "element_children",
    "first_child",
    "last_child",
    "navigate",
    "parse_html",
    "select_one",
    "text",
    "walk",
]
