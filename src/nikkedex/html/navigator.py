# ABOUTME: Interpreter for the single-character tree navigation language (^ > < v $)
# ABOUTME: Reports the consumed path prefix when the document diverges from the expected shape

from collections.abc import Callable
from dataclasses import dataclass

from bs4 import Tag

from nikkedex.core.result import Err, Ok, Result
from nikkedex.html.dom import (
    first_element_child,
    last_element_child,
    next_element_sibling,
    parent_element,
    previous_element_sibling,
)

# directive -> (step, failure reason)
STEPS: dict[str, tuple[Callable[[Tag], Tag | None], str]] = {
    "^": (parent_element, "missing parent"),
    ">": (next_element_sibling, "missing next sibling"),
    "<": (previous_element_sibling, "missing previous sibling"),
    "v": (first_element_child, "missing child"),
    "$": (last_element_child, "missing child"),
}


@dataclass(frozen=True, slots=True)
class NavigationError:
    """A navigation step found no node.

    Attributes:
        reason: What was missing, e.g. ``missing child``
        directive: The directive that could not be satisfied
        prefix: Directives consumed successfully before the failing one
        path: The full path being walked
    """

    reason: str
    directive: str
    prefix: str
    path: str

    def __str__(self) -> str:
        return f"{self.reason} at path '{self.prefix}'"


def navigate(node: Tag, path: str) -> Result[Tag, NavigationError]:
    """Walk ``path`` from ``node``, one structural step per directive.

    Absence is always returned as an Err, never raised: documents are untrusted input
    and one missing element must not abort a whole batch.
    """
    current = node
    for index, directive in enumerate(path):
        step = STEPS.get(directive)
        if step is None:
            return Err(NavigationError(f"unknown directive '{directive}'", directive, path[:index], path))

        move, reason = step
        reached = move(current)
        if reached is None:
            return Err(NavigationError(reason, directive, path[:index], path))
        current = reached

    return Ok(current)


def walk(path: str) -> Callable[[Tag], Result[Tag, NavigationError]]:
    """Curried ``navigate`` for use in ``flat_map`` chains."""

    def _walk(node: Tag) -> Result[Tag, NavigationError]:
        return navigate(node, path)

    return _walk
