# ABOUTME: Tests for the tree navigation language
# ABOUTME: Directive semantics, element-only steps and error paths naming the consumed prefix

import pytest

from nikkedex.core.result import Err, Ok
from nikkedex.html import NavigationError, navigate, parse_html, walk

TREE = """<div id="root">
  text before
  <section id="a">
    <p id="a1"><b id="a1b">bold</b></p>
    <!-- comment -->
    <p id="a2"></p>
    <p id="a3">tail</p>
  </section>
  <section id="b"></section>
</div>"""


@pytest.fixture
def root():
    return parse_html(TREE).select_one("#root")


def _id(result):
    return result.unwrap()["id"]


class TestDirectives:
    """Test each directive on an element-only tree view."""

    def test_first_child_skips_text(self, root):
        assert _id(navigate(root, "v")) == "a"

    def test_last_child(self, root):
        assert _id(navigate(root, "$")) == "b"

    def test_next_sibling_skips_comments(self, root):
        assert _id(navigate(root, "vv>")) == "a2"

    def test_previous_sibling(self, root):
        assert _id(navigate(root, "v$<")) == "a2"

    def test_parent(self, root):
        assert _id(navigate(root, "vv^")) == "a"

    def test_empty_path_is_identity(self, root):
        assert navigate(root, "") == Ok(root)

    def test_composite_path(self, root):
        assert _id(navigate(root, "vvv")) == "a1b"


class TestErrors:
    """Test error reporting for paths that leave the tree."""

    def test_missing_child_names_prefix(self, root):
        result = navigate(root, "$v")
        assert isinstance(result, Err)
        error = result.unwrap_err()
        assert str(error) == "missing child at path '$'"
        assert error.directive == "v"
        assert error.prefix == "$"
        assert error.path == "$v"

    def test_first_step_failure_names_root(self, root):
        leaf = root.select_one("#a2")
        assert str(navigate(leaf, "v").unwrap_err()) == "missing child at path ''"

    def test_missing_siblings(self, root):
        assert str(navigate(root, "v<").unwrap_err()) == "missing previous sibling at path 'v'"
        assert str(navigate(root, "$>").unwrap_err()) == "missing next sibling at path '$'"

    def test_parent_of_document_is_missing(self):
        document = parse_html("<p>x</p>")
        assert navigate(document, "^").unwrap_err().reason == "missing parent"

    def test_parent_of_top_level_element_is_document(self):
        document = parse_html("<p>x</p>")
        paragraph = document.select_one("p")
        assert navigate(paragraph, "^") == Ok(document)

    def test_unknown_directive(self, root):
        error = navigate(root, "vx").unwrap_err()
        assert error.reason == "unknown directive 'x'"
        assert str(error) == "unknown directive 'x' at path 'v'"

    def test_error_is_a_value(self, root):
        error = navigate(root, "$v").unwrap_err()
        assert error == NavigationError("missing child", "v", "$", "$v")


class TestWalk:
    """Test the curried form."""

    def test_walk_matches_navigate(self, root):
        assert walk("v$")(root) == navigate(root, "v$")

    def test_walk_in_flat_map_chain(self, root):
        result = Ok(root).flat_map(walk("v")).flat_map(walk("$"))
        assert _id(result) == "a3"

    def test_walk_never_mutates(self, root):
        before = str(root)
        walk("vvv^^>")(root)
        assert str(root) == before
