"""Tests for table-of-contents generation and refresh."""

from notelint.core.parser import MarkdownParser
from notelint.core.toc import (
    build_toc,
    find_toc_region,
    is_toc_stale,
    render_toc,
    update_toc,
)

from .conftest import LARAVEL_QUESTIONS

DOC = """\
# Title

<!-- toc -->
<!-- tocstop -->

## Routing

### Route groups

#### Too deep

## Routing

## `Eloquent` [ORM]
"""


def parse(text):
    return MarkdownParser().parse(text)


class TestBuildToc:
    def test_levels_and_anchors(self):
        entries = build_toc(parse(DOC))

        assert [(e.title, e.level, e.anchor) for e in entries] == [
            ("Routing", 2, "routing"),
            ("Route groups", 3, "route-groups"),
            ("Routing", 2, "routing-1"),
            ("Eloquent [ORM]", 2, "eloquent-orm"),
        ]
        assert entries[1].hierarchy == [
            {"level": 2, "title": "Routing"},
            {"level": 3, "title": "Route groups"},
        ]

    def test_custom_levels(self):
        entries = build_toc(parse(DOC), min_level=1, max_level=4)
        assert [e.level for e in entries] == [1, 2, 3, 4, 2, 2]


class TestRenderToc:
    def test_nested_list(self):
        rendered = render_toc(build_toc(parse(DOC)))
        assert rendered.splitlines() == [
            "- [Routing](#routing)",
            "  - [Route groups](#route-groups)",
            "- [Routing](#routing-1)",
            "- [Eloquent \\[ORM\\]](#eloquent-orm)",
        ]

    def test_empty(self):
        assert render_toc([]) == ""


class TestUpdateToc:
    def test_find_region(self):
        assert find_toc_region(DOC) == (2, 3)
        assert find_toc_region("# No markers\n") is None

    def test_alternate_end_marker(self):
        assert find_toc_region("<!-- TOC -->\n- x\n<!-- /toc -->\n") == (0, 2)

    def test_update_inserts_entries(self):
        new_text, changed = update_toc(DOC)

        assert changed
        lines = new_text.splitlines()
        start = lines.index("<!-- toc -->")
        assert lines[start + 1] == ""
        assert lines[start + 2] == "- [Routing](#routing)"
        assert "<!-- tocstop -->" in lines
        assert new_text.endswith("\n")
        assert "## Routing" in new_text

    def test_update_is_idempotent(self):
        once, _ = update_toc(DOC)
        twice, changed = update_toc(once)
        assert not changed
        assert twice == once

    def test_no_markers_leaves_text(self):
        text = "# Title\n\n## Section\n"
        assert update_toc(text) == (text, False)

    def test_staleness(self):
        assert is_toc_stale(parse(DOC))
        assert not is_toc_stale(parse(update_toc(DOC)[0]))
        assert not is_toc_stale(parse(LARAVEL_QUESTIONS))
        assert not is_toc_stale(parse("# No markers\n"))


class TestFencedMarkers:
    EXAMPLE = (
        "# N\n"
        "\n"
        "```markdown\n"
        "<!-- toc -->\n"
        "- [x](#x)\n"
        "<!-- tocstop -->\n"
        "```\n"
        "\n"
        "## Real\n"
        "\n"
        "A\n"
    )

    def test_markers_inside_fence_are_ignored(self):
        assert find_toc_region(self.EXAMPLE) is None
        assert update_toc(self.EXAMPLE) == (self.EXAMPLE, False)
        assert not is_toc_stale(parse(self.EXAMPLE))

    def test_real_region_after_fenced_example(self):
        text = self.EXAMPLE + "\n<!-- toc -->\n<!-- tocstop -->\n"
        new_text, changed = update_toc(text)

        assert changed
        assert new_text.startswith(self.EXAMPLE)
        assert new_text.endswith("<!-- toc -->\n\n- [Real](#real)\n\n<!-- tocstop -->\n")


def test_marker_spacing_and_case():
    assert find_toc_region("<!--toc-->\n<!--  TOCSTOP -->\n") == (0, 1)
    assert find_toc_region("<!-- table of contents -->\n<!-- tocstop -->\n") is None
