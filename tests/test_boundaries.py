"""Tests for perch.partials.boundaries — pairing marker comments into regions."""

import pytest

from perch.dom import create_document, parse_html
from perch.errors import MarkerError
from perch.partials.boundaries import extract_boundaries
from perch.partials.markers import ReplacementMode


class TestExtractBoundaries:
    def test_single_region(self) -> None:
        doc = create_document("<main><!--frsh-partial:main:0:--><p>hi</p><!--/frsh-partial:main:0:--></main>")
        [boundary] = extract_boundaries(doc)
        assert boundary.name == "main"
        assert boundary.key == ""
        assert boundary.mode is ReplacementMode.REPLACE
        assert [str(node) for node in boundary.content()] == ["<p>hi</p>"]

    def test_document_order_and_depth(self) -> None:
        doc = create_document(
            "<div><section><!--frsh-partial:a:0:-->A<!--/frsh-partial:a:0:--></section></div>"
            "<!--frsh-partial:b:1:k-->B<!--/frsh-partial:b:1:k-->"
        )
        boundaries = extract_boundaries(doc)
        assert [b.ident for b in boundaries] == [("a", ""), ("b", "k")]
        assert boundaries[1].mode is ReplacementMode.APPEND

    def test_markers_share_a_parent(self) -> None:
        doc = create_document("<div><!--frsh-partial:a:0:--></div><!--/frsh-partial:a:0:-->")
        assert extract_boundaries(doc) == []

    def test_unclosed_start_is_ignored(self) -> None:
        doc = create_document("<!--frsh-partial:a:0:--><p>x</p>")
        assert extract_boundaries(doc) == []

    def test_end_must_carry_same_key(self) -> None:
        doc = create_document(
            "<!--frsh-partial:row:0:1-->one<!--/frsh-partial:row:0:2--><!--/frsh-partial:row:0:1-->"
        )
        [boundary] = extract_boundaries(doc)
        assert boundary.key == "1"
        assert [str(node) for node in boundary.content()] == ["one", "/frsh-partial:row:0:2"]

    def test_keyed_regions_are_distinct(self) -> None:
        doc = create_document(
            "<ul>"
            "<!--frsh-partial:row:0:1--><li>1</li><!--/frsh-partial:row:0:1-->"
            "<!--frsh-partial:row:0:2--><li>2</li><!--/frsh-partial:row:0:2-->"
            "</ul>"
        )
        assert [b.ident for b in extract_boundaries(doc)] == [("row", "1"), ("row", "2")]

    def test_empty_region(self) -> None:
        doc = create_document("<!--frsh-partial:a:0:--><!--/frsh-partial:a:0:-->")
        [boundary] = extract_boundaries(doc)
        assert boundary.content() == []

    def test_ordinary_comments_are_ignored(self) -> None:
        doc = create_document("<!-- just a note --><p>text</p>")
        assert extract_boundaries(doc) == []

    def test_accepts_a_subtree(self) -> None:
        soup = parse_html(
            "<aside><!--frsh-partial:x:0:-->x<!--/frsh-partial:x:0:--></aside>"
            "<main><!--frsh-partial:y:0:-->y<!--/frsh-partial:y:0:--></main>"
        )
        assert [b.name for b in extract_boundaries(soup.main)] == ["y"]

    def test_malformed_marker_raises(self) -> None:
        doc = create_document("<!--frsh-partial:a:7:--><!--/frsh-partial:a:7:-->")
        with pytest.raises(MarkerError):
            extract_boundaries(doc)

    def test_boundaries_compare_by_identity(self) -> None:
        html = "<!--frsh-partial:a:0:-->x<!--/frsh-partial:a:0:-->"
        [first] = extract_boundaries(create_document(html))
        [second] = extract_boundaries(create_document(html))
        assert first != second
        assert first.ident == second.ident
