"""
Tests for turning answer text into display blocks.
"""

import pytest

from ragbooks.formatter import Header, ListBlock, Paragraph, format_response, render_plain


class TestFormatResponse:
    """Test cases for line classification."""

    def test_header_paragraph_and_list(self):
        """Test a markdown header, a paragraph and a bulleted list."""
        text = "# Overview\nMachine learning is powerful.\n- Point one\n- Point two"

        assert format_response(text) == [
            Header(text="Overview"),
            Paragraph(text="Machine learning is powerful."),
            ListBlock(items=["Point one", "Point two"]),
        ]

    @pytest.mark.parametrize("text", ["", None, "\n\n", "   \n\t\n"])
    def test_empty_input(self, text):
        """Test that empty or blank input yields no blocks."""
        assert format_response(text) == []

    def test_list_markers(self):
        """Test dash, star, bullet glyph and numbered markers."""
        text = "- dash\n* star\n• glyph\n12. twelfth"

        assert format_response(text) == [ListBlock(items=["dash", "star", "glyph", "twelfth"])]

    def test_marker_without_space_is_not_list_item(self):
        """Test that a marker must be followed by whitespace."""
        blocks = format_response("-not a list\n3.14 is pi")

        assert blocks == [Paragraph(text="-not a list"), Paragraph(text="3.14 is pi")]

    def test_list_closed_by_other_line(self):
        """Test that a non-list line closes the open list."""
        text = "1. first\n2. second\nBetween the lists.\n- third"

        assert format_response(text) == [
            ListBlock(items=["first", "second"]),
            Paragraph(text="Between the lists."),
            ListBlock(items=["third"]),
        ]

    def test_blank_lines_do_not_close_list(self):
        """Test that blank lines are discarded before classification."""
        assert format_response("- a\n\n   \n- b") == [ListBlock(items=["a", "b"])]

    def test_caps_header(self):
        """Test short all-caps lines become headers."""
        blocks = format_response("KEY POINTS\nSome detail here.")

        assert blocks == [Header(text="KEY POINTS"), Paragraph(text="Some detail here.")]

    def test_long_caps_line_is_paragraph(self):
        """Test all-caps lines of 50 characters or more stay paragraphs."""
        line = "A" * 50

        assert format_response(line) == [Paragraph(text=line)]

    def test_multi_hash_header_and_trimming(self):
        """Test that lines are trimmed and every leading # is stripped."""
        blocks = format_response("   ### Deep dive   \n  Body text.  ")

        assert blocks == [Header(text="Deep dive"), Paragraph(text="Body text.")]

    def test_list_items_keep_inner_markers(self):
        """Test that list items are checked before headers."""
        assert format_response("- # not a header") == [ListBlock(items=["# not a header"])]

    def test_windows_line_endings(self):
        """Test that carriage returns are trimmed with the line."""
        assert format_response("Intro line.\r\n- item\r\n") == [
            Paragraph(text="Intro line."),
            ListBlock(items=["item"]),
        ]

    def test_restartable(self):
        """Test that formatting the same input twice gives the same blocks."""
        text = "SUMMARY\nText.\n* a\n* b"

        assert format_response(text) == format_response(text)

    def test_block_kinds_serialize(self):
        """Test that blocks carry a kind for JSON output."""
        dumped = [block.model_dump() for block in format_response("# T\np\n- i")]

        assert dumped == [
            {"kind": "header", "text": "T"},
            {"kind": "paragraph", "text": "p"},
            {"kind": "list", "items": ["i"]},
        ]


class TestRenderPlain:
    """Test cases for rebuilding marker text from blocks."""

    def test_round_trip_classification(self):
        """Test that reformatting rendered blocks reproduces them."""
        text = (
            "OVERVIEW\n"
            "Machine learning is a field of study.\n"
            "1. Supervised\n"
            "* Unsupervised\n"
            "## Details\n"
            "Neural networks learn representations.\n"
            "- Layers\n"
        )
        blocks = format_response(text)

        assert format_response(render_plain(blocks)) == blocks

    def test_render_markers(self):
        """Test the markers used for each block kind."""
        blocks = [Header(text="Title"), Paragraph(text="Body."), ListBlock(items=["x", "y"])]

        assert render_plain(blocks) == "# Title\nBody.\n- x\n- y"
