"""Tests for code / comment / blank line classification."""

from quality_lens.scanning import LineKind, classify_lines, count_lines


class TestCStyleLines:
    """Test // and /* */ classification."""

    def test_mixed_line_and_block_comments(self):
        """Line comment, code, then a block comment spanning two lines."""
        counts = count_lines("// a\ncode();\n/* b\n*/", "c")
        assert counts.comment == 3
        assert counts.code == 1
        assert counts.blank == 0
        assert counts.total == 4

    def test_single_line_block_closes(self):
        """A /* ... */ on one line does not swallow the next line."""
        kinds = classify_lines("/* one */\nint x = 1;", "c")
        assert kinds == [LineKind.COMMENT, LineKind.CODE]

    def test_blank_inside_block_is_blank(self):
        kinds = classify_lines("/*\n\n*/\nx();", "c")
        assert kinds == [LineKind.COMMENT, LineKind.BLANK, LineKind.COMMENT, LineKind.CODE]

    def test_trailing_comment_is_code(self):
        """A line that starts with code counts as code."""
        assert classify_lines("x(); // note", "c") == [LineKind.CODE]

    def test_whitespace_only_is_blank(self):
        assert classify_lines("   \n\t", "c") == [LineKind.BLANK, LineKind.BLANK]


class TestHashStyleLines:
    """Test # classification."""

    def test_hash_comments(self):
        counts = count_lines("# header\nx = 1\n\n    # indented\n", "hash")
        assert counts.comment == 2
        assert counts.code == 1
        assert counts.blank == 1

    def test_slashes_are_code_in_hash_style(self):
        assert classify_lines("// not a comment", "hash") == [LineKind.CODE]


class TestCountInvariant:
    """Every line lands in exactly one category."""

    def test_total_equals_sum(self):
        text = "/* a */\n\nint b;\n// c\n  \n/*\n d\n*/\nreturn;"
        counts = count_lines(text, "c")
        assert counts.total == len(text.splitlines())
        assert counts.code + counts.comment + counts.blank == counts.total

    def test_empty_text(self):
        counts = count_lines("", "c")
        assert counts.total == 0
