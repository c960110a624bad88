"""Tests for the position-tracking source cursor."""

from ansi_markup.character import SourceCursor
from ansi_markup.shared import Position


class TestSourceCursor:
    """Tests for SourceCursor."""

    def test_initial_position(self):
        """Test a new cursor starts at line 1, column 1."""
        cursor = SourceCursor("abc")
        assert cursor.position == Position(0, 1, 1)
        assert not cursor.at_end

    def test_empty_source_is_at_end(self):
        """Test an empty source has nothing to read."""
        cursor = SourceCursor("")
        assert cursor.at_end
        assert cursor.peek() is None

    def test_peek_does_not_consume(self):
        """Test peeking leaves the cursor in place."""
        cursor = SourceCursor("ab")
        assert cursor.peek() == "a"
        assert cursor.peek(1) == "b"
        assert cursor.peek(2) is None
        assert cursor.offset == 0

    def test_advance_updates_column(self):
        """Test advancing within a line moves the column."""
        cursor = SourceCursor("hello")
        assert cursor.advance(3) == "hel"
        assert cursor.position == Position(3, 1, 4)

    def test_advance_over_newline(self):
        """Test a newline starts a new line at column 1."""
        cursor = SourceCursor("ab\ncd")
        cursor.advance(3)
        assert cursor.position == Position(3, 2, 1)
        cursor.advance()
        assert cursor.position == Position(4, 2, 2)

    def test_advance_over_several_newlines(self):
        """Test the column counts from the last newline consumed."""
        cursor = SourceCursor("a\nb\ncd")
        cursor.advance(6)
        assert cursor.position == Position(6, 3, 3)

    def test_tab_and_carriage_return_count_one_column(self):
        """Test only line feeds change the line number."""
        cursor = SourceCursor("\t\rx")
        cursor.advance(2)
        assert cursor.position == Position(2, 1, 3)

    def test_advance_past_end(self):
        """Test advancing beyond the source stops at the end."""
        cursor = SourceCursor("ab")
        assert cursor.advance(5) == "ab"
        assert cursor.at_end
        assert cursor.advance() == ""
        assert cursor.position == Position(2, 1, 3)

    def test_startswith_and_find(self):
        """Test lookahead helpers are relative to the cursor."""
        cursor = SourceCursor("a<b<c")
        cursor.advance(2)
        assert cursor.startswith("b<")
        assert cursor.find("<") == 3
        assert cursor.find(">") == -1
