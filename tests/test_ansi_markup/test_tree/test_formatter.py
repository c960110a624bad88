"""Tests for document output formatting."""

import json

import pytest

from ansi_markup.tokenization import tokenize
from ansi_markup.tree import (
    Document,
    Element,
    OutputFormat,
    OutputFormatter,
    Text,
    build,
    element,
    to_dict,
    to_json,
    to_markup,
    to_plain_text,
)


def _parse(source):
    return build(tokenize(source))


class TestToMarkup:
    """Tests for markup serialization."""

    def test_escapes_text(self):
        """Test special characters in text are escaped."""
        document = Document((element("red", "a < b & c"),))
        assert to_markup(document) == "<red>a &lt; b &amp; c</red>"

    def test_empty_element(self):
        """Test an empty element keeps both tags."""
        assert to_markup(Document((Element("dim"),))) == "<dim></dim>"

    @pytest.mark.parametrize("source", [
        "",
        "plain",
        "<red>Hello <bold>World</bold>!</red>",
        "<blue>5 &lt; 10</blue>",
        "a &amp; b\n<bgBrightRed></bgBrightRed>",
    ])
    def test_canonical_source_unchanged(self, source):
        """Test canonical markup serializes back to itself."""
        assert to_markup(_parse(source)) == source

    def test_round_trip(self):
        """Test serializing and parsing again gives an equal tree."""
        document = _parse("AT&T <underline>x &lt;y&gt;</underline>")
        assert _parse(to_markup(document)) == document

    def test_idempotent(self):
        """Test a second serialization equals the first."""
        first = to_markup(_parse("AT&T &gt; <italic>&</italic>"))
        assert first == "AT&amp;T &amp;gt; <italic>&amp;</italic>"
        assert to_markup(_parse(first)) == first

    def test_built_tree_round_trip(self):
        """Test a programmatically built tree survives a round trip."""
        document = Document((
            Text("<&>"),
            element("bgRed", element("bold", "x"), "&lt;"),
        ))
        assert _parse(to_markup(document)) == document


class TestOtherFormats:
    """Tests for text, dict and JSON output."""

    def test_plain_text(self):
        """Test tags are dropped and entities decoded."""
        document = _parse("<red>5 &lt; <bold>10</bold></red>!")
        assert to_plain_text(document) == "5 < 10!"

    def test_to_dict(self):
        """Test dictionary structure with spans."""
        result = to_dict(_parse("<red>a</red>"))
        node = result["children"][0]
        assert node["type"] == "element"
        assert node["tag"] == "red"
        assert node["span"]["start"] == {"offset": 0, "line": 1, "column": 1}
        assert node["span"]["end"]["offset"] == 12
        assert node["children"] == [{
            "type": "text",
            "content": "a",
            "span": {
                "start": {"offset": 5, "line": 1, "column": 6},
                "end": {"offset": 6, "line": 1, "column": 7},
            },
        }]

    def test_to_json(self):
        """Test JSON output is valid and keeps non-ASCII text."""
        output = to_json(_parse("<red>é</red>"))
        assert "é" in output
        assert json.loads(output)["children"][0]["children"][0]["content"] == "é"

    def test_compact_json(self):
        """Test JSON without indentation is a single line."""
        assert "\n" not in to_json(_parse("<red>a</red>"), indent=None)


class TestOutputFormatter:
    """Tests for OutputFormatter."""

    def test_dispatch(self):
        """Test each output format."""
        formatter = OutputFormatter(correlation_id="fmt-1")
        document = _parse("<red>a &lt; b</red>")

        assert formatter.format(document) == "<red>a &lt; b</red>"
        assert formatter.format(document, OutputFormat.PLAIN_TEXT) == "a < b"
        assert formatter.format(document, OutputFormat.DICTIONARY) == document.to_dict()
        parsed = json.loads(formatter.format(document, OutputFormat.JSON))
        assert parsed == document.to_dict()

    def test_format_values(self):
        """Test enum values used on the command line."""
        assert OutputFormat("text") is OutputFormat.PLAIN_TEXT
        assert OutputFormat("json") is OutputFormat.JSON


class TestElementHelper:
    """Tests for the element builder helper."""

    def test_strings_become_text(self):
        """Test string children are wrapped in text nodes."""
        assert element("red", "a", Element("bold")) == Element(
            "red", (Text("a"), Element("bold"))
        )

    def test_unknown_tag(self):
        """Test the helper validates tag names."""
        with pytest.raises(ValueError):
            element("orange", "x")
