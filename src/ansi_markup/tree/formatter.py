"""Output formatting for parsed documents.

Turns a :class:`Document` back into markup, plain text, a dictionary or JSON.
Markup output escapes text so that parsing it again yields an equal tree.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Optional

from ansi_markup.character import escape_text
from ansi_markup.shared import get_logger

from .builder import Document, Element, Node, Text


class OutputFormat(Enum):
    """Supported output formats."""

    MARKUP = "markup"
    PLAIN_TEXT = "text"
    DICTIONARY = "dict"
    JSON = "json"


def _write_markup(node: Node, parts: List[str]) -> None:
    if isinstance(node, Text):
        parts.append(escape_text(node.content))
        return
    parts.append(f"<{node.tag_name}>")
    for child in node.children:
        _write_markup(child, parts)
    parts.append(f"</{node.tag_name}>")


def to_markup(document: Document) -> str:
    """Serialize a document to markup source."""
    parts: List[str] = []
    for node in document.children:
        _write_markup(node, parts)
    return "".join(parts)


def to_plain_text(document: Document) -> str:
    """Return the decoded text of a document with all tags dropped."""
    return document.text_content


def to_dict(document: Document) -> Dict[str, Any]:
    """Convert a document to nested dictionaries including spans."""
    return document.to_dict()


def to_json(document: Document, indent: Optional[int] = 2) -> str:
    """Convert a document to JSON."""
    return json.dumps(to_dict(document), indent=indent, ensure_ascii=False)


class OutputFormatter:
    """Formats documents into any :class:`OutputFormat`."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "output_formatter")

    def format(
        self,
        document: Document,
        output_format: OutputFormat = OutputFormat.MARKUP,
        json_indent: Optional[int] = 2
    ) -> Any:
        """Format a document.

        Args:
            document: Document to format
            output_format: Target format
            json_indent: Indentation for JSON output; None for compact

        Returns:
            A string for MARKUP, PLAIN_TEXT and JSON; a dict for DICTIONARY
        """
        self.logger.debug(
            "Formatting document",
            extra={"output_format": output_format.value, "node_count": len(document)},
        )
        if output_format is OutputFormat.MARKUP:
            return to_markup(document)
        if output_format is OutputFormat.PLAIN_TEXT:
            return to_plain_text(document)
        if output_format is OutputFormat.DICTIONARY:
            return to_dict(document)
        return to_json(document, indent=json_indent)


def element(tag_name: str, *children: Any) -> Element:
    """Build an element programmatically; string children become text nodes.

    >>> to_markup(Document((element("red", "a < b"),)))
    '<red>a &lt; b</red>'
    """
    return Element(
        tag_name,
        tuple(Text(child) if isinstance(child, str) else child for child in children),
    )
