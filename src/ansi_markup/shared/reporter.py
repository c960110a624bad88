"""Human-readable rendering of parse errors.

The reporter is a pure presentation layer: it reads the fields of a
:class:`ParseError` and never changes them.
"""

from typing import List, Optional

from ansi_markup.tags.registry import suggest_tag_name

from .errors import ErrorKind, ParseError

def _display(value: str) -> str:
    """Escape non-printable characters the way ``repr`` shows them."""
    return "".join(
        char if char.isprintable() else repr(char)[1:-1] for char in value
    )


def describe(error: ParseError) -> str:
    """Return the one-phrase description of an error."""
    if error.kind is ErrorKind.MALFORMED_TAG:
        return "Malformed tag"
    if error.kind is ErrorKind.UNKNOWN_TAG_NAME:
        return f"Unknown tag name '{_display(error.found or '')}'"
    if error.kind is ErrorKind.UNCLOSED_TAG:
        return f"Unclosed tag '{error.expected}'"
    if error.kind is ErrorKind.MISMATCHED_CLOSING_TAG:
        if error.expected is None:
            return f"Unexpected closing tag '</{error.found}>'"
        return f"Mismatched closing tag '</{error.found}>'"
    return "Maximum nesting depth exceeded"


def format_error(error: ParseError) -> str:
    """Format an error as ``Error: ... at line L, column C``.

    A second ``Expected:`` line is added when the error carries an expected
    value, quoting both sides when a found value is present too.
    """
    lines = [
        f"Error: {describe(error)} at line {error.position.line}, "
        f"column {error.position.column}"
    ]
    if error.expected is not None and error.found is not None:
        lines.append(
            f"Expected: '{_display(error.expected)}' "
            f"but found '{_display(error.found)}'"
        )
    elif error.expected is not None:
        lines.append(f"Expected: {_display(error.expected)}")
    return "\n".join(lines)


def _source_line(source: str, line: int) -> Optional[str]:
    lines = source.split("\n")
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return None


def format_error_with_context(error: ParseError, source: str) -> str:
    """Format an error followed by the offending source line and a caret.

    Args:
        error: Error to format
        source: The text that was parsed

    Returns:
        Multi-line message suitable for terminal output
    """
    lines: List[str] = [format_error(error)]

    source_line = _source_line(source, error.position.line)
    if source_line is not None:
        gutter = f"{error.position.line} | "
        lines.append(f"{gutter}{_display(source_line)}")
        # Escaped control characters widen the line before the caret.
        prefix = _display(source_line[:error.position.column - 1])
        lines.append(" " * (len(gutter) + len(prefix)) + "^")

    if error.kind is ErrorKind.UNKNOWN_TAG_NAME and error.found:
        suggestion = suggest_tag_name(error.found)
        if suggestion is not None:
            lines.append(
                f"Hint: tag names are case-sensitive; did you mean '{suggestion}'?"
            )

    return "\n".join(lines)
