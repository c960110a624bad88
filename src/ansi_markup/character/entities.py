"""Character entity decoding and escaping.

Exactly two entities exist: ``&lt;`` for ``<`` and ``&amp;`` for ``&``. An
``&`` that starts neither is an ordinary character, never an error. Only
``<`` must be escaped for text to survive a round trip through the parser.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .stream import SourceCursor

ENTITIES: Mapping[str, str] = MappingProxyType({"&lt;": "<", "&amp;": "&"})

# Longest entity is "&amp;": four characters of lookahead past the "&".
MAX_ENTITY_LENGTH = max(len(entity) for entity in ENTITIES)


def match_entity(source: str, index: int) -> Optional[Tuple[str, int]]:
    """Match an entity starting at ``source[index]``.

    Args:
        source: Text being scanned
        index: Offset of an ``&`` character

    Returns:
        ``(decoded character, source length)`` or None when nothing matches
    """
    for entity, char in ENTITIES.items():
        if source.startswith(entity, index):
            return char, len(entity)
    return None


def read_entity(cursor: SourceCursor) -> str:
    """Consume an entity, or a lone ``&``, at the cursor and return its text."""
    match = match_entity(cursor.source, cursor.offset)
    if match is None:
        return cursor.advance()
    char, length = match
    cursor.advance(length)
    return char


def decode_entities(text: str) -> str:
    """Resolve every entity in ``text`` in a single left-to-right pass."""
    if "&" not in text:
        return text
    parts = []
    index = 0
    while True:
        amp = text.find("&", index)
        if amp == -1:
            parts.append(text[index:])
            break
        parts.append(text[index:amp])
        match = match_entity(text, amp)
        if match is None:
            parts.append("&")
            index = amp + 1
        else:
            parts.append(match[0])
            index = amp + match[1]
    return "".join(parts)


def escape_text(text: str) -> str:
    """Escape ``&`` and ``<`` so the text parses back to itself."""
    return text.replace("&", "&amp;").replace("<", "&lt;")
