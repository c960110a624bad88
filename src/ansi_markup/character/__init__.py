"""Character-level processing for markup parsing.

Provides the position-tracking source cursor and the entity decoder that the
tokenizer uses while it accumulates text runs.
"""

from .entities import (
    ENTITIES,
    MAX_ENTITY_LENGTH,
    decode_entities,
    escape_text,
    match_entity,
    read_entity,
)
from .stream import SourceCursor

__all__ = [
    "ENTITIES",
    "MAX_ENTITY_LENGTH",
    "decode_entities",
    "escape_text",
    "match_entity",
    "read_entity",
    "SourceCursor",
]
