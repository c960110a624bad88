"""Tag vocabulary for the markup language.

Key Components:
    TAG_NAMES: Frozen set of the 37 registered tag names
    is_valid_tag_name: Case-sensitive membership test
    TagCategory: Foreground, bright foreground, background, bright background, style
    STYLE_TABLE: Read-only mapping from tag name to terminal escape sequences
"""

from .registry import (
    COLOR_NAMES,
    STYLE_NAMES,
    TAG_CATEGORIES,
    TAG_NAMES,
    TagCategory,
    color_tag_name,
    is_valid_tag_name,
    suggest_tag_name,
    tag_category,
    tag_names,
)
from .styles import RESET, STYLE_TABLE, StyleSequence, sgr

__all__ = [
    "COLOR_NAMES",
    "STYLE_NAMES",
    "TAG_CATEGORIES",
    "TAG_NAMES",
    "TagCategory",
    "color_tag_name",
    "is_valid_tag_name",
    "suggest_tag_name",
    "tag_category",
    "tag_names",
    "RESET",
    "STYLE_TABLE",
    "StyleSequence",
    "sgr",
]
