"""The fixed vocabulary of markup tag names.

Thirty-seven names in five categories. The registry is module-level constant
state and is never mutated, so concurrent parses share it without locking.
Lookups are exact and case-sensitive: ``Red`` is not ``red``.
"""

from enum import Enum, auto
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple


class TagCategory(Enum):
    """Groups of tag names sharing a rendering behaviour."""

    FOREGROUND = auto()
    BRIGHT_FOREGROUND = auto()
    BACKGROUND = auto()
    BRIGHT_BACKGROUND = auto()
    STYLE = auto()


COLOR_NAMES: Tuple[str, ...] = (
    "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white",
)
STYLE_NAMES: Tuple[str, ...] = (
    "bold", "dim", "italic", "underline", "strikethrough",
)


COLOR_CATEGORIES: Tuple[TagCategory, ...] = (
    TagCategory.FOREGROUND,
    TagCategory.BRIGHT_FOREGROUND,
    TagCategory.BACKGROUND,
    TagCategory.BRIGHT_BACKGROUND,
)

_COLOR_PREFIXES = {
    TagCategory.FOREGROUND: "",
    TagCategory.BRIGHT_FOREGROUND: "bright",
    TagCategory.BACKGROUND: "bg",
    TagCategory.BRIGHT_BACKGROUND: "bgBright",
}


def color_tag_name(category: TagCategory, color: str) -> str:
    """Build the tag name for ``color`` in a color category.

    >>> color_tag_name(TagCategory.BRIGHT_BACKGROUND, "red")
    'bgBrightRed'
    """
    prefix = _COLOR_PREFIXES[category]
    return f"{prefix}{color.capitalize()}" if prefix else color


def _build_categories() -> Dict[str, TagCategory]:
    categories: Dict[str, TagCategory] = {}
    for category in COLOR_CATEGORIES:
        for color in COLOR_NAMES:
            categories[color_tag_name(category, color)] = category
    for style in STYLE_NAMES:
        categories[style] = TagCategory.STYLE
    return categories


TAG_CATEGORIES: Mapping[str, TagCategory] = MappingProxyType(_build_categories())
TAG_NAMES: FrozenSet[str] = frozenset(TAG_CATEGORIES)

_CASEFOLDED: Mapping[str, str] = MappingProxyType(
    {name.casefold(): name for name in TAG_CATEGORIES}
)


def is_valid_tag_name(name: str) -> bool:
    """Check whether ``name`` is a registered tag name (exact match)."""
    return name in TAG_NAMES


def tag_category(name: str) -> TagCategory:
    """Return the category of a registered tag name.

    Raises:
        KeyError: If ``name`` is not registered
    """
    return TAG_CATEGORIES[name]


def tag_names(category: Optional[TagCategory] = None) -> Tuple[str, ...]:
    """Return registered names in declaration order, optionally filtered."""
    return tuple(
        name for name, tag_cat in TAG_CATEGORIES.items()
        if category is None or tag_cat is category
    )


def suggest_tag_name(name: str) -> Optional[str]:
    """Return the registered name matching ``name`` ignoring case.

    Only used to build hints for error messages; the parser itself never
    folds case.
    """
    suggestion = _CASEFOLDED.get(name.casefold())
    if suggestion == name:
        return None
    return suggestion
