"""Terminal escape sequences for each registered tag name."""

from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, Tuple

from .registry import COLOR_CATEGORIES, COLOR_NAMES, TagCategory, color_tag_name

RESET = "\x1b[0m"


class StyleSequence(NamedTuple):
    """SGR sequences written before and after an element's content."""

    enter: str
    exit: str


def sgr(code: int) -> str:
    """Build a Select Graphic Rendition escape sequence."""
    return f"\x1b[{code}m"


# (code of the first color, code that restores the default)
_COLOR_CODES: Dict[TagCategory, Tuple[int, int]] = {
    TagCategory.FOREGROUND: (30, 39),
    TagCategory.BRIGHT_FOREGROUND: (90, 39),
    TagCategory.BACKGROUND: (40, 49),
    TagCategory.BRIGHT_BACKGROUND: (100, 49),
}

_STYLE_CODES: Dict[str, Tuple[int, int]] = {
    "bold": (1, 22),
    "dim": (2, 22),
    "italic": (3, 23),
    "underline": (4, 24),
    "strikethrough": (9, 29),
}


def _build_style_table() -> Dict[str, StyleSequence]:
    table: Dict[str, StyleSequence] = {}
    for category in COLOR_CATEGORIES:
        base, reset = _COLOR_CODES[category]
        for index, color in enumerate(COLOR_NAMES):
            table[color_tag_name(category, color)] = StyleSequence(
                sgr(base + index), sgr(reset)
            )
    for name, (enter, reset) in _STYLE_CODES.items():
        table[name] = StyleSequence(sgr(enter), sgr(reset))
    return table


STYLE_TABLE: Mapping[str, StyleSequence] = MappingProxyType(_build_style_table())
