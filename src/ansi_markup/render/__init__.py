"""Terminal rendering for parsed markup documents."""

from .ansi import AnsiRenderer, render_markup

__all__ = ["AnsiRenderer", "render_markup"]
