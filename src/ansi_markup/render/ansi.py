"""ANSI terminal rendering of parsed documents.

Walks the tree depth-first, writing an element's enter sequence before its
children and its exit sequence after them.
"""

from typing import List, Mapping, Optional

from ansi_markup.shared import RenderConfig, TreeConfig, get_logger
from ansi_markup.tags import RESET, STYLE_TABLE, StyleSequence
from ansi_markup.tokenization import tokenize
from ansi_markup.tree import Document, Element, Node, Text, build


class AnsiRenderer:
    """Renders documents to strings containing SGR escape sequences."""

    def __init__(
        self,
        styles: Mapping[str, StyleSequence] = STYLE_TABLE,
        config: Optional[RenderConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize renderer.

        Args:
            styles: Mapping from every tag name to its escape sequences
            config: Rendering options
            correlation_id: Optional correlation ID for request tracking
        """
        self.styles = styles
        self.config = config or RenderConfig()
        self.logger = get_logger(__name__, correlation_id, "ansi_renderer")

    def render(self, document: Document) -> str:
        """Render a document.

        Raises:
            KeyError: If an element's tag has no entry in ``styles``
        """
        parts: List[str] = []
        for node in document.children:
            self._render_node(node, parts)

        emitted_sequences = self.config.enable_color and document.element_count > 0
        if self.config.reset_at_end and emitted_sequences:
            parts.append(RESET)

        output = "".join(parts)
        self.logger.debug(
            "Rendered document",
            extra={"output_length": len(output), "color": self.config.enable_color},
        )
        return output

    def _render_node(self, node: Node, parts: List[str]) -> None:
        if isinstance(node, Text):
            parts.append(node.content)
            return
        self._render_element(node, parts)

    def _render_element(self, element: Element, parts: List[str]) -> None:
        sequence = self.styles[element.tag_name]
        if self.config.enable_color:
            parts.append(sequence.enter)
        for child in element.children:
            self._render_node(child, parts)
        if self.config.enable_color:
            parts.append(sequence.exit)


def render_markup(
    text: str,
    render_config: Optional[RenderConfig] = None,
    tree_config: Optional[TreeConfig] = None
) -> str:
    """Parse markup and render it for the terminal.

    Raises:
        MarkupParseError: If the markup does not parse
    """
    document = build(tokenize(text), tree_config)
    return AnsiRenderer(config=render_config).render(document)
