"""Nesting validation and tree construction.

The builder consumes tokens left to right with an explicit stack of open
elements. It reports the first problem it meets and never attempts repair:
an unregistered name, a close tag that does not match the innermost open tag,
a stack deeper than the configured limit, or open tags left at end of input.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from ansi_markup.shared import (
    START_POSITION,
    ErrorKind,
    MarkupParseError,
    ParseError,
    Span,
    TreeConfig,
    get_logger,
)
from ansi_markup.tags import is_valid_tag_name
from ansi_markup.tokenization import Token, TokenizationResult, TokenType

EMPTY_SPAN = Span(START_POSITION, START_POSITION)


@dataclass(frozen=True)
class Text:
    """Decoded text content.

    Spans are excluded from equality, so two trees compare equal when their
    structure and content match regardless of where they came from.
    """

    content: str
    span: Span = field(default=EMPTY_SPAN, compare=False)

    @property
    def text_content(self) -> str:
        return self.content

    def to_dict(self) -> Dict[str, Any]:
        """Convert text node to dictionary representation."""
        return {"type": "text", "content": self.content, "span": self.span.to_dict()}


@dataclass(frozen=True)
class Element:
    """A styled element wrapping child nodes.

    Children are fixed at construction; the tag name must be registered.
    """

    tag_name: str
    children: Tuple["Node", ...] = ()
    span: Span = field(default=EMPTY_SPAN, compare=False)

    def __post_init__(self) -> None:
        """Validate tag name and freeze children."""
        if not is_valid_tag_name(self.tag_name):
            raise ValueError(f"Unknown tag name: {self.tag_name!r}")
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        return "".join(child.text_content for child in self.children)

    @property
    def depth(self) -> int:
        """Height of the subtree rooted here (an element alone has depth 1)."""
        child_depths = [
            child.depth for child in self.children if isinstance(child, Element)
        ]
        return 1 + max(child_depths, default=0)

    def iter_elements(self) -> Iterator["Element"]:
        """Yield this element and all descendant elements in document order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter_elements()

    def find_all(self, tag_name: str) -> List["Element"]:
        """Find all descendant elements with matching tag name."""
        return [
            element for element in self.iter_elements()
            if element is not self and element.tag_name == tag_name
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        return {
            "type": "element",
            "tag": self.tag_name,
            "span": self.span.to_dict(),
            "children": [child.to_dict() for child in self.children],
        }


Node = Union[Element, Text]


@dataclass(frozen=True)
class Document:
    """Ordered top-level nodes produced by one successful parse."""

    children: Tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def __iter__(self) -> Iterator[Node]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    @property
    def text_content(self) -> str:
        """Document text with all tags stripped and entities decoded."""
        return "".join(child.text_content for child in self.children)

    @property
    def max_depth(self) -> int:
        return max(
            (child.depth for child in self.children if isinstance(child, Element)),
            default=0,
        )

    def iter_elements(self) -> Iterator[Element]:
        """Yield every element in document order."""
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter_elements()

    @property
    def element_count(self) -> int:
        return sum(1 for _ in self.iter_elements())

    def find_all(self, tag_name: str) -> List[Element]:
        """Find all elements with matching tag name."""
        return [
            element for element in self.iter_elements()
            if element.tag_name == tag_name
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to dictionary representation."""
        return {"children": [child.to_dict() for child in self.children]}


@dataclass
class _Frame:
    """An open element waiting for its close tag."""

    tag_name: str
    open_token: Token
    children: List[Node] = field(default_factory=list)


class TreeBuilder:
    """Builds a :class:`Document` from tokens while validating nesting.

    Holds per-call scratch state; reuse an instance sequentially, not
    concurrently.
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Tree configuration (nesting limit)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_builder")

        self._stack: List[_Frame] = []
        self._top_level: List[Node] = []
        self.elements_created = 0
        self.max_depth_reached = 0

    def build(self, tokens: Union[TokenizationResult, Sequence[Token]]) -> Document:
        """Build a document tree from tokens.

        Args:
            tokens: TokenizationResult or token sequence ending in END_OF_INPUT

        Returns:
            Document with the top-level nodes

        Raises:
            MarkupParseError: On the first nesting or vocabulary violation
        """
        start_time = time.perf_counter()
        token_list = tokens.tokens if isinstance(tokens, TokenizationResult) else tokens

        self._reset_state()
        self.logger.debug("Starting tree building", extra={"token_count": len(token_list)})

        for token in token_list:
            if token.type is TokenType.TEXT:
                self._process_text(token)
            elif token.type is TokenType.OPEN_TAG:
                self._process_open_tag(token)
            elif token.type is TokenType.CLOSE_TAG:
                self._process_close_tag(token)
            else:
                return self._finish(token, start_time)

        raise ValueError("Token sequence does not end with END_OF_INPUT")

    def _reset_state(self) -> None:
        self._stack = []
        self._top_level = []
        self.elements_created = 0
        self.max_depth_reached = 0

    def _current_children(self) -> List[Node]:
        if self._stack:
            return self._stack[-1].children
        return self._top_level

    def _process_text(self, token: Token) -> None:
        self._current_children().append(Text(token.value, token.span))

    def _process_open_tag(self, token: Token) -> None:
        if not is_valid_tag_name(token.value):
            raise MarkupParseError(
                ParseError(ErrorKind.UNKNOWN_TAG_NAME, token.position, found=token.value)
            )
        if len(self._stack) >= self.config.max_depth:
            raise MarkupParseError(
                ParseError(ErrorKind.DEPTH_LIMIT_EXCEEDED, token.position)
            )
        self._stack.append(_Frame(token.value, token))
        self.max_depth_reached = max(self.max_depth_reached, len(self._stack))

    def _process_close_tag(self, token: Token) -> None:
        if not self._stack or self._stack[-1].tag_name != token.value:
            expected = self._stack[-1].tag_name if self._stack else None
            raise MarkupParseError(
                ParseError(
                    ErrorKind.MISMATCHED_CLOSING_TAG,
                    token.position,
                    expected=expected,
                    found=token.value,
                )
            )
        frame = self._stack.pop()
        element = Element(
            frame.tag_name,
            tuple(frame.children),
            Span(frame.open_token.span.start, token.span.end),
        )
        self.elements_created += 1
        self._current_children().append(element)

    def _finish(self, token: Token, start_time: float) -> Document:
        if self._stack:
            raise MarkupParseError(
                ParseError(
                    ErrorKind.UNCLOSED_TAG,
                    token.position,
                    expected=self._stack[-1].tag_name,
                )
            )
        document = Document(tuple(self._top_level))
        self.logger.debug(
            "Tree building completed",
            extra={
                "element_count": self.elements_created,
                "max_depth": self.max_depth_reached,
                "processing_time_ms": (time.perf_counter() - start_time) * 1000,
            },
        )
        return document


def build(
    tokens: Union[TokenizationResult, Sequence[Token]],
    config: Optional[TreeConfig] = None
) -> Document:
    """Build a document from tokens with a fresh :class:`TreeBuilder`.

    Raises:
        MarkupParseError: On the first nesting or vocabulary violation
    """
    return TreeBuilder(config).build(tokens)
