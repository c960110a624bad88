"""Core parser API.

Module-level functions cover the common cases; :class:`MarkupParser` adds
configuration and usage statistics for repeated parsing.
"""

import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union, cast

from ansi_markup.shared import (
    MarkupParseError,
    ParseError,
    ParserConfig,
    PerformanceMetrics,
    format_error,
    format_error_with_context,
    get_logger,
)
from ansi_markup.tokenization import MarkupTokenizer
from ansi_markup.tree import Document, TreeBuilder

MS_PER_SECOND = 1000
PREVIEW_LENGTH = 80


@dataclass
class ParseResult:
    """Outcome of one parse: a document or a single error, never both."""

    source: str
    document: Optional[Document] = None
    error: Optional[ParseError] = None
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate that exactly one outcome is present."""
        if (self.document is None) == (self.error is None):
            raise ValueError("ParseResult needs exactly one of document or error")

    @property
    def success(self) -> bool:
        return self.error is None

    def unwrap(self) -> Document:
        """Return the document, raising the parse error on failure.

        Raises:
            MarkupParseError: If the parse failed
        """
        if self.error is not None:
            raise MarkupParseError(self.error)
        return cast(Document, self.document)

    def format_error(self, with_context: bool = False) -> Optional[str]:
        """Human-readable error message, or None for successful parses."""
        if self.error is None:
            return None
        if with_context:
            return format_error_with_context(self.error, self.source)
        return format_error(self.error)

    def summary(self) -> Dict[str, Any]:
        """Summarize the result for reporting."""
        return {
            "success": self.success,
            "error": self.error.to_dict() if self.error else None,
            "element_count": self.document.element_count if self.document else 0,
            "performance": self.performance.to_dict(),
            "correlation_id": self.correlation_id,
        }


class MarkupParser:
    """Configured parser with usage statistics.

    Examples:
        >>> parser = MarkupParser()
        >>> parser.parse("<red>hi</red>").success
        True
        >>> parser.statistics["total_parses"]
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize parser.

        Args:
            config: Parser configuration (defaults to ParserConfig.default())
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig.default()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_parser")

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

    def _new_correlation_id(self) -> Optional[str]:
        if self.correlation_id is not None:
            return self.correlation_id
        if self.config.global_.enable_correlation_tracking:
            return uuid.uuid4().hex[:12]
        return None

    def parse(self, text: str, correlation_id: Optional[str] = None) -> ParseResult:
        """Parse markup text.

        Args:
            text: Markup source
            correlation_id: Optional correlation ID override for this call

        Returns:
            ParseResult holding either the document or the parse error
        """
        if not isinstance(text, str):
            raise TypeError(f"Markup must be str, not {type(text).__name__}")

        effective_id = correlation_id or self._new_correlation_id()
        logger = self.logger.bind(effective_id)
        start_time = time.perf_counter()

        logger.info(
            "Starting parse",
            extra={
                "content_length": len(text),
                "preview": text[:PREVIEW_LENGTH],
            },
        )

        tokenizer = MarkupTokenizer(correlation_id=effective_id)
        builder = TreeBuilder(self.config.tree, correlation_id=effective_id)
        metrics = PerformanceMetrics(characters_processed=len(text))

        try:
            tokenization = tokenizer.tokenize(text)
            metrics.tokens_generated = tokenization.token_count
            document = builder.build(tokenization)
        except MarkupParseError as e:
            metrics.processing_time_ms = (time.perf_counter() - start_time) * MS_PER_SECOND
            logger.debug(
                "Parse rejected input",
                extra={"error_kind": e.kind.value, "offset": e.position.offset},
            )
            result = ParseResult(
                source=text,
                error=e.error,
                performance=metrics,
                correlation_id=effective_id,
            )
        else:
            metrics.processing_time_ms = (time.perf_counter() - start_time) * MS_PER_SECOND
            metrics.elements_created = builder.elements_created
            metrics.max_depth = builder.max_depth_reached
            result = ParseResult(
                source=text,
                document=document,
                performance=metrics,
                correlation_id=effective_id,
            )

        self._record(result)
        logger.info(
            "Parse completed",
            extra={
                "success": result.success,
                "processing_time_ms": metrics.processing_time_ms,
            },
        )
        return result

    def parse_file(
        self,
        file_path: Union[str, Path],
        encoding: str = "utf-8"
    ) -> ParseResult:
        """Read a file and parse its contents.

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid in ``encoding``
        """
        path = Path(file_path)
        self.logger.debug("Reading markup file", extra={"file_path": str(path)})
        return self.parse(path.read_text(encoding=encoding))

    def _record(self, result: ParseResult) -> None:
        self._parse_count += 1
        self._total_processing_time += result.performance.processing_time_ms
        if result.success:
            self._successful_parses += 1

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
        self.logger.info("Parser statistics reset")


def parse(
    text: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup text into a result.

    This is the primary entry point. It never raises for ``str`` input:
    rejected markup comes back as a result with ``error`` set.

    Examples:
        >>> result = parse("<blue>5 &lt; 10</blue>")
        >>> result.document.children[0].text_content
        '5 < 10'

        >>> print(parse("<red>text").format_error())
        Error: Unclosed tag 'red' at line 1, column 10
        Expected: red
    """
    return MarkupParser(config, correlation_id).parse(text)


def parse_document(text: str, config: Optional[ParserConfig] = None) -> Document:
    """Parse markup text and return the document.

    Raises:
        MarkupParseError: If the markup is rejected
    """
    return parse(text, config).unwrap()


def parse_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    config: Optional[ParserConfig] = None
) -> ParseResult:
    """Read and parse a markup file.

    Raises:
        OSError: If the file cannot be read
    """
    return MarkupParser(config).parse_file(file_path, encoding=encoding)
