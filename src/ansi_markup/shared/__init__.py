"""Shared utilities for markup parsing.

Positions, structured errors, the error reporter, configuration, metrics and
logging used across all processing layers.
"""

from .config import (
    MAX_NESTING_DEPTH,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    RenderConfig,
    TreeConfig,
)
from .errors import ErrorKind, MarkupParseError, ParseError
from .logging import CorrelationLogger, configure_logging, get_logger
from .position import START_POSITION, Position, Span
from .reporter import describe, format_error, format_error_with_context
from .result import PerformanceMetrics

__all__ = [
    "MAX_NESTING_DEPTH",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "ParserConfig",
    "RenderConfig",
    "TreeConfig",
    "ErrorKind",
    "MarkupParseError",
    "ParseError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "START_POSITION",
    "Position",
    "Span",
    "describe",
    "format_error",
    "format_error_with_context",
    "PerformanceMetrics",
]
