"""Performance metrics attached to parse results."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class PerformanceMetrics:
    """Performance metrics for a single parse operation."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    tokens_generated: int = 0
    elements_created: int = 0
    max_depth: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def tokens_per_second(self) -> float:
        """Calculate tokens generated per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tokens_generated * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary representation."""
        return {
            "processing_time_ms": self.processing_time_ms,
            "characters_processed": self.characters_processed,
            "tokens_generated": self.tokens_generated,
            "elements_created": self.elements_created,
            "max_depth": self.max_depth,
        }
