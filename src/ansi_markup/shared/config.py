"""Configuration classes for markup parsing and rendering.

Component configurations validate themselves in ``__post_init__`` and are
aggregated into the immutable :class:`ParserConfig`.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

# Hard ceiling on nesting depth; configuration may only lower it.
MAX_NESTING_DEPTH = 100

_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_COMPONENTS = ["tree", "render", "global_"]


@dataclass(frozen=True)
class TreeConfig:
    """Configuration for tree building and nesting validation."""

    max_depth: int = MAX_NESTING_DEPTH

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if not (1 <= self.max_depth <= MAX_NESTING_DEPTH):
            raise ValueError(
                f"max_depth must be between 1 and {MAX_NESTING_DEPTH}"
            )


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for terminal rendering."""

    enable_color: bool = True
    reset_at_end: bool = False


@dataclass(frozen=True)
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "WARNING"
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in _LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {_LOGGING_LEVELS}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Complete configuration for parsing and rendering.

    Frozen, so a single instance can be shared between threads.
    """

    tree: TreeConfig = field(default_factory=TreeConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Re-validate component configurations."""
        try:
            self.tree.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Component fields use double-underscore notation.

        Example:
            >>> config = ParserConfig().override(tree__max_depth=10)
            >>> config.tree.max_depth
            10
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            for component in _COMPONENTS:
                prefix = f"{component}__"
                if key.startswith(prefix):
                    nested_overrides.setdefault(component, {})[key[len(prefix):]] = value
                    break
            else:
                if "__" in key:
                    raise ConfigValidationError(
                        f"Unknown configuration component in '{key}'",
                        field_name=key,
                        suggestions=_COMPONENTS,
                    )
                top_level[key] = value

        new_fields: Dict[str, Any] = dict(top_level)
        try:
            for component, overrides in nested_overrides.items():
                new_fields[component] = replace(getattr(self, component), **overrides)
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in config files surface.
        """
        def _dict_to_dataclass(data_dict: Dict[str, Any], target_class: type) -> Any:
            fields = target_class.__dataclass_fields__
            unknown = set(data_dict) - set(fields)
            if unknown:
                raise ConfigValidationError(
                    f"Unknown {target_class.__name__} fields: {sorted(unknown)}",
                    field_name=sorted(unknown)[0],
                )
            values: Dict[str, Any] = {}
            for field_name, value in data_dict.items():
                field_type = fields[field_name].type
                if hasattr(field_type, "__dataclass_fields__"):
                    values[field_name] = _dict_to_dataclass(value, field_type)
                else:
                    values[field_name] = value
            return target_class(**values)

        try:
            return _dict_to_dataclass(data, cls)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def default(cls) -> "ParserConfig":
        """Create the default configuration."""
        return cls(name="default")

    @classmethod
    def plain_text(cls) -> "ParserConfig":
        """Create configuration that renders without escape sequences."""
        return cls(
            render=RenderConfig(enable_color=False),
            name="plain_text",
            description="Render text content only, dropping all styling",
        )

    @classmethod
    def shallow(cls, max_depth: int) -> "ParserConfig":
        """Create configuration with a tighter nesting limit."""
        try:
            tree = TreeConfig(max_depth=max_depth)
        except ValueError as e:
            raise ConfigValidationError(str(e), field_name="max_depth") from e
        return cls(
            tree=tree,
            name="shallow",
            description=f"Reject markup nested deeper than {max_depth} levels",
        )
