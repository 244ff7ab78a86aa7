"""Codec configuration management."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from typing_extensions import Self

from superjson.codec import SuperJson
from superjson.exceptions import ConfigurationError
from superjson.handlers import BUILTIN_HANDLERS, DEFAULT_HANDLER_NAMES
from superjson.markers import DEFAULT_MARKER, validate_marker


@dataclass
class CodecConfig:
    """Configuration for building a codec from built-in handlers.

    Attributes:
        marker: Prefix of tagged strings
        handlers: Names of built-in handlers to install, in order
            ('Date', 'RegExp', 'Function', 'Symbol')
        indent: Default indentation used by tools that write documents
            (None for compact output)

    Examples:
        >>> config = CodecConfig(handlers=["Date", "Symbol"])
        >>> codec = config.create_codec()
        >>> codec.registry.list_names()
        ['Date', 'Symbol']
    """

    marker: str = DEFAULT_MARKER
    handlers: List[str] = field(default_factory=lambda: list(DEFAULT_HANDLER_NAMES))
    indent: Optional[int] = None

    def __post_init__(self):
        """Validate marker and handler names."""
        validate_marker(self.marker)

        if isinstance(self.handlers, str):
            self.handlers = parse_handler_names(self.handlers)
        elif not isinstance(self.handlers, (list, tuple)):
            raise ConfigurationError(
                f"Handlers must be a list of names, got {type(self.handlers).__name__}"
            )
        else:
            self.handlers = list(self.handlers)

        unknown = [name for name in self.handlers if name not in BUILTIN_HANDLERS]
        if unknown:
            available = ", ".join(BUILTIN_HANDLERS)
            raise ConfigurationError(
                f"Unknown handler(s): {', '.join(unknown)}. Available: {available}"
            )

        if len(set(self.handlers)) != len(self.handlers):
            raise ConfigurationError(f"Duplicate handler names: {self.handlers}")

        if self.indent is not None and (
            isinstance(self.indent, bool)
            or not isinstance(self.indent, int)
            or self.indent < 0
        ):
            raise ConfigurationError(
                f"Indent must be a non-negative integer or None, got {self.indent!r}"
            )

    def create_codec(self) -> SuperJson:
        """Build a codec with fresh handler instances."""
        return SuperJson(
            marker=self.marker,
            serializers=[BUILTIN_HANDLERS[name]() for name in self.handlers],
        )

    @classmethod
    def load(cls, config_path: Union[str, Path]) -> Self:
        """Load configuration from a JSON file.

        Args:
            config_path: Path to config file. A missing file yields the
                default configuration.

        Returns:
            CodecConfig instance

        Raises:
            ConfigurationError: If the file is not a JSON object or holds
                unknown keys or invalid values
        """
        config_path = Path(config_path)
        if not config_path.exists():
            return cls()

        with open(config_path, "r") as f:
            try:
                data = json.load(f)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid config file {config_path}: {e}"
                ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a JSON object"
            )

        unknown = set(data) - {"marker", "handlers", "indent"}
        if unknown:
            raise ConfigurationError(
                f"Unknown config keys in {config_path}: {', '.join(sorted(unknown))}"
            )

        return cls(**data)

    def save(self, config_path: Union[str, Path]) -> None:
        """Save configuration to a JSON file.

        Args:
            config_path: Destination path; parent directories are created
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "marker": self.marker,
            "handlers": list(self.handlers),
            "indent": self.indent,
        }

        with open(config_path, "w") as f:
            json.dump(data, f, indent=2)

    @classmethod
    def from_env(cls) -> Self:
        """Create configuration from environment variables.

        Environment variables:
            SUPERJSON_MARKER: Marker string
            SUPERJSON_HANDLERS: Comma-separated built-in handler names
            SUPERJSON_INDENT: Indentation width

        Returns:
            CodecConfig instance
        """
        kwargs = {}

        if os.getenv("SUPERJSON_MARKER"):
            kwargs["marker"] = os.getenv("SUPERJSON_MARKER")

        if os.getenv("SUPERJSON_HANDLERS"):
            kwargs["handlers"] = parse_handler_names(os.getenv("SUPERJSON_HANDLERS"))

        if os.getenv("SUPERJSON_INDENT"):
            value = os.getenv("SUPERJSON_INDENT")
            try:
                kwargs["indent"] = int(value)
            except ValueError as e:
                raise ConfigurationError(
                    f"SUPERJSON_INDENT must be an integer, got {value!r}"
                ) from e

        return cls(**kwargs)


def parse_handler_names(value: str) -> List[str]:
    """Split a comma-separated handler list.

    Examples:
        >>> parse_handler_names("Date, RegExp,,Symbol")
        ['Date', 'RegExp', 'Symbol']
    """
    return [name.strip() for name in value.split(",") if name.strip()]
