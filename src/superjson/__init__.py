"""superjson: JSON that round-trips dates, patterns and other custom values."""

__version__ = "0.1.0"

from superjson.base import BaseHandler, HandlerRegistry
from superjson.codec import SuperJson, create
from superjson.config import CodecConfig
from superjson.exceptions import (
    ConfigurationError,
    EncodingError,
    SuperJsonError,
    UnsupportedValueError,
)
from superjson.handlers import (
    DateHandler,
    FunctionHandler,
    RegExpHandler,
    SymbolHandler,
    Token,
    default_handlers,
)

__all__ = [
    "BaseHandler",
    "CodecConfig",
    "ConfigurationError",
    "DateHandler",
    "EncodingError",
    "FunctionHandler",
    "HandlerRegistry",
    "RegExpHandler",
    "SuperJson",
    "SuperJsonError",
    "SymbolHandler",
    "Token",
    "UnsupportedValueError",
    "__version__",
    "create",
    "default_handlers",
]
