"""Built-in value handlers.

- DateHandler: datetime values (installed by default)
- RegExpHandler: compiled regular expressions (installed by default)
- FunctionHandler: Python functions, from source text (opt-in)
- SymbolHandler: enum members, builtin singletons and tokens (opt-in)
"""

from superjson.handlers.functions import FunctionHandler
from superjson.handlers.patterns import RegExpHandler
from superjson.handlers.symbols import SymbolHandler, Token
from superjson.handlers.timestamps import DateHandler

# Built-in handlers by tag name, in default installation order
BUILTIN_HANDLERS = {
    "Date": DateHandler,
    "RegExp": RegExpHandler,
    "Function": FunctionHandler,
    "Symbol": SymbolHandler,
}

DEFAULT_HANDLER_NAMES = ("Date", "RegExp")


def default_handlers() -> list:
    """Create fresh instances of the default handlers."""
    return [BUILTIN_HANDLERS[name]() for name in DEFAULT_HANDLER_NAMES]


__all__ = [
    "BUILTIN_HANDLERS",
    "DEFAULT_HANDLER_NAMES",
    "DateHandler",
    "FunctionHandler",
    "RegExpHandler",
    "SymbolHandler",
    "Token",
    "default_handlers",
]
