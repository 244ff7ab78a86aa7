"""Handler for symbolic tokens.

Python has no symbol type; its symbolic tokens are enum members, the builtin
singletons ``Ellipsis`` and ``NotImplemented``, and ``Token`` objects for
unique markers created at runtime. They are encoded as a three-slot list with
exactly one slot populated::

    ["pkg.module:Color.RED", 0, 0]   importable enum member (registered key)
    [0, "Ellipsis", 0]               well-known singleton
    [0, 0, "pending"]                local token, description only

A local token has no identity outside the process that made it, so decoding
the third form creates a fresh ``Token`` with the same description, never
equal to any other token. A member of an enum defined inside a function has
no importable home either; serializing one raises UnsupportedValueError.
"""

import enum
import importlib
from typing import Any, List, Optional, Union

from superjson.base.handler import BaseHandler
from superjson.exceptions import UnsupportedValueError

WELL_KNOWN = {
    "Ellipsis": Ellipsis,
    "NotImplemented": NotImplemented,
}


class Token:
    """A unique runtime marker with an optional description.

    Tokens compare equal only to themselves.

    Examples:
        >>> MISSING = Token("missing")
        >>> MISSING
        Token('missing')
        >>> Token("missing") == MISSING
        False
    """

    __slots__ = ("description",)

    def __init__(self, description: Optional[str] = None):
        self.description = description

    def __repr__(self) -> str:
        return f"Token({self.description!r})"


def get_member_key(member: enum.Enum) -> str:
    """Get the import key for an enum member.

    Examples:
        >>> import signal
        >>> get_member_key(signal.Signals.SIGINT)
        'signal:Signals.SIGINT'
    """
    cls = type(member)
    return f"{cls.__module__}:{cls.__qualname__}.{member.name}"


def load_member(key: str) -> enum.Enum:
    """Import an enum member from its key.

    Raises:
        TypeError: If the key is not a string
        ValueError: If the key is malformed or does not name an enum member
    """
    if not isinstance(key, str):
        raise TypeError(f"Symbol key must be a string, got {type(key).__name__}")

    module_name, sep, path = key.partition(":")
    if not sep or not module_name or not path:
        raise ValueError(f"Malformed symbol key: {key!r}")

    try:
        obj: Any = importlib.import_module(module_name)
        for part in path.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Cannot load symbol '{key}': {e}") from e

    if not isinstance(obj, enum.Enum):
        raise ValueError(f"Symbol key {key!r} does not name an enum member")
    return obj


class SymbolHandler(BaseHandler):
    """Handler for enum members, builtin singletons and tokens."""

    @property
    def name(self) -> str:
        """Return handler name."""
        return "Symbol"

    def can_handle(self, value: Any) -> bool:
        """Check if value is an enum member, a token or a well-known singleton."""
        if isinstance(value, (enum.Enum, Token)):
            return True
        return any(value is token for token in WELL_KNOWN.values())

    def serialize(self, value: Any) -> List[Union[str, int, None]]:
        """Encode a token as ``[key, well_known, description]``.

        Raises:
            UnsupportedValueError: If the token is a member of an enum that
                cannot be imported again (defined in a function body)
        """
        for well_known, token in WELL_KNOWN.items():
            if value is token:
                return [0, well_known, 0]

        if isinstance(value, Token):
            return [0, 0, value.description]

        if "<locals>" in type(value).__qualname__:
            raise UnsupportedValueError(
                f"Local enum member {value!r} cannot be serialized; "
                "define the enum at module level"
            )
        return [get_member_key(value), 0, 0]

    def deserialize(
        self, key: Any = 0, well_known: Any = 0, description: Any = None
    ) -> Any:
        """Rebuild a token from whichever slot is populated.

        A description-only list yields a new Token on every call.

        Raises:
            TypeError: If the populated slot has the wrong type
            ValueError: If the key or well-known name cannot be resolved
        """
        if key:
            return load_member(key)
        if well_known:
            if well_known not in WELL_KNOWN:
                raise ValueError(f"Unknown well-known symbol: {well_known!r}")
            return WELL_KNOWN[well_known]
        if description is not None and not isinstance(description, str):
            raise TypeError(
                f"Token description must be a string, got {type(description).__name__}"
            )
        return Token(description)
