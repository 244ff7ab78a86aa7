"""Handler for compiled regular expressions."""

import re
from typing import Any, List

from superjson.base.handler import BaseHandler

# Flag letters in encoding order
FLAG_LETTERS = (
    ("m", re.MULTILINE),
    ("i", re.IGNORECASE),
    ("s", re.DOTALL),
    ("x", re.VERBOSE),
    ("a", re.ASCII),
)

# Accepted on decode but meaningless for Python patterns
IGNORED_FLAGS = frozenset("g")


class RegExpHandler(BaseHandler):
    """Handler for compiled ``str`` patterns.

    Patterns are encoded as ``[source, flags]`` where flags is a string of
    letters: ``m`` (MULTILINE), ``i`` (IGNORECASE), ``s`` (DOTALL),
    ``x`` (VERBOSE) and ``a`` (ASCII). The JavaScript ``g`` flag is accepted
    when decoding and ignored, since Python patterns have no global state.

    Bytes patterns are not handled.

    Examples:
        >>> handler = RegExpHandler()
        >>> handler.serialize(re.compile(r"abc\\d", re.IGNORECASE))
        ['abc\\\\d', 'i']
        >>> handler.deserialize("abc\\\\d", "gi").flags & re.IGNORECASE
        re.IGNORECASE
    """

    @property
    def name(self) -> str:
        """Return handler name."""
        return "RegExp"

    def can_handle(self, value: Any) -> bool:
        """Check if value is a compiled str pattern."""
        return isinstance(value, re.Pattern) and isinstance(value.pattern, str)

    def serialize(self, value: re.Pattern) -> List[str]:
        """Convert a pattern to its source and flag letters."""
        flags = "".join(letter for letter, flag in FLAG_LETTERS if value.flags & flag)
        return [value.pattern, flags]

    def deserialize(self, source: str, flags: str = "") -> re.Pattern:
        """Compile a pattern from source and flag letters.

        Raises:
            TypeError: If source or flags are not strings
            ValueError: If flags contains an unknown letter or the source
                does not compile
        """
        if not isinstance(source, str) or not isinstance(flags, str):
            raise TypeError("Pattern source and flags must be strings")

        known = dict(FLAG_LETTERS)
        value = 0
        for letter in flags:
            if letter in known:
                value |= known[letter]
            elif letter not in IGNORED_FLAGS:
                raise ValueError(f"Unknown regular expression flag: {letter!r}")

        try:
            return re.compile(source, value)
        except re.error as e:
            raise ValueError(f"Invalid regular expression {source!r}: {e}") from e
