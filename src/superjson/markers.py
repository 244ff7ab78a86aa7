"""Marker syntax for tagged strings.

A tagged string has the form ``<marker><Name>[<json args>]``. Plain strings
that happen to have the same shape are escaped by doubling every character of
their leading run of marker characters, so::

    '#!Date[1]'     ->  '##!!Date[1]'
    '#!#!Date[1]'   ->  '##!!##!!Date[1]'
    '!Date[1]'      ->  '!!Date[1]'

Decoding classifies a string in priority order: a leading run equal to the
marker is a tag, a pair-doubled run is an escape, anything else is plain.
"""

import re
from enum import Enum
from typing import Optional, Tuple

from superjson.exceptions import ConfigurationError
from superjson.utils import IDENTIFIER_CHARS, IDENTIFIER_FORMAT

DEFAULT_MARKER = "#!"


class StringKind(Enum):
    """Classification of a decoded string."""

    TAGGED = "tagged"
    ESCAPED = "escaped"
    PLAIN = "plain"


def is_doubled(run: str) -> bool:
    """Check whether ``run`` is a sequence of repeated character pairs.

    Examples:
        >>> is_doubled('##!!')
        True
        >>> is_doubled('#!')
        False
        >>> is_doubled('')
        False
    """
    if not run or len(run) % 2:
        return False
    return all(run[i] == run[i + 1] for i in range(0, len(run), 2))


def validate_marker(marker: str) -> None:
    """Validate a marker string.

    Args:
        marker: Candidate marker

    Raises:
        ConfigurationError: If the marker is empty, contains identifier
            characters, or is itself a doubled run (which would read as an
            escape)

    Examples:
        >>> validate_marker('#!')
        >>> validate_marker('@@')
        Traceback (most recent call last):
            ...
        superjson.exceptions.ConfigurationError: Marker '@@' is ambiguous: it reads as an escaped marker
    """
    if not isinstance(marker, str) or not marker:
        raise ConfigurationError("Marker must be a non-empty string")

    overlap = sorted(set(marker) & IDENTIFIER_CHARS)
    if overlap:
        raise ConfigurationError(
            f"Marker {marker!r} cannot contain identifier characters: "
            f"{''.join(overlap)}"
        )

    if is_doubled(marker):
        raise ConfigurationError(
            f"Marker {marker!r} is ambiguous: it reads as an escaped marker"
        )


class MarkerSyntax:
    """Compiled tag/escape syntax for one marker.

    Examples:
        >>> syntax = MarkerSyntax('#!')
        >>> syntax.tag('Date', '[343434]')
        '#!Date[343434]'
        >>> syntax.escape('#!Date[x]')
        '##!!Date[x]'
        >>> syntax.unescape('##!!Date[x]')
        '#!Date[x]'
    """

    def __init__(self, marker: str = DEFAULT_MARKER):
        validate_marker(marker)
        self.marker = marker
        char_class = "".join(re.escape(c) for c in dict.fromkeys(marker))
        self._pattern = re.compile(
            f"([{char_class}]+)({IDENTIFIER_FORMAT})(\\[.*\\])", re.DOTALL
        )

    def __repr__(self) -> str:
        return f"MarkerSyntax({self.marker!r})"

    def tag(self, name: str, encoded_args: str) -> str:
        """Render tagged text for a handler name and encoded argument list."""
        return f"{self.marker}{name}{encoded_args}"

    def looks_tagged(self, value: str) -> bool:
        """Check whether a string has the tagged shape at all."""
        return self._pattern.fullmatch(value) is not None

    def escape(self, value: str) -> Optional[str]:
        """Escape a plain string that has the tagged shape.

        Returns:
            The escaped string, or None if ``value`` needs no escaping
        """
        match = self._pattern.fullmatch(value)
        if match is None:
            return None
        run = match.group(1)
        return "".join(c + c for c in run) + value[match.end(1) :]

    def unescape(self, value: str) -> Optional[str]:
        """Undo :meth:`escape`.

        Returns:
            The original string, or None if ``value`` is not an escaped string
        """
        kind, match = self.classify(value)
        if kind is not StringKind.ESCAPED:
            return None
        return match.group(1)[::2] + value[match.end(1) :]

    def classify(self, value: str) -> Tuple[StringKind, Optional[re.Match]]:
        """Classify a decoded string.

        Returns:
            Tuple of (kind, match). For TAGGED strings the match groups are
            (marker run, handler name, argument text).
        """
        match = self._pattern.fullmatch(value)
        if match is None:
            return StringKind.PLAIN, None

        run = match.group(1)
        if run == self.marker:
            return StringKind.TAGGED, match
        if is_doubled(run):
            return StringKind.ESCAPED, match
        return StringKind.PLAIN, None
