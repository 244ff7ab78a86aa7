"""JSON codec with tagged custom values.

SuperJson walks a value tree before handing it to the JSON encoder, replacing
values owned by an installed handler with tagged strings::

    {"when": datetime(...)}  ->  {"when": "#!Date[1700000000000]"}

and walks the decoded tree after parsing to turn tagged strings back into
values. Plain strings that look like tags are escaped on the way out and
unescaped on the way in, so every string survives a round trip unchanged.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Union

from superjson.base.registry import HandlerRegistry
from superjson.exceptions import EncodingError, SuperJsonError
from superjson.handlers import default_handlers
from superjson.markers import DEFAULT_MARKER, MarkerSyntax, StringKind
from superjson.utils import dumps, is_identifier, loads

logger = logging.getLogger(__name__)

# Errors from a handler's deserialize that mean "these arguments are bad"
REVIVE_ERRORS = (TypeError, ValueError, LookupError, OverflowError)


class SuperJson:
    """JSON encoder/decoder that round-trips custom values.

    A SuperJson instance is the whole configuration: a marker and an ordered
    handler registry. Build one and reuse it; stringify() and parse() never
    modify it, so one instance can be shared between threads once all
    handlers are installed.

    Args:
        marker: Prefix of tagged strings (default '#!')
        serializers: Handlers to install, in order. None installs the
            default handlers (Date, RegExp).

    Raises:
        ConfigurationError: If the marker or any handler is invalid

    Examples:
        >>> codec = SuperJson()
        >>> at = datetime(1970, 1, 1, 0, 5, 43, 434000, tzinfo=timezone.utc)
        >>> codec.stringify({"at": at})
        '{"at":"#!Date[343434]"}'
        >>> codec.parse('"#!Date[343434]"')
        datetime.datetime(1970, 1, 1, 0, 5, 43, 434000, tzinfo=datetime.timezone.utc)
        >>> codec.stringify("#!Date[x]")
        '"##!!Date[x]"'
        >>> codec.parse('"##!!Date[x]"')
        '#!Date[x]'
    """

    def __init__(
        self,
        marker: Optional[str] = DEFAULT_MARKER,
        serializers: Optional[Iterable[Any]] = None,
    ):
        self.syntax = MarkerSyntax(DEFAULT_MARKER if marker is None else marker)
        if serializers is None:
            serializers = default_handlers()
        self.registry = HandlerRegistry(serializers)

    @property
    def marker(self) -> str:
        return self.syntax.marker

    def __repr__(self) -> str:
        return (
            f"SuperJson(marker={self.marker!r}, "
            f"serializers={self.registry.list_names()!r})"
        )

    def install_serializer(self, handler: Any) -> None:
        """Install an additional handler after construction.

        The handler is appended, so it is tried after every handler already
        installed.

        Raises:
            ConfigurationError: If the handler is invalid
        """
        self.registry.register(handler)

    # =========================================================================
    # Encoding
    # =========================================================================

    def stringify(
        self,
        value: Any,
        default: Union[Callable[[Any], Any], int, None] = None,
        indent: Optional[int] = None,
    ) -> str:
        """Encode a value tree as JSON text.

        Args:
            value: Tree of JSON types and values owned by installed handlers
            default: Either a hook for the JSON encoder, which disables
                tagging and escaping entirely, or an int taken as ``indent``
            indent: Spaces per indentation level (None for compact output)

        Returns:
            JSON text

        Raises:
            EncodingError: If a handler returns a non-list from serialize(),
                or the tree contains values that are neither JSON types nor
                accepted by a handler (dataclasses, dates, UUIDs...)
            UnsupportedValueError: If a handler refuses a value it claimed

        Examples:
            >>> codec = SuperJson()
            >>> print(codec.stringify({"p": re.compile("a+")}, 2))
            {
              "p": "#!RegExp[\\"a+\\",\\"\\"]"
            }
        """
        if isinstance(default, int) and not isinstance(default, bool):
            indent, default = default, None

        if callable(default):
            try:
                return dumps(value, default=default, indent=indent)
            except TypeError as e:
                raise EncodingError(f"Value is not JSON-serializable: {e}") from e

        tree = self._replace(value, set())
        try:
            return dumps(tree, indent=indent)
        except TypeError as e:
            raise EncodingError(f"Value is not JSON-serializable: {e}") from e

    def _replace(self, value: Any, active: set) -> Any:
        """Return the JSON-ready replacement for one value.

        ``active`` holds the ids of the containers on the current path.
        """
        if isinstance(value, str):
            escaped = self.syntax.escape(value)
            if escaped is not None:
                return escaped

        handler = self.registry.detect(value)
        if handler is not None:
            return self._replace_with(handler, value)

        if isinstance(value, (dict, list, tuple)):
            if id(value) in active:
                raise EncodingError("Circular reference detected")
            active.add(id(value))
            try:
                if isinstance(value, dict):
                    return self._replace_mapping(value, active)
                return [self._replace(item, active) for item in value]
            finally:
                active.discard(id(value))

        # Anything else would be encoded by orjson itself, bypassing escaping
        if value is not None and not isinstance(value, (str, int, float)):
            raise EncodingError(
                f"Value is not JSON-serializable: no installed handler accepts "
                f"{type(value).__name__}"
            )
        return value

    def _replace_mapping(self, mapping: dict, active: set) -> Dict[str, Any]:
        replaced = {}
        for key, item in mapping.items():
            if not isinstance(key, str):
                raise EncodingError(
                    f"Mapping keys must be strings, got {type(key).__name__}: {key!r}"
                )
            replaced[key] = self._replace(item, active)
        return replaced

    def _replace_with(self, handler: Any, value: Any) -> Any:
        replace = getattr(handler, "replace", None)
        if callable(replace):
            return replace(value)

        args = handler.serialize(value)
        if not isinstance(args, (list, tuple)):
            raise EncodingError(
                f"'serialize' of handler {handler!r} must return a list "
                f"containing arguments for 'deserialize', got {type(args).__name__}"
            )

        name = handler.name(value) if callable(handler.name) else handler.name
        if not is_identifier(name):
            raise EncodingError(
                f"Handler {handler!r} computed an invalid name: {name!r}"
            )

        try:
            encoded = dumps(list(args))
        except TypeError as e:
            raise EncodingError(
                f"Arguments for {name} are not JSON-serializable: {e}"
            ) from e
        return self.syntax.tag(name, encoded)

    # =========================================================================
    # Decoding
    # =========================================================================

    def parse(
        self,
        text: Union[str, bytes],
        object_hook: Optional[Callable[[dict], Any]] = None,
    ) -> Any:
        """Decode JSON text, reviving tagged values.

        Tagged strings naming an unknown handler, or carrying arguments that
        do not decode, are returned as the literal string. Only invalid JSON
        makes parse() fail.

        Args:
            text: JSON document (str or UTF-8 bytes)
            object_hook: Hook applied to every decoded object; when given,
                tagged strings are left alone

        Returns:
            Decoded value tree

        Raises:
            ValueError: If the text is not valid JSON
        """
        if callable(object_hook):
            return loads(text, object_hook=object_hook)

        return self._revive(loads(text))

    def _revive(self, value: Any) -> Any:
        """Revive tagged strings in a decoded tree, in place.

        The tree comes straight from the JSON decoder, so it holds no shared
        containers. Each revived value is stored in its parent and the walk
        moves on, so objects produced by handlers are never walked again.
        """
        if isinstance(value, str):
            return self._revive_string(value)

        if isinstance(value, dict):
            for key, item in value.items():
                value[key] = self._revive(item)
        elif isinstance(value, list):
            for index, item in enumerate(value):
                value[index] = self._revive(item)

        return value

    def _revive_string(self, value: str) -> Any:
        kind, match = self.syntax.classify(value)

        if kind is StringKind.ESCAPED:
            return self.syntax.unescape(value)
        if kind is not StringKind.TAGGED:
            return value

        name, arg_text = match.group(2), match.group(3)
        try:
            args = loads(arg_text)
        except ValueError:
            return value
        if not isinstance(args, list):
            return value

        handler = self.registry.lookup(name)
        if handler is None:
            return value

        try:
            result = handler.deserialize(*args)
        except SuperJsonError:
            raise
        except REVIVE_ERRORS as e:
            logger.warning(
                "Could not revive %s%s value, keeping literal text: %s",
                self.marker,
                name,
                e,
            )
            return value

        return result


def create(
    marker: Optional[str] = DEFAULT_MARKER,
    serializers: Optional[Iterable[Any]] = None,
) -> SuperJson:
    """Create a codec.

    Args:
        marker: Prefix of tagged strings (default '#!')
        serializers: Handlers to install, in order (default: Date, RegExp)

    Returns:
        Configured SuperJson instance

    Raises:
        ConfigurationError: If the marker or any handler is invalid

    Examples:
        >>> from superjson.handlers import FunctionHandler, default_handlers
        >>> codec = create(serializers=[*default_handlers(), FunctionHandler()])
        >>> codec.registry.list_names()
        ['Date', 'RegExp', 'Function']
    """
    return SuperJson(marker=marker, serializers=serializers)
