"""Base-format primitives and shared validation helpers."""

import json
import re
from typing import Any, Callable, Optional, Union

import orjson

IDENTIFIER_FORMAT = r"[a-zA-Z_$][0-9a-zA-Z_$]*"
IDENTIFIER_PATTERN = re.compile(IDENTIFIER_FORMAT)
IDENTIFIER_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_$"
)


def is_identifier(name: Any) -> bool:
    """Check whether ``name`` is usable as a handler name.

    Handler names appear literally in tagged text, so they are restricted to
    ``[a-zA-Z_$][0-9a-zA-Z_$]*``.

    Examples:
        >>> is_identifier('Date')
        True
        >>> is_identifier('$ref')
        True
        >>> is_identifier('2fast')
        False
        >>> is_identifier('my-handler')
        False
    """
    return isinstance(name, str) and IDENTIFIER_PATTERN.fullmatch(name) is not None


def dumps(
    data: Any,
    default: Optional[Callable[[Any], Any]] = None,
    indent: Optional[int] = None,
) -> str:
    """Encode data as JSON text.

    orjson always does the encoding, so the accepted values and their
    rendering never depend on ``indent``. orjson only indents by two spaces;
    for any other width its output is decoded again and laid out by the
    standard library encoder, which only changes whitespace.

    Args:
        data: Value tree of JSON types
        default: Optional hook called for values JSON cannot represent
        indent: Number of spaces per indentation level (None for compact)

    Returns:
        JSON text

    Raises:
        TypeError: If the tree contains a value that cannot be encoded

    Examples:
        >>> dumps({"x": float("nan")}, indent=4)
        '{\\n    "x": null\\n}'
    """
    option = orjson.OPT_INDENT_2 if indent == 2 else None
    encoded = orjson.dumps(data, default=default, option=option)
    if indent is None or indent == 2:
        return encoded.decode("utf-8")

    return json.dumps(orjson.loads(encoded), indent=indent, ensure_ascii=False)


def loads(
    text: Union[str, bytes],
    object_hook: Optional[Callable[[dict], Any]] = None,
) -> Any:
    """Decode JSON text.

    Args:
        text: JSON document as str or UTF-8 bytes
        object_hook: Optional hook applied to every decoded object

    Returns:
        Decoded value tree

    Raises:
        ValueError: If the text is not valid JSON
    """
    if object_hook is None:
        return orjson.loads(text)
    return json.loads(text, object_hook=object_hook)
