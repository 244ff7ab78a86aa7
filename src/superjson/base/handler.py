"""Base handler interface for custom value types.

This module defines the abstract base class for handlers and the structural
check applied to every handler before it is installed. Handlers are
responsible for one custom type each: recognising its instances, turning an
instance into a list of JSON arguments, and rebuilding the instance from those
arguments.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from superjson.utils import is_identifier


class BaseHandler(ABC):
    """Abstract base class for custom value handlers.

    Each handler manages one value type (datetimes, patterns, functions...).

    Handlers are responsible for:
    1. Type detection (can_handle)
    2. Converting an instance to positional arguments (serialize)
    3. Rebuilding an instance from those arguments (deserialize)

    The handler ``name`` is written literally into tagged text, e.g.
    ``#!Date[343434]``, so it must match ``[a-zA-Z_$][0-9a-zA-Z_$]*``.

    Handlers are tested in installation order and the first one whose
    ``can_handle`` returns True wins. Install more specific handlers first.

    Examples:
        Create a custom handler:
        >>> class ComplexHandler(BaseHandler):
        ...     @property
        ...     def name(self) -> str:
        ...         return "Complex"
        ...
        ...     def can_handle(self, value: Any) -> bool:
        ...         return isinstance(value, complex)
        ...
        ...     def serialize(self, value: complex) -> list:
        ...         return [value.real, value.imag]
        ...
        ...     def deserialize(self, real: float, imag: float) -> complex:
        ...         return complex(real, imag)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique handler name used in tagged text.

        Returns:
            Handler name (e.g., 'Date', 'RegExp')
        """
        pass

    @abstractmethod
    def can_handle(self, value: Any) -> bool:
        """Check if this handler owns the given value.

        Args:
            value: Value found while walking the tree

        Returns:
            True if this handler should serialize the value
        """
        pass

    @abstractmethod
    def serialize(self, value: Any) -> Sequence[Any]:
        """Convert a value to the arguments needed to rebuild it.

        Args:
            value: Value claimed by can_handle()

        Returns:
            List (or tuple) of JSON-representable arguments. The arguments
            are encoded as plain JSON: custom values inside them are not
            tagged.
        """
        pass

    @abstractmethod
    def deserialize(self, *args: Any) -> Any:
        """Rebuild a value from the arguments produced by serialize().

        Args:
            *args: Decoded arguments, spread positionally

        Returns:
            Value equal to the one that was serialized
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def _has_callable(handler: Any, attr: str) -> bool:
    return callable(getattr(handler, attr, None))


def validate_handler(handler: Any) -> List[str]:
    """Check that an object can be installed as a handler.

    Handlers do not have to subclass BaseHandler; any object exposing the
    same attributes is accepted. Two kinds of handler are recognised:

    - Static name: ``name`` is an identifier string. The handler needs
      ``deserialize`` (or ``replace``) and ``serialize`` (or ``replace``).
    - Computed name: ``name`` is a callable returning the tag name for a
      value. Such a handler only encodes; tags it produces are decoded by the
      static handler of that name, so it must not define ``deserialize``.

    Every handler needs a callable ``can_handle``.

    Args:
        handler: Candidate handler

    Returns:
        List of problems found (empty if the handler is valid)

    Examples:
        >>> validate_handler(object())[0]
        "Handlers must have a 'name' property that is a valid identifier"
    """
    problems = []
    name = getattr(handler, "name", None)

    if callable(name):
        if getattr(handler, "deserialize", None) is not None:
            problems.append(
                "Handlers with a computed name should not define a "
                "'deserialize' function"
            )
    else:
        if not is_identifier(name):
            problems.append(
                "Handlers must have a 'name' property that is a valid identifier"
            )
        if not (
            _has_callable(handler, "deserialize") or _has_callable(handler, "replace")
        ):
            problems.append(
                "Handlers must have a 'deserialize' function that, when passed "
                "the arguments generated by 'serialize', returns an equal value"
            )

    if not (_has_callable(handler, "serialize") or _has_callable(handler, "replace")):
        problems.append(
            "Handlers must have a 'serialize' function that receives a value "
            "and returns a list of arguments needed to rebuild it"
        )

    if not _has_callable(handler, "can_handle"):
        problems.append(
            "Handlers must have a 'can_handle' function that tells whether a "
            "value belongs to the handler"
        )

    return problems
