"""Handler registry for custom value types.

The registry keeps an ordered list of installed handlers and supports:
1. Registering handlers (validated, append-only)
2. Detecting the handler for a value (first matching can_handle)
3. Looking up a handler by the name found in tagged text

Each codec owns its own registry; there is no process-wide instance.
"""

import logging
from typing import Any, Iterable, Iterator, List, Optional

from superjson.base.handler import validate_handler
from superjson.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Ordered registry of value handlers.

    Detection is a linear scan in installation order: can_handle() may be any
    predicate, not just an exact type check, so the first handler that
    accepts a value wins. Ordering handlers is the caller's job.

    Examples:
        Create and use a registry:
        >>> registry = HandlerRegistry([DateHandler(), RegExpHandler()])
        >>> registry.detect(datetime.now(timezone.utc)).name
        'Date'
        >>> registry.lookup('RegExp').name
        'RegExp'
        >>> registry.lookup('Unknown') is None
        True
    """

    def __init__(self, handlers: Optional[Iterable[Any]] = None):
        """Initialize a registry, installing ``handlers`` in order."""
        self._handlers: List[Any] = []
        for handler in handlers or ():
            self.register(handler)

    def register(self, handler: Any) -> None:
        """Register a handler.

        Args:
            handler: Handler instance (BaseHandler subclass or any object
                with the same attributes)

        Raises:
            ConfigurationError: If the handler is structurally invalid or its
                name is already registered. The registry is left unchanged.

        Examples:
            >>> registry = HandlerRegistry()
            >>> registry.register(DateHandler())
            >>> registry.register(DateHandler())
            Traceback (most recent call last):
                ...
            superjson.exceptions.ConfigurationError: Handler already registered for name: Date. Cannot register DateHandler.
        """
        problems = validate_handler(handler)
        if problems:
            raise ConfigurationError(
                f"Invalid handler {handler!r}: " + "; ".join(problems)
            )

        name = handler.name
        if not callable(name) and self.is_registered(name):
            raise ConfigurationError(
                f"Handler already registered for name: {name}. "
                f"Cannot register {handler.__class__.__name__}."
            )

        self._handlers.append(handler)
        logger.debug(
            "Registered handler %s (%s)",
            name if not callable(name) else "<computed>",
            handler.__class__.__name__,
        )

    def detect(self, value: Any) -> Optional[Any]:
        """Find the handler for a value.

        Args:
            value: Value to classify

        Returns:
            First handler whose can_handle() accepts the value, or None
        """
        for handler in self._handlers:
            if handler.can_handle(value):
                return handler
        return None

    def lookup(self, name: str) -> Optional[Any]:
        """Find the handler that decodes tags with the given name.

        Only handlers with a static name and a deserialize function take
        part; computed-name and replace-only handlers encode only.

        Args:
            name: Handler name taken from tagged text

        Returns:
            Matching handler, or None if no handler has that name
        """
        for handler in self._handlers:
            if callable(handler.name) or handler.name != name:
                continue
            if callable(getattr(handler, "deserialize", None)):
                return handler
        return None

    def list_names(self) -> List[str]:
        """List static handler names in installation order."""
        return [h.name for h in self._handlers if not callable(h.name)]

    def is_registered(self, name: str) -> bool:
        """Check if a handler with the given name is registered."""
        return name in self.list_names()

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._handlers))

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"HandlerRegistry({self.list_names()!r})"
