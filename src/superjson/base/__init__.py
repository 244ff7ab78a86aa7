"""Base classes for the superjson handler system.

This module provides the foundation for custom value types:
- BaseHandler: Abstract base class for value handlers
- HandlerRegistry: Ordered registry used by a codec
- validate_handler: Structural check applied before installation
"""

from superjson.base.handler import BaseHandler, validate_handler
from superjson.base.registry import HandlerRegistry

__all__ = [
    "BaseHandler",
    "HandlerRegistry",
    "validate_handler",
]
