"""Tests for BaseHandler, handler validation and HandlerRegistry."""

from types import SimpleNamespace
from typing import Any

import pytest

from superjson.base import BaseHandler, HandlerRegistry, validate_handler
from superjson.exceptions import ConfigurationError
from superjson.handlers import DateHandler, RegExpHandler


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class MockHandler(BaseHandler):
    """Mock handler for testing."""

    def __init__(self, name_value: str = "Point"):
        self._name = name_value

    @property
    def name(self) -> str:
        return self._name

    def can_handle(self, value: Any) -> bool:
        return isinstance(value, Point)

    def serialize(self, value: Point) -> list:
        return [value.x, value.y]

    def deserialize(self, x, y) -> Point:
        return Point(x, y)


class TestBaseHandler:
    """Tests for BaseHandler abstract class."""

    def test_cannot_instantiate_base_handler(self):
        """Test that BaseHandler cannot be instantiated directly."""
        with pytest.raises(TypeError):
            BaseHandler()

    def test_incomplete_subclass_cannot_be_instantiated(self):
        """Test that abstract methods must be implemented."""

        class Incomplete(BaseHandler):
            @property
            def name(self) -> str:
                return "Incomplete"

        with pytest.raises(TypeError):
            Incomplete()

    def test_subclass_round_trip(self):
        """Test the handler contract on a concrete subclass."""
        handler = MockHandler()
        point = Point(1, 2)
        assert handler.can_handle(point)
        restored = handler.deserialize(*handler.serialize(point))
        assert (restored.x, restored.y) == (1, 2)

    def test_repr(self):
        assert repr(MockHandler()) == "MockHandler(name='Point')"


class TestValidateHandler:
    """Tests for structural handler validation."""

    def test_valid_subclass(self):
        assert validate_handler(MockHandler()) == []

    def test_valid_duck_typed(self):
        """Test that handlers need not subclass BaseHandler."""
        handler = SimpleNamespace(
            name="Point",
            can_handle=lambda v: isinstance(v, Point),
            serialize=lambda v: [v.x, v.y],
            deserialize=Point,
        )
        assert validate_handler(handler) == []

    @pytest.mark.parametrize("name", [None, "", "2fast", "my-handler", "a b", 5])
    def test_invalid_name(self, name):
        handler = SimpleNamespace(
            name=name,
            can_handle=lambda v: False,
            serialize=lambda v: [],
            deserialize=lambda: None,
        )
        problems = validate_handler(handler)
        assert any("valid identifier" in p for p in problems)

    def test_missing_deserialize(self):
        handler = SimpleNamespace(
            name="Point", can_handle=lambda v: False, serialize=lambda v: []
        )
        problems = validate_handler(handler)
        assert any("'deserialize'" in p for p in problems)

    def test_missing_serialize(self):
        handler = SimpleNamespace(
            name="Point", can_handle=lambda v: False, deserialize=lambda: None
        )
        problems = validate_handler(handler)
        assert any("'serialize'" in p for p in problems)

    def test_missing_can_handle(self):
        handler = SimpleNamespace(
            name="Point", serialize=lambda v: [], deserialize=lambda: None
        )
        problems = validate_handler(handler)
        assert any("'can_handle'" in p for p in problems)

    def test_non_callable_can_handle(self):
        handler = SimpleNamespace(
            name="Point",
            can_handle=True,
            serialize=lambda v: [],
            deserialize=lambda: None,
        )
        assert validate_handler(handler)

    def test_replace_satisfies_serialize_and_deserialize(self):
        """Test that a replace-only handler is valid."""
        handler = SimpleNamespace(
            name="Point", can_handle=lambda v: False, replace=lambda v: None
        )
        assert validate_handler(handler) == []

    def test_computed_name_without_deserialize(self):
        handler = SimpleNamespace(
            name=lambda v: type(v).__name__,
            can_handle=lambda v: False,
            serialize=lambda v: [],
        )
        assert validate_handler(handler) == []

    def test_computed_name_with_deserialize(self):
        """Test that computed-name handlers cannot define deserialize."""
        handler = SimpleNamespace(
            name=lambda v: type(v).__name__,
            can_handle=lambda v: False,
            serialize=lambda v: [],
            deserialize=lambda: None,
        )
        problems = validate_handler(handler)
        assert any("computed name" in p for p in problems)

    def test_all_problems_reported(self):
        """Test that validation reports every problem, not just the first."""
        assert len(validate_handler(object())) == 4


class TestHandlerRegistry:
    """Tests for HandlerRegistry."""

    def test_empty_registry(self):
        registry = HandlerRegistry()
        assert len(registry) == 0
        assert registry.list_names() == []
        assert registry.detect(Point(1, 2)) is None

    def test_register_and_lookup(self):
        registry = HandlerRegistry()
        handler = MockHandler()
        registry.register(handler)

        assert registry.lookup("Point") is handler
        assert registry.is_registered("Point")
        assert not registry.is_registered("Other")
        assert registry.lookup("Other") is None

    def test_lookup_is_exact(self):
        registry = HandlerRegistry([MockHandler()])
        assert registry.lookup("point") is None
        assert registry.lookup("Poin") is None

    def test_detect(self):
        registry = HandlerRegistry([DateHandler(), MockHandler()])
        assert registry.detect(Point(0, 0)).name == "Point"
        assert registry.detect("string") is None
        assert registry.detect(None) is None

    def test_detect_first_match_wins(self):
        """Test that installation order decides between matching handlers."""
        first = MockHandler("First")
        second = MockHandler("Second")

        assert HandlerRegistry([first, second]).detect(Point(0, 0)) is first
        assert HandlerRegistry([second, first]).detect(Point(0, 0)) is second

    def test_duplicate_name_rejected(self):
        registry = HandlerRegistry([MockHandler()])
        with pytest.raises(ConfigurationError, match="already registered"):
            registry.register(MockHandler())
        assert len(registry) == 1

    def test_invalid_handler_not_appended(self):
        """Test that a failed registration leaves the registry unchanged."""
        registry = HandlerRegistry([DateHandler()])
        with pytest.raises(ConfigurationError, match="valid identifier"):
            registry.register(MockHandler("not-valid"))
        assert registry.list_names() == ["Date"]

    def test_invalid_handler_in_constructor(self):
        with pytest.raises(ConfigurationError):
            HandlerRegistry([DateHandler(), object()])

    def test_computed_name_not_looked_up(self):
        """Test that computed-name handlers take no part in lookup()."""
        handler = SimpleNamespace(
            name=lambda v: "Point",
            can_handle=lambda v: isinstance(v, Point),
            serialize=lambda v: [v.x, v.y],
        )
        registry = HandlerRegistry([handler])
        assert registry.lookup("Point") is None
        assert registry.detect(Point(1, 2)) is handler
        assert registry.list_names() == []

    def test_replace_only_handler_not_looked_up(self):
        handler = SimpleNamespace(
            name="Point", can_handle=lambda v: False, replace=lambda v: None
        )
        registry = HandlerRegistry([handler])
        assert registry.lookup("Point") is None
        assert registry.is_registered("Point")

    def test_iteration_order(self):
        handlers = [DateHandler(), RegExpHandler(), MockHandler()]
        registry = HandlerRegistry(handlers)
        assert list(registry) == handlers
        assert registry.list_names() == ["Date", "RegExp", "Point"]

    def test_registration_logged(self, caplog):
        with caplog.at_level("DEBUG", logger="superjson.base.registry"):
            HandlerRegistry([MockHandler()])
        assert "Registered handler Point" in caplog.text

    def test_repr(self):
        assert repr(HandlerRegistry([DateHandler()])) == "HandlerRegistry(['Date'])"
