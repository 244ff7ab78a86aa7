"""Tests for base-format primitives and name validation."""

import pytest

from superjson.utils import dumps, is_identifier, loads


class TestIsIdentifier:
    @pytest.mark.parametrize("name", ["Date", "_private", "$ref", "a1", "RegExp"])
    def test_valid(self, name):
        assert is_identifier(name)

    @pytest.mark.parametrize("name", ["", "1a", "a-b", "a b", "a.b", "ü", None, 3])
    def test_invalid(self, name):
        assert not is_identifier(name)


class TestDumps:
    def test_compact(self):
        assert dumps({"a": [1, "x"]}) == '{"a":[1,"x"]}'

    def test_indent_two(self):
        assert dumps({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_indent_four(self):
        assert dumps({"a": 1}, indent=4) == '{\n    "a": 1\n}'

    def test_non_ascii_kept(self):
        assert dumps(["é"], indent=4) == '[\n    "é"\n]'
        assert dumps(["é"]) == '["é"]'

    def test_default_hook(self):
        assert dumps({"s": {1, 2}}, default=sorted) == '{"s":[1,2]}'
        assert dumps({"s": {1, 2}}, default=sorted, indent=3) == (
            '{\n   "s": [\n      1,\n      2\n   ]\n}'
        )

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            dumps(object())
        with pytest.raises(TypeError):
            dumps(object(), indent=4)

    @pytest.mark.parametrize("indent", [None, 0, 2, 4])
    def test_same_rules_at_every_width(self, indent):
        """Test that indentation only changes whitespace."""
        data = {"nan": float("nan"), "inf": float("-inf"), "big": 2**63 - 1}
        text = dumps(data, indent=indent)
        assert loads(text) == {"nan": None, "inf": None, "big": 2**63 - 1}

    @pytest.mark.parametrize("indent", [None, 2, 4])
    def test_integer_range_at_every_width(self, indent):
        with pytest.raises(TypeError):
            dumps({"n": 2**64}, indent=indent)


class TestLoads:
    def test_str_and_bytes(self):
        assert loads('{"a": 1}') == {"a": 1}
        assert loads(b'{"a": 1}') == {"a": 1}

    def test_object_hook(self):
        assert loads('{"a": {"b": 1}}', object_hook=len) == 1

    def test_invalid(self):
        with pytest.raises(ValueError):
            loads("{")
        with pytest.raises(ValueError):
            loads("{", object_hook=dict)
