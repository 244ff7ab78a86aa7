"""Demonstration of the handler architecture.

This script shows how custom values travel through JSON:
1. A codec owns an ordered handler registry
2. Handlers turn values into tagged strings and back
3. Plain strings that look like tags are escaped, unknown tags kept as text
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone

from superjson import BaseHandler, SymbolHandler, create, default_handlers


@dataclass
class Point:
    x: float
    y: float


class PointHandler(BaseHandler):
    """Handler for Point values."""

    @property
    def name(self) -> str:
        return "Point"

    def can_handle(self, value) -> bool:
        return isinstance(value, Point)

    def serialize(self, value):
        return [value.x, value.y]

    def deserialize(self, x, y):
        return Point(x, y)


def demo_handler_system():
    """Demonstrate encoding and decoding with custom handlers."""

    print("=" * 70)
    print("HANDLER ARCHITECTURE DEMONSTRATION")
    print("=" * 70)

    # 1. Build a codec
    print("\n1. Building a Codec")
    print("-" * 70)
    codec = create(serializers=[*default_handlers(), SymbolHandler()])
    codec.install_serializer(PointHandler())
    print(f"✓ Codec: {codec!r}")

    # 2. Detection
    print("\n2. Handler Detection")
    print("-" * 70)
    point = Point(1.5, -2)
    detected = codec.registry.detect(point)
    print("Value type: Point")
    print(f"Detected handler: {detected!r}")

    # 3. Encoding
    print("\n3. Encoding")
    print("-" * 70)
    document = {
        "origin": point,
        "created": datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        "rule": re.compile(r"^\d+$", re.MULTILINE),
        "rest": Ellipsis,
        "note": "#!Point[0,0]",
    }
    text = codec.stringify(document, indent=2)
    print(text)

    # 4. Decoding
    print("\n4. Decoding")
    print("-" * 70)
    restored = codec.parse(text)
    for key, value in restored.items():
        print(f"  {key}: {value!r}")
    print(f"✓ Round trip equal: {restored == document}")

    # 5. Unknown tags
    print("\n5. Unknown Tags")
    print("-" * 70)
    plain = create()
    print(f"  Without PointHandler: {plain.parse(text)['origin']!r}")

    print("\n" + "=" * 70)
    print("DEMONSTRATION COMPLETE")
    print("=" * 70)


if __name__ == "__main__":
    demo_handler_system()
