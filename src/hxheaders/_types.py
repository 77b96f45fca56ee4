"""Core enums and type aliases for hxheaders.

- Shape is the structural category of a header value (which codec applies)
- Direction says which side of the exchange may carry a header
- WireToken is the base for closed token sets with fixed wire spellings
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum

# What the HTTP layer hands us: a mapping or ASGI-style (name, value) pairs.
type RawName = str | bytes
type RawValue = bytes | bytearray | memoryview | str
type RawHeaders = Mapping[RawName, RawValue] | Iterable[tuple[RawName, RawValue]]


class Shape(Enum):
    """Which Value Codec pair governs a header."""

    FLAG = "flag"
    TOKEN = "token"
    TEXT = "text"
    JSON = "json"


class Direction(Enum):
    """Which bundles a header field may belong to."""

    REQUEST = "request"
    RESPONSE = "response"
    BOTH = "both"

    def allows(self, other: Direction) -> bool:
        """True if a field with this direction belongs in an `other` bundle."""
        return self is Direction.BOTH or self is other


class WireToken(Enum):
    """Closed token set. Each member's value is its exact wire spelling.

    Lookup by spelling goes through ``WireToken(spelling)``, which raises
    ValueError for anything outside the set. There is no catch-all member.
    """

    def __str__(self) -> str:
        return self.value
