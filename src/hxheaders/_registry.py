"""Header registry — binds bundle attributes to canonical header names.

Architecture:
- RegistryBuilder[B] → .build() → Registry[B] (immutable)
- Each registered HeaderField names its header, its bundle attribute and the
  codec shape that governs it
- decode() walks the field table against a raw header collection and builds
  a bundle; encode() walks it the other way

Example::

    builder = RegistryBuilder(RequestHeaders, Direction.REQUEST)
    builder.field(flag("hx-request", "request", Direction.REQUEST))
    registry = builder.build()

    bundle = registry.decode({"HX-Request": b"true"})
    assert registry.encode(bundle) == {"hx-request": b"true"}

Decoding is all-or-nothing: the first field that fails aborts the decode
with a FieldError naming the header, and no partial bundle is returned.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import re2

from hxheaders._codec import HeaderCodecError
from hxheaders._types import Shape

if TYPE_CHECKING:
    from hxheaders._fields import HeaderField
    from hxheaders._types import Direction, RawHeaders, RawName, RawValue

logger = logging.getLogger(__name__)

# RFC 9110 token, restricted to lowercase for canonical names.
_HEADER_NAME = re2.compile(r"[!#$%&'*+\-.^_`|~0-9a-z]+")

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class RegistryError(Exception):
    """Errors from the header registry."""


class InvalidFieldError(RegistryError):
    """A field descriptor cannot be registered."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"invalid field {name!r}: {reason}")


class FieldError(RegistryError):
    """A single header failed to convert; ``cause`` is the codec error."""

    def __init__(self, name: str, cause: HeaderCodecError) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f"{name}: {cause}")


class DuplicateHeaderError(HeaderCodecError):
    """A single-valued header was present more than once."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"expected exactly one value, got {count}")


class InvalidHeaderValueError(HeaderCodecError):
    """A raw header value is not an octet sequence."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"invalid header value: {reason}")


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════


class RegistryBuilder[B]:
    """Builder for constructing a Registry.

    Register field descriptors in wire order, then call build() to produce
    an immutable Registry. Validation happens at build time.
    """

    def __init__(self, bundle_type: type[B], direction: Direction) -> None:
        self._bundle_type = bundle_type
        self._direction = direction
        self._fields: list[HeaderField] = []

    def field(self, header_field: HeaderField) -> RegistryBuilder[B]:
        """Register a field descriptor."""
        self._fields.append(header_field)
        return self

    def build(self) -> Registry[B]:
        """Validate and freeze the field table.

        Raises:
            InvalidFieldError: bad name, duplicate name, wrong direction,
                token field without a token set, or unknown bundle attribute
        """
        attrs = {f.name for f in dataclasses.fields(self._bundle_type)}  # type: ignore[arg-type]
        table: dict[str, HeaderField] = {}
        for f in self._fields:
            if not _HEADER_NAME.fullmatch(f.name):
                raise InvalidFieldError(f.name, "not a lowercase header token")
            if f.name in table:
                raise InvalidFieldError(f.name, "registered twice")
            if not f.direction.allows(self._direction):
                raise InvalidFieldError(
                    f.name,
                    f"{f.direction.value} field in a {self._direction.value} registry",
                )
            if f.shape is Shape.TOKEN and f.token is None:
                raise InvalidFieldError(f.name, "token field without a token set")
            if f.attr not in attrs:
                raise InvalidFieldError(
                    f.name,
                    f"{self._bundle_type.__name__} has no attribute {f.attr!r}",
                )
            table[f.name] = f

        return Registry(
            bundle_type=self._bundle_type,
            direction=self._direction,
            _fields=MappingProxyType(table),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry[B]:
    """Immutable table of header fields for one bundle type.

    Constructed via RegistryBuilder. Safe to share across threads.
    """

    bundle_type: type[B]
    direction: Direction
    _fields: MappingProxyType[str, HeaderField] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def decode(self, headers: RawHeaders) -> B:
        """Build a bundle from a raw header collection.

        Header names are matched case-insensitively. Headers that are not
        registered are ignored; registered headers that are absent leave
        their attribute unset.

        Raises:
            FieldError: a header failed to decode (wraps the codec error)
        """
        collected = _collect(headers, self._fields)
        values: dict[str, Any] = {}
        for name, f in self._fields.items():
            raws = collected.get(name)
            if raws is None:
                continue
            try:
                if len(raws) > 1:
                    raise DuplicateHeaderError(len(raws))
                values[f.attr] = f.decode(_value_bytes(raws[0]))
            except HeaderCodecError as e:
                logger.debug("rejected %s header %r: %s", name, raws, e)
                raise FieldError(name, e) from e
        return self.bundle_type(**values)

    def encode(self, bundle: B) -> dict[str, bytes]:
        """Turn a bundle into canonical name → value bytes, in table order.

        Unset fields (None, or False for flags) are omitted.

        Raises:
            TypeError: bundle is not this registry's bundle type
            FieldError: a payload the codec cannot represent, e.g. NaN
                inside trigger details
        """
        if not isinstance(bundle, self.bundle_type):
            msg = (
                f"expected {self.bundle_type.__name__}, "
                f"got {type(bundle).__name__}"
            )
            raise TypeError(msg)

        out: dict[str, bytes] = {}
        for name, f in self._fields.items():
            try:
                raw = f.encode(getattr(bundle, f.attr))
            except HeaderCodecError as e:
                logger.debug("cannot encode %s header: %s", name, e)
                raise FieldError(name, e) from e
            if raw is not None:
                out[name] = raw
        return out

    @property
    def field_count(self) -> int:
        """Number of registered fields."""
        return len(self._fields)

    def contains(self, name: str) -> bool:
        """Check if a header name is registered (case-insensitive)."""
        return name.lower() in self._fields

    def get(self, name: str) -> HeaderField | None:
        """Look up a field descriptor by header name (case-insensitive)."""
        return self._fields.get(name.lower())

    def names(self) -> list[str]:
        """Return all registered header names, in table order."""
        return list(self._fields)


def _collect(
    headers: RawHeaders, wanted: Mapping[str, HeaderField]
) -> dict[str, list[RawValue]]:
    """Group raw values by lowercased name, keeping only registered names."""
    pairs = headers.items() if isinstance(headers, Mapping) else headers
    collected: dict[str, list[RawValue]] = {}
    for raw_name, raw_value in pairs:
        name = _name_str(raw_name)
        if name in wanted:
            collected.setdefault(name, []).append(raw_value)
    return collected


def _name_str(name: RawName) -> str:
    if isinstance(name, bytes):
        name = name.decode("latin-1")
    return name.lower()


def _value_bytes(value: RawValue) -> bytes:
    """Turn a raw header value into its octets.

    Raises:
        InvalidHeaderValueError: a str outside Latin-1, or not bytes-like
    """
    # str values are the Latin-1 view HTTP servers present of the octets.
    if isinstance(value, str):
        try:
            return value.encode("latin-1")
        except UnicodeEncodeError as e:
            msg = f"character {value[e.start]!r} at offset {e.start} is not an octet"
            raise InvalidHeaderValueError(msg) from e
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    msg = f"expected bytes or str, got {type(value).__name__}"
    raise InvalidHeaderValueError(msg)
