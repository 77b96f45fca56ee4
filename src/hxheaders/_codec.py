"""Value Codec — typed values to and from header-safe bytes.

One encode/decode pair per Shape. Every function is pure: no state, no I/O.

Text escaping
-------------
A header value may only carry visible ASCII plus interior spaces on the wire.
Everything else (control bytes, HTAB, non-ASCII, leading or trailing SP) is
written as ``%XX``, the uppercase hex of one UTF-8 byte. ``%`` itself is always
escaped so that the marker stays unambiguous. Bytes already in the
pass-through set are never escaped, so plain ASCII headers read the same on
the wire as in code::

    encode_text("/search?q=a b")   -> b"/search?q=a b"
    encode_text("café")            -> b"caf%C3%A9"
    encode_text("100%")            -> b"100%25"
    encode_text(" padded ")        -> b"%20padded%20"

JSON payloads are serialized compactly and then go through the same escaping.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import re2

if TYPE_CHECKING:
    from hxheaders._types import WireToken

TRUTHY = b"true"
ESCAPE = 0x25  # "%"

# Visible ASCII minus "%". SP is allowed between two of these.
_PASS_BYTES = frozenset(range(0x21, 0x7F)) - {ESCAPE}
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")

# Fast path: the whole string is already wire-legal.
_PLAIN = re2.compile(r"(?:[\x21-\x24\x26-\x7e](?:[\x20-\x24\x26-\x7e]*[\x21-\x24\x26-\x7e])?)?")

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class HeaderCodecError(Exception):
    """Errors from converting a single header value."""


class UnknownTokenError(HeaderCodecError):
    """The wire bytes are not the spelling of any member of the token set."""

    def __init__(self, raw: bytes) -> None:
        self.raw = raw
        super().__init__(f"unknown token: {raw!r}")


class EncodingError(HeaderCodecError):
    """The escaped text could not be turned back into a string."""

    def __init__(self, raw: bytes, position: int, reason: str) -> None:
        self.raw = raw
        self.position = position
        super().__init__(f"{reason} at offset {position}: {raw!r}")


class InvalidEscapeError(EncodingError):
    """A ``%`` marker is truncated or not followed by two hex digits."""

    def __init__(self, raw: bytes, position: int) -> None:
        super().__init__(raw, position, "invalid escape")


class InvalidUtf8Error(EncodingError):
    """The unescaped bytes are not well-formed UTF-8.

    ``position`` is the offset into the unescaped byte sequence.
    """

    def __init__(self, raw: bytes, position: int) -> None:
        super().__init__(raw, position, "invalid utf-8")


class JsonError(HeaderCodecError):
    """A JSON-shaped payload could not be serialized or parsed."""


class UnserializableJsonError(JsonError):
    """The value holds something JSON cannot represent (NaN, sets, objects)."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"value is not JSON-serializable: {reason}")


class MalformedJsonError(JsonError):
    """The payload is not valid JSON text.

    ``position`` is the parser's character offset, or None when the text is
    syntactically JSON-like but uses a non-finite constant.
    """

    def __init__(self, reason: str, position: int | None) -> None:
        self.reason = reason
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"malformed JSON{where}: {reason}")


class InvalidPayloadError(JsonError):
    """Well-formed JSON whose structure does not fit the header's value type."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"invalid payload: {reason}")


# ═══════════════════════════════════════════════════════════════════════════════
# Flag
# ═══════════════════════════════════════════════════════════════════════════════


def encode_flag(value: bool) -> bytes | None:
    """Return the truthy marker, or None to omit the header entirely."""
    return TRUTHY if value else None


def decode_flag(raw: bytes | None) -> bool:
    """Presence is truth. Peers are free to send any spelling of "true"."""
    return raw is not None


# ═══════════════════════════════════════════════════════════════════════════════
# Token
# ═══════════════════════════════════════════════════════════════════════════════


def encode_token(token: WireToken) -> bytes:
    return token.value.encode("ascii")


def decode_token[T: WireToken](raw: bytes, token_type: type[T]) -> T:
    """Exact, case-sensitive lookup. No trimming, no default member.

    Raises:
        UnknownTokenError: raw is not a known spelling
    """
    try:
        return token_type(raw.decode("ascii"))
    except (UnicodeDecodeError, ValueError) as e:
        raise UnknownTokenError(raw) from e


# ═══════════════════════════════════════════════════════════════════════════════
# Text
# ═══════════════════════════════════════════════════════════════════════════════


def encode_text(value: str) -> bytes:
    """Escape a string into wire-legal bytes.

    Raises:
        InvalidUtf8Error: value contains a lone surrogate, which has no
            UTF-8 form
    """
    if value.isascii() and _PLAIN.fullmatch(value) is not None:
        return value.encode("ascii")

    try:
        data = value.encode("utf-8")
    except UnicodeEncodeError as e:
        offset = len(value[: e.start].encode("utf-8"))
        raise InvalidUtf8Error(value.encode("utf-8", "surrogatepass"), offset) from e

    last = len(data) - 1
    out = bytearray()
    for i, byte in enumerate(data):
        if byte in _PASS_BYTES or (byte == 0x20 and 0 < i < last):
            out.append(byte)
        else:
            out += b"%%%02X" % byte
    return bytes(out)


def decode_text(raw: bytes) -> str:
    """Reverse encode_text. Hex digits are accepted in either case.

    Raises:
        InvalidEscapeError: a ``%`` marker is truncated or non-hex
        InvalidUtf8Error: the unescaped bytes are not UTF-8
    """
    out = bytearray()
    pos = 0
    while (mark := raw.find(b"%", pos)) != -1:
        out += raw[pos:mark]
        digits = raw[mark + 1 : mark + 3]
        if len(digits) != 2 or not _HEX_DIGITS.issuperset(digits):
            raise InvalidEscapeError(raw, mark)
        out.append(int(digits.decode("ascii"), 16))
        pos = mark + 3
    out += raw[pos:]

    try:
        return out.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUtf8Error(raw, e.start) from e


# ═══════════════════════════════════════════════════════════════════════════════
# JSON
# ═══════════════════════════════════════════════════════════════════════════════


def dump_json(value: Any) -> str:
    """Serialize to compact JSON text, keeping non-ASCII characters as-is.

    Raises:
        UnserializableJsonError: NaN/Infinity, circular or non-JSON types
    """
    try:
        return json.dumps(
            value, ensure_ascii=False, separators=(",", ":"), allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise UnserializableJsonError(str(e)) from e


def parse_json(text: str) -> Any:
    """Parse JSON text, rejecting the non-standard NaN/Infinity constants.

    Raises:
        MalformedJsonError: syntax error, position taken from the parser
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedJsonError(e.msg, e.pos) from e
    except ValueError as e:
        raise MalformedJsonError(str(e), None) from e


def encode_json(value: Any) -> bytes:
    return encode_text(dump_json(value))


def decode_json(raw: bytes) -> Any:
    """Unescape then parse.

    Raises:
        EncodingError: the escaping itself is broken
        MalformedJsonError: the unescaped text is not JSON
    """
    return parse_json(decode_text(raw))


def _reject_constant(name: str) -> Any:
    msg = f"non-finite constant {name!r}"
    raise ValueError(msg)
