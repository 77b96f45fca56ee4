"""HeaderField — the descriptor binding one bundle attribute to one header.

A field knows its canonical wire name, which bundles may carry it, and which
Value Codec pair governs it. Optional ``dump``/``load`` converters sit between
the typed attribute value and the shape value, e.g. a Location dataclass and
the JSON object that goes on the wire.

Absent-equivalent values (None, and False for flags) never reach the codec:
``encode`` returns None for them and the registry omits the header.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from hxheaders._codec import (
    decode_flag,
    decode_json,
    decode_text,
    decode_token,
    encode_flag,
    encode_json,
    encode_text,
    encode_token,
    parse_json,
)
from hxheaders._types import Direction, Shape, WireToken

type Converter = Callable[[Any], Any]


@dataclass(frozen=True, slots=True)
class HeaderField:
    """Immutable descriptor for one protocol header.

    ``name`` is the lowercase canonical header name; ``attr`` is the bundle
    attribute it populates. ``token`` is required for Shape.TOKEN fields.

    For Shape.JSON fields, ``fallback`` parses values that are not a JSON
    object (the first non-blank character is not ``{``). Its result is passed
    to ``load`` just like parsed JSON would be.
    """

    name: str
    attr: str
    direction: Direction
    shape: Shape
    token: type[WireToken] | None = None
    dump: Converter | None = None
    load: Converter | None = None
    fallback: Converter | None = None

    @property
    def default(self) -> Any:
        """The bundle value meaning "header absent"."""
        return False if self.shape is Shape.FLAG else None

    def encode(self, value: Any) -> bytes | None:
        """Encode a bundle value; None means the header is omitted."""
        if value is None:
            return None
        if self.dump is not None:
            value = self.dump(value)

        match self.shape:
            case Shape.FLAG:
                return encode_flag(bool(value))
            case Shape.TOKEN:
                return encode_token(value)
            case Shape.TEXT:
                return encode_text(value)
            case Shape.JSON:
                return encode_json(value)

    def decode(self, raw: bytes) -> Any:
        """Decode a present header value into the bundle value.

        Raises:
            HeaderCodecError: the codec (or a load converter) rejected raw
            TypeError: a token field was built without its token set
        """
        match self.shape:
            case Shape.FLAG:
                value: Any = decode_flag(raw)
            case Shape.TOKEN:
                if self.token is None:
                    msg = f"{self.name}: token field without a token set"
                    raise TypeError(msg)
                value = decode_token(raw, self.token)
            case Shape.TEXT:
                value = decode_text(raw)
            case Shape.JSON if self.fallback is None:
                value = decode_json(raw)
            case Shape.JSON:
                text_value = decode_text(raw)
                if text_value.lstrip().startswith("{"):
                    value = parse_json(text_value)
                else:
                    value = self.fallback(text_value)

        if self.load is not None:
            value = self.load(value)
        return value


def flag(name: str, attr: str, direction: Direction) -> HeaderField:
    return HeaderField(name, attr, direction, Shape.FLAG)


def token(
    name: str, attr: str, direction: Direction, token_type: type[WireToken]
) -> HeaderField:
    return HeaderField(name, attr, direction, Shape.TOKEN, token=token_type)


def text(
    name: str,
    attr: str,
    direction: Direction,
    *,
    dump: Converter | None = None,
    load: Converter | None = None,
) -> HeaderField:
    return HeaderField(name, attr, direction, Shape.TEXT, dump=dump, load=load)


def json_object(
    name: str,
    attr: str,
    direction: Direction,
    *,
    dump: Converter | None = None,
    load: Converter | None = None,
    fallback: Converter | None = None,
) -> HeaderField:
    return HeaderField(
        name, attr, direction, Shape.JSON, dump=dump, load=load, fallback=fallback
    )
