"""hxheaders — Typed htmx request/response headers.

All public types are exported from this module for flat imports:

    from hxheaders import RequestHeaders, ResponseHeaders, decode_request
"""

__version__ = "0.1.0"

# Value codec — see hxheaders._codec for the escaping rules
from hxheaders._codec import (
    TRUTHY,
    EncodingError,
    HeaderCodecError,
    InvalidEscapeError,
    InvalidPayloadError,
    InvalidUtf8Error,
    JsonError,
    MalformedJsonError,
    UnknownTokenError,
    UnserializableJsonError,
    decode_flag,
    decode_json,
    decode_text,
    decode_token,
    encode_flag,
    encode_json,
    encode_text,
    encode_token,
)
from hxheaders._fields import HeaderField

# Registry — see hxheaders._registry for details
from hxheaders._registry import (
    DuplicateHeaderError,
    InvalidHeaderValueError,
    FieldError,
    InvalidFieldError,
    Registry,
    RegistryBuilder,
    RegistryError,
)

# Bundles
from hxheaders._request import (
    REQUEST_REGISTRY,
    RequestHeaders,
    decode_request,
    encode_request,
)
from hxheaders._response import (
    NO_CHANGE,
    RESPONSE_REGISTRY,
    HistoryUpdate,
    Location,
    ResponseHeaders,
    TriggerEvents,
    decode_response,
    encode_response,
)
from hxheaders._swap import Swap
from hxheaders._types import Direction, RawHeaders, Shape, WireToken

__all__ = [
    # Types
    "Direction",
    "RawHeaders",
    "Shape",
    "WireToken",
    "Swap",
    # Codec
    "TRUTHY",
    "encode_flag",
    "decode_flag",
    "encode_token",
    "decode_token",
    "encode_text",
    "decode_text",
    "encode_json",
    "decode_json",
    # Codec errors
    "HeaderCodecError",
    "UnknownTokenError",
    "EncodingError",
    "InvalidEscapeError",
    "InvalidUtf8Error",
    "JsonError",
    "UnserializableJsonError",
    "MalformedJsonError",
    "InvalidPayloadError",
    # Registry
    "HeaderField",
    "RegistryBuilder",
    "Registry",
    "RegistryError",
    "InvalidFieldError",
    "FieldError",
    "DuplicateHeaderError",
    "InvalidHeaderValueError",
    # Request
    "RequestHeaders",
    "REQUEST_REGISTRY",
    "decode_request",
    "encode_request",
    # Response
    "ResponseHeaders",
    "Location",
    "HistoryUpdate",
    "TriggerEvents",
    "NO_CHANGE",
    "RESPONSE_REGISTRY",
    "decode_response",
    "encode_response",
]
