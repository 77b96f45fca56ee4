"""htmx response headers — what the server sends back to steer the client.

See https://htmx.org/reference/#response_headers
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from hxheaders._codec import InvalidPayloadError
from hxheaders._fields import flag, json_object, text, token
from hxheaders._registry import Registry, RegistryBuilder
from hxheaders._swap import Swap
from hxheaders._types import Direction

if TYPE_CHECKING:
    from hxheaders._fields import HeaderField
    from hxheaders._types import RawHeaders

HX_LOCATION = "hx-location"
HX_PUSH_URL = "hx-push-url"
HX_REDIRECT = "hx-redirect"
HX_REFRESH = "hx-refresh"
HX_REPLACE_URL = "hx-replace-url"
HX_RESWAP = "hx-reswap"
HX_RETARGET = "hx-retarget"
HX_RESELECT = "hx-reselect"
HX_TRIGGER = "hx-trigger"
HX_TRIGGER_AFTER_SETTLE = "hx-trigger-after-settle"
HX_TRIGGER_AFTER_SWAP = "hx-trigger-after-swap"

# Wire spelling of "leave the history alone" for push/replace url.
NO_CHANGE = "false"

type HistoryUpdate = str | Literal[False]
type TriggerEvents = dict[str, Any]


@dataclass(frozen=True, slots=True)
class Location:
    """Client-side redirect without a full page reload (HX-Location).

    ``path`` is required; the rest mirror the htmx ajax context and are left
    out of the payload when unset.
    """

    path: str
    source: str | None = None
    event: str | None = None
    handler: str | None = None
    target: str | None = None
    swap: str | None = None
    values: dict[str, Any] | None = None
    headers: dict[str, str] | None = None
    select: str | None = None

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"path": self.path}
        for key in _LOCATION_CONTEXT:
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload

    @classmethod
    def from_json(cls, payload: Any) -> Location:
        """Build a Location from a parsed HX-Location object.

        Raises:
            InvalidPayloadError: not an object, missing or non-string path,
                keys outside the ajax context, or non-string header values
        """
        if not isinstance(payload, dict):
            msg = f"expected an object, got {type(payload).__name__}"
            raise InvalidPayloadError(msg)
        path = payload.get("path")
        if not isinstance(path, str):
            msg = "'path' must be a string"
            raise InvalidPayloadError(msg)

        unknown = set(payload) - {"path", *_LOCATION_CONTEXT}
        if unknown:
            msg = f"unknown keys: {', '.join(sorted(unknown))}"
            raise InvalidPayloadError(msg)

        for key in ("values", "headers"):
            if payload.get(key) is not None and not isinstance(payload[key], dict):
                msg = f"{key!r} must be an object"
                raise InvalidPayloadError(msg)
        headers = payload.get("headers") or {}
        if not all(isinstance(v, str) for v in headers.values()):
            msg = "'headers' values must be strings"
            raise InvalidPayloadError(msg)
        for key in ("source", "event", "handler", "target", "swap", "select"):
            if payload.get(key) is not None and not isinstance(payload[key], str):
                msg = f"{key!r} must be a string"
                raise InvalidPayloadError(msg)

        return cls(**payload)


_LOCATION_CONTEXT = (
    "source",
    "event",
    "handler",
    "target",
    "swap",
    "values",
    "headers",
    "select",
)


@dataclass(frozen=True, slots=True)
class ResponseHeaders:
    """Typed htmx response headers.

    Every attribute is optional: None (False for flags) means the header is
    not sent. ``push_url``/``replace_url`` take a URL, or False to tell the
    client not to touch its history.
    """

    location: Location | None = None
    push_url: HistoryUpdate | None = None
    redirect: str | None = None
    refresh: bool = False
    replace_url: HistoryUpdate | None = None
    reswap: Swap | None = None
    retarget: str | None = None
    reselect: str | None = None
    trigger: TriggerEvents | None = None
    trigger_after_settle: TriggerEvents | None = None
    trigger_after_swap: TriggerEvents | None = None


def _dump_history(value: HistoryUpdate) -> str:
    return NO_CHANGE if value is False else value


def _load_history(value: str) -> HistoryUpdate:
    return False if value == NO_CHANGE else value


def _location_path(value: str) -> dict[str, Any]:
    # A bare path is shorthand for a location without ajax context.
    return {"path": value}


def _load_events(payload: Any) -> TriggerEvents:
    if not isinstance(payload, dict):
        msg = f"expected an object, got {type(payload).__name__}"
        raise InvalidPayloadError(msg)
    return payload


def _split_events(value: str) -> TriggerEvents:
    # "event1, event2" is shorthand for events without details.
    return dict.fromkeys(name for part in value.split(",") if (name := part.strip()))


def _trigger(name: str, attr: str) -> HeaderField:
    return json_object(
        name, attr, Direction.RESPONSE, load=_load_events, fallback=_split_events
    )


RESPONSE_REGISTRY: Registry[ResponseHeaders] = (
    RegistryBuilder(ResponseHeaders, Direction.RESPONSE)
    .field(
        json_object(
            HX_LOCATION,
            "location",
            Direction.RESPONSE,
            dump=Location.to_json,
            load=Location.from_json,
            fallback=_location_path,
        )
    )
    .field(
        text(
            HX_PUSH_URL,
            "push_url",
            Direction.RESPONSE,
            dump=_dump_history,
            load=_load_history,
        )
    )
    .field(text(HX_REDIRECT, "redirect", Direction.RESPONSE))
    .field(flag(HX_REFRESH, "refresh", Direction.RESPONSE))
    .field(
        text(
            HX_REPLACE_URL,
            "replace_url",
            Direction.RESPONSE,
            dump=_dump_history,
            load=_load_history,
        )
    )
    .field(token(HX_RESWAP, "reswap", Direction.RESPONSE, Swap))
    .field(text(HX_RETARGET, "retarget", Direction.RESPONSE))
    .field(text(HX_RESELECT, "reselect", Direction.RESPONSE))
    .field(_trigger(HX_TRIGGER, "trigger"))
    .field(_trigger(HX_TRIGGER_AFTER_SETTLE, "trigger_after_settle"))
    .field(_trigger(HX_TRIGGER_AFTER_SWAP, "trigger_after_swap"))
    .build()
)


def decode_response(headers: RawHeaders) -> ResponseHeaders:
    """Decode the htmx headers out of a raw response header collection.

    Raises:
        FieldError: a header is malformed; no partial bundle is returned
    """
    return RESPONSE_REGISTRY.decode(headers)


def encode_response(bundle: ResponseHeaders) -> dict[str, bytes]:
    """Encode a response bundle into canonical header name → value bytes."""
    return RESPONSE_REGISTRY.encode(bundle)
