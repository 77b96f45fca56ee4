"""htmx request headers — what the browser sends with every htmx request.

See https://htmx.org/reference/#request_headers
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hxheaders._fields import flag, text
from hxheaders._registry import Registry, RegistryBuilder
from hxheaders._types import Direction

if TYPE_CHECKING:
    from hxheaders._types import RawHeaders

HX_BOOSTED = "hx-boosted"
HX_CURRENT_URL = "hx-current-url"
HX_HISTORY_RESTORE_REQUEST = "hx-history-restore-request"
HX_PROMPT = "hx-prompt"
HX_REQUEST = "hx-request"
HX_TARGET = "hx-target"
HX_TRIGGER_NAME = "hx-trigger-name"
HX_TRIGGER = "hx-trigger"


@dataclass(frozen=True, slots=True)
class RequestHeaders:
    """Typed htmx request headers.

    Every attribute is optional: None (False for flags) means the header was
    not sent. An empty string is a sent-but-empty header.
    """

    boosted: bool = False
    """The request is via an element using hx-boost."""

    current_url: str | None = None
    """The current URL of the browser."""

    history_restore_request: bool = False
    """The request is for history restoration after a miss in the local cache."""

    prompt: str | None = None
    """The user response to an hx-prompt."""

    request: bool = False
    """Always set by htmx."""

    target: str | None = None
    """The id of the target element, if it exists."""

    trigger_name: str | None = None
    """The name of the triggered element, if it exists."""

    trigger: str | None = None
    """The id of the triggered element, if it exists."""

    @property
    def is_htmx(self) -> bool:
        """True when the request came from htmx at all."""
        return self.request


REQUEST_REGISTRY: Registry[RequestHeaders] = (
    RegistryBuilder(RequestHeaders, Direction.REQUEST)
    .field(flag(HX_BOOSTED, "boosted", Direction.REQUEST))
    .field(text(HX_CURRENT_URL, "current_url", Direction.REQUEST))
    .field(
        flag(HX_HISTORY_RESTORE_REQUEST, "history_restore_request", Direction.REQUEST)
    )
    .field(text(HX_PROMPT, "prompt", Direction.REQUEST))
    .field(flag(HX_REQUEST, "request", Direction.REQUEST))
    .field(text(HX_TARGET, "target", Direction.REQUEST))
    .field(text(HX_TRIGGER_NAME, "trigger_name", Direction.REQUEST))
    .field(text(HX_TRIGGER, "trigger", Direction.REQUEST))
    .build()
)


def decode_request(headers: RawHeaders) -> RequestHeaders:
    """Decode the htmx headers out of a raw request header collection.

    Raises:
        FieldError: a header is malformed; no partial bundle is returned
    """
    return REQUEST_REGISTRY.decode(headers)


def encode_request(bundle: RequestHeaders) -> dict[str, bytes]:
    """Encode a request bundle into canonical header name → value bytes."""
    return REQUEST_REGISTRY.encode(bundle)
