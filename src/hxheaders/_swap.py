"""Swap — how htmx places response content relative to the target.

Spellings are the ones htmx itself accepts for ``hx-swap``/``HX-Reswap``.
Matching is exact and case-sensitive (``innerhtml`` is not ``innerHTML``).
"""

from __future__ import annotations

from hxheaders._types import WireToken


class Swap(WireToken):
    """The closed set of swap strategies."""

    INNER_HTML = "innerHTML"
    """Replace the inner html of the target element."""

    OUTER_HTML = "outerHTML"
    """Replace the entire target element with the response."""

    TEXT_CONTENT = "textContent"
    """Replace the text content of the target, without parsing the response as HTML."""

    BEFORE_BEGIN = "beforebegin"
    """Insert the response before the target element."""

    AFTER_BEGIN = "afterbegin"
    """Insert the response before the first child of the target element."""

    BEFORE_END = "beforeend"
    """Insert the response after the last child of the target element."""

    AFTER_END = "afterend"
    """Insert the response after the target element."""

    DELETE = "delete"
    """Delete the target element regardless of the response."""

    NONE = "none"
    """Do not append content from the response (out of band items still apply)."""
