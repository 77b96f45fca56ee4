"""Conformance tests for hxheaders.

Loads the YAML fixtures in tests/fixtures/ and runs them through the public
decode/encode entry points. Each document names a direction, the raw headers
as a peer would send them, and either the expected bundle fields or the
expected error.

Positive fixtures must decode to the expected bundle and, when a canonical
form is given, re-encode to exactly those headers. Error fixtures must fail
with a FieldError naming the header and its cause.

Run with: uv run pytest tests/test_conformance.py -v
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

import hxheaders
from hxheaders import (
    FieldError,
    Location,
    RequestHeaders,
    ResponseHeaders,
    Swap,
    decode_request,
    decode_response,
    encode_request,
    encode_response,
)

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"

DIRECTIONS: dict[str, tuple[Any, Any, type]] = {
    "request": (decode_request, encode_request, RequestHeaders),
    "response": (decode_response, encode_response, ResponseHeaders),
}


@dataclass
class FixtureCase:
    """A single conformance fixture document."""

    source: str
    name: str
    direction: str
    headers: list[tuple[str, bytes]]
    expect: Any | None
    canonical: dict[str, bytes] | None
    error_header: str | None
    error_cause: type[Exception] | None

    @property
    def id(self) -> str:
        return f"{self.source}::{self.name}"


# ─── YAML → hxheaders type conversion ───────────────────────────────────────


def _parse_headers(doc: Any) -> list[tuple[str, bytes]]:
    """Headers are a mapping, or a list of [name, value] pairs for repeats."""
    pairs = doc.items() if isinstance(doc, dict) else doc
    return [(str(name), str(value).encode("latin-1")) for name, value in pairs]


def _parse_bundle(bundle_type: type, doc: dict[str, Any]) -> Any:
    """Build the expected bundle from plain YAML values."""
    values = dict(doc)
    if "reswap" in values:
        values["reswap"] = Swap(values["reswap"])
    if "location" in values:
        values["location"] = Location(**values["location"])
    return bundle_type(**values)


def _parse_error(doc: dict[str, Any]) -> tuple[str, type[Exception]]:
    cause = getattr(hxheaders, doc["cause"], None)
    if not (isinstance(cause, type) and issubclass(cause, Exception)):
        msg = f"Unknown error cause: {doc['cause']}"
        raise ValueError(msg)
    return doc["header"], cause


# ─── Fixture loading ────────────────────────────────────────────────────────


def _load_fixtures() -> list[FixtureCase]:
    """Load every fixture document under tests/fixtures/."""
    cases: list[FixtureCase] = []
    if not FIXTURE_DIR.exists():
        return cases

    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        with yaml_file.open(encoding="utf-8") as f:
            for doc in yaml.safe_load_all(f):
                if doc is None:
                    continue
                cases.append(_parse_case(yaml_file.name, doc))

    return cases


def _parse_case(source: str, doc: dict[str, Any]) -> FixtureCase:
    direction = doc["direction"]
    bundle_type = DIRECTIONS[direction][2]

    expect = None
    if "expect" in doc:
        expect = _parse_bundle(bundle_type, doc["expect"] or {})

    canonical = None
    if "canonical" in doc:
        canonical = dict(_parse_headers(doc["canonical"] or {}))

    error_header = error_cause = None
    if "expect_error" in doc:
        error_header, error_cause = _parse_error(doc["expect_error"])

    return FixtureCase(
        source=source,
        name=doc["name"],
        direction=direction,
        headers=_parse_headers(doc.get("headers") or {}),
        expect=expect,
        canonical=canonical,
        error_header=error_header,
        error_cause=error_cause,
    )


_all_fixtures = _load_fixtures()
_positive_fixtures = [f for f in _all_fixtures if f.error_cause is None]
_error_fixtures = [f for f in _all_fixtures if f.error_cause is not None]


def test_fixtures_were_found() -> None:
    assert _positive_fixtures
    assert _error_fixtures


@pytest.mark.parametrize("fixture", _positive_fixtures, ids=[f.id for f in _positive_fixtures])
def test_conformance_positive(fixture: FixtureCase) -> None:
    """Decode must produce the expected bundle; encode must be canonical."""
    decode, encode, _ = DIRECTIONS[fixture.direction]

    bundle = decode(fixture.headers)
    assert bundle == fixture.expect, (
        f"Fixture '{fixture.name}': expected {fixture.expect!r}, got {bundle!r}"
    )

    encoded = encode(bundle)
    if fixture.canonical is not None:
        assert encoded == fixture.canonical
    assert decode(encoded) == bundle


@pytest.mark.parametrize("fixture", _error_fixtures, ids=[f.id for f in _error_fixtures])
def test_conformance_error(fixture: FixtureCase) -> None:
    """Error fixture: decode must fail on the named header, nothing partial."""
    decode, _, _ = DIRECTIONS[fixture.direction]

    with pytest.raises(FieldError) as exc_info:
        decode(fixture.headers)
    assert exc_info.value.name == fixture.error_header
    assert isinstance(exc_info.value.cause, fixture.error_cause)
