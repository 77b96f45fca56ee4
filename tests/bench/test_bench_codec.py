"""Codec benchmarks for hxheaders.

Measures the hot path: plain ASCII pass-through (the common case), escaping
of non-ASCII text, JSON payloads, and whole-bundle decode/encode.

Run: uv run pytest tests/bench/test_bench_codec.py --benchmark-only
"""

from __future__ import annotations

from hxheaders import (
    Location,
    RequestHeaders,
    ResponseHeaders,
    Swap,
    decode_request,
    decode_response,
    decode_text,
    encode_json,
    encode_request,
    encode_response,
    encode_text,
)

# ── Fixtures ─────────────────────────────────────────────────────────────────

PLAIN = "/contacts/42?tab=notes&page=2 #detail > .body"
UNICODE = "Grüße aus Köln, 東京 \U0001f680 " * 4

REQUEST = {
    "host": b"example.com",
    "accept": b"text/html",
    "hx-request": b"true",
    "hx-current-url": b"https://example.com/contacts?page=2",
    "hx-target": b"contact-list",
    "hx-trigger": b"load-more",
    "hx-prompt": b"J%C3%BCrgen",
}

RESPONSE = ResponseHeaders(
    location=Location(path="/contacts/42", target="#detail", values={"tab": "notes"}),
    reswap=Swap.OUTER_HTML,
    trigger={"saved": {"id": 42, "label": "Gespeichert ✓"}},
)


# ── Text ─────────────────────────────────────────────────────────────────────


def test_bench_encode_text_plain(benchmark):
    benchmark(encode_text, PLAIN)


def test_bench_encode_text_unicode(benchmark):
    benchmark(encode_text, UNICODE)


def test_bench_decode_text_unicode(benchmark):
    raw = encode_text(UNICODE)
    result = benchmark(decode_text, raw)
    assert result == UNICODE


def test_bench_encode_json(benchmark):
    benchmark(encode_json, {"event": {"items": list(range(50)), "label": UNICODE}})


# ── Bundles ──────────────────────────────────────────────────────────────────


def test_bench_decode_request(benchmark):
    result = benchmark(decode_request, REQUEST)
    assert result.request is True


def test_bench_encode_request(benchmark):
    bundle = RequestHeaders(request=True, target="contact-list", prompt="Jürgen")
    benchmark(encode_request, bundle)


def test_bench_response_round_trip(benchmark):
    def round_trip() -> ResponseHeaders:
        return decode_response(encode_response(RESPONSE))

    result = benchmark(round_trip)
    assert result == RESPONSE
