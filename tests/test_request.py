"""Tests for htmx request headers (hxheaders._request)."""

import pytest

from hxheaders import (
    FieldError,
    InvalidUtf8Error,
    RequestHeaders,
    decode_request,
    encode_request,
)


class TestDecodeRequest:
    def test_typical_htmx_request(self) -> None:
        headers = {
            "Host": b"example.com",
            "HX-Request": b"true",
            "HX-Current-URL": b"https://example.com/contacts?page=2",
            "HX-Target": b"contact-list",
            "HX-Trigger": b"load-more",
            "HX-Trigger-Name": b"more",
        }
        assert decode_request(headers) == RequestHeaders(
            request=True,
            current_url="https://example.com/contacts?page=2",
            target="contact-list",
            trigger="load-more",
            trigger_name="more",
        )

    def test_flags_accept_any_spelling(self) -> None:
        bundle = decode_request({"hx-boosted": b"1", "hx-history-restore-request": b"yes"})
        assert bundle.boosted is True
        assert bundle.history_restore_request is True
        assert bundle.request is False

    def test_is_htmx(self) -> None:
        assert decode_request({"hx-request": b"true"}).is_htmx
        assert not decode_request({}).is_htmx

    def test_escaped_prompt(self) -> None:
        bundle = decode_request({"hx-prompt": b"J%C3%BCrgen%20"})
        assert bundle.prompt == "Jürgen "

    def test_empty_value_is_not_absence(self) -> None:
        bundle = decode_request({"hx-target": b""})
        assert bundle.target == ""

    def test_invalid_utf8_prompt(self) -> None:
        with pytest.raises(FieldError) as exc_info:
            decode_request({"hx-prompt": b"%E2%82"})
        assert exc_info.value.name == "hx-prompt"
        assert isinstance(exc_info.value.cause, InvalidUtf8Error)


class TestEncodeRequest:
    def test_encode(self) -> None:
        bundle = RequestHeaders(request=True, boosted=True, target="main", prompt="ok")
        assert encode_request(bundle) == {
            "hx-boosted": b"true",
            "hx-prompt": b"ok",
            "hx-request": b"true",
            "hx-target": b"main",
        }

    def test_round_trip(self) -> None:
        bundle = RequestHeaders(
            boosted=True,
            current_url="https://example.com/search?q=a b",
            history_restore_request=True,
            prompt="  Are you sure? 100% ✔  ",
            request=True,
            target="results",
            trigger_name="q",
            trigger="search-input",
        )
        assert decode_request(encode_request(bundle)) == bundle


class TestScenarios:
    def test_missing_headers_decode_to_empty_bundle(self) -> None:
        bundle = decode_request({"accept": b"*/*", "user-agent": b"test"})
        assert bundle == RequestHeaders()
        assert encode_request(bundle) == {}

    def test_emoji_prompt_round_trips_as_visible_ascii(self) -> None:
        bundle = RequestHeaders(prompt="ship it \U0001f680")
        raw = encode_request(bundle)["hx-prompt"]
        assert raw == b"ship it %F0%9F%9A%80"
        assert all(0x20 <= b <= 0x7E for b in raw)
        assert decode_request({"hx-prompt": raw}).prompt == "ship it \U0001f680"
