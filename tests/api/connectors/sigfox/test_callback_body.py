"""Testes do parse do corpo do callback."""

from __future__ import annotations

import pytest

from api.connectors.sigfox import (
    CallbackRequestError,
    InvalidJsonError,
    parse_callback_body,
    query_to_dict,
)


class TestParseCallbackBody:
    def test_parses_object(self) -> None:
        assert parse_callback_body(b'{"device": "1A2345"}') == {"device": "1A2345"}

    def test_accepts_str(self) -> None:
        assert parse_callback_body('{"ack": "true"}') == {"ack": "true"}

    @pytest.mark.parametrize("raw", [b"", None])
    def test_empty_body_is_empty_object(self, raw: bytes | None) -> None:
        assert parse_callback_body(raw) == {}

    def test_invalid_json(self) -> None:
        with pytest.raises(InvalidJsonError, match="invalid_json"):
            parse_callback_body(b"{device")

    def test_invalid_utf8(self) -> None:
        with pytest.raises(InvalidJsonError):
            parse_callback_body(b'{"device": "\xff"}')

    @pytest.mark.parametrize("raw", [b"[]", b'"text"', b"42"])
    def test_non_object_rejected(self, raw: bytes) -> None:
        with pytest.raises(InvalidJsonError, match="payload_not_object"):
            parse_callback_body(raw)

    def test_error_hierarchy(self) -> None:
        assert issubclass(InvalidJsonError, CallbackRequestError)
        assert issubclass(CallbackRequestError, ValueError)


def test_query_to_dict() -> None:
    assert query_to_dict({"type": "gps"}) == {"type": "gps"}
    assert query_to_dict(None) == {}
