"""Testes dos helpers do callback (carimbo e device id)."""

from __future__ import annotations

import uuid

from app.use_cases.sigfox._callback_helpers import resolve_device, stamp_callback

# 2017-11-26 16:47:07 UTC
NOW_MS = 1511714827000


class TestStampCallback:
    def test_adds_reception_fields(self) -> None:
        stamped = stamp_callback({"device": "1A2345"}, NOW_MS)

        assert stamped["device"] == "1A2345"
        assert stamped["datetime"] == "2017-11-26 16:47:07"
        assert stamped["localdatetime"] == "2017-11-27 00:47:07"
        assert stamped["callbackTimestamp"] == NOW_MS
        assert uuid.UUID(stamped["uuid"]).version == 4

    def test_local_offset_is_configurable(self) -> None:
        stamped = stamp_callback({}, NOW_MS, local_time_offset_hours=-3)
        assert stamped["localdatetime"] == "2017-11-26 13:47:07"

    def test_payload_fields_win_over_stamp(self) -> None:
        stamped = stamp_callback({"uuid": "from-device"}, NOW_MS)
        assert stamped["uuid"] == "from-device"

    def test_input_not_mutated(self) -> None:
        raw = {"device": "1A2345"}
        stamp_callback(raw, NOW_MS)
        assert raw == {"device": "1A2345"}


class TestResolveDevice:
    def test_body_device_is_normalized(self) -> None:
        assert resolve_device({"device": "1a2345"}, {"device": "other"}) == "1A2345"

    def test_query_fallback(self) -> None:
        assert resolve_device({}, {"device": "1a2345"}) == "1A2345"

    def test_long_ids_kept_verbatim(self) -> None:
        assert resolve_device({"device": "deadbeef"}, {}) == "deadbeef"

    def test_missing_everywhere(self) -> None:
        assert resolve_device({"device": ""}, {}) is None
        assert resolve_device({"device": 12}, {}) is None
