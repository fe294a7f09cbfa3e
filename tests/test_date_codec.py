"""Tests for the wire and storage date encodings."""

from datetime import date, datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from utils.date_codec import decode_storage, decode_wire, encode_storage, encode_wire
from utils.errors import FormatError


class TestWireCodec:

    def test_decode_valid_day(self):
        assert decode_wire("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("text", [
        "2021-13-40",
        "21-01-01",
        "",
        "2021/01/01",
        "2021-1-01",
        "2021-01-1",
        "2023-02-29",
        "0000-01-01",
        " 2021-01-01",
        "2021-01-01T00:00:00",
        "２０２１-０１-０１",
    ])
    def test_decode_rejects_malformed(self, text):
        with pytest.raises(FormatError):
            decode_wire(text)

    @pytest.mark.parametrize("value", [None, 20210101, ["2021-01-01"]])
    def test_decode_rejects_non_strings(self, value):
        with pytest.raises(FormatError):
            decode_wire(value)

    def test_format_error_is_a_value_error(self):
        # pydantic turns ValueError raised in validators into validation errors
        assert issubclass(FormatError, ValueError)

    def test_encode_pads_small_years(self):
        assert encode_wire(date(1, 1, 1)) == "0001-01-01"
        assert encode_wire(date(999, 3, 7)) == "0999-03-07"

    @given(st.dates())
    @settings(max_examples=200)
    def test_round_trip(self, day):
        """*For any* day in 0001-01-01..9999-12-31 the wire form decodes back to it"""
        text = encode_wire(day)
        assert len(text) == 10
        assert decode_wire(text) == day


class TestStorageCodec:

    def test_encode_is_utc_midnight(self):
        stored = encode_storage(date(2024, 1, 1))
        assert stored == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert stored.utcoffset() == timedelta(0)

    def test_decode_naive_driver_value(self):
        # pymongo returns naive UTC datetimes by default
        assert decode_storage(datetime(2024, 1, 1)) == date(2024, 1, 1)

    def test_decode_aware_value_uses_utc_day(self):
        plus_two = timezone(timedelta(hours=2))
        assert decode_storage(datetime(2024, 1, 2, 1, 0, tzinfo=plus_two)) == date(2024, 1, 1)

    def test_decode_rejects_non_datetime(self):
        with pytest.raises(FormatError):
            decode_storage("2024-01-01")

    @given(st.dates())
    @settings(max_examples=200)
    def test_round_trip(self, day):
        """*For any* day the storage form decodes back to the same calendar day"""
        assert decode_storage(encode_storage(day)) == day
        assert decode_storage(encode_storage(day).replace(tzinfo=None)) == day
