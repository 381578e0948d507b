"""Unit tests for timestamp and address helpers"""

import pytest
from datetime import datetime, timedelta, timezone
from cash_ledger.utils.date_utils import parse_timestamp, format_timestamp
from cash_ledger.server import parse_bind_address


def test_parse_timestamp_accepts_zulu_suffix():
    assert parse_timestamp("2024-03-01T12:00:00Z") == datetime(2024, 3, 1, 12, tzinfo=timezone.utc)


def test_parse_timestamp_converts_offsets_to_utc():
    parsed = parse_timestamp("2024-03-01T14:00:00+02:00")

    assert parsed == datetime(2024, 3, 1, 12, tzinfo=timezone.utc)
    assert parsed.utcoffset() == timedelta(0)


def test_parse_timestamp_treats_naive_as_utc():
    assert parse_timestamp("2024-03-01T12:00:00") == datetime(2024, 3, 1, 12, tzinfo=timezone.utc)


@pytest.mark.parametrize("text", ["", "   ", "yesterday", "2024-13-01T00:00:00Z"])
def test_parse_timestamp_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_timestamp(text)


def test_format_timestamp_round_trips_microseconds():
    value = datetime(2024, 3, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

    assert parse_timestamp(format_timestamp(value)) == value


@pytest.mark.parametrize(
    "address, expected",
    [
        ("[::1]:50051", ("::1", 50051)),
        ("0.0.0.0:8080", ("0.0.0.0", 8080)),
        ("localhost:9000", ("localhost", 9000)),
    ],
)
def test_parse_bind_address(address, expected):
    assert parse_bind_address(address) == expected


@pytest.mark.parametrize("address", ["50051", ":50051", "localhost:http"])
def test_parse_bind_address_rejects_invalid(address):
    with pytest.raises(ValueError):
        parse_bind_address(address)
