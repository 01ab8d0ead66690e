import datetime as dt

import pytest

from utils import dates, formatting, validation
from utils.qr import attendance_url, registration_url


@pytest.mark.parametrize("value", [
    {"_seconds": 1700000000, "_nanoseconds": 0},
    {"seconds": 1700000000},
    1700000000,
    1700000000000,
    "2023-11-14T22:13:20Z",
])
def test_parse_timestamp_accepts_api_shapes(value):
    parsed = dates.parse_timestamp(value)
    assert parsed == dt.datetime(2023, 11, 14, 22, 13, 20, tzinfo=dt.timezone.utc)


def test_parse_timestamp_rejects_garbage():
    assert dates.parse_timestamp("not a date") is None
    assert dates.parse_timestamp({"foo": 1}) is None
    assert dates.parse_timestamp(None) is None


def test_format_date():
    assert dates.format_date("2024-03-05") == "Mar 05, 2024"
    assert dates.format_date(None) == "N/A"
    assert dates.format_date("garbage") == "Invalid Date"


def test_combine_date_time_and_countdown():
    assert dates.combine_date_time(dt.date(2024, 9, 1), dt.time(18, 30)) == "2024-09-01T18:30"
    assert dates.combine_date_time(dt.date(2024, 9, 1)) == "2024-09-01"
    assert dates.format_countdown(605) == "10:05"
    assert dates.format_countdown(-3) == "0:00"


def test_email_and_slug_rules():
    assert validation.is_valid_email(" jamie@club.test ")
    assert not validation.is_valid_email("jamie@club")
    assert validation.is_valid_slug("msu-dance_club2")
    assert not validation.is_valid_slug("MSU Dance")
    assert validation.slugify("MSU Dance Club!") == "msu-dance-club"


def test_new_password_error_order():
    assert validation.new_password_error("abc", "xyz") == "Password must be at least 6 characters long"
    assert validation.new_password_error("secret1", "secret2") == "Passwords do not match"
    assert validation.new_password_error("secret1", "secret1", "secret1") == \
        "New password must be different from current password"
    assert validation.new_password_error("secret1", "secret1", "old-one") is None


@pytest.mark.parametrize("size,expected", [
    (0, "0 Bytes"),
    (512, "512 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (5 * 1024 * 1024, "5 MB"),
])
def test_format_file_size(size, expected):
    assert formatting.format_file_size(size) == expected


def test_points_text_and_data_url():
    assert formatting.points_text(2) == "+2"
    assert formatting.points_text(0) == "0"
    assert formatting.points_text(-1) == "-1"
    assert formatting.to_data_url(b"hi", "text/plain") == "data:text/plain;base64,aGk="


def test_public_links():
    assert attendance_url("ev1", base_url="https://club.test") == "https://club.test/?page=attendance&event=ev1"
    assert registration_url("a 1", base_url="https://club.test") == "https://club.test/?page=register&audition=a+1"
