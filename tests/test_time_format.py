"""
Tests for converting between 24-hour and 12-hour time values.
"""

from __future__ import annotations

import pytest

from catchup.application.utils.time_format import (
    TimeFormat,
    format_time,
    generate_time_options,
    get_time_input_type,
    is_valid_time_format,
    parse_time,
    to_12_hour,
    to_24_hour,
)


def test_format_is_identity_when_already_in_preferred_shape():
    """Well-formed input in the target shape comes back unchanged."""
    for value in ("00:00", "09:30", "12:00", "23:59"):
        assert format_time(value, "24") == value
    for value in ("12:00 AM", "9:05 pm", "11:59PM", "1:00 AM"):
        assert format_time(value, "12") == value


def test_format_converts_between_shapes():
    assert format_time("13:05", "12") == "1:05 PM"
    assert format_time("00:15", TimeFormat.twelve_hour) == "12:15 AM"
    assert format_time("1:05 pm", "24") == "13:05"
    assert format_time("12:30 AM", "24") == "00:30"


def test_format_defaults_to_twelve_hour():
    assert format_time("18:45") == "6:45 PM"
    assert format_time("18:45", None) == "6:45 PM"


def test_unrecognized_time_is_returned_unchanged():
    assert format_time("noon", "24") == "noon"
    assert format_time("25:00", "12") == "25:00"
    assert to_24_hour("13:00 PM") == "13:00 PM"
    assert to_12_hour("7.30") == "7.30"
    assert format_time("", "12") == ""


def test_boundary_hours():
    assert to_12_hour("00:00") == "12:00 AM"
    assert to_12_hour("12:00") == "12:00 PM"
    assert to_12_hour("13:05") == "1:05 PM"
    assert to_12_hour("11:59") == "11:59 AM"
    assert to_24_hour("12:00 AM") == "00:00"
    assert to_24_hour("12:00 PM") == "12:00"


def test_round_trip_for_every_minute_of_the_day():
    for hour in range(24):
        for minute in range(60):
            value = f"{hour:02d}:{minute:02d}"
            assert to_24_hour(to_12_hour(value)) == value


def test_to_24_hour_pads_and_accepts_lowercase_meridiem():
    assert to_24_hour("9:05 am") == "09:05"
    assert to_24_hour("9:05pm") == "21:05"
    assert to_24_hour("07:45") == "07:45"


def test_to_12_hour_leaves_twelve_hour_input_alone():
    assert to_12_hour("9:05 am") == "9:05 am"


def test_parse_time_reports_whether_input_was_recognized():
    parsed = parse_time("3:20 PM")
    assert parsed.recognized is True
    assert (parsed.hour, parsed.minute, parsed.shape) == (15, 20, TimeFormat.twelve_hour)

    parsed = parse_time("24:00")
    assert parsed.recognized is False
    assert parsed.original == "24:00"
    assert parsed.hour is None

    assert parse_time("0:10 AM").recognized is False


def test_generate_options_includes_first_stride_of_end_hour():
    assert generate_time_options("12", 9, 10, 30) == ["9:00 AM", "9:30 AM", "10:00 AM"]
    assert generate_time_options("24", 9, 10, 30) == ["09:00", "09:30", "10:00"]


def test_generate_options_covers_the_whole_day_by_default():
    options = generate_time_options("24")
    assert options[0] == "00:00"
    assert options[-1] == "23:00"
    assert len(options) == 47
    assert generate_time_options("24") == options


def test_generate_options_rejects_bad_bounds():
    with pytest.raises(ValueError):
        generate_time_options("12", 9, 10, 0)
    with pytest.raises(ValueError):
        generate_time_options("12", 11, 10, 30)
    with pytest.raises(ValueError):
        generate_time_options("12", 0, 24, 30)


def test_is_valid_time_format():
    assert is_valid_time_format("09:00", "24") is True
    assert is_valid_time_format("9:00", "24") is False
    assert is_valid_time_format("9:00 AM", "24") is False
    assert is_valid_time_format("9:00 AM", "12") is True
    assert is_valid_time_format("9:00am", "12") is True
    assert is_valid_time_format("09:00", "12") is False
    assert is_valid_time_format("", "12") is False


def test_time_input_type_follows_preference():
    assert get_time_input_type("24") == "time"
    assert get_time_input_type("12") == "text"
    assert get_time_input_type(None) == "text"


def test_unknown_preference_is_rejected():
    with pytest.raises(ValueError):
        format_time("09:00", "36")


def test_trailing_newline_is_not_a_valid_time():
    assert is_valid_time_format("09:00\n", "24") is False
    assert is_valid_time_format("9:00 PM\n", "12") is False
    assert parse_time("21:00\n").recognized is False
    assert format_time("9:00 PM\n", "24") == "9:00 PM\n"
    assert to_12_hour("21:00\n") == "21:00\n"


def test_only_ascii_digits_are_recognized():
    for value in ("٠٩:٣٠", "０９:００", "٩:٣٠ PM"):
        assert parse_time(value).recognized is False
        assert is_valid_time_format(value, "24") is False
        assert is_valid_time_format(value, "12") is False
        assert format_time(value, "24") == value
        assert to_24_hour(value) == value
