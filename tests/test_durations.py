"""Unit tests for autodefault.durations."""

from __future__ import annotations

from datetime import timedelta

import pytest

from autodefault.durations import parse_duration


@pytest.mark.unit
class TestParseDuration:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("0", timedelta(0)),
            ("1s", timedelta(seconds=1)),
            ("+5m", timedelta(minutes=5)),
            ("2h30m", timedelta(hours=2, minutes=30)),
            ("1h15m30.5s", timedelta(hours=1, minutes=15, seconds=30.5)),
            ("300ms", timedelta(milliseconds=300)),
            ("1.5h", timedelta(minutes=90)),
            (".5s", timedelta(milliseconds=500)),
            ("10us", timedelta(microseconds=10)),
            ("10µs", timedelta(microseconds=10)),
            ("10μs", timedelta(microseconds=10)),
            ("1500ns", timedelta(microseconds=2)),
            ("-250ms", timedelta(milliseconds=-250)),
            ("-0", timedelta(0)),
        ],
    )
    def test_valid(self, text: str, expected: timedelta) -> None:
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "-", "1", "10", "s", "1d", "1s2", "soon", "1 s"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError, match="invalid duration"):
            parse_duration(text)
