"""Tests del lector de valores: parseo tolerante y logging de fallos."""

import logging
import math
from datetime import datetime, time, timedelta
from unittest.mock import MagicMock

import pytest

from oee_engine.engine.value_reader import (
    ValueReader,
    parse_bool,
    parse_float,
    parse_hours,
    parse_int,
    parse_seconds,
    parse_time_of_day,
)
from oee_engine.points import InMemoryPointStore
from oee_engine.points.values import PointValue

W = PointValue.wrap


class TestParseFloat:

    @pytest.mark.parametrize("raw,expected", [
        (42, 42.0),
        (True, 1.0),
        ("3.5", 3.5),
        (" -2 ", -2.0),
        ("1e3", 1000.0),
        (".5", 0.5),
        (timedelta(seconds=90), 90.0),
    ])
    def test_accepts(self, raw, expected):
        assert parse_float(W(raw)) == expected

    @pytest.mark.parametrize("raw", ["1,5", "nan", "1_000", "abc", "", math.inf, math.nan])
    def test_rejects_and_logs(self, raw, caplog):
        with caplog.at_level(logging.ERROR):
            assert parse_float(W(raw), "Inputs/X") is None
        assert "Cannot parse Inputs/X as number" in caplog.text

    def test_absent_is_silent(self, caplog):
        with caplog.at_level(logging.DEBUG):
            assert parse_float(PointValue.absent()) is None
        assert caplog.records == []


class TestParseInt:

    @pytest.mark.parametrize("raw,expected", [(3.0, 3), (-7, -7), ("42", 42), (" +5 ", 5)])
    def test_accepts(self, raw, expected):
        assert parse_int(W(raw)) == expected

    @pytest.mark.parametrize("raw", [3.5, "4.0", "x", math.inf])
    def test_rejects(self, raw):
        assert parse_int(W(raw)) is None


class TestParseBool:

    @pytest.mark.parametrize("raw,expected", [
        (1, True), (0, False), (2.5, True),
        ("Yes", True), ("on", True), ("1", True),
        ("FALSE", False), ("off", False), ("no", False),
    ])
    def test_accepts(self, raw, expected):
        assert parse_bool(W(raw)) is expected

    def test_rejects(self):
        assert parse_bool(W("maybe")) is None
        assert parse_bool(W(datetime(2026, 1, 1))) is None


class TestTimeParsers:

    @pytest.mark.parametrize("raw,expected", [
        (30, 30.0),
        ("30", 30.0),
        ("00:00:30", 30.0),
        (timedelta(minutes=1), 60.0),
        (datetime(2026, 3, 2, 6, 30), 23400.0),
    ])
    def test_parse_seconds(self, raw, expected):
        assert parse_seconds(W(raw)) == expected

    @pytest.mark.parametrize("raw,expected", [
        (8, 8.0),
        ("7.5", 7.5),
        ("08:30:00", 8.5),
        (timedelta(hours=2), 2.0),
    ])
    def test_parse_hours(self, raw, expected):
        assert parse_hours(W(raw)) == pytest.approx(expected)

    @pytest.mark.parametrize("raw,expected", [
        (6, 21600.0),
        ("6", 21600.0),
        ("06:00", 21600.0),
        ("22:15:00", 80100.0),
        (time(22, 0), 79200.0),
        (datetime(2026, 3, 2, 0, 0, 0), 0.0),
    ])
    def test_parse_time_of_day(self, raw, expected):
        assert parse_time_of_day(W(raw)) == expected

    @pytest.mark.parametrize("raw", [25, -1, "24:00:00", "soon"])
    def test_time_of_day_out_of_range(self, raw, caplog):
        with caplog.at_level(logging.ERROR):
            assert parse_time_of_day(W(raw), "Configuration/ShiftStartTime") is None
        assert "time of day" in caplog.text


class TestValueReader:

    def test_fallbacks(self):
        store = InMemoryPointStore({"a": "garbage", "b": 7, "c": "true"})
        reader = ValueReader(store)

        assert reader.read_float("a", 1.5) == 1.5
        assert reader.read_float("b", 0.0) == 7.0
        assert reader.read_int("missing", -1) == -1
        assert reader.read_bool("c", False) is True

    def test_undeclared_reads_absent(self):
        reader = ValueReader(InMemoryPointStore())
        assert reader.is_absent("Inputs/GoodPartCount")

    def test_store_errors_degrade_to_absent(self, caplog):
        store = MagicMock()
        store.read.side_effect = RuntimeError("host offline")
        reader = ValueReader(store)

        with caplog.at_level(logging.ERROR):
            assert reader.read_float("Inputs/GoodPartCount", 0.0) == 0.0
        assert "host offline" in caplog.text
