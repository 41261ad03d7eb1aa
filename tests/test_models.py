"""
Unit tests for the well production value types.
"""

import pytest

from ocd_production.exceptions import InvalidPhaseCode
from ocd_production.models import Phase, ProductionRecord, ReportingPeriod, WellAPI


class TestWellAPI:
    """Tests for API number formatting and key behaviour."""

    def test_canonical_text_is_zero_padded(self):
        assert str(WellAPI(30, 15, 23456)) == "3001523456"

    @pytest.mark.parametrize("api, expected", [
        (WellAPI(1, 2, 3), "0100200003"),
        (WellAPI(0, 0, 0), "0000000000"),
        (WellAPI(99, 999, 99999), "9999999999"),
        (WellAPI(30, 25, 7), "3002500007"),
    ])
    def test_canonical_text_is_ten_digits(self, api, expected):
        assert str(api) == expected
        assert len(str(api)) == 10

    def test_structural_equality_and_hash(self):
        a = WellAPI(30, 15, 23456)
        b = WellAPI(30, 15, 23456)
        assert a == b
        assert hash(a) == hash(b)
        assert {a: 1}[b] == 1
        assert WellAPI(30, 15, 23457) != a

    def test_is_immutable(self):
        api = WellAPI(30, 15, 23456)
        with pytest.raises(AttributeError):
            api.county = 25

    def test_ordering(self):
        assert sorted([WellAPI(30, 25, 1), WellAPI(30, 15, 9)]) == [WellAPI(30, 15, 9), WellAPI(30, 25, 1)]


class TestReportingPeriod:
    """Tests for reporting period formatting."""

    @pytest.mark.parametrize("period, expected", [
        (ReportingPeriod(2021, 6), "2021-06"),
        (ReportingPeriod(1999, 12), "1999-12"),
        (ReportingPeriod(2021, 1), "2021-01"),
    ])
    def test_canonical_text(self, period, expected):
        assert str(period) == expected

    def test_orders_by_year_then_month(self):
        periods = [ReportingPeriod(2021, 2), ReportingPeriod(2020, 12), ReportingPeriod(2021, 1)]
        assert sorted(periods) == [
            ReportingPeriod(2020, 12), ReportingPeriod(2021, 1), ReportingPeriod(2021, 2),
        ]


class TestPhase:
    """Tests for product kind code mapping."""

    @pytest.mark.parametrize("code, phase", [
        ("O", Phase.OIL),
        ("G", Phase.GAS),
        ("W", Phase.WATER),
        ("OIL", Phase.OIL),
    ])
    def test_first_character_selects_phase(self, code, phase):
        assert Phase.from_code(code) is phase

    @pytest.mark.parametrize("code", ["X", "o", "", " O", "1"])
    def test_other_codes_are_rejected(self, code):
        with pytest.raises(InvalidPhaseCode) as exc_info:
            Phase.from_code(code)
        assert exc_info.value.value == code


class TestProductionRecord:
    """Tests for the per-period accumulator."""

    def test_new_record_has_no_readings(self):
        record = ProductionRecord()
        assert all(record.get(phase) is None for phase in Phase)

    def test_set_touches_only_one_phase(self):
        record = ProductionRecord()
        record.set(Phase.GAS, 56.7)
        assert record.gas == 56.7
        assert record.oil is None
        assert record.water is None

    def test_zero_is_a_reading(self):
        record = ProductionRecord()
        record.set(Phase.WATER, 0.0)
        assert record.get(Phase.WATER) == 0.0
