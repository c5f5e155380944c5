#!/usr/bin/env python3
"""Tests for statistics helper functions."""
from models import (
    MaintenanceRecord,
    average_oil_change_interval,
    entry_count,
    summarize,
    total_spent,
)
from models.calculations import is_oil_change


def rec(maintenance, mileage=None, cost=0.0, date="2024-01-01", id="x"):
    return MaintenanceRecord(id, date, maintenance, cost, mileage)


class TestTotalSpent:
    """Tests for total_spent."""

    def test_sums_costs(self):
        records = [rec("Oil", cost=10.5), rec("Tires", cost=20.25)]
        assert total_spent(records) == 30.75

    def test_non_numeric_costs_count_as_zero(self):
        records = [rec("Oil", cost=10.5), rec("?", cost="bad"), rec("?", cost=None)]
        assert total_spent(records) == 10.5

    def test_non_finite_costs_count_as_zero(self):
        records = [rec("Oil", cost=float("nan")), rec("Oil", cost=float("inf"))]
        assert total_spent(records) == 0.0

    def test_negative_costs_reduce_total(self):
        assert total_spent([rec("Part", cost=100.0), rec("Refund", cost=-40.0)]) == 60.0

    def test_empty(self):
        assert total_spent([]) == 0.0


class TestEntryCount:
    """Tests for entry_count."""

    def test_counts(self):
        assert entry_count([rec("a"), rec("b")]) == 2
        assert entry_count([]) == 0


class TestIsOilChange:
    """Tests for is_oil_change."""

    def test_matches_variants(self):
        assert is_oil_change("Oil Change")
        assert is_oil_change("oil change + filter")
        assert is_oil_change("Engine OIL   CHANGE")
        assert is_oil_change("oilchange")

    def test_rejects_others(self):
        assert not is_oil_change("Tire change")
        assert not is_oil_change("Oil filter")
        assert not is_oil_change(None)


class TestAverageOilChangeInterval:
    """Tests for average_oil_change_interval."""

    def test_example_history(self):
        records = [
            rec("Oil Change", mileage=1000),
            rec("Oil change + filter", mileage=4000),
            rec("Tire change", mileage=5000),
        ]
        assert average_oil_change_interval(records) == 3000

    def test_orders_by_mileage_not_list_order(self):
        records = [
            rec("Oil change", mileage=7000),
            rec("Oil change", mileage=1000),
            rec("Oil change", mileage=4000),
        ]
        assert average_oil_change_interval(records) == 3000

    def test_single_record_is_no_data(self):
        assert average_oil_change_interval([rec("Oil change", mileage=1000)]) is None

    def test_empty_is_no_data(self):
        assert average_oil_change_interval([]) is None

    def test_records_without_mileage_ignored(self):
        records = [
            rec("Oil change", mileage=1000),
            rec("Oil change"),
            rec("Oil change", mileage="4000"),
        ]
        assert average_oil_change_interval(records) is None

    def test_duplicate_readings_discarded(self):
        records = [
            rec("Oil change", mileage=1000),
            rec("Oil change", mileage=1000),
            rec("Oil change", mileage=4000),
        ]
        assert average_oil_change_interval(records) == 3000

    def test_only_duplicates_is_no_data(self):
        records = [rec("Oil change", mileage=1000), rec("Oil change", mileage=1000)]
        assert average_oil_change_interval(records) is None

    def test_zero_mileage_counts(self):
        records = [rec("Oil change", mileage=0), rec("Oil change", mileage=600)]
        assert average_oil_change_interval(records) == 600

    def test_mean_rounds_half_up(self):
        records = [
            rec("Oil change", mileage=0),
            rec("Oil change", mileage=1001),
            rec("Oil change", mileage=2003),
        ]
        assert average_oil_change_interval(records) == 1002

    def test_interval_too_large_for_float_is_no_data(self):
        records = [rec("Oil change", mileage=-1.5e308), rec("Oil change", mileage=1.5e308)]
        assert average_oil_change_interval(records) is None

    def test_huge_readings(self):
        records = [rec("Oil change", mileage=0), rec("Oil change", mileage=1e308)]
        assert average_oil_change_interval(records) == int(1e308)


class TestSummarize:
    """Tests for summarize."""

    def test_empty(self):
        assert summarize([]) == {
            "totalSpent": 0.0,
            "entryCount": 0,
            "averageOilChangeInterval": None,
        }

    def test_values(self):
        records = [
            rec("Oil change", mileage=1000, cost=45.0),
            rec("Oil change", mileage=4500, cost=50.0),
        ]
        assert summarize(records) == {
            "totalSpent": 95.0,
            "entryCount": 2,
            "averageOilChangeInterval": 3500,
        }

    def test_huge_values_do_not_raise(self):
        records = [
            rec("Oil change", mileage=0, cost=1e308),
            rec("Oil change", mileage=1e308, cost=1e308),
        ]
        stats = summarize(records)
        assert stats["entryCount"] == 2
        assert stats["averageOilChangeInterval"] == int(1e308)
