"""
Unit tests for the Daily Aggregator.

Usage:
    pytest tests/test_aggregator.py -v
"""
from activity_engine import DailyTotals, GoalConfig, aggregate_daily


class TestAggregateDaily:
    """Test per-day collapsing of the sample log."""

    def test_devices_are_additive(self, make_sample):
        """Totals from different devices on the same day add up."""
        samples = [
            make_sample(4000, 200.0, end="2026-10-19T09:00:00Z", device_id="phone"),
            make_sample(3000, 150.0, end="2026-10-19T09:00:00Z", device_id="watch"),
        ]
        daily = aggregate_daily(samples)

        assert daily == {"2026-10-19": DailyTotals(date="2026-10-19", steps=7000, calories=350.0)}

    def test_same_device_keeps_latest_end(self, make_sample):
        """Cumulative re-readings of one device count once, using the latest end."""
        samples = [
            make_sample(1000, 50.0, end="2026-10-19T09:00:00Z"),
            make_sample(2500, 120.0, end="2026-10-19T11:00:00Z"),
            make_sample(1800, 90.0, end="2026-10-19T10:00:00Z"),
        ]
        daily = aggregate_daily(samples)

        assert daily["2026-10-19"].steps == 2500
        assert daily["2026-10-19"].calories == 120.0

    def test_latest_end_wins_regardless_of_order(self, make_sample):
        """Insertion order does not matter, only the end time."""
        later = make_sample(2500, 120.0, end="2026-10-19T11:00:00Z")
        earlier = make_sample(1000, 50.0, end="2026-10-19T09:00:00Z")

        assert aggregate_daily([later, earlier])["2026-10-19"].steps == 2500
        assert aggregate_daily([earlier, later])["2026-10-19"].steps == 2500

    def test_tie_on_end_goes_to_later_sample(self, make_sample):
        """Two readings with the same end keep the one processed last."""
        samples = [
            make_sample(1000, end="2026-10-19T09:00:00Z", start="2026-10-19T08:00:00Z"),
            make_sample(1500, end="2026-10-19T09:00:00Z", start="2026-10-19T07:00:00Z"),
        ]
        assert aggregate_daily(samples)["2026-10-19"].steps == 1500

    def test_days_are_split_in_utc(self, make_sample):
        """The day is the UTC calendar day of the end timestamp."""
        samples = [
            make_sample(100, end="2026-10-18T23:59:59Z"),
            make_sample(200, end="2026-10-19T00:00:00Z"),
        ]
        daily = aggregate_daily(samples)

        assert daily["2026-10-18"].steps == 100
        assert daily["2026-10-19"].steps == 200

    def test_offsets_are_converted_to_utc(self, make_sample):
        """A local early-morning end belongs to the previous UTC day."""
        samples = [make_sample(500, end="2026-10-19T01:30:00+02:00")]

        assert list(aggregate_daily(samples)) == ["2026-10-18"]

    def test_naive_timestamps_are_utc(self, make_sample):
        """An end without an offset is read as UTC."""
        samples = [make_sample(500, end="2026-10-19T23:30:00")]

        assert list(aggregate_daily(samples)) == ["2026-10-19"]

    def test_same_device_on_different_days(self, make_sample):
        """The per-device collapse only applies within one day."""
        samples = [
            make_sample(6000, end="2026-10-18T20:00:00Z"),
            make_sample(1000, end="2026-10-19T08:00:00Z"),
        ]
        daily = aggregate_daily(samples)

        assert daily["2026-10-18"].steps == 6000
        assert daily["2026-10-19"].steps == 1000

    def test_unparseable_end_is_skipped(self, make_sample):
        """Samples with an unreadable end never reach the aggregates."""
        samples = [
            make_sample(9999, end="not a date"),
            make_sample(300, end="2026-10-19T09:00:00Z"),
        ]
        daily = aggregate_daily(samples)

        assert list(daily) == ["2026-10-19"]
        assert daily["2026-10-19"].steps == 300

    def test_days_are_sorted(self, make_sample):
        """Aggregates come back in ascending date order."""
        samples = [
            make_sample(1, end="2026-10-19T09:00:00Z"),
            make_sample(1, end="2026-10-12T09:00:00Z"),
            make_sample(1, end="2026-10-15T09:00:00Z"),
        ]
        assert list(aggregate_daily(samples)) == ["2026-10-12", "2026-10-15", "2026-10-19"]

    def test_empty(self):
        """No samples give no days."""
        assert aggregate_daily([]) == {}


class TestDailyTotals:
    """Test goal checks on a single day."""

    def test_meets_requires_both_goals(self):
        """Steps alone or calories alone are not enough."""
        goal = GoalConfig(steps=8000, calories=400.0)

        assert DailyTotals("2026-10-19", 8000, 400.0).meets(goal)
        assert not DailyTotals("2026-10-19", 9000, 399.9).meets(goal)
        assert not DailyTotals("2026-10-19", 7999, 900.0).meets(goal)

    def test_to_dict(self):
        """Serializes date, steps and calories."""
        totals = DailyTotals("2026-10-19", 1200, 60.5)
        assert totals.to_dict() == {"date": "2026-10-19", "steps": 1200, "calories": 60.5}
