"""Tests for the indicator engine."""

import random
from decimal import Decimal

import pytest

from tradecore.indicators import RS_INFINITE, MovingAverageWindows, RsiAccumulator, Trend


def _d(values):
    return [Decimal(str(v)) for v in values]


class TestMovingAverageWindows:
    """Tests for incremental short/long SMA windows."""

    def test_rejects_invalid_sizes(self):
        with pytest.raises(ValueError):
            MovingAverageWindows(5, 5)
        with pytest.raises(ValueError):
            MovingAverageWindows(0, 3)

    def test_ready_only_when_both_windows_full(self):
        windows = MovingAverageWindows(3, 5)
        for i, price in enumerate(_d([1, 2, 3, 4, 5]), start=1):
            windows.update(price)
            assert windows.ready() == (i >= 5)

    def test_crossover_scenario_averages(self):
        """Prices [1,2,3,4,5]: short (3,4,5)=4, long (1..5)=3."""
        windows = MovingAverageWindows(3, 5)
        for price in _d([1, 2, 3, 4, 5]):
            windows.update(price)

        assert windows.short_average() == Decimal("4")
        assert windows.long_average() == Decimal("3")

        windows.update(Decimal("10"))
        # short (4,5,10) = 19/3, long (2,3,4,5,10) = 24/5
        assert windows.short_average() == Decimal("6.33333333")
        assert windows.long_average() == Decimal("4.8")

    def test_running_sums_match_window_contents(self):
        """Running sums equal the window sums after many evictions."""
        rng = random.Random(7)
        windows = MovingAverageWindows(4, 9)
        for _ in range(250):
            windows.update(Decimal(rng.randint(1, 100000)) / Decimal(100))
            assert windows.short_sum == sum(windows.short_window, Decimal("0"))
            assert windows.long_sum == sum(windows.long_window, Decimal("0"))
            assert len(windows.short_window) <= 4
            assert len(windows.long_window) <= 9

    def test_average_rounds_half_up(self):
        windows = MovingAverageWindows(2, 3, scale=0)
        windows.update(Decimal("2"))
        windows.update(Decimal("3"))
        # 2.5 -> 3 with ROUND_HALF_UP (banker's rounding would give 2)
        assert windows.short_average() == Decimal("3")

    def test_average_before_ready_is_allowed(self):
        windows = MovingAverageWindows(3, 5)
        assert windows.short_average() == Decimal("0")
        windows.update(Decimal("10"))
        assert windows.short_average() == Decimal("10")
        assert not windows.ready()


class TestRsiAccumulator:
    """Tests for Wilder RSI and trend classification."""

    def test_ready_after_period_price_changes(self):
        """Seeded exactly on the period-th price change (period + 1 prices)."""
        rsi = RsiAccumulator(period=14)
        prices = _d([100 + i for i in range(14)]) + [Decimal("113.50")]
        for i, price in enumerate(prices, start=1):
            rsi.update(price)
            assert rsi.ready() == (i == 15)
        assert rsi.seed_count == 14

    def test_reversion_scenario_values(self):
        """100..113 then 113.50: avg_loss 0 pins RSI at 100."""
        rsi = RsiAccumulator(period=14)
        for price in _d([100 + i for i in range(14)]) + [Decimal("113.50")]:
            rsi.update(price)

        assert rsi.avg_loss == Decimal("0")
        assert rsi.avg_gain == Decimal("0.9642857143")  # 13.5 / 14
        assert rsi.rsi == Decimal("100")
        assert rsi.previous_rsi == Decimal("50")
        assert rsi.rs == RS_INFINITE
        assert rsi.trend is Trend.UP

    def test_increasing_prices_stay_pinned_at_100(self):
        rsi = RsiAccumulator(period=5)
        for price in _d([10 + i for i in range(30)]):
            rsi.update(price)
            if rsi.ready():
                assert rsi.avg_loss == 0
                assert rsi.rsi == Decimal("100")
                assert rsi.is_uptrend()

    def test_wilder_smoothing(self):
        """period=2: 10, 11, 10 seeds (0.5, 0.5); 12 smooths to (1.25, 0.25)."""
        rsi = RsiAccumulator(period=2)
        for price in _d([10, 11, 10]):
            rsi.update(price)

        assert rsi.avg_gain == Decimal("0.5")
        assert rsi.avg_loss == Decimal("0.5")
        assert rsi.rs == Decimal("1")
        assert rsi.rsi == Decimal("50")
        assert rsi.trend is Trend.FLAT

        rsi.update(Decimal("12"))
        assert rsi.avg_gain == Decimal("1.25")
        assert rsi.avg_loss == Decimal("0.25")
        assert rsi.rs == Decimal("5")
        assert rsi.rsi == Decimal("83.3333333333")
        assert rsi.previous_rsi == Decimal("50")

    def test_falling_prices_give_zero_rsi_and_downtrend(self):
        rsi = RsiAccumulator(period=2)
        for price in _d([10, 9, 8]):
            rsi.update(price)

        assert rsi.rs == Decimal("0")
        assert rsi.rsi == Decimal("0")
        assert rsi.is_downtrend()

    def test_never_returns_to_seeding(self):
        rsi = RsiAccumulator(period=3)
        for price in _d([5, 6, 7, 8, 8, 8, 8, 8, 8]):
            rsi.update(price)
        assert rsi.ready()
        assert rsi.seed_count == 3

    def test_rsi_bounded_for_random_walks(self):
        rng = random.Random(42)
        for _ in range(20):
            rsi = RsiAccumulator(period=14)
            price = Decimal("100")
            for _ in range(60):
                price += Decimal(rng.randint(-300, 300)) / Decimal(100)
                rsi.update(price)
                assert Decimal("0") <= rsi.rsi <= Decimal("100")
            assert rsi.ready()

    @pytest.mark.parametrize(
        "rs, expected",
        [
            (Decimal("1.06"), Trend.UP),
            (Decimal("1.05"), Trend.FLAT),
            (Decimal("1.00"), Trend.FLAT),
            (Decimal("0.95"), Trend.FLAT),
            (Decimal("0.94"), Trend.DOWN),
        ],
    )
    def test_trend_bands(self, rs, expected):
        """Trend is a pure function of the current RS and the fixed bands."""
        rsi = RsiAccumulator(period=14)
        rsi.rs = rs
        assert rsi.trend is expected

    def test_trend_flat_before_seeding(self):
        rsi = RsiAccumulator(period=14)
        rsi.update(Decimal("1"))
        rsi.update(Decimal("2"))
        assert rsi.trend is Trend.FLAT

    def test_rejects_invalid_parameters(self):
        with pytest.raises(ValueError):
            RsiAccumulator(period=0)
        with pytest.raises(ValueError):
            RsiAccumulator(upper_band=Decimal("0.9"), lower_band=Decimal("1.1"))

    def test_flat_feed_never_seeds(self):
        rsi = RsiAccumulator(period=14)
        for _ in range(50):
            rsi.update(Decimal("100"))

        assert not rsi.ready()
        assert rsi.seed_count == 0
        assert rsi.rs is None
        assert rsi.trend is Trend.FLAT

    def test_leading_flat_changes_not_counted(self):
        """Seeding starts with the first move; later zero changes do count."""
        rsi = RsiAccumulator(period=3)
        for price in _d([10, 10, 10, 11]):
            rsi.update(price)
        assert rsi.seed_count == 1

        rsi.update(Decimal("11"))
        assert rsi.seed_count == 2
        rsi.update(Decimal("12"))
        assert rsi.ready()
        assert rsi.avg_gain == Decimal("0.6666666667")

    def test_snapshot(self):
        rsi = RsiAccumulator(period=2)
        assert rsi.snapshot()["ready"] is False
        for price in _d([10, 11, 10]):
            rsi.update(price)

        snapshot = rsi.snapshot()
        assert snapshot["ready"] is True
        assert snapshot["rsi"] == Decimal("50")
        assert snapshot["rs"] == Decimal("1")
        assert snapshot["trend"] == "FLAT"


class TestMovingAverageSnapshot:
    def test_snapshot(self):
        windows = MovingAverageWindows(3, 5)
        for price in _d([1, 2, 3, 4]):
            windows.update(price)

        snapshot = windows.snapshot()

        assert snapshot["ready"] is False
        assert snapshot["short_avg"] == Decimal("3")
        assert snapshot["long_avg"] == Decimal("2.5")
        assert (snapshot["short_len"], snapshot["long_len"]) == (3, 4)
