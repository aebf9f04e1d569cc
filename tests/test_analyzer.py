import dataclasses

import pytest

from maco.analyzer import analyze, analyze_stock, decay, validate_periods
from maco.errors import PeriodError
from maco.models import Signal, StockData


def test_step_series_crosses_up_once(step_prices):
    res = analyze(step_prices, 5, 10, latest_price=12)
    assert res.signal is Signal.UP
    assert res.crossover_index == 10
    assert res.crossover_price == 12.0
    assert res.distance_percent == pytest.approx((12 - 12.0) / 12.0 * 100)
    assert res.sma_short[10] > res.sma_long[10]
    assert res.sma_short[9] == res.sma_long[9] == 10.0


def test_latest_crossing_wins(two_cross_prices):
    res = analyze(two_cross_prices, 1, 2, latest_price=8.5)
    assert res.crossover_index == 30
    assert res.signal is Signal.DOWN
    assert res.crossover_price == 9.0


def test_earlier_crossing_kept_when_nothing_follows(two_cross_prices):
    res = analyze(two_cross_prices[:30], 1, 2, latest_price=11.5)
    assert res.crossover_index == 25
    assert res.signal is Signal.UP


@pytest.mark.parametrize("latest, expected, dist", [
    (95, Signal.NEUTRAL, -5.0),
    (105, Signal.UP, 5.0),
    (100, Signal.UP, 0.0),
])
def test_up_signal_decays_below_crossover(latest, expected, dist):
    prices = [90.0] * 20 + [100.0] * 5
    res = analyze(prices, 1, 2, latest_price=latest)
    assert res.crossover_index == 20
    assert res.crossover_price == 100.0
    assert res.signal is expected
    assert res.distance_percent == pytest.approx(dist)


@pytest.mark.parametrize("latest, expected", [(95, Signal.NEUTRAL), (85, Signal.DOWN)])
def test_down_signal_decays_above_crossover(latest, expected):
    prices = [100.0] * 20 + [90.0] * 5
    res = analyze(prices, 1, 2, latest_price=latest)
    assert res.crossover_price == 90.0
    assert res.signal is expected


def test_monotonic_series_has_no_crossing():
    prices = [float(p) for p in range(1, 41)]
    res = analyze(prices, 5, 10, latest_price=41)
    assert res.crossover_index == -1
    assert res.signal is Signal.NEUTRAL
    assert res.distance_percent == 0
    assert res.crossover_price == 0
    assert len(res.sma_short) == len(res.sma_long) == 40
    assert res.sma_long[9] == pytest.approx(5.5)


@pytest.mark.parametrize("prices", [[], [5.0], [1.0, 2.0, 3.0] * 3, [3.0, 2.0, 1.0] * 3 + [4.0]])
def test_short_history_takes_neutral_path(prices):
    res = analyze(prices, 3, 10, latest_price=2)
    assert res.crossover_index == -1
    assert res.signal is Signal.NEUTRAL
    assert res.prices == tuple(prices)


def test_zero_crossover_price_leaves_distance_undefined():
    prices = [1.0] * 20 + [0.0] * 5
    res = analyze(prices, 1, 2, latest_price=0.5)
    assert res.crossover_index == 20
    assert res.distance_percent is None
    assert res.signal is Signal.NEUTRAL   # down, but price is back above 0


def test_bad_periods_degrade_instead_of_raising():
    res = analyze([1.0, 2.0, 3.0, 2.0, 1.0] * 5, 0, 3, latest_price=1)
    assert res.signal is Signal.NEUTRAL
    assert all(v is None for v in res.sma_short)


def test_recompute_is_identical(two_cross_prices):
    assert analyze(two_cross_prices, 1, 2, 9) == analyze(two_cross_prices, 1, 2, 9)


def test_decay_neutral_stays_neutral():
    assert decay(Signal.NEUTRAL, 1, 2) is Signal.NEUTRAL


def test_analyze_stock_reverses_and_carries_metadata(payload):
    data = StockData.model_validate(payload)
    res = analyze_stock("aapl", data, 10, 20)
    assert res.symbol == "AAPL"
    assert res.company_name == "Apple Inc."
    assert res.exchange == "NASDAQ"
    assert res.prices[0] == payload["prices"][-1]["close"]
    assert res.prices[-1] == payload["prices"][0]["close"]
    assert res.latest_price == 151.25
    assert res.news[0].source == "Reuters"
    assert res.ratings == ("Analyst X upgraded to Buy.",)
    assert res.earnings_date == "2025-07-31 (PM)"
    assert res.signal is Signal.NEUTRAL
    assert res.crossover_index == -1


def test_result_is_frozen(step_prices):
    res = analyze(step_prices, 5, 10, 12)
    with pytest.raises(dataclasses.FrozenInstanceError):
        res.signal = Signal.DOWN


@pytest.mark.parametrize("short, long", [(10, 20), (1, 2)])
def test_validate_periods_ok(short, long):
    validate_periods(short, long)


@pytest.mark.parametrize("short, long, msg", [
    (0, 20, "positive"),
    (5, -1, "positive"),
    (True, 20, "positive"),
    (5.0, 20, "positive"),
    (20, 20, "less than"),
    (30, 20, "less than"),
])
def test_validate_periods_rejects(short, long, msg):
    with pytest.raises(PeriodError, match=msg):
        validate_periods(short, long)


def test_period_error_is_value_error():
    assert issubclass(PeriodError, ValueError)
