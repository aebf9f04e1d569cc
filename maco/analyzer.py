# maco/analyzer.py
# Purpose: turn closes + two MA windows into the current crossover signal.
# Steps: SMAs -> latest crossing -> crossover price -> decay check -> distance.

import dataclasses
import logging
from typing import Optional, Sequence

import pandas as pd

from maco.errors import PeriodError
from maco.maco_compute import add_maco, to_optional_list
from maco.models import CrossoverEvent, Signal, SignalResult, StockData

logger = logging.getLogger(__name__)


def validate_periods(short_period, long_period) -> None:
    """Caller-side contract check; analyze() itself trusts its inputs."""
    for p in (short_period, long_period):
        if isinstance(p, bool) or not isinstance(p, int) or p <= 0:
            raise PeriodError("MA periods must be positive numbers.")
    if short_period >= long_period:
        raise PeriodError("Short-term period must be less than long-term period.")


def find_last_crossover(frame: pd.DataFrame, long_period: int) -> CrossoverEvent:
    """
    Latest crossing in a frame built by add_maco().

    Only rows from `long_period` on are scanned; rows where either SMA (or its
    previous value) is missing never carry a flag. The highest index wins.
    """
    scan = frame.iloc[max(long_period, 1):]
    hits = scan[scan["cross_up"] | scan["cross_down"]]
    if hits.empty:
        return CrossoverEvent()
    kind = Signal.UP if bool(hits["cross_up"].iloc[-1]) else Signal.DOWN
    return CrossoverEvent(kind=kind, index=int(hits.index[-1]))


def decay(kind: Signal, latest_price: float, crossover_price: float) -> Signal:
    """A directional signal is stale once price is back through the crossover level."""
    if kind is Signal.UP and latest_price < crossover_price:
        return Signal.NEUTRAL
    if kind is Signal.DOWN and latest_price > crossover_price:
        return Signal.NEUTRAL
    return kind


def distance_percent(latest_price: float, crossover_price: float) -> Optional[float]:
    """Signed % of latest price vs crossover price; None when the base is 0."""
    if crossover_price == 0:
        return None
    return (latest_price - crossover_price) / crossover_price * 100


def analyze(prices: Sequence[float], short_period: int, long_period: int,
            latest_price: float) -> SignalResult:
    """Crossover analysis on closes ordered oldest -> newest."""
    closes = [float(p) for p in prices]
    frame = add_maco(pd.DataFrame({"close": closes}, dtype=float), short_period, long_period)
    sma_short = tuple(to_optional_list(frame["sma_s"]))
    sma_long = tuple(to_optional_list(frame["sma_l"]))

    event = find_last_crossover(frame, long_period)
    common = dict(
        latest_price=latest_price,
        prices=tuple(closes),
        sma_short=sma_short,
        sma_long=sma_long,
        short_period=short_period,
        long_period=long_period,
    )
    if not event.found:
        return SignalResult(signal=Signal.NEUTRAL, crossover_price=0.0,
                            distance_percent=0.0, crossover_index=-1, **common)

    crossover_price = closes[event.index]
    return SignalResult(
        signal=decay(event.kind, latest_price, crossover_price),
        crossover_price=crossover_price,
        distance_percent=distance_percent(latest_price, crossover_price),
        crossover_index=event.index,
        **common,
    )


def analyze_stock(symbol: str, data: StockData, short_period: int,
                  long_period: int) -> SignalResult:
    """Analyze a validated payload; prices arrive newest-first and are reversed once."""
    closes = [p.close for p in reversed(data.prices)]
    result = analyze(closes, short_period, long_period, data.latest_price)
    logger.info("%s: signal=%s crossover_index=%d (SMA %d/%d, %d closes)",
                symbol.upper(), result.signal.value, result.crossover_index,
                short_period, long_period, len(closes))
    return dataclasses.replace(
        result,
        symbol=symbol.upper(),
        company_name=data.company_name,
        exchange=data.exchange,
        news=tuple(data.news),
        ratings=tuple(data.ratings),
        sentiment_summary=data.sentiment_summary,
        earnings_date=data.earnings_date,
    )
