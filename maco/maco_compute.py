# maco/maco_compute.py
# Purpose: simple moving averages + crossover flags on a close-price series.
# Rolling means come from pandas (running-sum window, O(n)).

from typing import Optional, Sequence

import pandas as pd


def sma_series(close: pd.Series, period: int) -> pd.Series:
    """Trailing SMA; NaN until `period` samples exist. Non-positive period -> all NaN.

    Means come from a running sum, so they can differ in the last bits from
    summing each window afresh; exact ties between two SMAs (short == long)
    may resolve to either side of the comparison.
    """
    if period <= 0:
        return pd.Series(float("nan"), index=close.index, dtype=float)
    return close.astype(float).rolling(period).mean()


def to_optional_list(s: pd.Series) -> list[Optional[float]]:
    """NaN -> None so the series is plain, JSON-ready data."""
    return [None if pd.isna(v) else float(v) for v in s]


def compute_sma(series: Sequence[float], period: int) -> list[Optional[float]]:
    """SMA aligned with `series`: None where fewer than `period` closes end at i."""
    return to_optional_list(sma_series(pd.Series(list(series), dtype=float), period))


def add_maco(df: pd.DataFrame, short_win: int, long_win: int) -> pd.DataFrame:
    """
    Add short/long SMAs and cross_up/cross_down flags to a frame with a `close` column.
    Rows must already be oldest -> newest; the index is left as is.
    """
    df = df.copy()
    df["sma_s"] = sma_series(df["close"], short_win)   # short SMA
    df["sma_l"] = sma_series(df["close"], long_win)    # long SMA

    # cross up: short moves above long; cross down: short moves below long
    # (comparisons against NaN are False, so rows without both SMAs never flag)
    prev_s = df["sma_s"].shift(1)
    prev_l = df["sma_l"].shift(1)
    df["cross_up"] = (prev_s <= prev_l) & (df["sma_s"] > df["sma_l"])
    df["cross_down"] = (prev_s >= prev_l) & (df["sma_s"] < df["sma_l"])
    return df
