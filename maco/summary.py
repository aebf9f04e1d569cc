# maco/summary.py
# Purpose: JSON-ready snapshot of a SignalResult for dashboards / HTTP callers.

from typing import Optional

import pandas as pd

from maco.chart import Viewport, result_chart, svg_path
from maco.models import Signal, SignalResult

SIGNAL_LABELS = {
    Signal.UP: "Bullish Signal",
    Signal.DOWN: "Bearish Signal",
    Signal.NEUTRAL: "Neutral Signal",
}


def format_distance(distance: Optional[float]) -> str:
    if distance is None:
        return "n/a"
    return f"{'+' if distance > 0 else ''}{distance:.2f}%"


def days_until(earnings_date: str, today: Optional[pd.Timestamp] = None) -> Optional[str]:
    """'(Today)', '(Tomorrow)', '(in N days)'; None for empty, invalid or past dates."""
    if not earnings_date or not isinstance(earnings_date, str):
        return None
    day = pd.to_datetime(earnings_date.split(" ")[0], format="%Y-%m-%d", errors="coerce")
    if pd.isna(day):
        return None
    today = (today if today is not None else pd.Timestamp.today()).normalize()
    diff = (day.normalize() - today).days
    if diff < 0:
        return None
    if diff == 0:
        return "(Today)"
    if diff == 1:
        return "(Tomorrow)"
    return f"(in {diff} days)"


def summarize(result: SignalResult, today: Optional[pd.Timestamp] = None,
              vp: Optional[Viewport] = None) -> dict:
    chart = result_chart(result, vp)
    return {
        "symbol": result.symbol,
        "companyName": result.company_name,
        "exchange": result.exchange,
        "signal": result.signal.value,
        "label": SIGNAL_LABELS[result.signal],
        "latestPrice": result.latest_price,
        "crossoverPrice": result.crossover_price,
        "crossoverIndex": result.crossover_index,
        "distancePercent": result.distance_percent,
        "distance": format_distance(result.distance_percent),
        "shortPeriod": result.short_period,
        "longPeriod": result.long_period,
        "earningsDate": result.earnings_date,
        "earningsIn": days_until(result.earnings_date, today),
        "news": [n.model_dump() for n in result.news],
        "ratings": list(result.ratings),
        "sentimentSummary": result.sentiment_summary,
        "prices": list(result.prices),
        "smaShort": list(result.sma_short),
        "smaLong": list(result.sma_long),
        "chart": {
            "price": svg_path(chart.price),
            "smaShort": svg_path(chart.sma_short),
            "smaLong": svg_path(chart.sma_long),
            "marker": list(chart.marker) if chart.marker else None,
        },
    }
