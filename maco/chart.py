# maco/chart.py
# Purpose: layout data for the price/SMA chart (coordinates + path strings).
# No drawing happens here; a renderer only has to stroke what comes out.

from dataclasses import dataclass
from typing import Optional, Sequence

from maco.config import CHART_HEIGHT, CHART_PADDING, CHART_WIDTH
from maco.models import SignalResult

Point = tuple[float, float]
Segment = tuple[Point, ...]


@dataclass(frozen=True)
class Viewport:
    width: float = CHART_WIDTH
    height: float = CHART_HEIGHT
    padding: float = CHART_PADDING


@dataclass(frozen=True)
class ChartGeometry:
    price: tuple[Segment, ...]
    sma_short: tuple[Segment, ...]
    sma_long: tuple[Segment, ...]
    marker: Optional[Point]     # crossover point, None when there is none
    y_min: float
    y_max: float


def x_scale(i: int, n: int, vp: Viewport) -> float:
    """Index -> x; a single-point series sits on the left padding."""
    if n <= 1:
        return vp.padding
    return i / (n - 1) * (vp.width - 2 * vp.padding) + vp.padding


def y_bounds(*series: Sequence[Optional[float]]) -> tuple[float, float]:
    """Min/max over every non-null value of every series (0, 0 when there are none)."""
    values = [v for s in series for v in s if v is not None]
    if not values:
        return 0.0, 0.0
    return min(values), max(values)


def y_scale(p: float, lo: float, hi: float, vp: Viewport) -> float:
    """Price -> y (SVG-style, grows downward). A flat range counts as 1."""
    rng = hi - lo
    if rng == 0:
        rng = 1
    return vp.height - vp.padding - (p - lo) / rng * (vp.height - 2 * vp.padding)


def segments(data: Sequence[Optional[float]], lo: float, hi: float,
             vp: Viewport) -> tuple[Segment, ...]:
    """Split a series into runs of non-null points; gaps are not bridged."""
    n = len(data)
    out, run = [], []
    for i, v in enumerate(data):
        if v is None:
            if run:
                out.append(tuple(run))
                run = []
            continue
        run.append((x_scale(i, n, vp), y_scale(v, lo, hi, vp)))
    if run:
        out.append(tuple(run))
    return tuple(out)


def svg_path(segs: Sequence[Segment]) -> str:
    """'M x,y L x,y ...' with a fresh M for every segment."""
    parts = []
    for seg in segs:
        for j, (x, y) in enumerate(seg):
            parts.append(f"{'M' if j == 0 else 'L'} {x:.2f},{y:.2f}")
    return " ".join(parts)


def chart_geometry(prices: Sequence[float], sma_short: Sequence[Optional[float]],
                   sma_long: Sequence[Optional[float]], crossover_index: int = -1,
                   vp: Optional[Viewport] = None) -> ChartGeometry:
    vp = vp or Viewport()
    lo, hi = y_bounds(prices, sma_short, sma_long)

    marker = None
    if 0 <= crossover_index < len(prices) and prices[crossover_index] is not None:
        marker = (x_scale(crossover_index, len(prices), vp),
                  y_scale(prices[crossover_index], lo, hi, vp))

    return ChartGeometry(
        price=segments(prices, lo, hi, vp),
        sma_short=segments(sma_short, lo, hi, vp),
        sma_long=segments(sma_long, lo, hi, vp),
        marker=marker,
        y_min=lo,
        y_max=hi,
    )


def result_chart(result: SignalResult, vp: Optional[Viewport] = None) -> ChartGeometry:
    """Chart layout for an analysis result."""
    return chart_geometry(result.prices, result.sma_short, result.sma_long,
                          result.crossover_index, vp)
