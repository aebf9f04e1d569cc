# maco/models.py
# Purpose: value types shared by the engine.
# - StockData & friends: validated inbound payload (pydantic, rejects bad shapes)
# - CrossoverEvent / SignalResult: frozen outbound snapshots

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from maco.config import MIN_PRICE_POINTS

EARNINGS_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \((AM|PM)\)$")


def _require_number(v):
    # bools are ints in Python and numeric strings would coerce; refuse both
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ValueError(f"expected a number, got {type(v).__name__}")
    return v


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)


class PricePoint(_Payload):
    date: StrictStr
    close: float

    @field_validator("close", mode="before")
    @classmethod
    def close_is_number(cls, v):
        return _require_number(v)


class NewsItem(_Payload):
    title: StrictStr
    source: StrictStr


class StockData(_Payload):
    """Provider payload after validation. Prices arrive newest-first."""

    company_name: StrictStr = Field(alias="companyName")
    exchange: StrictStr
    latest_price: float = Field(alias="latestPrice")
    prices: list[PricePoint]
    news: list[NewsItem] = Field(default_factory=list)
    ratings: list[StrictStr] = Field(default_factory=list)
    sentiment_summary: StrictStr = Field(default="", alias="sentimentSummary")
    earnings_date: StrictStr = Field(default="", alias="earningsDate")

    @field_validator("latest_price", mode="before")
    @classmethod
    def latest_is_number(cls, v):
        return _require_number(v)

    @field_validator("prices")
    @classmethod
    def enough_history(cls, v: list[PricePoint]) -> list[PricePoint]:
        if len(v) < MIN_PRICE_POINTS:
            raise ValueError("Not enough historical data to calculate indicators.")
        return v

    @field_validator("earnings_date")
    @classmethod
    def earnings_format(cls, v: str) -> str:
        v = v.strip()
        if v and not EARNINGS_RE.match(v):
            raise ValueError(f"earningsDate must look like 'YYYY-MM-DD (AM|PM)', got {v!r}")
        return v


class Signal(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class CrossoverEvent:
    kind: Signal = Signal.NEUTRAL
    index: int = -1   # -1 = no crossing found

    @property
    def found(self) -> bool:
        return self.index >= 0


@dataclass(frozen=True)
class SignalResult:
    """Everything presentation needs; never recomputed downstream."""

    signal: Signal
    crossover_price: float
    latest_price: float
    distance_percent: Optional[float]    # None when the crossover price is 0
    crossover_index: int
    prices: tuple[float, ...]            # oldest -> newest
    sma_short: tuple[Optional[float], ...]
    sma_long: tuple[Optional[float], ...]
    short_period: int
    long_period: int
    # pass-through metadata from the provider payload
    symbol: str = ""
    company_name: str = ""
    exchange: str = ""
    news: tuple[NewsItem, ...] = ()
    ratings: tuple[str, ...] = ()
    sentiment_summary: str = ""
    earnings_date: str = ""
