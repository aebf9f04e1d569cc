import pandas as pd
import pytest


@pytest.fixture
def step_prices() -> list[float]:
    # ten closes at 10 then ten at 12 (oldest -> newest)
    return [10.0] * 10 + [12.0] * 10


@pytest.fixture
def two_cross_prices() -> list[float]:
    # with SMA 1/2: up crossing at index 25, down crossing at index 30
    return [10.0] * 25 + [11.0] * 5 + [9.0] * 10


@pytest.fixture
def payload() -> dict:
    dates = pd.bdate_range(end="2025-06-30", periods=40)[::-1]   # newest first
    closes = [150.0 - 0.5 * i for i in range(40)]                # falls going back in time
    return {
        "companyName": "Apple Inc.",
        "exchange": "NASDAQ",
        "latestPrice": 151.25,
        "news": [{"title": "Apple ships a thing", "source": "Reuters"}],
        "ratings": ["Analyst X upgraded to Buy."],
        "sentimentSummary": "Sentiment is generally positive.",
        "earningsDate": "2025-07-31 (PM)",
        "prices": [{"date": d.strftime("%Y-%m-%d"), "close": c} for d, c in zip(dates, closes)],
    }
