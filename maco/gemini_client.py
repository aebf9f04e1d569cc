# maco/gemini_client.py
# Purpose: tiny Gemini REST client (Google Search grounded) that returns StockData.
# The API key is handed in by the caller; nothing here reads it from env.

import logging

import requests

from maco.config import GEMINI_BASE, GEMINI_MODEL, HISTORY_DAYS, REQUEST_TIMEOUT
from maco.errors import DataSourceError
from maco.models import StockData
from maco.payload import parse_stock_data

logger = logging.getLogger(__name__)

PROMPT = """
For the US stock ticker "{symbol}", provide the following information in a single JSON object.
1.  Use Google Search to find the most up-to-date, real information for the company name, primary exchange, and latest stock price.
2.  Use Google Search to find 2-3 recent news headlines (with source) and 2-3 recent analyst rating changes (upgrades/downgrades).
3.  Use Google Search to analyze public sentiment over the last 2 weeks from sources like X.com or public forums. Provide a brief, one-sentence summary (e.g., "Sentiment is generally positive due to recent earnings reports.").
4.  Use Google Search to find the next upcoming earnings release date, including whether it is pre-market (AM) or post-market (PM). If not available, return an empty string.
5.  Generate a list of simulated daily closing prices for the last {days} trading days to be used for technical analysis, newest first.

The final JSON object must have this exact structure:
{{
  "companyName": "...",
  "exchange": "...",
  "latestPrice": 123.45,
  "news": [
    {{ "title": "...", "source": "..." }}
  ],
  "ratings": [
    "Analyst X upgraded to Buy.",
    "..."
  ],
  "sentimentSummary": "...",
  "earningsDate": "YYYY-MM-DD (AM|PM)",
  "prices": [
    {{ "date": "YYYY-MM-DD", "close": 120.00 }},
    ... {more} more entries
  ]
}}
"""


def build_prompt(symbol: str, days: int = HISTORY_DAYS) -> str:
    return PROMPT.format(symbol=symbol, days=days, more=days - 1)


def reply_text(body: dict) -> str:
    """Concatenate the text parts of the first candidate."""
    try:
        parts = body["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        raise DataSourceError(f"Gemini reply has no content: {str(body)[:200]}") from e
    if not isinstance(parts, list):
        raise DataSourceError(f"Gemini reply parts are not a list: {str(parts)[:200]}")
    texts = (p.get("text") for p in parts if isinstance(p, dict))
    return "".join(t for t in texts if isinstance(t, str))


class GeminiClient:
    """Fetches grounded company data + simulated closes for one symbol."""

    def __init__(self, api_key: str, model: str = GEMINI_MODEL, base: str = GEMINI_BASE,
                 timeout: float = REQUEST_TIMEOUT, session=None):
        if not api_key:
            raise DataSourceError("Gemini API key is missing")
        self.api_key = api_key
        self.model = model
        self.base = base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, prompt: str) -> dict:
        """POST with key header + loud, helpful errors."""
        url = f"{self.base}/models/{self.model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "tools": [{"google_search": {}}],
        }
        headers = {"x-goog-api-key": self.api_key}  # header auth, keeps key out of URLs/logs
        try:
            r = self.session.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise DataSourceError(f"Gemini request failed: {e}") from e
        if r.status_code in (401, 403):
            # short body tells you *why* (bad key, API not enabled, quota...)
            raise DataSourceError(f"Gemini {r.status_code}: {r.text[:200]}")
        try:
            r.raise_for_status()
        except requests.HTTPError as e:
            raise DataSourceError(f"Gemini HTTP error: {e}") from e
        try:
            return r.json()
        except ValueError as e:
            # proxies and gateways answer 200 with HTML now and then
            raise DataSourceError(f"Gemini reply is not JSON: {r.text[:200]}") from e

    def stock_data(self, symbol: str) -> StockData:
        symbol = symbol.strip().upper()
        logger.info("Requesting %s from %s", symbol, self.model)
        body = self._post(build_prompt(symbol))
        return parse_stock_data(reply_text(body), symbol=symbol)
