# main.py
# Purpose: entry points. CLI prints one symbol's signal as JSON;
# `app` is a Flask HTTP service exposing the same thing.
#   python main.py AAPL --short 10 --long 20
#   flask --app main run

import argparse
import json
import logging
import os

from flask import Flask, jsonify, request

from maco.analyzer import analyze_stock, validate_periods
from maco.config import LOG_LEVEL, LONG_WINDOW, SHORT_WINDOW
from maco.errors import MacoError, PeriodError
from maco.gemini_client import GeminiClient
from maco.summary import summarize

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("maco")


def _api_key() -> str:
    # read per call; the key is passed down, never stored globally
    return os.getenv("GEMINI_API_KEY", "")


def run_signal(symbol: str, short: int = SHORT_WINDOW, long: int = LONG_WINDOW,
               client=None) -> dict:
    """Validate windows -> fetch payload -> analyze -> summary dict."""
    validate_periods(short, long)
    client = client or GeminiClient(api_key=_api_key())
    data = client.stock_data(symbol)
    return summarize(analyze_stock(symbol, data, short, long))


app = Flask(__name__)


def _period_arg(name: str, default: int) -> int:
    """Query-string window; present but not an integer is rejected, not defaulted."""
    raw = request.args.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise PeriodError("MA periods must be positive numbers.") from None


@app.get("/signal/<symbol>")
def signal(symbol: str):
    try:
        short = _period_arg("short", SHORT_WINDOW)
        long = _period_arg("long", LONG_WINDOW)
        return jsonify({"ok": True, "result": run_signal(symbol, short, long)}), 200
    except PeriodError as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    except MacoError as e:
        # provider / payload trouble: make it obvious in health checks and logs
        logger.error("%s: %s", symbol, e)
        return jsonify({"ok": False, "error": str(e)}), 502


def run_once(argv=None) -> int:
    """CLI entry; prints JSON to stdout."""
    parser = argparse.ArgumentParser(description="Moving-average crossover signal for one symbol")
    parser.add_argument("symbol")
    parser.add_argument("--short", type=int, default=SHORT_WINDOW, help="short SMA window")
    parser.add_argument("--long", type=int, default=LONG_WINDOW, help="long SMA window")
    args = parser.parse_args(argv)
    try:
        out = {"ok": True, "result": run_signal(args.symbol, args.short, args.long)}
    except MacoError as e:
        print(json.dumps({"ok": False, "error": str(e)}))
        return 1
    print(json.dumps(out, default=str))
    return 0


if __name__ == "__main__":
    raise SystemExit(run_once())
