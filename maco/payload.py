# maco/payload.py
# Purpose: map the provider's free-form reply onto a validated StockData.
# Anything that does not fit the shape is rejected, never patched up.

import json
import logging
from typing import Union

from pydantic import ValidationError

from maco.errors import PayloadError
from maco.models import StockData

logger = logging.getLogger(__name__)


def strip_fences(text: str) -> str:
    """Drop a ```json ... ``` (or bare ```) wrapper around model output."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[len("```json"):]
    elif text.startswith("```"):
        text = text[3:]
    else:
        return text
    if text.rstrip().endswith("```"):
        text = text.rstrip()[:-3]
    return text.strip()


def parse_stock_data(raw: Union[str, bytes, dict], symbol: str = "") -> StockData:
    """JSON text (optionally fenced) or an already-decoded dict -> StockData."""
    label = f' for symbol "{symbol}"' if symbol else ""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PayloadError(f"Provider reply{label} is not valid UTF-8: {e}") from e
    if isinstance(raw, str):
        try:
            raw = json.loads(strip_fences(raw))
        except json.JSONDecodeError as e:
            logger.warning("Provider reply is not JSON%s: %s", label, e)
            raise PayloadError(
                f"Could not get reliable data{label}. The symbol might be incorrect "
                f"or the data format was unexpected."
            ) from e
    if not isinstance(raw, dict):
        raise PayloadError(f"Expected a JSON object{label}, got {type(raw).__name__}")

    try:
        return StockData.model_validate(raw)
    except ValidationError as e:
        # first error is enough for a human; full list goes to the log
        logger.warning("Payload rejected%s: %s", label, e)
        first = e.errors()[0]
        where = ".".join(str(p) for p in first["loc"])
        raise PayloadError(f"Invalid payload{label}: {where}: {first['msg']}") from e
