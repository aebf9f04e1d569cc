# maco/config.py
# Purpose: central config (MA windows, history size, Gemini endpoint, chart viewport).
# Reads ENV so you can override any knob without touching code.

import os

# Default MA windows (short must stay below long)
SHORT_WINDOW = int(os.getenv("SHORT_WINDOW", "10"))   # short SMA
LONG_WINDOW = int(os.getenv("LONG_WINDOW", "20"))     # long SMA

# Payload shape
MIN_PRICE_POINTS = int(os.getenv("MIN_PRICE_POINTS", "20"))  # reject shorter histories
HISTORY_DAYS = int(os.getenv("HISTORY_DAYS", "40"))          # closes requested from the model

# Gemini (AI search) collaborator; the key itself is injected, never read here
GEMINI_BASE = os.getenv("GEMINI_BASE", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "60"))

# Chart viewport (same units the renderer draws in)
CHART_WIDTH = float(os.getenv("CHART_WIDTH", "500"))
CHART_HEIGHT = float(os.getenv("CHART_HEIGHT", "250"))
CHART_PADDING = float(os.getenv("CHART_PADDING", "20"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
