"""
config.py
---------
Central configuration for the trip context engine.
All values loaded from environment variables with sensible defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the backend directory (if it exists) so env vars in that file
# are picked up by os.getenv() below.  Won't override vars already set in the shell.
_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path, override=False)


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


# ── Planning window (minutes since midnight) ─────────────────────────────────
DAY_WINDOW_START_MIN: int = int(os.getenv("DAY_WINDOW_START_MIN", "480"))    # 08:00
DAY_WINDOW_END_MIN:   int = int(os.getenv("DAY_WINDOW_END_MIN",   "1320"))   # 22:00
MIN_FREE_SLOT_MIN:    int = int(os.getenv("MIN_FREE_SLOT_MIN",    "30"))
DEFAULT_ACTIVITY_DURATION_MIN: int = int(os.getenv("DEFAULT_ACTIVITY_DURATION_MIN", "60"))

# A day with strictly more activities than this is "packed"
PACKED_DAY_THRESHOLD: int = int(os.getenv("PACKED_DAY_THRESHOLD", "5"))
# Longer spans are analysed but flagged as a likely date typo
MAX_TRIP_DAYS: int = int(os.getenv("MAX_TRIP_DAYS", "366"))

# ── Weather suitability ───────────────────────────────────────────────────────
ADVERSE_PRECIPITATION_PCT: float = float(os.getenv("ADVERSE_PRECIPITATION_PCT", "70"))
ADVERSE_WIND_SPEED:        float = float(os.getenv("ADVERSE_WIND_SPEED",        "50"))
STORM_KEYWORD:             str   = os.getenv("STORM_KEYWORD", "storm")
OUTDOOR_ACTIVITY_TYPES: frozenset[str] = frozenset(
    _env_list("OUTDOOR_ACTIVITY_TYPES", "outdoor,nature,beach,hiking,sightseeing")
)
# Suggestions treat a day as rainy above this precipitation percentage
RAINY_DAY_PRECIPITATION_PCT: float = float(os.getenv("RAINY_DAY_PRECIPITATION_PCT", "60"))

# ── Destination defaults (no timezone / language data upstream yet) ───────────
DEFAULT_TIMEZONE:  str       = os.getenv("DEFAULT_TIMEZONE", "UTC")
DEFAULT_CURRENCY:  str       = os.getenv("DEFAULT_CURRENCY", "USD")
DEFAULT_LANGUAGES: list[str] = _env_list("DEFAULT_LANGUAGES", "English")

# ── Suggestions ───────────────────────────────────────────────────────────────
MAX_SUGGESTIONS:   int = int(os.getenv("MAX_SUGGESTIONS",   "6"))
MAX_QUICK_PROMPTS: int = int(os.getenv("MAX_QUICK_PROMPTS", "4"))

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
# JSONL audit logs live alongside backend/ unless overridden
LOGS_DIR: Path = Path(os.getenv("LOGS_DIR", str(Path(__file__).resolve().parent.parent / "logs")))

# ── API server ────────────────────────────────────────────────────────────────
SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8000"))
