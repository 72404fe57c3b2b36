"""
Global settings — loads from .env and exposes typed config values to the rest of the app.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# ── Paths ──────────────────────────────────────────────────────────────────────
ROOT_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = Path(__file__).resolve().parent
LOGS_DIR = Path(os.getenv("LOGS_DIR", str(ROOT_DIR / "logs")))
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(ROOT_DIR / "feeds")))
PROFILES_PATH = Path(os.getenv("PROFILES_PATH", str(CONFIG_DIR / "sources.yaml")))

# ── General ────────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ── Fetching ───────────────────────────────────────────────────────────────────
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "20"))
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (compatible; PageFeed/1.0; +https://github.com/pagefeed/pagefeed)",
)

# ── Discord alerts ─────────────────────────────────────────────────────────────
DISCORD_WEBHOOK_URL = os.getenv("DISCORD_WEBHOOK_URL")
