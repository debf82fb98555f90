"""
Configuration settings for Dictionary Generator.
"""

from datetime import datetime
from pathlib import Path
import os
from dotenv import load_dotenv


VERSION = "1.0.0"

# Directory paths
BASE_DIR = Path(__file__).parent
DATA_DIR = BASE_DIR / "data"
load_dotenv(Path.cwd() / ".env")
load_dotenv(BASE_DIR / ".env")

# Create directories
DATA_DIR.mkdir(exist_ok=True)

# Persisted quota settings (last access, calls made, call limit)
SETTINGS_FILE = Path(os.environ.get("DICTGEN_SETTINGS_FILE", DATA_DIR / "settings.json"))

# Default file locations, relative to the working directory
DEFAULT_WORD_LIST = "testWordList.txt"
DEFAULT_DICTIONARY = "dict.csv"
RESUME_FILE = "remainingWordList.txt"


def default_log_path() -> str:
    """Timestamped log file name so every run gets its own log."""
    return f"log{datetime.now().strftime('%Y%m%d-%H%M%S')}.txt"


# Data source URLs
URLS = {
    # Merriam-Webster Collegiate Dictionary, XML flavour (requires API key)
    "mw_collegiate": "https://www.dictionaryapi.com/api/v1/references/collegiate/xml",
}

# API Keys (should be set via environment variables in production)
MERRIAM_WEBSTER_COLLEGIATE_KEY = os.environ.get("MW_COLLEGIATE_API_KEY", "")

# Seconds to wait for a single lookup
REQUEST_TIMEOUT = 10

# Daily call limit from the environment; when set it replaces the stored limit
DAILY_LIMIT_OVERRIDE = int(os.environ["DICTGEN_DAILY_LIMIT"]) if os.environ.get("DICTGEN_DAILY_LIMIT") else None

# Rate limit settings
RATE_LIMITS = {
    'merriam_webster': {
        'requests_per_day': DAILY_LIMIT_OVERRIDE or 1000,  # Free tier limit
    },
}

# If false, Info lines are left out of the console and log file
VERBOSE_LOG = os.environ.get("DICTGEN_VERBOSE", "1").lower() not in ("0", "false", "no", "off")

# Web server
HOST = os.environ.get("DICTGEN_HOST", "0.0.0.0")
PORT = int(os.environ.get("DICTGEN_PORT", "5001"))
