"""
Runtime configuration for PhiloReader.

Values come from the environment (optionally a .env file in the working
directory) with defaults suitable for running from a source checkout.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent

DATA_DIR = Path(os.environ.get("PHILOREADER_DATA_DIR", PROJECT_ROOT / "data"))
CONTENT_DIR = DATA_DIR / "content"
CATALOG_PATH = DATA_DIR / "catalog.yaml"

LOG_LEVEL = os.environ.get("PHILOREADER_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

DIAGRAM_WORKERS = int(os.environ.get("PHILOREADER_DIAGRAM_WORKERS", "2"))
DIAGRAM_TIMEOUT_SECONDS = float(os.environ.get("PHILOREADER_DIAGRAM_TIMEOUT", "10"))
# Most view slots a shared renderer remembers; the least recently requested go first
DIAGRAM_MAX_SLOTS = int(os.environ.get("PHILOREADER_DIAGRAM_MAX_SLOTS", "128"))

# Site / social preview
SITE_NAME = "philosophy.it.com"
APP_TITLE = "Critique of Pure Reason Interactive Reader"
DEFAULT_PREVIEW_TITLE = "Critique of Pure Reason Interactive Reader"
DEFAULT_PREVIEW_DESCRIPTION = (
    "An interactive trilingual reader featuring German, English, and Chinese translations"
)
PREVIEW_WIDTH = 1200
PREVIEW_HEIGHT = 630
TITLE_WRAP_WIDTH = 40
PREVIEW_CACHE_SECONDS = 3600

# Points awarded per correctly answered quiz question
XP_PER_CORRECT_ANSWER = 100


def setup_logging(level: str | None = None):
    """Configure root logging once for the app, server and scripts."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
