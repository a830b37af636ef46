"""
CatalogLoader - Library catalog and reading-path resolution.

The catalog (data/catalog.yaml) lists books, achievements and daily quests
for the home page. Only available books with a reading path open the reader.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from philoreader.schemas import BookStatus, Catalog, CatalogBook

from .store import ContentValidationError

logger = logging.getLogger(__name__)


ACTION_LABELS = {
    BookStatus.COMPLETED: "Review",
    BookStatus.READING: "Continue",
    BookStatus.PAUSED: "Resume",
    BookStatus.AVAILABLE: "Start",
}


def load_catalog(path: str | Path) -> Catalog:
    """
    Load the library catalog.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ContentValidationError: If the catalog is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ContentValidationError(path, f"YAML error: {e}") from e

    try:
        catalog = Catalog.model_validate(raw)
    except ValidationError as e:
        raise ContentValidationError(path, str(e)) from e

    logger.info(f"Loaded catalog: {len(catalog.books)} books, {len(catalog.achievements)} achievements")
    return catalog


def resolve_reading_path(book: CatalogBook) -> Optional[str]:
    """Reading path for a book, or None if selecting it should do nothing."""
    if book.status == BookStatus.AVAILABLE and book.reading_path:
        return book.reading_path
    return None


def get_action_label(book: CatalogBook) -> str:
    return ACTION_LABELS[book.status]
