"""
ContentStore - Read-only, ordered access to a book's sections.

Sections are loaded once from a YAML bundle (data/content/*.yaml) and
validated before use:
- every section carries all three translations
- every quiz answer index points at an existing option
- section ids and per-section question ids are unique
"""

import logging
from pathlib import Path
from typing import Iterator

import yaml
from pydantic import ValidationError

from philoreader.schemas import BookInfo, ContentBundle, Section

logger = logging.getLogger(__name__)


class ContentValidationError(ValueError):
    """Raised when a content bundle cannot be parsed or fails validation."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid content bundle {self.path}: {reason}")


class SectionIndexError(IndexError):
    """Raised for section positions outside [0, len)."""


def load_bundle(path: str | Path) -> ContentBundle:
    """
    Load and validate a content bundle from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ContentValidationError: If YAML parsing or schema validation fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Content bundle not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ContentValidationError(path, f"YAML error: {e}") from e

    if not isinstance(raw, dict):
        raise ContentValidationError(path, "top level must be a mapping")

    try:
        bundle = ContentBundle.model_validate(raw)
    except ValidationError as e:
        raise ContentValidationError(path, str(e)) from e

    logger.info(f"Loaded {len(bundle.sections)} sections for '{bundle.book.title}' from {path.name}")
    return bundle


class ContentStore:
    """
    Immutable ordered sequence of sections.

    Callers navigate through Navigator, which clamps indices, so
    SectionIndexError indicates a programming error.
    """

    def __init__(self, bundle: ContentBundle):
        self.book: BookInfo = bundle.book
        self._sections: tuple[Section, ...] = tuple(bundle.sections)
        self._index: dict[str, int] = {s.id: i for i, s in enumerate(self._sections)}

    @classmethod
    def from_file(cls, path: str | Path) -> "ContentStore":
        return cls(load_bundle(path))

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    def length(self) -> int:
        """Total section count."""
        return len(self._sections)

    def get_section(self, index: int) -> Section:
        """Get the section at a position."""
        if not 0 <= index < len(self._sections):
            raise SectionIndexError(
                f"Section index {index} out of range [0, {len(self._sections)})"
            )
        return self._sections[index]

    def index_of(self, section_id: str) -> int:
        """Get the position of a section by ID. Raises KeyError if absent."""
        if section_id not in self._index:
            raise KeyError(f"Unknown section: {section_id}")
        return self._index[section_id]

    def get_section_by_id(self, section_id: str) -> Section:
        return self._sections[self.index_of(section_id)]

    def get_titles(self) -> list[tuple[str, str]]:
        """(id, title) pairs in reading order, for a table of contents."""
        return [(s.id, s.title) for s in self._sections]


def discover_bundles(content_dir: Path) -> dict[str, Path]:
    """
    Map reading paths to bundle files in a content directory.

    Bundles without a reading_path are keyed by "/read/<book id>".
    Invalid bundles are logged and skipped.
    """
    result = {}
    if not content_dir.exists():
        return result

    for file_path in sorted(content_dir.glob("*.yaml")):
        try:
            bundle = load_bundle(file_path)
        except ContentValidationError as e:
            logger.warning(f"Skipping {file_path.name}: {e.reason}")
            continue
        reading_path = bundle.book.reading_path or f"/read/{bundle.book.id}"
        result[reading_path] = file_path
    return result
