"""
PhiloReader Reader - Runtime components for reading a book.

This module provides:
- ContentStore: Immutable, validated section sequence
- Navigator: Bounded navigation and language selection
- QuizController: Per-section quiz attempts
- ScoreAccumulator: Experience points
- ReadingSession: All of the above for one reader
- Catalog helpers: Library loading and reading paths
"""

from .store import (
    ContentStore,
    ContentValidationError,
    SectionIndexError,
    load_bundle,
    discover_bundles,
)

from .navigator import (
    Navigator,
    UnsupportedLanguageError,
)

from .score import ScoreAccumulator

from .quiz import (
    QuizController,
    QuizResult,
)

from .session import ReadingSession

from .catalog import (
    load_catalog,
    resolve_reading_path,
    get_action_label,
    ACTION_LABELS,
)

__all__ = [
    # Store
    "ContentStore",
    "ContentValidationError",
    "SectionIndexError",
    "load_bundle",
    "discover_bundles",
    # Navigator
    "Navigator",
    "UnsupportedLanguageError",
    # Score
    "ScoreAccumulator",
    # Quiz
    "QuizController",
    "QuizResult",
    # Session
    "ReadingSession",
    # Catalog
    "load_catalog",
    "resolve_reading_path",
    "get_action_label",
    "ACTION_LABELS",
]
