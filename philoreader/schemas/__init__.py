"""
PhiloReader Schemas - Pydantic models for the interactive reader.

This module exports all schema classes for:
- Content: sections, translations, vocabulary, diagrams, quizzes
- Session: navigation, quiz attempts, experience points
- Catalog: library books, achievements, quests
"""

# Content schemas
from .content import (
    Language,
    LANGUAGE_NAMES,
    DEFAULT_LANGUAGE,
    Translations,
    VocabularyEntry,
    Diagram,
    QuizQuestion,
    Section,
    BookInfo,
    ContentBundle,
)

# Session schemas
from .session import (
    NavigationState,
    QuizAttempt,
    ScoreState,
)

# Catalog schemas
from .catalog import (
    BookStatus,
    Difficulty,
    Rarity,
    AchievementKind,
    CatalogBook,
    Achievement,
    Quest,
    Catalog,
)

__all__ = [
    # Content
    'Language',
    'LANGUAGE_NAMES',
    'DEFAULT_LANGUAGE',
    'Translations',
    'VocabularyEntry',
    'Diagram',
    'QuizQuestion',
    'Section',
    'BookInfo',
    'ContentBundle',
    # Session
    'NavigationState',
    'QuizAttempt',
    'ScoreState',
    # Catalog
    'BookStatus',
    'Difficulty',
    'Rarity',
    'AchievementKind',
    'CatalogBook',
    'Achievement',
    'Quest',
    'Catalog',
]
