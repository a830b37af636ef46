"""
Content schemas for PhiloReader.

Defines Pydantic models for the pre-authored reading content:
- Trilingual translations (en, de, zh)
- Vocabulary glosses and flowchart diagrams
- Comprehension quizzes with a single correct option
- Book bundles loaded from data/content/*.yaml
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class Language(str, Enum):
    EN = "en"
    DE = "de"
    ZH = "zh"

    @property
    def display_name(self) -> str:
        return LANGUAGE_NAMES[self]


LANGUAGE_NAMES = {
    Language.EN: "English",
    Language.DE: "Deutsch",
    Language.ZH: "中文",
}

DEFAULT_LANGUAGE = Language.EN


# -----------------------------------------------------------------------------
# Section parts
# -----------------------------------------------------------------------------

class Translations(BaseModel):
    """Full text of a passage in every supported language. No partial sets."""
    en: str
    de: str
    zh: str

    @field_validator('en', 'de', 'zh')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError('translation text must not be blank')
        return v

    def get(self, language: Language) -> str:
        return getattr(self, Language(language).value)


class VocabularyEntry(BaseModel):
    term: str
    definition: str
    usage: str


class Diagram(BaseModel):
    title: str
    description: str
    definition: str  # flowchart source, see philoreader.viewer.diagram


class QuizQuestion(BaseModel):
    id: str
    question: str
    options: list[str] = Field(..., min_length=2)
    correct_answer_index: int = Field(..., ge=0)
    explanation: str

    @model_validator(mode='after')
    def answer_in_range(self):
        if self.correct_answer_index >= len(self.options):
            raise ValueError(
                f'correct_answer_index {self.correct_answer_index} out of range '
                f'for {len(self.options)} options in question {self.id!r}'
            )
        return self

    def is_correct(self, option_index: Optional[int]) -> bool:
        return option_index == self.correct_answer_index


# -----------------------------------------------------------------------------
# Section
# -----------------------------------------------------------------------------

class Section(BaseModel):
    """One unit of readable content."""
    id: str
    title: str
    translations: Translations
    template: Optional[str] = None  # markdown with {translations.xx} placeholders
    insight: Optional[str] = None   # English-only commentary
    vocabulary: list[VocabularyEntry] = []
    diagram: Optional[Diagram] = None
    quiz: list[QuizQuestion] = []

    @field_validator('quiz')
    @classmethod
    def question_ids_unique(cls, v):
        seen = set()
        for question in v:
            if question.id in seen:
                raise ValueError(f'duplicate question id {question.id!r}')
            seen.add(question.id)
        return v

    @property
    def has_quiz(self) -> bool:
        return len(self.quiz) > 0

    def text(self, language: Language) -> str:
        return self.translations.get(language)

    def get_question(self, question_id: str) -> Optional[QuizQuestion]:
        for question in self.quiz:
            if question.id == question_id:
                return question
        return None


# -----------------------------------------------------------------------------
# Bundle
# -----------------------------------------------------------------------------

class BookInfo(BaseModel):
    id: str
    title: str
    author: str
    reading_path: Optional[str] = None
    default_language: Language = DEFAULT_LANGUAGE


class ContentBundle(BaseModel):
    """A book and its ordered sections, as stored in one YAML file."""
    book: BookInfo
    sections: list[Section] = Field(..., min_length=1)

    @field_validator('sections')
    @classmethod
    def section_ids_unique(cls, v):
        ids = [section.id for section in v]
        duplicates = sorted({sid for sid in ids if ids.count(sid) > 1})
        if duplicates:
            raise ValueError(f'duplicate section ids: {", ".join(duplicates)}')
        return v
