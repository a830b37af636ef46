"""
Reading session schemas for PhiloReader.

Session-scoped, in-memory state. Nothing here is persisted:
- Navigation position and selected language
- One quiz attempt per section
- Accumulated experience points
"""

from typing import Optional

from pydantic import BaseModel, Field

from .content import Language, DEFAULT_LANGUAGE


class NavigationState(BaseModel):
    current_index: int = Field(default=0, ge=0)
    selected_language: Language = DEFAULT_LANGUAGE


class QuizAttempt(BaseModel):
    section_id: str
    answers: dict[str, int] = {}  # question id -> chosen option index
    submitted: bool = False
    score: Optional[int] = None
    correct_count: Optional[int] = None
    attempts: int = 0
    best_score: int = 0  # highest score that has already been paid out as XP


class ScoreState(BaseModel):
    xp: int = Field(default=0, ge=0)
