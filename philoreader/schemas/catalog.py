"""
Catalog schemas for PhiloReader.

Defines the library shown on the home page:
- Books with reading status and an optional reading path
- Achievements and daily quests (static display values)
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BookStatus(str, Enum):
    AVAILABLE = "available"
    READING = "reading"
    PAUSED = "paused"
    COMPLETED = "completed"


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"
    LEGENDARY = "Legendary"


class Rarity(str, Enum):
    COMMON = "Common"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"


class AchievementKind(str, Enum):
    """Category of an achievement or quest; selects its icon."""
    CHAPTER = "chapter"
    AUTHOR = "author"
    TIME = "time"
    MASTERY = "mastery"
    READING = "reading"
    QUIZ = "quiz"
    STREAK = "streak"


class CatalogBook(BaseModel):
    id: int
    title: str
    subtitle: Optional[str] = None
    author: str
    difficulty: Difficulty
    progress: int = Field(default=0, ge=0, le=100)
    rating: float = Field(..., ge=0.0, le=5.0)
    readers: int = Field(default=0, ge=0)
    time_to_complete: str
    xp_reward: int = Field(default=0, ge=0)
    status: BookStatus
    cover: Optional[str] = None
    is_legendary: bool = False
    reading_path: Optional[str] = None


class Achievement(BaseModel):
    id: int
    title: str
    description: str
    kind: AchievementKind
    earned: bool = False
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    rarity: Rarity
    xp: int = Field(default=0, ge=0)


class Quest(BaseModel):
    id: int
    title: str
    description: str
    kind: AchievementKind
    progress: int = Field(default=0, ge=0, le=100)
    xp: int = Field(default=0, ge=0)


class Catalog(BaseModel):
    books: list[CatalogBook] = []
    achievements: list[Achievement] = []
    quests: list[Quest] = []
