"""
Library renderer - Home page catalog, achievements and quests.

Provides:
- Book cards with difficulty/status badges
- Achievement and daily quest rows with category icons
- Badge colors and icons chosen per enum member
"""

import html
from enum import Enum

from philoreader.schemas import (
    Achievement,
    AchievementKind,
    BookStatus,
    CatalogBook,
    Difficulty,
    Quest,
    Rarity,
)


def _require_all_members(mapping: dict, enum_cls: type[Enum]) -> dict:
    """Fail at import if a mapping does not cover every member of an enum."""
    missing = [member.value for member in enum_cls if member not in mapping]
    if missing:
        raise ValueError(f"{enum_cls.__name__} mapping missing: {', '.join(missing)}")
    return mapping


ACHIEVEMENT_ICONS = _require_all_members({
    AchievementKind.CHAPTER: "📖",
    AchievementKind.AUTHOR: "⭐",
    AchievementKind.TIME: "🕰️",
    AchievementKind.MASTERY: "🏆",
    AchievementKind.READING: "📚",
    AchievementKind.QUIZ: "🎯",
    AchievementKind.STREAK: "⚡",
}, AchievementKind)

# (background, text) colors
DIFFICULTY_COLORS = _require_all_members({
    Difficulty.BEGINNER: ("#dcfce7", "#166534"),
    Difficulty.INTERMEDIATE: ("#fef9c3", "#854d0e"),
    Difficulty.ADVANCED: ("#ffedd5", "#9a3412"),
    Difficulty.EXPERT: ("#fee2e2", "#991b1b"),
    Difficulty.LEGENDARY: ("#e9d5ff", "#581c87"),
}, Difficulty)

STATUS_COLORS = _require_all_members({
    BookStatus.READING: ("#dbeafe", "#1e40af"),
    BookStatus.COMPLETED: ("#dcfce7", "#166534"),
    BookStatus.PAUSED: ("#fef9c3", "#854d0e"),
    BookStatus.AVAILABLE: ("#f3f4f6", "#1f2937"),
}, BookStatus)

RARITY_COLORS = _require_all_members({
    Rarity.COMMON: ("#f3f4f6", "#1f2937"),
    Rarity.RARE: ("#dbeafe", "#1e40af"),
    Rarity.EPIC: ("#f3e8ff", "#6b21a8"),
    Rarity.LEGENDARY: ("#fef9c3", "#854d0e"),
}, Rarity)


def get_library_css() -> str:
    """Get CSS styles for the library page."""
    return """
    <style>
    .book-card {
        background: white;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        padding: 1em 1.2em;
        margin-bottom: 0.5em;
    }
    .book-card.legendary {
        border: 2px solid #a855f7;
        background: linear-gradient(135deg, #faf5ff 0%, #fdf2f8 100%);
    }
    .book-title {
        font-weight: 600;
        font-size: 1.05em;
        color: #111827;
    }
    .book-subtitle {
        font-style: italic;
        color: #6b7280;
        font-size: 0.9em;
    }
    .book-author {
        color: #4b5563;
        font-size: 0.9em;
    }
    .book-meta {
        color: #6b7280;
        font-size: 0.85em;
        margin-top: 0.4em;
    }
    .badge {
        display: inline-block;
        border-radius: 9999px;
        padding: 0.1em 0.6em;
        font-size: 0.75em;
        margin-right: 0.4em;
    }
    .xp-reward {
        color: #9333ea;
        font-weight: 600;
        font-size: 0.85em;
    }
    .achievement-row {
        display: flex;
        gap: 0.7em;
        align-items: flex-start;
        padding: 0.5em 0;
    }
    .achievement-row.locked {
        opacity: 0.6;
    }
    .achievement-icon {
        font-size: 1.4em;
    }
    .achievement-title {
        font-weight: 600;
        font-size: 0.9em;
    }
    .achievement-description {
        color: #6b7280;
        font-size: 0.8em;
    }
    </style>
    """


def render_badge(label: str, colors: tuple[str, str]) -> str:
    background, text = colors
    return (
        f'<span class="badge" style="background: {background}; color: {text};">'
        f'{html.escape(label)}</span>'
    )


def render_book_card(book: CatalogBook) -> str:
    """Render a book card (the action button is added by the app)."""
    classes = "book-card legendary" if book.is_legendary else "book-card"
    parts = [f'<div class="{classes}">']

    crown = " 👑" if book.is_legendary else ""
    parts.append(f'<div class="book-title">{html.escape(book.title)}{crown}</div>')
    if book.subtitle:
        parts.append(f'<div class="book-subtitle">{html.escape(book.subtitle)}</div>')
    parts.append(f'<div class="book-author">{html.escape(book.author)}</div>')

    parts.append('<div>')
    parts.append(render_badge(book.difficulty.value, DIFFICULTY_COLORS[book.difficulty]))
    parts.append(render_badge(book.status.value, STATUS_COLORS[book.status]))
    parts.append('</div>')

    parts.append(
        f'<div class="book-meta">★ {book.rating:.1f} · {book.readers:,} readers · '
        f'{html.escape(book.time_to_complete)}'
    )
    if book.progress > 0:
        parts.append(f' · {book.progress}% read')
    parts.append('</div>')

    parts.append(f'<div class="xp-reward">+{book.xp_reward} XP</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_achievement(achievement: Achievement) -> str:
    """Render one achievement row."""
    classes = "achievement-row" if achievement.earned else "achievement-row locked"
    parts = [f'<div class="{classes}">']
    parts.append(f'<span class="achievement-icon">{ACHIEVEMENT_ICONS[achievement.kind]}</span>')
    parts.append('<div>')
    parts.append(f'<div class="achievement-title">{html.escape(achievement.title)} ')
    parts.append(render_badge(achievement.rarity.value, RARITY_COLORS[achievement.rarity]))
    parts.append('</div>')
    parts.append(f'<div class="achievement-description">{html.escape(achievement.description)}</div>')
    if not achievement.earned and achievement.progress is not None:
        parts.append(f'<div class="achievement-description">{achievement.progress}% · +{achievement.xp} XP</div>')
    parts.append('</div></div>')
    return ''.join(parts)


def render_quest(quest: Quest) -> str:
    """Render one daily quest row."""
    done = " ✓" if quest.progress >= 100 else ""
    return (
        '<div class="achievement-row">'
        f'<span class="achievement-icon">{ACHIEVEMENT_ICONS[quest.kind]}</span>'
        '<div>'
        f'<div class="achievement-title">{html.escape(quest.title)}{done}</div>'
        f'<div class="achievement-description">{html.escape(quest.description)} · +{quest.xp} XP</div>'
        '</div></div>'
    )
