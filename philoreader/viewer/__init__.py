"""
PhiloReader Viewer - Rendering components for the reader UI.

This module provides:
- Section rendering with language substitution, insight and vocabulary
- Quiz feedback and score display
- Flowchart diagram rendering
- Library catalog, achievements and quests
- Social preview image composition
"""

from .section import (
    get_reader_css,
    substitute_translations,
    render_section_markdown,
    render_insight,
    render_vocab_list,
    render_position,
    DEFAULT_TEMPLATE,
)

from .quiz import (
    get_quiz_css,
    option_labels,
    render_question_feedback,
    render_quiz_score,
)

from .diagram import (
    DiagramRenderer,
    DiagramTheme,
    DiagramSyntaxError,
    Flowchart,
    parse_flowchart,
    layout_flowchart,
    draw_flowchart,
    render_definition,
)

from .library import (
    get_library_css,
    render_badge,
    render_book_card,
    render_achievement,
    render_quest,
    ACHIEVEMENT_ICONS,
    DIFFICULTY_COLORS,
    STATUS_COLORS,
    RARITY_COLORS,
)

from .preview import (
    wrap_title_lines,
    layout_preview_text,
    compose_preview_image,
)

__all__ = [
    # Section
    "get_reader_css",
    "substitute_translations",
    "render_section_markdown",
    "render_insight",
    "render_vocab_list",
    "render_position",
    "DEFAULT_TEMPLATE",
    # Quiz
    "get_quiz_css",
    "option_labels",
    "render_question_feedback",
    "render_quiz_score",
    # Diagram
    "DiagramRenderer",
    "DiagramTheme",
    "DiagramSyntaxError",
    "Flowchart",
    "parse_flowchart",
    "layout_flowchart",
    "draw_flowchart",
    "render_definition",
    # Library
    "get_library_css",
    "render_badge",
    "render_book_card",
    "render_achievement",
    "render_quest",
    "ACHIEVEMENT_ICONS",
    "DIFFICULTY_COLORS",
    "STATUS_COLORS",
    "RARITY_COLORS",
    # Preview
    "wrap_title_lines",
    "layout_preview_text",
    "compose_preview_image",
]
