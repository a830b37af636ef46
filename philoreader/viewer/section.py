"""
Section renderer - Markdown/HTML for a section's text and study aids.

Features:
- Language substitution into the section's markdown template
- Key insight panel (English commentary)
- Vocabulary list (term, definition, usage)
"""

import html
import re
from typing import Optional

from philoreader.schemas import Language, Section, VocabularyEntry


DEFAULT_TEMPLATE = "## {title}\n\n{text}"

# {translations.de}, {text}, {title}
PLACEHOLDER_PATTERN = re.compile(r"\{(translations\.(en|de|zh)|text|title)\}")


def get_reader_css() -> str:
    """Get CSS styles for section display."""
    return """
    <style>
    .section-position {
        text-align: center;
        color: #666;
        font-size: 0.9em;
    }
    .insight-panel {
        background: #fdf4ff;
        border-left: 4px solid #9333ea;
        border-radius: 0 8px 8px 0;
        padding: 1em 1.5em;
        margin: 1em 0;
        line-height: 1.7;
        color: #1f2937;
    }
    .insight-title {
        font-weight: 600;
        color: #7e22ce;
        margin-bottom: 0.5em;
    }
    .vocab-list {
        margin: 1em 0;
        padding: 1em;
        background: #f5f5f5;
        border-radius: 8px;
    }
    .vocab-item {
        margin-bottom: 0.8em;
    }
    .vocab-item dt {
        font-weight: 600;
        color: #1f2937;
        font-family: "Noto Serif", Georgia, serif;
    }
    .vocab-item dd {
        margin-left: 1em;
        color: #444;
        font-size: 0.95em;
    }
    .vocab-label {
        font-weight: 600;
        color: #6b7280;
    }
    .diagram-caption {
        color: #6b7280;
        font-size: 0.9em;
        text-align: center;
        font-style: italic;
    }
    </style>
    """


def substitute_translations(template: str, section: Section, language: Language) -> str:
    """
    Fill a section template.

    {translations.xx} takes that language's text, {text} the selected
    language's text, {title} the section title. Other braces are kept.
    """
    language = Language(language)

    def replace(match: re.Match) -> str:
        key = match.group(1)
        if key == "text":
            return section.text(language)
        if key == "title":
            return section.title
        return section.text(Language(match.group(2)))

    return PLACEHOLDER_PATTERN.sub(replace, template)


def render_section_markdown(section: Section, language: Language, parallel: bool = False) -> str:
    """
    Markdown for a section's passage.

    Args:
        section: Section to render
        language: Selected content language
        parallel: Use the section's own template (all languages side by side)
            instead of the single-language default
    """
    template = section.template if parallel and section.template else DEFAULT_TEMPLATE
    return substitute_translations(template, section, language)


def render_insight(insight: Optional[str]) -> str:
    """Render the key insight panel. Empty string if there is no insight."""
    if not insight:
        return ""
    return (
        '<div class="insight-panel">'
        '<div class="insight-title">Key Insights</div>'
        f'<div>{html.escape(insight)}</div>'
        '</div>'
    )


def render_vocab_list(vocabulary: list[VocabularyEntry]) -> str:
    """Render the key terms list."""
    if not vocabulary:
        return ""

    parts = ['<dl class="vocab-list">']
    for entry in vocabulary:
        parts.append('<div class="vocab-item">')
        parts.append(f'<dt>{html.escape(entry.term)}</dt>')
        parts.append(
            f'<dd><span class="vocab-label">Definition:</span> {html.escape(entry.definition)}<br/>'
            f'<span class="vocab-label">Usage:</span> {html.escape(entry.usage)}</dd>'
        )
        parts.append('</div>')
    parts.append('</dl>')
    return ''.join(parts)


def render_position(position: tuple[int, int]) -> str:
    current, total = position
    return f'<div class="section-position">Section {current} of {total}</div>'
