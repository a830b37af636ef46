"""
Social preview image - 1200x630 PNG card for link previews.

Layout (pixels, from the top-left corner):
- title in white, 60px bold, greedily wrapped at 40 characters (at most 4 lines)
- description in grey, 32px, below the title, cut to the lines that fit
- site name in the bottom-left corner
"""

import io

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.figure import Figure

from philoreader.config import (
    DEFAULT_PREVIEW_DESCRIPTION,
    DEFAULT_PREVIEW_TITLE,
    PREVIEW_HEIGHT,
    PREVIEW_WIDTH,
    SITE_NAME,
    TITLE_WRAP_WIDTH,
)

DPI = 100
PADDING = 40
TITLE_SIZE = 60
TITLE_LINE_HEIGHT = 1.2
TITLE_GAP = 20
DESCRIPTION_SIZE = 32
DESCRIPTION_WRAP_WIDTH = 50  # ~800px of 32px text
FOOTER_SIZE = 24
TEXT_LINE_SPACING = 1.2  # matplotlib default, in multiples of the font size
MAX_TITLE_LINES = 4
# Text must end above the footer line
FOOTER_TOP = PREVIEW_HEIGHT - PADDING - FOOTER_SIZE * TEXT_LINE_SPACING

BACKGROUND = LinearSegmentedColormap.from_list("preview", ["#1a1a1a", "#2a2a2a"])


def wrap_title_lines(text: str, max_length: int = TITLE_WRAP_WIDTH) -> list[str]:
    """
    Greedy word wrap.

    Words are never split: a word longer than max_length gets a line of its
    own. Runs of whitespace collapse to a single space.
    """
    lines = []
    current: list[str] = []
    current_length = 0

    for word in text.split():
        candidate = current_length + len(word) + (1 if current else 0)
        if current and candidate > max_length:
            lines.append(" ".join(current))
            current = [word]
            current_length = len(word)
        else:
            current.append(word)
            current_length = candidate

    if current:
        lines.append(" ".join(current))
    return lines


def _points(pixels: float) -> float:
    return pixels * 72 / DPI


def _fit_lines(lines: list[str], max_lines: int) -> list[str]:
    """Keep at most max_lines lines, marking a cut with an ellipsis."""
    if len(lines) <= max_lines:
        return lines
    kept = lines[:max(max_lines, 0)]
    if kept:
        kept[-1] = kept[-1] + " …"
    return kept


def layout_preview_text(title: str, description: str) -> tuple[list[str], list[str], float]:
    """
    Lines to draw and where the description starts.

    Returns:
        (title lines, description lines, description top in pixels). The title
        keeps at most MAX_TITLE_LINES lines and the description only as many
        lines as fit above the footer.
    """
    title_lines = _fit_lines(wrap_title_lines(title), MAX_TITLE_LINES)
    # the gap after the last title line doubles as the description margin
    description_top = PADDING + len(title_lines) * (TITLE_SIZE * TITLE_LINE_HEIGHT + TITLE_GAP)

    room = FOOTER_TOP - description_top
    max_description_lines = int(room // (DESCRIPTION_SIZE * TEXT_LINE_SPACING))
    description_lines = _fit_lines(
        wrap_title_lines(description, DESCRIPTION_WRAP_WIDTH), max_description_lines
    )
    return title_lines, description_lines, description_top


def compose_preview_image(title: str | None = None, description: str | None = None) -> bytes:
    """
    Compose the preview card and return PNG bytes.

    Missing or empty title/description fall back to the site defaults.
    """
    title = title or DEFAULT_PREVIEW_TITLE
    description = description or DEFAULT_PREVIEW_DESCRIPTION
    title_lines, description_lines, description_top = layout_preview_text(title, description)

    fig = Figure(figsize=(PREVIEW_WIDTH / DPI, PREVIEW_HEIGHT / DPI), dpi=DPI)
    FigureCanvasAgg(fig)

    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_axis_off()
    xx, yy = np.meshgrid(np.linspace(0, 1, 64), np.linspace(0, 1, 64))
    ax.imshow((xx + yy) / 2, cmap=BACKGROUND, extent=(0, 1, 0, 1), aspect="auto", origin="upper")

    def fy(pixels_from_top: float) -> float:
        return 1 - pixels_from_top / PREVIEW_HEIGHT

    x = PADDING / PREVIEW_WIDTH
    y = PADDING
    for line in title_lines:
        fig.text(x, fy(y), line, color="white", fontsize=_points(TITLE_SIZE),
                 fontweight="bold", va="top", ha="left")
        y += TITLE_SIZE * TITLE_LINE_HEIGHT + TITLE_GAP

    if description_lines:
        fig.text(x, fy(description_top), "\n".join(description_lines),
                 color="#a1a1aa", fontsize=_points(DESCRIPTION_SIZE),
                 linespacing=TEXT_LINE_SPACING, va="top", ha="left")

    fig.text(x, PADDING / PREVIEW_HEIGHT, SITE_NAME, color="#71717a",
             fontsize=_points(FOOTER_SIZE), va="bottom", ha="left")

    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", dpi=DPI)
    return buffer.getvalue()
