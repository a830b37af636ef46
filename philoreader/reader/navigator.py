"""
Navigator - Bounded section navigation and language selection.

Provides:
- Previous/next movement clamped to the available sections (no wraparound)
- Table-of-contents jumps by section ID
- Content language selection, independent of position
"""

import logging

from philoreader.schemas import Language, NavigationState, Section

from .store import ContentStore

logger = logging.getLogger(__name__)


class UnsupportedLanguageError(ValueError):
    """Raised when a language code outside en/de/zh is selected."""


class Navigator:
    """
    Navigate through a ContentStore.

    The navigator is the only mutator of NavigationState.current_index, and
    every mutation is clamped, so the index always addresses a section.
    """

    def __init__(self, store: ContentStore, state: NavigationState | None = None):
        """
        Initialize navigator.

        Args:
            store: ContentStore with at least one section
            state: Existing NavigationState (default: first section, book language)
        """
        self.store = store
        self.state = state or NavigationState(selected_language=store.book.default_language)
        self.state.current_index = self._clamp(self.state.current_index)

    def _clamp(self, index: int) -> int:
        return max(0, min(len(self.store) - 1, index))

    # -------------------------------------------------------------------------
    # Position
    # -------------------------------------------------------------------------

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def current_section(self) -> Section:
        return self.store.get_section(self.state.current_index)

    @property
    def can_go_previous(self) -> bool:
        return self.state.current_index > 0

    @property
    def can_go_next(self) -> bool:
        return self.state.current_index < len(self.store) - 1

    @property
    def position(self) -> tuple[int, int]:
        """Position as (current, total), 1-based for display."""
        return (self.state.current_index + 1, len(self.store))

    # -------------------------------------------------------------------------
    # Movement
    # -------------------------------------------------------------------------

    def go_previous(self) -> bool:
        """Move back one section. Returns True if the position changed."""
        return self._move_to(self.state.current_index - 1)

    def go_next(self) -> bool:
        """Move forward one section. Returns True if the position changed."""
        return self._move_to(self.state.current_index + 1)

    def go_to(self, section_id: str) -> bool:
        """Jump to a section by ID. Raises KeyError for unknown IDs."""
        return self._move_to(self.store.index_of(section_id))

    def _move_to(self, index: int) -> bool:
        target = self._clamp(index)
        if target == self.state.current_index:
            return False
        self.state.current_index = target
        logger.debug(f"Moved to section {target + 1}/{len(self.store)}")
        return True

    # -------------------------------------------------------------------------
    # Language
    # -------------------------------------------------------------------------

    @property
    def language(self) -> Language:
        return self.state.selected_language

    def set_language(self, code: Language | str) -> Language:
        """Select the content language. Position is unaffected."""
        try:
            language = Language(code)
        except ValueError:
            supported = ", ".join(lang.value for lang in Language)
            raise UnsupportedLanguageError(
                f"Unsupported language {code!r} (expected one of: {supported})"
            ) from None
        self.state.selected_language = language
        return language
