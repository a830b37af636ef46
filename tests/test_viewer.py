"""Tests for section, quiz and library rendering."""

import pytest

from philoreader.reader import QuizResult
from philoreader.schemas import (
    Achievement,
    AchievementKind,
    BookStatus,
    CatalogBook,
    Difficulty,
    Language,
    QuizQuestion,
    Quest,
    Rarity,
    VocabularyEntry,
)
from philoreader.viewer import (
    ACHIEVEMENT_ICONS,
    DIFFICULTY_COLORS,
    RARITY_COLORS,
    STATUS_COLORS,
    option_labels,
    render_achievement,
    render_book_card,
    render_insight,
    render_position,
    render_quest,
    render_question_feedback,
    render_quiz_score,
    render_section_markdown,
    render_vocab_list,
    substitute_translations,
)

from conftest import make_question


class TestSectionRendering:

    def test_single_language(self, store):
        section = store.get_section_by_id("middle")
        assert render_section_markdown(section, Language.DE) == "## Middle\n\nmiddle auf Deutsch"

    def test_parallel_uses_template(self, store):
        section = store.get_section_by_id("middle")
        markdown = render_section_markdown(section, Language.EN, parallel=True)
        assert markdown == "### Middle\n\nmiddle auf Deutsch\n\nmiddle in English"

    def test_parallel_without_template(self, store):
        section = store.get_section_by_id("intro")
        assert render_section_markdown(section, "zh", parallel=True) == "## Intro\n\nintro 中文"

    def test_substitution_keeps_other_braces(self, store):
        section = store.get_section_by_id("intro")
        result = substitute_translations("{text} {unknown} {translations.fr}", section, Language.EN)
        assert result == "intro in English {unknown} {translations.fr}"

    def test_kant_template_placeholders_resolved(self, kant_store):
        for section in kant_store:
            markdown = render_section_markdown(section, Language.EN, parallel=True)
            assert "{translations." not in markdown

    def test_insight(self):
        assert render_insight(None) == ""
        html = render_insight("Reason & its <limits>")
        assert "Key Insights" in html
        assert "Reason &amp; its &lt;limits&gt;" in html

    def test_vocab_list(self):
        html = render_vocab_list([
            VocabularyEntry(term="a priori", definition="Before experience", usage="Pure cognition"),
        ])
        assert "<dt>a priori</dt>" in html
        assert "Before experience" in html
        assert "Pure cognition" in html
        assert render_vocab_list([]) == ""

    def test_position(self):
        assert "Section 2 of 13" in render_position((2, 13))


class TestQuizRendering:

    @pytest.fixture
    def question(self):
        return QuizQuestion(**make_question("q1", correct=1, options=3))

    def test_option_labels(self, question):
        assert option_labels(question) == ["A. Option 0", "B. Option 1", "C. Option 2"]

    def test_correct_feedback(self, question):
        html = render_question_feedback(question, 1)
        assert "Correct!" in html
        assert "Answer:" not in html
        assert "Because of q1." in html

    def test_incorrect_feedback(self, question):
        html = render_question_feedback(question, 0)
        assert "Incorrect" in html
        assert "B. Option 1" in html
        assert "Because of q1." in html

    def test_unanswered_feedback(self, question):
        html = render_question_feedback(question, None)
        assert "Not answered" in html
        assert "B. Option 1" in html

    def test_score(self):
        html = render_quiz_score(QuizResult("s", correct_count=2, total=3, score=200, xp_awarded=0))
        assert "200 XP" in html
        assert "2 of 3 correct (67%)" in html


class TestLibraryRendering:

    @pytest.mark.parametrize("mapping, enum_cls", [
        (ACHIEVEMENT_ICONS, AchievementKind),
        (DIFFICULTY_COLORS, Difficulty),
        (STATUS_COLORS, BookStatus),
        (RARITY_COLORS, Rarity),
    ])
    def test_mappings_cover_every_member(self, mapping, enum_cls):
        assert set(mapping) == set(enum_cls)

    def test_book_card(self):
        book = CatalogBook(
            id=2,
            title="Instauratio magna",
            subtitle="Praefatio",
            author="Francis Bacon",
            difficulty="Legendary",
            rating=4.9,
            readers=3267,
            time_to_complete="40h",
            xp_reward=4500,
            status="available",
            is_legendary=True,
        )
        html = render_book_card(book)
        assert "legendary" in html
        assert "👑" in html
        assert "Praefatio" in html
        assert "3,267 readers" in html
        assert "+4500 XP" in html

    def test_achievement(self):
        locked = Achievement(
            id=3, title="Deep Thinker", description="Spend 50 hours reading",
            kind="time", progress=94, rarity="Epic", xp=1000,
        )
        html = render_achievement(locked)
        assert "locked" in html
        assert ACHIEVEMENT_ICONS[AchievementKind.TIME] in html
        assert "94%" in html

    def test_quest_done(self):
        quest = Quest(id=3, title="Streak Keeper", description="Maintain your reading streak",
                      kind="streak", progress=100, xp=25)
        html = render_quest(quest)
        assert "Streak Keeper ✓" in html
        assert "+25 XP" in html
