"""Tests for ReadingSession: navigation, language and quizzes together."""

from philoreader.reader import ReadingSession
from philoreader.schemas import Language


class TestReadingSession:

    def test_initial_state(self, session):
        assert session.current_section.id == "intro"
        assert session.language == Language.EN
        assert session.xp == 0

    def test_quiz_applies_to_current_section(self, session):
        session.select_answer("intro-1", 0)
        session.go_next()
        session.select_answer("middle-1", 1)
        result = session.submit()

        assert result.section_id == "middle"
        assert session.quiz.is_submitted("middle")
        assert not session.quiz.is_submitted("intro")

    def test_navigation_preserves_quiz_and_xp(self, session):
        session.select_answer("intro-1", 0)
        session.submit()
        xp = session.xp

        session.go_next()
        session.go_to("end")
        session.go_previous()
        session.set_language("zh")
        session.go_to("intro")

        assert session.xp == xp
        assert session.current_attempt.submitted
        assert session.current_attempt.answers == {"intro-1": 0}

    def test_language_does_not_reset_answers(self, session):
        session.select_answer("intro-2", 2)
        session.set_language("de")
        assert session.current_attempt.answers == {"intro-2": 2}
        assert not session.current_attempt.submitted

    def test_retry_quiz(self, session):
        session.select_answer("intro-1", 0)
        session.submit()
        session.retry_quiz()

        assert not session.current_attempt.submitted
        assert session.xp == 100

    def test_sessions_are_independent(self, store):
        first = ReadingSession(store)
        second = ReadingSession(store)
        first.go_next()
        first.select_answer("middle-1", 1)
        first.submit()

        assert second.current_section.id == "intro"
        assert second.xp == 0
        assert not second.quiz.is_submitted("middle")


class TestKantSession:

    def test_dedication_quiz(self, kant_store):
        session = ReadingSession(kant_store)
        assert session.current_section.id == "dedication"

        session.select_answer("dedication-1", 2)
        session.select_answer("dedication-2", 0)
        result = session.submit()

        assert result.correct_count == 1
        assert session.xp == 100

    def test_walk_through_book(self, kant_store):
        session = ReadingSession(kant_store)
        seen = [session.current_section.id]
        while session.go_next():
            seen.append(session.current_section.id)
        assert len(seen) == 13
        assert seen[-1] == "synthetic-a-priori"
