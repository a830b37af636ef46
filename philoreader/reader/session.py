"""
ReadingSession - One reader's state for one book.

Combines ContentStore (content) with Navigator, QuizController and
ScoreAccumulator (user state). Quiz operations always apply to the
section currently displayed.
"""

from philoreader.schemas import Language, QuizAttempt, Section

from .navigator import Navigator
from .quiz import QuizController, QuizResult
from .score import ScoreAccumulator
from .store import ContentStore


class ReadingSession:

    def __init__(self, store: ContentStore):
        self.store = store
        self.navigator = Navigator(store)
        self.score = ScoreAccumulator()
        self.quiz = QuizController(self.score)

    @property
    def current_section(self) -> Section:
        return self.navigator.current_section

    @property
    def language(self) -> Language:
        return self.navigator.language

    @property
    def xp(self) -> int:
        return self.score.xp

    @property
    def current_attempt(self) -> QuizAttempt:
        return self.quiz.attempt_for(self.current_section.id)

    def go_next(self) -> bool:
        return self.navigator.go_next()

    def go_previous(self) -> bool:
        return self.navigator.go_previous()

    def go_to(self, section_id: str) -> bool:
        return self.navigator.go_to(section_id)

    def set_language(self, code: Language | str) -> Language:
        return self.navigator.set_language(code)

    def select_answer(self, question_id: str, option_index: int) -> bool:
        return self.quiz.select_answer(self.current_section, question_id, option_index)

    def submit(self) -> QuizResult:
        return self.quiz.submit(self.current_section)

    def retry_quiz(self):
        self.quiz.reset(self.current_section.id)
