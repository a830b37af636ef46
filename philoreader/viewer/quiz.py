"""
Quiz renderer - Comprehension quiz feedback and score display.

Provides:
- Option labels for radio inputs
- Post-submission feedback with explanation
- Score summary with XP earned
"""

import html
from typing import Optional

from philoreader.reader import QuizResult
from philoreader.schemas import QuizQuestion


OPTION_LETTERS = "ABCDEFGHIJ"


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-feedback {
        border-radius: 8px;
        padding: 0.8em 1em;
        margin: 0.5em 0 1.5em 0;
        line-height: 1.6;
    }
    .quiz-feedback.correct {
        background: #e8f5e9;
        border-left: 4px solid #388E3C;
    }
    .quiz-feedback.incorrect {
        background: #ffebee;
        border-left: 4px solid #D32F2F;
    }
    .quiz-feedback-label {
        font-weight: 600;
        margin-bottom: 0.3em;
    }
    .quiz-feedback.correct .quiz-feedback-label {
        color: #388E3C;
    }
    .quiz-feedback.incorrect .quiz-feedback-label {
        color: #D32F2F;
    }
    .quiz-explanation {
        color: #333;
    }
    .quiz-score-box {
        background: #f3e8ff;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #7e22ce;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    </style>
    """


def option_labels(question: QuizQuestion) -> list[str]:
    """Labels for a question's options, e.g. 'A. Teacher and student'."""
    return [
        f"{OPTION_LETTERS[i]}. {option}" if i < len(OPTION_LETTERS) else option
        for i, option in enumerate(question.options)
    ]


def render_question_feedback(question: QuizQuestion, chosen: Optional[int]) -> str:
    """
    Render feedback for one submitted question.

    The explanation is always shown; the correct option is named when the
    reader missed it or left the question unanswered.
    """
    correct = question.is_correct(chosen)
    css_class = "correct" if correct else "incorrect"

    if correct:
        label = "Correct!"
    elif chosen is None:
        label = "Not answered"
    else:
        label = "Incorrect"

    parts = [f'<div class="quiz-feedback {css_class}">']
    parts.append(f'<div class="quiz-feedback-label">{label}</div>')
    if not correct:
        answer = option_labels(question)[question.correct_answer_index]
        parts.append(f'<div><strong>Answer:</strong> {html.escape(answer)}</div>')
    parts.append(f'<div class="quiz-explanation">{html.escape(question.explanation)}</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_quiz_score(result: QuizResult) -> str:
    """Render quiz score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{result.score} XP</div>
        <div class="quiz-score-label">{result.correct_count} of {result.total} correct ({result.percent}%)</div>
    </div>
    """
