"""Shared fixtures: a small three-section bundle and the bundled Kant content."""

import pytest
import yaml

from philoreader.config import CONTENT_DIR
from philoreader.reader import ContentStore, ReadingSession
from philoreader.schemas import ContentBundle


KANT_BUNDLE = CONTENT_DIR / "kant_critique.yaml"


def make_section(section_id, quiz=None, **extra):
    section = {
        "id": section_id,
        "title": section_id.replace("-", " ").title(),
        "translations": {
            "en": f"{section_id} in English",
            "de": f"{section_id} auf Deutsch",
            "zh": f"{section_id} 中文",
        },
    }
    if quiz is not None:
        section["quiz"] = quiz
    section.update(extra)
    return section


def make_question(question_id, correct=1, options=3):
    return {
        "id": question_id,
        "question": f"Question {question_id}?",
        "options": [f"Option {i}" for i in range(options)],
        "correct_answer_index": correct,
        "explanation": f"Because of {question_id}.",
    }


def make_bundle_data():
    return {
        "book": {
            "id": "sample",
            "title": "Sample Book",
            "author": "A. Author",
            "reading_path": "/read/sample",
        },
        "sections": [
            make_section("intro", quiz=[make_question("intro-1", correct=0), make_question("intro-2", correct=2)]),
            make_section(
                "middle",
                quiz=[make_question("middle-1", correct=1)],
                template="### {title}\n\n{translations.de}\n\n{translations.en}",
                insight="The middle matters.",
                vocabulary=[{"term": "a priori", "definition": "Before experience", "usage": "Pure cognition"}],
                diagram={
                    "title": "Flow",
                    "description": "A to B",
                    "definition": "graph TB\n    A[Start] --> B[End]",
                },
            ),
            make_section("end"),
        ],
    }


@pytest.fixture
def bundle_data():
    return make_bundle_data()


@pytest.fixture
def bundle():
    return ContentBundle.model_validate(make_bundle_data())


@pytest.fixture
def store(bundle):
    return ContentStore(bundle)


@pytest.fixture
def session(store):
    return ReadingSession(store)


@pytest.fixture
def bundle_file(tmp_path):
    path = tmp_path / "sample.yaml"
    path.write_text(yaml.safe_dump(make_bundle_data(), allow_unicode=True), encoding="utf-8")
    return path


@pytest.fixture(scope="session")
def kant_store():
    return ContentStore.from_file(KANT_BUNDLE)
