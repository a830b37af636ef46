"""
PhiloReader - Interactive Trilingual Philosophy Reader

Streamlit application for reading Kant's Critique of Pure Reason in German,
English and Chinese with commentary, key terms, diagrams and quizzes.

Usage:
    streamlit run app.py
"""

import html
import uuid

import streamlit as st

from philoreader.config import APP_TITLE, CATALOG_PATH, CONTENT_DIR, setup_logging
from philoreader.reader import (
    ContentStore,
    ReadingSession,
    discover_bundles,
    get_action_label,
    load_catalog,
    resolve_reading_path,
)
from philoreader.schemas import Language
from philoreader.viewer import (
    DiagramRenderer,
    DiagramTheme,
    get_library_css,
    get_quiz_css,
    get_reader_css,
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
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

setup_logging()

st.set_page_config(
    page_title=APP_TITLE,
    page_icon="📜",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_content_store(bundle_path: str) -> ContentStore:
    """Content is immutable, so one store per bundle is shared by all sessions."""
    return ContentStore.from_file(bundle_path)


@st.cache_resource
def get_diagram_renderer() -> DiagramRenderer:
    return DiagramRenderer(DiagramTheme())


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "session_key" not in st.session_state:
        st.session_state.session_key = uuid.uuid4().hex

    if "catalog" not in st.session_state:
        st.session_state.catalog = load_catalog(CATALOG_PATH) if CATALOG_PATH.exists() else None

    if "bundles" not in st.session_state:
        st.session_state.bundles = discover_bundles(CONTENT_DIR)

    if "sessions" not in st.session_state:
        st.session_state.sessions = {}  # reading path -> ReadingSession

    if "reading_path" not in st.session_state:
        paths = list(st.session_state.bundles)
        st.session_state.reading_path = paths[0] if paths else None

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "reader"  # reader, library


def get_reading_session() -> ReadingSession | None:
    """ReadingSession for the open book, created on first use."""
    path = st.session_state.reading_path
    if not path or path not in st.session_state.bundles:
        return None

    sessions = st.session_state.sessions
    if path not in sessions:
        store = get_content_store(str(st.session_state.bundles[path]))
        sessions[path] = ReadingSession(store)
    return sessions[path]


def open_reading_path(path: str):
    """Open the book behind a catalog reading path."""
    if path not in st.session_state.bundles:
        st.warning("This book is not available in the reader yet.")
        return
    st.session_state.reading_path = path
    st.session_state.view_mode = "reader"
    st.rerun()


# -----------------------------------------------------------------------------
# Sidebar: Progress and Contents
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with XP, view mode and table of contents."""
    st.sidebar.title("📜 PhiloReader")

    session = get_reading_session()
    if session:
        st.sidebar.metric("Experience", f"{session.xp} XP")

    st.sidebar.divider()

    st.sidebar.subheader("View Mode")
    view_mode = st.sidebar.radio(
        "Select view",
        ["Reader", "Library"],
        index=["reader", "library"].index(st.session_state.view_mode),
        horizontal=True,
        label_visibility="collapsed",
    )
    st.session_state.view_mode = view_mode.lower()

    if st.session_state.view_mode == "reader" and session:
        render_table_of_contents(session)


def render_table_of_contents(session: ReadingSession):
    """Render the section list with jump buttons."""
    st.sidebar.divider()
    st.sidebar.subheader("Contents")

    current_id = session.current_section.id
    for section_id, title in session.store.get_titles():
        submitted = session.quiz.is_submitted(section_id)
        indicator = "✓" if submitted else ("→" if section_id == current_id else "○")
        if st.sidebar.button(
            f"{indicator} {title[:36] + '...' if len(title) > 36 else title}",
            key=f"toc_{section_id}",
            use_container_width=True,
        ):
            session.go_to(section_id)
            st.rerun()


# -----------------------------------------------------------------------------
# Main Content: Reader View
# -----------------------------------------------------------------------------

def render_reader_view():
    """Render the current section of the open book."""
    session = get_reading_session()
    if not session:
        st.error(f"No content found in {CONTENT_DIR}.")
        st.code("python scripts/validate_content.py")
        return

    book = session.store.book
    st.title(book.title)
    st.caption(f"by {book.author}")

    render_language_controls(session)
    render_navigation_bar(session)

    section = session.current_section
    st.markdown(get_reader_css(), unsafe_allow_html=True)

    parallel = st.checkbox("Show all translations side by side", key="parallel_text")
    st.markdown(render_section_markdown(section, session.language, parallel=parallel))

    # Study aids
    st.divider()
    st.markdown(render_insight(section.insight), unsafe_allow_html=True)

    if section.vocabulary:
        with st.expander("Key Terms", expanded=False):
            st.markdown(render_vocab_list(section.vocabulary), unsafe_allow_html=True)

    if section.diagram:
        render_diagram_section(section)
    else:
        get_diagram_renderer().release(diagram_slot())

    render_quiz_section(session)


def render_language_controls(session: ReadingSession):
    """Render the content language selector."""
    languages = list(Language)
    choice = st.selectbox(
        "Language",
        languages,
        index=languages.index(session.language),
        format_func=lambda lang: lang.display_name,
    )
    if choice != session.language:
        session.set_language(choice)
        st.rerun()


def render_navigation_bar(session: ReadingSession):
    """Render navigation bar with prev/next buttons."""
    nav = session.navigator
    col1, col2, col3 = st.columns([1, 2, 1])

    with col1:
        if st.button("← Previous", disabled=not nav.can_go_previous, use_container_width=True):
            session.go_previous()
            st.rerun()

    with col2:
        st.markdown(render_position(nav.position), unsafe_allow_html=True)

    with col3:
        if st.button("Next →", disabled=not nav.can_go_next, use_container_width=True):
            session.go_next()
            st.rerun()

    st.divider()


def diagram_slot() -> str:
    """The diagram view slot of this browser session in the shared renderer."""
    return f"{st.session_state.session_key}:section-diagram"


def render_diagram_section(section):
    """Render the section diagram, keeping the last good image on failure."""
    diagram = section.diagram
    renderer = get_diagram_renderer()

    st.subheader(diagram.title)
    image = renderer.render_for_view(diagram_slot(), diagram.definition)
    if image:
        st.image(image, use_container_width=True)
    else:
        st.info("Diagram unavailable.")
    st.markdown(
        f'<div class="diagram-caption">{html.escape(diagram.description)}</div>',
        unsafe_allow_html=True,
    )


def render_quiz_section(session: ReadingSession):
    """Render the comprehension quiz for the current section."""
    section = session.current_section
    if not section.has_quiz:
        return

    st.divider()
    st.subheader("Comprehension Check")
    st.markdown(get_quiz_css(), unsafe_allow_html=True)

    attempt = session.current_attempt
    for number, question in enumerate(section.quiz, start=1):
        labels = option_labels(question)
        key = f"quiz_{section.id}_{question.id}"
        choice = st.radio(
            f"**Question {number}:** {question.question}",
            list(range(len(question.options))),
            index=attempt.answers.get(question.id),
            format_func=lambda i, labels=labels: labels[i],
            key=key,
            disabled=attempt.submitted,
        )
        if choice is not None and choice != attempt.answers.get(question.id):
            session.select_answer(question.id, choice)

        if attempt.submitted:
            st.markdown(
                render_question_feedback(question, attempt.answers.get(question.id)),
                unsafe_allow_html=True,
            )

    result = session.quiz.result_for(section)
    if result is None:
        if st.button("Submit Answers", type="primary", use_container_width=True):
            result = session.submit()
            st.session_state.last_award = result.xp_awarded
            st.rerun()
    else:
        st.markdown(render_quiz_score(result), unsafe_allow_html=True)
        awarded = st.session_state.pop("last_award", None)
        if awarded:
            st.success(f"+{awarded} XP earned!")
        if st.button("Try again"):
            session.retry_quiz()
            for question in section.quiz:
                st.session_state.pop(f"quiz_{section.id}_{question.id}", None)
            st.rerun()


# -----------------------------------------------------------------------------
# Library View
# -----------------------------------------------------------------------------

def render_library_view():
    """Render the philosophy library with achievements and quests."""
    catalog = st.session_state.catalog
    if not catalog:
        st.error(f"Catalog not found: {CATALOG_PATH}")
        return

    st.title("Philosophy Library")
    st.markdown(get_library_css(), unsafe_allow_html=True)

    main_col, side_col = st.columns([2, 1])

    with main_col:
        book_cols = st.columns(2)
        for i, book in enumerate(catalog.books):
            with book_cols[i % 2]:
                st.markdown(render_book_card(book), unsafe_allow_html=True)
                path = resolve_reading_path(book)
                if st.button(
                    get_action_label(book),
                    key=f"book_{book.id}",
                    disabled=path is None,
                    use_container_width=True,
                ):
                    open_reading_path(path)

    with side_col:
        st.subheader("🏆 Achievements")
        for achievement in catalog.achievements:
            st.markdown(render_achievement(achievement), unsafe_allow_html=True)

        st.subheader("🎯 Daily Quests")
        for quest in catalog.quests:
            st.markdown(render_quest(quest), unsafe_allow_html=True)
            st.progress(quest.progress / 100)


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    if st.session_state.view_mode == "reader":
        render_reader_view()
    elif st.session_state.view_mode == "library":
        render_library_view()


if __name__ == "__main__":
    main()
