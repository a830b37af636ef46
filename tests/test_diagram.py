"""Tests for flowchart parsing, layout, drawing and the async renderer."""

import threading

import pytest

from philoreader.viewer import (
    DiagramRenderer,
    DiagramSyntaxError,
    DiagramTheme,
    draw_flowchart,
    layout_flowchart,
    parse_flowchart,
)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

SIMPLE = """graph TB
    A[Knowledge] -->|Two Types| B{Theoretical?}
    B --> C["Bounds of Experience<br/>(Phenomena)"]
    style A fill:#e6e6fa
"""


class TestParse:

    def test_nodes_and_edges(self):
        chart = parse_flowchart(SIMPLE)
        graph = chart.graph
        assert chart.direction == "TB"
        assert set(graph.nodes) == {"A", "B", "C"}
        assert graph.nodes["A"]["label"] == "Knowledge"
        assert graph.nodes["B"]["shape"] == "decision"
        assert graph.edges["A", "B"]["label"] == "Two Types"
        assert graph.edges["B", "C"]["label"] is None

    def test_quoted_label_with_line_breaks(self):
        graph = parse_flowchart(SIMPLE).graph
        assert graph.nodes["C"]["label"] == "Bounds of Experience\n(Phenomena)"

    def test_style(self):
        graph = parse_flowchart(SIMPLE).graph
        assert graph.nodes["A"]["style"] == {"fill": "#e6e6fa"}
        assert graph.nodes["B"]["style"] == {}

    def test_td_is_top_to_bottom(self):
        assert parse_flowchart("graph TD\n    A --> B").direction == "TB"

    def test_flowchart_keyword(self):
        assert parse_flowchart("flowchart LR\n    A --> B").direction == "LR"

    def test_chained_edges(self):
        graph = parse_flowchart("graph LR\n    A --> B --> C").graph
        assert list(graph.edges) == [("A", "B"), ("B", "C")]

    def test_open_link(self):
        graph = parse_flowchart("graph LR\n    A --- B").graph
        assert graph.edges["A", "B"]["arrow"] is False

    def test_bare_reference_keeps_label(self):
        graph = parse_flowchart("graph TB\n    A[Reason] --> B\n    A --> C").graph
        assert graph.nodes["A"]["label"] == "Reason"
        assert graph.nodes["B"]["label"] == "B"

    def test_ignored_directives(self):
        chart = parse_flowchart("graph TB\n    classDef big font-size:20px\n    A --> B\n    %% comment")
        assert set(chart.graph.nodes) == {"A", "B"}

    @pytest.mark.parametrize("definition", [
        "",
        "   \n  ",
        "A --> B",
        "graph XY\n    A --> B",
        "graph TB",
        "graph TB\n    A[unclosed --> B",
        "graph TB\n    A --> B\n    style Z fill:#fff",
    ])
    def test_invalid(self, definition):
        with pytest.raises(DiagramSyntaxError):
            parse_flowchart(definition)

    def test_all_shipped_diagrams_parse(self, kant_store):
        for section in kant_store:
            chart = parse_flowchart(section.diagram.definition)
            assert chart.graph.number_of_nodes() > 1


class TestLayout:

    @pytest.mark.parametrize("direction, check", [
        ("TB", lambda a, b: a[1] > b[1]),
        ("BT", lambda a, b: a[1] < b[1]),
        ("LR", lambda a, b: a[0] < b[0]),
        ("RL", lambda a, b: a[0] > b[0]),
    ])
    def test_direction(self, direction, check):
        pos = layout_flowchart(parse_flowchart(f"graph {direction}\n    A --> B"))
        assert check(pos["A"], pos["B"])

    def test_same_layer_shares_row(self):
        pos = layout_flowchart(parse_flowchart("graph TB\n    A --> B\n    A --> C"))
        assert pos["B"][1] == pytest.approx(pos["C"][1])

    def test_cycle_uses_spring_layout(self):
        pos = layout_flowchart(parse_flowchart("graph TB\n    A --> B\n    B --> C\n    C --> A"))
        assert set(pos) == {"A", "B", "C"}


class TestDraw:

    def test_png(self):
        image = draw_flowchart(parse_flowchart(SIMPLE), DiagramTheme())
        assert image.startswith(PNG_SIGNATURE)

    def test_theme_is_hashable(self):
        assert hash(DiagramTheme()) == hash(DiagramTheme())

    def test_synchronous_render(self):
        with DiagramRenderer() as renderer:
            assert renderer.render(SIMPLE).startswith(PNG_SIGNATURE)


class TestRenderer:

    def test_render_for_view(self):
        with DiagramRenderer() as renderer:
            image = renderer.render_for_view("section", SIMPLE, timeout=30)
            assert image.startswith(PNG_SIGNATURE)
            assert renderer.last_error("section") is None

    def test_latest_render_wins(self):
        release_first = threading.Event()

        def fake_render(definition):
            if definition == "first":
                release_first.wait(5)
            return definition.encode()

        with DiagramRenderer(max_workers=2) as renderer:
            renderer.render = fake_render
            first = renderer.request("section", "first")
            second = renderer.request("section", "second")

            assert second.result(timeout=5) == b"second"
            assert renderer.latest("section") == b"second"

            release_first.set()
            assert first.result(timeout=5) == b"first"
            assert renderer.latest("section") == b"second"

    def test_failure_keeps_previous_image(self):
        with DiagramRenderer() as renderer:
            good = renderer.request("section", SIMPLE).result(timeout=30)

            failed = renderer.request("section", "graph TB\n    A[unclosed")
            with pytest.raises(DiagramSyntaxError):
                failed.result(timeout=30)

            assert renderer.latest("section") == good
            assert "unclosed" in renderer.last_error("section")

    def test_success_clears_error(self):
        with DiagramRenderer() as renderer:
            renderer.render_for_view("section", "not a diagram", timeout=30)
            assert renderer.last_error("section") is not None
            renderer.render_for_view("section", SIMPLE, timeout=30)
            assert renderer.last_error("section") is None

    def test_slots_are_independent(self):
        with DiagramRenderer() as renderer:
            renderer.render = lambda definition: definition.encode()
            renderer.request("reader-1", "one").result(timeout=5)
            renderer.request("reader-2", "two").result(timeout=5)
            assert renderer.latest("reader-1") == b"one"
            assert renderer.latest("reader-2") == b"two"

    def test_empty_slot(self):
        with DiagramRenderer() as renderer:
            assert renderer.latest("nothing") is None


class TestRendererSlots:

    @pytest.fixture
    def renderer(self):
        renderer = DiagramRenderer(max_slots=3)
        renderer.render = lambda definition: definition.encode()
        yield renderer
        renderer.close()

    def test_slot_count_is_bounded(self, renderer):
        for i in range(200):
            renderer.request(f"session-{i}:section-diagram", f"diagram {i}").result(timeout=5)
        assert len(renderer) == 3
        assert len(renderer._rendered) <= 3
        assert renderer.latest("session-199:section-diagram") == b"diagram 199"

    def test_least_recently_requested_slot_evicted(self, renderer):
        for slot in ("a", "b", "c"):
            renderer.request(slot, slot).result(timeout=5)
        renderer.request("a", "a again").result(timeout=5)
        renderer.request("d", "d").result(timeout=5)

        assert renderer.latest("b") is None
        assert renderer.latest("a") == b"a again"
        assert renderer.latest("c") == b"c"
        assert renderer.latest("d") == b"d"

    def test_evicted_error_dropped(self, renderer):
        def failing(definition):
            raise DiagramSyntaxError("bad")

        renderer.render = failing
        with pytest.raises(DiagramSyntaxError):
            renderer.request("a", "x").result(timeout=5)
        assert renderer.last_error("a") == "bad"

        renderer.render = lambda definition: definition.encode()
        for slot in ("b", "c", "d"):
            renderer.request(slot, slot).result(timeout=5)
        assert renderer.last_error("a") is None

    def test_release(self, renderer):
        renderer.request("a", "a").result(timeout=5)
        assert renderer.release("a")
        assert renderer.latest("a") is None
        assert len(renderer) == 0
        assert not renderer.release("a")

    def test_render_finishing_after_release_is_discarded(self, renderer):
        started = threading.Event()
        release_render = threading.Event()

        def slow_render(definition):
            started.set()
            release_render.wait(5)
            return definition.encode()

        renderer.render = slow_render
        future = renderer.request("a", "a")
        assert started.wait(5)
        renderer.release("a")
        release_render.set()
        future.result(timeout=5)
        assert renderer.latest("a") is None

    def test_invalid_max_slots(self):
        with pytest.raises(ValueError):
            DiagramRenderer(max_slots=0)
