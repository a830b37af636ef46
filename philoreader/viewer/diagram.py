"""
Diagram renderer - Flowchart definitions to PNG images.

Sections describe their diagrams in a small flowchart language (the Mermaid
"graph" subset):

    graph TB
        A[Knowledge] -->|Two Types| B{Theoretical?}
        B --> C["Bounds of Experience<br/>(Phenomena)"]
        style A fill:#e6e6fa

Definitions are parsed into a networkx DiGraph, laid out by topological
layers and drawn with matplotlib. DiagramRenderer runs renders on a thread
pool; per view slot only the most recent request is ever applied.
"""

import io
import logging
import re
import threading
from collections import OrderedDict
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import networkx as nx
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from philoreader.config import DIAGRAM_MAX_SLOTS, DIAGRAM_TIMEOUT_SECONDS, DIAGRAM_WORKERS

logger = logging.getLogger(__name__)


class DiagramSyntaxError(ValueError):
    """Raised when a flowchart definition cannot be parsed."""


@dataclass(frozen=True)
class DiagramTheme:
    """Colors and sizes for rendered diagrams."""
    primary_color: str = "#9333ea"
    primary_text_color: str = "#1f2937"
    primary_border_color: str = "#9333ea"
    line_color: str = "#6b7280"
    secondary_color: str = "#f3e8ff"
    tertiary_color: str = "#fdf4ff"
    font_size: float = 9.0
    edge_label_size: float = 7.5
    dpi: int = 100


@dataclass
class Flowchart:
    direction: str
    graph: nx.DiGraph


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------

HEADER_RE = re.compile(r'^(?:graph|flowchart)\s+(TB|TD|BT|LR|RL)\s*;?$')
ARROW_RE = re.compile(r'\s*(-->|---)\s*(?:\|([^|]*)\|\s*)?')
NODE_RE = re.compile(r'^(\w+)\s*(?:\[(.*)\]|\{(.*)\}|\((.*)\))?$')
STYLE_RE = re.compile(r'^style\s+(\w+)\s+(.+?)\s*;?$')
BREAK_RE = re.compile(r'<br\s*/?>', re.IGNORECASE)

# Directives that carry no layout information for us
IGNORED_DIRECTIVES = ("classDef", "class ", "linkStyle", "click ")


def _clean_label(raw: str) -> str:
    label = raw.strip()
    if len(label) >= 2 and label[0] == '"' and label[-1] == '"':
        label = label[1:-1]
    return BREAK_RE.sub("\n", label)


def _parse_node(text: str, graph: nx.DiGraph, line_no: int) -> str:
    match = NODE_RE.match(text.strip())
    if not match:
        raise DiagramSyntaxError(f"line {line_no}: cannot parse node {text.strip()!r}")

    node_id, rect, decision, rounded = match.groups()
    if rect is not None:
        shape, label = "rect", rect
    elif decision is not None:
        shape, label = "decision", decision
    elif rounded is not None:
        shape, label = "round", rounded
    else:
        shape, label = None, None

    if node_id not in graph:
        graph.add_node(node_id, label=node_id, shape="rect", style={})
    if label is not None:
        graph.nodes[node_id]["label"] = _clean_label(label)
        graph.nodes[node_id]["shape"] = shape
    return node_id


def _parse_style(props: str) -> dict[str, str]:
    style = {}
    for prop in props.split(","):
        if ":" not in prop:
            continue
        key, value = prop.split(":", 1)
        style[key.strip()] = value.strip()
    return style


def parse_flowchart(definition: str) -> Flowchart:
    """
    Parse a flowchart definition.

    Raises:
        DiagramSyntaxError: On a missing header, unparseable line or empty graph
    """
    lines = definition.strip().splitlines()
    if not lines:
        raise DiagramSyntaxError("empty diagram definition")

    header = HEADER_RE.match(lines[0].strip())
    if not header:
        raise DiagramSyntaxError(f"line 1: expected 'graph <direction>', got {lines[0].strip()!r}")
    direction = "TB" if header.group(1) == "TD" else header.group(1)

    graph = nx.DiGraph()
    styles: dict[str, dict[str, str]] = {}

    for line_no, raw_line in enumerate(lines[1:], start=2):
        line = raw_line.strip()
        if not line or line.startswith("%%"):
            continue
        if line.startswith(IGNORED_DIRECTIVES):
            logger.debug(f"Ignoring directive on line {line_no}: {line}")
            continue

        style_match = STYLE_RE.match(line)
        if style_match:
            styles[style_match.group(1)] = _parse_style(style_match.group(2))
            continue

        # a --> b, a -->|label| b, chains a --> b --> c
        parts = ARROW_RE.split(line.rstrip(";"))
        if len(parts) == 1:
            _parse_node(parts[0], graph, line_no)
            continue

        previous = _parse_node(parts[0], graph, line_no)
        for i in range(1, len(parts), 3):
            arrow, label, target_text = parts[i], parts[i + 1], parts[i + 2]
            target = _parse_node(target_text, graph, line_no)
            graph.add_edge(
                previous,
                target,
                label=_clean_label(label) if label else None,
                arrow=arrow == "-->",
            )
            previous = target

    if graph.number_of_nodes() == 0:
        raise DiagramSyntaxError("diagram has no nodes")

    for node_id, style in styles.items():
        if node_id not in graph:
            raise DiagramSyntaxError(f"style for unknown node {node_id!r}")
        graph.nodes[node_id]["style"] = style

    return Flowchart(direction=direction, graph=graph)


# -----------------------------------------------------------------------------
# Layout and drawing
# -----------------------------------------------------------------------------

def layout_flowchart(chart: Flowchart) -> dict[str, tuple[float, float]]:
    """
    Node positions. Acyclic charts are layered by topological generation
    (roots first, in the chart's direction); cyclic charts use a spring layout.
    """
    graph = chart.graph
    if not nx.is_directed_acyclic_graph(graph):
        pos = nx.spring_layout(graph, seed=42)
        return {node: (float(x), float(y)) for node, (x, y) in pos.items()}

    # Insert nodes layer by layer so layers are laid out in order
    layered = nx.DiGraph()
    for layer, nodes in enumerate(nx.topological_generations(graph)):
        for node in nodes:
            layered.add_node(node, layer=layer)
    layered.add_edges_from(graph.edges)

    vertical_flow = chart.direction in ("TB", "BT")
    pos = nx.multipartite_layout(
        layered,
        subset_key="layer",
        align="horizontal" if vertical_flow else "vertical",
    )

    result = {}
    for node, (x, y) in pos.items():
        x, y = float(x), float(y)
        if chart.direction == "TB":
            y = -y
        elif chart.direction == "RL":
            x = -x
        result[node] = (x, y)
    return result


BOX_STYLES = {
    "rect": "square,pad=0.5",
    "round": "round,pad=0.5",
    "decision": "round4,pad=0.6",
}


def _figure_size(chart: Flowchart) -> tuple[float, float]:
    graph = chart.graph
    if nx.is_directed_acyclic_graph(graph):
        generations = list(nx.topological_generations(graph))
        depth = len(generations)
        breadth = max(len(g) for g in generations)
    else:
        depth = breadth = max(2, int(graph.number_of_nodes() ** 0.5) + 1)

    if chart.direction in ("LR", "RL"):
        depth, breadth = breadth, depth
    return (max(6.0, breadth * 2.8), max(3.0, depth * 1.5))


def draw_flowchart(chart: Flowchart, theme: DiagramTheme) -> bytes:
    """Draw a parsed flowchart and return PNG bytes."""
    graph = chart.graph
    pos = layout_flowchart(chart)

    fig = Figure(figsize=_figure_size(chart), dpi=theme.dpi)
    FigureCanvasAgg(fig)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_axis_off()

    xs = [p[0] for p in pos.values()]
    ys = [p[1] for p in pos.values()]
    ax.set_xlim(min(xs) - 0.4, max(xs) + 0.4)
    ax.set_ylim(min(ys) - 0.3, max(ys) + 0.3)

    texts = {}
    for node, data in graph.nodes(data=True):
        style = data.get("style", {})
        x, y = pos[node]
        texts[node] = ax.text(
            x, y, data["label"],
            ha="center", va="center",
            fontsize=theme.font_size,
            color=style.get("color", theme.primary_text_color),
            zorder=3,
            bbox=dict(
                boxstyle=BOX_STYLES.get(data.get("shape"), BOX_STYLES["rect"]),
                facecolor=style.get("fill", theme.secondary_color),
                edgecolor=style.get("stroke", theme.primary_border_color),
                linewidth=1.2,
            ),
        )

    for source, target, data in graph.edges(data=True):
        ax.annotate(
            "",
            xy=pos[target],
            xytext=pos[source],
            zorder=2,
            arrowprops=dict(
                arrowstyle="-|>" if data.get("arrow", True) else "-",
                color=theme.line_color,
                linewidth=1.0,
                patchA=texts[source].get_bbox_patch(),
                patchB=texts[target].get_bbox_patch(),
                shrinkA=2,
                shrinkB=2,
            ),
        )
        if data.get("label"):
            mid_x = (pos[source][0] + pos[target][0]) / 2
            mid_y = (pos[source][1] + pos[target][1]) / 2
            ax.text(
                mid_x, mid_y, data["label"],
                ha="center", va="center",
                fontsize=theme.edge_label_size,
                color=theme.line_color,
                zorder=4,
                bbox=dict(boxstyle="round,pad=0.2", facecolor=theme.tertiary_color, edgecolor="none"),
            )

    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", facecolor="white", bbox_inches="tight")
    return buffer.getvalue()


@lru_cache(maxsize=64)
def render_definition(definition: str, theme: DiagramTheme) -> bytes:
    """Parse and draw a definition. Memoized per (definition, theme)."""
    return draw_flowchart(parse_flowchart(definition), theme)


# -----------------------------------------------------------------------------
# Renderer
# -----------------------------------------------------------------------------

class DiagramRenderer:
    """
    Render flowcharts off the interaction path.

    Each view slot (e.g. "<session>:section-diagram") keeps the image of its
    latest successful render. A request supersedes every earlier request for
    the same slot: older renders that finish later are discarded, and a failed
    render leaves the previous image in place.

    One renderer is shared by every browser session, so at most `max_slots`
    slots are remembered. Requesting a slot when the limit is reached evicts
    the least recently requested slot. release() drops a slot explicitly.

    Construct one per app and close() it when done.
    """

    def __init__(
        self,
        theme: DiagramTheme | None = None,
        max_workers: int = DIAGRAM_WORKERS,
        max_slots: int = DIAGRAM_MAX_SLOTS,
    ):
        if max_slots < 1:
            raise ValueError(f"max_slots must be at least 1, got {max_slots}")
        self.theme = theme or DiagramTheme()
        self.max_slots = max_slots
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="diagram")
        self._lock = threading.Lock()
        # slot -> generation, least recently requested first
        self._generations: OrderedDict[str, int] = OrderedDict()
        self._next_generation = 0
        self._rendered: dict[str, bytes] = {}
        self._errors: dict[str, str] = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __len__(self) -> int:
        """Number of slots currently remembered."""
        with self._lock:
            return len(self._generations)

    def close(self):
        self._executor.shutdown(wait=False, cancel_futures=True)

    def render(self, definition: str) -> bytes:
        """Synchronously parse and draw a definition."""
        return render_definition(definition, self.theme)

    def request(self, slot: str, definition: str) -> Future:
        """Schedule a render for a slot, superseding earlier requests."""
        with self._lock:
            # Generations are unique across slots, so a slot that was evicted
            # or released and then requested again never matches a stale job
            self._next_generation += 1
            generation = self._next_generation
            self._generations[slot] = generation
            self._generations.move_to_end(slot)
            while len(self._generations) > self.max_slots:
                evicted, _ = self._generations.popitem(last=False)
                self._drop(evicted)
                logger.debug(f"Evicted diagram slot {evicted}")
        logger.debug(f"Diagram render requested for {slot} (generation {generation})")
        return self._executor.submit(self._render_job, slot, generation, definition)

    def release(self, slot: str) -> bool:
        """
        Forget a slot and its image. Renders still running for it are
        discarded when they finish. Returns False if the slot was unknown.
        """
        with self._lock:
            if self._generations.pop(slot, None) is None:
                return False
            self._drop(slot)
        logger.debug(f"Released diagram slot {slot}")
        return True

    def _drop(self, slot: str):
        # caller holds the lock
        self._rendered.pop(slot, None)
        self._errors.pop(slot, None)

    def _render_job(self, slot: str, generation: int, definition: str) -> bytes:
        try:
            image = self.render(definition)
        except Exception as e:
            with self._lock:
                if self._generations.get(slot) == generation:
                    self._errors[slot] = str(e)
            logger.warning(f"Diagram render failed for {slot}: {e}")
            raise

        with self._lock:
            if self._generations.get(slot) != generation:
                logger.debug(f"Discarding superseded render for {slot} (generation {generation})")
            else:
                self._rendered[slot] = image
                self._errors.pop(slot, None)
        return image

    def latest(self, slot: str) -> Optional[bytes]:
        """Most recent successfully applied image for a slot."""
        with self._lock:
            return self._rendered.get(slot)

    def last_error(self, slot: str) -> Optional[str]:
        with self._lock:
            return self._errors.get(slot)

    def render_for_view(
        self,
        slot: str,
        definition: str,
        timeout: float = DIAGRAM_TIMEOUT_SECONDS,
    ) -> Optional[bytes]:
        """
        Request a render and wait up to `timeout` seconds for it.

        Returns whatever the slot shows afterwards: the new image, or the
        previous one if the render failed or is still running.
        """
        future = self.request(slot, definition)
        wait([future], timeout=timeout)
        return self.latest(slot)
