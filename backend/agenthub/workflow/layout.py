"""
Layered layout for the workflow canvas.

Each step gets a rendering depth ("layer") from a multi-root BFS, and
every edge between two layered steps is classified as forward (target
deeper than source) or back (target at the same or a shallower layer).
Back edges are drawn as returns to an earlier stage, e.g. a QA
rejection going back to a developer.

Classification compares layer numbers only. Diamonds feeding into a
shared layer can therefore produce a back edge that is not part of
any cycle; this is accepted for drawing purposes.
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Dict, List, Mapping, Sequence

from pydantic import BaseModel

from agenthub.workflow.reachability import find_roots
from agenthub.workflow.workflow_model import StepBase


class EdgeDirection(str, Enum):
    FORWARD = "forward"
    BACK = "back"


class LayeredEdge(BaseModel):
    """An edge between two layered steps."""

    source: str
    target: str
    label: str = ""
    index: int = 0
    direction: EdgeDirection

    @property
    def is_back_edge(self) -> bool:
        return self.direction == EdgeDirection.BACK


def assign_layers(steps: Sequence[StepBase], entry_id: str = "") -> Dict[str, int]:
    """Map step id -> layer.

    Roots start at layer 0. A step reached from several parents keeps
    the first (smallest) layer assigned to it. Steps the BFS never
    reaches are absent from the result.
    """
    by_id = {s.id: s for s in steps}
    layers: Dict[str, int] = {}
    queue = deque()
    for root in find_roots(steps, entry_id):
        layers[root] = 0
        queue.append(root)

    while queue:
        step_id = queue.popleft()
        layer = layers[step_id]
        for target in by_id[step_id].next_steps:
            if target in layers or target not in by_id:
                continue
            layers[target] = layer + 1
            queue.append(target)
    return layers


def classify_edges(
    steps: Sequence[StepBase],
    layers: Mapping[str, int],
) -> List[LayeredEdge]:
    """Classify every edge whose endpoints both have a layer."""
    edges: List[LayeredEdge] = []
    for step in steps:
        if step.id not in layers:
            continue
        source_layer = layers[step.id]
        for i, target in enumerate(step.next_steps):
            if target not in layers:
                continue
            direction = (
                EdgeDirection.BACK if layers[target] <= source_layer
                else EdgeDirection.FORWARD
            )
            edges.append(LayeredEdge(
                source=step.id,
                target=target,
                label=step.label_for(i),
                index=i,
                direction=direction,
            ))
    return edges


def back_edges(steps: Sequence[StepBase], entry_id: str = "") -> List[LayeredEdge]:
    """Only the back edges of the layered graph."""
    layers = assign_layers(steps, entry_id)
    return [e for e in classify_edges(steps, layers) if e.is_back_edge]


def layer_rows(layers: Mapping[str, int], steps: Sequence[StepBase] = ()) -> List[List[str]]:
    """Group step ids by layer, shallowest first.

    Within a row, ids follow ``steps`` order when given, else the
    insertion order of ``layers``.
    """
    order = [s.id for s in steps if s.id in layers] if steps else list(layers)
    if not order:
        return []
    rows: List[List[str]] = [[] for _ in range(max(layers.values()) + 1)]
    for step_id in order:
        rows[layers[step_id]].append(step_id)
    return rows
