"""
Reachability analysis: which steps hang off a root, which are orphans.

Roots are the steps no edge points at. A fully cyclic graph has none,
in which case the entry step is the only root. Orphans are listed
apart from the layered graph but stay editable.
"""

from __future__ import annotations

from collections import deque
from typing import List, Sequence, Set

from agenthub.workflow.workflow_model import StepBase


def steps_with_incoming(steps: Sequence[StepBase]) -> Set[str]:
    """Ids appearing in any step's ``next_steps``."""
    targets: Set[str] = set()
    for step in steps:
        targets.update(step.next_steps)
    return targets


def find_roots(steps: Sequence[StepBase], entry_id: str = "") -> List[str]:
    """Traversal seeds shared by layout and orphan detection.

    Every step without an incoming edge, in step order. When there is
    none, ``[entry_id]`` if it names an existing step, else ``[]``.
    """
    has_incoming = steps_with_incoming(steps)
    roots = [s.id for s in steps if s.id not in has_incoming]
    if roots:
        return roots
    if entry_id and any(s.id == entry_id for s in steps):
        return [entry_id]
    return []


def reachable_from(steps: Sequence[StepBase], entry_id: str = "") -> Set[str]:
    """Ids of every step reachable from the roots (roots included)."""
    by_id = {s.id: s for s in steps}
    visited: Set[str] = set()
    queue = deque(find_roots(steps, entry_id))
    while queue:
        step_id = queue.popleft()
        if step_id in visited or step_id not in by_id:
            continue
        visited.add(step_id)
        for target in by_id[step_id].next_steps:
            if target not in visited:
                queue.append(target)
    return visited


def find_orphans(steps: Sequence[StepBase], entry_id: str = "") -> List[StepBase]:
    """Steps unreachable from every root, in step order."""
    reachable = reachable_from(steps, entry_id)
    return [s for s in steps if s.id not in reachable]
