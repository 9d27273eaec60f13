"""
Execution-order preview.

Walks the graph in BFS waves strictly from the declared entry step
(other roots are ignored). Every step reached in the same wave shares
an order number. A step is ordered the first time it is reached and
never revisited, so rejection loops terminate.

Given a ``task_result``, condition steps only follow the branch whose
edge label matches the evaluated condition.
"""

from __future__ import annotations

from logging import getLogger
from typing import Any, Dict, List, Mapping, Optional

from agenthub.workflow.conditions import branch_for
from agenthub.workflow.workflow_model import ConditionStep, StepBase, Workflow

logger = getLogger(__name__)


def _successors(
    step: StepBase,
    task_result: Optional[Mapping[str, Any]],
) -> List[str]:
    if task_result is None or not isinstance(step, ConditionStep):
        return list(step.next_steps)

    branch = branch_for(step.evaluate(task_result))
    chosen = [
        target for i, target in enumerate(step.next_steps)
        if step.label_for(i).strip().lower() == branch
    ]
    if not chosen and step.next_steps:
        logger.warning(
            f"Condition step '{step.id}' has no branch labelled '{branch}', "
            f"falling through to first edge"
        )
        chosen = [step.next_steps[0]]
    return chosen


def simulate(
    workflow: Workflow,
    task_result: Optional[Mapping[str, Any]] = None,
) -> Dict[str, int]:
    """Map step id -> wave number, starting at 0 for the entry step.

    Returns ``{}`` when the entry step is unset or does not exist.
    """
    if not workflow.has_valid_entry():
        return {}

    by_id = workflow.steps_by_id()
    order: Dict[str, int] = {}
    wave = [workflow.entry_step_id]
    level = 0
    while wave:
        next_wave: List[str] = []
        for step_id in wave:
            order[step_id] = level
        for step_id in wave:
            for target in _successors(by_id[step_id], task_result):
                if target in by_id and target not in order and target not in next_wave:
                    next_wave.append(target)
        wave = next_wave
        level += 1
    return order


def simulation_waves(order: Mapping[str, int]) -> List[List[str]]:
    """Group an order map into waves, in insertion order within a wave."""
    if not order:
        return []
    waves: List[List[str]] = [[] for _ in range(max(order.values()) + 1)]
    for step_id, level in order.items():
        waves[level].append(step_id)
    return waves
