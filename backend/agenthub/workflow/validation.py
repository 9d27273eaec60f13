"""
Structural validation of a workflow.

Checks never raise: each problem becomes one human-readable message,
and an empty list means the workflow is valid. The graph stays fully
editable whatever the result.
"""

from __future__ import annotations

from logging import getLogger
from typing import Iterable, List, Optional

from agenthub.agents.models import AgentRecord, agent_ids
from agenthub.workflow.reachability import find_orphans
from agenthub.workflow.workflow_model import AgentStep, Workflow

logger = getLogger(__name__)

EMPTY_WORKFLOW = "workflow is empty"
NO_ENTRY_POINT = "no entry point defined"


def validate_workflow(
    workflow: Workflow,
    agents: Optional[Iterable[AgentRecord]] = None,
) -> List[str]:
    """Validate the workflow graph structure.

    In order:
        1. the workflow has steps (an empty workflow stops here)
        2. the entry step exists
        3. every step is reachable from some root
        4. every agent step references a known agent or the task source

    Returns a list of error messages (empty = valid).
    """
    errors: List[str] = []

    if not workflow.steps:
        errors.append(EMPTY_WORKFLOW)
        return errors

    if not workflow.has_valid_entry():
        errors.append(NO_ENTRY_POINT)

    orphans = find_orphans(workflow.steps, workflow.entry_step_id)
    if orphans:
        errors.append(f"{len(orphans)} disconnected steps")

    known = agent_ids(agents)
    for step in workflow.steps:
        if not isinstance(step, AgentStep):
            continue
        if step.is_task_source or step.agent_id in known:
            continue
        errors.append(f"step {step.label or step.id} has no valid agent")

    if errors:
        logger.debug(f"Workflow {workflow.id} has {len(errors)} validation problem(s)")
    return errors
