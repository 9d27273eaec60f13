"""
Workflow Inspector: the rendering report for one snapshot.

Bundles everything the canvas draws into plain data:

* Layer per step and the rows of steps per layer
* Every layered edge, tagged forward or back
* Orphan steps, listed apart from the layered graph
* Per-step detail (kind, agent name or placeholder, entry flag)
* Validation result and summary counts
"""

from __future__ import annotations

from logging import getLogger
from typing import Any, Dict, Iterable, List, Optional

from agenthub.agents.models import AgentRecord, role_label
from agenthub.workflow.layout import assign_layers, classify_edges, layer_rows
from agenthub.workflow.reachability import find_orphans
from agenthub.workflow.validation import validate_workflow
from agenthub.workflow.workflow_model import (
    AgentStep,
    ConditionStep,
    StepBase,
    Workflow,
)

logger = getLogger(__name__)

TASK_SOURCE_LABEL = "Task source"
MISSING_AGENT_LABEL = "(missing agent)"


# ====================================================================
# Public API
# ====================================================================


def inspect_workflow(
    workflow: Workflow,
    agents: Optional[Iterable[AgentRecord]] = None,
) -> Dict[str, Any]:
    """Inspect a workflow and produce the rendering report.

    Returns a dict containing:
        - ``layers``     : step id -> layer
        - ``rows``       : step ids grouped by layer
        - ``edges``      : per-edge detail list (layered edges only)
        - ``back_edges`` : ``[source, target]`` pairs of back edges
        - ``orphans``    : ids of steps unreachable from any root
        - ``steps``      : per-step detail list
        - ``summary``    : high-level stats
        - ``validation`` : validation result
    """
    registry = list(agents or [])
    agent_map = {a.id: a for a in registry}
    errors = validate_workflow(workflow, registry)

    layers = assign_layers(workflow.steps, workflow.entry_step_id)
    edges = classify_edges(workflow.steps, layers)
    orphans = find_orphans(workflow.steps, workflow.entry_step_id)

    edge_details = [
        {
            "source": e.source,
            "target": e.target,
            "label": e.label,
            "direction": e.direction.value,
        }
        for e in edges
    ]
    back = [[e.source, e.target] for e in edges if e.is_back_edge]
    logger.debug(
        f"Inspected workflow {workflow.id}: {len(layers)} layered, "
        f"{len(orphans)} orphan(s), {len(back)} back edge(s)"
    )

    step_details = [
        _step_detail(s, workflow, layers, agent_map) for s in workflow.steps
    ]

    return {
        "layers": layers,
        "rows": layer_rows(layers, workflow.steps),
        "edges": edge_details,
        "back_edges": back,
        "orphans": [s.id for s in orphans],
        "steps": step_details,
        "summary": {
            "workflow_name": workflow.name,
            "workflow_id": workflow.id,
            "total_steps": len(workflow.steps),
            "total_edges": sum(len(s.next_steps) for s in workflow.steps),
            "back_edges": len(back),
            "orphans": len(orphans),
            "depth": len(set(layers.values())),
            "is_valid": len(errors) == 0,
        },
        "validation": {
            "valid": len(errors) == 0,
            "errors": errors,
        },
    }


# ====================================================================
# Step detail builder
# ====================================================================


def _step_detail(
    step: StepBase,
    workflow: Workflow,
    layers: Dict[str, int],
    agent_map: Dict[str, AgentRecord],
) -> Dict[str, Any]:
    detail: Dict[str, Any] = {
        "id": step.id,
        "kind": step.kind,
        "label": step.label,
        "layer": layers.get(step.id),
        "is_entry": step.id == workflow.entry_step_id,
        "agent_reference": step.agent_reference,
        "targets": [
            {"target_id": e.target, "label": e.label}
            for e in workflow.edges_of(step)
        ],
    }

    if isinstance(step, AgentStep):
        detail["agent"] = _describe_agent(step, agent_map)
    elif isinstance(step, ConditionStep):
        detail["condition"] = {
            "field": step.condition_field,
            "operator": step.condition_operator.value if step.condition_operator else None,
            "value": step.condition_value,
        }
    return detail


def _describe_agent(
    step: AgentStep,
    agent_map: Dict[str, AgentRecord],
) -> Dict[str, Any]:
    if step.is_task_source:
        return {"id": step.agent_id, "name": TASK_SOURCE_LABEL, "role": None, "missing": False}

    agent = agent_map.get(step.agent_id)
    if agent is None:
        return {"id": step.agent_id, "name": MISSING_AGENT_LABEL, "role": None, "missing": True}
    return {
        "id": agent.id,
        "name": agent.name or role_label(agent.role),
        "role": agent.role,
        "missing": False,
    }
