"""
Default Workflow Template.

Seeds the workflow a project starts with, wired from whatever agents
the registry currently holds.

Topology::

    Tech Lead ──assign──▶ Frontend Dev ──done──▶ QA
              ──assign──▶ Backend Dev  ──done──▶ QA
                          ▲                      │
                          └──────rejected────────┘

Roles missing from the registry are skipped and the first remaining
step is the entry. With neither tech lead nor QA, the developers are
chained in role order. No known roles at all yields an empty workflow.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from agenthub.agents.models import AgentRecord, AgentRole, first_agent_with_role
from agenthub.config import WorkflowConfig, get_workflow_config
from agenthub.workflow.workflow_model import AgentStep, Workflow, generate_step_id

_DEVELOPER_ROLES = (AgentRole.FRONTEND_DEV, AgentRole.BACKEND_DEV)

_STEP_LABELS = {
    AgentRole.TECH_LEAD: "Receive task",
    AgentRole.FRONTEND_DEV: "Implement frontend",
    AgentRole.BACKEND_DEV: "Implement backend",
    AgentRole.QA: "Review and test",
}


def create_default_workflow(
    agents: Sequence[AgentRecord],
    name: Optional[str] = None,
    project_id: Optional[str] = None,
    config: Optional[WorkflowConfig] = None,
) -> Workflow:
    """Build the default hand-off workflow for a project."""
    cfg = config or get_workflow_config()

    def _step(agent: AgentRecord, role: AgentRole) -> AgentStep:
        return AgentStep(
            id=generate_step_id(cfg.step_id_prefix),
            agent_id=agent.id,
            label=_STEP_LABELS[role],
        )

    def _link(src: AgentStep, tgt: AgentStep, label: str) -> None:
        src.next_steps.append(tgt.id)
        src.next_step_labels.append(label)

    tech_lead = first_agent_with_role(agents, AgentRole.TECH_LEAD)
    qa = first_agent_with_role(agents, AgentRole.QA)

    lead_step = _step(tech_lead, AgentRole.TECH_LEAD) if tech_lead else None
    qa_step = _step(qa, AgentRole.QA) if qa else None
    dev_steps: List[AgentStep] = []
    for role in _DEVELOPER_ROLES:
        dev = first_agent_with_role(agents, role)
        if dev is not None:
            dev_steps.append(_step(dev, role))

    if lead_step and dev_steps:
        for dev_step in dev_steps:
            _link(lead_step, dev_step, "assign")
    elif lead_step and qa_step:
        _link(lead_step, qa_step, "assign")

    if qa_step:
        for dev_step in dev_steps:
            _link(dev_step, qa_step, "done")
            _link(qa_step, dev_step, "rejected")
    elif not lead_step:
        # No tech lead and no QA: chain the developers in role order
        for src, tgt in zip(dev_steps, dev_steps[1:]):
            _link(src, tgt, "")

    steps = [s for s in [lead_step, *dev_steps, qa_step] if s is not None]
    return Workflow(
        name=name or cfg.default_workflow_name,
        description=cfg.default_workflow_description,
        project_id=project_id,
        is_default=True,
        entry_step_id=steps[0].id if steps else "",
        steps=steps,
    )
