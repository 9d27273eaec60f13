"""
Agent registry models

The workflow engine never owns agents. It receives an ordered list of
agent records from the external agent store and only reads their ids,
names and roles.
"""
from enum import Enum
from typing import Dict, Iterable, Optional, Set, Union

from pydantic import BaseModel, Field


class AgentRole(str, Enum):
    """Known agent roles."""
    ARCHITECT = "architect"
    TECH_LEAD = "tech_lead"
    FRONTEND_DEV = "frontend_dev"
    BACKEND_DEV = "backend_dev"
    QA = "qa"
    DOC_WRITER = "doc_writer"
    RECEPTIONIST = "receptionist"
    CUSTOM = "custom"


ROLE_LABELS: Dict[str, str] = {
    AgentRole.ARCHITECT.value: "Architect",
    AgentRole.TECH_LEAD.value: "Tech Lead",
    AgentRole.FRONTEND_DEV.value: "Frontend Dev",
    AgentRole.BACKEND_DEV.value: "Backend Dev",
    AgentRole.QA.value: "QA Engineer",
    AgentRole.DOC_WRITER.value: "Doc Writer",
    AgentRole.RECEPTIONIST.value: "Team Lead",
    AgentRole.CUSTOM.value: "Custom",
}


def role_label(role: Union[AgentRole, str]) -> str:
    """Human-readable label for a role, falling back to the raw value."""
    value = role.value if isinstance(role, AgentRole) else role
    return ROLE_LABELS.get(value, value)


class AgentRecord(BaseModel):
    """
    A single entry of the external agent registry.

    ``role`` is kept as a plain string so registries carrying roles this
    package does not know about still load.
    """
    id: str = Field(..., description="Agent ID")
    name: str = Field(default="", description="Display name")
    role: str = Field(default=AgentRole.CUSTOM.value, description="Agent role")


def agent_ids(agents: Optional[Iterable[AgentRecord]]) -> Set[str]:
    """Collect the ids of a registry (``None`` means an empty registry)."""
    return {a.id for a in agents or ()}


def first_agent_with_role(
    agents: Iterable[AgentRecord],
    role: Union[AgentRole, str],
) -> Optional[AgentRecord]:
    """Return the first agent of ``role`` in registry order."""
    value = role.value if isinstance(role, AgentRole) else role
    for agent in agents:
        if agent.role == value:
            return agent
    return None
