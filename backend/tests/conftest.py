"""Shared fixtures for the workflow engine tests."""

from typing import List

import pytest

from agenthub.agents.models import AgentRecord
from agenthub.config import WorkflowConfig, reset_workflow_config
from agenthub.workflow.workflow_model import AgentStep, Workflow


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_workflow_config()
    yield
    reset_workflow_config()


@pytest.fixture
def config(tmp_path) -> WorkflowConfig:
    return WorkflowConfig(storage_dir=str(tmp_path / "workflows"))


@pytest.fixture
def agents() -> List[AgentRecord]:
    return [
        AgentRecord(id="agent-tl", name="Tech Lead", role="tech_lead"),
        AgentRecord(id="agent-fe", name="Frontend Dev", role="frontend_dev"),
        AgentRecord(id="agent-be", name="Backend Dev", role="backend_dev"),
        AgentRecord(id="agent-qa", name="QA Engineer", role="qa"),
    ]


def make_step(step_id: str, *targets: str, labels=None, agent_id: str = "agent-tl") -> AgentStep:
    return AgentStep(
        id=step_id,
        label=step_id,
        agent_id=agent_id,
        next_steps=list(targets),
        next_step_labels=list(labels or []),
    )


@pytest.fixture
def tl_dev_qa() -> Workflow:
    """TL(entry) -assign-> Dev -done-> QA -rejected-> Dev."""
    return Workflow(
        name="Delivery",
        entry_step_id="TL",
        steps=[
            make_step("TL", "Dev", labels=["assign"], agent_id="agent-tl"),
            make_step("Dev", "QA", labels=["done"], agent_id="agent-be"),
            make_step("QA", "Dev", labels=["rejected"], agent_id="agent-qa"),
        ],
    )
