"""Tests for the rendering report."""

from agenthub.workflow.workflow_inspector import MISSING_AGENT_LABEL, TASK_SOURCE_LABEL, inspect_workflow
from agenthub.workflow.workflow_model import (
    TASK_SOURCE_AGENT_ID,
    AgentStep,
    ConditionStep,
    Workflow,
)

from conftest import make_step


class TestInspectWorkflow:

    def test_scenario_report(self, tl_dev_qa, agents):
        report = inspect_workflow(tl_dev_qa, agents)

        assert report["layers"] == {"TL": 0, "Dev": 1, "QA": 2}
        assert report["rows"] == [["TL"], ["Dev"], ["QA"]]
        assert report["back_edges"] == [["QA", "Dev"]]
        assert report["orphans"] == []
        assert {"source": "TL", "target": "Dev", "label": "assign", "direction": "forward"} \
            in report["edges"]
        assert report["validation"] == {"valid": True, "errors": []}
        assert report["summary"]["total_steps"] == 3
        assert report["summary"]["total_edges"] == 3
        assert report["summary"]["depth"] == 3

        lead = report["steps"][0]
        assert lead["is_entry"]
        assert lead["agent"]["name"] == "Tech Lead"
        assert lead["targets"] == [{"target_id": "Dev", "label": "assign"}]

    def test_orphans_and_placeholders(self, agents):
        wf = Workflow(entry_step_id="S", steps=[
            AgentStep(id="S", agent_id=TASK_SOURCE_AGENT_ID, next_steps=["Gone"]),
            AgentStep(id="Gone", label="Old", agent_id="deleted-agent"),
            ConditionStep(id="C", condition_field="f", condition_operator="neq",
                          condition_value="v", next_steps=["C"]),
        ])
        report = inspect_workflow(wf, agents)
        details = {d["id"]: d for d in report["steps"]}

        assert report["orphans"] == ["C"]
        assert details["C"]["layer"] is None
        assert details["C"]["agent_reference"] == "_condition:C"
        assert details["C"]["condition"]["operator"] == "neq"
        assert details["S"]["agent"]["name"] == TASK_SOURCE_LABEL
        assert details["Gone"]["agent"] == {
            "id": "deleted-agent", "name": MISSING_AGENT_LABEL, "role": None, "missing": True,
        }
        assert report["validation"]["errors"] == [
            "1 disconnected steps",
            "step Old has no valid agent",
        ]
        assert not report["summary"]["is_valid"]

    def test_task_source_named_without_registry(self):
        wf = Workflow(entry_step_id="S", steps=[
            AgentStep(id="S", agent_id=TASK_SOURCE_AGENT_ID),
        ])
        report = inspect_workflow(wf)
        agent = report["steps"][0]["agent"]
        assert agent["name"] == TASK_SOURCE_LABEL
        assert not agent["missing"]
        assert report["validation"]["valid"]

    def test_empty_workflow(self):
        report = inspect_workflow(Workflow())
        assert report["layers"] == {}
        assert report["rows"] == []
        assert report["validation"]["errors"] == ["workflow is empty"]

    def test_agent_without_name_uses_role_label(self):
        from agenthub.agents.models import AgentRecord

        wf = Workflow(entry_step_id="A", steps=[make_step("A", agent_id="q")])
        report = inspect_workflow(wf, [AgentRecord(id="q", role="qa")])
        assert report["steps"][0]["agent"]["name"] == "QA Engineer"
