"""Tests for structural validation."""

from agenthub.workflow.validation import validate_workflow
from agenthub.workflow.workflow_model import (
    TASK_SOURCE_AGENT_ID,
    AgentStep,
    MergeStep,
    Workflow,
)

from conftest import make_step


class TestValidateWorkflow:

    def test_empty_workflow_reports_one_message(self, agents):
        assert validate_workflow(Workflow(), agents) == ["workflow is empty"]

    def test_single_valid_step_clears_messages(self, agents):
        wf = Workflow(entry_step_id="A", steps=[make_step("A", agent_id="agent-qa")])
        assert validate_workflow(wf, agents) == []

    def test_missing_entry(self, agents):
        wf = Workflow(steps=[make_step("A")])
        assert validate_workflow(wf, agents) == ["no entry point defined"]

    def test_dangling_entry(self, agents):
        wf = Workflow(entry_step_id="gone", steps=[make_step("A")])
        assert validate_workflow(wf, agents) == ["no entry point defined"]

    def test_disconnected_steps_counted(self, agents):
        wf = Workflow(entry_step_id="A", steps=[
            make_step("A"),
            make_step("X", "Y"),
            make_step("Y", "X"),
        ])
        assert validate_workflow(wf, agents) == ["2 disconnected steps"]

    def test_unknown_agent_per_step(self, agents):
        wf = Workflow(entry_step_id="A", steps=[
            make_step("A", "B", "C"),
            AgentStep(id="B", label="Deploy", agent_id="deleted"),
            AgentStep(id="C", label="Ship", agent_id=""),
        ])
        assert validate_workflow(wf, agents) == [
            "step Deploy has no valid agent",
            "step Ship has no valid agent",
        ]

    def test_task_source_and_control_steps_need_no_agent(self, agents):
        wf = Workflow(entry_step_id="S", steps=[
            AgentStep(id="S", label="Intake", agent_id=TASK_SOURCE_AGENT_ID, next_steps=["M"]),
            MergeStep(id="M"),
        ])
        assert validate_workflow(wf, agents) == []

    def test_task_source_valid_with_empty_registry(self):
        step = AgentStep(id="S", label="Intake", agent_id=TASK_SOURCE_AGENT_ID)
        wf = Workflow(entry_step_id="S", steps=[step])
        assert step.is_task_source
        assert validate_workflow(wf, []) == []

    def test_messages_in_check_order(self):
        wf = Workflow(entry_step_id="gone", steps=[
            make_step("A", "B"),
            make_step("B"),
            make_step("X", "X"),
        ])
        messages = validate_workflow(wf, [])
        assert messages == [
            "no entry point defined",
            "1 disconnected steps",
            "step A has no valid agent",
            "step B has no valid agent",
            "step X has no valid agent",
        ]

    def test_scenario_is_valid(self, tl_dev_qa, agents):
        assert validate_workflow(tl_dev_qa, agents) == []
