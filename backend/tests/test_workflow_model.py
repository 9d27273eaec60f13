"""Tests for the workflow data model and its structural queries."""

import pytest
from pydantic import ValidationError

from agenthub.workflow.conditions import ConditionOperator
from agenthub.workflow.workflow_model import (
    TASK_SOURCE_AGENT_ID,
    AgentStep,
    ConditionStep,
    MergeStep,
    ParallelStep,
    SourceStep,
    Workflow,
)

from conftest import make_step


class TestStepVariants:
    """Steps are a tagged union over ``kind``."""

    def test_kind_selects_variant(self):
        wf = Workflow.model_validate({
            "steps": [
                {"id": "a", "kind": "agent", "agent_id": "x"},
                {"id": "c", "kind": "condition", "condition_field": "status",
                 "condition_operator": "eq", "condition_value": "ok"},
                {"id": "p", "kind": "parallel"},
                {"id": "m", "kind": "merge"},
                {"id": "s", "kind": "source"},
            ],
        })
        kinds = [type(s) for s in wf.steps]
        assert kinds == [AgentStep, ConditionStep, ParallelStep, MergeStep, SourceStep]
        assert wf.steps[1].condition_operator is ConditionOperator.EQ

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            Workflow.model_validate({"steps": [{"id": "x", "kind": "loop"}]})

    def test_agent_reference(self):
        assert AgentStep(id="a", agent_id="agent-1").agent_reference == "agent-1"
        assert MergeStep(id="m1").agent_reference == "_merge:m1"
        assert ConditionStep(id="c1").agent_reference == "_condition:c1"

    def test_task_source_sentinel(self):
        assert AgentStep(id="a", agent_id=TASK_SOURCE_AGENT_ID).is_task_source
        assert not AgentStep(id="b", agent_id="agent-1").is_task_source

    def test_condition_evaluates_task_result(self):
        step = ConditionStep(
            id="c",
            condition_field="complexity",
            condition_operator="gt",
            condition_value="5",
        )
        assert step.evaluate({"complexity": 8})
        assert not step.evaluate({"complexity": 2})
        assert not step.evaluate(None)


class TestEdgeLabels:

    def test_missing_trailing_labels_default_to_empty(self):
        step = make_step("a", "b", "c", labels=["go"])
        assert step.label_for(0) == "go"
        assert step.label_for(1) == ""
        assert step.aligned_labels() == ["go", ""]

    def test_excess_labels_dropped(self):
        step = make_step("a", "b", labels=["x", "y", "z"])
        assert step.next_step_labels == ["x"]


class TestWorkflow:

    def test_duplicate_step_ids_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Workflow(steps=[make_step("a"), make_step("a")])
        assert "Duplicate step id" in str(exc_info.value)

    def test_structural_queries(self, tl_dev_qa):
        assert tl_dev_qa.incoming_edge_count("Dev") == 2
        assert tl_dev_qa.incoming_edge_count("TL") == 0
        assert set(tl_dev_qa.steps_by_id()) == {"TL", "Dev", "QA"}

        edges = tl_dev_qa.edges_of(tl_dev_qa.get_step("QA"))
        assert [(e.source, e.target, e.label) for e in edges] == [("QA", "Dev", "rejected")]
        assert len(tl_dev_qa.edges()) == 3

    def test_self_loop_counts_as_incoming(self):
        wf = Workflow(steps=[make_step("a", "a")])
        assert wf.incoming_edge_count("a") == 1

    def test_entry_validity(self, tl_dev_qa):
        assert tl_dev_qa.has_valid_entry()
        assert not Workflow(entry_step_id="gone", steps=[make_step("a")]).has_valid_entry()
        assert not Workflow().has_valid_entry()

    def test_json_round_trip_keeps_graph(self, tl_dev_qa):
        restored = Workflow.model_validate_json(tl_dev_qa.model_dump_json())
        assert restored == tl_dev_qa
        assert isinstance(restored.steps[0], AgentStep)
