"""
Workflow Data Models: steps, edges, and the workflow aggregate.

A workflow is a general directed graph of hand-off steps. Edges live on
their source step as ``next_steps`` (ordered target ids) with
index-aligned ``next_step_labels``. Cycles and self-loops are ordinary
data here; every traversal in this package guards with a visited set.

Steps are a tagged union over ``kind``: every kind shares the
edge-bearing base and only ``agent`` / ``condition`` steps add fields.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, model_validator

from agenthub.workflow.conditions import ConditionOperator, evaluate_condition

# Agent id meaning "work enters from the task-creation surface".
TASK_SOURCE_AGENT_ID = "__task_source__"


class StepKind(str, Enum):
    """Step variants."""
    AGENT = "agent"
    CONDITION = "condition"
    PARALLEL = "parallel"
    MERGE = "merge"
    SOURCE = "source"


def generate_step_id(prefix: str = "step") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class StepEdge(BaseModel):
    """A directed edge read off a step's ``next_steps``.

    ``index`` is the position in the source's ``next_steps``.
    """

    source: str
    target: str
    label: str = ""
    index: int = 0


class StepBase(BaseModel):
    """Fields shared by every step kind."""

    id: str = Field(default_factory=generate_step_id)
    label: str = ""
    next_steps: List[str] = Field(default_factory=list)
    next_step_labels: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _drop_excess_labels(self) -> "StepBase":
        if len(self.next_step_labels) > len(self.next_steps):
            self.next_step_labels = self.next_step_labels[: len(self.next_steps)]
        return self

    @property
    def agent_reference(self) -> str:
        """Placeholder reference for steps not bound to an agent."""
        return f"_{self.kind}:{self.id}"

    def label_for(self, index: int) -> str:
        """Edge label at ``index``; missing trailing labels are ``""``."""
        if 0 <= index < len(self.next_step_labels):
            return self.next_step_labels[index]
        return ""

    def aligned_labels(self) -> List[str]:
        """Labels padded to the length of ``next_steps``."""
        return [self.label_for(i) for i in range(len(self.next_steps))]


class AgentStep(StepBase):
    """A hand-off to an agent (or to the task-creation surface)."""

    kind: Literal["agent"] = "agent"
    agent_id: str = ""

    @property
    def agent_reference(self) -> str:
        return self.agent_id

    @property
    def is_task_source(self) -> bool:
        return self.agent_id == TASK_SOURCE_AGENT_ID


class ConditionStep(StepBase):
    """Branch on a field of the task result.

    Outgoing edges labelled ``"true"`` / ``"false"`` are the branches.
    """

    kind: Literal["condition"] = "condition"
    condition_field: Optional[str] = None
    condition_operator: Optional[ConditionOperator] = None
    condition_value: Optional[str] = None

    def evaluate(self, task_result: Optional[Mapping[str, Any]]) -> bool:
        return evaluate_condition(
            self.condition_field,
            self.condition_operator,
            self.condition_value,
            task_result,
        )


class ParallelStep(StepBase):
    kind: Literal["parallel"] = "parallel"


class MergeStep(StepBase):
    kind: Literal["merge"] = "merge"


class SourceStep(StepBase):
    kind: Literal["source"] = "source"


Step = Annotated[
    Union[AgentStep, ConditionStep, ParallelStep, MergeStep, SourceStep],
    Field(discriminator="kind"),
]

STEP_TYPES: Dict[str, type] = {
    StepKind.AGENT.value: AgentStep,
    StepKind.CONDITION.value: ConditionStep,
    StepKind.PARALLEL.value: ParallelStep,
    StepKind.MERGE.value: MergeStep,
    StepKind.SOURCE.value: SourceStep,
}

# Attributes no update may overwrite.
STRUCTURAL_FIELDS = frozenset({"id", "kind", "next_steps", "next_step_labels"})


class Workflow(BaseModel):
    """A complete hand-off graph.

    ``entry_step_id`` may be empty or name a step that no longer exists;
    that state is reported by validation, never raised.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = "Untitled Workflow"
    description: str = ""
    project_id: Optional[str] = None
    is_default: bool = False
    entry_step_id: str = ""
    steps: List[Step] = Field(default_factory=list)
    created_at: str = Field(default_factory=_now)
    updated_at: str = Field(default_factory=_now)

    @model_validator(mode="after")
    def _check_unique_step_ids(self) -> "Workflow":
        seen = set()
        for step in self.steps:
            if step.id in seen:
                raise ValueError(f"Duplicate step id: {step.id}")
            seen.add(step.id)
        return self

    def touch(self) -> None:
        """Update the ``updated_at`` timestamp."""
        self.updated_at = _now()

    # ── Structural queries ──

    def get_step(self, step_id: str) -> Optional[StepBase]:
        """Find a step by ID."""
        for s in self.steps:
            if s.id == step_id:
                return s
        return None

    def has_step(self, step_id: str) -> bool:
        return any(s.id == step_id for s in self.steps)

    def steps_by_id(self) -> Dict[str, StepBase]:
        return {s.id: s for s in self.steps}

    def step_ids(self) -> List[str]:
        return [s.id for s in self.steps]

    def incoming_edge_count(self, step_id: str) -> int:
        """Number of edges (from any step, self included) targeting ``step_id``."""
        return sum(s.next_steps.count(step_id) for s in self.steps)

    def edges_of(self, step: StepBase) -> List[StepEdge]:
        """Outgoing edges of a step, in ``next_steps`` order."""
        return [
            StepEdge(source=step.id, target=target, label=step.label_for(i), index=i)
            for i, target in enumerate(step.next_steps)
        ]

    def edges(self) -> List[StepEdge]:
        """All edges of the workflow, grouped by source in step order."""
        result: List[StepEdge] = []
        for s in self.steps:
            result.extend(self.edges_of(s))
        return result

    def has_valid_entry(self) -> bool:
        return bool(self.entry_step_id) and self.has_step(self.entry_step_id)
