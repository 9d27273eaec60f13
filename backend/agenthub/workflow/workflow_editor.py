"""
Workflow Editor: the mutation surface behind the visual editor.

Holds the current ``Workflow`` snapshot. Every edit deep-copies the
snapshot, changes the copy and makes it current; snapshots handed out
earlier are never touched, so any reader holding one keeps a
consistent graph.

Edits are total: an unknown step id is a silent no-op (logged at
DEBUG) and returns the current snapshot unchanged.

Validation and simulation results are transient overlays. They are
filled on demand and cleared by the next edit.

Usage::

    editor = WorkflowEditor(agents=agents)
    dev = editor.add_step(parent_id=editor.workflow.entry_step_id)
    editor.update_step(dev, label="Implement")
    editor.run_validation()
"""

from __future__ import annotations

from logging import getLogger
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from agenthub.agents.models import AgentRecord
from agenthub.config import WorkflowConfig, get_workflow_config
from agenthub.workflow.layout import LayeredEdge, assign_layers, back_edges, layer_rows
from agenthub.workflow.reachability import find_orphans
from agenthub.workflow.simulation import simulate
from agenthub.workflow.templates import create_default_workflow
from agenthub.workflow.validation import validate_workflow
from agenthub.workflow.workflow_model import (
    STEP_TYPES,
    STRUCTURAL_FIELDS,
    AgentStep,
    StepBase,
    StepKind,
    Workflow,
    generate_step_id,
)

logger = getLogger(__name__)

_TYPED_KINDS = (StepKind.CONDITION, StepKind.PARALLEL, StepKind.MERGE, StepKind.SOURCE)


class WorkflowEditor:
    """Copy-on-write editing session for one workflow."""

    def __init__(
        self,
        workflow: Optional[Workflow] = None,
        agents: Optional[Sequence[AgentRecord]] = None,
        config: Optional[WorkflowConfig] = None,
    ) -> None:
        self._config = config or get_workflow_config()
        self._agents: List[AgentRecord] = list(agents or [])
        if workflow is None:
            workflow = create_default_workflow(self._agents, config=self._config)
        self._workflow = workflow
        self.validation_messages: Optional[List[str]] = None
        self.simulation_order: Optional[Dict[str, int]] = None

    # ========================================================================
    # Read access
    # ========================================================================

    @property
    def workflow(self) -> Workflow:
        return self._workflow

    @property
    def agents(self) -> List[AgentRecord]:
        return list(self._agents)

    def set_agents(self, agents: Sequence[AgentRecord]) -> None:
        """Replace the agent registry; a previous validation no longer applies."""
        self._agents = list(agents)
        self.validation_messages = None

    @property
    def layers(self) -> Dict[str, int]:
        return assign_layers(self._workflow.steps, self._workflow.entry_step_id)

    @property
    def rows(self) -> List[List[str]]:
        return layer_rows(self.layers, self._workflow.steps)

    @property
    def back_edges(self) -> List[LayeredEdge]:
        return back_edges(self._workflow.steps, self._workflow.entry_step_id)

    @property
    def orphans(self) -> List[StepBase]:
        return find_orphans(self._workflow.steps, self._workflow.entry_step_id)

    # ========================================================================
    # Edits
    # ========================================================================

    def add_step(self, parent_id: Optional[str] = None) -> str:
        """Add an agent step and return its id.

        The step is bound to the first registry agent (or nothing). With
        ``parent_id`` it is appended to that step's successors; without
        one, the first step of an empty workflow becomes the entry.
        """
        draft = self._begin()
        step = AgentStep(
            id=self._new_step_id(draft),
            label=self._config.default_step_label,
            agent_id=self._agents[0].id if self._agents else "",
        )
        was_empty = not draft.steps
        draft.steps.append(step)

        if parent_id:
            parent = draft.get_step(parent_id)
            if parent is not None:
                _append_edge(parent, step.id, "")
            else:
                logger.debug(f"add_step: unknown parent '{parent_id}', step left unlinked")
        elif was_empty:
            draft.entry_step_id = step.id

        self._commit(draft)
        logger.debug(f"Step added: {step.id} (parent={parent_id})")
        return step.id

    def add_typed_step(self, kind: Union[StepKind, str]) -> str:
        """Add a control step (condition, parallel, merge, source).

        The step is not linked to any parent.

        Raises:
            ValueError: If ``kind`` is not a control-step kind.
        """
        kind = StepKind(kind)
        if kind not in _TYPED_KINDS:
            raise ValueError(f"add_typed_step does not create '{kind.value}' steps; use add_step")

        draft = self._begin()
        step = STEP_TYPES[kind.value](
            id=self._new_step_id(draft),
            label=kind.value.capitalize(),
        )
        draft.steps.append(step)
        self._commit(draft)
        logger.debug(f"Step added: {step.id} ({kind.value})")
        return step.id

    def remove_step(self, step_id: str) -> Workflow:
        """Delete a step and splice its successors onto its predecessors.

        Each predecessor loses the edge (and its label) and gains the
        removed step's successors as unlabelled edges. A successor the
        predecessor already points at is not appended again, so the splice
        never creates parallel edges and the existing edge keeps its label.
        A removed entry step hands the entry to the first remaining step.
        """
        target = self._workflow.get_step(step_id)
        if target is None:
            logger.debug(f"remove_step: unknown step '{step_id}'")
            return self._workflow

        draft = self._begin()
        draft.steps = [s for s in draft.steps if s.id != step_id]
        spliced = [t for t in target.next_steps if t != step_id]

        for step in draft.steps:
            if step_id not in step.next_steps:
                continue
            kept = [
                (t, label)
                for t, label in zip(step.next_steps, step.aligned_labels())
                if t != step_id
            ]
            next_steps = [t for t, _ in kept]
            next_labels = [label for _, label in kept]
            for t in spliced:
                if t not in next_steps:
                    next_steps.append(t)
                    next_labels.append("")
            step.next_steps = next_steps
            step.next_step_labels = next_labels

        if draft.entry_step_id == step_id:
            draft.entry_step_id = draft.steps[0].id if draft.steps else ""

        logger.debug(f"Step removed: {step_id} (spliced {len(spliced)} successor(s))")
        return self._commit(draft)

    def update_step(self, step_id: str, **fields: Any) -> Workflow:
        """Shallow-merge ``fields`` into a step.

        Only attributes the step's kind carries are applied; identity and
        edges are never changed here.
        """
        step = self._workflow.get_step(step_id)
        if step is None:
            logger.debug(f"update_step: unknown step '{step_id}'")
            return self._workflow

        allowed = set(type(step).model_fields) - STRUCTURAL_FIELDS
        applied = {k: v for k, v in fields.items() if k in allowed}
        ignored = sorted(set(fields) - set(applied))
        if ignored:
            logger.debug(f"update_step: ignoring {ignored} for {step.kind} step '{step_id}'")
        if not applied:
            return self._workflow

        draft = self._begin()
        index = draft.step_ids().index(step_id)
        current = draft.steps[index]
        draft.steps[index] = type(current).model_validate(
            {**current.model_dump(), **applied}
        )
        return self._commit(draft)

    def set_entry_step(self, step_id: str) -> Workflow:
        """Point the entry at ``step_id``; existence is checked by validation."""
        draft = self._begin()
        draft.entry_step_id = step_id
        return self._commit(draft)

    def connect_steps(self, from_id: str, to_id: str, label: str = "") -> Workflow:
        """Add ``from_id -> to_id`` unless that edge already exists."""
        source = self._workflow.get_step(from_id)
        if source is None or not self._workflow.has_step(to_id):
            logger.debug(f"connect_steps: unknown endpoint in {from_id} -> {to_id}")
            return self._workflow
        if to_id in source.next_steps:
            return self._workflow

        draft = self._begin()
        _append_edge(draft.get_step(from_id), to_id, label)
        return self._commit(draft)

    def disconnect_steps(self, from_id: str, to_id: str) -> Workflow:
        """Remove the first ``from_id -> to_id`` edge and its label."""
        source = self._workflow.get_step(from_id)
        if source is None or to_id not in source.next_steps:
            logger.debug(f"disconnect_steps: no edge {from_id} -> {to_id}")
            return self._workflow

        draft = self._begin()
        step = draft.get_step(from_id)
        index = step.next_steps.index(to_id)
        labels = step.aligned_labels()
        del step.next_steps[index]
        del labels[index]
        step.next_step_labels = labels
        return self._commit(draft)

    # ========================================================================
    # Overlays
    # ========================================================================

    def run_validation(self) -> List[str]:
        """Validate the current snapshot; drops any simulation overlay."""
        self.simulation_order = None
        self.validation_messages = validate_workflow(self._workflow, self._agents)
        return self.validation_messages

    def run_simulation(
        self,
        task_result: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, int]:
        self.simulation_order = simulate(self._workflow, task_result)
        return self.simulation_order

    def clear_overlays(self) -> None:
        self.validation_messages = None
        self.simulation_order = None

    # ── Internals ──

    def _begin(self) -> Workflow:
        return self._workflow.model_copy(deep=True)

    def _commit(self, draft: Workflow) -> Workflow:
        draft.touch()
        self._workflow = draft
        self.clear_overlays()
        return draft

    def _new_step_id(self, workflow: Workflow) -> str:
        step_id = generate_step_id(self._config.step_id_prefix)
        while workflow.has_step(step_id):
            step_id = generate_step_id(self._config.step_id_prefix)
        return step_id


def _append_edge(step: StepBase, target: str, label: str) -> None:
    labels = step.aligned_labels()
    step.next_steps.append(target)
    labels.append(label)
    step.next_step_labels = labels
