"""
Workflow Engine: hand-off graph between coding agents.

Provides the data model and algorithms the workflow editor uses to
author, validate and preview a hand-off graph before it is handed to
whatever executes it.

Architecture:
    workflow_model      Steps (tagged by kind), edges and the Workflow aggregate
    workflow_editor     Copy-on-write editing session with overlays
    reachability        Root finding and orphan detection
    layout              Layer assignment and forward/back edge classification
    validation          Structural checks reported as messages
    simulation          Execution-order preview from the entry step
    conditions          Condition operators for condition steps
    templates           Default workflow seeded from the agent registry
    workflow_store      JSON-file persistence
    workflow_inspector  Rendering report for one snapshot
"""

from agenthub.workflow.conditions import ConditionOperator, evaluate_condition
from agenthub.workflow.layout import (
    EdgeDirection,
    LayeredEdge,
    assign_layers,
    back_edges,
    classify_edges,
    layer_rows,
)
from agenthub.workflow.reachability import find_orphans, find_roots, reachable_from
from agenthub.workflow.simulation import simulate, simulation_waves
from agenthub.workflow.templates import create_default_workflow
from agenthub.workflow.validation import validate_workflow
from agenthub.workflow.workflow_editor import WorkflowEditor
from agenthub.workflow.workflow_inspector import inspect_workflow
from agenthub.workflow.workflow_model import (
    TASK_SOURCE_AGENT_ID,
    AgentStep,
    ConditionStep,
    MergeStep,
    ParallelStep,
    SourceStep,
    Step,
    StepEdge,
    StepKind,
    Workflow,
)
from agenthub.workflow.workflow_store import WorkflowStore, get_workflow_store

__all__ = [
    "ConditionOperator",
    "evaluate_condition",
    "EdgeDirection",
    "LayeredEdge",
    "assign_layers",
    "back_edges",
    "classify_edges",
    "layer_rows",
    "find_orphans",
    "find_roots",
    "reachable_from",
    "simulate",
    "simulation_waves",
    "create_default_workflow",
    "validate_workflow",
    "WorkflowEditor",
    "inspect_workflow",
    "TASK_SOURCE_AGENT_ID",
    "AgentStep",
    "ConditionStep",
    "MergeStep",
    "ParallelStep",
    "SourceStep",
    "Step",
    "StepEdge",
    "StepKind",
    "Workflow",
    "WorkflowStore",
    "get_workflow_store",
]
