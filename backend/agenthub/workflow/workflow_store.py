"""
Workflow Store: JSON-file persistence for workflow snapshots.

Stores each workflow as an individual JSON file under a configurable
directory. A saved snapshot loads back with identical graph behavior.
"""

from __future__ import annotations

import json
from logging import getLogger
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from agenthub.config import get_workflow_config
from agenthub.workflow.workflow_model import Workflow

logger = getLogger(__name__)


class WorkflowStore:
    """Persist and load Workflow objects as JSON files."""

    def __init__(self, storage_dir: Optional[Path] = None) -> None:
        self._dir = Path(storage_dir) if storage_dir else get_workflow_config().get_storage_dir()
        self._dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"WorkflowStore initialized at {self._dir}")

    # ── CRUD ──

    def save(self, workflow: Workflow) -> Workflow:
        """Save (create or update) a workflow.

        The stored copy gets a fresh ``updated_at`` and is returned; the
        caller's snapshot is left as it was.
        """
        saved = workflow.model_copy(deep=True)
        saved.touch()
        path = self._path_for(saved.id)
        path.write_text(
            saved.model_dump_json(indent=2),
            encoding="utf-8",
        )
        logger.info(f"Workflow saved: {saved.name} ({saved.id})")
        return saved

    def load(self, workflow_id: str) -> Optional[Workflow]:
        """Load a single workflow by ID."""
        path = self._path_for(workflow_id)
        if not path.exists():
            return None
        try:
            return Workflow.model_validate_json(path.read_text(encoding="utf-8"))
        except (ValidationError, ValueError) as e:
            logger.error(f"Failed to load workflow {workflow_id}: {e}")
            return None

    def delete(self, workflow_id: str) -> bool:
        """Delete a workflow."""
        path = self._path_for(workflow_id)
        if path.exists():
            path.unlink()
            logger.info(f"Workflow deleted: {workflow_id}")
            return True
        return False

    def list_all(self) -> List[Workflow]:
        """List all saved workflows."""
        workflows: List[Workflow] = []
        for path in sorted(self._dir.glob("*.json")):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                workflows.append(Workflow.model_validate(data))
            except (ValidationError, ValueError) as e:
                logger.warning(f"Skipping malformed workflow file {path.name}: {e}")
        return workflows

    def list_for_project(self, project_id: str) -> List[Workflow]:
        """List the workflows belonging to one project."""
        return [w for w in self.list_all() if w.project_id == project_id]

    def get_default(self, project_id: str) -> Optional[Workflow]:
        """The project's default workflow, else its first one."""
        workflows = self.list_for_project(project_id)
        for w in workflows:
            if w.is_default:
                return w
        return workflows[0] if workflows else None

    def set_default(self, workflow_id: str) -> Optional[Workflow]:
        """Mark a workflow as its project's default, clearing the others."""
        target = self.load(workflow_id)
        if target is None:
            return None
        for w in self.list_for_project(target.project_id):
            if w.id != workflow_id and w.is_default:
                w.is_default = False
                self.save(w)
        target.is_default = True
        return self.save(target)

    def exists(self, workflow_id: str) -> bool:
        return self._path_for(workflow_id).exists()

    # ── Internals ──

    def _path_for(self, workflow_id: str) -> Path:
        # Sanitize ID for filesystem
        safe_id = "".join(c for c in workflow_id if c.isalnum() or c in "-_")
        return self._dir / f"{safe_id}.json"


# ── Singleton ──

_store_instance: Optional[WorkflowStore] = None


def get_workflow_store() -> WorkflowStore:
    """Return the global WorkflowStore singleton."""
    global _store_instance
    if _store_instance is None:
        _store_instance = WorkflowStore()
    return _store_instance
