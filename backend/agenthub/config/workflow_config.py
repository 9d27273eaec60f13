"""
Workflow Engine Configuration.

Controls where workflow snapshots are stored and the defaults used
when seeding workflows and creating steps.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from agenthub.config.env_utils import read_env_defaults

_DEFAULT_STORAGE_DIR = Path.home() / ".agenthub" / "workflows"


@dataclass
class WorkflowConfig:
    """Workflow editor and storage settings."""

    storage_dir: str = ""
    default_workflow_name: str = "Main Workflow"
    default_workflow_description: str = "Agent hand-off hierarchy"
    default_step_label: str = "New step"
    step_id_prefix: str = "step"

    _ENV_MAP = {
        "storage_dir": "AGENTHUB_WORKFLOW_DIR",
        "default_workflow_name": "AGENTHUB_WORKFLOW_NAME",
        "default_workflow_description": "AGENTHUB_WORKFLOW_DESCRIPTION",
        "default_step_label": "AGENTHUB_STEP_LABEL",
        "step_id_prefix": "AGENTHUB_STEP_ID_PREFIX",
    }

    @classmethod
    def get_default_instance(cls) -> "WorkflowConfig":
        defaults = read_env_defaults(cls._ENV_MAP, cls.__dataclass_fields__)
        return cls(**defaults)

    def get_storage_dir(self) -> Path:
        """Resolved storage directory (``~/.agenthub/workflows`` when unset)."""
        if self.storage_dir:
            return Path(self.storage_dir).expanduser()
        return _DEFAULT_STORAGE_DIR


# ── Singleton ──

_config_instance: Optional[WorkflowConfig] = None


def get_workflow_config() -> WorkflowConfig:
    """Return the global WorkflowConfig singleton."""
    global _config_instance
    if _config_instance is None:
        _config_instance = WorkflowConfig.get_default_instance()
    return _config_instance


def reset_workflow_config() -> None:
    """Drop the cached config so the next access re-reads the environment."""
    global _config_instance
    _config_instance = None
