"""
Configuration Module

Environment-driven settings for the workflow engine.
"""
from agenthub.config.workflow_config import (
    WorkflowConfig,
    get_workflow_config,
    reset_workflow_config,
)

__all__ = ['WorkflowConfig', 'get_workflow_config', 'reset_workflow_config']
