"""
Agent registry records consumed by the workflow engine.
"""
from agenthub.agents.models import AgentRecord, AgentRole, ROLE_LABELS, role_label

__all__ = ['AgentRecord', 'AgentRole', 'ROLE_LABELS', 'role_label']
