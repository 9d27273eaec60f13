"""
AgentHub workflow graph engine.

Author, validate and preview the hand-off graph that routes work
between coding agents (Tech Lead → Developer → QA, with rejection loops).
"""

__version__ = "0.1.0"
