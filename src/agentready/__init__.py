"""Agent-readiness assessment: static and AI score reconciliation."""

__version__ = "0.1.0"
