"""Agent-facing surface: messaging and tools."""

from dockhand.agent.messaging import AgentMessenger, CollectingMessenger, LoguruMessenger

__all__ = ["AgentMessenger", "CollectingMessenger", "LoguruMessenger"]
