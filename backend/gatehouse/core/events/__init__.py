"""Domain event dispatch."""

from gatehouse.core.events.dispatcher import EventDispatcher, EventHandler

__all__ = ["EventDispatcher", "EventHandler"]
