"""Application lifecycle events."""

from foodies.core.events.lifespan import lifespan


__all__ = ["lifespan"]
