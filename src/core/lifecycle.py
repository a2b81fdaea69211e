"""Lifecycle management for long-lived components.

Provides a centralized manager for startup and shutdown of process-wide
components (the NLP annotator, etc.).

Example:
    >>> from src.core.lifecycle import get_lifecycle_manager
    >>> from src.core.nlp import get_annotator
    >>>
    >>> lm = get_lifecycle_manager()
    >>> lm.register("nlp", get_annotator())
    >>> await lm.startup()
    >>> # ... bot runs ...
    >>> await lm.shutdown()
"""

import asyncio
import logging
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class LifecycleComponent(Protocol):
    """Protocol for components with lifecycle management."""

    def start(self) -> None:
        """Acquire resources (may block)."""
        ...

    def shutdown(self) -> None:
        """Release resources."""
        ...


class LifecycleManager:
    """Manages startup and shutdown of registered components."""

    def __init__(self) -> None:
        self._components: list[tuple[str, Any]] = []
        self._started = False

    def register(self, name: str, component: Any) -> None:
        """Register a component implementing start() and shutdown()."""
        self._components.append((name, component))
        logger.debug("Registered lifecycle component: %s", name)

    async def startup(self) -> None:
        """Start all registered components in order.

        start() may block (model loading), so it runs in a worker thread
        to keep the event loop responsive. Skips if already started.
        """
        if self._started:
            logger.debug("Lifecycle manager already started")
            return

        for name, component in self._components:
            logger.info("Starting %s", name)
            await asyncio.to_thread(component.start)

        self._started = True
        logger.info(
            "All lifecycle components started (%d total)", len(self._components)
        )

    async def shutdown(self) -> None:
        """Shutdown all registered components in reverse order."""
        if not self._started:
            logger.debug("Lifecycle manager not started, skipping shutdown")
            return

        for name, component in reversed(self._components):
            logger.info("Stopping %s", name)
            try:
                component.shutdown()
            except Exception as e:
                logger.error("Error shutting down %s: %s", name, e)

        self._started = False
        logger.info("All lifecycle components stopped")

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def component_count(self) -> int:
        return len(self._components)


# Singleton instance
_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    """Get the global lifecycle manager singleton.

    Returns:
        The global LifecycleManager instance.
    """
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


def reset_lifecycle_manager() -> None:
    """Reset the global lifecycle manager (for testing)."""
    global _lifecycle_manager
    _lifecycle_manager = None
