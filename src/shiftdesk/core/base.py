"""Base service with common dependency wiring and lifecycle patterns."""

from __future__ import annotations

from typing import Any

from shiftdesk.core.config import AppSettings
from shiftdesk.core.logging import get_logger


class BaseService:
    """Common base for ShiftDesk services.

    Settings are injected at construction time; each subclass gets a
    structlog logger named after its module.
    """

    def __init__(self, *, settings: AppSettings) -> None:
        self._settings = settings
        self._log = get_logger(self.__class__.__module__)

    async def health_check(self) -> dict[str, Any]:
        """Return service health status."""
        return {
            "service": self.__class__.__name__,
            "status": "healthy",
            "environment": self._settings.environment,
        }
