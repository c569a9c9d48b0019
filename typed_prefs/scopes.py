from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import APP_SETTINGS_SCOPE, USER_SCOPE, Settings
from .preferences import Preferences
from .serializer import PydanticSerializer, Serializer
from .store.base import MappingStore
from .store.file import FileStore
from .store.memory import MemoryStore

__all__ = ["APP_SETTINGS_SCOPE", "USER_SCOPE", "Scopes", "open_store", "provide_scopes"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scopes:
    """The two preference scopes an application works with."""

    user: Preferences
    app_settings: Preferences


def open_store(name: str, settings: Settings) -> MappingStore:
    """Build the configured backend for the scope called ``name``."""
    if settings.backend == "memory":
        return MemoryStore(name)
    return FileStore(name, settings.prefs_dir)


def provide_scopes(settings: Settings, serializer: Serializer | None = None) -> Scopes:
    serializer = serializer or PydanticSerializer()
    logger.info(
        "open_scopes",
        extra={
            "event_type": "open_scopes",
            "backend": settings.backend,
            "prefs_dir": str(settings.prefs_dir),
        },
    )
    return Scopes(
        user=Preferences(open_store(settings.user_scope, settings), serializer),
        app_settings=Preferences(open_store(settings.app_settings_scope, settings), serializer),
    )
