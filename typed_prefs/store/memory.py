from __future__ import annotations

from .base import MappingStore


class MemoryStore(MappingStore):
    """Preference store that lives only as long as the process.

    Useful for tests and for the ``memory`` backend; nothing touches disk.
    """

    def __init__(self, name: str = "memory") -> None:
        super().__init__(name)
