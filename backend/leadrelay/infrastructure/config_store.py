"""Config Store — key-value settings edited from the admin panel at runtime.

Invariants:
    - get() returns None for an absent key, never raises for absence
    - delete() of an absent key is a no-op

Design Decisions:
    - Protocol only: the production store is an external hosted DB, so just its
      get/set/delete surface is modeled here
    - InMemoryConfigStore is the in-process default; state lost on restart
"""

from typing import Protocol


class ConfigStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class InMemoryConfigStore:
    """Key-value config store held in process memory."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)
