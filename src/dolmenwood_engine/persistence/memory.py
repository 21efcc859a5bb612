from __future__ import annotations

import copy

from .interfaces import Document


class MemoryRepository:
    """Dict-backed repository. Stores and hands out copies, never shared references."""

    def __init__(self, data: dict[str, Document] | None = None):
        self._data: dict[str, Document] = copy.deepcopy(data) if data else {}

    async def get(self, id: str) -> Document | None:
        value = self._data.get(id)
        return copy.deepcopy(value) if value is not None else None

    async def upsert(self, id: str, value: Document) -> None:
        self._data[id] = copy.deepcopy(value)

    async def delete(self, id: str) -> None:
        self._data.pop(id, None)

    async def list(self) -> list[Document]:
        return [copy.deepcopy(value) for value in self._data.values()]


class MemoryRepositoryFactory:
    def __init__(self):
        self.players = MemoryRepository()
        self.player_characters = MemoryRepository()
        self.player_character_stat_rolls = MemoryRepository()
