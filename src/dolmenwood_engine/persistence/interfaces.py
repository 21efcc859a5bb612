from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

Document = dict[str, Any]


class Repository(Protocol):
    """Minimal asynchronous document store keyed by string id."""

    async def get(self, id: str) -> Document | None: ...
    async def upsert(self, id: str, value: Document) -> None: ...
    async def delete(self, id: str) -> None: ...
    async def list(self) -> list[Document]: ...


@runtime_checkable
class SupportsInsertIfAbsent(Protocol):
    async def insert_if_absent(self, id: str, value: Document) -> Document: ...


class RepositoryFactory(Protocol):
    players: Repository
    player_characters: Repository
    player_character_stat_rolls: Repository


class DocumentRepo(Protocol):
    def get(self, collection: str, id: str): ...
    def put(self, collection: str, id: str, body_json: str): ...
    def insert(self, collection: str, id: str, body_json: str): ...
    def cas_put(self, collection: str, id: str, body_json: str, expected_row_version: int) -> bool: ...
    def delete(self, collection: str, id: str) -> int: ...
    def list_by_collection(self, collection: str): ...


class UnitOfWork(Protocol):
    documents: DocumentRepo

    def commit(self) -> None: ...
    def rollback(self) -> None: ...

    def __enter__(self) -> "UnitOfWork": ...
    def __exit__(self, exc_type, exc, tb) -> None: ...
