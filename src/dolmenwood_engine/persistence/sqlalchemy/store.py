from __future__ import annotations

import copy
import logging
from typing import Callable

from sqlalchemy.exc import IntegrityError

from ...core.normalize import dump_json, load_json_dict
from ..interfaces import Document, UnitOfWork
from .db import build_engine, build_session_factory, create_schema
from .uow import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)

PLAYERS = "players"
PLAYER_CHARACTERS = "player_characters"
PLAYER_CHARACTER_STAT_ROLLS = "player_character_stat_rolls"


class SQLAlchemyRepository:
    """Asynchronous repository over one collection of the ``dwe_documents`` table.

    Every call runs in its own unit of work, so each write is all-or-nothing.
    Driver and JSON errors propagate to the caller unchanged.
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork], collection: str):
        self._uow_factory = uow_factory
        self.collection = collection

    async def get(self, id: str) -> Document | None:
        versioned = await self.get_versioned(id)
        return versioned[0] if versioned is not None else None

    async def get_versioned(self, id: str) -> tuple[Document, int] | None:
        with self._uow_factory() as uow:
            row = uow.documents.get(self.collection, id)
            if row is None:
                return None
            return load_json_dict(row.body_json), row.row_version

    async def upsert(self, id: str, value: Document) -> None:
        with self._uow_factory() as uow:
            uow.documents.put(self.collection, id, dump_json(value))
            uow.commit()

    async def insert_if_absent(self, id: str, value: Document) -> Document:
        """Create ``id`` unless it already exists; return whichever document is stored."""
        try:
            with self._uow_factory() as uow:
                uow.documents.insert(self.collection, id, dump_json(value))
                uow.commit()
            return copy.deepcopy(value)
        except IntegrityError:
            existing = await self.get(id)
            if existing is None:
                raise
            logger.info("Lost create race for %s/%s; keeping stored document", self.collection, id)
            return existing

    async def compare_and_swap(self, id: str, value: Document, expected_row_version: int) -> bool:
        with self._uow_factory() as uow:
            ok = uow.documents.cas_put(self.collection, id, dump_json(value), expected_row_version)
            if not ok:
                uow.rollback()
                return False
            uow.commit()
            return True

    async def delete(self, id: str) -> None:
        with self._uow_factory() as uow:
            uow.documents.delete(self.collection, id)
            uow.commit()

    async def list(self) -> list[Document]:
        with self._uow_factory() as uow:
            return [load_json_dict(row.body_json) for row in uow.documents.list_by_collection(self.collection)]


class SQLAlchemyRepositoryFactory:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self._uow_factory = uow_factory
        self.players = SQLAlchemyRepository(uow_factory, PLAYERS)
        self.player_characters = SQLAlchemyRepository(uow_factory, PLAYER_CHARACTERS)
        self.player_character_stat_rolls = SQLAlchemyRepository(uow_factory, PLAYER_CHARACTER_STAT_ROLLS)

    @classmethod
    def from_url(cls, url: str, *, create: bool = True) -> "SQLAlchemyRepositoryFactory":
        engine = build_engine(url)
        if create:
            create_schema(engine)
        session_factory = build_session_factory(engine)

        def _factory() -> SQLAlchemyUnitOfWork:
            return SQLAlchemyUnitOfWork(session_factory)

        return cls(_factory)
