from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from .base import utcnow
from .models import StoredDocument


class DocumentRepo:
    def __init__(self, session: Session):
        self.session = session

    def get(self, collection: str, id: str) -> StoredDocument | None:
        return self.session.get(StoredDocument, (collection, id))

    def put(self, collection: str, id: str, body_json: str) -> StoredDocument:
        row = self.get(collection, id)
        if row is None:
            row = StoredDocument(collection=collection, id=id, body_json=body_json, row_version=1)
            self.session.add(row)
        else:
            row.body_json = body_json
            row.row_version += 1
            row.updated_at = utcnow()
        self.session.flush()
        return row

    def insert(self, collection: str, id: str, body_json: str) -> StoredDocument:
        """Insert a new document. Raises ``IntegrityError`` on flush if the id exists."""
        row = StoredDocument(collection=collection, id=id, body_json=body_json, row_version=1)
        self.session.add(row)
        self.session.flush()
        return row

    def cas_put(self, collection: str, id: str, body_json: str, expected_row_version: int) -> bool:
        stmt = (
            update(StoredDocument)
            .where(StoredDocument.collection == collection)
            .where(StoredDocument.id == id)
            .where(StoredDocument.row_version == expected_row_version)
            .values(
                body_json=body_json,
                row_version=StoredDocument.row_version + 1,
                updated_at=utcnow(),
            )
        )
        return (self.session.execute(stmt).rowcount or 0) == 1

    def delete(self, collection: str, id: str) -> int:
        stmt = (
            delete(StoredDocument)
            .where(StoredDocument.collection == collection)
            .where(StoredDocument.id == id)
        )
        return self.session.execute(stmt).rowcount or 0

    def list_by_collection(self, collection: str) -> list[StoredDocument]:
        stmt = (
            select(StoredDocument)
            .where(StoredDocument.collection == collection)
            .order_by(StoredDocument.created_at.asc(), StoredDocument.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())
