from __future__ import annotations

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class StoredDocument(TimestampMixin, Base):
    __tablename__ = "dwe_documents"

    collection: Mapped[str] = mapped_column(String(64), primary_key=True)
    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    body_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    row_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


Index("ix_dwe_document_collection_created", StoredDocument.collection, StoredDocument.created_at)
