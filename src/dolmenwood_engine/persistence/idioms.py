"""Find-or-create and patch over a :class:`Repository`.

Both helpers assume at most one logical writer per document id at a time
(one active session per character). With a plain store, two callers racing
on the same missing id each perform a read-then-write and the store decides
the outcome (last write wins for the in-memory store). Stores implementing
:class:`SupportsInsertIfAbsent` make creation atomic, so the loser of a race
receives the winner's document instead of overwriting it. ``patch_record``
is never serialized here; callers needing multi-writer updates must lock
per id or use the store's compare-and-swap.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..core.normalize import deep_merge
from .interfaces import Document, Repository, SupportsInsertIfAbsent


async def find_or_create(
    repository: Repository,
    id: str,
    default: Mapping[str, Any] | None = None,
) -> Document:
    existing = await repository.get(id)
    if existing is not None:
        return existing

    created: Document = {**(default or {}), "id": id}
    if isinstance(repository, SupportsInsertIfAbsent):
        return await repository.insert_if_absent(id, created)

    await repository.upsert(id, created)
    return created


async def patch_record(
    repository: Repository,
    id: str,
    patch: Mapping[str, Any],
) -> Document:
    original = await find_or_create(repository, id)
    updated = deep_merge(original, patch)
    await repository.upsert(id, updated)
    return updated
