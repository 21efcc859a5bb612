from __future__ import annotations

import asyncio

from dolmenwood_engine.core.normalize import deep_merge
from dolmenwood_engine.persistence.idioms import find_or_create, patch_record
from dolmenwood_engine.persistence.memory import MemoryRepository


def test_find_or_create_creates_once_and_never_overwrites(repositories):
    async def run_test():
        repo = repositories.players
        created = await find_or_create(repo, "p1", {"displayName": "Wren"})
        assert created == {"id": "p1", "displayName": "Wren"}

        again = await find_or_create(repo, "p1", {"displayName": "Someone else"})
        assert again == created
        assert await repo.get("p1") == created

    asyncio.run(run_test())


def test_find_or_create_id_wins_over_default(repositories):
    async def run_test():
        created = await find_or_create(repositories.players, "p2", {"id": "other", "displayName": "Ash"})
        assert created["id"] == "p2"

    asyncio.run(run_test())


def test_patch_record_merges_nested_and_replaces_lists(repositories):
    async def run_test():
        repo = repositories.player_characters
        await repo.upsert("c1", {"id": "c1", "stats": {"strength": 10, "wisdom": 12}, "tags": ["a", "b"]})

        updated = await patch_record(repo, "c1", {"stats": {"strength": 14}, "tags": ["c"], "statRollId": None})

        assert updated == {
            "id": "c1",
            "stats": {"strength": 14, "wisdom": 12},
            "tags": ["c"],
            "statRollId": None,
        }
        assert await repo.get("c1") == updated

    asyncio.run(run_test())


def test_patch_record_creates_missing_record(repositories):
    async def run_test():
        updated = await patch_record(repositories.players, "p9", {"activeCharacterId": "c9"})
        assert updated == {"id": "p9", "activeCharacterId": "c9"}

    asyncio.run(run_test())


def test_deep_merge_does_not_mutate_inputs():
    base = {"stats": {"strength": 10}, "rolls": [1, 2]}
    patch = {"stats": {"wisdom": 9}}
    merged = deep_merge(base, patch)
    merged["stats"]["strength"] = 18
    merged["rolls"].append(3)
    assert base == {"stats": {"strength": 10}, "rolls": [1, 2]}
    assert patch == {"stats": {"wisdom": 9}}


def test_memory_repository_hands_out_copies():
    async def run_test():
        repo = MemoryRepository()
        doc = {"id": "x", "nested": {"n": 1}}
        await repo.upsert("x", doc)
        doc["nested"]["n"] = 2

        loaded = await repo.get("x")
        assert loaded == {"id": "x", "nested": {"n": 1}}
        loaded["nested"]["n"] = 3
        assert (await repo.get("x"))["nested"]["n"] == 1

        await repo.delete("x")
        await repo.delete("x")
        assert await repo.list() == []

    asyncio.run(run_test())
