from __future__ import annotations

import asyncio

from dolmenwood_engine import DolmenwoodEngine, EngineConfig
from dolmenwood_engine.core.encounter import Awareness, EncounterRules
from dolmenwood_engine.persistence.memory import MemoryRepositoryFactory
from dolmenwood_engine.persistence.sqlalchemy import SQLAlchemyRepositoryFactory


def test_default_config_uses_memory_store():
    engine = DolmenwoodEngine.from_config()
    assert isinstance(engine.repositories, MemoryRepositoryFactory)


def test_database_url_selects_sqlalchemy_store(ids):
    async def run_test():
        engine = DolmenwoodEngine.from_config(
            EngineConfig(database_url="sqlite+pysqlite:///:memory:", dice_seed=5),
            id_factory=ids,
        )
        assert isinstance(engine.repositories, SQLAlchemyRepositoryFactory)

        pair = await engine.players.get_player_and_character("p1")
        rolled = await engine.characters.roll_stats(pair.character["id"])
        again = await engine.characters.roll_stats(pair.character["id"])

        assert rolled.is_new is True
        assert again.is_new is False
        assert again.results == rolled.results

    asyncio.run(run_test())


def test_seeded_engines_roll_alike():
    first = DolmenwoodEngine.from_config(EngineConfig(dice_seed=99))
    second = DolmenwoodEngine.from_config(EngineConfig(dice_seed=99))
    assert [first.dice.roll("3d6").total for _ in range(4)] == [second.dice.roll("3d6").total for _ in range(4)]


def test_encounters_use_configured_rules():
    rules = EncounterRules(dungeon_encounter_distance="7")
    engine = DolmenwoodEngine.from_config(EngineConfig(dice_seed=1, encounter_rules=rules))

    encounter = engine.new_encounter()
    encounter.set_awareness(Awareness(npcs=True, players=True))
    assert encounter.create_snapshot().distance == 7

    restored = engine.load_encounter(encounter.to_dict())
    assert restored.rules is rules
    assert restored.create_snapshot() == encounter.create_snapshot()
