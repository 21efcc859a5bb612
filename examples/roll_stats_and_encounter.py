from __future__ import annotations

import asyncio
import json
import logging

from dolmenwood_engine import DolmenwoodEngine, EngineConfig
from dolmenwood_engine.core.chronicle import Delve
from dolmenwood_engine.core.encounter import Awareness
from dolmenwood_engine.core.timekeeping import DEFAULT_DATE_TIME


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    engine = DolmenwoodEngine.from_config(
        EngineConfig(database_url="sqlite+pysqlite:///:memory:", dice_seed=1089)
    )

    pair = await engine.players.get_player_and_character("discord:1234")
    print("player:", pair.player)

    rolled = await engine.characters.roll_stats(pair.character["id"])
    print("new roll:", rolled.is_new, json.dumps(rolled.results["rolls"]))

    again = await engine.characters.roll_stats(pair.character["id"])
    print("second call is new:", again.is_new)

    character = await engine.repositories.player_characters.get(pair.character["id"])
    print("stats:", character["stats"])

    delve = Delve(site_name="The Ruined Abbey of St Clewd", start_time=DEFAULT_DATE_TIME)
    delve.add_light_source("torch", pair.character["id"], 6)
    delve.advance_turn(3)
    print("light:", delve.active_light_sources)

    encounter = engine.new_encounter("dungeon", delve.end_time)
    encounter.set_awareness(Awareness(npcs=False, players=False))
    encounter.roll_surprise(player_roll=4)
    if encounter.phase != "initiative-rolled":
        encounter.roll_initiative(player_initiative=3)
    print("encounter:", json.dumps(encounter.to_dict(), indent=2))
    print("initiative winner:", encounter.initiative_winner)


if __name__ == "__main__":
    asyncio.run(main())
