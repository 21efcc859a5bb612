from __future__ import annotations

import logging
from typing import Any

from ..core.dice import extract_die_values
from ..core.event_log import utc_now
from ..core.ports import Clock, DicePort, IdFactory
from ..core.types import ABILITIES, RollStatsResult
from ..persistence.idioms import find_or_create, patch_record
from ..persistence.interfaces import Document, Repository
from .players import new_id

STAT_ROLL_NOTATION = "3d6"


def roll_to_stats(rolls: dict[str, list[int]]) -> dict[str, int]:
    return {ability: sum(rolls[ability]) for ability in ABILITIES}


class PlayerCharacterService:
    """Character stat generation with roll-once semantics.

    A character's stats are rolled at most once. The roll document is
    written before the character is patched to reference it; if that patch
    fails the orphaned roll is never referenced and the next call rolls
    again, so a character never observes two different rolls.
    """

    def __init__(
        self,
        player_characters: Repository,
        stat_rolls: Repository,
        dice: DicePort,
        *,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
        logger: logging.Logger | None = None,
    ):
        self._player_characters = player_characters
        self._stat_rolls = stat_rolls
        self._dice = dice
        self._clock = clock or utc_now
        self._id_factory = id_factory or new_id
        self._logger = logger or logging.getLogger(__name__)

    async def roll_stats(self, character_id: str) -> RollStatsResult:
        character = await find_or_create(self._player_characters, character_id)

        stat_roll_id = character.get("statRollId")
        if stat_roll_id is not None:
            existing = await self._stat_rolls.get(stat_roll_id)
            if existing is not None:
                self._logger.debug("Returning existing stat roll %s for character %s", stat_roll_id, character_id)
                return RollStatsResult(results=existing, is_new=False)
            self._logger.warning(
                "Character %s references missing stat roll %s; rolling new stats",
                character_id,
                stat_roll_id,
            )

        roll = await self._roll_new_stats(character["id"])
        return RollStatsResult(results=roll, is_new=True)

    async def _roll_new_stats(self, character_id: str) -> Document:
        rolls = {ability: extract_die_values(self._dice.roll(STAT_ROLL_NOTATION)) for ability in ABILITIES}
        roll: dict[str, Any] = {
            "id": self._id_factory(),
            "rolledAt": self._clock().isoformat(),
            "rolls": rolls,
        }

        await self._stat_rolls.upsert(roll["id"], roll)
        await patch_record(
            self._player_characters,
            character_id,
            {"statRollId": roll["id"], "stats": roll_to_stats(rolls)},
        )
        self._logger.info("Rolled stats %s for character %s", roll["id"], character_id)
        return roll
