from __future__ import annotations

import logging
import uuid

from ..core.ports import IdFactory
from ..core.types import PlayerAndCharacter
from ..persistence.idioms import find_or_create, patch_record
from ..persistence.interfaces import Document, Repository


def new_id() -> str:
    return str(uuid.uuid4())


class PlayerService:
    def __init__(
        self,
        players: Repository,
        player_characters: Repository,
        *,
        id_factory: IdFactory | None = None,
        logger: logging.Logger | None = None,
    ):
        self._players = players
        self._player_characters = player_characters
        self._id_factory = id_factory or new_id
        self._logger = logger or logging.getLogger(__name__)

    async def get_player(self, external_id: str) -> Document:
        """Return the player for a platform id, creating the record on first contact."""
        return await find_or_create(self._players, external_id)

    async def get_player_and_character(self, external_id: str) -> PlayerAndCharacter:
        player = await self.get_player(external_id)
        active_character_id = player.get("activeCharacterId")

        if active_character_id is not None:
            character = await find_or_create(
                self._player_characters,
                active_character_id,
                {"playerId": player["id"]},
            )
            self._logger.debug("Resolved active character %s for player %s", active_character_id, external_id)
            return PlayerAndCharacter(player=player, character=character)

        character_id = self._id_factory()
        character = await find_or_create(self._player_characters, character_id, {"playerId": player["id"]})
        player = await patch_record(self._players, external_id, {"activeCharacterId": character_id})
        self._logger.info("Created character %s for player %s", character_id, external_id)
        return PlayerAndCharacter(player=player, character=character)
