from .characters import PlayerCharacterService, roll_to_stats
from .players import PlayerService

__all__ = ["PlayerService", "PlayerCharacterService", "roll_to_stats"]
