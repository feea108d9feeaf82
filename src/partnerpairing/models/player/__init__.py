from partnerpairing.models.player.base_player import Player, normalize_score
from partnerpairing.models.player.pool import PlayerPool

__all__ = [
    "Player",
    "PlayerPool",
    "normalize_score",
]
