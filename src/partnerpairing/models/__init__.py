from partnerpairing.models.enums import MatchStatus, Tier
from partnerpairing.models.player import Player, PlayerPool
from partnerpairing.models.tournament import (
    Group,
    Match,
    MatchResult,
    PairingHistory,
    RestLedger,
    RoundData,
    Team,
    TournamentConfig,
)

__all__ = [
    "Group",
    "Match",
    "MatchResult",
    "MatchStatus",
    "PairingHistory",
    "Player",
    "PlayerPool",
    "RestLedger",
    "RoundData",
    "Team",
    "Tier",
    "TournamentConfig",
]
