"""Type hints used in Partner Pairing."""

from typing import Dict, FrozenSet, List, Literal, Tuple

PlayerId = str
TeamId = str
MatchId = str

# Unordered pair of player ids that formed a team
PairKey = FrozenSet[str]

# Match winner literals
Winner = Literal["team_a", "team_b", "tie"]

# player id -> projected or played match count
MatchCounts = Dict[PlayerId, int]

# Rest ledger rows: entity id -> group indices or round numbers
RestRows = Dict[str, List[int]]

# Ranked pairing of two team ids (higher ranked first)
TeamPairing = Tuple[TeamId, TeamId]

#  LocalWords:  PairKey
