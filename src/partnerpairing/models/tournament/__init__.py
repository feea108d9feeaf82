from partnerpairing.models.tournament.group import Group
from partnerpairing.models.tournament.match import Match, validate_match_score
from partnerpairing.models.tournament.match_result import MatchResult, MatchResultSink
from partnerpairing.models.tournament.pairing_history import PairingHistory, pair_key
from partnerpairing.models.tournament.rest_ledger import RestLedger, TeamRestStats
from partnerpairing.models.tournament.round_data import RoundData, RoundStatistics
from partnerpairing.models.tournament.team import Team, rank_teams
from partnerpairing.models.tournament.tournament_config import TournamentConfig

__all__ = [
    "Group",
    "Match",
    "MatchResult",
    "MatchResultSink",
    "PairingHistory",
    "RestLedger",
    "RoundData",
    "RoundStatistics",
    "Team",
    "TeamRestStats",
    "TournamentConfig",
    "pair_key",
    "rank_teams",
    "validate_match_score",
]
