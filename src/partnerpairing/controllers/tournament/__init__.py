from partnerpairing.controllers.tournament.fairness import (
    FairnessReport,
    FairnessSimulator,
)
from partnerpairing.controllers.tournament.group_repository import GroupRepository
from partnerpairing.controllers.tournament.result_recorder import (
    ResultRecorder,
    compute_round_statistics,
)
from partnerpairing.controllers.tournament.round_scheduler import (
    RestDistributionReport,
    RoundScheduler,
    calculate_rest_rotation,
    create_ranking_matches,
)

__all__ = [
    "FairnessReport",
    "FairnessSimulator",
    "GroupRepository",
    "RestDistributionReport",
    "ResultRecorder",
    "RoundScheduler",
    "calculate_rest_rotation",
    "compute_round_statistics",
    "create_ranking_matches",
]
