"""Round scheduling: team rest rotation, ranking matches and courts."""

# Partner Pairing
# Copyright (C) 2025  Partner Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from partnerpairing.constants import TEAMS_PER_COURT
from partnerpairing.controllers.tournament.group_repository import GroupRepository
from partnerpairing.exceptions import (
    NoGroupAvailableException,
    RoundNotFoundException,
    TournamentCompleteException,
    TournamentStateException,
)
from partnerpairing.models.tournament import (
    Match,
    RestLedger,
    RoundData,
    RoundStatistics,
    Team,
    TeamRestStats,
    TournamentConfig,
)
from partnerpairing.utils import setup_logger, utc_now

logger = setup_logger(__name__)


@dataclass
class RestDistributionReport:
    """Outcome of :meth:`RoundScheduler.validate_rest_distribution`."""

    consecutive_rests: Dict[int, List[str]] = field(default_factory=dict)
    min_rests: int = 0
    max_rests: int = 0

    @property
    def delta(self) -> int:
        return self.max_rests - self.min_rests

    @property
    def is_valid(self) -> bool:
        return not self.consecutive_rests and self.delta <= 1


def calculate_rest_rotation(
    candidates: List[Team], courts_count: int
) -> Tuple[List[Team], List[Team]]:
    """Split priority-ordered candidates into playing and resting teams.

    The last ``len(candidates) - courts_count * 2`` candidates rest.
    """
    max_playing = courts_count * TEAMS_PER_COURT
    if len(candidates) <= max_playing:
        return list(candidates), []
    return list(candidates[:max_playing]), list(candidates[max_playing:])


def create_ranking_matches(
    playing_teams: List[Team],
    round_number: int,
    courts_count: int,
    duration: int,
) -> Tuple[List[Match], List[Team]]:
    """Pair teams of adjacent rank and assign courts cyclically.

    Returns:
        Tuple of (matches, leftover teams that got no opponent)
    """
    ranked = sorted(playing_teams, key=lambda t: (-t.score, t.sort_key))
    match_count = min(len(ranked) // 2, courts_count)
    matches = []
    for i in range(match_count):
        team_a, team_b = ranked[2 * i], ranked[2 * i + 1]
        matches.append(
            Match.create(
                round_number=round_number,
                match_number=i + 1,
                team_a=team_a,
                team_b=team_b,
                court=(i % courts_count) + 1,
                duration=duration,
            )
        )
        logger.debug(
            f"Round {round_number} court {(i % courts_count) + 1}: "
            f"{team_a.id} ({team_a.score}) vs {team_b.id} ({team_b.score})"
        )
    return matches, ranked[2 * match_count :]


class RoundScheduler:
    """Builds Rounds out of the Groups in the repository.

    This class is responsible for:
    - Picking the basis Group and the candidate teams of a round
    - Team-level rest rotation and its ledger entries
    - Ranking-adjacent match creation and court assignment
    - Rest statistics across the event
    """

    def __init__(
        self,
        config: TournamentConfig,
        group_repository: GroupRepository,
        rest_ledger: RestLedger,
    ):
        self.config = config
        self.group_repository = group_repository
        self.rest_ledger = rest_ledger
        self.rounds: List[RoundData] = []

    @property
    def current_round_number(self) -> int:
        """Number of the last scheduled round, 0 before the first."""
        return len(self.rounds)

    @property
    def completed_rounds_count(self) -> int:
        return sum(1 for round_data in self.rounds if round_data.is_completed)

    def get_round(self, round_number: int) -> RoundData:
        """Get data for a specific round.

        Raises:
            RoundNotFoundException: if the round has not been scheduled
        """
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        raise RoundNotFoundException(f"Round {round_number} has not been scheduled")

    def scheduled_team_ids(self) -> Set[str]:
        return {
            tid
            for round_data in self.rounds
            for tid in round_data.team_ids + round_data.excluded_team_ids
        }

    # ========== Team selection ==========

    def basis_group_index(self, round_number: int) -> int:
        """1-based index of the Group a round draws its teams from."""
        if not len(self.group_repository):
            raise NoGroupAvailableException(
                f"No Group available to schedule round {round_number}"
            )
        return ((round_number - 1) % len(self.group_repository)) + 1

    def select_teams_for_round(self, round_number: int) -> List[Team]:
        """Candidate teams for a round, highest priority to play first."""
        candidates, _ = self.split_candidates(round_number)
        return candidates

    def split_candidates(self, round_number: int) -> Tuple[List[Team], List[Team]]:
        """Candidate teams for a round and the teams kept out of it.

        Teams that rested in the previous round go first, followed by the
        basis Group's own teams. A team sharing a player with a team already
        taken is excluded: it sits the round out and is owed a turn in the
        next one.

        Returns:
            Tuple of (candidates in priority order, excluded teams)
        """
        basis = self.group_repository.get(self.basis_group_index(round_number))
        if round_number == 1 or basis.corrective:
            return list(basis.teams), []

        teams_by_id = self.group_repository.teams_by_id()
        rested_ids = self.rest_ledger.teams_rested_in_round(round_number - 1)
        priority = sorted(
            {teams_by_id[tid] for tid in rested_ids if tid in teams_by_id},
            key=lambda t: t.sort_key,
        )
        priority_ids = {team.id for team in priority}

        candidates: List[Team] = []
        excluded: List[Team] = []
        busy_players: Set[str] = set()
        basis_teams = [t for t in basis.teams if t.id not in priority_ids]
        for team in priority + basis_teams:
            if busy_players.intersection(team.player_ids):
                excluded.append(team)
                continue
            busy_players.update(team.player_ids)
            candidates.append(team)
        return candidates, excluded

    # ========== Scheduling ==========

    def schedule_round(self, round_number: Optional[int] = None) -> RoundData:
        """Build, record and return the next round.

        Raises:
            TournamentCompleteException: if the round exceeds the plan
            TournamentStateException: if rounds are scheduled out of order
            NoGroupAvailableException: if no Group has been formed yet
        """
        if round_number is None:
            round_number = len(self.rounds) + 1
        if round_number > self.config.total_rounds:
            raise TournamentCompleteException(
                f"Round {round_number} exceeds the {self.config.total_rounds} "
                "planned rounds"
            )
        if round_number != len(self.rounds) + 1:
            raise TournamentStateException(
                f"Next round to schedule is {len(self.rounds) + 1}, "
                f"not {round_number}"
            )

        basis_index = self.basis_group_index(round_number)
        candidates, excluded = self.split_candidates(round_number)
        if excluded:
            logger.warning(
                f"Round {round_number}: {[t.id for t in excluded]} share a player "
                "with a team owed a turn, resting this round"
            )
        playing, resting = calculate_rest_rotation(
            candidates, self.config.courts_count
        )
        matches, leftover = create_ranking_matches(
            playing,
            round_number,
            self.config.courts_count,
            self.config.match_duration,
        )
        if leftover:
            logger.warning(
                f"Round {round_number}: {[t.id for t in leftover]} left without "
                "an opponent"
            )

        consecutive = [
            team.id
            for team in resting + excluded
            if self.rest_ledger.team_rested_in_round(team.id, round_number - 1)
        ]
        if consecutive:
            logger.warning(
                f"Round {round_number}: teams resting twice in a row: {consecutive}"
            )

        for team in resting + leftover + excluded:
            self.rest_ledger.record_team_rest(team.id, round_number)

        round_data = RoundData(
            round_number=round_number,
            basis_group_index=basis_index,
            playing_teams=playing,
            resting_teams=resting,
            unscheduled_teams=leftover,
            excluded_teams=excluded,
            matches=matches,
            consecutive_rest_team_ids=consecutive,
        )
        if not matches:
            # no match will ever complete this round
            round_data.is_completed = True
            round_data.completed_at = utc_now()
            round_data.statistics = RoundStatistics()
            logger.warning(f"Round {round_number}: no match possible, closed empty")
        self.rounds.append(round_data)
        logger.info(
            f"Scheduled round {round_number} from Group {basis_index}: "
            f"{len(matches)} matches, {len(resting)} teams resting"
        )
        return round_data

    # ========== Rest statistics ==========

    def team_rest_statistics(self) -> Dict[str, TeamRestStats]:
        """Rest summary for every team that has been a round candidate."""
        team_ids: List[str] = []
        for round_data in self.rounds:
            for tid in round_data.team_ids + round_data.excluded_team_ids:
                if tid not in team_ids:
                    team_ids.append(tid)
        return {tid: self.rest_ledger.team_rest_stats(tid) for tid in team_ids}

    def validate_rest_distribution(self) -> RestDistributionReport:
        """Report consecutive rests per round and the spread of rest counts."""
        report = RestDistributionReport()
        for round_data in self.rounds:
            if round_data.consecutive_rest_team_ids:
                report.consecutive_rests[round_data.round_number] = list(
                    round_data.consecutive_rest_team_ids
                )
        counts = [s.total_rests for s in self.team_rest_statistics().values()]
        if counts:
            report.min_rests = min(counts)
            report.max_rests = max(counts)
        return report

    # ========== Serialization ==========

    def clear(self) -> None:
        self.rounds = []

    def to_dict(self) -> List[Dict[str, Any]]:
        return [round_data.to_dict() for round_data in self.rounds]

    def load_rounds(
        self, data: List[Dict[str, Any]], teams_by_id: Mapping[str, Team]
    ) -> None:
        self.rounds = [RoundData.from_dict(r, teams_by_id) for r in data]
