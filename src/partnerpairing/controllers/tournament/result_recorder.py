"""Match lifecycle, score recording and round completion."""

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

from typing import Iterable, List, Tuple

from partnerpairing.constants import WINNER_TEAM_A, WINNER_TEAM_B
from partnerpairing.exceptions import MatchNotFoundException
from partnerpairing.models.tournament import (
    Match,
    MatchResult,
    MatchResultSink,
    RoundData,
    RoundStatistics,
)
from partnerpairing.utils import setup_logger, utc_now

logger = setup_logger(__name__)


def compute_round_statistics(round_data: RoundData) -> RoundStatistics:
    """Totals over the completed matches of a round."""
    stats = RoundStatistics(total_matches=len(round_data.matches))
    for match in round_data.matches:
        if not match.is_completed:
            continue
        stats.completed_matches += 1
        stats.total_games += match.score_a + match.score_b
        if match.winner == WINNER_TEAM_A:
            stats.team_a_wins += 1
        elif match.winner == WINNER_TEAM_B:
            stats.team_b_wins += 1
        else:
            stats.ties += 1
    if stats.completed_matches:
        stats.average_score = round(
            stats.total_games / (stats.completed_matches * 2), 2
        )
    return stats


class ResultRecorder:
    """Handles match transitions and recording of final scores.

    This class is responsible for:
    - Driving each match through its status transitions
    - Validating and recording final scores
    - Marking rounds complete with their statistics
    - Forwarding every completed match to the registered result sinks
    """

    def __init__(self, sinks: Iterable[MatchResultSink] = ()):
        self.sinks: List[MatchResultSink] = list(sinks)

    def add_sink(self, sink: MatchResultSink) -> None:
        self.sinks.append(sink)

    def remove_sink(self, sink: MatchResultSink) -> None:
        self.sinks.remove(sink)

    def find_match(
        self, rounds: Iterable[RoundData], match_id: str
    ) -> Tuple[RoundData, Match]:
        """Locate a match and the round holding it.

        Raises:
            MatchNotFoundException: if no scheduled round has the match
        """
        for round_data in rounds:
            match = round_data.get_match(match_id)
            if match is not None:
                return round_data, match
        raise MatchNotFoundException(f"Match not found: {match_id}")

    def start_match(self, match: Match) -> None:
        match.start()
        logger.debug(f"Match {match.id} active on court {match.court}")

    def pause_match(self, match: Match) -> None:
        match.pause()
        logger.debug(f"Match {match.id} paused")

    def expire_match(self, match: Match) -> None:
        match.expire()
        logger.info(f"Match {match.id} ran out of time, waiting for a score")

    def reset_match(self, match: Match) -> None:
        match.reset()
        logger.info(f"Match {match.id} reset to pending")

    def complete_match(
        self, round_data: RoundData, match: Match, score_a: int, score_b: int
    ) -> MatchResult:
        """Record the final score of a match and notify the sinks.

        Raises:
            MatchAlreadyFinalizedException: if the match is already completed
            InvalidMatchTransitionException: if the match never started
            InvalidResultException: if a score is outside 0-50
        """
        match.complete(score_a, score_b)
        result = MatchResult.from_match(match)
        logger.info(
            f"Match {match.id} completed: {match.team_a.id} {score_a} - "
            f"{score_b} {match.team_b.id}"
        )
        self.update_round_completion(round_data)
        for sink in self.sinks:
            sink.on_match_completed(result)
        return result

    def update_round_completion(self, round_data: RoundData) -> bool:
        """Mark the round complete once every match is completed.

        Returns:
            True if the round is complete
        """
        if round_data.is_completed:
            return True
        if not round_data.all_matches_completed:
            return False
        round_data.is_completed = True
        round_data.completed_at = utc_now()
        round_data.statistics = compute_round_statistics(round_data)
        logger.info(
            f"Round {round_data.round_number} completed: "
            f"{round_data.statistics.total_games} games over "
            f"{round_data.statistics.completed_matches} matches"
        )
        return True
