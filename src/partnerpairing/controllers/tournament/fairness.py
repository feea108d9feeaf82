"""Projection of per-player match counts and the corrective-round trigger."""

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
from typing import Iterable, List, Optional

from partnerpairing.constants import FAIRNESS_MAX_SPREAD, PLAYERS_PER_COURT
from partnerpairing.models.player import PlayerPool
from partnerpairing.models.tournament import RoundData
from partnerpairing.type_hints import MatchCounts
from partnerpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class FairnessReport:
    """Projected match counts after the planned rounds.

    Attributes
    ----------
    needs_extra_round : bool
        True when the projected spread exceeds one match.
    min_matches : int
        Lowest projected count.
    max_matches : int
        Highest projected count.
    per_player_projected_count : dict of str to int
        Player id -> projected matches.
    """

    needs_extra_round: bool = False
    min_matches: int = 0
    max_matches: int = 0
    per_player_projected_count: MatchCounts = field(default_factory=dict)

    @property
    def spread(self) -> int:
        return self.max_matches - self.min_matches

    def players_at_minimum(self) -> List[str]:
        """Players owed a match, in roster order."""
        return [
            pid
            for pid, count in self.per_player_projected_count.items()
            if count == self.min_matches
        ]


class FairnessSimulator:
    """Greedy projection of how many matches each player will get.

    The projection assumes every round fills ``courts_count * 4`` places and
    hands them to the players with the fewest matches so far. It does not
    replay the pairing algorithm. Passing ``played_counts`` starts the
    projection from what was actually played instead of from zero.
    """

    def evaluate(
        self,
        pool: PlayerPool,
        planned_rounds: int,
        courts_count: int,
        played_counts: Optional[MatchCounts] = None,
    ) -> FairnessReport:
        """Project per-player match counts; never mutates anything."""
        players = list(pool.players)
        if not players:
            return FairnessReport()
        counts: MatchCounts = {p.id: 0 for p in players}
        if played_counts:
            for pid in counts:
                counts[pid] = played_counts.get(pid, 0)

        playing = min(courts_count * PLAYERS_PER_COURT, len(players))
        roster = [p.id for p in players]
        for _ in range(max(0, planned_rounds)):
            # ties keep roster order
            order = sorted(roster, key=lambda pid: counts[pid])
            for pid in order[:playing]:
                counts[pid] += 1

        min_matches = min(counts.values())
        max_matches = max(counts.values())
        report = FairnessReport(
            needs_extra_round=(max_matches - min_matches) > FAIRNESS_MAX_SPREAD,
            min_matches=min_matches,
            max_matches=max_matches,
            per_player_projected_count=counts,
        )
        if report.needs_extra_round:
            logger.warning(
                f"Projected match counts range {min_matches}-{max_matches}: "
                "an extra round is needed"
            )
        return report

    @staticmethod
    def played_counts(pool: PlayerPool, rounds: Iterable[RoundData]) -> MatchCounts:
        """Matches each player has been scheduled into so far."""
        counts: MatchCounts = {p.id: 0 for p in pool.players}
        for round_data in rounds:
            for pid in round_data.scheduled_player_ids():
                if pid in counts:
                    counts[pid] += 1
        return counts
