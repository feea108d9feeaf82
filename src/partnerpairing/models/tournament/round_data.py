"""Data models for tournament round."""

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
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from partnerpairing.exceptions import SnapshotLoadException
from partnerpairing.models.tournament.match import Match
from partnerpairing.models.tournament.team import Team
from partnerpairing.utils import format_timestamp, parse_timestamp, utc_now


@dataclass
class RoundStatistics:
    """Summary of a completed round."""

    total_matches: int = 0
    completed_matches: int = 0
    total_games: int = 0
    average_score: float = 0.0
    team_a_wins: int = 0
    team_b_wins: int = 0
    ties: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_matches": self.total_matches,
            "completed_matches": self.completed_matches,
            "total_games": self.total_games,
            "average_score": self.average_score,
            "team_a_wins": self.team_a_wins,
            "team_b_wins": self.team_b_wins,
            "ties": self.ties,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundStatistics":
        return cls(**{k: data[k] for k in cls().to_dict() if k in data})


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    basis_group_index : int
        Index of the Group the round was drawn from.
    playing_teams : list of Team
        Teams selected to play, in candidate priority order.
    resting_teams : list of Team
        Teams sitting out this round.
    unscheduled_teams : list of Team
        Selected teams left without an opponent. Normally empty.
    excluded_teams : list of Team
        Teams kept out because they share a player with a team owed a
        turn. They count as resting.
    matches : list of Match
        Matches in ranking order.
    consecutive_rest_team_ids : list of str
        Resting teams that also rested in the previous round.
    is_completed : bool
        True once every match of the round is completed.
    """

    round_number: int
    basis_group_index: int
    playing_teams: List[Team] = field(default_factory=list)
    resting_teams: List[Team] = field(default_factory=list)
    unscheduled_teams: List[Team] = field(default_factory=list)
    excluded_teams: List[Team] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    consecutive_rest_team_ids: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    statistics: Optional[RoundStatistics] = None

    @property
    def candidates(self) -> List[Team]:
        return self.playing_teams + self.resting_teams

    @property
    def team_ids(self) -> List[str]:
        return [team.id for team in self.candidates]

    @property
    def excluded_team_ids(self) -> List[str]:
        return [team.id for team in self.excluded_teams]

    @property
    def all_matches_completed(self) -> bool:
        return bool(self.matches) and all(m.is_completed for m in self.matches)

    def get_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def scheduled_player_ids(self) -> List[str]:
        """Players who have a match in this round."""
        return [pid for match in self.matches for pid in match.player_ids]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary; teams are stored by id."""
        return {
            "round_number": self.round_number,
            "basis_group_index": self.basis_group_index,
            "playing_team_ids": [t.id for t in self.playing_teams],
            "resting_team_ids": [t.id for t in self.resting_teams],
            "unscheduled_team_ids": [t.id for t in self.unscheduled_teams],
            "excluded_team_ids": self.excluded_team_ids,
            "matches": [m.to_dict() for m in self.matches],
            "consecutive_rest_team_ids": list(self.consecutive_rest_team_ids),
            "created_at": format_timestamp(self.created_at),
            "is_completed": self.is_completed,
            "completed_at": format_timestamp(self.completed_at),
            "statistics": self.statistics.to_dict() if self.statistics else None,
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], teams_by_id: Mapping[str, Team]
    ) -> "RoundData":
        """Deserialize round data, resolving team ids against known teams."""

        def resolve(ids: List[str]) -> List[Team]:
            try:
                return [teams_by_id[tid] for tid in ids]
            except KeyError as e:
                raise SnapshotLoadException(
                    f"Round {data.get('round_number')} references unknown team {e}"
                ) from e

        statistics = data.get("statistics")
        return cls(
            round_number=int(data["round_number"]),
            basis_group_index=int(data["basis_group_index"]),
            playing_teams=resolve(data.get("playing_team_ids", [])),
            resting_teams=resolve(data.get("resting_team_ids", [])),
            unscheduled_teams=resolve(data.get("unscheduled_team_ids", [])),
            excluded_teams=resolve(data.get("excluded_team_ids", [])),
            matches=[Match.from_dict(m, teams_by_id) for m in data.get("matches", [])],
            consecutive_rest_team_ids=list(data.get("consecutive_rest_team_ids", [])),
            created_at=parse_timestamp(data.get("created_at")) or utc_now(),
            is_completed=data.get("is_completed", False),
            completed_at=parse_timestamp(data.get("completed_at")),
            statistics=RoundStatistics.from_dict(statistics) if statistics else None,
        )
