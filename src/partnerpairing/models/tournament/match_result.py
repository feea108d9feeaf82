"""Finalized match score handed to result sinks."""

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

from dataclasses import dataclass
from typing import Any, Dict, Protocol

from partnerpairing.models.tournament.match import Match


@dataclass(frozen=True)
class MatchResult:
    """Represents the final score of a single match.

    Attributes
    ----------
    match_id : str
        ID of the completed match
    round_number : int
        Round the match was played in
    team_a_id : str
        ID of the higher ranked team
    team_b_id : str
        ID of the lower ranked team
    score_a : int
        Games won by team A
    score_b : int
        Games won by team B
    """

    match_id: str
    round_number: int
    team_a_id: str
    team_b_id: str
    score_a: int
    score_b: int

    @classmethod
    def from_match(cls, match: Match) -> "MatchResult":
        return cls(
            match_id=match.id,
            round_number=match.round_number,
            team_a_id=match.team_a.id,
            team_b_id=match.team_b.id,
            score_a=match.score_a,
            score_b=match.score_b,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "match_id": self.match_id,
            "round_number": self.round_number,
            "team_a_id": self.team_a_id,
            "team_b_id": self.team_b_id,
            "score_a": self.score_a,
            "score_b": self.score_b,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        return cls(
            match_id=data["match_id"],
            round_number=int(data["round_number"]),
            team_a_id=data["team_a_id"],
            team_b_id=data["team_b_id"],
            score_a=int(data["score_a"]),
            score_b=int(data["score_b"]),
        )


class MatchResultSink(Protocol):
    """Receives every match result once the match is completed.

    League points and standings live behind this boundary.
    """

    def on_match_completed(self, result: MatchResult) -> None: ...
