"""Cross-tier team of two partners."""

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

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from partnerpairing.constants import SCORE_PRECISION, TEAM_ID_TEMPLATE
from partnerpairing.models.player import Player
from partnerpairing.type_hints import PairKey


@dataclass(frozen=True)
class Team:
    """
    One Upper-tier and one Lower-tier player playing together for a Group.

    Teams are never mutated once their Group is appended; a regenerate
    replaces the Group's whole team list instead.

    Attributes
    ----------
    id : str
        Team id, ``G{group}T{number}``.
    group_index : int
        1-based index of the owning Group.
    number : int
        1-based position of the team within its Group.
    upper_player : Player
        The Upper-tier partner, as they were when the team was formed.
    lower_player : Player
        The Lower-tier partner, as they were when the team was formed.
    ranking : int
        1-based rank of the team inside its Group by composite score,
        0 until ranked.
    """

    id: str
    group_index: int
    number: int
    upper_player: Player
    lower_player: Player
    ranking: int = 0

    @classmethod
    def create(
        cls, group_index: int, number: int, upper_player: Player, lower_player: Player
    ) -> "Team":
        return cls(
            id=TEAM_ID_TEMPLATE.format(group=group_index, number=number),
            group_index=group_index,
            number=number,
            upper_player=upper_player,
            lower_player=lower_player,
        )

    @property
    def score(self) -> float:
        """Composite score: the mean of both partners, one decimal."""
        return round(
            (self.upper_player.score + self.lower_player.score) / 2, SCORE_PRECISION
        )

    @property
    def pair_key(self) -> PairKey:
        return frozenset({self.upper_player.id, self.lower_player.id})

    @property
    def player_ids(self) -> Tuple[str, str]:
        return (self.upper_player.id, self.lower_player.id)

    @property
    def sort_key(self) -> Tuple[int, int]:
        """Stable order across groups: group first, then team number."""
        return (self.group_index, self.number)

    @property
    def label(self) -> str:
        return f"{self.upper_player.alias} & {self.lower_player.alias}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "id": self.id,
            "group_index": self.group_index,
            "number": self.number,
            "upper_player": self.upper_player.to_dict(),
            "lower_player": self.lower_player.to_dict(),
            "ranking": self.ranking,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        return cls(
            id=data["id"],
            group_index=int(data["group_index"]),
            number=int(data["number"]),
            upper_player=Player.from_dict(data["upper_player"]),
            lower_player=Player.from_dict(data["lower_player"]),
            ranking=int(data.get("ranking", 0)),
        )


def rank_teams(teams: List[Team]) -> List[Team]:
    """Return the teams in their original order with ``ranking`` filled in.

    Ranking is by composite score, highest first; equal scores keep team
    number order.
    """
    ordered = sorted(teams, key=lambda t: (-t.score, t.number))
    rankings = {team.id: position + 1 for position, team in enumerate(ordered)}
    return [dataclasses.replace(t, ranking=rankings[t.id]) for t in teams]
