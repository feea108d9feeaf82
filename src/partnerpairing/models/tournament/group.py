"""A batch of teams formed together."""

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
from typing import Any, Dict, List, Optional

from partnerpairing.models.tournament.team import Team
from partnerpairing.type_hints import PairKey
from partnerpairing.utils import format_timestamp, parse_timestamp, utc_now


@dataclass
class Group:
    """Container for the teams of one Group.

    Attributes
    ----------
    index : int
        Group index (1-indexed), increasing with every appended Group.
    teams : list of Team
        Teams in formation order.
    created_at : datetime
        When the Group (or its latest regeneration) was formed.
    corrective : bool
        True for an extra Group synthesized to even out match counts.
    revision : int
        Number of times this Group has been regenerated.
    resting_player_ids : list of str
        Players left out of every team of this Group.
    reused_pair_keys : list of frozenset of str
        Partnerships that had to be repeated because no unused partner
        was left.
    """

    index: int
    teams: List[Team] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    corrective: bool = False
    revision: int = 0
    resting_player_ids: List[str] = field(default_factory=list)
    reused_pair_keys: List[PairKey] = field(default_factory=list)

    @property
    def pair_keys(self) -> List[PairKey]:
        return [team.pair_key for team in self.teams]

    @property
    def team_ids(self) -> List[str]:
        return [team.id for team in self.teams]

    @property
    def player_ids(self) -> List[str]:
        return [pid for team in self.teams for pid in team.player_ids]

    def get_team(self, team_id: str) -> Optional[Team]:
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    def __len__(self) -> int:
        return len(self.teams)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize group to dictionary."""
        return {
            "index": self.index,
            "teams": [t.to_dict() for t in self.teams],
            "created_at": format_timestamp(self.created_at),
            "corrective": self.corrective,
            "revision": self.revision,
            "resting_player_ids": list(self.resting_player_ids),
            "reused_pair_keys": [sorted(key) for key in self.reused_pair_keys],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        """Deserialize group from dictionary."""
        return cls(
            index=int(data["index"]),
            teams=[Team.from_dict(t) for t in data.get("teams", [])],
            created_at=parse_timestamp(data.get("created_at")) or utc_now(),
            corrective=data.get("corrective", False),
            revision=int(data.get("revision", 0)),
            resting_player_ids=list(data.get("resting_player_ids", [])),
            reused_pair_keys=[
                frozenset(map(str, key)) for key in data.get("reused_pair_keys", [])
            ],
        )
