"""Who rested when, for players and for teams."""

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
from typing import Any, Dict, List, Optional

from partnerpairing.type_hints import RestRows


@dataclass
class TeamRestStats:
    """Rest summary for one team."""

    team_id: str
    total_rests: int = 0
    last_rest_round: Optional[int] = None
    consecutive_rests: int = 0
    rest_rounds: List[int] = field(default_factory=list)


@dataclass
class RestLedger:
    """
    Rest history used for rest priority and consecutive-rest detection.

    Player rows are written by the pairing engine and hold Group indices;
    team rows are written by the round scheduler and hold round numbers.

    Attributes
    ----------
    player_rests : dict of str to list of int
        Player id -> Group indices in which the player sat out.
    team_rests : dict of str to list of int
        Team id -> round numbers in which the team sat out.
    """

    player_rests: RestRows = field(default_factory=dict)
    team_rests: RestRows = field(default_factory=dict)

    # ========== Players ==========

    def record_player_rest(self, player_id: str, group_index: int) -> None:
        rests = self.player_rests.setdefault(player_id, [])
        if group_index not in rests:
            rests.append(group_index)

    def player_rest_count(self, player_id: str) -> int:
        return len(self.player_rests.get(player_id, []))

    def player_rested_in_group(self, player_id: str, group_index: int) -> bool:
        return group_index in self.player_rests.get(player_id, [])

    def rollback_group(self, group_index: int) -> None:
        """Remove every player rest recorded for a Group."""
        for player_id in list(self.player_rests):
            rests = [g for g in self.player_rests[player_id] if g != group_index]
            if rests:
                self.player_rests[player_id] = rests
            else:
                del self.player_rests[player_id]

    # ========== Teams ==========

    def record_team_rest(self, team_id: str, round_number: int) -> None:
        rests = self.team_rests.setdefault(team_id, [])
        if round_number not in rests:
            rests.append(round_number)

    def team_rest_count(self, team_id: str) -> int:
        return len(self.team_rests.get(team_id, []))

    def team_rested_in_round(self, team_id: str, round_number: int) -> bool:
        return round_number in self.team_rests.get(team_id, [])

    def teams_rested_in_round(self, round_number: int) -> List[str]:
        return [
            tid for tid, rounds in self.team_rests.items() if round_number in rounds
        ]

    def team_rest_stats(self, team_id: str) -> TeamRestStats:
        """Totals, last rest and the current consecutive-rest streak."""
        rounds = sorted(self.team_rests.get(team_id, []))
        streak = 0
        if rounds:
            streak = 1
            for previous, current in zip(reversed(rounds[:-1]), reversed(rounds)):
                if current - previous != 1:
                    break
                streak += 1
        return TeamRestStats(
            team_id=team_id,
            total_rests=len(rounds),
            last_rest_round=rounds[-1] if rounds else None,
            consecutive_rests=streak,
            rest_rounds=rounds,
        )

    # ========== State ==========

    def copy(self) -> "RestLedger":
        return RestLedger(
            player_rests={k: list(v) for k, v in self.player_rests.items()},
            team_rests={k: list(v) for k, v in self.team_rests.items()},
        )

    def load_state(self, other: "RestLedger") -> None:
        """Replace this ledger's contents with another's, in place."""
        self.player_rests = {k: list(v) for k, v in other.player_rests.items()}
        self.team_rests = {k: list(v) for k, v in other.team_rests.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_rests": {k: list(v) for k, v in self.player_rests.items()},
            "team_rests": {k: list(v) for k, v in self.team_rests.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RestLedger":
        return cls(
            player_rests={
                k: [int(i) for i in v] for k, v in data.get("player_rests", {}).items()
            },
            team_rests={
                k: [int(i) for i in v] for k, v in data.get("team_rests", {}).items()
            },
        )
