"""A match between two teams on one court."""

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
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from partnerpairing.constants import (
    DEFAULT_MATCH_DURATION,
    MATCH_ID_TEMPLATE,
    MAX_MATCH_SCORE,
    MIN_MATCH_SCORE,
    WINNER_TEAM_A,
    WINNER_TEAM_B,
    WINNER_TIE,
)
from partnerpairing.exceptions import (
    InvalidMatchTransitionException,
    InvalidResultException,
    MatchAlreadyFinalizedException,
    SnapshotLoadException,
)
from partnerpairing.models.enums import MatchStatus
from partnerpairing.models.tournament.team import Team
from partnerpairing.type_hints import Winner
from partnerpairing.utils import format_timestamp, parse_timestamp, utc_now


def validate_match_score(value: Any) -> int:
    """Check a team's match score is an integer within range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidResultException(f"Match score must be an integer, got {value!r}")
    if not MIN_MATCH_SCORE <= value <= MAX_MATCH_SCORE:
        raise InvalidResultException(
            f"Match score {value} outside {MIN_MATCH_SCORE}-{MAX_MATCH_SCORE}"
        )
    return value


@dataclass
class Match:
    """
    Two teams of adjacent rank meeting on a court.

    Status moves Pending -> Active -> (Paused <-> Active | Expired) ->
    Completed. Completed is terminal; any further transition raises
    :class:`MatchAlreadyFinalizedException` and leaves the match untouched.

    Attributes
    ----------
    id : str
        Match id, ``R{round}M{number}``.
    round_number : int
        Round the match belongs to.
    match_number : int
        1-based position of the match in its round.
    team_a : Team
        Higher ranked team.
    team_b : Team
        Lower ranked team.
    court : int
        Assigned court, 1-based.
    duration : int
        Planned duration in minutes.
    """

    id: str
    round_number: int
    match_number: int
    team_a: Team
    team_b: Team
    court: int
    duration: int = DEFAULT_MATCH_DURATION
    score_a: Optional[int] = None
    score_b: Optional[int] = None
    status: MatchStatus = MatchStatus.PENDING
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        round_number: int,
        match_number: int,
        team_a: Team,
        team_b: Team,
        court: int,
        duration: int = DEFAULT_MATCH_DURATION,
    ) -> "Match":
        return cls(
            id=MATCH_ID_TEMPLATE.format(round=round_number, number=match_number),
            round_number=round_number,
            match_number=match_number,
            team_a=team_a,
            team_b=team_b,
            court=court,
            duration=duration,
        )

    # ========== State machine ==========

    def _transition(self, target: MatchStatus) -> None:
        if self.status.is_terminal:
            raise MatchAlreadyFinalizedException(
                f"Match {self.id} is already completed"
            )
        if not self.status.can_transition_to(target):
            raise InvalidMatchTransitionException(
                f"Match {self.id} cannot go from {self.status.value} to {target.value}"
            )
        self.status = target

    def start(self) -> None:
        """Start a pending match or resume a paused one."""
        self._transition(MatchStatus.ACTIVE)
        if self.started_at is None:
            self.started_at = utc_now()

    def pause(self) -> None:
        self._transition(MatchStatus.PAUSED)

    def expire(self) -> None:
        """Mark the match as out of time; it still needs a score."""
        self._transition(MatchStatus.EXPIRED)

    def complete(self, score_a: int, score_b: int) -> None:
        """Record the final score and finalize the match."""
        if self.status.is_terminal:
            raise MatchAlreadyFinalizedException(
                f"Match {self.id} is already completed"
            )
        score_a = validate_match_score(score_a)
        score_b = validate_match_score(score_b)
        self._transition(MatchStatus.COMPLETED)
        self.score_a = score_a
        self.score_b = score_b
        self.ended_at = utc_now()

    def reset(self) -> None:
        """Send the match back to Pending, clearing scores and times."""
        self._transition(MatchStatus.PENDING)
        self.score_a = None
        self.score_b = None
        self.started_at = None
        self.ended_at = None

    # ========== Queries ==========

    @property
    def is_completed(self) -> bool:
        return self.status is MatchStatus.COMPLETED

    @property
    def winner(self) -> Optional[Winner]:
        if not self.is_completed or self.score_a is None or self.score_b is None:
            return None
        if self.score_a > self.score_b:
            return WINNER_TEAM_A
        if self.score_b > self.score_a:
            return WINNER_TEAM_B
        return WINNER_TIE

    @property
    def player_ids(self) -> tuple:
        return self.team_a.player_ids + self.team_b.player_ids

    def involves_team(self, team_id: str) -> bool:
        return team_id in (self.team_a.id, self.team_b.id)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary; teams are stored by id."""
        return {
            "id": self.id,
            "round_number": self.round_number,
            "match_number": self.match_number,
            "team_a_id": self.team_a.id,
            "team_b_id": self.team_b.id,
            "court": self.court,
            "duration": self.duration,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "status": self.status.value,
            "started_at": format_timestamp(self.started_at),
            "ended_at": format_timestamp(self.ended_at),
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], teams_by_id: Mapping[str, Team]
    ) -> "Match":
        """Deserialize match, resolving team ids against known teams."""
        try:
            team_a = teams_by_id[data["team_a_id"]]
            team_b = teams_by_id[data["team_b_id"]]
        except KeyError as e:
            raise SnapshotLoadException(
                f"Match {data.get('id')} references unknown team {e}"
            ) from e
        return cls(
            id=data["id"],
            round_number=int(data["round_number"]),
            match_number=int(data["match_number"]),
            team_a=team_a,
            team_b=team_b,
            court=int(data["court"]),
            duration=int(data.get("duration", DEFAULT_MATCH_DURATION)),
            score_a=data.get("score_a"),
            score_b=data.get("score_b"),
            status=MatchStatus(data.get("status", MatchStatus.PENDING.value)),
            started_at=parse_timestamp(data.get("started_at")),
            ended_at=parse_timestamp(data.get("ended_at")),
        )
