"""Enumerations shared by the data models."""

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

from enum import Enum
from typing import Dict, FrozenSet


class Tier(Enum):
    """Skill tier, derived from a player's position in the ranked pool."""

    UPPER = "upper"
    LOWER = "lower"


class MatchStatus(Enum):
    """Lifecycle status of a match."""

    PENDING = "pending"
    ACTIVE = "active"
    PAUSED = "paused"
    EXPIRED = "expired"
    COMPLETED = "completed"

    @property
    def is_terminal(self) -> bool:
        return self is MatchStatus.COMPLETED

    def can_transition_to(self, target: "MatchStatus") -> bool:
        """Check whether ``target`` is reachable from this status in one step."""
        return target in MATCH_TRANSITIONS[self]


# Allowed single-step transitions. A reset back to PENDING is allowed from
# every non-terminal status that has left PENDING.
MATCH_TRANSITIONS: Dict[MatchStatus, FrozenSet[MatchStatus]] = {
    MatchStatus.PENDING: frozenset({MatchStatus.ACTIVE}),
    MatchStatus.ACTIVE: frozenset(
        {
            MatchStatus.PAUSED,
            MatchStatus.EXPIRED,
            MatchStatus.COMPLETED,
            MatchStatus.PENDING,
        }
    ),
    MatchStatus.PAUSED: frozenset({MatchStatus.ACTIVE, MatchStatus.PENDING}),
    MatchStatus.EXPIRED: frozenset({MatchStatus.COMPLETED, MatchStatus.PENDING}),
    MatchStatus.COMPLETED: frozenset(),
}
