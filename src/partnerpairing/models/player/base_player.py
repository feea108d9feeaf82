"""A player on the tournament roster."""

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
from typing import Any, Dict, Optional

from partnerpairing.constants import (
    DEFAULT_PLAYER_SCORE,
    MAX_PLAYER_SCORE,
    MIN_PLAYER_SCORE,
    SCORE_PRECISION,
)
from partnerpairing.exceptions import InvalidPlayerDataException


def normalize_score(score: Any) -> float:
    """Round a player score to one decimal and check it is in range.

    Raises
    ------
    InvalidPlayerDataException
        If the value is not numeric or falls outside the allowed range.
    """
    try:
        value = round(float(score), SCORE_PRECISION)
    except (TypeError, ValueError) as e:
        raise InvalidPlayerDataException(f"Invalid player score: {score!r}") from e
    if not MIN_PLAYER_SCORE <= value <= MAX_PLAYER_SCORE:
        raise InvalidPlayerDataException(
            f"Player score {value} outside {MIN_PLAYER_SCORE}-{MAX_PLAYER_SCORE}"
        )
    return value


@dataclass(frozen=True)
class Player:
    """
    A roster entry.

    Players are immutable values: editing a score or alias replaces the
    entry in the :class:`~partnerpairing.models.player.PlayerPool`. A Team
    keeps the exact Player value it was formed with, so later edits never
    leak into history. The tier is not stored here; it is derived from the
    player's position whenever the pool is ranked.

    Attributes
    ----------
    id : str
        Unique identifier for the player.
    alias : str
        Display alias shown on team cards.
    score : float
        Skill score between 0.5 and 5.0 with one decimal place.
    name : str or None
        Optional full name.
    """

    id: str
    alias: str
    score: float = DEFAULT_PLAYER_SCORE
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise InvalidPlayerDataException("Player id must be a non-empty string")
        if not isinstance(self.alias, str) or not self.alias.strip():
            raise InvalidPlayerDataException(
                f"Player {self.id} needs a non-empty alias"
            )
        object.__setattr__(self, "score", normalize_score(self.score))

    @property
    def display_name(self) -> str:
        return self.name or self.alias

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "alias": self.alias,
            "score": self.score,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        try:
            return cls(
                id=str(data["id"]),
                alias=data.get("alias") or str(data["id"]),
                score=data.get("score", DEFAULT_PLAYER_SCORE),
                name=data.get("name"),
            )
        except KeyError as e:
            raise InvalidPlayerDataException(f"Player data missing {e}") from e
