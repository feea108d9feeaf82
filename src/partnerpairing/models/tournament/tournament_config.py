"""Tournament configuration settings."""

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

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from partnerpairing.constants import (
    DEFAULT_COURTS_COUNT,
    DEFAULT_MATCH_DURATION,
    DEFAULT_TOURNAMENT_NAME,
    PLAYERS_PER_COURT,
)
from partnerpairing.exceptions import InvalidConfigurationException
from partnerpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    num_rounds : int
        Number of planned rounds.
    courts_count : int
        Courts available per round.
    match_duration : int
        Match length in minutes.
    seed : int or None
        Seed for tie-breaks between otherwise equal players. Taken from the
        wall clock when not given.
    extra_rounds : int
        Corrective rounds appended to the plan so far.
    """

    name: str = DEFAULT_TOURNAMENT_NAME
    num_rounds: int = 1
    courts_count: int = DEFAULT_COURTS_COUNT
    match_duration: int = DEFAULT_MATCH_DURATION
    seed: Optional[int] = None
    extra_rounds: int = 0

    def __post_init__(self) -> None:
        if self.seed is None:
            self.seed = time.time_ns()
        self.validate()

    def validate(self) -> None:
        for attr in ("num_rounds", "courts_count", "match_duration"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidConfigurationException(
                    f"{attr} must be a positive integer, got {value!r}"
                )
        if self.extra_rounds < 0:
            raise InvalidConfigurationException("extra_rounds cannot be negative")

    @property
    def total_rounds(self) -> int:
        """Planned rounds plus corrective rounds."""
        return self.num_rounds + self.extra_rounds

    @property
    def max_playing_players(self) -> int:
        return self.courts_count * PLAYERS_PER_COURT

    def capacity_warnings(self, player_count: int) -> List[str]:
        """Advisories for a court count the roster cannot fill."""
        warnings = []
        usable_courts = player_count // PLAYERS_PER_COURT
        if self.courts_count > usable_courts:
            message = (
                f"{self.courts_count} courts configured but {player_count} players "
                f"can only fill {usable_courts}"
            )
            logger.warning(message)
            warnings.append(message)
        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "num_rounds": self.num_rounds,
            "courts_count": self.courts_count,
            "match_duration": self.match_duration,
            "seed": self.seed,
            "extra_rounds": self.extra_rounds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", DEFAULT_TOURNAMENT_NAME),
            num_rounds=data["num_rounds"],
            courts_count=data.get("courts_count", DEFAULT_COURTS_COUNT),
            match_duration=data.get("match_duration", DEFAULT_MATCH_DURATION),
            seed=data.get("seed"),
            extra_rounds=data.get("extra_rounds", 0),
        )
