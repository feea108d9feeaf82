"""The active roster and its derived Upper/Lower tiers."""

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
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from partnerpairing.exceptions import (
    DuplicatePlayerException,
    EmptyRosterException,
    PlayerLockedException,
    PlayerNotFoundException,
)
from partnerpairing.models.enums import Tier
from partnerpairing.models.player.base_player import Player
from partnerpairing.utils import setup_logger

logger = setup_logger(__name__)


class PlayerPool:
    """Holds the roster, ranks it by score and splits it into tiers.

    The roster keeps its load order; that order is the stable tie-break when
    two players share a score. Tiers are recomputed from the current scores
    on every call, never cached, so a score edit can move a player across
    the midpoint before the roster is locked.

    Once the first Group is formed the pool is locked and any edit raises
    :class:`PlayerLockedException`.
    """

    def __init__(self, players: Optional[Iterable[Player]] = None) -> None:
        self._players: List[Player] = []
        self._locked = False
        if players is not None:
            self.load(players)

    # ========== Roster ==========

    def load(self, players: Iterable[Player]) -> None:
        """Replace the active roster.

        Raises:
            EmptyRosterException: if no players are given
            DuplicatePlayerException: if two entries share an id
            PlayerLockedException: if teams were already formed
        """
        self._ensure_unlocked()
        roster = list(players)
        if not roster:
            raise EmptyRosterException("Cannot load an empty roster")
        seen = set()
        for player in roster:
            if player.id in seen:
                raise DuplicatePlayerException(f"Duplicate player id: {player.id}")
            seen.add(player.id)
        self._players = roster
        logger.info(f"Loaded roster with {len(roster)} players")

    def add_player(self, player: Player) -> None:
        self._ensure_unlocked()
        if player.id in self:
            raise DuplicatePlayerException(f"Duplicate player id: {player.id}")
        self._players.append(player)
        logger.info(f"Added player: {player.alias} ({player.id})")

    def remove_player(self, player_id: str) -> Player:
        self._ensure_unlocked()
        player = self.get(player_id)
        self._players = [p for p in self._players if p.id != player_id]
        logger.info(f"Removed player: {player.alias} ({player_id})")
        return player

    def update_player(
        self,
        player_id: str,
        alias: Optional[str] = None,
        score: Optional[float] = None,
        name: Optional[str] = None,
    ) -> Player:
        """Edit a player's alias, score or name before teams are locked.

        Returns:
            The replacement Player value
        """
        self._ensure_unlocked()
        current = self.get(player_id)
        changes: Dict[str, Any] = {}
        if alias is not None:
            changes["alias"] = alias
        if score is not None:
            changes["score"] = score
        if name is not None:
            changes["name"] = name
        updated = dataclasses.replace(current, **changes)
        self._players = [updated if p.id == player_id else p for p in self._players]
        logger.info(f"Updated player {player_id}: {changes}")
        return updated

    def get(self, player_id: str) -> Player:
        for player in self._players:
            if player.id == player_id:
                return player
        raise PlayerNotFoundException(f"Player not found: {player_id}")

    @property
    def players(self) -> Tuple[Player, ...]:
        """Players in roster (load) order."""
        return tuple(self._players)

    # ========== Locking ==========

    @property
    def is_locked(self) -> bool:
        return self._locked

    def lock(self) -> None:
        if not self._locked:
            self._locked = True
            logger.info("Roster locked: teams have been formed")

    def unlock(self) -> None:
        self._locked = False

    def _ensure_unlocked(self) -> None:
        if self._locked:
            raise PlayerLockedException(
                "Roster is locked once teams have been formed from it"
            )

    # ========== Ranking & Tiers ==========

    def ranked(self) -> List[Player]:
        """Players sorted by score, highest first, roster order on ties."""
        return sorted(self._players, key=lambda p: -p.score)

    def rankings(self) -> Dict[str, int]:
        """Map player id to 1-based ranking."""
        return {player.id: i + 1 for i, player in enumerate(self.ranked())}

    def split_tiers(self) -> Tuple[List[Player], List[Player]]:
        """Split the ranked roster at the midpoint.

        The top ``floor(n / 2)`` players are Upper; the rest are Lower, so an
        odd roster puts the extra player in the Lower tier.
        """
        ranked = self.ranked()
        midpoint = len(ranked) // 2
        return ranked[:midpoint], ranked[midpoint:]

    def tiers(self) -> Dict[str, Tier]:
        """Map player id to its current tier."""
        upper, lower = self.split_tiers()
        tiers = {p.id: Tier.UPPER for p in upper}
        tiers.update({p.id: Tier.LOWER for p in lower})
        return tiers

    def tier_of(self, player_id: str) -> Tier:
        tiers = self.tiers()
        if player_id not in tiers:
            raise PlayerNotFoundException(f"Player not found: {player_id}")
        return tiers[player_id]

    # ========== Container protocol ==========

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self) -> Iterator[Player]:
        return iter(list(self._players))

    def __contains__(self, player_id: object) -> bool:
        return any(p.id == player_id for p in self._players)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        return {
            "players": [p.to_dict() for p in self._players],
            "locked": self._locked,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerPool":
        pool = cls()
        players = [Player.from_dict(p) for p in data.get("players", [])]
        if players:
            pool.load(players)
        pool._locked = bool(data.get("locked", False))
        return pool
