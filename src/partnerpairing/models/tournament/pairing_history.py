"""Anti-duplication ledger of partnerships."""

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
from typing import Any, Dict, List, Set

from partnerpairing.type_hints import PairKey


def pair_key(player1_id: str, player2_id: str) -> PairKey:
    return frozenset({player1_id, player2_id})


@dataclass
class PairingHistory:
    """
    Tracks every partnership ever formed to prevent repeat teams.

    Keys are recorded per contributing Group so that rolling back one Group
    only forgets keys no other Group produced.

    Attributes
    ----------
    group_pairings : dict of int to list of frozenset of str
        Pair keys contributed by each Group, in formation order.
    reused_pairings : dict of int to list of frozenset of str
        Pair keys each Group had to repeat because the pairing space was
        exhausted.
    """

    group_pairings: Dict[int, List[PairKey]] = field(default_factory=dict)
    reused_pairings: Dict[int, List[PairKey]] = field(default_factory=dict)

    def add_pairing(self, group_index: int, player1_id: str, player2_id: str) -> bool:
        """Record that two players were partnered in a Group.

        Returns:
            True if the partnership already existed (a reused pairing)
        """
        key = pair_key(player1_id, player2_id)
        reused = key in self
        self.group_pairings.setdefault(group_index, []).append(key)
        if reused:
            self.reused_pairings.setdefault(group_index, []).append(key)
        return reused

    def have_partnered(self, player1_id: str, player2_id: str) -> bool:
        """Check if two players have previously been on the same team."""
        return pair_key(player1_id, player2_id) in self

    @property
    def pair_keys(self) -> Set[PairKey]:
        return {key for keys in self.group_pairings.values() for key in keys}

    @property
    def reused_keys(self) -> Set[PairKey]:
        return {key for keys in self.reused_pairings.values() for key in keys}

    def rollback_group(self, group_index: int) -> Set[PairKey]:
        """Forget everything a Group contributed.

        Returns:
            The keys that are no longer in the history afterwards
        """
        before = self.pair_keys
        self.group_pairings.pop(group_index, None)
        self.reused_pairings.pop(group_index, None)
        return before - self.pair_keys

    def copy(self) -> "PairingHistory":
        return PairingHistory(
            group_pairings={g: list(k) for g, k in self.group_pairings.items()},
            reused_pairings={g: list(k) for g, k in self.reused_pairings.items()},
        )

    def load_state(self, other: "PairingHistory") -> None:
        """Replace this history's contents with another's, in place."""
        self.group_pairings = {g: list(k) for g, k in other.group_pairings.items()}
        self.reused_pairings = {g: list(k) for g, k in other.reused_pairings.items()}

    def __contains__(self, key: object) -> bool:
        return any(key in keys for keys in self.group_pairings.values())

    def __len__(self) -> int:
        return len(self.pair_keys)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "group_pairings": {
                str(g): [sorted(key) for key in keys]
                for g, keys in self.group_pairings.items()
            },
            "reused_pairings": {
                str(g): [sorted(key) for key in keys]
                for g, keys in self.reused_pairings.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        return cls(
            group_pairings={
                int(g): [frozenset(map(str, key)) for key in keys]
                for g, keys in data.get("group_pairings", {}).items()
            },
            reused_pairings={
                int(g): [frozenset(map(str, key)) for key in keys]
                for g, keys in data.get("reused_pairings", {}).items()
            },
        )
