"""Ordered history of formed Groups."""

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

from typing import Any, Collection, Dict, Iterable, Iterator, List, Optional

from partnerpairing.exceptions import (
    GroupNotFoundException,
    GroupRegenerationException,
    TournamentCompleteException,
)
from partnerpairing.models.player import PlayerPool
from partnerpairing.models.tournament import Group, PairingHistory, RestLedger, Team
from partnerpairing.pairing import PairingEngine
from partnerpairing.utils import setup_logger

logger = setup_logger(__name__)


class GroupRepository:
    """Append-only history of Groups, the source of truth for partnerships.

    The only in-place change allowed is regenerating the most recent Group,
    which is done as one transaction on staged copies of the pairing history
    and rest ledger: either the new Group and both ledgers are swapped in
    together, or nothing changes.
    """

    def __init__(
        self,
        engine: PairingEngine,
        pairing_history: PairingHistory,
        rest_ledger: RestLedger,
    ):
        self.engine = engine
        self.pairing_history = pairing_history
        self.rest_ledger = rest_ledger
        self.groups: List[Group] = []

    @property
    def normal_group_count(self) -> int:
        return sum(1 for group in self.groups if not group.corrective)

    @property
    def next_index(self) -> int:
        return len(self.groups) + 1

    def get(self, group_index: int) -> Group:
        """Get a Group by its 1-based index.

        Raises:
            GroupNotFoundException: if no such Group exists
        """
        if 1 <= group_index <= len(self.groups):
            return self.groups[group_index - 1]
        raise GroupNotFoundException(f"Group {group_index} does not exist")

    def latest(self) -> Optional[Group]:
        return self.groups[-1] if self.groups else None

    def teams_by_id(self) -> Dict[str, Team]:
        return {team.id: team for group in self.groups for team in group.teams}

    def add_group(
        self, pool: PlayerPool, courts_count: int, max_normal_groups: int
    ) -> Group:
        """Form the next normal Group and append it.

        Raises:
            TournamentCompleteException: if every planned round has a Group
            InsufficientPlayersException: if either tier is empty
        """
        if self.normal_group_count >= max_normal_groups:
            raise TournamentCompleteException(
                f"All {max_normal_groups} planned Groups have been formed"
            )
        group = self.engine.form_group(
            pool,
            self.next_index,
            self.pairing_history,
            self.rest_ledger,
            courts_count,
        )
        self.engine.commit(group, self.pairing_history, self.rest_ledger)
        self.groups.append(group)
        return group

    def add_corrective_group(
        self, priority_player_ids: Iterable[str], pool: PlayerPool
    ) -> Group:
        """Synthesize a corrective Group for the given players and append it."""
        group = self.engine.generate_extra_round(
            priority_player_ids,
            pool,
            self.next_index,
            self.pairing_history,
            self.rest_ledger,
        )
        self.engine.commit(group, self.pairing_history, self.rest_ledger)
        self.groups.append(group)
        return group

    def regenerate(
        self,
        group_index: int,
        pool: PlayerPool,
        courts_count: int,
        scheduled_team_ids: Collection[str] = (),
    ) -> Group:
        """Replace a Group's teams: roll back its contribution, then re-form it.

        Only the most recent Group can be regenerated, and only while none
        of its teams has been scheduled into a Round.

        Raises:
            GroupNotFoundException: if the Group does not exist
            GroupRegenerationException: if the Group is not regenerable
        """
        current = self.get(group_index)
        if group_index != len(self.groups):
            raise GroupRegenerationException(
                f"Only the most recent Group ({len(self.groups)}) can be "
                f"regenerated, not Group {group_index}"
            )
        played = [tid for tid in current.team_ids if tid in scheduled_team_ids]
        if played:
            raise GroupRegenerationException(
                f"Group {group_index} already has teams in scheduled rounds: {played}"
            )

        staged_history = self.pairing_history.copy()
        staged_ledger = self.rest_ledger.copy()
        removed = staged_history.rollback_group(group_index)
        staged_ledger.rollback_group(group_index)
        logger.debug(
            f"Group {group_index}: rolled back {len(removed)} pairings "
            f"({len(self.pairing_history)} -> {len(staged_history)})"
        )

        revision = current.revision + 1
        if current.corrective:
            replacement = self.engine.generate_extra_round(
                current.player_ids,
                pool,
                group_index,
                staged_history,
                staged_ledger,
                revision=revision,
            )
        else:
            replacement = self.engine.form_group(
                pool,
                group_index,
                staged_history,
                staged_ledger,
                courts_count,
                revision=revision,
            )
        self.engine.commit(replacement, staged_history, staged_ledger)

        self.pairing_history.load_state(staged_history)
        self.rest_ledger.load_state(staged_ledger)
        self.groups[group_index - 1] = replacement
        logger.info(f"Regenerated Group {group_index} (revision {revision})")
        return replacement

    def clear(self) -> None:
        self.groups = []

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[Group]:
        return iter(list(self.groups))

    def to_dict(self) -> List[Dict[str, Any]]:
        return [group.to_dict() for group in self.groups]

    def load_groups(self, data: List[Dict[str, Any]]) -> None:
        self.groups = [Group.from_dict(g) for g in data]
