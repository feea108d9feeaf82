"""Cross-tier partner pairing with player rest rotation."""

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

import random
from typing import Iterable, List, Optional, Sequence, Tuple

from partnerpairing.constants import (
    MIN_CORRECTIVE_TEAMS,
    PLAYERS_PER_COURT,
    PLAYERS_PER_TEAM,
)
from partnerpairing.exceptions import InsufficientPlayersException
from partnerpairing.models.player import Player, PlayerPool
from partnerpairing.models.tournament import (
    Group,
    PairingHistory,
    RestLedger,
    Team,
    pair_key,
    rank_teams,
)
from partnerpairing.type_hints import PairKey
from partnerpairing.utils import setup_logger

logger = setup_logger(__name__)


def tie_break_random(seed: int, group_index: int, revision: int = 0) -> random.Random:
    """Seeded random source for one formation of one Group."""
    return random.Random(f"{seed}:{group_index}:{revision}")


def sort_by_rest_priority(
    players: Sequence[Player],
    rest_ledger: RestLedger,
    group_index: int,
    rng: random.Random,
) -> List[Player]:
    """Order players so that those who most need to play come first.

    1. players who rested in the immediately preceding Group,
    2. then fewer cumulative rests,
    3. then a seeded random tie-break.
    """
    previous = group_index - 1
    draws = {p.id: rng.random() for p in players}
    return sorted(
        players,
        key=lambda p: (
            not rest_ledger.player_rested_in_group(p.id, previous),
            rest_ledger.player_rest_count(p.id),
            draws[p.id],
        ),
    )


def _pair_cross_tier(
    upper: List[Player],
    lower: List[Player],
    teams_to_create: int,
    pairing_history: PairingHistory,
    group_index: int,
) -> Tuple[List[Tuple[Player, Player]], List[PairKey]]:
    """Pair ``upper[i]`` with the first Lower candidate not yet partnered.

    When every remaining Lower candidate was already a partner, the first
    remaining one is taken anyway and the key is reported as reused.
    """
    remaining = list(lower)
    pairs: List[Tuple[Player, Player]] = []
    reused: List[PairKey] = []
    for upper_player in upper[:teams_to_create]:
        if not remaining:
            break
        chosen_index: Optional[int] = None
        for j, candidate in enumerate(remaining):
            if pair_key(upper_player.id, candidate.id) not in pairing_history:
                chosen_index = j
                break
            logger.debug(
                f"Skipping used pairing: {upper_player.alias} + {candidate.alias}"
            )
        if chosen_index is None:
            chosen_index = 0
            key = pair_key(upper_player.id, remaining[0].id)
            reused.append(key)
            logger.warning(
                f"Group {group_index}: reused pairing "
                f"{upper_player.alias} + {remaining[0].alias}, no unused partner left"
            )
        lower_player = remaining.pop(chosen_index)
        pairs.append((upper_player, lower_player))
        logger.debug(
            f"Group {group_index} team {len(pairs)}: "
            f"{upper_player.alias} + {lower_player.alias}"
        )
    return pairs, reused


def _build_group(
    group_index: int,
    pairs: List[Tuple[Player, Player]],
    candidates: Iterable[Player],
    reused: List[PairKey],
    corrective: bool,
    revision: int,
) -> Group:
    teams = [
        Team.create(group_index, number, upper, lower)
        for number, (upper, lower) in enumerate(pairs, start=1)
    ]
    placed = {pid for team in teams for pid in team.player_ids}
    return Group(
        index=group_index,
        teams=rank_teams(teams),
        corrective=corrective,
        revision=revision,
        resting_player_ids=[p.id for p in candidates if p.id not in placed],
        reused_pair_keys=reused,
    )


class PairingEngine:
    """Forms Groups of cross-tier teams.

    ``form_group`` and ``generate_extra_round`` are pure: they read the pool,
    the pairing history and the rest ledger and return a new Group.
    :meth:`commit` writes that Group's pairings and rests into the ledgers.
    Callers own the transaction around the two steps.
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed

    def form_group(
        self,
        pool: PlayerPool,
        group_index: int,
        pairing_history: PairingHistory,
        rest_ledger: RestLedger,
        courts_count: int,
        revision: int = 0,
    ) -> Group:
        """Form the next batch of teams from the current pool.

        Raises:
            InsufficientPlayersException: if either tier is empty
        """
        upper, lower = pool.split_tiers()
        if not upper or not lower:
            raise InsufficientPlayersException(
                f"Cannot form Group {group_index}: {len(upper)} Upper and "
                f"{len(lower)} Lower players"
            )
        if len(upper) != len(lower):
            logger.warning(
                f"Group {group_index}: tier imbalance, {len(upper)} Upper vs "
                f"{len(lower)} Lower"
            )

        max_playing = courts_count * PLAYERS_PER_COURT
        resting_count = max(0, len(pool) - max_playing)
        logger.debug(
            f"Group {group_index}: {len(pool)} players, {max_playing} can play, "
            f"{resting_count} must rest"
        )

        rng = tie_break_random(self.seed, group_index, revision)
        ordered_upper = sort_by_rest_priority(upper, rest_ledger, group_index, rng)
        ordered_lower = sort_by_rest_priority(lower, rest_ledger, group_index, rng)

        teams_to_create = min(
            len(ordered_upper), len(ordered_lower), max_playing // PLAYERS_PER_TEAM
        )
        pairs, reused = _pair_cross_tier(
            ordered_upper, ordered_lower, teams_to_create, pairing_history, group_index
        )
        group = _build_group(
            group_index,
            pairs,
            ordered_upper + ordered_lower,
            reused,
            corrective=False,
            revision=revision,
        )
        logger.info(
            f"Formed Group {group_index} (revision {revision}): {len(group.teams)} "
            f"teams, {len(group.resting_player_ids)} resting, {len(reused)} reused"
        )
        return group

    def generate_extra_round(
        self,
        priority_player_ids: Iterable[str],
        pool: PlayerPool,
        group_index: int,
        pairing_history: PairingHistory,
        rest_ledger: RestLedger,
        revision: int = 0,
    ) -> Group:
        """Form a corrective Group around the players owed a match.

        The smaller tier side is padded from the rest of its tier in rest
        priority order until both sides match, and both sides to at least
        two players so the Group can fill one court. The court count does
        not bound the result.

        Raises:
            InsufficientPlayersException: if no priority player is on the
                roster or the tiers cannot make two teams
        """
        priority = set(priority_player_ids)
        upper, lower = pool.split_tiers()
        rng = tie_break_random(self.seed, group_index, revision)
        ordered_upper = sort_by_rest_priority(upper, rest_ledger, group_index, rng)
        ordered_lower = sort_by_rest_priority(lower, rest_ledger, group_index, rng)

        selected_upper = [p for p in ordered_upper if p.id in priority]
        selected_lower = [p for p in ordered_lower if p.id in priority]
        if not selected_upper and not selected_lower:
            raise InsufficientPlayersException(
                f"Cannot form corrective Group {group_index}: no priority player "
                "is on the roster"
            )
        side = max(len(selected_upper), len(selected_lower), MIN_CORRECTIVE_TEAMS)
        for selected, tier in (
            (selected_upper, ordered_upper),
            (selected_lower, ordered_lower),
        ):
            for player in tier:
                if len(selected) >= side:
                    break
                if player not in selected:
                    selected.append(player)

        target = min(len(selected_upper), len(selected_lower))
        if target < MIN_CORRECTIVE_TEAMS:
            raise InsufficientPlayersException(
                f"Cannot form corrective Group {group_index}: {len(upper)} Upper "
                f"and {len(lower)} Lower players make fewer than "
                f"{MIN_CORRECTIVE_TEAMS} teams"
            )
        pairs, reused = _pair_cross_tier(
            selected_upper, selected_lower, target, pairing_history, group_index
        )
        group = _build_group(
            group_index,
            pairs,
            ordered_upper + ordered_lower,
            reused,
            corrective=True,
            revision=revision,
        )
        logger.info(
            f"Formed corrective Group {group_index}: {len(group.teams)} teams for "
            f"{len(priority)} priority players"
        )
        return group

    @staticmethod
    def commit(
        group: Group, pairing_history: PairingHistory, rest_ledger: RestLedger
    ) -> None:
        """Record a formed Group's pairings, and its rests unless corrective."""
        for team in group.teams:
            pairing_history.add_pairing(
                group.index, team.upper_player.id, team.lower_player.id
            )
        if not group.corrective:
            for player_id in group.resting_player_ids:
                rest_ledger.record_player_rest(player_id, group.index)
