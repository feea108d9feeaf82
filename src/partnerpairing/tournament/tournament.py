"""Tournament facade tying the pool, Groups, Rounds and results together."""

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

import functools
import json
import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple

from partnerpairing.constants import (
    DEFAULT_COURTS_COUNT,
    DEFAULT_MATCH_DURATION,
    DEFAULT_TOURNAMENT_NAME,
    SNAPSHOT_KEY,
)
from partnerpairing.controllers.tournament import (
    FairnessReport,
    FairnessSimulator,
    GroupRepository,
    RestDistributionReport,
    ResultRecorder,
    RoundScheduler,
)
from partnerpairing.exceptions import (
    PartnerPairingException,
    SnapshotLoadException,
    SnapshotSaveException,
    TournamentStateException,
)
from partnerpairing.models.player import Player, PlayerPool
from partnerpairing.models.tournament import (
    Group,
    Match,
    MatchResult,
    MatchResultSink,
    PairingHistory,
    RestLedger,
    RoundData,
    TeamRestStats,
    TournamentConfig,
)
from partnerpairing.pairing import PairingEngine
from partnerpairing.utils import setup_logger
from partnerpairing.utils.snapshot_store import SnapshotStore

logger = setup_logger(__name__)


def synchronized(method):
    """Run a Tournament method while holding the tournament's lock."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class Tournament:
    """Main tournament management class.

    This class coordinates all tournament operations through specialized
    components:
    - PairingEngine / GroupRepository: form and keep the Groups of teams
    - RoundScheduler: turns Groups into Rounds of matches on courts
    - ResultRecorder: drives matches and hands results to the sinks
    - FairnessSimulator: predicts match-count imbalance

    Every mutating call holds one re-entrant lock, so a tournament shared
    between threads has a single writer at a time. A call that raises
    leaves the tournament as it was.
    """

    def __init__(
        self,
        name: str = DEFAULT_TOURNAMENT_NAME,
        players: Optional[Iterable[Player]] = None,
        num_rounds: int = 1,
        courts_count: int = DEFAULT_COURTS_COUNT,
        match_duration: int = DEFAULT_MATCH_DURATION,
        seed: Optional[int] = None,
        config: Optional[TournamentConfig] = None,
        sinks: Iterable[MatchResultSink] = (),
    ) -> None:
        """Initialize a new tournament.

        Args
        ----
        name: Tournament name
        players: Initial roster
        num_rounds: Number of planned rounds
        courts_count: Courts available per round
        match_duration: Match length in minutes
        seed: Tie-break seed, wall clock when omitted
        config: Full configuration, overrides the individual settings
        sinks: Receivers of completed match results
        """
        self.config = config or TournamentConfig(
            name=name,
            num_rounds=num_rounds,
            courts_count=courts_count,
            match_duration=match_duration,
            seed=seed,
        )
        self.pool = PlayerPool(players) if players else PlayerPool()
        self.pairing_history = PairingHistory()
        self.rest_ledger = RestLedger()

        self.engine = PairingEngine(self.config.seed)
        self.group_repository = GroupRepository(
            self.engine, self.pairing_history, self.rest_ledger
        )
        self.round_scheduler = RoundScheduler(
            self.config, self.group_repository, self.rest_ledger
        )
        self.result_recorder = ResultRecorder(sinks)
        self.fairness_simulator = FairnessSimulator()
        self._lock = threading.RLock()

    # ========== Properties ==========

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def num_rounds(self) -> int:
        return self.config.num_rounds

    @property
    def total_rounds(self) -> int:
        """Planned rounds plus corrective rounds."""
        return self.config.total_rounds

    @property
    def courts_count(self) -> int:
        return self.config.courts_count

    @property
    def players(self) -> List[Player]:
        return list(self.pool.players)

    @property
    def groups(self) -> List[Group]:
        return list(self.group_repository.groups)

    @property
    def rounds(self) -> List[RoundData]:
        return list(self.round_scheduler.rounds)

    @property
    def current_round_number(self) -> int:
        return self.round_scheduler.current_round_number

    @property
    def is_complete(self) -> bool:
        """True once every planned round is scheduled and completed."""
        rounds = self.round_scheduler.rounds
        return len(rounds) >= self.total_rounds and all(
            r.is_completed for r in rounds
        )

    # ========== Player Management ==========

    @synchronized
    def load_players(self, players: Iterable[Player]) -> None:
        self.pool.load(players)

    @synchronized
    def add_player(self, player: Player) -> None:
        self.pool.add_player(player)

    @synchronized
    def remove_player(self, player_id: str) -> Player:
        return self.pool.remove_player(player_id)

    @synchronized
    def update_player(
        self,
        player_id: str,
        alias: Optional[str] = None,
        score: Optional[float] = None,
        name: Optional[str] = None,
    ) -> Player:
        return self.pool.update_player(player_id, alias=alias, score=score, name=name)

    def capacity_warnings(self) -> List[str]:
        """Advisories for courts the roster cannot fill."""
        return self.config.capacity_warnings(len(self.pool))

    # ========== Groups ==========

    @synchronized
    def generate_group(self) -> Group:
        """Form the next Group of teams and lock the roster.

        Raises:
            InsufficientPlayersException: if either tier is empty
            TournamentCompleteException: if every planned round has a Group
        """
        self.capacity_warnings()
        group = self.group_repository.add_group(
            self.pool, self.config.courts_count, self.config.num_rounds
        )
        self.pool.lock()
        return group

    @synchronized
    def regenerate_group(self, group_index: int) -> Group:
        """Shuffle the most recent Group's teams.

        Raises:
            GroupNotFoundException: if the Group does not exist
            GroupRegenerationException: if it is not the latest Group or
                its teams were already scheduled
        """
        return self.group_repository.regenerate(
            group_index,
            self.pool,
            self.config.courts_count,
            self.round_scheduler.scheduled_team_ids(),
        )

    # ========== Rounds ==========

    @synchronized
    def schedule_round(self, round_number: Optional[int] = None) -> RoundData:
        """Schedule the next round from the Groups formed so far."""
        return self.round_scheduler.schedule_round(round_number)

    def get_round(self, round_number: int) -> RoundData:
        return self.round_scheduler.get_round(round_number)

    def team_rest_statistics(self) -> Dict[str, TeamRestStats]:
        return self.round_scheduler.team_rest_statistics()

    def validate_rest_distribution(self) -> RestDistributionReport:
        return self.round_scheduler.validate_rest_distribution()

    # ========== Matches ==========

    def _find_match(self, match_id: str) -> Tuple[RoundData, Match]:
        return self.result_recorder.find_match(self.round_scheduler.rounds, match_id)

    @synchronized
    def start_match(self, match_id: str) -> None:
        _, match = self._find_match(match_id)
        self.result_recorder.start_match(match)

    @synchronized
    def pause_match(self, match_id: str) -> None:
        _, match = self._find_match(match_id)
        self.result_recorder.pause_match(match)

    @synchronized
    def expire_match(self, match_id: str) -> None:
        _, match = self._find_match(match_id)
        self.result_recorder.expire_match(match)

    @synchronized
    def reset_match(self, match_id: str) -> None:
        _, match = self._find_match(match_id)
        self.result_recorder.reset_match(match)

    @synchronized
    def complete_match(
        self, match_id: str, score_a: int, score_b: int
    ) -> MatchResult:
        """Record a final score; completes the round when it was the last match."""
        round_data, match = self._find_match(match_id)
        result = self.result_recorder.complete_match(
            round_data, match, score_a, score_b
        )
        if self.is_complete:
            logger.info(f"Tournament {self.name} is complete")
        return result

    def add_result_sink(self, sink: MatchResultSink) -> None:
        self.result_recorder.add_sink(sink)

    # ========== Fairness ==========

    def evaluate_plan(self) -> FairnessReport:
        """Project match counts for the planned rounds from scratch."""
        return self.fairness_simulator.evaluate(
            self.pool, self.config.num_rounds, self.config.courts_count
        )

    @synchronized
    def check_fairness(self) -> FairnessReport:
        """Project the remaining rounds on top of the matches already played."""
        played = self.fairness_simulator.played_counts(
            self.pool, self.round_scheduler.rounds
        )
        remaining = max(0, self.total_rounds - self.current_round_number)
        return self.fairness_simulator.evaluate(
            self.pool, remaining, self.config.courts_count, played_counts=played
        )

    @synchronized
    def generate_corrective_round(
        self, priority_player_ids: Optional[Iterable[str]] = None
    ) -> Group:
        """Append a corrective Group and extend the plan by one round.

        Without explicit ids, the players at the projected minimum are
        prioritized, and only when the projection calls for an extra round.

        Raises:
            TournamentStateException: if no extra round is needed
            InsufficientPlayersException: if no team can be formed
        """
        if priority_player_ids is None:
            report = self.check_fairness()
            if not report.needs_extra_round:
                raise TournamentStateException(
                    f"No extra round needed: projected matches range "
                    f"{report.min_matches}-{report.max_matches}"
                )
            priority_player_ids = report.players_at_minimum()
        group = self.group_repository.add_corrective_group(
            priority_player_ids, self.pool
        )
        self.config.extra_rounds += 1
        self.pool.lock()
        logger.info(
            f"Plan extended to {self.total_rounds} rounds for corrective "
            f"Group {group.index}"
        )
        return group

    # ========== Reset ==========

    @synchronized
    def reset(self) -> None:
        """Drop every Group, Round and ledger entry and unlock the roster."""
        self.group_repository.clear()
        self.round_scheduler.clear()
        self.pairing_history.load_state(PairingHistory())
        self.rest_ledger.load_state(RestLedger())
        self.config.extra_rounds = 0
        self.pool.unlock()
        logger.info(f"Tournament {self.name} reset")

    # ========== Serialization ==========

    @synchronized
    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary.

        Returns:
            Dictionary containing all tournament data
        """
        return {
            "config": self.config.to_dict(),
            "players": self.pool.to_dict(),
            "groups": self.group_repository.to_dict(),
            "rounds": self.round_scheduler.to_dict(),
            "pairing_history": self.pairing_history.to_dict(),
            "rest_ledger": self.rest_ledger.to_dict(),
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], sinks: Iterable[MatchResultSink] = ()
    ) -> "Tournament":
        """Deserialize tournament from dictionary.

        Raises:
            SnapshotLoadException: if the data is malformed
        """
        try:
            config = TournamentConfig.from_dict(data["config"])
            tournament = cls(config=config, sinks=sinks)
            tournament.pool = PlayerPool.from_dict(data.get("players", {}))
            tournament.pairing_history.load_state(
                PairingHistory.from_dict(data.get("pairing_history", {}))
            )
            tournament.rest_ledger.load_state(
                RestLedger.from_dict(data.get("rest_ledger", {}))
            )
            tournament.group_repository.load_groups(data.get("groups", []))
            tournament.round_scheduler.load_rounds(
                data.get("rounds", []), tournament.group_repository.teams_by_id()
            )
        except SnapshotLoadException:
            raise
        except (KeyError, TypeError, ValueError, PartnerPairingException) as e:
            raise SnapshotLoadException(f"Malformed tournament snapshot: {e}") from e

        logger.info(f"Loaded tournament: {tournament.name}")
        return tournament

    def save(self, store: SnapshotStore, key: str = SNAPSHOT_KEY) -> None:
        """Write the whole tournament state to a snapshot store."""
        try:
            payload = json.dumps(self.to_dict(), indent=2).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SnapshotSaveException(f"Cannot serialize tournament: {e}") from e
        store.set(key, payload)
        logger.info(f"Saved tournament {self.name} under {key!r}")

    @classmethod
    def load(
        cls,
        store: SnapshotStore,
        key: str = SNAPSHOT_KEY,
        sinks: Iterable[MatchResultSink] = (),
    ) -> "Tournament":
        """Read a tournament back from a snapshot store.

        Raises:
            SnapshotLoadException: if the key is missing or unreadable
        """
        payload = store.get(key)
        if payload is None:
            raise SnapshotLoadException(f"No tournament snapshot under {key!r}")
        try:
            data = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SnapshotLoadException(f"Corrupt tournament snapshot: {e}") from e
        return cls.from_dict(data, sinks=sinks)
