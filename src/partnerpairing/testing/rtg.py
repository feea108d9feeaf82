"""Random Tournament Generator (RTG) - Internal testing system for partner pairings.

This module generates seeded random partner tournaments, plays them to the
end through the public :class:`~partnerpairing.tournament.Tournament` API and
checks the scheduling invariants on the result.
"""

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

import argparse
import json
import random
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from partnerpairing.constants import (
    DEFAULT_COURTS_COUNT,
    MAX_MATCH_SCORE,
    MAX_PLAYER_SCORE,
    MIN_PLAYER_SCORE,
    PLAYERS_PER_COURT,
    TEAMS_PER_COURT,
)
from partnerpairing.controllers.tournament import FairnessSimulator
from partnerpairing.models.enums import Tier
from partnerpairing.models.player import Player
from partnerpairing.models.tournament import Team
from partnerpairing.tournament import Tournament
from partnerpairing.utils import setup_logger

logger = setup_logger(__name__)

ALIASES = [
    "Amber",
    "Azure",
    "Coral",
    "Crimson",
    "Indigo",
    "Jade",
    "Lime",
    "Ochre",
    "Bear",
    "Falcon",
    "Lynx",
    "Otter",
    "Panther",
    "Raven",
    "Tiger",
    "Wolf",
]


class ScoreDistribution(Enum):
    """Skill score distribution patterns for rosters."""

    UNIFORM = "uniform"
    NORMAL = "normal"
    SKEWED = "skewed"
    FLAT = "flat"


class ResultPattern(Enum):
    """Match score generation patterns."""

    REALISTIC = "realistic"
    BALANCED = "balanced"
    RANDOM = "random"


@dataclass
class RTGConfig:
    """Configuration for Random Tournament Generator."""

    num_players: int
    num_rounds: int
    courts_count: int = DEFAULT_COURTS_COUNT
    score_distribution: ScoreDistribution = ScoreDistribution.NORMAL
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    seed: Optional[int] = None
    target_score: int = 21
    pause_rate: float = 0.1
    corrective_rounds: bool = True


@dataclass
class InvariantReport:
    """Scheduling invariants checked over a played tournament."""

    tier_violations: List[str] = field(default_factory=list)
    double_booked_players: List[Tuple[int, str]] = field(default_factory=list)
    capacity_violations: List[int] = field(default_factory=list)
    reused_pairings: int = 0
    consecutive_rests: int = 0
    corrective_groups: int = 0
    match_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def match_spread(self) -> int:
        if not self.match_counts:
            return 0
        return max(self.match_counts.values()) - min(self.match_counts.values())

    @property
    def is_valid(self) -> bool:
        return not (
            self.tier_violations
            or self.double_booked_players
            or self.capacity_violations
        )

    @property
    def summary(self) -> str:
        status = "OK" if self.is_valid else "VIOLATIONS"
        return (
            f"{status}: {len(self.tier_violations)} tier violations, "
            f"{len(self.double_booked_players)} double bookings, "
            f"{len(self.capacity_violations)} capacity violations, "
            f"{self.reused_pairings} reused pairings, "
            f"{self.consecutive_rests} consecutive rests, "
            f"match spread {self.match_spread}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier_violations": self.tier_violations,
            "double_booked_players": self.double_booked_players,
            "capacity_violations": self.capacity_violations,
            "reused_pairings": self.reused_pairings,
            "consecutive_rests": self.consecutive_rests,
            "corrective_groups": self.corrective_groups,
            "match_spread": self.match_spread,
            "is_valid": self.is_valid,
        }


class PlayerFactory:
    """Factory for creating seeded random rosters."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def create_players(self) -> List[Player]:
        """Create players based on configuration."""
        players = []
        for i in range(self.config.num_players):
            number = i + 1
            alias = f"{ALIASES[i % len(ALIASES)]}-{number:03d}"
            players.append(
                Player(
                    id=f"P{number:03d}",
                    alias=alias,
                    score=self._generate_score(),
                    name=f"Player {number}",
                )
            )
        logger.info(
            "Created %s players with %s distribution",
            len(players),
            self.config.score_distribution.value,
        )
        return players

    def _generate_score(self) -> float:
        low, high = MIN_PLAYER_SCORE, MAX_PLAYER_SCORE
        if self.config.score_distribution == ScoreDistribution.UNIFORM:
            value = self.random.uniform(low, high)
        elif self.config.score_distribution == ScoreDistribution.NORMAL:
            value = self.random.gauss((low + high) / 2, (high - low) / 6)
        elif self.config.score_distribution == ScoreDistribution.SKEWED:
            if self.random.random() < 0.7:
                value = self.random.uniform(low, (low + high) / 2)
            else:
                value = self.random.uniform((low + high) / 2, high)
        else:
            value = 2.5
        return round(max(low, min(high, value)), 1)


class ResultSimulator:
    """Simulates match scores between two teams."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def simulate_match_score(self, team_a: Team, team_b: Team) -> Tuple[int, int]:
        """Return (score_a, score_b); the winner reaches the target score."""
        target = min(self.config.target_score, MAX_MATCH_SCORE)
        if self.config.result_pattern == ResultPattern.RANDOM:
            return self.random.randint(0, target), self.random.randint(0, target)

        if self.config.result_pattern == ResultPattern.BALANCED:
            win_prob = 0.5
        else:
            spread = MAX_PLAYER_SCORE - MIN_PLAYER_SCORE
            win_prob = max(0.1, min(0.9, 0.5 + (team_a.score - team_b.score) / spread))

        loser_score = self.random.randint(0, target - 1)
        if self.random.random() < win_prob:
            return target, loser_score
        return loser_score, target


class RandomTournamentGenerator:
    """Main tournament generator orchestrating roster creation and play."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.player_factory = PlayerFactory(config)
        self.result_simulator = ResultSimulator(config)
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def create_tournament(self) -> Tournament:
        return Tournament(
            name=f"RTG {self.config.num_players}p/{self.config.num_rounds}r",
            players=self.player_factory.create_players(),
            num_rounds=self.config.num_rounds,
            courts_count=self.config.courts_count,
            seed=self.config.seed if self.config.seed is not None else 0,
        )

    def generate_complete_tournament(self) -> Dict[str, Any]:
        """Play a whole tournament and check its invariants."""
        logger.info(
            "Generating tournament: %s players, %s rounds, %s courts",
            self.config.num_players,
            self.config.num_rounds,
            self.config.courts_count,
        )
        tournament = self.create_tournament()
        capacity_warnings = tournament.capacity_warnings()

        for _ in range(self.config.num_rounds):
            tournament.generate_group()
            self._play_round(tournament)

        plan_report = tournament.evaluate_plan()
        fairness = tournament.check_fairness()
        if self.config.corrective_rounds and fairness.needs_extra_round:
            tournament.generate_corrective_round()
            self._play_round(tournament)
            fairness = tournament.check_fairness()

        report = check_invariants(tournament)
        logger.info("Tournament generation complete: %s", report.summary)
        return {
            "config": self.config,
            "tournament": tournament,
            "capacity_warnings": capacity_warnings,
            "plan_report": plan_report,
            "fairness": fairness,
            "report": report,
        }

    def _play_round(self, tournament: Tournament) -> None:
        round_data = tournament.schedule_round()
        for match in round_data.matches:
            tournament.start_match(match.id)
            if self.random.random() < self.config.pause_rate:
                tournament.pause_match(match.id)
                tournament.start_match(match.id)
            score_a, score_b = self.result_simulator.simulate_match_score(
                match.team_a, match.team_b
            )
            tournament.complete_match(match.id, score_a, score_b)

    def export_json_format(self, tournament_data: Dict[str, Any]) -> str:
        tournament: Tournament = tournament_data["tournament"]
        export_data = {
            "rtg_config": {
                "num_players": self.config.num_players,
                "num_rounds": self.config.num_rounds,
                "courts_count": self.config.courts_count,
                "score_distribution": self.config.score_distribution.value,
                "result_pattern": self.config.result_pattern.value,
                "seed": self.config.seed,
            },
            "tournament": tournament.to_dict(),
            "report": tournament_data["report"].to_dict(),
        }
        return json.dumps(export_data, indent=2)


def check_invariants(tournament: Tournament) -> InvariantReport:
    """Check tier, booking and capacity invariants over a tournament."""
    report = InvariantReport()
    tiers = tournament.pool.tiers()

    for group in tournament.groups:
        if group.corrective:
            report.corrective_groups += 1
        for team in group.teams:
            if (
                tiers.get(team.upper_player.id) is not Tier.UPPER
                or tiers.get(team.lower_player.id) is not Tier.LOWER
            ):
                report.tier_violations.append(team.id)

    max_teams = tournament.courts_count * TEAMS_PER_COURT
    for round_data in tournament.rounds:
        booked = Counter(round_data.scheduled_player_ids())
        for player_id, count in sorted(booked.items()):
            if count > 1:
                report.double_booked_players.append(
                    (round_data.round_number, player_id)
                )
        basis = tournament.group_repository.get(round_data.basis_group_index)
        expected_playing = min(len(round_data.candidates), max_teams)
        if not basis.corrective and (
            len(round_data.playing_teams) != expected_playing
            or len(round_data.matches) > tournament.courts_count
        ):
            report.capacity_violations.append(round_data.round_number)
        report.consecutive_rests += len(round_data.consecutive_rest_team_ids)

    report.reused_pairings = len(tournament.pairing_history.reused_keys)
    report.match_counts = FairnessSimulator.played_counts(
        tournament.pool, tournament.rounds
    )
    return report


def create_rtg_generator(config: RTGConfig) -> RandomTournamentGenerator:
    """Create RTG tournament generator with given configuration."""
    return RandomTournamentGenerator(config)


def create_small_tournament(
    num_players: int = 8, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create small tournament for testing."""
    config = RTGConfig(
        num_players=num_players,
        num_rounds=3,
        courts_count=max(1, num_players // PLAYERS_PER_COURT),
        seed=seed,
    )
    return create_rtg_generator(config)


def create_normal_tournament(
    num_players: int = 20, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create a club night with more players than court places."""
    config = RTGConfig(num_players=num_players, num_rounds=5, courts_count=4, seed=seed)
    return create_rtg_generator(config)


def create_large_tournament(
    num_players: int = 48, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create large tournament for performance testing."""
    config = RTGConfig(
        num_players=num_players,
        num_rounds=8,
        courts_count=6,
        score_distribution=ScoreDistribution.UNIFORM,
        seed=seed,
    )
    return create_rtg_generator(config)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Random Tournament Generator (RTG)")
    parser.add_argument(
        "--players",
        type=int,
        default=20,
        help="Number of players in the tournament (default: 20)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--type",
        choices=["small", "normal", "large"],
        default="normal",
        help="Tournament type: small, normal (club night), large",
    )
    args = parser.parse_args()

    if args.type == "small":
        generator = create_small_tournament(args.players, seed=args.seed)
    elif args.type == "large":
        generator = create_large_tournament(args.players, seed=args.seed)
    else:
        generator = create_normal_tournament(args.players, seed=args.seed)

    result = generator.generate_complete_tournament()
    print("Generated Tournament:")
    print(f"Players: {len(result['tournament'].players)}")
    print(f"Rounds: {len(result['tournament'].rounds)}")
    print(result["report"].summary)
