import pytest

from partnerpairing.models.player import Player, PlayerPool
from partnerpairing.models.tournament import Group, Team, rank_teams


def _make_players(count, start_score=5.0, step=0.1, prefix="P"):
    """Players ``P00``, ``P01``... with strictly decreasing scores."""
    return [
        Player(
            id=f"{prefix}{i:02d}",
            alias=f"Player {i}",
            score=max(0.5, round(start_score - step * i, 1)),
        )
        for i in range(count)
    ]


def _make_group(index, players, corrective=False):
    """A Group pairing the top half of ``players`` with the bottom half."""
    half = len(players) // 2
    teams = [
        Team.create(index, number, upper, lower)
        for number, (upper, lower) in enumerate(
            zip(players[:half], players[half:]), start=1
        )
    ]
    return Group(index=index, teams=rank_teams(teams), corrective=corrective)


@pytest.fixture
def make_players():
    return _make_players


@pytest.fixture
def make_group():
    return _make_group


@pytest.fixture
def pool16():
    return PlayerPool(_make_players(16))


@pytest.fixture
def pool20():
    return PlayerPool(_make_players(20))
