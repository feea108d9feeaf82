import pytest

from partnerpairing.exceptions import (
    DuplicatePlayerException,
    EmptyRosterException,
    InvalidPlayerDataException,
    PlayerLockedException,
    PlayerNotFoundException,
)
from partnerpairing.models.enums import Tier
from partnerpairing.models.player import Player, PlayerPool


def test_player_score_is_rounded_to_one_decimal():
    assert Player(id="a", alias="A", score=3.14).score == 3.1
    assert Player(id="b", alias="B", score="4.2").score == 4.2


@pytest.mark.parametrize("score", [0.4, 5.1, "strong", None])
def test_player_rejects_invalid_scores(score):
    with pytest.raises(InvalidPlayerDataException):
        Player(id="a", alias="A", score=score)


def test_player_requires_id_and_alias():
    with pytest.raises(InvalidPlayerDataException):
        Player(id="", alias="A")
    with pytest.raises(InvalidPlayerDataException):
        Player(id="a", alias="  ")


def test_ranked_orders_by_score_and_keeps_roster_order_on_ties():
    pool = PlayerPool(
        [
            Player(id="a", alias="A", score=3.0),
            Player(id="b", alias="B", score=4.5),
            Player(id="c", alias="C", score=3.0),
            Player(id="d", alias="D", score=1.0),
        ]
    )
    assert [p.id for p in pool.ranked()] == ["b", "a", "c", "d"]
    assert pool.rankings() == {"b": 1, "a": 2, "c": 3, "d": 4}


def test_split_tiers_puts_extra_player_in_lower_tier(make_players):
    pool = PlayerPool(make_players(5))
    upper, lower = pool.split_tiers()
    assert [p.id for p in upper] == ["P00", "P01"]
    assert [p.id for p in lower] == ["P02", "P03", "P04"]


def test_tier_follows_score_edits(make_players):
    pool = PlayerPool(make_players(4))
    assert pool.tier_of("P03") is Tier.LOWER

    pool.update_player("P03", score=5.0)

    assert pool.tier_of("P03") is Tier.UPPER
    assert pool.tier_of("P01") is Tier.LOWER
    assert pool.get("P03").score == 5.0


def test_load_rejects_empty_and_duplicate_rosters():
    pool = PlayerPool()
    with pytest.raises(EmptyRosterException):
        pool.load([])
    with pytest.raises(DuplicatePlayerException):
        pool.load([Player(id="a", alias="A"), Player(id="a", alias="Again")])


def test_add_and_remove_player(make_players):
    pool = PlayerPool(make_players(3))
    pool.add_player(Player(id="new", alias="Newcomer", score=2.0))
    assert "new" in pool
    assert len(pool) == 4

    removed = pool.remove_player("P00")
    assert removed.id == "P00"
    assert "P00" not in pool

    with pytest.raises(DuplicatePlayerException):
        pool.add_player(Player(id="new", alias="Twin"))
    with pytest.raises(PlayerNotFoundException):
        pool.get("P00")


def test_locked_pool_rejects_edits(make_players):
    pool = PlayerPool(make_players(4))
    pool.lock()

    with pytest.raises(PlayerLockedException):
        pool.add_player(Player(id="late", alias="Late"))
    with pytest.raises(PlayerLockedException):
        pool.update_player("P00", score=1.0)
    with pytest.raises(PlayerLockedException):
        pool.remove_player("P00")
    with pytest.raises(PlayerLockedException):
        pool.load(make_players(6))

    pool.unlock()
    pool.update_player("P00", alias="Renamed")
    assert pool.get("P00").alias == "Renamed"


def test_pool_serialization_keeps_order_and_lock(make_players):
    pool = PlayerPool(make_players(6))
    pool.lock()

    restored = PlayerPool.from_dict(pool.to_dict())

    assert [p.id for p in restored.players] == [p.id for p in pool.players]
    assert restored.is_locked
