import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from partnerpairing.exceptions import (
    GroupRegenerationException,
    InsufficientPlayersException,
    InvalidConfigurationException,
    MatchNotFoundException,
    PlayerLockedException,
    SnapshotLoadException,
    SnapshotSaveException,
    TournamentCompleteException,
)
from partnerpairing.models.enums import MatchStatus
from partnerpairing.models.player import Player
from partnerpairing.tournament import Tournament
from partnerpairing.utils.snapshot_store import (
    InMemorySnapshotStore,
    JsonFileSnapshotStore,
)


@pytest.fixture
def tournament(make_players):
    return Tournament(
        name="Club Night",
        players=make_players(20),
        num_rounds=3,
        courts_count=4,
        seed=1234,
    )


def _play_round(tournament, scores=(21, 15)):
    round_data = tournament.schedule_round()
    for match in round_data.matches:
        tournament.start_match(match.id)
        tournament.complete_match(match.id, *scores)
    return round_data


def test_invalid_configuration_is_rejected(make_players):
    with pytest.raises(InvalidConfigurationException):
        Tournament(players=make_players(8), num_rounds=0)
    with pytest.raises(InvalidConfigurationException):
        Tournament(players=make_players(8), courts_count=-1)


def test_capacity_warnings(make_players):
    full = Tournament(players=make_players(16), courts_count=4)
    assert full.capacity_warnings() == []
    short = Tournament(players=make_players(10), courts_count=4)
    warnings = short.capacity_warnings()
    assert len(warnings) == 1
    assert "can only fill 2" in warnings[0]


def test_roster_locks_once_teams_are_formed(tournament):
    tournament.update_player("P00", score=4.0)
    tournament.generate_group()

    with pytest.raises(PlayerLockedException):
        tournament.add_player(Player(id="late", alias="Late"))
    with pytest.raises(PlayerLockedException):
        tournament.update_player("P01", score=1.0)

    tournament.reset()
    assert tournament.groups == []
    assert tournament.rounds == []
    assert len(tournament.pairing_history) == 0
    tournament.add_player(Player(id="late", alias="Late"))


def test_full_event_completes(tournament):
    for _ in range(tournament.num_rounds):
        tournament.generate_group()
        round_data = _play_round(tournament)
        assert round_data.is_completed

    assert tournament.is_complete
    with pytest.raises(TournamentCompleteException):
        tournament.generate_group()
    with pytest.raises(TournamentCompleteException):
        tournament.schedule_round()


def test_regenerate_through_the_facade(tournament):
    group = tournament.generate_group()
    replacement = tournament.regenerate_group(group.index)
    assert replacement.revision == 1
    assert tournament.groups == [replacement]

    tournament.schedule_round()
    with pytest.raises(GroupRegenerationException):
        tournament.regenerate_group(group.index)


def test_sinks_are_notified(tournament):
    received = []

    class Sink:
        def on_match_completed(self, result):
            received.append(result)

    tournament.add_result_sink(Sink())
    tournament.generate_group()
    round_data = _play_round(tournament, scores=(11, 21))

    assert [r.match_id for r in received] == [m.id for m in round_data.matches]
    assert all((r.score_a, r.score_b) == (11, 21) for r in received)


def test_unknown_match_raises(tournament):
    with pytest.raises(MatchNotFoundException):
        tournament.start_match("R1M1")


def test_snapshot_round_trip_in_memory(tournament):
    tournament.generate_group()
    _play_round(tournament)
    tournament.generate_group()
    round_data = tournament.schedule_round()
    tournament.start_match(round_data.matches[0].id)

    store = InMemorySnapshotStore()
    tournament.save(store)
    restored = Tournament.load(store)

    assert restored.to_dict() == tournament.to_dict()
    assert restored.pool.is_locked
    assert restored.get_round(2).matches[0].status is MatchStatus.ACTIVE

    # the restored tournament carries on where the original stopped
    match_id = round_data.matches[0].id
    restored.complete_match(match_id, 21, 18)
    assert restored.get_round(2).get_match(match_id).is_completed


def test_snapshot_round_trip_on_disk(tournament, tmp_path):
    tournament.generate_group()
    _play_round(tournament)
    store = JsonFileSnapshotStore(tmp_path)

    tournament.save(store, key="club-night")

    snapshot = json.loads((tmp_path / "club-night.json").read_text())
    assert set(snapshot) == {
        "config",
        "players",
        "groups",
        "rounds",
        "pairing_history",
        "rest_ledger",
    }
    restored = Tournament.load(store, key="club-night")
    assert restored.to_dict() == tournament.to_dict()


def test_loading_missing_or_corrupt_snapshots(tmp_path):
    store = InMemorySnapshotStore()
    with pytest.raises(SnapshotLoadException):
        Tournament.load(store)

    store.set("tournament", b"{not json")
    with pytest.raises(SnapshotLoadException):
        Tournament.load(store)

    with pytest.raises(SnapshotLoadException):
        Tournament.from_dict({"config": {}})

    with pytest.raises(SnapshotSaveException):
        JsonFileSnapshotStore(tmp_path).set("../escape", b"{}")


def test_concurrent_group_formation_is_serialized(tournament):
    with ThreadPoolExecutor(max_workers=3) as executor:
        groups = list(executor.map(lambda _: tournament.generate_group(), range(3)))

    assert sorted(g.index for g in groups) == [1, 2, 3]
    history_keys = tournament.pairing_history.pair_keys
    for group in groups:
        assert set(group.pair_keys) <= history_keys


def test_corrective_round_from_one_player_fills_a_court(make_players):
    tournament = Tournament(players=make_players(8), num_rounds=1, seed=6)
    tournament.generate_group()
    _play_round(tournament)
    assert tournament.is_complete

    group = tournament.generate_corrective_round(["P00"])

    assert len(group.teams) == 2
    assert not tournament.is_complete
    round_data = _play_round(tournament)
    assert len(round_data.matches) == 1
    assert round_data.is_completed
    assert tournament.is_complete


def test_tiny_roster_still_completes(make_players):
    tournament = Tournament(players=make_players(3), num_rounds=1, seed=6)
    tournament.generate_group()

    round_data = tournament.schedule_round()

    assert round_data.matches == []
    assert round_data.is_completed
    assert tournament.is_complete
    with pytest.raises(InsufficientPlayersException):
        tournament.generate_corrective_round(["P02"])
    assert tournament.total_rounds == 1
