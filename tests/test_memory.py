import pytest

from fantasyleague.memory import (
    MemoryFixtureRepository,
    MemoryLeagueRepository,
    MemoryLineupRepository,
    MemoryPlayerRepository,
    MemorySquadRepository,
    MemoryTeamRepository,
)
from fantasyleague.models import Lineup, Position, Squad, SquadPick
from fantasyleague.seed import (
    LEAGUE_ID_LIGA1_INDONESIA,
    LEAGUE_ID_PREMIER_LEAGUE,
    seed_fixtures,
    seed_leagues,
    seed_players,
    seed_teams,
)


@pytest.fixture
def leagues():
    return MemoryLeagueRepository(seed_leagues())


@pytest.fixture
def players():
    return MemoryPlayerRepository(seed_players())


def test_league_list_keeps_order(leagues):
    assert [league.id for league in leagues.list()] == [
        league.id for league in seed_leagues()
    ]


def test_league_get_by_id(leagues):
    found = leagues.get_by_id(LEAGUE_ID_PREMIER_LEAGUE)
    assert found == seed_leagues()[1]
    assert leagues.get_by_id("missing") is None


def test_league_results_are_copies(leagues):
    leagues.list()[0].name = "changed"
    assert leagues.get_by_id(LEAGUE_ID_LIGA1_INDONESIA).name == seed_leagues()[0].name


def test_team_list_by_league():
    repo = MemoryTeamRepository(seed_teams())
    expected = [t for t in seed_teams() if t.league_id == LEAGUE_ID_PREMIER_LEAGUE]
    assert repo.list_by_league(LEAGUE_ID_PREMIER_LEAGUE) == expected
    assert repo.list_by_league("missing") == []


def test_fixture_list_by_league():
    repo = MemoryFixtureRepository(seed_fixtures())
    expected = [f for f in seed_fixtures() if f.league_id == LEAGUE_ID_LIGA1_INDONESIA]
    result = repo.list_by_league(LEAGUE_ID_LIGA1_INDONESIA)
    assert result == expected
    result.clear()
    assert repo.list_by_league(LEAGUE_ID_LIGA1_INDONESIA) == expected


def test_player_list_by_league(players):
    expected = [p for p in seed_players() if p.league_id == LEAGUE_ID_LIGA1_INDONESIA]
    assert players.list_by_league(LEAGUE_ID_LIGA1_INDONESIA) == expected
    assert players.list_by_league("missing") == []


def test_player_get_by_ids_keeps_request_order_and_skips_unknown(players):
    result = players.get_by_ids(
        LEAGUE_ID_LIGA1_INDONESIA, ["idn-fwd-01", "nope", "idn-gk-01"]
    )
    assert [p.id for p in result] == ["idn-fwd-01", "idn-gk-01"]


def test_player_get_by_ids_respects_league(players):
    assert players.get_by_ids(LEAGUE_ID_PREMIER_LEAGUE, ["idn-gk-01"]) == []
    assert players.get_by_ids(LEAGUE_ID_LIGA1_INDONESIA, []) == []


def test_player_results_are_copies(players):
    players.get_by_ids(LEAGUE_ID_LIGA1_INDONESIA, ["idn-gk-01"])[0].price = 1
    again = players.get_by_ids(LEAGUE_ID_LIGA1_INDONESIA, ["idn-gk-01"])[0]
    assert again.price == seed_players()[0].price


def _lineup(user_id="u1", league_id=LEAGUE_ID_LIGA1_INDONESIA):
    return Lineup(
        user_id=user_id,
        league_id=league_id,
        goalkeeper_id="idn-gk-01",
        defender_ids=["idn-def-01", "idn-def-02"],
        midfielder_ids=["idn-mid-01"],
        forward_ids=["idn-fwd-01"],
        substitute_ids=["idn-gk-02"],
        captain_id="idn-fwd-01",
        vice_captain_id="idn-mid-01",
    )


def test_lineup_missing_returns_none():
    assert MemoryLineupRepository().get_by_user_and_league("u1", "l1") is None


def test_lineup_round_trip_and_isolation():
    repo = MemoryLineupRepository()
    original = _lineup()
    repo.upsert(original)
    original.defender_ids.append("idn-def-03")

    stored = repo.get_by_user_and_league("u1", LEAGUE_ID_LIGA1_INDONESIA)
    assert stored == _lineup()

    stored.forward_ids.clear()
    assert repo.get_by_user_and_league("u1", LEAGUE_ID_LIGA1_INDONESIA) == _lineup()


def test_lineup_upsert_replaces_and_keys_by_user_and_league():
    repo = MemoryLineupRepository()
    repo.upsert(_lineup())
    updated = _lineup()
    updated.captain_id = "idn-mid-01"
    repo.upsert(updated)
    repo.upsert(_lineup(user_id="u2"))

    assert repo.get_by_user_and_league("u1", LEAGUE_ID_LIGA1_INDONESIA).captain_id == "idn-mid-01"
    assert repo.get_by_user_and_league("u2", LEAGUE_ID_LIGA1_INDONESIA) == _lineup(user_id="u2")
    assert repo.get_by_user_and_league("u1", LEAGUE_ID_PREMIER_LEAGUE) is None


def _squad():
    return Squad(
        id="sq-1",
        user_id="u1",
        league_id=LEAGUE_ID_LIGA1_INDONESIA,
        name="Squad",
        picks=[
            SquadPick(player_id="idn-gk-01", team_id="idn-persija", position=Position.GOALKEEPER, price=90),
            SquadPick(player_id="idn-def-02", team_id="idn-persib", position=Position.DEFENDER, price=92),
        ],
        budget_cap=1000,
    )


def test_squad_round_trip_and_isolation():
    repo = MemorySquadRepository()
    original = _squad()
    repo.upsert(original)
    original.picks[0].price = 1
    original.picks.pop()

    stored = repo.get_by_user_and_league("u1", LEAGUE_ID_LIGA1_INDONESIA)
    assert stored == _squad()

    stored.picks.clear()
    assert repo.get_by_user_and_league("u1", LEAGUE_ID_LIGA1_INDONESIA) == _squad()


def test_squad_missing_and_replace():
    repo = MemorySquadRepository()
    assert repo.get_by_user_and_league("u1", LEAGUE_ID_LIGA1_INDONESIA) is None
    repo.upsert(_squad())
    renamed = _squad()
    renamed.name = "Renamed"
    repo.upsert(renamed)
    assert repo.get_by_user_and_league("u1", LEAGUE_ID_LIGA1_INDONESIA).name == "Renamed"