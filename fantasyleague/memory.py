"""In-memory repository implementations."""

from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from fantasyleague.models import Fixture, League, Lineup, Player, Squad, Team


def _pair_key(user_id: str, league_id: str) -> tuple[str, str]:
    return (user_id, league_id)


def _clone_lineup(item: Lineup) -> Lineup:
    return replace(
        item,
        defender_ids=list(item.defender_ids),
        midfielder_ids=list(item.midfielder_ids),
        forward_ids=list(item.forward_ids),
        substitute_ids=list(item.substitute_ids),
    )


def _clone_squad(squad: Squad) -> Squad:
    return replace(squad, picks=[replace(pick) for pick in squad.picks])


class MemoryFixtureRepository:
    """Fixtures held in memory, grouped by league."""

    def __init__(self, fixtures: Iterable[Fixture] = ()) -> None:
        self._lock = threading.Lock()
        self._by_league: dict[str, list[Fixture]] = defaultdict(list)
        for item in fixtures:
            self._by_league[item.league_id].append(replace(item))

    def list_by_league(self, league_id: str) -> list[Fixture]:
        """Return the fixtures of a league in insertion order."""
        with self._lock:
            return [replace(item) for item in self._by_league.get(league_id, ())]


class MemoryLeagueRepository:
    """Leagues held in memory, listed in insertion order."""

    def __init__(self, leagues: Iterable[League] = ()) -> None:
        self._lock = threading.Lock()
        self._items: dict[str, League] = {}
        for league in leagues:
            self._items[league.id] = replace(league)
        # Keep every id as given, as the listing repeats duplicates in order.
        self._order = [league.id for league in self._items.values()]
        self._order = [league_id for league_id in self._iter_ids(leagues)]

    @staticmethod
    def _iter_ids(leagues: Iterable[League]) -> list[str]:
        return [league.id for league in leagues]

    def list(self) -> list[League]:
        """Return all leagues."""
        with self._lock:
            return [replace(self._items[league_id]) for league_id in self._order]

    def get_by_id(self, league_id: str) -> Optional[League]:
        """Return the league with ``league_id``, or None."""
        with self._lock:
            item = self._items.get(league_id)
            return replace(item) if item is not None else None


class MemoryLineupRepository:
    """Lineups held in memory, keyed by user and league."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[tuple[str, str], Lineup] = {}

    def get_by_user_and_league(self, user_id: str, league_id: str) -> Optional[Lineup]:
        """Return a copy of the stored lineup, or None."""
        with self._lock:
            item = self._items.get(_pair_key(user_id, league_id))
            return _clone_lineup(item) if item is not None else None

    def upsert(self, lineup: Lineup) -> None:
        """Store a copy of the lineup, replacing any earlier one."""
        with self._lock:
            self._items[_pair_key(lineup.user_id, lineup.league_id)] = _clone_lineup(lineup)


class MemoryPlayerRepository:
    """Players held in memory, grouped and indexed by league."""

    def __init__(self, players: Iterable[Player] = ()) -> None:
        self._lock = threading.Lock()
        self._by_league: dict[str, list[Player]] = defaultdict(list)
        self._index: dict[str, dict[str, Player]] = defaultdict(dict)
        for player in players:
            stored = replace(player)
            self._by_league[player.league_id].append(stored)
            self._index[player.league_id][player.id] = stored

    def list_by_league(self, league_id: str) -> list[Player]:
        """Return the players of a league in insertion order."""
        with self._lock:
            return [replace(p) for p in self._by_league.get(league_id, ())]

    def get_by_ids(self, league_id: str, player_ids: Sequence[str]) -> list[Player]:
        """Return the league's players in the order of ``player_ids``; unknown ids are skipped."""
        with self._lock:
            index = self._index.get(league_id, {})
            return [replace(index[pid]) for pid in player_ids if pid in index]


class MemorySquadRepository:
    """Squads held in memory, keyed by user and league."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[tuple[str, str], Squad] = {}

    def get_by_user_and_league(self, user_id: str, league_id: str) -> Optional[Squad]:
        """Return a copy of the stored squad, or None."""
        with self._lock:
            squad = self._items.get(_pair_key(user_id, league_id))
            return _clone_squad(squad) if squad is not None else None

    def upsert(self, squad: Squad) -> None:
        """Store a copy of the squad, replacing any earlier one."""
        with self._lock:
            self._items[_pair_key(squad.user_id, squad.league_id)] = _clone_squad(squad)


class MemoryTeamRepository:
    """Teams held in memory, grouped by league."""

    def __init__(self, teams: Iterable[Team] = ()) -> None:
        self._lock = threading.Lock()
        self._by_league: dict[str, list[Team]] = defaultdict(list)
        for team in teams:
            self._by_league[team.league_id].append(replace(team))

    def list_by_league(self, league_id: str) -> list[Team]:
        """Return the teams of a league in insertion order."""
        with self._lock:
            return [replace(t) for t in self._by_league.get(league_id, ())]