"""Built-in seed data: leagues, teams, players and fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

from fantasyleague.models import Fixture, League, Player, Position, Team

LEAGUE_ID_LIGA1_INDONESIA = "idn-liga-1-2025"
LEAGUE_ID_PREMIER_LEAGUE = "eng-premier-league-2025"


def seed_leagues() -> list[League]:
    """Return the seeded leagues, the default one first."""
    return [
        League(
            id=LEAGUE_ID_LIGA1_INDONESIA,
            name="Liga 1 Indonesia",
            country_code="ID",
            season="2025/2026",
            is_default=True,
        ),
        League(
            id=LEAGUE_ID_PREMIER_LEAGUE,
            name="Premier League",
            country_code="GB",
            season="2025/2026",
            is_default=False,
        ),
    ]


def seed_teams() -> list[Team]:
    """Return the seeded teams."""
    idn, eng = LEAGUE_ID_LIGA1_INDONESIA, LEAGUE_ID_PREMIER_LEAGUE
    return [
        Team(id="idn-persija", league_id=idn, name="Persija Jakarta", short="PSJ"),
        Team(id="idn-persib", league_id=idn, name="Persib Bandung", short="PSB"),
        Team(id="idn-persebaya", league_id=idn, name="Persebaya Surabaya", short="PRB"),
        Team(id="idn-baliutd", league_id=idn, name="Bali United", short="BU"),
        Team(id="eng-ars", league_id=eng, name="Arsenal", short="ARS"),
        Team(id="eng-liv", league_id=eng, name="Liverpool", short="LIV"),
    ]


_PLAYER_ROWS = [
    ("idn-gk-01", LEAGUE_ID_LIGA1_INDONESIA, "idn-persija", "Andritany Ardhiyasa", Position.GOALKEEPER, 90),
    ("idn-gk-02", LEAGUE_ID_LIGA1_INDONESIA, "idn-persib", "Teja Paku Alam", Position.GOALKEEPER, 85),
    ("idn-def-01", LEAGUE_ID_LIGA1_INDONESIA, "idn-persija", "Hansamu Yama", Position.DEFENDER, 88),
    ("idn-def-02", LEAGUE_ID_LIGA1_INDONESIA, "idn-persib", "Nick Kuipers", Position.DEFENDER, 92),
    ("idn-def-03", LEAGUE_ID_LIGA1_INDONESIA, "idn-persebaya", "Dusan Stevanovic", Position.DEFENDER, 84),
    ("idn-def-04", LEAGUE_ID_LIGA1_INDONESIA, "idn-baliutd", "Ricky Fajrin", Position.DEFENDER, 80),
    ("idn-mid-01", LEAGUE_ID_LIGA1_INDONESIA, "idn-persija", "Maciej Gajos", Position.MIDFIELDER, 98),
    ("idn-mid-02", LEAGUE_ID_LIGA1_INDONESIA, "idn-persib", "Marc Klok", Position.MIDFIELDER, 99),
    ("idn-mid-03", LEAGUE_ID_LIGA1_INDONESIA, "idn-persebaya", "Bruno Moreira", Position.MIDFIELDER, 95),
    ("idn-mid-04", LEAGUE_ID_LIGA1_INDONESIA, "idn-baliutd", "Eber Bessa", Position.MIDFIELDER, 97),
    ("idn-fwd-01", LEAGUE_ID_LIGA1_INDONESIA, "idn-persija", "Gustavo Almeida", Position.FORWARD, 105),
    ("idn-fwd-02", LEAGUE_ID_LIGA1_INDONESIA, "idn-persib", "David da Silva", Position.FORWARD, 108),
    ("idn-fwd-03", LEAGUE_ID_LIGA1_INDONESIA, "idn-persebaya", "Paulo Henrique", Position.FORWARD, 100),
    ("idn-mid-05", LEAGUE_ID_LIGA1_INDONESIA, "idn-baliutd", "Mitsuru Maruoka", Position.MIDFIELDER, 90),
    ("idn-def-05", LEAGUE_ID_LIGA1_INDONESIA, "idn-persebaya", "Arief Catur", Position.DEFENDER, 72),
    ("idn-mid-06", LEAGUE_ID_LIGA1_INDONESIA, "idn-persib", "Dedi Kusnandar", Position.MIDFIELDER, 78),
    ("eng-gk-01", LEAGUE_ID_PREMIER_LEAGUE, "eng-ars", "David Raya", Position.GOALKEEPER, 92),
    ("eng-def-01", LEAGUE_ID_PREMIER_LEAGUE, "eng-ars", "William Saliba", Position.DEFENDER, 96),
    ("eng-mid-01", LEAGUE_ID_PREMIER_LEAGUE, "eng-liv", "Dominik Szoboszlai", Position.MIDFIELDER, 98),
    ("eng-fwd-01", LEAGUE_ID_PREMIER_LEAGUE, "eng-liv", "Darwin Nunez", Position.FORWARD, 104),
]


def seed_players() -> list[Player]:
    """Return the seeded players."""
    return [
        Player(id=pid, league_id=league_id, team_id=team_id, name=name, position=pos, price=price)
        for pid, league_id, team_id, name, pos, price in _PLAYER_ROWS
    ]


def _utc(year: int, month: int, day: int, hour: int, minute: int) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def seed_fixtures() -> list[Fixture]:
    """Return the seeded fixtures."""
    idn, eng = LEAGUE_ID_LIGA1_INDONESIA, LEAGUE_ID_PREMIER_LEAGUE
    return [
        Fixture(
            id="fx-idn-001", league_id=idn, gameweek=1,
            home_team="Persija Jakarta", away_team="Persib Bandung",
            kickoff_at=_utc(2026, 2, 14, 19, 0), venue="Jakarta International Stadium",
        ),
        Fixture(
            id="fx-idn-002", league_id=idn, gameweek=1,
            home_team="Persebaya Surabaya", away_team="Bali United",
            kickoff_at=_utc(2026, 2, 15, 12, 30), venue="Gelora Bung Tomo",
        ),
        Fixture(
            id="fx-idn-003", league_id=idn, gameweek=2,
            home_team="Persib Bandung", away_team="Persebaya Surabaya",
            kickoff_at=_utc(2026, 2, 21, 12, 30), venue="Gelora Bandung Lautan Api",
        ),
        Fixture(
            id="fx-idn-004", league_id=idn, gameweek=2,
            home_team="Bali United", away_team="Persija Jakarta",
            kickoff_at=_utc(2026, 2, 22, 12, 30), venue="Kapten I Wayan Dipta",
        ),
        Fixture(
            id="fx-idn-005", league_id=idn, gameweek=3,
            home_team="Persija Jakarta", away_team="Persebaya Surabaya",
            kickoff_at=_utc(2026, 2, 28, 12, 30), venue="Jakarta International Stadium",
        ),
        Fixture(
            id="fx-idn-006", league_id=idn, gameweek=3,
            home_team="Persib Bandung", away_team="Bali United",
            kickoff_at=_utc(2026, 3, 1, 12, 30), venue="Gelora Bandung Lautan Api",
        ),
        Fixture(
            id="fx-eng-001", league_id=eng, gameweek=1,
            home_team="Arsenal", away_team="Liverpool",
            kickoff_at=_utc(2026, 2, 14, 15, 0), venue="Emirates Stadium",
        ),
    ]