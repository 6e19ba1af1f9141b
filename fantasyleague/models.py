"""Domain models and repository interfaces for the fantasy league."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol, Sequence


class Position(str, Enum):
    """Football position categories used in fantasy rules."""

    GOALKEEPER = "GK"
    DEFENDER = "DEF"
    MIDFIELDER = "MID"
    FORWARD = "FWD"

    def __str__(self) -> str:
        return self.value


ALL_POSITIONS: frozenset = frozenset(Position)


def is_known_position(value: object) -> bool:
    """Return True when ``value`` names one of the known positions."""
    try:
        return value in ALL_POSITIONS
    except TypeError:
        return False


def position_text(value: object) -> str:
    """Render a position (known or not) as its plain string."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass
class Player:
    """A selectable athlete in a fantasy league pool."""

    id: str = ""
    league_id: str = ""
    team_id: str = ""
    name: str = ""
    position: Position | str = ""
    price: int = 0

    def validate(self) -> None:
        """Raise ValueError when a required field is missing or invalid."""
        if not self.id:
            raise ValueError("player id is required")
        if not self.league_id:
            raise ValueError("player league id is required")
        if not self.team_id:
            raise ValueError("player team id is required")
        if not self.name:
            raise ValueError("player name is required")
        if not is_known_position(self.position):
            raise ValueError(f"invalid player position: {position_text(self.position)}")
        if self.price <= 0:
            raise ValueError("player price must be greater than zero")


@dataclass
class Team:
    """A real football club inside a league."""

    id: str = ""
    league_id: str = ""
    name: str = ""
    short: str = ""

    def validate(self) -> None:
        """Raise ValueError when a required field is missing."""
        if not self.id:
            raise ValueError("team id is required")
        if not self.league_id:
            raise ValueError("team league id is required")
        if not self.name:
            raise ValueError("team name is required")


@dataclass
class League:
    """A football league supported by the fantasy platform."""

    id: str = ""
    name: str = ""
    country_code: str = ""
    season: str = ""
    is_default: bool = False

    def validate(self) -> None:
        """Raise ValueError when a required field is missing."""
        if not self.id:
            raise ValueError("league id is required")
        if not self.name:
            raise ValueError("league name is required")
        if not self.country_code:
            raise ValueError("league country code is required")
        if not self.season:
            raise ValueError("league season is required")


@dataclass
class Fixture:
    """One scheduled match."""

    id: str = ""
    league_id: str = ""
    gameweek: int = 0
    home_team: str = ""
    away_team: str = ""
    kickoff_at: Optional[datetime] = None
    venue: str = ""


@dataclass
class Lineup:
    """One user's lineup for a league."""

    user_id: str = ""
    league_id: str = ""
    goalkeeper_id: str = ""
    defender_ids: list[str] = field(default_factory=list)
    midfielder_ids: list[str] = field(default_factory=list)
    forward_ids: list[str] = field(default_factory=list)
    substitute_ids: list[str] = field(default_factory=list)
    captain_id: str = ""
    vice_captain_id: str = ""
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Principal:
    """The authenticated account identity."""

    user_id: str = ""
    email: str = ""


@dataclass
class SquadPick:
    """One selected player in a user's fantasy squad."""

    player_id: str = ""
    team_id: str = ""
    position: Position | str = ""
    price: int = 0


@dataclass
class Squad:
    """A user's team composition for one league."""

    id: str = ""
    user_id: str = ""
    league_id: str = ""
    name: str = ""
    picks: list[SquadPick] = field(default_factory=list)
    budget_cap: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def validate_basic(self) -> None:
        """Raise ValueError when identity, budget or picks are missing."""
        if not self.id:
            raise ValueError("squad id is required")
        if not self.user_id:
            raise ValueError("user id is required")
        if not self.league_id:
            raise ValueError("league id is required")
        if not self.name:
            raise ValueError("squad name is required")
        if self.budget_cap <= 0:
            raise ValueError("budget cap must be greater than zero")
        if not self.picks:
            raise ValueError("squad picks are required")


class LeagueRepository(Protocol):
    """League persistence needed by use cases."""

    def list(self) -> list[League]:
        """Return all leagues."""
        ...

    def get_by_id(self, league_id: str) -> Optional[League]:
        """Return the league with ``league_id``, or None."""
        ...


class TeamRepository(Protocol):
    """Team persistence needed by use cases."""

    def list_by_league(self, league_id: str) -> list[Team]:
        """Return the teams of a league."""
        ...


class PlayerRepository(Protocol):
    """Player persistence needed by use cases."""

    def list_by_league(self, league_id: str) -> list[Player]:
        """Return the players of a league."""
        ...

    def get_by_ids(self, league_id: str, player_ids: Sequence[str]) -> list[Player]:
        """Return the players of a league whose ids are given; unknown ids are skipped."""
        ...


class FixtureRepository(Protocol):
    """Fixture read operations."""

    def list_by_league(self, league_id: str) -> list[Fixture]:
        """Return the fixtures of a league."""
        ...


class LineupRepository(Protocol):
    """Lineup persistence operations."""

    def get_by_user_and_league(self, user_id: str, league_id: str) -> Optional[Lineup]:
        """Return the user's lineup for a league, or None."""
        ...

    def upsert(self, lineup: Lineup) -> None:
        """Insert or replace a lineup."""
        ...


class SquadRepository(Protocol):
    """Squad persistence needed by use cases."""

    def get_by_user_and_league(self, user_id: str, league_id: str) -> Optional[Squad]:
        """Return the user's squad for a league, or None."""
        ...

    def upsert(self, squad: Squad) -> None:
        """Insert or replace a squad."""
        ...