"""Fantasy roster validation rules."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from fantasyleague.models import Position, SquadPick, is_known_position, position_text


class SquadRuleError(ValueError):
    """A squad breaks one of the roster rules."""


class InvalidSquadSizeError(SquadRuleError):
    """The squad has the wrong number of picks."""


class ExceededBudgetError(SquadRuleError):
    """The squad costs more than the budget cap."""


class ExceededTeamLimitError(SquadRuleError):
    """Too many players come from one team."""


class InsufficientFormationError(SquadRuleError):
    """A position has fewer players than required."""


class UnknownPlayerPositionError(SquadRuleError):
    """A pick has a position that is not known."""


class DuplicatePlayerInSquadError(SquadRuleError):
    """The same player is picked twice."""


def _default_min_by_position() -> dict:
    return {
        Position.GOALKEEPER: 1,
        Position.DEFENDER: 3,
        Position.MIDFIELDER: 3,
        Position.FORWARD: 1,
    }


@dataclass
class Rules:
    """Fantasy roster validation parameters."""

    squad_size: int = 11
    budget_cap: int = 1000
    max_players_per_team: int = 3
    min_by_position: dict = field(default_factory=_default_min_by_position)


def default_rules() -> Rules:
    """Return the standard roster rules."""
    return Rules()


def _check_picks(picks: Sequence[SquadPick], rules: Rules) -> Counter:
    """Check per-pick constraints and the budget; return counts by position."""
    team_counter: Counter = Counter()
    position_counter: Counter = Counter()
    seen_players: set[str] = set()
    total_cost = 0

    for pick in picks:
        if not pick.player_id:
            raise SquadRuleError("player id is required")
        if pick.player_id in seen_players:
            raise DuplicatePlayerInSquadError(
                f"duplicate player in squad: {pick.player_id}"
            )
        seen_players.add(pick.player_id)

        if not is_known_position(pick.position):
            raise UnknownPlayerPositionError(
                f"unknown player position: {position_text(pick.position)}"
            )
        if not pick.team_id:
            raise SquadRuleError(f"team id is required for player {pick.player_id}")
        if pick.price <= 0:
            raise SquadRuleError(
                f"player price must be greater than zero: {pick.player_id}"
            )

        team_counter[pick.team_id] += 1
        if team_counter[pick.team_id] > rules.max_players_per_team:
            raise ExceededTeamLimitError(
                "max players from same team exceeded: "
                f"team={pick.team_id} max={rules.max_players_per_team}"
            )

        position_counter[Position(pick.position)] += 1
        total_cost += pick.price

    if total_cost > rules.budget_cap:
        raise ExceededBudgetError(
            f"budget cap exceeded: cap={rules.budget_cap} used={total_cost}"
        )

    return position_counter


def validate_picks(picks: Sequence[SquadPick], rules: Rules) -> None:
    """Validate a complete squad; raise a SquadRuleError on the first violation."""
    if len(picks) != rules.squad_size:
        raise InvalidSquadSizeError(
            f"invalid squad size: expected {rules.squad_size}, got {len(picks)}"
        )

    position_counter = _check_picks(picks, rules)

    for position, min_required in rules.min_by_position.items():
        current = position_counter[position]
        if current < min_required:
            raise InsufficientFormationError(
                "minimum formation requirement not met: "
                f"pos={position_text(position)} min={min_required} current={current}"
            )


def validate_picks_partial(picks: Sequence[SquadPick], rules: Rules) -> None:
    """Validate draft picks; squad size and formation minimums are not enforced."""
    if not picks:
        raise InvalidSquadSizeError("invalid squad size: expected at least 1, got 0")
    if len(picks) > rules.squad_size:
        raise InvalidSquadSizeError(
            f"invalid squad size: expected at most {rules.squad_size}, got {len(picks)}"
        )

    _check_picks(picks, rules)