# fantasyleague

The core of a fantasy football league service, as a library.

## What it contains

- `fantasyleague.models`: the domain dataclasses `Player`, `Team`, `League`,
  `Fixture`, `Lineup`, `Squad`, `SquadPick` and the frozen `Principal`, plus
  the `Position` enum (`GK`, `DEF`, `MID`, `FWD`). `Player`, `Team` and
  `League` have a `validate()` method and `Squad` has `validate_basic()`;
  each raises `ValueError` naming the first missing or invalid field. The
  module also defines the repository protocols `LeagueRepository`,
  `TeamRepository`, `PlayerRepository`, `FixtureRepository`,
  `LineupRepository` and `SquadRepository`.
- `fantasyleague.rules`: the `Rules` dataclass and `default_rules()`, which
  gives an 11-player squad, a budget cap of 1000, at most 3 players from one
  team and a minimum formation of 1 GK, 3 DEF, 3 MID and 1 FWD.
  `validate_picks` checks a complete squad; `validate_picks_partial` checks a
  draft of 1 up to `squad_size` picks without the size and formation
  minimums. Every broken rule raises a subclass of `SquadRuleError` (itself
  a `ValueError`): `InvalidSquadSizeError`, `ExceededBudgetError`,
  `ExceededTeamLimitError`, `InsufficientFormationError`,
  `UnknownPlayerPositionError` or `DuplicatePlayerInSquadError`.
- `fantasyleague.seed`: `seed_leagues()`, `seed_teams()`, `seed_players()`
  and `seed_fixtures()` return two leagues (`LEAGUE_ID_LIGA1_INDONESIA`, the
  default, and `LEAGUE_ID_PREMIER_LEAGUE`) with their teams, players and
  fixtures. Fixture kick-off times are timezone-aware UTC datetimes.
- `fantasyleague.memory`: thread-safe in-memory repositories
  (`MemoryLeagueRepository`, `MemoryTeamRepository`, `MemoryPlayerRepository`,
  `MemoryFixtureRepository`, `MemoryLineupRepository`,
  `MemorySquadRepository`). They store and return copies, so changing a
  returned object does not change what is stored. Lookups that find nothing
  return `None`; `MemoryPlayerRepository.get_by_ids` returns players in the
  order of the ids asked for and skips unknown ids.
- `fantasyleague.cache`: `PrincipalCache(ttl, max_entries, clock=time.monotonic)`,
  a thread-safe cache of principals with a time to live in seconds. When it is
  full, expired entries are dropped first, then the oldest entry.
- `fantasyleague.auth_client`: `AuthClient` verifies access tokens by posting
  `{"token": ...}` to an introspection endpoint with httpx.
- `fantasyleague.dburl`: `normalize_db_url(raw, disable_prepared_binary_result)`.
- `fantasyleague.sqlerrors`: `is_not_found`, `is_bind_parameter_mismatch` and
  `is_fixture_result_format_mismatch`, which classify database errors, and
  `ERR_NO_ROWS`, the error that `is_not_found` recognises.

## Installation

```
pip install fantasyleague
```

## Validating a squad

```python
from fantasyleague.models import Position, SquadPick
from fantasyleague.rules import ExceededTeamLimitError, default_rules, validate_picks_partial

picks = [
    SquadPick(player_id="p1", team_id="t1", position=Position.GOALKEEPER, price=80),
    SquadPick(player_id="p2", team_id="t1", position=Position.DEFENDER, price=80),
]
validate_picks_partial(picks, default_rules())
```

## Working with the seeded repositories

```python
from fantasyleague.memory import MemoryLeagueRepository, MemoryPlayerRepository
from fantasyleague.seed import seed_leagues, seed_players

leagues = MemoryLeagueRepository(seed_leagues())
players = MemoryPlayerRepository(seed_players())

default = next(league for league in leagues.list() if league.is_default)
pool = players.list_by_league(default.id)
```

## Verifying access tokens

```python
from fantasyleague.auth_client import AuthClient, CircuitBreakerConfig, UnauthorizedError

with AuthClient(
    base_url="http://localhost:8080",
    introspect_path="/v1/auth/introspect",
    admin_key="placeholder",
    breaker_config=CircuitBreakerConfig(enabled=True),
) as client:
    try:
        principal = client.verify_access_token("token")
    except UnauthorizedError:
        ...
```

`AuthClient` takes `base_url`, `introspect_path`, `admin_key` (sent as the
`x-admin-key` header when not empty), `breaker_config`, an optional
`http_client` (an `httpx.Client`), `timeout` and `logger`. An absolute
`http://` or `https://` introspection path is used as is. Resolved principals
are cached for 30 seconds under the SHA-256 hash of the token, and concurrent
checks of the same token share one request.

Errors are subclasses of `AuthError`:

- `UnauthorizedError`: empty token, HTTP 401, or an inactive token.
- `DependencyUnavailableError`: HTTP 403, or the circuit breaker is open.
- `TransientAuthError`: network errors, HTTP 429 or 5xx, an unreadable
  response, or a response without `user_id`. Only these count as failures
  for the circuit breaker.
- `AuthError` itself for any other non-200 status.

The circuit breaker is used only when `CircuitBreakerConfig.enabled` is true;
a threshold, open timeout (seconds) or half-open request count that is not
positive falls back to `default_circuit_breaker_config()` (5 failures, 15
seconds, 2 requests). `normalize_circuit_breaker_config`, `hash_token` and
`build_url` are available on their own.

## Database URLs

`normalize_db_url(raw, True)` adds `disable_prepared_binary_result=yes` to the
query string (the query parameters are then written in sorted order). The URL
comes back unchanged when the option is `False`, when it cannot be parsed, or
when the parameter already has a value.

## What it does not do

The package has no HTTP API, no server and no command to start one. Its only
repositories keep data in memory: nothing is stored in a database, and the
database helpers only rewrite URLs and classify error messages. There is no
configuration loading from the environment.

## Running the tests

```
pip install -e .[test]
pytest
```