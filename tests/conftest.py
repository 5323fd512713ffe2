"""
Pytest fixtures and configuration for all tests.

The store is replaced by in-memory repositories so no MongoDB is needed.
"""

from typing import Iterable, Optional

import pytest

from pickem.core.config import Settings
from pickem.models.game import GameResult
from pickem.models.pick import AnonymousOrigin, Pick, PickOutcome, RegisteredOrigin
from pickem.repositories.game_repository import GameLookup
from pickem.repositories.pick_repository import PickLookup
from pickem.services.leaderboard_service import LeaderboardService

SEASON = 2025


def _make_game(
    game_id: str,
    week: int = 1,
    home_team: str = "KANSAS STATE",
    away_team: str = "TEXAS TECH",
    spread: float = -5.0,
    home_score: Optional[int] = None,
    away_score: Optional[int] = None,
    status: str = "completed",
    season: int = SEASON,
) -> GameResult:
    return GameResult(
        id=game_id,
        season=season,
        week=week,
        home_team=home_team,
        away_team=away_team,
        spread=spread,
        home_score=home_score,
        away_score=away_score,
        status=status,
    )


def _make_pick(
    user_id: str,
    game_id: str,
    selected_team: str,
    week: int = 1,
    is_lock: bool = False,
    anonymous: bool = False,
    precomputed: Optional[tuple[str, int]] = None,
    pick_id: Optional[str] = None,
    season: int = SEASON,
) -> Pick:
    if anonymous:
        origin = AnonymousOrigin(anonymous_pick_id=f"{user_id}-{game_id}")
    else:
        origin = RegisteredOrigin()

    outcome = None
    if precomputed is not None:
        outcome = PickOutcome(result=precomputed[0], points=precomputed[1])

    prefix = "anon" if anonymous else "reg"
    return Pick(
        id=pick_id or f"{prefix}:{user_id}:{game_id}",
        user_id=user_id,
        game_id=game_id,
        week=week,
        season=season,
        selected_team=selected_team,
        is_lock=is_lock,
        origin=origin,
        precomputed=outcome,
    )


class InMemoryGameRepository:
    def __init__(self, games: Iterable[GameResult] = ()):
        self.games = {game.id: game for game in games}

    async def get_by_ids(self, game_ids):
        return GameLookup(
            games=[self.games[game_id] for game_id in sorted(set(game_ids)) if game_id in self.games]
        )


class InMemoryPickRepository:
    def __init__(self, registered: Iterable[Pick] = (), anonymous: Iterable[Pick] = ()):
        self.registered = list(registered)
        self.anonymous = list(anonymous)

    @staticmethod
    def _filter(picks, season, week, weeks, user_id):
        return [
            pick for pick in picks
            if pick.season == season
            and (week is None or pick.week == week)
            and (weeks is None or pick.week in weeks)
            and (user_id is None or pick.user_id == user_id)
        ]

    async def get_picks(self, season, week=None, weeks=None, user_id=None):
        return PickLookup(
            registered=self._filter(self.registered, season, week, weeks, user_id),
            anonymous=self._filter(self.anonymous, season, week, weeks, user_id),
        )


class InMemoryWeekSettingsRepository:
    def __init__(self, weeks_by_season: Optional[dict[int, list[int]]] = None):
        self.weeks_by_season = weeks_by_season or {}

    async def get_best_finish_weeks(self, season):
        return self.weeks_by_season.get(season)


class InMemoryUserRepository:
    def __init__(self, names: Optional[dict[str, str]] = None):
        self.names = names or {}

    async def get_display_names(self, user_ids):
        return {user_id: self.names[user_id] for user_id in user_ids if user_id in self.names}


@pytest.fixture
def test_settings():
    """Settings without touching the environment."""
    return Settings(mongodb_uri="mongodb://localhost:27017", mongodb_db_name="pickem_test")


@pytest.fixture
def build_service(test_settings):
    """Factory for a LeaderboardService over in-memory repositories."""

    def _build(
        games=(),
        registered=(),
        anonymous=(),
        best_finish_weeks=None,
        names=None,
        settings=None,
    ) -> LeaderboardService:
        return LeaderboardService(
            InMemoryGameRepository(games),
            InMemoryPickRepository(registered, anonymous),
            InMemoryWeekSettingsRepository(best_finish_weeks),
            InMemoryUserRepository(names),
            settings=settings or test_settings,
        )

    return _build


@pytest.fixture
def completed_game():
    """KSU (-5) beats Texas Tech 35-17: KSU covers by 13."""
    return _make_game("g1", home_score=35, away_score=17)


@pytest.fixture
def make_game():
    """Factory for GameResult values (completed by default)."""
    return _make_game


@pytest.fixture
def make_pick():
    """Factory for Pick values (registered by default)."""
    return _make_pick
