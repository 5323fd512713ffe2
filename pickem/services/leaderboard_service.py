"""
LeaderboardService - Calculates leaderboards on the fly from picks and games.

Every request loads a fresh snapshot from the store, reconciles each user's
picks per week, folds them and ranks the result. Nothing is persisted: the
leaderboard is a read-model recomputed on demand.
"""

import logging
from collections import defaultdict
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from pickem.core.config import Settings, get_settings
from pickem.models.game import GameResult
from pickem.models.leaderboard import LeaderboardResult, UserWeekSummary, WeekBreakdown
from pickem.models.pick import Pick, ScoredPick
from pickem.repositories.game_repository import GameLookup, GameRepository
from pickem.repositories.pick_repository import PickLookup, PickRepository
from pickem.repositories.user_repository import UserRepository
from pickem.repositories.week_settings_repository import WeekSettingsRepository
from pickem.services.aggregation_service import aggregate, aggregate_weeks
from pickem.services.best_finish_service import rank_best_finish, select_best_finish
from pickem.services.points_service import score_pick
from pickem.services.ranking_service import rank
from pickem.services.reconcile_service import reconcile

logger = logging.getLogger(__name__)


class LeaderboardServiceError(Exception):
    """Base exception for leaderboard service errors."""
    pass


class InvalidLeaderboardRequestError(LeaderboardServiceError):
    """Raised when a leaderboard is requested for an invalid season or week."""
    pass


class SeasonNotConfiguredError(LeaderboardServiceError):
    """Raised when a season has no best-finish week configuration at all."""
    pass


class _Snapshot:
    """Reconciled picks for a season window, grouped by user and week."""

    def __init__(self):
        self.picks: dict[str, dict[int, list[ScoredPick]]] = defaultdict(dict)
        self.warnings: list[str] = []
        self.error_count = 0

    @property
    def user_ids(self) -> list[str]:
        return list(self.picks)

    def weekly_summary(self, user_id: str, season: int, week: int) -> UserWeekSummary:
        return aggregate(
            self.picks[user_id].get(week, []),
            user_id=user_id,
            season=season,
            week=week
        )


def _validate(season: int, week: Optional[int] = None):
    if season < 1:
        raise InvalidLeaderboardRequestError(f"Invalid season: {season}")
    if week is not None and week < 1:
        raise InvalidLeaderboardRequestError(f"Invalid week: {week}")


def _group_by_user_week(picks: list[Pick]) -> dict[tuple[str, int], list[Pick]]:
    grouped: dict[tuple[str, int], list[Pick]] = defaultdict(list)
    for pick in picks:
        grouped[(pick.user_id, pick.week)].append(pick)
    return grouped


class LeaderboardService:
    def __init__(
        self,
        game_repo: GameRepository,
        pick_repo: PickRepository,
        week_settings_repo: WeekSettingsRepository,
        user_repo: UserRepository,
        settings: Optional[Settings] = None
    ):
        self.game_repo = game_repo
        self.pick_repo = pick_repo
        self.week_settings_repo = week_settings_repo
        self.user_repo = user_repo
        self.settings = settings

    @classmethod
    def from_db(cls, db: AsyncIOMotorDatabase, settings: Optional[Settings] = None) -> "LeaderboardService":
        return cls(
            GameRepository(db),
            PickRepository(db),
            WeekSettingsRepository(db),
            UserRepository(db),
            settings=settings or get_settings(),
        )

    # ============================================
    # 📌 SNAPSHOT
    # ============================================

    async def _load_snapshot(
        self,
        season: int,
        week: Optional[int] = None,
        weeks: Optional[list[int]] = None,
        user_id: Optional[str] = None
    ) -> _Snapshot:
        lookup: PickLookup = await self.pick_repo.get_picks(season, week=week, weeks=weeks, user_id=user_id)

        game_ids = {pick.game_id for pick in [*lookup.registered, *lookup.anonymous]}
        game_lookup: GameLookup = await self.game_repo.get_by_ids(game_ids)
        games: dict[str, GameResult] = {game.id: game for game in game_lookup.games}

        registered = _group_by_user_week(lookup.registered)
        anonymous = _group_by_user_week(lookup.anonymous)

        snapshot = _Snapshot()
        # Malformed store documents are reported, never fatal
        for skipped in (lookup, game_lookup):
            snapshot.warnings.extend(skipped.warnings)
            snapshot.error_count += skipped.error_count

        for group_user_id, group_week in sorted(set(registered) | set(anonymous)):
            result = reconcile(
                group_user_id,
                group_week,
                season,
                registered.get((group_user_id, group_week), []),
                anonymous.get((group_user_id, group_week), []),
                games,
            )
            snapshot.picks[group_user_id][group_week] = result.picks
            snapshot.warnings.extend(result.warnings)
            snapshot.error_count += result.error_count

        window = week or weeks or "all"
        logger.info(
            f"📊 Season {season} week {window}: "
            f"{len(lookup.registered)} registered picks, {len(lookup.anonymous)} anonymous picks, "
            f"{len(games)} games, {snapshot.error_count} errors"
        )
        return snapshot

    async def _display_names(self, user_ids: list[str]) -> dict[str, str]:
        names = await self.user_repo.get_display_names(user_ids)
        return {user_id: names.get(user_id, user_id) for user_id in user_ids}

    async def _best_finish_weeks(self, season: int) -> list[int]:
        if self.settings and season in self.settings.best_finish_weeks:
            return sorted(self.settings.best_finish_weeks[season])

        weeks = await self.week_settings_repo.get_best_finish_weeks(season)
        if weeks is None:
            raise SeasonNotConfiguredError(f"Season {season} has no week configuration")
        return weeks

    # ============================================
    # 📌 LEADERBOARDS
    # ============================================

    async def get_weekly_leaderboard(self, season: int, week: int) -> LeaderboardResult:
        """Leaderboard for a single week, ranked by weekly points."""
        _validate(season, week)
        snapshot = await self._load_snapshot(season, week)

        summaries = [
            snapshot.weekly_summary(user_id, season, week)
            for user_id in snapshot.user_ids
        ]
        names = await self._display_names(snapshot.user_ids)

        return LeaderboardResult(
            scope="weekly",
            season=season,
            week=week,
            entries=rank(summaries, "weekly", names),
            warnings=snapshot.warnings,
            error_count=snapshot.error_count,
        )

    async def get_season_leaderboard(self, season: int) -> LeaderboardResult:
        """Cumulative leaderboard over every week of the season."""
        _validate(season)
        snapshot = await self._load_snapshot(season)

        summaries = [
            aggregate_weeks(
                [
                    snapshot.weekly_summary(user_id, season, week)
                    for week in sorted(snapshot.picks[user_id])
                ],
                user_id=user_id,
                season=season
            )
            for user_id in snapshot.user_ids
        ]
        names = await self._display_names(snapshot.user_ids)

        return LeaderboardResult(
            scope="season",
            season=season,
            entries=rank(summaries, "season", names),
            warnings=snapshot.warnings,
            error_count=snapshot.error_count,
        )

    async def get_best_finish_leaderboard(self, season: int) -> LeaderboardResult:
        """
        Best finish standings over the configured eligible weeks.

        All eligible weeks count towards the total; the worst week is only
        reported.
        """
        _validate(season)
        eligible_weeks = await self._best_finish_weeks(season)

        if not eligible_weeks:
            return LeaderboardResult(scope="best_finish", season=season, eligible_weeks=[])

        snapshot = await self._load_snapshot(season, weeks=eligible_weeks)
        selections = []

        for user_id in snapshot.user_ids:
            by_week = {
                week: snapshot.weekly_summary(user_id, season, week)
                for week in eligible_weeks
                if week in snapshot.picks[user_id]
            }
            selection = select_best_finish(user_id, eligible_weeks, by_week)
            if selection is not None:
                selections.append(selection)

        names = await self._display_names([s.user_id for s in selections])

        return LeaderboardResult(
            scope="best_finish",
            season=season,
            eligible_weeks=eligible_weeks,
            entries=rank_best_finish(selections, names),
            warnings=snapshot.warnings,
            error_count=snapshot.error_count,
        )

    async def get_best_finish_details(self, season: int, user_id: str) -> list[WeekBreakdown]:
        """Week-by-week breakdown of a user's best finish (empty if not participating)."""
        _validate(season)
        eligible_weeks = await self._best_finish_weeks(season)
        if not eligible_weeks:
            return []

        snapshot = await self._load_snapshot(season, weeks=eligible_weeks, user_id=user_id)
        by_week = {
            week: snapshot.weekly_summary(user_id, season, week)
            for week in eligible_weeks
            if week in snapshot.picks.get(user_id, {})
        }
        selection = select_best_finish(user_id, eligible_weeks, by_week)

        return selection.per_week_breakdown if selection else []

    def score_pick(self, pick: Pick, game: GameResult) -> ScoredPick:
        """On-demand scoring of a single pick (debug / preview)."""
        return score_pick(pick, game)
