"""
Best Finish - standings over a fixed set of eligible weeks (e.g. weeks 11-14).

Every eligible week counts towards the total, including weeks the user
skipped (zero points). The lowest single-week score is reported as
worst_week_score for display; it is not dropped from the total.
"""

from typing import Iterable, Mapping, Optional

from pydantic import BaseModel

from pickem.models.leaderboard import BestFinishEntry, UserSeasonSummary, UserWeekSummary, WeekBreakdown
from pickem.services.aggregation_service import aggregate, aggregate_weeks, week_breakdown
from pickem.services.ranking_service import assign_competition_ranks


class BestFinishSelection(BaseModel):
    """Resultado del best finish para un usuario"""

    user_id: str
    season: int
    included_weeks: list[int]
    weeks_played: list[int]
    total_points: int
    worst_week_score: int
    per_week_breakdown: list[WeekBreakdown]
    summary: UserSeasonSummary


def select_best_finish(
    user_id: str,
    eligible_weeks: Iterable[int],
    weekly_summaries_by_week: Mapping[int, UserWeekSummary]
) -> Optional[BestFinishSelection]:
    """
    Select the eligible weeks for one user and total them.

    Returns None when the user has no pick in any eligible week, so the
    user does not appear in the best-finish view.
    """
    included_weeks = sorted(set(eligible_weeks))
    if not included_weeks or not weekly_summaries_by_week:
        return None

    season = next(iter(weekly_summaries_by_week.values())).season

    summaries = []
    for week in included_weeks:
        summary = weekly_summaries_by_week.get(week)
        if summary is None:
            summary = aggregate([], user_id=user_id, season=season, week=week)
        summaries.append(summary)

    weeks_played = [
        week for week, summary in zip(included_weeks, summaries)
        if summary.total_picks > 0
    ]
    if not weeks_played:
        return None

    breakdown = [week_breakdown(summary, week) for week, summary in zip(included_weeks, summaries)]

    return BestFinishSelection(
        user_id=user_id,
        season=season,
        included_weeks=included_weeks,
        weeks_played=weeks_played,
        total_points=sum(week.points for week in breakdown),
        worst_week_score=min(week.points for week in breakdown),
        per_week_breakdown=breakdown,
        summary=aggregate_weeks(summaries, user_id=user_id, season=season),
    )


def rank_best_finish(
    selections: Iterable[BestFinishSelection],
    display_names: Optional[Mapping[str, str]] = None
) -> list[BestFinishEntry]:
    """Rank best-finish selections by total points (competition ranking)."""
    display_names = display_names or {}
    entries = []

    for position, selection in assign_competition_ranks(selections, key=lambda s: s.total_points):
        summary = selection.summary
        entries.append(BestFinishEntry(
            rank=position,
            user_id=selection.user_id,
            display_name=display_names.get(selection.user_id),
            total_points=selection.total_points,
            record=summary.record,
            lock_record=summary.lock_record,
            total_picks=summary.total_picks,
            pending_picks=summary.pending_picks,
            wins=summary.wins,
            losses=summary.losses,
            pushes=summary.pushes,
            lock_wins=summary.lock_wins,
            lock_losses=summary.lock_losses,
            lock_pushes=summary.lock_pushes,
            win_percentage=summary.win_percentage,
            lock_win_percentage=summary.lock_win_percentage,
            included_weeks=selection.included_weeks,
            weeks_played=selection.weeks_played,
            worst_week_score=selection.worst_week_score,
            weeks=selection.per_week_breakdown,
        ))

    return entries
