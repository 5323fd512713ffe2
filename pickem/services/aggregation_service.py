"""
Aggregator - folds scored picks into win/loss/push records and point totals.

The fold is a plain sum over picks, so input order never changes the result.
"""

from typing import Iterable, Optional

from pickem.models.leaderboard import UserSeasonSummary, UserWeekSummary, WeekBreakdown
from pickem.models.pick import ScoredPick


_COUNTERS = (
    "total_picks",
    "pending_picks",
    "wins",
    "losses",
    "pushes",
    "lock_wins",
    "lock_losses",
    "lock_pushes",
    "total_points",
)


def _pick_counts(scored: ScoredPick) -> dict[str, int]:
    counts = dict.fromkeys(_COUNTERS, 0)
    counts["total_picks"] = 1

    if scored.pending or scored.result is None:
        counts["pending_picks"] = 1
        return counts

    plural = {"win": "wins", "loss": "losses", "push": "pushes"}[scored.result]
    counts[plural] = 1
    if scored.is_lock:
        counts[f"lock_{plural}"] = 1
    counts["total_points"] = scored.points

    return counts


def aggregate(
    scored_picks: Iterable[ScoredPick],
    *,
    user_id: str,
    season: int,
    week: Optional[int] = None
) -> UserWeekSummary:
    """
    Fold a user's scored picks into a summary.

    Pending picks count towards total_picks only. With no picks at all the
    summary is zero-valued ("0-0-0"), never absent, and its weeks list is
    empty: weeks only lists weeks with at least one pick. Pass week=None to
    fold picks spanning several weeks (season summary).
    """
    totals = dict.fromkeys(_COUNTERS, 0)
    weeks = set()

    for scored in scored_picks:
        for name, value in _pick_counts(scored).items():
            totals[name] += value
        weeks.add(scored.week)

    return UserWeekSummary(
        user_id=user_id,
        season=season,
        week=week,
        weeks=sorted(weeks),
        **totals
    )


def aggregate_weeks(
    summaries: Iterable[UserWeekSummary],
    *,
    user_id: str,
    season: int
) -> UserSeasonSummary:
    """Merge per-week summaries of one user into a multi-week summary."""
    totals = dict.fromkeys(_COUNTERS, 0)
    weeks = set()

    for summary in summaries:
        for name in _COUNTERS:
            totals[name] += getattr(summary, name)
        weeks.update(summary.weeks)

    return UserSeasonSummary(
        user_id=user_id,
        season=season,
        week=None,
        weeks=sorted(weeks),
        **totals
    )


def week_breakdown(summary: UserWeekSummary, week: int) -> WeekBreakdown:
    return WeekBreakdown(
        week=week,
        picks_count=summary.total_picks,
        points=summary.total_points,
        wins=summary.wins,
        losses=summary.losses,
        pushes=summary.pushes,
        lock_wins=summary.lock_wins,
        lock_losses=summary.lock_losses,
        lock_pushes=summary.lock_pushes,
        record=summary.record,
        lock_record=summary.lock_record,
    )
