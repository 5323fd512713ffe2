"""
Ranker - sorts summaries by points and assigns standard competition ranks.

Points are the only key: tied users share a rank and the next rank skips
by the size of the tied group (45, 45, 40 -> 1, 1, 3). Equal points keep the
order they were fed in.
"""

from typing import Callable, Iterable, Literal, Mapping, Optional, TypeVar

from pickem.models.leaderboard import LeaderboardEntry, UserWeekSummary


T = TypeVar("T")

RankScope = Literal["weekly", "season"]


def assign_competition_ranks(
    items: Iterable[T],
    key: Callable[[T], int]
) -> list[tuple[int, T]]:
    """Return (rank, item) pairs, highest key first, stable within ties."""
    ordered = sorted(items, key=key, reverse=True)

    ranked = []
    previous_key = None
    rank = 0
    for position, item in enumerate(ordered, start=1):
        value = key(item)
        if value != previous_key:
            rank = position
            previous_key = value
        ranked.append((rank, item))

    return ranked


def summary_to_entry(
    summary: UserWeekSummary,
    rank: int,
    scope: str,
    display_name: Optional[str] = None
) -> LeaderboardEntry:
    return LeaderboardEntry(
        scope=scope,
        rank=rank,
        user_id=summary.user_id,
        display_name=display_name,
        total_points=summary.total_points,
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
    )


def rank(
    summaries: Iterable[UserWeekSummary],
    scope: RankScope,
    display_names: Optional[Mapping[str, str]] = None
) -> list[LeaderboardEntry]:
    """
    Build a ranked leaderboard for the weekly or season view.

    Users without any pick in the window are left out; users whose picks
    are all pending stay in with zero points.
    """
    if scope not in ("weekly", "season"):
        raise ValueError(f"Unsupported leaderboard scope: {scope}")

    display_names = display_names or {}
    active = [summary for summary in summaries if summary.total_picks > 0]

    return [
        summary_to_entry(
            summary,
            position,
            scope,
            display_names.get(summary.user_id)
        )
        for position, summary in assign_competition_ranks(active, key=lambda s: s.total_points)
    ]
