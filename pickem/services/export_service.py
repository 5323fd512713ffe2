"""
Export de leaderboards a CSV (para los admins de la liga)
"""

import csv
import io

from pickem.models.leaderboard import BestFinishEntry, LeaderboardResult


BASE_HEADERS = [
    "Rank",
    "Player",
    "Total Points",
    "Record",
    "Win %",
    "Lock Record",
    "Lock Win %",
]

BEST_FINISH_HEADERS = [
    "Worst Week Score",
    "Weeks Included",
]


def _percentage(value: float) -> str:
    return f"{value * 100:.1f}%"


def leaderboard_to_csv(result: LeaderboardResult) -> str:
    """Serialize a leaderboard to CSV, one row per entry in rank order."""
    best_finish = result.scope == "best_finish"
    headers = BASE_HEADERS + (BEST_FINISH_HEADERS if best_finish else [])

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)

    for entry in result.entries:
        row = [
            entry.rank,
            entry.display_name or entry.user_id,
            entry.total_points,
            entry.record,
            _percentage(entry.win_percentage),
            entry.lock_record,
            _percentage(entry.lock_win_percentage),
        ]
        if best_finish and isinstance(entry, BestFinishEntry):
            row += [
                entry.worst_week_score,
                ", ".join(str(week) for week in entry.included_weeks),
            ]
        writer.writerow(row)

    return buffer.getvalue()


def export_filename(result: LeaderboardResult) -> str:
    if result.scope == "weekly":
        return f"leaderboard-{result.season}-week-{result.week}.csv"
    if result.scope == "best_finish":
        return f"best-finish-leaderboard-{result.season}.csv"
    return f"leaderboard-{result.season}.csv"
