from typing import Literal, Optional
from pydantic import BaseModel, Field


LeaderboardScope = Literal["weekly", "season", "best_finish"]


def format_record(wins: int, losses: int, pushes: int) -> str:
    """Record en formato W-L-P"""
    return f"{wins}-{losses}-{pushes}"


def win_percentage(wins: int, losses: int) -> float:
    decided = wins + losses
    return round(wins / decided, 3) if decided else 0.0


class UserWeekSummary(BaseModel):
    """Resumen de picks de un usuario para una semana (o varias semanas)"""

    user_id: str
    season: int
    week: Optional[int] = None  # None cuando agrega varias semanas
    weeks: list[int] = []

    total_picks: int = 0
    pending_picks: int = 0

    wins: int = 0
    losses: int = 0
    pushes: int = 0

    lock_wins: int = 0
    lock_losses: int = 0
    lock_pushes: int = 0

    total_points: int = 0

    @property
    def record(self) -> str:
        return format_record(self.wins, self.losses, self.pushes)

    @property
    def lock_record(self) -> str:
        return format_record(self.lock_wins, self.lock_losses, self.lock_pushes)

    @property
    def win_percentage(self) -> float:
        return win_percentage(self.wins, self.losses)

    @property
    def lock_win_percentage(self) -> float:
        return win_percentage(self.lock_wins, self.lock_losses)

    class Config:
        frozen = True


# Same fold over a larger window
UserSeasonSummary = UserWeekSummary


class WeekBreakdown(BaseModel):
    """Detalle semanal dentro del best finish"""

    week: int
    picks_count: int = 0
    points: int = 0

    wins: int = 0
    losses: int = 0
    pushes: int = 0

    lock_wins: int = 0
    lock_losses: int = 0
    lock_pushes: int = 0

    record: str = "0-0-0"
    lock_record: str = "0-0-0"


class LeaderboardEntry(BaseModel):
    """Entrada en una tabla de clasificación (resultado agregado)"""

    scope: LeaderboardScope
    rank: int

    user_id: str
    display_name: Optional[str] = None

    total_points: int
    record: str
    lock_record: str

    total_picks: int
    pending_picks: int = 0

    wins: int = 0
    losses: int = 0
    pushes: int = 0
    lock_wins: int = 0
    lock_losses: int = 0
    lock_pushes: int = 0

    win_percentage: float = 0.0
    lock_win_percentage: float = 0.0

    class Config:
        populate_by_name = True


class BestFinishEntry(LeaderboardEntry):
    """Entrada del best finish: todas las semanas elegibles y la peor semana"""

    scope: LeaderboardScope = "best_finish"

    included_weeks: list[int]
    weeks_played: list[int] = []
    worst_week_score: int
    weeks: list[WeekBreakdown] = []


class LeaderboardResult(BaseModel):
    """Leaderboard best-effort junto con los avisos de integridad de datos"""

    scope: LeaderboardScope
    season: int
    week: Optional[int] = None
    eligible_weeks: Optional[list[int]] = None

    entries: list[BestFinishEntry | LeaderboardEntry] = []

    warnings: list[str] = []
    error_count: int = 0
