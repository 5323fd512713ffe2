from .game import GameResult, GameStatus
from .pick import (
    AnonymousOrigin,
    Pick,
    PickOrigin,
    PickOutcome,
    PickResultKind,
    RegisteredOrigin,
    ScoredPick,
)
from .leaderboard import (
    BestFinishEntry,
    LeaderboardEntry,
    LeaderboardResult,
    LeaderboardScope,
    UserSeasonSummary,
    UserWeekSummary,
    WeekBreakdown,
)

__all__ = [
    "GameResult",
    "GameStatus",
    "AnonymousOrigin",
    "Pick",
    "PickOrigin",
    "PickOutcome",
    "PickResultKind",
    "RegisteredOrigin",
    "ScoredPick",
    "BestFinishEntry",
    "LeaderboardEntry",
    "LeaderboardResult",
    "LeaderboardScope",
    "UserSeasonSummary",
    "UserWeekSummary",
    "WeekBreakdown",
]
