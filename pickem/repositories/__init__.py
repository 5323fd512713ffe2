from .game_repository import GameLookup, GameRepository
from .pick_repository import PickLookup, PickRepository
from .user_repository import UserRepository
from .week_settings_repository import WeekSettingsRepository

__all__ = [
    "GameLookup",
    "GameRepository",
    "PickLookup",
    "PickRepository",
    "UserRepository",
    "WeekSettingsRepository",
]
