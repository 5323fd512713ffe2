"""
Dependencies de FastAPI para inyeccion de BD y servicios
"""

from typing import Annotated

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from pickem.core.config import Settings, get_settings
from pickem.database import get_database
from pickem.services.leaderboard_service import LeaderboardService


async def get_leaderboard_service(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)],
    settings: Annotated[Settings, Depends(get_settings)]
) -> LeaderboardService:
    """Construye el LeaderboardService sobre la BD de la request"""
    return LeaderboardService.from_db(db, settings)


# Alias de tipo para que se vea mas limpio en los endpoints
Leaderboards = Annotated[LeaderboardService, Depends(get_leaderboard_service)]
