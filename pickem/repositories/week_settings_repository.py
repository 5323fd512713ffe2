"""
📅 WeekSettingsRepository - configuración de semanas (admin)
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase


class WeekSettingsRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["week_settings"]

    async def get_best_finish_weeks(self, season: int) -> Optional[list[int]]:
        """
        Semanas elegibles para el best finish, ordenadas.

        Retorna None si la temporada no tiene ninguna semana configurada,
        y una lista vacía si está configurada pero sin semanas elegibles.
        """
        cursor = self.collection.find({"season": season})
        docs = await cursor.to_list(length=None)

        if not docs:
            return None

        return sorted(doc["week"] for doc in docs if doc.get("best_finish_eligible"))
