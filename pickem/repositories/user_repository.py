"""
UserRepository - nombres visibles de usuarios para los leaderboards.
"""

from typing import Iterable

from motor.motor_asyncio import AsyncIOMotorDatabase


class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["users"]

    async def get_display_names(self, user_ids: Iterable[str]) -> dict[str, str]:
        """Map user_id -> display_name (usuarios sin nombre no aparecen)."""
        ids = sorted(set(user_ids))
        if not ids:
            return {}

        cursor = self.collection.find(
            {"_id": {"$in": ids}},
            {"display_name": 1}
        )
        docs = await cursor.to_list(length=None)

        return {
            str(doc["_id"]): doc["display_name"]
            for doc in docs
            if doc.get("display_name")
        }
