"""
🏈 GameRepository - lectura de partidos del store externo

Solo lectura: los marcadores y el spread llegan desde fuera del motor de scoring
"""

from typing import Iterable

from motor.motor_asyncio import AsyncIOMotorDatabase

from pickem.models.game import GameResult
from pickem.repositories.documents import SkippedDocuments, map_documents


class GameLookup(SkippedDocuments):
    """Partidos encontrados más los documentos que no se pudieron leer"""

    games: list[GameResult] = []


def game_from_doc(doc: dict) -> GameResult:
    return GameResult(**doc)


class GameRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["games"]

    async def get_by_ids(self, game_ids: Iterable[str]) -> GameLookup:
        """Obtiene los partidos referenciados por un conjunto de picks"""
        ids = sorted(set(game_ids))
        lookup = GameLookup()
        if not ids:
            return lookup

        cursor = self.collection.find({"_id": {"$in": ids}})
        docs = await cursor.to_list(length=None)
        lookup.games = map_documents(docs, game_from_doc, "games", lookup)
        return lookup
