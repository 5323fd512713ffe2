"""
🎯 PickRepository - picks de usuarios registrados y picks anónimos asignados

Los picks llegan separados por origen; el Reconciler resuelve los duplicados.
"""

from typing import Any, Iterable, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from pickem.models.pick import AnonymousOrigin, Pick, PickOutcome, RegisteredOrigin
from pickem.repositories.documents import SkippedDocuments, map_documents


# Estados de validación que cuentan para el leaderboard
VALIDATED_STATUSES = ["auto_validated", "manually_validated"]


class PickLookup(SkippedDocuments):
    """Picks de una temporada/semana separados por origen"""

    registered: list[Pick] = []
    anonymous: list[Pick] = []


def _precomputed(doc: dict[str, Any]) -> Optional[PickOutcome]:
    if doc.get("result") is None or doc.get("points_earned") is None:
        return None
    return PickOutcome(result=doc["result"], points=doc["points_earned"])


def registered_pick_from_doc(doc: dict[str, Any]) -> Pick:
    return Pick(
        id=str(doc["_id"]),
        user_id=doc["user_id"],
        game_id=doc["game_id"],
        week=doc["week"],
        season=doc["season"],
        selected_team=doc["selected_team"],
        is_lock=doc.get("is_lock", False),
        origin=RegisteredOrigin(),
        precomputed=_precomputed(doc),
    )


def anonymous_pick_from_doc(doc: dict[str, Any]) -> Pick:
    anonymous_id = str(doc["_id"])
    return Pick(
        id=f"anon:{anonymous_id}",
        user_id=doc["assigned_user_id"],
        game_id=doc["game_id"],
        week=doc["week"],
        season=doc["season"],
        selected_team=doc["selected_team"],
        is_lock=doc.get("is_lock", False),
        origin=AnonymousOrigin(anonymous_pick_id=anonymous_id, email=doc.get("email")),
        precomputed=_precomputed(doc),
    )


def _apply_window(
    query: dict[str, Any],
    week: Optional[int],
    weeks: Optional[Iterable[int]]
):
    if week is not None:
        query["week"] = week
    elif weeks is not None:
        query["week"] = {"$in": sorted(set(weeks))}


class PickRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["picks"]
        self.anonymous_collection = db["anonymous_picks"]

    # ============================================
    # 📌 QUERIES
    # ============================================

    async def _find_registered(
        self,
        season: int,
        week: Optional[int] = None,
        weeks: Optional[Iterable[int]] = None,
        user_id: Optional[str] = None
    ) -> list[dict[str, Any]]:
        """Picks enviados por usuarios registrados (solo los submitted)"""
        query: dict[str, Any] = {"season": season, "submitted_at": {"$ne": None}}
        _apply_window(query, week, weeks)
        if user_id is not None:
            query["user_id"] = user_id

        cursor = self.collection.find(query).sort("_id", 1)
        return await cursor.to_list(length=None)

    async def _find_anonymous(
        self,
        season: int,
        week: Optional[int] = None,
        weeks: Optional[Iterable[int]] = None,
        user_id: Optional[str] = None
    ) -> list[dict[str, Any]]:
        """
        Picks anónimos ya asignados a un usuario.

        Solo cuentan los visibles en el leaderboard y validados.
        """
        query: dict[str, Any] = {
            "season": season,
            "assigned_user_id": {"$ne": None},
            "show_on_leaderboard": True,
            "validation_status": {"$in": VALIDATED_STATUSES},
        }
        _apply_window(query, week, weeks)
        if user_id is not None:
            query["assigned_user_id"] = user_id

        cursor = self.anonymous_collection.find(query).sort("_id", 1)
        return await cursor.to_list(length=None)

    # ============================================
    # 📌 READ
    # ============================================

    async def get_picks(
        self,
        season: int,
        week: Optional[int] = None,
        weeks: Optional[Iterable[int]] = None,
        user_id: Optional[str] = None
    ) -> PickLookup:
        """
        Picks de la temporada separados por origen.

        week filtra una semana, weeks un conjunto de semanas (best finish).
        Los documentos mal formados se saltan y quedan en skipped/warnings.
        """
        registered_docs = await self._find_registered(season, week, weeks, user_id)
        anonymous_docs = await self._find_anonymous(season, week, weeks, user_id)

        lookup = PickLookup()
        lookup.registered = map_documents(registered_docs, registered_pick_from_doc, "picks", lookup)
        lookup.anonymous = map_documents(anonymous_docs, anonymous_pick_from_doc, "anonymous_picks", lookup)
        return lookup
