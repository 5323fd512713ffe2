"""
Controlador de scoring - puntuar un pick bajo demanda (debug / preview)
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from pickem.models.game import GameResult
from pickem.models.pick import Pick, ScoredPick
from pickem.services.points_service import GameMismatchError, score_pick


router = APIRouter(prefix="/scoring", tags=["scoring"])


class ScorePickRequest(BaseModel):
    """Pick y partido a puntuar."""
    pick: Pick
    game: GameResult


@router.post("/score-pick", response_model=ScoredPick)
async def score_single_pick(request: ScorePickRequest):
    """
    Puntuar un pick contra un partido.

    Si el partido no está terminado (o le falta un marcador) el pick queda pending.
    """
    try:
        return score_pick(request.pick, request.game)
    except GameMismatchError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
