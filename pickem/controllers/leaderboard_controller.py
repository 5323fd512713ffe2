"""
Controlador de leaderboards - Endpoints de clasificación

Los leaderboards se calculan en cada request a partir de los picks y partidos
actuales; la respuesta incluye los avisos de integridad de datos.
"""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, status
from fastapi.responses import Response

from pickem.core.dependencies import Leaderboards
from pickem.models.leaderboard import LeaderboardResult, WeekBreakdown
from pickem.services.export_service import export_filename, leaderboard_to_csv
from pickem.services.leaderboard_service import (
    InvalidLeaderboardRequestError,
    LeaderboardServiceError,
    SeasonNotConfiguredError,
)


router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])

SeasonPath = Annotated[int, Path(ge=1, description="Season year, e.g. 2025")]
WeekPath = Annotated[int, Path(ge=1, description="Week number within the season")]


def _http_error(error: LeaderboardServiceError) -> HTTPException:
    if isinstance(error, SeasonNotConfiguredError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, InvalidLeaderboardRequestError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))


def _csv_response(result: LeaderboardResult) -> Response:
    return Response(
        content=leaderboard_to_csv(result),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(result)}"'}
    )


@router.get("/{season}/week/{week}", response_model=LeaderboardResult)
async def get_weekly_leaderboard(
    leaderboards: Leaderboards,
    season: SeasonPath,
    week: WeekPath
):
    """
    Obtener el leaderboard de una semana.
    """
    try:
        return await leaderboards.get_weekly_leaderboard(season, week)
    except LeaderboardServiceError as e:
        raise _http_error(e)


@router.get("/{season}/week/{week}/export")
async def export_weekly_leaderboard(
    leaderboards: Leaderboards,
    season: SeasonPath,
    week: WeekPath
):
    """Descargar el leaderboard semanal en CSV."""
    try:
        result = await leaderboards.get_weekly_leaderboard(season, week)
    except LeaderboardServiceError as e:
        raise _http_error(e)

    return _csv_response(result)


@router.get("/{season}", response_model=LeaderboardResult)
async def get_season_leaderboard(
    leaderboards: Leaderboards,
    season: SeasonPath
):
    """
    Obtener el leaderboard acumulado de la temporada.
    """
    try:
        return await leaderboards.get_season_leaderboard(season)
    except LeaderboardServiceError as e:
        raise _http_error(e)


@router.get("/{season}/export")
async def export_season_leaderboard(
    leaderboards: Leaderboards,
    season: SeasonPath
):
    """Descargar el leaderboard de temporada en CSV."""
    try:
        result = await leaderboards.get_season_leaderboard(season)
    except LeaderboardServiceError as e:
        raise _http_error(e)

    return _csv_response(result)


@router.get("/{season}/best-finish", response_model=LeaderboardResult)
async def get_best_finish_leaderboard(
    leaderboards: Leaderboards,
    season: SeasonPath
):
    """
    Obtener el leaderboard de best finish (semanas elegibles de fin de temporada).

    Todas las semanas elegibles suman; la peor semana solo se reporta.
    """
    try:
        return await leaderboards.get_best_finish_leaderboard(season)
    except LeaderboardServiceError as e:
        raise _http_error(e)


@router.get("/{season}/best-finish/export")
async def export_best_finish_leaderboard(
    leaderboards: Leaderboards,
    season: SeasonPath
):
    """Descargar el leaderboard de best finish en CSV."""
    try:
        result = await leaderboards.get_best_finish_leaderboard(season)
    except LeaderboardServiceError as e:
        raise _http_error(e)

    return _csv_response(result)


@router.get("/{season}/best-finish/{user_id}", response_model=list[WeekBreakdown])
async def get_best_finish_details(
    user_id: str,
    leaderboards: Leaderboards,
    season: SeasonPath
):
    """
    Detalle semana a semana del best finish de un usuario.
    """
    try:
        return await leaderboards.get_best_finish_details(season, user_id)
    except LeaderboardServiceError as e:
        raise _http_error(e)
