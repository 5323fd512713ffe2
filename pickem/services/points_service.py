"""
Servicio de Puntos - Calcula el resultado de un pick contra el spread

Sistema de puntos:
- Push (empate contra el spread): 10 puntos, con o sin lock
- Pick perdido: 0 puntos
- Pick ganado: 20 puntos base + bonus por margen de cobertura
    - cubre por 29+  -> +5
    - cubre por 20+  -> +3
    - cubre por 11+  -> +1
- Lock: duplica el bonus de un pick ganado (la base sigue en 20)
"""

from pickem.models.game import GameResult
from pickem.models.pick import Pick, PickOutcome, ScoredPick


WIN_BASE_POINTS = 20
PUSH_POINTS = 10
LOSS_POINTS = 0

# (cover margin threshold, bonus), checked from the largest down
MARGIN_BONUS_TIERS = (
    (29, 5),
    (20, 3),
    (11, 1),
)


class ScoringError(Exception):
    """Base exception for scoring errors."""
    pass


class GameNotScorableError(ScoringError):
    """Raised when scoring a game that is not completed or lacks a score."""
    pass


class GameMismatchError(ScoringError):
    """Raised when a pick is scored against a game it does not reference."""
    pass


def margin_bonus(cover_margin: float) -> int:
    """Bonus por margen de cobertura (0, 1, 3 o 5)"""
    for threshold, bonus in MARGIN_BONUS_TIERS:
        if cover_margin >= threshold:
            return bonus
    return 0


def cover_margin(game: GameResult) -> float:
    """
    Distance between the spread-adjusted home score and the away score.

    Home -3.5 winning 28-21 covers by 28 - 3.5 - 21 = 3.5.
    """
    return abs(game.home_score + game.spread - game.away_score)


def score_pick_outcome(
    selected_team: str,
    is_lock: bool,
    game: GameResult
) -> PickOutcome:
    """
    Calcular el resultado de un pick para un partido terminado.

    Args:
        selected_team: Equipo elegido por el usuario
        is_lock: Si el pick es el lock de la semana
        game: Partido con status completed y ambos marcadores

    Returns:
        PickOutcome con result (win | loss | push) y points

    Raises:
        GameNotScorableError: si el partido todavía no se puede puntuar
    """
    if not game.is_scorable:
        raise GameNotScorableError(
            f"Game {game.id} is not scorable (status={game.status}, "
            f"home_score={game.home_score}, away_score={game.away_score})"
        )

    home_adjusted = game.home_score + game.spread

    if home_adjusted == game.away_score:
        return PickOutcome(result="push", points=PUSH_POINTS)

    covering_team = game.home_team if home_adjusted > game.away_score else game.away_team

    if selected_team != covering_team:
        return PickOutcome(result="loss", points=LOSS_POINTS)

    bonus = margin_bonus(cover_margin(game))
    if is_lock:
        bonus *= 2

    return PickOutcome(result="win", points=WIN_BASE_POINTS + bonus)


def pending_pick(pick: Pick) -> ScoredPick:
    return ScoredPick(pick=pick, result=None, points=0, pending=True, source="pending")


def score_pick(pick: Pick, game: GameResult) -> ScoredPick:
    """
    Score a single pick on demand.

    Always re-derives the outcome from the game; a precomputed outcome on the
    pick is ignored. Games that are not scorable yet produce a pending pick.
    """
    if pick.game_id != game.id:
        raise GameMismatchError(
            f"Pick {pick.id} references game {pick.game_id}, got game {game.id}"
        )

    if not game.is_scorable:
        return pending_pick(pick)

    outcome = score_pick_outcome(pick.selected_team, pick.is_lock, game)
    return ScoredPick(
        pick=pick,
        result=outcome.result,
        points=outcome.points,
        pending=False,
        source="calculated"
    )
