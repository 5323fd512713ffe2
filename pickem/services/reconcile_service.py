"""
Pick Reconciler - merges registered and anonymous-attributed picks.

One canonical pick per (user, week, season, game):
- registered picks are authoritative; an anonymous duplicate is dropped
- picks that already carry a precomputed outcome pass through unchanged
- picks for games that are not scorable yet are pending
- picks pointing to an unknown game are skipped and reported
"""

import logging
from typing import Iterable, Mapping

from pydantic import BaseModel

from pickem.models.game import GameResult
from pickem.models.pick import AnonymousOrigin, Pick, PickOrigin, RegisteredOrigin, ScoredPick
from pickem.services.points_service import pending_pick, score_pick_outcome

logger = logging.getLogger(__name__)


class ReconcileResult(BaseModel):
    """Canonical picks for one user and week plus integrity diagnostics."""

    picks: list[ScoredPick] = []
    unmatched: list[str] = []
    dropped_duplicates: int = 0
    warnings: list[str] = []

    @property
    def error_count(self) -> int:
        return len(self.unmatched)


def origin_precedence(origin: PickOrigin) -> int:
    """Lower wins when two origins hold a pick for the same game."""
    match origin:
        case RegisteredOrigin():
            return 0
        case AnonymousOrigin():
            return 1
    raise TypeError(f"Unknown pick origin: {origin!r}")


def _index_games(games: Iterable[GameResult] | Mapping[str, GameResult]) -> Mapping[str, GameResult]:
    if isinstance(games, Mapping):
        return games
    return {game.id: game for game in games}


def _resolve(pick: Pick, games: Mapping[str, GameResult]) -> ScoredPick | None:
    if pick.precomputed is not None:
        return ScoredPick(
            pick=pick,
            result=pick.precomputed.result,
            points=pick.precomputed.points,
            pending=False,
            source="precomputed"
        )

    game = games.get(pick.game_id)
    if game is None:
        return None

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


def reconcile(
    user_id: str,
    week: int,
    season: int,
    registered_picks: Iterable[Pick],
    anonymous_picks: Iterable[Pick],
    games: Iterable[GameResult] | Mapping[str, GameResult],
) -> ReconcileResult:
    """
    Build the canonical scored pick list for one user in one week.

    Inputs are never mutated. Output follows input order (registered first,
    then anonymous), minus dropped and unmatched picks.
    """
    result = ReconcileResult()
    games_by_id = _index_games(games)

    # game_id -> (precedence, position in candidates)
    chosen: dict[str, tuple[int, int]] = {}
    candidates: list[Pick] = []

    for pick in [*registered_picks, *anonymous_picks]:
        if pick.user_id != user_id or pick.week != week or pick.season != season:
            result.warnings.append(
                f"Pick {pick.id} belongs to user {pick.user_id} week {pick.week} "
                f"season {pick.season}, ignored while reconciling user {user_id} "
                f"week {week} season {season}"
            )
            continue

        precedence = origin_precedence(pick.origin)
        current = chosen.get(pick.game_id)

        if current is None:
            chosen[pick.game_id] = (precedence, len(candidates))
            candidates.append(pick)
            continue

        current_precedence, position = current
        result.dropped_duplicates += 1

        if precedence < current_precedence:
            candidates[position] = pick
            chosen[pick.game_id] = (precedence, position)
        elif precedence == current_precedence:
            result.warnings.append(
                f"Duplicate {pick.origin.kind} pick {pick.id} for user {user_id} "
                f"game {pick.game_id}, kept {candidates[position].id}"
            )

    for pick in candidates:
        scored = _resolve(pick, games_by_id)
        if scored is None:
            message = f"Pick {pick.id} references unknown game {pick.game_id}"
            logger.warning(f"⚠️ {message}")
            result.unmatched.append(pick.id)
            result.warnings.append(message)
            continue
        result.picks.append(scored)

    return result
