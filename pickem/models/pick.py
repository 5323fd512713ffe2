from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field


PickResultKind = Literal["win", "loss", "push"]


class RegisteredOrigin(BaseModel):
    """Pick hecho por un usuario registrado (autoritativo)"""

    kind: Literal["registered"] = "registered"


class AnonymousOrigin(BaseModel):
    """Pick anónimo asignado después a un usuario"""

    kind: Literal["anonymous"] = "anonymous"
    anonymous_pick_id: str
    email: Optional[str] = None


PickOrigin = Annotated[
    Union[RegisteredOrigin, AnonymousOrigin],
    Field(discriminator="kind"),
]


class PickOutcome(BaseModel):
    """Resultado calculado de un pick"""

    result: PickResultKind
    points: int = Field(..., ge=0)

    class Config:
        frozen = True


class Pick(BaseModel):
    """Elección de un usuario para un partido"""

    id: str

    user_id: str
    game_id: str
    week: int
    season: int

    selected_team: str
    is_lock: bool = False

    origin: PickOrigin = Field(default_factory=RegisteredOrigin)

    # scored upstream, passed through unchanged when present
    precomputed: Optional[PickOutcome] = None

    class Config:
        populate_by_name = True
        frozen = True


class ScoredPick(BaseModel):
    """Pick con su resultado resuelto (derivado, nunca persistido)"""

    pick: Pick

    result: Optional[PickResultKind] = None
    points: int = Field(0, ge=0)

    pending: bool = False
    source: Literal["precomputed", "calculated", "pending"] = "pending"

    @property
    def is_lock(self) -> bool:
        return self.pick.is_lock

    @property
    def week(self) -> int:
        return self.pick.week

    class Config:
        frozen = True
