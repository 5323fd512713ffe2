from typing import Literal, Optional
from pydantic import BaseModel, Field


GameStatus = Literal["scheduled", "in_progress", "completed"]


class GameResult(BaseModel):
    """Resultado de un partido contra el spread"""

    id: str = Field(..., alias="_id")
    season: int
    week: int

    home_team: str
    away_team: str

    spread: float  # signed, relative to the home team (-3.5 = home favored by 3.5)

    home_score: Optional[int] = None
    away_score: Optional[int] = None

    status: GameStatus = "scheduled"

    @property
    def is_scorable(self) -> bool:
        # completed with a single score is still pending
        return (
            self.status == "completed"
            and self.home_score is not None
            and self.away_score is not None
        )

    class Config:
        populate_by_name = True
        frozen = True
