"""Live game results supplied by an external score source."""

from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class LiveResult:
    home_team_id: str
    away_team_id: str
    home_score: int = 0
    away_score: int = 0
    is_in_progress: bool = False
    is_complete: bool = False
    quarter: int | None = None
    time_remaining: str | None = None

    @property
    def has_started(self) -> bool:
        return self.is_in_progress or self.is_complete

    @property
    def winner_id(self) -> str | None:
        """Team id of the winner once the game is final, else None."""
        if not self.is_complete or self.home_score == self.away_score:
            return None
        return self.home_team_id if self.home_score > self.away_score else self.away_team_id

    def score_for(self, team_id: str) -> int | None:
        if team_id == self.home_team_id:
            return self.home_score
        if team_id == self.away_team_id:
            return self.away_score
        return None


# matchup_id -> LiveResult, or None when no game data exists
LiveResultLookup = Callable[[str], Optional[LiveResult]]
