from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal, Tuple
from datetime import datetime, timezone

Mark = Literal['X', 'O']
Cell = Optional[Mark]
Board = List[Cell]
Result = Literal['X', 'O', 'draw']
GameMode = Literal['single', 'multi']
Difficulty = Literal['easy', 'medium', 'hard']
SessionState = Literal['awaiting_move', 'ai_thinking', 'terminal']


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
class MoveRecord(BaseModel):
    """One placed mark. Immutable once appended to a move log."""
    model_config = ConfigDict(frozen=True)

    mark: Mark
    index: int = Field(..., ge=0, le=8, description="Cell index (0-8, row-major)")
    timestamp: datetime = Field(default_factory=utcnow)


# PUBLIC_INTERFACE
class Tally(BaseModel):
    """Win counters for one game mode."""
    X: int = 0
    O: int = 0


# PUBLIC_INTERFACE
class Scores(BaseModel):
    """Win tallies per game mode."""
    single: Tally = Field(default_factory=Tally)
    multi: Tally = Field(default_factory=Tally)


# PUBLIC_INTERFACE
class Names(BaseModel):
    """Display names for the two marks."""
    x_name: str = "Player X"
    o_name: str = "Player O"


# PUBLIC_INTERFACE
class HistoryEntry(BaseModel):
    """Record of one completed game."""
    model_config = ConfigDict(frozen=True)

    mode: GameMode
    difficulty: Optional[Difficulty] = None
    x_name: str
    o_name: str
    player_mark: Mark = Field(..., description="Mark chosen by the human in single-player mode")
    result: Result
    moves: Tuple[MoveRecord, ...]
    completed_at: datetime = Field(default_factory=utcnow)


# PUBLIC_INTERFACE
class GameOut(BaseModel):
    """Serialized live game state for API output."""
    board: Board
    current_player: Mark
    winner: Optional[Result]
    winning_line: Optional[Tuple[int, int, int]]
    state: SessionState
    mode: GameMode
    difficulty: Difficulty
    player_mark: Mark
    moves: List[MoveRecord]


# PUBLIC_INTERFACE
class MoveCreate(BaseModel):
    """Request body for submitting a move."""
    index: int = Field(..., ge=0, le=8, description="Cell index (0-8, row-major)")


# PUBLIC_INTERFACE
class ModeIn(BaseModel):
    mode: GameMode


# PUBLIC_INTERFACE
class DifficultyIn(BaseModel):
    difficulty: Difficulty


# PUBLIC_INTERFACE
class MarkIn(BaseModel):
    mark: Mark


# PUBLIC_INTERFACE
class NameIn(BaseModel):
    """Request body for renaming the player of one mark."""
    mark: Mark
    name: str = Field(..., min_length=1, max_length=40)


# PUBLIC_INTERFACE
class SoundIn(BaseModel):
    enabled: bool


# PUBLIC_INTERFACE
class SettingsOut(BaseModel):
    """Current player-facing settings."""
    mode: GameMode
    difficulty: Difficulty
    player_mark: Mark
    names: Names
    sound_enabled: bool
