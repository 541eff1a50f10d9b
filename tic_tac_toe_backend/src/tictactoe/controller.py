"""
Presentation boundary: the operations a front end calls, and the state it
reads back for rendering. Owns the live session, settings and the shared
scoreboard, and writes settings through to the store.
"""

import logging
import random
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from . import config
from .database import MemoryStore, Store
from .feedback import Feedback, LoggingFeedback
from .models import (
    Difficulty, GameMode, GameOut, HistoryEntry, Mark, Names, Scores, SettingsOut,
)
from .records import Scoreboard
from .session import GameSession

logger = logging.getLogger(__name__)

_difficulty = TypeAdapter(Difficulty)


def checked_difficulty(level: Optional[str]) -> Difficulty:
    """Validate a difficulty name, falling back to medium."""
    try:
        return _difficulty.validate_python(level)
    except ValidationError:
        logger.warning("Unknown difficulty %r, using medium", level)
        return 'medium'


# PUBLIC_INTERFACE
class GameController:
    """Front-end facing API around one live game session."""

    def __init__(
        self,
        store: Optional[Store] = None,
        feedback: Optional[Feedback] = None,
        think_delay: Optional[float] = None,
        difficulty: Optional[Difficulty] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store or MemoryStore()
        self.feedback = feedback or LoggingFeedback()
        self.scoreboard = Scoreboard(self.store)
        self.think_delay = config.AI_THINK_DELAY if think_delay is None else think_delay
        self.rng = rng or random.Random()

        self.mode: GameMode = 'single'
        self.difficulty = checked_difficulty(difficulty or config.DEFAULT_DIFFICULTY)
        self.player_mark: Mark = 'X'
        self.names = Names()
        self.sound_enabled = True
        self.session = self._new_session()

    def _new_session(self) -> GameSession:
        return GameSession(
            self.scoreboard,
            feedback=self.feedback,
            mode=self.mode,
            difficulty=self.difficulty,
            player_mark=self.player_mark,
            names=self.names,
            think_delay=self.think_delay,
            rng=self.rng,
        )

    def _replace_session(self) -> None:
        self.session.cancel_pending()
        self.session = self._new_session()

    async def load(self) -> None:
        """Restore persisted scores, history, names and sound preference."""
        await self.scoreboard.load()
        names = await self.store.load_names()
        if names is not None:
            self.names = names
            self.session.names = names
        sound = await self.store.load_sound_preference()
        if sound is not None:
            self._apply_sound(sound)

    # -- settings --
    def select_game_mode(self, mode: GameMode) -> None:
        self.mode = mode
        self._replace_session()
        logger.info("Game mode set to %s", mode)

    def select_difficulty(self, level: Difficulty) -> None:
        """Applies to the next AI move of the current session."""
        self.difficulty = checked_difficulty(level)
        self.session.difficulty = self.difficulty

    def select_player_mark(self, mark: Mark) -> None:
        self.player_mark = mark
        self._replace_session()

    async def set_player_name(self, mark: Mark, name: str) -> None:
        if mark == 'X':
            self.names = self.names.model_copy(update={"x_name": name})
        else:
            self.names = self.names.model_copy(update={"o_name": name})
        self.session.names = self.names
        await self.store.save_names(self.names.x_name, self.names.o_name)

    async def set_sound_enabled(self, enabled: bool) -> None:
        self._apply_sound(enabled)
        await self.store.save_sound_preference(enabled)

    def _apply_sound(self, enabled: bool) -> None:
        self.sound_enabled = enabled
        if hasattr(self.feedback, "sound_enabled"):
            self.feedback.sound_enabled = enabled

    # -- game --
    async def make_move(self, index: int) -> bool:
        return await self.session.apply_human_move(index)

    async def undo_move(self) -> bool:
        return await self.session.undo()

    def reset_game(self) -> None:
        self.session.reset()

    async def settle(self) -> None:
        """Wait for a pending AI reply, if any."""
        await self.session.wait_for_ai()

    # -- records --
    async def reset_scores(self) -> None:
        await self.scoreboard.reset_scores()

    async def delete_history_entry(self, index: int) -> HistoryEntry:
        return await self.scoreboard.delete(index)

    # -- reads --
    @property
    def scores(self) -> Scores:
        return self.scoreboard.scores

    @property
    def history(self) -> List[HistoryEntry]:
        return self.scoreboard.history

    def game(self) -> GameOut:
        return self.session.snapshot()

    def settings(self) -> SettingsOut:
        return SettingsOut(
            mode=self.mode,
            difficulty=self.difficulty,
            player_mark=self.player_mark,
            names=self.names,
            sound_enabled=self.sound_enabled,
        )

    async def close(self) -> None:
        self.session.cancel_pending()
        await self.store.close()
