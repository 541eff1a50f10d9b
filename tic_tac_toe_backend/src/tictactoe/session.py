"""
Game session state machine.

A session owns one board, its move log and whose turn it is. States:

    awaiting_move --(human move)--> ai_thinking --(AI move)--> awaiting_move
    awaiting_move --(human move ends game)--> terminal
    ai_thinking --(AI move ends game)--> terminal

The AI answers after a fixed "thinking" delay, run as an asyncio task so
that reset, undo or a new session can cancel it before it lands.
"""

import asyncio
import logging
import random
from typing import List, Optional

from . import ai, core
from .feedback import Feedback, LoggingFeedback
from .models import (
    Board, Difficulty, GameMode, GameOut, HistoryEntry, Mark, MoveRecord,
    Names, Result, SessionState,
)
from .records import Scoreboard

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class GameSession:
    """One playthrough from an empty board to a terminal result."""

    def __init__(
        self,
        scoreboard: Scoreboard,
        feedback: Optional[Feedback] = None,
        mode: GameMode = 'single',
        difficulty: Difficulty = 'medium',
        player_mark: Mark = 'X',
        names: Optional[Names] = None,
        think_delay: float = 0.5,
        rng: Optional[random.Random] = None,
    ):
        self.scoreboard = scoreboard
        self.feedback = feedback or LoggingFeedback()
        self.mode = mode
        self.difficulty = difficulty
        self.player_mark = player_mark
        self.names = names or Names()
        self.think_delay = think_delay
        self.rng = rng or random.Random()

        self.board: Board = core.empty_board()
        self.current_player: Mark = 'X'
        self.moves: List[MoveRecord] = []
        self.thinking = False
        self._ai_task: Optional[asyncio.Task] = None
        self._entry: Optional[HistoryEntry] = None
        self._open()

    @property
    def ai_mark(self) -> Optional[Mark]:
        """Mark played by the computer, None in two-player mode."""
        if self.mode != 'single':
            return None
        return core.next_turn(self.player_mark)

    @property
    def winner(self) -> Optional[Result]:
        return core.winner(self.board)

    @property
    def state(self) -> SessionState:
        if self.winner is not None:
            return 'terminal'
        if self.thinking:
            return 'ai_thinking'
        return 'awaiting_move'

    def _open(self) -> None:
        """Let the AI play the opening X when the human picked O."""
        if self.ai_mark == 'X':
            index = ai.select_move(self.board, self.difficulty, self.ai_mark, self.rng)
            self._place(index)
            logger.info("AI opened at cell %d", index)

    def _place(self, index: int) -> None:
        mark = self.current_player
        self.board[index] = mark
        self.moves.append(MoveRecord(mark=mark, index=index))
        self.current_player = core.next_turn(mark)
        logger.debug("%s played cell %d", mark, index)

    # PUBLIC_INTERFACE
    async def apply_human_move(self, index: int) -> bool:
        """
        Play `index` for the human whose turn it is.

        Returns False and leaves the session untouched when the cell is
        taken or out of range, the game is over, the AI is thinking, or it is
        not the human's turn.
        """
        if (
            self.thinking
            or self.winner is not None
            or not core.is_valid_move(self.board, index)
            or (self.mode == 'single' and self.current_player != self.player_mark)
        ):
            logger.debug("Rejected move at %r in state %s", index, self.state)
            self.feedback.notify('invalid')
            return False

        self._place(index)
        if await self._settle():
            return True

        self.feedback.notify('move')
        if self.mode == 'single':
            self.thinking = True
            self._ai_task = asyncio.create_task(self._ai_turn())
        return True

    async def _ai_turn(self) -> None:
        await asyncio.sleep(self.think_delay)
        if self.winner is not None:
            logger.error("AI asked to move on a finished board")
            self.thinking = False
            return
        index = ai.select_move(self.board, self.difficulty, self.ai_mark, self.rng)
        self._place(index)
        self.thinking = False
        if not await self._settle():
            self.feedback.notify('move')

    async def _settle(self) -> bool:
        """Record the game if the last move ended it. Returns True when terminal."""
        result = self.winner
        if result is None:
            return False
        self._entry = HistoryEntry(
            mode=self.mode,
            difficulty=self.difficulty if self.mode == 'single' else None,
            x_name=self.names.x_name,
            o_name=self.names.o_name,
            player_mark=self.player_mark,
            result=result,
            moves=tuple(self.moves),
        )
        logger.info("Game over (%s mode): %s", self.mode, result)
        self.feedback.notify('draw' if result == 'draw' else 'win')
        await self.scoreboard.record(self._entry)
        return True

    # PUBLIC_INTERFACE
    async def wait_for_ai(self) -> None:
        """Block until a pending AI move has landed or been cancelled."""
        task = self._ai_task
        if task is not None:
            await asyncio.wait([task])

    # PUBLIC_INTERFACE
    def cancel_pending(self) -> None:
        """Drop a scheduled AI move that has not been applied yet."""
        if self._ai_task is not None and not self._ai_task.done():
            self._ai_task.cancel()
            logger.debug("Cancelled pending AI move")
        self._ai_task = None
        self.thinking = False

    # PUBLIC_INTERFACE
    async def undo(self) -> bool:
        """
        Take back the human's last move together with the AI reply to it.

        Single-player only. If the undone moves had finished the game, its
        history entry and score are retracted as well.
        """
        if self.mode != 'single':
            return False
        if not any(move.mark == self.player_mark for move in self.moves):
            return False

        self.cancel_pending()
        moves = list(self.moves)
        while moves:
            if moves.pop().mark == self.player_mark:
                break
        self.moves = moves
        self.board = core.replay(moves)
        self.current_player = self.player_mark

        if self._entry is not None:
            entry, self._entry = self._entry, None
            await self.scoreboard.retract(entry)
        logger.debug("Undo: %d moves left", len(self.moves))
        return True

    # PUBLIC_INTERFACE
    def reset(self) -> None:
        """Start over on an empty board. Scores and history are kept."""
        self.cancel_pending()
        self.board = core.empty_board()
        self.current_player = 'X'
        self.moves = []
        self._entry = None
        self._open()

    def snapshot(self) -> GameOut:
        return GameOut(
            board=list(self.board),
            current_player=self.current_player,
            winner=self.winner,
            winning_line=core.winning_line(self.board),
            state=self.state,
            mode=self.mode,
            difficulty=self.difficulty,
            player_mark=self.player_mark,
            moves=list(self.moves),
        )
