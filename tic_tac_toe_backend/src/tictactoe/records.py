"""
Score tallies and completed-game history.

Both outlive any single game session. Every change is applied in memory
first and then handed to the store; a failed write never undoes it.
"""

import asyncio
import logging
from typing import List

from .database import Store
from .models import HistoryEntry, Scores

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Scoreboard:
    """Win tallies per game mode plus the list of finished games, newest first."""

    def __init__(self, store: Store):
        self.store = store
        self.scores = Scores()
        self.history: List[HistoryEntry] = []
        self._lock = asyncio.Lock()

    async def load(self) -> None:
        scores = await self.store.load_scores()
        history = await self.store.load_history()
        if scores is not None:
            self.scores = scores
        if history is not None:
            self.history = list(history)
        logger.info("Loaded %d history entries", len(self.history))

    async def record(self, entry: HistoryEntry) -> None:
        """Add a finished game and credit its winner."""
        self.history.insert(0, entry)
        if entry.result != 'draw':
            tally = getattr(self.scores, entry.mode)
            setattr(tally, entry.result, getattr(tally, entry.result) + 1)
        logger.info("Recorded %s game: %s", entry.mode, entry.result)
        await self._persist()

    async def retract(self, entry: HistoryEntry) -> bool:
        """
        Remove a specific entry object when its game is undone.

        Only that game's own score is taken back; other tallies are untouched
        even if the history ends up empty.
        """
        for index, existing in enumerate(self.history):
            if existing is entry:
                del self.history[index]
                self._take_back(entry)
                await self._persist()
                return True
        return False

    async def delete(self, index: int) -> HistoryEntry:
        """
        Delete the history entry at `index` and take back its score.

        A decisive result decrements that mode's winner tally, floored at zero.
        Removing the last remaining entry zeroes every tally.

        Raises:
            IndexError: if there is no entry at `index`.
        """
        if not 0 <= index < len(self.history):
            raise IndexError(f"No history entry at {index}")
        entry = self.history.pop(index)
        if not self.history:
            self.scores = Scores()
        else:
            self._take_back(entry)
        await self._persist()
        return entry

    def _take_back(self, entry: HistoryEntry) -> None:
        if entry.result == 'draw':
            return
        tally = getattr(self.scores, entry.mode)
        setattr(tally, entry.result, max(0, getattr(tally, entry.result) - 1))

    async def reset_scores(self) -> None:
        self.scores = Scores()
        await self._persist()

    async def _persist(self) -> None:
        # One write at a time; each writes the state current when it gets the lock.
        async with self._lock:
            scores = self.scores.model_copy(deep=True)
            history = list(self.history)
            await asyncio.shield(self._write(scores, history))

    async def _write(self, scores: Scores, history: List[HistoryEntry]) -> None:
        await self.store.save_scores(scores)
        await self.store.save_history(history)
