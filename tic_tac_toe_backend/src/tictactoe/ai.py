"""
Computer opponent: position evaluation, minimax search with alpha-beta
pruning and the difficulty-tiered move selection built on top of them.

Scores are always from the AI's point of view: +10 for an AI win, -10 for a
loss, 0 for a draw. The search adjusts decisive scores by depth so quicker
wins and slower losses are preferred.
"""

import logging
import math
import random
from typing import List, Optional

from . import core
from .models import Board, Difficulty, Mark

logger = logging.getLogger(__name__)

WIN_SCORE = 10


# PUBLIC_INTERFACE
def evaluate(board: Board, ai_mark: Mark = 'O') -> int:
    """Score a board for `ai_mark`; open boards score AI threats minus opponent threats."""
    result = core.winner(board)
    if result == ai_mark:
        return WIN_SCORE
    if result == 'draw':
        return 0
    if result is not None:
        return -WIN_SCORE
    opponent = core.next_turn(ai_mark)
    return len(core.threats(board, ai_mark)) - len(core.threats(board, opponent))


# PUBLIC_INTERFACE
def search(
    board: Board,
    depth: int,
    maximizing: bool,
    alpha: float = -math.inf,
    beta: float = math.inf,
    ai_mark: Mark = 'O',
) -> float:
    """
    Minimax value of `board` with alpha-beta pruning.

    `depth` counts plies already played below the root. The board is mutated
    while exploring and every cell is restored before returning.
    """
    score = evaluate(board, ai_mark)
    if score == WIN_SCORE:
        return score - depth
    if score == -WIN_SCORE:
        return score + depth
    if None not in board:
        return 0

    if maximizing:
        mark = ai_mark
        best = -math.inf
    else:
        mark = core.next_turn(ai_mark)
        best = math.inf

    for index in range(9):
        if board[index] is not None:
            continue
        board[index] = mark
        value = search(board, depth + 1, not maximizing, alpha, beta, ai_mark)
        board[index] = None
        if maximizing:
            best = max(best, value)
            alpha = max(alpha, best)
        else:
            best = min(best, value)
            beta = min(beta, best)
        if beta <= alpha:
            break  # Prune
    return best


# PUBLIC_INTERFACE
def best_moves(board: Board, ai_mark: Mark = 'O') -> List[int]:
    """All empty cells that reach the optimal minimax value for `ai_mark`."""
    board = list(board)
    best_score = -math.inf
    moves: List[int] = []
    for index in core.empty_cells(board):
        board[index] = ai_mark
        score = search(board, 0, False, ai_mark=ai_mark)
        board[index] = None
        if score > best_score:
            best_score = score
            moves = [index]
        elif score == best_score:
            moves.append(index)
    logger.debug("Optimal moves for %s: %s (score %s)", ai_mark, moves, best_score)
    return moves


# PUBLIC_INTERFACE
def strategic_move(board: Board, ai_mark: Mark = 'O', rng: Optional[random.Random] = None) -> int:
    """Heuristic move: win, block, center, corner, side, then the first free cell."""
    rng = rng or random
    own = core.threats(board, ai_mark)
    if own:
        return min(own)
    blocks = core.threats(board, core.next_turn(ai_mark))
    if blocks:
        return min(blocks)
    if board[core.CENTER] is None:
        return core.CENTER
    corners = [i for i in core.CORNERS if board[i] is None]
    if corners:
        return rng.choice(corners)
    sides = [i for i in core.SIDES if board[i] is None]
    if sides:
        return rng.choice(sides)
    return core.empty_cells(board)[0]


# PUBLIC_INTERFACE
def select_move(
    board: Board,
    difficulty: Difficulty,
    ai_mark: Mark = 'O',
    rng: Optional[random.Random] = None,
) -> int:
    """
    Choose the AI's next cell.

    easy:   uniformly random empty cell.
    medium: half the time the strategic heuristic, otherwise random.
    hard:   uniformly random among the minimax-optimal cells.

    Raises:
        ValueError: if the board has no empty cell.
    """
    rng = rng or random
    available = core.empty_cells(board)
    if not available:
        raise ValueError("No legal move left on the board")

    if difficulty == 'easy':
        move = rng.choice(available)
    elif difficulty == 'medium':
        if rng.random() < 0.5:
            move = strategic_move(board, ai_mark, rng)
        else:
            move = rng.choice(available)
    elif difficulty == 'hard':
        move = rng.choice(best_moves(board, ai_mark))
    else:
        raise ValueError(f"Unknown difficulty: {difficulty!r}")

    logger.debug("AI (%s, %s) selects cell %d", ai_mark, difficulty, move)
    return move
