from typing import Iterable, List, Optional, Set, Tuple, Union

from .models import Board, Mark, MoveRecord, Result

# Rows, columns, diagonals
LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

CENTER = 4
CORNERS = (0, 2, 6, 8)
SIDES = (1, 3, 5, 7)


def empty_board() -> Board:
    return [None] * 9


# PUBLIC_INTERFACE
def is_valid_move(board: Board, index: int) -> bool:
    """Check if a move is valid (index is within range and the cell is empty)."""
    return 0 <= index < 9 and board[index] is None


# PUBLIC_INTERFACE
def make_move(board: Board, index: int, mark: Mark) -> Board:
    """Return a new board with the move applied."""
    new_board = board[:]
    new_board[index] = mark
    return new_board


# PUBLIC_INTERFACE
def empty_cells(board: Board) -> List[int]:
    """Indices of the empty cells, in ascending order."""
    return [i for i, cell in enumerate(board) if cell is None]


# PUBLIC_INTERFACE
def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    """The first line whose three cells hold the same mark, or None."""
    for a, b, c in LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return (a, b, c)
    return None


# PUBLIC_INTERFACE
def winner(board: Board) -> Optional[Result]:
    """Check the game result: returns 'X', 'O', 'draw', or None while the game is open."""
    line = winning_line(board)
    if line is not None:
        return board[line[0]]
    if all(cell is not None for cell in board):
        return 'draw'
    return None


# PUBLIC_INTERFACE
def threats(board: Board, mark: Mark) -> Set[int]:
    """Empty cells that would complete a line for `mark`."""
    found = set()
    for line in LINES:
        cells = [board[i] for i in line]
        if cells.count(mark) == 2 and cells.count(None) == 1:
            found.add(line[cells.index(None)])
    return found


# PUBLIC_INTERFACE
def next_turn(current_turn: Mark) -> Mark:
    """Toggle turn: X -> O, O -> X."""
    return 'O' if current_turn == 'X' else 'X'


def side_to_move(board: Board) -> Mark:
    """Infer whose turn it is from the board (X always opens)."""
    x_count = board.count('X')
    o_count = board.count('O')
    return 'X' if x_count == o_count else 'O'


# PUBLIC_INTERFACE
def replay(moves: Iterable[Union[MoveRecord, Tuple[Mark, int]]]) -> Board:
    """Rebuild a board by applying a move log, in order, to an empty board."""
    board = empty_board()
    for move in moves:
        if isinstance(move, MoveRecord):
            mark, index = move.mark, move.index
        else:
            mark, index = move
        board[index] = mark
    return board


def cell_label(index: int) -> str:
    """Row letter plus column number, e.g. 0 -> 'A1', 8 -> 'C3'."""
    row, col = divmod(index, 3)
    return f"{chr(ord('A') + row)}{col + 1}"
