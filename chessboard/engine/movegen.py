"""Pseudo-legal move generation.

Moves obey piece geometry and occupancy but are not checked against king
safety; see ``rules.legal_moves`` for that.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple

from .board import Board, Piece, PieceType, is_on_board
from .move import Move


Direction = Tuple[int, int]

ORTHOGONAL: Tuple[Direction, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL: Tuple[Direction, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ALL_DIRECTIONS: Tuple[Direction, ...] = ORTHOGONAL + DIAGONAL
KNIGHT_OFFSETS: Tuple[Direction, ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)


def _pawn_moves(board: Board, r: int, c: int, piece: Piece) -> List[Move]:
    moves: List[Move] = []
    step = piece.color.forward
    # Single push, then double push from the home row
    if is_on_board(r + step, c) and board[r + step, c] is None:
        moves.append(Move(r + step, c))
        if r == piece.color.pawn_row and board[r + 2 * step, c] is None:
            moves.append(Move(r + 2 * step, c))
    # Captures
    for dc in (-1, 1):
        rr, cc = r + step, c + dc
        if not is_on_board(rr, cc):
            continue
        target = board[rr, cc]
        if target is not None and target.color is not piece.color:
            moves.append(Move(rr, cc))
    return moves


def _step_moves(
    board: Board, r: int, c: int, piece: Piece, offsets: Sequence[Direction]
) -> List[Move]:
    moves: List[Move] = []
    for dr, dc in offsets:
        rr, cc = r + dr, c + dc
        if not is_on_board(rr, cc):
            continue
        target = board[rr, cc]
        if target is None or target.color is not piece.color:
            moves.append(Move(rr, cc))
    return moves


def _slide(
    board: Board, r: int, c: int, piece: Piece, directions: Sequence[Direction]
) -> List[Move]:
    """Walk each ray until the edge or the first occupied square.

    The first occupied square is included only when it holds an enemy piece.
    """
    moves: List[Move] = []
    for dr, dc in directions:
        rr, cc = r + dr, c + dc
        while is_on_board(rr, cc):
            target = board[rr, cc]
            if target is None:
                moves.append(Move(rr, cc))
            else:
                if target.color is not piece.color:
                    moves.append(Move(rr, cc))
                break
            rr += dr
            cc += dc
    return moves


Generator = Callable[[Board, int, int, Piece], List[Move]]

_GENERATORS: Dict[PieceType, Generator] = {
    PieceType.PAWN: _pawn_moves,
    PieceType.KNIGHT: lambda b, r, c, p: _step_moves(b, r, c, p, KNIGHT_OFFSETS),
    PieceType.BISHOP: lambda b, r, c, p: _slide(b, r, c, p, DIAGONAL),
    PieceType.ROOK: lambda b, r, c, p: _slide(b, r, c, p, ORTHOGONAL),
    PieceType.QUEEN: lambda b, r, c, p: _slide(b, r, c, p, ALL_DIRECTIONS),
    PieceType.KING: lambda b, r, c, p: _step_moves(b, r, c, p, ALL_DIRECTIONS),
}


def pseudo_legal_moves(board: Board, row: int, col: int) -> List[Move]:
    """Return destinations reachable by the piece on ``(row, col)``.

    Args:
        board (Board): Position to inspect.
        row (int): Origin row.
        col (int): Origin column.

    Returns:
        List[Move]: Destinations, ignoring whether the move exposes the
            mover's own king. Empty when the square is empty or off the board.
    """
    if not is_on_board(row, col):
        return []
    piece = board[row, col]
    if piece is None:
        return []
    return _GENERATORS[piece.type](board, row, col, piece)
