from __future__ import annotations

from typing import Dict, List, Optional, Union

from .board import Board, Color, Piece, PieceType, is_on_board
from .move import Move, Square, format_square
from .movegen import ALL_DIRECTIONS, KNIGHT_OFFSETS, pseudo_legal_moves


ColorLike = Union[Color, str]


def _color(color: ColorLike) -> Color:
    # Color("x") raises ValueError for anything but "w"/"b"
    return Color(color)


def promote_on_arrival(board: Board, row: int, col: int) -> bool:
    """Turn a pawn standing on its last row into a queen, in place.

    Returns:
        bool: True when a promotion happened.
    """
    piece = board[row, col]
    if piece is None or piece.type is not PieceType.PAWN:
        return False
    if row != piece.color.last_row:
        return False
    piece.type = PieceType.QUEEN
    return True


def apply_move(board: Board, from_sq: Square, to_sq: Square) -> Optional[Piece]:
    """Move the piece on ``from_sq`` to ``to_sq`` in place.

    Any piece on ``to_sq`` is overwritten and a pawn reaching its last row is
    promoted to a queen. Neither legality nor turn order is checked here.

    Args:
        board (Board): Board to mutate.
        from_sq (Square): Origin ``(row, col)``.
        to_sq (Square): Destination ``(row, col)``.

    Returns:
        Optional[Piece]: The captured piece, if any.

    Raises:
        ValueError: If ``from_sq`` holds no piece.
    """
    piece = board[from_sq]
    if piece is None:
        raise ValueError(f"no piece on {format_square(from_sq)}")
    captured = board[to_sq]
    board[to_sq] = piece
    board[from_sq] = None
    promote_on_arrival(board, *to_sq)
    return captured


def legal_moves(board: Board, row: int, col: int) -> List[Move]:
    """Return pseudo-legal moves from ``(row, col)`` that keep the own king safe.

    Each candidate is played on a cloned board so ``board`` is never touched.
    """
    if not is_on_board(row, col):
        return []
    piece = board[row, col]
    if piece is None:
        return []
    legal: List[Move] = []
    for move in pseudo_legal_moves(board, row, col):
        snapshot = board.clone()
        apply_move(snapshot, (row, col), move.square)
        if not is_king_in_check(snapshot, piece.color):
            legal.append(move)
    return legal


def all_legal_moves(board: Board, color: ColorLike) -> Dict[Square, List[Move]]:
    """Map each origin square of ``color`` that has legal moves to its moves."""
    side = _color(color)
    out: Dict[Square, List[Move]] = {}
    for r, c, _ in board.pieces(side):
        moves = legal_moves(board, r, c)
        if moves:
            out[(r, c)] = moves
    return out


def has_legal_moves(board: Board, color: ColorLike) -> bool:
    side = _color(color)
    return any(legal_moves(board, r, c) for r, c, _ in board.pieces(side))


def _attacked_by_pawn(board: Board, row: int, col: int, by: Color) -> bool:
    # An enemy pawn attacks from one step against its own direction of travel
    r = row - by.forward
    for c in (col - 1, col + 1):
        if not is_on_board(r, c):
            continue
        piece = board[r, c]
        if piece is not None and piece.color is by and piece.type is PieceType.PAWN:
            return True
    return False


def _attacked_by_knight(board: Board, row: int, col: int, by: Color) -> bool:
    for dr, dc in KNIGHT_OFFSETS:
        r, c = row + dr, col + dc
        if not is_on_board(r, c):
            continue
        piece = board[r, c]
        if piece is not None and piece.color is by and piece.type is PieceType.KNIGHT:
            return True
    return False


def _attacked_along_rays(board: Board, row: int, col: int, by: Color) -> bool:
    for dr, dc in ALL_DIRECTIONS:
        r, c = row + dr, col + dc
        steps = 1
        while is_on_board(r, c):
            piece = board[r, c]
            if piece is None:
                r += dr
                c += dc
                steps += 1
                continue
            if piece.color is by:
                if piece.type is PieceType.KING and steps == 1:
                    return True
                if (dr == 0 or dc == 0) and piece.type in (PieceType.ROOK, PieceType.QUEEN):
                    return True
                if dr != 0 and dc != 0 and piece.type in (PieceType.BISHOP, PieceType.QUEEN):
                    return True
            # First occupied square blocks the ray
            break
    return False


def is_square_attacked(board: Board, row: int, col: int, by: ColorLike) -> bool:
    """Return True if any piece of ``by`` attacks ``(row, col)``.

    Covers: pawn pattern, knight pattern, adjacent king, and slider rays for
    bishops, rooks and queens.
    """
    side = _color(by)
    return (
        _attacked_by_pawn(board, row, col, side)
        or _attacked_by_knight(board, row, col, side)
        or _attacked_along_rays(board, row, col, side)
    )


def is_king_in_check(board: Board, color: ColorLike) -> bool:
    """Return True if the king of ``color`` is attacked.

    A board without a king of ``color`` reports check.
    """
    side = _color(color)
    king = board.find_king(side)
    if king is None:
        return True
    return is_square_attacked(board, king[0], king[1], side.opposite)


def is_checkmate(board: Board, color: ColorLike) -> bool:
    """Return True if ``color`` is in check and none of its pieces can move.

    A side that is not in check is never mated, even with zero legal moves.
    """
    side = _color(color)
    if not is_king_in_check(board, side):
        return False
    return not has_legal_moves(board, side)
