from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .board import BOARD_SIZE, FILES, Color, Piece, is_on_board, square_to_algebraic


Square = Tuple[int, int]


@dataclass(frozen=True)
class Move:
    """Candidate move destination.

    The origin is implicit: it is the square the moves were generated for.

    Attributes:
        row (int): Destination row (0 is rank 8).
        col (int): Destination column (0 is file a).
    """

    row: int
    col: int

    @property
    def square(self) -> Square:
        return (self.row, self.col)

    def to_algebraic(self) -> str:
        return square_to_algebraic(self.row, self.col)


def algebraic_to_square(s: str) -> Square:
    """Convert a square name such as ``"e4"`` into ``(row, col)``.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if not isinstance(s, str) or len(s) != 2 or s[0] not in FILES or s[1] not in "12345678":
        raise ValueError(f"invalid square: {s!r}")
    return (BOARD_SIZE - int(s[1]), FILES.index(s[0]))


def parse_move(text: str) -> Tuple[Square, Square]:
    """Parse a four-character move like ``"e2e4"`` into origin and destination.

    Raises:
        ValueError: If the string has the wrong length or invalid squares.
    """
    if not isinstance(text, str) or len(text) != 4:
        raise ValueError(f"invalid move: {text!r}")
    return algebraic_to_square(text[0:2]), algebraic_to_square(text[2:4])


def format_square(square: Square) -> str:
    row, col = square
    if not is_on_board(row, col):
        raise ValueError(f"invalid square: {square!r}")
    return square_to_algebraic(row, col)


def move_notation(piece: Piece, from_sq: Square, to_sq: Square, captured: Optional[Piece]) -> str:
    """Format a move for the move list, e.g. ``"P e2→e4"`` or ``"N (b) c6xd4"``.

    Only origin and destination squares are given; no disambiguation.
    """
    color_label = "" if piece.color is Color.WHITE else " (b)"
    sep = "x" if captured is not None else "→"
    return f"{piece.type.value}{color_label} {format_square(from_sq)}{sep}{format_square(to_sq)}"
