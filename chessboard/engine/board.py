from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple


STARTPOS_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
BOARD_SIZE = 8
FILES = "abcdefgh"


class Color(str, Enum):
    """Side color, valued by its FEN letter."""

    WHITE = "w"
    BLACK = "b"

    @property
    def opposite(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Row delta of a pawn step (White moves toward row 0)."""
        return -1 if self is Color.WHITE else 1

    @property
    def pawn_row(self) -> int:
        return 6 if self is Color.WHITE else 1

    @property
    def last_row(self) -> int:
        return 0 if self is Color.WHITE else 7

    @property
    def label(self) -> str:
        return "White" if self is Color.WHITE else "Black"


class PieceType(str, Enum):
    KING = "K"
    QUEEN = "Q"
    ROOK = "R"
    BISHOP = "B"
    KNIGHT = "N"
    PAWN = "P"


@dataclass
class Piece:
    """A piece on the board.

    Attributes:
        type (PieceType): Kind of piece. Mutated in place on promotion.
        color (Color): Owning side.
    """

    type: PieceType
    color: Color

    @property
    def symbol(self) -> str:
        """FEN letter: uppercase for White, lowercase for Black."""
        ch = self.type.value
        return ch if self.color is Color.WHITE else ch.lower()

    @classmethod
    def from_symbol(cls, ch: str) -> "Piece":
        """Build a piece from a FEN letter.

        Raises:
            ValueError: If ``ch`` is not one of ``KQRBNPkqrbnp``.
        """
        try:
            ptype = PieceType(ch.upper())
        except ValueError as e:
            raise ValueError(f"invalid piece in placement: {ch!r}") from e
        return cls(ptype, Color.WHITE if ch.isupper() else Color.BLACK)


def _empty_grid() -> List[List[Optional[Piece]]]:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass
class Board:
    """8x8 grid of optional pieces addressed by ``(row, col)``.

    Notes:
    - Row 0 is rank 8 (Black's back rank), row 7 is rank 1.
    - Column 0 is file a.
    """

    grid: List[List[Optional[Piece]]] = field(default_factory=_empty_grid)

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board in the standard starting position."""
        return cls.from_placement(STARTPOS_PLACEMENT)

    @classmethod
    def from_placement(cls, placement: str) -> "Board":
        """Create a board from the piece-placement field of a FEN string.

        Args:
            placement (str): Ranks separated by ``/``, rank 8 first.

        Returns:
            Board: Board holding the described pieces.

        Raises:
            ValueError: If ``placement`` is empty, does not have 8 ranks, a rank
                does not cover exactly 8 squares, contains an unknown piece
                letter, or places a pawn on its promotion row.
        """
        if not placement or not isinstance(placement, str):
            raise ValueError("placement must be a non-empty string")
        ranks = placement.strip().split("/")
        if len(ranks) != BOARD_SIZE:
            raise ValueError("placement must have 8 ranks")
        board = cls()
        for row, rank in enumerate(ranks):
            col = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in placement rank")
                    col += n
                    continue
                if col >= BOARD_SIZE:
                    raise ValueError("too many squares in placement rank")
                piece = Piece.from_symbol(ch)
                if piece.type is PieceType.PAWN and row == piece.color.last_row:
                    raise ValueError("pawn on promotion row")
                board.grid[row][col] = piece
                col += 1
            if col != BOARD_SIZE:
                raise ValueError("rank does not sum to 8 squares in placement")
        return board

    def to_placement(self) -> str:
        """Serialize piece placement as a FEN field (rank 8 first)."""
        ranks: List[str] = []
        for row in self.grid:
            run = 0
            out = []
            for piece in row:
                if piece is None:
                    run += 1
                    continue
                if run:
                    out.append(str(run))
                    run = 0
                out.append(piece.symbol)
            if run:
                out.append(str(run))
            ranks.append("".join(out))
        return "/".join(ranks)

    def __getitem__(self, square: Tuple[int, int]) -> Optional[Piece]:
        row, col = square
        return self.grid[row][col]

    def __setitem__(self, square: Tuple[int, int], piece: Optional[Piece]) -> None:
        row, col = square
        self.grid[row][col] = piece

    def clone(self) -> "Board":
        """Return a deep copy; no Piece record is shared with ``self``."""
        return Board(
            grid=[
                [Piece(p.type, p.color) if p is not None else None for p in row]
                for row in self.grid
            ]
        )

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[int, int, Piece]]:
        """Yield ``(row, col, piece)`` in row-major order, optionally by color."""
        for r, row in enumerate(self.grid):
            for c, piece in enumerate(row):
                if piece is not None and (color is None or piece.color is color):
                    yield r, c, piece

    def find_king(self, color: Color) -> Optional[Tuple[int, int]]:
        """Return the first king of ``color`` in row-major order, if any."""
        for r, c, piece in self.pieces(color):
            if piece.type is PieceType.KING:
                return r, c
        return None

    def render(self) -> str:
        """Plain-text diagram with rank and file labels."""
        lines = []
        for r, row in enumerate(self.grid):
            cells = " ".join(p.symbol if p is not None else "." for p in row)
            lines.append(f"{BOARD_SIZE - r} {cells}")
        lines.append("  " + " ".join(FILES))
        return "\n".join(lines)


def create_starting_board() -> Board:
    return Board.startpos()


def clone_board(board: Board) -> Board:
    return board.clone()


def is_on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def square_to_algebraic(row: int, col: int) -> str:
    """Map ``(row, col)`` to a square name, e.g. ``(6, 4)`` -> ``"e2"``."""
    return FILES[col] + str(BOARD_SIZE - row)
