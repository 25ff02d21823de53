from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .board import Board, Color
from .move import Move, Square, move_notation
from .rules import (
    all_legal_moves,
    apply_move,
    is_checkmate,
    is_king_in_check,
    legal_moves,
)


@dataclass
class Game:
    """Game session around a board.

    Responsibility: hold the board, side to move, selection and move list;
    enforce turn order and legality before handing moves to the engine.
    """

    board: Board
    turn: Color = Color.WHITE
    fullmove_number: int = 1
    selected: Optional[Square] = None
    highlighted: List[Move] = field(default_factory=list)
    history: List[str] = field(default_factory=list)
    flipped: bool = False
    # (board, turn, fullmove_number) before each move, for undo
    _snapshots: List[Tuple[Board, Color, int]] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        """Create a game from a FEN string.

        Only piece placement and side to move are used; castling, en passant
        and the halfmove clock are not modelled and are ignored. The fullmove
        number is kept when present.

        Raises:
            ValueError: If the placement or side to move is invalid.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        parts = fen.strip().split()
        if not parts:
            raise ValueError("FEN must be a non-empty string")
        board = Board.from_placement(parts[0])
        turn = Color.WHITE
        if len(parts) > 1:
            try:
                turn = Color(parts[1])
            except ValueError as e:
                raise ValueError("side to move must be 'w' or 'b'") from e
        fullmove = 1
        if len(parts) > 5:
            try:
                fullmove = int(parts[5])
            except ValueError as e:
                raise ValueError("invalid fullmove number in FEN") from e
            if fullmove <= 0:
                raise ValueError("invalid fullmove number in FEN")
        return cls(board=board, turn=turn, fullmove_number=fullmove)

    def to_fen(self) -> str:
        return f"{self.board.to_placement()} {self.turn.value} - - 0 {self.fullmove_number}"

    def legal_moves(self, square: Square) -> List[Move]:
        """Legal destinations from ``square`` for the side to move."""
        piece = self.board[square]
        if piece is None or piece.color is not self.turn:
            return []
        return legal_moves(self.board, *square)

    def all_legal_moves(self) -> Dict[Square, List[Move]]:
        return all_legal_moves(self.board, self.turn)

    def select(self, square: Square) -> Optional[str]:
        """Handle a click on ``square``.

        Clicking an own piece selects it and highlights its legal moves.
        Clicking a highlighted square while a piece is selected plays the
        move. Any other click clears the selection.

        Returns:
            Optional[str]: Notation of the move played, if any.
        """
        piece = self.board[square]
        if piece is not None and piece.color is self.turn:
            self.selected = square
            self.highlighted = legal_moves(self.board, *square)
            return None
        if self.selected is not None and any(m.square == square for m in self.highlighted):
            return self.apply_move(self.selected, square)
        self._clear_selection()
        return None

    def apply_move(self, from_sq: Square, to_sq: Square) -> str:
        """Validate and play a move for the side to move.

        Returns:
            str: Move-list notation of the move.

        Raises:
            ValueError: If the origin is empty, belongs to the other side, or
                the destination is not a legal move.
        """
        piece = self.board[from_sq]
        if piece is None:
            raise ValueError("no piece on origin square")
        if piece.color is not self.turn:
            raise ValueError("not your turn")
        if not any(m.square == to_sq for m in legal_moves(self.board, *from_sq)):
            raise ValueError("illegal move")

        self._snapshots.append((self.board.clone(), self.turn, self.fullmove_number))
        # Notation uses the piece type before promotion
        notation = move_notation(piece, from_sq, to_sq, self.board[to_sq])
        apply_move(self.board, from_sq, to_sq)
        self.history.append(notation)
        if self.turn is Color.BLACK:
            self.fullmove_number += 1
        self.turn = self.turn.opposite
        self._clear_selection()
        return notation

    def undo_move(self) -> None:
        if not self._snapshots:
            raise ValueError("no moves to undo")
        self.board, self.turn, self.fullmove_number = self._snapshots.pop()
        self.history.pop()
        self._clear_selection()

    def reset(self) -> None:
        self.board = Board.startpos()
        self.turn = Color.WHITE
        self.fullmove_number = 1
        self.history.clear()
        self._snapshots.clear()
        self._clear_selection()

    def flip(self) -> None:
        self.flipped = not self.flipped

    def _clear_selection(self) -> None:
        self.selected = None
        self.highlighted = []

    # --- State flags for protocol ---
    def in_check(self) -> bool:
        return is_king_in_check(self.board, self.turn)

    def checkmate(self) -> bool:
        return is_checkmate(self.board, self.turn)

    def winner(self) -> Optional[Color]:
        return self.turn.opposite if self.checkmate() else None

    def status(self) -> str:
        if self.checkmate():
            return f"Checkmate - {self.turn.opposite.label} wins"
        text = f"Turn: {self.turn.label}"
        if self.in_check():
            text += " - check!"
        return text

    def last_move(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def view(self) -> List[List[str]]:
        """Rows of piece symbols (``""`` for empty) in display order.

        White is at the bottom unless the board is flipped.
        """
        rows = [[p.symbol if p is not None else "" for p in row] for row in self.board.grid]
        if self.flipped:
            rows = [list(reversed(row)) for row in reversed(rows)]
        return rows
