from __future__ import annotations

import pytest

from chessboard.engine.board import (
    STARTPOS_PLACEMENT,
    Board,
    Color,
    Piece,
    PieceType,
    clone_board,
    create_starting_board,
    is_on_board,
    square_to_algebraic,
)
from chessboard.engine.rules import apply_move


def test_starting_board_layout() -> None:
    b = create_starting_board()
    back = [PieceType.ROOK, PieceType.KNIGHT, PieceType.BISHOP, PieceType.QUEEN,
            PieceType.KING, PieceType.BISHOP, PieceType.KNIGHT, PieceType.ROOK]
    for c in range(8):
        assert b[0, c] == Piece(back[c], Color.BLACK)
        assert b[1, c] == Piece(PieceType.PAWN, Color.BLACK)
        assert b[6, c] == Piece(PieceType.PAWN, Color.WHITE)
        assert b[7, c] == Piece(back[c], Color.WHITE)
    for r in range(2, 6):
        assert all(b[r, c] is None for c in range(8))
    assert len(list(b.pieces())) == 32


def test_placement_round_trip() -> None:
    assert create_starting_board().to_placement() == STARTPOS_PLACEMENT
    fen = "r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R"
    assert Board.from_placement(fen).to_placement() == fen


@pytest.mark.parametrize(
    "placement",
    [
        "",  # empty
        "8/8/8/8/8/8/8",  # not enough ranks
        "9/8/8/8/8/8/8/8",  # bad empty count
        "7/8/8/8/8/8/8/8",  # short rank
        "ppppppppp/8/8/8/8/8/8/8",  # too many squares
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX",  # bad piece
        "P7/8/8/8/8/8/8/8",  # white pawn on its last row
        "8/8/8/8/8/8/8/p7",  # black pawn on its last row
    ],
)
def test_invalid_placement_raises(placement: str) -> None:
    with pytest.raises(ValueError):
        Board.from_placement(placement)


def test_clone_is_deep_and_independent() -> None:
    b = create_starting_board()
    c = clone_board(b)
    assert c == b
    for r, col, piece in b.pieces():
        assert c[r, col] is not piece

    c[6, 4] = None
    c[0, 0].type = PieceType.QUEEN
    assert b[6, 4] == Piece(PieceType.PAWN, Color.WHITE)
    assert b[0, 0].type is PieceType.ROOK


def test_promotion_on_clone_does_not_touch_original() -> None:
    b = Board.from_placement("4k3/P7/8/8/8/8/8/4K3")
    c = b.clone()
    apply_move(c, (1, 0), (0, 0))
    assert c[0, 0] == Piece(PieceType.QUEEN, Color.WHITE)
    assert b[1, 0] == Piece(PieceType.PAWN, Color.WHITE)
    assert b[0, 0] is None


@pytest.mark.parametrize(
    "row,col,expected",
    [(0, 0, True), (7, 7, True), (3, 4, True), (-1, 0, False), (0, 8, False), (8, 3, False)],
)
def test_is_on_board(row: int, col: int, expected: bool) -> None:
    assert is_on_board(row, col) is expected


def test_square_to_algebraic() -> None:
    assert square_to_algebraic(0, 0) == "a8"
    assert square_to_algebraic(7, 0) == "a1"
    assert square_to_algebraic(6, 4) == "e2"
    assert square_to_algebraic(0, 7) == "h8"


def test_find_king_and_render() -> None:
    b = create_starting_board()
    assert b.find_king(Color.WHITE) == (7, 4)
    assert b.find_king(Color.BLACK) == (0, 4)
    assert Board.empty().find_king(Color.WHITE) is None
    lines = b.render().splitlines()
    assert lines[0] == "8 r n b q k b n r"
    assert lines[-1] == "  a b c d e f g h"
