from __future__ import annotations

from chessboard.engine.board import Board, PieceType, create_starting_board
from chessboard.engine.move import algebraic_to_square
from chessboard.engine.movegen import pseudo_legal_moves
from chessboard.engine.rules import legal_moves


def _names(moves) -> set[str]:
    return {m.to_algebraic() for m in moves}


def _pseudo(b: Board, square: str) -> set[str]:
    return _names(pseudo_legal_moves(b, *algebraic_to_square(square)))


def _legal(b: Board, square: str) -> set[str]:
    return _names(legal_moves(b, *algebraic_to_square(square)))


def test_empty_squares_have_no_moves() -> None:
    b = create_starting_board()
    for r in range(2, 6):
        for c in range(8):
            assert pseudo_legal_moves(b, r, c) == []
            assert legal_moves(b, r, c) == []


def test_off_board_query_has_no_moves() -> None:
    b = create_starting_board()
    assert pseudo_legal_moves(b, 8, 0) == []
    assert legal_moves(b, -1, 3) == []


def test_starting_position_move_counts() -> None:
    b = create_starting_board()
    for r, c, piece in b.pieces():
        n = len(legal_moves(b, r, c))
        if piece.type is PieceType.PAWN:
            assert n == 2
        elif piece.type is PieceType.KNIGHT:
            assert n == 2
        else:
            assert n == 0
    assert _legal(b, "g1") == {"f3", "h3"}
    assert _legal(b, "b8") == {"a6", "c6"}
    assert _legal(b, "e7") == {"e6", "e5"}


def test_pawn_blocked_double_push() -> None:
    b = Board.from_placement("k7/8/8/8/4p3/8/4P3/K7")
    assert _pseudo(b, "e2") == {"e3"}
    # Fully blocked pawn
    b = Board.from_placement("k7/8/8/8/8/4p3/4P3/K7")
    assert _pseudo(b, "e2") == set()


def test_pawn_captures_only_enemy_pieces() -> None:
    b = Board.from_placement("k7/8/8/8/8/3N1n2/4P3/K7")
    assert _legal(b, "e2") == {"e3", "e4", "f3"}


def test_black_pawn_moves_toward_row_seven() -> None:
    b = Board.from_placement("k7/3p4/4N3/8/8/8/8/K7")
    assert _pseudo(b, "d7") == {"d6", "d5", "e6"}


def test_pawn_off_home_row_single_step() -> None:
    b = Board.from_placement("k7/8/8/8/8/4P3/8/K7")
    assert _pseudo(b, "e3") == {"e4"}


def test_knight_moves_in_corner_and_center() -> None:
    b = Board.from_placement("k7/8/8/8/3N4/8/8/N6K")
    assert _pseudo(b, "a1") == {"b3", "c2"}
    assert _pseudo(b, "d4") == {"b3", "b5", "c2", "c6", "e2", "e6", "f3", "f5"}


def test_sliding_ray_stops_at_first_occupied_square() -> None:
    # White rook d4; own pawn d6 blocks, enemy knight f4 is capturable and blocks
    b = Board.from_placement("7k/8/3P4/8/3R1n2/8/8/K7")
    expected = {"d5", "d3", "d2", "d1", "c4", "b4", "a4", "e4", "f4"}
    assert _pseudo(b, "d4") == expected
    assert _legal(b, "d4") == expected
    assert "g4" not in _pseudo(b, "d4")
    assert "d6" not in _pseudo(b, "d4")


def test_bishop_and_queen_rays() -> None:
    b = Board.from_placement("4k3/8/8/8/8/8/8/2B1K3")
    assert _pseudo(b, "c1") == {"b2", "a3", "d2", "e3", "f4", "g5", "h6"}
    b = Board.from_placement("4k3/8/8/8/8/8/4P3/3QK3")
    assert _pseudo(b, "d1") == {
        "c1", "b1", "a1",
        "d2", "d3", "d4", "d5", "d6", "d7", "d8",
        "c2", "b3", "a4",
    }


def test_king_steps_never_onto_own_pieces() -> None:
    b = Board.from_placement("4k3/8/8/8/8/8/3PP3/3QK3")
    assert _pseudo(b, "e1") == {"f1", "f2"}


def test_no_pseudo_legal_move_targets_own_piece() -> None:
    b = Board.from_placement("r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R")
    for r, c, piece in b.pieces():
        for m in pseudo_legal_moves(b, r, c):
            target = b[m.square]
            assert target is None or target.color is not piece.color
