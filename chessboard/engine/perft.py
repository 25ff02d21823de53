from __future__ import annotations

from .board import Board, Color
from .rules import ColorLike, apply_move, legal_moves


def perft(board: Board, color: ColorLike, depth: int) -> int:
    """Count leaf nodes of the legal-move tree below ``board``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1),
      with ``color`` to move first and sides alternating.

    Children are built by cloning, so ``board`` is left unchanged.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    side = Color(color)
    nodes = 0
    for r, c, _ in list(board.pieces(side)):
        for move in legal_moves(board, r, c):
            if depth == 1:
                nodes += 1
                continue
            child = board.clone()
            apply_move(child, (r, c), move.square)
            nodes += perft(child, side.opposite, depth - 1)
    return nodes
