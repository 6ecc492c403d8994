"""Composition de plateaux par sous-plateaux (TRN-005).

Un grand plateau est assemblé en recopiant des motifs plus petits, déjà
vérifiés, dans des régions rectangulaires. La fusion des cycles obtenus en un
seul tour (arêtes de jonction) reste à la charge de l'appelant.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Tuple

from tourney.engine.errors import ModeViolation

if TYPE_CHECKING:
    from tourney.engine.board import Board, Move

log = logging.getLogger(__name__)


def _translated_moves(board: "Board", other: "Board", x0: int, y0: int) -> Iterator["Move"]:
    for by in range(other.height):
        for bx in range(other.width):
            bdest = other[other.cell_index(bx, by)]
            if bdest is None:
                continue
            bdest_x, bdest_y = other.coords(bdest)
            src = board.cell_index(bx + x0, by + y0)
            dest = board.cell_index(bdest_x + x0, bdest_y + y0)
            yield src, dest


def copy_to_sub_board(board: "Board", other: "Board", x0: int, y0: int) -> bool:
    """Recopie les arêtes de `other` dans `board` avec le décalage (x0, y0).

    Args:
        board: plateau cible (orienté ou non).
        other: plateau source, non orienté et complet.
        x0: colonne de la première case de la région cible.
        y0: ligne de la première case de la région cible.

    Returns:
        True si toutes les arêtes ont pu être insérées.
    """

    if not other.is_undirected:
        raise ModeViolation("copy_to_sub_board (plateau source)", "non orienté")
    if not (
        board.in_range_x(x0)
        and board.in_range_y(y0)
        and x0 + other.width <= board.width
        and y0 + other.height <= board.height
    ):
        raise ValueError(
            f"Le sous-plateau {other.width}x{other.height} en ({x0}, {y0}) "
            f"dépasse le plateau {board.width}x{board.height}"
        )

    failures = 0
    for src, dest in _translated_moves(board, other, x0, y0):
        if not board.insert_move(src, dest):
            failures += 1

    if failures:
        log.debug("copy_to_sub_board en (%d, %d): %d insertion(s) refusée(s)", x0, y0, failures)
    return failures == 0


def tile_origins(board: "Board", pattern: "Board") -> Tuple[Tuple[int, int], ...]:
    """Origines (x0, y0) d'un pavage de `board` par `pattern`, en ordre ligne-major."""

    if board.width % pattern.width or board.height % pattern.height:
        raise ValueError(
            f"Le motif {pattern.width}x{pattern.height} ne pave pas "
            f"le plateau {board.width}x{board.height}"
        )
    return tuple(
        (x0, y0)
        for y0 in range(0, board.height, pattern.height)
        for x0 in range(0, board.width, pattern.width)
    )


def tile(board: "Board", pattern: "Board") -> bool:
    """Pave entièrement `board` avec des copies de `pattern`."""

    origins = tile_origins(board, pattern)
    results = [copy_to_sub_board(board, pattern, x0, y0) for x0, y0 in origins]
    log.debug(
        "Pavage %dx%d par %d motif(s) %dx%d",
        board.width,
        board.height,
        len(origins),
        pattern.width,
        pattern.height,
    )
    return all(results)


__all__ = ["copy_to_sub_board", "tile", "tile_origins"]
