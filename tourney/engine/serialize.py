"""Outils de sérialisation des plateaux (TRN-006).

Deux formats:
- texte ligne-major: pour chaque case, l'index (0-7) du coup suivant, `-1` si
  la case n'a pas de coup de cavalier enregistré
- snapshot JSON-friendly (listes/dicts primitifs) des tables complètes
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping

import numpy as np

from tourney.engine.board import Board
from tourney.engine.errors import ModeViolation
from tourney.engine.rules import KNIGHT_DELTAS, UNUSED, MoveDeltas
from tourney.engine.tables import DirectedTables

log = logging.getLogger(__name__)

SCHEMA_VERSION = "0.1.0"

_ROW_PATTERN = re.compile(r"(?:-1|\d)+")
_TOKEN_PATTERN = re.compile(r"-1|\d")


def board_to_text(board: Board) -> str:
    """Encode la table principale d'un plateau non orienté, une ligne par rangée."""

    if not board.is_undirected:
        raise ModeViolation("board_to_text", "non orienté")

    lines: List[str] = []
    for y in range(board.height):
        row: List[str] = []
        for x in range(board.width):
            cell = board.cell_index(x, y)
            dest = board[cell]
            index = None if dest is None else board.move_index(cell, dest)
            row.append(str(UNUSED if index is None else index))
        lines.append("".join(row))
    return "\n".join(lines) + "\n"


def text_to_board(text: str, *, deltas: MoveDeltas = KNIGHT_DELTAS) -> Board:
    """Reconstruit un plateau non orienté à partir du format texte."""

    rows: List[List[int]] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if not _ROW_PATTERN.fullmatch(line):
            raise ValueError(f"Ligne de table de coups invalide: {line!r}")
        rows.append([int(token) for token in _TOKEN_PATTERN.findall(line)])

    if not rows:
        raise ValueError("Table de coups vide")
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise ValueError("Toutes les lignes doivent avoir la même largeur")

    height = len(rows)
    geometry = Board(width, height, deltas=deltas)
    move: List[int] = []
    for cell, index in enumerate(token for row in rows for token in row):
        if index == UNUSED:
            move.append(UNUSED)
            continue
        if index >= len(deltas):
            raise ValueError(f"Index de coup inconnu: {index}")
        dest = geometry.destination(cell, deltas[index])
        if dest is None:
            raise ValueError(f"Le coup {index} depuis la case {cell} sort du plateau")
        move.append(dest)

    log.debug("Table de coups %dx%d décodée", width, height)
    return Board.from_move_table(move, width, height, deltas=deltas)


def board_to_snapshot(board: Board) -> Dict[str, Any]:
    """Convertit un plateau en snapshot JSON-friendly."""

    tables = board.tables
    blank = [UNUSED] * board.size

    def dump(table: np.ndarray) -> List[int]:
        # Plateau impair sans stockage: table pleine de UNUSED à la taille du plateau
        return [int(v) for v in table] if board.has_storage else list(blank)

    secondary = tables.secondary if isinstance(tables, DirectedTables) else None
    return {
        "schema_version": SCHEMA_VERSION,
        "width": board.width,
        "height": board.height,
        "mode": "directed" if board.is_directed else "undirected",
        "deltas": [list(delta) for delta in board.deltas],
        "primary": dump(tables.primary),
        "secondary": None if secondary is None else dump(secondary),
    }


def snapshot_to_board(snapshot: Mapping[str, Any]) -> Board:
    """Reconstruit un plateau à partir d'un snapshot."""

    version = snapshot.get("schema_version")
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema_version: {version!r}")

    raw_deltas = snapshot.get("deltas")
    deltas = (
        KNIGHT_DELTAS
        if raw_deltas is None
        else MoveDeltas(deltas=tuple((int(dx), int(dy)) for dx, dy in raw_deltas))
    )

    mode = snapshot.get("mode", "undirected")
    if mode not in ("directed", "undirected"):
        raise ValueError(f"Mode inconnu: {mode!r}")
    secondary = snapshot.get("secondary")
    if mode == "directed" and secondary is None:
        raise ValueError("Snapshot orienté sans table secondaire")

    return Board.from_tables(
        int(snapshot["width"]),
        int(snapshot["height"]),
        list(snapshot["primary"]),
        list(secondary) if mode == "directed" else None,
        deltas=deltas,
    )


__all__ = [
    "SCHEMA_VERSION",
    "board_to_text",
    "text_to_board",
    "board_to_snapshot",
    "snapshot_to_board",
]
