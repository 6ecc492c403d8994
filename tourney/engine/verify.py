"""Vérification de tour fermé et de tourney (TRN-003).

Les deux tests fonctionnent sur les plateaux orientés et non orientés:
- `is_tour`: un seul cycle passant par toutes les cases
- `is_tourney`: graphe 2-régulier (union disjointe de cycles) couvrant le plateau
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from tourney.engine.tables import DirectedTables

if TYPE_CHECKING:
    from tourney.engine.board import Board


def is_tour(board: "Board") -> bool:
    """Parcourt le cycle depuis la case 0 et vérifie qu'il couvre tout le plateau."""

    if not board.has_storage:
        return False

    tables = board.tables
    primary = tables.primary
    directed = isinstance(tables, DirectedTables)

    prev = 0
    cur = int(primary[0])
    count = 1

    while count < board.size and board.cell_index_in_range(cur) and cur != 0:
        dest = int(primary[cur])
        if dest == prev:
            # Une seule table ne permet pas de distinguer l'autre arête incidente.
            if not directed:
                return False
            dest = int(tables.secondary[cur])
        prev, cur = cur, dest
        count += 1

    return count == board.size and cur == 0


def degree_counts(board: "Board") -> np.ndarray | None:
    """Degré de chaque case, ou None si une entrée pointe hors du plateau.

    Plateau non orienté: chaque entrée `move[i] = j` compte pour i et j.
    Plateau orienté: chaque entrée des deux tables compte pour sa destination.
    """

    if not board.has_storage:
        return None

    tables = board.tables
    if isinstance(tables, DirectedTables):
        entries = np.concatenate((tables.primary, tables.secondary))
    else:
        entries = tables.primary

    if np.any((entries < 0) | (entries >= board.size)):
        return None

    counts = np.bincount(entries, minlength=board.size)
    if not isinstance(tables, DirectedTables):
        counts += 1
    return counts


def has_self_loop(board: "Board") -> bool:
    if not board.has_storage:
        return False
    cells = np.arange(board.size)
    tables = board.tables
    if isinstance(tables, DirectedTables):
        return bool(np.any(tables.primary == cells) or np.any(tables.secondary == cells))
    return bool(np.any(tables.primary == cells))


def is_tourney(board: "Board") -> bool:
    """Toutes les cases sont utilisées et chacune a exactement deux arêtes distinctes."""

    counts = degree_counts(board)
    if counts is None:
        return False
    # Une boucle compterait deux fois la même arête.
    if has_self_loop(board):
        return False
    return bool(np.all(counts == 2))


__all__ = ["is_tour", "is_tourney", "degree_counts", "has_self_loop"]
