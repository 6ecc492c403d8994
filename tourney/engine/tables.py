"""Stockage des tables de coups (variante orientée / non orientée).

Le mode d'un plateau est porté par le type de son stockage:
- `UndirectedTables`: une seule table, chaque arête enregistrée une fois
- `DirectedTables`: deux tables, chaque case connaît ses deux arêtes
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

import numpy as np

from tourney.engine.rules import UNUSED

TABLE_DTYPE = np.int64


def empty_table(size: int) -> np.ndarray:
    """Table de `size` cases toutes à UNUSED."""

    return np.full(size, UNUSED, dtype=TABLE_DTYPE)


def table_from(values: Iterable[int | None], size: int) -> np.ndarray:
    """Copie une table de coups existante (None accepté pour une case vide)."""

    table = np.array(
        [UNUSED if value is None else int(value) for value in values],
        dtype=TABLE_DTYPE,
    )
    if table.shape != (size,):
        raise ValueError(
            f"La table de coups doit contenir {size} entrées (reçu: {table.shape[0]})"
        )
    invalid = (table != UNUSED) & ((table < 0) | (table >= size))
    if np.any(invalid):
        raise ValueError(
            f"Entrée de table hors plateau: {int(table[invalid][0])} (attendu: {UNUSED} ou [0, {size}))"
        )
    return table


@dataclass(eq=False)
class UndirectedTables:
    primary: np.ndarray

    def copy(self) -> "UndirectedTables":
        return UndirectedTables(primary=self.primary.copy())


@dataclass(eq=False)
class DirectedTables:
    primary: np.ndarray
    secondary: np.ndarray

    def copy(self) -> "DirectedTables":
        return DirectedTables(
            primary=self.primary.copy(),
            secondary=self.secondary.copy(),
        )


MoveTables = Union[UndirectedTables, DirectedTables]

__all__ = [
    "TABLE_DTYPE",
    "UndirectedTables",
    "DirectedTables",
    "MoveTables",
    "empty_table",
    "table_from",
]
