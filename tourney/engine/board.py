"""Plateau rectangulaire relié par des coups de cavalier (TRN-001).

Cette implémentation expose:
- la géométrie du plateau (index ligne-major, application des deltas)
- le stockage des arêtes, en mode non orienté (une table) ou orienté (deux tables)
- l'insertion et la suppression d'arêtes, la conversion entre les deux modes
- la vérification de tour fermé / tourney et la composition par sous-plateaux
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from tourney.engine import compose, verify
from tourney.engine.errors import ModeViolation
from tourney.engine.rules import KNIGHT_DELTAS, UNUSED, MoveDelta, MoveDeltas
from tourney.engine.tables import (
    DirectedTables,
    MoveTables,
    UndirectedTables,
    empty_table,
    table_from,
)

log = logging.getLogger(__name__)

Coord = Tuple[int, int]
Move = Tuple[int, int]


def _validate_positive(name: str, value: int) -> None:
    if value <= 0:
        raise ValueError(f"{name} doit être strictement positif (reçu: {value})")


class Board:
    """Graphe de coups de cavalier sur un plateau `width` x `height`.

    Les tables ne sont allouées que si la taille est paire: un plateau impair ne
    peut pas porter de graphe 2-régulier couvrant toutes les cases.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        deltas: MoveDeltas = KNIGHT_DELTAS,
    ) -> None:
        _validate_positive("width", width)
        _validate_positive("height", height)
        self._width = width
        self._height = height
        self._size = width * height
        self._deltas = deltas
        self._tables: MoveTables = UndirectedTables(primary=self._blank_table())

    # -- Construction --
    @classmethod
    def from_move_table(
        cls,
        move: Sequence[int | None],
        width: int,
        height: int,
        *,
        deltas: MoveDeltas = KNIGHT_DELTAS,
    ) -> "Board":
        """Crée un plateau non orienté à partir d'une table de coups existante."""

        board = cls(width, height, deltas=deltas)
        table = table_from(move, board.size)
        if board.has_storage:
            board._tables = UndirectedTables(primary=table)
        return board

    @classmethod
    def from_tables(
        cls,
        width: int,
        height: int,
        primary: Sequence[int | None],
        secondary: Sequence[int | None] | None = None,
        *,
        deltas: MoveDeltas = KNIGHT_DELTAS,
    ) -> "Board":
        """Restaure un plateau dans le mode donné par la présence de `secondary`."""

        board = cls(width, height, deltas=deltas)
        main = table_from(primary, board.size)
        extra = None if secondary is None else table_from(secondary, board.size)
        if not board.has_storage:
            # Plateau impair: tables validées puis ignorées, seul le mode est conservé.
            main = board._blank_table()
            extra = None if extra is None else board._blank_table()

        if extra is None:
            board._tables = UndirectedTables(primary=main)
        else:
            board._tables = DirectedTables(primary=main, secondary=extra)
        return board

    def copy(self) -> "Board":
        """Clone indépendant (mêmes dimensions, tables copiées)."""

        clone = Board(self._width, self._height, deltas=self._deltas)
        clone._tables = self._tables.copy()
        return clone

    def clear(self) -> None:
        """Vide la table principale et supprime la table secondaire."""

        self._tables = UndirectedTables(primary=self._blank_table())

    def _blank_table(self) -> np.ndarray:
        return empty_table(self._size if self._size % 2 == 0 else 0)

    # -- Lecture --
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        return self._size

    @property
    def deltas(self) -> MoveDeltas:
        return self._deltas

    @property
    def tables(self) -> MoveTables:
        """Stockage courant (ne pas muter directement)."""

        return self._tables

    @property
    def has_storage(self) -> bool:
        return self._tables.primary.shape[0] == self._size

    @property
    def is_directed(self) -> bool:
        return isinstance(self._tables, DirectedTables)

    @property
    def is_undirected(self) -> bool:
        return isinstance(self._tables, UndirectedTables)

    def __getitem__(self, index: int) -> int | None:
        """Coup enregistré depuis une case; None hors plateau ou case vide.

        Contrairement à `is_unused`, une case hors plateau est vue comme libre.
        """

        self._require_undirected("Board[index]")
        if not self._has_slot(index):
            return None
        value = int(self._tables.primary[index])
        return None if value == UNUSED else value

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int | None]:
        return (self[index] for index in range(self._size))

    def move_table(self) -> List[int]:
        """Copie de la table principale (UNUSED pour une case vide)."""

        return [int(value) for value in self._tables.primary]

    def edges(self) -> List[Move]:
        """Liste triée des arêtes (i, j) avec i <= j, multiplicités comprises."""

        counter: Counter[Move] = Counter()
        for table in self._all_tables():
            for src, dest in enumerate(table.tolist()):
                if self.cell_index_in_range(dest):
                    counter[(min(src, dest), max(src, dest))] += 1

        if self.is_directed:
            # Chaque arête est vue une fois depuis chacune de ses extrémités.
            counter = Counter({edge: count // 2 for edge, count in counter.items()})

        return sorted(counter.elements())

    # -- Géométrie --
    def cell_index_in_range(self, index: int) -> bool:
        return 0 <= index < self._size

    def in_range_x(self, x: int) -> bool:
        return 0 <= x < self._width

    def in_range_y(self, y: int) -> bool:
        return 0 <= y < self._height

    def cell_index(self, x: int, y: int) -> int:
        return y * self._width + x

    def coords(self, index: int) -> Coord:
        return index % self._width, index // self._width

    def cells(self) -> Iterator[int]:
        return iter(range(self._size))

    def destination(self, index: int, delta: MoveDelta) -> int | None:
        """Case atteinte depuis `index` avec `delta`, ou None si hors plateau."""

        if not self.cell_index_in_range(index):
            return None
        x, y = self.coords(index)
        x += delta[0]
        y += delta[1]
        if self.in_range_x(x) and self.in_range_y(y):
            return self.cell_index(x, y)
        return None

    def move_index(self, src: int, dest: int) -> int | None:
        """Index canonique (0-7) du coup src -> dest, None si ce n'en est pas un."""

        if not (self.cell_index_in_range(src) and self.cell_index_in_range(dest)):
            return None
        src_x, src_y = self.coords(src)
        dest_x, dest_y = self.coords(dest)
        return self._deltas.index_of(dest_x - src_x, dest_y - src_y)

    def is_knight_move(self, i: int, j: int) -> bool:
        if not (self.cell_index_in_range(i) and self.cell_index_in_range(j)):
            return False
        return any(self.destination(i, delta) == j for delta in self._deltas)

    def is_on_board(self, pos: int, delta: MoveDelta) -> bool:
        self._require_undirected("is_on_board")
        return self.destination(pos, delta) is not None

    def is_unused(self, pos: int, delta: MoveDelta | None = None) -> bool:
        """Teste si une case (ou la case atteinte par `delta`) est libre.

        Une case hors plateau est considérée comme utilisée.
        """

        self._require_undirected("is_unused")
        target = pos if delta is None else self.destination(pos, delta)
        if target is None or not self._has_slot(target):
            return False
        return int(self._tables.primary[target]) == UNUSED

    def available_move_count(self, index: int) -> int:
        """Nombre de coups depuis `index` restant sur le plateau vers une case libre."""

        self._require_undirected("available_move_count")
        return sum(1 for delta in self._deltas if self.is_unused(index, delta))

    # -- Insertion / suppression --
    def insert_undirected(self, src: int, dest: int) -> bool:
        """Enregistre l'arête dans la case de `src`, sinon dans celle de `dest`.

        Returns:
            False si les deux cases sont déjà occupées (aucune écriture).
        """

        self._require_undirected("insert_undirected")
        if not (self._has_slot(src) and self._has_slot(dest)):
            return False

        primary = self._tables.primary
        if primary[src] == UNUSED:
            primary[src] = dest
        elif primary[dest] == UNUSED:
            primary[dest] = src
        else:
            return False
        return True

    def insert_directed(self, src: int, dest: int) -> bool:
        """Enregistre l'arête aux deux extrémités (table principale puis secondaire).

        L'insertion est atomique: si l'une des extrémités n'a plus de place,
        aucune table n'est modifiée.
        """

        self._require_directed("insert_directed")
        if not (self._has_slot(src) and self._has_slot(dest)):
            return False

        free_src = self._free_tables(src)
        if src == dest:
            if len(free_src) < 2:
                return False
            src_table, dest_table = free_src[0], free_src[1]
        else:
            free_dest = self._free_tables(dest)
            if not free_src or not free_dest:
                return False
            src_table, dest_table = free_src[0], free_dest[0]

        src_table[src] = dest
        dest_table[dest] = src
        return True

    def insert_move(self, src: int, dest: int) -> bool:
        """Insère l'arête avec l'éditeur correspondant au mode courant."""

        if self.is_directed:
            return self.insert_directed(src, dest)
        return self.insert_undirected(src, dest)

    def delete_move(self, src: int, dest: int) -> bool:
        """Supprime l'arête src-dest.

        Plateau non orienté: effacement inconditionnel des entrées
        correspondantes, succès même si l'arête n'existait pas. Plateau orienté:
        échec si l'arête est absente des deux tables.
        """

        if not (self._has_slot(src) and self._has_slot(dest)):
            return False
        if self.is_directed and not self.is_move(src, dest):
            return False

        for table in self._all_tables():
            if table[src] == dest:
                table[src] = UNUSED
            if table[dest] == src:
                table[dest] = UNUSED
        return True

    def is_move(self, i: int, j: int) -> bool:
        if not (self._has_slot(i) and self._has_slot(j)):
            return False
        return any(table[i] == j or table[j] == i for table in self._all_tables())

    # -- Vérification --
    def is_tour(self) -> bool:
        return verify.is_tour(self)

    def is_tourney(self) -> bool:
        return verify.is_tourney(self)

    def degree_counts(self) -> np.ndarray | None:
        return verify.degree_counts(self)

    # -- Conversion --
    def make_directed(self) -> None:
        """Ajoute la table secondaire en y reconstruisant les arêtes retour."""

        tables = self._tables
        if not isinstance(tables, UndirectedTables):
            return

        primary = tables.primary
        secondary = empty_table(primary.shape[0])
        cells = np.arange(primary.shape[0], dtype=primary.dtype)
        recorded = (primary >= 0) & (primary < primary.shape[0])
        secondary[primary[recorded]] = cells[recorded]

        self._tables = DirectedTables(primary=primary, secondary=secondary)
        log.debug("Plateau %dx%d converti en mode orienté", self._width, self._height)

    def make_undirected(self) -> None:
        """Réorganise les deux tables en une seule en parcourant chaque cycle.

        Sans effet si le plateau n'est pas orienté ou ne contient pas de tourney.
        """

        tables = self._tables
        if not isinstance(tables, DirectedTables):
            return
        if not self.is_tourney():
            log.debug("make_undirected ignoré: le plateau n'est pas un tourney")
            return

        primary, secondary = tables.primary, tables.secondary
        merged = empty_table(self._size)

        for start in range(self._size):
            if merged[start] != UNUSED:
                continue

            prev = start
            cur = int(primary[start])
            steps = 0
            while self.cell_index_in_range(cur) and cur != start and steps < self._size:
                merged[prev] = cur
                nxt = secondary[cur] if primary[cur] == prev else primary[cur]
                prev, cur = cur, int(nxt)
                steps += 1

            if self.cell_index_in_range(prev) and self.cell_index_in_range(cur):
                merged[prev] = cur

        self._tables = UndirectedTables(primary=merged)
        log.debug("Plateau %dx%d converti en mode non orienté", self._width, self._height)

    # -- Composition --
    def copy_to_sub_board(self, other: "Board", x0: int, y0: int) -> bool:
        return compose.copy_to_sub_board(self, other, x0, y0)

    # -- Internes --
    def _has_slot(self, index: int) -> bool:
        return 0 <= index < self._tables.primary.shape[0]

    def _all_tables(self) -> Tuple[np.ndarray, ...]:
        tables = self._tables
        if isinstance(tables, DirectedTables):
            return (tables.primary, tables.secondary)
        return (tables.primary,)

    def _free_tables(self, index: int) -> List[np.ndarray]:
        return [table for table in self._all_tables() if table[index] == UNUSED]

    def _require_undirected(self, operation: str) -> None:
        if not self.is_undirected:
            raise ModeViolation(operation, "non orienté")

    def _require_directed(self, operation: str) -> None:
        if not self.is_directed:
            raise ModeViolation(operation, "orienté")


def insert_all(board: Board, moves: Iterable[Move]) -> bool:
    """Insère une suite d'arêtes avec l'éditeur adapté au mode du plateau."""

    results = [board.insert_move(src, dest) for src, dest in moves]
    return all(results)


__all__ = [
    "Board",
    "Coord",
    "Move",
    "insert_all",
]
