"""Constantes et configuration des déplacements du cavalier.

Ce module expose le contrat minimal partagé par le moteur:
- valeur sentinelle `UNUSED` utilisée dans les tables de coups
- ensemble immuable des 8 deltas du cavalier (`KNIGHT_DELTAS`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

# Case vide dans une table de coups (stockage interne et format texte)
UNUSED: int = -1

MoveDelta = Tuple[int, int]


@dataclass(frozen=True)
class MoveDeltas:
    """Ensemble ordonné de deltas (dx, dy) avec index canonique stable."""

    deltas: Tuple[MoveDelta, ...]
    _index: Dict[MoveDelta, int] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        if len(set(self.deltas)) != len(self.deltas):
            raise ValueError("Les deltas doivent être distincts")
        index = {delta: idx for idx, delta in enumerate(self.deltas)}
        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.deltas)

    def __iter__(self) -> Iterator[MoveDelta]:
        return iter(self.deltas)

    def __getitem__(self, index: int) -> MoveDelta:
        return self.deltas[index]

    def index_of(self, dx: int, dy: int) -> int | None:
        """Index canonique du delta (dx, dy), ou None s'il n'en fait pas partie."""

        return self._index.get((dx, dy))


# Ordre canonique: l'index d'un delta est celui écrit dans le format texte.
KNIGHT_DELTAS = MoveDeltas(
    deltas=(
        (2, -1),
        (1, -2),
        (-1, -2),
        (-2, -1),
        (-2, 1),
        (-1, 2),
        (1, 2),
        (2, 1),
    )
)

__all__ = [
    "UNUSED",
    "MoveDelta",
    "MoveDeltas",
    "KNIGHT_DELTAS",
]
