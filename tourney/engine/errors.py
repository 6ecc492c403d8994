"""Erreurs de contrat du moteur."""

from __future__ import annotations


class ModeViolation(RuntimeError):
    """Opération appelée sur un plateau du mauvais mode (orienté / non orienté).

    Il s'agit d'une erreur de programmation: les échecs attendus (case pleine,
    arête absente) sont signalés par un booléen, pas par une exception.
    """

    def __init__(self, operation: str, expected: str) -> None:
        super().__init__(f"{operation} exige un plateau {expected}")
        self.operation = operation
        self.expected = expected


__all__ = ["ModeViolation"]
