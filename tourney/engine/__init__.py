"""Engine package exposing rules, board and serialization modules."""

from . import rules  # re-export for convenience
from .board import Board, insert_all
from .errors import ModeViolation
from .rules import KNIGHT_DELTAS, UNUSED, MoveDeltas

__all__ = [
    "rules",
    "Board",
    "insert_all",
    "ModeViolation",
    "KNIGHT_DELTAS",
    "MoveDeltas",
    "UNUSED",
]
