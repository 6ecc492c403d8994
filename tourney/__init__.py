"""Graphes de coups de cavalier pour les tours et tourneys."""

from tourney.engine import Board, KNIGHT_DELTAS, ModeViolation, UNUSED

__all__ = ["Board", "KNIGHT_DELTAS", "ModeViolation", "UNUSED"]
