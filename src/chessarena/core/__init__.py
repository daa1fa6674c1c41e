"""Core reconciliation layer — pure Python, no Qt and no rules engine.

Quick start::

    from chessarena.core import STARTING_PLACEMENT, classify, compute_move, parse_placement

    old = parse_placement(STARTING_PLACEMENT)
    new = parse_placement("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR")
    move = compute_move(old, new)          # Pe2-e4
    spec = classify(move, board_width_px=640)
"""

from chessarena.core.diff import Change, Move, compute_move, find_changes
from chessarena.core.geometry import (
    PER_STEP_MS,
    AnimationSpec,
    Keyframe,
    MotionKind,
    classify,
    offset_at,
    timeline,
)
from chessarena.core.placement import (
    STARTING_PLACEMENT,
    Board,
    parse_placement,
    piece_at,
    placement_field,
    to_placement,
)
from chessarena.core.scheduler import (
    AnimationEntry,
    AnimationScheduler,
    OneShotTimer,
    SchedulerPhase,
    SupersedePolicy,
)
from chessarena.core.types import PieceSymbol, Square, parse_square, square_name

__all__ = [
    # Types / helpers
    "Board",
    "PieceSymbol",
    "Square",
    "parse_square",
    "square_name",
    # Placement
    "STARTING_PLACEMENT",
    "parse_placement",
    "piece_at",
    "placement_field",
    "to_placement",
    # Diff
    "Change",
    "Move",
    "compute_move",
    "find_changes",
    # Geometry
    "PER_STEP_MS",
    "AnimationSpec",
    "Keyframe",
    "MotionKind",
    "classify",
    "offset_at",
    "timeline",
    # Scheduling
    "AnimationEntry",
    "AnimationScheduler",
    "OneShotTimer",
    "SchedulerPhase",
    "SupersedePolicy",
]
