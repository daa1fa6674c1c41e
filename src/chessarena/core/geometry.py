"""Move geometry classification and stepped animation timelines.

Pieces do not glide: they advance in ``steps`` discrete jumps spread evenly
over ``duration_ms``, like a piece being lifted and set down square by square.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chessarena.core.diff import Move

PER_STEP_MS = 500  # animation time per square


class MotionKind(str, Enum):
    """How the animated piece travels between squares."""

    LINEAR = "linear"
    KNIGHT = "knight"


@dataclass(frozen=True, slots=True)
class AnimationSpec:
    """Pixel-space description of one move animation."""

    kind: MotionKind
    dx_px: float
    dy_px: float
    first_leg_dx_px: float
    first_leg_dy_px: float
    steps: int
    duration_ms: int


@dataclass(frozen=True, slots=True)
class Keyframe:
    """Offset from the origin square the piece jumps to at *at_ms*."""

    at_ms: float
    offset_x: float
    offset_y: float


def _sign(value: int) -> int:
    return 1 if value > 0 else -1


def is_knight_jump(dx: int, dy: int) -> bool:
    adx, ady = abs(dx), abs(dy)
    return (adx == 2 and ady == 1) or (adx == 1 and ady == 2)


def classify(
    move: Move,
    board_width_px: float,
    per_step_ms: int = PER_STEP_MS,
) -> AnimationSpec:
    """Build the animation for *move* on a board *board_width_px* wide.

    The vector is not re-validated: anything that is not an L-shape is
    animated as a straight line of ``max(|dx|, |dy|)`` steps.
    """
    dx = move.to_sq.col - move.from_sq.col
    dy = move.to_sq.row - move.from_sq.row
    square_px = board_width_px / 8

    if is_knight_jump(dx, dy):
        # First leg: two squares along the longer axis.
        if abs(dx) > abs(dy):
            leg_x, leg_y = 2 * _sign(dx) * square_px, 0.0
        else:
            leg_x, leg_y = 0.0, 2 * _sign(dy) * square_px
        return AnimationSpec(
            kind=MotionKind.KNIGHT,
            dx_px=dx * square_px,
            dy_px=dy * square_px,
            first_leg_dx_px=leg_x,
            first_leg_dy_px=leg_y,
            steps=2,
            duration_ms=2 * per_step_ms,
        )

    steps = max(abs(dx), abs(dy))
    return AnimationSpec(
        kind=MotionKind.LINEAR,
        dx_px=dx * square_px,
        dy_px=dy * square_px,
        first_leg_dx_px=0.0,
        first_leg_dy_px=0.0,
        steps=steps,
        duration_ms=max(per_step_ms, steps * per_step_ms),
    )


def timeline(spec: AnimationSpec) -> list[Keyframe]:
    """Keyframes of the stepped motion, the origin included.

    With *n* steps the piece rests at the origin, then lands on the
    *k*-th intermediate offset at ``k * duration / n``.
    """
    frames = [Keyframe(0.0, 0.0, 0.0)]
    if spec.steps <= 0:
        return frames

    interval = spec.duration_ms / spec.steps
    if spec.kind is MotionKind.KNIGHT:
        frames.append(Keyframe(interval, spec.first_leg_dx_px, spec.first_leg_dy_px))
        frames.append(Keyframe(2 * interval, spec.dx_px, spec.dy_px))
        return frames

    for k in range(1, spec.steps + 1):
        frac = k / spec.steps
        frames.append(Keyframe(k * interval, spec.dx_px * frac, spec.dy_px * frac))
    return frames


def offset_at(spec: AnimationSpec, elapsed_ms: float) -> tuple[float, float]:
    """Offset of the animated piece *elapsed_ms* after the start."""
    current = (0.0, 0.0)
    for frame in timeline(spec):
        if frame.at_ms > elapsed_ms:
            break
        current = (frame.offset_x, frame.offset_y)
    return current
