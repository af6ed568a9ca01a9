"""
Per-channel step functions for the spring filter.

Each function takes the state of one scalar channel for one tick and returns
the acceleration the caller applies to its velocity. Both share the same
signature so a driver can swap between them:

    accel = operation(position, velocity, target_position, target_velocity,
                      dt, settings, state)

``target_velocity=None`` means "estimate it from the target history".
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from springdamper.core.params import SpringSettings
from springdamper.errors import InvalidStepError

FULL_TURN = 360.0
HALF_TURN = 180.0


@dataclass
class ChannelState:
    """Per-axis memory carried between steps."""

    last_target_position: float = 0.0


ProcessOperation = Callable[
    [float, float, float, Optional[float], float, SpringSettings, ChannelState],
    float,
]


def validate_dt(dt: float) -> None:
    """Raise InvalidStepError unless dt is strictly positive."""
    if dt <= 0.0:
        raise InvalidStepError(f"Time step must be > 0, got {dt}")


def delta_angle(current: float, target: float) -> float:
    """Shortest signed difference from ``current`` to ``target`` in degrees, in [-180, 180)."""
    delta = (target - current) % FULL_TURN
    if delta >= HALF_TURN:
        delta -= FULL_TURN
    return delta


def stable_coefficients(settings: SpringSettings, dt: float) -> tuple[float, float]:
    """
    Return (k1, k2) adjusted so the discrete update cannot blow up at ``dt``.

    When the step is small relative to the damping (``w*dt < z``) k2 is only
    clamped upward. Otherwise both coefficients are rebuilt by matching the
    poles of the exact solution over one step.

    An undamped spring stepped by a whole number of periods has both matched
    poles at 1 and no finite pole-matched pair; it takes the clamped pair.
    """
    k1, k2 = settings.k1, settings.k2
    w = 2.0 * math.pi * settings.frequency
    z = settings.damping
    d = w * math.sqrt(abs(z * z - 1.0))

    if w * dt < z:
        return _clamped_coefficients(k1, k2, dt)

    t1 = math.exp(-z * w * dt)
    if z <= 1.0:
        alpha = 2.0 * t1 * math.cos(d * dt)
    else:
        alpha = 2.0 * t1 * math.cosh(d * dt)
    beta = t1 * t1
    denominator = 1.0 + beta - alpha
    if denominator <= 0.0:
        return _clamped_coefficients(k1, k2, dt)
    t2 = dt / denominator
    return (1.0 - beta) * t2, dt * t2


def _clamped_coefficients(k1: float, k2: float, dt: float) -> tuple[float, float]:
    return k1, max(k2, dt * dt / 2.0 + dt * k1 / 2.0, dt * k1)


def process_linear(
    position: float,
    velocity: float,
    target_position: float,
    target_velocity: Optional[float],
    dt: float,
    settings: SpringSettings,
    state: ChannelState,
) -> float:
    """
    Compute the acceleration for one linear channel.

    Args:
        position: Current position of the channel.
        velocity: Current velocity of the channel.
        target_position: Where the channel is being driven to.
        target_velocity: Velocity of the target, or None to use the finite
            difference against the previous target.
        dt: Elapsed time in seconds, must be > 0.
        settings: Shared filter coefficients.
        state: This channel's memory; its last target is overwritten.

    Returns:
        Acceleration to apply as ``velocity += accel * dt``.

    Raises:
        InvalidStepError: If dt is not positive.
    """
    validate_dt(dt)

    if target_velocity is None:
        target_velocity = (target_position - state.last_target_position) / dt

    k1_stable, k2_stable = stable_coefficients(settings, dt)

    state.last_target_position = target_position

    return (
        target_position
        + settings.k3 * target_velocity
        - position
        - k1_stable * velocity
    ) / k2_stable


def process_rotation(
    position: float,
    velocity: float,
    target_position: float,
    target_velocity: Optional[float],
    dt: float,
    settings: SpringSettings,
    state: ChannelState,
) -> float:
    """
    Compute the acceleration for one angular channel, in degrees.

    The target is moved by a full turn when that brings it closer to the
    current position, so the spring takes the short way around. The estimated
    target velocity uses the wrapped angle difference so crossing 0/360 does
    not register as a huge jump.
    """
    validate_dt(dt)

    if target_position < HALF_TURN:
        alt_target = target_position + FULL_TURN
    else:
        alt_target = target_position - FULL_TURN
    if abs(target_position - position) > abs(alt_target - position):
        target_position = alt_target

    if target_velocity is None:
        target_velocity = delta_angle(state.last_target_position, target_position) / dt

    return process_linear(
        position, velocity, target_position, target_velocity, dt, settings, state
    )


class SpringMode(str, Enum):
    """Which step function a driver runs on its channels."""

    LINEAR = "linear"
    ANGULAR = "angular"


_OPERATIONS: dict[SpringMode, ProcessOperation] = {
    SpringMode.LINEAR: process_linear,
    SpringMode.ANGULAR: process_rotation,
}


def get_operation(mode: "SpringMode | str") -> ProcessOperation:
    """
    Resolve a mode (or its name) to its step function.

    Raises:
        ValueError: If the name is not a known mode.
    """
    try:
        return _OPERATIONS[SpringMode(mode)]
    except ValueError:
        valid = ", ".join(m.value for m in SpringMode)
        raise ValueError(f"Unknown spring mode {mode!r} (expected one of: {valid})") from None


__all__ = [
    "ChannelState",
    "ProcessOperation",
    "SpringMode",
    "delta_angle",
    "stable_coefficients",
    "validate_dt",
    "process_linear",
    "process_rotation",
    "get_operation",
]
