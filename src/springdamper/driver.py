"""
Multi-channel spring driver.

Wraps the per-channel step functions so a host loop can drive a scalar or an
x/y/z vector toward a moving target once per tick.
"""

import logging
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from springdamper.core.integrator import (
    ChannelState,
    ProcessOperation,
    SpringMode,
    get_operation,
    validate_dt,
)
from springdamper.core.params import (
    DEFAULT_DAMPING,
    DEFAULT_FREQUENCY,
    DEFAULT_RESPONSE,
    SpringSettings,
)

logger = logging.getLogger(__name__)


class DampedSpring:
    """
    Second-order spring that follows a target value over time.

    A scalar ``initial`` gives a single-channel driver; a sequence gives one
    independent channel per component (three for x/y/z). All channels share
    one SpringSettings instance and each keeps its own ChannelState.

    Not thread-safe: step a driver from a single owner.
    """

    def __init__(
        self,
        frequency: float = DEFAULT_FREQUENCY,
        damping: float = DEFAULT_DAMPING,
        response: float = DEFAULT_RESPONSE,
        initial: ArrayLike = 0.0,
        mode: "SpringMode | str" = SpringMode.LINEAR,
        settings: Optional[SpringSettings] = None,
    ):
        """
        Initialize the driver.

        Args:
            frequency: Natural frequency in Hz.
            damping: Damping ratio.
            response: Initial-response ratio.
            initial: Starting value (scalar or vector). Also seeds each
                channel's previous target.
            mode: "linear" or "angular" (degrees, wraps at 360).
            settings: Existing settings to share instead of building new
                ones from frequency/damping/response.
        """
        self.settings = settings if settings is not None else SpringSettings(
            frequency, damping, response
        )
        self.mode = mode

        start = np.atleast_1d(np.asarray(initial, dtype=np.float64))
        if start.ndim != 1 or start.size == 0:
            raise ValueError(f"Initial value must be a scalar or 1-D vector, got shape {start.shape}")

        self._position = start.copy()
        self._velocity = np.zeros_like(start)
        self._channels = tuple(ChannelState(float(v)) for v in start)

        logger.debug(
            "Created %d-channel %s spring (%r)",
            self.n_channels, self._mode.value, self.settings,
        )

    @property
    def mode(self) -> SpringMode:
        return self._mode

    @mode.setter
    def mode(self, value: "SpringMode | str"):
        self._operation: ProcessOperation = get_operation(value)
        self._mode = SpringMode(value)

    @property
    def n_channels(self) -> int:
        return len(self._channels)

    @property
    def channels(self) -> tuple[ChannelState, ...]:
        return self._channels

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity.copy()

    @property
    def scalar_position(self) -> float:
        """Position of the first channel."""
        return float(self._position[0])

    @property
    def scalar_velocity(self) -> float:
        """Velocity of the first channel."""
        return float(self._velocity[0])

    def _as_channels(self, value: ArrayLike, name: str) -> np.ndarray:
        arr = np.atleast_1d(np.asarray(value, dtype=np.float64))
        if arr.shape != self._position.shape:
            raise ValueError(
                f"{name} must have {self.n_channels} component(s), got shape {arr.shape}"
            )
        return arr

    def update(
        self,
        target: ArrayLike,
        dt: float,
        target_velocity: Optional[ArrayLike] = None,
    ) -> np.ndarray:
        """
        Advance the spring by one tick.

        Position moves with the velocity from the previous tick, then the
        acceleration is evaluated at that new position and applied to the
        velocity.

        Args:
            target: Target value, one component per channel.
            dt: Elapsed time since the previous tick, must be > 0.
            target_velocity: Explicit target velocity, or None to estimate it
                from the previous target.

        Returns:
            The new position.

        Raises:
            InvalidStepError: If dt is not positive.
            ValueError: If target or target_velocity has the wrong shape.
        """
        validate_dt(dt)
        targets = self._as_channels(target, "target")
        target_velocities = (
            None if target_velocity is None
            else self._as_channels(target_velocity, "target_velocity")
        )

        position = self._position + self._velocity * dt
        accel = np.empty_like(position)
        for i, state in enumerate(self._channels):
            accel[i] = self._operation(
                float(position[i]),
                float(self._velocity[i]),
                float(targets[i]),
                None if target_velocities is None else float(target_velocities[i]),
                dt,
                self.settings,
                state,
            )

        self._position = position
        self._velocity = self._velocity + accel * dt
        return self.position

    def reset(self, value: Optional[ArrayLike] = None) -> None:
        """
        Put the spring at rest.

        Args:
            value: New resting value. Defaults to the current position.
        """
        start = self._position if value is None else self._as_channels(value, "value")
        self._position = start.copy()
        self._velocity = np.zeros_like(start)
        for state, v in zip(self._channels, start):
            state.last_target_position = float(v)

    def copy(self) -> "DampedSpring":
        """Independent driver with the same settings values and state."""
        clone = DampedSpring(
            initial=self._position,
            mode=self._mode,
            settings=self.settings.copy(),
        )
        clone._velocity = self._velocity.copy()
        for src, dst in zip(self._channels, clone._channels):
            dst.last_target_position = src.last_target_position
        return clone

    def __repr__(self) -> str:
        return (
            f"DampedSpring(mode={self._mode.value!r}, position={self._position.tolist()}, "
            f"velocity={self._velocity.tolist()}, settings={self.settings!r})"
        )


__all__ = ["DampedSpring"]
