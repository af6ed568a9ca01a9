"""
Response previews for tuning a spring.

Samples the step response of a throwaway driver so an editor or a CLI can
show what a set of parameters feels like, and computes the ideal continuous
response for comparison. Nothing here touches the caller's live driver.
"""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike
from scipy import signal as scipy_signal
from scipy.linalg import expm

from springdamper.core.integrator import SpringMode
from springdamper.core.params import SpringSettings
from springdamper.driver import DampedSpring
from springdamper.errors import InvalidParameterError

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 2.0
DEFAULT_SAMPLES_PER_SECOND = 50.0


@dataclass
class ResponseCurve:
    """Sampled step response of a spring."""

    times: np.ndarray  # Shape: (n_samples,), time after each step
    positions: np.ndarray
    velocities: np.ndarray
    dt: float
    start: float
    target: float
    mode: str = SpringMode.LINEAR.value

    @property
    def n_samples(self) -> int:
        return len(self.times)

    @property
    def duration(self) -> float:
        return self.n_samples * self.dt

    @property
    def minimum(self) -> float:
        return float(np.min(self.positions))

    @property
    def maximum(self) -> float:
        return float(np.max(self.positions))

    @property
    def final(self) -> float:
        return float(self.positions[-1])

    @property
    def overshoot(self) -> float:
        """Furthest excursion past the target in the direction of travel."""
        if self.target >= self.start:
            return max(0.0, self.maximum - self.target)
        return max(0.0, self.target - self.minimum)

    def settling_time(self, tolerance: float = 0.02) -> float | None:
        """
        First time after which the curve stays within a band around the target.

        Args:
            tolerance: Band half-width as a fraction of the step size.

        Returns:
            Time in seconds, or None if the curve never settles.
        """
        band = tolerance * abs(self.target - self.start)
        outside = np.nonzero(np.abs(self.positions - self.target) > band)[0]
        if len(outside) == 0:
            return 0.0
        last = int(outside[-1])
        if last + 1 >= self.n_samples:
            return None
        return float(self.times[last + 1])


def preview_driver(driver: DampedSpring) -> DampedSpring:
    """Independent copy of a live driver that is safe to step."""
    return driver.copy()


def sample_response(
    settings: SpringSettings,
    duration: float = DEFAULT_DURATION,
    samples_per_second: float = DEFAULT_SAMPLES_PER_SECOND,
    target: float = 1.0,
    mode: "SpringMode | str" = SpringMode.LINEAR,
    start: float = 0.0,
) -> ResponseCurve:
    """
    Step a private driver from ``start`` toward a constant ``target``.

    Args:
        settings: Parameters to preview. They are copied, never mutated.
        duration: Length of the preview in seconds.
        samples_per_second: Steps per second of simulated time.
        target: Constant target value.
        mode: Step function to run.
        start: Resting value the spring starts from.

    Returns:
        ResponseCurve with one sample per step.

    Raises:
        InvalidParameterError: If the preview would contain no samples.
    """
    if duration <= 0.0 or samples_per_second <= 0.0:
        raise InvalidParameterError(
            f"Preview needs a positive duration and rate, got {duration}s at {samples_per_second}/s"
        )
    samples = int(duration * samples_per_second)
    if samples < 1:
        raise InvalidParameterError(
            f"Preview of {duration}s at {samples_per_second}/s contains no samples"
        )
    dt = duration / samples

    driver = DampedSpring(initial=start, mode=mode, settings=settings.copy())

    times = np.arange(1, samples + 1, dtype=np.float64) * dt
    positions = np.empty(samples, dtype=np.float64)
    velocities = np.empty(samples, dtype=np.float64)
    for i in range(samples):
        driver.update(target, dt)
        positions[i] = driver.scalar_position
        velocities[i] = driver.scalar_velocity

    logger.debug("Sampled %d steps of %.4gs for %r", samples, dt, settings)

    return ResponseCurve(
        times=times,
        positions=positions,
        velocities=velocities,
        dt=dt,
        start=start,
        target=target,
        mode=SpringMode(mode).value,
    )


def reference_response(
    settings: SpringSettings,
    times: ArrayLike,
    target: float = 1.0,
) -> np.ndarray:
    """
    Exact continuous step response from rest at zero.

    Evaluates the step response of ``(k3*s + 1) / (k2*s**2 + k1*s + 1)`` at
    arbitrary times, so sampled previews can be compared against the ideal
    curve.

    Args:
        settings: Spring coefficients.
        times: Times in seconds (>= 0), with any spacing.
        target: Step height.

    Returns:
        Array of positions, same shape as ``times``.
    """
    times = np.asarray(times, dtype=np.float64)
    num = [settings.k3, 1.0] if settings.k3 != 0.0 else [1.0]
    den = [settings.k2, settings.k1, 1.0]
    a, b, c, d = scipy_signal.tf2ss(num, den)

    # x(t) = A^-1 (e^{At} - I) B for a unit step from rest
    a_inv_b = np.linalg.solve(a, b)
    identity = np.eye(a.shape[0])

    out = np.empty(times.size, dtype=np.float64)
    for i, t in enumerate(times.ravel()):
        state = (expm(a * t) - identity) @ a_inv_b
        out[i] = (c @ state + d).item()
    return target * out.reshape(times.shape)


__all__ = [
    "ResponseCurve",
    "preview_driver",
    "sample_response",
    "reference_response",
]
