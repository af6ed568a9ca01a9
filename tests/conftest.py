"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from springdamper.core.params import SpringSettings
from springdamper.driver import DampedSpring

# Frame step most tests run at
TEST_DT = 1.0 / 60.0


@pytest.fixture
def dt() -> float:
    """Default frame step for tests."""
    return TEST_DT


@pytest.fixture
def default_settings() -> SpringSettings:
    """F=1Hz, Z=0.5, R=2 (the library defaults)."""
    return SpringSettings()


@pytest.fixture
def critical_settings() -> SpringSettings:
    """Critically damped 1Hz spring with no initial response."""
    return SpringSettings(frequency=1.0, damping=1.0, response=0.0)


@pytest.fixture
def run_spring():
    """
    Step a driver toward a constant target and record its trajectory.

    Returns:
        Function (driver, target, dt, n_steps) -> (positions, velocities),
        each of shape (n_steps, n_channels).
    """

    def _run(driver: DampedSpring, target, dt: float, n_steps: int):
        positions = np.empty((n_steps, driver.n_channels))
        velocities = np.empty((n_steps, driver.n_channels))
        for i in range(n_steps):
            driver.update(target, dt)
            positions[i] = driver.position
            velocities[i] = driver.velocity
        return positions, velocities

    return _run
