"""Tests for the multi-channel DampedSpring driver."""

import numpy as np
import pytest

from springdamper.core.integrator import SpringMode
from springdamper.core.params import SpringSettings
from springdamper.driver import DampedSpring
from springdamper.errors import InvalidStepError


class TestConstruction:
    def test_scalar_driver(self):
        driver = DampedSpring()

        assert driver.n_channels == 1
        assert driver.scalar_position == 0.0
        assert driver.scalar_velocity == 0.0
        assert driver.mode is SpringMode.LINEAR

    def test_vector_driver_seeds_channels(self):
        driver = DampedSpring(initial=[1.0, 2.0, 3.0])

        assert driver.n_channels == 3
        np.testing.assert_array_equal(driver.position, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(driver.velocity, [0.0, 0.0, 0.0])
        assert [c.last_target_position for c in driver.channels] == [1.0, 2.0, 3.0]

    def test_channels_are_not_shared(self):
        driver = DampedSpring(initial=[0.0, 0.0, 0.0])
        states = driver.channels

        assert len({id(s) for s in states}) == 3

    def test_builds_settings_from_parameters(self):
        driver = DampedSpring(3.0, 0.8, 1.0)

        assert driver.settings.abstracts == pytest.approx((3.0, 0.8, 1.0))

    def test_shares_given_settings(self):
        settings = SpringSettings(2.0, 0.4, 0.0)
        a = DampedSpring(settings=settings)
        b = DampedSpring(settings=settings)

        assert a.settings is settings
        assert b.settings is settings

    def test_rejects_empty_initial(self):
        with pytest.raises(ValueError):
            DampedSpring(initial=[])

    def test_rejects_unknown_mode(self):
        with pytest.raises(ValueError):
            DampedSpring(mode="quadratic")

    def test_mode_can_be_switched(self):
        driver = DampedSpring()
        driver.mode = "angular"

        assert driver.mode is SpringMode.ANGULAR


class TestUpdate:
    def test_first_step_keeps_position(self, dt):
        """Position advances with the previous velocity, which starts at zero."""
        driver = DampedSpring(1.0, 1.0, 0.0)
        driver.update(1.0, dt)

        assert driver.scalar_position == 0.0
        assert driver.scalar_velocity > 0.0

    def test_position_uses_previous_velocity(self, dt):
        driver = DampedSpring(1.0, 0.5, 2.0)
        driver.update(1.0, dt)
        p1, v1 = driver.scalar_position, driver.scalar_velocity
        driver.update(1.0, dt)

        assert driver.scalar_position == pytest.approx(p1 + v1 * dt)

    def test_update_returns_position(self, dt):
        driver = DampedSpring(initial=[0.0, 0.0])
        driver.update([1.0, 1.0], dt)
        result = driver.update([1.0, 1.0], dt)

        np.testing.assert_array_equal(result, driver.position)

    def test_scalar_velocity_is_velocity(self, dt):
        driver = DampedSpring()
        driver.update(1.0, dt)
        driver.update(1.0, dt)

        assert driver.scalar_velocity == driver.velocity[0]
        assert driver.scalar_velocity != driver.scalar_position

    def test_position_is_a_copy(self, dt):
        driver = DampedSpring()
        position = driver.position
        position[0] = 100.0

        assert driver.scalar_position == 0.0

    def test_channels_are_independent(self, dt, run_spring):
        """A vector driver behaves like three scalar drivers."""
        settings = SpringSettings(2.0, 0.4, 1.5)
        vector = DampedSpring(initial=[0.0, 5.0, -1.0], settings=settings)
        scalars = [DampedSpring(initial=v, settings=settings) for v in (0.0, 5.0, -1.0)]

        target = [1.0, 5.0, 3.0]
        positions, _ = run_spring(vector, target, dt, 90)
        for axis, driver in enumerate(scalars):
            axis_positions, _ = run_spring(driver, target[axis], dt, 90)
            np.testing.assert_allclose(positions[:, axis], axis_positions[:, 0])

    def test_resting_channel_stays_put(self, dt, run_spring):
        driver = DampedSpring(initial=[0.0, 0.0, 0.0])
        positions, velocities = run_spring(driver, [1.0, 0.0, -1.0], dt, 60)

        np.testing.assert_array_equal(positions[:, 1], 0.0)
        np.testing.assert_array_equal(velocities[:, 1], 0.0)
        np.testing.assert_allclose(positions[:, 0], -positions[:, 2])

    def test_explicit_target_velocity(self, dt):
        estimated = DampedSpring()
        explicit = DampedSpring()

        estimated.update(1.0, dt)
        explicit.update(1.0, dt, target_velocity=0.0)

        assert estimated.scalar_velocity > explicit.scalar_velocity

    def test_explicit_target_velocity_per_channel(self, dt):
        driver = DampedSpring(initial=[0.0, 0.0])
        driver.update([1.0, 1.0], dt, target_velocity=[0.0, 10.0])

        assert driver.velocity[1] > driver.velocity[0]

    def test_settings_changes_apply_to_next_step(self, dt):
        slow = DampedSpring(1.0, 1.0, 0.0)
        fast = DampedSpring(1.0, 1.0, 0.0)
        fast.settings.frequency = 4.0

        slow.update(1.0, dt)
        fast.update(1.0, dt)

        assert fast.scalar_velocity > slow.scalar_velocity

    @pytest.mark.parametrize("target", [[1.0, 2.0], [[1.0, 2.0, 3.0]], 1.0])
    def test_rejects_wrong_target_shape(self, dt, target):
        driver = DampedSpring(initial=[0.0, 0.0, 0.0])

        with pytest.raises(ValueError):
            driver.update(target, dt)

    def test_rejects_wrong_target_velocity_shape(self, dt):
        driver = DampedSpring(initial=[0.0, 0.0, 0.0])

        with pytest.raises(ValueError):
            driver.update([1.0, 1.0, 1.0], dt, target_velocity=[0.0])

    @pytest.mark.parametrize(
        "initial,target,mode",
        [
            (0.0, 1.0, "linear"),
            ([0.0, 0.0, 0.0], [1.0, 2.0, 3.0], "linear"),
            (10.0, 350.0, "angular"),
            ([10.0, 20.0, 30.0], [350.0, 0.0, 90.0], "angular"),
        ],
    )
    @pytest.mark.parametrize("dt", [0.0, -1.0 / 60.0])
    def test_rejects_non_positive_dt(self, initial, target, mode, dt):
        """Scalar, vector and angular drivers all refuse a non-positive step."""
        driver = DampedSpring(initial=initial, mode=mode)
        driver.update(target, 1.0 / 60.0)
        position = driver.position
        velocity = driver.velocity
        last_targets = [c.last_target_position for c in driver.channels]

        with pytest.raises(InvalidStepError):
            driver.update(target, dt)

        np.testing.assert_array_equal(driver.position, position)
        np.testing.assert_array_equal(driver.velocity, velocity)
        assert [c.last_target_position for c in driver.channels] == last_targets


class TestAngular:
    """Angle wrap behaviour of angular drivers."""

    def test_179_to_181_goes_up(self, run_spring):
        driver = DampedSpring(1.0, 0.5, 0.0, initial=179.0, mode="angular")
        positions, _ = run_spring(driver, 181.0, 1.0 / 60.0, 120)
        positions = positions[:, 0]

        assert positions.min() >= 179.0 - 1e-9
        assert positions[5] > 179.0
        assert positions[-1] == pytest.approx(181.0, abs=0.05)

    def test_1_to_359_goes_down_through_zero(self, run_spring):
        driver = DampedSpring(1.0, 0.5, 0.0, initial=1.0, mode="angular")
        positions, _ = run_spring(driver, 359.0, 1.0 / 60.0, 120)
        positions = positions[:, 0]

        assert positions.max() <= 1.0 + 1e-9
        assert positions[5] < 1.0
        # Overshoots a little past -1, never heads toward 180
        assert positions.min() > -1.5
        assert positions[-1] == pytest.approx(-1.0, abs=0.05)

    def test_target_velocity_does_not_spike_on_wrap(self):
        """A target sweeping across 360 -> 0 is followed smoothly."""
        driver = DampedSpring(2.0, 1.0, 1.0, initial=350.0, mode="angular")
        dt = 1.0 / 60.0
        speeds = []
        angle = 350.0
        for _ in range(60):
            angle = (angle + 0.5) % 360.0
            driver.update(angle, dt)
            speeds.append(abs(driver.scalar_velocity))

        # Target moves at 30 deg/s; a 360 degree jump would show up as thousands
        assert max(speeds) < 100.0


class TestResetAndCopy:
    def test_reset_to_current_position(self, dt):
        driver = DampedSpring()
        for _ in range(10):
            driver.update(1.0, dt)
        position = driver.scalar_position

        driver.reset()

        assert driver.scalar_position == position
        assert driver.scalar_velocity == 0.0
        assert driver.channels[0].last_target_position == position

    def test_reset_to_value(self, dt):
        driver = DampedSpring(initial=[0.0, 0.0, 0.0])
        driver.update([1.0, 1.0, 1.0], dt)

        driver.reset([5.0, 6.0, 7.0])

        np.testing.assert_array_equal(driver.position, [5.0, 6.0, 7.0])
        np.testing.assert_array_equal(driver.velocity, 0.0)

    def test_copy_is_independent(self, dt):
        driver = DampedSpring()
        driver.update(1.0, dt)
        clone = driver.copy()

        np.testing.assert_array_equal(clone.position, driver.position)
        np.testing.assert_array_equal(clone.velocity, driver.velocity)

        position, velocity = driver.position, driver.velocity
        for _ in range(10):
            clone.update(5.0, dt)
        clone.settings.frequency = 9.0

        np.testing.assert_array_equal(driver.position, position)
        np.testing.assert_array_equal(driver.velocity, velocity)
        assert driver.settings.frequency == pytest.approx(1.0)
        assert driver.channels[0].last_target_position == 1.0
