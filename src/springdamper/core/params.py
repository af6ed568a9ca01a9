"""
Parameter conversion for the second-order spring filter.

The filter integrates ``k2 * y'' + k1 * y' + y = x + k3 * x'``. Tuning it
through k1..k3 directly is awkward, so the public surface speaks in three
physical quantities instead:

- ``f``: natural frequency in Hz (how fast the system responds)
- ``z``: damping ratio (0 oscillates forever, 1 is critically damped)
- ``r``: initial-response ratio (0 eases in, 1 reacts instantly,
  above 1 overshoots, below 0 anticipates)
"""

import logging
import math

from springdamper.errors import InvalidParameterError

logger = logging.getLogger(__name__)

DEFAULT_FREQUENCY = 1.0
DEFAULT_DAMPING = 0.5
DEFAULT_RESPONSE = 2.0


def calculate_coefficients(f: float, z: float, r: float) -> tuple[float, float, float]:
    """
    Convert physical parameters into filter coefficients.

    Args:
        f: Natural frequency in Hz, must be > 0.
        z: Damping ratio, must be >= 0.
        r: Initial-response ratio.

    Returns:
        Tuple of (k1, k2, k3).

    Raises:
        InvalidParameterError: If the frequency is not positive or the
            damping is negative.
    """
    if f <= 0.0:
        raise InvalidParameterError(f"Frequency must be > 0, got {f}")
    if z < 0.0:
        raise InvalidParameterError(f"Damping must be >= 0, got {z}")

    k1 = z / (math.pi * f)
    k2 = 1.0 / (2.0 * math.pi * f) ** 2
    k3 = (r * z) / (2.0 * math.pi * f)
    return k1, k2, k3


def _check_k2(k2: float) -> None:
    if k2 <= 0.0:
        raise InvalidParameterError(f"k2 must be > 0, got {k2}")


def get_frequency(k1: float, k2: float, k3: float) -> float:
    """Natural frequency in Hz recovered from the coefficients."""
    _check_k2(k2)
    return 1.0 / (2.0 * math.pi * math.sqrt(k2))


def get_damping(k1: float, k2: float, k3: float) -> float:
    """Damping ratio recovered from the coefficients."""
    _check_k2(k2)
    return k1 / (2.0 * math.sqrt(k2))


def get_response(k1: float, k2: float, k3: float) -> float:
    """
    Initial-response ratio recovered from the coefficients.

    Raises:
        InvalidParameterError: If k1 is zero. An undamped spring carries no
            information about r, since k3 collapses to zero with it.
    """
    if k1 == 0.0:
        raise InvalidParameterError(
            "Response ratio is undefined for an undamped spring (k1 == 0)"
        )
    return (2.0 * k3) / k1


def get_abstracts(k1: float, k2: float, k3: float) -> tuple[float, float, float]:
    """Return (f, z, r) for the given coefficients."""
    return (
        get_frequency(k1, k2, k3),
        get_damping(k1, k2, k3),
        get_response(k1, k2, k3),
    )


class SpringSettings:
    """
    Filter coefficients shared by every channel of a driver.

    Only k1, k2 and k3 are stored. The physical parameters are derived on
    read, and writing one of them re-derives all three coefficients from the
    new value and the two current ones.
    """

    def __init__(
        self,
        frequency: float = DEFAULT_FREQUENCY,
        damping: float = DEFAULT_DAMPING,
        response: float = DEFAULT_RESPONSE,
    ):
        self.k1 = 0.0
        self.k2 = 0.0
        self.k3 = 0.0
        self.set_abstracts(frequency, damping, response)

    @classmethod
    def from_coefficients(cls, k1: float, k2: float, k3: float) -> "SpringSettings":
        """Build settings from raw coefficients (e.g. restored from storage)."""
        _check_k2(k2)
        if k1 < 0.0:
            raise InvalidParameterError(f"k1 must be >= 0, got {k1}")
        settings = cls.__new__(cls)
        settings.k1 = float(k1)
        settings.k2 = float(k2)
        settings.k3 = float(k3)
        return settings

    def set_abstracts(self, f: float, z: float, r: float) -> "SpringSettings":
        """Overwrite the coefficients from physical parameters."""
        self.k1, self.k2, self.k3 = calculate_coefficients(f, z, r)
        logger.debug(
            "Spring retuned: f=%.4g z=%.4g r=%.4g -> k1=%.6g k2=%.6g k3=%.6g",
            f, z, r, self.k1, self.k2, self.k3,
        )
        return self

    def _response_or_zero(self) -> float:
        # k3 is zero whenever k1 is, so r has no effect while undamped
        if self.k1 == 0.0:
            return 0.0
        return get_response(self.k1, self.k2, self.k3)

    @property
    def frequency(self) -> float:
        return get_frequency(self.k1, self.k2, self.k3)

    @frequency.setter
    def frequency(self, value: float):
        self.set_abstracts(value, self.damping, self._response_or_zero())

    @property
    def damping(self) -> float:
        return get_damping(self.k1, self.k2, self.k3)

    @damping.setter
    def damping(self, value: float):
        self.set_abstracts(self.frequency, value, self._response_or_zero())

    @property
    def response(self) -> float:
        return get_response(self.k1, self.k2, self.k3)

    @response.setter
    def response(self, value: float):
        self.set_abstracts(self.frequency, self.damping, value)

    @property
    def abstracts(self) -> tuple[float, float, float]:
        """(frequency, damping, response) as a tuple."""
        return get_abstracts(self.k1, self.k2, self.k3)

    @property
    def coefficients(self) -> tuple[float, float, float]:
        return self.k1, self.k2, self.k3

    def copy(self) -> "SpringSettings":
        return SpringSettings.from_coefficients(self.k1, self.k2, self.k3)

    def __eq__(self, other):
        if not isinstance(other, SpringSettings):
            return NotImplemented
        return self.coefficients == other.coefficients

    def __repr__(self) -> str:
        return f"SpringSettings(k1={self.k1!r}, k2={self.k2!r}, k3={self.k3!r})"


__all__ = [
    "DEFAULT_FREQUENCY",
    "DEFAULT_DAMPING",
    "DEFAULT_RESPONSE",
    "calculate_coefficients",
    "get_frequency",
    "get_damping",
    "get_response",
    "get_abstracts",
    "SpringSettings",
]
