"""
Configuration objects and named presets for spring drivers.
"""

from dataclasses import dataclass

from springdamper.core.integrator import SpringMode
from springdamper.core.params import (
    DEFAULT_DAMPING,
    DEFAULT_FREQUENCY,
    DEFAULT_RESPONSE,
    SpringSettings,
)
from springdamper.driver import DampedSpring

# name -> (frequency, damping, response)
PRESETS: dict[str, tuple[float, float, float]] = {
    "default": (DEFAULT_FREQUENCY, DEFAULT_DAMPING, DEFAULT_RESPONSE),
    "critical": (1.0, 1.0, 0.0),
    "snappy": (3.0, 0.8, 1.0),
    "bouncy": (2.0, 0.25, 1.0),
    "lazy": (0.5, 1.5, 0.0),
    "anticipate": (1.5, 0.6, -1.0),
}


@dataclass
class SpringConfig:
    """Physical parameters and step mode for a driver."""
    frequency: float = DEFAULT_FREQUENCY
    damping: float = DEFAULT_DAMPING
    response: float = DEFAULT_RESPONSE
    mode: str = SpringMode.LINEAR.value  # "linear", "angular"

    @classmethod
    def from_preset(cls, name: str, mode: str = SpringMode.LINEAR.value) -> "SpringConfig":
        """Build a config from a PRESETS entry."""
        try:
            frequency, damping, response = PRESETS[name]
        except KeyError:
            valid = ", ".join(sorted(PRESETS))
            raise ValueError(f"Unknown preset {name!r} (expected one of: {valid})") from None
        return cls(frequency=frequency, damping=damping, response=response, mode=mode)

    def to_settings(self) -> SpringSettings:
        return SpringSettings(self.frequency, self.damping, self.response)

    def build_driver(self, initial=0.0) -> DampedSpring:
        return DampedSpring(initial=initial, mode=self.mode, settings=self.to_settings())


@dataclass
class PreviewConfig:
    """How a response preview is sampled."""
    duration: float = 2.0
    samples_per_second: float = 50.0
    target: float = 1.0
