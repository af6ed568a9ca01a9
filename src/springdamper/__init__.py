"""Second-order spring filter for smoothly driving values toward moving targets."""

from springdamper.core.integrator import (
    ChannelState,
    SpringMode,
    delta_angle,
    get_operation,
    process_linear,
    process_rotation,
)
from springdamper.core.params import (
    SpringSettings,
    calculate_coefficients,
    get_abstracts,
    get_damping,
    get_frequency,
    get_response,
)
from springdamper.config import PRESETS, PreviewConfig, SpringConfig
from springdamper.driver import DampedSpring
from springdamper.errors import InvalidParameterError, InvalidStepError, SpringError
from springdamper.io.exporter import ResponseExporter
from springdamper.preview import ResponseCurve, reference_response, sample_response

__version__ = "0.1.0"
__all__ = [
    "ChannelState",
    "DampedSpring",
    "InvalidParameterError",
    "InvalidStepError",
    "PRESETS",
    "PreviewConfig",
    "ResponseCurve",
    "ResponseExporter",
    "SpringConfig",
    "SpringError",
    "SpringMode",
    "SpringSettings",
    "calculate_coefficients",
    "delta_angle",
    "get_abstracts",
    "get_damping",
    "get_frequency",
    "get_operation",
    "get_response",
    "process_linear",
    "process_rotation",
    "reference_response",
    "sample_response",
]
