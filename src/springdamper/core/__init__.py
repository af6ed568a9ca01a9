"""Core spring filter: parameter conversion and per-channel integration."""

from springdamper.core.integrator import (
    ChannelState,
    SpringMode,
    delta_angle,
    get_operation,
    process_linear,
    process_rotation,
)
from springdamper.core.params import SpringSettings, calculate_coefficients, get_abstracts

__all__ = [
    "ChannelState",
    "SpringMode",
    "SpringSettings",
    "calculate_coefficients",
    "delta_angle",
    "get_abstracts",
    "get_operation",
    "process_linear",
    "process_rotation",
]
