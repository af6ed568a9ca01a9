"""
Exception types raised by the spring filter.

Every failure is a programmer error surfaced immediately to the caller;
nothing here is retried or recovered internally.
"""


class SpringError(Exception):
    """Base class for all springdamper errors."""


class InvalidParameterError(SpringError, ValueError):
    """A physical parameter is outside its valid domain.

    Raised for a non-positive natural frequency, for reading the
    initial-response ratio of an undamped spring, and for empty previews.
    """


class InvalidStepError(SpringError, ValueError):
    """The elapsed time for a step is not strictly positive."""


__all__ = ["SpringError", "InvalidParameterError", "InvalidStepError"]
