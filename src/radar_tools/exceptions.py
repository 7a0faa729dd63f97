"""
Exceptions raised by radar_tools

Each error derives from RadarToolsError and from the builtin exception a
caller would already catch for that kind of mistake (TypeError for bad call
signatures, ValueError for bad values).
"""

from typing import Optional, Sequence


class RadarToolsError(Exception):
    """Base exception for all radar_tools errors."""

    pass


class InvalidArgumentCount(RadarToolsError, TypeError):
    """Raised when a function receives the wrong number of required inputs."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Expected {expected} required inputs, got {received}"
        )


class ShapeMismatch(RadarToolsError, ValueError):
    """Raised when an array does not match the shape of the reflectivity field."""

    def __init__(self, name: str, expected: tuple, received: tuple) -> None:
        self.name = name
        self.expected = tuple(expected)
        self.received = tuple(received)
        super().__init__(
            f"{name} has shape {self.received}, expected {self.expected}"
        )


class ScalarRequired(RadarToolsError, ValueError):
    """Raised when an argument must be a single value but is an array."""

    def __init__(self, name: str, size: int) -> None:
        self.name = name
        self.size = size
        super().__init__(f"{name} must be a single value, got {size} values")


class SizeMismatch(RadarToolsError, ValueError):
    """Raised when paired coordinate arrays differ in length."""

    def __init__(self, first: str, first_size: int, second: str, second_size: int) -> None:
        self.sizes = {first: first_size, second: second_size}
        super().__init__(
            f"{first} and {second} must have the same size, "
            f"got {first_size} and {second_size}"
        )


class UnrecognizedMonth(RadarToolsError, ValueError):
    """Raised when a string matches none of the twelve month names."""

    def __init__(self, value: str, candidates: Optional[Sequence[str]] = None) -> None:
        self.value = value
        msg = f"Unrecognized month name: {value!r}"
        if candidates:
            msg += f"\nExpected one of: {', '.join(candidates)}"
        super().__init__(msg)


__all__ = [
    'RadarToolsError',
    'InvalidArgumentCount',
    'ShapeMismatch',
    'ScalarRequired',
    'SizeMismatch',
    'UnrecognizedMonth',
]
