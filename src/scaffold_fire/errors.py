"""Exceptions raised by the scaffold fire engine."""


class ScaffoldFireError(Exception):
    """Base class for all engine errors."""


class InvalidParameterError(ScaffoldFireError, ValueError):
    """A parameter or configuration field is missing or out of range."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class OutOfBoundsError(ScaffoldFireError, IndexError):
    """A lattice lookup fell outside the grid."""

    def __init__(self, pos: tuple[int, int], width: int, height: int):
        self.pos = pos
        super().__init__(f"Cell {pos} is outside the {width}x{height} grid")


class InvariantViolationError(ScaffoldFireError, RuntimeError):
    """The engine produced a state that must never occur."""
