"""
Scaffold Fire Simulation using Cellular Automata.

A discrete-time model of fire spreading through a scaffold clad in netting
and draped with flammable debris, tracking structural and thermal telemetry.
"""

from .cell import ScaffoldCell, StructureState, LayerState, Layer, StructureLayer
from .config import Configuration, Material, NettingType, Weather, DebrisCoverage, SCENARIOS
from .errors import (
    ScaffoldFireError,
    InvalidParameterError,
    OutOfBoundsError,
    InvariantViolationError,
)
from .parameters import ParameterSet, DEFAULT_PARAMETERS
from .grid import ScaffoldGrid, initialize
from .engine import step, force_ignite, ignition_point
from .stats import TickMetrics, initial_metrics, is_terminated
from .model import ScaffoldFireModel

__version__ = "0.1.0"

__all__ = [
    "ScaffoldCell",
    "StructureState",
    "LayerState",
    "Layer",
    "StructureLayer",
    "Configuration",
    "Material",
    "NettingType",
    "Weather",
    "DebrisCoverage",
    "SCENARIOS",
    "ScaffoldFireError",
    "InvalidParameterError",
    "OutOfBoundsError",
    "InvariantViolationError",
    "ParameterSet",
    "DEFAULT_PARAMETERS",
    "ScaffoldGrid",
    "initialize",
    "step",
    "force_ignite",
    "ignition_point",
    "TickMetrics",
    "initial_metrics",
    "is_terminated",
    "ScaffoldFireModel",
]
