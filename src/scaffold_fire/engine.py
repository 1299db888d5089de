"""
Tick engine: advances the scaffold grid one discrete step.

A tick runs, in this fixed order, the netting phase, the debris phase, the
structural/thermal phase and thermal diffusion, then derives the tick's
telemetry. The input grid is never modified.
"""

import logging
import math
import random
from typing import Any, Mapping, Optional, Union

from .cell import LayerState, StructureState
from .combustion import debris_phase, netting_phase
from .config import Configuration
from .diffusion import diffuse
from .errors import InvalidParameterError, InvariantViolationError
from .grid import ScaffoldGrid, make_rng
from .parameters import ParameterSet, resolve_inputs
from .stats import TickMetrics, aggregate, initial_metrics
from .thermo import structural_phase

logger = logging.getLogger(__name__)

Params = Union[ParameterSet, Mapping[str, Any], None]


def ignition_point(config: Configuration) -> tuple[int, int]:
    """Cell lit by the forced ignition: centred, second row from the bottom."""
    return (config.width // 2, config.height - 2)


def force_ignite(grid: ScaffoldGrid, config: Configuration, params: Params = None) -> ScaffoldGrid:
    """
    Apply the one-time forced ignition before the first tick.

    The ignition cell is heated to the forced ignition temperature, every
    present netting or debris layer there is set burning and, for bamboo,
    so is the structure. No random draws are made.

    Returns:
        A new grid; ``grid`` is left untouched
    """
    config, params = resolve_inputs(config, params)
    _check_shape(grid, config)
    ignited = grid.copy()
    x, y = ignition_point(config)
    cell = ignited.cell(x, y)

    cell.temperature = params.forced_ignition_temperature
    if cell.netting.is_present():
        cell.netting.state = LayerState.Burning
    if cell.debris.is_present():
        cell.debris.state = LayerState.Burning
    if not config.is_metal:
        cell.structure.state = StructureState.Burning

    logger.info(f"Forced ignition at {(x, y)} ({params.forced_ignition_temperature:.0f}°C)")
    return ignited


def step(
    grid: ScaffoldGrid,
    config: Configuration,
    params: Params = None,
    rng: Optional[random.Random] = None,
    previous_metrics: Optional[TickMetrics] = None,
) -> tuple[ScaffoldGrid, TickMetrics]:
    """
    Advance the simulation by one tick.

    Args:
        grid: Snapshot of the previous tick (not modified)
        config: Run configuration
        params: Parameter table, defaults when None
        rng: Source of every random draw; pass a seeded generator for
            reproducible runs
        previous_metrics: Metrics returned by the previous call, None on the
            first tick

    Returns:
        Tuple of (next grid, metrics of this tick)

    Raises:
        InvalidParameterError: If config or params are malformed
        InvariantViolationError: If a temperature became non-finite
    """
    config, params = resolve_inputs(config, params)
    _check_shape(grid, config)
    if rng is None:
        rng = make_rng(None)
    if previous_metrics is None:
        previous_metrics = initial_metrics(params)

    nxt = grid.copy()
    netting_phase(grid, nxt, config, params, rng)
    debris_phase(grid, nxt, config, params, rng)
    structural_phase(grid, nxt, config, params, rng)
    nxt.set_temperature_field(diffuse(nxt.temperature_field(), config.material, params))

    _check_finite(nxt)
    metrics = aggregate(grid, nxt, previous_metrics, params)
    logger.debug(
        f"Tick {metrics.duration_ticks}: {metrics.active_fire_count} burning, "
        f"max {metrics.current_temperature:.1f}°C"
    )
    return nxt, metrics


def _check_finite(grid: ScaffoldGrid) -> None:
    for cell in grid.cells:
        if not math.isfinite(cell.temperature):
            raise InvariantViolationError(
                f"Non-finite temperature {cell.temperature} at {cell.pos}"
            )


def _check_shape(grid: ScaffoldGrid, config: Configuration) -> None:
    if (grid.width, grid.height) != (config.width, config.height):
        raise InvalidParameterError(
            "width" if grid.width != config.width else "height",
            f"grid is {grid.width}x{grid.height} but config expects {config.width}x{config.height}",
        )
