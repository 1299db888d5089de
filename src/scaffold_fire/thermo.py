"""Heat release, ignition, structural failure and cooling for each cell."""

import random

from .cell import LayerState, ScaffoldCell, StructureState
from .config import Configuration
from .grid import ScaffoldGrid
from .parameters import ParameterSet

DEBRIS_INSULATION = 0.5


def heat_input(before: ScaffoldCell, cell: ScaffoldCell, config: Configuration, params: ParameterSet) -> float:
    """
    Heat released in a cell this tick.

    Netting and debris count when they burn in the next-tick grid. Burning
    bamboo releases heat and consumes its own fuel, burning out when empty.
    """
    heat = 0.0
    if cell.netting.is_burning():
        heat += params.netting_heat_output(config.netting)
    if cell.debris.is_burning():
        heat += params.heat_output_debris
    if before.structure.is_burning():
        heat += params.heat_output_bamboo
        cell.structure.fuel -= params.burn_rate_bamboo
        if cell.structure.fuel <= 0:
            cell.structure.state = StructureState.Burnt
    return heat


def check_structure(
    cell: ScaffoldCell,
    temperature: float,
    config: Configuration,
    params: ParameterSet,
    rng: random.Random,
) -> None:
    """Ignite bamboo (one weather-gated draw) or collapse metal once hot enough."""
    structure = cell.structure
    if structure.is_failed():
        return
    if not config.is_metal:
        if structure.state == StructureState.Normal and temperature >= params.ignition_temp_bamboo:
            if rng.random() < params.bamboo_ignition_chance(config.weather):
                structure.state = StructureState.Burning
    elif temperature >= params.failure_temp_metal:
        structure.state = StructureState.Collapsed


def check_layers(
    cell: ScaffoldCell,
    temperature: float,
    config: Configuration,
    params: ParameterSet,
    rng: random.Random,
) -> None:
    """Thermal ignition of debris (certain) and netting (weather-gated draw)."""
    if cell.debris.is_intact() and temperature >= params.ignition_temp_debris:
        cell.debris.state = LayerState.Burning
    # melt_temp_debris is not consulted.

    if cell.netting.is_intact() and temperature >= params.netting_ignition_temp(config.netting):
        if rng.random() < params.netting_ignition_chance(config.weather):
            cell.netting.state = LayerState.Burning


def cool(temperature: float, cell: ScaffoldCell, config: Configuration, params: ParameterSet) -> float:
    """Exponential decay toward ambient; intact debris halves the rate."""
    factor = params.cooling_factor(config.material, config.weather)
    if cell.debris.is_intact():
        factor *= DEBRIS_INSULATION
    return temperature - (temperature - params.ambient_temperature) * factor


def structural_phase(
    prev: ScaffoldGrid,
    nxt: ScaffoldGrid,
    config: Configuration,
    params: ParameterSet,
    rng: random.Random,
) -> None:
    """
    Update every cell's temperature and thermally driven state changes.

    Each temperature is recomputed from the previous snapshot, so transient
    heat written by the combustion phases (flashover, drips) does not carry
    over. Per cell the draws are: bamboo ignition, then netting ignition.
    """
    heat_capacity = params.heat_capacity(config.material)

    for before, cell in zip(prev.cells, nxt.cells):
        temperature = before.temperature
        temperature += heat_input(before, cell, config, params) / heat_capacity

        check_structure(cell, temperature, config, params, rng)
        check_layers(cell, temperature, config, params, rng)

        cell.temperature = cool(temperature, cell, config, params)
