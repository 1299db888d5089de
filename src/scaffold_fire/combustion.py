"""
Burn rules for the netting and debris layers.

Both phases scan the lattice in row-major order (top row first). Whether a
cell acts is decided from the previous snapshot, while every effect is written
into the next-tick grid under construction. Targets are tested against that
evolving grid, so a neighbour ignited earlier in the same scan is no longer
``Intact`` and is left alone.

Random draws happen only when their guard holds, in the order documented on
each function, so a seeded generator replays a tick exactly.
"""

import random

from .cell import ScaffoldCell
from .config import Configuration
from .grid import ScaffoldGrid
from .parameters import ParameterSet

FLASHOVER_TEMP_MARGIN = 50.0

SIDE_SPREAD_CHANCE = 0.10
SIDE_SPREAD_CHANCE_FR = 0.01

# (dx, dy, chance): burning debris throws flame upward far more than down.
DEBRIS_SPREAD = (
    (0, -1, 0.90),  # up
    (0, 1, 0.05),   # down
    (-1, 0, 0.20),  # left
    (1, 0, 0.20),   # right
)


def netting_phase(
    prev: ScaffoldGrid,
    nxt: ScaffoldGrid,
    config: Configuration,
    params: ParameterSet,
    rng: random.Random,
) -> None:
    """
    Burn netting and spread it to neighbouring sheets.

    For each cell whose netting was burning, in order: fuel is consumed,
    then flashover to the cell above (one draw if that netting is intact),
    drip onto the cell below (one draw if the netting is not fire resistant
    and a cell below exists) and lateral spread (always one draw).
    """
    fire_resistant = config.is_fire_resistant
    flashover_chance = params.flashover_chance(config.netting, config.weather)
    ignition_temp = params.netting_ignition_temp(config.netting)
    side_chance = SIDE_SPREAD_CHANCE_FR if fire_resistant else SIDE_SPREAD_CHANCE

    for before, cell in zip(prev.cells, nxt.cells):
        if not before.netting.is_burning():
            continue
        x, y = before.x, before.y
        cell.netting.consume(params.burn_rate_netting)

        above = nxt.neighbor(x, y, 0, -1)
        if above is not None and above.netting.is_intact() and rng.random() < flashover_chance:
            above.netting.ignite()
            above.temperature = max(above.temperature, ignition_temp + FLASHOVER_TEMP_MARGIN)

        below = nxt.neighbor(x, y, 0, 1)
        if not fire_resistant and below is not None and rng.random() < params.drip_chance_netting:
            below.temperature += params.drip_heat_netting
            if below.temperature > ignition_temp:
                below.netting.ignite()

        if rng.random() < side_chance:
            for dx in (-1, 1):
                side = nxt.neighbor(x, y, dx, 0)
                if side is not None:
                    side.netting.ignite()


def debris_phase(
    prev: ScaffoldGrid,
    nxt: ScaffoldGrid,
    config: Configuration,
    params: ParameterSet,
    rng: random.Random,
) -> None:
    """
    Burn debris, spread flame from it and drip molten debris downward.

    Runs after the netting phase so netting lit this tick already counts.
    For each cell: burning netting lights intact debris in the same cell.
    Then, for each cell whose debris was burning: fuel is consumed, one
    draw per in-bounds neighbour in up, down, left, right order, and one
    drip draw if a cell below exists.
    """
    ignite_netting = not config.is_fire_resistant

    for before, cell in zip(prev.cells, nxt.cells):
        if cell.netting.is_burning():
            cell.debris.ignite()

        if not before.debris.is_burning():
            continue
        x, y = before.x, before.y
        cell.debris.consume(params.burn_rate_debris)

        for dx, dy, chance in DEBRIS_SPREAD:
            target = nxt.neighbor(x, y, dx, dy)
            if target is None or rng.random() >= chance:
                continue
            target.debris.ignite()
            if ignite_netting:
                target.netting.ignite()

        below = nxt.neighbor(x, y, 0, 1)
        if below is not None and rng.random() < params.drip_chance_debris:
            _drip(below, params.drip_heat_debris)


def _drip(target: ScaffoldCell, heat: float) -> None:
    target.temperature += heat
    target.debris.ignite()
    target.netting.ignite()
