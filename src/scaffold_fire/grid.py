"""Scaffold lattice: construction, lookup and snapshot helpers."""

import random
from typing import Iterator, Optional, Union

import numpy as np
from mesa.space import SingleGrid

from .cell import Layer, LayerState, ScaffoldCell, StructureLayer
from .config import Configuration, NettingType
from .errors import OutOfBoundsError
from .parameters import ParameterSet, resolve_inputs

Seed = Union[int, random.Random, None]


def make_rng(seed: Seed) -> random.Random:
    """Return ``seed`` if it already is a generator, else a new seeded one."""
    if isinstance(seed, random.Random):
        return seed
    return random.Random(seed)


class ScaffoldGrid:
    """
    Fixed-size rectangular lattice of scaffold cells.

    Cells are stored row-major. ``y = 0`` is the top row and
    ``y = height - 1`` the row standing on the ground. Bounds and adjacency
    come from a non-toroidal Mesa grid, which holds no agents and is shared
    between a snapshot and its copies.
    """

    def __init__(
        self,
        width: int,
        height: int,
        cells: list[ScaffoldCell],
        space: Optional[SingleGrid] = None,
    ):
        if len(cells) != width * height:
            raise ValueError(f"Expected {width * height} cells, got {len(cells)}")
        self.width = width
        self.height = height
        self.cells = cells
        self.space = space if space is not None else SingleGrid(width, height, torus=False)

    def __iter__(self) -> Iterator[ScaffoldCell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScaffoldGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.cells == other.cells
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return not self.space.out_of_bounds((x, y))

    def index(self, x: int, y: int) -> int:
        if self.space.out_of_bounds((x, y)):
            raise OutOfBoundsError((x, y), self.width, self.height)
        return y * self.width + x

    def cell(self, x: int, y: int) -> ScaffoldCell:
        """
        Get the cell at ``(x, y)``.

        Raises:
            OutOfBoundsError: If the coordinates are outside the lattice
        """
        return self.cells[self.index(x, y)]

    def neighbor(self, x: int, y: int, dx: int, dy: int) -> Optional[ScaffoldCell]:
        """Neighbouring cell, or None past the edge (no wraparound)."""
        pos = (x + dx, y + dy)
        if self.space.out_of_bounds(pos):
            return None
        return self.cells[self.index(*pos)]

    def copy(self) -> "ScaffoldGrid":
        """Deep copy; mutating the copy never touches this grid."""
        return ScaffoldGrid(self.width, self.height, [c.copy() for c in self.cells], self.space)

    def temperature_field(self) -> np.ndarray:
        """Temperatures as a ``(height, width)`` array."""
        return np.array([c.temperature for c in self.cells], dtype=float).reshape(
            self.height, self.width
        )

    def set_temperature_field(self, field: np.ndarray) -> None:
        if field.shape != (self.height, self.width):
            raise ValueError(f"Shape mismatch: field={field.shape} grid={(self.height, self.width)}")
        for cell, value in zip(self.cells, field.ravel()):
            cell.temperature = float(value)

    def render(self) -> str:
        """Plain-text picture of the lattice, one glyph per cell."""
        rows = []
        for y in range(self.height):
            rows.append("".join(_glyph(self.cells[y * self.width + x]) for x in range(self.width)))
        return "\n".join(rows)


def _glyph(cell: ScaffoldCell) -> str:
    if cell.is_on_fire():
        return "*"
    if cell.structure.is_failed():
        return "x"
    if cell.debris.is_intact():
        return "o"
    if cell.netting.is_intact():
        return "#"
    return "."


def initialize(
    config: Configuration,
    params: Optional[ParameterSet] = None,
    rng_seed: Seed = None,
) -> ScaffoldGrid:
    """
    Allocate a fresh grid for a configuration.

    Every cell starts at ambient temperature with full structural fuel for
    the material. Netting is hung on every cell unless the configuration has
    none. Debris presence is drawn independently per cell in row-major order.

    Args:
        config: Run configuration
        params: Parameter table, defaults when None
        rng_seed: Integer seed, generator or None for an unseeded run

    Returns:
        The initial ScaffoldGrid
    """
    config, params = resolve_inputs(config, params)
    rng = make_rng(rng_seed)

    has_netting = config.netting != NettingType.NONE
    structure_fuel = params.structure_fuel(config.material)

    cells = []
    for y in range(config.height):
        for x in range(config.width):
            netting = Layer(params.fuel_netting, LayerState.Intact) if has_netting else Layer()
            # One draw per cell, even at zero coverage, keeps the stream stable.
            debris_present = rng.random() < config.debris_coverage
            debris = Layer(params.fuel_debris, LayerState.Intact) if debris_present else Layer()
            cells.append(
                ScaffoldCell(
                    x=x,
                    y=y,
                    temperature=params.ambient_temperature,
                    structure=StructureLayer(fuel=structure_fuel),
                    netting=netting,
                    debris=debris,
                )
            )
    return ScaffoldGrid(config.width, config.height, cells)
