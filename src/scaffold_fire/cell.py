"""Scaffold cell implementation: one bay of the scaffold with three layers."""

from dataclasses import dataclass, field, replace
from enum import Enum


class StructureState(Enum):
    """Possible states of the load-bearing layer."""
    Normal = 0
    Burning = 1
    Burnt = 2
    Collapsed = 3


class LayerState(Enum):
    """Possible states of the netting and debris layers."""
    Absent = 0
    Intact = 1
    Burning = 2
    Burnt = 3


TERMINAL_STRUCTURE_STATES = (StructureState.Burnt, StructureState.Collapsed)


@dataclass
class StructureLayer:
    """Load-bearing layer (poles and ledgers)."""

    fuel: float
    state: StructureState = StructureState.Normal

    def is_burning(self) -> bool:
        return self.state == StructureState.Burning

    def is_failed(self) -> bool:
        """True once the structure burnt out or collapsed."""
        return self.state in TERMINAL_STRUCTURE_STATES


@dataclass
class Layer:
    """Netting or debris layer."""

    fuel: float = 0.0
    state: LayerState = LayerState.Absent

    def is_present(self) -> bool:
        return self.state != LayerState.Absent

    def is_intact(self) -> bool:
        return self.state == LayerState.Intact

    def is_burning(self) -> bool:
        return self.state == LayerState.Burning

    def ignite(self) -> bool:
        """
        Start burning if the layer is intact.

        Returns:
            True if the layer caught fire
        """
        if self.state != LayerState.Intact:
            return False
        self.state = LayerState.Burning
        return True

    def consume(self, amount: float) -> None:
        """Burn ``amount`` of fuel, burning out once it is used up."""
        self.fuel -= amount
        if self.fuel <= 0:
            self.state = LayerState.Burnt


@dataclass
class ScaffoldCell:
    """A single cell of the scaffold lattice."""

    x: int
    y: int
    temperature: float
    structure: StructureLayer
    netting: Layer = field(default_factory=Layer)
    debris: Layer = field(default_factory=Layer)

    @property
    def pos(self) -> tuple[int, int]:
        return (self.x, self.y)

    def is_on_fire(self) -> bool:
        """True if any of the three layers is burning."""
        return (
            self.structure.is_burning()
            or self.netting.is_burning()
            or self.debris.is_burning()
        )

    def same_states(self, other: "ScaffoldCell") -> bool:
        return (
            self.structure.state == other.structure.state
            and self.netting.state == other.netting.state
            and self.debris.state == other.debris.state
        )

    def copy(self) -> "ScaffoldCell":
        return replace(
            self,
            structure=replace(self.structure),
            netting=replace(self.netting),
            debris=replace(self.debris),
        )
