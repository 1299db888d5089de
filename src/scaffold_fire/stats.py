"""Per-tick telemetry and end-of-run detection."""

from dataclasses import asdict, dataclass
from typing import Optional

from .cell import StructureState
from .grid import ScaffoldGrid
from .parameters import DEFAULT_PARAMETERS, ParameterSet

QUIESCENT_TEMP_DELTA = 0.5
TERMINATION_GRACE_TICKS = 20


@dataclass(frozen=True)
class TickMetrics:
    """Telemetry after a tick, including running aggregates."""

    peak_temperature: float
    current_temperature: float
    collapsed_count: int
    burnt_count: int
    active_fire_count: int
    max_fire_area: int
    duration_ticks: int
    fire_duration_ticks: int
    quiescent: bool = False

    @property
    def structural_loss(self) -> int:
        """Cells whose structure burnt out or collapsed."""
        return self.collapsed_count + self.burnt_count

    def to_dict(self) -> dict:
        return asdict(self)


def initial_metrics(params: Optional[ParameterSet] = None) -> TickMetrics:
    """Metrics of a run that has not ticked yet."""
    ambient = (params or DEFAULT_PARAMETERS).ambient_temperature
    return TickMetrics(
        peak_temperature=ambient,
        current_temperature=ambient,
        collapsed_count=0,
        burnt_count=0,
        active_fire_count=0,
        max_fire_area=0,
        duration_ticks=0,
        fire_duration_ticks=0,
    )


def is_quiescent(prev: ScaffoldGrid, nxt: ScaffoldGrid) -> bool:
    """True if no temperature moved more than 0.5 and no layer changed state."""
    for before, after in zip(prev.cells, nxt.cells):
        if abs(after.temperature - before.temperature) > QUIESCENT_TEMP_DELTA:
            return False
        if not before.same_states(after):
            return False
    return True


def aggregate(
    prev: ScaffoldGrid,
    nxt: ScaffoldGrid,
    previous: TickMetrics,
    params: ParameterSet,
) -> TickMetrics:
    """
    Derive the metrics of the tick that turned ``prev`` into ``nxt``.

    Args:
        prev: Snapshot before the tick
        nxt: Snapshot after the tick
        previous: Metrics returned for the preceding tick
        params: Parameter table (for the ambient floor)

    Returns:
        New TickMetrics
    """
    current = max(max(c.temperature for c in nxt.cells), params.ambient_temperature)
    burnt = sum(1 for c in nxt.cells if c.structure.state == StructureState.Burnt)
    collapsed = sum(1 for c in nxt.cells if c.structure.state == StructureState.Collapsed)
    active = sum(1 for c in nxt.cells if c.is_on_fire())

    return TickMetrics(
        peak_temperature=max(previous.peak_temperature, current),
        current_temperature=current,
        collapsed_count=collapsed,
        burnt_count=burnt,
        active_fire_count=active,
        max_fire_area=max(previous.max_fire_area, active),
        duration_ticks=previous.duration_ticks + 1,
        fire_duration_ticks=previous.fire_duration_ticks + (1 if active > 0 else 0),
        quiescent=is_quiescent(prev, nxt),
    )


def is_terminated(metrics: TickMetrics) -> bool:
    """
    Whether the run reached its quiet end state.

    Requires no active fire, a quiescent tick and more than 20 ticks of
    runtime, so a run is not stopped before the seeded fire had an effect.
    """
    return (
        metrics.active_fire_count == 0
        and metrics.quiescent
        and metrics.duration_ticks > TERMINATION_GRACE_TICKS
    )
