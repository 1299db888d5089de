"""
Thermal, fuel and probability constants consumed by the simulation rules.

The defaults reproduce the hand-tuned constants of the reference scaffold
model. Temperatures are in degrees Celsius, fuel in abstract units and heat
output in units per tick.
"""

import logging
import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

from .config import Configuration, Material, NettingType, Weather
from .errors import InvalidParameterError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterSet:
    """Full table of constants used by the combustion and thermal rules."""

    # Environment
    ambient_temperature: float = 25.0
    forced_ignition_temperature: float = 800.0

    # Ignition temperatures
    ignition_temp_bamboo: float = 300.0
    ignition_temp_debris: float = 240.0
    melt_temp_debris: float = 100.0  # carried for compatibility, has no effect
    ignition_temp_netting: float = 180.0
    ignition_temp_netting_fr: float = 450.0

    # Failure / softening temperatures
    failure_temp_metal: float = 600.0
    softening_temp_metal: float = 300.0

    # Fuel capacities
    fuel_bamboo: float = 200.0
    fuel_debris: float = 150.0
    fuel_netting: float = 130.0
    fuel_metal: float = 0.0

    # Fuel burnt per tick
    burn_rate_bamboo: float = 1.0
    burn_rate_debris: float = 4.0
    burn_rate_netting: float = 5.0

    # Heat output per tick
    heat_output_bamboo: float = 15.0
    heat_output_debris: float = 50.0
    heat_output_netting: float = 55.0
    heat_output_netting_fr: float = 10.0

    # Drip heat delivered to the cell below
    drip_heat_netting: float = 80.0
    drip_heat_debris: float = 150.0

    # Thermal properties
    conductivity_metal: float = 0.55
    heat_capacity_metal: float = 0.6
    conductivity_bamboo: float = 0.10
    heat_capacity_bamboo: float = 3.0
    vertical_spread_factor: float = 0.25
    diffusion_passes_metal: int = 4
    diffusion_passes_bamboo: int = 1

    # Cooling
    cooling_rate: float = 0.05
    cooling_rate_wet: float = 0.12
    metal_cooling_bonus: float = 0.15

    # Probabilities
    netting_flashover_chance: float = 0.85
    netting_flashover_chance_fr: float = 0.01
    bamboo_ignition_chance_dry: float = 0.95
    bamboo_ignition_chance_wet: float = 0.15
    netting_ignition_chance_dry: float = 0.95
    netting_ignition_chance_wet: float = 0.25
    drip_chance_netting: float = 0.40
    drip_chance_debris: float = 0.70

    def validate(self) -> "ParameterSet":
        """
        Check every field, raising on the first bad one.

        Probabilities must lie in [0, 1], everything else must be a finite,
        non-negative number. Heat capacities and pass counts must be positive.

        Returns:
            The parameter set itself, so calls can be chained
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidParameterError(f.name, f"expected a number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidParameterError(f.name, f"must be finite, got {value}")
            if value < 0:
                raise InvalidParameterError(f.name, f"must be non-negative, got {value}")
            if f.name in PROBABILITY_FIELDS and value > 1:
                raise InvalidParameterError(f.name, f"probability must lie in [0, 1], got {value}")
        for name in POSITIVE_FIELDS:
            if getattr(self, name) <= 0:
                raise InvalidParameterError(name, "must be strictly positive")
        for name in ("diffusion_passes_metal", "diffusion_passes_bamboo"):
            if int(getattr(self, name)) != getattr(self, name):
                raise InvalidParameterError(name, "must be a whole number of passes")
        return self

    def replace(self, **overrides: Any) -> "ParameterSet":
        """Return a copy with some fields changed."""
        unknown = set(overrides) - FIELD_NAMES
        if unknown:
            raise InvalidParameterError(sorted(unknown)[0], "unknown parameter")
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], *, partial: bool = False) -> "ParameterSet":
        """
        Build a parameter set from a user-supplied table.

        Keys may be the snake_case field names or the UPPER_CASE names used
        by the legacy settings panel (e.g. ``DRIP_CHANCE_STYROFOAM``).

        Args:
            values: Mapping of parameter names to numbers
            partial: Fill missing fields from the defaults instead of failing

        Returns:
            Validated ParameterSet

        Raises:
            InvalidParameterError: On unknown, missing or out-of-range fields
        """
        resolved: dict[str, Any] = {}
        for key, value in values.items():
            name = LEGACY_NAMES.get(key, key)
            if name not in FIELD_NAMES:
                raise InvalidParameterError(key, "unknown parameter")
            resolved[name] = value

        missing = [f.name for f in fields(cls) if f.name not in resolved]
        if missing and not partial:
            raise InvalidParameterError(missing[0], "missing from parameter table")
        if missing:
            logger.debug(f"Using defaults for {len(missing)} parameters: {', '.join(missing)}")

        return cls(**resolved).validate()

    # Per-variant lookups used by the rules

    def structure_fuel(self, material: Material) -> float:
        return self.fuel_bamboo if material == Material.BAMBOO else self.fuel_metal

    def conductivity(self, material: Material) -> float:
        return self.conductivity_bamboo if material == Material.BAMBOO else self.conductivity_metal

    def heat_capacity(self, material: Material) -> float:
        return self.heat_capacity_bamboo if material == Material.BAMBOO else self.heat_capacity_metal

    def diffusion_passes(self, material: Material) -> int:
        if material == Material.METAL:
            return int(self.diffusion_passes_metal)
        return int(self.diffusion_passes_bamboo)

    def netting_ignition_temp(self, netting: NettingType) -> float:
        if netting == NettingType.FIRE_RESISTANT:
            return self.ignition_temp_netting_fr
        return self.ignition_temp_netting

    def netting_heat_output(self, netting: NettingType) -> float:
        if netting == NettingType.FIRE_RESISTANT:
            return self.heat_output_netting_fr
        return self.heat_output_netting

    def flashover_chance(self, netting: NettingType, weather: Weather) -> float:
        chance = self.netting_flashover_chance
        if netting == NettingType.FIRE_RESISTANT:
            chance = self.netting_flashover_chance_fr
        if weather == Weather.WET:
            chance *= WET_FLASHOVER_DAMPING
        return chance

    def bamboo_ignition_chance(self, weather: Weather) -> float:
        if weather == Weather.WET:
            return self.bamboo_ignition_chance_wet
        return self.bamboo_ignition_chance_dry

    def netting_ignition_chance(self, weather: Weather) -> float:
        if weather == Weather.WET:
            return self.netting_ignition_chance_wet
        return self.netting_ignition_chance_dry

    def cooling_factor(self, material: Material, weather: Weather) -> float:
        rate = self.cooling_rate_wet if weather == Weather.WET else self.cooling_rate
        if material == Material.METAL:
            rate += self.metal_cooling_bonus
        return rate


WET_FLASHOVER_DAMPING = 0.4

FIELD_NAMES = frozenset(f.name for f in fields(ParameterSet))

PROBABILITY_FIELDS = frozenset({
    "netting_flashover_chance",
    "netting_flashover_chance_fr",
    "bamboo_ignition_chance_dry",
    "bamboo_ignition_chance_wet",
    "netting_ignition_chance_dry",
    "netting_ignition_chance_wet",
    "drip_chance_netting",
    "drip_chance_debris",
})

POSITIVE_FIELDS = (
    "heat_capacity_metal",
    "heat_capacity_bamboo",
    "diffusion_passes_metal",
    "diffusion_passes_bamboo",
)

# Keys used by the legacy settings panel. Styrofoam is the debris layer.
LEGACY_NAMES = {
    "IGNITION_TEMP_BAMBOO": "ignition_temp_bamboo",
    "IGNITION_TEMP_STYROFOAM": "ignition_temp_debris",
    "MELT_TEMP_STYROFOAM": "melt_temp_debris",
    "IGNITION_TEMP_NETTING": "ignition_temp_netting",
    "IGNITION_TEMP_NETTING_FR": "ignition_temp_netting_fr",
    "FAILURE_TEMP_METAL": "failure_temp_metal",
    "SOFTENING_TEMP_METAL": "softening_temp_metal",
    "FUEL_BAMBOO": "fuel_bamboo",
    "FUEL_STYROFOAM": "fuel_debris",
    "FUEL_NETTING": "fuel_netting",
    "FUEL_METAL": "fuel_metal",
    "HEAT_OUTPUT_BAMBOO": "heat_output_bamboo",
    "HEAT_OUTPUT_STYROFOAM": "heat_output_debris",
    "HEAT_OUTPUT_NETTING": "heat_output_netting",
    "HEAT_OUTPUT_NETTING_FR": "heat_output_netting_fr",
    "CONDUCTIVITY_METAL": "conductivity_metal",
    "HEAT_CAPACITY_METAL": "heat_capacity_metal",
    "CONDUCTIVITY_BAMBOO": "conductivity_bamboo",
    "HEAT_CAPACITY_BAMBOO": "heat_capacity_bamboo",
    "VERTICAL_SPREAD_FACTOR": "vertical_spread_factor",
    "NETTING_FLASHOVER_CHANCE": "netting_flashover_chance",
    "NETTING_FLASHOVER_CHANCE_FR": "netting_flashover_chance_fr",
    "COOLING_RATE": "cooling_rate",
    "COOLING_RATE_WET": "cooling_rate_wet",
    "METAL_COOLING_BONUS": "metal_cooling_bonus",
    "BAMBOO_IGNITION_CHANCE_DRY": "bamboo_ignition_chance_dry",
    "BAMBOO_IGNITION_CHANCE_WET": "bamboo_ignition_chance_wet",
    "NETTING_IGNITION_CHANCE_DRY": "netting_ignition_chance_dry",
    "NETTING_IGNITION_CHANCE_WET": "netting_ignition_chance_wet",
    "DRIP_CHANCE_NETTING": "drip_chance_netting",
    "DRIP_CHANCE_STYROFOAM": "drip_chance_debris",
    "AMBIENT_TEMP": "ambient_temperature",
}

DEFAULT_PARAMETERS = ParameterSet()


def resolve_inputs(
    config: Configuration,
    params: "ParameterSet | Mapping[str, Any] | None" = None,
) -> tuple[Configuration, ParameterSet]:
    """
    Validate a configuration and parameter table at an engine entry point.

    ``params`` may be a ParameterSet, a mapping accepted by
    ``ParameterSet.from_mapping`` (all fields required) or None for the
    defaults.
    """
    if not isinstance(config, Configuration):
        raise InvalidParameterError("config", f"expected Configuration, got {type(config).__name__}")
    config.validate()
    if params is None:
        return config, DEFAULT_PARAMETERS
    if isinstance(params, ParameterSet):
        return config, params.validate()
    return config, ParameterSet.from_mapping(params)
