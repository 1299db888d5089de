"""Run configuration: material, netting, debris coverage and weather."""

import math
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidParameterError

DEFAULT_WIDTH = 12
DEFAULT_HEIGHT = 20
MAX_WIND_SPEED = 10.0


class Material(Enum):
    """Structural material of the scaffold."""
    METAL = "metal"    # non-combustible, conducts heat, collapses when hot
    BAMBOO = "bamboo"  # combustible, holds heat, burns out


class NettingType(Enum):
    """Sheet netting hung on the scaffold face."""
    NONE = "none"
    STANDARD = "standard"
    FIRE_RESISTANT = "fire_resistant"


class Weather(Enum):
    DRY = "dry"
    WET = "wet"


class DebrisCoverage(Enum):
    """Preset debris coverage levels offered by the control surface."""
    NONE = 0.0
    LOW = 0.3
    MEDIUM = 0.6
    HIGH = 1.0


@dataclass(frozen=True)
class Configuration:
    """
    Immutable configuration of one simulation run.

    Attributes:
        material: Structural material
        netting: Netting variant, NONE for a bare scaffold
        debris_coverage: Probability in [0, 1] that a cell starts with debris
        weather: Dry or wet conditions
        wind_speed: Wind speed on a 0-10 scale; carried, not simulated
        width: Number of cells across the scaffold face
        height: Number of cells from top to ground
    """

    material: Material = Material.BAMBOO
    netting: NettingType = NettingType.NONE
    debris_coverage: float = 0.0
    weather: Weather = Weather.DRY
    wind_speed: float = 2.0
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    @property
    def is_metal(self) -> bool:
        return self.material == Material.METAL

    @property
    def is_fire_resistant(self) -> bool:
        return self.netting == NettingType.FIRE_RESISTANT

    def validate(self) -> "Configuration":
        """Raise InvalidParameterError for the first malformed field."""
        for name, enum_type in (
            ("material", Material),
            ("netting", NettingType),
            ("weather", Weather),
        ):
            if not isinstance(getattr(self, name), enum_type):
                raise InvalidParameterError(name, f"expected {enum_type.__name__}, got {getattr(self, name)!r}")

        coverage = self.debris_coverage
        if isinstance(coverage, bool) or not isinstance(coverage, (int, float)) or not math.isfinite(coverage):
            raise InvalidParameterError("debris_coverage", f"expected a number, got {coverage!r}")
        if not 0.0 <= coverage <= 1.0:
            raise InvalidParameterError("debris_coverage", f"must lie in [0, 1], got {coverage}")

        wind = self.wind_speed
        if isinstance(wind, bool) or not isinstance(wind, (int, float)) or not math.isfinite(wind):
            raise InvalidParameterError("wind_speed", f"expected a number, got {wind!r}")
        if not 0.0 <= wind <= MAX_WIND_SPEED:
            raise InvalidParameterError("wind_speed", f"must lie in [0, {MAX_WIND_SPEED:g}], got {wind}")

        # The forced ignition cell sits on the second row from the bottom.
        for name, minimum in (("width", 1), ("height", 2)):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
                raise InvalidParameterError(name, f"must be an integer >= {minimum}, got {value!r}")
        return self


# Predefined scenarios, keyed like the presets of the control surface
SCENARIOS = {
    "bamboo_bare": Configuration(material=Material.BAMBOO),
    "bamboo_netting": Configuration(
        material=Material.BAMBOO,
        netting=NettingType.STANDARD,
    ),
    "bamboo_worst_case": Configuration(
        material=Material.BAMBOO,
        netting=NettingType.STANDARD,
        debris_coverage=DebrisCoverage.HIGH.value,
    ),
    "bamboo_compliant": Configuration(
        material=Material.BAMBOO,
        netting=NettingType.FIRE_RESISTANT,
    ),
    "metal_bare": Configuration(material=Material.METAL),
    "metal_netting_debris": Configuration(
        material=Material.METAL,
        netting=NettingType.STANDARD,
        debris_coverage=DebrisCoverage.MEDIUM.value,
    ),
    "metal_compliant_wet": Configuration(
        material=Material.METAL,
        netting=NettingType.FIRE_RESISTANT,
        weather=Weather.WET,
    ),
}
