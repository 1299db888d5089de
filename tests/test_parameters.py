"""Unit tests for the parameter table and run configuration."""

import math

import pytest
from scaffold_fire.config import SCENARIOS, Configuration, DebrisCoverage, Material, NettingType, Weather
from scaffold_fire.errors import InvalidParameterError
from scaffold_fire.parameters import DEFAULT_PARAMETERS, LEGACY_NAMES, ParameterSet, resolve_inputs


class TestParameterSet:
    """Test cases for ParameterSet validation and lookups."""

    def test_defaults_are_valid(self):
        assert DEFAULT_PARAMETERS.validate() is DEFAULT_PARAMETERS

    def test_default_values(self):
        """Defaults match the reference constants."""
        p = DEFAULT_PARAMETERS
        assert p.ambient_temperature == 25.0
        assert p.ignition_temp_bamboo == 300.0
        assert p.failure_temp_metal == 600.0
        assert p.netting_flashover_chance == 0.85
        assert p.drip_chance_debris == 0.70

    @pytest.mark.parametrize("field", ["drip_chance_netting", "bamboo_ignition_chance_wet"])
    def test_probability_above_one_rejected(self, field):
        with pytest.raises(InvalidParameterError) as exc:
            DEFAULT_PARAMETERS.replace(**{field: 1.2}).validate()
        assert exc.value.field == field

    @pytest.mark.parametrize("field", ["fuel_bamboo", "ignition_temp_netting", "netting_flashover_chance"])
    def test_negative_rejected(self, field):
        with pytest.raises(InvalidParameterError) as exc:
            DEFAULT_PARAMETERS.replace(**{field: -1.0}).validate()
        assert exc.value.field == field

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidParameterError) as exc:
            DEFAULT_PARAMETERS.replace(cooling_rate=math.nan).validate()
        assert exc.value.field == "cooling_rate"

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidParameterError) as exc:
            DEFAULT_PARAMETERS.replace(fuel_netting="lots").validate()
        assert exc.value.field == "fuel_netting"

    def test_zero_heat_capacity_rejected(self):
        with pytest.raises(InvalidParameterError) as exc:
            DEFAULT_PARAMETERS.replace(heat_capacity_metal=0.0).validate()
        assert exc.value.field == "heat_capacity_metal"

    def test_fractional_pass_count_rejected(self):
        with pytest.raises(InvalidParameterError) as exc:
            DEFAULT_PARAMETERS.replace(diffusion_passes_metal=2.5).validate()
        assert exc.value.field == "diffusion_passes_metal"

    def test_replace_unknown_field(self):
        with pytest.raises(InvalidParameterError):
            DEFAULT_PARAMETERS.replace(not_a_field=1.0)

    def test_values_are_never_clamped(self):
        """Validation reports the error instead of fixing the value."""
        bad = DEFAULT_PARAMETERS.replace(drip_chance_netting=2.0)
        with pytest.raises(InvalidParameterError):
            bad.validate()
        assert bad.drip_chance_netting == 2.0

    def test_flashover_chance_variants(self):
        p = DEFAULT_PARAMETERS
        assert p.flashover_chance(NettingType.STANDARD, Weather.DRY) == 0.85
        assert p.flashover_chance(NettingType.FIRE_RESISTANT, Weather.DRY) == 0.01
        assert p.flashover_chance(NettingType.STANDARD, Weather.WET) == pytest.approx(0.34)

    def test_cooling_factor(self):
        p = DEFAULT_PARAMETERS
        assert p.cooling_factor(Material.BAMBOO, Weather.DRY) == pytest.approx(0.05)
        assert p.cooling_factor(Material.METAL, Weather.WET) == pytest.approx(0.27)


class TestFromMapping:
    """Test cases for building parameters from user tables."""

    def test_full_table_roundtrip(self):
        assert ParameterSet.from_mapping(DEFAULT_PARAMETERS.to_dict()) == DEFAULT_PARAMETERS

    def test_missing_field_rejected(self):
        table = DEFAULT_PARAMETERS.to_dict()
        del table["fuel_debris"]
        with pytest.raises(InvalidParameterError) as exc:
            ParameterSet.from_mapping(table)
        assert exc.value.field == "fuel_debris"

    def test_partial_table_uses_defaults(self):
        params = ParameterSet.from_mapping({"fuel_debris": 90.0}, partial=True)
        assert params.fuel_debris == 90.0
        assert params.fuel_netting == DEFAULT_PARAMETERS.fuel_netting

    def test_legacy_names(self):
        """UPPER_CASE keys of the legacy settings panel are accepted."""
        params = ParameterSet.from_mapping(
            {"DRIP_CHANCE_STYROFOAM": 0.5, "IGNITION_TEMP_BAMBOO": 280},
            partial=True,
        )
        assert params.drip_chance_debris == 0.5
        assert params.ignition_temp_bamboo == 280

    def test_legacy_names_cover_known_fields(self):
        fields = set(DEFAULT_PARAMETERS.to_dict())
        assert set(LEGACY_NAMES.values()) <= fields

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidParameterError) as exc:
            ParameterSet.from_mapping({"WIND_FACTOR": 1.0}, partial=True)
        assert exc.value.field == "WIND_FACTOR"

    def test_out_of_range_value_rejected(self):
        with pytest.raises(InvalidParameterError) as exc:
            ParameterSet.from_mapping({"NETTING_IGNITION_CHANCE_WET": 3}, partial=True)
        assert exc.value.field == "netting_ignition_chance_wet"


class TestConfiguration:
    """Test cases for Configuration validation."""

    def test_defaults_are_valid(self):
        config = Configuration().validate()
        assert config.material == Material.BAMBOO
        assert config.netting == NettingType.NONE
        assert (config.width, config.height) == (12, 20)

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"debris_coverage": -0.1}, "debris_coverage"),
            ({"debris_coverage": 1.01}, "debris_coverage"),
            ({"wind_speed": 11}, "wind_speed"),
            ({"material": "bamboo"}, "material"),
            ({"weather": None}, "weather"),
            ({"height": 1}, "height"),
            ({"width": 0}, "width"),
        ],
    )
    def test_invalid_fields(self, kwargs, field):
        with pytest.raises(InvalidParameterError) as exc:
            Configuration(**kwargs).validate()
        assert exc.value.field == field

    def test_coverage_presets(self):
        assert DebrisCoverage.NONE.value == 0.0
        assert DebrisCoverage.HIGH.value == 1.0

    def test_scenarios_are_valid(self):
        for config in SCENARIOS.values():
            config.validate()

    def test_resolve_inputs_defaults(self):
        config, params = resolve_inputs(Configuration())
        assert params is DEFAULT_PARAMETERS

    def test_resolve_inputs_rejects_non_config(self):
        with pytest.raises(InvalidParameterError):
            resolve_inputs({"material": "metal"})
