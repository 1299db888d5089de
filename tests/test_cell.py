"""Unit tests for the scaffold cell layers."""

import pytest
from scaffold_fire.cell import (
    Layer,
    LayerState,
    ScaffoldCell,
    StructureLayer,
    StructureState,
)


class TestLayer:
    """Test cases for the netting/debris Layer."""

    def test_default_layer_is_absent(self):
        """A default layer has no fuel and is absent."""
        layer = Layer()
        assert layer.state == LayerState.Absent
        assert layer.fuel == 0.0
        assert layer.is_present() is False

    def test_ignite_intact_layer(self):
        """Intact layers catch fire."""
        layer = Layer(100.0, LayerState.Intact)
        assert layer.ignite() is True
        assert layer.state == LayerState.Burning

    @pytest.mark.parametrize("state", [LayerState.Absent, LayerState.Burning, LayerState.Burnt])
    def test_ignite_only_from_intact(self, state):
        """Absent, burning and burnt layers are never (re)ignited."""
        layer = Layer(10.0, state)
        assert layer.ignite() is False
        assert layer.state == state

    def test_consume_burns_out_at_zero(self):
        """Layer becomes Burnt once its fuel reaches zero."""
        layer = Layer(10.0, LayerState.Burning)
        layer.consume(5.0)
        assert layer.state == LayerState.Burning
        assert layer.fuel == 5.0
        layer.consume(5.0)
        assert layer.state == LayerState.Burnt


class TestStructureLayer:
    """Test cases for the load-bearing layer."""

    def test_failed_states(self):
        """Burnt and Collapsed count as failed."""
        assert StructureLayer(0.0, StructureState.Burnt).is_failed()
        assert StructureLayer(0.0, StructureState.Collapsed).is_failed()
        assert not StructureLayer(200.0, StructureState.Burning).is_failed()
        assert not StructureLayer(200.0).is_failed()


class TestScaffoldCell:
    """Test cases for ScaffoldCell."""

    @pytest.fixture
    def cell(self):
        return ScaffoldCell(
            x=3,
            y=4,
            temperature=25.0,
            structure=StructureLayer(200.0),
            netting=Layer(130.0, LayerState.Intact),
            debris=Layer(150.0, LayerState.Intact),
        )

    def test_pos(self, cell):
        assert cell.pos == (3, 4)

    def test_on_fire_when_any_layer_burns(self, cell):
        """Any burning layer puts the cell on fire."""
        assert cell.is_on_fire() is False
        cell.debris.state = LayerState.Burning
        assert cell.is_on_fire() is True

    def test_copy_is_independent(self, cell):
        """Mutating a copy leaves the original untouched."""
        clone = cell.copy()
        clone.netting.ignite()
        clone.structure.state = StructureState.Burning
        clone.temperature = 500.0

        assert cell.netting.state == LayerState.Intact
        assert cell.structure.state == StructureState.Normal
        assert cell.temperature == 25.0
        assert clone != cell

    def test_same_states(self, cell):
        clone = cell.copy()
        clone.temperature = 90.0
        assert cell.same_states(clone)
        clone.debris.ignite()
        assert not cell.same_states(clone)


class TestStates:
    """Test cases for the state enums."""

    def test_structure_states_exist(self):
        assert [s.name for s in StructureState] == ["Normal", "Burning", "Burnt", "Collapsed"]

    def test_layer_states_exist(self):
        assert [s.name for s in LayerState] == ["Absent", "Intact", "Burning", "Burnt"]
