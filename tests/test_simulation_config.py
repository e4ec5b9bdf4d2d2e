import pytest

from simulation_config import Bounds, FieldKind, FieldSettings, SimulationConfig, TraceOptions
from vector2 import Vector2


def test_defaults():
    config = SimulationConfig()
    assert config.settings == FieldSettings()
    assert config.trace.step_size == 0.05
    assert config.trace.max_steps == 200
    assert config.trace.bounds == Bounds(-6.0, 6.0, -5.0, 5.0)


def test_from_flat_mapping():
    config = SimulationConfig.from_mapping(
        {"step_size": 0.02, "epsilon": 0.2, "bounds": [-1, 1, -2, 2], "num_field_lines": 8}
    )
    assert config.trace.step_size == 0.02
    assert config.settings.epsilon == 0.2
    assert config.trace.bounds == Bounds(-1, 1, -2, 2)
    assert config.num_field_lines == 8


def test_from_nested_mapping():
    config = SimulationConfig.from_mapping(
        {"settings": {"max_beta": 0.9}, "trace": {"max_steps": 50}, "field_scale": 0.01}
    )
    assert config.settings.max_beta == 0.9
    assert config.trace.max_steps == 50
    assert config.field_scale == 0.1


def test_invalid_trace_values_are_rejected():
    with pytest.raises(ValueError):
        SimulationConfig.from_mapping({"step_size": -1.0})


def test_setters():
    config = SimulationConfig()
    config.set_num_field_lines(0)
    assert config.num_field_lines == 1
    config.set_trace(max_steps=400)
    assert config.trace.max_steps == 400
    assert config.trace.step_size == 0.05


def test_describe():
    assert SimulationConfig().describe() == "20 lines • step 0.05 • ε=0.1 • β≤0.999"


def test_bounds():
    bounds = Bounds()
    assert bounds.width == 12.0
    assert bounds.height == 10.0
    assert bounds.contains(Vector2(6.0, -5.0))
    assert not bounds.contains(Vector2(6.01, 0.0))


def test_field_kind_labels():
    assert FieldKind.ELECTRIC.label() == "Electric field (E)"
    assert FieldKind.MAGNETIC.label() == "Magnetic field (B)"


def test_trace_options_are_frozen_values():
    assert TraceOptions() == TraceOptions()
