import dataclasses

import pytest

from lorentz import SpacetimeEvent
from state import BETA_MAX, MOTION_SPEED, SimulationState, TransformHistory
from vector2 import Vector2


def test_state_is_immutable():
    state = SimulationState()
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.charge = 2.0


def test_charge_is_clamped_and_rounded():
    state = SimulationState()
    assert state.with_charge(1.26).charge == 1.3
    assert state.with_charge(5.0).charge == 2.0
    assert state.with_charge(-5.0).charge == -2.0
    assert state.charge == 1.0


def test_beta_is_clamped():
    state = SimulationState()
    assert state.with_beta(2.0).beta == BETA_MAX
    assert state.with_beta(-0.3).beta == 0.0
    assert state.with_beta(0.6).gamma == pytest.approx(1.25)


def test_switching_scenario_resets_time_and_applies_defaults():
    state = SimulationState(time=4.0).with_scenario("moving")
    assert state.scenario == "moving"
    assert state.beta == 0.6
    assert state.charge == 1.0
    assert state.time == 0.0


def test_toggles():
    state = SimulationState()
    assert not state.toggled("show_electric").show_electric
    assert state.toggled("show_vectors").show_vectors
    assert not state.toggled("playing").playing
    with pytest.raises(ValueError):
        state.toggled("scenario")


def test_time_only_advances_while_playing():
    state = SimulationState()
    assert state.advanced(0.5).time == 0.5
    paused = state.toggled("playing")
    assert paused.advanced(0.5).time == 0.0


def test_reset_clears_time_and_offset():
    state = SimulationState(time=3.0, offset=Vector2(1.0, 1.0)).reset()
    assert state.time == 0.0
    assert state.offset == Vector2()


def test_stationary_configuration_uses_charge_control():
    configuration = SimulationState().with_charge(-1.5).configuration()
    assert configuration.charges[0].charge == -1.5
    assert configuration.charges[0].position == Vector2()


def test_moving_charge_drifts_with_time():
    state = SimulationState().with_scenario("moving").advanced(1.0)
    assert state.charge_displacement() == Vector2(0.6 * MOTION_SPEED, 0.0)
    charge = state.configuration().charges[0]
    assert charge.position.x == pytest.approx(0.6 * MOTION_SPEED)
    assert charge.beta == 0.6


def test_offset_moves_every_source():
    state = SimulationState().with_scenario("dipole").with_offset(Vector2(0.0, 2.0))
    positions = [c.position for c in state.configuration().charges]
    assert positions == [Vector2(-1.0, 2.0), Vector2(1.0, 2.0)]
    assert state.charge_displacement() == Vector2()


def test_num_field_lines_has_floor():
    assert SimulationState().with_num_field_lines(0).num_field_lines == 1


def test_history_keeps_newest_five():
    history = TransformHistory()
    for i in range(7):
        history.record(SpacetimeEvent(float(i), 0.0), 0.5)
    assert len(history) == 5
    assert history.latest.event.x == 6.0
    assert [record.event.x for record in history] == [6.0, 5.0, 4.0, 3.0, 2.0]


def test_history_record_holds_transformed_event():
    history = TransformHistory()
    record = history.record(SpacetimeEvent(0.0, 5.0), 0.6)
    assert record.transformed.ct == pytest.approx(6.25)
    history.clear()
    assert history.latest is None
    assert len(history) == 0
