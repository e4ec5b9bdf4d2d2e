import math

import pytest

from constants import NATURAL, SI
from field import potential_at
from objects import Axis, ChargeConfiguration, PointCharge, WireCurrent
from scenarios import SCENARIOS, get_scenario
from simulation_config import Bounds, FieldKind, TraceOptions
from streamlines import (
    EquipotentialEllipse,
    ellipse_points,
    equipotential_contour,
    seed_points,
    trace_field_line,
    trace_field_lines,
    trace_magnetic_lines,
)
from vector2 import Vector2

K_E = SI.coulomb_constant * SI.elementary_charge


def single(charge=1.0, beta=0.0):
    return ChargeConfiguration(charges=(PointCharge(Vector2(), charge, beta),))


def test_empty_configuration_traces_nothing():
    assert trace_field_line(Vector2(1.0, 1.0), ChargeConfiguration()) == []
    assert trace_field_lines(ChargeConfiguration(), 10) == []


def test_seed_outside_domain_traces_nothing():
    assert trace_field_line(Vector2(50.0, 0.0), single()) == []
    assert trace_field_line(Vector2(math.nan, 0.0), single()) == []


@pytest.mark.parametrize("identifier", sorted(SCENARIOS))
def test_traced_lines_are_bounded_and_finite(identifier):
    options = TraceOptions()
    configuration = get_scenario(identifier).configuration
    for line in trace_field_lines(configuration, 12, options):
        assert 2 <= len(line) <= options.max_steps + 1
        for point in line:
            assert point.is_finite()
            assert options.bounds.contains(point)


def test_dipole_lines_end_on_the_negative_charge():
    configuration = get_scenario("dipole").configuration
    options = TraceOptions(max_steps=1000)
    sink = Vector2(1.0, 0.0)
    for angle in (0.0, math.pi / 4, -math.pi / 4):
        seed = Vector2(-1.0, 0.0) + Vector2.from_polar(options.seed_radius, angle)
        line = trace_field_line(seed, configuration, options)
        assert line[-1].distance_to(sink) < options.capture_radius
        assert len(line) < options.max_steps + 1


def test_like_charges_push_lines_out_of_the_domain():
    configuration = get_scenario("two_charges").configuration
    options = TraceOptions(max_steps=1000)
    line = trace_field_line(Vector2(1.8, 0.0), configuration, options)
    assert len(line) < options.max_steps + 1
    assert line[-1].x > options.bounds.x_max - options.step_size - 1e-9
    assert all(point.y == 0.0 for point in line)


def test_line_stops_at_step_cap():
    options = TraceOptions(max_steps=10)
    line = trace_field_line(Vector2(0.3, 0.0), single(), options)
    assert len(line) == 11
    assert line[-1].x == pytest.approx(0.8)


def test_lines_are_seeded_around_every_source():
    lines = trace_field_lines(get_scenario("quadrupole").configuration, 6)
    assert len(lines) == 12
    lines = trace_field_lines(single(), 8)
    assert len(lines) == 8
    for line in lines:
        assert line[0].magnitude() == pytest.approx(TraceOptions().seed_radius)


def test_negative_charge_alone_is_traced_outwards():
    lines = trace_field_lines(single(-1.0), 8, TraceOptions(max_steps=500))
    assert len(lines) == 8
    for line in lines:
        assert line[1].magnitude() > line[0].magnitude()
        assert line[-1].magnitude() > 4.0


def test_backward_direction_reverses_the_line():
    forward = trace_field_line(Vector2(1.0, 0.0), single(), TraceOptions(max_steps=5))
    backward = trace_field_line(Vector2(1.0, 0.0), single(), TraceOptions(max_steps=5), direction=-1)
    assert forward[1].x > 1.0
    assert backward[1].x < 1.0


def test_wire_magnetic_lines_close_into_circles():
    configuration = ChargeConfiguration(wires=(WireCurrent(Vector2(), 1.0),))
    lines = trace_magnetic_lines(configuration, 3, TraceOptions(max_steps=1000))
    assert len(lines) == 3
    for i, line in enumerate(lines, start=1):
        radius = 4.0 * i / 3
        assert line[0] == line[-1]
        for point in line:
            assert point.magnitude() == pytest.approx(radius, abs=0.25)


def test_moving_charge_has_magnetic_loops():
    lines = trace_magnetic_lines(get_scenario("moving").configuration, 2)
    assert len(lines) == 2
    assert all(line[0] == line[-1] for line in lines)


@pytest.mark.parametrize("max_steps", [40, 200, 1000])
def test_magnetic_loops_respect_the_step_cap(max_steps):
    options = TraceOptions(max_steps=max_steps)
    for identifier in ("moving", "wire"):
        lines = trace_magnetic_lines(get_scenario(identifier).configuration, 3, options)
        assert lines
        assert all(len(line) <= max_steps + 1 for line in lines)


def test_loops_close_within_default_cap():
    options = TraceOptions()
    lines = trace_magnetic_lines(get_scenario("wire").configuration, 3, options)
    for line in lines:
        assert len(line) <= options.max_steps + 1
        assert line[0] == line[-1]


def test_charge_moving_along_y_is_seeded_across_its_motion():
    configuration = ChargeConfiguration(charges=(PointCharge(Vector2(), 1.0, 0.6, Axis.Y),))
    lines = trace_magnetic_lines(configuration, 2)
    assert len(lines) == 2
    assert lines[0][0].y == pytest.approx(0.0, abs=1e-12)


def test_static_charges_have_no_magnetic_lines():
    assert trace_magnetic_lines(get_scenario("dipole").configuration, 4) == []


def test_magnetic_trace_of_static_charge_stops_immediately():
    line = trace_field_line(Vector2(1.0, 0.0), single(), kind=FieldKind.MAGNETIC)
    assert line == [Vector2(1.0, 0.0)]


def test_invalid_counts_are_rejected():
    with pytest.raises(ValueError):
        trace_magnetic_lines(single(beta=0.5), 0)
    with pytest.raises(ValueError):
        seed_points(Vector2(), 0, 0.3)
    with pytest.raises(ValueError):
        TraceOptions(step_size=0.0)
    with pytest.raises(ValueError):
        TraceOptions(max_steps=-1)


def test_seed_points_lie_on_circle():
    points = seed_points(Vector2(1.0, 2.0), 5, 0.5)
    assert len(points) == 5
    for point in points:
        assert point.distance_to(Vector2(1.0, 2.0)) == pytest.approx(0.5)


def test_static_equipotential_is_a_circle():
    contour = equipotential_contour(Vector2(), single(), K_E / 2.0)
    assert isinstance(contour, EquipotentialEllipse)
    assert contour.rx == pytest.approx(2.0)
    assert contour.ry == pytest.approx(2.0)


def test_moving_equipotential_is_contracted_along_motion():
    contour = equipotential_contour(Vector2(), single(beta=0.6), K_E / 2.0)
    # The boosted potential is gamma times larger, so the level sits further out.
    assert contour.rx == pytest.approx(2.0)
    assert contour.ry == pytest.approx(2.0 * 1.25)
    assert potential_at(Vector2(contour.rx, 0.0), single(beta=0.6)) == pytest.approx(K_E / 2.0)
    assert potential_at(Vector2(0.0, contour.ry), single(beta=0.6)) == pytest.approx(K_E / 2.0)


def test_equipotential_of_wrong_sign_or_zero_level_is_empty():
    assert equipotential_contour(Vector2(), single(), -K_E) == []
    assert equipotential_contour(Vector2(), single(), 0.0) == []
    assert equipotential_contour(Vector2(), ChargeConfiguration(), 1.0) == []


def test_dipole_equipotential_is_traced_and_closed():
    configuration = get_scenario("dipole").configuration
    center = Vector2(-1.0, 0.0)
    level = potential_at(Vector2(-1.0, 1.0), configuration, constants=NATURAL)
    options = TraceOptions(step_size=0.005, max_steps=3000)

    contour = equipotential_contour(center, configuration, level, options, constants=NATURAL)

    assert isinstance(contour, list)
    assert contour[0].distance_to(Vector2(-1.0, 1.0)) < 1e-6
    assert contour[-1] == contour[0]
    for point in contour:
        value = potential_at(point, configuration, constants=NATURAL)
        assert value == pytest.approx(level, rel=0.1)


def test_equipotential_respects_the_step_cap():
    configuration = get_scenario("dipole").configuration
    level = potential_at(Vector2(-1.0, 1.0), configuration, constants=NATURAL)
    options = TraceOptions(step_size=0.005, max_steps=50)
    contour = equipotential_contour(Vector2(-1.0, 0.0), configuration, level, options, constants=NATURAL)
    assert len(contour) == options.max_steps + 1


def test_ellipse_points_sample_closed_curve():
    ellipse = EquipotentialEllipse(Vector2(1.0, 0.0), rx=1.6, ry=2.0, level=1.0)
    points = ellipse_points(ellipse, segments=32)
    assert len(points) == 33
    assert points[0].distance_to(points[-1]) < 1e-9
    for point in points:
        dx = (point.x - 1.0) / 1.6
        dy = point.y / 2.0
        assert dx * dx + dy * dy == pytest.approx(1.0)


def test_ellipse_points_need_three_segments():
    with pytest.raises(ValueError):
        ellipse_points(EquipotentialEllipse(Vector2(), 1.0, 1.0, 1.0), segments=2)


def test_domain_bounds_are_respected():
    options = TraceOptions(bounds=Bounds(-1.0, 1.0, -1.0, 1.0), max_steps=500)
    line = trace_field_line(Vector2(0.3, 0.0), single(), options)
    assert all(options.bounds.contains(point) for point in line)
    assert line[-1].x > 0.9
