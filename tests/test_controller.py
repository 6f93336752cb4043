import math

import pytest

from planetsim import commands as cmd
from planetsim.constants import MIN_BODY_RADIUS
from planetsim.controller import SimulationController, SimulationState
from planetsim.data_models import Body


def two_body_sim(**params):
    bodies = [
        Body.with_radius((100.0, 100.0), (0.0, 0.0), 5.0, (10, 10, 10)),
        Body.with_radius((300.0, 300.0), (0.0, 0.0), 5.0, (20, 20, 20)),
    ]
    sim = SimulationController(bodies=bodies)
    for name, value in params.items():
        sim.set_parameter(name, value)
    return sim


def test_state_machine_transitions():
    sim = SimulationController(seed=1)
    assert sim.state == SimulationState.IDLE
    assert not sim.pause()

    assert sim.start()
    assert sim.state == SimulationState.RUNNING
    assert sim.pause()
    assert sim.state == SimulationState.PAUSED
    assert sim.start()
    assert sim.stop()
    assert sim.state == SimulationState.STOPPED

    assert not sim.start()
    assert sim.state == SimulationState.STOPPED

    sim.reset()
    assert sim.state == SimulationState.IDLE


def test_toggle_running():
    sim = SimulationController(seed=1)
    sim.toggle_running()
    assert sim.running
    sim.toggle_running()
    assert sim.state == SimulationState.PAUSED


def test_advance_only_ticks_while_running():
    sim = SimulationController(seed=3)
    before = list(sim.bodies)

    assert not sim.advance()
    assert sim.bodies == before
    assert sim.tick_count == 0

    sim.submit(cmd.Start())
    assert sim.advance()
    assert sim.tick_count == 1

    sim.submit(cmd.Pause())
    assert not sim.advance()
    assert sim.tick_count == 1


def test_zero_ticks_change_nothing():
    sim = SimulationController(seed=5)
    before = list(sim.bodies)
    sim.tick(0)
    assert sim.bodies == before


def test_radius_change_updates_every_mass():
    sim = two_body_sim(merging=True)
    sim.bodies.append(Body(position=(101.0, 100.0), velocity=(0.0, 0.0), radius=5.0, mass=1.0))
    sim.tick()

    sim.set_parameter("body_radius", 12.0)

    assert sim.bodies
    for b in sim.bodies:
        assert b.radius == 12.0
        assert b.mass == pytest.approx(math.pi * 12.0 ** 3)


def test_negative_radius_is_clamped():
    sim = two_body_sim()
    assert sim.set_parameter("body_radius", -3) == MIN_BODY_RADIUS
    assert all(b.radius == MIN_BODY_RADIUS for b in sim.bodies)


def test_body_count_rebuilds_collection():
    sim = SimulationController(seed=2)
    sim.set_parameter("body_count", 7)
    assert len(sim.bodies) == 7
    assert sim.set_parameter("body_count", -4) == 0
    assert sim.bodies == []


def test_reset_is_reproducible_with_seed():
    a = SimulationController(seed=42)
    b = SimulationController(seed=42)
    assert a.bodies == b.bodies
    a.reset(4)
    b.reset(4)
    assert a.bodies == b.bodies


def test_unknown_parameter_raises():
    sim = SimulationController(seed=1)
    with pytest.raises(KeyError):
        sim.set_parameter("warp_drive", 1)
    with pytest.raises(KeyError):
        sim.set_parameter("gravitational_constant", 1.0)


def test_bad_commands_are_dropped():
    sim = SimulationController(seed=1)
    sim.submit(cmd.SetParameter("warp_drive", 1))
    sim.submit(cmd.SetParameter("spring_constant", "abc"))
    sim.submit(cmd.SetParameter("spring_constant", 0.5))

    assert sim.apply_pending() == 1
    assert sim.params.spring_constant == 0.5


def test_parameter_changes_apply_on_next_tick():
    sim = two_body_sim(gravity=False, spring_constant=0.0, damping=0.0, speed_factor=1.0)
    sim.bodies[0].velocity = (1.0, 0.0)
    sim.submit(cmd.Start())
    sim.submit(cmd.SetParameter("speed_factor", 3.0))

    sim.advance()

    assert sim.bodies[0].position == (103.0, 100.0)


def test_pointer_selects_nearest_and_drags():
    sim = two_body_sim()

    assert sim.pointer_down((102.0, 100.0)) == 0
    assert sim.bodies[0].selected
    assert sim.dragging

    sim.pointer_move((150.0, 160.0))
    sim.tick()
    assert sim.bodies[0].position == (150.0, 160.0)
    assert sim.bodies[0].selected

    sim.pointer_up()
    assert not sim.dragging
    sim.tick()
    assert sim.bodies[0].position != (150.0, 160.0)


def test_pointer_down_on_empty_space_clears_selection():
    sim = two_body_sim()
    sim.pointer_down((100.0, 100.0))
    assert sim.pointer_down((500.0, 500.0)) is None
    assert not any(b.selected for b in sim.bodies)
    assert not sim.dragging


def test_hover_follows_pointer():
    sim = two_body_sim()
    sim.pointer_move((300.0, 302.0))
    assert [b.hovered for b in sim.bodies] == [False, True]
    sim.pointer_move((0.0, 0.0))
    assert [b.hovered for b in sim.bodies] == [False, False]


def test_hit_test_uses_radius():
    sim = two_body_sim()
    assert sim.body_at((105.0, 100.0)) == 0
    assert sim.body_at((105.1, 100.0)) is None


def test_snapshot_contents():
    sim = SimulationController(seed=9)
    sim.set_parameter("line_opacity", 0.3)

    frame = sim.snapshot()

    n = len(sim.bodies)
    assert len(frame.bodies) == n
    assert len(frame.connections) == n * (n - 1) // 2
    assert all(c.opacity == 0.3 for c in frame.connections)
    assert frame.state == "idle"
    assert frame.bodies[0].position == sim.bodies[0].position


def test_infinite_count_is_dropped_and_queue_continues():
    sim = SimulationController(seed=1)
    before = list(sim.bodies)
    sim.submit(cmd.SetParameter("body_count", float("inf")))
    sim.submit(cmd.SetParameter("spring_constant", 0.5))

    assert sim.apply_pending() == 1
    assert sim.params.spring_constant == 0.5
    assert sim.bodies == before
    with pytest.raises(ValueError):
        sim.set_parameter("body_count", "1e400")


def test_last_step_is_not_changed_by_pointer_input():
    sim = two_body_sim()
    sim.tick()
    recorded = sim.last_step.bodies[0].position

    sim.pointer_down(sim.bodies[0].position)
    sim.pointer_move((40.0, 50.0))

    assert sim.bodies[0].position == (40.0, 50.0)
    assert sim.last_step.bodies[0].position == recorded
    assert not sim.last_step.bodies[0].selected


def test_controller_copies_initial_bodies():
    body = Body.with_radius((100.0, 100.0), (0.0, 0.0), 5.0)
    sim = SimulationController(bodies=[body])

    sim.pointer_down((100.0, 100.0))
    sim.pointer_move((20.0, 30.0))

    assert body.position == (100.0, 100.0)
    assert not body.selected


def test_queued_run_commands():
    sim = SimulationController(seed=4)

    sim.submit(cmd.TogglePlay())
    sim.apply_pending()
    assert sim.state == SimulationState.RUNNING

    sim.submit(cmd.TogglePlay())
    sim.apply_pending()
    assert sim.state == SimulationState.PAUSED

    sim.submit(cmd.Stop())
    assert not sim.advance()
    assert sim.state == SimulationState.STOPPED

    sim.submit(cmd.Reset(3))
    sim.apply_pending()
    assert sim.state == SimulationState.IDLE
    assert len(sim.bodies) == 3
    assert sim.params.body_count == 3
