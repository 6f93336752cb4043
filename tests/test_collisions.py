import pytest

from planetsim.collisions import find_merges, merge_bodies, resolve_collision
from planetsim.data_models import Body
from planetsim.params import SimulationParameters


def test_distant_bodies_do_not_collide():
    params = SimulationParameters(collide=True, merging=False)
    a = Body.with_radius((100.0, 100.0), (1.0, 0.0), 5.0)
    b = Body.with_radius((200.0, 100.0), (0.0, 1.0), 5.0)

    assert resolve_collision(a, b, params) is None
    assert find_merges([a, b], params) == []


def test_overlap_without_merging_passes_through():
    params = SimulationParameters(collide=True, merging=False)
    a = Body.with_radius((100.0, 100.0), (1.0, 0.0), 5.0)
    b = Body.with_radius((103.0, 100.0), (0.0, 1.0), 5.0)

    assert resolve_collision(a, b, params) is None
    assert a.velocity == (1.0, 0.0)
    assert b.velocity == (0.0, 1.0)


def test_overlap_merges_into_weighted_body():
    params = SimulationParameters(collide=True, merging=True, body_radius=7.0)
    a = Body(position=(10.0, 10.0), velocity=(1.0, 0.0), radius=5.0, mass=100.0, color=(1, 2, 3))
    b = Body(position=(13.0, 10.0), velocity=(0.0, 2.0), radius=5.0, mass=50.0, color=(9, 9, 9))

    merged = resolve_collision(a, b, params)

    assert merged is not None
    assert merged.mass == a.mass + b.mass
    assert merged.radius == 7.0
    assert merged.color == (1, 2, 3)
    assert merged.position[0] == pytest.approx(10.0 * 100 / 150 + 13.0 * 50 / 150)
    assert merged.position[1] == pytest.approx(10.0)
    assert merged.velocity[0] == pytest.approx(100.0 / 150)
    assert merged.velocity[1] == pytest.approx(100.0 / 150)
    assert not merged.selected and not merged.hovered


def test_collide_flag_off_disables_merging():
    params = SimulationParameters(collide=False, merging=True)
    a = Body.with_radius((0.0, 0.0), (0.0, 0.0), 5.0)
    b = Body.with_radius((1.0, 0.0), (0.0, 0.0), 5.0)
    assert resolve_collision(a, b, params) is None


def test_touching_edges_do_not_merge():
    params = SimulationParameters(merging=True)
    a = Body.with_radius((0.0, 0.0), (0.0, 0.0), 5.0)
    b = Body.with_radius((10.0, 0.0), (0.0, 0.0), 5.0)
    assert resolve_collision(a, b, params) is None


def test_merge_conserves_mass_and_momentum():
    a = Body(position=(0.0, 0.0), velocity=(3.0, -1.0), radius=4.0, mass=20.0)
    b = Body(position=(2.0, 2.0), velocity=(-1.0, 5.0), radius=4.0, mass=60.0)

    merged = merge_bodies(a, b, radius=4.0)

    assert merged.mass == 80.0
    assert merged.mass * merged.velocity[0] == pytest.approx(20.0 * 3.0 + 60.0 * -1.0)
    assert merged.mass * merged.velocity[1] == pytest.approx(20.0 * -1.0 + 60.0 * 5.0)


def test_each_body_merges_at_most_once():
    params = SimulationParameters(merging=True)
    bodies = [Body.with_radius((x, 0.0), (0.0, 0.0), 5.0) for x in (0.0, 1.0, 2.0)]

    events = find_merges(bodies, params)

    assert len(events) == 1
    assert (events[0].first, events[0].second) == (0, 1)


def test_disjoint_pairs_merge_in_same_tick():
    params = SimulationParameters(merging=True)
    bodies = [Body.with_radius(p, (0.0, 0.0), 5.0) for p in ((0.0, 0.0), (300.0, 0.0), (1.0, 0.0), (301.0, 0.0))]

    events = find_merges(bodies, params)

    assert [(e.first, e.second) for e in events] == [(0, 2), (1, 3)]
