import pytest

from smogsim.link import Connection, Constraint, ForceLink, RigidLink
from smogsim.model import Model
from smogsim.particle import (
    GROUND,
    IMPULSE_VELOCITY,
    METAL,
    MOTOR,
    PROJECTILE_IMPULSE,
    PROJECTILE_STICKY,
    SPIKE,
    Kind,
)
from smogsim.solver import Solver, rnd_in_bounds
from smogsim.vector import Vec2

BOX = Constraint(Vec2(0.0, 0.0), Vec2(20.0, 20.0))


def test_add_particle_copies_and_counts():
    solver = Solver(BOX)
    solver.add_particle(GROUND)
    solver.add_particle(GROUND.with_position(Vec2(3.0, 3.0)))
    assert solver.size() == 2
    solver.particles[0].kind.value = 7.0
    assert GROUND.kind.value != 7.0 or GROUND.kind.value == solver.particles[1].kind.value
    assert solver.particles[1].pos == Vec2(3.0, 3.0)


def test_constructor_does_not_share_particles():
    source = [GROUND.with_position(Vec2(1.0, 1.0))]
    solver = Solver(BOX, source)
    solver.particles[0].pos = Vec2(5.0, 5.0)
    assert source[0].pos == Vec2(1.0, 1.0)


def test_add_rib_and_spring():
    solver = Solver(BOX)
    solver.add_rib(0, 1, 2.0, 3.0, 4.0)
    solver.add_spring(1, 2, 0.5)
    assert solver.connections[0].link == RigidLink(2.0, 3.0, 4.0)
    assert solver.connections[1].link == ForceLink(0.5)
    assert (solver.connections[1].i, solver.connections[1].j) == (1, 2)


def test_add_model_offsets_particles_and_connections():
    solver = Solver(BOX)
    solver.add_particle(GROUND)
    model = Model(
        Vec2(1.0, 1.0),
        [METAL.with_position(Vec2(1.0, 1.0)), METAL.with_position(Vec2(2.0, 1.0))],
        [Connection(0, 1, RigidLink(1.0, 1.0, 10.0))],
    )
    solver.add_model(model, Vec2(5.0, 5.0))
    assert solver.size() == 3
    assert solver.particles[1].pos == Vec2(5.0, 5.0)
    assert solver.particles[2].pos == Vec2(6.0, 5.0)
    assert (solver.connections[0].i, solver.connections[0].j) == (1, 2)


def test_collision_separates_particles():
    p1 = GROUND.with_position(Vec2(0.0, 0.0))
    p2 = GROUND.with_position(Vec2(0.3, 0.0))
    Solver.resolve_collision(p1, p2, 0, 1)
    assert p1.pos.distance(p2.pos) == pytest.approx(p1.radius + p2.radius)


def test_motor_and_spike_do_not_collide():
    p1 = MOTOR.with_position(Vec2(0.0, 0.0))
    p2 = SPIKE.with_position(Vec2(0.1, 0.0))
    Solver.resolve_collision(p1, p2, 0, 1)
    assert p1.pos == Vec2(0.0, 0.0)
    assert p2.pos == Vec2(0.1, 0.0)


def test_motor_interaction_accelerates_both():
    p1 = MOTOR.with_kind(Kind.motor(4.0)).with_position(Vec2(0.0, 0.0))
    p2 = GROUND.with_position(Vec2(0.5, 0.0))
    Solver.resolve_interaction(p1, p2, 0, 1)
    assert p2.acc.length() == pytest.approx(4.0)
    assert p1.acc == -p2.acc / 2.0


def test_sticky_records_contact():
    sticky = PROJECTILE_STICKY.with_position(Vec2(0.0, 0.0))
    ground = GROUND.with_position(Vec2(0.5, 0.0))
    Solver.resolve_collision(sticky, ground, 0, 1)
    assert sticky.kind.connection == 1
    assert sticky.kind.value == PROJECTILE_STICKY.kind.value - 1
    assert PROJECTILE_STICKY.kind.connection is None


def test_impulse_pushes_other_particle():
    imp = PROJECTILE_IMPULSE.with_position(Vec2(0.0, 0.0))
    other = GROUND.with_position(Vec2(0.5, 0.0))
    Solver.resolve_interaction(imp, other, 0, 1)
    assert other.velocity().length() == pytest.approx(IMPULSE_VELOCITY)
    assert imp.kind.value == pytest.approx(PROJECTILE_IMPULSE.kind.value - IMPULSE_VELOCITY)
    assert imp.color.x < PROJECTILE_IMPULSE.color.x or imp.color.x == 0.0
    assert imp.color.w == PROJECTILE_IMPULSE.color.w


def test_rigid_connection_restores_length_and_wears():
    p1 = GROUND.with_position(Vec2(0.0, 0.0))
    p2 = GROUND.with_position(Vec2(2.0, 0.0))
    conn = Connection(0, 1, RigidLink(1.0, 1.0, 10.0))
    Solver.resolve_connection(p1, p2, conn)
    assert p1.pos.distance(p2.pos) == pytest.approx(1.0)
    assert conn.link.durability < 1.0
    assert conn.link.length == 1.0


def test_broken_connection_does_nothing():
    p1 = GROUND.with_position(Vec2(0.0, 0.0))
    p2 = GROUND.with_position(Vec2(2.0, 0.0))
    conn = Connection(0, 1, RigidLink(1.0, -1.0, 10.0))
    Solver.resolve_connection(p1, p2, conn)
    assert p1.pos.distance(p2.pos) == pytest.approx(2.0)


def test_force_connection_pulls_together():
    p1 = GROUND.with_position(Vec2(0.0, 0.0))
    p2 = GROUND.with_position(Vec2(0.0, 3.0))
    Solver.resolve_connection(p1, p2, Connection(0, 1, ForceLink(2.0)))
    assert p1.acc == Vec2(0.0, 2.0)
    assert p2.acc == -p1.acc


def test_resolve_special_creates_bond():
    solver = Solver(BOX)
    solver.add_particle(PROJECTILE_STICKY.with_position(Vec2(5.0, 5.0)))
    solver.add_particle(GROUND.with_position(Vec2(5.5, 5.0)))
    solver.particles[0].kind.connection = 1
    solver.resolve_special()
    assert len(solver.connections) == 1
    bond = solver.connections[0]
    assert (bond.i, bond.j) == (0, 1)
    assert bond.link == RigidLink(1.0, 1.0, 5.0)
    assert solver.particles[0].kind.connection is None


def test_solve_applies_gravity():
    solver = Solver(BOX, [GROUND.with_position(Vec2(10.0, 10.0))])
    solver.solve(1.0 / 480.0)
    assert solver.particles[0].pos.y < 10.0
    assert solver.particles[0].pos.x == pytest.approx(10.0)


def test_solve_keeps_particles_inside():
    solver = Solver(BOX, [GROUND.with_position(Vec2(-5.0, 10.0))])
    solver.solve(1.0 / 480.0)
    p = solver.particles[0]
    assert BOX.bottom_left.x + p.radius <= p.pos.x <= BOX.top_right.x - p.radius


def test_solve_resolves_collisions():
    solver = Solver(
        BOX,
        [GROUND.with_position(Vec2(10.0, 10.0)), GROUND.with_position(Vec2(10.2, 10.0))],
    )
    solver.solve(1.0 / 480.0)
    assert solver.particles[0].pos.distance(solver.particles[1].pos) > 0.2


def test_self_connection_raises():
    solver = Solver(BOX, [GROUND.with_position(Vec2(5.0, 5.0))])
    solver.add_rib(0, 0, 1.0, 1.0, 1.0)
    with pytest.raises(ValueError):
        solver.solve(0.01)


def test_rnd_in_bounds_stays_inside_margin():
    for _ in range(50):
        point = rnd_in_bounds(BOX.bounds(), 2.0)
        assert 2.0 <= point.x <= 18.0
        assert 2.0 <= point.y <= 18.0


def test_rnd_in_bounds_empty_raises():
    with pytest.raises(ValueError):
        rnd_in_bounds(BOX.bounds(), 10.0)