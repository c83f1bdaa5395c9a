"""The particle solver: collisions, links and Verlet integration."""

from __future__ import annotations

import math
import random
from typing import Iterable, List, Tuple

from .grid import Grid
from .link import Connection, Constraint, ForceLink, RigidLink
from .model import Model
from .particle import IMPULSE_VELOCITY, PARTICLE_RADIUS, KindType, Particle
from .vector import Vec2, Vec4

MAX = 200000

_IMPULSE_FADE = Vec4(0.95, 0.95, 0.95, 1.0)


def _cell_coord(value: float, limit: int) -> int:
    if math.isnan(value) or value < 0.0:
        value = 0.0
    if math.isinf(value):
        return limit - 1
    return min(int(value) + 1, limit - 1)


class Solver:
    """Simulates particles inside a box constraint."""

    def __init__(
        self,
        constraint: Constraint,
        particles: Iterable[Particle] = (),
        connections: Iterable[Connection] = (),
    ) -> None:
        self.constraint = constraint
        self.particles: List[Particle] = [p.copy() for p in particles]
        self.connections: List[Connection] = [
            Connection(c.i, c.j, c.link) for c in connections
        ]
        self.cell_size = 2.0 * PARTICLE_RADIUS
        bl, tr = constraint.bounds()
        width = int((tr.x - bl.x) / self.cell_size) + 3
        height = int((tr.y - bl.y) / self.cell_size) + 3
        self._grid: Grid[int] = Grid(width, height)
        self._special: List[int] = []

    def _get_cell(self, pos: Vec2) -> Tuple[int, int]:
        bl = self.constraint.bounds()[0]
        return (
            _cell_coord((pos.x - bl.x) / self.cell_size, self._grid.width),
            _cell_coord((pos.y - bl.y) / self.cell_size, self._grid.height),
        )

    def _populate_grid(self) -> None:
        self._grid.clear()
        for index, particle in enumerate(self.particles):
            self._grid.push(self._get_cell(particle.pos), index)

    def solve(self, dt: float) -> None:
        """Advance the simulation by one step of ``dt``."""
        self._populate_grid()
        self._resolve_collisions()
        self._resolve_connections()
        self.resolve_special()
        for particle in self.particles:
            particle.apply_gravity()
            particle.update(dt)
            particle.apply_constraint(self.constraint)

    def _columns(self) -> Iterable[int]:
        width = self._grid.width
        for remainder in (1, 3):
            for start in range(1, width - 1):
                if start % 4 == remainder:
                    yield from range(start, min(start + 2, width - 1))

    def _resolve_collisions(self) -> None:
        grid = self._grid
        particles = self.particles
        for col in self._columns():
            for row in range(1, grid.height - 1):
                for i in grid[col, row]:
                    for dc in (-1, 0, 1):
                        for dr in (-1, 0, 1):
                            for j in grid[col + dc, row + dr]:
                                if i != j:
                                    Solver.resolve_collision(
                                        particles[i], particles[j], i, j
                                    )

    def _resolve_connections(self) -> None:
        for connection in self.connections:
            i, j = sorted((connection.i, connection.j))
            if i == j:
                raise ValueError(f"connection links particle {i} to itself")
            Solver.resolve_connection(self.particles[i], self.particles[j], connection)

    @staticmethod
    def resolve_collision(p1: Particle, p2: Particle, i: int, j: int) -> None:
        """Push two overlapping particles apart and apply their interactions."""
        if not p1.kind.can_collide_with(p2.kind):
            return
        v = p1.pos - p2.pos
        length = v.length()
        min_length = p1.radius + p2.radius
        if 0.0001 < length < min_length:
            overlap = min_length - length
            c1 = p2.mass / (p1.mass + p2.mass)
            c2 = 1.0 - c1
            v = v / length * overlap
            p1.set_position(p1.pos + v * c1, True)
            p2.set_position(p2.pos - v * c2, True)
            if not p1.kind.is_none():
                Solver.resolve_interaction(p1, p2, i, j)
            if not p2.kind.is_none():
                Solver.resolve_interaction(p2, p1, j, i)

    @staticmethod
    def resolve_interaction(p1: Particle, p2: Particle, i: int, j: int) -> None:
        """Apply the effect of ``p1``'s kind on the particle ``p2`` it touched."""
        kind = p1.kind
        if kind.variant is KindType.MOTOR:
            v = (p2.pos - p1.pos).normalize_or_zero()
            acceleration = v.perp() * kind.value
            p2.accelerate(acceleration)
            p1.accelerate(-acceleration / 2.0)
        elif kind.variant is KindType.IMPULSE:
            if kind.value < 0.0:
                return
            v = (p2.pos - p1.pos).normalize_or_zero()
            p2.set_velocity(v * IMPULSE_VELOCITY)
            kind.value -= IMPULSE_VELOCITY
            p1.color = p1.color * _IMPULSE_FADE
        elif (
            kind.variant is KindType.STICKY
            and kind.value > 0
            and kind.connection is None
        ):
            kind.value -= 1
            kind.connection = j

    @staticmethod
    def resolve_connection(p1: Particle, p2: Particle, connection: Connection) -> None:
        """Apply a connection's link to its two particles, wearing it down."""
        link = connection.link
        if isinstance(link, ForceLink):
            v = (p2.pos - p1.pos).normalize_or_zero()
            p1.accelerate(v * link.force)
            p2.accelerate(-v * link.force)
            return
        if link.durability < 0.0:
            return
        v = p1.pos - p2.pos
        overlap = (link.length - v.length()) / 2.0
        v = v.normalize_or_zero() * overlap
        p1.set_position(p1.pos + v, True)
        p2.set_position(p2.pos - v, True)
        max_length = link.elasticity / 100.0
        stretch = 2.0 * abs(overlap)
        if stretch > max_length:
            connection.link = link.with_durability(
                link.durability - (stretch - max_length)
            )

    def resolve_special(self) -> None:
        """Turn pending sticky contacts into rigid connections."""
        for index in self._special:
            kind = self.particles[index].kind
            if kind.variant is KindType.STICKY and kind.connection is not None:
                self.connections.append(
                    Connection(
                        index,
                        kind.connection,
                        RigidLink(length=1.0, durability=1.0, elasticity=5.0),
                    )
                )
                kind.connection = None

    def size(self) -> int:
        return len(self.particles)

    def add_particle(self, particle: Particle) -> None:
        index = len(self.particles)
        self.particles.append(particle.copy())
        if particle.is_special():
            self._special.append(index)

    def add_rib(
        self, i: int, j: int, length: float, durability: float, elasticity: float
    ) -> None:
        self.connections.append(Connection(i, j, RigidLink(length, durability, elasticity)))

    def add_spring(self, i: int, j: int, force: float) -> None:
        self.connections.append(Connection(i, j, ForceLink(force)))

    def add_model(self, model: Model, pos: Vec2) -> None:
        """Insert a model so that its center lands at ``pos``."""
        offset = pos - model.center
        count = len(self.particles)
        self.particles.extend(p.with_position(p.pos + offset) for p in model.particles)
        self.connections.extend(
            Connection(c.i + count, c.j + count, c.link) for c in model.connections
        )
        self._special.extend(
            index + count
            for index, particle in enumerate(model.particles)
            if particle.is_special()
        )


def rnd_in_bounds(bounds: Tuple[Vec2, Vec2], margin: float) -> Vec2:
    """A random point inside ``bounds`` at least ``margin`` from the edges."""
    bl, tr = bounds
    lo_x, hi_x = bl.x + margin, tr.x - margin
    lo_y, hi_y = bl.y + margin, tr.y - margin
    if lo_x >= hi_x or lo_y >= hi_y:
        raise ValueError("bounds are empty after applying the margin")
    return Vec2(random.uniform(lo_x, hi_x), random.uniform(lo_y, hi_y))