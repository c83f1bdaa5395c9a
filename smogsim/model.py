"""Particle models and helpers for building them from layouts and chains."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .link import Connection, Link
from .particle import Particle
from .vector import Vec2

SHIFT_X = Vec2(1.0, 0.0)
SHIFT_Y = Vec2(0.5, 0.86602540378443864676372317075294)

_DIRECTIONS: Dict[str, Vec2] = {
    "r": SHIFT_X,
    "ur": SHIFT_Y,
    "ul": -SHIFT_X + SHIFT_Y,
    "l": -SHIFT_X,
    "dl": -SHIFT_Y,
    "dr": SHIFT_X - SHIFT_Y,
}

IndexRef = Union[int, str]


@dataclass
class Model:
    """A group of particles and connections positioned around ``center``."""

    center: Vec2 = Vec2.ZERO
    particles: List[Particle] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)

    def __add__(self, other: "Model") -> "Model":
        if not isinstance(other, Model):
            return NotImplemented
        offset = self.center - other.center
        count = len(self.particles)
        particles = [p.copy() for p in self.particles]
        particles.extend(p.with_position(p.pos + offset) for p in other.particles)
        connections = [Connection(c.i, c.j, c.link) for c in self.connections]
        connections.extend(
            Connection(c.i + count, c.j + count, c.link) for c in other.connections
        )
        return Model(self.center, particles, connections)


@dataclass(frozen=True)
class PointSpec:
    """A particle position in a layer, optionally labelled with ``name``."""

    x: float
    y: float
    name: Optional[str] = None


@dataclass(frozen=True)
class LinkSpec:
    """Connections from every source to every target.

    Integer indices are relative to the layer's first particle unless the
    matching ``global_*`` flag is set; string entries name labelled
    particles and always refer to their absolute index.  ``name`` labels
    the index of the last connection created.
    """

    sources: Sequence[IndexRef]
    targets: Sequence[IndexRef]
    global_sources: bool = False
    global_targets: bool = False
    name: Optional[str] = None


@dataclass(frozen=True)
class Layer:
    """Particles of one type placed at given points, plus links between them."""

    particle: Optional[Particle] = None
    link: Optional[Link] = None
    points: Sequence[PointSpec] = ()
    links: Sequence[LinkSpec] = ()
    offset: Vec2 = Vec2.ZERO
    hexagonal: bool = False


def _resolve(
    refs: Iterable[IndexRef], base: int, labels: Dict[str, int]
) -> List[int]:
    indices = []
    for ref in refs:
        if isinstance(ref, str):
            if ref not in labels:
                raise ValueError(f"unknown label {ref!r}")
            indices.append(labels[ref])
        else:
            indices.append(ref + base)
    return indices


def build_model(layers: Iterable[Layer]) -> Tuple[Model, Dict[str, int]]:
    """Build a model from layers; returns it with the indices of named items."""
    particles: List[Particle] = []
    connections: List[Connection] = []
    labels: Dict[str, int] = {}

    for layer in layers:
        first = len(particles)
        if layer.points and layer.particle is None:
            raise ValueError("a layer with points needs a particle")
        for point in layer.points:
            if layer.hexagonal:
                pos = SHIFT_X * point.x + SHIFT_Y * point.y + layer.offset
            else:
                pos = Vec2(float(point.x), float(point.y)) + layer.offset
            if point.name is not None:
                labels[point.name] = len(particles)
            particles.append(layer.particle.with_position(pos))

        if layer.links and layer.link is None:
            raise ValueError("a layer with links needs a link")
        for spec in layer.links:
            sources = _resolve(spec.sources, 0 if spec.global_sources else first, labels)
            targets = _resolve(spec.targets, 0 if spec.global_targets else first, labels)
            for i in sources:
                for j in targets:
                    length = particles[i].pos.distance(particles[j].pos)
                    if spec.name is not None:
                        labels[spec.name] = len(connections)
                    connections.append(Connection(i, j, layer.link.with_length(length)))

    return Model(particles=particles, connections=connections), labels


def chain_model(
    particle: Particle,
    link: Link,
    start: Vec2,
    steps: Sequence[Tuple[str, int]],
    step: int = 1,
    adjacent: Optional[Particle] = None,
    adjacent_link: Optional[Link] = None,
) -> Model:
    """Build a closed chain of particles, such as a tank tread.

    ``steps`` lists hexagonal directions (r, ur, ul, l, dl, dr) with the
    number of particles to lay in each.  Every ``step``-th chain particle
    gets an ``adjacent`` particle attached on its outer side.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    side_link = link if adjacent_link is None else adjacent_link

    particles: List[Particle] = []
    connections: List[Connection] = []
    total = 0
    last_ind: Optional[int] = None
    last_pos = start

    for name, count in steps:
        if name not in _DIRECTIONS:
            raise ValueError(f"unknown direction {name!r}")
        direction = _DIRECTIONS[name]
        perp = direction.perp()
        for _ in range(count):
            ind = len(particles)
            particles.append(particle.with_position(last_pos))
            if adjacent is not None and total % step == 0:
                offset = particle.radius + adjacent.radius
                particles.append(adjacent.with_position(last_pos - perp * offset))
                connections.append(Connection(ind, ind + 1, side_link.with_length(offset)))
            last_pos = last_pos + direction
            if last_ind is not None:
                connections.append(Connection(last_ind, ind, link.with_length(1.0)))
            last_ind = ind
            total += 1

    if last_ind is not None and last_ind > 0:
        connections.append(Connection(last_ind, 0, link.with_length(1.0)))

    return Model(particles=particles, connections=connections)