"""Links between particles, connections and the simulation boundary."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from .vector import Vec2


@dataclass(frozen=True)
class ForceLink:
    """A spring pulling two particles together with a constant force."""

    force: float

    @property
    def durability(self) -> float:
        return 1.0

    @property
    def elasticity(self) -> float:
        return 100.0

    def _unchanged(self) -> "ForceLink":
        # A spring has no length, durability or elasticity of its own:
        # every derived link keeps only the force.
        return ForceLink(force=self.force)

    def with_length(self, length: float) -> "ForceLink":
        """Return an equal spring; a spring's length is not configurable."""
        return self._unchanged()

    def with_durability(self, durability: float) -> "ForceLink":
        """Return an equal spring; a spring cannot break."""
        return self._unchanged()

    def with_elasticity(self, elasticity: float) -> "ForceLink":
        """Return an equal spring; a spring's elasticity is fixed."""
        return self._unchanged()


@dataclass(frozen=True)
class RigidLink:
    """A rib keeping two particles at a fixed distance until it breaks."""

    length: float
    durability: float
    elasticity: float

    def with_length(self, length: float) -> "RigidLink":
        return dataclasses.replace(self, length=length)

    def with_durability(self, durability: float) -> "RigidLink":
        return dataclasses.replace(self, durability=durability)

    def with_elasticity(self, elasticity: float) -> "RigidLink":
        return dataclasses.replace(self, elasticity=elasticity)


Link = Union[ForceLink, RigidLink]


@dataclass
class Connection:
    """A link between the particles at indices ``i`` and ``j``."""

    i: int
    j: int
    link: Link

    def __iter__(self) -> Iterator:
        yield self.i
        yield self.j
        yield self.link


@dataclass(frozen=True)
class Constraint:
    """A rectangular box given by its bottom-left and top-right corners."""

    bottom_left: Vec2
    top_right: Vec2

    def bounds(self) -> Tuple[Vec2, Vec2]:
        return self.bottom_left, self.top_right