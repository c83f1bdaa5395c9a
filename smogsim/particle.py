"""Particles, their kinds and the preset particle types."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional

from .vector import Vec2, Vec4

if TYPE_CHECKING:
    from .link import Constraint

PARTICLE_RADIUS = 0.5
IMPULSE_VELOCITY = 0.66


class KindType(Enum):
    NONE = "none"
    SPIKE = "spike"
    MOTOR = "motor"
    IMPULSE = "impulse"
    STICKY = "sticky"


@dataclass
class Kind:
    """Behaviour of a particle.

    ``value`` holds the motor acceleration, the remaining impulse or the
    sticky particle's remaining number of bonds; ``connection`` is the index
    of a particle a sticky particle has touched and not yet bonded with.
    """

    variant: KindType = KindType.NONE
    value: float = 0.0
    connection: Optional[int] = None

    @staticmethod
    def none() -> "Kind":
        return Kind(KindType.NONE)

    @staticmethod
    def spike() -> "Kind":
        return Kind(KindType.SPIKE)

    @staticmethod
    def motor(acc: float) -> "Kind":
        return Kind(KindType.MOTOR, acc)

    @staticmethod
    def impulse(impulse: float) -> "Kind":
        return Kind(KindType.IMPULSE, impulse)

    @staticmethod
    def sticky(state: int, connection: Optional[int] = None) -> "Kind":
        return Kind(KindType.STICKY, state, connection)

    def copy(self) -> "Kind":
        return dataclasses.replace(self)

    def is_none(self) -> bool:
        return self.variant is KindType.NONE

    def is_motor(self) -> bool:
        return self.variant is KindType.MOTOR

    def is_special(self) -> bool:
        return self.variant is KindType.STICKY

    def can_collide_with(self, other: "Kind") -> bool:
        if self.variant is KindType.MOTOR:
            return other.variant is not KindType.SPIKE
        if self.variant is KindType.SPIKE:
            return not other.is_motor()
        return True


@dataclass
class Particle:
    """A point mass integrated with Verlet steps."""

    radius: float = PARTICLE_RADIUS
    mass: float = 1.0
    pos: Vec2 = Vec2.ZERO
    pos_old: Optional[Vec2] = None
    acc: Vec2 = Vec2.ZERO
    texture: int = 0
    kind: Kind = field(default_factory=Kind)
    color: Vec4 = Vec4.ONE

    GRAVITY: ClassVar[Vec2] = Vec2(0.0, -70.0)
    SLOWDOWN: ClassVar[float] = 100.0
    MAX_SPEED: ClassVar[float] = 3.0

    def __post_init__(self) -> None:
        if self.pos_old is None:
            self.pos_old = self.pos

    def copy(self) -> "Particle":
        """An independent copy of this particle."""
        return dataclasses.replace(self, kind=self.kind.copy())

    def _with(self, **changes) -> "Particle":
        changes.setdefault("kind", self.kind.copy())
        return dataclasses.replace(self, **changes)

    def with_position(self, pos: Vec2) -> "Particle":
        return self._with(pos=pos, pos_old=pos)

    def with_kind(self, kind: Kind) -> "Particle":
        return self._with(kind=kind.copy())

    def with_color(self, color: Vec4) -> "Particle":
        return self._with(color=color)

    def with_velocity(self, velocity: Vec2) -> "Particle":
        return self._with(pos_old=self.pos - velocity)

    def update(self, dt: float) -> None:
        vel = (self.pos - self.pos_old).clamp_length(0.0, self.MAX_SPEED)
        new_pos = self.pos + vel + (self.acc - vel * self.SLOWDOWN) * (dt * dt)
        self.pos_old = self.pos
        self.pos = new_pos
        self.acc = Vec2.ZERO

    def apply_gravity(self) -> None:
        self.accelerate(self.GRAVITY)

    def accelerate(self, acceleration: Vec2) -> None:
        self.acc = self.acc + acceleration

    def set_position(self, pos: Vec2, keep_acc: bool) -> None:
        self.pos = pos
        if not keep_acc:
            self.acc = Vec2.ZERO

    def velocity(self) -> Vec2:
        return self.pos - self.pos_old

    def set_velocity(self, velocity: Vec2) -> None:
        self.pos_old = self.pos - velocity

    def add_velocity(self, velocity: Vec2) -> None:
        self.set_velocity(self.velocity() + velocity)

    def apply_constraint(self, constraint: "Constraint") -> None:
        """Keep the particle inside the constraint's box."""
        bl, tr = constraint.bounds()
        new_x = min(max(self.pos.x, bl.x + self.radius), tr.x - self.radius)
        new_y = min(max(self.pos.y, bl.y + self.radius), tr.y - self.radius)
        if (new_x, new_y) != (self.pos.x, self.pos.y):
            self.set_position(Vec2(new_x, new_y), False)

    def is_motor(self) -> bool:
        return self.kind.is_motor()

    def is_special(self) -> bool:
        return self.kind.is_special()


GROUND = Particle(mass=1.0, texture=1)
METAL = Particle(mass=3.0, texture=2)
MOTOR = Particle(mass=3.0, texture=3, kind=Kind.motor(0.0))
SPIKE = Particle(
    mass=0.2, texture=4, radius=PARTICLE_RADIUS / 2.0, kind=Kind.spike()
)
PROJECTILE_HEAVY = Particle(mass=10.0, texture=4, color=Vec4(1.0, 0.0, 0.0, 1.0))
PROJECTILE_IMPULSE = Particle(
    mass=4.0, texture=0, color=Vec4(0.0, 1.0, 0.0, 1.0), kind=Kind.impulse(20.0)
)
PROJECTILE_STICKY = Particle(
    mass=0.1, texture=0, color=Vec4(0.5, 0.5, 0.5, 1.0), kind=Kind.sticky(6)
)