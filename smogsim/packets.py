"""Game packets exchanged between players during a match."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .vector import Vec2

_U8_MAX = 0xFF
_U32_MAX = 0xFFFFFFFF


def _check_range(name: str, value: int, maximum: int) -> None:
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} must be between 0 and {maximum}, got {value}")


@dataclass(frozen=True)
class Motor:
    """Set the acceleration of the motor particle at ``index``."""

    index: int
    acc: float

    def __post_init__(self) -> None:
        _check_range("motor index", self.index, _U32_MAX)


@dataclass(frozen=True)
class SpawnParticle:
    """Drop a ground particle at ``pos``."""

    pos: Vec2


@dataclass(frozen=True)
class Dash:
    """Push the whole tank along its current velocity."""

    coeff: float


@dataclass(frozen=True)
class Thrust:
    """Set the rotational thrust of the tank."""

    left: float
    right: float


@dataclass(frozen=True)
class Muzzle:
    """Aim the muzzle at ``pos``."""

    pos: Vec2


@dataclass(frozen=True)
class ResetMuzzle:
    """Stop aiming the muzzle."""


@dataclass(frozen=True)
class Fire:
    """Fire a projectile of the given type."""

    projectile: int

    def __post_init__(self) -> None:
        _check_range("projectile", self.projectile, _U8_MAX)


@dataclass(frozen=True)
class NoPacket:
    """A packet that does nothing."""


GamePacket = Union[Motor, SpawnParticle, Dash, Thrust, Muzzle, ResetMuzzle, Fire, NoPacket]


@dataclass(frozen=True)
class IndexedGamePacket:
    """A game packet tagged with the id of the player who sent it."""

    id: int
    contents: GamePacket

    def __post_init__(self) -> None:
        _check_range("player id", self.id, _U8_MAX)