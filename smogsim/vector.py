"""Small immutable 2D and 4D vectors used by the simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Iterator, Union

Scalar = Union[int, float]


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float
    y: float

    ZERO: ClassVar["Vec2"]

    @classmethod
    def from_angle(cls, angle: float) -> "Vec2":
        """Unit vector pointing at ``angle`` radians from the x axis."""
        return cls(math.cos(angle), math.sin(angle))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: "Vec2") -> "Vec2":
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def __mul__(self, other: Union["Vec2", Scalar]) -> "Vec2":
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> "Vec2":
        if isinstance(other, (int, float)):
            return Vec2(self.x * other, self.y * other)
        return NotImplemented

    def __truediv__(self, other: Union["Vec2", Scalar]) -> "Vec2":
        if isinstance(other, Vec2):
            return Vec2(self.x / other.x, self.y / other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x / other, self.y / other)
        return NotImplemented

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance(self, other: "Vec2") -> float:
        return (self - other).length()

    def normalize(self) -> "Vec2":
        """Unit vector in the same direction; NaN components for a zero vector."""
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            return Vec2(math.nan, math.nan)
        return Vec2(self.x / length, self.y / length)

    def normalize_or_zero(self) -> "Vec2":
        """Unit vector in the same direction, or zero if that is undefined."""
        length = self.length()
        if length > 0.0 and math.isfinite(length):
            return Vec2(self.x / length, self.y / length)
        return Vec2.ZERO

    def perp(self) -> "Vec2":
        """The vector rotated by 90 degrees counter-clockwise."""
        return Vec2(-self.y, self.x)

    def perp_dot(self, other: "Vec2") -> float:
        return self.x * other.y - self.y * other.x

    def rotate(self, other: "Vec2") -> "Vec2":
        """Complex multiplication: rotate (and scale) by ``other``."""
        return Vec2(
            self.x * other.x - self.y * other.y,
            self.y * other.x + self.x * other.y,
        )

    def angle_between(self, other: "Vec2") -> float:
        """Signed angle in radians from this vector to ``other``."""
        denom = math.sqrt(self.dot(self) * other.dot(other))
        if denom == 0.0:
            return math.nan
        cosine = max(-1.0, min(1.0, self.dot(other) / denom))
        return math.acos(cosine) * math.copysign(1.0, self.perp_dot(other))

    def clamp_length(self, minimum: float, maximum: float) -> "Vec2":
        """Scale the vector so that its length lies within the given range."""
        if minimum > maximum:
            raise ValueError("minimum length must not exceed maximum length")
        length_sq = self.dot(self)
        if length_sq < minimum * minimum:
            return self.normalize() * minimum
        if length_sq > maximum * maximum:
            return self.normalize() * maximum
        return self


Vec2.ZERO = Vec2(0.0, 0.0)


@dataclass(frozen=True)
class Vec4:
    """An immutable 4D vector, used for RGBA colours."""

    x: float
    y: float
    z: float
    w: float

    ONE: ClassVar["Vec4"]

    def __iter__(self) -> Iterator[float]:
        yield from (self.x, self.y, self.z, self.w)

    def __mul__(self, other: Union["Vec4", Scalar]) -> "Vec4":
        if isinstance(other, Vec4):
            return Vec4(
                self.x * other.x, self.y * other.y, self.z * other.z, self.w * other.w
            )
        if isinstance(other, (int, float)):
            return Vec4(self.x * other, self.y * other, self.z * other, self.w * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> "Vec4":
        if isinstance(other, (int, float)):
            return self * other
        return NotImplemented


Vec4.ONE = Vec4(1.0, 1.0, 1.0, 1.0)