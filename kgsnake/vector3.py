"""Three-component vector with arithmetic, dot and cross products."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator


@dataclass(frozen=True)
class Vector3:
    """An immutable 3D vector. ``^`` is the cross product, ``&`` the dot product."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __pos__(self) -> Vector3:
        return self

    def __mul__(self, k: float) -> Vector3:
        if not isinstance(k, Real):
            return NotImplemented
        return Vector3(self.x * k, self.y * k, self.z * k)

    def __rmul__(self, k: float) -> Vector3:
        return self.__mul__(k)

    def __truediv__(self, k: float) -> Vector3:
        if not isinstance(k, Real):
            return NotImplemented
        return Vector3(self.x / k, self.y / k, self.z / k)

    def __xor__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.cross(other)

    def __and__(self, other: Vector3) -> float:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.dot(other)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vector3:
        """Return a unit vector of the same direction; a zero vector raises ZeroDivisionError."""
        return self / self.length()

    def cross(self, other: Vector3) -> Vector3:
        """Cross product ``self x other``."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Vector3) -> float:
        """Scalar product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    @staticmethod
    def unit_x() -> Vector3:
        return Vector3(1.0, 0.0, 0.0)

    @staticmethod
    def unit_y() -> Vector3:
        return Vector3(0.0, 1.0, 0.0)

    @staticmethod
    def unit_z() -> Vector3:
        return Vector3(0.0, 0.0, 1.0)