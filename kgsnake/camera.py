"""Orbit camera that circles the origin on a sphere controlled by the mouse."""

from __future__ import annotations

import math
from typing import Any, Optional

from .events import MouseEventArg, MouseWheelEventArg

_KEY_G = ord("G")
_MIN_DISTANCE = 1.0
_MAX_DISTANCE = 100.0
_ZOOM_FACTOR = 0.01
_ROTATE_FACTOR = 0.01


class Camera:
    """Camera positioned by distance and two angles, always looking at the origin.

    ``fi1`` is the azimuth in the XY plane, ``fi2`` the elevation above it.
    """

    def __init__(self) -> None:
        self._distance = 5.0
        self._nz = 1
        self._x = 0.0
        self._y = 0.0
        self._z = 0.0
        self._mouse: Optional[tuple[int, int]] = None
        self._drag = False
        self.fi1 = 1.0
        self.fi2 = 0.5
        self.calculate_position()

    @property
    def distance(self) -> float:
        return self._distance

    @property
    def nz(self) -> int:
        """Z component of the up vector: 1 normally, -1 when upside down."""
        return self._nz

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> float:
        return self._z

    @property
    def dragging(self) -> bool:
        return self._drag

    def set_position(self, x: float, y: float, z: float) -> None:
        """Place the camera at a point and derive distance and angles from it."""
        self._x, self._y, self._z = x, y, z
        self._distance = math.sqrt(x * x + y * y + z * z)
        self.fi1 = math.atan2(y, x)
        self.fi2 = math.atan2(z, math.sqrt(x * x + y * y))

    def calculate_position(self) -> None:
        """Recompute the cartesian position from distance and angles."""
        cos_fi2 = math.cos(self.fi2)
        self._x = self._distance * cos_fi2 * math.cos(self.fi1)
        self._y = self._distance * cos_fi2 * math.sin(self.fi1)
        self._z = self._distance * math.sin(self.fi2)
        self._nz = -1 if cos_fi2 <= 0 else 1

    def zoom(self, sender: Any, arg: MouseWheelEventArg) -> None:
        """Change the distance by the wheel delta, within [1, 100]."""
        if arg.value < 0 and self._distance <= _MIN_DISTANCE:
            return
        if arg.value > 0 and self._distance >= _MAX_DISTANCE:
            return
        self._distance += _ZOOM_FACTOR * arg.value
        self.calculate_position()

    def mouse_move(self, sender: Any, arg: MouseEventArg) -> None:
        """Rotate the camera while dragging; ignored while G is held."""
        if sender is not None and sender.is_key_pressed(_KEY_G):
            return
        if self._mouse is None:
            self._mouse = (arg.x, arg.y)
            return
        last_x, last_y = self._mouse
        dx = last_x - arg.x
        dy = last_y - arg.y
        self._mouse = (arg.x, arg.y)
        if self._drag:
            self.fi1 += _ROTATE_FACTOR * dx
            self.fi2 -= _ROTATE_FACTOR * dy
            self.calculate_position()

    def mouse_leave(self, sender: Any, arg: MouseEventArg) -> None:
        self._mouse = None

    def start_drag(self, sender: Any, arg: MouseEventArg) -> None:
        self._drag = True

    def stop_drag(self, sender: Any, arg: MouseEventArg) -> None:
        self._drag = False
        self._mouse = None

    def look_at(self) -> tuple[float, float, float, float, float, float, float, float, float]:
        """Eye, centre and up vector for a look-at view matrix."""
        return (self._x, self._y, self._z, 0.0, 0.0, 0.0, 0.0, 0.0, float(self._nz))