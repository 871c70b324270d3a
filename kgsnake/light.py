"""Point light that can be dragged across the scene with the mouse."""

from __future__ import annotations

from typing import Any, Sequence

from .events import KeyEventArg, MouseEventArg
from .vector3 import Vector3

_KEY_G = 0x47
_KEY_F = 0x46
_VK_LBUTTON = 0x01
_MAX_RADIUS_SQUARED = 2500.0
_Z_LIMIT = 20.0

Matrix = list[list[float]]


def _rows(gl_matrix: Sequence[float]) -> Matrix:
    """Turn a column-major 16-element matrix into a list of rows."""
    if len(gl_matrix) != 16:
        raise ValueError("a 4x4 matrix needs 16 elements")
    return [[float(gl_matrix[col * 4 + row]) for col in range(4)] for row in range(4)]


def _matmul(a: Matrix, b: Matrix) -> Matrix:
    return [[sum(x * y for x, y in zip(row, col)) for col in zip(*b)] for row in a]


def _invert(matrix: Matrix) -> Matrix:
    """Gauss-Jordan inversion with partial pivoting; raises ValueError if singular."""
    aug = [row[:] + [1.0 if i == j else 0.0 for j in range(4)] for i, row in enumerate(matrix)]
    for col in range(4):
        pivot_row = max(range(col, 4), key=lambda r: abs(aug[r][col]))
        if aug[pivot_row][col] == 0.0:
            raise ValueError("matrix is singular")
        aug[col], aug[pivot_row] = aug[pivot_row], aug[col]
        pivot = aug[col][col]
        aug[col] = [v / pivot for v in aug[col]]
        for r in range(4):
            if r != col and aug[r][col] != 0.0:
                factor = aug[r][col]
                aug[r] = [v - factor * p for v, p in zip(aug[r], aug[col])]
    return [row[4:] for row in aug]


def unproject(
    win_x: float,
    win_y: float,
    win_z: float,
    modelview: Sequence[float],
    projection: Sequence[float],
    viewport: Sequence[float],
) -> Vector3:
    """Map window coordinates and depth back to world coordinates.

    Matrices are column-major sequences of 16 numbers; the viewport is
    ``(x, y, width, height)``. Raises ValueError when the mapping is undefined.
    """
    inverse = _invert(_matmul(_rows(projection), _rows(modelview)))
    vx, vy, vw, vh = viewport
    ndc = (
        (win_x - vx) / vw * 2.0 - 1.0,
        (win_y - vy) / vh * 2.0 - 1.0,
        win_z * 2.0 - 1.0,
        1.0,
    )
    out = [sum(m * v for m, v in zip(row, ndc)) for row in inverse]
    if out[3] == 0.0:
        raise ValueError("point maps to infinity")
    return Vector3(out[0] / out[3], out[1] / out[3], out[2] / out[3])


def look_ray(
    win_x: float,
    win_y: float,
    modelview: Sequence[float],
    projection: Sequence[float],
    viewport: Sequence[float],
) -> tuple[Vector3, Vector3]:
    """Origin on the near plane and unit direction of the ray under a window point."""
    origin = unproject(win_x, win_y, 0.0, modelview, projection, viewport)
    far = unproject(win_x, win_y, 1.0, modelview, projection, viewport)
    return origin, (far - origin).normalize()


class Light:
    """Light source position with keyboard-driven drag modes.

    G drags the light: horizontally by default, vertically while the left
    mouse button is held. F marks the light as following the camera.
    The sender of mouse events must provide ``height``, ``modelview_matrix``,
    ``projection_matrix``, ``viewport`` and ``is_key_pressed(key)``.
    """

    def __init__(self) -> None:
        self._x = 1.0
        self._y = 1.0
        self._z = 1.0
        self._drag = False
        self._from_camera = False

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

    @property
    def from_camera(self) -> bool:
        return self._from_camera

    def set_position(self, x: float, y: float, z: float) -> None:
        self._x, self._y, self._z = x, y, z

    def start_drag(self, sender: Any, arg: KeyEventArg) -> None:
        if arg.key == _KEY_G:
            self._drag = True
        if arg.key == _KEY_F:
            self._from_camera = True

    def stop_drag(self, sender: Any, arg: KeyEventArg) -> None:
        if arg.key == _KEY_G:
            self._drag = False
        if arg.key == _KEY_F:
            self._from_camera = False

    def move_light(self, sender: Any, arg: MouseEventArg) -> None:
        """Move the light to the point under the mouse while dragging."""
        if not self._drag:
            return
        win_y = sender.height - arg.y
        origin, direction = look_ray(
            arg.x,
            win_y,
            sender.modelview_matrix,
            sender.projection_matrix,
            sender.viewport,
        )

        if not sender.is_key_pressed(_VK_LBUTTON):
            z = self._z
            k = 0.0 if direction.z == 0 else (z - origin.z) / direction.z
            x = k * direction.x + origin.x
            y = k * direction.y + origin.y
            if x * x + y * y > _MAX_RADIUS_SQUARED:
                return
            self._x, self._y, self._z = x, y, z
            return

        top = (direction ^ Vector3.unit_z()) ^ direction
        d = -(top & origin)
        if top.z == 0:
            self._z = 0.0
        else:
            new_z = -(top.x * self._x + top.y * self._y + d) / top.z
            self._z = min(max(new_z, -_Z_LIMIT), _Z_LIMIT)