"""The 3D snake game: snake movement, apples, grid geometry and the on-screen status text."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass
from typing import Any, Optional

from .camera import Camera
from .events import KeyEventArg
from .light import Light

MAX_SNAKE_LENGTH = 100
START_LENGTH = 3
SNAKE_RADIUS = 0.1
SEGMENT_DISTANCE = 0.2
CUBE_SIZE = 10.0
SNAKE_SPEED = 0.6
CELL_EPSILON = 0.01
_FOLLOW_EPSILON = 0.001

VK_TAB = 0x09
VK_LEFT = 0x25
VK_UP = 0x26
VK_RIGHT = 0x27
VK_DOWN = 0x28

Point = tuple[float, float, float]
Color = tuple[float, float, float]


class Direction(enum.Enum):
    """Direction the snake head travels in."""

    RIGHT = enum.auto()
    LEFT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    FORWARD = enum.auto()
    BACKWARD = enum.auto()


# Axis index and sign of the head movement for each direction.
_MOVES: dict[Direction, tuple[int, float]] = {
    Direction.RIGHT: (0, 1.0),
    Direction.LEFT: (0, -1.0),
    Direction.UP: (1, 1.0),
    Direction.DOWN: (1, -1.0),
    Direction.FORWARD: (2, -1.0),
    Direction.BACKWARD: (2, 1.0),
}

_CONTROL_KEYS: dict[int, Direction] = {
    VK_LEFT: Direction.LEFT,
    VK_RIGHT: Direction.RIGHT,
    VK_UP: Direction.UP,
    VK_DOWN: Direction.DOWN,
    ord("S"): Direction.FORWARD,
    ord("s"): Direction.FORWARD,
    ord("W"): Direction.BACKWARD,
    ord("w"): Direction.BACKWARD,
}


@dataclass(frozen=True)
class SnakeSegment:
    """One ball of the snake's body."""

    position: Point
    color: Color


@dataclass(frozen=True)
class Apple:
    """The apple the snake has to reach."""

    position: Point = (0.0, 0.0, 0.0)
    color: Color = (1.0, 0.0, 0.0)


def segment_color(index: int, max_length: int) -> Color:
    """Colour of the segment at ``index``: red head, blue last, a gradient in between."""
    if index == 0:
        return (1.0, 0.0, 0.0)
    if index == max_length - 1:
        return (0.0, 0.3, 1.0)
    ratio = index / max_length
    return (0.2 * ratio, 0.7 - 0.5 * ratio, 0.5 + 0.5 * ratio)


def grid_lines(cube_size: float) -> list[tuple[Point, Point]]:
    """Line segments of the grid filling a cube of the given size centred at the origin."""
    h = cube_size / 2.0
    half = int(h)
    steps = range(-half, half + 1)
    lines: list[tuple[Point, Point]] = []
    for xi in steps:
        for yi in steps:
            lines.append(((float(xi), float(yi), -h), (float(xi), float(yi), h)))
        for zi in steps:
            lines.append(((float(xi), -h, float(zi)), (float(xi), h, float(zi))))
    for yi in steps:
        for zi in steps:
            lines.append(((-h, float(yi), float(zi)), (h, float(yi), float(zi))))
    return lines


def _round_half_away(value: float) -> float:
    return float(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class RenderModes:
    """Switchable rendering modes, toggled by keys L, T, A and Tab."""

    texturing: bool = True
    lighting: bool = True
    alpha: bool = False
    show_grid: bool = True

    def switch_modes(self, sender: Any, arg: KeyEventArg) -> None:
        if arg.key == ord("L"):
            self.lighting = not self.lighting
        elif arg.key == ord("T"):
            self.texturing = not self.texturing
        elif arg.key == ord("A"):
            self.alpha = not self.alpha
        elif arg.key == VK_TAB:
            self.show_grid = not self.show_grid


def _switch_label(enabled: bool) -> str:
    return "[вкл]выкл  " if enabled else " вкл[выкл] "


def format_hud(
    modes: RenderModes,
    light: Light,
    camera: Camera,
    delta_time: float,
    full_time: float,
    score: int,
) -> str:
    """Text shown in the top-left corner of the window."""
    lines = [
        f"T - {_switch_label(modes.texturing)}текстур",
        f"L - {_switch_label(modes.lighting)}освещение",
        f"A - {_switch_label(modes.alpha)}альфа-наложение",
        f"TAB - {_switch_label(modes.show_grid)}сетка",
        "F - Свет из камеры",
        "G - двигать свет по горизонтали",
        "G+ЛКМ двигать свет по вертекали",
        f"Коорд. света: ({light.x:7.3f},{light.y:7.3f},{light.z:7.3f})",
        f"Коорд. камеры: ({camera.x:7.3f},{camera.y:7.3f},{camera.z:7.3f})",
        f"Параметры камеры: R={camera.distance:7.3f},fi1={camera.fi1:7.3f},fi2={camera.fi2:7.3f}",
        f"delta_time: {delta_time:.5f}",
        f"full_time: {full_time:.2f}",
        f"Очки: {score}",
    ]
    return "".join(line + "\n" for line in lines)


class SnakeGame:
    """State of the snake, the apple and the score, advanced frame by frame."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.current_direction = Direction.FORWARD
        self.next_direction = Direction.FORWARD
        self.apple = Apple()
        self._positions: list[list[float]] = []
        self._colors: list[Color] = []
        self._length = START_LENGTH
        self._score = 0
        self.reset()
        self.spawn_apple()

    @property
    def length(self) -> int:
        return self._length

    @property
    def score(self) -> int:
        return self._score

    def reset(self) -> None:
        """Put the snake back to its starting line along Z and clear the score."""
        self._length = START_LENGTH
        self._score = 0
        self._positions = [[0.0, 0.0, i * SEGMENT_DISTANCE] for i in range(MAX_SNAKE_LENGTH)]
        self._colors = [segment_color(i, MAX_SNAKE_LENGTH) for i in range(MAX_SNAKE_LENGTH)]

    def spawn_apple(self) -> None:
        """Place the apple at a random grid point inside the cube, one unit from its walls."""
        limit = CUBE_SIZE / 2.0 - 1.0
        self.apple = Apple(
            tuple(_round_half_away(self._rng.uniform(-limit, limit)) for _ in range(3))
        )

    def _restart(self) -> None:
        self.reset()
        self.spawn_apple()

    def update(self, delta_time: float) -> None:
        """Advance the snake by one frame of ``delta_time`` seconds."""
        step = SNAKE_SPEED * delta_time
        head = self._positions[0]

        if all(abs(c - round(c)) < CELL_EPSILON for c in head):
            self.current_direction = self.next_direction
        axis, sign = _MOVES[self.current_direction]
        head[axis] += sign * step

        if math.dist(head, self.apple.position) < SNAKE_RADIUS * 2:
            self._score += 1
            self.spawn_apple()
            if self._length < MAX_SNAKE_LENGTH:
                self._positions[self._length] = list(self._positions[self._length - 1])
                self._colors[self._length] = self._colors[self._length - 1]
                self._length += 1

        half = CUBE_SIZE / 2
        if any(c < -half or c > half for c in head):
            self._restart()
            return

        body = self._positions[1:self._length]
        if any(math.dist(head, segment) < SNAKE_RADIUS * 1.1 for segment in body):
            self._restart()
            return

        active = self._positions[:self._length]
        for prev, curr in zip(reversed(active[:-1]), reversed(active[1:])):
            offset = [p - c for p, c in zip(prev, curr)]
            distance = math.hypot(*offset)
            if distance > _FOLLOW_EPSILON:
                pull = (distance - SEGMENT_DISTANCE) / distance
                for i, d in enumerate(offset):
                    curr[i] += d * pull

    def control(self, sender: Any, arg: KeyEventArg) -> None:
        """Choose the next direction from arrow keys, S and W."""
        direction = _CONTROL_KEYS.get(arg.key)
        if direction is not None:
            self.next_direction = direction

    def head(self) -> Point:
        return tuple(self._positions[0])

    def segments(self) -> list[SnakeSegment]:
        """The segments currently making up the snake, head first."""
        return [
            SnakeSegment(tuple(position), color)
            for position, color in zip(self._positions[:self._length], self._colors)
        ]