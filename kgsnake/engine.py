"""Window-event plumbing: a message pump feeding an engine that replays input on render."""

from __future__ import annotations

import enum
import math
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .events import Event, KeyEventArg, MouseEventArg, MouseWheelEventArg
from .vector3 import Vector3

VK_LBUTTON = 0x01
VK_RBUTTON = 0x02
VK_MBUTTON = 0x04

_FOVY = 45.0
_Z_NEAR = 0.05
_Z_FAR = 500.0

_IDENTITY = [
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
]


def _signed16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


class MessageKind(enum.IntEnum):
    """Window message kinds the pump understands, with their window-system codes."""

    SIZE = 0x0005
    CLOSE = 0x0010
    KEY_DOWN = 0x0100
    KEY_UP = 0x0101
    MOUSE_MOVE = 0x0200
    L_BUTTON_DOWN = 0x0201
    L_BUTTON_UP = 0x0202
    R_BUTTON_DOWN = 0x0204
    R_BUTTON_UP = 0x0205
    M_BUTTON_DOWN = 0x0207
    M_BUTTON_UP = 0x0208
    MOUSE_WHEEL = 0x020A
    MOUSE_LEAVE = 0x02A3


@dataclass(frozen=True)
class Message:
    """A window message with its two packed parameters."""

    kind: MessageKind
    w_param: int = 0
    l_param: int = 0

    @property
    def x(self) -> int:
        """Signed low word of ``l_param``."""
        return _signed16(self.l_param)

    @property
    def y(self) -> int:
        """Signed high word of ``l_param``."""
        return _signed16(self.l_param >> 16)

    @property
    def wheel_delta(self) -> int:
        """Signed high word of ``w_param``."""
        return _signed16(self.w_param >> 16)

    @property
    def key(self) -> int:
        return self.w_param


def perspective(fovy: float, aspect: float, z_near: float, z_far: float) -> list[float]:
    """Column-major perspective projection matrix; ``fovy`` is in degrees."""
    f = 1.0 / math.tan(math.radians(fovy) / 2.0)
    depth = z_near - z_far
    return [
        f / aspect, 0.0, 0.0, 0.0,
        0.0, f, 0.0, 0.0,
        0.0, 0.0, (z_far + z_near) / depth, -1.0,
        0.0, 0.0, 2.0 * z_far * z_near / depth, 0.0,
    ]


def look_at_matrix(
    eye_x: float,
    eye_y: float,
    eye_z: float,
    center_x: float,
    center_y: float,
    center_z: float,
    up_x: float,
    up_y: float,
    up_z: float,
) -> list[float]:
    """Column-major view matrix looking from the eye towards the centre."""
    eye = Vector3(eye_x, eye_y, eye_z)
    forward = (Vector3(center_x, center_y, center_z) - eye).normalize()
    side = (forward ^ Vector3(up_x, up_y, up_z)).normalize()
    up = side ^ forward
    return [
        side.x, up.x, -forward.x, 0.0,
        side.y, up.y, -forward.y, 0.0,
        side.z, up.z, -forward.z, 0.0,
        -(side & eye), -(up & eye), forward & eye, 1.0,
    ]


class Engine:
    """Collects input from the message thread and replays it on the render thread.

    Input methods queue the matching event; ``render`` applies a pending
    resize, fires the queued events in order and then calls the scene.
    """

    def __init__(self, scene: Optional[Callable[[float], Any]] = None) -> None:
        self.scene = scene
        self.width = 0
        self.height = 0
        self.viewport: tuple[int, int, int, int] = (0, 0, 0, 0)
        self.projection_matrix: list[float] = list(_IDENTITY)
        self.modelview_matrix: list[float] = list(_IDENTITY)

        self.on_wheel: Event[Engine, MouseWheelEventArg] = Event()
        self.on_mouse_move: Event[Engine, MouseEventArg] = Event()
        self.on_mouse_leave: Event[Engine, MouseEventArg] = Event()
        self.on_mouse_l_down: Event[Engine, MouseEventArg] = Event()
        self.on_mouse_l_up: Event[Engine, MouseEventArg] = Event()
        self.on_mouse_r_down: Event[Engine, MouseEventArg] = Event()
        self.on_mouse_r_up: Event[Engine, MouseEventArg] = Event()
        self.on_mouse_m_down: Event[Engine, MouseEventArg] = Event()
        self.on_mouse_m_up: Event[Engine, MouseEventArg] = Event()
        self.on_key_down: Event[Engine, KeyEventArg] = Event()
        self.on_key_up: Event[Engine, KeyEventArg] = Event()

        self._lock = threading.Lock()
        self._pending: list[Callable[[], None]] = []
        self._pressed: set[int] = set()
        self._resize_to: Optional[tuple[int, int]] = None

    def _queue(self, event: Event, arg: Any) -> None:
        with self._lock:
            self._pending.append(lambda: event.emit(self, arg))

    def _press(self, key: int, down: bool) -> None:
        with self._lock:
            if down:
                self._pressed.add(key)
            else:
                self._pressed.discard(key)

    def wheel_event(self, delta: float) -> None:
        self._queue(self.on_wheel, MouseWheelEventArg(float(delta)))

    def mouse_move(self, x: int, y: int) -> None:
        self._queue(self.on_mouse_move, MouseEventArg(x, y))

    def mouse_leave(self, x: int, y: int) -> None:
        self._queue(self.on_mouse_leave, MouseEventArg(x, y))

    def mouse_l_down(self, x: int, y: int) -> None:
        self._press(VK_LBUTTON, True)
        self._queue(self.on_mouse_l_down, MouseEventArg(x, y))

    def mouse_l_up(self, x: int, y: int) -> None:
        self._press(VK_LBUTTON, False)
        self._queue(self.on_mouse_l_up, MouseEventArg(x, y))

    def mouse_r_down(self, x: int, y: int) -> None:
        self._press(VK_RBUTTON, True)
        self._queue(self.on_mouse_r_down, MouseEventArg(x, y))

    def mouse_r_up(self, x: int, y: int) -> None:
        self._press(VK_RBUTTON, False)
        self._queue(self.on_mouse_r_up, MouseEventArg(x, y))

    def mouse_m_down(self, x: int, y: int) -> None:
        self._press(VK_MBUTTON, True)
        self._queue(self.on_mouse_m_down, MouseEventArg(x, y))

    def mouse_m_up(self, x: int, y: int) -> None:
        self._press(VK_MBUTTON, False)
        self._queue(self.on_mouse_m_up, MouseEventArg(x, y))

    def key_down(self, key: int) -> None:
        self._press(key, True)
        self._queue(self.on_key_down, KeyEventArg(key))

    def key_up(self, key: int) -> None:
        self._press(key, False)
        self._queue(self.on_key_up, KeyEventArg(key))

    def is_key_pressed(self, key: int) -> bool:
        """Whether a key or mouse button is currently held down."""
        with self._lock:
            return key in self._pressed

    def try_to_resize(self, width: int, height: int) -> None:
        """Request a resize to be applied at the start of the next render."""
        with self._lock:
            self._resize_to = (width, height)

    def resize(self, width: int, height: int) -> None:
        """Set the viewport and a 45-degree perspective projection."""
        self.width = width
        self.height = height
        self.viewport = (0, 0, width, height)
        if height:
            self.projection_matrix = perspective(_FOVY, width / height, _Z_NEAR, _Z_FAR)
        self.modelview_matrix = list(_IDENTITY)

    def render(self, delta: float) -> None:
        """Apply a pending resize, fire queued input events, then draw the scene."""
        with self._lock:
            resize_to, self._resize_to = self._resize_to, None
            pending, self._pending = self._pending, []
        if resize_to is not None:
            self.resize(*resize_to)
        for action in pending:
            action()
        self.modelview_matrix = list(_IDENTITY)
        if self.scene is not None:
            self.scene(delta)


class MessagePump:
    """Queue of window messages, translated into engine input on dispatch."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._queue: deque[Message] = deque()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def add_message(self, message: Message) -> None:
        with self._lock:
            self._queue.append(message)

    def dispatch(self) -> bool:
        """Handle every queued message; return False once the window was closed."""
        engine = self.engine
        mouse_x, mouse_y = -1, -1
        while True:
            with self._lock:
                if self._closed or not self._queue:
                    break
                message = self._queue.popleft()
            kind = message.kind
            if kind == MessageKind.MOUSE_LEAVE:
                engine.mouse_leave(mouse_x, mouse_y)
            elif kind == MessageKind.MOUSE_WHEEL:
                engine.wheel_event(message.wheel_delta)
            elif kind == MessageKind.MOUSE_MOVE:
                mouse_x, mouse_y = message.x, message.y
                engine.mouse_move(mouse_x, mouse_y)
            elif kind == MessageKind.SIZE:
                engine.try_to_resize(message.x, message.y)
            elif kind == MessageKind.L_BUTTON_DOWN:
                engine.mouse_l_down(message.x, message.y)
            elif kind == MessageKind.L_BUTTON_UP:
                engine.mouse_l_up(message.x, message.y)
            elif kind == MessageKind.R_BUTTON_DOWN:
                engine.mouse_r_down(message.x, message.y)
            elif kind == MessageKind.R_BUTTON_UP:
                engine.mouse_r_up(message.x, message.y)
            elif kind == MessageKind.M_BUTTON_DOWN:
                engine.mouse_m_down(message.x, message.y)
            elif kind == MessageKind.M_BUTTON_UP:
                engine.mouse_m_up(message.x, message.y)
            elif kind == MessageKind.KEY_UP:
                engine.key_up(message.key)
            elif kind == MessageKind.KEY_DOWN:
                engine.key_down(message.key)
            elif kind == MessageKind.CLOSE:
                with self._lock:
                    self._closed = True
                    self._queue.clear()
        return not self._closed