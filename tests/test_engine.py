import math

import pytest

from kgsnake.engine import (
    Engine,
    Message,
    MessageKind,
    MessagePump,
    look_at_matrix,
    perspective,
)
from kgsnake.events import KeyEventArg, MouseEventArg, MouseWheelEventArg


def _record(event):
    seen = []
    event.reaction(lambda sender, arg: seen.append((sender, arg)))
    return seen


def test_input_is_deferred_until_render():
    engine = Engine()
    seen = _record(engine.on_mouse_move)
    engine.mouse_move(3, 4)
    assert seen == []
    engine.render(0.0)
    assert seen == [(engine, MouseEventArg(3, 4))]


def test_events_fire_once_in_order():
    engine = Engine()
    order = []
    engine.on_key_down.reaction(lambda s, a: order.append(("down", a.key)))
    engine.on_key_up.reaction(lambda s, a: order.append(("up", a.key)))
    engine.key_down(65)
    engine.key_up(65)
    engine.render(0.0)
    engine.render(0.0)
    assert order == [("down", 65), ("up", 65)]


def test_wheel_event_argument():
    engine = Engine()
    seen = _record(engine.on_wheel)
    engine.wheel_event(120)
    engine.render(0.0)
    assert seen[0][1] == MouseWheelEventArg(120.0)


def test_key_state_tracking():
    engine = Engine()
    engine.key_down(ord("G"))
    assert engine.is_key_pressed(ord("G"))
    engine.key_up(ord("G"))
    assert not engine.is_key_pressed(ord("G"))


def test_left_button_state():
    engine = Engine()
    engine.mouse_l_down(1, 1)
    assert engine.is_key_pressed(0x01)
    engine.mouse_l_up(1, 1)
    assert not engine.is_key_pressed(0x01)


def test_resize_applied_on_render():
    engine = Engine()
    engine.try_to_resize(800, 600)
    assert engine.width == 0
    engine.render(0.0)
    assert (engine.width, engine.height) == (800, 600)
    assert engine.viewport == (0, 0, 800, 600)
    assert engine.projection_matrix == perspective(45.0, 800 / 600, 0.05, 500)


def test_scene_receives_delta():
    calls = []
    engine = Engine(scene=calls.append)
    engine.render(0.25)
    assert calls == [0.25]


def test_perspective_right_angle():
    m = perspective(90.0, 2.0, 1.0, 3.0)
    assert m[0] == pytest.approx(0.5)
    assert m[5] == pytest.approx(1.0)
    assert m[11] == -1.0
    assert m[15] == 0.0


def _apply(m, point):
    x, y, z = point
    return tuple(m[r] * x + m[4 + r] * y + m[8 + r] * z + m[12 + r] for r in range(4))


def test_look_at_maps_eye_to_origin():
    m = look_at_matrix(2, -3, 4, 0, 0, 0, 0, 0, 1)
    out = _apply(m, (2, -3, 4))
    assert out[:3] == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)
    assert out[3] == 1.0


def test_look_at_centre_is_in_front():
    m = look_at_matrix(2, -3, 4, 0, 0, 0, 0, 0, 1)
    out = _apply(m, (0, 0, 0))
    assert out[0] == pytest.approx(0.0, abs=1e-12)
    assert out[1] == pytest.approx(0.0, abs=1e-12)
    assert out[2] == pytest.approx(-math.sqrt(29))


def test_message_decoding_signed_words():
    message = Message(MessageKind.MOUSE_MOVE, 0, (0xFFFF << 16) | 10)
    assert message.x == 10
    assert message.y == -1


def test_pump_mouse_move_and_leave():
    engine = Engine()
    pump = MessagePump(engine)
    moves = _record(engine.on_mouse_move)
    leaves = _record(engine.on_mouse_leave)
    pump.add_message(Message(MessageKind.MOUSE_MOVE, 0, (20 << 16) | 15))
    pump.add_message(Message(MessageKind.MOUSE_LEAVE))
    assert pump.dispatch() is True
    engine.render(0.0)
    assert moves[0][1] == MouseEventArg(15, 20)
    assert leaves[0][1] == MouseEventArg(15, 20)


def test_pump_leave_without_move_reports_minus_one():
    engine = Engine()
    pump = MessagePump(engine)
    leaves = _record(engine.on_mouse_leave)
    pump.add_message(Message(MessageKind.MOUSE_LEAVE))
    pump.dispatch()
    engine.render(0.0)
    assert leaves[0][1] == MouseEventArg(-1, -1)


def test_pump_wheel_and_keys():
    engine = Engine()
    pump = MessagePump(engine)
    wheel = _record(engine.on_wheel)
    keys = _record(engine.on_key_down)
    pump.add_message(Message(MessageKind.MOUSE_WHEEL, 120 << 16, 0))
    pump.add_message(Message(MessageKind.KEY_DOWN, 0x47, 0))
    pump.dispatch()
    engine.render(0.0)
    assert wheel[0][1] == MouseWheelEventArg(120.0)
    assert keys[0][1] == KeyEventArg(0x47)


def test_pump_size_message():
    engine = Engine()
    pump = MessagePump(engine)
    pump.add_message(Message(MessageKind.SIZE, 0, (480 << 16) | 640))
    pump.dispatch()
    engine.render(0.0)
    assert (engine.width, engine.height) == (640, 480)


def test_pump_close_drops_rest():
    engine = Engine()
    pump = MessagePump(engine)
    keys = _record(engine.on_key_down)
    pump.add_message(Message(MessageKind.CLOSE))
    pump.add_message(Message(MessageKind.KEY_DOWN, 65, 0))
    assert pump.dispatch() is False
    assert pump.closed
    pump.add_message(Message(MessageKind.KEY_DOWN, 66, 0))
    assert pump.dispatch() is False
    engine.render(0.0)
    assert keys == []