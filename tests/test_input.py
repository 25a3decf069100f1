import pytest

from gameforge.events import EventSystem, EventType
from gameforge.input import Buttons, InputSystem, Keys, MousePosition


@pytest.fixture
def bus():
    return EventSystem()


@pytest.fixture
def received(bus):
    calls = []
    for event_type in (
        EventType.KEY_PRESSED,
        EventType.KEY_RELEASED,
        EventType.MOUSE_BUTTON_PRESSED,
        EventType.MOUSE_BUTTON_RELEASED,
        EventType.MOUSE_MOVED,
        EventType.MOUSE_SCROLLED,
    ):
        bus.register(event_type, "test", lambda t, c: calls.append((t, c)) or True)
    return calls


@pytest.fixture
def inputs(bus):
    return InputSystem(bus)


def test_key_codes_match_virtual_keys(inputs, received):
    inputs.process_key(0x41, True)
    inputs.process_key(0x1B, True)
    assert inputs.is_key_down(Keys.A)
    assert inputs.is_key_down(Keys.ESCAPE)
    assert [c.get("u16", 0) for _, c in received] == [0x41, 0x1B]


def test_key_press_updates_state_and_fires(inputs, received):
    inputs.process_key(Keys.A, True)
    assert inputs.is_key_down(Keys.A)
    assert not inputs.is_key_up(Keys.A)
    assert len(received) == 1
    event_type, context = received[0]
    assert event_type is EventType.KEY_PRESSED
    assert context.get("u16", 0) == Keys.A


def test_repeated_key_state_fires_once(inputs, received):
    inputs.process_key(Keys.SPACE, True)
    inputs.process_key(Keys.SPACE, True)
    assert len(received) == 1


def test_key_release_fires_released(inputs, received):
    inputs.process_key(Keys.W, True)
    inputs.process_key(Keys.W, False)
    assert [t for t, _ in received] == [EventType.KEY_PRESSED, EventType.KEY_RELEASED]
    assert inputs.is_key_up(Keys.W)


def test_key_beyond_max_is_ignored(inputs, received):
    inputs.process_key(Keys.MAX_KEYS + 1, True)
    assert received == []


def test_update_moves_current_to_previous(inputs):
    inputs.process_key(Keys.D, True)
    assert inputs.was_key_up(Keys.D)
    inputs.update(0.016)
    assert inputs.was_key_down(Keys.D)
    inputs.process_key(Keys.D, False)
    assert inputs.was_key_down(Keys.D)
    assert inputs.is_key_up(Keys.D)


def test_button_press_and_release(inputs, received):
    inputs.process_button(Buttons.RIGHT, True)
    assert inputs.is_button_down(Buttons.RIGHT)
    assert not inputs.is_button_down(Buttons.LEFT)
    inputs.process_button(Buttons.RIGHT, True)
    inputs.process_button(Buttons.RIGHT, False)
    assert [t for t, _ in received] == [
        EventType.MOUSE_BUTTON_PRESSED,
        EventType.MOUSE_BUTTON_RELEASED,
    ]
    assert received[0][1].get("u16", 0) == Buttons.RIGHT


def test_was_button_down_after_update(inputs):
    inputs.process_button(Buttons.MIDDLE, True)
    assert not inputs.was_button_down(Buttons.MIDDLE)
    inputs.update(0.0)
    assert inputs.was_button_down(Buttons.MIDDLE)


def test_mouse_move(inputs, received):
    inputs.process_mouse_move(10, 20)
    assert inputs.mouse_position() == MousePosition(10, 20)
    assert len(received) == 1
    event_type, context = received[0]
    assert event_type is EventType.MOUSE_MOVED
    assert (context.get("i16", 0), context.get("i16", 1)) == (10, 20)


def test_mouse_move_to_same_position_is_silent(inputs, received):
    inputs.process_mouse_move(7, 8)
    inputs.process_mouse_move(7, 8)
    assert len(received) == 1


def test_mouse_move_delta_accumulates(inputs, received):
    inputs.process_mouse_move(10, 20)
    inputs.process_mouse_move_delta(3, 4)
    assert inputs.mouse_position() == MousePosition(10 + 3, 20 + 4)
    assert len(received) == 2
    context = received[-1][1]
    assert (context.get("i16", 0), context.get("i16", 1)) == (10 + 3, 20 + 4)


def test_mouse_move_delta_equal_to_position_is_skipped(inputs, received):
    inputs.process_mouse_move(5, 5)
    inputs.process_mouse_move_delta(5, 5)
    assert inputs.mouse_position() == MousePosition(5, 5)
    assert len(received) == 1


def test_previous_mouse_position(inputs):
    inputs.process_mouse_move(1, 2)
    inputs.update(0.0)
    inputs.process_mouse_move(3, 4)
    assert inputs.previous_mouse_position() == MousePosition(1, 2)
    assert inputs.mouse_position() == MousePosition(3, 4)


def test_mouse_wheel_always_fires(inputs, received):
    inputs.process_mouse_wheel(-1)
    inputs.process_mouse_wheel(-1)
    assert len(received) == 2
    context = received[0][1]
    assert received[0][0] is EventType.MOUSE_SCROLLED
    assert context.get("i8", 0) == -1
    assert context.get("u8", 0) == 255


def test_works_without_event_system():
    EventSystem.shutdown()
    system = InputSystem()
    system.process_key(Keys.Q, True)
    assert system.is_key_down(Keys.Q)


def test_uses_shared_event_system_when_none_given():
    EventSystem.shutdown()
    try:
        shared = EventSystem.initialize()
        calls = []
        shared.register(EventType.KEY_PRESSED, "t", lambda t, c: calls.append(c) or True)
        InputSystem().process_key(Keys.E, True)
        assert [c.get("u16", 0) for c in calls] == [Keys.E]
    finally:
        EventSystem.shutdown()


def test_singleton_lifecycle():
    InputSystem.shutdown()
    try:
        assert InputSystem.get_instance() is None
        first = InputSystem.initialize()
        assert InputSystem.initialize() is first
        assert InputSystem.get_instance() is first
    finally:
        InputSystem.shutdown()
    assert InputSystem.get_instance() is None