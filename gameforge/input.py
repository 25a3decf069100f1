"""Keyboard and mouse state tracking with change events."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, NamedTuple

from gameforge.events import EventContext, EventSystem, EventType


class Buttons(IntEnum):
    """Mouse buttons."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2
    MAX_BUTTONS = 3


class Keys(IntEnum):
    """Keyboard key codes."""

    BACKSPACE = 0x08
    ENTER = 0x0D
    TAB = 0x09
    SHIFT = 0x10
    CONTROL = 0x11
    PAUSE = 0x13
    CAPITAL = 0x14
    ESCAPE = 0x1B
    CONVERT = 0x1C
    NONCONVERT = 0x1D
    ACCEPT = 0x1E
    MODECHANGE = 0x1F
    SPACE = 0x20
    PRIOR = 0x21
    NEXT = 0x22
    END = 0x23
    HOME = 0x24
    LEFT = 0x25
    UP = 0x26
    RIGHT = 0x27
    DOWN = 0x28
    SELECT = 0x29
    PRINT = 0x2A
    EXECUTE = 0x2B
    SNAPSHOT = 0x2C
    INSERT = 0x2D
    DELETE = 0x2E
    HELP = 0x2F
    KEY_0 = 0x30
    KEY_1 = 0x31
    KEY_2 = 0x32
    KEY_3 = 0x33
    KEY_4 = 0x34
    KEY_5 = 0x35
    KEY_6 = 0x36
    KEY_7 = 0x37
    KEY_8 = 0x38
    KEY_9 = 0x39
    A = 0x41
    B = 0x42
    C = 0x43
    D = 0x44
    E = 0x45
    F = 0x46
    G = 0x47
    H = 0x48
    I = 0x49  # noqa: E741
    J = 0x4A
    K = 0x4B
    L = 0x4C
    M = 0x4D
    N = 0x4E
    O = 0x4F  # noqa: E741
    P = 0x50
    Q = 0x51
    R = 0x52
    S = 0x53
    T = 0x54
    U = 0x55
    V = 0x56
    W = 0x57
    X = 0x58
    Y = 0x59
    Z = 0x5A
    LWIN = 0x5B
    RWIN = 0x5C
    APPS = 0x5D
    SLEEP = 0x5F
    NUMPAD0 = 0x60
    NUMPAD1 = 0x61
    NUMPAD2 = 0x62
    NUMPAD3 = 0x63
    NUMPAD4 = 0x64
    NUMPAD5 = 0x65
    NUMPAD6 = 0x66
    NUMPAD7 = 0x67
    NUMPAD8 = 0x68
    NUMPAD9 = 0x69
    MULTIPLY = 0x6A
    ADD = 0x6B
    SEPARATOR = 0x6C
    SUBTRACT = 0x6D
    DECIMAL = 0x6E
    DIVIDE = 0x6F
    F1 = 0x70
    F2 = 0x71
    F3 = 0x72
    F4 = 0x73
    F5 = 0x74
    F6 = 0x75
    F7 = 0x76
    F8 = 0x77
    F9 = 0x78
    F10 = 0x79
    F11 = 0x7A
    F12 = 0x7B
    F13 = 0x7C
    F14 = 0x7D
    F15 = 0x7E
    F16 = 0x7F
    F17 = 0x80
    F18 = 0x81
    F19 = 0x82
    F20 = 0x83
    F21 = 0x84
    F22 = 0x85
    F23 = 0x86
    F24 = 0x87
    NUMLOCK = 0x90
    SCROLL = 0x91
    NUMPAD_EQUAL = 0x92
    LSHIFT = 0xA0
    RSHIFT = 0xA1
    LCONTROL = 0xA2
    RCONTROL = 0xA3
    LALT = 0xA4
    RALT = 0xA5
    SEMICOLON = 0xBA
    PLUS = 0xBB
    COMMA = 0xBC
    MINUS = 0xBD
    PERIOD = 0xBE
    SLASH = 0xBF
    GRAVE = 0xC0
    MAX_KEYS = 0xC1


_KEY_SLOTS = 256


class MousePosition(NamedTuple):
    """Mouse position in window coordinates."""

    x: int
    y: int


def _signed(value: int, bits: int) -> int:
    value = int(value) & ((1 << bits) - 1)
    return value - (1 << bits) if value >= 1 << (bits - 1) else value


@dataclass
class _MouseState:
    x: int = 0
    y: int = 0
    buttons: list[bool] = field(default_factory=lambda: [False] * Buttons.MAX_BUTTONS)

    def copy(self) -> _MouseState:
        return _MouseState(self.x, self.y, list(self.buttons))


class InputSystem:
    """Tracks current and previous keyboard and mouse state and fires events on change."""

    _instance: ClassVar[InputSystem | None] = None

    def __init__(self, events: EventSystem | None = None) -> None:
        self._events = events
        self._keys = [False] * _KEY_SLOTS
        self._prev_keys = [False] * _KEY_SLOTS
        self._mouse = _MouseState()
        self._prev_mouse = _MouseState()

    @classmethod
    def initialize(cls, events: EventSystem | None = None) -> InputSystem:
        """Create the shared instance if needed and return it."""
        if cls._instance is None:
            cls._instance = cls(events)
        return cls._instance

    @classmethod
    def shutdown(cls) -> None:
        """Discard the shared instance."""
        cls._instance = None

    @classmethod
    def get_instance(cls) -> InputSystem | None:
        """Return the shared instance, or None before initialization."""
        return cls._instance

    def _fire(self, event_type: EventType, context: EventContext) -> None:
        events = self._events if self._events is not None else EventSystem.get_instance()
        if events is not None:
            events.fire(event_type, context)

    def update(self, delta_time: float) -> None:
        """Make the current state the previous state for the next frame."""
        self._prev_keys = list(self._keys)
        self._prev_mouse = self._mouse.copy()

    def process_key(self, key: int, pressed: bool) -> None:
        """Record a key state; fires KEY_PRESSED or KEY_RELEASED on change."""
        code = int(key)
        if code < 0 or code > Keys.MAX_KEYS:
            return
        pressed = bool(pressed)
        if self._keys[code] != pressed:
            self._keys[code] = pressed
            context = EventContext()
            context.set("u16", 0, code)
            self._fire(EventType.KEY_PRESSED if pressed else EventType.KEY_RELEASED, context)

    def process_button(self, button: int, pressed: bool) -> None:
        """Record a mouse button state; fires a button event on change."""
        index = int(button)
        if not 0 <= index < Buttons.MAX_BUTTONS:
            return
        pressed = bool(pressed)
        if self._mouse.buttons[index] != pressed:
            self._mouse.buttons[index] = pressed
            context = EventContext()
            context.set("u16", 0, index)
            self._fire(
                EventType.MOUSE_BUTTON_PRESSED if pressed else EventType.MOUSE_BUTTON_RELEASED,
                context,
            )

    def _fire_moved(self) -> None:
        context = EventContext()
        context.set("u16", 0, self._mouse.x)
        context.set("u16", 1, self._mouse.y)
        self._fire(EventType.MOUSE_MOVED, context)

    def process_mouse_move(self, x: int, y: int) -> None:
        """Set the mouse position; fires MOUSE_MOVED when it changes."""
        x, y = _signed(x, 16), _signed(y, 16)
        if self._mouse.x != x or self._mouse.y != y:
            self._mouse.x = x
            self._mouse.y = y
            self._fire_moved()

    def process_mouse_move_delta(self, dx: int, dy: int) -> None:
        """Move the mouse by a delta; fires MOUSE_MOVED.

        The move is skipped when the delta equals the current position.
        """
        dx, dy = _signed(dx, 16), _signed(dy, 16)
        if self._mouse.x != dx or self._mouse.y != dy:
            self._mouse.x = _signed(self._mouse.x + dx, 16)
            self._mouse.y = _signed(self._mouse.y + dy, 16)
            self._fire_moved()

    def process_mouse_wheel(self, z_delta: int) -> None:
        """Fire MOUSE_SCROLLED with the wheel delta in the first byte."""
        context = EventContext()
        context.set("u8", 0, _signed(z_delta, 8))
        self._fire(EventType.MOUSE_SCROLLED, context)

    def is_key_down(self, key: int) -> bool:
        return self._keys[int(key)]

    def is_key_up(self, key: int) -> bool:
        return not self._keys[int(key)]

    def was_key_down(self, key: int) -> bool:
        return self._prev_keys[int(key)]

    def was_key_up(self, key: int) -> bool:
        return not self._prev_keys[int(key)]

    def is_button_down(self, button: int) -> bool:
        return self._mouse.buttons[int(button)]

    def was_button_down(self, button: int) -> bool:
        return self._prev_mouse.buttons[int(button)]

    def mouse_position(self) -> MousePosition:
        """Current mouse position."""
        return MousePosition(self._mouse.x, self._mouse.y)

    def previous_mouse_position(self) -> MousePosition:
        """Mouse position at the last update."""
        return MousePosition(self._prev_mouse.x, self._prev_mouse.y)