"""Typed events with a small payload, dispatched to named listeners."""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import Callable, ClassVar


class EventType(IntEnum):
    """Kinds of events the engine fires."""

    NONE = 0
    WINDOW_CLOSE = 1
    WINDOW_RESIZE = 2
    WINDOW_FOCUS = 3
    WINDOW_LOST_FOCUS = 4
    WINDOW_MOVED = 5
    APP_TICK = 6
    APP_UPDATE = 7
    APP_RENDER = 8
    APP_QUIT = 9
    KEY_PRESSED = 10
    KEY_RELEASED = 11
    KEY_TYPED = 12
    MOUSE_BUTTON_PRESSED = 13
    MOUSE_BUTTON_RELEASED = 14
    MOUSE_MOVED = 15
    MOUSE_SCROLLED = 16
    DEBUG1 = 17
    DEBUG2 = 18
    DEBUG3 = 19
    DEBUG4 = 20
    DEBUG5 = 21
    RENDER_TARGETS_REFRESH = 22
    MAX = 23


CONTEXT_SIZE = 16

_KINDS = {
    "i64": "q",
    "u64": "Q",
    "f64": "d",
    "i32": "i",
    "u32": "I",
    "f32": "f",
    "i16": "h",
    "u16": "H",
    "i8": "b",
    "u8": "B",
    "c": "c",
}


def _layout(kind: str) -> tuple[str, int, int]:
    try:
        code = _KINDS[kind]
    except KeyError:
        raise ValueError(f"unknown payload kind: {kind!r}") from None
    size = struct.calcsize("<" + code)
    return code, size, CONTEXT_SIZE // size


def _coerce(code: str, size: int, value):
    if code in "fd":
        return float(value)
    if code == "c":
        if isinstance(value, str):
            value = value.encode("latin-1")
        if isinstance(value, (bytes, bytearray)):
            if len(value) != 1:
                raise ValueError("a character payload must be one byte")
            return bytes(value)
        return bytes([int(value) & 0xFF])
    bits = size * 8
    number = int(value) & ((1 << bits) - 1)
    if code.islower() and number >= 1 << (bits - 1):
        number -= 1 << bits
    return number


class EventContext:
    """A 16-byte payload readable as arrays of several numeric kinds.

    Integer writes wrap to the width of the chosen kind.
    """

    __slots__ = ("data",)

    def __init__(self, data: bytes | bytearray | None = None) -> None:
        if data is None:
            self.data = bytearray(CONTEXT_SIZE)
        else:
            if len(data) > CONTEXT_SIZE:
                raise ValueError(f"payload is limited to {CONTEXT_SIZE} bytes")
            self.data = bytearray(data).ljust(CONTEXT_SIZE, b"\0")

    def view(self, kind: str) -> tuple:
        """Return the whole payload as a tuple of the given kind."""
        code, _, count = _layout(kind)
        return struct.unpack(f"<{count}{code}", self.data)

    def get(self, kind: str, index: int):
        """Return element ``index`` of the payload read as ``kind``."""
        code, size, count = _layout(kind)
        if not 0 <= index < count:
            raise IndexError(f"{kind} index {index} out of range 0..{count - 1}")
        return struct.unpack_from("<" + code, self.data, index * size)[0]

    def set(self, kind: str, index: int, value) -> None:
        """Store ``value`` as element ``index`` of the payload read as ``kind``."""
        code, size, count = _layout(kind)
        if not 0 <= index < count:
            raise IndexError(f"{kind} index {index} out of range 0..{count - 1}")
        struct.pack_into("<" + code, self.data, index * size, _coerce(code, size, value))

    def __bytes__(self) -> bytes:
        return bytes(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventContext):
            return NotImplemented
        return self.data == other.data

    def __repr__(self) -> str:
        return f"EventContext({bytes(self.data)!r})"


Handler = Callable[[EventType, EventContext], bool]


class Event:
    """A handler registered for one event type under a listener name."""

    def __init__(self, type: EventType, listener: str, handler: Handler) -> None:
        self.type = EventType(type)
        self.listener = listener
        self.handler = handler

    def handle(self, context: EventContext) -> bool:
        """Call the handler and report whether it handled the event."""
        return bool(self.handler(self.type, context))


class EventSystem:
    """Keeps observers per event type and dispatches events to them in order."""

    _instance: ClassVar[EventSystem | None] = None

    def __init__(self) -> None:
        self._observers: dict[EventType, list[Event]] = {
            t: [] for t in EventType if t is not EventType.MAX
        }

    @classmethod
    def initialize(cls) -> EventSystem:
        """Create the shared instance if needed and return it."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def shutdown(cls) -> None:
        """Discard the shared instance."""
        cls._instance = None

    @classmethod
    def get_instance(cls) -> EventSystem | None:
        """Return the shared instance, or None before initialization."""
        return cls._instance

    def _observers_for(self, type) -> list[Event]:
        try:
            return self._observers[EventType(type)]
        except (ValueError, KeyError):
            raise ValueError(f"invalid event type: {type!r}") from None

    def register(self, type: EventType, listener: str, handler: Handler) -> bool:
        """Add ``handler`` for ``type`` under the name ``listener``."""
        self._observers_for(type).append(Event(type, listener, handler))
        return True

    def unregister(self, type: EventType, listener: str) -> bool:
        """Remove the first handler registered by ``listener``; False if none."""
        observers = self._observers_for(type)
        for position, event in enumerate(observers):
            if event.listener == listener:
                del observers[position]
                return True
        return False

    def fire(self, type: EventType, context: EventContext | None = None) -> bool:
        """Dispatch an event; stops and returns False at the first refusing handler."""
        observers = self._observers_for(type)
        if not observers:
            return False
        if context is None:
            context = EventContext()
        handled = False
        for event in list(observers):
            if not event.handle(context):
                return False
            handled = True
        return handled