import pytest

from gameforge.events import Event, EventContext, EventSystem, EventType


@pytest.fixture
def events():
    return EventSystem()


def recorder(calls, result=True, name=None):
    def handler(event_type, context):
        calls.append((name, event_type, context))
        return result

    return handler


def test_fire_without_observers_returns_false(events):
    assert events.fire(EventType.APP_QUIT, EventContext()) is False


def test_fire_reaches_handler_with_type_and_context(events):
    calls = []
    events.register(EventType.WINDOW_RESIZE, "window", recorder(calls))
    context = EventContext()
    context.set("u16", 0, 800)
    context.set("u16", 1, 600)
    assert events.fire(EventType.WINDOW_RESIZE, context) is True
    assert len(calls) == 1
    _, event_type, received = calls[0]
    assert event_type is EventType.WINDOW_RESIZE
    assert received.get("u16", 0) == 800
    assert received.get("u16", 1) == 600


def test_handlers_run_in_registration_order(events):
    calls = []
    events.register(EventType.APP_TICK, "a", recorder(calls, name="a"))
    events.register(EventType.APP_TICK, "b", recorder(calls, name="b"))
    assert events.fire(EventType.APP_TICK) is True
    assert [c[0] for c in calls] == ["a", "b"]


def test_refusing_handler_stops_dispatch(events):
    calls = []
    events.register(EventType.APP_TICK, "a", recorder(calls, result=False, name="a"))
    events.register(EventType.APP_TICK, "b", recorder(calls, name="b"))
    assert events.fire(EventType.APP_TICK) is False
    assert [c[0] for c in calls] == ["a"]


def test_register_is_per_type(events):
    calls = []
    events.register(EventType.KEY_PRESSED, "k", recorder(calls))
    assert events.fire(EventType.KEY_RELEASED) is False
    assert calls == []


def test_unregister_removes_first_matching(events):
    calls = []
    events.register(EventType.APP_RENDER, "same", recorder(calls, name="first"))
    events.register(EventType.APP_RENDER, "same", recorder(calls, name="second"))
    assert events.unregister(EventType.APP_RENDER, "same") is True
    events.fire(EventType.APP_RENDER)
    assert [c[0] for c in calls] == ["second"]


def test_unregister_unknown_listener(events):
    events.register(EventType.APP_RENDER, "x", recorder([]))
    assert events.unregister(EventType.APP_RENDER, "y") is False


def test_unregister_with_no_observers(events):
    assert events.unregister(EventType.DEBUG1, "x") is False


def test_last_unregister_makes_fire_false(events):
    events.register(EventType.DEBUG2, "x", recorder([]))
    events.unregister(EventType.DEBUG2, "x")
    assert events.fire(EventType.DEBUG2) is False


def test_max_is_not_a_valid_event_type(events):
    with pytest.raises(ValueError):
        events.register(EventType.MAX, "x", recorder([]))
    with pytest.raises(ValueError):
        events.fire(EventType.MAX)


def test_event_handle_returns_bool():
    event = Event(EventType.KEY_TYPED, "typing", lambda t, c: 1)
    assert event.handle(EventContext()) is True
    assert event.listener == "typing"
    assert event.type is EventType.KEY_TYPED


def test_singleton_lifecycle():
    EventSystem.shutdown()
    try:
        assert EventSystem.get_instance() is None
        first = EventSystem.initialize()
        assert EventSystem.initialize() is first
        assert EventSystem.get_instance() is first
    finally:
        EventSystem.shutdown()
    assert EventSystem.get_instance() is None


def test_context_starts_zeroed():
    context = EventContext()
    assert context.view("u64") == (0, 0)
    assert len(bytes(context)) == 16


def test_context_integer_writes_wrap():
    context = EventContext()
    context.set("i64", 0, -1)
    assert context.view("u8")[:8] == (255,) * 8
    assert context.view("u8")[8:] == (0,) * 8
    assert context.get("i16", 0) == -1


def test_context_views_share_memory():
    context = EventContext()
    context.set("u8", 0, 1)
    assert context.get("u16", 0) == 1
    assert context.get("u32", 0) == 1


def test_context_float_round_trip():
    context = EventContext()
    context.set("f64", 1, 1.5)
    context.set("f32", 0, 0.25)
    assert context.get("f64", 1) == 1.5
    assert context.get("f32", 0) == 0.25


def test_context_char_kind():
    context = EventContext()
    context.set("c", 3, b"A")
    assert context.get("c", 3) == b"A"
    assert context.get("u8", 3) == ord("A")


def test_context_index_bounds():
    context = EventContext()
    with pytest.raises(IndexError):
        context.get("u16", 8)
    with pytest.raises(IndexError):
        context.set("u64", 2, 0)
    with pytest.raises(IndexError):
        context.get("i8", -1)


def test_context_unknown_kind():
    with pytest.raises(ValueError):
        EventContext().get("u128", 0)


def test_context_from_bytes_is_padded_and_limited():
    context = EventContext(b"\x01\x02")
    assert context == EventContext(b"\x01\x02" + b"\0" * 14)
    with pytest.raises(ValueError):
        EventContext(b"\0" * 17)