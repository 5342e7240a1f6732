from tuispot.events import Event, EventManager, EventType


def test_messages_yield_sent_events_in_order():
    manager = EventManager()
    first = Event(EventType.PLAYER, "playing")
    second = Event(EventType.SESSION_DIED)
    manager.send(first)
    manager.send(second)
    assert list(manager.messages()) == [first, second]


def test_messages_drain_the_channel():
    manager = EventManager()
    manager.send(Event(EventType.QUEUE, "preload"))
    assert len(list(manager.messages())) == 1
    assert list(manager.messages()) == []


def test_messages_empty_without_events():
    assert list(EventManager().messages()) == []


def test_send_wakes_main_loop_once_per_event():
    wakes = []
    manager = EventManager(notify=lambda: wakes.append(True))
    manager.send(Event(EventType.SESSION_DIED))
    manager.send(Event(EventType.SESSION_DIED))
    assert len(wakes) == 2


def test_trigger_wakes_without_event():
    wakes = []
    manager = EventManager(notify=lambda: wakes.append(True))
    manager.trigger()
    assert wakes == [True]
    assert list(manager.messages()) == []


def test_event_payload_defaults_to_none():
    event = Event(EventType.SESSION_DIED)
    assert event.payload is None
    assert event.type is EventType.SESSION_DIED