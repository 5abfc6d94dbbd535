import threading

import pytest
from conftest import FakeHost, tap

from statusbar_keyboard.dispatch import Dispatcher, EventClassifier
from statusbar_keyboard.events import PromptContext, RawEvent
from statusbar_keyboard.key_types import Surface
from statusbar_keyboard.reader import KeyReader
from statusbar_keyboard.render import CallAction, KeysAction, Region


def make_reader(host, **kwargs):
    dispatcher = Dispatcher(EventClassifier(host), redraw=lambda: None)
    return KeyReader(host, dispatcher, **kwargs)


def test_motion_is_skipped():
    host = FakeHost([RawEvent.motion(1, 1), RawEvent.motion(2, 1), RawEvent.key_event(97)])
    reader = KeyReader(host)
    assert reader.read_key() == 97
    assert not reader.last_synthesized


def test_redraw_before_blocking():
    calls = []
    host = FakeHost([RawEvent.key_event(97)])
    reader = KeyReader(host, redraw=lambda: calls.append(len(host.events)))
    reader.read_key()
    # redrawn while the event was still unread
    assert calls == [1]


def test_unrelated_pointer_event_is_returned():
    event = RawEvent.press(3, 4, 7)
    host = FakeHost([event])
    assert make_reader(host).read_key() is event


def test_tap_is_translated_and_press_swallowed():
    host = FakeHost()
    host.content[Surface.status] = [Region("a", KeysAction((ord("a"),)))]
    host.feed(tap(Surface.status, 0))
    reader = make_reader(host)
    assert reader.read_key() == ord("a")
    assert reader.last_synthesized
    assert not host.events


def test_multi_key_tap_queues_the_rest():
    host = FakeHost()
    host.content[Surface.status] = [Region("xy", CallAction(lambda ctx: (ord("x"), ord("y"))))]
    host.feed(tap(Surface.status, 0), RawEvent.key_event(ord("z")))
    reader = make_reader(host)
    assert [reader.read_key() for _ in range(3)] == [ord("x"), ord("y"), ord("z")]
    assert not reader.last_synthesized


def test_empty_result_reads_on():
    host = FakeHost()
    host.content[Surface.status] = [Region("nothing", CallAction(lambda ctx: ()))]
    host.feed(tap(Surface.status, 0), RawEvent.key_event(ord("q")))
    assert make_reader(host).read_key() == ord("q")


def test_nested_reads_track_depth():
    host = FakeHost()
    depths = []
    reader = None

    def nested(ctx):
        depths.append(reader.depth)
        return (reader.read_key(ctx),)

    host.content[Surface.status] = [Region("n", CallAction(nested))]
    host.feed(tap(Surface.status, 0), RawEvent.key_event(ord("k")))
    reader = make_reader(host)
    assert reader.read_key(PromptContext("M-x")) == ord("k")
    assert depths == [1]
    assert reader.depth == 0


def test_unread_events_come_first():
    host = FakeHost([RawEvent.key_event(2)])
    reader = KeyReader(host)
    reader.unread(RawEvent.key_event(1))
    assert reader.read_key() == 1
    assert reader.read_key() == 2


def test_other_threads_are_refused():
    reader = KeyReader(FakeHost([RawEvent.key_event(1)]))
    errors = []

    def worker():
        try:
            reader.read_key()
        except RuntimeError as exc:
            errors.append(exc)

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join()
    assert len(errors) == 1


def test_exhausted_source_propagates():
    with pytest.raises(AssertionError):
        KeyReader(FakeHost()).read_key()
