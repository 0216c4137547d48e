"""
Unit tests for the token relay state machine.
"""
import threading

import anyio
import pytest

from interview_coach.core.errors import UpstreamFailureError
from interview_coach.services.stream_relay import StreamRelay, StreamState, sse_frame
from tests.helpers import parse_frames


def tokens(*values, fail_at=None):
    def open_stream():
        for index, value in enumerate(values):
            if index == fail_at:
                raise RuntimeError("upstream broke")
            yield value
    return open_stream


def test_sse_frame_keeps_unicode():
    assert sse_frame({"content": "café"}) == 'data: {"content": "café"}\n\n'


def test_relay_completes_and_persists():
    stored = []
    relay = StreamRelay(tokens("Hi", " there"), stored.append).open()
    assert relay.state is StreamState.STREAMING

    frames = parse_frames("".join(relay.frames()))

    assert frames == [{"content": "Hi"}, {"content": " there"}, {"done": True}]
    assert stored == ["Hi there"]
    assert relay.state is StreamState.COMPLETED


def test_relay_empty_stream_persists_empty_reply():
    stored = []
    relay = StreamRelay(tokens(), stored.append).open()

    frames = parse_frames("".join(relay.frames()))

    assert frames == [{"done": True}]
    assert stored == [""]


def test_failure_before_first_token_raises():
    relay = StreamRelay(tokens("a", fail_at=0), lambda text: None, error_message="Failed to start session")

    with pytest.raises(UpstreamFailureError) as exc_info:
        relay.open()

    assert exc_info.value.message == "Failed to start session"
    assert relay.state is StreamState.FAILED


def test_failure_opening_stream_raises():
    def refuse():
        raise ConnectionError("no route to host")

    with pytest.raises(UpstreamFailureError):
        StreamRelay(refuse, lambda text: None).open()


def test_failure_mid_stream_sends_error_frame():
    stored = []
    relay = StreamRelay(tokens("a", "b", "c", fail_at=2), stored.append, error_message="Failed to send message").open()

    frames = parse_frames("".join(relay.frames()))

    assert frames == [{"content": "a"}, {"content": "b"}, {"error": "Failed to send message"}]
    assert stored == []
    assert relay.state is StreamState.FAILED


def test_client_disconnect_drains_and_persists():
    stored = []
    relay = StreamRelay(tokens("one ", "two ", "three"), stored.append).open()
    frames = relay.frames()

    next(frames)
    frames.close()

    assert stored == ["one two three"]
    assert relay.state is StreamState.COMPLETED


def test_relay_cannot_be_reopened():
    relay = StreamRelay(tokens("x"), lambda text: None).open()

    with pytest.raises(RuntimeError):
        relay.open()


def test_frames_require_open_relay():
    relay = StreamRelay(tokens("x"), lambda text: None)

    with pytest.raises(RuntimeError):
        next(relay.frames())


def test_async_stream_relays_all_frames():
    stored = []
    relay = StreamRelay(tokens("Hi", " there"), stored.append).open()

    async def consume():
        return [frame async for frame in relay.stream()]

    frames = parse_frames("".join(anyio.run(consume)))

    assert frames == [{"content": "Hi"}, {"content": " there"}, {"done": True}]
    assert stored == ["Hi there"]


def test_async_stream_close_drains_off_the_event_loop():
    persisted_on = []

    def persist(text):
        persisted_on.append((text, threading.current_thread()))

    relay = StreamRelay(tokens("one ", "two ", "three"), persist).open()

    async def consume_first_then_disconnect():
        frames = relay.stream()
        first = await frames.__anext__()
        await frames.aclose()
        return first, threading.current_thread()

    first, loop_thread = anyio.run(consume_first_then_disconnect)

    assert first == 'data: {"content": "one "}\n\n'
    assert persisted_on[0][0] == "one two three"
    assert persisted_on[0][1] is not loop_thread
    assert relay.state is StreamState.COMPLETED
