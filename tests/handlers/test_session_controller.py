import asyncio

from bolly_beat.domain.models import AppState
from bolly_beat.domain.recognition_scheduler import TickOutcome
from bolly_beat.exceptions import VideoSearchTransportError
from tests.fakes import (
    FakeCapture,
    FakeSpeechStream,
    FakeVideoIndex,
    build_controller,
    make_track,
    make_videos,
)

TRACK_QUERY = "Ram Aayenge Vishal Mishra dance"


def test_denied_microphone_enters_error_state():
    controller = build_controller(capture=FakeCapture(denied=True))

    snapshot = asyncio.run(controller.start())

    assert snapshot.state == AppState.ERROR
    assert not snapshot.has_permission
    assert "microphone" in snapshot.errors
    assert not snapshot.is_listening


def test_start_and_stop_listening():
    stream = FakeSpeechStream()
    controller = build_controller(stream=stream)
    states = []

    async def scenario():
        started = await controller.start()
        states.append(started.state)
        states.append(controller._scheduler.is_running)
        stopped = await controller.stop()
        states.append(stopped.state)
        states.append(controller._scheduler.is_running)

    asyncio.run(scenario())

    assert states == [AppState.LISTENING, True, AppState.IDLE, False]
    assert stream.opened == 1
    assert stream.closed == 1


def test_identified_song_fills_feed():
    index = FakeVideoIndex({TRACK_QUERY: make_videos("r1", "r2")})
    controller = build_controller(index=index)

    async def scenario():
        await controller.start()
        await controller.handle_track(make_track("k1"))
        snapshot = controller.snapshot()
        await controller.shutdown()
        return snapshot

    snapshot = asyncio.run(scenario())

    assert snapshot.state == AppState.DISPLAYING_FEED
    assert snapshot.current_track.key == "k1"
    assert snapshot.latest_query == "ram aayenge vishal mishra"
    assert [v.id for v in snapshot.queue.items] == ["r1", "r2"]


def test_repeated_query_from_transcript_is_ignored():
    index = FakeVideoIndex({TRACK_QUERY: make_videos("r1")})
    controller = build_controller(index=index)

    async def scenario():
        await controller.start()
        await controller.handle_track(make_track("k1"))
        await controller.handle_transcript("  RAM AAYENGE Vishal Mishra ")
        await controller.shutdown()

    asyncio.run(scenario())

    assert index.queries == [TRACK_QUERY]


def test_new_transcript_replaces_upcoming_videos():
    index = FakeVideoIndex(
        {
            TRACK_QUERY: make_videos("r1", "r2"),
            "kajra re kajra re dance": make_videos("k1"),
        }
    )
    controller = build_controller(index=index)

    async def scenario():
        await controller.start()
        await controller.handle_track(make_track("k1"))
        await controller.handle_transcript("kajra re kajra re")
        await controller._queue.wait_for_transitions()
        snapshot = controller.snapshot()
        await controller.shutdown()
        return snapshot

    snapshot = asyncio.run(scenario())

    assert [v.id for v in snapshot.queue.items] == ["k1"]
    assert snapshot.queue.active_query_key == "kajra re kajra re"


def test_listen_again_clears_feed_and_restarts():
    stream = FakeSpeechStream()
    index = FakeVideoIndex({TRACK_QUERY: make_videos("r1")})
    controller = build_controller(index=index, stream=stream)

    async def scenario():
        await controller.start()
        await controller.handle_track(make_track("k1"))
        snapshot = await controller.listen_again()
        await controller.shutdown()
        return snapshot

    snapshot = asyncio.run(scenario())

    assert snapshot.state == AppState.LISTENING
    assert snapshot.queue.items == []
    assert snapshot.current_track is None
    assert snapshot.latest_query is None
    assert stream.opened == 2


def test_unsupported_transcription_keeps_session_running():
    controller = build_controller(stream=FakeSpeechStream(supported=False))

    async def scenario():
        snapshot = await controller.start()
        await controller.shutdown()
        return snapshot

    snapshot = asyncio.run(scenario())

    assert snapshot.state == AppState.LISTENING
    assert not snapshot.transcription_supported
    assert snapshot.errors == {}


def test_search_failure_is_reported_per_subsystem():
    index = FakeVideoIndex(error=VideoSearchTransportError("tum hi ho dance"))
    controller = build_controller(index=index)

    async def scenario():
        await controller.start()
        await controller.handle_transcript("tum hi ho")
        snapshot = controller.snapshot()
        await controller.shutdown()
        return snapshot

    snapshot = asyncio.run(scenario())

    assert snapshot.state == AppState.LISTENING
    assert snapshot.errors == {"search": "Video search failed for query 'tum hi ho dance'"}


def test_feed_navigation():
    index = FakeVideoIndex({TRACK_QUERY: make_videos("r1", "r2")})
    controller = build_controller(index=index)

    async def scenario():
        await controller.start()
        await controller.handle_track(make_track("k1"))
        forward = await controller.go_to_next()
        back = await controller.go_to_previous()
        await controller.shutdown()
        return forward, back

    forward, back = asyncio.run(scenario())

    assert forward.current_index == 1
    assert back.current_index == 0


def test_microphone_lost_mid_session_enters_error_state():
    stream = FakeSpeechStream()
    controller = build_controller(capture=FakeCapture(revoked=True), stream=stream)

    async def scenario():
        started = await controller.start()
        outcome = await controller._scheduler.tick()
        snapshot = controller.snapshot()
        closed = stream.closed
        await controller.shutdown()
        return started, outcome, snapshot, closed

    started, outcome, snapshot, closed = asyncio.run(scenario())

    assert started.state == AppState.LISTENING
    assert outcome == TickOutcome.PERMISSION_DENIED
    assert snapshot.state == AppState.ERROR
    assert not snapshot.has_permission
    assert not snapshot.is_listening
    assert "microphone" in snapshot.errors
    assert not controller._scheduler.is_running
    assert closed == 1


def test_each_start_opens_a_new_session():
    controller = build_controller()

    async def scenario():
        first = await controller.start()
        second = await controller.listen_again()
        await controller.shutdown()
        return first, second

    first, second = asyncio.run(scenario())

    assert first.session_id is not None
    assert second.session_id is not None
    assert first.session_id != second.session_id
