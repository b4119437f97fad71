from rendering.request_queue import FrameRequestQueue


def test_first_request_starts_immediately():
    queue = FrameRequestQueue()
    assert queue.submit("a") == (1, "a")
    assert queue.busy
    assert queue.latest == 1


def test_requests_while_busy_are_coalesced():
    queue = FrameRequestQueue()
    queue.submit("a")
    # Holding a key: many requests arrive while frame 1 runs.
    for payload in ("b", "c", "d"):
        assert queue.submit(payload) is None
    assert queue.pending == (4, "d")

    # Only the newest parked request runs next; b and c are never started.
    assert queue.finish(1) == (4, "d")
    assert queue.busy
    assert queue.pending is None
    assert queue.finish(4) is None
    assert not queue.busy


def test_finish_of_unknown_frame_is_ignored():
    queue = FrameRequestQueue()
    queue.submit("a")
    queue.submit("b")
    assert queue.finish(7) is None
    assert queue.busy
    assert queue.pending == (2, "b")


def test_clear_drops_parked_request():
    queue = FrameRequestQueue()
    queue.submit("a")
    queue.submit("b")
    queue.clear()
    assert queue.finish(1) is None
    assert not queue.busy
    assert queue.submit("c") == (3, "c")
