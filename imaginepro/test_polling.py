"""
Unit tests for the job status poll loop
"""

import threading
import unittest

from .errors import APIError, PollCancelledError, PollTimeoutError
from .polling import poll_until_done
from .schemas import MessageResponse, VideoMessageResponse


class FakeClock:
    """Manual clock; sleep() advances it instead of blocking"""

    def __init__(self, fetch_latency: float = 0.0):
        self.now = 100.0
        self.fetch_latency = fetch_latency
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedFetch:
    """Returns the given snapshots in order, counting calls"""

    def __init__(self, snapshots, clock: FakeClock = None):
        self.snapshots = list(snapshots)
        self.calls = []
        self.clock = clock

    def __call__(self, job_id: str):
        self.calls.append(job_id)
        if self.clock is not None:
            self.clock.now += self.clock.fetch_latency
        if len(self.snapshots) == 1:
            return self.snapshots[0]
        return self.snapshots.pop(0)


def snap(status: str, **kwargs) -> MessageResponse:
    return MessageResponse(status=status, **kwargs)


class TestPollUntilDone(unittest.TestCase):
    def test_returns_first_terminal_snapshot(self):
        """Stops at the first DONE and does not fetch again"""
        clock = FakeClock()
        done = snap("DONE", progress=100, uri="https://cdn.example.com/img.jpg")
        fetch = ScriptedFetch([snap("QUEUED"), snap("PROCESSING", progress=40), done, snap("PROCESSING")])

        result = poll_until_done(fetch, "abc123", interval=2.0, timeout=60.0, clock=clock, sleep=clock.sleep)

        self.assertIs(result, done)
        self.assertEqual(len(fetch.calls), 3)
        self.assertEqual(clock.sleeps, [2.0, 2.0])

    def test_fail_status_is_returned_not_raised(self):
        clock = FakeClock()
        failed = snap("FAIL", error="banned prompt")
        fetch = ScriptedFetch([snap("PROCESSING"), failed])

        result = poll_until_done(fetch, "abc123", interval=1.0, timeout=60.0, clock=clock, sleep=clock.sleep)

        self.assertEqual(result.status, "FAIL")
        self.assertEqual(result.error, "banned prompt")

    def test_terminal_on_first_fetch_never_waits(self):
        clock = FakeClock()
        fetch = ScriptedFetch([snap("DONE", progress=100)])

        poll_until_done(fetch, "abc123", interval=1.0, timeout=0.0, clock=clock, sleep=clock.sleep)

        self.assertEqual(clock.sleeps, [])
        self.assertEqual(len(fetch.calls), 1)

    def test_end_to_end_scenario(self):
        """QUEUED -> PROCESSING 40% -> DONE after exactly two waits"""
        clock = FakeClock()
        fetch = ScriptedFetch([
            snap("QUEUED", messageId="abc123"),
            snap("PROCESSING", messageId="abc123", progress=40),
            snap("DONE", messageId="abc123", progress=100, uri="https://cdn.example.com/img.jpg"),
        ])

        result = poll_until_done(fetch, "abc123", interval=2.0, timeout=1800.0, clock=clock, sleep=clock.sleep)

        self.assertEqual(result.uri, "https://cdn.example.com/img.jpg")
        self.assertEqual(result.progress, 100)
        self.assertEqual(len(clock.sleeps), 2)
        self.assertEqual(fetch.calls, ["abc123", "abc123", "abc123"])

    def test_timeout_raises(self):
        clock = FakeClock()
        fetch = ScriptedFetch([snap("PROCESSING")])

        with self.assertRaises(PollTimeoutError) as ctx:
            poll_until_done(fetch, "abc123", interval=1.0, timeout=5.0, clock=clock, sleep=clock.sleep)

        self.assertEqual(ctx.exception.job_id, "abc123")
        self.assertGreater(ctx.exception.elapsed, 5.0)
        self.assertIsInstance(ctx.exception, TimeoutError)

    def test_timeout_bounded_by_interval_and_fetch_latency(self):
        """Overrun past the budget is at most one interval plus one fetch"""
        clock = FakeClock(fetch_latency=0.3)
        fetch = ScriptedFetch([snap("PROCESSING")], clock=clock)

        with self.assertRaises(PollTimeoutError) as ctx:
            poll_until_done(fetch, "abc123", interval=2.0, timeout=7.0, clock=clock, sleep=clock.sleep)

        self.assertLessEqual(ctx.exception.elapsed, 7.0 + 2.0 + 0.3)

    def test_timeout_measured_from_first_call(self):
        clock = FakeClock()
        fetch = ScriptedFetch([snap("PROCESSING")])

        with self.assertRaises(PollTimeoutError):
            poll_until_done(fetch, "abc123", interval=1.0, timeout=3.0, clock=clock, sleep=clock.sleep)

        # Checks at t=0,1,2,3 are within budget; t=4 exceeds it.
        self.assertEqual(len(fetch.calls), 5)

    def test_unknown_status_keeps_polling(self):
        clock = FakeClock()
        fetch = ScriptedFetch([snap("UPLOADING"), snap(""), snap("DONE")])

        result = poll_until_done(fetch, "abc123", interval=1.0, timeout=60.0, clock=clock, sleep=clock.sleep)

        self.assertEqual(result.status, "DONE")
        self.assertEqual(len(fetch.calls), 3)

    def test_fetch_errors_propagate_unchanged(self):
        error = APIError("not found", status_code=404)

        def fetch(job_id):
            raise error

        with self.assertRaises(APIError) as ctx:
            poll_until_done(fetch, "abc123", interval=1.0, timeout=60.0)

        self.assertIs(ctx.exception, error)

    def test_cancel_event_stops_polling(self):
        cancel = threading.Event()
        cancel.set()
        fetch = ScriptedFetch([snap("PROCESSING")])

        with self.assertRaises(PollCancelledError) as ctx:
            poll_until_done(fetch, "abc123", interval=5.0, timeout=60.0, cancel_event=cancel)

        self.assertEqual(ctx.exception.job_id, "abc123")
        self.assertEqual(len(fetch.calls), 1)

    def test_cancel_event_not_set_waits_then_finishes(self):
        cancel = threading.Event()
        fetch = ScriptedFetch([snap("PROCESSING"), snap("DONE")])

        result = poll_until_done(fetch, "abc123", interval=0.01, timeout=60.0, cancel_event=cancel)

        self.assertEqual(result.status, "DONE")

    def test_video_snapshots(self):
        clock = FakeClock()
        fetch = ScriptedFetch([
            VideoMessageResponse(status="PROCESSING", progress=10),
            VideoMessageResponse(status="DONE", progress=100, videoUrl="https://cdn.example.com/v.mp4"),
        ])

        result = poll_until_done(fetch, "vid1", interval=2.0, timeout=900.0, clock=clock, sleep=clock.sleep)

        self.assertEqual(result.videoUrl, "https://cdn.example.com/v.mp4")

    def test_custom_terminal_predicate(self):
        clock = FakeClock()
        fetch = ScriptedFetch([snap("PROCESSING", progress=10), snap("PROCESSING", progress=60)])

        result = poll_until_done(
            fetch, "abc123", interval=1.0, timeout=60.0,
            is_done=lambda s: s.progress >= 50, clock=clock, sleep=clock.sleep,
        )

        self.assertEqual(result.progress, 60)

    def test_invalid_interval_and_timeout(self):
        fetch = ScriptedFetch([snap("DONE")])
        with self.assertRaises(ValueError):
            poll_until_done(fetch, "abc123", interval=0, timeout=10.0)
        with self.assertRaises(ValueError):
            poll_until_done(fetch, "abc123", interval=1.0, timeout=-1.0)
        self.assertEqual(fetch.calls, [])


if __name__ == "__main__":
    unittest.main()
