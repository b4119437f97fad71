from __future__ import annotations
from typing import Any, Optional, Tuple

# (sequence number, payload)
Job = Tuple[int, Any]


class FrameRequestQueue:
    """
    Coalesces frame requests: at most one frame runs at a time and at most one
    waits behind it. A request arriving while another is already waiting
    replaces it, so the next frame started is always the newest one.
    """

    def __init__(self) -> None:
        self._seq = 0
        self._running: Optional[int] = None
        self._pending: Optional[Job] = None

    @property
    def latest(self) -> int:
        return self._seq

    @property
    def busy(self) -> bool:
        return self._running is not None

    @property
    def pending(self) -> Optional[Job]:
        return self._pending

    def submit(self, payload: Any) -> Optional[Job]:
        """
        Registers a request. Returns the job to start now, or None when a
        frame is already running and the request was parked instead.
        """
        self._seq += 1
        job = (self._seq, payload)
        if self.busy:
            self._pending = job
            return None
        self._running = self._seq
        return job

    def finish(self, seq: int) -> Optional[Job]:
        """
        Marks the running frame done and hands back the parked job, if any.
        """
        if seq != self._running:
            return None
        self._running = None
        job, self._pending = self._pending, None
        if job is not None:
            self._running = job[0]
        return job

    def clear(self) -> None:
        self._pending = None
