import logging
from typing import Optional

from PySide6.QtCore import QObject, QThread, Signal
from PySide6.QtGui import QImage

from rendering.request_queue import FrameRequestQueue
from rendering.service import FrameService
from ui.session import SessionState
from utils.image_helpers import ndarray_to_qimage

logger = logging.getLogger(__name__)


class FrameWorker(QThread):
    # (rgb frame, width, height, seq)
    frame_done = Signal(QImage, int, int, int)
    # (message, seq)
    failed = Signal(str, int)

    def __init__(self, service: FrameService, state: SessionState, seq: int):
        super().__init__()
        self.service = service
        self.state = state
        self.seq = seq

    def run(self):
        try:
            report = self.service.run_state(self.state, seq=self.seq)
        except Exception as e:
            self.failed.emit(f"[FrameWorker] Render error: {e}", self.seq)
            return
        # Deep copy before emitting across threads
        qimg = ndarray_to_qimage(report.surface.data).copy()
        self.frame_done.emit(qimg, report.surface.width, report.surface.height, self.seq)


class QtRenderBridge(QObject):
    """
    Runs frames off the UI thread and converts the results to Qt signals.

    One worker runs at a time. Requests made while it is busy are parked and
    only the newest parked one is rendered next (latest request wins); a
    frame that finishes after a newer request was made is not displayed.
    """
    image_updated = Signal(QImage, int, int)
    log_text = Signal(str)

    def __init__(self, service: FrameService = None, parent=None):
        super().__init__(parent)
        self.service = service or FrameService()
        self.service.on_log = lambda evt: self.log_text.emit(evt.message)
        self._queue = FrameRequestQueue()
        self._worker: Optional[FrameWorker] = None

    @property
    def busy(self) -> bool:
        return self._queue.busy

    def request(self, state: SessionState) -> int:
        if self.busy:
            logger.debug("Frame %d still running; parking newer request", self._queue.latest)
        job = self._queue.submit(state)
        if job is not None:
            self._start(*job)
        return self._queue.latest

    def stop(self) -> None:
        self._queue.clear()
        if self._worker is not None:
            self._worker.wait()

    def _start(self, seq: int, state: SessionState) -> None:
        worker = FrameWorker(self.service, state, seq)
        worker.frame_done.connect(self._on_frame_done)
        worker.failed.connect(self._on_failed)
        worker.finished.connect(lambda w=worker: self._on_worker_finished(w))
        self._worker = worker
        worker.start()

    # --------- Conversions ---------------------
    def _on_frame_done(self, image: QImage, width: int, height: int, seq: int) -> None:
        if seq != self._queue.latest:
            logger.debug("Dropping stale frame %d (latest is %d)", seq, self._queue.latest)
            return
        self.image_updated.emit(image, width, height)

    def _on_failed(self, message: str, seq: int) -> None:
        logger.error(message)
        if seq == self._queue.latest:
            self.log_text.emit(message)

    def _on_worker_finished(self, worker: FrameWorker) -> None:
        if worker is self._worker:
            self._worker = None
        worker.deleteLater()
        job = self._queue.finish(worker.seq)
        if job is not None:
            self._start(*job)
