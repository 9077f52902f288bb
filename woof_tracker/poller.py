"""Periodic poll driver with an explicit start/stop lifecycle."""

import logging
import threading
from typing import Callable, Optional

from .models import CycleResult

logger = logging.getLogger(__name__)

Sink = Callable[[CycleResult], None]


class Poller:
    """
    Runs a poll cycle once on start and then every ``interval_seconds``.

    Cycles run sequentially on a single worker thread, so at most one is in
    flight. A cycle that finishes after stop() is discarded instead of being
    handed to the sink. Each start() gets its own stop event, so a worker left
    over from an earlier run can never resume.
    """

    def __init__(self, cycle: Callable[[], CycleResult], sink: Sink, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.cycle = cycle
        self.sink = sink
        self.interval_seconds = interval_seconds
        self.latest: Optional[CycleResult] = None
        self._stop = threading.Event()
        # Held while checking the stop flag and delivering, so stop() cannot
        # land between the two.
        self._deliver_lock = threading.RLock()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """
        Start polling in a background thread.

        Raises:
            RuntimeError: If a worker is still alive, including one that
                outlived a stop() whose join timed out.
        """
        if self.running:
            raise RuntimeError("Poller is already running")
        stop_event = threading.Event()
        self._stop = stop_event
        self._thread = threading.Thread(
            target=self._run, args=(stop_event,), name="woof-poller", daemon=True
        )
        self._thread.start()
        logger.info(f"Poller started (every {self.interval_seconds:g}s)")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop polling and wait up to ``timeout`` for the worker thread to exit."""
        with self._deliver_lock:
            self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Poller worker still finishing a cycle; its result will be discarded")
                return
        self._thread = None
        logger.info("Poller stopped")

    def wait(self) -> None:
        """Block until stop() is called."""
        self._stop.wait()

    def poll_once(self, stop_event: Optional[threading.Event] = None) -> Optional[CycleResult]:
        """
        Run one cycle and deliver it to the sink.

        Returns:
            The delivered result, or None if the poller was stopped while
            the cycle was in flight.
        """
        stop_event = stop_event or self._stop
        try:
            result = self.cycle()
        except Exception as e:
            logger.error(f"Poll cycle raised: {e}", exc_info=True)
            result = CycleResult(error=f"Unexpected error: {e}")

        with self._deliver_lock:
            if stop_event.is_set():
                logger.debug("Discarding cycle result that completed after stop")
                return None

            self.latest = result
            try:
                self.sink(result)
            except Exception as e:
                logger.error(f"Sink failed to render cycle result: {e}", exc_info=True)
        return result

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            self.poll_once(stop_event)
            stop_event.wait(self.interval_seconds)
