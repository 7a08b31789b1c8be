# launchpad_indexer/pipeline/runner.py

import threading
from typing import Optional

from ..core.logging import LoggingMixin
from ..types import IndexerError
from .indexing_pipeline import IndexingPipeline, IterationResult, IterationOutcome


class IndexingRunner(LoggingMixin):
    """
    Drives IndexingPipeline iterations one after another.

    Exactly one iteration runs at a time; the next one starts only after the
    previous iteration and its backoff delay are over. stop() interrupts the
    delay. Fatal indexer errors stop the loop and are re-raised so the
    process supervisor can decide what to do.
    """

    def __init__(self, pipeline: IndexingPipeline):
        self.pipeline = pipeline
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self.iterations = 0
        self.last_result: Optional[IterationResult] = None

    @property
    def running(self) -> bool:
        return self._lock.locked()

    def stop(self) -> None:
        self.log_info("Stop requested")
        self._stop_event.set()

    def run_once(self) -> IterationResult:
        with self._lock:
            return self._iterate()

    def start(self, max_iterations: Optional[int] = None) -> None:
        if not self._lock.acquire(blocking=False):
            raise RuntimeError("Indexing runner is already running")

        self._stop_event.clear()
        self.log_info("Starting indexing loop", max_iterations=max_iterations)
        try:
            while not self._stop_event.is_set():
                result = self._iterate()

                if max_iterations is not None and self.iterations >= max_iterations:
                    break

                if result.delay > 0:
                    self._stop_event.wait(result.delay)
        finally:
            self._lock.release()
            self.log_info("Indexing loop stopped", iterations=self.iterations)

    def _iterate(self) -> IterationResult:
        try:
            result = self.pipeline.run_iteration()
        except IndexerError as e:
            self.log_critical("Indexing halted by fatal error",
                              error=str(e),
                              exception_type=type(e).__name__)
            raise

        self.iterations += 1
        self.last_result = result
        if result.outcome is IterationOutcome.ERROR:
            self.log_debug("Iteration failed, backing off", delay=result.delay)
        return result
