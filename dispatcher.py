"""
Run factorizations off the caller's thread, one at a time.

factorize() can take anywhere from microseconds to hours and has no
suspension points, so a caller that must stay responsive hands requests to
a FactorizationDispatcher. The dispatcher owns a single permit: while one
request is in flight every other submission is rejected with
FactorizationBusyError.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from factorization import (
    DEFAULT_BATCH_SIZE,
    FactorizationBusyError,
    factor_report,
    parse_input,
)

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "Waiting on current execution -- please wait"


class FactorizationDispatcher:
    """Single-permit dispatcher for factor_report() requests."""

    def __init__(self, batch_size: int = DEFAULT_BATCH_SIZE, superscript: bool = True):
        self.batch_size = batch_size
        self.superscript = superscript
        self._permit = threading.Lock()
        self._executor = None
        self._cancel_event = None

    def _get_executor(self) -> ThreadPoolExecutor:
        """Get or create the worker (lazy initialization)."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="factorizer")
        return self._executor

    @property
    def busy(self) -> bool:
        return self._permit.locked()

    def submit(self, text: str) -> Future:
        """
        Validate text and start factorizing it on the worker thread.

        Returns:
            Future resolving to the report text of factor_report()

        Raises:
            FactorizationBusyError: another request is still running
            InvalidInputError: text failed parse_input()
        """
        if not self._permit.acquire(blocking=False):
            logger.info("rejected %r: factorization in progress", text)
            raise FactorizationBusyError(BUSY_MESSAGE)
        try:
            n = parse_input(text)
            cancel_event = threading.Event()
            self._cancel_event = cancel_event
            future = self._get_executor().submit(self._run, n, cancel_event)
        except BaseException:
            self._permit.release()
            raise
        logger.info("submitted %d", n)
        return future

    def _run(self, n: int, cancel_event: threading.Event) -> str:
        # the permit is released before the future's result is published
        try:
            return factor_report(n, batch_size=self.batch_size, cancel_event=cancel_event,
                                 superscript=self.superscript)
        finally:
            self._permit.release()

    def cancel(self) -> bool:
        """Ask the running request to stop at its next batch. Returns False if nothing is running."""
        if not self.busy or self._cancel_event is None:
            return False
        logger.info("cancelling current factorization")
        self._cancel_event.set()
        return True

    def shutdown(self, wait: bool = True):
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None
