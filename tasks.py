"""Background execution of long-running operations.

Report rendering and backup restores run on a worker thread so the caller is
not blocked. Each job runs to completion or fails; there is no cancellation.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional
from logger import get_logger

logger = get_logger()


class BackgroundRunner:
    """Runs jobs on a small thread pool and reports their outcome.

    Args:
        max_workers: Number of worker threads.
    """

    def __init__(self, max_workers: int = 1):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="quandary-job"
        )

    def submit(
        self,
        fn: Callable,
        *args,
        on_success: Optional[Callable] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        **kwargs,
    ) -> Future:
        """Schedule fn(*args, **kwargs) on a worker thread.

        Args:
            fn: Job to run.
            on_success: Called with the job's return value when it succeeds.
            on_error: Called with the raised exception when it fails.

        Returns:
            Future for the job; its result() re-raises the job's exception.
        """
        future = self._executor.submit(fn, *args, **kwargs)

        def _report(done: Future) -> None:
            error = done.exception()
            if error is not None:
                logger.debug(f"Background job {fn.__name__} failed: {error}")
                if on_error:
                    on_error(error)
            elif on_success:
                on_success(done.result())

        future.add_done_callback(_report)
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "BackgroundRunner":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown(wait=True)
