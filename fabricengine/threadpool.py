"""A resizable pool of worker threads with timeouts and a synchronous test mode."""

from __future__ import annotations

import logging
import os
import threading
import time
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable

__all__ = ["ThreadPoolExecutor", "ThreadPoolTimeoutError"]

_log = logging.getLogger(__name__)


class ThreadPoolTimeoutError(RuntimeError):
    """Raised through a future when its task did not finish in time."""


def _default_thread_count() -> int:
    return max(1, os.cpu_count() or 1)


class ThreadPoolExecutor:
    """Runs submitted callables on worker threads and hands back futures.

    While paused for testing, submitted tasks run at once in the submitting thread.
    """

    def __init__(self, thread_count: int | None = None) -> None:
        if thread_count is None:
            thread_count = _default_thread_count()
        if thread_count < 1:
            raise ValueError("Thread count must be at least 1")
        self._queue: deque[Callable[[], None]] = deque()
        self._cond = threading.Condition()
        self._workers: list[threading.Thread] = []
        self._retiring = 0
        self._thread_count = 0
        self._shutdown = False
        self._paused = False
        self._spawn(thread_count)

    def __enter__(self) -> ThreadPoolExecutor:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    @property
    def thread_count(self) -> int:
        with self._cond:
            return self._thread_count

    def set_thread_count(self, count: int) -> None:
        """Grow or shrink the pool to ``count`` workers."""
        if count < 1:
            raise ValueError("Thread count must be at least 1")
        with self._cond:
            if self._shutdown:
                raise RuntimeError("Cannot resize a stopped ThreadPoolExecutor")
            current = self._thread_count
            if count > current:
                self._spawn(count - current)
            elif count < current:
                self._retiring += current - count
                self._thread_count = count
                self._cond.notify_all()

    @property
    def queued_task_count(self) -> int:
        with self._cond:
            return len(self._queue)

    def is_shutdown(self) -> bool:
        with self._cond:
            return self._shutdown

    def is_paused_for_testing(self) -> bool:
        with self._cond:
            return self._paused

    def pause_for_testing(self) -> None:
        with self._cond:
            self._paused = True

    def resume_after_testing(self) -> None:
        with self._cond:
            self._paused = False

    def submit(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Schedule ``func(*args, **kwargs)``; its result or exception goes to the future."""
        future: Future = Future()

        def task() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = func(*args, **kwargs)
            except BaseException as exc:
                _log.error("Exception in thread pool task: %s", exc)
                future.set_exception(exc)
            else:
                future.set_result(result)

        with self._cond:
            if self._shutdown:
                raise RuntimeError("Cannot submit task to stopped ThreadPoolExecutor")
            run_inline = self._paused
            if not run_inline:
                self._queue.append(task)
                self._cond.notify()
        if run_inline:
            task()
        return future

    def submit_with_timeout(
        self, timeout: float, func: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> Future:
        """Like :meth:`submit`, but the future fails with
        :class:`ThreadPoolTimeoutError` if ``func`` runs longer than ``timeout`` seconds.
        """
        outer: Future = Future()

        def guarded() -> None:
            inner: Future = Future()

            def run_inner() -> None:
                try:
                    inner.set_result(func(*args, **kwargs))
                except BaseException as exc:
                    inner.set_exception(exc)

            threading.Thread(target=run_inner, daemon=True).start()
            try:
                outer.set_result(inner.result(timeout=timeout))
            except TimeoutError:
                outer.set_exception(ThreadPoolTimeoutError("Task timed out"))
            except BaseException as exc:
                outer.set_exception(exc)

        self.submit(guarded)
        return outer

    def shutdown(self, timeout: float = 1.0) -> bool:
        """Stop accepting tasks, let workers finish the queue and wait for them.

        Returns True if every worker stopped within ``timeout`` seconds.
        """
        with self._cond:
            self._shutdown = True
            self._cond.notify_all()
            workers = list(self._workers)
        deadline = time.monotonic() + timeout
        current = threading.current_thread()
        for worker in workers:
            if worker is current:
                continue
            worker.join(max(0.0, deadline - time.monotonic()))
        return not any(w.is_alive() for w in workers if w is not current)

    def _spawn(self, count: int) -> None:
        for _ in range(count):
            worker = threading.Thread(target=self._work, daemon=True)
            self._workers.append(worker)
            self._thread_count += 1
            worker.start()

    def _work(self) -> None:
        me = threading.current_thread()
        while True:
            with self._cond:
                while not self._queue and not self._shutdown and not self._retiring:
                    self._cond.wait()
                if self._retiring and not self._shutdown:
                    self._retiring -= 1
                    self._workers.remove(me)
                    return
                if not self._queue:
                    return
                task = self._queue.popleft()
            task()