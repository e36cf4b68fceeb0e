"""Background delivery of records to the notifier fan-out.

Purpose
-------
Keep slow notification channels away from the ``finalize`` call site: the
logger hands each record to :class:`QueueAdapter`, whose worker thread runs
the fan-out.

System Role
-----------
Selected by ``NotifyLogger(dispatch="queue")``. Records are delivered in
the order they were accepted, but the producer never learns the notifier
outcome; only :meth:`QueueAdapter.stop` (reached via ``NotifyLogger.close``)
waits for pending deliveries.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from typing import Any

from lib_log_notify.domain.record import LogRecord

LOGGER = logging.getLogger(__name__)

_POLICIES = ("block", "drop")
_STOP = object()


class QueueAdapter:
    """Feed records to ``worker`` on a daemon thread.

    Parameters
    ----------
    worker:
        Called once per accepted record, normally the notifier fan-out.
    maxsize:
        Capacity of the pending queue.
    drop_policy:
        ``"block"`` makes :meth:`put` wait up to ``timeout`` for room;
        ``"drop"`` rejects the record immediately when the queue is full.
    on_drop:
        Optional callback receiving every rejected or discarded record.
    timeout:
        Producer wait under the blocking policy (``None`` waits forever).
    stop_timeout:
        Default deadline for :meth:`stop`.
    diagnostic:
        Optional ``(name, payload)`` hook for ``queue_*`` events.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_notify.domain.levels import LogLevel
    >>> seen = []
    >>> adapter = QueueAdapter(worker=lambda record: seen.append(record.message))
    >>> adapter.start()
    >>> adapter.put(LogRecord('svc', datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.ERROR, 'disk full'))
    True
    >>> adapter.stop()
    >>> seen
    ['disk full']
    """

    def __init__(
        self,
        *,
        worker: Callable[[LogRecord], Any],
        maxsize: int = 2048,
        drop_policy: str = "block",
        on_drop: Callable[[LogRecord], None] | None = None,
        timeout: float | None = 1.0,
        stop_timeout: float | None = 5.0,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
    ) -> None:
        policy = drop_policy.lower()
        if policy not in _POLICIES:
            raise ValueError(f"drop_policy must be one of {_POLICIES}, got {drop_policy!r}")
        if maxsize < 1:
            raise ValueError(f"maxsize must be at least 1, got {maxsize}")
        self._worker = worker
        self._policy = policy
        self._on_drop = on_drop
        self._put_timeout = timeout
        self._stop_timeout = stop_timeout
        self._diagnostic = diagnostic
        self._pending: queue.Queue[Any] = queue.Queue(maxsize=maxsize)
        self._idle = threading.Condition()
        self._outstanding = 0
        self._thread: threading.Thread | None = None
        self._accepting = False
        self._failed = False

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def worker_failed(self) -> bool:
        """``True`` once the worker raised since the last :meth:`start`."""
        return self._failed

    def start(self) -> None:
        if self.running:
            return
        self._failed = False
        self._accepting = True
        self._thread = threading.Thread(target=self._loop, name="lib_log_notify-delivery", daemon=True)
        self._thread.start()

    def put(self, record: LogRecord) -> bool:
        """Offer ``record``; return ``False`` when it was rejected.

        Records are rejected when the queue is full under the configured
        policy, or when the worker is not running (before :meth:`start` or
        after :meth:`stop`).
        """
        if not self._accepting:
            self._report_drop(record)
            return False
        with self._idle:
            self._outstanding += 1
        try:
            if self._policy == "drop":
                self._pending.put_nowait(record)
            else:
                self._pending.put(record, timeout=self._put_timeout)
        except queue.Full:
            self._settle()
            self._report_drop(record)
            return False
        return True

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Wait for every accepted record to be processed."""
        with self._idle:
            return self._idle.wait_for(lambda: self._outstanding == 0, timeout)

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        """Stop the worker, delivering pending records first unless ``drain`` is false.

        Raises
        ------
        RuntimeError
            When the worker is still busy after the deadline.
        """
        thread = self._thread
        if thread is None:
            return
        limit = self._stop_timeout if timeout is None else timeout
        deadline = None if limit is None else time.monotonic() + limit
        self._accepting = False
        if not drain:
            self._discard_pending()
        self._post_stop(deadline)
        thread.join(None if deadline is None else max(0.0, deadline - time.monotonic()))
        if thread.is_alive():
            self._emit("queue_shutdown_timeout", {"timeout": limit})
            raise RuntimeError(f"delivery worker did not stop within {limit} seconds")
        self._thread = None

    def _loop(self) -> None:
        while True:
            item = self._pending.get()
            if item is _STOP:
                return
            try:
                self._worker(item)
            except Exception as exc:  # noqa: BLE001
                self._failed = True
                LOGGER.error("Queue worker raised an exception; continuing", exc_info=exc)
                self._emit("queue_worker_error", {"level": item.level.name, "exception": repr(exc)})
            finally:
                self._settle()

    def _settle(self) -> None:
        with self._idle:
            self._outstanding -= 1
            if self._outstanding == 0:
                self._idle.notify_all()

    def _post_stop(self, deadline: float | None) -> None:
        # A full queue must still accept the stop marker; evict the oldest record.
        while True:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            try:
                self._pending.put(_STOP, timeout=remaining)
                return
            except queue.Full:
                self._discard_one()

    def _discard_pending(self) -> None:
        while self._discard_one():
            pass

    def _discard_one(self) -> bool:
        try:
            item = self._pending.get_nowait()
        except queue.Empty:
            return False
        if item is not _STOP:
            self._settle()
            self._report_drop(item)
        return True

    def _report_drop(self, record: LogRecord) -> None:
        self._emit("queue_dropped", {"level": record.level.name, "service": record.service})
        if self._on_drop is None:
            return
        try:
            self._on_drop(record)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Queue drop handler raised an exception; continuing", exc_info=exc)

    def _emit(self, name: str, payload: dict[str, Any]) -> None:
        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Queue diagnostic hook raised while reporting %s", name, exc_info=exc)


__all__ = ["QueueAdapter"]
