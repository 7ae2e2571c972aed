"""
Data-access facade: one named operation per catalog query, uniform (parameters, continuation) shape.

Lifecycle: UNOPENED -> OPEN -> CLOSED (terminal). A failed open lands in FAILED (also terminal).
Queries run on a single worker thread per facade, so access to the handle is serialized
and submissions complete in order. Caller errors (unknown name, wrong arity, facade not
open) raise from call() before anything reaches the store; execution errors are held by
the returned PendingQuery and raised from result().
"""

from __future__ import annotations

import enum
import logging
import threading
import weakref
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from .channel import Continuation, ResultChannel
from .core.errors import QueryTimeoutError, UsageError, WorkshopDbError
from .executor import execute
from .queries import DEFAULT_REGISTRY, QueryRegistry, QueryTemplate
from .store.engine import Record, SQLiteEngine, StoreHandle
from .store.modes import AcquisitionMode, resolve

logger = logging.getLogger(__name__)


class DatabaseState(str, enum.Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"
    FAILED = "failed"


class PendingQuery:
    """Handle for one submitted operation: wait on it, or let the continuation fire."""

    def __init__(self, name: str, future: "Future[List[Record]]", channel: ResultChannel) -> None:
        self.name = name
        self.future = future
        self.channel = channel

    def done(self) -> bool:
        return self.future.done()

    def result(self, timeout: Optional[float] = None) -> List[Record]:
        """
        Records on success; re-raises the execution error otherwise.
        On timeout the continuation is suppressed and QueryTimeoutError is raised.
        """
        try:
            return self.future.result(timeout=timeout)
        except FutureTimeoutError:
            if not self.channel.abandon():
                # delivered between the timeout and abandon(); the continuation is running
                try:
                    return self.future.result(timeout=timeout)
                except FutureTimeoutError:
                    logger.warning("Continuation for %s still running after %ss", self.name, timeout)
                    raise QueryTimeoutError(
                        f"Continuation for '{self.name}' did not finish within {timeout}s"
                    ) from None
            logger.warning("Query %s timed out after %ss", self.name, timeout)
            raise QueryTimeoutError(f"Query '{self.name}' did not complete within {timeout}s") from None

    def exception(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        return self.future.exception(timeout=timeout)

    def __repr__(self) -> str:
        return f"PendingQuery({self.name!r}, done={self.done()})"


def _operation(db_ref: "weakref.ref[Database]", name: str) -> Callable[..., PendingQuery]:
    """Named entry point that holds the facade weakly, so discarding the facade releases its store."""

    def operation(parameters: Sequence[Any] = (), continuation: Optional[Continuation] = None) -> PendingQuery:
        db = db_ref()
        if db is None:
            raise UsageError(f"Cannot run '{name}': database was discarded")
        return db.call(name, parameters, continuation)

    operation.__name__ = name
    return operation


def _release(pool: Optional[ThreadPoolExecutor], handle: Optional[StoreHandle]) -> None:
    # Also runs at garbage collection, possibly on the worker thread itself: never join here.
    if pool is not None:
        pool.shutdown(wait=False)
    if handle is not None:
        handle.close()


class Database:
    """
    Facade over one exclusively owned store.

    Usage:
        with Database("direct", script_text) as db:
            db.get_one([2], print)          # continuation runs on the worker thread
            rows = db.query("get_range", [100, 200])
    """

    def __init__(
        self,
        mode: Union[str, AcquisitionMode],
        argument: Union[str, Path],
        *,
        engine: Optional[SQLiteEngine] = None,
        registry: Optional[QueryRegistry] = None,
        autoopen: bool = True,
    ) -> None:
        self.mode = AcquisitionMode.parse(mode)
        self.argument = argument
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self._engine = engine
        self._lock = threading.Lock()
        self._state = DatabaseState.UNOPENED
        self._handle: Optional[StoreHandle] = None
        self._pool: Optional[ThreadPoolExecutor] = None
        self._finalizer: Optional[weakref.finalize] = None
        self.operations: Mapping[str, Callable[..., PendingQuery]] = MappingProxyType(
            {name: _operation(weakref.ref(self), name) for name in self.registry.names()}
        )
        if autoopen:
            self.open()

    @classmethod
    def from_config(cls, **kwargs: Any) -> "Database":
        """Build from config.yaml/env (store.mode, store.path, store.script, store.busy_timeout_ms)."""
        from . import config

        mode, argument = config.store_source()
        kwargs.setdefault("engine", SQLiteEngine(busy_timeout_ms=config.busy_timeout_ms()))
        return cls(mode, argument, **kwargs)

    @property
    def state(self) -> DatabaseState:
        return self._state

    def open(self) -> None:
        """UNOPENED -> OPEN. Resolver failures move the facade to FAILED and propagate."""
        with self._lock:
            if self._state is not DatabaseState.UNOPENED:
                raise UsageError(f"Database cannot be opened from state {self._state.value}")
            try:
                handle = resolve(self.mode, self.argument, self._engine)
            except WorkshopDbError:
                self._state = DatabaseState.FAILED
                raise
            self._handle = handle
            self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="workshop-db")
            self._finalizer = weakref.finalize(self, _release, self._pool, self._handle)
            self._state = DatabaseState.OPEN

    def close(self) -> None:
        """OPEN -> CLOSED. Queued queries finish first. Idempotent; do not call from a continuation."""
        with self._lock:
            if self._state is DatabaseState.CLOSED:
                return
            self._state = DatabaseState.CLOSED
            pool, finalizer = self._pool, self._finalizer
        if pool is not None:
            pool.shutdown(wait=True)
        if finalizer is not None:
            finalizer()
        logger.info("Closed database (%s)", self.mode.value)

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def call(
        self,
        name: str,
        parameters: Sequence[Any] = (),
        continuation: Optional[Continuation] = None,
    ) -> PendingQuery:
        """Submit operation `name`; the continuation receives the records once, on success."""
        template = self.registry.lookup(name)
        params = list(parameters)
        template.check_arity(params)
        channel = ResultChannel(continuation)
        with self._lock:
            if self._state is not DatabaseState.OPEN:
                raise UsageError(f"Cannot run '{name}': database is {self._state.value}")
            assert self._pool is not None
            future = self._pool.submit(self._run, template, params, channel)
        return PendingQuery(name, future, channel)

    def query(self, name: str, parameters: Sequence[Any] = (), timeout: Optional[float] = None) -> List[Record]:
        """Blocking form of call(): submit and wait for the records."""
        return self.call(name, parameters).result(timeout=timeout)

    def _run(self, template: QueryTemplate, params: List[Any], channel: ResultChannel) -> List[Record]:
        assert self._handle is not None
        records = execute(self._handle, template, params)
        channel.deliver(records)
        return records

    # Named operations: same contract as call(name, ...)

    def get_all(self, parameters: Sequence[Any] = (), continuation: Optional[Continuation] = None) -> PendingQuery:
        return self.call("get_all", parameters, continuation)

    def get_one(self, parameters: Sequence[Any], continuation: Optional[Continuation] = None) -> PendingQuery:
        return self.call("get_one", parameters, continuation)

    def get_range(self, parameters: Sequence[Any], continuation: Optional[Continuation] = None) -> PendingQuery:
        return self.call("get_range", parameters, continuation)

    def get_stats(self, parameters: Sequence[Any] = (), continuation: Optional[Continuation] = None) -> PendingQuery:
        return self.call("get_stats", parameters, continuation)

    def get_slice(self, parameters: Sequence[Any], continuation: Optional[Continuation] = None) -> PendingQuery:
        return self.call("get_slice", parameters, continuation)

    def __repr__(self) -> str:
        return f"Database(mode={self.mode.value!r}, state={self._state.value!r})"
