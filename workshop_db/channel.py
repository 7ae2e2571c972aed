"""
Result channel: delivers one query's records to its continuation exactly once, on success only.
A channel can be abandoned (timeout); an abandoned channel never delivers.
"""

from __future__ import annotations

import threading
from typing import Callable, List, Optional

from .store.engine import Record

Continuation = Callable[[List[Record]], None]


class ResultChannel:
    def __init__(self, continuation: Optional[Continuation] = None) -> None:
        if continuation is not None and not callable(continuation):
            raise TypeError(f"continuation must be callable, got {type(continuation).__name__}")
        self._continuation = continuation
        self._lock = threading.Lock()
        self._delivered = False
        self._abandoned = False

    @property
    def delivered(self) -> bool:
        return self._delivered

    @property
    def abandoned(self) -> bool:
        return self._abandoned

    def deliver(self, records: List[Record]) -> bool:
        """
        Hand records to the continuation. Returns False (and does nothing) if already
        delivered or abandoned. The continuation runs outside the lock.
        """
        with self._lock:
            if self._delivered or self._abandoned:
                return False
            self._delivered = True
        if self._continuation is not None:
            self._continuation(records)
        return True

    def abandon(self) -> bool:
        """Suppress delivery. Returns False if the records were already delivered."""
        with self._lock:
            if self._delivered:
                return False
            self._abandoned = True
            return True
