"""
Single-slot, last-write-wins buffers shared between subscriber callbacks and the tick.
"""
import threading
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class LatestValueSlot(Generic[T]):
    """
    Holds at most one value. ``put`` overwrites whatever is stored, ``take`` returns
    the stored value and empties the slot. Values overwritten before a ``take`` are lost.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self.overwritten = 0

    def put(self, value: T) -> None:
        with self._lock:
            if self._value is not None:
                self.overwritten += 1
            self._value = value

    def take(self) -> Optional[T]:
        with self._lock:
            value, self._value = self._value, None
            return value

    def peek(self) -> Optional[T]:
        with self._lock:
            return self._value

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return self._value is None
