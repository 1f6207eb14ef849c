from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Generic, Iterable, Iterator, List, TypeVar

T = TypeVar("T")


class Shared(Generic[T]):
    """A value guarded by its own re-entrant lock.

    Mutate the value only inside ``with shared.lock() as value:``.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = threading.RLock()

    @contextmanager
    def lock(self) -> Iterator[T]:
        with self._lock:
            yield self._value

    def set(self, value: T) -> None:
        with self._lock:
            self._value = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class SharedList(Shared[List[T]]):
    """A lock-protected ordered pool.

    The pool lock guards the structure of the list; elements that are
    themselves ``Shared`` carry their own locks. Always take the pool lock
    before an element lock.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        super().__init__(list(items))

    def snapshot(self) -> List[T]:
        """Return a shallow copy of the current items."""
        with self.lock() as items:
            return list(items)

    def replace(self, items: Iterable[T]) -> None:
        """Swap the whole pool for ``items`` in a single assignment."""
        new_items = list(items)
        with self._lock:
            self._value = new_items

    def __len__(self) -> int:
        with self.lock() as items:
            return len(items)

    def __getitem__(self, index: int) -> T:
        with self.lock() as items:
            return items[index]
