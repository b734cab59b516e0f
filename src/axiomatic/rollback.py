"""Buffering iterator with nested checkpoints for backtracking consumers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

from axiomatic.errors import CheckpointError

T = TypeVar("T")


class Checkpoint:
    """Handle for one scoped checkpoint; see ``CheckpointingIterator.checkpoint``."""

    def __init__(self, position: int) -> None:
        self.position = position
        self.committed = False

    def commit(self) -> None:
        self.committed = True


class CheckpointingIterator(Generic[T]):
    """Wraps an iterable and remembers every value it has produced.

    The read cursor can be saved on a checkpoint stack, rewound to the most
    recent checkpoint, or moved back a single step. Values already pulled
    from upstream are replayed from an append-only log, so a rewound reader
    sees exactly the same elements again without re-running the source.
    """

    def __init__(self, source: Iterable[T]) -> None:
        self._upstream: Iterator[T] = iter(source)
        self._log: list[T] = []
        self._checkpoints: list[int] = []
        self._cursor = 0

    def __iter__(self) -> CheckpointingIterator[T]:
        return self

    def __next__(self) -> T:
        if self._cursor < len(self._log):
            value = self._log[self._cursor]
        else:
            value = next(self._upstream)
            self._log.append(value)
        self._cursor += 1
        return value

    def next(self) -> T:
        return self.__next__()

    @property
    def position(self) -> int:
        return self._cursor

    @property
    def depth(self) -> int:
        """Number of active checkpoints."""
        return len(self._checkpoints)

    @property
    def produced(self) -> int:
        """Number of values pulled from upstream so far."""
        return len(self._log)

    @property
    def furthest(self) -> T | None:
        """The last value pulled from upstream, however far we rewound since."""
        return self._log[-1] if self._log else None

    def create_checkpoint(self) -> None:
        self._checkpoints.append(self._cursor)

    def rollback(self) -> None:
        if not self._checkpoints:
            raise CheckpointError("cannot roll back: no checkpoint is active")
        self._cursor = self._checkpoints.pop()

    def commit_checkpoint(self) -> None:
        """Drop the most recent checkpoint and keep the current position."""
        if not self._checkpoints:
            raise CheckpointError("cannot commit: no checkpoint is active")
        self._checkpoints.pop()

    def step_back(self) -> None:
        if self._cursor == 0:
            raise CheckpointError("cannot step back before the first value")
        self._cursor -= 1

    @contextmanager
    def checkpoint(self) -> Iterator[Checkpoint]:
        """Hold one checkpoint for the duration of a ``with`` block.

        On exit the checkpoint is committed if ``commit()`` was called on the
        handle and rolled back otherwise, including when the block raises.
        """
        self.create_checkpoint()
        handle = Checkpoint(self._cursor)
        try:
            yield handle
        except BaseException:
            self.rollback()
            raise
        if handle.committed:
            self.commit_checkpoint()
        else:
            self.rollback()
