from __future__ import annotations

from collections import deque
from itertools import islice
from typing import Iterable, Iterator, Optional

import numpy as np

from .eca import RuleTable, generate


def make_initial_row(width: int, init: str = "random", seed: Optional[int] = None) -> np.ndarray:
    """First generation of a run.

    "random" fills each cell with 0 or 1 uniformly; "middle" sets only the centre cell.
    """
    if width < 0:
        raise ValueError("width must be non-negative")
    if init == "random":
        rng = np.random.default_rng(seed)
        return rng.integers(0, 2, size=(width,), dtype=np.uint8)
    if init == "middle":
        x = np.zeros(width, dtype=np.uint8)
        if width:
            x[width // 2] = 1
        return x
    raise ValueError(f"unknown init {init!r}; expected 'random' or 'middle'")


def take_rows(rows: Iterable[np.ndarray], count: int) -> np.ndarray:
    """Return the first `count` rows of a stream as an array (N, W).

    N is smaller than `count` only when the stream ends early.
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    taken = list(islice(rows, count))
    if not taken:
        return np.zeros((0, 0), dtype=np.uint8)
    return np.stack(taken, axis=0).astype(np.uint8)


def simulate(table: RuleTable, initial_row, height: int, wrap: bool = False) -> np.ndarray:
    """Return a history array (height, W); row 0 is the initial row."""
    if height < 1:
        raise ValueError("height must be >= 1")
    rows = generate(table, initial_row, wrap=wrap)
    x0 = np.asarray(initial_row, dtype=np.uint8)
    history = np.empty((height, x0.shape[0]), dtype=np.uint8)
    history[0] = x0
    for t, row in enumerate(islice(rows, height - 1), start=1):
        history[t] = row
    return history


class RowWindow:
    """Cursor over a row stream that keeps the most recent `height` rows, oldest first.

    The stream is only pulled from in `__init__` and `advance`.
    """

    def __init__(self, rows: Iterable[np.ndarray], height: int):
        if height < 1:
            raise ValueError("height must be >= 1")
        self.height = int(height)
        self._rows = iter(rows)
        self._buffer = deque(islice(self._rows, self.height), maxlen=self.height)
        if len(self._buffer) < self.height:
            raise ValueError(f"row stream ended after {len(self._buffer)} rows; need {self.height}")
        # rows pulled from the stream so far
        self.generation = self.height

    def frame(self) -> np.ndarray:
        return np.stack(self._buffer, axis=0)

    def advance(self) -> np.ndarray:
        """Pull the next row, drop the oldest, and return the new frame.

        Raises StopIteration when the underlying stream is exhausted.
        """
        self._buffer.append(next(self._rows))
        self.generation += 1
        return self.frame()

    def frames(self, count: Optional[int] = None) -> Iterator[np.ndarray]:
        """Yield the current frame, then one frame per advance; endless if count is None."""
        if count is not None and count < 0:
            raise ValueError("count must be non-negative")
        if count == 0:
            return
        yield self.frame()
        shown = 1
        while count is None or shown < count:
            try:
                frame = self.advance()
            except StopIteration:
                return
            yield frame
            shown += 1
