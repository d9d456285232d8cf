from __future__ import annotations

import sys
import time
from typing import Iterable, Optional, TextIO

import numpy as np

LIVE_CHAR = "█"
DEAD_CHAR = "░"

CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[H"


def row_to_text(row, cell_width: int = 2) -> str:
    if cell_width < 1:
        raise ValueError("cell_width must be >= 1")
    return "".join((LIVE_CHAR if s else DEAD_CHAR) * cell_width for s in np.asarray(row).tolist())


def frame_to_text(frame, cell_width: int = 2) -> str:
    """Render a (H, W) frame as H lines of block characters."""
    return "\n".join(row_to_text(row, cell_width) for row in np.asarray(frame))


def animate(
    frames: Iterable[np.ndarray],
    fps: Optional[float] = None,
    out: Optional[TextIO] = None,
    clear: bool = True,
    cell_width: int = 2,
) -> int:
    """Print frames one after another and return how many were shown.

    With `clear`, each frame is drawn over the previous one by homing the cursor.
    `fps` of None draws as fast as the stream allows.
    """
    if fps is not None and fps <= 0:
        raise ValueError("fps must be positive")
    out = out if out is not None else sys.stdout
    if clear:
        out.write(CLEAR_SCREEN)
    shown = 0
    for frame in frames:
        if clear:
            out.write(CURSOR_HOME)
        out.write(frame_to_text(frame, cell_width) + "\n")
        out.flush()
        shown += 1
        if fps is not None:
            time.sleep(1 / fps)
    return shown
