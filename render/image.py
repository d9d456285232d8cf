from __future__ import annotations

import os
from typing import Iterable

import numpy as np
from PIL import Image

LIVE_COLOR = (242, 233, 99)
DEAD_COLOR = (64, 37, 27)


def frame_to_rgb(frame, scale: int = 1) -> np.ndarray:
    """Map a (H, W) frame of 0/1 cells to a uint8 RGB array (H*scale, W*scale, 3).

    Each cell becomes a scale x scale block of LIVE_COLOR or DEAD_COLOR.
    """
    if scale < 1:
        raise ValueError("scale must be >= 1")
    cells = np.asarray(frame, dtype=np.uint8)
    if cells.ndim != 2:
        raise ValueError("frame must be 2D (rows, cells)")
    palette = np.array([DEAD_COLOR, LIVE_COLOR], dtype=np.uint8)
    rgb = palette[cells]
    return rgb.repeat(scale, axis=0).repeat(scale, axis=1)


def frame_to_image(frame, scale: int = 1) -> Image.Image:
    return Image.fromarray(frame_to_rgb(frame, scale))


def save_png(frame, path: str, scale: int = 1) -> str:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    frame_to_image(frame, scale).save(path, format="PNG")
    return path


def save_gif(frames: Iterable[np.ndarray], path: str, scale: int = 1, fps: float = 24.0) -> int:
    """Write frames as a looping animated GIF and return the number of frames written."""
    if fps <= 0:
        raise ValueError("fps must be positive")
    images = [frame_to_image(frame, scale) for frame in frames]
    if not images:
        raise ValueError("no frames to save")
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    images[0].save(
        path,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=int(round(1000 / fps)),
        loop=0,
    )
    return len(images)
