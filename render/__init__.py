from .text import animate, frame_to_text, row_to_text
from .image import LIVE_COLOR, DEAD_COLOR, frame_to_image, frame_to_rgb, save_gif, save_png

__all__ = [
    "animate",
    "frame_to_text",
    "row_to_text",
    "LIVE_COLOR",
    "DEAD_COLOR",
    "frame_to_image",
    "frame_to_rgb",
    "save_gif",
    "save_png",
]
