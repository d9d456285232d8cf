from __future__ import annotations

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

# Ensure repo root on path
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from automata.eca import build_rule_table, describe_rule, generate
from automata.window import RowWindow, make_initial_row
from render.image import save_gif, save_png
from render.text import animate


def run(args: argparse.Namespace) -> Dict[str, Any]:
    table = build_rule_table(args.rule)
    print(f"Rule {table.rule_number} mappings:")
    print(describe_rule(table))

    x0 = make_initial_row(args.width, init=args.init, seed=args.seed)
    summary: Dict[str, Any] = {
        "rule": table.rule_number,
        "width": int(args.width),
        "height": int(args.height),
        "frames_shown": 0,
        "image": None,
        "gif": None,
    }

    if args.save_image:
        window = RowWindow(generate(table, x0, wrap=args.wrap), height=args.height)
        save_png(window.frame(), args.save_image, scale=args.scale)
        print("Saved image to", args.save_image)
        summary["image"] = args.save_image

    if args.save_gif:
        window = RowWindow(generate(table, x0, wrap=args.wrap), height=args.height)
        n = save_gif(window.frames(args.gif_frames), args.save_gif, scale=args.scale, fps=args.fps or 24.0)
        print(f"Saved {n} frames to {args.save_gif}")
        summary["gif"] = args.save_gif

    if args.animate:
        window = RowWindow(generate(table, x0, wrap=args.wrap), height=args.height)
        try:
            summary["frames_shown"] = animate(window.frames(args.frames), fps=args.fps, clear=args.clear)
        except KeyboardInterrupt:
            summary["frames_shown"] = window.generation - window.height + 1
            print()
            print(f"Stopped after {summary['frames_shown']} frames")

    return summary


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Visualize an elementary cellular automaton")
    ap.add_argument("rule", type=int, help="Wolfram rule number in [0,255]")
    ap.add_argument("--width", type=int, default=100, help="cells per row")
    ap.add_argument("--height", type=int, default=100, help="rows visible at once")
    ap.add_argument("--scale", type=int, default=4, help="pixels per cell for image output")
    ap.add_argument("--init", choices=["random", "middle"], default="random")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--wrap", action="store_true", help="toroidal edges instead of dead cells")
    ap.add_argument("--fps", type=float, default=24.0, help="frames per second; 0 for no delay")
    ap.add_argument("--frames", type=int, default=None, help="frames to animate; unbounded if unset")
    ap.add_argument("--no-animate", dest="animate", action="store_false")
    ap.add_argument("--no-clear", dest="clear", action="store_false", help="do not redraw in place")
    ap.add_argument("--save-image", type=str, default=None, help="PNG of the first frame")
    ap.add_argument("--save-gif", type=str, default=None, help="animated GIF")
    ap.add_argument("--gif-frames", type=int, default=48)
    return ap


def main(argv: Optional[List[str]] = None):
    ap = build_parser()
    args = ap.parse_args(argv)
    if not (0 <= args.rule <= 255):
        ap.error("rule must be in [0,255]")
    if args.width < 0:
        ap.error("--width must be non-negative")
    if args.height < 1:
        ap.error("--height must be >= 1")
    if args.scale < 1:
        ap.error("--scale must be >= 1")
    if args.fps < 0:
        ap.error("--fps must be non-negative")
    if args.fps == 0:
        args.fps = None
    return run(args)


if __name__ == "__main__":
    main()
