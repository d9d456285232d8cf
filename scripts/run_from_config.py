from __future__ import annotations

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

import yaml

# Ensure repo root on path
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from scripts.run_rule import run

DEFAULTS: Dict[str, Any] = dict(
    rule=110,
    width=100,
    height=100,
    scale=4,
    init="random",
    seed=None,
    wrap=False,
    fps=24.0,
    frames=None,
    animate=True,
    clear=True,
    save_image=None,
    save_gif=None,
    gif_frames=48,
)


def load_config(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        cfg = yaml.safe_load(f)
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(cfg).__name__}")
    return cfg


def config_to_namespace(cfg: Dict[str, Any]) -> argparse.Namespace:
    unknown = sorted(set(cfg) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    values = dict(DEFAULTS)
    values.update(cfg)
    # 0 means no delay between frames
    if not values["fps"]:
        values["fps"] = None
    return argparse.Namespace(**values)


def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", type=str, required=True, help="YAML config file")
    # Optional overrides
    ap.add_argument("--rule", type=int)
    ap.add_argument("--frames", type=int)
    args = ap.parse_args(argv)

    cfg = load_config(args.config)
    if args.rule is not None:
        cfg["rule"] = args.rule
    if args.frames is not None:
        cfg["frames"] = args.frames

    return run(config_to_namespace(cfg))


if __name__ == "__main__":
    main()
