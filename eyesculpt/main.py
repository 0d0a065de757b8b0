#!/usr/bin/env python3
"""eyesculpt - command line entry point."""

import argparse
import logging
import sys

import numpy as np

from eyesculpt.config import ConfigError, load_config
from eyesculpt.eyes.animator import build_blink
from eyesculpt.preset import EyePreset, PresetError, load_preset, save_preset
from eyesculpt.session import Session

log = logging.getLogger("eyesculpt")

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _load_or_default(path: str) -> EyePreset:
    """Load the preset, falling back to defaults if it is missing or malformed."""
    try:
        return load_preset(path)
    except PresetError as e:
        log.warning(f"Using default preset: {e}")
        return EyePreset()


def cmd_init(args, config) -> int:
    out = args.out or config.preset_path
    return 0 if save_preset(out, EyePreset()) else 1


def cmd_uniforms(args, config) -> int:
    session = Session(config, _load_or_default(args.preset or config.preset_path))
    payload = session.frame(args.time)
    side = payload[args.side]
    np.set_printoptions(precision=5, suppress=True)
    for name, value in side.items():
        print(f"{name}:")
        print(f"  {value}" if not isinstance(value, np.ndarray) else value)
    return 0


def cmd_blink(args, config) -> int:
    blink = build_blink(config.animation)
    steps = max(args.steps, 1)
    for i in range(steps + 1):
        t = blink.period * i / steps
        value = blink.evaluate(t)
        bar = "#" * int(round(value * 40))
        print(f"{t:6.3f}  {value:5.3f}  {bar}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Parametric eye sculpting core")
    parser.add_argument("--config", default="config.yaml", help="Config file path")
    sub = parser.add_subparsers(dest="command", required=True)

    p_init = sub.add_parser("init", help="Write the default preset")
    p_init.add_argument("--out", help="Preset file to write")
    p_init.set_defaults(func=cmd_init)

    p_uni = sub.add_parser("uniforms", help="Print renderer payload for one side")
    p_uni.add_argument("--preset", help="Preset file to read")
    p_uni.add_argument("--side", choices=("left", "right"), default="left")
    p_uni.add_argument("--time", type=float, default=0.0, help="Animation time (s)")
    p_uni.set_defaults(func=cmd_uniforms)

    p_blink = sub.add_parser("blink", help="Print the blink curve over one period")
    p_blink.add_argument("--steps", type=int, default=60)
    p_blink.set_defaults(func=cmd_blink)

    args = parser.parse_args(argv)
    try:
        config = load_config(args.config)
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
        log.error(f"Bad config: {e}")
        return 1

    logging.basicConfig(level=getattr(logging, config.log_level), format=LOG_FORMAT)

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
