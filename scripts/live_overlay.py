
"""Run the live camera overlay window.

Usage:
    uvicorn api.main:app --reload  # (separate, for the control API)
    python scripts/live_overlay.py [--camera 0] [--interval 0.2] [--expressions]

Keys: c camera, d detection, e expression mode, q quit.
"""
from __future__ import annotations
import argparse
import logging

from facecam.config import Settings
from facecam.window import run_live_window


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--camera", type=int, default=None, help="Camera index (default: CAMERA_INDEX)")
    p.add_argument("--interval", type=float, default=None, help="Seconds between detection cycles")
    p.add_argument("--expressions", action="store_true", help="Start with expression mode on")
    args = p.parse_args()

    overrides = {}
    if args.camera is not None:
        overrides["CAMERA_INDEX"] = args.camera
    if args.interval is not None:
        overrides["DETECTION_INTERVAL"] = args.interval
    if args.expressions:
        overrides["EXPRESSION_MODE"] = True
    s = Settings(**overrides)

    logging.basicConfig(level=s.LOG_LEVEL)
    run_live_window(s)


if __name__ == '__main__':
    main()
