"""Entry point for the hti demo."""

from __future__ import annotations

import argparse
import logging


def main() -> None:
    parser = argparse.ArgumentParser(description="hti: terminal widget toolkit demo")
    parser.add_argument("--language", default="en", choices=["en", "zh"])
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--log-file", default=None, help="Write logs to this file (stderr shares the screen)")
    args = parser.parse_args()

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level.upper()),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )

    from hti.demo import run_demo

    run_demo(args.language)


if __name__ == "__main__":
    main()
