#!/usr/bin/env python3
"""
Command-line interface for device detection.

Usage:
    device-detect --user-agent "Mozilla/5.0 (iPad; ...)" --width 1024 --resize 500 900
    device-detect --csv records.csv --out results.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

import pandas as pd

from .batch import classify_records, load_records, summarize
from .classifier import classify
from .collector import SignalCollector
from .config import PROFILES
from .environment import StaticEnvironment
from .stabilizer import DeviceDetector
from .types import DeviceState


def format_state(label: str, state: DeviceState) -> str:
    return (f"{label}: {state.category.value} "
            f"(mobile={state.is_mobile}, tablet={state.is_tablet}, "
            f"desktop={state.is_desktop})")


def run_session(args: argparse.Namespace) -> List[dict]:
    """Simulate one page view: mount, then each resize and rotation."""
    env = StaticEnvironment(
        user_agent=args.user_agent,
        width=args.width,
        height=args.height,
        touch_events=args.touch,
        max_touch_points=5 if args.touch else 0,
    )
    profile = PROFILES[args.profile]
    collector = SignalCollector(env)
    published = []

    def record(state: DeviceState):
        width, height = env.viewport_size()
        published.append(dict(state.as_dict(), viewport_width=width, viewport_height=height))

    result = classify(collector.collect(), profile)
    print(f"Classifier: desktop={result.is_definitely_desktop} ({result.desktop_evidence.value}), "
          f"mobile={result.is_mobile_device} ({result.mobile_evidence.value}), "
          f"tablet={result.is_tablet_device} ({result.tablet_evidence.value})")

    with DeviceDetector(env, collector=collector, profile=profile, on_change=record) as detector:
        print(f"Anchor: {detector.anchor.value}")
        print(format_state(f"  mount  {args.width}x{args.height}", detector.state))
        for width in args.resize or []:
            env.resize(width)
            print(format_state(f"  resize {env.width}x{env.height}", detector.state))
        if args.rotate:
            env.rotate()
            print(format_state(f"  rotate {env.width}x{env.height}", detector.state))

    return published


def export(frame: pd.DataFrame, out: str, fmt: str) -> None:
    """Write frame as JSON records if out ends in .json or fmt is json, else CSV."""
    output_path = Path(out)
    if output_path.suffix == '.json' or fmt == 'json':
        frame.to_json(output_path, orient='records', indent=2)
    else:
        frame.to_csv(output_path, index=False)
    print(f"Results exported to: {out}")


def run_batch(args: argparse.Namespace) -> None:
    print(f"Classifying records: {args.csv}")
    records = load_records(args.csv)
    classified = classify_records(records, profile=PROFILES[args.profile])
    print(f"Classified {len(classified)} records")

    for category, count in summarize(classified).items():
        print(f"  {category:<8} {count}")

    if args.out:
        export(classified, args.out, args.format)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Classify a web client as desktop, tablet or mobile',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('--user-agent', type=str, help='User-agent string of a single session')
    parser.add_argument('--width', type=int, default=1280, help='Initial viewport width (default: 1280)')
    parser.add_argument('--height', type=int, default=800, help='Initial viewport height (default: 800)')
    parser.add_argument('--touch', action='store_true', help='Host reports touch support')
    parser.add_argument('--resize', type=int, nargs='+', metavar='WIDTH',
                        help='Viewport widths to resize to after mount')
    parser.add_argument('--rotate', action='store_true', help='Dispatch an orientation change at the end')
    parser.add_argument('--csv', type=str, help='CSV of recorded snapshots to classify')
    parser.add_argument('--out', type=str,
                        help='Output file for session states or batch results (CSV or JSON based on extension)')
    parser.add_argument('--format', type=str, choices=['csv', 'json'], default='csv',
                        help='Output format (default: csv)')
    parser.add_argument('--profile', type=str, choices=sorted(PROFILES), default='default',
                        help='Rule profile (default: default)')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase log verbosity (-v info, -vv debug)')

    args = parser.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')

    if args.user_agent is None and not args.csv:
        parser.error("Must specify either --user-agent or --csv")

    if args.user_agent is not None and args.csv:
        parser.error("Cannot specify both --user-agent and --csv")

    try:
        if args.csv:
            run_batch(args)
        else:
            published = run_session(args)
            if args.out:
                print()
                export(pd.DataFrame(published), args.out, args.format)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
