#!/usr/bin/env python3
"""
augtree-query - what is happening at a given moment?

Loads ICS calendars into an augmented interval tree and prints every
event occurrence that contains the requested point in time.
"""

import sys
import argparse
import pytz
from datetime import datetime, timedelta
from pathlib import Path

from augtree.config import Config, SourceConfig
from augtree.debug import set_debug
from augtree.ics_source import ICSSource, build_tree
from augtree.timezone_utils import set_timezone, to_utc_datetime, format_local, now_utc


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="augtree-query - list calendar events covering a point in time"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--file",
        type=Path,
        action="append",
        default=[],
        help="ICS file to load (repeatable)"
    )
    parser.add_argument(
        "--url",
        action="append",
        default=[],
        help="ICS URL to fetch (repeatable)"
    )
    parser.add_argument(
        "--at",
        type=datetime.fromisoformat,
        help="ISO date/time to query (default: now); naive values use the configured timezone"
    )
    parser.add_argument(
        "--show-tree",
        action="store_true",
        help="Print every stored interval in start order"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def load_config(args) -> Config:
    """Config from --config, the default path if it exists, or built-in defaults."""
    if args.config is not None:
        return Config.load(args.config)
    default_path = Config.get_default_config_path()
    if default_path.exists():
        return Config.load(default_path)
    return Config()


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    if args.debug:
        set_debug(True)

    try:
        config = load_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    if config.debug:
        set_debug(True)
    try:
        set_timezone(config.timezone)
    except pytz.UnknownTimeZoneError:
        print(f"Error loading configuration: unknown timezone '{config.timezone}'", file=sys.stderr)
        return 1

    source_configs = list(config.sources)
    source_configs += [SourceConfig(name=str(p), path=p) for p in args.file]
    source_configs += [SourceConfig(name=u, url=u) for u in args.url]
    if not source_configs:
        print("Error: no calendars configured; use --file, --url or a [Source.*] table", file=sys.stderr)
        return 1

    point = to_utc_datetime(args.at) if args.at is not None else now_utc()
    window_start = point - timedelta(days=config.window.days_before)
    window_end = point + timedelta(days=config.window.days_after)

    intervals = []
    loaded = 0
    for sc in source_configs:
        source = ICSSource(sc.name, url=sc.url, path=sc.path)
        if not source.fetch(timeout=config.fetch.timeout):
            print(f"Warning: {sc.name}: {source.error}", file=sys.stderr)
            continue
        items = source.intervals(window_start, window_end)
        if items is None:
            print(f"Warning: {sc.name}: {source.error}", file=sys.stderr)
            continue
        loaded += 1
        intervals.extend(items)

    if loaded == 0:
        print("Error: no calendar could be loaded", file=sys.stderr)
        return 1

    tree, index = build_tree(intervals)

    if args.show_tree:
        for start, end in tree.traverse():
            print(f"  [{format_local(start)}, {format_local(end)})")

    # Identical intervals are separate nodes but share one index entry.
    matches = list(dict.fromkeys(tree.query(point)))
    count = sum(len(index.get(key, [])) for key in matches)
    print(f"Events at {format_local(point, '%Y-%m-%d %H:%M %Z')}: {count}")
    for key in matches:
        start, end = key
        for item in index.get(key, []):
            print(f"  {format_local(start)} - {format_local(end)}  {item.summary}  ({item.source})")
    print(f"Tree: {len(tree)} intervals, height {tree.height()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
