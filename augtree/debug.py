"""
Debug output switch shared by the augtree modules.

Messages go to stderr as "[HH:MM:SS] TAG: message" and are dropped unless
debug output was enabled (command line --debug or [General] debug = true).
"""

import sys
from datetime import datetime


_enabled: bool = False


def set_debug(enabled: bool):
    """Turn debug output on or off for the whole process."""
    global _enabled
    _enabled = enabled


def debug_print(tag: str, msg: str) -> None:
    if not _enabled:
        return
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {tag}: {msg}", file=sys.stderr)
