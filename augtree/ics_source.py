"""
iCalendar feeds as interval sources.

An ICSSource reads raw VCALENDAR text from a local file or an HTTP(S) URL.
Events, including recurring ones, are expanded with recurring_ical_events
over a time window and turned into UTC [start, end) intervals that can be
loaded into an IntervalTree.
"""

import requests
from datetime import datetime, date, timedelta
from pathlib import Path
from typing import Optional, Iterable
from dataclasses import dataclass
from icalendar import Calendar as ICalCalendar
from recurring_ical_events import of as recurring_events_of

from .debug import debug_print
from .interval_tree import IntervalTree
from .timezone_utils import to_utc_datetime


def _debug_print(msg: str) -> None:
    debug_print("ICS", msg)


@dataclass
class CalendarInterval:
    """One event occurrence as a half-open UTC interval."""
    start: datetime
    end: datetime
    summary: str
    source: str = ""

    @property
    def key(self) -> tuple[datetime, datetime]:
        return (self.start, self.end)


class ICSSource:
    """
    Read-only calendar feed, either a local .ics file or a URL.

    Mirrors a subscription handler: fetch() never raises, it records the
    failure in `error` and returns False.
    """

    def __init__(self, name: str, url: Optional[str] = None, path: Optional[Path] = None):
        """
        Args:
            name: Display name used in output and debug messages
            url: URL to fetch the ICS file from
            path: Local ICS file, used when no url is given
        """
        if url is None and path is None:
            raise ValueError(f"Calendar source '{name}' needs a url or a path")
        self.name = name
        self.url = url
        self.path = Path(path).expanduser() if path is not None else None

        self._raw_data: Optional[str] = None
        self._error: Optional[str] = None

    def fetch(self, timeout: int = 30) -> bool:
        """
        Load the VCALENDAR text.

        Args:
            timeout: Request timeout in seconds (URLs only)

        Returns:
            True if successful, False otherwise.
        """
        if self.url is None:
            return self._read_file()
        try:
            response = requests.get(
                self.url,
                timeout=timeout,
                headers={
                    'User-Agent': 'augtree/0.1',
                    'Accept': 'text/calendar'
                }
            )
            response.raise_for_status()

            # Ensure proper UTF-8 decoding
            response.encoding = 'utf-8'
            self._raw_data = response.text
            self._error = None
            _debug_print(f"Fetched {len(self._raw_data)} bytes from {self.url}")
            return True

        except requests.RequestException as e:
            self._error = f"Network error: {e}"
            _debug_print(f"{self.name}: {self._error}")
            return False

    def _read_file(self) -> bool:
        try:
            self._raw_data = self.path.read_text(encoding='utf-8')
        except OSError as e:
            self._error = f"Read error: {e}"
            _debug_print(f"{self.name}: {self._error}")
            return False
        self._error = None
        _debug_print(f"Read {len(self._raw_data)} bytes from {self.path}")
        return True

    def intervals(self, window_start: datetime, window_end: datetime) -> Optional[list[CalendarInterval]]:
        """
        Expand the fetched calendar over the window.

        Returns:
            The occurrences ([] if nothing was fetched yet), or None if the
            feed could not be parsed; `error` then says why.
        """
        if self._raw_data is None:
            return []
        try:
            return expand_intervals(self._raw_data, window_start, window_end, source=self.name)
        except Exception as e:
            # Feeds are third-party text: HTML login pages, truncated files
            self._error = f"Parse error: {e}"
            _debug_print(f"{self.name}: {self._error}")
            return None

    @property
    def error(self) -> Optional[str]:
        """Get the last error message."""
        return self._error


def parse_icalendar(ical_text: str) -> ICalCalendar:
    """Parse iCalendar text into an icalendar.Calendar object."""
    return ICalCalendar.from_ical(ical_text)


def _event_end(component, start_value):
    """
    End value of an event occurrence, before normalisation.

    Without DTEND or DURATION a dated event lasts one day and a timed
    event ends where it starts.
    """
    dtend = component.get('DTEND')
    if dtend is not None:
        return dtend.dt
    duration = component.get('DURATION')
    if duration is not None:
        return start_value + duration.dt
    if isinstance(start_value, date) and not isinstance(start_value, datetime):
        return start_value + timedelta(days=1)
    return start_value


def expand_intervals(
    ical_text: str,
    window_start: datetime,
    window_end: datetime,
    source: str = ""
) -> list[CalendarInterval]:
    """
    Turn every event occurring in the window into a CalendarInterval.

    Args:
        ical_text: Raw iCalendar text (VCALENDAR)
        window_start: Start of the expansion window
        window_end: End of the expansion window
        source: Name recorded on each interval

    Returns:
        Intervals with UTC-aware endpoints, in the order the library yields them
    """
    vcal = parse_icalendar(ical_text)
    result = []
    for component in recurring_events_of(vcal).between(window_start, window_end):
        dtstart = component.get('DTSTART')
        if dtstart is None:
            continue
        start_value = dtstart.dt
        end_value = _event_end(component, start_value)
        summary = component.get('SUMMARY')
        result.append(CalendarInterval(
            start=to_utc_datetime(start_value),
            end=to_utc_datetime(end_value),
            summary=str(summary) if summary else 'Untitled',
            source=source,
        ))
    _debug_print(f"Expanded {len(result)} occurrences from '{source}'")
    return result


def build_tree(
    intervals: Iterable[CalendarInterval]
) -> tuple[IntervalTree[datetime], dict[tuple[datetime, datetime], list[CalendarInterval]]]:
    """
    Load intervals into a fresh tree.

    The tree stores bare (start, end) pairs, so the returned index maps each
    pair back to the events that share it.
    """
    tree: IntervalTree[datetime] = IntervalTree()
    index: dict[tuple[datetime, datetime], list[CalendarInterval]] = {}
    for item in intervals:
        tree.insert(item.start, item.end)
        index.setdefault(item.key, []).append(item)
    return tree, index
