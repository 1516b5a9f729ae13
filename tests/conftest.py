import pytest

from augtree.debug import set_debug
from augtree.timezone_utils import set_timezone


SAMPLE_ICS = """\
BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//augtree//tests//EN
BEGIN:VEVENT
UID:review@example.com
DTSTART:20240108T090000Z
DTEND:20240108T120000Z
SUMMARY:Design review
END:VEVENT
BEGIN:VEVENT
UID:standup@example.com
DTSTART:20240101T100000Z
DTEND:20240101T110000Z
RRULE:FREQ=WEEKLY;COUNT=3
SUMMARY:Standup
END:VEVENT
BEGIN:VEVENT
UID:holiday@example.com
DTSTART;VALUE=DATE:20240110
DTEND;VALUE=DATE:20240111
SUMMARY:Holiday
END:VEVENT
END:VCALENDAR
"""


@pytest.fixture(autouse=True)
def _reset_globals():
    set_timezone("UTC")
    yield
    set_timezone("UTC")
    set_debug(False)


@pytest.fixture
def sample_ics():
    return SAMPLE_ICS


@pytest.fixture
def sample_ics_file(tmp_path):
    path = tmp_path / "team.ics"
    path.write_text(SAMPLE_ICS, encoding="utf-8")
    return path
