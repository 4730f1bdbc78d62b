"""Timezone resolution and VTIMEZONE block loading."""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytz
import tzlocal
from dateutil import tz as du_tz
from icalendar import Timezone

from icsgen.config.constants import ABBR_TO_TZ, VTIMEZONE_BEGIN, VTIMEZONE_END
from icsgen.core.nodes import RawLines
from icsgen.exceptions.errors import TimezoneResolutionError
from icsgen.utils.paths import get_zoneinfo_path

logger = logging.getLogger(__name__)

TZID_LINE = re.compile(r"^TZID:.*$", re.MULTILINE)
LINE_BREAKS = re.compile(r"[\r\n]+")


def resolve_timezone(tz_str: str) -> str:
    """Resolve a timezone string to an IANA timezone name.

    Args:
        tz_str: The timezone string (e.g., "EST", "America/New_York", "local").

    Returns:
        The canonical timezone name.

    Raises:
        TimezoneResolutionError: If the timezone is unknown.
    """
    if not tz_str:
        raise TimezoneResolutionError(tz_str, "empty timezone name")

    tz_upper = tz_str.upper()
    if tz_upper == "LOCAL":
        # User's system zone
        local_tz_obj = tzlocal.get_localzone()
        tz_name = getattr(local_tz_obj, "key", None) or getattr(local_tz_obj, "zone", str(local_tz_obj))
    else:
        tz_name = ABBR_TO_TZ.get(tz_upper, tz_str)

    try:
        pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        # Last-ditch attempt with dateutil
        if du_tz.gettz(tz_name) is None:
            raise TimezoneResolutionError(tz_str)
        logger.debug("Timezone '%s' unknown to pytz, accepted via dateutil", tz_name)

    return tz_name


def extract_vtimezone(text: str, tzid: str) -> List[str]:
    """Pull the VTIMEZONE block out of a zoneinfo ``.ics`` document.

    The first ``TZID:`` line is rewritten to ``TZID:<tzid>`` so the block
    matches the TZID parameters used on properties.

    Args:
        text: Contents of the zoneinfo file.
        tzid: Timezone identifier the block should carry.

    Returns:
        Lines from ``BEGIN:VTIMEZONE`` through ``END:VTIMEZONE``.
    """
    text = TZID_LINE.sub(lambda _match: f"TZID:{tzid}", text, count=1)

    block = []
    inside = False
    for line in LINE_BREAKS.split(text):
        if line.startswith(VTIMEZONE_BEGIN):
            inside = True
            block.append(line)
        elif line.startswith(VTIMEZONE_END):
            inside = False
            block.append(line)
        elif inside and line:
            block.append(line)
    return block


def read_vtimezone_lines(tzid: str, zoneinfo_dir: Union[str, Path]) -> List[str]:
    """Read a timezone definition from a libical zoneinfo tree.

    Args:
        tzid: Timezone identifier, e.g. "Europe/London".
        zoneinfo_dir: Root of the zoneinfo tree.

    Returns:
        The VTIMEZONE block lines.

    Raises:
        TimezoneResolutionError: If the file is missing, unreadable, or has
            no VTIMEZONE block.
    """
    path = get_zoneinfo_path(zoneinfo_dir, tzid)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TimezoneResolutionError(tzid, f"cannot read {path}: {exc}") from exc

    lines = extract_vtimezone(text, tzid)
    if not lines:
        raise TimezoneResolutionError(tzid, f"no VTIMEZONE block in {path}")
    return lines


def build_vtimezone_lines(tzid: str) -> List[str]:
    """Generate a VTIMEZONE block from the tz database with icalendar.

    Args:
        tzid: Timezone identifier, e.g. "Europe/London".

    Returns:
        The VTIMEZONE block lines (folded continuation lines included).

    Raises:
        TimezoneResolutionError: If icalendar cannot build the zone.
    """
    try:
        component = Timezone.from_tzid(tzid)
    except Exception as exc:
        raise TimezoneResolutionError(tzid, str(exc)) from exc

    raw_ical = component.to_ical().decode("utf-8")
    return [line for line in raw_ical.split("\r\n") if line]


class TimezoneLoader:
    """Loads VTIMEZONE blocks once per timezone.

    Reads from a libical zoneinfo tree when ``zoneinfo_dir`` is set, else
    generates blocks with icalendar.
    """

    def __init__(self, zoneinfo_dir: Optional[Union[str, Path]] = None):
        self.zoneinfo_dir = zoneinfo_dir
        self._cache: Dict[str, RawLines] = {}

    def load(self, tzid: str) -> RawLines:
        """Return the VTIMEZONE block for ``tzid``."""
        if tzid not in self._cache:
            if self.zoneinfo_dir:
                lines = read_vtimezone_lines(tzid, self.zoneinfo_dir)
            else:
                lines = build_vtimezone_lines(tzid)
            logger.debug("Loaded VTIMEZONE for %s (%d lines)", tzid, len(lines))
            self._cache[tzid] = RawLines(lines)
        return self._cache[tzid]
