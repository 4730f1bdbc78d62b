"""Random calendar document generation.

Builds the node tree the encoder consumes: a VCALENDAR with one VTIMEZONE
block per timezone in use, followed by randomly shaped events and tasks.
"""

import logging
import math
import random
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Set

from icsgen.config.constants import (
    CALENDAR_TAG,
    DATE_VALUE_TYPE,
    DEFAULT_METHOD,
    EVENT_TAG,
    ICS_PRODID,
    ICS_VERSION,
    MAX_RRULE_COUNT,
    MAX_RRULE_INTERVAL,
    MEETING_SIZE_RANGE,
    MULTI_DAY_RANGE,
    RRULE_FREQUENCIES,
    SUMMARY_PREFIX,
    TODO_TAG,
    UID_ALPHABET,
    UID_LENGTH,
    UID_SUFFIX,
)
from icsgen.config.settings import CHANCE_KEYS, GeneratorOptions
from icsgen.core.encoder import make_parameter_string
from icsgen.core.nodes import Component, Property, RawLines
from icsgen.core.people import PeoplePool
from icsgen.core.timezone_utils import TimezoneLoader, resolve_timezone
from icsgen.utils.date_parsing import utc_now

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1)


def round_to_minutes(value: datetime, minutes: int) -> datetime:
    """Round a datetime to the nearest multiple of ``minutes`` since the epoch."""
    step = timedelta(minutes=minutes)
    return EPOCH + step * math.floor((value - EPOCH) / step + 0.5)


def round_duration(value: timedelta, minutes: int) -> timedelta:
    """Round a duration to the nearest multiple of ``minutes``."""
    step = timedelta(minutes=minutes)
    return step * math.floor(value / step + 0.5)


class GeneratorSession:
    """State shared by the items of one generated document.

    Holds the random source, the clock used for DTSTAMP, the people pool and
    the VTIMEZONE blocks already added to the document.
    """

    def __init__(
        self,
        options: GeneratorOptions,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
        timezone_loader: Optional[TimezoneLoader] = None,
    ):
        self.options = options
        self.rng = rng or random.Random(options.seed)
        self.clock = clock
        self.timezone_loader = timezone_loader or TimezoneLoader(options.zoneinfo_dir)
        self.people = PeoplePool(self.rng, options.names.first, options.names.last)
        # "" means no TZID (UTC values)
        self.timezones = [resolve_timezone(tz) if tz else "" for tz in options.timezones]
        self.timezone_blocks: List[RawLines] = []
        self._timezones_used: Set[str] = set()

    def random_int(self, low: int, high: Optional[int] = None) -> int:
        """Random integer in ``[low, high)``; with one argument, ``[0, low)``."""
        if high is None:
            low, high = 0, low
        return math.floor(self.rng.random() * (high - low) + low)

    def random_time(self, start: datetime, days: float) -> datetime:
        offset = timedelta(days=days) * self.rng.random()
        return round_to_minutes(start + offset, self.options.round_to)

    def random_flags(self) -> Dict[str, bool]:
        """Draw each category independently, keeping only the ones that hit."""
        flags = {}
        for key, attr in CHANCE_KEYS.items():
            if self.rng.random() < getattr(self.options.chances, attr):
                flags[key] = True
        return flags

    def uid(self) -> str:
        chars = "".join(self.rng.choice(UID_ALPHABET) for _ in range(UID_LENGTH))
        return chars + UID_SUFFIX

    def use_timezone(self, tzid: str) -> None:
        """Add the VTIMEZONE block for ``tzid`` unless already present."""
        if tzid in self._timezones_used:
            return
        self._timezones_used.add(tzid)
        self.timezone_blocks.append(self.timezone_loader.load(tzid))


def generate_recurrence_rule(session: GeneratorSession) -> str:
    """Random ``FREQ=...;INTERVAL=...;COUNT=...`` rule; zero parts are left out."""
    rule = {
        "freq": session.rng.choice(RRULE_FREQUENCIES),
        "interval": session.random_int(MAX_RRULE_INTERVAL) or None,
        "count": session.random_int(MAX_RRULE_COUNT) or None,
    }
    return make_parameter_string(rule)


def generate_item(session: GeneratorSession) -> Component:
    """Generate one random event or task."""
    options = session.options
    start = session.random_time(options.start, options.day_span)
    duration = timedelta(minutes=session.random_int(options.min_duration, options.max_duration))
    end = start + round_duration(duration, options.round_to)

    flags = session.random_flags()
    is_task = flags.get("task", False)

    if flags.get("allDay") or flags.get("multiDay"):
        start = start.replace(hour=0, minute=0, second=0, microsecond=0)
        days = session.random_int(*MULTI_DAY_RANGE) if flags.get("multiDay") else 1
        flags["allDay"] = True
        end = start + timedelta(days=days)

    if not is_task:
        flags["event"] = True

    item = Component(tag=TODO_TAG if is_task else EVENT_TAG)
    item.add("uid", session.uid())
    item.add("dtstamp", session.clock())
    item.add("summary", SUMMARY_PREFIX + ",".join(flags))

    start_prop = Property(value=start)
    end_prop = Property(value=end)
    if flags.get("allDay"):
        start_prop.params["value"] = DATE_VALUE_TYPE
        end_prop.params["value"] = DATE_VALUE_TYPE

    tzid = session.rng.choice(session.timezones) if session.timezones else ""
    if tzid:
        start_prop.params["tzid"] = tzid
        end_prop.params["tzid"] = tzid
        session.use_timezone(tzid)

    if is_task:
        if not flags.get("allDay"):
            item.add("due", start_prop)
    else:
        item.add("dtstart", start_prop)
        item.add("dtend", end_prop)

    if flags.get("recurring"):
        item.add("rrule", generate_recurrence_rule(session))

    if not is_task and flags.get("meeting"):
        people = [
            Property(value=f"mailto:{person.email}", params={"CN": person.name})
            for person in session.people.random_people(session.random_int(*MEETING_SIZE_RANGE))
        ]
        item.add("organizer", people[0])
        item.add("attendees", [
            Property(value=p.value, params=p.params, key="attendee") for p in people[1:]
        ])

    return item


def generate_document(
    options: GeneratorOptions,
    session: Optional[GeneratorSession] = None,
) -> Component:
    """Generate a complete VCALENDAR document tree.

    Args:
        options: Generator options.
        session: Session to draw from; a new one is created when omitted.

    Returns:
        The root Component, ready for the encoder.
    """
    session = session or GeneratorSession(options)

    document = Component(tag=CALENDAR_TAG)
    document.add("version", ICS_VERSION)
    document.add("prodid", ICS_PRODID)
    document.add("method", (options.method or "").upper() or DEFAULT_METHOD)
    # Filled while items are generated; stays ahead of the items in output
    document.add("timezones", session.timezone_blocks)

    items = [generate_item(session) for _ in range(options.items)]
    document.add("items", items)

    logger.info(
        "Generated %d item(s) using %d timezone(s)",
        len(items), len(session.timezone_blocks)
    )
    return document
