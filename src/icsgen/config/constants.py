"""Centralized constants for icsgen.

Format constants used by the encoder and defaults used by the generator
when no options file overrides them.
"""

# ICS calendar constants
ICS_VERSION = "2.0"
ICS_PRODID = "-//example//test data//EN"
DEFAULT_METHOD = "PUBLISH"
CRLF = "\r\n"

# Parameter names and values the encoder interprets
VALUE_PARAM = "VALUE"
TZID_PARAM = "TZID"
DATE_VALUE_TYPE = "DATE"
UTC_SUFFIX = "Z"

# Keys starting with this marker are metadata, never fields
METADATA_PREFIX = "$"

# Component tags
CALENDAR_TAG = "vcalendar"
EVENT_TAG = "vevent"
TODO_TAG = "vtodo"
VTIMEZONE_BEGIN = "BEGIN:VTIMEZONE"
VTIMEZONE_END = "END:VTIMEZONE"

# Generator defaults
DEFAULT_ITEM_COUNT = 10
DEFAULT_DAY_SPAN = 14
DEFAULT_MIN_DURATION = 15
DEFAULT_MAX_DURATION = 120
DEFAULT_ROUND_TO = 5  # minutes

# Empty string means "no timezone" (UTC values)
DEFAULT_TIMEZONES = [
    "",
    "Europe/London",
    "Asia/Tokyo",
    "America/New_York",
    "Europe/Berlin",
    "Africa/Cairo",
    "Australia/Sydney",
    "Etc/UTC",
    "Etc/GMT+12",
]

DEFAULT_CHANCES = {
    "task": 0.1,
    "allDay": 0.2,
    "multiDay": 0.2,
    "recurring": 0.1,
    "meeting": 0.3,
}

DEFAULT_FIRST_NAMES = [
    "Gassy", "Crusty", "Fidget", "Skid", "Greasy", "Pimply", "Booger",
    "Burpy", "Clammy", "Soggy", "Warty", "Sniffy", "Grunty",
]

DEFAULT_LAST_NAMES = [
    "McNugget", "O’Doodle", "Buttersniff", "Fuzzbucket", "Crotchley",
    "Spankleton", "Stinklebop", "Poopins", "Wifflebottom", "McCrackle",
    "Sogbottom",
]

SUMMARY_PREFIX = "Test Event "
UID_SUFFIX = "@test"
UID_LENGTH = 8
UID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
EMAIL_DOMAIN = "example.com"
EMAIL_SEPARATORS = (".", "", "-")
PEOPLE_POOL_SIZE = 10
NAME_ATTEMPTS = 5

RRULE_FREQUENCIES = ("DAILY", "WEEKLY", "MONTHLY", "YEARLY")
MAX_RRULE_INTERVAL = 5
MAX_RRULE_COUNT = 20
MULTI_DAY_RANGE = (2, 5)  # half-open, days
MEETING_SIZE_RANGE = (1, 6)  # half-open, people including organizer

# Environment variable names
ZONEINFO_DIR_ENV_VAR = "ICSGEN_ZONEINFO_DIR"
LOG_LEVEL_ENV_VAR = "ICSGEN_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Timezone abbreviation to IANA zone mapping
# Maps common (and DST) abbreviations to canonical IANA zones that understand DST
ABBR_TO_TZ = {
    # North America
    "EST": "America/New_York",
    "EDT": "America/New_York",
    "CST": "America/Chicago",
    "CDT": "America/Chicago",
    "MST": "America/Denver",
    "MDT": "America/Denver",
    "PST": "America/Los_Angeles",
    "PDT": "America/Los_Angeles",
    # United Kingdom / Europe
    "GMT": "Europe/London",
    "BST": "Europe/London",
    "CET": "Europe/Paris",
    "CEST": "Europe/Paris",
    "EET": "Europe/Athens",
    "EEST": "Europe/Athens",
    # Australia
    "AEST": "Australia/Sydney",
    "AEDT": "Australia/Sydney",
    # Asia
    "IST": "Asia/Kolkata",  # India (UTC+5:30 – no DST)
}

# Relative date terms understood by the start option
DAYS_OF_WEEK = {
    "monday": 0, "tuesday": 1, "wednesday": 2, "thursday": 3,
    "friday": 4, "saturday": 5, "sunday": 6
}
