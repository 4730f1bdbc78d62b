"""Generator options and runtime configuration.

Options come from a JSON file with camelCase keys::

    {
        "items": 25,
        "start": "next monday",
        "daySpan": 7,
        "chances": {"task": 0.5},
        "timezones": ["", "Europe/London"],
        "outfile": "fixtures.ics"
    }

Runtime configuration (zoneinfo directory, log level) comes from the
environment or a ``.env`` file.
"""

import json
import logging
import os
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import dotenv_values

from icsgen.config.constants import (
    DEFAULT_CHANCES,
    DEFAULT_DAY_SPAN,
    DEFAULT_FIRST_NAMES,
    DEFAULT_ITEM_COUNT,
    DEFAULT_LAST_NAMES,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_DURATION,
    DEFAULT_METHOD,
    DEFAULT_MIN_DURATION,
    DEFAULT_ROUND_TO,
    DEFAULT_TIMEZONES,
    LOG_LEVEL_ENV_VAR,
    ZONEINFO_DIR_ENV_VAR,
)
from icsgen.exceptions.errors import DateExpressionError, OptionsError
from icsgen.utils.date_parsing import resolve_date_expression, utc_now

logger = logging.getLogger(__name__)


@dataclass
class Chances:
    """Probability (0..1) of each item category, drawn in field order."""

    task: float = DEFAULT_CHANCES["task"]
    all_day: float = DEFAULT_CHANCES["allDay"]
    multi_day: float = DEFAULT_CHANCES["multiDay"]
    recurring: float = DEFAULT_CHANCES["recurring"]
    meeting: float = DEFAULT_CHANCES["meeting"]


# Option file spelling of each Chances field, also used in event summaries
CHANCE_KEYS = {
    "task": "task",
    "allDay": "all_day",
    "multiDay": "multi_day",
    "recurring": "recurring",
    "meeting": "meeting",
}


@dataclass
class NameLists:
    """First and last names the people pool draws from."""

    first: List[str] = field(default_factory=lambda: list(DEFAULT_FIRST_NAMES))
    last: List[str] = field(default_factory=lambda: list(DEFAULT_LAST_NAMES))


@dataclass
class GeneratorOptions:
    """Everything that shapes a generated document."""

    items: int = DEFAULT_ITEM_COUNT
    start: datetime = field(default_factory=utc_now)
    day_span: float = DEFAULT_DAY_SPAN
    min_duration: int = DEFAULT_MIN_DURATION
    max_duration: int = DEFAULT_MAX_DURATION
    method: str = DEFAULT_METHOD
    chances: Chances = field(default_factory=Chances)
    round_to: int = DEFAULT_ROUND_TO
    timezones: List[str] = field(default_factory=lambda: list(DEFAULT_TIMEZONES))
    names: NameLists = field(default_factory=NameLists)
    outfile: Optional[str] = None
    seed: Optional[int] = None
    zoneinfo_dir: Optional[str] = None

    def validate(self) -> "GeneratorOptions":
        """Check value ranges.

        Returns:
            self, for chaining.

        Raises:
            OptionsError: If a value is out of range.
        """
        if self.items < 0:
            raise OptionsError("must not be negative", key="items")
        if self.day_span < 0:
            raise OptionsError("must not be negative", key="daySpan")
        if self.min_duration < 0:
            raise OptionsError("must not be negative", key="minDuration")
        if self.min_duration > self.max_duration:
            raise OptionsError("must be at least minDuration", key="maxDuration")
        if self.round_to <= 0:
            raise OptionsError("must be positive", key="roundTo")
        for option_key, attr in CHANCE_KEYS.items():
            chance = getattr(self.chances, attr)
            if not 0 <= chance <= 1:
                raise OptionsError("must be between 0 and 1", key=f"chances.{option_key}")
        if not self.names.first or not self.names.last:
            raise OptionsError("first and last name lists must not be empty", key="names")
        return self


# Option file key -> (GeneratorOptions attribute, expected type)
OPTION_KEYS = {
    "items": ("items", int),
    "daySpan": ("day_span", (int, float)),
    "minDuration": ("min_duration", int),
    "maxDuration": ("max_duration", int),
    "method": ("method", str),
    "roundTo": ("round_to", int),
    "outfile": ("outfile", str),
    "seed": ("seed", int),
    "zoneinfoDir": ("zoneinfo_dir", str),
}

NULLABLE_OPTIONS = {"outfile", "seed", "zoneinfo_dir"}


def _check_type(key: str, value: Any, expected) -> Any:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, expected):
        raise OptionsError(f"unexpected type {type(value).__name__}", key=key)
    return value


def _merge_chances(data: Any, current: Chances) -> Chances:
    if not isinstance(data, dict):
        raise OptionsError("must be an object", key="chances")
    chances = replace(current)
    for key, value in data.items():
        attr = CHANCE_KEYS.get(key)
        if attr is None:
            logger.warning("Ignoring unknown chance '%s'", key)
            continue
        setattr(chances, attr, float(_check_type(f"chances.{key}", value, (int, float))))
    return chances


def _merge_names(data: Any, current: NameLists) -> NameLists:
    if not isinstance(data, dict):
        raise OptionsError("must be an object", key="names")
    names = replace(current)
    for key in ("first", "last"):
        if key in data:
            values = data[key]
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise OptionsError("must be a list of strings", key=f"names.{key}")
            setattr(names, key, list(values))
    return names


def options_from_dict(
    data: Dict[str, Any],
    base: Optional[GeneratorOptions] = None,
    reference_date: Optional[datetime] = None,
) -> GeneratorOptions:
    """Merge an options mapping over ``base`` (or the defaults).

    Args:
        data: Mapping with camelCase option keys.
        base: Options to merge over.
        reference_date: Reference for relative start expressions.

    Returns:
        The merged, validated options.

    Raises:
        OptionsError: If a value has the wrong type or is out of range.
    """
    if not isinstance(data, dict):
        raise OptionsError("options must be a JSON object")
    base = base or GeneratorOptions()

    changes: Dict[str, Any] = {}
    for key, value in data.items():
        if key in OPTION_KEYS:
            attr, expected = OPTION_KEYS[key]
            if value is None and attr in NULLABLE_OPTIONS:
                changes[attr] = None
            else:
                changes[attr] = _check_type(key, value, expected)
        elif key == "start":
            changes["start"] = _parse_start(value, reference_date)
        elif key == "chances":
            changes["chances"] = _merge_chances(value, base.chances)
        elif key == "names":
            changes["names"] = _merge_names(value, base.names)
        elif key == "timezones":
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise OptionsError("must be a list of strings", key="timezones")
            changes["timezones"] = list(value)
        else:
            logger.warning("Ignoring unknown option '%s'", key)

    logger.debug("Merging options: %s", sorted(changes))
    return replace(base, **changes).validate()


def _parse_start(value: Any, reference_date: Optional[datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return resolve_date_expression(value, reference_date)
    except DateExpressionError as exc:
        raise OptionsError(str(exc), key="start") from exc


def load_options(
    path: Optional[Union[str, Path]] = None,
    base: Optional[GeneratorOptions] = None,
) -> GeneratorOptions:
    """Load generator options from a JSON file.

    Args:
        path: Options file; None returns ``base`` or the defaults.
        base: Options to merge the file over.

    Returns:
        The merged, validated options.

    Raises:
        OptionsError: If the file cannot be read or holds invalid options.
    """
    if path is None:
        return (base or GeneratorOptions()).validate()

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise OptionsError(f"cannot read options file {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise OptionsError(f"invalid JSON in {path}: {exc}") from exc

    logger.info("Loaded options from %s", path)
    return options_from_dict(data, base=base)


@dataclass
class RuntimeConfig:
    """Process-level settings read from the environment."""

    zoneinfo_dir: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = ".env") -> "RuntimeConfig":
        """Read settings from ``os.environ``, falling back to ``env_file``.

        The env file is parsed without mutating os.environ.

        Args:
            env_file: Path to a ``.env`` file; None skips it.

        Returns:
            The runtime configuration.
        """
        values: Dict[str, Optional[str]] = {}
        if env_file and Path(env_file).exists():
            values.update(dotenv_values(env_file))
        values.update(os.environ)
        return cls(
            zoneinfo_dir=values.get(ZONEINFO_DIR_ENV_VAR) or None,
            log_level=(values.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper(),
        )
