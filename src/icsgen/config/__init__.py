"""Configuration module for icsgen."""

from icsgen.config.settings import (
    Chances,
    GeneratorOptions,
    NameLists,
    RuntimeConfig,
    load_options,
    options_from_dict,
)
from icsgen.config.constants import (
    ICS_PRODID,
    ICS_VERSION,
    DEFAULT_METHOD,
    DEFAULT_TIMEZONES,
    ZONEINFO_DIR_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
)

__all__ = [
    "Chances",
    "GeneratorOptions",
    "NameLists",
    "RuntimeConfig",
    "load_options",
    "options_from_dict",
    "ICS_PRODID",
    "ICS_VERSION",
    "DEFAULT_METHOD",
    "DEFAULT_TIMEZONES",
    "ZONEINFO_DIR_ENV_VAR",
    "LOG_LEVEL_ENV_VAR",
]
