"""
icsgen - Synthetic iCalendar fixture generator

Generates random events and tasks (recurring, all-day, multi-day, meetings)
and serializes them to iCalendar text with a small tree-to-lines encoder.
"""

__version__ = "1.0.0"

# Public API - import commonly used components
from icsgen.config.settings import GeneratorOptions, load_options
from icsgen.exceptions.errors import (
    IcsGenError,
    EncodeError,
    OptionsError,
    TimezoneResolutionError,
    DateExpressionError,
)
from icsgen.core.nodes import Component, Property, RawLines
from icsgen.core.encoder import Encoder, encode, render_document
from icsgen.core.generator import GeneratorSession, generate_document

__all__ = [
    # Version
    "__version__",
    # Config
    "GeneratorOptions",
    "load_options",
    # Exceptions
    "IcsGenError",
    "EncodeError",
    "OptionsError",
    "TimezoneResolutionError",
    "DateExpressionError",
    # Core
    "Component",
    "Property",
    "RawLines",
    "Encoder",
    "encode",
    "render_document",
    "GeneratorSession",
    "generate_document",
]
