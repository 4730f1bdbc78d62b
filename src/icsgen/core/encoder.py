"""Encode node trees into iCalendar text lines."""

from datetime import date, datetime, time
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pytz

from icsgen.config.constants import (
    CRLF,
    DATE_VALUE_TYPE,
    TZID_PARAM,
    UTC_SUFFIX,
    VALUE_PARAM,
)
from icsgen.core.nodes import Component, Property, RawLines
from icsgen.exceptions.errors import EncodeError

SCALAR_TYPES = (str, int, float, datetime, date)

Params = Mapping[str, Optional[Any]]


def make_parameter_string(params: Optional[Params]) -> str:
    """Build a ``KEY1=VALUE1;KEY2=VALUE2`` string.

    Names are uppercased, values are kept as given, and pairs whose value is
    None are dropped. Insertion order is preserved.

    Args:
        params: Mapping of parameter names to values.

    Returns:
        The parameter string, empty when there is nothing to emit.
    """
    if not params:
        return ""
    return ";".join(
        f"{name.upper()}={value}"
        for name, value in params.items()
        if value is not None
    )


def _get_param(params: Optional[Params], name: str) -> Optional[Any]:
    """Case-insensitive parameter lookup."""
    if not params:
        return None
    for key, value in params.items():
        if key.upper() == name:
            return value
    return None


def format_date(value: date, params: Optional[Params] = None) -> str:
    """Format a date or datetime as a compact iCalendar timestamp.

    Aware datetimes are converted to UTC first; plain dates count as
    midnight. ``VALUE=DATE`` truncates to ``YYYYMMDD``. Otherwise
    ``YYYYMMDDTHHMMSS`` gets a ``Z`` suffix unless a TZID is present.
    Pass naive wall-clock values alongside a TZID; an aware value is
    written as its UTC wall clock under that TZID.

    Args:
        value: The date or datetime to format.
        params: The parameters of the property carrying the value.

    Returns:
        The formatted timestamp.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            value = value.astimezone(pytz.utc)
    else:
        value = datetime.combine(value, time())

    stamp = f"{value.year:04d}{value.month:02d}{value.day:02d}"
    value_type = _get_param(params, VALUE_PARAM)
    if value_type is not None and str(value_type).upper() == DATE_VALUE_TYPE:
        return stamp

    stamp += f"T{value.hour:02d}{value.minute:02d}{value.second:02d}"
    if not _get_param(params, TZID_PARAM):
        stamp += UTC_SUFFIX
    return stamp


def format_value(value: Any, params: Optional[Params] = None) -> str:
    """Format a scalar property value."""
    if isinstance(value, date):
        return format_date(value, params)
    return str(value)


def property_name(field_name: str, prop: Property) -> str:
    """Return the emitted name of a property, parameters included."""
    name = (prop.key or field_name).upper()
    param_string = make_parameter_string(prop.params)
    if param_string:
        name += f";{param_string}"
    return name


class Encoder:
    """Walks a node tree and produces iCalendar lines.

    The default mode is permissive: malformed trees give best-effort output
    instead of errors. With ``strict=True`` they raise EncodeError.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def encode(self, node: Any) -> List[str]:
        """Encode a node into an ordered list of lines.

        Args:
            node: A Component, Property, RawLines, string, or list of those.

        Returns:
            The lines, without line terminators.

        Raises:
            EncodeError: In strict mode, if the tree is malformed.
        """
        lines: List[str] = []
        self._encode_node(node, lines)
        return lines

    def _encode_node(self, node: Any, lines: List[str]) -> None:
        if isinstance(node, RawLines):
            lines.extend(node.lines)
        elif isinstance(node, str):
            lines.append(node)
        elif isinstance(node, Component):
            self._encode_component(node, lines)
        elif isinstance(node, Property):
            if not node.key:
                self._reject("Top-level property has no key", node)
            self._encode_field(node.key or "", node, lines)
        elif isinstance(node, (list, tuple)):
            for item in node:
                self._encode_node(item, lines)
        else:
            self._reject(f"Unsupported node type {type(node).__name__}", node)
            lines.append(str(node))

    def _encode_component(self, component: Component, lines: List[str]) -> None:
        if not component.tag:
            self._reject("Component has no tag", component)
        tag = (component.tag or "").upper()
        lines.append(f"BEGIN:{tag}")
        for name, value in component.fields.items():
            self._encode_field(name, value, lines)
        lines.append(f"END:{tag}")

    def _encode_field(self, name: str, value: Any, lines: List[str]) -> None:
        if isinstance(value, Property):
            self._encode_value(property_name(name, value), value.value, value.params, lines)
        elif isinstance(value, (list, tuple)):
            for item in value:
                self._encode_field(name, item, lines)
        else:
            self._encode_value(name.upper(), value, None, lines)

    def _encode_value(
        self,
        name: str,
        value: Any,
        params: Optional[Dict[str, Optional[Any]]],
        lines: List[str],
    ) -> None:
        if value is None:
            self._reject(f"Field '{name}' has no value", value)
        elif isinstance(value, RawLines):
            lines.extend(value.lines)
        elif isinstance(value, Component):
            self._encode_component(value, lines)
        elif isinstance(value, (list, tuple)):
            for item in value:
                self._encode_value(name, item, params, lines)
        elif isinstance(value, SCALAR_TYPES):
            lines.append(f"{name}:{format_value(value, params)}")
        else:
            self._reject(
                f"Field '{name}' has unsupported value type {type(value).__name__}",
                value,
            )
            lines.append(f"{name}:{value}")

    def _reject(self, message: str, node: Any) -> None:
        if self.strict:
            raise EncodeError(message, node=node)


def encode(node: Any, strict: bool = False) -> List[str]:
    """Encode a node tree into iCalendar lines. See :class:`Encoder`."""
    return Encoder(strict=strict).encode(node)


def render_document(lines: Iterable[str]) -> str:
    """Join lines with CRLF, ending with a single trailing CRLF."""
    return CRLF.join([*lines, ""])
