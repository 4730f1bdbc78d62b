"""Node model for calendar documents handed to the encoder."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from icsgen.config.constants import METADATA_PREFIX

Scalar = Union[str, int, float, datetime, date]


@dataclass
class RawLines:
    """Pre-formatted lines injected into the output verbatim."""

    lines: Sequence[str]

    def __post_init__(self):
        self.lines = tuple(self.lines)

    def __len__(self) -> int:
        return len(self.lines)


@dataclass
class Property:
    """A value carrying property parameters.

    ``key`` overrides the field name the property is stored under, which lets
    a list field (e.g. ``attendees``) emit lines with another name
    (``ATTENDEE``).
    """

    value: Any
    params: Dict[str, Optional[str]] = field(default_factory=dict)
    key: Optional[str] = None


@dataclass
class Component:
    """A BEGIN/END delimited block.

    ``fields`` are serialized in insertion order. ``metadata`` holds
    structural data that is never written out.
    """

    tag: str
    fields: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add(self, name: str, value: Any) -> "Component":
        """Append a field, keeping insertion order. Returns self for chaining."""
        self.fields[name] = value
        return self

    @classmethod
    def from_dict(cls, data: Dict) -> "Component":
        """Create a Component tree from the duck-typed dict form.

        The tag is read from ``$type``; other ``$``-prefixed keys go to
        metadata. Values are converted with :func:`node_from_value`.

        Args:
            data: Dictionary with a ``$type`` key.

        Returns:
            The converted Component.
        """
        tag = data.get(f"{METADATA_PREFIX}type", "")
        fields: Dict[str, Any] = {}
        metadata: Dict[str, Any] = {}
        for key, value in data.items():
            if key.startswith(METADATA_PREFIX):
                metadata[key[len(METADATA_PREFIX):]] = value
            else:
                fields[key] = node_from_value(value)
        metadata.pop("type", None)
        return cls(tag=tag, fields=fields, metadata=metadata)


Node = Union[Component, Property, RawLines, Scalar, List[Any]]


def node_from_value(value: Any) -> Any:
    """Convert a dict-form value into explicit nodes.

    - dicts with ``$type`` become Components
    - dicts with ``$props`` become Properties (``value`` and ``key`` read)
    - lists whose first element is a string become RawLines
    - other lists are converted element by element
    - everything else is returned unchanged
    """
    if isinstance(value, dict):
        if f"{METADATA_PREFIX}type" in value:
            return Component.from_dict(value)
        if f"{METADATA_PREFIX}props" in value:
            return Property(
                value=node_from_value(value.get("value")),
                params=dict(value[f"{METADATA_PREFIX}props"] or {}),
                key=value.get("key"),
            )
        return value
    if isinstance(value, (list, tuple)):
        if value and isinstance(value[0], str):
            return RawLines(value)
        return [node_from_value(item) for item in value]
    return value
