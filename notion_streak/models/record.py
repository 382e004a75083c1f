from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union


class OnTrack(str, Enum):
    """Per-record predicate outcome."""
    ON_TRACK = "on_track"
    OFF_TRACK = "off_track"
    UNDETERMINED = "undetermined"


@dataclass(frozen=True)
class CheckboxValue:
    checked: bool


@dataclass(frozen=True)
class SelectValue:
    name: Optional[str]


@dataclass(frozen=True)
class FormulaValue:
    result_type: str
    string: Optional[str] = None


@dataclass(frozen=True)
class OtherValue:
    """Any Notion property type the streak logic does not read."""
    type: str


PropertyValue = Union[CheckboxValue, SelectValue, FormulaValue, OtherValue]

# Order matters when a raw property has no "type" tag.
_KNOWN_TYPES = ("checkbox", "select", "formula")


@dataclass(frozen=True)
class Record:
    """
    One row of the tracked Notion database. Read-only; position in the
    descending-date sequence is its only identity that matters here.
    """

    id: Optional[str]
    properties: Mapping[str, PropertyValue] = field(default_factory=dict)

    @classmethod
    def from_notion(cls, page: Mapping[str, Any]) -> "Record":
        raw_props = page.get("properties") or {}
        return cls(
            id=page.get("id"),
            properties={name: parse_property(raw) for name, raw in raw_props.items()},
        )


def parse_property(raw: Any) -> PropertyValue:
    """Convert a raw Notion property object into a PropertyValue variant."""
    if not isinstance(raw, Mapping):
        return OtherValue(type="unknown")

    prop_type = raw.get("type")
    if prop_type is None:
        prop_type = next((t for t in _KNOWN_TYPES if t in raw), "unknown")

    if prop_type == "checkbox":
        return CheckboxValue(checked=raw.get("checkbox") is True)
    if prop_type == "select":
        option = raw.get("select")
        name = option.get("name") if isinstance(option, Mapping) else None
        return SelectValue(name=name if isinstance(name, str) else None)
    if prop_type == "formula":
        result = raw.get("formula")
        if not isinstance(result, Mapping):
            return FormulaValue(result_type="unknown")
        result_type = result.get("type") or ("string" if "string" in result else "unknown")
        value = result.get("string")
        return FormulaValue(
            result_type=result_type,
            string=value if result_type == "string" and isinstance(value, str) else None,
        )
    return OtherValue(type=str(prop_type))
