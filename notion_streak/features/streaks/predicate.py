from __future__ import annotations

from notion_streak.models.record import (
    CheckboxValue,
    FormulaValue,
    OnTrack,
    Record,
    SelectValue,
)

DEFAULT_FIELD = "On Track?"


def _yes(text: str | None) -> OnTrack:
    if text is not None and text.lower() == "yes":
        return OnTrack.ON_TRACK
    return OnTrack.OFF_TRACK


def extract_on_track(record: Record, field_name: str = DEFAULT_FIELD) -> OnTrack:
    """Read the tracked property as a tri-state.

    Precedence: checkbox literal, then select label == "yes" (any case), then
    a string formula result compared the same way. Anything else, including a
    missing property, is UNDETERMINED.
    """
    value = record.properties.get(field_name)

    if isinstance(value, CheckboxValue):
        return OnTrack.ON_TRACK if value.checked else OnTrack.OFF_TRACK
    if isinstance(value, SelectValue):
        return _yes(value.name)
    if isinstance(value, FormulaValue) and value.result_type == "string" and value.string is not None:
        return _yes(value.string)
    return OnTrack.UNDETERMINED
