"""Validation engine interpreting :mod:`core.fields` descriptors.

The functions here are pure: they read a record and return messages. Callers
own the error map and decide when to merge results into it.
"""

from __future__ import annotations

from datetime import date
from typing import Mapping

from core.fields import FieldDescriptor, Record, RecordSchema, ValidationContext

ErrorMap = dict[str, str]


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def field_value(descriptor: FieldDescriptor, record: Record) -> str:
    """Return the value the rules of ``descriptor`` operate on."""

    if descriptor.segments:
        raw = "".join(_as_text(record.get(segment)) for segment in descriptor.segments)
    else:
        raw = _as_text(record.get(descriptor.path))
    if descriptor.normalize is not None:
        return descriptor.normalize(raw)
    return raw


def _is_incomplete(descriptor: FieldDescriptor, record: Record, value: str) -> bool:
    # Composite fields count as empty until every segment is filled in.
    if descriptor.segments:
        return any(not _as_text(record.get(segment)) for segment in descriptor.segments)
    return not value


def check_descriptor(descriptor: FieldDescriptor, record: Record, *, today: date | None = None) -> str | None:
    """Return the first failing message for ``descriptor`` or ``None``.

    Priority: required, then rules in declaration order, then the cross-field
    check. Rules only run on complete input; confirmation fields are
    compared whenever their pair is filled in.
    """

    value = field_value(descriptor, record)
    if descriptor.required and _is_incomplete(descriptor, record, value):
        return descriptor.required_message
    context = ValidationContext(record=record, today=today or date.today())
    if not _is_incomplete(descriptor, record, value):
        for rule in descriptor.rules:
            if not rule.check(value, context):
                return rule.message
    cross = descriptor.cross_field
    if cross is not None:
        pair_value = _as_text(record.get(cross.pair))
        if pair_value and not cross.comparator(value, pair_value):
            return cross.message
    return None


def validate_field(
    schema: RecordSchema,
    path: str,
    record: Record,
    *,
    today: date | None = None,
) -> str | None:
    """Return the message for ``path`` in ``record`` or ``None`` when valid."""

    descriptor = schema.descriptor(path)
    if descriptor is None:
        return None
    return check_descriptor(descriptor, record, today=today)


def validate_record(schema: RecordSchema, record: Record, *, today: date | None = None) -> ErrorMap:
    """Return the full error map for ``record`` keyed by prefixed path."""

    errors: ErrorMap = {}
    for descriptor in schema.fields:
        message = check_descriptor(descriptor, record, today=today)
        if message:
            errors[schema.error_key(descriptor.path)] = message
    return errors


def revalidate(
    schema: RecordSchema,
    changed_path: str,
    record: Record,
    errors: Mapping[str, str],
    *,
    today: date | None = None,
) -> ErrorMap:
    """Return ``errors`` updated after ``changed_path`` changed.

    Every descriptor depending on ``changed_path`` (the field itself, composite
    owners and cross-field partners) has its prior entry cleared before the new
    result is merged. Unrelated entries are kept as they are.
    """

    updated: ErrorMap = dict(errors)
    for path in schema.affected_paths(changed_path):
        key = schema.error_key(path)
        updated.pop(key, None)
        message = validate_field(schema, path, record, today=today)
        if message:
            updated[key] = message
    return updated


__all__ = [
    "ErrorMap",
    "check_descriptor",
    "field_value",
    "revalidate",
    "validate_field",
    "validate_record",
]
