"""Field descriptor registry for enrollment records.

A :class:`RecordSchema` groups the :class:`FieldDescriptor` entries of one
logical record (customer, beneficiary, notice answers, ...). Descriptors are
plain data: the validation engine in :mod:`core.validation` interprets them in
a fixed priority order (required, rules, cross-field).
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Mapping

Record = Mapping[str, str]


@dataclass(frozen=True)
class ValidationContext:
    """Inputs a rule may consult besides the field value itself."""

    record: Record
    today: date


RuleCheck = Callable[[str, ValidationContext], bool]
Normalizer = Callable[[str], str]
Comparator = Callable[[str, str], bool]


@dataclass(frozen=True)
class FieldRule:
    """A single check applied to a non-empty value.

    ``check`` returns ``True`` when the value passes; otherwise ``message`` is
    reported. Rules of one descriptor run in declaration order and the first
    failure wins.
    """

    check: RuleCheck
    message: str


@dataclass(frozen=True)
class CrossFieldCheck:
    """Consistency check against another path of the same record.

    Evaluated only when the paired value is non-empty. ``comparator`` receives
    ``(value, pair_value)`` and returns ``True`` when both agree.
    """

    pair: str
    message: str
    comparator: Comparator = operator.eq


@dataclass(frozen=True)
class FieldDescriptor:
    """Validation metadata for one logical field.

    Attributes:
        path: Field path, unique within its record schema.
        required: Whether an empty value is an error.
        required_message: Message reported for a missing required value.
        rules: Format and computed-range checks in priority order.
        cross_field: Optional check against another path.
        segments: Record paths joined to build a composite value (phone
            triplets). When set, ``path`` itself is not read from the record.
        normalize: Optional transform applied before any check.
    """

    path: str
    required: bool = False
    required_message: str = ""
    rules: tuple[FieldRule, ...] = ()
    cross_field: CrossFieldCheck | None = None
    segments: tuple[str, ...] = ()
    normalize: Normalizer | None = None

    @property
    def dependencies(self) -> tuple[str, ...]:
        """Return the record paths whose change requires revalidating this field."""

        deps: list[str] = list(self.segments) if self.segments else [self.path]
        if self.cross_field is not None:
            deps.append(self.cross_field.pair)
        return tuple(deps)


@dataclass(frozen=True)
class RecordSchema:
    """Ordered descriptors for one record plus the error-map key prefix."""

    name: str
    fields: tuple[FieldDescriptor, ...]
    error_prefix: str = ""
    _index: dict[str, FieldDescriptor] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, FieldDescriptor] = {}
        for descriptor in self.fields:
            if descriptor.path in index:
                raise ValueError(f"Duplicate field path '{descriptor.path}' in schema '{self.name}'")
            index[descriptor.path] = descriptor
        object.__setattr__(self, "_index", index)

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(descriptor.path for descriptor in self.fields)

    def descriptor(self, path: str) -> FieldDescriptor | None:
        return self._index.get(path)

    def error_key(self, path: str) -> str:
        return f"{self.error_prefix}{path}"

    def affected_paths(self, changed_path: str) -> tuple[str, ...]:
        """Return descriptor paths to revalidate after ``changed_path`` changed."""

        return tuple(
            descriptor.path for descriptor in self.fields if changed_path in descriptor.dependencies
        )


def _length_between(minimum: int, maximum: int) -> RuleCheck:
    return lambda value, _ctx: minimum <= len(value) <= maximum


def length_between(minimum: int, maximum: int, message: str) -> FieldRule:
    return FieldRule(_length_between(minimum, maximum), message)


def max_length(maximum: int, message: str) -> FieldRule:
    return FieldRule(lambda value, _ctx: len(value) <= maximum, message)


def min_length(minimum: int, message: str) -> FieldRule:
    return FieldRule(lambda value, _ctx: len(value) >= minimum, message)


def pattern_rule(check: Callable[[str], bool], message: str) -> FieldRule:
    """Wrap a context-free predicate (usually a regex helper) as a rule."""

    return FieldRule(lambda value, _ctx: check(value), message)


def one_of(options: Mapping[str, str] | tuple[str, ...], message: str) -> FieldRule:
    allowed = frozenset(options)
    return FieldRule(lambda value, _ctx: value in allowed, message)


def strip_whitespace(value: str) -> str:
    return value.strip()
