"""Declarative request validation.

A resource declares a tuple of :class:`FieldRule` records; every rule is
evaluated against the payload and all violations are returned together.
Rejections surface as HTTP 400 with an ``error`` summary and the full
``violations`` list.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from fastapi import HTTPException, status

OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


@dataclass(frozen=True, slots=True)
class Violation:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Constraints for a single payload field, keyed by its JSON name."""

    name: str
    required: bool = False
    choices: tuple[str, ...] | None = None
    object_id: bool = False
    email: bool = False
    min_value: int | None = None

    def check(self, value: object) -> Violation | None:
        if is_blank(value):
            if self.required:
                return Violation(self.name, f"Invalid input: '{self.name}' is required.")
            return None

        if self.object_id and not is_object_id(value):
            return Violation(self.name, f"Invalid input: '{self.name}' must be a valid 24-character hex id.")
        if self.email and not (isinstance(value, str) and EMAIL_PATTERN.fullmatch(value)):
            return Violation(self.name, f"Invalid input: '{self.name}' must be a valid email address.")
        if self.choices is not None and value not in self.choices:
            return Violation(self.name, f"Invalid input: '{self.name}' must be one of {list(self.choices)}.")
        if self.min_value is not None:
            if not isinstance(value, int) or value < self.min_value:
                return Violation(self.name, f"Invalid input: '{self.name}' must be a positive integer.")
        return None


def is_blank(value: object) -> bool:
    return value is None or value == "" or value == []


def is_object_id(value: object) -> bool:
    """Return True for a 24-character hex identifier."""

    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


def collect_violations(payload: Mapping[str, object], rules: Iterable[FieldRule]) -> list[Violation]:
    """Evaluate every rule and return all violations in rule order."""

    violations = []
    for rule in rules:
        violation = rule.check(payload.get(rule.name))
        if violation is not None:
            violations.append(violation)
    return violations


def reject(message: str, violations: Sequence[Violation] = ()) -> HTTPException:
    """Build the 400 rejection raised for malformed input."""

    detail: dict[str, object] = {"error": message}
    if violations:
        detail["violations"] = [item.as_dict() for item in violations]
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def ensure_valid(payload: Mapping[str, object], rules: Iterable[FieldRule]) -> None:
    """Raise a 400 rejection when any rule is violated."""

    violations = collect_violations(payload, rules)
    if violations:
        raise reject(violations[0].message, violations)


def ensure_object_id(value: str, message: str) -> None:
    """Reject a path identifier that is not a 24-character hex id."""

    if not is_object_id(value):
        raise reject(message)
