"""
Character sheet validation.

Produces a report of problems with a character sheet: missing identity
fields, stats outside 1-20, over-long notes. Validation is informational;
the check resolver never requires a valid sheet and treats missing or
non-numeric stats as 10.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .models import Character, CharacterType, CoreStat

MIN_STAT_VALUE = 1
MAX_STAT_VALUE = 20
MAX_NOTE_LENGTH = 500


class ValidationSeverity(Enum):
    """Severity level for validation issues."""
    ERROR = "error"      # Sheet cannot be used as-is
    WARNING = "warning"  # Usable, but probably not what was meant


@dataclass
class ValidationIssue:
    """A single validation issue found on a character sheet."""
    severity: ValidationSeverity
    field: str          # e.g., "stats.Strength"
    message: str


@dataclass
class ValidationReport:
    """All issues found on one character. Valid means no ERROR issues."""
    character_id: str
    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def __str__(self) -> str:
        lines = [f"Validation Report for {self.character_id or '(no id)'}"]
        lines.append(f"Status: {'✓ VALID' if self.valid else '✗ INVALID'}")
        lines.append(f"Issues: {len(self.errors)} errors, {len(self.warnings)} warnings")

        for title, issues in (("Errors", self.errors), ("Warnings", self.warnings)):
            if issues:
                lines.append(f"\n{title}:")
                for issue in issues:
                    lines.append(f"  - {issue.field}: {issue.message}")

        return "\n".join(lines)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_identity(character: Character) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if not character.id or not character.id.strip():
        issues.append(ValidationIssue(ValidationSeverity.ERROR, "id", "ID is required."))
    if not character.name or not character.name.strip():
        issues.append(ValidationIssue(ValidationSeverity.ERROR, "name", "Name is required."))
    if character.health is None or character.health < 0:
        issues.append(ValidationIssue(
            ValidationSeverity.ERROR, "health", "Health must be a non-negative number."
        ))
    return issues


def _validate_stats(character: Character) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for stat in CoreStat:
        value = character.stats.get(stat)
        field_name = f"stats.{stat.value}"
        if value is None or (isinstance(value, str) and not value.strip()):
            issues.append(ValidationIssue(
                ValidationSeverity.ERROR, field_name, f"{stat.value} is required."
            ))
        elif not _is_number(value) or not MIN_STAT_VALUE <= value <= MAX_STAT_VALUE:
            issues.append(ValidationIssue(
                ValidationSeverity.ERROR,
                field_name,
                f"{stat.value} must be between {MIN_STAT_VALUE} and {MAX_STAT_VALUE}.",
            ))
    return issues


def _validate_notes(character: Character) -> list[ValidationIssue]:
    if character.notes and len(character.notes) > MAX_NOTE_LENGTH:
        return [ValidationIssue(
            ValidationSeverity.ERROR,
            "notes",
            f"Notes cannot exceed {MAX_NOTE_LENGTH} characters.",
        )]
    return []


def validate_character(character: Character) -> ValidationReport:
    """Validate a character sheet.

    Events have no stats or health of their own, so only their identity
    and notes are checked.
    """
    issues: list[ValidationIssue] = []

    if character.type == CharacterType.EVENT:
        issues.extend(i for i in _validate_identity(character) if i.field != "health")
        if character.stats:
            issues.append(ValidationIssue(
                ValidationSeverity.WARNING, "stats", "Events do not normally carry stats."
            ))
    else:
        issues.extend(_validate_identity(character))
        issues.extend(_validate_stats(character))

    issues.extend(_validate_notes(character))

    return ValidationReport(
        character_id=character.id,
        valid=not any(i.severity == ValidationSeverity.ERROR for i in issues),
        issues=issues,
    )
