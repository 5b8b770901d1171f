"""
Text rendering for check, oracle and dice results.
"""

from __future__ import annotations

from .dice import DiceRollResult
from .models import (
    CheckVsDCResult,
    ComparisonOutcome,
    OpposedCheckResult,
    OracleResultOutcome,
    RollDetails,
)

OUTCOME_PHRASES: dict[ComparisonOutcome, str] = {
    ComparisonOutcome.CRIT_SUCCESS: "Critical Success!",
    ComparisonOutcome.SUCCESS: "Success.",
    ComparisonOutcome.TIE: "Tie.",
    ComparisonOutcome.FAILURE: "Failure.",
    ComparisonOutcome.CRIT_FAILURE: "Critical Failure!",
}


def format_roll_details(details: RollDetails) -> str:
    """Render one roll, e.g. 'Roll: 15 (d20) +2 (Strength Mod) = 17'."""
    sign = "+" if details.modifier >= 0 else "-"
    return (
        f"Roll: {details.d20_roll} (d20) {sign}{abs(details.modifier)} "
        f"({details.stat.value} Mod) = {details.total}"
    )


def format_outcome(result: CheckVsDCResult | OpposedCheckResult | None) -> str:
    """Render a check result as an outcome phrase followed by the roll lines.

    Returns an empty string for ``None``.
    """
    if result is None:
        return ""

    phrase = OUTCOME_PHRASES[result.outcome]

    if isinstance(result, OpposedCheckResult):
        return (
            f"{phrase} ({result.encounter_action.name})\n"
            f"  {result.char1_name} ({result.char1_details.stat.value}): "
            f"{format_roll_details(result.char1_details)}\n"
            f"  {result.char2_name} ({result.char2_details.stat.value}): "
            f"{format_roll_details(result.char2_details)}"
        )

    return f"{phrase} (vs DC {result.dc}) {format_roll_details(result.roll_details)}"


def format_oracle_result(outcome: OracleResultOutcome) -> str:
    """Render an oracle answer with its pass/fail line."""
    pass_fail = "PASS" if outcome.is_yes else "FAIL"
    return (
        f"{outcome.result}\n"
        f"({pass_fail}): You rolled {outcome.roll} vs <= {outcome.yes_threshold} "
        f"needed for Yes on {outcome.likelihood.value}"
    )


def format_dice_roll(result: DiceRollResult) -> str:
    """Render a dice roll, e.g. '3d6+2: [4, 1, 6] +2 = 13'."""
    rolls_text = ", ".join(str(r) for r in result.rolls)
    modifier_text = f" {result.modifier:+d}" if result.modifier != 0 else ""
    return f"{result.notation}: [{rolls_text}]{modifier_text} = {result.total}"
