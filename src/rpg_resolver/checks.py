"""
Check resolution: stat modifiers, d20 checks and their graded outcomes.

Functions:
    calculate_stat_modifier: floor((stat - 10) / 2), permissive on bad input.
    calculate_total_stat: Raw stat lookup with a default of 10.
    simulate_check: One d20 roll plus the stat modifier.
    determine_outcome: Compare a roll with a target, natural 20/1 first.
    skill_check_vs_dc: Check against a fixed Difficulty Class.
    resolve_opposed_check: Two characters roll against each other.
    resolve_encounter_action: Dispatch an EncounterAction by its mode.
    luck_test: d100 against the character's Luck score.

Nothing here mutates the characters passed in; the caller decides what to
do with the result objects.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .dice import DiceEngine, get_default_engine
from .exceptions import ConfigurationError
from .models import (
    Character,
    CheckVsDCResult,
    ComparisonOutcome,
    CoreStat,
    EncounterAction,
    OpposedCheckResult,
    ResolutionMode,
    RollDetails,
)

logger = logging.getLogger("rpg-resolver.checks")

DEFAULT_STAT_VALUE = 10


# ---------------------------------------------------------------------------
# Modifiers
# ---------------------------------------------------------------------------

def calculate_stat_modifier(stat_value: Any) -> int:
    """Calculate the modifier for a raw stat value.

    Uses true floor division, so 9 gives -1 and 10.5 gives 0. Anything that
    is not a finite number (None, strings, booleans, NaN) counts as 10.

    Args:
        stat_value: The raw stat value (e.g., 14).

    Returns:
        The modifier (e.g., +2).
    """
    value = stat_value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        value = DEFAULT_STAT_VALUE
    elif isinstance(value, float) and not math.isfinite(value):
        value = DEFAULT_STAT_VALUE
    if isinstance(value, int):
        # Integer floor division stays exact for arbitrarily large stats
        return (value - 10) // 2
    return math.floor((value - 10) / 2)


def calculate_total_stat(character: Character, stat: CoreStat | str) -> Any:
    """Return the raw stat value, or 10 when the sheet has none.

    Non-player entities (Events in particular) often omit stats entirely.
    """
    return character.stats.get(CoreStat(stat)) or DEFAULT_STAT_VALUE


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

def simulate_check(
    character: Character,
    stat: CoreStat | str,
    dice: DiceEngine | None = None,
) -> RollDetails:
    """Roll a d20 and add the modifier for ``stat``.

    Args:
        character: The character performing the roll.
        stat: The stat used for the roll.
        dice: Engine to roll with. Defaults to the process-wide engine.

    Returns:
        RollDetails with stat, modifier, natural d20 and total.
    """
    dice = dice or get_default_engine()
    stat = CoreStat(stat)
    d20_roll = dice.roll_d20()
    stat_value = calculate_total_stat(character, stat)
    modifier = calculate_stat_modifier(stat_value)
    details = RollDetails(
        stat=stat,
        stat_value=stat_value,
        modifier=modifier,
        d20_roll=d20_roll,
        total=d20_roll + modifier,
    )
    logger.debug(
        f"{character.name} {stat.value}: d20={d20_roll} {modifier:+d} = {details.total}"
    )
    return details


def determine_outcome(roll_details: RollDetails, target: int) -> ComparisonOutcome:
    """Grade a roll against a target value (a DC or an opponent's total).

    A natural 20 or natural 1 overrides the numeric comparison.
    """
    if roll_details.d20_roll == 20:
        return ComparisonOutcome.CRIT_SUCCESS
    if roll_details.d20_roll == 1:
        return ComparisonOutcome.CRIT_FAILURE
    if roll_details.total > target:
        return ComparisonOutcome.SUCCESS
    if roll_details.total < target:
        return ComparisonOutcome.FAILURE
    return ComparisonOutcome.TIE


def skill_check_vs_dc(
    character: Character,
    stat: CoreStat | str,
    dc: int,
    dice: DiceEngine | None = None,
) -> CheckVsDCResult:
    """Perform a check against a fixed Difficulty Class."""
    roll_details = simulate_check(character, stat, dice)
    outcome = determine_outcome(roll_details, dc)
    return CheckVsDCResult(outcome=outcome, roll_details=roll_details, dc=dc)


def resolve_opposed_check(
    char1: Character,
    char2: Character,
    action: EncounterAction,
    dice: DiceEngine | None = None,
) -> OpposedCheckResult:
    """Resolve a contest between two characters.

    char1 rolls on the action's primary stat and char2 on its secondary
    stat. The outcome is graded from char1's side only: char2's natural
    20 or 1 has no special effect.

    Raises:
        ConfigurationError: If the action has no secondary stat.
    """
    if action.secondary_stat is None:
        raise ConfigurationError(
            f'Action "{action.name}" is not configured for opposed checks.',
            {"action": action.name},
        )

    char1_details = simulate_check(char1, action.primary_stat, dice)
    char2_details = simulate_check(char2, action.secondary_stat, dice)
    outcome = determine_outcome(char1_details, char2_details.total)

    return OpposedCheckResult(
        outcome=outcome,
        char1_name=char1.name,
        char1_details=char1_details,
        char2_name=char2.name,
        char2_details=char2_details,
        encounter_action=action,
    )


def resolve_encounter_action(
    character: Character,
    action: EncounterAction,
    *,
    opponent: Character | None = None,
    dc: int | None = None,
    dice: DiceEngine | None = None,
) -> CheckVsDCResult | OpposedCheckResult:
    """Resolve a catalog action according to its mode.

    Opposed actions need an ``opponent``; vs-DC actions need a ``dc``. A
    missing counterpart is an error, never a switch to the other mode.

    Raises:
        ConfigurationError: If the counterpart for the action's mode is missing.
    """
    if action.mode is ResolutionMode.OPPOSED:
        if opponent is None:
            raise ConfigurationError(
                f'Action "{action.name}" is an opposed check and needs an opponent.',
                {"action": action.name},
            )
        return resolve_opposed_check(character, opponent, action, dice)

    if dc is None:
        raise ConfigurationError(
            f'Action "{action.name}" is resolved against a DC and needs one.',
            {"action": action.name},
        )
    return skill_check_vs_dc(character, action.primary_stat, dc, dice)


# ---------------------------------------------------------------------------
# Luck
# ---------------------------------------------------------------------------

class LuckTestResult(BaseModel):
    """Percentile roll against a character's Luck score."""
    model_config = ConfigDict(frozen=True)

    character_name: str
    roll: int = Field(ge=1, le=100)
    target: Any = Field(description="The character's Luck score")
    success: bool


def luck_test(character: Character, dice: DiceEngine | None = None) -> LuckTestResult:
    """Roll a d100; the character is lucky when the roll is at most their Luck."""
    dice = dice or get_default_engine()
    roll = dice.roll_percentile()
    target = calculate_total_stat(character, CoreStat.LUCK)
    threshold = target if isinstance(target, (int, float)) and not isinstance(target, bool) else DEFAULT_STAT_VALUE
    return LuckTestResult(
        character_name=character.name,
        roll=roll,
        target=target,
        success=roll <= threshold,
    )
