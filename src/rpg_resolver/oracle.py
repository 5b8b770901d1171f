"""
Yes/no oracle with graded answers.

A likelihood label picks a table of percentile bands; a d100 roll picks
the band, which gives the narrative answer ("Yes, but...", "No, and...").
Every table must cover 1-100 with no gap and no overlap; this is checked
when the module is imported.

Two entry points:
    consult: Production path. An unknown likelihood is logged and replaced
        by the neutral "50/50" table instead of failing.
    consult_for_roll: Strict, deterministic path used to verify the tables.
        Unknown likelihoods and rolls outside 1-100 raise.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from .dice import DiceEngine, get_default_engine
from .exceptions import ConfigurationError, InvalidLikelihoodError, OutOfRangeRollError
from .models import LikelihoodLevel, OracleBand, OracleResultOutcome

logger = logging.getLogger("rpg-resolver.oracle")

FALLBACK_LIKELIHOOD = LikelihoodLevel.FIFTY_FIFTY

YES_AND = "Yes, and..."
YES = "Yes"
YES_BUT = "Yes, but..."
NO_BUT = "No, but..."
NO = "No"
NO_AND = "No, and..."


def _band(low: int, high: int, result: str) -> OracleBand:
    return OracleBand(low=low, high=high, result=result, is_yes=result.startswith("Yes"))


_RAW_TABLE: dict[LikelihoodLevel, tuple[OracleBand, ...]] = {
    LikelihoodLevel.IMPOSSIBLE: (
        _band(1, 100, NO_AND),
    ),
    LikelihoodLevel.NO_WAY: (
        _band(1, 5, YES),
        _band(6, 95, NO),
        _band(96, 100, NO_AND),
    ),
    LikelihoodLevel.VERY_UNLIKELY: (
        _band(1, 15, YES),
        _band(16, 20, YES_BUT),
        _band(21, 25, NO_BUT),
        _band(26, 90, NO),
        _band(91, 100, NO_AND),
    ),
    LikelihoodLevel.UNLIKELY: (
        _band(1, 1, YES_AND),
        _band(2, 35, YES),
        _band(36, 40, YES_BUT),
        _band(41, 45, NO_BUT),
        _band(46, 95, NO),
        _band(96, 100, NO_AND),
    ),
    LikelihoodLevel.FIFTY_FIFTY: (
        _band(1, 2, YES_AND),
        _band(3, 65, YES),
        _band(66, 70, YES_BUT),
        _band(71, 75, NO_BUT),
        _band(76, 98, NO),
        _band(99, 100, NO_AND),
    ),
    LikelihoodLevel.LIKELY: (
        _band(1, 5, YES_AND),
        _band(6, 75, YES),
        _band(76, 80, YES_BUT),
        _band(81, 85, NO_BUT),
        _band(86, 99, NO),
        _band(100, 100, NO_AND),
    ),
    LikelihoodLevel.VERY_LIKELY: (
        _band(1, 10, YES_AND),
        _band(11, 85, YES),
        _band(86, 90, YES_BUT),
        _band(91, 94, NO_BUT),
        _band(95, 99, NO),
        _band(100, 100, NO_AND),
    ),
    LikelihoodLevel.CERTAIN: (
        _band(1, 95, YES),
        _band(96, 100, YES_AND),
    ),
    LikelihoodLevel.YES_SPECIAL: (
        _band(1, 100, YES_AND),
    ),
}

# Threshold for a simple "Yes", shown to players. Not used for the band lookup.
_RAW_YES_THRESHOLDS: dict[LikelihoodLevel, int] = {
    LikelihoodLevel.IMPOSSIBLE: 0,
    LikelihoodLevel.NO_WAY: 5,
    LikelihoodLevel.VERY_UNLIKELY: 15,
    LikelihoodLevel.UNLIKELY: 35,
    LikelihoodLevel.FIFTY_FIFTY: 65,
    LikelihoodLevel.LIKELY: 75,
    LikelihoodLevel.VERY_LIKELY: 85,
    LikelihoodLevel.CERTAIN: 95,
    LikelihoodLevel.YES_SPECIAL: 100,
}


def validate_oracle_tables(
    table: Mapping[LikelihoodLevel, Sequence[OracleBand]],
    thresholds: Mapping[LikelihoodLevel, int],
) -> None:
    """Verify each likelihood's bands partition 1-100 exactly.

    Bands must be listed in ascending order, each starting right after the
    previous one ends, the first at 1 and the last at 100.

    Raises:
        ConfigurationError: On a missing table or threshold, a gap, or an overlap.
    """
    for level in LikelihoodLevel:
        bands = table.get(level)
        if not bands:
            raise ConfigurationError(f"No oracle table for likelihood '{level.value}'")
        if level not in thresholds:
            raise ConfigurationError(f"No yes threshold for likelihood '{level.value}'")

        expected_low = 1
        for band in bands:
            if band.low != expected_low:
                kind = "gap" if band.low > expected_low else "overlap"
                raise ConfigurationError(
                    f"Oracle table '{level.value}' has a {kind} at {expected_low}",
                    {"likelihood": level.value, "band": band.model_dump()},
                )
            expected_low = band.high + 1
        if expected_low != 101:
            raise ConfigurationError(
                f"Oracle table '{level.value}' stops at {expected_low - 1} instead of 100",
                {"likelihood": level.value},
            )


validate_oracle_tables(_RAW_TABLE, _RAW_YES_THRESHOLDS)

ORACLE_TABLE: Mapping[LikelihoodLevel, tuple[OracleBand, ...]] = MappingProxyType(_RAW_TABLE)
YES_THRESHOLDS: Mapping[LikelihoodLevel, int] = MappingProxyType(_RAW_YES_THRESHOLDS)


def _lookup(level: LikelihoodLevel, roll: int) -> OracleResultOutcome:
    for band in ORACLE_TABLE[level]:
        if band.contains(roll):
            return OracleResultOutcome(
                likelihood=level,
                roll=roll,
                result=band.result,
                is_yes=band.is_yes,
                yes_threshold=YES_THRESHOLDS[level],
            )
    raise OutOfRangeRollError(level.value, roll)


def consult(
    likelihood: LikelihoodLevel | str,
    dice: DiceEngine | None = None,
    fallback: LikelihoodLevel = FALLBACK_LIKELIHOOD,
) -> OracleResultOutcome:
    """Ask the oracle a question at the given likelihood.

    Args:
        likelihood: One of the nine likelihood labels (case-insensitive).
        dice: Engine for the d100 roll. Defaults to the process-wide engine.
        fallback: Likelihood used when ``likelihood`` is not recognised.

    Returns:
        OracleResultOutcome with the roll, answer and yes threshold.
    """
    try:
        level = LikelihoodLevel.parse(likelihood)
    except InvalidLikelihoodError:
        logger.error(f"Invalid likelihood {likelihood!r}, using '{fallback.value}' instead")
        level = fallback

    dice = dice or get_default_engine()
    roll = dice.roll_percentile()
    outcome = _lookup(level, roll)
    logger.debug(f"🔮 {level.value}: rolled {roll} -> {outcome.result}")
    return outcome


def consult_for_roll(likelihood: LikelihoodLevel | str, roll: int) -> OracleResultOutcome:
    """Look up the oracle answer for a known roll.

    Raises:
        InvalidLikelihoodError: If the likelihood is not recognised.
        OutOfRangeRollError: If no band contains ``roll``.
    """
    level = LikelihoodLevel.parse(likelihood)
    if isinstance(roll, bool) or not isinstance(roll, int):
        raise OutOfRangeRollError(level.value, roll)
    return _lookup(level, roll)
