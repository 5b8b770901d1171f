"""
rpg-resolver - dice, skill checks, opposed checks and a yes/no oracle for
tabletop roleplaying, with an optional FastMCP tool server.
"""

from .checks import (
    LuckTestResult,
    calculate_stat_modifier,
    calculate_total_stat,
    determine_outcome,
    luck_test,
    resolve_encounter_action,
    resolve_opposed_check,
    simulate_check,
    skill_check_vs_dc,
)
from .dice import DiceEngine, DiceRollResult, parse_notation, roll_dice, roll_multiple
from .encounters import find_encounter_action, get_encounter_actions, get_encounter_stat_pairing
from .exceptions import *
from .exceptions import __all__ as _exceptions_all
from .formatting import format_dice_roll, format_oracle_result, format_outcome
from .models import (
    Character,
    CharacterType,
    CheckVsDCResult,
    ComparisonOutcome,
    CoreStat,
    DifficultyClass,
    EncounterAction,
    EncounterStatPairing,
    EncounterType,
    LikelihoodLevel,
    OpposedCheckResult,
    OracleBand,
    OracleResultOutcome,
    ResolutionMode,
    RollDetails,
)
from .oracle import consult, consult_for_roll
from .validation import ValidationReport, validate_character

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("rpg-resolver")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
__all__ = [
    # Dice
    "DiceEngine",
    "DiceRollResult",
    "parse_notation",
    "roll_dice",
    "roll_multiple",
    # Checks
    "LuckTestResult",
    "calculate_stat_modifier",
    "calculate_total_stat",
    "simulate_check",
    "determine_outcome",
    "skill_check_vs_dc",
    "resolve_opposed_check",
    "resolve_encounter_action",
    "luck_test",
    # Encounters and oracle
    "find_encounter_action",
    "get_encounter_actions",
    "get_encounter_stat_pairing",
    "consult",
    "consult_for_roll",
    # Formatting and validation
    "format_dice_roll",
    "format_outcome",
    "format_oracle_result",
    "ValidationReport",
    "validate_character",
    # Models
    "Character",
    "CharacterType",
    "CheckVsDCResult",
    "ComparisonOutcome",
    "CoreStat",
    "DifficultyClass",
    "EncounterAction",
    "EncounterStatPairing",
    "EncounterType",
    "LikelihoodLevel",
    "OpposedCheckResult",
    "OracleBand",
    "OracleResultOutcome",
    "ResolutionMode",
    "RollDetails",
    *_exceptions_all,
]
