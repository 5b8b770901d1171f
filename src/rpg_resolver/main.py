"""
rpg-resolver MCP server: skill checks, opposed checks, dice and the oracle
exposed as FastMCP tools.
"""

import logging
from typing import Annotated, Any

from dotenv import load_dotenv
from fastmcp import FastMCP
from pydantic import Field

from .checks import luck_test as _run_luck_test, resolve_opposed_check, skill_check_vs_dc
from .config import load_config
from .dice import DiceEngine
from .encounters import (
    actions_by_mode,
    find_encounter_action,
    get_encounter_actions,
    get_encounter_stat_pairing,
)
from .exceptions import ResolverError
from .formatting import format_dice_roll, format_oracle_result, format_outcome
from .models import Character, CharacterType, CoreStat, EncounterType, LikelihoodLevel, ResolutionMode
from .oracle import consult
from .validation import validate_character as _validate_character

logger = logging.getLogger("rpg-resolver")

if not load_dotenv():
    logger.debug(".env file not found, using process environment only")

config = load_config()

logging.basicConfig(level=config.log_level)

dice = config.build_dice_engine()
logger.debug(f"🎲 Dice engine ready (seed: {config.seed if config.seed is not None else 'system'})")

mcp = FastMCP(
    name="rpg-resolver"
)


def _make_character(name: str, stats: dict[str, Any] | None) -> Character:
    """Build a Character from a tool call's name and stat mapping.

    Stat names are matched case-insensitively; unknown names are dropped
    with a warning rather than failing the call.
    """
    by_lower = {s.value.lower(): s for s in CoreStat}
    parsed: dict[CoreStat, Any] = {}
    for key, value in (stats or {}).items():
        stat = by_lower.get(str(key).strip().lower())
        if stat is None:
            logger.warning(f"Ignoring unknown stat '{key}' for {name}")
            continue
        parsed[stat] = value
    return Character(name=name, stats=parsed)


def _parse_stat(stat: str) -> CoreStat:
    for candidate in CoreStat:
        if candidate.value.lower() == stat.strip().lower():
            return candidate
    valid = ", ".join(s.value for s in CoreStat)
    raise ValueError(f"Unknown stat '{stat}'. Valid stats: {valid}")


# ----------------------------------------------------------------------
# Tool logic
# ----------------------------------------------------------------------

def _roll_dice_logic(engine: DiceEngine, dice_notation: str, times: int = 1) -> str:
    if times < 1:
        return "Error: times must be at least 1"
    try:
        results = [engine.roll_detailed(dice_notation) for _ in range(times)]
    except ResolverError as e:
        return f"Error: {e}"
    return "\n".join(f"🎲 {format_dice_roll(r)}" for r in results)


def _skill_check_logic(
    engine: DiceEngine,
    character_name: str,
    stats: dict[str, Any] | None,
    stat: str,
    dc: int | None = None,
) -> str:
    try:
        relevant = _parse_stat(stat)
    except ValueError as e:
        return f"Error: {e}"
    character = _make_character(character_name, stats)
    result = skill_check_vs_dc(character, relevant, dc if dc is not None else config.default_dc, engine)
    return f"{character.name} — {format_outcome(result)}"


def _opposed_check_logic(
    engine: DiceEngine,
    encounter_type: str,
    action_name: str,
    char1_name: str,
    char1_stats: dict[str, Any] | None,
    char2_name: str,
    char2_stats: dict[str, Any] | None,
) -> str:
    action = find_encounter_action(encounter_type, action_name)
    if action is None:
        return f"Error: No action '{action_name}' for encounter type '{encounter_type}'"
    try:
        result = resolve_opposed_check(
            _make_character(char1_name, char1_stats),
            _make_character(char2_name, char2_stats),
            action,
            engine,
        )
    except ResolverError as e:
        return f"Error: {e}"
    return format_outcome(result)


def _list_encounter_actions_logic(encounter_type: str) -> str:
    actions = get_encounter_actions(encounter_type)
    if not actions:
        valid = ", ".join(t.value for t in EncounterType)
        return f"No actions for encounter type '{encounter_type}'. Valid types: {valid}"

    lines = [f"**{encounter_type} actions:**"]
    for action in actions_by_mode(encounter_type, ResolutionMode.OPPOSED):
        lines.append(f"- {action.name}: {action.primary_stat.value} vs {action.secondary_stat.value}")
    for action in actions_by_mode(encounter_type, ResolutionMode.VS_DC):
        lines.append(f"- {action.name}: {action.primary_stat.value} vs DC")

    pairing = get_encounter_stat_pairing(encounter_type)
    if pairing is not None:
        against = pairing.secondary_stat.value if pairing.secondary_stat else "DC"
        lines.append(f"Default pairing: {pairing.primary_stat.value} vs {against}")
    return "\n".join(lines)


def _consult_oracle_logic(engine: DiceEngine, likelihood: str, question: str = "") -> str:
    outcome = consult(likelihood, engine, fallback=config.oracle_fallback)
    prefix = f"❓ {question}\n" if question else ""
    return f"🔮 {prefix}{format_oracle_result(outcome)}"


def _luck_test_logic(engine: DiceEngine, character_name: str, stats: dict[str, Any] | None) -> str:
    result = _run_luck_test(_make_character(character_name, stats), engine)
    verdict = "Lucky!" if result.success else "Unlucky"
    return f"Luck Check: Rolled {result.roll} vs Target {result.target} -> {verdict}"


def _validate_character_logic(
    character_name: str,
    stats: dict[str, Any] | None,
    health: int | None,
    character_type: str = CharacterType.PLAYER.value,
    notes: str | None = None,
) -> str:
    try:
        char_type = CharacterType(character_type)
    except ValueError:
        valid = ", ".join(t.value for t in CharacterType)
        return f"Error: Unknown character type '{character_type}'. Valid types: {valid}"
    character = _make_character(character_name, stats).model_copy(
        update={"type": char_type, "health": health, "notes": notes}
    )
    return str(_validate_character(character))


# ----------------------------------------------------------------------
# Tools
# ----------------------------------------------------------------------

@mcp.tool
def roll_dice(
    dice_notation: Annotated[str, Field(description="Dice notation (e.g., 'd20', '3d6+2')")],
    times: Annotated[int, Field(description="How many separate rolls to make", ge=1, le=100)] = 1,
) -> str:
    """Roll dice with standard notation. Supports d4, d6, d8, d10, d12, d20 and d100."""
    return _roll_dice_logic(dice, dice_notation, times)


@mcp.tool
def skill_check(
    character_name: Annotated[str, Field(description="Name of the character making the check")],
    stat: Annotated[str, Field(description="Stat to roll (e.g., 'Strength', 'Luck')")],
    stats: Annotated[dict[str, int] | None, Field(description="Character stats, e.g. {'Strength': 14}. Missing stats count as 10")] = None,
    dc: Annotated[int | None, Field(description="Difficulty Class to beat. Defaults to the configured DC", ge=1, le=30)] = None,
) -> str:
    """Roll a d20 check for one character against a Difficulty Class."""
    return _skill_check_logic(dice, character_name, stats, stat, dc)


@mcp.tool
def opposed_check(
    encounter_type: Annotated[str, Field(description="Encounter type (Combat, Social, Physical, Mental, Exploration, Other)")],
    action_name: Annotated[str, Field(description="Opposed action name (e.g., 'Melee Attack')")],
    char1_name: Annotated[str, Field(description="Name of the initiating character")],
    char2_name: Annotated[str, Field(description="Name of the opposing character")],
    char1_stats: Annotated[dict[str, int] | None, Field(description="Initiator's stats")] = None,
    char2_stats: Annotated[dict[str, int] | None, Field(description="Opponent's stats")] = None,
) -> str:
    """Resolve an opposed encounter action between two characters."""
    return _opposed_check_logic(
        dice, encounter_type, action_name, char1_name, char1_stats, char2_name, char2_stats
    )


@mcp.tool
def list_encounter_actions(
    encounter_type: Annotated[str, Field(description="Encounter type (Combat, Social, Physical, Mental, Exploration, Other)")],
) -> str:
    """List the actions available for an encounter type."""
    return _list_encounter_actions_logic(encounter_type)


@mcp.tool
def consult_oracle(
    likelihood: Annotated[str, Field(description=f"One of: {', '.join(l.value for l in LikelihoodLevel)}")],
    question: Annotated[str, Field(description="The yes/no question being asked")] = "",
) -> str:
    """Ask the oracle a yes/no question at a given likelihood."""
    return _consult_oracle_logic(dice, likelihood, question)


@mcp.tool
def luck_test(
    character_name: Annotated[str, Field(description="Name of the character testing their luck")],
    stats: Annotated[dict[str, int] | None, Field(description="Character stats; only Luck is used")] = None,
) -> str:
    """Roll a d100 against the character's Luck score."""
    return _luck_test_logic(dice, character_name, stats)


@mcp.tool
def validate_character(
    character_name: Annotated[str, Field(description="Character name")],
    stats: Annotated[dict[str, int] | None, Field(description="Character stats")] = None,
    health: Annotated[int | None, Field(description="Current health")] = None,
    character_type: Annotated[str, Field(description="Player, NPC, Enemy or Event")] = "Player",
    notes: Annotated[str | None, Field(description="Free-form notes")] = None,
) -> str:
    """Check a character sheet for missing or out-of-range values."""
    return _validate_character_logic(character_name, stats, health, character_type, notes)


logger.debug("✅ All tools registered. rpg-resolver server ready 🎲")


def main() -> None:
    """Main entry point for the rpg-resolver MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
