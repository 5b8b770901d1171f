"""
Tests for the MCP tool logic in rpg_resolver.main.

The tool functions themselves are wrapped by FastMCP, so these tests call the
underlying ``_..._logic`` helpers with a scripted dice engine.
"""

import logging

from rpg_resolver.main import (
    _consult_oracle_logic,
    _list_encounter_actions_logic,
    _luck_test_logic,
    _make_character,
    _opposed_check_logic,
    _roll_dice_logic,
    _skill_check_logic,
    _validate_character_logic,
)
from rpg_resolver.models import CoreStat

MARA_STATS = {
    "Strength": 14,
    "Perception": 12,
    "Endurance": 10,
    "Charisma": 9,
    "Intelligence": 16,
    "Agility": 13,
    "Luck": 12,
}


# ----------------------------------------------------------------------
# Character construction
# ----------------------------------------------------------------------

def test_make_character_matches_stats_case_insensitively():
    character = _make_character("Mara", {"strength": 14, " LUCK ": 12})
    assert character.stats == {CoreStat.STRENGTH: 14, CoreStat.LUCK: 12}


def test_make_character_drops_unknown_stats(caplog):
    with caplog.at_level(logging.WARNING, logger="rpg-resolver"):
        character = _make_character("Mara", {"Wisdom": 18, "Agility": 13})
    assert character.stats == {CoreStat.AGILITY: 13}
    assert "Wisdom" in caplog.text


def test_make_character_without_stats():
    assert _make_character("Nobody", None).stats == {}


# ----------------------------------------------------------------------
# roll_dice
# ----------------------------------------------------------------------

def test_roll_dice(scripted):
    assert _roll_dice_logic(scripted(4, 1, 6), "3d6+2") == "🎲 3d6+2: [4, 1, 6] +2 = 13"


def test_roll_dice_several_times(scripted):
    text = _roll_dice_logic(scripted(17, 3), "d20", times=2)
    assert text.splitlines() == ["🎲 1d20: [17] = 17", "🎲 1d20: [3] = 3"]


def test_roll_dice_bad_notation(scripted):
    assert _roll_dice_logic(scripted(), "2d7").startswith("Error:")
    assert _roll_dice_logic(scripted(), "banana").startswith("Error:")


def test_roll_dice_bad_times(scripted):
    assert _roll_dice_logic(scripted(), "d20", times=0) == "Error: times must be at least 1"


# ----------------------------------------------------------------------
# skill_check / opposed_check
# ----------------------------------------------------------------------

def test_skill_check_tie(scripted):
    text = _skill_check_logic(scripted(13), "Mara", MARA_STATS, "strength", 15)
    assert text == "Mara — Tie. (vs DC 15) Roll: 13 (d20) +2 (Strength Mod) = 15"


def test_skill_check_uses_default_dc(scripted):
    text = _skill_check_logic(scripted(20), "Mara", MARA_STATS, "Luck")
    assert "Critical Success! (vs DC 15)" in text


def test_skill_check_missing_stat_counts_as_ten(scripted):
    text = _skill_check_logic(scripted(9), "Mara", {}, "Charisma", 10)
    assert text.endswith("Failure. (vs DC 10) Roll: 9 (d20) +0 (Charisma Mod) = 9")


def test_skill_check_unknown_stat(scripted):
    text = _skill_check_logic(scripted(), "Mara", MARA_STATS, "Wisdom", 10)
    assert text.startswith("Error: Unknown stat 'Wisdom'")


def test_opposed_check(scripted):
    text = _opposed_check_logic(
        scripted(15, 10), "Combat", "melee attack",
        "Mara", MARA_STATS, "Ogre", {"Strength": 20, "Agility": 6},
    )
    assert text == (
        "Success. (Melee Attack)\n"
        "  Mara (Strength): Roll: 15 (d20) +2 (Strength Mod) = 17\n"
        "  Ogre (Agility): Roll: 10 (d20) -2 (Agility Mod) = 8"
    )


def test_opposed_check_unknown_action(scripted):
    text = _opposed_check_logic(scripted(), "Combat", "Fireball", "Mara", None, "Ogre", None)
    assert text == "Error: No action 'Fireball' for encounter type 'Combat'"


def test_opposed_check_rejects_vs_dc_action(scripted):
    engine = scripted()
    text = _opposed_check_logic(engine, "Physical", "Climb", "Mara", None, "Ogre", None)
    assert text.startswith("Error:")
    assert "not configured for opposed checks" in text
    assert engine.rng.calls == []


# ----------------------------------------------------------------------
# list_encounter_actions
# ----------------------------------------------------------------------

def test_list_encounter_actions():
    text = _list_encounter_actions_logic("Combat")
    lines = text.splitlines()
    assert lines[0] == "**Combat actions:**"
    assert "- Melee Attack: Strength vs Agility" in lines
    assert lines[-1] == "Default pairing: Strength vs Agility"


def test_list_groups_opposed_before_vs_dc():
    lines = _list_encounter_actions_logic("Other").splitlines()
    assert lines == [
        "**Other actions:**",
        "- Luck Test (Opposed): Luck vs Luck",
        "- Luck Test (vs DC 50%): Luck vs DC",
        "Default pairing: Luck vs Luck",
    ]


def test_list_vs_dc_actions():
    text = _list_encounter_actions_logic("Exploration")
    assert all(line.endswith("vs DC") for line in text.splitlines()[1:])


def test_list_unknown_type():
    text = _list_encounter_actions_logic("Underwater")
    assert text.startswith("No actions for encounter type 'Underwater'")
    assert "Exploration" in text


# ----------------------------------------------------------------------
# consult_oracle / luck_test / validate_character
# ----------------------------------------------------------------------

def test_consult_oracle(scripted):
    text = _consult_oracle_logic(scripted(40), "likely", "Is the door locked?")
    assert text == (
        "🔮 ❓ Is the door locked?\n"
        "Yes\n"
        "(PASS): You rolled 40 vs <= 75 needed for Yes on Likely"
    )


def test_consult_oracle_unknown_likelihood_falls_back(scripted):
    text = _consult_oracle_logic(scripted(73), "Perhaps")
    assert text.startswith("🔮 No, but...")
    assert text.endswith("needed for Yes on 50/50")


def test_luck_test(scripted):
    assert _luck_test_logic(scripted(12), "Mara", MARA_STATS) == (
        "Luck Check: Rolled 12 vs Target 12 -> Lucky!"
    )
    assert _luck_test_logic(scripted(13), "Mara", MARA_STATS) == (
        "Luck Check: Rolled 13 vs Target 12 -> Unlucky"
    )


def test_validate_character_valid():
    assert "✓ VALID" in _validate_character_logic("Mara", MARA_STATS, 12)


def test_validate_character_invalid():
    text = _validate_character_logic("Mara", {"Strength": 25}, None)
    assert "✗ INVALID" in text
    assert "stats.Strength" in text
    assert "health" in text


def test_validate_event():
    assert "✓ VALID" in _validate_character_logic("Eclipse", None, None, "Event")


def test_validate_unknown_type():
    text = _validate_character_logic("Mara", MARA_STATS, 12, "Dragon")
    assert text.startswith("Error: Unknown character type 'Dragon'")
